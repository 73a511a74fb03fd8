"""
Supported languages and their execution profiles.

The table is fixed: each ``Language`` maps to exactly one wrapper and one
interpreter command. Anything that does not resolve to a member is rejected
with ``UnsupportedLanguageError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from coderunner.config import SandboxConfig
from coderunner.sandbox.wrappers import (
    CSharpWrapper,
    JavaScriptWrapper,
    PythonWrapper,
    SourceWrapper,
    TypeScriptWrapper,
)


class UnsupportedLanguageError(ValueError):
    """Raised when no wrapper is registered for the requested language."""

    def __init__(self, language: str) -> None:
        super().__init__(f"Unsupported language: {language}")
        self.language = language


class Language(str, Enum):
    """Languages the core can execute."""
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    TYPESCRIPT = "typescript"
    CSHARP = "csharp"


_ALIASES: dict[str, Language] = {
    "javascript": Language.JAVASCRIPT,
    "js": Language.JAVASCRIPT,
    "python": Language.PYTHON,
    "py": Language.PYTHON,
    "typescript": Language.TYPESCRIPT,
    "ts": Language.TYPESCRIPT,
    "csharp": Language.CSHARP,
    "cs": Language.CSHARP,
    "c#": Language.CSHARP,
}


def resolve_language(language: str | Language) -> Language:
    """Map a language name or alias (case-insensitive) to a ``Language``."""
    if isinstance(language, Language):
        return language
    resolved = _ALIASES.get(str(language).strip().lower())
    if resolved is None:
        raise UnsupportedLanguageError(language)
    return resolved


@dataclass(frozen=True)
class LanguageProfile:
    """Everything needed to run one language."""

    language: Language
    display_name: str
    extension: str
    editor_language: str
    wrapper: SourceWrapper
    command: tuple[str, ...]


def build_profiles(config: SandboxConfig) -> dict[Language, LanguageProfile]:
    """Build the language table for the given sandbox configuration."""
    return {
        Language.JAVASCRIPT: LanguageProfile(
            language=Language.JAVASCRIPT,
            display_name="JavaScript",
            extension="js",
            editor_language="javascript",
            wrapper=JavaScriptWrapper(),
            command=(config.node_binary,),
        ),
        Language.PYTHON: LanguageProfile(
            language=Language.PYTHON,
            display_name="Python",
            extension="py",
            editor_language="python",
            wrapper=PythonWrapper(
                blocked_modules=config.blocked_python_modules,
                blocked_builtins=config.blocked_python_builtins,
            ),
            command=(config.python_binary,),
        ),
        Language.TYPESCRIPT: LanguageProfile(
            language=Language.TYPESCRIPT,
            display_name="TypeScript",
            extension="ts",
            editor_language="typescript",
            wrapper=TypeScriptWrapper(),
            command=(config.npx_binary, "ts-node"),
        ),
        Language.CSHARP: LanguageProfile(
            language=Language.CSHARP,
            display_name="C#",
            extension="cs",
            editor_language="csharp",
            wrapper=CSharpWrapper(),
            command=(config.dotnet_binary, "script"),
        ),
    }
