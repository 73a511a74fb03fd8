"""
Configuration management for the code execution core.
Supports environment variables and .env files.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BLOCKED_PYTHON_MODULES = [
    "os",
    "subprocess",
    "socket",
    "shutil",
    "ctypes",
    "importlib",
    "multiprocessing",
    "signal",
    "pathlib",
    "urllib",
    "http",
]

DEFAULT_BLOCKED_PYTHON_BUILTINS = [
    "open",
    "exec",
    "eval",
    "compile",
    "breakpoint",
]


class SandboxConfig(BaseSettings):
    """Process runner and sandbox wrapper configuration."""

    model_config = SettingsConfigDict(env_prefix="SANDBOX_")

    timeout_ms: int = Field(
        default=10000,
        ge=1,
        description="Wall-clock limit for a single execution in milliseconds"
    )
    temp_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "temp" / "code-execution",
        description="Directory holding the ephemeral source files"
    )
    max_output_size: int = Field(
        default=65536,
        ge=1,
        description="Maximum characters kept from stdout / stderr"
    )

    # Interpreters
    python_binary: str = Field(default="python3", description="Python interpreter")
    node_binary: str = Field(default="node", description="Node.js binary")
    npx_binary: str = Field(default="npx", description="npx binary (runs ts-node)")
    dotnet_binary: str = Field(default="dotnet", description="dotnet binary (runs dotnet-script)")

    # Python guard policy
    blocked_python_modules: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BLOCKED_PYTHON_MODULES),
        description="Top-level modules the guarded __import__ refuses"
    )
    blocked_python_builtins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BLOCKED_PYTHON_BUILTINS),
        description="Builtins removed from the submission namespace"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__"
    )

    app_name: str = "coderunner"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = Field(default=False, description="Debug mode")

    sandbox: SandboxConfig = Field(default_factory=SandboxConfig)

    @field_validator("debug", mode="before")
    @classmethod
    def validate_debug(cls, v: str | bool) -> bool:
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "on")
        return False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
