"""
Data models and schemas for grading requests and results.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field


class TestCase(BaseModel):
    """A single caller-supplied test: an expression and the value it should produce."""

    test_expression: str = Field(
        validation_alias=AliasChoices("test_expression", "testExpression", "test"),
        description="Language-native expression evaluated after the submission",
    )
    expected: Any = Field(default=None, description="Expected value (JSON-compatible)")
    name: str = Field(description="Display name of the test")


class TestResult(BaseModel):
    """Outcome of one test case."""

    passed: bool
    expected: Any = None
    actual: Any = None
    test_name: str = Field(serialization_alias="testName")


class TestRunSummary(BaseModel):
    """Aggregate of a grading run."""

    all_passed: bool = Field(serialization_alias="allPassed")
    passed_count: int = Field(default=0, serialization_alias="passedCount")
    total_count: int = Field(default=0, serialization_alias="totalCount")
    test_results: list[TestResult] = Field(
        default_factory=list, serialization_alias="testResults"
    )


class LanguageInfo(BaseModel):
    """Description of a supported language for editors and pickers."""

    id: str
    name: str
    extension: str
    editor_language: str = Field(serialization_alias="monacoLanguage")
