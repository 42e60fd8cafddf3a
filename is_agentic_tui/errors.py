"""Error hierarchy and structured error models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from is_agentic_tui.exit_codes import ExitCode


def _default_exit_code(category: ErrorCategory) -> ExitCode:
    mapping = {
        ErrorCategory.INPUT: ExitCode.INVALID_INPUT,
        ErrorCategory.STATE: ExitCode.STATE_ERROR,
        ErrorCategory.INTERNAL: ExitCode.INTERNAL_ERROR,
    }
    return mapping[category]


class ErrorCategory(str, Enum):
    INPUT = "input"
    STATE = "state"
    INTERNAL = "internal"


class Suggestion(BaseModel):
    action: str
    fix: str
    example: str | None = None


class AgenticTuiError(Exception):
    """Base error carrying a stable code and an optional fix suggestion."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        suggestion: Suggestion | None = None,
        details: dict[str, Any] | None = None,
        exit_code: ExitCode | int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.suggestion = suggestion
        self.details = details or {}
        resolved_exit_code = exit_code if exit_code is not None else _default_exit_code(category)
        self.exit_code = int(resolved_exit_code)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "category": self.category.value,
            "suggestion": self.suggestion.model_dump() if self.suggestion else None,
            "details": self.details,
        }


class InputError(AgenticTuiError):
    """E1xxx: caller supplied a value outside an accepted set."""

    def __init__(
        self,
        message: str,
        code: str = "E1000",
        suggestion: Suggestion | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            code,
            category=ErrorCategory.INPUT,
            suggestion=suggestion,
            details=details,
            exit_code=ExitCode.INVALID_INPUT,
        )


class RegistryConfigurationError(AgenticTuiError):
    """E3xxx: the detector registry violates an ordering or naming rule.

    This is a programming error and is raised when the registry is built,
    never while detecting.
    """

    def __init__(
        self,
        message: str,
        code: str = "E3000",
        suggestion: Suggestion | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            code,
            category=ErrorCategory.STATE,
            suggestion=suggestion,
            details=details,
            exit_code=ExitCode.STATE_ERROR,
        )
