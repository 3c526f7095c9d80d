"""
Structured error types for docs-inline.

Snippet resolution problems (an unreachable sample file, a missing snippet)
are NOT errors here: they are recorded as reconciliation outcomes and shown
inline in the document. The types below cover the failures that stop a
command from doing its job at all.

Manifesto:
    A missing snippet is an expected steady state during refactors and is
    modelled as data. Bad configuration or a path that escapes the project
    root is a programming or operator mistake and is raised.

Architecture:
    ::

        DocsInlineError (category, cause)
              │
              ├── ConfigError       (CONFIG)
              └── ProjectPathError  (STORAGE)

Tags:
    error-handling, exception-hierarchy, docs-inline

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification in logs."""

    CONFIG = "CONFIG"             # Missing or invalid settings
    STORAGE = "STORAGE"           # File store problems
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


class DocsInlineError(Exception):
    """Base class for docs-inline errors.

    Args:
        message: Human-readable description
        category: Classification for logging
        cause: Underlying exception, if any
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        data: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.cause is not None:
            data["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


class ConfigError(DocsInlineError):
    """Configuration is missing, unreadable or has unknown keys."""

    default_category = ErrorCategory.CONFIG


class ProjectPathError(DocsInlineError):
    """A path resolves outside the project root."""

    default_category = ErrorCategory.STORAGE


__all__ = [
    "ErrorCategory",
    "DocsInlineError",
    "ConfigError",
    "ProjectPathError",
]
