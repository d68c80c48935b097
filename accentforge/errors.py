"""Error codes and error handling utilities for AccentForge."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for theme compilation."""

    # Input errors
    COLOR_INVALID = auto()
    PACKAGE_NAME_INVALID = auto()

    # Compile errors
    RENDER_FAILED = auto()
    ARCHIVE_WRITE_FAILED = auto()

    # Recipe errors
    RECIPE_NOT_FOUND = auto()

    # Configuration errors
    CONFIG_INVALID = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.COLOR_INVALID: "Invalid hex color. Expected RRGGBB or AARRGGBB.",
    ErrorCode.PACKAGE_NAME_INVALID: "Package name must be a non-empty single line.",
    ErrorCode.RENDER_FAILED: "A resource document could not be rendered.",
    ErrorCode.ARCHIVE_WRITE_FAILED: "The overlay archive could not be written.",
    ErrorCode.RECIPE_NOT_FOUND: "No theme recipe with that id was found.",
    ErrorCode.CONFIG_INVALID: "Configuration is invalid. Fix the settings file or remove it.",
}


@dataclass
class AccentForgeError(Exception):
    """Base exception with error code and context."""

    code: ErrorCode
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or CLI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class InvalidColorFormat(AccentForgeError):
    """Seed color is not 6 or 8 hex digits after normalization."""

    def __init__(self, value: str) -> None:
        super().__init__(
            ErrorCode.COLOR_INVALID,
            message=f"Invalid hex color format: {value!r}. Expected RRGGBB or AARRGGBB",
            details={"value": value},
        )
        self.value = value


class InvalidPackageName(AccentForgeError):
    """Overlay package name is empty or spans several lines."""

    def __init__(self, value: str) -> None:
        super().__init__(
            ErrorCode.PACKAGE_NAME_INVALID,
            message=f"Invalid overlay package name: {value!r}",
            details={"value": value},
        )
        self.value = value


class DocumentRenderError(AccentForgeError):
    """Wraps a failure while rendering one resource document."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(
            ErrorCode.RENDER_FAILED,
            message=f"Failed to render {path}: {type(cause).__name__}: {cause}",
            details={"document": path},
        )
        self.path = path


class ArchiveWriteError(AccentForgeError):
    """Wraps a failure while writing or finalizing the archive."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(
            ErrorCode.ARCHIVE_WRITE_FAILED,
            message=f"Failed to write archive entry {path}: {cause}",
            details={"entry": path},
        )
        self.path = path


def format_error_for_user(error: AccentForgeError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, AccentForgeError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n{error.suggestion}")
        return "".join(parts)
    return f"{type(error).__name__}: {error}"
