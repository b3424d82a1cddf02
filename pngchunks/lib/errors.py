"""Structured exception hierarchy for chunk type handling.

Provides specific exception types for each failure mode, with
context (offending value, byte index) for debugging.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pngchunks.lib.base import RawEnumInput, RichEnumMixin

__all__ = [
    "ChunkTypeError",
    "ChunkTypeValidationError",
    "ConfigurationError",
    "NonAlphabeticError",
    "RenderError",
    "ValidationErrorKind",
    "WrongLengthError",
]


class ValidationErrorKind(RichEnumMixin, str, Enum):
    """Why a chunk type code was rejected."""

    WRONG_LENGTH = "wrong_length"
    NON_ALPHABETIC = "non_alphabetic"


ValidationErrorKind._descriptions = {
    "wrong_length": "Input did not encode to exactly 4 bytes",
    "non_alphabetic": "One or more bytes is not an ASCII letter",
}


class ChunkTypeError(Exception):
    """Base exception for all pngchunks errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.details = dict(details or {})
        self.suggestion = suggestion

        parts = [message]

        if self.details:
            parts.append("\nDetails:")
            parts.extend(f"  {k}: {v}" for k, v in self.details.items())

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ChunkTypeValidationError(ChunkTypeError, ValueError):
    """A chunk type code failed validation at construction time.

    ``kind`` tells callers which check failed without matching on the
    exception class; ``value`` is the input exactly as it was given.
    Subclasses fix ``kind`` as a class attribute; raising the base class
    directly requires passing ``kind=``.
    """

    kind: ValidationErrorKind

    def __init__(
        self,
        message: str,
        *,
        value: Any = None,
        kind: Optional[RawEnumInput] = None,
        **kwargs: Any,
    ) -> None:
        if kind is not None:
            self.kind = ValidationErrorKind.normalize(kind)  # type: ignore[assignment]
        elif getattr(self, "kind", None) is None:
            raise TypeError(
                f"{type(self).__name__} needs a kind; pass kind= or raise "
                "WrongLengthError / NonAlphabeticError"
            )
        self.value = value

        details = dict(kwargs.pop("details", None) or {})
        details["kind"] = self.kind.value
        if value is not None:
            details["value"] = repr(value)

        super().__init__(message, details=details, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["kind"] = self.kind.value
        return data


class WrongLengthError(ChunkTypeValidationError):
    """Input did not encode to exactly 4 bytes."""

    kind = ValidationErrorKind.WRONG_LENGTH

    def __init__(
        self,
        message: str,
        *,
        actual_length: int,
        expected_length: int = 4,
        **kwargs: Any,
    ) -> None:
        self.actual_length = actual_length
        self.expected_length = expected_length

        details = dict(kwargs.pop("details", None) or {})
        details["expected_length"] = expected_length
        details["actual_length"] = actual_length

        super().__init__(message, details=details, **kwargs)


class NonAlphabeticError(ChunkTypeValidationError):
    """A byte of the code is not an ASCII letter."""

    kind = ValidationErrorKind.NON_ALPHABETIC

    def __init__(
        self,
        message: str,
        *,
        index: int,
        byte: int,
        **kwargs: Any,
    ) -> None:
        self.index = index
        self.byte = byte

        details = dict(kwargs.pop("details", None) or {})
        details["index"] = index
        details["byte"] = f"0x{byte:02x}"

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = "Chunk type codes may only contain the letters A-Z and a-z."

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)


class RenderError(ChunkTypeError, ValueError):
    """Strict rendering hit a byte outside 7-bit ASCII.

    Only reachable for codes built with ``from_raw_bytes``.
    """

    def __init__(self, message: str, *, index: int, byte: int, **kwargs: Any) -> None:
        self.index = index
        self.byte = byte

        details = dict(kwargs.pop("details", None) or {})
        details["index"] = index
        details["byte"] = f"0x{byte:02x}"

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = "Render with mode 'replace' or 'escape' to display unchecked codes."

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)


class ConfigurationError(ChunkTypeError):
    """A CHUNKS_* setting has an invalid value."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value

        details = dict(kwargs.pop("details", None) or {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details=details, **kwargs)
