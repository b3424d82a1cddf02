"""PNG-style chunk type codes.

Usage:
    from pngchunks import ChunkType

    code = ChunkType.try_from_text("tEXt")
    code.is_critical      # False
    code.is_safe_to_copy  # True

    python -m pngchunks IHDR tEXt --format json
"""

from pngchunks.lib.chunk_type import ChunkType, ChunkTypeReport, RenderMode
from pngchunks.lib.errors import (
    ChunkTypeError,
    ChunkTypeValidationError,
    NonAlphabeticError,
    RenderError,
    ValidationErrorKind,
    WrongLengthError,
)

__version__ = "1.0.0"

__all__ = [
    "ChunkType",
    "ChunkTypeReport",
    "RenderMode",
    "ChunkTypeError",
    "ChunkTypeValidationError",
    "NonAlphabeticError",
    "RenderError",
    "ValidationErrorKind",
    "WrongLengthError",
]
