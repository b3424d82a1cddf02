"""Library layer for pngchunks.

- chunk_type: ChunkType value type, ChunkTypeReport, RenderMode
- errors: structured exception hierarchy
- config: ChunkSettings from CHUNKS_* environment variables
- env: .env loading and ${VAR} expansion
- logging: JSONFormatter, setup_logging
"""

from pngchunks.lib.base import RichEnumMixin, SerializableMixin
from pngchunks.lib.chunk_type import (
    CHUNK_TYPE_LENGTH,
    ChunkType,
    ChunkTypeReport,
    RenderMode,
)
from pngchunks.lib.config import ChunkSettings, load_settings
from pngchunks.lib.env import expand_env_vars, load_env_file
from pngchunks.lib.errors import (
    ChunkTypeError,
    ChunkTypeValidationError,
    ConfigurationError,
    NonAlphabeticError,
    RenderError,
    ValidationErrorKind,
    WrongLengthError,
)
from pngchunks.lib.logging import JSONFormatter, setup_logging

__all__ = [
    # Base classes
    "RichEnumMixin",
    "SerializableMixin",
    # Chunk types
    "CHUNK_TYPE_LENGTH",
    "ChunkType",
    "ChunkTypeReport",
    "RenderMode",
    # Errors
    "ChunkTypeError",
    "ChunkTypeValidationError",
    "ConfigurationError",
    "NonAlphabeticError",
    "RenderError",
    "ValidationErrorKind",
    "WrongLengthError",
    # Settings
    "ChunkSettings",
    "load_settings",
    "expand_env_vars",
    "load_env_file",
    # Logging
    "JSONFormatter",
    "setup_logging",
]
