"""Four-byte chunk type codes following the PNG chunk naming convention.

A chunk type is four ASCII letters. The case of each letter carries one
property bit:

    byte 0  uppercase = critical        lowercase = ancillary
    byte 1  uppercase = public          lowercase = private
    byte 2  uppercase = reserved bit valid
    byte 3  lowercase = safe to copy    uppercase = unsafe to copy

Example:
    >>> code = ChunkType.try_from_text("RuSt")
    >>> code.is_critical, code.is_public, code.is_safe_to_copy
    (True, False, True)
    >>> str(code)
    'RuSt'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union

from pngchunks.lib.base import RichEnumMixin, SerializableMixin
from pngchunks.lib.errors import NonAlphabeticError, RenderError, WrongLengthError

logger = logging.getLogger(__name__)

__all__ = [
    "CHUNK_TYPE_LENGTH",
    "ChunkType",
    "ChunkTypeReport",
    "RenderMode",
]

CHUNK_TYPE_LENGTH = 4

BytesInput = Union[bytes, bytearray, memoryview, Iterable[int]]


def _is_upper(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A


def _is_lower(byte: int) -> bool:
    return 0x61 <= byte <= 0x7A


def _is_letter(byte: int) -> bool:
    return _is_upper(byte) or _is_lower(byte)


def _encode_text(text: str) -> bytes:
    """UTF-8 encode text; lone surrogates map back to raw bytes where possible."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        pass
    try:
        return text.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", errors="surrogatepass")


def _coerce_bytes(value: BytesInput) -> bytes:
    """Copy bytes-like or int sequences into immutable bytes of length 4."""
    if isinstance(value, str):
        raise TypeError("Use ChunkType.try_from_text() for text input")
    if isinstance(value, int):
        raise TypeError("Chunk type bytes must be a sequence, not an int")
    data = bytes(value)
    if len(data) != CHUNK_TYPE_LENGTH:
        raise WrongLengthError(
            f"Chunk type must be exactly {CHUNK_TYPE_LENGTH} bytes, got {len(data)}",
            actual_length=len(data),
            value=data,
        )
    return data


class RenderMode(RichEnumMixin, str, Enum):
    """How to render bytes that are not 7-bit ASCII."""

    STRICT = "strict"
    REPLACE = "replace"
    ESCAPE = "escape"


RenderMode._default = "STRICT"
RenderMode._aliases = {
    "lossy": "replace",
    "backslash": "escape",
    "backslashreplace": "escape",
}
RenderMode._descriptions = {
    "strict": "Raise RenderError on non-ASCII bytes",
    "replace": "Substitute U+FFFD for non-ASCII bytes",
    "escape": "Substitute \\xNN escapes for non-ASCII bytes",
}

_CODEC_ERRORS = {
    RenderMode.REPLACE: "replace",
    RenderMode.ESCAPE: "backslashreplace",
}


@dataclass(frozen=True)
class ChunkTypeReport(SerializableMixin):
    """Snapshot of a chunk type code and its property bits."""

    code: str
    raw_bytes: bytes
    critical: bool
    public: bool
    reserved_bit_valid: bool
    safe_to_copy: bool
    alphabetic: bool
    valid: bool


@dataclass(frozen=True)
class ChunkType:
    """Immutable 4-byte chunk type code.

    There are two ways in:

    - ``try_from_bytes`` / ``try_from_text`` reject anything that is not four
      ASCII letters (``NonAlphabeticError``, ``WrongLengthError``).
    - ``from_raw_bytes`` (and the plain constructor) store four bytes without
      looking at them. Use it for bytes that were already checked, or to
      carry malformed codes through for inspection.

    Note that the checked constructors only require ``is_alphabetic``. A code
    whose third letter is lowercase (``"Rust"``) constructs fine and reports
    ``is_valid == False``; callers that need the stricter check must test
    ``is_valid`` themselves.

    Equality is byte-wise and case-sensitive. Codes are hashable but not
    ordered.
    """

    raw_bytes: bytes

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "raw_bytes", _coerce_bytes(self.raw_bytes))

    @classmethod
    def from_raw_bytes(cls, value: BytesInput) -> "ChunkType":
        """Build a code from 4 bytes without checking them."""
        return cls(value)

    @classmethod
    def try_from_bytes(cls, value: BytesInput) -> "ChunkType":
        """Build a code from 4 bytes, requiring every byte to be an ASCII letter.

        Raises:
            WrongLengthError: If value is not exactly 4 bytes
            NonAlphabeticError: If any byte is not A-Z or a-z
        """
        chunk_type = cls(value)
        chunk_type._check_alphabetic()
        return chunk_type

    @classmethod
    def try_from_text(cls, text: str) -> "ChunkType":
        """Build a code from text such as ``"IHDR"``, keeping its case.

        The text is encoded as UTF-8 before the length check, so a non-ASCII
        character counts for more than one byte. Lone surrogates (undecodable
        command-line bytes) are encoded back to the bytes they stand for and
        then fail the letter check.

        Raises:
            WrongLengthError: If the text does not encode to exactly 4 bytes
            NonAlphabeticError: If any byte is not A-Z or a-z
        """
        data = _encode_text(text)
        if len(data) != CHUNK_TYPE_LENGTH:
            logger.debug("Rejected chunk type text %r: %d bytes", text, len(data))
            raise WrongLengthError(
                f"Chunk type text must encode to {CHUNK_TYPE_LENGTH} bytes, "
                f"got {len(data)}",
                actual_length=len(data),
                value=text,
            )
        chunk_type = cls(data)
        chunk_type._check_alphabetic(value=text)
        return chunk_type

    @classmethod
    def parse(cls, value: Union["ChunkType", str, BytesInput]) -> "ChunkType":
        """Build a checked code from a ChunkType, text, bytes or a sequence of ints."""
        if isinstance(value, ChunkType):
            return value
        if isinstance(value, str):
            return cls.try_from_text(value)
        if isinstance(value, (bytes, bytearray, memoryview)) or (
            isinstance(value, Iterable) and not isinstance(value, int)
        ):
            return cls.try_from_bytes(value)
        raise TypeError(
            f"Cannot build a ChunkType from {type(value).__name__}; "
            "expected str, bytes, a sequence of ints or ChunkType"
        )

    def _check_alphabetic(self, value: object = None) -> None:
        for index, byte in enumerate(self.raw_bytes):
            if not _is_letter(byte):
                logger.debug(
                    "Rejected chunk type %r: byte 0x%02x at index %d is not a letter",
                    self.raw_bytes,
                    byte,
                    index,
                )
                raise NonAlphabeticError(
                    f"Chunk type byte {index} is not an ASCII letter",
                    index=index,
                    byte=byte,
                    value=self.raw_bytes if value is None else value,
                )

    @property
    def is_critical(self) -> bool:
        """Uppercase first byte: readers that do not know the chunk must stop."""
        return _is_upper(self.raw_bytes[0])

    @property
    def is_public(self) -> bool:
        """Uppercase second byte: the type is part of the public registry."""
        return _is_upper(self.raw_bytes[1])

    @property
    def is_reserved_bit_valid(self) -> bool:
        """Uppercase third byte."""
        return _is_upper(self.raw_bytes[2])

    @property
    def is_safe_to_copy(self) -> bool:
        """Lowercase fourth byte: editors may copy the chunk unmodified."""
        return _is_lower(self.raw_bytes[3])

    @property
    def is_alphabetic(self) -> bool:
        return all(_is_letter(byte) for byte in self.raw_bytes)

    @property
    def is_valid(self) -> bool:
        """All letters and the reserved bit set."""
        return self.is_alphabetic and self.is_reserved_bit_valid

    def to_text(self, mode: Union[RenderMode, str] = RenderMode.STRICT) -> str:
        """Render the code as ASCII text in its original case.

        Args:
            mode: What to do with bytes outside 7-bit ASCII (see RenderMode)

        Raises:
            RenderError: In strict mode, if any byte is not ASCII
        """
        render_mode = RenderMode.normalize(mode)
        if render_mode is RenderMode.STRICT:
            for index, byte in enumerate(self.raw_bytes):
                if byte > 0x7F:
                    raise RenderError(
                        f"Chunk type byte {index} is not ASCII",
                        index=index,
                        byte=byte,
                    )
            return self.raw_bytes.decode("ascii")
        return self.raw_bytes.decode("ascii", errors=_CODEC_ERRORS[render_mode])

    def report(self, mode: Union[RenderMode, str] = RenderMode.ESCAPE) -> ChunkTypeReport:
        """Collect the code and all property bits into a ChunkTypeReport."""
        return ChunkTypeReport(
            code=self.to_text(mode),
            raw_bytes=self.raw_bytes,
            critical=self.is_critical,
            public=self.is_public,
            reserved_bit_valid=self.is_reserved_bit_valid,
            safe_to_copy=self.is_safe_to_copy,
            alphabetic=self.is_alphabetic,
            valid=self.is_valid,
        )

    def __bytes__(self) -> bytes:
        return self.raw_bytes

    def __str__(self) -> str:
        return self.to_text(RenderMode.ESCAPE)

    def __repr__(self) -> str:
        return f"ChunkType({self.raw_bytes!r})"
