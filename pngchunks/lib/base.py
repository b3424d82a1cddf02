"""Base classes shared by pngchunks enums and dataclasses.

- RichEnumMixin: choices(), normalize() and describe() for (str, Enum) types
- SerializableMixin: to_dict() for report/settings dataclasses
"""

from __future__ import annotations

from dataclasses import asdict
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union, cast

RawEnumInput = Union[str, "RichEnumMixin", None]


class RichEnumMixin:
    """Mixin that adds utility methods to enums.

    Use together with (str, Enum):

        class RenderMode(RichEnumMixin, str, Enum):
            STRICT = "strict"
            REPLACE = "replace"

        RenderMode._default = "STRICT"
        RenderMode._aliases = {"lossy": "replace"}

    Class variables are assigned after the class body because the Enum
    metaclass would otherwise turn them into members.
    """

    _aliases: ClassVar[Dict[str, str]] = {}
    _descriptions: ClassVar[Dict[str, str]] = {}
    _default: ClassVar[Optional[str]] = None
    value: Any

    @classmethod
    def _member_map(cls) -> Dict[str, "RichEnumMixin"]:
        return cast(Dict[str, "RichEnumMixin"], getattr(cls, "__members__", {}))

    @classmethod
    def choices(cls) -> List[str]:
        """Return list of valid enum values."""
        return [member.value for member in cls._member_map().values()]

    @classmethod
    def normalize(cls, raw: RawEnumInput) -> "RichEnumMixin":
        """Parse a string value into this enum, handling aliases and case.

        Args:
            raw: String value, enum instance, or None

        Returns:
            Enum member matching the input, or the default if raw is None

        Raises:
            ValueError: If raw is None with no default, or matches nothing
        """
        if isinstance(raw, cls):
            return raw

        if raw is None:
            members = cls._member_map()
            if cls._default is not None and cls._default in members:
                return members[cls._default]
            raise ValueError(f"{cls.__name__} value must be provided")

        candidate = str(raw).strip().lower()
        canonical = cls._aliases.get(candidate, candidate)

        for member in cls._member_map().values():
            if member.value == canonical:
                return member

        raise ValueError(
            f"Invalid {cls.__name__} '{raw}'. Valid options: {', '.join(cls.choices())}"
        )

    def describe(self) -> str:
        """Return human-readable description of this enum value."""
        value_str = str(self.value)
        return self._descriptions.get(value_str, value_str)


class SerializableMixin:
    """Mixin that adds to_dict() to dataclasses.

    Enum values are flattened to their ``value`` and bytes to ASCII text
    (with backslash escapes) so the result can be passed to json or yaml.
    """

    def to_dict(self) -> Dict[str, Any]:
        """Convert this dataclass instance to a dictionary."""
        result = _serialize_value(asdict(cast(Any, self)))
        if not isinstance(result, dict):
            raise TypeError("expected dataclass to serialize to a dict")
        return cast(Dict[str, Any], result)


def _serialize_value(value: Any) -> Any:
    """Recursively serialize a value for JSON/YAML compatibility."""
    if isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("ascii", errors="backslashreplace")
    return value


__all__ = [
    "RawEnumInput",
    "RichEnumMixin",
    "SerializableMixin",
]
