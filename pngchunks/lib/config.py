"""Runtime settings read from CHUNKS_* environment variables.

    CHUNKS_RENDER_MODE   strict | replace | escape   (default: strict)
    CHUNKS_VERBOSE       true/false                  (default: false)
    CHUNKS_LOG_JSON      true/false                  (default: false)
    CHUNKS_LOG_FILE      path, ${VAR} references expanded

A .env file can be loaded first with ``load_settings(env_file=...)``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from pngchunks.lib.base import SerializableMixin
from pngchunks.lib.chunk_type import RenderMode
from pngchunks.lib.env import expand_env_vars, load_env_file
from pngchunks.lib.errors import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = ["ENV_PREFIX", "ChunkSettings", "load_settings"]

ENV_PREFIX = "CHUNKS_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ChunkSettings(SerializableMixin):
    """Settings shared by the CLI and library callers."""

    render_mode: RenderMode = RenderMode.STRICT
    verbose: bool = False
    json_logs: bool = False
    log_file: Optional[str] = None


def _parse_bool(name: str, raw: str) -> bool:
    candidate = raw.strip().lower()
    if candidate in _TRUE_VALUES:
        return True
    if candidate in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean",
        field=name,
        value=raw,
        suggestion="Use one of: true, false, 1, 0, yes, no, on, off",
    )


def load_settings(
    env_file: Optional[Union[str, Path]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> ChunkSettings:
    """Build ChunkSettings from the environment.

    Args:
        env_file: Optional .env file loaded into os.environ first
            (existing variables win)
        environ: Mapping to read instead of os.environ

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    if env_file is not None:
        if not Path(env_file).exists():
            raise ConfigurationError(
                f"Env file not found: {env_file}",
                field="env_file",
                value=env_file,
            )
        load_env_file(env_file)
        logger.debug("Loaded env file %s", env_file)

    source = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        return source.get(ENV_PREFIX + name)

    render_raw = get("RENDER_MODE")
    try:
        render_mode = RenderMode.normalize(render_raw or None)
    except ValueError as e:
        raise ConfigurationError(
            str(e),
            field=ENV_PREFIX + "RENDER_MODE",
            value=render_raw,
        ) from e

    verbose_raw = get("VERBOSE")
    json_raw = get("LOG_JSON")
    log_file = get("LOG_FILE")

    return ChunkSettings(
        render_mode=render_mode,  # type: ignore[arg-type]
        verbose=_parse_bool(ENV_PREFIX + "VERBOSE", verbose_raw) if verbose_raw is not None else False,
        json_logs=_parse_bool(ENV_PREFIX + "LOG_JSON", json_raw) if json_raw is not None else False,
        log_file=expand_env_vars(log_file, environ=source) if log_file else None,
    )
