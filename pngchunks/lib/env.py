"""Environment variable utilities.

Loads .env files and expands ${VAR_NAME} patterns in setting values.

Uses python-dotenv for .env file loading.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import load_dotenv

__all__ = ["expand_env_vars", "load_env_file"]

# ${VAR_NAME} or $VAR_NAME
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def load_env_file(
    path: Optional[Union[str, Path]] = None,
    *,
    override: bool = False,
) -> bool:
    """Load environment variables from a .env file.

    Args:
        path: Path to .env file. If None, python-dotenv searches the current
              directory and its parents.
        override: If True, override existing environment variables.

    Returns:
        True if a .env file was found and loaded, False otherwise.
    """
    return load_dotenv(dotenv_path=path, override=override)


def expand_env_vars(
    value: str,
    *,
    strict: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Expand ${VAR_NAME} and $VAR_NAME references in a string.

    Args:
        value: String potentially containing env var references
        strict: If True, raise KeyError for missing variables
        environ: Mapping to read from instead of os.environ

    Example:
        >>> os.environ["LOG_DIR"] = "/var/log"
        >>> expand_env_vars("${LOG_DIR}/chunks.log")
        '/var/log/chunks.log'
    """
    source = os.environ if environ is None else environ

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1) or match.group(2)
        env_value = source.get(var_name)
        if env_value is None:
            if strict:
                raise KeyError(f"Environment variable not set: {var_name}")
            return str(match.group(0))
        return env_value

    return ENV_VAR_PATTERN.sub(replacer, value)
