"""
Core utilities for toktx-py.

This module contains general-purpose utilities including constants, environment
configuration, logging, and temporary path generation used across the package.
"""

import itertools
import os
import sys
import tempfile
import time
import uuid
from pathlib import Path
from typing import Optional

# --- Constants ---
DEFAULT_PROGRAM = "toktx"

# Output path token telling toktx to write the texture to stdout
PATH_STDOUT = "-"

TEMP_PREFIX = "toktx-py"
TEMP_SUFFIX = ".ktx2"

# --- Environment Configuration ---
ENV_TOKTX_PATH = "TOKTX_PATH"
ENV_LOG_LEVEL = "TOKTX_LOG_LEVEL"


def resolve_program(override: Optional[os.PathLike] = None) -> str:
    """
    Determine which toktx executable to run.

    Resolution order: explicit override > TOKTX_PATH environment variable > the bare
    program name, which the OS resolves through PATH when the process is spawned.

    Args:
        override: Path set on the configuration, if any.

    Returns:
        The program path or name as a string.
    """
    if override is not None:
        return os.fspath(override)

    env_path = os.environ.get(ENV_TOKTX_PATH)
    if env_path:
        return env_path

    return DEFAULT_PROGRAM


# --- Temporary Paths ---
_temp_counter = itertools.count()


def temp_path() -> Path:
    """
    Generate a scratch file path in the system temp directory.

    Names combine a process-wide counter with a random UUID, so paths never repeat
    within a process. The file itself is not created.

    Returns:
        A path like ``/tmp/toktx-py-0-<uuid>.ktx2``.
    """
    counter = next(_temp_counter) & 0xFFFFFFFF
    return Path(tempfile.gettempdir()) / f"{TEMP_PREFIX}-{counter}-{uuid.uuid4()}{TEMP_SUFFIX}"


def remove_paths(paths, context: str = "toktx") -> None:
    """Deletes scratch files, warning instead of raising when one cannot be removed."""
    for path in paths:
        if not os.path.exists(path):
            continue
        try:
            os.remove(path)
        except OSError as e:
            log_warning(context, f"Failed to clean up temp file {path}: {e}")


# --- Logging Configuration ---
# Log levels: Debug=0, Info=1, Warning=2, Error=3
# Debug: All messages including command lines
# Info: Standard info and warnings
# Warning: Warnings and errors only
# Error: Errors only

LEVEL_MAP = {"Debug": 0, "Info": 1, "Warning": 2, "Error": 3}
DEFAULT_LOG_LEVEL = 2

_log_level_cache: dict[str, float] = {"level": DEFAULT_LOG_LEVEL, "last_check": 0}


def _get_log_level() -> int:
    """
    Get the current log level from the TOKTX_LOG_LEVEL environment variable.

    Caches the value and refreshes every 10 seconds.

    Returns:
        0=Debug, 1=Info, 2=Warning, 3=Error
    """
    current_time = time.time()
    if current_time - _log_level_cache["last_check"] < 10:
        return int(_log_level_cache["level"])

    _log_level_cache["last_check"] = current_time
    level_str = os.environ.get(ENV_LOG_LEVEL, "").strip().capitalize()
    _log_level_cache["level"] = LEVEL_MAP.get(level_str, DEFAULT_LOG_LEVEL)
    return int(_log_level_cache["level"])


def reset_log_level_cache() -> None:
    """Forces the next log call to re-read TOKTX_LOG_LEVEL."""
    _log_level_cache["last_check"] = 0


def log_error(context: str, message: str):
    """Logs an error message to stderr. Always shown."""
    print(f"ERROR: [{context}] {message}", file=sys.stderr)


def log_warning(context: str, message: str):
    """Logs a warning message. Shown at Debug/Info/Warning levels."""
    if _get_log_level() <= 2:
        print(f"WARNING: [{context}] {message}", file=sys.stderr)


def log_info(context: str, message: str):
    """Logs an informational message. Shown at Debug/Info levels."""
    if _get_log_level() <= 1:
        print(f"INFO: [{context}] {message}")


def log_verbose(context: str, message: str):
    """Logs a debug message. Only shown at Debug level."""
    if _get_log_level() == 0:
        print(f"DEBUG: [{context}] {message}")
