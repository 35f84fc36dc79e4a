"""
Core library package for toktx-py.

This package provides the shared plumbing: constants and environment configuration,
logging, temporary paths, the argument model, process command backends, the error
taxonomy, and in-memory image encoding.
"""

from .args import (
    Arg,
    ArgConsumer,
    ArgEnum,
    ArgList,
    ArgSet,
    add_named,
    add_unnamed,
)
from .command import (
    BACKENDS,
    AsyncioCommand,
    BlockingCommand,
    CommandLike,
    ProcessOutput,
    ThreadPoolCommand,
    get_backend,
    get_default_executor,
)
from .errors import (
    ExitStatusError,
    InvalidSwizzleError,
    SourcePathError,
    SpawnError,
    ToKtxError,
)
from .image import (
    array_to_pil,
    encode_image,
)
from .utils import (
    DEFAULT_PROGRAM,
    ENV_LOG_LEVEL,
    ENV_TOKTX_PATH,
    PATH_STDOUT,
    log_error,
    log_info,
    log_verbose,
    log_warning,
    resolve_program,
    temp_path,
)

__all__ = [
    # Constants
    "DEFAULT_PROGRAM",
    "PATH_STDOUT",
    "ENV_TOKTX_PATH",
    "ENV_LOG_LEVEL",
    # Logging
    "log_info",
    "log_warning",
    "log_error",
    "log_verbose",
    # Paths
    "resolve_program",
    "temp_path",
    # Argument model
    "Arg",
    "ArgConsumer",
    "ArgEnum",
    "ArgList",
    "ArgSet",
    "add_named",
    "add_unnamed",
    # Commands
    "CommandLike",
    "BlockingCommand",
    "AsyncioCommand",
    "ThreadPoolCommand",
    "ProcessOutput",
    "BACKENDS",
    "get_backend",
    "get_default_executor",
    # Errors
    "ToKtxError",
    "SourcePathError",
    "SpawnError",
    "ExitStatusError",
    "InvalidSwizzleError",
    # Images
    "array_to_pil",
    "encode_image",
]
