# toktx-py - Python interface for the KTX-Software toktx texture converter

"""
Configure toktx with typed options and run it on files or in-memory images.

    from toktx import ToKtx, UASTCOptions, UASTCQuality

    config = ToKtx(two_dee=True, encoding=UASTCOptions(quality=UASTCQuality.FASTEST))
    ktx2_bytes = config.convert("albedo.png").to_memory()
    config.convert(png_bytes).to_path("albedo.ktx2")
"""

from .conv import (
    BatchResult,
    BytesSource,
    ImageSource,
    InputSource,
    MultiSource,
    PathSource,
    ToKtxConvert,
    ToKtxConvertAsync,
    convert_many,
)
from .core import (
    AsyncioCommand,
    BlockingCommand,
    ExitStatusError,
    InvalidSwizzleError,
    SourcePathError,
    SpawnError,
    ThreadPoolCommand,
    ToKtxError,
    temp_path,
)
from .options import (
    XY,
    XYZ,
    ASTCMode,
    ASTCOptions,
    EncodingOptions,
    ETC1SOptions,
    Filter,
    OutputFormat,
    Primaries,
    Swizzle,
    SwizzleChar,
    TargetType,
    ToKtx,
    TransferFunction,
    UASTCOptions,
    UASTCQuality,
    WMode,
    encoding_for_name,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "ToKtx",
    "EncodingOptions",
    "ASTCOptions",
    "ASTCMode",
    "ETC1SOptions",
    "UASTCOptions",
    "UASTCQuality",
    "encoding_for_name",
    "XY",
    "XYZ",
    "Swizzle",
    "SwizzleChar",
    "Filter",
    "OutputFormat",
    "Primaries",
    "TargetType",
    "TransferFunction",
    "WMode",
    # Conversion
    "ToKtxConvert",
    "ToKtxConvertAsync",
    "convert_many",
    "BatchResult",
    "InputSource",
    "PathSource",
    "BytesSource",
    "ImageSource",
    "MultiSource",
    # Backends
    "BlockingCommand",
    "AsyncioCommand",
    "ThreadPoolCommand",
    # Errors
    "ToKtxError",
    "SourcePathError",
    "SpawnError",
    "ExitStatusError",
    "InvalidSwizzleError",
    "temp_path",
]
