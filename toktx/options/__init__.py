"""
Option types mirroring toktx's command-line flags.
"""

from .astc import ASTCBlockDimension, ASTCMode, ASTCOptions
from .encoding import EncodingOptions, encoding_for_name
from .enums import Filter, OutputFormat, Primaries, TargetType, TransferFunction, WMode
from .etc1s import ETC1SOptions
from .toktx import ToKtx
from .uastc import UASTCOptions, UASTCQuality
from .values import XY, XYZ, Swizzle, SwizzleChar

__all__ = [
    "ToKtx",
    # Encodings
    "EncodingOptions",
    "encoding_for_name",
    "ASTCOptions",
    "ASTCMode",
    "ASTCBlockDimension",
    "ETC1SOptions",
    "UASTCOptions",
    "UASTCQuality",
    # Values
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
]
