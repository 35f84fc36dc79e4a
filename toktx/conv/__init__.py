"""
Conversion package: input sources and the toktx run orchestration.
"""

from .async_conv import ToKtxConvertAsync
from .batch import BatchResult, convert_many
from .convert import ToKtxConvert
from .input_source import BytesSource, ImageSource, InputSource, MultiSource, PathSource, input_source

__all__ = [
    "ToKtxConvert",
    "ToKtxConvertAsync",
    "convert_many",
    "BatchResult",
    "InputSource",
    "PathSource",
    "BytesSource",
    "ImageSource",
    "MultiSource",
    "input_source",
]
