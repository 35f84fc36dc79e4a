"""
ASTC encoder options (``--encode astc``).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from ..core.args import ArgEnum
from .encoding import EncodingOptions
from .values import XY, XYZ

ASTCBlockDimension = Union[XY, XYZ]


class ASTCMode(ArgEnum):
    LDR = "ldr"
    HDR = "hdr"


def to_block_dimension(value) -> ASTCBlockDimension:
    """
    Coerce a block size to XY or XYZ.

    Accepts an XY/XYZ, a 2- or 3-item list or tuple, a dict with ``x``, ``y`` and
    optionally ``z``, or text such as ``"6x6"`` / ``"3x3x3"``.
    """
    if isinstance(value, (XY, XYZ)):
        return value
    if isinstance(value, str):
        return XYZ.parse(value) if value.count("x") == 2 else XY.parse(value)
    if isinstance(value, Mapping):
        return XYZ.of(value) if "z" in value else XY.of(value)
    return XYZ.of(value) if len(value) == 3 else XY.of(value)


@dataclass
class ASTCOptions(EncodingOptions):
    """
    Options for the ASTC encoder.

    ``quality`` is 0-100; the ``QUALITY_*`` presets match toktx's named levels.
    """

    ENCODING: ClassVar[str] = "astc"

    QUALITY_FASTEST: ClassVar[int] = 0
    QUALITY_FAST: ClassVar[int] = 10
    QUALITY_MEDIUM: ClassVar[int] = 60
    QUALITY_THOROUGH: ClassVar[int] = 98
    QUALITY_EXHAUSTIVE: ClassVar[int] = 100

    # Block dimension, e.g. 6x6 (2D) or 3x3x3 (3D). Smaller blocks mean higher quality.
    block_dimension: Optional[ASTCBlockDimension] = field(
        default=None, metadata={"arg": "astc_blk_d", "coerce": to_block_dimension}
    )
    mode: Optional[ASTCMode] = field(default=None, metadata={"arg": "astc_mode", "coerce": ASTCMode.of})
    quality: Optional[int] = field(default=None, metadata={"arg": "astc_quality"})
    # Optimize for perceptual error rather than direct RMS error
    perceptual: bool = field(default=False, metadata={"arg": "astc_perceptual"})
