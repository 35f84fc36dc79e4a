"""
UASTC encoder options (``--encode uastc``).
"""

import operator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional

from ..core.args import Arg, ArgConsumer
from .encoding import EncodingOptions


class UASTCQuality(Arg, IntEnum):
    """UASTC quality level, rendered as its number (``--uastc_quality 0``)."""

    FASTEST = 0
    FASTER = 1
    DEFAULT = 2
    SLOWER = 3
    VERY_SLOW = 4

    def add_unnamed_to(self, consumer: ArgConsumer) -> bool:
        consumer.add_arg(str(int(self)))
        return True

    def to_plain(self) -> int:
        return int(self)

    @classmethod
    def try_from(cls, value: int) -> "UASTCQuality":
        """
        Convert a number to a quality level.

        Raises:
            ValueError: If ``value`` is not an integer in 0-4. Floats and bools are
                rejected rather than truncated.
        """
        if isinstance(value, bool):
            raise ValueError(f"Quality must be an integer, got {value!r}")
        try:
            number = operator.index(value)
        except TypeError:
            raise ValueError(f"Quality must be an integer, got {value!r}") from None
        if not 0 <= number <= cls.VERY_SLOW:
            raise ValueError(f"Only values 0..={int(cls.VERY_SLOW)} are valid, got {number}")
        return _QUALITY_BY_VALUE[number]

    @classmethod
    def of(cls, value) -> "UASTCQuality":
        return value if isinstance(value, cls) else cls.try_from(value)


_QUALITY_BY_VALUE = {int(q): q for q in UASTCQuality}


@dataclass
class UASTCOptions(EncodingOptions):
    """
    Options for the UASTC encoder.

    Attributes:
        quality: Speed vs. quality tradeoff (``--uastc_quality``).
        rdo_lambda: Enable UASTC RDO post-processing with this quality scalar, 0.001-10.0.
            Lower is higher quality/larger output. For normal maps 0.25-0.75 works well.
        rdo_dictionary_size: RDO dictionary size in bytes, 64-65536. Lower is faster but
            compresses less.
        rdo_block_error_scale: Max ratio of RDO block MSE to original block MSE, 1.0-300.0.
        rdo_std_dev: Max standard deviation for smooth-block detection, 0.01-65536.0.
        rdo_f: Disable RDO smooth block error scaling.
        rdo_no_multithreading: Disable RDO multithreading.
    """

    ENCODING: ClassVar[str] = "uastc"

    quality: Optional[UASTCQuality] = field(
        default=None, metadata={"arg": "uastc_quality", "coerce": UASTCQuality.of}
    )
    rdo_lambda: Optional[float] = field(default=None, metadata={"arg": "uastc_rdo_l"})
    rdo_dictionary_size: Optional[int] = field(default=None, metadata={"arg": "uastc_rdo_d"})
    rdo_block_error_scale: Optional[float] = field(default=None, metadata={"arg": "uastc_rdo_b"})
    rdo_std_dev: Optional[float] = field(default=None, metadata={"arg": "uastc_rdo_s"})
    rdo_f: bool = field(default=False, metadata={"arg": "uastc_rdo_f"})
    rdo_no_multithreading: bool = field(default=False, metadata={"arg": "uastc_rdo_m"})
