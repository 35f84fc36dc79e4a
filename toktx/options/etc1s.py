"""
ETC1S / BasisLZ encoder options (``--encode etc1s``).
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .encoding import EncodingOptions


@dataclass
class ETC1SOptions(EncodingOptions):
    """
    Options for the ETC1S / BasisLZ encoder.

    Attributes:
        compression_level: Encoding speed vs. quality tradeoff, 0-5 (``--clevel``).
        quality_level: 1-255 (``--qlevel``). Overridden by the max_* values when those are set.
        max_endpoints: Manually set the maximum number of color endpoint clusters, 1-16128.
        endpoint_rdo_threshold: Endpoint RDO quality threshold, 1.0-3.0. Overrides ``quality_level``.
        max_selectors: Manually set the maximum number of color selector clusters, 1-16128.
        selector_rdo_threshold: Selector RDO quality threshold, 1.0-3.0. Overrides ``quality_level``.
        no_endpoint_rdo: Disable endpoint rate distortion optimizations.
        no_selector_rdo: Disable selector rate distortion optimizations.
    """

    ENCODING: ClassVar[str] = "etc1s"

    compression_level: Optional[float] = field(default=None, metadata={"arg": "clevel"})
    quality_level: Optional[int] = field(default=None, metadata={"arg": "qlevel"})
    max_endpoints: Optional[int] = None
    endpoint_rdo_threshold: Optional[float] = None
    max_selectors: Optional[int] = None
    selector_rdo_threshold: Optional[float] = None
    no_endpoint_rdo: bool = False
    no_selector_rdo: bool = False
