"""
Enumerated toktx option values.

Each member's value is the exact token toktx expects on its command line.
"""

from ..core.args import ArgConsumer, ArgEnum


class Primaries(ArgEnum):
    BT709 = "bt709"
    SRGB = "srgb"
    NONE = "none"


class WMode(ArgEnum):
    """How to sample pixels near the image boundaries."""

    WRAP = "wrap"
    REFLECT = "reflect"
    CLAMP = "clamp"


class TransferFunction(ArgEnum):
    LINEAR = "linear"
    SRGB = "srgb"


class Filter(ArgEnum):
    """Resampling filter used for mipmap generation and resizing."""

    BOX = "box"
    TENT = "tent"
    BELL = "bell"
    B_SPLINE = "b-spline"
    MITCHELL = "mitchell"
    LANCZOS3 = "lanczos3"
    LANCZOS4 = "lanczos4"
    LANCZOS6 = "lanczos6"
    LANCZOS12 = "lanczos12"
    BLACKMAN = "blackman"
    KAISER = "kaiser"
    GAUSSIAN = "gaussian"
    CATMULLROM = "catmullrom"
    QUADRATIC_INTERP = "quadratic_interp"
    QUADRATIC_APPROX = "quadratic_approx"
    QUADRATIC_MIX = "quadratic_mix"


class TargetType(ArgEnum):
    """Number of components in the created texture."""

    R = "R"
    RG = "RG"
    RGB = "RGB"
    RGBA = "RGBA"


class OutputFormat(ArgEnum):
    """
    Container format of the created file.

    Renders without its flag name: KTX2 is the single token ``--t2``, KTX (toktx's
    own default) renders nothing.
    """

    KTX = "ktx"
    KTX2 = "ktx2"

    def add_to(self, name: str, consumer: ArgConsumer) -> bool:
        return self.add_unnamed_to(consumer)

    def add_unnamed_to(self, consumer: ArgConsumer) -> bool:
        if self is OutputFormat.KTX2:
            consumer.add_arg("--t2")
            return True
        return False
