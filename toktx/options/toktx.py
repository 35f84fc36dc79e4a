"""
The toktx configuration aggregate.

``ToKtx`` mirrors toktx's command-line flags. Build one (typically once), then call
``convert`` for each input:

    config = ToKtx(two_dee=True, encoding=UASTCOptions(quality=UASTCQuality.FASTEST))
    data = config.convert("albedo.png").to_memory()

The configuration is never modified during a conversion, so a single instance can be
shared by concurrent conversions.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Optional

from ..conv.convert import ToKtxConvert
from ..core.args import ArgSet
from .encoding import EncodingOptions, encoding_of
from .enums import Filter, OutputFormat, Primaries, TargetType, TransferFunction, WMode
from .values import XY, Swizzle


@dataclass
class ToKtx(ArgSet):
    """
    KTX texture conversion settings.

    Fields render in declaration order. Booleans emit their flag only when True and
    optional fields emit nothing when None. Mutually exclusive combinations are not
    checked here; toktx rejects them with a non-zero exit status.

    Attributes:
        two_dee: ``--2d``. Create a 2D texture even when the image height is 1.
        auto_mipmap: ``--automipmap``. Mark the file to request mipmap generation on load.
            Mutually exclusive with ``genmipmap``, ``levels`` and ``mipmap``.
        cubemap: The file is a cubemap. At least 6 inputs are required, ordered
            +X, -X, +Y, -Y, +Z, -Z.
        depth: The file is a 3D texture with this depth (> 0).
        genmipmap: Generate mipmaps for each input. Enables ``filter``, ``fscale`` and ``wmode``.
        filter: Filter used when generating mipmaps.
        fscale: Filter scale.
        wmode: How to sample pixels near the image boundaries.
        layers: The file is an array texture with this many layers (> 0).
        levels: Create a pyramid with this many levels rather than a full one.
        mipmap: One input is provided explicitly for each mip level.
        no_metadata: ``--nometadata``. Do not write KTXorientation metadata.
        no_warn: ``--nowarn``. Silence warnings about image transformations.
        upper_left_maps_to_s0t0: Map the upper left corner of the image to s0,t0 (toktx default).
        lower_left_maps_to_s0t0: Map the lower left corner to s0,t0, flipping the inputs.
        assign_oetf: Force the transfer function, ignoring the input's color space.
        assign_primaries: Force the primaries, ignoring the input's color space.
        convert_oetf: Convert inputs to this transfer function.
        swizzle: Swizzle metadata to store in the file.
        target_type: Number of components in the created texture.
        resize: Resize images to width x height.
        scale: Scale images by this factor as they are read.
        output_format: KTX or KTX2 (``--t2``). Defaults to KTX2.
        encoding: ``--encode``. ASTC, ETC1S or UASTC options, or None for no encoding.
        input_swizzle: Swizzle the input components.
        normal_mode: Tune encoding for a linear normal map.
        normalise: ``--normalize``. Normalize input normals to unit length. Serialized
            under the key ``normalise``.
        no_sse: Forbid SSE in the Basis Universal compressor.
        zcmp: Zstandard supercompression level, 1-22. Implies KTX2.
        threads: Number of compression threads.
        path_to_toktx: Path to the toktx executable. Not passed to toktx. When None,
            the ``TOKTX_PATH`` environment variable is used if set, otherwise ``toktx``
            is looked up on PATH.
    """

    two_dee: bool = field(default=False, metadata={"arg": "2d"})
    auto_mipmap: bool = field(default=False, metadata={"arg": "automipmap"})
    cubemap: bool = False
    depth: Optional[int] = None
    genmipmap: bool = False
    filter: Optional[Filter] = field(default=None, metadata={"coerce": Filter.of})
    fscale: Optional[float] = None
    wmode: Optional[WMode] = field(default=None, metadata={"coerce": WMode.of})
    layers: Optional[int] = None
    levels: Optional[int] = None
    mipmap: bool = False
    no_metadata: bool = field(default=False, metadata={"arg": "nometadata"})
    no_warn: bool = field(default=False, metadata={"arg": "nowarn"})
    upper_left_maps_to_s0t0: bool = False
    lower_left_maps_to_s0t0: bool = False
    assign_oetf: Optional[TransferFunction] = field(default=None, metadata={"coerce": TransferFunction.of})
    assign_primaries: Optional[Primaries] = field(default=None, metadata={"coerce": Primaries.of})
    convert_oetf: Optional[TransferFunction] = field(default=None, metadata={"coerce": TransferFunction.of})
    swizzle: Optional[Swizzle] = field(default=None, metadata={"coerce": Swizzle.of})
    target_type: Optional[TargetType] = field(default=None, metadata={"coerce": TargetType.of})
    resize: Optional[XY] = field(default=None, metadata={"coerce": XY.of})
    scale: Optional[float] = None
    output_format: OutputFormat = field(default=OutputFormat.KTX2, metadata={"coerce": OutputFormat.of})
    encoding: Optional[EncodingOptions] = field(default=None, metadata={"arg": "encode", "coerce": encoding_of})
    input_swizzle: Optional[Swizzle] = field(default=None, metadata={"coerce": Swizzle.of})
    normal_mode: bool = False
    normalise: bool = field(default=False, metadata={"arg": "normalize", "key": "normalise"})
    no_sse: bool = False
    zcmp: Optional[int] = None
    threads: Optional[int] = None
    path_to_toktx: Optional[os.PathLike] = field(default=None, metadata={"skip": True})

    def convert(self, source) -> ToKtxConvert:
        """
        Start a conversion of ``source``.

        Args:
            source: A path (str or os.PathLike), image file bytes, a PIL Image or numpy
                array, a list of these (several inputs), or an InputSource.

        Returns:
            A builder; call ``to_memory()``, ``to_path(...)`` or ``future()`` on it.
        """
        return ToKtxConvert(self, source)

    def to_json(self, **kwargs) -> str:
        """Serialize to JSON. Keyword arguments are passed to ``json.dumps``."""
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, text: str) -> "ToKtx":
        return cls.from_dict(json.loads(text))
