"""
Conversion inputs.

toktx reads its inputs from files, so every source renders to one or more path
tokens. In-memory sources (bytes, PIL images, numpy arrays) are first written to a
fresh temporary file. Those files are not deleted automatically; see
``InputSource.created_paths`` and the ``cleanup`` option of the conversion methods.
"""

import os
from pathlib import Path

from ..core.args import ArgConsumer
from ..core.errors import SourcePathError
from ..core.image import encode_image, is_image
from ..core.utils import log_verbose, temp_path


class InputSource:
    """Base class for conversion inputs."""

    def add_args_to(self, consumer: ArgConsumer) -> None:
        """Append this input's path token(s) to ``consumer``."""
        raise NotImplementedError

    @property
    def created_paths(self) -> list[Path]:
        """Temporary files this source has written so far."""
        return []


class PathSource(InputSource):
    """An image file already on disk. The path is passed through verbatim."""

    def __init__(self, path):
        self.path = path

    def add_args_to(self, consumer: ArgConsumer) -> None:
        consumer.add_arg(os.fspath(self.path))

    def __repr__(self):
        return f"PathSource({self.path!r})"


class BytesSource(InputSource):
    """
    Image file contents held in memory.

    Each call to ``add_args_to`` writes the whole buffer to a new temporary file and
    appends that file's path.
    """

    def __init__(self, data):
        self.data = bytes(data)
        self._created: list[Path] = []

    def add_args_to(self, consumer: ArgConsumer) -> None:
        path = temp_path()
        try:
            with open(path, "wb") as f:
                f.write(self.data)
        except OSError as e:
            raise SourcePathError(e) from e

        self._created.append(path)
        log_verbose("toktx", f"Wrote {len(self.data)} input bytes to {path}")
        consumer.add_arg(str(path))

    @property
    def created_paths(self) -> list[Path]:
        return list(self._created)

    def __repr__(self):
        return f"BytesSource(<{len(self.data)} bytes>)"


class ImageSource(BytesSource):
    """A PIL Image or numpy array, encoded to PNG then handled like BytesSource."""

    def __init__(self, image, format: str = "PNG"):
        super().__init__(encode_image(image, format))

    def __repr__(self):
        return f"ImageSource(<{len(self.data)} bytes>)"


class MultiSource(InputSource):
    """
    Several inputs passed in order, e.g. cubemap faces (+X, -X, +Y, -Y, +Z, -Z),
    array layers or explicit mip levels.
    """

    def __init__(self, sources):
        self.sources = [input_source(s) for s in sources]

    def add_args_to(self, consumer: ArgConsumer) -> None:
        for source in self.sources:
            source.add_args_to(consumer)

    @property
    def created_paths(self) -> list[Path]:
        return [p for s in self.sources for p in s.created_paths]

    def __repr__(self):
        return f"MultiSource({self.sources!r})"


def input_source(value) -> InputSource:
    """
    Coerce a conversion input to an InputSource.

    Args:
        value: An InputSource; a str or os.PathLike path; bytes, bytearray or
            memoryview file contents; a PIL Image or numpy array; or a list/tuple of
            any of these.

    Raises:
        TypeError: For anything else.
    """
    if isinstance(value, InputSource):
        return value
    if isinstance(value, (str, os.PathLike)):
        return PathSource(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BytesSource(value)
    if is_image(value):
        return ImageSource(value)
    if isinstance(value, (list, tuple)):
        return MultiSource(value)

    raise TypeError(f"Unsupported toktx input: {type(value).__name__}")
