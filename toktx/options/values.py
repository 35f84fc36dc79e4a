"""
Composite option values: 2D/3D dimensions and channel swizzles.
"""

import operator
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from enum import Enum

from ..core.args import Arg, ArgConsumer
from ..core.errors import InvalidSwizzleError

DIMENSION_SEPARATOR = "x"


def _parse_components(text: str, count: int, type_name: str) -> list[int]:
    parts = text.strip().split(DIMENSION_SEPARATOR)
    if len(parts) != count:
        raise ValueError(f"{type_name} expects {count} components separated by 'x', got {text!r}")
    try:
        return [int(p) for p in parts]
    except ValueError as e:
        raise ValueError(f"Invalid {type_name} value {text!r}: {e}") from e


def _component(value, name: str, type_name: str) -> int:
    # bool is an int subclass but never a size
    if isinstance(value, bool):
        raise TypeError(f"{type_name}.{name} must be an integer, got {value!r}")
    try:
        number = operator.index(value)
    except TypeError:
        raise TypeError(f"{type_name}.{name} must be an integer, got {value!r}") from None
    if number < 0:
        raise ValueError(f"{type_name}.{name} must not be negative, got {number}")
    return number


def _components_of(cls, value) -> list:
    """
    Split a dimension given as ``"WxH"`` text, a mapping keyed by component name, or
    a sequence with exactly one item per component.
    """
    names = [f.name for f in fields(cls)]
    if isinstance(value, str):
        return _parse_components(value, len(names), cls.__name__)
    if isinstance(value, Mapping):
        if set(value) != set(names):
            raise ValueError(f"{cls.__name__} expects keys {names}, got {sorted(value)}")
        return [value[n] for n in names]
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        if len(value) != len(names):
            raise ValueError(f"{cls.__name__} expects {len(names)} components, got {len(value)}")
        return list(value)
    raise TypeError(f"Cannot build {cls.__name__} from {type(value).__name__}")


class _Dimension(Arg):
    """Shared behavior of XY and XYZ. Components must be non-negative integers."""

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, _component(getattr(self, f.name), f.name, type(self).__name__))

    def __str__(self) -> str:
        return DIMENSION_SEPARATOR.join(str(getattr(self, f.name)) for f in fields(self))

    def add_unnamed_to(self, consumer: ArgConsumer) -> bool:
        consumer.add_arg(str(self))
        return True

    def to_plain(self) -> list:
        """Serialized as a JSON array, e.g. ``[6, 6]``."""
        return [getattr(self, f.name) for f in fields(self)]

    @classmethod
    def of(cls, value):
        """Builds a dimension from an instance, ``"WxH"`` text, a list/tuple, or a dict of components."""
        if isinstance(value, cls):
            return value
        return cls(*_components_of(cls, value))

    @classmethod
    def parse(cls, text: str):
        return cls(*_parse_components(text, len(fields(cls)), cls.__name__))


@dataclass(frozen=True)
class XY(_Dimension):
    """A 2D size, rendered as ``{x}x{y}`` (e.g. ``6x6``)."""

    x: int
    y: int


@dataclass(frozen=True)
class XYZ(_Dimension):
    """A 3D size, rendered as ``{x}x{y}x{z}`` (e.g. ``5x5x5``)."""

    x: int
    y: int
    z: int


class SwizzleChar(Enum):
    """One component of a swizzle: a source channel or a constant."""

    R = "r"
    G = "g"
    B = "b"
    A = "a"
    ZERO = "0"
    ONE = "1"

    @classmethod
    def try_from(cls, char: str) -> "SwizzleChar":
        """Raises ValueError if ``char`` is not one of ``rgba01``."""
        return cls(char)


SWIZZLE_LEN = 4


@dataclass(frozen=True)
class Swizzle(Arg):
    """
    A four-component channel swizzle such as ``rgb1`` or ``rrr1``.

    Use ``Swizzle.parse`` to build one from text.
    """

    channels: tuple

    def __post_init__(self):
        parts = [str(getattr(c, "value", c)) for c in self.channels]
        text = "".join(parts)
        if len(self.channels) != SWIZZLE_LEN:
            raise InvalidSwizzleError(text)
        for idx, channel in enumerate(self.channels):
            if not isinstance(channel, SwizzleChar):
                raise InvalidSwizzleError(text, idx)

    def __str__(self) -> str:
        return "".join(c.value for c in self.channels)

    def add_unnamed_to(self, consumer: ArgConsumer) -> bool:
        consumer.add_arg(str(self))
        return True

    @classmethod
    def parse(cls, text: str) -> "Swizzle":
        """
        Parse a swizzle string.

        Args:
            text: Exactly four characters, each one of ``r``, ``g``, ``b``, ``a``, ``0``, ``1``.

        Returns:
            The parsed Swizzle.

        Raises:
            InvalidSwizzleError: With ``index`` set to the first bad character, or None
                if the length is wrong.
        """
        if len(text) != SWIZZLE_LEN:
            raise InvalidSwizzleError(text)

        channels = []
        for idx, char in enumerate(text):
            try:
                channels.append(SwizzleChar.try_from(char))
            except ValueError as e:
                raise InvalidSwizzleError(text, idx) from e
        return cls(tuple(channels))

    @classmethod
    def of(cls, value) -> "Swizzle":
        if isinstance(value, cls):
            return value
        return cls.parse(value)
