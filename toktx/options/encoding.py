"""
Shared base for the Basis Universal / ASTC encoding option groups.

An encoding is one of three option records (ASTC, ETC1S, UASTC). Rendered under the
``--encode`` flag, it emits ``--encode <name>`` followed by its own option tokens.
"""

from typing import ClassVar

from ..core.args import ArgConsumer, ArgSet, build_from_dict

ENCODING_KEY = "encoding"

_ENCODINGS: dict[str, type] = {}


class EncodingOptions(ArgSet):
    """Base for encoding option dataclasses. Subclasses set ``ENCODING``."""

    ENCODING: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.ENCODING:
            _ENCODINGS[cls.ENCODING] = cls

    def add_to(self, name: str, consumer: ArgConsumer) -> bool:
        consumer.add_arg(name)
        consumer.add_arg(self.ENCODING)
        self.add_unnamed_to(consumer)
        return True

    def to_dict(self) -> dict:
        # Tags are written upper case ("UASTC") and read case-insensitively
        return {ENCODING_KEY: self.ENCODING.upper(), **super().to_dict()}

    @classmethod
    def from_dict(cls, data: dict):
        """
        Build encoding options from a dict tagged with ``"encoding"``.

        Called on the base class, the tag picks the variant. Called on a variant, the
        tag is optional but must match when present.
        """
        data = dict(data)
        tag = str(data.pop(ENCODING_KEY, cls.ENCODING)).lower()
        target = encoding_class(tag)
        if cls.ENCODING and target is not cls:
            raise ValueError(f"Expected {cls.ENCODING!r} encoding options, got {tag!r}")
        return build_from_dict(target, data)


def encoding_class(name: str) -> type:
    """Look up an encoding variant by name (``astc``, ``etc1s`` or ``uastc``)."""
    try:
        return _ENCODINGS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown encoding {name!r}, expected one of {sorted(_ENCODINGS)}") from None


def encoding_for_name(name: str) -> EncodingOptions:
    """Default options for the named encoding."""
    return encoding_class(name)()


def encoding_of(value) -> EncodingOptions:
    """Coerce an encoding: options instance, tagged dict, or bare encoding name."""
    if isinstance(value, EncodingOptions):
        return value
    if isinstance(value, str):
        return encoding_for_name(value)
    return EncodingOptions.from_dict(value)
