"""
Argument model: rendering option values as toktx command-line tokens.

Every option value can render itself two ways:
- named (``add_to``): a flag token such as ``--resize`` followed by its value token(s)
- unnamed (``add_unnamed_to``): only the value token(s)

Option groups are dataclasses. Their fields are walked in declaration order and the
flag for each one comes from the field metadata:
- ``metadata={"arg": "2d"}`` renames the flag to ``--2d``
- ``metadata={"skip": True}`` keeps the field out of the command line

Usage:
    args = ArgList()
    config.add_unnamed_to(args)
    subprocess.run(["toktx", *args, "-", "input.png"])
"""

import dataclasses
import os
from enum import Enum
from typing import Protocol

FLAG_PREFIX = "--"


class ArgConsumer(Protocol):
    """Anything that accepts command-line tokens one at a time, in order."""

    def add_arg(self, token: str) -> None: ...


class ArgList(list):
    """A list of tokens that is also an ArgConsumer."""

    def add_arg(self, token: str) -> None:
        self.append(token)


class Arg:
    """
    Mixin for values that know how to render themselves as arguments.

    Subclasses implement ``add_unnamed_to``. The default named rendering emits the
    flag, then the unnamed rendering.
    """

    def add_to(self, name: str, consumer: ArgConsumer) -> bool:
        consumer.add_arg(name)
        self.add_unnamed_to(consumer)
        return True

    def add_unnamed_to(self, consumer: ArgConsumer) -> bool:
        raise NotImplementedError

    def to_plain(self):
        """The JSON-compatible form of this value. Defaults to the rendered text."""
        return str(self)


class ArgEnum(Arg, Enum):
    """Enum whose value is the literal token toktx expects."""

    def add_unnamed_to(self, consumer: ArgConsumer) -> bool:
        consumer.add_arg(self.value)
        return True

    def __str__(self) -> str:
        return self.value

    def to_plain(self):
        return self.value

    @classmethod
    def parse(cls, text: str):
        """Looks up a member by its token, e.g. ``Filter.parse("b-spline")``."""
        for member in cls:
            if member.value == text:
                return member
        raise ValueError(f"{text!r} is not a valid {cls.__name__}")

    @classmethod
    def of(cls, value):
        return value if isinstance(value, cls) else cls.parse(value)


class ArgSet(Arg):
    """
    Mixin for dataclasses whose fields are rendered as a flat run of arguments.

    Fields are rendered in declaration order. Changing one field never moves the
    tokens contributed by another.

    Field metadata keys:
        arg: flag name override (also the key used by ``to_dict`` unless ``key`` is set)
        key: serialization key override, for options whose JSON name differs from
            their flag
        skip: never rendered on the command line
        coerce: callable applied to non-None values on construction, so that
            e.g. ``swizzle="rgb1"`` becomes a Swizzle
    """

    def __post_init__(self):
        for f in dataclasses.fields(self):
            coerce = f.metadata.get("coerce")
            value = getattr(self, f.name)
            if coerce is not None and value is not None:
                setattr(self, f.name, coerce(value))

    def to_dict(self) -> dict:
        """
        Serialize to a JSON-compatible dict.

        Keys are the option names (renames applied, see ``key_name``) and fields left
        at their default are omitted.
        """
        data = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value == _field_default(f):
                continue
            data[key_name(f)] = to_plain(value)
        return data

    @classmethod
    def from_dict(cls, data: dict):
        """Build an instance from ``to_dict`` output. Missing keys take their defaults."""
        return build_from_dict(cls, data)

    def to_plain(self) -> dict:
        return self.to_dict()

    def add_unnamed_to(self, consumer: ArgConsumer) -> bool:
        added = False
        for f in dataclasses.fields(self):
            if f.metadata.get("skip", False):
                continue
            if add_named(getattr(self, f.name), flag_for(f), consumer):
                added = True
        return added

    def to_args(self) -> list[str]:
        """Render this option group as a list of tokens."""
        args = ArgList()
        self.add_unnamed_to(args)
        return list(args)


def build_from_dict(cls, data: dict):
    """Construct dataclass ``cls`` from a dict keyed by option names."""
    by_key = {key_name(f): f.name for f in dataclasses.fields(cls)}
    kwargs = {}
    for key, value in data.items():
        if key not in by_key:
            raise ValueError(f"Unknown {cls.__name__} option: {key!r}")
        kwargs[by_key[key]] = value
    return cls(**kwargs)


def _field_default(f: dataclasses.Field):
    if f.default is not dataclasses.MISSING:
        return f.default
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory()
    return dataclasses.MISSING


def to_plain(value):
    """Convert an option value to its JSON-compatible form."""
    if isinstance(value, Arg):
        return value.to_plain()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, (bool, int, float, str)):
        return value
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def arg_name(f: dataclasses.Field) -> str:
    """The option name for a dataclass field, honoring a metadata rename."""
    return f.metadata.get("arg", f.name)


def key_name(f: dataclasses.Field) -> str:
    """The serialization key for a dataclass field: ``key`` metadata, else the option name."""
    return f.metadata.get("key", arg_name(f))


def flag_for(f: dataclasses.Field) -> str:
    return FLAG_PREFIX + arg_name(f)


def add_named(value, name: str, consumer: ArgConsumer) -> bool:
    """
    Render a value under a flag name.

    Args:
        value: The option value. None renders nothing, False renders nothing, True
            renders the flag alone.
        name: The full flag token, e.g. ``--levels``.
        consumer: Receives the tokens.

    Returns:
        True if anything was emitted.
    """
    if value is None:
        return False
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        if value:
            consumer.add_arg(name)
        return value
    if isinstance(value, Arg):
        return value.add_to(name, consumer)

    consumer.add_arg(name)
    add_unnamed(value, consumer)
    return True


def add_unnamed(value, consumer: ArgConsumer) -> bool:
    """Render a value as positional token(s). Returns True if anything was emitted."""
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, Arg):
        return value.add_unnamed_to(consumer)
    if isinstance(value, os.PathLike):
        consumer.add_arg(os.fspath(value))
        return True
    if isinstance(value, (int, float, str)):
        consumer.add_arg(str(value))
        return True

    raise TypeError(f"Cannot render {type(value).__name__} as a command-line argument")
