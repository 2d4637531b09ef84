"""
Normalization of the arguments passed to ``find``.

Callers may pass ids or slugs as scalars, lists, tuples, sets, ranges or any
nesting of those. Before anything is classified or queried the arguments
are flattened into one deduplicated list of keys. Whether the caller asked
for one record or for a list is decided separately, from the original
top-level arguments only.

Example:
    >>> normalize_arguments(("a", ["b", ("a", "c")])).keys
    ['a', 'b', 'c']
"""

import numbers
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, List, Sequence

from pydantic import BaseModel, ConfigDict, Field


class ArgumentKind(str, Enum):
    """Shape of one argument passed to find."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    RANGE = "range"
    SET = "set"


class KeyRange(BaseModel):
    """Inclusive (or end-exclusive) range between two keys.

    Integer ranges are expanded into their members. Ranges over any other
    type, such as ``KeyRange(start="a", end="c")``, are treated as a single
    opaque key.
    """

    model_config = ConfigDict(frozen=True)

    start: Any
    end: Any
    exclusive: bool = False

    def __str__(self) -> str:
        separator = "..." if self.exclusive else ".."
        return f"{self.start}{separator}{self.end}"

    @property
    def is_numeric(self) -> bool:
        return _is_integer(self.start) and _is_integer(self.end)

    def expand(self) -> List[int]:
        stop = self.end if self.exclusive else self.end + 1
        return list(range(self.start, stop))


class NormalizedKeySet(BaseModel):
    """Flattened lookup keys plus the requested result multiplicity."""

    keys: List[Any] = Field(default_factory=list)
    is_multi: bool = False


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def argument_kind(arg: Any) -> ArgumentKind:
    """Tag one argument with its shape."""
    if isinstance(arg, (list, tuple)):
        return ArgumentKind.SEQUENCE
    if isinstance(arg, (set, frozenset)):
        return ArgumentKind.SET
    if isinstance(arg, (range, KeyRange)):
        return ArgumentKind.RANGE
    return ArgumentKind.SCALAR


def flatten_arguments(args: Iterable[Any]) -> List[Any]:
    """Recursively flatten arguments into atomic keys, keeping duplicates."""
    flat: List[Any] = []
    for arg in args:
        kind = argument_kind(arg)
        if kind is ArgumentKind.SEQUENCE:
            flat.extend(flatten_arguments(arg))
        elif kind is ArgumentKind.SET:
            # Set members are taken in text order
            flat.extend(flatten_arguments(sorted(arg, key=str)))
        elif kind is ArgumentKind.RANGE:
            if isinstance(arg, range):
                flat.extend(arg)
            elif arg.is_numeric:
                flat.extend(arg.expand())
            else:
                flat.append(arg)
        else:
            flat.append(arg)
    return flat


def unique_by_text(keys: Iterable[Any]) -> List[Any]:
    """Drop keys whose ``str()`` was already seen, keeping first order."""
    seen = set()
    unique: List[Any] = []
    for key in keys:
        text = str(key)
        if text in seen:
            continue
        seen.add(text)
        unique.append(key)
    return unique


def is_multi_args(args: Sequence[Any]) -> bool:
    """Whether the original arguments ask for a list of results.

    More than one argument always does. A single argument does when it is
    a container (list, tuple, set or range), even an empty or one-element
    one. A single scalar or mapping does not.
    """
    if len(args) > 1:
        return True
    if len(args) == 1:
        first = args[0]
        if isinstance(first, Mapping):
            return False
        return argument_kind(first) is not ArgumentKind.SCALAR
    return False


def normalize_arguments(args: Sequence[Any]) -> NormalizedKeySet:
    """Flatten and deduplicate find arguments."""
    return NormalizedKeySet(
        keys=unique_by_text(flatten_arguments(args)),
        is_multi=is_multi_args(args),
    )
