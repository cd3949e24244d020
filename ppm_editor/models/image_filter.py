from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from ..errors import UsageError


class FilterKind(Enum):
    GRAYSCALE = "grayscale"
    INVERT = "invert"
    EMBOSS = "emboss"
    MOTION_BLUR = "motionblur"


# Command-line name → kind. "greyscale" is accepted as a spelling of grayscale.
FILTER_NAMES = {
    "grayscale": FilterKind.GRAYSCALE,
    "greyscale": FilterKind.GRAYSCALE,
    "invert": FilterKind.INVERT,
    "emboss": FilterKind.EMBOSS,
    "motionblur": FilterKind.MOTION_BLUR,
}

# Number of extra arguments each filter takes after its name.
FILTER_ARITY = {
    FilterKind.GRAYSCALE: 0,
    FilterKind.INVERT: 0,
    FilterKind.EMBOSS: 0,
    FilterKind.MOTION_BLUR: 1,
}


@dataclass(frozen=True)
class ImageFilter:
    """
    Value-object naming one transform and its parameter.
    `length` only means something for MOTION_BLUR.
    """
    kind: FilterKind
    length: int = 0

    def __post_init__(self):
        if self.length < 0:
            raise ValueError(f"Motion blur length must be non-negative, got {self.length}")

    @classmethod
    def from_args(cls, name: str, args: Sequence[str] = ()) -> "ImageFilter":
        """
        Build a filter from its command-line name and extra arguments.

        Raises:
            UsageError: unknown name, wrong number of arguments, or a motion
                blur length that is not a non-negative integer.
        """
        kind = FILTER_NAMES.get(name)
        if kind is None:
            raise UsageError(f"Unknown filter: {name!r}")

        expected = FILTER_ARITY[kind]
        if len(args) != expected:
            raise UsageError(
                f"Filter {name!r} takes {expected} argument(s), got {len(args)}"
            )

        if kind is FilterKind.MOTION_BLUR:
            try:
                length = int(args[0])
            except ValueError:
                raise UsageError(f"Motion blur length must be an integer, got {args[0]!r}") from None
            if length < 0:
                raise UsageError(f"Motion blur length must be non-negative, got {length}")
            return cls(kind, length)

        return cls(kind)
