from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Color:
    """
    Simple data object: one RGB cell.
    Channels are plain ints and are not range-checked here; filters that
    need it clamp to [0, 255] themselves.
    """
    red: int = 0
    green: int = 0
    blue: int = 0

    def as_tuple(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue
