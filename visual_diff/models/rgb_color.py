from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from ..exceptions import InvalidColorError


@dataclass(frozen=True)
class RGBColor:
    """
    Immutable value object: one 8-bit value per channel.
    A monochrome image's intensity is multiplied into this color
    when its pixels are rendered as a difference.
    """
    r: int  # [0, 255]
    g: int  # [0, 255]
    b: int  # [0, 255]

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            # bool is an int subclass, but True/False is never a channel value
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidColorError(f"Channel {name} must be an integer, got {value!r}")
            if not 0 <= value <= 255:
                raise InvalidColorError(f"Channel {name} must be in [0, 255], got {value}")

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def to_dict(self) -> dict:
        return {"r": self.r, "g": self.g, "b": self.b}

    @classmethod
    def parse(cls, text: str) -> RGBColor:
        """
        Build a color from its "r,g,b" form, e.g. "255,0,0".
        """
        parts = [part.strip() for part in str(text).split(",")]
        if len(parts) != 3:
            raise InvalidColorError(f"Expected 'r,g,b', got {text!r}")
        try:
            r, g, b = (int(part) for part in parts)
        except ValueError as err:
            raise InvalidColorError(f"Expected 'r,g,b' integers, got {text!r}") from err
        return cls(r, g, b)


DEFAULT_COLOR_A = RGBColor(255, 0, 0)  # Red, reference side
DEFAULT_COLOR_B = RGBColor(0, 255, 0)  # Green, screenshot side
