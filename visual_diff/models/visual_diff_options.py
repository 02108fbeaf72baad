from __future__ import annotations
from dataclasses import dataclass
import math
import os
from dotenv import load_dotenv

from .rgb_color import RGBColor, DEFAULT_COLOR_A, DEFAULT_COLOR_B
from ..exceptions import InvalidOptionError

# Load environment variables
load_dotenv()


def _env_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as err:
        raise InvalidOptionError(f"{name} must be a number, got {raw!r}") from err


@dataclass(frozen=True)
class VisualDiffOptions:
    """
    Value-object holding every comparison knob, each with an explicit default.
    Resolved once at the facade; nothing deeper re-applies defaults.
    """
    threshold: float = 0.0  # Max tolerated difference percentage, 0 = exact match
    color1: RGBColor = DEFAULT_COLOR_A  # Tag color of the reference image
    color2: RGBColor = DEFAULT_COLOR_B  # Tag color of the screenshot image
    only_show_differences: bool = False  # Black out matching pixels in the diff
    # Accepted and validated, but does not influence the verdict or the
    # colored area percentage.
    color_threshold: int = 30

    def __post_init__(self):
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)):
            raise InvalidOptionError(f"threshold must be a number, got {self.threshold!r}")
        if not math.isfinite(self.threshold) or self.threshold < 0:
            raise InvalidOptionError(f"threshold must be a finite number >= 0, got {self.threshold}")
        if isinstance(self.color_threshold, bool) or not isinstance(self.color_threshold, int):
            raise InvalidOptionError(
                f"color_threshold must be an integer, got {self.color_threshold!r}"
            )
        if not 0 <= self.color_threshold <= 255:
            raise InvalidOptionError(
                f"color_threshold must be in [0, 255], got {self.color_threshold}"
            )

    @classmethod
    def from_env(cls, **overrides) -> VisualDiffOptions:
        """
        Build options from VISUAL_DIFF_* environment variables.
        Keyword overrides win over the environment; None means "not given".
        """
        values = {
            "threshold": _env_number("VISUAL_DIFF_THRESHOLD", "0", float),
            "color1": RGBColor.parse(os.getenv("VISUAL_DIFF_COLOR_A", "255,0,0")),
            "color2": RGBColor.parse(os.getenv("VISUAL_DIFF_COLOR_B", "0,255,0")),
            "color_threshold": _env_number("VISUAL_DIFF_COLOR_THRESHOLD", "30", int),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
