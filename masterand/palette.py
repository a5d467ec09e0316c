"""
Standard colors offered to players, in the order the game hands them out.
A game with N colors uses the first N of them.
"""

from .engine import validate_palette
from .errors import InvalidPaletteError
from .types import MAX_PALETTE_SIZE, MIN_PALETTE_SIZE, Palette

STANDARD_COLORS: Palette = (
    "red",
    "green",
    "blue",
    "yellow",
    "magenta",
    "cyan",
    "dark_gray",
    "brown",
    "indigo",
    "orange",
)


def palette_for(color_count: int) -> Palette:
    if not isinstance(color_count, int) or not (MIN_PALETTE_SIZE <= color_count <= MAX_PALETTE_SIZE):
        raise InvalidPaletteError(
            f"Number of colors must be between {MIN_PALETTE_SIZE} and {MAX_PALETTE_SIZE}, got {color_count}."
        )
    return validate_palette(STANDARD_COLORS[:color_count])
