"""
Secret generation with an injectable random source.
Shuffle a copy of the palette and keep the first 4 colors, which picks
uniformly among every ordered 4-color arrangement. Pass a seeded
random.Random to get the same secret every time (tests, replays); without
one we use the OS-backed SystemRandom.
"""

import random
from typing import Optional, Sequence

from .engine import validate_palette
from .types import CODE_LENGTH, Code, Color


def generate(palette: Sequence[Color], rng: Optional[random.Random] = None) -> Code:
    """
    Raises InvalidPaletteError if the palette size is outside 4..10 or it
    repeats a color. The caller's palette is never modified.
    """
    colors = list(validate_palette(palette))

    if rng is None:
        rng = random.SystemRandom()

    rng.shuffle(colors)
    return tuple(colors[:CODE_LENGTH])


def rng_from_seed(seed: Optional[int]) -> Optional[random.Random]:
    """Seeded generator for reproducible games; None keeps OS randomness."""
    if seed is None:
        return None
    return random.Random(seed)
