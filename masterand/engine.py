"""
Pure game logic (no HTTP, no storage).
For each guess we compute one feedback mark per peg:
- CORRECT: right color in the right position
- PRESENT: color is in the secret, but somewhere else
- ABSENT: color is not among the secret pegs that are still unmatched

Marks are returned grouped (all CORRECT, then PRESENT, then ABSENT), so the
order says nothing about which guess position earned which mark.
"""

from typing import List, Sequence

from .errors import InvalidGuessError, InvalidPaletteError
from .types import (
    CODE_LENGTH,
    MAX_PALETTE_SIZE,
    MIN_PALETTE_SIZE,
    Code,
    Color,
    Feedback,
    FeedbackMark,
    Palette,
)

_MARK_ORDER = {mark: rank for rank, mark in enumerate(FeedbackMark)}


def evaluate(guess: Sequence[Color], secret: Sequence[Color]) -> Feedback:
    """
    Example:
      secret = [red, green, blue, yellow]
      guess  = [red, blue, green, yellow]
      positions 0 and 3 are exact, blue/green are swapped
      Returns: (CORRECT, CORRECT, PRESENT, PRESENT)

    Repeated colors in the guess are allowed here; each unmatched secret peg
    can only be claimed once.
    """

    # 0. Validate lengths match
    n = len(secret)
    if n == 0 or len(guess) != n:
        raise ValueError("Secret and guess must be the same non-zero length.")

    marks: List[FeedbackMark] = []
    unmatched_guess: List[int] = []
    unmatched_secret: List[Color] = []

    # 1. Exact matches first, both sides leave the pool
    for i in range(n):
        if guess[i] == secret[i]:
            marks.append(FeedbackMark.CORRECT)
        else:
            unmatched_guess.append(i)
            unmatched_secret.append(secret[i])

    # 2. Each leftover guess peg claims one leftover secret peg of its color
    for i in unmatched_guess:
        color = guess[i]
        if color in unmatched_secret:
            marks.append(FeedbackMark.PRESENT)
            unmatched_secret.remove(color)
        else:
            marks.append(FeedbackMark.ABSENT)

    # 3. Group by category for display
    return tuple(sorted(marks, key=_MARK_ORDER.__getitem__))


def is_win(feedback: Feedback) -> bool:
    """Win = every peg is CORRECT."""
    return len(feedback) == CODE_LENGTH and all(m is FeedbackMark.CORRECT for m in feedback)


def count_marks(feedback: Feedback) -> dict:
    """Tally of each mark, zero-filled: {CORRECT: n, PRESENT: n, ABSENT: n}."""
    counts = {mark: 0 for mark in FeedbackMark}
    for mark in feedback:
        counts[mark] += 1
    return counts


def validate_palette(palette: Sequence[Color]) -> Palette:
    """Return the palette as a tuple, or raise InvalidPaletteError."""
    colors = tuple(palette)
    size = len(colors)
    if not (MIN_PALETTE_SIZE <= size <= MAX_PALETTE_SIZE):
        raise InvalidPaletteError(
            f"Palette must have between {MIN_PALETTE_SIZE} and {MAX_PALETTE_SIZE} colors, got {size}."
        )
    if len(set(colors)) != size:
        raise InvalidPaletteError(f"Palette colors must be distinct, got {list(colors)}.")
    return colors


def validate_guess(guess: Sequence[Color], palette: Palette) -> Code:
    """
    Return the guess as a tuple, or raise InvalidGuessError.

    Palette membership is checked before distinctness; palette colors are
    hashable, so set() only ever sees hashable values.
    """
    try:
        code = tuple(guess)
    except TypeError:
        raise InvalidGuessError(f"Guess must be a sequence of colors, got {guess!r}.") from None
    if len(code) != CODE_LENGTH:
        raise InvalidGuessError(f"Guess must have exactly {CODE_LENGTH} colors, got {len(code)}.")

    unknown = [color for color in code if color not in palette]
    if unknown:
        raise InvalidGuessError(f"Colors not in this game's palette: {unknown}.")

    if len(set(code)) != CODE_LENGTH:
        raise InvalidGuessError(f"Guess colors must be distinct, got {list(code)}.")
    return code
