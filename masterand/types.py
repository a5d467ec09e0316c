"""
Labels for clarity.
"""

from enum import Enum
from typing import Hashable, Literal, Tuple

Color = Hashable  # any symbol from the session's palette
Palette = Tuple[Color, ...]  # 4 -> 10 distinct colors
Code = Tuple[Color, ...]  # 4 distinct colors (secret or guess)
GameStatus = Literal["active", "won", "lost"]

CODE_LENGTH = 4
MAX_ATTEMPTS = 10
MIN_PALETTE_SIZE = 4
MAX_PALETTE_SIZE = 10


class FeedbackMark(str, Enum):
    """One peg of feedback. Declaration order is the display order."""
    CORRECT = "correct"  # right color, right position
    PRESENT = "present"  # right color, wrong position
    ABSENT = "absent"


Feedback = Tuple[FeedbackMark, ...]
