"""
One player's game: the secret, the attempt log, and the status.

Status only moves forward:
  active -> won   (a guess got 4 CORRECT marks)
  active -> lost  (10 guesses logged without a win)

A session does no locking. Whoever holds it must not call submit_guess
from two threads at once (GameStore does this with its lock).
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from . import random_client
from .engine import evaluate, is_win, validate_guess, validate_palette
from .errors import InvalidGuessError, SessionTerminalError
from .types import MAX_ATTEMPTS, Code, Color, Feedback, GameStatus, Palette

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attempt:
    number: int  # 1-based, in submission order
    guess: Code
    feedback: Feedback


class GameSession:
    def __init__(self, palette: Sequence[Color], secret: Sequence[Color], max_attempts: int = MAX_ATTEMPTS) -> None:
        """
        Start a game with a known secret (replays, tests). Use new() to draw
        a random one.

        Raises InvalidPaletteError for a bad palette and ValueError if the
        secret is not 4 distinct palette colors.
        """
        self._palette = validate_palette(palette)
        try:
            self._secret = validate_guess(secret, self._palette)
        except InvalidGuessError as err:
            raise ValueError(f"Invalid secret: {err}") from None
        self._max_attempts = max_attempts
        self._attempts: List[Attempt] = []
        self._status: GameStatus = "active"

    @classmethod
    def new(cls, palette: Sequence[Color], rng: Optional[random.Random] = None) -> "GameSession":
        """Validate the palette and draw the secret. Raises InvalidPaletteError."""
        colors = validate_palette(palette)
        secret = random_client.generate(colors, rng)
        logger.info("New session with %d colors", len(colors))
        return cls(colors, secret)

    # --- Read-only views ---

    @property
    def palette(self) -> Palette:
        return self._palette

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def attempts_left(self) -> int:
        return self._max_attempts - len(self._attempts)

    @property
    def is_active(self) -> bool:
        return self._status == "active"

    def attempts(self) -> Tuple[Attempt, ...]:
        return tuple(self._attempts)

    # --- Mutation ---

    def submit_guess(self, guess: Sequence[Color]) -> Tuple[Feedback, GameStatus]:
        """
        Evaluate one guess and record it.

        Raises:
            SessionTerminalError: the game is already won or lost
            InvalidGuessError: wrong length, repeated color, or unknown color;
                nothing is recorded and the session is unchanged
        """
        if not self.is_active:
            raise SessionTerminalError(f"Game is {self._status}. No more guesses allowed.")

        try:
            code = validate_guess(guess, self._palette)
        except InvalidGuessError as err:
            logger.debug("Rejected guess: %s", err)
            raise

        feedback = evaluate(code, self._secret)
        self._attempts.append(Attempt(number=len(self._attempts) + 1, guess=code, feedback=feedback))

        if is_win(feedback):
            self._status = "won"
        elif len(self._attempts) >= self._max_attempts:
            self._status = "lost"

        if not self.is_active:
            logger.info("Session %s after %d attempt(s)", self._status, len(self._attempts))
        return feedback, self._status

    def reveal_secret(self) -> Code:
        """The secret, once the game is over. Raises SessionTerminalError while active."""
        if self.is_active:
            raise SessionTerminalError("Secret is hidden until the game is won or lost.")
        return self._secret
