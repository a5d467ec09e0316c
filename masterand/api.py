"""
Function-style entry points for the engine.

new_session(palette)          -> GameSession | InvalidPaletteError
submit_guess(session, guess)  -> (feedback, status) | InvalidGuessError | SessionTerminalError
attempts(session)             -> tuple of Attempt
score(session)                -> int | InvalidStateError
reveal_secret(session)        -> secret | SessionTerminalError
"""

import random
from typing import Optional, Sequence, Tuple

from .scoring import score
from .session import Attempt, GameSession
from .types import Code, Color, Feedback, GameStatus

__all__ = ["new_session", "submit_guess", "attempts", "score", "reveal_secret"]


def new_session(palette: Sequence[Color], rng: Optional[random.Random] = None) -> GameSession:
    return GameSession.new(palette, rng)


def submit_guess(session: GameSession, guess: Sequence[Color]) -> Tuple[Feedback, GameStatus]:
    return session.submit_guess(guess)


def attempts(session: GameSession) -> Tuple[Attempt, ...]:
    return session.attempts()


def reveal_secret(session: GameSession) -> Code:
    return session.reveal_secret()
