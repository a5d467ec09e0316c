"""
Score for a won game: max attempts minus the attempts used.
Winning on the first guess scores 9, on the tenth scores 0.
"""

from dataclasses import dataclass
from typing import Hashable, Protocol

from .errors import InvalidStateError
from .session import GameSession


@dataclass(frozen=True)
class ScoreRecord:
    player_id: Hashable
    color_count: int
    score: int


class ResultRecorder(Protocol):
    """Anything that can store a finished game's result (fire-and-forget)."""

    def record_result(self, player_id: Hashable, color_count: int, score: int) -> None:
        ...


def score(session: GameSession) -> int:
    if session.status != "won":
        raise InvalidStateError(f"Only won games have a score; this game is {session.status}.")
    return session.max_attempts - len(session.attempts())


def score_record(session: GameSession, player_id: Hashable) -> ScoreRecord:
    """Build the record handed to the result store. Raises InvalidStateError unless won."""
    return ScoreRecord(player_id=player_id, color_count=len(session.palette), score=score(session))
