"""
In-memory store
Holds live game sessions in memory and hands each won game's score to a
result recorder exactly once.
"""

import logging
import random
from dataclasses import dataclass, field
from threading import RLock
from time import time
from typing import Dict, Hashable, List, Optional, Sequence
from uuid import uuid4

from .errors import ResultNotSavedError
from .scoring import ResultRecorder, ScoreRecord, score_record
from .session import GameSession
from .types import Code, Color

logger = logging.getLogger(__name__)


@dataclass
class GameEntry:
    id: str
    session: GameSession
    player_id: Optional[Hashable] = None
    created_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)
    # Set on the active -> won transition
    score: Optional[int] = None


class InMemoryResultRecorder:
    """List-backed ResultRecorder, handy for tests and for running without a DB."""

    def __init__(self) -> None:
        self.records: List[ScoreRecord] = []

    def record_result(self, player_id: Hashable, color_count: int, score: int) -> None:
        self.records.append(ScoreRecord(player_id=player_id, color_count=color_count, score=score))


class GameStore:
    def __init__(self, recorder: Optional[ResultRecorder] = None, rng: Optional[random.Random] = None) -> None:
        self._games: Dict[str, GameEntry] = {}
        self._lock = RLock()
        self._recorder = recorder
        self._rng = rng
        # ids whose result has been (or is being) handed to a recorder
        self._recorded: set = set()

    def create(self, palette: Sequence[Color], player_id: Optional[Hashable] = None) -> GameEntry:
        """Raises InvalidPaletteError for a bad palette."""
        with self._lock:
            session = GameSession.new(palette, self._rng)
            entry = GameEntry(id=str(uuid4()), session=session, player_id=player_id)
            self._games[entry.id] = entry
        logger.info("Created game %s for player %s", entry.id, player_id)
        return entry

    def get(self, game_id: str) -> Optional[GameEntry]:
        with self._lock:
            return self._games.get(game_id)

    def guess(
        self,
        game_id: str,
        attempt: Sequence[Color],
        recorder: Optional[ResultRecorder] = None,
    ) -> Optional[GameEntry]:
        """
        Submit a guess to the game. Returns None for an unknown id.

        InvalidGuessError and SessionTerminalError from the session propagate
        unchanged. `recorder` overrides the store-wide one for this call
        (the HTTP layer passes one bound to the request's DB session).

        Raises ResultNotSavedError if the game was won but the recorder
        failed; the game stays won and save_result() can retry.
        """
        with self._lock:
            entry = self._games.get(game_id)
            if entry is None:
                return None

            old_status = entry.session.status
            _, new_status = entry.session.submit_guess(attempt)
            entry.updated_at = time()

            # Only the active -> won edge scores and records
            record = None
            if old_status == "active" and new_status == "won":
                record = self._claim_record(entry)

        # Recorder I/O happens outside the lock
        if record is not None:
            self._hand_off(entry, record, recorder or self._recorder)
        return entry

    def save_result(self, game_id: str, recorder: Optional[ResultRecorder] = None) -> Optional[GameEntry]:
        """
        Retry handing a won game's result to the recorder. A no-op when the
        result was already saved or the game has no player. Returns None for
        an unknown id; InvalidStateError if the game was not won.
        """
        with self._lock:
            entry = self._games.get(game_id)
            if entry is None:
                return None
            record = self._claim_record(entry)

        if record is not None:
            self._hand_off(entry, record, recorder or self._recorder)
        return entry

    def is_recorded(self, game_id: str) -> bool:
        with self._lock:
            return game_id in self._recorded

    def _claim_record(self, entry: GameEntry) -> Optional[ScoreRecord]:
        """Score the won game and mark it as recorded. Caller holds the lock."""
        record = score_record(entry.session, entry.player_id)
        entry.score = record.score

        if entry.player_id is None:
            logger.info("Game %s won with score %d; no player, result not saved", entry.id, record.score)
            return None
        if entry.id in self._recorded:
            return None

        self._recorded.add(entry.id)
        return record

    def _hand_off(self, entry: GameEntry, record: ScoreRecord, recorder: Optional[ResultRecorder]) -> None:
        if recorder is None:
            with self._lock:
                self._recorded.discard(entry.id)
            logger.info("Game %s won with score %d; no recorder, result not saved", entry.id, record.score)
            return

        try:
            recorder.record_result(record.player_id, record.color_count, record.score)
        except Exception as err:
            with self._lock:
                self._recorded.discard(entry.id)
            logger.exception("Saving result of game %s failed", entry.id)
            raise ResultNotSavedError(f"Game {entry.id} was won but its result could not be saved.") from err

        logger.info("Game %s result handed to recorder (score %d)", entry.id, record.score)

    def reveal(self, game_id: str) -> Optional[Code]:
        """Secret of a finished game. None for unknown ids; SessionTerminalError while active."""
        with self._lock:
            entry = self._games.get(game_id)
            if entry is None:
                return None
            return entry.session.reveal_secret()

    def discard(self, game_id: str) -> bool:
        with self._lock:
            self._recorded.discard(game_id)
            return self._games.pop(game_id, None) is not None

    def discard_player(self, player_id: Hashable) -> int:
        """Drop every game that belongs to the player; returns how many."""
        with self._lock:
            ids = [gid for gid, entry in self._games.items() if entry.player_id == player_id]
            for gid in ids:
                self.discard(gid)
        if ids:
            logger.info("Dropped %d game(s) of player %s", len(ids), player_id)
        return len(ids)

    def prune_finished(self, older_than: float) -> int:
        """Drop finished games not touched for `older_than` seconds; returns how many."""
        cutoff = time() - older_than
        with self._lock:
            ids = [
                gid for gid, entry in self._games.items()
                if not entry.session.is_active and entry.updated_at <= cutoff
            ]
            for gid in ids:
                self.discard(gid)
        return len(ids)
