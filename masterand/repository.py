"""
DB-backed result store.

DBResultRecorder is what GameStore hands a won game's score to
(record_result), plus the player CRUD and the high score query.

Public methods:
- record_result(player_id, color_count, score) -> None
- add_player(name, email, image_uri) -> PlayerOut
- get_player(player_id) -> PlayerOut | None
- list_players() -> list[PlayerOut]
- update_player(player_id, name, email, image_uri) -> PlayerOut | None
- delete_player_with_scores(player_id) -> bool
- player_results(player_id) -> list[HighScoreOut]
- high_scores(limit) -> list[HighScoreOut]
- clear_all() -> None
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy import select, delete

from .models import Player as PlayerORM, GameResult as GameResultORM
from .schemas import PlayerOut, HighScoreOut

logger = logging.getLogger(__name__)


# --- Small DTO builders so routes never see ORM objects ---

def _to_player_out(p: PlayerORM) -> PlayerOut:
    return PlayerOut(id=p.id, name=p.name, email=p.email, image_uri=p.image_uri)


def _to_high_score(r: GameResultORM, p: PlayerORM) -> HighScoreOut:
    return HighScoreOut(
        player_id=p.id,
        player_name=p.name,
        color_count=r.color_count,
        score=r.score,
    )


class DBResultRecorder:
    """Players and results in SQL; implements the ResultRecorder protocol."""

    def __init__(self, db: Session):
        self.db = db

    # --- Results ---

    def record_result(self, player_id: int, color_count: int, score: int) -> None:
        """Skips results for players that no longer exist; rolls back on a failed commit."""
        if self.db.get(PlayerORM, player_id) is None:
            logger.warning("Player %s no longer exists; result not saved", player_id)
            return
        try:
            self.db.add(GameResultORM(player_id=player_id, color_count=color_count, score=score))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Saved result for player %s: %d colors, score %d", player_id, color_count, score)

    def player_results(self, player_id: int) -> list[HighScoreOut]:
        rows = self.db.execute(
            select(GameResultORM, PlayerORM)
            .join(PlayerORM, GameResultORM.player_id == PlayerORM.id)
            .where(GameResultORM.player_id == player_id)
            .order_by(GameResultORM.id.asc())
        ).all()
        return [_to_high_score(r, p) for r, p in rows]

    def high_scores(self, limit: Optional[int] = None) -> list[HighScoreOut]:
        """More colors rank higher first, then higher score."""
        stmt = (
            select(GameResultORM, PlayerORM)
            .join(PlayerORM, GameResultORM.player_id == PlayerORM.id)
            .order_by(GameResultORM.color_count.desc(), GameResultORM.score.desc(), GameResultORM.id.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return [_to_high_score(r, p) for r, p in self.db.execute(stmt).all()]

    # --- Players ---

    def add_player(self, name: str, email: str, image_uri: Optional[str] = None) -> PlayerOut:
        player = PlayerORM(name=name, email=email, image_uri=image_uri)
        self.db.add(player)
        self.db.commit()
        self.db.refresh(player)
        logger.info("Created player %s", player.id)
        return _to_player_out(player)

    def get_player(self, player_id: int) -> Optional[PlayerOut]:
        player = self.db.get(PlayerORM, player_id)
        if not player:
            return None
        return _to_player_out(player)

    def list_players(self) -> list[PlayerOut]:
        players = self.db.execute(select(PlayerORM).order_by(PlayerORM.id.asc())).scalars().all()
        return [_to_player_out(p) for p in players]

    def update_player(
        self,
        player_id: int,
        name: str,
        email: str,
        image_uri: Optional[str] = None,
    ) -> Optional[PlayerOut]:
        player = self.db.get(PlayerORM, player_id)
        if not player:
            return None
        player.name = name
        player.email = email
        player.image_uri = image_uri
        self.db.commit()
        self.db.refresh(player)
        return _to_player_out(player)

    def delete_player_with_scores(self, player_id: int) -> bool:
        player = self.db.get(PlayerORM, player_id)
        if not player:
            return False
        # ORM cascade removes the scores too (works without FK enforcement)
        self.db.delete(player)
        self.db.commit()
        logger.info("Deleted player %s and their scores", player_id)
        return True

    def clear_all(self) -> None:
        self.db.execute(delete(GameResultORM))
        self.db.execute(delete(PlayerORM))
        self.db.commit()
