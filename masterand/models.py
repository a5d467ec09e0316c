"""
SQLAlchemy ORM models for players and their results.

Tables:
- players: one row per profile (name, email, optional avatar URI)
- game_results: one row per won game (color count + score)

Only won games are stored; lost games have no score.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .db import Base


class Player(Base):
    __tablename__ = "players"
    # Never hand a deleted player's id to a new player
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    image_uri: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    # Deleting a player also deletes their scores
    results: Mapped[list["GameResult"]] = relationship(
        back_populates="player",
        cascade="all, delete-orphan",
    )


class GameResult(Base):
    __tablename__ = "game_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    player_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id", ondelete="CASCADE"), index=True)
    player: Mapped[Player] = relationship(back_populates="results")

    # Palette size the game was played with (4..10) and its score (0..9)
    color_count: Mapped[int] = mapped_column(Integer, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
