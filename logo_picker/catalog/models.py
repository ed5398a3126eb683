"""SQLAlchemy ORM models backing the brand catalog and leaderboard."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Brand(Base):
    """Car brand whose logo can be quizzed."""

    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False)
    image_url = Column(String, nullable=False)
    difficulty = Column(String, nullable=False, index=True)
    has_text = Column(Boolean, default=False, nullable=False)


class Score(Base):
    """Leaderboard entry saved at the end of a session."""

    __tablename__ = "scores"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    player_name = Column(String, nullable=False)
    score = Column(Integer, nullable=False)
    difficulty = Column(String, nullable=False)
