"""Quiz utilities for the logo picker game."""

from .engine import (
    AnswerResult,
    BrandCard,
    InvalidTransition,
    QuizSession,
    QuizState,
    blur_level_for,
    build_options,
    points_for,
)

__all__ = [
    "AnswerResult",
    "BrandCard",
    "InvalidTransition",
    "QuizSession",
    "QuizState",
    "blur_level_for",
    "build_options",
    "points_for",
]
