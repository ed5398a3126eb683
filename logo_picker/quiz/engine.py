from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .. import config
from .utils import normalize_answer, stable_shuffle


class InvalidTransition(RuntimeError):
    """Raised when an action is not allowed in the current round state."""


class QuizState(str, Enum):
    PLAYING = "playing"
    REVEALED = "revealed"
    ENDED = "ended"


@dataclass(frozen=True)
class BrandCard:
    """One catalog brand as seen by a quiz session."""

    id: int
    name: str
    slug: str
    image_url: str
    difficulty: str
    has_text: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "imageUrl": self.image_url,
            "difficulty": self.difficulty,
            "hasText": self.has_text,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "BrandCard":
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            slug=str(payload["slug"]),
            image_url=str(payload["imageUrl"]),
            difficulty=str(payload["difficulty"]),
            has_text=bool(payload.get("hasText") or False),
        )


@dataclass(frozen=True)
class AnswerResult:
    submitted: str
    expected: str
    is_correct: bool
    points: int


def points_for(difficulty: str) -> int:
    if difficulty not in config.POINTS_BY_DIFFICULTY:
        raise ValueError(f"Unsupported difficulty: {difficulty}")
    return config.POINTS_BY_DIFFICULTY[difficulty]


def blur_level_for(difficulty: str, has_text: bool) -> int:
    """Blur radius applied to a logo before it is revealed.

    Every tier above ``easy`` has a fixed radius. Easy logos are shown
    sharp unless the artwork spells out the brand name.
    """

    if difficulty not in config.DIFFICULTY_LEVELS:
        raise ValueError(f"Unsupported difficulty: {difficulty}")
    if difficulty == "easy":
        return config.EASY_TEXT_BLUR if has_text else 0
    return config.BLUR_BY_DIFFICULTY[difficulty]


def is_multiple_choice(difficulty: str) -> bool:
    return difficulty != config.FREE_TEXT_DIFFICULTY


def build_options(
    brands: Sequence[BrandCard],
    correct: BrandCard,
    rng: random.Random,
    count: int = config.OPTION_COUNT,
) -> List[BrandCard]:
    required = count - 1
    seen_labels = {normalize_answer(correct.name)}
    eligible: List[BrandCard] = []
    for candidate in brands:
        label = normalize_answer(candidate.name)
        if candidate.id == correct.id or label in seen_labels:
            continue
        eligible.append(candidate)
        seen_labels.add(label)

    if len(eligible) < required:
        raise ValueError("Not enough distinct brands to build the answer options")

    options = rng.sample(eligible, required) + [correct]
    return stable_shuffle(options, rng)


class QuizSession:
    def __init__(
        self,
        brands: Sequence[BrandCard],
        difficulty: str = config.DEFAULT_DIFFICULTY,
        lives: int = config.STARTING_LIVES,
        seed: int | None = None,
    ) -> None:
        if difficulty not in config.DIFFICULTY_LEVELS:
            raise ValueError(f"Unsupported difficulty: {difficulty}")

        if not brands:
            raise ValueError("A session needs at least one brand")

        if lives <= 0:
            raise ValueError("Lives must be positive")

        self.brands = list(brands)
        self.difficulty = difficulty
        self.seed = seed if seed is not None else random.randint(0, 1_000_000)
        self.rng = random.Random(self.seed)

        if self.multiple_choice:
            labels = {normalize_answer(brand.name) for brand in self.brands}
            if len(labels) < config.OPTION_COUNT:
                raise ValueError("Not enough distinct brands for multiple choice")

        self.position = 0
        self.score = 0
        self.lives = lives
        self.state = QuizState.PLAYING
        self.options: List[BrandCard] = []
        self.last_result: Optional[AnswerResult] = None
        self.answers: List[AnswerResult] = []
        self._start_round()

    @property
    def multiple_choice(self) -> bool:
        return is_multiple_choice(self.difficulty)

    @property
    def current_brand(self) -> BrandCard:
        return self.brands[self.position]

    @property
    def total_rounds(self) -> int:
        return len(self.brands)

    @property
    def finished(self) -> bool:
        return self.state is QuizState.ENDED

    @property
    def blur_level(self) -> int:
        if self.state is not QuizState.PLAYING:
            return 0
        return blur_level_for(self.difficulty, self.current_brand.has_text)

    def _start_round(self) -> None:
        self.last_result = None
        if self.multiple_choice:
            self.options = build_options(self.brands, self.current_brand, self.rng)
        else:
            self.options = []
        self.state = QuizState.PLAYING

    def submit_answer(self, candidate: str) -> AnswerResult:
        if self.state is not QuizState.PLAYING:
            raise InvalidTransition(f"Cannot answer while {self.state.value}")

        brand = self.current_brand
        is_correct = normalize_answer(candidate) == normalize_answer(brand.name)
        points = points_for(self.difficulty) if is_correct else 0
        result = AnswerResult(
            submitted=candidate,
            expected=brand.name,
            is_correct=is_correct,
            points=points,
        )

        self.score += points
        if not is_correct:
            self.lives -= 1

        self.last_result = result
        self.answers.append(result)
        self.state = QuizState.ENDED if self.lives <= 0 else QuizState.REVEALED
        return result

    def advance(self) -> QuizState:
        if self.state is not QuizState.REVEALED:
            raise InvalidTransition(f"Cannot advance while {self.state.value}")

        if self.position + 1 >= len(self.brands):
            self.state = QuizState.ENDED
            return self.state

        self.position += 1
        self._start_round()
        return self.state

    def summary(self) -> Dict[str, object]:
        return {
            "difficulty": self.difficulty,
            "score": self.score,
            "lives": self.lives,
            "rounds_played": len(self.answers),
            "total_rounds": self.total_rounds,
            "correct": sum(1 for answer in self.answers if answer.is_correct),
            "seed": self.seed,
        }
