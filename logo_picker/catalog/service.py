"""Brand catalog and leaderboard operations.

Every public method runs inside its own ``session_scope`` so each call is a
single independent read or insert against the shared store.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError
from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .. import config
from .models import Brand, Score
from .schemas import BrandCreate, BrandRecord, ScoreCreate, ScoreRecord
from .store import get_session_factory, session_scope

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for catalog failures."""


class CatalogUnavailable(CatalogError):
    """Raised when the underlying store cannot be reached."""


class CatalogValidationError(CatalogError, ValueError):
    """Raised when a payload violates a constraint; message names the first one."""


class ScoreValidationError(CatalogValidationError):
    pass


class BrandValidationError(CatalogValidationError):
    pass


class DuplicateBrand(CatalogError):
    """Raised when a brand slug is already stored."""


def first_error_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def _validate(schema: type, payload: Union[BaseModel, Mapping[str, Any]], error_cls: type):
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise error_cls(first_error_message(exc)) from exc


class CatalogService:
    """Reads and writes brands and scores through SQLAlchemy."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = get_session_factory(engine)

    # ------------------------------------------------------------------ brands
    def list_brands(
        self,
        difficulty: Optional[str] = None,
        limit: int = config.DEFAULT_BRAND_LIMIT,
    ) -> List[BrandRecord]:
        if difficulty is not None and difficulty not in config.DIFFICULTY_LEVELS:
            raise CatalogValidationError(f"difficulty: unsupported value '{difficulty}'")
        if limit < 1 or limit > config.MAX_BRAND_LIMIT:
            raise CatalogValidationError(
                f"limit: must be between 1 and {config.MAX_BRAND_LIMIT}"
            )

        query = select(Brand)
        if difficulty:
            query = query.where(Brand.difficulty == difficulty)
        query = query.order_by(func.random()).limit(limit)

        try:
            with session_scope(self._session_factory) as session:
                rows = session.scalars(query).all()
                return [BrandRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.exception("Failed to list brands")
            raise CatalogUnavailable("Brand catalog is unavailable") from exc

    def get_brand(self, brand_id: int) -> Optional[BrandRecord]:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(Brand, brand_id)
                return BrandRecord.model_validate(row) if row is not None else None
        except SQLAlchemyError as exc:
            logger.exception("Failed to load brand %s", brand_id)
            raise CatalogUnavailable("Brand catalog is unavailable") from exc

    def count_brands(self) -> int:
        try:
            with session_scope(self._session_factory) as session:
                return session.scalar(select(func.count()).select_from(Brand)) or 0
        except SQLAlchemyError as exc:
            raise CatalogUnavailable("Brand catalog is unavailable") from exc

    def create_brand(self, payload: Union[BrandCreate, Mapping[str, Any]]) -> BrandRecord:
        data = _validate(BrandCreate, payload, BrandValidationError)
        brand = Brand(**data.model_dump())
        try:
            with session_scope(self._session_factory) as session:
                session.add(brand)
                session.flush()
                return BrandRecord.model_validate(brand)
        except IntegrityError as exc:
            raise DuplicateBrand(f"slug: '{data.slug}' already exists") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to create brand %s", data.slug)
            raise CatalogUnavailable("Brand catalog is unavailable") from exc

    def seed_catalog(self, records: Iterable[Union[BrandCreate, Mapping[str, Any]]]) -> int:
        """Insert brands whose slug is not stored yet; return the number inserted."""

        pending: List[BrandCreate] = []
        batch_slugs = set()
        for record in records:
            data = _validate(BrandCreate, record, BrandValidationError)
            if data.slug in batch_slugs:
                continue
            batch_slugs.add(data.slug)
            pending.append(data)

        if not pending:
            return 0

        try:
            with session_scope(self._session_factory) as session:
                existing = set(
                    session.scalars(select(Brand.slug).where(Brand.slug.in_(list(batch_slugs)))).all()
                )
                fresh = [Brand(**data.model_dump()) for data in pending if data.slug not in existing]
                session.add_all(fresh)
        except IntegrityError:
            # Another writer stored some of the same slugs; fall back to one row at a time.
            logger.warning("Bulk seed collided with concurrent inserts, retrying per brand")
            return self._seed_one_by_one(pending)
        except SQLAlchemyError as exc:
            logger.exception("Failed to seed catalog")
            raise CatalogUnavailable("Brand catalog is unavailable") from exc

        logger.info("Seeded %d brands (%d skipped)", len(fresh), len(pending) - len(fresh))
        return len(fresh)

    def _seed_one_by_one(self, pending: List[BrandCreate]) -> int:
        inserted = 0
        for data in pending:
            try:
                self.create_brand(data)
            except DuplicateBrand:
                continue
            inserted += 1
        return inserted

    # ------------------------------------------------------------------ scores
    def create_score(self, payload: Union[ScoreCreate, Mapping[str, Any]]) -> ScoreRecord:
        data = _validate(ScoreCreate, payload, ScoreValidationError)
        score = Score(**data.model_dump())
        try:
            with session_scope(self._session_factory) as session:
                session.add(score)
                session.flush()
                record = ScoreRecord.model_validate(score)
        except SQLAlchemyError as exc:
            logger.exception("Failed to save score for %s", data.player_name)
            raise CatalogUnavailable("Leaderboard is unavailable") from exc

        logger.info(
            "Saved score %d for %s on %s", record.score, record.player_name, record.difficulty
        )
        return record

    def list_scores(self, limit: int = config.LEADERBOARD_SIZE) -> List[ScoreRecord]:
        query = select(Score).order_by(Score.score.desc(), Score.id.asc()).limit(limit)
        try:
            with session_scope(self._session_factory) as session:
                rows = session.scalars(query).all()
                return [ScoreRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.exception("Failed to list scores")
            raise CatalogUnavailable("Leaderboard is unavailable") from exc
