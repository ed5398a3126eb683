"""Brand catalog persistence, schemas and seeding."""

from .schemas import BrandCreate, BrandRecord, ScoreCreate, ScoreRecord
from .service import (
    CatalogError,
    CatalogService,
    CatalogUnavailable,
    CatalogValidationError,
    DuplicateBrand,
    ScoreValidationError,
)
from .store import get_engine, init_db

__all__ = [
    "BrandCreate",
    "BrandRecord",
    "CatalogError",
    "CatalogService",
    "CatalogUnavailable",
    "CatalogValidationError",
    "DuplicateBrand",
    "ScoreCreate",
    "ScoreRecord",
    "ScoreValidationError",
    "get_engine",
    "init_db",
]
