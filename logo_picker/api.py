from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests
from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__, config
from .catalog.schemas import BrandRecord, Difficulty, HealthResponse, ScoreRecord
from .catalog.seed import seed_if_empty
from .catalog.service import (
    CatalogError,
    CatalogService,
    CatalogUnavailable,
    CatalogValidationError,
    DuplicateBrand,
)
from .catalog.store import get_engine, init_db
from .config import get_settings
from .quiz.utils import blur_logo, ensure_logo

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"

app = FastAPI(
    title="Logo Picker API",
    version=__version__,
    description=(
        "Serves car brands for the guess-the-logo quiz and keeps the "
        "leaderboard of finished sessions."
    ),
)


def build_catalog() -> CatalogService:
    settings = get_settings()
    engine = init_db(get_engine(settings.database_url))
    return CatalogService(engine)


# --------------------------------------------------------------------- lifespan
@app.on_event("startup")
def _prepare_catalog() -> None:
    catalog = build_catalog()
    app.state.catalog = catalog
    try:
        seed_if_empty(catalog)
    except CatalogError:
        logger.exception("Error seeding database")


def get_catalog() -> CatalogService:
    catalog = getattr(app.state, "catalog", None)
    if catalog is None:
        catalog = build_catalog()
        app.state.catalog = catalog
    return catalog


# --------------------------------------------------------------------- errors
@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        error = errors[0]
        # Drop the leading "query"/"body"/"path" marker from the location.
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = f"{location}: {error.get('msg')}" if location else str(error.get("msg"))
    return JSONResponse(status_code=400, content={"message": message})


# --------------------------------------------------------------------- endpoints
@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok")


@app.get("/api/brands", response_model=List[BrandRecord])
def list_brands(
    difficulty: Optional[Difficulty] = Query(default=None),
    limit: int = Query(default=config.DEFAULT_BRAND_LIMIT, ge=1, le=config.MAX_BRAND_LIMIT),
    catalog: CatalogService = Depends(get_catalog),
) -> List[BrandRecord]:
    try:
        return catalog.list_brands(difficulty, limit)
    except CatalogValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR) from exc


@app.post("/api/brands", response_model=BrandRecord, status_code=201)
def create_brand(
    payload: Dict[str, Any] = Body(...),
    catalog: CatalogService = Depends(get_catalog),
) -> BrandRecord:
    try:
        return catalog.create_brand(payload)
    except CatalogValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except DuplicateBrand as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR) from exc


@app.get("/api/brands/{brand_id}/logo")
def brand_logo(
    brand_id: int,
    blur: int = Query(default=0, ge=0, le=config.MAX_BLUR),
    catalog: CatalogService = Depends(get_catalog),
) -> Response:
    try:
        brand = catalog.get_brand(brand_id)
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR) from exc
    if brand is None:
        raise HTTPException(status_code=404, detail=f"Brand {brand_id} not found")

    settings = get_settings()
    try:
        source = ensure_logo(brand.image_url, settings.cache_dir, settings.request_timeout)
        content = blur_logo(source, blur)
    except (requests.RequestException, RuntimeError) as exc:
        logger.warning("Could not render logo for %s: %s", brand.slug, exc)
        raise HTTPException(status_code=502, detail="Logo image unavailable") from exc
    return Response(content=content, media_type="image/png")


@app.get("/api/scores", response_model=List[ScoreRecord])
def list_scores(catalog: CatalogService = Depends(get_catalog)) -> List[ScoreRecord]:
    try:
        return catalog.list_scores()
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR) from exc


@app.post("/api/scores", response_model=ScoreRecord, status_code=201)
def create_score(
    payload: Dict[str, Any] = Body(...),
    catalog: CatalogService = Depends(get_catalog),
) -> ScoreRecord:
    try:
        return catalog.create_score(payload)
    except CatalogValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR) from exc
