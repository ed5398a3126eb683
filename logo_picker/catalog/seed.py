"""Populate the brand catalog from the public car-logos dataset."""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Iterable, List, Mapping, Optional

import requests
from pydantic import ValidationError

from .. import config
from ..config import Settings, get_settings
from ..quiz.utils import stable_shuffle
from .schemas import BrandCreate
from .service import CatalogService

logger = logging.getLogger(__name__)

ELECTRIC_ONLY = {"tesla", "rivian", "lucid", "nio", "xpeng", "byd", "rimac", "polestar"}

EASY_BRANDS = {
    "toyota", "honda", "ford", "chevrolet", "bmw", "mercedes-benz", "audi",
    "volkswagen", "nissan", "hyundai", "kia", "mazda", "subaru", "jeep",
    "ferrari", "lamborghini", "porsche",
}

MEDIUM_BRANDS = {
    "volvo", "lexus", "acura", "infiniti", "cadillac", "lincoln", "buick",
    "jaguar", "land-rover", "mini", "mitsubishi", "peugeot", "renault", "fiat",
    "alfa-romeo", "maserati", "aston-martin", "bentley", "rolls-royce",
    "mclaren", "bugatti",
}

IMPOSSIBLE_CHANCE = 0.2

# Used when the dataset cannot be downloaded. Covers every tier.
FALLBACK_BRANDS: List[Dict[str, Any]] = [
    {"name": "Toyota", "slug": "toyota"},
    {"name": "Honda", "slug": "honda"},
    {"name": "Ford", "slug": "ford"},
    {"name": "Chevrolet", "slug": "chevrolet"},
    {"name": "BMW", "slug": "bmw"},
    {"name": "Mercedes-Benz", "slug": "mercedes-benz"},
    {"name": "Audi", "slug": "audi"},
    {"name": "Ferrari", "slug": "ferrari"},
    {"name": "Lamborghini", "slug": "lamborghini"},
    {"name": "Porsche", "slug": "porsche"},
    {"name": "Volvo", "slug": "volvo"},
    {"name": "Lexus", "slug": "lexus"},
    {"name": "Cadillac", "slug": "cadillac"},
    {"name": "Jaguar", "slug": "jaguar"},
    {"name": "Maserati", "slug": "maserati"},
    {"name": "Bentley", "slug": "bentley"},
    {"name": "Lancia", "slug": "lancia", "difficulty": "hard"},
    {"name": "Koenigsegg", "slug": "koenigsegg", "difficulty": "hard"},
    {"name": "Pagani", "slug": "pagani", "difficulty": "hard"},
    {"name": "Dacia", "slug": "dacia", "difficulty": "hard"},
    {"name": "Tata", "slug": "tata", "difficulty": "impossible"},
    {"name": "Proton", "slug": "proton", "difficulty": "impossible"},
]


def assign_difficulty(slug: str, rng: random.Random) -> str:
    if slug in EASY_BRANDS:
        return "easy"
    if slug in MEDIUM_BRANDS:
        return "medium"
    if rng.random() < IMPOSSIBLE_CHANCE:
        return "impossible"
    return "hard"


def fetch_dataset(settings: Optional[Settings] = None) -> List[Dict[str, Any]]:
    """Download the raw dataset; raises ``requests.RequestException`` or ``ValueError``."""

    settings = settings or get_settings()
    response = requests.get(settings.dataset_url, timeout=settings.request_timeout)
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, list):
        raise ValueError("Logo dataset is not a JSON array")
    return payload


def build_seed_records(
    items: Iterable[Any],
    logo_base_url: str,
    rng: random.Random,
    limit: int = config.SEED_LIMIT,
) -> List[BrandCreate]:
    records: List[BrandCreate] = []
    skipped = 0
    for item in stable_shuffle(list(items), rng):
        if len(records) >= limit:
            break
        if not isinstance(item, Mapping):
            logger.debug("Skipping dataset entry that is not an object: %r", item)
            skipped += 1
            continue

        slug = str(item.get("slug") or "").strip().lower()
        name = str(item.get("name") or "").strip()
        if not slug or not name or slug in ELECTRIC_ONLY:
            continue

        difficulty = item.get("difficulty")
        if not isinstance(difficulty, str) or difficulty not in config.DIFFICULTY_LEVELS:
            difficulty = assign_difficulty(slug, rng)
        # Most dataset logos carry the brand name in their artwork.
        has_text = item.get("hasText")
        if has_text is None:
            has_text = True
        try:
            record = BrandCreate(
                name=name,
                slug=slug,
                image_url=f"{logo_base_url.rstrip('/')}/{slug}.png",
                difficulty=difficulty,
                has_text=has_text,
            )
        except ValidationError as exc:
            logger.debug("Skipping invalid dataset entry %r: %s", slug, exc)
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.info("Skipped %d malformed dataset entries", skipped)
    return records


def load_seed_records(
    settings: Optional[Settings] = None,
    offline: bool = False,
    seed: Optional[int] = None,
) -> List[BrandCreate]:
    settings = settings or get_settings()
    rng = random.Random(seed)

    items: List[Dict[str, Any]] = FALLBACK_BRANDS
    if not offline:
        try:
            items = fetch_dataset(settings)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Could not download logo dataset (%s); using fallback brands", exc)
            items = FALLBACK_BRANDS

    return build_seed_records(items, settings.logo_base_url, rng)


def seed_if_empty(
    service: CatalogService,
    settings: Optional[Settings] = None,
    offline: bool = False,
    seed: Optional[int] = None,
) -> int:
    if service.count_brands() > 0:
        logger.debug("Catalog already populated, skipping seed")
        return 0

    logger.info("Seeding car brands...")
    records = load_seed_records(settings, offline=offline, seed=seed)
    inserted = service.seed_catalog(records)
    logger.info("Seeded %d car brands", inserted)
    return inserted
