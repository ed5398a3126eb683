from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
STATE_DIR = BASE_DIR / "_state"

DIFFICULTY_LEVELS = {
    "easy": "Famous badges",
    "medium": "Well-known marques",
    "hard": "Niche manufacturers",
    "impossible": "Any logo, type the name",
}
DEFAULT_DIFFICULTY = "easy"
FREE_TEXT_DIFFICULTY = "impossible"

POINTS_BY_DIFFICULTY = {
    "easy": 5,
    "medium": 10,
    "hard": 15,
    "impossible": 20,
}

BLUR_BY_DIFFICULTY = {
    "medium": 10,
    "hard": 15,
    "impossible": 20,
}
EASY_TEXT_BLUR = 10
MAX_BLUR = 50

STARTING_LIVES = 3
OPTION_COUNT = 4

DEFAULT_BRAND_LIMIT = 10
MAX_BRAND_LIMIT = 200
LEADERBOARD_SIZE = 10
PLAYER_NAME_MAX_LENGTH = 15
MAX_SCORE = 2**63 - 1

SEED_LIMIT = 150
DEFAULT_DATASET_URL = (
    "https://raw.githubusercontent.com/filippofilip95/car-logos-dataset/master/data.json"
)
DEFAULT_LOGO_BASE_URL = (
    "https://raw.githubusercontent.com/filippofilip95/car-logos-dataset/master/logos/optimized"
)


class Settings:
    """Centralised runtime configuration."""

    def __init__(self) -> None:
        self.database_url = os.environ.get(
            "LOGO_PICKER_DATABASE_URL", f"sqlite:///{STATE_DIR / 'logo_picker.db'}"
        )
        self.api_url = os.environ.get("LOGO_PICKER_API_URL", "http://127.0.0.1:8000")
        self.dataset_url = os.environ.get("LOGO_PICKER_DATASET_URL", DEFAULT_DATASET_URL)
        self.logo_base_url = os.environ.get("LOGO_PICKER_LOGO_BASE_URL", DEFAULT_LOGO_BASE_URL)
        self.cache_dir = Path(
            os.environ.get("LOGO_PICKER_CACHE_DIR", str(STATE_DIR / "logos"))
        )
        self.request_timeout = float(os.environ.get("LOGO_PICKER_REQUEST_TIMEOUT", "10"))
        self.log_level = os.environ.get("LOGO_PICKER_LOG_LEVEL", "INFO").upper()


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
