"""HTTP client for the logo picker API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests

from . import config
from .config import get_settings
from .quiz.engine import BrandCard

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the API cannot be reached or answers with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(f"Could not reach the game server: {exc}") from exc

        if not response.ok:
            message = f"Request failed with status {response.status_code}"
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("message"):
                message = str(body["message"])
            raise ApiError(message, status_code=response.status_code)

        return response.json()

    def list_brands(
        self,
        difficulty: Optional[str] = None,
        limit: int = config.DEFAULT_BRAND_LIMIT,
    ) -> List[BrandCard]:
        params: Dict[str, Any] = {"limit": limit}
        if difficulty:
            params["difficulty"] = difficulty
        payload = self._request("GET", "/api/brands", params=params)
        return [BrandCard.from_dict(item) for item in payload]

    def list_scores(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/scores")

    def submit_score(self, player_name: str, score: int, difficulty: str) -> Dict[str, Any]:
        body = {"playerName": player_name, "score": score, "difficulty": difficulty}
        return self._request("POST", "/api/scores", json=body)

    def logo_url(self, brand_id: int, blur: int = 0) -> str:
        return f"{self.base_url}/api/brands/{brand_id}/logo?{urlencode({'blur': blur})}"
