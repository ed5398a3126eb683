from __future__ import annotations

import hashlib
import io
import random
import tempfile
from pathlib import Path
from typing import List, Sequence, TypeVar

import requests
from PIL import Image, ImageFilter

T = TypeVar("T")


def normalize_answer(value: str) -> str:
    return value.strip().lower()


def stable_shuffle(items: Sequence[T], rng: random.Random) -> List[T]:
    mutable = list(items)
    rng.shuffle(mutable)
    return mutable


def ensure_logo(url: str, cache_dir: Path, timeout: float = 10.0) -> Path:
    """Download ``url`` into ``cache_dir`` once and return the cached path."""

    cache_dir.mkdir(parents=True, exist_ok=True)
    # Deterministic hash to keep cache filenames flat.
    digest = hashlib.md5(url.encode("utf-8"), usedforsecurity=False).hexdigest()  # noqa: S324
    target = cache_dir / f"{digest}.img"
    if target.exists():
        return target

    response = requests.get(url, timeout=timeout)
    response.raise_for_status()

    # One temp file per download; concurrent fetches of a URL may overlap.
    with tempfile.NamedTemporaryFile(dir=cache_dir, suffix=".tmp", delete=False) as handle:
        handle.write(response.content)
        tmp_path = Path(handle.name)

    try:
        with Image.open(tmp_path) as image:
            image.verify()
    except Exception as exc:  # pylint: disable=broad-except
        tmp_path.unlink(missing_ok=True)
        raise RuntimeError(f"Downloaded logo from {url} is not an image") from exc

    tmp_path.replace(target)
    return target


def blur_logo(source: Path, radius: int) -> bytes:
    try:
        with Image.open(source) as image:
            rendered = image.convert("RGBA")
            if radius > 0:
                rendered = rendered.filter(ImageFilter.GaussianBlur(radius))
            buffer = io.BytesIO()
            rendered.save(buffer, format="PNG", optimize=True)
    except Exception as exc:  # pylint: disable=broad-except
        raise RuntimeError(f"Failed to render logo {source}") from exc

    return buffer.getvalue()
