import random
from unittest.mock import MagicMock, patch

import requests

from logo_picker import config
from logo_picker.catalog import seed
from logo_picker.config import Settings


def test_assign_difficulty_uses_fixed_lists():
    rng = random.Random(0)
    assert seed.assign_difficulty("toyota", rng) == "easy"
    assert seed.assign_difficulty("maserati", rng) == "medium"
    assigned = {seed.assign_difficulty("obscure-motors", rng) for _ in range(200)}
    assert assigned == {"hard", "impossible"}


def test_build_seed_records_skips_electric_and_blank_entries():
    items = [
        {"name": "Tesla", "slug": "tesla"},
        {"name": "", "slug": "ghost"},
        {"name": "Toyota", "slug": "Toyota"},
        {"name": "Lancia", "slug": "lancia", "difficulty": "hard"},
    ]
    records = seed.build_seed_records(items, "https://cdn.example/logos/", random.Random(1))

    by_slug = {record.slug: record for record in records}
    assert set(by_slug) == {"toyota", "lancia"}
    assert by_slug["toyota"].difficulty == "easy"
    assert by_slug["toyota"].image_url == "https://cdn.example/logos/toyota.png"
    assert by_slug["toyota"].has_text is True
    assert by_slug["lancia"].difficulty == "hard"


def test_build_seed_records_caps_the_batch():
    items = [{"name": f"Brand {idx}", "slug": f"brand-{idx}"} for idx in range(400)]
    records = seed.build_seed_records(items, "https://cdn.example", random.Random(2))
    assert len(records) == config.SEED_LIMIT


def test_fallback_list_covers_every_tier():
    records = seed.build_seed_records(seed.FALLBACK_BRANDS, "https://cdn.example", random.Random(3))
    counts = {level: 0 for level in config.DIFFICULTY_LEVELS}
    for record in records:
        counts[record.difficulty] += 1
    assert all(count > 0 for count in counts.values())
    assert counts["easy"] >= config.OPTION_COUNT
    assert counts["medium"] >= config.OPTION_COUNT
    assert counts["hard"] >= config.OPTION_COUNT


def test_load_seed_records_falls_back_when_download_fails():
    with patch.object(seed.requests, "get", side_effect=requests.ConnectionError("offline")):
        records = seed.load_seed_records(Settings(), seed=4)
    assert {record.slug for record in records} == {item["slug"] for item in seed.FALLBACK_BRANDS}


def test_load_seed_records_falls_back_on_unexpected_payload():
    response = MagicMock()
    response.json.return_value = {"not": "a list"}
    with patch.object(seed.requests, "get", return_value=response):
        records = seed.load_seed_records(Settings(), seed=5)
    assert len(records) == len(seed.FALLBACK_BRANDS)


def test_load_seed_records_uses_downloaded_dataset():
    response = MagicMock()
    response.json.return_value = [{"name": "Abarth", "slug": "abarth"}]
    with patch.object(seed.requests, "get", return_value=response) as fake_get:
        records = seed.load_seed_records(Settings(), seed=6)
    fake_get.assert_called_once()
    assert [record.slug for record in records] == ["abarth"]


def test_build_seed_records_skips_malformed_entries(caplog):
    items = [
        "garbage",
        None,
        ["abarth"],
        {"name": "Abarth", "slug": "abarth", "difficulty": ["hard"]},
        {"name": "Opel", "slug": "opel", "hasText": "maybe"},
        {"name": "Skoda", "slug": "skoda", "hasText": None},
    ]
    with caplog.at_level("DEBUG", logger=seed.__name__):
        records = seed.build_seed_records(items, "https://cdn.example", random.Random(8))

    by_slug = {record.slug: record for record in records}
    assert set(by_slug) == {"abarth", "skoda"}
    assert by_slug["abarth"].difficulty in {"hard", "impossible"}
    assert by_slug["skoda"].has_text is True
    assert "Skipped 4 malformed dataset entries" in caplog.text


def test_load_seed_records_survives_malformed_dataset():
    response = MagicMock()
    response.json.return_value = ["garbage", 42, {"name": "Abarth", "slug": "abarth"}]
    with patch.object(seed.requests, "get", return_value=response):
        records = seed.load_seed_records(Settings(), seed=9)
    assert [record.slug for record in records] == ["abarth"]


def test_seed_if_empty_runs_once(catalog):
    first = seed.seed_if_empty(catalog, Settings(), offline=True, seed=7)
    second = seed.seed_if_empty(catalog, Settings(), offline=True, seed=7)

    assert first == len(seed.FALLBACK_BRANDS)
    assert second == 0
    assert catalog.count_brands() == len(seed.FALLBACK_BRANDS)
