import pytest

from logo_picker.catalog import store
from logo_picker.catalog.service import CatalogService
from logo_picker.quiz import BrandCard


@pytest.fixture
def engine(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'test.db'}"
    engine = store.get_engine(db_url)
    store.init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def catalog(engine):
    return CatalogService(engine)


def make_brand(idx, name, difficulty="easy", has_text=False):
    return BrandCard(
        id=idx,
        name=name,
        slug=name.lower().replace(" ", "-"),
        image_url=f"https://logos.example/{idx}.png",
        difficulty=difficulty,
        has_text=has_text,
    )


@pytest.fixture
def brands():
    names = ["Toyota", "Honda", "Ford", "BMW", "Audi", "Porsche"]
    return [make_brand(idx, name) for idx, name in enumerate(names, 1)]


def brand_payload(slug, name=None, difficulty="easy", has_text=True):
    return {
        "name": name or slug.title(),
        "slug": slug,
        "imageUrl": f"https://logos.example/{slug}.png",
        "difficulty": difficulty,
        "hasText": has_text,
    }
