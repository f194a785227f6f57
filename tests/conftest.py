"""Shared test fixtures."""

from pathlib import Path

import pytest

from sakescan.common.errors import CatalogWriteError
from sakescan.extraction import SakeVocabulary
from sakescan.models import MatchDecision, ScrapedSake

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeCatalog:
    """
    In-memory catalog with the SupabaseCatalog interface.

    Names listed in fail_on make insert_sake/update_sake raise CatalogWriteError.
    """

    def __init__(self, entries=None, fail_on=()):
        self.entries = list(entries or [])
        self.fail_on = set(fail_on)
        self.inserted = []
        self.updated = []
        self.snapshot_calls = 0

    def fetch_match_snapshot(self):
        self.snapshot_calls += 1
        return list(self.entries)

    def update_sake(self, sake_id, values):
        if sake_id in self.fail_on:
            raise CatalogWriteError("row not found")
        self.updated.append((sake_id, values))

    def insert_sake(self, row):
        if row.name in self.fail_on:
            raise CatalogWriteError('duplicate key value violates unique constraint "sake_name_key"')
        self.inserted.append(row)


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def catalog_markdown():
    """Markdown snapshot of a catalog listing page."""
    return (FIXTURES_DIR / "catalog_page.md").read_text(encoding="utf-8")


@pytest.fixture
def catalog_html():
    """HTML snapshot of the same catalog listing page."""
    return (FIXTURES_DIR / "catalog_page.html").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def vocabulary():
    """Vocabulary compiled from config/sake_vocabulary.yaml."""
    return SakeVocabulary()


@pytest.fixture
def dassai_block():
    """A single catalog card as rendered to Markdown."""
    return (
        "Modern-Light\nDASSAI 23\n獺祭 二割三分\nAsahi Shuzo\\-Yamaguchi\n"
        "Junmai Daiginjo\nFruity & Aromatic\nSeafood"
    )


@pytest.fixture
def dassai():
    """Scraped record for Dassai 23 with an external image."""
    return ScrapedSake(
        name="DASSAI 23",
        name_japanese="獺祭 二割三分",
        brewery="Asahi Shuzo",
        prefecture="Yamaguchi",
        type="Junmai Daiginjo",
        taste="Fruity & Aromatic",
        food_pairing=["Seafood"],
        image_url="https://assets-global.website-files.com/uploads/dassai-23.jpg",
    )


@pytest.fixture
def fake_catalog():
    """Empty in-memory catalog."""
    return FakeCatalog()


@pytest.fixture
def make_catalog():
    """Factory for in-memory catalogs."""
    return FakeCatalog


@pytest.fixture
def new_decision():
    """Factory for new-sake decisions."""
    def _make(name, **kwargs):
        return MatchDecision.new(ScrapedSake(name=name, **kwargs))
    return _make

