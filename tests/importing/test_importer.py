"""Tests for sakescan/importing/importer.py"""

import re
from unittest.mock import MagicMock

import pytest

from sakescan.catalog import MirroredImage
from sakescan.common.errors import ImageMirrorError
from sakescan.importing import SakeImporter, utc_timestamp
from sakescan.models import MatchDecision, ScrapedSake

NOW = "2025-01-31T12:00:00.000Z"


def matched(name, existing_id, image_url="https://x/uploads/a.jpg"):
    return MatchDecision.matched(ScrapedSake(name=name, image_url=image_url), existing_id, keep_image=True)


@pytest.fixture
def importer(fake_catalog):
    return SakeImporter(fake_catalog, clock=lambda: NOW)


class TestUpdates:
    def test_sets_label_image_and_timestamp(self, importer, fake_catalog):
        result = importer.apply([matched("Dassai 23", "e1")], [])

        assert result.updated_count == 1
        assert fake_catalog.updated == [
            ("e1", {"label_image_url": "https://x/uploads/a.jpg", "updated_at": NOW}),
        ]

    def test_skips_updates_without_image(self, importer, fake_catalog):
        result = importer.apply([matched("Dassai 23", "e1", image_url=None)], [])

        assert result.updated_count == 0
        assert result.errors == []
        assert fake_catalog.updated == []

    def test_failed_update_recorded(self, make_catalog):
        catalog = make_catalog(fail_on={"e2"})
        result = SakeImporter(catalog, clock=lambda: NOW).apply(
            [matched("Dassai 23", "e1"), matched("Kubota", "e2")], [])

        assert result.updated_count == 1
        assert result.errors == ["Failed to update Kubota: row not found"]


class TestInserts:
    def test_inserts_full_row(self, importer, fake_catalog, new_decision):
        result = importer.apply([], [new_decision("DASSAI 23", prefecture="Yamaguchi",
                                                  image_url="https://x/uploads/d.jpg")])

        assert result.inserted_count == 1
        [row] = fake_catalog.inserted
        assert row.name == "DASSAI 23"
        assert row.brewery == "Unknown"
        assert row.prefecture == "Yamaguchi"
        assert row.label_image_url == "https://x/uploads/d.jpg"
        assert row.total_ratings == 0

    def test_partial_failure_keeps_other_rows(self, make_catalog, new_decision):
        catalog = make_catalog(fail_on={"KUBOTA SENJU"})
        new_sakes = [new_decision("DASSAI 23"), new_decision("KUBOTA SENJU"), new_decision("KOKURYU")]

        result = SakeImporter(catalog).apply([], new_sakes)

        assert result.inserted_count == 2
        assert len(result.errors) == 1
        assert "KUBOTA SENJU" in result.errors[0]
        assert result.errors[0].startswith("Failed to insert KUBOTA SENJU: duplicate key")
        assert [row.name for row in catalog.inserted] == ["DASSAI 23", "KOKURYU"]
        assert result.to_dict()["success"] is True

    def test_updates_applied_before_inserts(self, importer, fake_catalog, new_decision):
        result = importer.apply([matched("Dassai 23", "e1")], [new_decision("KOKURYU")])
        assert result.updated_count == 1
        assert result.inserted_count == 1

    def test_empty_batch(self, importer):
        result = importer.apply([], [])
        assert result.to_dict() == {"success": True, "updatedCount": 0, "insertedCount": 0}


class TestImageMirroring:
    def test_mirrored_url_written(self, fake_catalog, new_decision):
        mirror = MagicMock()
        mirror.mirror.return_value = MirroredImage(url="https://abc.supabase.co/m.jpg",
                                                   original_url="https://x/uploads/d.jpg")
        importer = SakeImporter(fake_catalog, image_mirror=mirror)

        importer.apply([], [new_decision("DASSAI 23", image_url="https://x/uploads/d.jpg")])

        mirror.mirror.assert_called_once_with("https://x/uploads/d.jpg", sake_name="DASSAI 23")
        assert fake_catalog.inserted[0].label_image_url == "https://abc.supabase.co/m.jpg"

    def test_no_image_skips_mirror(self, fake_catalog, new_decision):
        mirror = MagicMock()
        SakeImporter(fake_catalog, image_mirror=mirror).apply([], [new_decision("DASSAI 23")])
        mirror.mirror.assert_not_called()
        assert fake_catalog.inserted[0].label_image_url is None

    def test_mirror_failure_is_item_error(self, fake_catalog, new_decision):
        mirror = MagicMock()
        mirror.mirror.side_effect = ImageMirrorError("Failed to download image: 404")
        importer = SakeImporter(fake_catalog, image_mirror=mirror, clock=lambda: NOW)

        result = importer.apply([matched("Dassai 23", "e1")],
                                [new_decision("KOKURYU", image_url="https://x/uploads/k.jpg"),
                                 new_decision("NABESHIMA")])

        assert result.updated_count == 0
        assert result.inserted_count == 1
        assert result.errors == [
            "Failed to mirror image for Dassai 23: Failed to download image: 404",
            "Failed to mirror image for KOKURYU: Failed to download image: 404",
        ]


def test_utc_timestamp_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())
