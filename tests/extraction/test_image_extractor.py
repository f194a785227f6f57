"""Tests for sakescan/extraction/image_extractor.py"""

from sakescan.extraction import PositionalImageAssigner, extract_product_image_urls
from sakescan.models import ScrapedSake


class TestExtractProductImageUrls:
    def test_fixture_page(self, catalog_html):
        assert extract_product_image_urls(catalog_html) == [
            "https://assets-global.website-files.com/uploads/6512/dassai-45.jpg",
            "https://assets-global.website-files.com/uploads/6512/kokuryu.webp?w=800",
            "https://images.sakurasaketen.com/cdn/nabeshima.png",
        ]

    def test_excludes_chrome_images(self):
        html = (
            '<img src="https://site.com/uploads/logo.png">'
            '<img src="https://site.com/uploads/icon-menu.png">'
            '<img src="https://site.com/uploads/close.png">'
        )
        assert extract_product_image_urls(html) == []

    def test_requires_upload_or_cdn_path(self):
        assert extract_product_image_urls('<img src="https://site.com/static/a.jpg">') == []

    def test_requires_https(self):
        assert extract_product_image_urls('<img src="http://site.com/uploads/a.jpg">') == []

    def test_unsupported_extension(self):
        assert extract_product_image_urls('<img src="https://site.com/uploads/a.gif">') == []

    def test_uppercase_extension(self):
        html = '<img src="https://site.com/uploads/A.JPG">'
        assert extract_product_image_urls(html) == ["https://site.com/uploads/A.JPG"]

    def test_empty(self):
        assert extract_product_image_urls("") == []
        assert extract_product_image_urls(None) == []


class TestPositionalImageAssigner:
    def test_more_records_than_images(self):
        sakes = [ScrapedSake(name="A"), ScrapedSake(name="B"), ScrapedSake(name="C")]
        PositionalImageAssigner().assign(sakes, ["https://x/uploads/1.jpg"])

        assert sakes[0].image_url == "https://x/uploads/1.jpg"
        assert sakes[1].image_url is None
        assert sakes[2].image_url is None

    def test_more_images_than_records(self):
        sakes = [ScrapedSake(name="A")]
        result = PositionalImageAssigner().assign(sakes, ["u1", "u2"])
        assert result is sakes
        assert sakes[0].image_url == "u1"

    def test_no_images_keeps_existing(self):
        sakes = [ScrapedSake(name="A", image_url="kept")]
        PositionalImageAssigner().assign(sakes, [])
        assert sakes[0].image_url == "kept"
