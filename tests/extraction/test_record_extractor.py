"""Tests for sakescan/extraction/record_extractor.py"""

import pytest

from sakescan.extraction import SakeRecordExtractor


@pytest.fixture
def extractor(vocabulary):
    return SakeRecordExtractor(vocabulary=vocabulary)


class TestExtractBlock:
    def test_single_card(self, extractor, dassai_block):
        sake = extractor.extract_block(dassai_block)

        assert sake.name == "DASSAI 23"
        assert sake.name_japanese == "獺祭 二割三分"
        assert sake.brewery == "Asahi Shuzo"
        assert sake.prefecture == "Yamaguchi"
        assert sake.type == "Junmai Daiginjo"
        assert sake.taste == "Fruity & Aromatic"
        assert sake.food_pairing == ["Seafood"]
        assert sake.image_url is None

    def test_short_block_skipped(self, extractor):
        assert extractor.extract_block("Modern-Light\nA") is None

    def test_block_without_name(self, extractor):
        block = "Classic-Full\nJunmai\nBold & Aged\nMeaty Food"
        assert extractor.extract_block(block) is None

    def test_japanese_name_used_when_no_english(self, extractor):
        block = "Classic-Rich\n十四代 本丸\nTakagi Shuzo\\-Yamagata\nHonjozo"
        sake = extractor.extract_block(block)
        assert sake.name == "十四代 本丸"
        assert sake.name_japanese == "十四代 本丸"
        assert sake.brewery == "Takagi Shuzo"
        assert sake.type == "Honjozo"

    def test_first_english_name_wins(self, extractor):
        block = "Modern-Light\nKUBOTA SENJU\nKUBOTA MANJU\nAsahi Shuzo\\-Niigata"
        assert extractor.extract_block(block).name == "KUBOTA SENJU"

    def test_first_brewery_line_wins(self, extractor):
        block = (
            "Modern-Light\nKUBOTA SENJU\nAsahi Shuzo\\-Niigata\n"
            "Other Brewery\\-Tokyo\nGinjo"
        )
        sake = extractor.extract_block(block)
        assert sake.brewery == "Asahi Shuzo"
        assert sake.prefecture == "Niigata"
        # the second brewery line is consumed, not read as a name
        assert sake.name == "KUBOTA SENJU"

    def test_unescaped_hyphen(self, extractor):
        block = "Modern-Light\nKUBOTA SENJU\nAsahi Shuzo - Niigata"
        sake = extractor.extract_block(block)
        assert sake.brewery == "Asahi Shuzo"
        assert sake.prefecture == "Niigata"

    def test_grade_prefers_longest_listed_phrase(self, extractor):
        block = "Modern-Light\nKUBOTA SENJU\nJunmai Ginjo\nLight & Dry"
        assert extractor.extract_block(block).type == "Junmai Ginjo"

    def test_no_keywords(self, extractor):
        block = "Modern-Light\nKUBOTA SENJU\nAsahi Shuzo\\-Niigata"
        sake = extractor.extract_block(block)
        assert sake.type is None
        assert sake.taste is None
        assert sake.food_pairing == []


class TestExtract:
    def test_empty_input(self, extractor):
        assert extractor.extract("") == []
        assert extractor.extract(None) == []

    def test_no_lead_in_labels(self, extractor):
        assert extractor.extract("Search results: 0 sake\n\n0 items found.") == []

    def test_fixture_page(self, extractor, catalog_markdown):
        sakes = extractor.extract(catalog_markdown)

        # header and nameless card yield nothing; duplicates are kept here
        assert [s.name for s in sakes] == [
            "DASSAI 45",
            "KOKURYU ICCHORAI",
            "NABESHIMA Tokubetsu Junmai",
            "DASSAI 45",
        ]

    def test_fixture_page_fields(self, extractor, catalog_markdown):
        dassai, kokuryu, nabeshima, duplicate = extractor.extract(catalog_markdown)

        assert dassai.name_japanese == "獺祭 純米大吟醸 45"
        assert dassai.type == "Junmai Daiginjo"
        assert dassai.food_pairing == ["Seafood", "White Meats and Salty Food"]

        assert kokuryu.brewery == "Kokuryu Sake Brewery"
        assert kokuryu.prefecture == "Fukui"
        assert kokuryu.type == "Ginjo"
        assert kokuryu.taste == "Light & Dry"
        assert kokuryu.food_pairing == ["Seafood", "Meaty Food"]

        assert nabeshima.name_japanese == "鍋島 特別純米"
        assert nabeshima.brewery == "Fukuchiyo Shuzo"
        assert nabeshima.type == "Tokubetsu Junmai"
        assert nabeshima.taste == "Fresh & Vivid"
        assert nabeshima.food_pairing == ["Spicy Food"]

        assert duplicate.brewery == "Another Brewery"
        assert duplicate.prefecture == "Tokyo"

    def test_split_blocks(self, extractor):
        blocks = extractor.split_blocks("intro\nModern-Light\nA\nClassic-Rich\nB")
        assert blocks == ["intro\n", "Modern-Light\nA\n", "Classic-Rich\nB"]

    def test_custom_classifier_chain(self, vocabulary, dassai_block):
        extractor = SakeRecordExtractor(vocabulary=vocabulary, classifiers=[])
        assert extractor.extract_block(dassai_block) is None
