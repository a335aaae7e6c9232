"""
Schema validation tests for Hizb Tracker.

Tests the Pydantic models and their helpers.
"""

import pytest
from pydantic import ValidationError

from hizbtracker.errors import InvalidRangeError
from hizbtracker.schemas import (
    Ayah,
    MappingDocument,
    MappingShape,
    ProgressSnapshot,
    Surah,
    SurahRange,
    VerseBlock,
    VerseRange,
    default_done,
)


class TestVerseRange:
    """Test "A-B" range parsing."""

    def test_parse_valid(self):
        r = VerseRange.parse("10-20")
        assert (r.from_verse, r.to_verse) == (10, 20)

    def test_parse_single_verse_range(self):
        r = VerseRange.parse("7-7")
        assert r.contains(7)
        assert not r.contains(8)

    def test_parse_strips_whitespace(self):
        assert VerseRange.parse(" 1-74 ").to_verse == 74

    def test_parse_inverted(self):
        with pytest.raises(InvalidRangeError):
            VerseRange.parse("20-10")

    def test_parse_non_numeric(self):
        with pytest.raises(InvalidRangeError):
            VerseRange.parse("a-b")

    def test_parse_missing_dash(self):
        with pytest.raises(InvalidRangeError):
            VerseRange.parse("12")

    def test_parse_zero(self):
        with pytest.raises(InvalidRangeError):
            VerseRange.parse("0-5")

    @pytest.mark.parametrize("value", ["1_0-2_0", "١-٥", "+1-5", "1-5-7"])
    def test_parse_rejects_loose_number_forms(self, value):
        with pytest.raises(InvalidRangeError):
            VerseRange.parse(value)

    def test_parse_spaces_around_dash(self):
        r = VerseRange.parse(" 1 - 7 ")
        assert (r.from_verse, r.to_verse) == (1, 7)

    def test_direct_construction_checks_order(self):
        with pytest.raises(ValidationError):
            VerseRange(from_verse=5, to_verse=2)

    def test_contains_is_inclusive(self):
        r = VerseRange(from_verse=3, to_verse=5)
        assert [v for v in range(1, 8) if r.contains(v)] == [3, 4, 5]


class TestSurahSchemas:
    """Test surah payload models."""

    def test_surah_from_api_payload(self):
        surah = Surah.model_validate({
            "number": 1,
            "name": "سُورَةُ ٱلْفَاتِحَةِ",
            "englishName": "Al-Faatiha",
            "ayahs": [{"number": 1, "numberInSurah": 1, "text": "بِسْمِ ٱللَّهِ"}],
        })
        assert surah.english_name == "Al-Faatiha"
        assert surah.ayahs[0].number_in_surah == 1

    def test_surah_requires_ayahs(self):
        with pytest.raises(ValidationError):
            Surah.model_validate({"number": 1, "name": "x"})

    def test_display_name_fallbacks(self):
        ayahs = [Ayah(number_in_surah=1, text="t")]
        assert Surah(name="الفاتحة", englishName="Al-Faatiha", ayahs=ayahs).display_name() == "الفاتحة"
        assert Surah(englishName="Al-Faatiha", ayahs=ayahs).display_name() == "Al-Faatiha"
        assert Surah(number=1, ayahs=ayahs).display_name() == "#1"
        assert Surah(ayahs=ayahs).display_name(114) == "#114"

    def test_ayahs_in_range(self):
        surah = Surah(ayahs=[Ayah(number_in_surah=i, text=str(i)) for i in range(1, 8)])
        assert [a.number_in_surah for a in surah.ayahs_in_range(2, 4)] == [2, 3, 4]

    def test_ayahs_in_range_past_end(self):
        surah = Surah(ayahs=[Ayah(number_in_surah=i, text=str(i)) for i in range(1, 8)])
        assert [a.number_in_surah for a in surah.ayahs_in_range(5, 300)] == [5, 6, 7]

    def test_verse_block_defaults(self):
        block = VerseBlock(surah_number=2, surah_name="البقرة")
        assert block.ayahs == []


class TestMappingSchemas:
    """Test canonical mapping models."""

    def test_surah_range(self):
        pair = SurahRange(surah_number=2, verses=VerseRange.parse("1-74"))
        assert pair.verses.to_verse == 74

    def test_mapping_document(self):
        doc = MappingDocument(shape=MappingShape.KEYED, divisions={1: {"1": "1-7"}})
        assert doc.has_division(1)
        assert not doc.has_division(2)
        assert doc.division_count == 1


class TestProgressSnapshot:
    """Test the persisted progress model."""

    def test_default_is_all_false(self):
        assert ProgressSnapshot().done == [False] * 60
        assert default_done() == [False] * 60

    def test_wrong_length(self):
        with pytest.raises(ValidationError):
            ProgressSnapshot(done=[True] * 59)
        with pytest.raises(ValidationError):
            ProgressSnapshot(done=[True] * 61)

    def test_json_shape(self):
        snapshot = ProgressSnapshot(done=[True] + [False] * 59)
        assert snapshot.model_dump() == {"done": [True] + [False] * 59}
