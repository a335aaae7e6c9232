"""
Mapping builder tests: hizb quarters -> hizb.json records.
"""

import pytest

from hizbtracker.reader import (
    build_division_record,
    merge_ayahs_to_mapping,
    parse_mapping_document,
    quarters_for_division,
    resolve,
)


def api_ayah(surah: int, verse: int) -> dict:
    return {"number": 0, "numberInSurah": verse, "text": "", "surah": {"number": surah}}


class TestQuarters:

    def test_first_and_last(self):
        assert quarters_for_division(1) == [1, 2, 3, 4]
        assert quarters_for_division(60) == [237, 238, 239, 240]


class TestMerge:

    def test_spans_two_surahs(self):
        ayahs = [api_ayah(1, v) for v in range(1, 8)] + [api_ayah(2, v) for v in range(1, 75)]
        assert merge_ayahs_to_mapping(ayahs) == {"1": "1-7", "2": "1-74"}

    def test_unordered_input(self):
        ayahs = [api_ayah(3, 5), api_ayah(2, 200), api_ayah(3, 1), api_ayah(2, 150)]
        assert list(merge_ayahs_to_mapping(ayahs).items()) == [("2", "150-200"), ("3", "1-5")]

    def test_plain_surah_number(self):
        assert merge_ayahs_to_mapping([{"surah": 4, "numberInSurah": 3}]) == {"4": "3-3"}


class TestBuildRecord:

    def test_record_fields(self):
        ayahs = [api_ayah(1, v) for v in range(1, 8)] + [api_ayah(2, v) for v in range(1, 75)]
        record = build_division_record(1, ayahs)
        assert record["hizb_number"] == 1
        assert record["verses_count"] == 81
        assert record["first_verse_key"] == "1:1"
        assert record["last_verse_key"] == "2:74"

    def test_record_resolves(self):
        ayahs = [api_ayah(2, v) for v in range(75, 142)]
        doc = parse_mapping_document({"2": build_division_record(2, ayahs)})
        ranges = resolve(doc, 2)
        assert [(r.surah_number, r.verses.from_verse, r.verses.to_verse) for r in ranges] == [(2, 75, 141)]

    def test_empty(self):
        with pytest.raises(ValueError):
            build_division_record(1, [])
