"""
Mapping builder - Turn API hizb-quarter payloads into hizb.json records.

The remote API serves 240 hizb quarters; hizb n is quarters 4n-3 .. 4n.
Records are written in the keyed shape understood by the loader.
"""

from typing import Iterable

QUARTERS_PER_DIVISION = 4


def quarters_for_division(division: int) -> list[int]:
    """Hizb quarter numbers making up a division."""
    first = (division - 1) * QUARTERS_PER_DIVISION + 1
    return list(range(first, first + QUARTERS_PER_DIVISION))


def _ayah_position(ayah: dict) -> tuple[int, int]:
    surah = ayah["surah"]
    surah_number = surah["number"] if isinstance(surah, dict) else int(surah)
    return surah_number, int(ayah["numberInSurah"])


def merge_ayahs_to_mapping(ayahs: Iterable[dict]) -> dict[str, str]:
    """
    Collapse API ayah records into {surah: "first-last"}.

    Surahs come out in ascending order; within a surah the smallest and
    largest positions seen become the range bounds.
    """
    bounds: dict[int, list[int]] = {}
    for ayah in ayahs:
        surah_number, verse = _ayah_position(ayah)
        if surah_number not in bounds:
            bounds[surah_number] = [verse, verse]
        else:
            lo, hi = bounds[surah_number]
            bounds[surah_number] = [min(lo, verse), max(hi, verse)]

    return {
        str(surah_number): f"{lo}-{hi}"
        for surah_number, (lo, hi) in sorted(bounds.items())
    }


def build_division_record(division: int, ayahs: list[dict]) -> dict:
    """Full hizb.json record for one division."""
    if not ayahs:
        raise ValueError(f"No ayahs for hizb {division}")
    positions = sorted(_ayah_position(a) for a in ayahs)
    first, last = positions[0], positions[-1]
    return {
        "hizb_number": division,
        "verses_count": len(set(positions)),
        "first_verse_key": f"{first[0]}:{first[1]}",
        "last_verse_key": f"{last[0]}:{last[1]}",
        "verse_mapping": merge_ayahs_to_mapping(ayahs),
    }
