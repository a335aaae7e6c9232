"""
Surah schemas for Hizb Tracker.

Mirrors the payload of the remote text API (alquran.cloud): field names
use the API's camelCase through aliases.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Ayah(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    number_in_surah: int = Field(..., alias="numberInSurah")
    text: str


class Surah(BaseModel):
    """A surah as returned by the API; only the fields we read are kept."""
    model_config = ConfigDict(populate_by_name=True)

    number: Optional[int] = None
    name: Optional[str] = None                                   # Arabic name
    english_name: Optional[str] = Field(default=None, alias="englishName")
    ayahs: list[Ayah]

    def display_name(self, fallback_number: Optional[int] = None) -> str:
        """Arabic name, then English name, then '#<number>'."""
        if self.name:
            return self.name
        if self.english_name:
            return self.english_name
        return f"#{fallback_number if fallback_number is not None else self.number}"

    def ayahs_in_range(self, from_verse: int, to_verse: int) -> list[Ayah]:
        """
        Ayahs whose position lies in [from_verse, to_verse].

        No bounds check against the surah length: a `to_verse` past the
        last ayah just yields fewer ayahs.
        """
        return [a for a in self.ayahs if from_verse <= a.number_in_surah <= to_verse]


class VerseBlock(BaseModel):
    """The ayahs of one surah shown for a division."""
    surah_number: int
    surah_name: str
    ayahs: list[Ayah] = []
