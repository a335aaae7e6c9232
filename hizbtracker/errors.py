"""
Error types for Hizb Tracker.

Each failure that can reach the reading pane has its own type so the UI
can tell a bad mapping file apart from a network problem.
"""


class HizbError(Exception):
    """Base class for all Hizb Tracker errors."""


class MappingLoadError(HizbError):
    """The mapping document could not be read or has an unknown shape."""

    def __init__(self, path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Cannot load mapping {path}: {message}")


class NoMappingError(HizbError):
    """No verse mapping exists for the requested division."""

    def __init__(self, division: int):
        self.division = division
        super().__init__(f"No verse mapping for hizb {division}")


class InvalidRangeError(HizbError):
    """A verse range or surah key in the mapping is malformed."""

    def __init__(self, value, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid verse range {value!r}: {reason}")


class FetchError(HizbError):
    """Fetching a surah from the remote API failed."""

    def __init__(self, surah_number: int, message: str):
        self.surah_number = surah_number
        self.message = message
        super().__init__(f"API error for surah {surah_number}: {message}")
