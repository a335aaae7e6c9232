"""
Progress schemas for Hizb Tracker.
"""

from pydantic import BaseModel, Field

from hizbtracker.config import TOTAL_DIVISIONS


def default_done() -> list[bool]:
    return [False] * TOTAL_DIVISIONS


class ProgressSnapshot(BaseModel):
    """Persisted form of the done flags: {"done": [60 booleans]}."""
    done: list[bool] = Field(
        default_factory=default_done,
        min_length=TOTAL_DIVISIONS,
        max_length=TOTAL_DIVISIONS,
    )
