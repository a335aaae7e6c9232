"""
Configuration for Hizb Tracker.

Fixed constants plus a small set of settings that can be overridden from
the environment (or a project-level .env file).
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent

TOTAL_DIVISIONS = 60
PROGRESS_KEY = "hizb_done_v1"

DEFAULT_API_BASE = "https://api.alquran.cloud/v1"
DEFAULT_EDITION = "quran-uthmani"
DEFAULT_MAPPING_PATH = Path("data/hizb.json")
DEFAULT_PROGRESS_DIR = Path.home() / ".hizbtracker"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"
DEFAULT_REQUEST_TIMEOUT = 30.0

USER_AGENT = "HizbTracker/0.1 (Hizb reading tracker)"


@dataclass
class Settings:
    """Runtime settings resolved from the environment."""
    mapping_path: Path = DEFAULT_MAPPING_PATH
    api_base: str = DEFAULT_API_BASE
    edition: str = DEFAULT_EDITION
    progress_db: Path = DEFAULT_PROGRESS_DB
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def load_settings(env_file: Path | None = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        env_file: Optional .env file to load first (default: PROJECT_ROOT/.env)

    Returns:
        Settings with defaults for anything not set
    """
    load_dotenv(env_file or PROJECT_ROOT / ".env")

    timeout = os.getenv("HIZB_REQUEST_TIMEOUT")
    return Settings(
        mapping_path=Path(os.getenv("HIZB_MAPPING_PATH", str(DEFAULT_MAPPING_PATH))),
        api_base=os.getenv("HIZB_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        edition=os.getenv("HIZB_EDITION", DEFAULT_EDITION),
        progress_db=Path(os.getenv("HIZB_PROGRESS_DB", str(DEFAULT_PROGRESS_DB))).expanduser(),
        request_timeout=float(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT,
    )
