#!/usr/bin/env python3
"""
build_hizb_mapping.py - Generate data/hizb.json from the alquran.cloud API.

Fetches the 240 hizb quarters, groups them four by four into the 60 hizbs,
and writes one record per hizb:

    {"1": {"hizb_number": 1, "verses_count": ..., "first_verse_key": "1:1",
           "last_verse_key": "2:74", "verse_mapping": {"1": "1-7", "2": "1-74"}}, ...}

Usage:
  python scripts/build_hizb_mapping.py
  python scripts/build_hizb_mapping.py --output data/hizb.json --sleep 0.5
  python scripts/build_hizb_mapping.py --hizbs 1 2 3     # Partial build for testing
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from hizbtracker.config import TOTAL_DIVISIONS, USER_AGENT, load_settings
from hizbtracker.reader import build_division_record, quarters_for_division

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

DEFAULT_SLEEP = 0.3  # seconds between requests


def fetch_quarter(api_base: str, edition: str, quarter: int, timeout: float, sleep: float) -> list[dict]:
    """
    Fetch the ayahs of one hizb quarter.

    Raises:
        URLError, HTTPError: If the request fails
        ValueError: If the response has no ayah list
    """
    url = f"{api_base}/hizbQuarter/{quarter}/{edition}"
    req = Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urlopen(req, timeout=timeout) as response:
            payload = json.loads(response.read())
        time.sleep(sleep)  # Rate limit
    except (URLError, HTTPError) as e:
        logger.warning(f"Failed to fetch {url}: {e}")
        raise

    ayahs = (payload.get("data") or {}).get("ayahs")
    if not isinstance(ayahs, list):
        raise ValueError(f"No ayahs in response for hizb quarter {quarter}")
    return ayahs


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Build the hizb -> verse range mapping file",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=PROJECT_ROOT / settings.mapping_path,
        help="Output JSON path (default: HIZB_MAPPING_PATH or data/hizb.json)"
    )
    parser.add_argument(
        "--hizbs",
        type=int,
        nargs="+",
        default=list(range(1, TOTAL_DIVISIONS + 1)),
        help="Hizb numbers to build (default: all 60)"
    )
    parser.add_argument(
        "--sleep",
        type=float,
        default=DEFAULT_SLEEP,
        help="Seconds to wait between requests"
    )

    args = parser.parse_args()

    invalid = [n for n in args.hizbs if not 1 <= n <= TOTAL_DIVISIONS]
    if invalid:
        parser.error(f"Hizb numbers must be between 1 and {TOTAL_DIVISIONS}: {invalid}")

    document = {}
    for n in sorted(set(args.hizbs)):
        ayahs = []
        for quarter in quarters_for_division(n):
            ayahs.extend(fetch_quarter(
                settings.api_base, settings.edition, quarter,
                settings.request_timeout, args.sleep,
            ))
        record = build_division_record(n, ayahs)
        document[str(n)] = record
        logger.info(f"Hizb {n}: {record['first_verse_key']} -> {record['last_verse_key']}"
                    f" ({record['verses_count']} verses)")

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(document, f, ensure_ascii=False, indent=2)

    logger.info(f"Wrote {len(document)} hizbs to {args.output}")


if __name__ == "__main__":
    main()
