from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional

import requests
from rich.console import Console

from explorecourses.departments import ROOT_URL, department_url, list_departments
from explorecourses.parse import RAW_DIR

logger = logging.getLogger(__name__)

# stdout is reserved for JSON output
console = Console(stderr=True)

REQUEST_TIMEOUT = 30


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def fetch_html(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> str:
    """
    Download one page. HTTP errors are raised (no retries).
    """
    logger.debug("GET %s", url)
    getter = session.get if session is not None else requests.get
    resp = getter(url, timeout=timeout)
    resp.raise_for_status()
    return resp.text


def fetch_departments(
    root_url: str = ROOT_URL,
    session: Optional[requests.Session] = None,
) -> List[str]:
    """
    Load the catalog root page and return the department short codes.
    """
    return list_departments(fetch_html(root_url, session=session))


def raw_file_for(code: str, raw_dir: Path = RAW_DIR) -> Path:
    return Path(raw_dir) / f"course_{code.strip().lower()}.html"


def scrape_departments(
    codes: Iterable[str],
    raw_dir: Path = RAW_DIR,
    refresh: bool = False,
    sleep_seconds: float = 0.2,
    session: Optional[requests.Session] = None,
) -> List[Path]:
    """
    Download the listing page of each department and cache it as HTML.

    Returns the cached file paths in the order of codes.
    """
    raw_path = Path(raw_dir)
    raw_path.mkdir(parents=True, exist_ok=True)

    codes = [c.strip() for c in codes if c.strip()]
    console.print(f"Found {len(codes)} departments")

    files: List[Path] = []
    for code in codes:
        out_file = raw_file_for(code, raw_path)
        files.append(out_file)

        if out_file.exists() and not refresh:
            console.print(f"SKIP  {code}")
            continue

        console.print(f"FETCH {code}")
        html = fetch_html(department_url(code), session=session)
        out_file.write_text(html, encoding="utf-8")

        if sleep_seconds > 0:
            time.sleep(sleep_seconds)

    console.print("Scraping finished.")
    return files
