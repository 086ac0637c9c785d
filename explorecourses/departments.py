"""
Department discovery.

The catalog root page links to every department as "Department Name (SHORT)"
inside unordered lists. The short codes are what the department URL template needs.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Tuple
from urllib.parse import urlencode

from bs4 import BeautifulSoup, NavigableString

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

ROOT_URL = "http://explorecourses.stanford.edu/"
PRINT_URL = ROOT_URL + "print"

DEFAULT_TERMS = ("Spring", "Winter", "Autumn")

_SHORT_RE = re.compile(r"\((.+)\)")


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def _first_text(anchor) -> str:
    """
    Text of the anchor's first child node ("" for an empty anchor).
    """
    first = next(iter(anchor.children), None)
    if first is None:
        return ""
    if isinstance(first, NavigableString):
        return str(first)
    return first.get_text()


def list_departments(html: str | bytes) -> List[str]:
    """
    Extract department short codes from the catalog root page.

    Anchors that do not follow the "Name (SHORT)" convention, or whose
    parenthesised part is more than one token, are dropped.
    Document order is kept; duplicates are not removed.
    """
    if not isinstance(html, (str, bytes)):
        raise TypeError(f"expected HTML text, got {type(html).__name__}")

    soup = BeautifulSoup(html, "html.parser")

    codes: List[str] = []
    for a in soup.select("ul li a"):
        m = _SHORT_RE.search(_first_text(a))
        candidate = m.group(1) if m else ""

        if not candidate or len(candidate.split()) > 1:
            logger.debug("skipping anchor %r", a.get_text(strip=True))
            continue

        codes.append(candidate)

    return codes


def department_url(
    code: str,
    base_url: str = PRINT_URL,
    terms: Iterable[str] = DEFAULT_TERMS,
) -> str:
    """
    Build the printable listing URL with all courses and sections of one department.

    Example:
        department_url("MKTG")
        -> http://explorecourses.stanford.edu/print?filter-coursestatus-Active=on&...&q=MKTG&...
    """
    code = code.strip()

    params: List[Tuple[str, str]] = [("filter-coursestatus-Active", "on")]
    for term in terms:
        params.append((f"filter-term-{term}", "on"))

    # The site itself emits the catalognumber filter twice
    params.append((f"filter-catalognumber-{code}", "on"))
    params.append((f"filter-catalognumber-{code}", "on"))

    params.append(("q", code))
    params.append(("descriptions", "on"))
    params.append(("schedules", "on"))

    return f"{base_url}?{urlencode(params)}"
