"""
Parsing (HTML -> structured records).

- Takes one department listing page (the printable ExploreCourses view)
- Walks each course block (div.searchResult) and each term (div.sectionContainer)
- Turns EACH li.sectionDetails item into exactly ONE SectionRecord

Page structure:

    div.searchResult
      div.courseInfo
        span.courseNumber   -> "CS 106A:"
        span.courseTitle    -> "Programming Methodology"
      div.sectionInfo
        div.sectionContainer            (one per term)
          h3.sectionContainerTerm       -> "2022-2023 Autumn"
          ul
            li.sectionDetails           -> pipe separated text, see below

    CS106A | 5 units | Class # 12345 | Section 01 | Grading: Letter | LEC |
    09/20/2022 - 12/02/2022 Mon, Wed, Fri 1:30 PM - 2:20 PM at Building 100
    with Smith, J. | Instructors: Smith, J.

Important rules:
- The section text is irregular, so every field is searched independently
  in the flattened text. A field that is not found becomes "" / False / 0.
- A missing field never drops the record.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from bs4 import BeautifulSoup

from explorecourses.model import DAY_CODES, ClockTime, CourseRef, SectionRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
RAW_DIR = PACKAGE_DIR / "data" / "raw"


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_TIME = r"(\d{1,2}):(\d{1,2})\s(\w{2})"
_DATE = r"\d{2}/\d{2}/\d{4}"

UNITS_RE = re.compile(r"(\d+) units")
CLASS_RE = re.compile(r"Class # (\d+)")
SECTION_RE = re.compile(r"Section (\d+)")
GRADING_KIND_RE = re.compile(r"Grading:\s(.*?)\s\|\s(.*?)\s\|")
GRADING_RE = re.compile(r"Grading:\s(.*?)(?:\s\||$)")
TIME_RANGE_RE = re.compile(_TIME + " - " + _TIME)
DAYS_RE = re.compile(_DATE + " - " + _DATE + r"(.*?)" + _TIME)
LOCATION_RE = re.compile(_TIME + r"\sat\s(.*?)\swith")
INSTRUCTORS_RE = re.compile(r"Instructors:(.*)$")
TERM_RE = re.compile(r".+\s(\w+)")

# Long generated titles that differ per offering, collapsed into one label.
# Checked in this order.
CANONICAL_TITLES = (
    "PhD Directed Reading",
    "TGR Dissertation",
    "PhD Dissertation Research",
)

TERM_TO_SEMESTER = {
    "Autumn": "F",
    "Winter": "W",
    "Spring": "S",
    "Summer": "E",
}

DAY_ABBREVIATIONS = {
    "m": "Mon",
    "t": "Tue",
    "w": "Wed",
    "r": "Thu",
    "f": "Fri",
    "s": "Sat",
    "n": "Sun",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _group(m: Optional[re.Match], index: int = 1) -> str:
    if m is None:
        return ""
    value = m.group(index)
    return value.strip() if value else ""


def _to_int(value: str) -> int:
    value = (value or "").strip()
    return int(value) if value.isdigit() else 0


def to_24h(hour: str, meridiem: str) -> int:
    """
    Convert a 12-hour clock hour to 24-hour.

    PM hours below 12 get +12. AM hours are returned unchanged,
    which means "12 AM" stays 12.
    """
    h = _to_int(hour)
    if "PM" in (meridiem or "") and h < 12:
        h += 12
    return h


def make_days(text: str) -> Dict[str, bool]:
    """
    Day flags from a day range like "Mon, Wed, Fri" (plain substring match).
    """
    text = text or ""
    return {code: DAY_ABBREVIATIONS[code] in text for code in DAY_CODES}


def term_to_semester(term: str) -> str:
    """
    Map a season name to its one-letter code ("" for anything unknown).
    """
    return TERM_TO_SEMESTER.get((term or "").strip(), "")


def canonical_title(title: str) -> str:
    for canonical in CANONICAL_TITLES:
        if canonical in title:
            return canonical
    return title


def parse_term(label: str) -> str:
    """
    "2012-2013 Autumn" -> "Autumn"
    """
    return _group(TERM_RE.search((label or "").strip()))


# ---------------------------------------------------------------------------
# Section parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_section_details(text: str, course: CourseRef) -> SectionRecord:
    """
    Parses the text of exactly one li.sectionDetails item into exactly one record.
    """

    # The whole item is handled as one line
    info = re.sub(r"[\n\r]", "", text or "")

    # Grading is followed by the section kind (LEC, SEM, DIS, ...).
    # Without a kind segment only grading is kept.
    m = GRADING_KIND_RE.search(info)
    if m:
        grading = _group(m, 1)
        kind = _group(m, 2)
    else:
        grading = _group(GRADING_RE.search(info))
        kind = ""

    time_m = TIME_RANGE_RE.search(info)
    if time_m:
        sh, sm, sp, eh, em, ep = time_m.groups()
    else:
        sh = sm = sp = eh = em = ep = ""

    days_raw = _group(DAYS_RE.search(info))

    return SectionRecord(
        course=course,
        class_id=_group(CLASS_RE.search(info)),
        section_number=_group(SECTION_RE.search(info)),
        grading=grading,
        kind=kind,
        days_raw=days_raw,
        instructors=_group(INSTRUCTORS_RE.search(info)),
        location=_group(LOCATION_RE.search(info), 4),
        units=_group(UNITS_RE.search(info)),
        days=make_days(days_raw),
        start=ClockTime(hour=to_24h(sh, sp), minute=_to_int(sm)),
        end=ClockTime(hour=to_24h(eh, ep), minute=_to_int(em)),
    )


# ---------------------------------------------------------------------------
# Page parsing
# ---------------------------------------------------------------------------


def _course_from_block(block) -> CourseRef:
    """
    Course code and (canonical) title from the div.courseInfo of one course block.
    """
    title = "".join(el.get_text() for el in block.select("div.courseInfo span.courseTitle")).strip()
    code = "".join(el.get_text() for el in block.select("div.courseInfo span.courseNumber"))

    return CourseRef(code=code.replace(":", "", 1).strip(), title=canonical_title(title))


def extract_sections(html: str | bytes) -> List[SectionRecord]:
    """
    Parses a single department page and returns all of its section records,
    in document order.
    """
    if not isinstance(html, (str, bytes)):
        raise TypeError(f"expected HTML text, got {type(html).__name__}")

    soup = BeautifulSoup(html, "html.parser")

    records: List[SectionRecord] = []

    for block in soup.select("div.searchResult"):
        course = _course_from_block(block)
        count = 0

        # One container per term the course is offered in
        for container in block.select("div.sectionContainer"):
            label = "".join(h3.get_text() for h3 in container.select("h3.sectionContainerTerm"))
            term = parse_term(label)

            term_course = CourseRef(
                code=course.code,
                title=course.title,
                parsed_semester=term,
                semester=term_to_semester(term),
            )

            for item in container.select("li.sectionDetails"):
                records.append(parse_section_details(item.get_text(), term_course))
                count += 1

        if count == 0:
            logger.debug("no sections for course block %r", course.code)

    return records


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_all(documents: Iterable[str | bytes]) -> List[SectionRecord]:
    """
    Extracts every document independently and concatenates the results in input order.
    """
    records: List[SectionRecord] = []
    for html in documents:
        records.extend(extract_sections(html))
    return records


def parse_files(paths: Iterable[str | Path]) -> List[SectionRecord]:
    """
    Reads HTML files and extracts all sections.

    Files are read as bytes, BeautifulSoup detects the encoding.
    """
    documents: List[bytes] = []
    for path in paths:
        p = Path(path)
        logger.debug("reading %s", p)
        documents.append(p.read_bytes())
    return extract_all(documents)


def raw_files(raw_dir: Path = RAW_DIR) -> List[Path]:
    """
    Cached department pages in raw_dir, sorted by file name.
    """
    return sorted(Path(raw_dir).resolve().glob("*.html"))


def parse_all(raw_dir: Path = RAW_DIR) -> List[SectionRecord]:
    """
    Parses all cached department pages in raw_dir (sorted by file name).
    """
    return parse_files(raw_files(raw_dir))
