"""
Normalization (section records -> output document).

- Derives the de-duplicated course list from the flat section list
- Wraps both lists into the output envelope:

    {
      "metadata": {"school": {"name": ..., "short": ...}, "system": ""},
      "data": {"courses": [...], "sections": [...]}
    }
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

from explorecourses.model import CourseSummary, School, SectionRecord

DEFAULT_SCHOOL = School(name="Stanford", short="stanford")


def summarize(sections: Iterable[SectionRecord]) -> List[CourseSummary]:
    """
    One CourseSummary per distinct (title, code, semester), first-seen order.
    """
    seen: set[CourseSummary] = set()
    out: List[CourseSummary] = []

    for s in sections:
        code = s.course.code
        title = s.course.title
        summary = CourseSummary(
            title=title,
            code=code,
            semester=s.course.semester,
            augmented=f"{code} {title}",
        )
        if summary in seen:
            continue
        seen.add(summary)
        out.append(summary)

    return out


def build_envelope(
    sections: List[SectionRecord],
    summaries: Optional[List[CourseSummary]] = None,
    school: School = DEFAULT_SCHOOL,
) -> Dict[str, Any]:
    """
    Build the final JSON-ready document.

    If summaries are not given they are derived from sections.
    """
    if summaries is None:
        summaries = summarize(sections)

    return {
        "metadata": {
            "school": school.to_dict(),
            # reserved, always empty for now
            "system": "",
        },
        "data": {
            "courses": [c.to_dict() for c in summaries],
            "sections": [s.to_dict() for s in sections],
        },
    }


def dump_envelope(envelope: Dict[str, Any]) -> str:
    # Key order is the declared order, never sorted
    return json.dumps(envelope, ensure_ascii=False, indent=2)
