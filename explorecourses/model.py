"""
Central data model definitions used across the project.

This module defines the canonical structure of course and section records so that:
- the extractor and the normalizer share the same field names
- the JSON output always has the complete shape (no nulls, no missing keys)

All records are frozen: they are created once during extraction and never changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping

# Day codes in output order: Monday .. Sunday
DAY_CODES = ("m", "t", "w", "r", "f", "s", "n")


def empty_days() -> Dict[str, bool]:
    return {code: False for code in DAY_CODES}


@dataclass(frozen=True)
class School:
    name: str
    short: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "short": self.short}


@dataclass(frozen=True)
class CourseRef:
    """
    Identifies one course within a term, as embedded in every section record.
    """

    code: str
    title: str
    parsed_semester: str = ""
    semester: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": {"full": self.code},
            "title": self.title,
            "parsedSemester": self.parsed_semester,
            "semester": self.semester,
        }


@dataclass(frozen=True)
class ClockTime:
    hour: int = 0
    minute: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"hour": self.hour, "minute": self.minute}


@dataclass(frozen=True)
class SectionRecord:
    """
    Represents one scheduled meeting pattern of a course.

    Each record corresponds to exactly one li.sectionDetails item on a department page.
    """

    course: CourseRef
    class_id: str = ""
    section_number: str = ""
    grading: str = ""
    kind: str = ""
    days_raw: str = ""
    instructors: str = ""
    location: str = ""
    units: str = ""
    days: Mapping[str, bool] = field(default_factory=empty_days, hash=False)
    start: ClockTime = field(default_factory=ClockTime)
    end: ClockTime = field(default_factory=ClockTime)

    def __post_init__(self) -> None:
        # read-only copy over all seven day codes
        days = {code: bool(self.days.get(code, False)) for code in DAY_CODES}
        object.__setattr__(self, "days", MappingProxyType(days))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "course": self.course.to_dict(),
            "classId": self.class_id,
            "sectionNumber": self.section_number,
            "grading": self.grading,
            "kind": self.kind,
            "daysRaw": self.days_raw,
            "extra": {
                "instructors": self.instructors,
                "location": self.location,
                "units": self.units,
            },
            "time": {
                "days": dict(self.days),
                "start": self.start.to_dict(),
                "end": self.end.to_dict(),
            },
        }


@dataclass(frozen=True)
class CourseSummary:
    """
    Course-level record derived from sections.

    Two summaries are the same course only if all four fields match,
    so one course code with different titles across terms gives two entries.
    """

    title: str
    code: str
    semester: str
    augmented: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "code": self.code,
            "augmented": self.augmented,
            "semester": self.semester,
        }
