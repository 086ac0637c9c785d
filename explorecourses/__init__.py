"""
ExploreCourses catalog extractor: department pages (HTML) -> courses and sections (JSON).
"""

from explorecourses.departments import department_url, list_departments
from explorecourses.normalize import build_envelope, summarize
from explorecourses.parse import extract_all, extract_sections

__all__ = [
    "build_envelope",
    "department_url",
    "extract_all",
    "extract_sections",
    "list_departments",
    "summarize",
]
