"""
End-to-end tests for page extraction on a small, hand-written department page
that follows the printable ExploreCourses markup.
"""

import tempfile
import unittest
from pathlib import Path

from explorecourses.parse import extract_all, extract_sections, parse_all, parse_files, raw_files

PAGE = """
<html><body>
<div id="printSearchResults">
  <div class="searchResult">
    <div class="courseInfo">
      <h2>
        <span class="courseNumber">CS 106A:</span>
        <span class="courseTitle">Programming Methodology</span>
      </h2>
      <div class="courseDescription">Introduction to programming.</div>
    </div>
    <div class="sectionInfo">
      <div class="sectionContainer">
        <h3 class="sectionContainerTerm">2022-2023 Autumn</h3>
        <ul>
          <li class="sectionDetails">CS106A | 5 units | Class # 12345 | Section 01 | Grading: Letter or Credit/No Credit | LEC | 09/20/2022 - 12/02/2022 Mon, Wed, Fri 1:30 PM - 2:20 PM at Building 100 with <a href="#">Smith, J.</a> | Instructors: <a href="#">Smith, J.</a></li>
        </ul>
      </div>
    </div>
  </div>
</div>
</body></html>
"""

MULTI_TERM_PAGE = """
<div class="searchResult">
  <div class="courseInfo">
    <span class="courseNumber">MKTG 355:</span>
    <span class="courseTitle">Graduate TGR Dissertation for Marketing Students</span>
  </div>
  <div class="sectionContainer">
    <h3 class="sectionContainerTerm">2012-2013 Autumn</h3>
    <ul>
      <li class="sectionDetails">MKTG 355 | 0 units | Class # 1 | Section 01 | Grading: Satisfactory/No Credit | INS | Instructors: Admati, A. (PI)</li>
      <li class="sectionDetails">MKTG 355 | 0 units | Class # 2 | Section 02 | Grading: Satisfactory/No Credit | INS | Instructors: Doe, J. (PI)</li>
    </ul>
  </div>
  <div class="sectionContainer">
    <h3 class="sectionContainerTerm">2012-2013 Intersession</h3>
    <ul>
      <li class="sectionDetails">MKTG 355 | Class # 3 | Section 01</li>
    </ul>
  </div>
</div>
<div class="searchResult">
  <div class="courseInfo">
    <span class="courseNumber">MKTG 999:</span>
    <span class="courseTitle">Not Offered</span>
  </div>
</div>
"""


class TestExtractSections(unittest.TestCase):
    def test_single_course_end_to_end(self) -> None:
        records = extract_sections(PAGE)
        self.assertEqual(len(records), 1)

        rec = records[0]
        self.assertEqual(rec.course.code, "CS 106A")
        self.assertEqual(rec.course.title, "Programming Methodology")
        self.assertEqual(rec.course.parsed_semester, "Autumn")
        self.assertEqual(rec.course.semester, "F")
        self.assertEqual(rec.class_id, "12345")
        self.assertEqual(rec.section_number, "01")
        self.assertEqual(rec.kind, "LEC")
        self.assertEqual(
            dict(rec.days),
            {"m": True, "t": False, "w": True, "r": False, "f": True, "s": False, "n": False},
        )
        self.assertEqual((rec.start.hour, rec.start.minute), (13, 30))
        self.assertEqual((rec.end.hour, rec.end.minute), (14, 20))
        self.assertEqual(rec.location, "Building 100")
        self.assertEqual(rec.instructors, "Smith, J.")
        self.assertEqual(rec.units, "5")

    def test_multiple_terms_and_sections(self) -> None:
        records = extract_sections(MULTI_TERM_PAGE)

        # the block without section containers contributes nothing
        self.assertEqual([r.class_id for r in records], ["1", "2", "3"])
        self.assertTrue(all(r.course.title == "TGR Dissertation" for r in records))
        self.assertTrue(all(r.course.code == "MKTG 355" for r in records))

        self.assertEqual(records[0].course.semester, "F")
        self.assertEqual(records[0].kind, "INS")
        self.assertEqual(records[1].instructors, "Doe, J. (PI)")

        # unknown term keeps the raw token but has no semester code
        self.assertEqual(records[2].course.parsed_semester, "Intersession")
        self.assertEqual(records[2].course.semester, "")
        self.assertEqual(records[2].units, "")
        self.assertEqual(records[2].grading, "")

    def test_page_without_results(self) -> None:
        self.assertEqual(extract_sections("<html><body><p>No results</p></body></html>"), [])
        self.assertEqual(extract_sections(""), [])

    def test_bytes_input(self) -> None:
        self.assertEqual(len(extract_sections(PAGE.encode("utf-8"))), 1)

    def test_non_text_input_raises(self) -> None:
        with self.assertRaises(TypeError):
            extract_sections(None)  # type: ignore[arg-type]

    def test_extract_all_keeps_input_order(self) -> None:
        records = extract_all([MULTI_TERM_PAGE, PAGE])
        self.assertEqual([r.class_id for r in records], ["1", "2", "3", "12345"])


class TestParseFiles(unittest.TestCase):
    def test_parse_all_reads_sorted_html_files(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            raw = Path(d)
            (raw / "course_mktg.html").write_text(MULTI_TERM_PAGE, encoding="utf-8")
            (raw / "course_cs.html").write_text(PAGE, encoding="utf-8")
            (raw / "notes.txt").write_text("ignored", encoding="utf-8")

            records = parse_all(raw)
            self.assertEqual([r.class_id for r in records], ["12345", "1", "2", "3"])

    def test_raw_files_lists_sorted_html_only(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            raw = Path(d)
            (raw / "course_b.html").write_text("", encoding="utf-8")
            (raw / "course_a.html").write_text("", encoding="utf-8")
            (raw / "notes.txt").write_text("", encoding="utf-8")

            self.assertEqual([p.name for p in raw_files(raw)], ["course_a.html", "course_b.html"])

    def test_parse_files_non_utf8_page(self) -> None:
        page = PAGE.replace("Programming Methodology", "Programmation en Fran\u00e7ais")
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "course_fren.html"
            p.write_bytes(page.encode("latin-1"))

            records = parse_files([p])

        self.assertEqual([r.class_id for r in records], ["12345"])
        self.assertEqual(records[0].course.code, "CS 106A")

    def test_parse_files_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(OSError):
                parse_files([Path(d) / "missing.html"])


if __name__ == "__main__":
    unittest.main()
