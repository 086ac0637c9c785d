"""
CLI (Command Line Interface).

    explorecourses departments [--file root.html]
    explorecourses url <CODE>
    explorecourses fetch [CODE ...] [--refresh] [--sleep 0.2]
    explorecourses build [FILE ...] [--out all.json]

Note:
- build prints the JSON document to stdout unless --out is given
- status messages go to stderr, so stdout can be piped
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import requests
from rich.console import Console

from explorecourses.departments import department_url, list_departments
from explorecourses.model import School
from explorecourses.normalize import DEFAULT_SCHOOL, build_envelope, dump_envelope
from explorecourses.parse import RAW_DIR, parse_all, parse_files, raw_files
from explorecourses.scrape import fetch_departments, scrape_departments

console = Console(stderr=True)


def _cmd_departments(args: argparse.Namespace) -> int:
    """
    Print the department short codes, one per line.
    """
    try:
        if args.file:
            codes = list_departments(Path(args.file).read_text(encoding="utf-8"))
        else:
            codes = fetch_departments()
    except (OSError, requests.RequestException) as exc:
        console.print(f"Could not load departments: {exc}")
        return 1

    for code in codes:
        print(code)
    return 0


def _cmd_url(args: argparse.Namespace) -> int:
    code = (args.code or "").strip()
    if not code:
        console.print("Please provide a department code.")
        return 1

    print(department_url(code))
    return 0


def _cmd_fetch(args: argparse.Namespace) -> int:
    """
    Cache department pages; without codes, all departments from the root page.
    """
    try:
        codes = list(args.codes) if args.codes else fetch_departments()
        scrape_departments(codes, raw_dir=args.raw_dir, refresh=args.refresh, sleep_seconds=args.sleep)
    except (OSError, requests.RequestException) as exc:
        console.print(f"Fetch failed: {exc}")
        return 1
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    """
    Extract all sections from the given files (or the raw dir) and emit the JSON document.
    """
    if not args.files and not raw_files(args.raw_dir):
        console.print(f"No HTML files to build from (raw dir: {Path(args.raw_dir).resolve()})")
        return 1

    try:
        sections = parse_files(args.files) if args.files else parse_all(args.raw_dir)
    except OSError as exc:
        console.print(f"Could not read input: {exc}")
        return 1

    school = School(name=args.school_name, short=args.school_short)
    text = dump_envelope(build_envelope(sections, school=school))

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text + "\n", encoding="utf-8")
        console.print(f"Wrote {len(sections)} sections to: {out}")
    else:
        print(text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="explorecourses", description="ExploreCourses catalog extractor")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_deps = sub.add_parser("departments", help="List department short codes")
    p_deps.add_argument("--file", type=str, default=None, help="Read the root page from a local file")

    p_url = sub.add_parser("url", help="Print the listing URL of a department")
    p_url.add_argument("code", type=str, help="Department code (e.g. MKTG)")

    p_fetch = sub.add_parser("fetch", help="Download and cache department pages")
    p_fetch.add_argument("codes", nargs="*", help="Department codes (default: all)")
    p_fetch.add_argument("--raw-dir", type=Path, default=RAW_DIR)
    p_fetch.add_argument("--refresh", action="store_true", help="Re-fetch and overwrite existing HTML files")
    p_fetch.add_argument("--sleep", type=float, default=0.2, help="Sleep seconds between requests")

    p_build = sub.add_parser("build", help="Extract cached pages into one JSON document")
    p_build.add_argument("files", nargs="*", help="HTML files (default: all files in --raw-dir)")
    p_build.add_argument("--raw-dir", type=Path, default=RAW_DIR)
    p_build.add_argument("--out", type=str, default=None, help="Write JSON to this file instead of stdout")
    p_build.add_argument("--school-name", type=str, default=DEFAULT_SCHOOL.name)
    p_build.add_argument("--school-short", type=str, default=DEFAULT_SCHOOL.short)

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "departments":
        raise SystemExit(_cmd_departments(args))
    if args.command == "url":
        raise SystemExit(_cmd_url(args))
    if args.command == "fetch":
        raise SystemExit(_cmd_fetch(args))
    if args.command == "build":
        raise SystemExit(_cmd_build(args))

    raise SystemExit(2)
