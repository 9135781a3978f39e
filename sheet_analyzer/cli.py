#!/usr/bin/env python3
"""
Response sheet analyzer, command-line entry point.

Single-page answer-key sheets:
    sheet-analyzer --exam-type RRB_NTPC_CBT1 --response-html sheet.html

Multi-page sheets, one saved page per part:
    sheet-analyzer --exam-type SSC_CGL_PRE --response-html A=part_a.html --response-html B=part_b.html ...
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Tuple

from .analyzer import analyze_html, analyze_pages
from .errors import SheetAnalysisError
from .exams import EXAM_CONFIGS, get_exam_config
from .models import AnalysisResult
from .multipage import PartPage
from .settings import configure_logging, default_exam, default_language, load_env


def read_html(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return f.read()


def _split_page_arg(value: str) -> Tuple[str, str]:
    part, sep, path = value.partition("=")
    if sep and len(part.strip()) == 1 and part.strip().isalpha():
        return part.strip().upper(), path
    return "", value


def print_report(result: AnalysisResult) -> None:
    candidate = result.candidate
    print("=" * 100)
    print(f"{result.exam_config.name.upper()} RESPONSE SHEET ANALYSIS")
    print(f"Candidate: {candidate.name or '--'}  Roll No: {candidate.roll_number or '--'}")
    print(f"Test Date: {candidate.test_date or '--'}  Shift: {candidate.shift or '--'}")
    print("=" * 100)
    print(f"{'Q#':<5} {'Part':<5} {'Chosen':<7} {'Key':<7} {'Earned':<8} Status")
    print("-" * 100)

    for q in result.questions:
        chosen = ",".join(o.id for o in q.options if o.is_selected) or "--"
        key = ",".join(o.id for o in q.options if o.is_correct) or "--"
        print(f"{q.question_number:<5} {q.part:<5} {chosen:<7} {key:<7} {q.marks_awarded:+7.2f}  {q.status.upper()}")

    print()
    print("=" * 100)
    print("SUMMARY")
    print("=" * 100)
    for s in result.sections:
        label = f"{s.part}. {s.subject}"
        suffix = "  (qualifying)" if s.is_qualifying else ""
        print(f"{label:<48} {s.score:+8.2f} / {s.max_marks:.2f}{suffix}")
    print(f"{'TOTAL':<48} {result.total_score:+8.2f} / {result.max_score:.2f}")
    print()
    print(f"Correct:     {result.correct_count}")
    print(f"Wrong:       {result.wrong_count}")
    print(f"Unanswered:  {result.unattempted_count}")
    print(f"Bonus:       {result.bonus_count}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score an exam response sheet saved as HTML")
    parser.add_argument(
        "--response-html",
        action="append",
        default=[],
        help="Path to a response sheet HTML file; use PART=PATH once per page for multi-page sheets",
    )
    parser.add_argument("--exam-type", default=None, help="Exam configuration id, e.g. SSC_CGL_PRE")
    parser.add_argument("--base-url", default="", help="URL the sheet was saved from, for resolving image paths")
    parser.add_argument("--language", default=None, choices=["hindi", "english"])
    parser.add_argument("--json", action="store_true", help="Print the analysis as JSON")
    parser.add_argument("--list-exams", action="store_true", help="List the known exam configurations")
    parser.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG")
    return parser


def run(args: argparse.Namespace) -> AnalysisResult:
    exam_config = get_exam_config(args.exam_type or default_exam())
    language = args.language or default_language()

    pages: List[Tuple[str, str]] = [_split_page_arg(v) for v in args.response_html]
    if not pages:
        raise SheetAnalysisError("At least one --response-html file is required.")

    if len(pages) == 1 and not pages[0][0]:
        return analyze_html(read_html(pages[0][1]), args.base_url, exam_config, language)

    part_pages: List[PartPage] = []
    for idx, (part, path) in enumerate(pages):
        if not part:
            if idx >= len(exam_config.subjects):
                raise SheetAnalysisError(f"More pages than subjects in {exam_config.id}.")
            part = exam_config.subjects[idx].part
        part_pages.append(PartPage(part, read_html(path), args.base_url))
    return analyze_pages(part_pages, exam_config, language)


def main(argv: List[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    load_env()
    configure_logging(args.log_level)

    if args.list_exams:
        for config in EXAM_CONFIGS.values():
            print(f"{config.id:<30} {config.name}")
        return

    try:
        result = run(args)
    except (SheetAnalysisError, OSError) as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(result)


if __name__ == "__main__":
    main()
