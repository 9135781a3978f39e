from __future__ import annotations

from typing import Callable, Tuple

from .errors import UnrecognizedFormatError

ANSWER_KEY = "answer_key"
MULTI_PAGE = "multi_page"


def is_answer_key(html: str) -> bool:
    return "question-pnl" in html or "AssessmentQPHTMLMode1" in html


def is_multi_page(html: str) -> bool:
    return "Q.No:" in html


# Checked in order; the first match wins.
DETECTORS: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    (ANSWER_KEY, is_answer_key),
    (MULTI_PAGE, is_multi_page),
)


def detect_format(html: str) -> str:
    for name, predicate in DETECTORS:
        if predicate(html or ""):
            return name
    raise UnrecognizedFormatError(
        "Unrecognized response sheet format: no question panels or Q.No tables found."
    )
