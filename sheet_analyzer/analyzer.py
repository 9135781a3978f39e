from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from .answer_key import parse_document
from .detect import ANSWER_KEY, MULTI_PAGE, detect_format
from .errors import NoQuestionsParsedError, SheetAnalysisError
from .models import LANGUAGES, AnalysisResult, ExamConfig, ParsedDocument
from .multipage import PartPage, parse_pages
from .scoring import build_result, reassign_by_sequence
from .urls import base_dir_of, part_for_url

logger = logging.getLogger(__name__)


def _check_language(language: str) -> str:
    language = (language or "english").strip().lower()
    if language not in LANGUAGES:
        raise SheetAnalysisError(f"Unsupported language: {language!r}")
    return language


def _finish(
    parsed: ParsedDocument,
    exam_config: ExamConfig,
    language: str,
    source_format: str,
    log: logging.Logger | logging.LoggerAdapter,
) -> AnalysisResult:
    if not parsed.questions:
        raise NoQuestionsParsedError(source_format)

    result = build_result(parsed.candidate, parsed.questions, exam_config, language, source_format)
    if exam_config.sequential_sections:
        result = reassign_by_sequence(result)

    if not result.candidate.exam_level:
        result = replace(result, candidate=replace(result.candidate, exam_level=exam_config.name))

    log.info(
        "Analysis complete: %s, %d questions, score %s / %s",
        exam_config.id,
        result.total_questions,
        result.total_score,
        result.max_score,
    )
    return result


def analyze_html(
    html: str,
    url: str,
    exam_config: ExamConfig,
    language: str = "english",
    log: Optional[logging.Logger | logging.LoggerAdapter] = None,
) -> AnalysisResult:
    """Analyze one response-sheet document; url is only used to resolve relative asset paths."""
    log = log or logger
    language = _check_language(language)
    source_format = detect_format(html)
    log.info("Detected %s format for %s", source_format, exam_config.id)

    if source_format == ANSWER_KEY:
        parsed = parse_document(html, base_dir_of(url), exam_config, log=log)
    else:
        part = part_for_url(url)
        if exam_config.subject_by_part(part) is None:
            part = exam_config.subjects[0].part
        parsed = parse_pages([PartPage(part, html, url)], exam_config, log=log)

    return _finish(parsed, exam_config, language, source_format, log)


def analyze_pages(
    pages: Sequence[PartPage],
    exam_config: ExamConfig,
    language: str = "english",
    log: Optional[logging.Logger | logging.LoggerAdapter] = None,
) -> AnalysisResult:
    """Analyze a multi-page sheet given one page per subject."""
    log = log or logger
    language = _check_language(language)
    parsed = parse_pages(pages, exam_config, log=log)
    return _finish(parsed, exam_config, language, MULTI_PAGE, log)
