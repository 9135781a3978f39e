"""
Parser for the multi-page response sheet family.

Each subject is served on its own page. A question is a table whose first
row carries a "Q.No:" marker and the question image; the rows after it are
the options, color-coded by the exam portal:

    green  - chosen and correct
    red    - chosen and wrong
    yellow - correct but not chosen
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .candidate import extract_candidate_info
from .models import (
    OPTION_IDS,
    STATUS_BONUS,
    CandidateInfo,
    ExamConfig,
    Option,
    ParsedDocument,
    QuestionRecord,
    SubjectConfig,
)
from .scoring import derive_status, marks_for
from .urls import base_dir_of, image_language, language_variants, resolve

logger = logging.getLogger(__name__)

QNO_RE = re.compile(r"Q\.No:\s*(?:&nbsp;|\s)*(\d+)", re.I)
TABLE_OPEN_RE = re.compile(r"<table\b", re.I)
TABLE_CLOSE_RE = re.compile(r"</table\s*>", re.I)
ROW_RE = re.compile(r"<tr\b([^>]*)>(.*?)</tr\s*>", re.I | re.S)
IMG_SRC_RE = re.compile(r"<img[^>]+src\s*=\s*[\"']([^\"']+)[\"']", re.I)
BGCOLOR_RE = re.compile(r"bgcolor\s*=\s*[\"']?([^\"'\s>]+)", re.I)
STYLE_BG_RE = re.compile(r"background(?:-color)?\s*:\s*([^;\"']+)", re.I)

MIN_OPTIONS = 2


@dataclass(frozen=True)
class PartPage:
    part: str
    html: str
    url: str = ""


def _row_color(attrs: str) -> str:
    m = BGCOLOR_RE.search(attrs) or STYLE_BG_RE.search(attrs)
    return m.group(1).strip().lower() if m else ""


def option_color(row_attrs: str, row_content: str) -> str:
    color = _row_color(row_attrs)
    if not color:
        color = _row_color(row_content)
    return color


def _question_tables(html: str) -> List[Tuple[int, str]]:
    """Split the page into (in-section number, table markup) per Q.No marker."""
    markers = list(QNO_RE.finditer(html))
    tables: List[Tuple[int, str]] = []
    for i, marker in enumerate(markers):
        start = -1
        for m in TABLE_OPEN_RE.finditer(html, 0, marker.start()):
            start = m.start()
        if start < 0:
            start = markers[i - 1].end() if i else 0

        close = TABLE_CLOSE_RE.search(html, marker.end())
        end = close.end() if close else len(html)
        if i + 1 < len(markers):
            end = min(end, markers[i + 1].start())
        tables.append((int(marker.group(1)), html[start:end]))
    return tables


def _bilingual(image_urls: Sequence[str]) -> Tuple[str, str]:
    hindi = ""
    english = ""
    for url in image_urls:
        lang = image_language(url)
        if lang == "hindi" and not hindi:
            hindi = url
        elif lang == "english" and not english:
            english = url

    if not hindi and not english:
        variants = language_variants(image_urls[0])
        return variants.get("hindi", image_urls[0]), variants.get("english", image_urls[0])
    return hindi or english, english or hindi


def _question_image(row_content: str, base_dir: str) -> str:
    marker = QNO_RE.search(row_content)
    after = row_content[marker.end():] if marker else row_content
    m = IMG_SRC_RE.search(after)
    return resolve(m.group(1), base_dir) if m else ""


def parse_question_table(
    table: str,
    in_section_number: int,
    part: str,
    base_dir: str,
    subject: SubjectConfig,
    question_offset: int,
) -> Optional[QuestionRecord]:
    question_image_url = ""
    options: List[Option] = []
    found_question_row = False

    for row in ROW_RE.finditer(table):
        if len(options) >= len(OPTION_IDS):
            break
        attrs, content = row.group(1), row.group(2)

        if QNO_RE.search(content):
            found_question_row = True
            question_image_url = _question_image(content, base_dir)
            continue
        if not found_question_row:
            continue

        image_urls = [resolve(src, base_dir) for src in IMG_SRC_RE.findall(content)]
        image_urls = [u for u in image_urls if u]
        if not image_urls:
            continue

        hindi, english = _bilingual(image_urls)
        color = option_color(attrs, content)
        is_green = "green" in color
        options.append(
            Option(
                id=OPTION_IDS[len(options)],
                image_url=image_urls[0],
                image_url_hindi=hindi,
                image_url_english=english,
                is_selected=is_green or "red" in color,
                is_correct=is_green or "yellow" in color,
            )
        )

    if len(options) < MIN_OPTIONS:
        return None

    while len(options) < len(OPTION_IDS):
        options.append(Option(id=OPTION_IDS[len(options)]))

    status = derive_status(options)
    variants = language_variants(question_image_url)
    return QuestionRecord(
        question_number=question_offset + in_section_number,
        part=part,
        subject=subject.name,
        question_image_url=question_image_url,
        question_image_url_hindi=variants.get("hindi", question_image_url),
        question_image_url_english=variants.get("english", question_image_url),
        options=tuple(options),
        status=status,
        marks_awarded=marks_for(status, subject),
        is_bonus=status == STATUS_BONUS,
    )


def parse_part(
    html: str,
    part: str,
    base_dir: str,
    subject: SubjectConfig,
    question_offset: int,
    log: Optional[logging.Logger | logging.LoggerAdapter] = None,
) -> List[QuestionRecord]:
    log = log or logger
    questions: List[QuestionRecord] = []
    tables = _question_tables(html or "")

    for number, table in tables:
        question = parse_question_table(table, number, part, base_dir, subject, question_offset)
        if question is None:
            log.debug("Part %s Q.No %d: fewer than %d options, skipped", part, number, MIN_OPTIONS)
            continue
        questions.append(question)

    log.debug("Part %s: %d of %d question tables parsed", part, len(questions), len(tables))
    return questions


def parse_pages(
    pages: Sequence[PartPage],
    exam_config: ExamConfig,
    log: Optional[logging.Logger | logging.LoggerAdapter] = None,
) -> ParsedDocument:
    log = log or logger
    offsets = exam_config.question_offsets()
    questions: List[QuestionRecord] = []
    candidate: Optional[CandidateInfo] = None

    for page in pages:
        subject = exam_config.subject_by_part(page.part)
        if subject is None:
            log.warning("Page for part %s has no matching subject in %s, ignored", page.part, exam_config.id)
            continue

        questions.extend(
            parse_part(page.html, page.part, base_dir_of(page.url), subject, offsets[page.part], log=log)
        )

        if candidate is None and page.html:
            info = extract_candidate_info(page.html)
            if info.roll_number or info.name:
                candidate = info

    questions.sort(key=lambda q: q.question_number)
    return ParsedDocument(questions=tuple(questions), candidate=candidate or CandidateInfo())
