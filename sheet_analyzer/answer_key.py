"""
Parser for the single-page "AssessmentQPHTMLMode1" answer-key family.

All sections live in one document. Each question is a "question-pnl" block,
options are cells classed "rightAns" (the key) or "wrngAns", the candidate's
pick carries a tick image and is repeated in a "Chosen Option" cell. Section
labels ("section-lbl") split the document into subjects.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .candidate import extract_candidate_info
from .entities import clean_formula_alt, decode
from .models import (
    OPTION_IDS,
    STATUS_BONUS,
    STATUS_CORRECT,
    STATUS_UNATTEMPTED,
    STATUS_WRONG,
    ExamConfig,
    Option,
    ParsedDocument,
    QuestionRecord,
    SubjectConfig,
)
from .scoring import derive_status, marks_for
from .urls import language_variants, resolve

logger = logging.getLogger(__name__)

SECTION_LABEL_RE = re.compile(
    r"<div[^>]*class\s*=\s*[\"'][^\"']*section-lbl[^\"']*[\"'][^>]*>.*?"
    r"<span[^>]*class\s*=\s*[\"']bold[\"'][^>]*>([^<]+)</span>",
    re.I | re.S,
)
PANEL_RE = re.compile(r"class\s*=\s*[\"']question-pnl[\"']", re.I)
MODULE_RE = re.compile(r"Module\s+([IVX]+)\b", re.I)
QUESTION_CELL_RE = re.compile(
    r"Q\.\d+\s*</td>\s*<td[^>]*class\s*=\s*[\"']bold[\"'][^>]*>(.*?)(?=</td>)",
    re.I | re.S,
)
ANSWER_CELL_RE = re.compile(
    r"<td[^>]*class\s*=\s*[\"'](rightAns|wrngAns)[\"'][^>]*>(.*?)(?=</td>)",
    re.I | re.S,
)
CHOSEN_RE = re.compile(
    r"Chosen\s+Option\s*:?\s*</td>\s*<td[^>]*>\s*([^<]*?)\s*</td>",
    re.I,
)
IMG_TAG_RE = re.compile(r"<img[^>]*>", re.I)
SRC_RE = re.compile(r"src\s*=\s*[\"']([^\"']+)[\"']", re.I)
ALT_RE = re.compile(r"alt\s*=\s*[\"']([^\"']+)[\"']", re.I)
ORDINAL_PREFIX_RE = re.compile(r"^\d+\.\s*")

MIN_OPTIONS = 2
_ROMAN = {"I": 1, "V": 5, "X": 10}


@dataclass(frozen=True)
class SectionLabel:
    offset: int
    name: str


def roman_to_int(numeral: str) -> int:
    total = 0
    prev = 0
    for ch in reversed(numeral.upper()):
        value = _ROMAN.get(ch, 0)
        total = total - value if value < prev else total + value
        prev = max(prev, value)
    return total


def find_section_labels(html: str) -> List[SectionLabel]:
    return [SectionLabel(m.start(), decode(m.group(1))) for m in SECTION_LABEL_RE.finditer(html)]


def map_sections_to_subjects(labels: Sequence[SectionLabel], exam_config: ExamConfig) -> Dict[int, int]:
    """Label index -> subject index; "Module <Roman>" wins over position."""
    count = len(exam_config.subjects)
    mapping: Dict[int, int] = {}
    for idx, label in enumerate(labels):
        module = MODULE_RE.search(label.name)
        if module:
            module_idx = roman_to_int(module.group(1)) - 1
            if 0 <= module_idx < count:
                mapping[idx] = module_idx
                continue
        if idx < count:
            mapping[idx] = idx
    return mapping


def subject_for_offset(
    offset: int,
    labels: Sequence[SectionLabel],
    mapping: Dict[int, int],
    exam_config: ExamConfig,
) -> SubjectConfig:
    section_idx = 0
    for idx in range(len(labels) - 1, -1, -1):
        if offset > labels[idx].offset:
            section_idx = idx
            break
    subject_idx = mapping.get(section_idx, min(section_idx, len(exam_config.subjects) - 1))
    return exam_config.subjects[subject_idx]


def split_panels(html: str) -> List[Tuple[int, str]]:
    starts = [m.start() for m in PANEL_RE.finditer(html)]
    panels: List[Tuple[int, str]] = []
    for i, st in enumerate(starts):
        en = starts[i + 1] if i + 1 < len(starts) else len(html)
        panels.append((st, html[st:en]))
    return panels


def _content_images(fragment: str) -> List[str]:
    """Image tags other than the tick/cross answer markers."""
    tags = []
    for tag in IMG_TAG_RE.findall(fragment):
        src = SRC_RE.search(tag)
        if not src:
            continue
        lowered = src.group(1).lower()
        if "tick" in lowered or "cross" in lowered:
            continue
        tags.append(tag)
    return tags


def _first_image_url(fragment: str, base_dir: str) -> str:
    tags = _content_images(fragment)
    if not tags:
        return ""
    return resolve(SRC_RE.search(tags[0]).group(1), base_dir)


def _has_tick(fragment: str) -> bool:
    for tag in IMG_TAG_RE.findall(fragment):
        src = SRC_RE.search(tag)
        if src and "tick" in src.group(1).lower():
            return True
    return False


def extract_question_content(panel: str, base_dir: str) -> Tuple[str, str]:
    text = ""
    image_url = ""

    cell = QUESTION_CELL_RE.search(panel)
    if cell:
        raw = cell.group(1)
        decoded = decode(raw)
        image_url = _first_image_url(raw, base_dir)
        if len(decoded) > 3:
            text = decoded
        else:
            alt = ALT_RE.search(raw)
            if alt:
                text = clean_formula_alt(alt.group(1))

    if not text and not image_url:
        image_url = _first_image_url(panel, base_dir)
    return text, image_url


def extract_options(panel: str, base_dir: str) -> List[Option]:
    options: List[Option] = []
    for m in ANSWER_CELL_RE.finditer(panel):
        if len(options) >= len(OPTION_IDS):
            break
        css_class, content = m.group(1), m.group(2)
        image_url = _first_image_url(content, base_dir)
        variants = language_variants(image_url)
        text = ORDINAL_PREFIX_RE.sub("", decode(content)).strip()
        options.append(
            Option(
                id=OPTION_IDS[len(options)],
                image_url=image_url,
                image_url_hindi=variants.get("hindi", image_url),
                image_url_english=variants.get("english", image_url),
                text=text or None,
                is_selected=_has_tick(content),
                is_correct=css_class == "rightAns",
            )
        )
    return options


def chosen_option(panel: str) -> Optional[str]:
    """Raw "Chosen Option" value, or None when the panel has no such field."""
    m = CHOSEN_RE.search(panel)
    if not m:
        return None
    return decode(m.group(1)).strip()


def apply_chosen(options: List[Option], chosen: Optional[str]) -> Tuple[List[Option], str]:
    if not any(o.is_correct for o in options):
        return options, STATUS_BONUS

    if chosen is not None and (chosen == "" or "--" in chosen):
        return [replace(o, is_selected=False) for o in options], STATUS_UNATTEMPTED

    if chosen is not None and chosen.isdecimal():
        idx = int(chosen) - 1
        if 0 <= idx < len(options):
            picked = [replace(o, is_selected=(i == idx)) for i, o in enumerate(options)]
            return picked, STATUS_CORRECT if picked[idx].is_correct else STATUS_WRONG

    return options, derive_status(options)


def parse_panel(
    panel: str,
    question_number: int,
    subject: SubjectConfig,
    base_dir: str,
) -> Optional[QuestionRecord]:
    options = extract_options(panel, base_dir)
    if len(options) < MIN_OPTIONS:
        return None

    options, status = apply_chosen(options, chosen_option(panel))
    while len(options) < len(OPTION_IDS):
        options.append(Option(id=OPTION_IDS[len(options)]))

    text, image_url = extract_question_content(panel, base_dir)
    variants = language_variants(image_url)
    return QuestionRecord(
        question_number=question_number,
        part=subject.part,
        subject=subject.name,
        question_image_url=image_url,
        question_image_url_hindi=variants.get("hindi", image_url),
        question_image_url_english=variants.get("english", image_url),
        question_text=text or None,
        options=tuple(options),
        status=status,
        marks_awarded=marks_for(status, subject),
        is_bonus=status == STATUS_BONUS,
    )


def parse_document(
    html: str,
    base_dir: str,
    exam_config: ExamConfig,
    log: Optional[logging.Logger | logging.LoggerAdapter] = None,
) -> ParsedDocument:
    log = log or logger
    html = html or ""

    labels = find_section_labels(html)
    mapping = map_sections_to_subjects(labels, exam_config)
    log.debug("Found %d section labels: %s", len(labels), [label.name for label in labels])

    questions: List[QuestionRecord] = []
    panels = split_panels(html)
    for number, (offset, panel) in enumerate(panels, start=1):
        subject = subject_for_offset(offset, labels, mapping, exam_config)
        question = parse_panel(panel, number, subject, base_dir)
        if question is None:
            log.debug("Panel %d: fewer than %d options, skipped", number, MIN_OPTIONS)
            continue
        questions.append(question)

    log.debug("Parsed %d of %d question panels", len(questions), len(panels))
    return ParsedDocument(questions=tuple(questions), candidate=extract_candidate_info(html))
