"""
Scoring engine.

Bonus credit is applied exactly once: each question's marks come from
marks_for(status, subject), and a section scores the sum of its questions'
marks. Qualifying sections are scored and counted but left out of the total.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import (
    STATUS_BONUS,
    STATUS_CORRECT,
    STATUS_UNATTEMPTED,
    STATUS_WRONG,
    STATUSES,
    AnalysisResult,
    CandidateInfo,
    ExamConfig,
    Option,
    QuestionRecord,
    ScoreSummary,
    SectionResult,
    SubjectConfig,
)

logger = logging.getLogger(__name__)

JOIN_KEYS = ("subject", "part")


def derive_status(options: Iterable[Option]) -> str:
    options = list(options)
    if not any(o.is_correct for o in options):
        return STATUS_BONUS
    if not any(o.is_selected for o in options):
        return STATUS_UNATTEMPTED
    if any(o.is_selected and o.is_correct for o in options):
        return STATUS_CORRECT
    return STATUS_WRONG


def marks_for(status: str, subject: SubjectConfig) -> float:
    if status in (STATUS_CORRECT, STATUS_BONUS):
        return subject.correct_marks
    if status == STATUS_WRONG:
        return -subject.negative_marks
    return 0.0


def _belongs(question: QuestionRecord, subject: SubjectConfig, key: str) -> bool:
    if key == "part":
        return question.part == subject.part
    return question.subject == subject.name


def score(questions: Sequence[QuestionRecord], exam_config: ExamConfig, key: str = "subject") -> ScoreSummary:
    if key not in JOIN_KEYS:
        raise ValueError(f"key must be one of {JOIN_KEYS}, got {key!r}")

    sections: List[SectionResult] = []
    for subject in exam_config.subjects:
        mine = [q for q in questions if _belongs(q, subject, key)]
        counts = dict.fromkeys(STATUSES, 0)
        for q in mine:
            counts[q.status] = counts.get(q.status, 0) + 1

        sections.append(
            SectionResult(
                part=subject.part,
                subject=subject.name,
                correct=counts[STATUS_CORRECT],
                wrong=counts[STATUS_WRONG],
                unattempted=counts[STATUS_UNATTEMPTED],
                bonus=counts[STATUS_BONUS],
                score=sum(marks_for(q.status, subject) for q in mine),
                max_marks=subject.max_marks,
                correct_marks=subject.correct_marks,
                negative_marks=subject.negative_marks,
                is_qualifying=subject.is_qualifying,
            )
        )

    # Counts cover every section, qualifying ones included; the total does not.
    return ScoreSummary(
        sections=tuple(sections),
        total_score=sum(s.score for s in sections if not s.is_qualifying),
        max_score=exam_config.max_marks,
        correct_count=sum(s.correct for s in sections),
        wrong_count=sum(s.wrong for s in sections),
        unattempted_count=sum(s.unattempted for s in sections),
        bonus_count=sum(s.bonus for s in sections),
    )


def build_result(
    candidate: CandidateInfo,
    questions: Sequence[QuestionRecord],
    exam_config: ExamConfig,
    language: str = "english",
    source_format: str = "",
    key: str = "subject",
) -> AnalysisResult:
    ordered = tuple(sorted(questions, key=lambda q: q.question_number))
    summary = score(ordered, exam_config, key=key)
    return AnalysisResult(
        candidate=candidate,
        exam_config=exam_config,
        language=language,
        total_score=summary.total_score,
        max_score=summary.max_score,
        total_questions=len(ordered),
        correct_count=summary.correct_count,
        wrong_count=summary.wrong_count,
        unattempted_count=summary.unattempted_count,
        bonus_count=summary.bonus_count,
        sections=summary.sections,
        questions=ordered,
        source_format=source_format,
    )


def _subject_for_position(
    position: int, ranges: Sequence[Tuple[SubjectConfig, int, int]]
) -> Optional[SubjectConfig]:
    for subject, start, end in ranges:
        if start <= position <= end:
            return subject
    return None


def reassign_by_sequence(result: AnalysisResult) -> AnalysisResult:
    """
    Re-derive every question's subject from its order of appearance.

    Used for sheets that restart question numbering in each section. Position
    i belongs to the subject whose cumulative configured range holds i;
    questions past the configured total keep their subject. The question is
    renumbered to its position and its status and marks are recomputed.
    """
    config = result.exam_config
    ranges = config.section_ranges()
    ordered = sorted(result.questions, key=lambda q: q.question_number)

    fixed: List[QuestionRecord] = []
    for position, question in enumerate(ordered, start=1):
        subject = _subject_for_position(position, ranges)
        if subject is None:
            subject = config.subject_by_name(question.subject) or config.subject_by_part(question.part)
        status = derive_status(question.options)
        fixed.append(
            replace(
                question,
                question_number=position,
                part=subject.part if subject else question.part,
                subject=subject.name if subject else question.subject,
                status=status,
                is_bonus=status == STATUS_BONUS,
                marks_awarded=marks_for(status, subject) if subject else question.marks_awarded,
            )
        )

    moved = sum(1 for old, new in zip(ordered, fixed) if old.subject != new.subject)
    if moved:
        logger.info("Reassigned %d of %d questions to sequence-derived subjects", moved, len(fixed))

    return build_result(
        result.candidate,
        fixed,
        config,
        language=result.language,
        source_format=result.source_format,
    )
