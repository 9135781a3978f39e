"""
Records produced by the parsers and the scoring engine.

Every record is a frozen dataclass; corrections build new values with
dataclasses.replace. to_dict() yields the camelCase wire shape consumed by the
score-card and report collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

STATUS_CORRECT = "correct"
STATUS_WRONG = "wrong"
STATUS_UNATTEMPTED = "unattempted"
STATUS_BONUS = "bonus"
STATUSES = (STATUS_CORRECT, STATUS_WRONG, STATUS_UNATTEMPTED, STATUS_BONUS)

OPTION_IDS = ("A", "B", "C", "D")
LANGUAGES = ("hindi", "english")


def _number(value: object, default: float = 0.0) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def _clean_number(value: float) -> float | int:
    return int(value) if float(value).is_integer() else value


@dataclass(frozen=True)
class SubjectConfig:
    name: str
    part: str
    total_questions: int
    max_marks: float
    correct_marks: float
    negative_marks: float
    is_qualifying: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "SubjectConfig":
        return cls(
            name=str(data.get("name", "")).strip(),
            part=str(data.get("part", "")).strip().upper(),
            total_questions=int(_number(data.get("totalQuestions", data.get("total_questions", 0)))),
            max_marks=_number(data.get("maxMarks", data.get("max_marks", 0))),
            correct_marks=_number(data.get("correctMarks", data.get("correct_marks", 0))),
            negative_marks=abs(_number(data.get("negativeMarks", data.get("negative_marks", 0)))),
            is_qualifying=bool(data.get("isQualifying", data.get("is_qualifying", False))),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "part": self.part,
            "totalQuestions": self.total_questions,
            "maxMarks": _clean_number(self.max_marks),
            "correctMarks": _clean_number(self.correct_marks),
            "negativeMarks": _clean_number(self.negative_marks),
            "isQualifying": self.is_qualifying,
        }


@dataclass(frozen=True)
class ExamConfig:
    id: str
    name: str
    subjects: Tuple[SubjectConfig, ...]
    total_questions: int
    max_marks: float
    display_name: str = ""
    category: str = ""
    sequential_sections: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "ExamConfig":
        raw_subjects = data.get("subjects") or []
        if not isinstance(raw_subjects, list):
            raise ValueError("Exam configuration 'subjects' must be a list.")
        subjects = tuple(SubjectConfig.from_dict(s) for s in raw_subjects if isinstance(s, dict))
        if not subjects:
            raise ValueError("Exam configuration needs at least one subject.")

        total_questions = data.get("totalQuestions", data.get("total_questions"))
        max_marks = data.get("maxMarks", data.get("max_marks"))
        return cls(
            id=str(data.get("id", "CUSTOM")),
            name=str(data.get("name", data.get("id", "Custom exam"))),
            display_name=str(data.get("displayName", data.get("display_name", ""))),
            category=str(data.get("category", "")),
            subjects=subjects,
            total_questions=int(_number(total_questions)) if total_questions is not None else sum(s.total_questions for s in subjects),
            max_marks=_number(max_marks) if max_marks is not None else sum(s.max_marks for s in subjects),
            sequential_sections=bool(data.get("sequentialSections", data.get("sequential_sections", False))),
        )

    def subject_by_part(self, part: str) -> Optional[SubjectConfig]:
        return next((s for s in self.subjects if s.part == part), None)

    def subject_by_name(self, name: str) -> Optional[SubjectConfig]:
        return next((s for s in self.subjects if s.name == name), None)

    def question_offsets(self) -> Dict[str, int]:
        offsets: Dict[str, int] = {}
        running = 0
        for subject in self.subjects:
            offsets[subject.part] = running
            running += subject.total_questions
        return offsets

    def section_ranges(self) -> List[Tuple[SubjectConfig, int, int]]:
        ranges: List[Tuple[SubjectConfig, int, int]] = []
        start = 1
        for subject in self.subjects:
            end = start + subject.total_questions - 1
            ranges.append((subject, start, end))
            start = end + 1
        return ranges

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name or self.name,
            "category": self.category,
            "subjects": [s.to_dict() for s in self.subjects],
            "totalQuestions": self.total_questions,
            "maxMarks": _clean_number(self.max_marks),
            "sequentialSections": self.sequential_sections,
        }


@dataclass(frozen=True)
class Option:
    id: str
    image_url: str = ""
    image_url_hindi: str = ""
    image_url_english: str = ""
    text: Optional[str] = None
    is_selected: bool = False
    is_correct: bool = False

    def to_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {
            "id": self.id,
            "imageUrl": self.image_url,
            "imageUrlHindi": self.image_url_hindi,
            "imageUrlEnglish": self.image_url_english,
            "isSelected": self.is_selected,
            "isCorrect": self.is_correct,
        }
        if self.text is not None:
            out["text"] = self.text
        return out


@dataclass(frozen=True)
class QuestionRecord:
    question_number: int
    part: str
    subject: str
    options: Tuple[Option, ...]
    status: str
    marks_awarded: float
    is_bonus: bool
    question_image_url: str = ""
    question_image_url_hindi: str = ""
    question_image_url_english: str = ""
    question_text: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {
            "questionNumber": self.question_number,
            "part": self.part,
            "subject": self.subject,
            "questionImageUrl": self.question_image_url,
            "questionImageUrlHindi": self.question_image_url_hindi,
            "questionImageUrlEnglish": self.question_image_url_english,
            "options": [o.to_dict() for o in self.options],
            "status": self.status,
            "marksAwarded": _clean_number(self.marks_awarded),
            "isBonus": self.is_bonus,
        }
        if self.question_text is not None:
            out["questionText"] = self.question_text
        return out


@dataclass(frozen=True)
class CandidateInfo:
    roll_number: str = ""
    name: str = ""
    exam_level: str = ""
    test_date: str = ""
    shift: str = ""
    centre_name: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "rollNumber": self.roll_number,
            "name": self.name,
            "examLevel": self.exam_level,
            "testDate": self.test_date,
            "shift": self.shift,
            "centreName": self.centre_name,
        }


@dataclass(frozen=True)
class SectionResult:
    part: str
    subject: str
    correct: int
    wrong: int
    unattempted: int
    bonus: int
    score: float
    max_marks: float
    correct_marks: float
    negative_marks: float
    is_qualifying: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "part": self.part,
            "subject": self.subject,
            "correct": self.correct,
            "wrong": self.wrong,
            "unattempted": self.unattempted,
            "bonus": self.bonus,
            "score": _clean_number(self.score),
            "maxMarks": _clean_number(self.max_marks),
            "correctMarks": _clean_number(self.correct_marks),
            "negativeMarks": _clean_number(self.negative_marks),
            "isQualifying": self.is_qualifying,
        }


@dataclass(frozen=True)
class ScoreSummary:
    sections: Tuple[SectionResult, ...]
    total_score: float
    max_score: float
    correct_count: int
    wrong_count: int
    unattempted_count: int
    bonus_count: int


@dataclass(frozen=True)
class ParsedDocument:
    questions: Tuple[QuestionRecord, ...]
    candidate: CandidateInfo = field(default_factory=CandidateInfo)


@dataclass(frozen=True)
class AnalysisResult:
    candidate: CandidateInfo
    exam_config: ExamConfig
    language: str
    total_score: float
    max_score: float
    total_questions: int
    correct_count: int
    wrong_count: int
    unattempted_count: int
    bonus_count: int
    sections: Tuple[SectionResult, ...]
    questions: Tuple[QuestionRecord, ...]
    source_format: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "candidate": self.candidate.to_dict(),
            "examType": self.exam_config.id,
            "examConfig": self.exam_config.to_dict(),
            "language": self.language,
            "sourceFormat": self.source_format,
            "totalScore": _clean_number(self.total_score),
            "maxScore": _clean_number(self.max_score),
            "totalQuestions": self.total_questions,
            "correctCount": self.correct_count,
            "wrongCount": self.wrong_count,
            "unattemptedCount": self.unattempted_count,
            "bonusCount": self.bonus_count,
            "sections": [s.to_dict() for s in self.sections],
            "questions": [q.to_dict() for q in self.questions],
        }
