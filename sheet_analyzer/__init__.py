"""
Exam response sheet analyzer.

Extracts every question, the candidate's choice, the key and the outcome from
a provider's rendered response sheet HTML, and scores it against a subject
configuration table.
"""

from .analyzer import analyze_html, analyze_pages
from .errors import NoQuestionsParsedError, SheetAnalysisError, UnknownExamTypeError, UnrecognizedFormatError
from .exams import EXAM_CONFIGS, get_exam_config
from .models import AnalysisResult, CandidateInfo, ExamConfig, Option, QuestionRecord, SectionResult, SubjectConfig
from .multipage import PartPage

__all__ = [
    "EXAM_CONFIGS",
    "AnalysisResult",
    "CandidateInfo",
    "ExamConfig",
    "NoQuestionsParsedError",
    "Option",
    "PartPage",
    "QuestionRecord",
    "SectionResult",
    "SheetAnalysisError",
    "SubjectConfig",
    "UnknownExamTypeError",
    "UnrecognizedFormatError",
    "analyze_html",
    "analyze_pages",
    "get_exam_config",
]
