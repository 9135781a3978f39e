from __future__ import annotations

from typing import Dict, List, Sequence

from .errors import UnknownExamTypeError
from .models import ExamConfig, SubjectConfig

EXAM_CATEGORIES: Dict[str, str] = {
    "SSC": "Staff Selection Commission",
    "RAILWAY": "RRB / Indian Railways",
    "IB": "IB / Security Agencies",
    "BANK": "IBPS / SBI / Banking",
    "POLICE": "Delhi Police & Others",
}


# rows: (name, total questions, max marks, correct marks, negative marks[, qualifying])
def _exam(
    exam_id: str,
    name: str,
    display_name: str,
    category: str,
    rows: Sequence[tuple],
    total_questions: int,
    max_marks: float,
    sequential_sections: bool = False,
) -> ExamConfig:
    subjects = tuple(
        SubjectConfig(
            name=row[0],
            part=chr(ord("A") + idx),
            total_questions=row[1],
            max_marks=row[2],
            correct_marks=row[3],
            negative_marks=row[4],
            is_qualifying=row[5] if len(row) > 5 else False,
        )
        for idx, row in enumerate(rows)
    )
    return ExamConfig(
        id=exam_id,
        name=name,
        display_name=display_name,
        category=category,
        subjects=subjects,
        total_questions=total_questions,
        max_marks=max_marks,
        sequential_sections=sequential_sections,
    )


_CONFIGS = (
    # SSC
    _exam("SSC_CGL_PRE", "SSC CGL PRE (Tier-I)", "SSC CGL Tier-I", "SSC", [
        ("General Intelligence & Reasoning", 25, 50, 2, 0.5),
        ("General Awareness", 25, 50, 2, 0.5),
        ("Quantitative Aptitude", 25, 50, 2, 0.5),
        ("English Comprehension", 25, 50, 2, 0.5),
    ], 100, 200),
    _exam("SSC_CGL_MAINS", "SSC CGL MAINS (Tier-II)", "SSC CGL Tier-II", "SSC", [
        ("Mathematical Abilities", 30, 90, 3, 1),
        ("Reasoning & General Intelligence", 30, 90, 3, 1),
        ("English Language & Comprehension", 45, 135, 3, 1),
        ("General Awareness", 25, 75, 3, 0.5),
        ("Computer Knowledge", 20, 60, 3, 0.5, True),
    ], 150, 450, sequential_sections=True),
    _exam("SSC_CHSL_PRE", "SSC CHSL PRE (Tier-I)", "SSC CHSL Tier-I", "SSC", [
        ("General Intelligence", 25, 50, 2, 1),
        ("English Language", 25, 50, 2, 1),
        ("Quantitative Aptitude", 25, 50, 2, 1),
        ("General Awareness", 25, 50, 2, 1),
    ], 100, 200),
    _exam("SSC_CHSL_MAINS", "SSC CHSL MAINS (Tier-II)", "SSC CHSL Tier-II", "SSC", [
        ("Mathematical Abilities", 30, 90, 3, 1),
        ("Reasoning & General Awareness", 30, 90, 3, 1),
        ("English Language & Comprehension", 45, 135, 3, 1),
        ("Computer Knowledge", 30, 90, 3, 1),
    ], 135, 405),
    _exam("SSC_CPO_PRE", "SSC CPO PRE (Paper-I)", "SSC CPO Paper-I", "SSC", [
        ("General Intelligence & Reasoning", 50, 50, 1, 0.25),
        ("General Knowledge & Awareness", 50, 50, 1, 0.25),
        ("Quantitative Aptitude", 50, 50, 1, 0.25),
        ("English Comprehension", 50, 50, 1, 0.25),
    ], 200, 200),
    _exam("SSC_CPO_MAINS", "SSC CPO MAINS (Paper-II)", "SSC CPO Paper-II", "SSC", [
        ("English Language & Comprehension", 200, 200, 1, 0.25),
    ], 200, 200),
    _exam("SSC_MTS", "SSC MTS (CBT)", "SSC MTS", "SSC", [
        ("Numerical & Mathematical Ability", 20, 20, 1, 0.25),
        ("Reasoning Ability & Problem Solving", 20, 20, 1, 0.25),
        ("General Awareness", 25, 25, 1, 0.25),
        ("English Language & Comprehension", 25, 25, 1, 0.25),
    ], 90, 90),
    _exam("SSC_GD_CONSTABLE", "SSC GD Constable (CBT)", "SSC GD", "SSC", [
        ("General Intelligence & Reasoning", 20, 40, 2, 0.5),
        ("General Knowledge & Awareness", 20, 40, 2, 0.5),
        ("Elementary Mathematics", 20, 40, 2, 0.5),
        ("English / Hindi", 20, 40, 2, 0.5),
    ], 80, 160),
    _exam("SSC_STENO", "SSC Stenographer (CBT)", "SSC Steno", "SSC", [
        ("General Intelligence & Reasoning", 50, 50, 1, 0.25),
        ("General Awareness", 50, 50, 1, 0.25),
        ("English Language & Comprehension", 100, 100, 1, 0.25),
    ], 200, 200),
    # Railway
    _exam("RRB_NTPC_CBT1", "RRB NTPC CBT-1", "RRB NTPC CBT-1", "RAILWAY", [
        ("Mathematics", 30, 30, 1, 0.333),
        ("General Intelligence & Reasoning", 30, 30, 1, 0.333),
        ("General Awareness", 40, 40, 1, 0.333),
    ], 100, 100),
    _exam("RRB_NTPC_CBT2", "RRB NTPC CBT-2", "RRB NTPC CBT-2", "RAILWAY", [
        ("Mathematics", 35, 35, 1, 0.333),
        ("General Intelligence & Reasoning", 35, 35, 1, 0.333),
        ("General Awareness", 50, 50, 1, 0.333),
    ], 120, 120),
    _exam("RRB_GROUP_D", "RRB Group D (CBT)", "RRB Group D", "RAILWAY", [
        ("Mathematics", 25, 25, 1, 0.333),
        ("General Intelligence & Reasoning", 30, 30, 1, 0.333),
        ("General Science", 25, 25, 1, 0.333),
        ("General Awareness & Current Affairs", 20, 20, 1, 0.333),
    ], 100, 100),
    _exam("RRB_JE_CBT1", "RRB JE CBT-1", "RRB JE CBT-1", "RAILWAY", [
        ("Mathematics", 30, 30, 1, 0.333),
        ("General Intelligence & Reasoning", 25, 25, 1, 0.333),
        ("General Awareness", 15, 15, 1, 0.333),
        ("General Science", 30, 30, 1, 0.333),
    ], 100, 100),
    _exam("RRB_ALP_CBT1", "RRB ALP CBT-1", "RRB ALP CBT-1", "RAILWAY", [
        ("Mathematics", 20, 20, 1, 0.333),
        ("General Intelligence & Reasoning", 25, 25, 1, 0.333),
        ("General Science", 20, 20, 1, 0.333),
        ("General Awareness & Current Affairs", 10, 10, 1, 0.333),
    ], 75, 75),
    # IB
    _exam("IB_ACIO", "IB ACIO (Tier-I)", "IB ACIO", "IB", [
        ("Current Affairs", 20, 20, 1, 0.25),
        ("General Studies", 20, 20, 1, 0.25),
        ("Quantitative Aptitude", 20, 20, 1, 0.25),
        ("Logical/Analytical Ability", 20, 20, 1, 0.25),
        ("English Language", 20, 20, 1, 0.25),
    ], 100, 100),
    _exam("IB_SA", "IB Security Assistant (Tier-I)", "IB SA", "IB", [
        ("General Awareness", 25, 25, 1, 0.25),
        ("Quantitative Aptitude", 25, 25, 1, 0.25),
        ("Logical/Analytical Ability", 25, 25, 1, 0.25),
        ("English Language", 25, 25, 1, 0.25),
    ], 100, 100),
    # Bank
    _exam("IBPS_PO_PRE", "IBPS PO Prelims", "IBPS PO Pre", "BANK", [
        ("English Language", 30, 30, 1, 0.25),
        ("Quantitative Aptitude", 35, 35, 1, 0.25),
        ("Reasoning Ability", 35, 35, 1, 0.25),
    ], 100, 100),
    _exam("IBPS_PO_MAINS", "IBPS PO Mains", "IBPS PO Mains", "BANK", [
        ("Reasoning & Computer Aptitude", 45, 60, 1.33, 0.25),
        ("English Language", 35, 40, 1.14, 0.25),
        ("Data Analysis & Interpretation", 35, 60, 1.71, 0.25),
        ("General/Economy/Banking Awareness", 40, 40, 1, 0.25),
    ], 155, 200),
    _exam("IBPS_CLERK_PRE", "IBPS Clerk Prelims", "IBPS Clerk Pre", "BANK", [
        ("English Language", 30, 30, 1, 0.25),
        ("Numerical Ability", 35, 35, 1, 0.25),
        ("Reasoning Ability", 35, 35, 1, 0.25),
    ], 100, 100),
    _exam("IBPS_CLERK_MAINS", "IBPS Clerk Mains", "IBPS Clerk Mains", "BANK", [
        ("General/Financial Awareness", 50, 50, 1, 0.25),
        ("General English", 40, 40, 1, 0.25),
        ("Reasoning Ability & Computer Aptitude", 50, 60, 1.2, 0.25),
        ("Quantitative Aptitude", 50, 50, 1, 0.25),
    ], 190, 200),
    _exam("SBI_PO_PRE", "SBI PO Prelims", "SBI PO Pre", "BANK", [
        ("English Language", 30, 30, 1, 0.25),
        ("Quantitative Aptitude", 35, 35, 1, 0.25),
        ("Reasoning Ability", 35, 35, 1, 0.25),
    ], 100, 100),
    _exam("SBI_CLERK_PRE", "SBI Clerk Prelims", "SBI Clerk Pre", "BANK", [
        ("English Language", 30, 30, 1, 0.25),
        ("Numerical Ability", 35, 35, 1, 0.25),
        ("Reasoning Ability", 35, 35, 1, 0.25),
    ], 100, 100),
    # Police
    _exam("DELHI_POLICE_CONSTABLE", "Delhi Police Constable (CBT)", "DP Constable", "POLICE", [
        ("General Knowledge & Current Affairs", 50, 50, 1, 0.25),
        ("Reasoning Ability", 25, 25, 1, 0.25),
        ("Numerical Ability", 15, 15, 1, 0.25),
        ("Computer Awareness", 10, 10, 1, 0.25),
    ], 100, 100),
    _exam("DELHI_POLICE_HEAD_CONSTABLE", "Delhi Police Head Constable (CBT)", "DP Head Constable", "POLICE", [
        ("General Awareness", 25, 25, 1, 0.25),
        ("Quantitative Aptitude", 20, 20, 1, 0.25),
        ("Reasoning", 25, 25, 1, 0.25),
        ("English Language", 20, 20, 1, 0.25),
        ("Computer Fundamentals", 10, 10, 1, 0.25),
    ], 100, 100),
)

EXAM_CONFIGS: Dict[str, ExamConfig] = {config.id: config for config in _CONFIGS}


def get_exam_config(exam_type: str) -> ExamConfig:
    key = (exam_type or "").strip().upper()
    try:
        return EXAM_CONFIGS[key]
    except KeyError:
        raise UnknownExamTypeError(exam_type) from None


def exams_by_category(category: str) -> List[ExamConfig]:
    return [config for config in EXAM_CONFIGS.values() if config.category == category.upper()]
