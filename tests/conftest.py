import pytest

from sheet_analyzer.models import ExamConfig, SubjectConfig

CANDIDATE_TABLE = """
<table border="1">
  <tr><td>Roll Number</td><td>2201001234</td></tr>
  <tr><td>Candidate Name</td><td>RAHUL SHARMA</td></tr>
  <tr><td>Exam Level</td><td>Tier-I</td></tr>
  <tr><td>Test Date</td><td>14/09/2024</td></tr>
  <tr><td>Test Time</td><td>9:00 AM - 10:00 AM</td></tr>
  <tr><td>Centre Name</td><td>iON Digital Zone, Okhla</td></tr>
</table>
"""


def build_mp_question(qno, colors, images=None, question_image=None):
    """One multi-page question table; colors holds one bgcolor (or None) per option row."""
    question_image = question_image or f"Q{qno}_EN.jpg"
    rows = [
        f'<tr><td><font color="blue">Q.No:&nbsp;{qno}</font></td>'
        f'<td><img src="{question_image}"></td></tr>'
    ]
    for idx, color in enumerate(colors):
        srcs = images[idx] if images else [f"Q{qno}O{idx + 1}_EN.jpg"]
        imgs = "".join(f'<img src="{src}">' for src in srcs)
        attr = f' bgcolor="{color}"' if color else ""
        rows.append(f"<tr{attr}><td>{idx + 1}.</td><td>{imgs}</td></tr>")
    return '<table width="100%">' + "".join(rows) + "</table>"


def build_mp_page(tables, with_candidate=True):
    head = CANDIDATE_TABLE if with_candidate else ""
    return f"<html><body>{head}<div>{''.join(tables)}</div></body></html>"


def build_ak_panel(qno, correct=None, ticked=None, chosen=None, text=None, option_texts=None, question_html=None):
    """
    One answer-key question panel.

    correct and ticked are 1-based option numbers (or None); chosen is the raw
    Chosen Option text, omitted entirely when None.
    """
    if question_html is None:
        question_html = text if text is not None else f"What is item {qno}?"
    option_texts = option_texts or ["Alpha", "Beta", "Gamma", "Delta"]

    rows = [
        f'<tr><td class="bold" valign="top">Q.{qno}</td>'
        f'<td class="bold" style="text-align: left">{question_html}</td></tr>'
    ]
    for idx, option_text in enumerate(option_texts, start=1):
        css = "rightAns" if correct == idx else "wrngAns"
        mark = ""
        if ticked == idx:
            mark = ' <img src="/images/tick.png">'
        elif correct == idx:
            mark = ' <img src="/images/cross.png">'
        rows.append(f'<tr><td></td><td class="{css}">{idx}. {option_text}{mark}</td></tr>')

    menu = ""
    if chosen is not None:
        menu = (
            '<table class="menu-tbl"><tr><td align="right">Status :</td><td class="bold">Answered</td></tr>'
            f'<tr><td align="right">Chosen Option :</td><td class="bold">{chosen}</td></tr></table>'
        )
    return (
        '<div class="question-pnl"><table class="questionRowTbl">'
        + "".join(rows)
        + "</table>"
        + menu
        + "</div>"
    )


def build_section_label(name):
    return f'<div class="section-lbl"><span class="bold">{name}</span></div>'


def build_ak_sheet(body, with_candidate=True):
    head = CANDIDATE_TABLE if with_candidate else ""
    return (
        '<html><head><title>AssessmentQPHTMLMode1</title></head><body>'
        f"{head}<div class=\"grp-cntnr\">{body}</div></body></html>"
    )


@pytest.fixture
def small_exam():
    return ExamConfig(
        id="SMALL",
        name="Small Test",
        subjects=(
            SubjectConfig("Reasoning", "A", 3, 6, 2, 0.5),
            SubjectConfig("Awareness", "B", 3, 6, 2, 0.5),
            SubjectConfig("Computer", "C", 2, 4, 2, 0.5, is_qualifying=True),
        ),
        total_questions=8,
        max_marks=12,
    )


@pytest.fixture
def sequential_exam():
    return ExamConfig(
        id="SEQ",
        name="Sequential Test",
        subjects=(
            SubjectConfig("Maths", "A", 2, 6, 3, 1),
            SubjectConfig("Reasoning", "B", 2, 6, 3, 1),
            SubjectConfig("Computer", "C", 1, 3, 3, 0.5, is_qualifying=True),
        ),
        total_questions=5,
        max_marks=12,
        sequential_sections=True,
    )
