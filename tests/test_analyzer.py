import pytest
from conftest import build_ak_panel, build_ak_sheet, build_mp_page, build_mp_question, build_section_label

from sheet_analyzer.analyzer import analyze_html, analyze_pages
from sheet_analyzer.detect import ANSWER_KEY, MULTI_PAGE
from sheet_analyzer.errors import NoQuestionsParsedError, SheetAnalysisError, UnrecognizedFormatError
from sheet_analyzer.multipage import PartPage

BASE = "https://ssc.example.com/per/g27/pub/2207/"


def answer_key_sheet(with_candidate=True):
    return build_ak_sheet(
        build_section_label("Reasoning")
        + build_ak_panel(1, correct=1, ticked=1, chosen="1")
        + build_ak_panel(2, correct=2, ticked=1, chosen="1")
        + build_section_label("Awareness")
        + build_ak_panel(3, correct=3, chosen="--")
        + build_ak_panel(4)
        + build_section_label("Computer")
        + build_ak_panel(5, correct=1, ticked=1, chosen="1"),
        with_candidate=with_candidate,
    )


def test_analyze_answer_key(small_exam):
    result = analyze_html(answer_key_sheet(), "https://rrb.example.com/per/sheet.html", small_exam)

    assert result.source_format == ANSWER_KEY
    assert result.total_questions == 5
    assert [s.score for s in result.sections] == [1.5, 2, 2]
    assert result.total_score == 3.5
    assert result.max_score == 12
    assert (result.correct_count, result.wrong_count, result.unattempted_count, result.bonus_count) == (2, 1, 1, 1)
    assert result.candidate.name == "RAHUL SHARMA"
    assert result.candidate.exam_level == "Tier-I"
    assert result.language == "english"


def test_exam_level_defaults_to_config_name(small_exam):
    result = analyze_html(answer_key_sheet(with_candidate=False), "", small_exam, language="hindi")
    assert result.candidate.exam_level == "Small Test"
    assert result.candidate.roll_number == ""
    assert result.language == "hindi"


def test_analyze_single_multi_page_document(small_exam):
    html = build_mp_page([build_mp_question(1, ["green", None, None, None])])
    result = analyze_html(html, BASE + "ViewCandResponse2.aspx?rollno=1", small_exam)

    assert result.source_format == MULTI_PAGE
    [question] = result.questions
    assert (question.question_number, question.part) == (4, "B")
    assert question.options[0].image_url == BASE + "Q1O1_EN.jpg"


def test_unknown_page_url_defaults_to_first_part(small_exam):
    html = build_mp_page([build_mp_question(2, ["red", "yellow", None, None])])
    result = analyze_html(html, "", small_exam)
    assert [(q.question_number, q.part) for q in result.questions] == [(2, "A")]


def test_analyze_pages(small_exam):
    pages = [
        PartPage("A", build_mp_page([build_mp_question(1, ["green", None, None, None])]), BASE + "ViewCandResponse.aspx"),
        PartPage("C", build_mp_page([build_mp_question(2, ["red", "yellow", None, None])]), BASE + "ViewCandResponse3.aspx"),
    ]
    result = analyze_pages(pages, small_exam)

    assert [q.question_number for q in result.questions] == [1, 8]
    assert result.total_score == 2
    assert result.sections[2].score == -0.5
    assert result.to_dict()["sourceFormat"] == "multi_page"


def test_sequential_sections_are_reassigned(sequential_exam):
    html = build_ak_sheet(
        build_section_label("Maths")
        + "".join(build_ak_panel(n, correct=1, ticked=1, chosen="1") for n in range(1, 6))
    )
    result = analyze_html(html, "", sequential_exam)

    assert [q.part for q in result.questions] == ["A", "A", "B", "B", "C"]
    assert [s.score for s in result.sections] == [6, 6, 3]
    assert result.total_score == 12


def test_no_questions(small_exam):
    with pytest.raises(NoQuestionsParsedError, match="Could not parse questions") as exc:
        analyze_html('<div class="question-pnl"><p>empty</p></div>', "", small_exam)
    assert exc.value.source_format == ANSWER_KEY


def test_no_questions_on_any_page(small_exam):
    with pytest.raises(NoQuestionsParsedError):
        analyze_pages([PartPage("A", "<html></html>")], small_exam)


def test_unrecognized_document(small_exam):
    with pytest.raises(UnrecognizedFormatError):
        analyze_html("<html><body>Login</body></html>", "", small_exam)


def test_unsupported_language(small_exam):
    with pytest.raises(SheetAnalysisError, match="language"):
        analyze_html(answer_key_sheet(), "", small_exam, language="tamil")
