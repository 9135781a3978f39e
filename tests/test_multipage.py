import logging

from conftest import build_mp_page, build_mp_question

from sheet_analyzer.models import STATUS_BONUS, STATUS_CORRECT, STATUS_UNATTEMPTED, STATUS_WRONG
from sheet_analyzer.multipage import PartPage, option_color, parse_pages, parse_part

BASE = "https://ssc.example.com/per/g27/pub/2207/"
PAGE_A = BASE + "ViewCandResponse.aspx?rollno=1"
PAGE_B = BASE + "ViewCandResponse2.aspx?rollno=1"


def test_option_color_from_row_or_cell():
    assert option_color(' bgcolor="Green"', "<td>1.</td>") == "green"
    assert option_color(' style="background-color: red;"', "") == "red"
    assert option_color("", '<td bgcolor="yellow">1.</td>') == "yellow"
    assert option_color("", "<td>1.</td>") == ""


def test_color_coded_options(small_exam):
    html = build_mp_page([
        build_mp_question(1, ["green", None, None, None]),
        build_mp_question(2, ["red", "yellow", None, None]),
        build_mp_question(3, [None, "yellow", None, None]),
    ])
    reasoning = small_exam.subjects[0]
    questions = parse_part(html, "A", BASE, reasoning, 0)

    assert [q.question_number for q in questions] == [1, 2, 3]
    assert [q.status for q in questions] == [STATUS_CORRECT, STATUS_WRONG, STATUS_UNATTEMPTED]
    assert [q.marks_awarded for q in questions] == [2, -0.5, 0]

    first = questions[0].options[0]
    assert first.is_selected and first.is_correct
    wrong = questions[1].options
    assert wrong[0].is_selected and not wrong[0].is_correct
    assert wrong[1].is_correct and not wrong[1].is_selected
    assert not any(o.is_selected for o in questions[2].options)


def test_no_color_means_bonus(small_exam):
    html = build_mp_page([build_mp_question(1, [None, None, None, None])])
    [question] = parse_part(html, "A", BASE, small_exam.subjects[0], 0)
    assert question.status == STATUS_BONUS
    assert question.is_bonus
    assert question.marks_awarded == 2


def test_image_urls_and_language_variants(small_exam):
    html = build_mp_page([
        build_mp_question(
            1,
            ["green", None, None, None],
            images=[["Q1O1_HI.jpg", "Q1O1_EN.jpg"], ["Q1O2_EN.jpg"], ["Q1O3.jpg"], ["Q1O4_EN.jpg"]],
        )
    ])
    [question] = parse_part(html, "A", BASE, small_exam.subjects[0], 0)

    assert question.question_image_url == BASE + "Q1_EN.jpg"
    assert question.question_image_url_hindi == BASE + "Q1_HI.jpg"
    assert question.question_image_url_english == BASE + "Q1_EN.jpg"

    a, b, c, _ = question.options
    assert a.image_url == BASE + "Q1O1_HI.jpg"
    assert (a.image_url_hindi, a.image_url_english) == (BASE + "Q1O1_HI.jpg", BASE + "Q1O1_EN.jpg")
    assert (b.image_url_hindi, b.image_url_english) == (BASE + "Q1O2_EN.jpg", BASE + "Q1O2_EN.jpg")
    assert c.image_url_hindi == c.image_url_english == BASE + "Q1O3.jpg"


def test_single_language_option_image_is_mirrored(small_exam):
    html = build_mp_page([
        build_mp_question(1, ["green", None], images=[["O1_EN.jpg"], ["O2_HI.jpg"]]),
    ])
    [question] = parse_part(html, "A", BASE, small_exam.subjects[0], 0)
    first, second = question.options[:2]
    assert first.image_url_hindi == first.image_url_english == BASE + "O1_EN.jpg"
    assert second.image_url_hindi == second.image_url_english == BASE + "O2_HI.jpg"


def test_fewer_than_two_options_is_skipped(small_exam):
    html = build_mp_page([
        build_mp_question(1, ["green"]),
        build_mp_question(2, ["green", None, None, None]),
    ])
    questions = parse_part(html, "A", BASE, small_exam.subjects[0], 0)
    assert [q.question_number for q in questions] == [2]


def test_missing_options_are_padded(small_exam):
    html = build_mp_page([build_mp_question(1, ["red", "yellow", None])])
    [question] = parse_part(html, "A", BASE, small_exam.subjects[0], 0)
    assert [o.id for o in question.options] == ["A", "B", "C", "D"]
    assert question.options[3].image_url == ""
    assert not question.options[3].is_selected


def test_parse_pages_offsets_and_candidate(small_exam):
    page_a = build_mp_page([
        build_mp_question(1, ["green", None, None, None]),
        build_mp_question(2, [None, "yellow", None, None]),
    ])
    page_b = build_mp_page(
        [build_mp_question(1, ["red", None, "yellow", None]), build_mp_question(3, ["green", None, None, None])],
        with_candidate=False,
    )
    parsed = parse_pages([PartPage("B", page_b, PAGE_B), PartPage("A", page_a, PAGE_A)], small_exam)

    assert [(q.question_number, q.part, q.subject) for q in parsed.questions] == [
        (1, "A", "Reasoning"),
        (2, "A", "Reasoning"),
        (4, "B", "Awareness"),
        (6, "B", "Awareness"),
    ]
    assert parsed.candidate.roll_number == "2201001234"
    assert parsed.candidate.shift == "9:00 AM - 10:00 AM"


def test_parse_pages_ignores_unknown_part(small_exam, caplog):
    page = build_mp_page([build_mp_question(1, ["green", None, None, None])])
    with caplog.at_level(logging.WARNING):
        parsed = parse_pages([PartPage("Z", page, PAGE_A)], small_exam)
    assert parsed.questions == ()
    assert "part Z" in caplog.text
