from conftest import CANDIDATE_TABLE

from sheet_analyzer.candidate import extract_candidate_info, normalize_key, split_date_shift
from sheet_analyzer.models import CandidateInfo


def test_normalize_key():
    assert normalize_key("  Roll No.: ") == "roll no"
    assert normalize_key("Test Date & Shift") == "test date shift"


def test_extract_from_info_table():
    info = extract_candidate_info(f"<html><body>{CANDIDATE_TABLE}</body></html>")
    assert info == CandidateInfo(
        roll_number="2201001234",
        name="RAHUL SHARMA",
        exam_level="Tier-I",
        test_date="14/09/2024",
        shift="9:00 AM - 10:00 AM",
        centre_name="iON Digital Zone, Okhla",
    )


def test_participant_name_alias():
    html = """
    <table>
      <tr><td>Roll No</td><td>: 99887766</td></tr>
      <tr><td>Participant Name</td><td>&nbsp;ASHA DEVI</td></tr>
    </table>
    """
    info = extract_candidate_info(html)
    assert info.roll_number == "99887766"
    assert info.name == "ASHA DEVI"
    assert info.centre_name == ""


def test_skips_tables_without_candidate_keys():
    html = """
    <table><tr><td>Section</td><td>Reasoning</td></tr></table>
    <table><tr><th>Candidate Name</th><td>MEERA</td></tr></table>
    """
    assert extract_candidate_info(html).name == "MEERA"


def test_combined_date_and_shift():
    html = """
    <table>
      <tr><td>Roll Number</td><td>12345</td></tr>
      <tr><td>Test Date &amp; Shift</td><td>14/09/2024 Shift-2</td></tr>
    </table>
    """
    info = extract_candidate_info(html)
    assert info.test_date == "14/09/2024"
    assert info.shift == "Shift-2"


def test_falls_back_to_document_text():
    html = "<div><p>Exam held on 5 March 2024, 2:30 PM - 3:30 PM</p></div>"
    info = extract_candidate_info(html)
    assert info.test_date == "5 March 2024"
    assert info.shift == "2:30 PM - 3:30 PM"
    assert info.roll_number == ""
    assert info.name == ""


def test_empty_document():
    assert extract_candidate_info("") == CandidateInfo()
    assert extract_candidate_info(None) == CandidateInfo()


def test_split_date_shift():
    assert split_date_shift("21st August, 2023 Morning Shift") == ("21st August, 2023", "Morning Shift")
    assert split_date_shift("nothing useful") == ("", "")


def test_shift_label_before_date_is_not_a_shift_number():
    info = extract_candidate_info("<div>Test Date &amp; Shift: 14/09/2024 9:00 AM - 10:00 AM</div>")
    assert info.test_date == "14/09/2024"
    assert info.shift == "9:00 AM - 10:00 AM"
    assert split_date_shift("Shift 2 on 14-09-2024") == ("14-09-2024", "Shift 2")
