from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, Optional, Tuple

from bs4 import BeautifulSoup

from .entities import decode
from .models import CandidateInfo

logger = logging.getLogger(__name__)

QUALIFYING_KEYS = ("roll number", "roll no", "candidate name")

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "roll_number": ("Roll No", "Roll Number"),
    "name": ("Candidate Name", "Participant Name", "Name"),
    "exam_level": ("Exam Level", "Post Name", "Subject"),
    "test_date": ("Test Date", "Exam Date"),
    "shift": ("Test Time", "Shift", "Exam Time"),
    "centre_name": (
        "Test Center Name",
        "Test Centre Name",
        "Centre Name",
        "Center Name",
        "Exam Centre",
        "Venue",
        "Venue Name",
    ),
}

COMBINED_DATE_SHIFT = ("Test Date & Shift", "Exam Date & Time", "Date & Shift", "Test Date/Time", "Test Date & Time")

_MONTHS = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*"
DATE_RE = re.compile(
    rf"\b(\d{{1,2}}[/\-.]\d{{1,2}}[/\-.]\d{{2,4}}|\d{{1,2}}(?:st|nd|rd|th)?\s+{_MONTHS},?\s+\d{{4}})\b",
    re.I,
)
SHIFT_RE = re.compile(
    r"(\d{1,2}:\d{2}\s*[AP]\.?M\.?\s*(?:-|–|to)\s*\d{1,2}:\d{2}\s*[AP]\.?M\.?"
    r"|\bShift[\s\-:]*(?:\d+|IV|I{1,3})\b(?![/\-.]\d)"
    r"|\b(?:Morning|Forenoon|Afternoon|Evening)(?:\s+Shift)?\b)",
    re.I,
)

_KEY_PUNCT = re.compile(r"[^\w\s]")
_SPACES = re.compile(r"\s+")


def normalize_key(label: str) -> str:
    return _SPACES.sub(" ", _KEY_PUNCT.sub(" ", label or "").lower()).strip()


def _clean_value(value: str) -> str:
    value = _SPACES.sub(" ", (value or "").replace("\xa0", " ")).strip()
    return value.lstrip(":").strip()


def _table_map(table) -> Dict[str, str]:
    info: Dict[str, str] = {}
    for row in table.find_all("tr"):
        cells = row.find_all(["td", "th"], recursive=False)
        if len(cells) < 2:
            continue
        key = normalize_key(cells[0].get_text(" ", strip=True))
        if key and key not in info:
            info[key] = _clean_value(cells[1].get_text(" ", strip=True))
    return info


def find_info_table(html: str) -> Optional[Dict[str, str]]:
    soup = BeautifulSoup(html or "", "html.parser")
    for table in soup.find_all("table"):
        info = _table_map(table)
        if any(key in info for key in QUALIFYING_KEYS):
            return info
    return None


def _first_alias(info: Dict[str, str], aliases: Iterable[str]) -> str:
    for alias in aliases:
        value = info.get(normalize_key(alias), "")
        if value:
            return value
    return ""


def _label_value(html: str, label: str) -> str:
    patt = re.compile(
        rf"<td[^>]*>[^<]*{re.escape(label)}[^<]*</td>\s*<td[^>]*>\s*:?(?:\s|&nbsp;)*([^<]+)",
        re.I,
    )
    m = patt.search(html)
    return _clean_value(decode(m.group(1))) if m else ""


def split_date_shift(combined: str) -> Tuple[str, str]:
    text = _clean_value(combined)
    date_m = DATE_RE.search(text)
    shift_m = SHIFT_RE.search(text)
    date = date_m.group(1).strip() if date_m else ""
    shift = shift_m.group(1).strip() if shift_m else ""
    return date, shift


def extract_candidate_info(html: str) -> CandidateInfo:
    html = html or ""
    info = find_info_table(html)
    fields: Dict[str, str] = {}

    if info is not None:
        for field_name, aliases in FIELD_ALIASES.items():
            fields[field_name] = _first_alias(info, aliases)
        combined = _first_alias(info, COMBINED_DATE_SHIFT)
    else:
        logger.debug("No candidate table found; falling back to label search")
        for field_name, aliases in FIELD_ALIASES.items():
            fields[field_name] = next((v for v in (_label_value(html, a) for a in aliases) if v), "")
        combined = next((v for v in (_label_value(html, a) for a in COMBINED_DATE_SHIFT) if v), "")
        if not combined and not (fields["test_date"] and fields["shift"]):
            combined = decode(html).replace("\n", " ")

    if combined and not (fields["test_date"] and fields["shift"]):
        date, shift = split_date_shift(combined)
        fields["test_date"] = fields["test_date"] or date
        fields["shift"] = fields["shift"] or shift

    return CandidateInfo(**fields)
