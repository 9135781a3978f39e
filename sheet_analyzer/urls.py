from __future__ import annotations

import re
from typing import Dict, List, Tuple
from urllib.parse import urlsplit

from .models import ExamConfig, SubjectConfig

_LANG_SUFFIX = re.compile(r"_(hi|en)(\.[A-Za-z0-9]+)(?=$|[?#])", re.I)

PART_PAGE_FILES = {
    "A": "ViewCandResponse.aspx",
    "B": "ViewCandResponse2.aspx",
    "C": "ViewCandResponse3.aspx",
    "D": "ViewCandResponse4.aspx",
    "E": "ViewCandResponse5.aspx",
}


def base_dir_of(url: str) -> str:
    path = (url or "").split("?", 1)[0].split("#", 1)[0]
    return path[: path.rfind("/") + 1]


def _origin(base_dir: str) -> str:
    try:
        parts = urlsplit(base_dir)
    except ValueError:
        return ""
    if not parts.scheme or not parts.netloc:
        return ""
    return f"{parts.scheme}://{parts.netloc}"


def resolve(src: str, base_dir: str) -> str:
    src = (src or "").strip()
    if not src:
        return ""
    lowered = src.lower()
    if lowered.startswith(("http://", "https://", "data:")):
        return src
    if src.startswith("//"):
        return "https:" + src
    if src.startswith("/"):
        origin = _origin(base_dir or "")
        if origin:
            return origin + src
        return (base_dir or "").rstrip("/") + src
    return (base_dir or "") + src


def _swap_suffix(match: "re.Match[str]") -> str:
    lang, ext = match.group(1), match.group(2)
    other = {"hi": "en", "en": "hi"}[lang.lower()]
    return "_" + (other.upper() if lang.isupper() else other) + ext


def language_variants(url: object) -> Dict[str, str]:
    if not isinstance(url, str) or not url.strip():
        return {}

    matches = list(_LANG_SUFFIX.finditer(url))
    if not matches:
        return {"hindi": url, "english": url}

    last = matches[-1]
    swapped = url[: last.start()] + _swap_suffix(last) + url[last.end():]
    if last.group(1).lower() == "hi":
        return {"hindi": url, "english": swapped}
    return {"hindi": swapped, "english": url}


def image_language(url: str) -> str:
    """Return 'hindi', 'english' or '' for the filename's language marker."""
    matches = list(_LANG_SUFFIX.finditer(url or ""))
    if not matches:
        return ""
    return "hindi" if matches[-1].group(1).lower() == "hi" else "english"


def part_for_url(url: str) -> str:
    file_name = (url or "").split("?", 1)[0].rsplit("/", 1)[-1].lower()
    for part, page_file in PART_PAGE_FILES.items():
        if page_file.lower() == file_name:
            return part
    return ""


def part_page_urls(url: str, exam_config: ExamConfig) -> List[Tuple[SubjectConfig, str]]:
    """Page URL of every subject of a multi-page response sheet, derived from any one page."""
    query = url.split("?", 1)[1] if "?" in url else ""
    base_dir = base_dir_of(url)

    pages: List[Tuple[SubjectConfig, str]] = []
    for subject in exam_config.subjects:
        file_name = PART_PAGE_FILES.get(subject.part)
        if not file_name:
            continue
        page_url = f"{base_dir}{file_name}"
        if query:
            page_url += f"?{query}"
        pages.append((subject, page_url))
    return pages
