from __future__ import annotations

import logging
import ssl
import sys
from pathlib import Path
from urllib.error import URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from flask import Flask, jsonify, request

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sheet_analyzer.analyzer import analyze_html, analyze_pages
from sheet_analyzer.detect import ANSWER_KEY, detect_format
from sheet_analyzer.errors import (
    NoQuestionsParsedError,
    SheetAnalysisError,
    UnknownExamTypeError,
    UnrecognizedFormatError,
)
from sheet_analyzer.exams import EXAM_CATEGORIES, EXAM_CONFIGS, get_exam_config
from sheet_analyzer.models import ExamConfig
from sheet_analyzer.multipage import PartPage
from sheet_analyzer.settings import configure_logging, default_exam, default_language, fetch_timeout, load_env
from sheet_analyzer.urls import part_page_urls

load_env(PROJECT_ROOT)
configure_logging()
logger = logging.getLogger("sheet_analyzer.api")

app = Flask(__name__)


class FetchError(RuntimeError):
    pass


def fetch_html_from_url(response_url: str) -> str:
    parsed = urlparse(response_url)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError("Response URL must start with http:// or https://")

    req = Request(
        response_url,
        headers={
            "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X) AppleWebKit/537.36 (KHTML, like Gecko) Chrome Safari",
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
    )
    timeout = fetch_timeout()

    def _download(context: ssl.SSLContext | None = None) -> tuple[bytes, str]:
        with urlopen(req, timeout=timeout, context=context) as resp:
            raw_local = resp.read()
            charset_local = resp.headers.get_content_charset() or "utf-8"
            return raw_local, charset_local

    try:
        raw, charset = _download()
    except ssl.SSLCertVerificationError:
        raw, charset = _download(ssl._create_unverified_context())
    except URLError as exc:
        if isinstance(exc.reason, ssl.SSLCertVerificationError):
            raw, charset = _download(ssl._create_unverified_context())
        else:
            raise FetchError(f"Failed to fetch URL: {exc}") from exc
    except Exception as exc:
        raise FetchError(f"Failed to fetch URL: {exc}") from exc

    try:
        return raw.decode(charset, errors="ignore")
    except LookupError:
        return raw.decode("utf-8", errors="ignore")


def resolve_exam_config(payload: dict[str, object]) -> ExamConfig:
    custom = payload.get("examConfig")
    if isinstance(custom, dict):
        return ExamConfig.from_dict(custom)
    return get_exam_config(str(payload.get("examType") or default_exam()))


def fetch_part_pages(response_url: str, exam_config: ExamConfig) -> list[PartPage]:
    pages: list[PartPage] = []
    for subject, page_url in part_page_urls(response_url, exam_config):
        logger.info("Fetching part %s: %s", subject.part, page_url)
        try:
            pages.append(PartPage(subject.part, fetch_html_from_url(page_url), page_url))
        except FetchError as exc:
            logger.warning("Part %s could not be fetched: %s", subject.part, exc)
    if not pages:
        raise FetchError(f"Failed to fetch any part page of {response_url}")
    return pages


def error_response(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


@app.get("/")
def index():
    return jsonify({"status": "Live", "exams": len(EXAM_CONFIGS)})


@app.get("/api/exams")
def list_exams():
    return jsonify({
        "success": True,
        "data": [config.to_dict() for config in EXAM_CONFIGS.values()],
        "categories": EXAM_CATEGORIES,
    })


@app.post("/api/analyze")
def analyze():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return error_response("Request body must be a JSON object.", 400)

    response_url = str(payload.get("url") or "").strip()
    html = payload.get("html")
    pages = payload.get("pages")
    language = str(payload.get("language") or default_language())

    try:
        exam_config = resolve_exam_config(payload)

        if isinstance(pages, list) and pages:
            part_pages = [
                PartPage(str(p.get("part", "")).upper(), str(p.get("html") or ""), str(p.get("url") or response_url))
                for p in pages
                if isinstance(p, dict)
            ]
            result = analyze_pages(part_pages, exam_config, language)
        elif isinstance(html, str) and html.strip():
            result = analyze_html(html, response_url, exam_config, language)
        elif response_url:
            first_html = fetch_html_from_url(response_url)
            if detect_format(first_html) == ANSWER_KEY:
                result = analyze_html(first_html, response_url, exam_config, language)
            else:
                result = analyze_pages(fetch_part_pages(response_url, exam_config), exam_config, language)
        else:
            return error_response("Provide 'html', 'pages' or 'url'.", 400)
    except UnknownExamTypeError as exc:
        return error_response(str(exc), 400)
    except (UnrecognizedFormatError, NoQuestionsParsedError) as exc:
        return error_response(str(exc), 422)
    except FetchError as exc:
        return error_response(str(exc), 502)
    except (SheetAnalysisError, ValueError) as exc:
        return error_response(str(exc), 400)

    return jsonify({"success": True, "data": result.to_dict()})


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5000, debug=True)
