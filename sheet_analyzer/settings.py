from __future__ import annotations

import logging
import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for raw_line in path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def load_env(root: Path = PROJECT_ROOT) -> None:
    load_env_file(root / ".env.local")
    load_env_file(root / ".env")


def log_level() -> str:
    return os.getenv("SHEET_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def fetch_timeout() -> float:
    try:
        return float(os.getenv("SHEET_FETCH_TIMEOUT", "30"))
    except ValueError:
        return 30.0


def default_exam() -> str:
    return os.getenv("SHEET_DEFAULT_EXAM", "SSC_CGL_PRE").strip().upper() or "SSC_CGL_PRE"


def default_language() -> str:
    language = os.getenv("SHEET_DEFAULT_LANGUAGE", "english").strip().lower()
    return language if language in ("hindi", "english") else "english"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or log_level()), format=LOG_FORMAT)
