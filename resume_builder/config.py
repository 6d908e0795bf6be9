from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = BASE_DIR / "data"


def get_summary_api_url() -> str:
    # Defaults to the summary route served by this app (routers/summary.py)
    return os.getenv("SUMMARY_API_URL", "http://localhost:8000/v1/summary")


def get_save_api_url() -> str:
    return os.getenv("SAVE_API_URL", "http://localhost:8000/v1/resumes")


def get_http_timeout() -> float:
    return float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", f"sqlite:///{(DATA_DIR / 'resume_builder.db').as_posix()}")


def get_summary_model() -> str:
    return os.getenv("SUMMARY_MODEL", "gpt-4.1-mini")


def get_pdf_font_path() -> Optional[str]:
    return os.getenv("PDF_FONT_PATH") or None


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_logs_path() -> Optional[Path]:
    raw = os.getenv("LOGS_PATH")
    return Path(raw) if raw else None
