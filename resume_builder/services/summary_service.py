from __future__ import annotations

from typing import Optional

import requests

from ..config import get_http_timeout, get_summary_api_url
from ..document import ResumeDocument
from ..logger import context_logger

log = context_logger("summary")

FALLBACK_SUMMARY = "Experienced professional with proven success in various roles."


def build_description(document: ResumeDocument) -> str:
    """Plain-language profile sent to the summarizer, one clause per line."""
    experience = ", ".join(f"{e.position} at {e.company}" for e in document.experience)
    education = ", ".join(f"{e.degree} from {e.school}" for e in document.education)
    skills = ", ".join(document.skills)
    return (
        f"{document.personal_info.name} has experience in: {experience}.\n"
        f"Education includes: {education}.\n"
        f"Skills: {skills}."
    )


class SummaryService:
    """Client for the remote summarization endpoint."""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url or get_summary_api_url()
        self.timeout = timeout or get_http_timeout()

    def request_summary(self, describe: str) -> Optional[str]:
        """
        POST {"describe": ...} and return the `summary` from the JSON reply.

        The status code is not checked: any JSON object is accepted and a
        missing or empty `summary` yields None. Transport errors, bodies that
        are not JSON and a JSON `null` body raise.
        """
        log.debug(f"POST {self.url} ({len(describe)} chars)")
        resp = requests.post(self.url, json={"describe": describe}, timeout=self.timeout)
        data = resp.json()
        if data is None:
            raise ValueError("Summary endpoint answered with a null body")
        if not isinstance(data, dict):
            return None
        summary = data.get("summary")
        if isinstance(summary, str) and summary:
            return summary
        return None
