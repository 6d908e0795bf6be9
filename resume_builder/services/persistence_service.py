from __future__ import annotations

from typing import Optional

import requests

from ..config import get_http_timeout, get_save_api_url
from ..document import ResumeDocument
from ..logger import context_logger

log = context_logger("save")


class SaveFailedError(RuntimeError):
    def __init__(self, status_code: int):
        super().__init__(f"Save endpoint answered HTTP {status_code}")
        self.status_code = status_code


class PersistenceService:
    """Client for the remote save endpoint. Fire-and-forget: nothing is read back."""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url or get_save_api_url()
        self.timeout = timeout or get_http_timeout()

    def save(self, document: ResumeDocument) -> None:
        resp = requests.post(self.url, json=document.to_wire(), timeout=self.timeout)
        # requests' resp.ok also accepts 3xx; only 2xx counts here
        if not 200 <= resp.status_code < 300:
            log.warning(f"{self.url} answered HTTP {resp.status_code}")
            raise SaveFailedError(resp.status_code)
