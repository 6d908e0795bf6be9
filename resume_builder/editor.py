"""
Editor shell.

An EditorSession owns exactly one ResumeDocument. Field edits go through the
pure functions in document.py and swap the document under a lock; the three
actions (summarize, save, export) talk to their collaborators outside the
lock and never raise: failures end up as notifications.

Each action has an idle/pending/failed flag. A second dispatch of an action
that is still pending is refused rather than racing the first one.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from . import document as model
from .document import ResumeDocument
from .layout import Node, find_by_id
from .logger import context_logger
from .pdf import export_filename, image_to_pdf_bytes, rasterize, RASTER_SCALE
from .render import PREVIEW_ELEMENT_ID, TemplateId, render_preview
from .services.persistence_service import PersistenceService
from .services.summary_service import FALLBACK_SUMMARY, SummaryService, build_description

log = context_logger("editor")
summary_log = context_logger("summary")
save_log = context_logger("save")
export_log = context_logger("export")

ACTIONS = ("summarize", "save", "export")


class ActionStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    FAILED = "failed"


@dataclass
class Notification:
    level: str  # info | success | warning | error
    message: str


@dataclass
class ExportResult:
    filename: Optional[str] = None
    content: Optional[bytes] = None
    # set when the export was not attempted because another one is pending
    refused: bool = False

    @property
    def ok(self) -> bool:
        return self.content is not None


class EditorSession:
    def __init__(
        self,
        session_id: Optional[str] = None,
        document: Optional[ResumeDocument] = None,
        template: str = TemplateId.MODERN.value,
        summary_service: Optional[SummaryService] = None,
        persistence_service: Optional[PersistenceService] = None,
        rasterizer: Callable = rasterize,
    ):
        self.id = session_id or str(uuid.uuid4())
        self._document = document if document is not None else model.new_document()
        self.template = template
        self.summary_service = summary_service or SummaryService()
        self.persistence_service = persistence_service or PersistenceService()
        self.rasterizer = rasterizer
        self.actions: Dict[str, ActionStatus] = {a: ActionStatus.IDLE for a in ACTIONS}
        self.notifications: List[Notification] = []
        self._lock = threading.Lock()

    @property
    def document(self) -> ResumeDocument:
        return self._document

    def _apply(self, fn: Callable, *args) -> ResumeDocument:
        with self._lock:
            self._document = fn(self._document, *args)
            return self._document

    # ---------------------------
    # Edits
    # ---------------------------

    def set_template(self, template: str) -> None:
        self.template = template

    def update_personal_info(self, field: str, value: str) -> ResumeDocument:
        return self._apply(model.update_personal_info, field, value)

    def update_summary(self, value: str) -> ResumeDocument:
        return self._apply(model.update_summary, value)

    def add_entry(self, section: str) -> ResumeDocument:
        return self._apply(model.add_entry, section)

    def update_entry(self, section: str, entry_id: str, field: str, value: str) -> ResumeDocument:
        return self._apply(model.update_entry, section, entry_id, field, value)

    def remove_entry(self, section: str, entry_id: str) -> ResumeDocument:
        return self._apply(model.remove_entry, section, entry_id)

    def add_skill(self) -> ResumeDocument:
        return self._apply(model.add_skill)

    def update_skill(self, index: int, value: str) -> ResumeDocument:
        return self._apply(model.update_skill, index, value)

    def remove_skill(self, index: int) -> ResumeDocument:
        return self._apply(model.remove_skill, index)

    def page(self) -> Node:
        return render_preview(self._document, self.template)

    # ---------------------------
    # Notifications / action flags
    # ---------------------------

    def notify(self, level: str, message: str) -> Notification:
        n = Notification(level=level, message=message)
        self.notifications.append(n)
        return n

    def pop_notifications(self) -> List[Notification]:
        out, self.notifications = self.notifications, []
        return out

    def _begin(self, action: str) -> bool:
        with self._lock:
            if self.actions[action] == ActionStatus.PENDING:
                started = False
            else:
                self.actions[action] = ActionStatus.PENDING
                started = True
        if not started:
            log.warning(f"{action} dispatched while pending (session {self.id})")
            self.notify("warning", f"{action.capitalize()} already in progress.")
        return started

    def _finish(self, action: str, ok: bool) -> None:
        with self._lock:
            self.actions[action] = ActionStatus.IDLE if ok else ActionStatus.FAILED

    # ---------------------------
    # Actions
    # ---------------------------

    def summarize(self) -> str:
        """Replace the summary with generated text, or the fallback sentence on failure."""
        if not self._begin("summarize"):
            return self._document.summary

        describe = build_description(self._document)
        try:
            generated = self.summary_service.request_summary(describe)
        except Exception:
            summary_log.exception(f"Generation failed (session {self.id})")
            self._apply(model.update_summary, FALLBACK_SUMMARY)
            self.notify("warning", "AI summary generation failed. Using fallback.")
            self._finish("summarize", ok=False)
            return FALLBACK_SUMMARY

        with self._lock:
            # keep whatever summary is current when the reply carries none
            summary = generated or self._document.summary
            self._document = model.update_summary(self._document, summary)
        summary_log.info(f"Summary updated (session {self.id})")
        self.notify("success", "AI Summary Generated")
        self._finish("summarize", ok=True)
        return summary

    def save(self) -> bool:
        if not self._begin("save"):
            return False

        try:
            self.persistence_service.save(self._document)
        except Exception:
            save_log.exception(f"Save to API failed (session {self.id})")
            self.notify("error", "Failed to save resume. Please try again.")
            self._finish("save", ok=False)
            return False

        save_log.info(f"Resume saved (session {self.id})")
        self.notify("success", "Resume saved successfully!")
        self._finish("save", ok=True)
        return True

    def export(self, page: Optional[Node] = None) -> ExportResult:
        if not self._begin("export"):
            return ExportResult(refused=True)

        self.notify("info", "Generating PDF...")
        element = find_by_id(page if page is not None else self.page(), PREVIEW_ELEMENT_ID)
        if element is None:
            export_log.warning(f"Aborted, no #{PREVIEW_ELEMENT_ID} element (session {self.id})")
            self.notify("error", "Resume preview not found.")
            self._finish("export", ok=False)
            return ExportResult()

        filename = export_filename(self._document)
        try:
            image = self.rasterizer(element, RASTER_SCALE)
            content = image_to_pdf_bytes(image, title=self._document.personal_info.name or "Resume")
        except Exception:
            export_log.exception(f"PDF generation error (session {self.id})")
            self.notify("error", "Failed to generate PDF.")
            self._finish("export", ok=False)
            return ExportResult()

        export_log.info(f"Exported {filename} ({len(content)} bytes)")
        self._finish("export", ok=True)
        return ExportResult(filename=filename, content=content)

    def state(self) -> dict:
        return {
            "session_id": self.id,
            "template": self.template,
            "document": self._document.to_wire(),
            "actions": {k: v.value for k, v in self.actions.items()},
        }


def notifications_out(items: List[Notification]) -> List[dict]:
    return [asdict(n) for n in items]


class SessionStore:
    """In-memory editor sessions; nothing outlives the process."""

    def __init__(self, factory: Callable[..., EditorSession] = EditorSession):
        self.factory = factory
        self._sessions: Dict[str, EditorSession] = {}
        self._lock = threading.Lock()

    def create(self, **kwargs) -> EditorSession:
        session = self.factory(**kwargs)
        with self._lock:
            self._sessions[session.id] = session
        log.debug(f"Session {session.id} created")
        return session

    def get(self, session_id: str) -> EditorSession:
        with self._lock:
            return self._sessions[session_id]

    def discard(self, session_id: str) -> None:
        with self._lock:
            del self._sessions[session_id]
        log.debug(f"Session {session_id} discarded")

    def __len__(self) -> int:
        return len(self._sessions)


sessions = SessionStore()
