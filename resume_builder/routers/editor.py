from __future__ import annotations

from enum import Enum
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel

from ..editor import EditorSession, notifications_out, sessions
from ..layout import to_html
from ..pdf import safe_filename

router = APIRouter(prefix="/v1/editor", tags=["editor"])


def get_session(session_id: str) -> EditorSession:
    try:
        return sessions.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Session not found")


def _state_out(session: EditorSession) -> dict:
    out = session.state()
    out["notifications"] = notifications_out(session.pop_notifications())
    return out


def _edit(session: EditorSession, fn, *args) -> dict:
    try:
        fn(*args)
    except KeyError:
        raise HTTPException(status_code=404, detail="Entry not found")
    except IndexError:
        raise HTTPException(status_code=404, detail="Skill not found")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _state_out(session)


# ---------------------------
# API Models
# ---------------------------


class SectionName(str, Enum):
    education = "education"
    experience = "experience"


class TemplateIn(BaseModel):
    template: str


class FieldIn(BaseModel):
    field: str
    value: str = ""


class SummaryIn(BaseModel):
    summary: str = ""


class SkillIn(BaseModel):
    value: str = ""


# ---------------------------
# Sessions
# ---------------------------


@router.post("/sessions")
def create_session():
    return _state_out(sessions.create())


@router.get("/sessions/{session_id}")
def get_state(session: EditorSession = Depends(get_session)):
    return _state_out(session)


@router.delete("/sessions/{session_id}")
def discard_session(session: EditorSession = Depends(get_session)):
    sessions.discard(session.id)
    return {"ok": True}


@router.get("/sessions/{session_id}/preview", response_class=HTMLResponse)
def preview(session: EditorSession = Depends(get_session)):
    return HTMLResponse(to_html(session.page()))


# ---------------------------
# Scalar edits
# ---------------------------


@router.put("/sessions/{session_id}/template")
def set_template(payload: TemplateIn, session: EditorSession = Depends(get_session)):
    session.set_template(payload.template)
    return _state_out(session)


@router.patch("/sessions/{session_id}/personal-info")
def update_personal_info(payload: FieldIn, session: EditorSession = Depends(get_session)):
    return _edit(session, session.update_personal_info, payload.field, payload.value)


@router.put("/sessions/{session_id}/summary")
def update_summary(payload: SummaryIn, session: EditorSession = Depends(get_session)):
    return _edit(session, session.update_summary, payload.summary)


# ---------------------------
# Actions (registered before /{section} so the literal paths win)
# ---------------------------


@router.post("/sessions/{session_id}/summarize")
def summarize(session: EditorSession = Depends(get_session)):
    session.summarize()
    return _state_out(session)


@router.post("/sessions/{session_id}/save")
def save(session: EditorSession = Depends(get_session)):
    session.save()
    return _state_out(session)


@router.post("/sessions/{session_id}/export")
def export(session: EditorSession = Depends(get_session)):
    result = session.export()
    if not result.ok:
        return JSONResponse(status_code=409 if result.refused else 500, content=_state_out(session))

    disposition = (
        f'attachment; filename="{safe_filename(result.filename)}"; '
        f"filename*=UTF-8''{quote(result.filename)}"
    )
    return Response(
        content=result.content,
        media_type="application/pdf",
        headers={"Content-Disposition": disposition},
    )


# ---------------------------
# Skills
# ---------------------------


@router.post("/sessions/{session_id}/skills")
def add_skill(session: EditorSession = Depends(get_session)):
    return _edit(session, session.add_skill)


@router.patch("/sessions/{session_id}/skills/{index}")
def update_skill(index: int, payload: SkillIn, session: EditorSession = Depends(get_session)):
    return _edit(session, session.update_skill, index, payload.value)


@router.delete("/sessions/{session_id}/skills/{index}")
def remove_skill(index: int, session: EditorSession = Depends(get_session)):
    return _edit(session, session.remove_skill, index)


# ---------------------------
# Education / experience entries
# ---------------------------


@router.post("/sessions/{session_id}/{section}")
def add_entry(
    section: SectionName,
    session: EditorSession = Depends(get_session),
):
    return _edit(session, session.add_entry, section.value)


@router.patch("/sessions/{session_id}/{section}/{entry_id}")
def update_entry(
    section: SectionName,
    entry_id: str,
    payload: FieldIn,
    session: EditorSession = Depends(get_session),
):
    return _edit(session, session.update_entry, section.value, entry_id, payload.field, payload.value)


@router.delete("/sessions/{session_id}/{section}/{entry_id}")
def remove_entry(
    section: SectionName,
    entry_id: str,
    session: EditorSession = Depends(get_session),
):
    return _edit(session, session.remove_entry, section.value, entry_id)
