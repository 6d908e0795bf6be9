from __future__ import annotations

import json
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import SessionLocal
from ..document import ResumeDocument
from ..logger import context_logger
from ..models import SavedResume

router = APIRouter(prefix="/v1", tags=["resumes"])
log = context_logger("save")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@router.post("/resumes")
def save_resume(payload: ResumeDocument, db: Session = Depends(get_db)):
    """Store a full resume document. Write-only: there is no endpoint to read it back."""
    row = SavedResume(
        id=str(uuid.uuid4()),
        name=payload.personal_info.name or None,
        content_json=json.dumps(payload.to_wire()),
        created_at=datetime.utcnow(),
    )
    db.add(row)
    db.commit()
    log.info(f"Stored resume {row.id}")
    return {"ok": True, "id": row.id}
