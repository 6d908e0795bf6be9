from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..logger import context_logger
from ..services.ai_service import summarize_profile

router = APIRouter(prefix="/v1", tags=["summary"])
log = context_logger("summary")


class SummaryIn(BaseModel):
    describe: str = ""


class SummaryOut(BaseModel):
    summary: str


@router.post("/summary", response_model=SummaryOut)
def generate_summary(payload: SummaryIn):
    try:
        text = summarize_profile(payload.describe)
    except Exception as e:
        log.error(f"OpenAI summary call failed: {e}")
        raise HTTPException(status_code=502, detail="Summary generation failed")
    return SummaryOut(summary=text)
