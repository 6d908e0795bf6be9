from __future__ import annotations

import json
import os
from typing import Optional

from openai import OpenAI

from ..config import get_summary_model


class AIService:
    """Single place for OpenAI calls used by the API (service layer)."""

    def __init__(self, api_key: Optional[str] = None):
        self.client = OpenAI(api_key=api_key or os.getenv("OPENAI_API_KEY"))


def summarize_profile(describe: str, model: Optional[str] = None) -> str:
    """ONE OpenAI call turning a plain profile description into a resume summary."""
    svc = AIService()

    model_input = {
        "task": "Write a professional resume summary for the candidate described below.",
        "constraints": [
            "2-3 sentences, no first-person pronouns, no more than 350 characters.",
            "Do NOT add employers, degrees, tools or years that are not in the description.",
            "Return plain text only, no quotes or markdown.",
        ],
        "description": describe or "",
    }

    resp = svc.client.responses.create(
        model=model or get_summary_model(),
        input=[
            {
                "role": "user",
                "content": [{"type": "input_text", "text": json.dumps(model_input)}],
            }
        ],
        temperature=0.3,
    )
    return (resp.output_text or "").strip()
