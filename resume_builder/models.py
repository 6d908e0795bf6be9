from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, DateTime, String, Text
from .db import Base


class SavedResume(Base):
    """One row per save request; documents are stored whole, never read back by the editor."""

    __tablename__ = "saved_resumes"
    id = Column(String, primary_key=True)
    name = Column(String, nullable=True)  # personalInfo.name at save time
    content_json = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
