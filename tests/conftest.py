"""Shared fixtures. The database points at a throwaway SQLite file before any app import."""

import os
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="resume_builder_tests_"))
os.environ["DATABASE_URL"] = f"sqlite:///{(_TMP / 'test.db').as_posix()}"
os.environ.setdefault("SUMMARY_API_URL", "http://summary.test/response")
os.environ.setdefault("SAVE_API_URL", "http://save.test/resume")

import pytest  # noqa: E402
from loguru import logger  # noqa: E402

from resume_builder.document import (  # noqa: E402
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
)


@pytest.fixture
def jane() -> ResumeDocument:
    """Document with one filled entry per section."""
    return ResumeDocument(
        personal_info=PersonalInfo(name="Jane Doe", email="jane@example.com", phone="555-0100", address="Springfield"),
        education=[EducationEntry(id="1", school="State U", degree="BSc", year="2019")],
        experience=[
            ExperienceEntry(
                id="1",
                company="Acme",
                position="Engineer",
                duration="2020 - 2023",
                description="Built things.",
            )
        ],
        skills=["Go", "Rust"],
        summary="",
    )




@pytest.fixture
def log_lines():
    """Messages logged through loguru while the test runs."""
    lines = []
    sink_id = logger.add(lambda m: lines.append(m.record["message"]), level="DEBUG")
    yield lines
    logger.remove(sink_id)
