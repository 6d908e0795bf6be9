from __future__ import annotations

from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Section = Literal["education", "experience"]

PERSONAL_FIELDS = ("name", "email", "phone", "address")
EDUCATION_FIELDS = ("school", "degree", "year")
EXPERIENCE_FIELDS = ("company", "position", "duration", "description")


class PersonalInfo(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""


class EducationEntry(BaseModel):
    id: str
    school: str = ""
    degree: str = ""
    year: str = ""


class ExperienceEntry(BaseModel):
    id: str
    company: str = ""
    position: str = ""
    duration: str = ""
    description: str = ""


Entry = Union[EducationEntry, ExperienceEntry]


class ResumeDocument(BaseModel):
    """The whole resume for one editing session (wire format uses camelCase)."""

    model_config = ConfigDict(populate_by_name=True)

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo, alias="personalInfo")
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    summary: str = ""

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


_ENTRY_TYPES = {"education": EducationEntry, "experience": ExperienceEntry}
_ENTRY_FIELDS = {"education": EDUCATION_FIELDS, "experience": EXPERIENCE_FIELDS}


def new_document() -> ResumeDocument:
    return ResumeDocument(
        personal_info=PersonalInfo(),
        education=[EducationEntry(id="1")],
        experience=[ExperienceEntry(id="1")],
        skills=[""],
        summary="",
    )


def entry_has_content(entry: Entry) -> bool:
    """An entry counts as present once either of its two headline fields is filled."""
    if isinstance(entry, EducationEntry):
        return bool(entry.school or entry.degree)
    return bool(entry.company or entry.position)


# ---------------------------
# Scalar fields
# ---------------------------


def update_personal_info(doc: ResumeDocument, field: str, value: str) -> ResumeDocument:
    if field not in PERSONAL_FIELDS:
        raise ValueError(f"Unknown personal info field: {field}")
    info = doc.personal_info.model_copy(update={field: value})
    return doc.model_copy(update={"personal_info": info})


def update_summary(doc: ResumeDocument, value: str) -> ResumeDocument:
    return doc.model_copy(update={"summary": value})


# ---------------------------
# Education / experience entries
# ---------------------------


def _check_section(section: str) -> None:
    if section not in _ENTRY_TYPES:
        raise ValueError(f"Unknown section: {section}")


def _next_id(entries: List[Entry]) -> str:
    ids = [int(e.id) for e in entries if e.id.isdigit()]
    return str(max(ids, default=0) + 1)


def _index_of(entries: List[Entry], entry_id: str) -> int:
    for i, e in enumerate(entries):
        if e.id == entry_id:
            return i
    raise KeyError(entry_id)


def add_entry(doc: ResumeDocument, section: Section) -> ResumeDocument:
    _check_section(section)
    entries = list(getattr(doc, section))
    entries.append(_ENTRY_TYPES[section](id=_next_id(entries)))
    return doc.model_copy(update={section: entries})


def update_entry(
    doc: ResumeDocument, section: Section, entry_id: str, field: str, value: str
) -> ResumeDocument:
    _check_section(section)
    if field not in _ENTRY_FIELDS[section]:
        raise ValueError(f"Unknown {section} field: {field}")
    entries = list(getattr(doc, section))
    idx = _index_of(entries, entry_id)
    entries[idx] = entries[idx].model_copy(update={field: value})
    return doc.model_copy(update={section: entries})


def remove_entry(doc: ResumeDocument, section: Section, entry_id: str) -> ResumeDocument:
    _check_section(section)
    entries = list(getattr(doc, section))
    idx = _index_of(entries, entry_id)
    if len(entries) == 1:
        # keep one blank slot so the form always has a row to edit
        entries[0] = _ENTRY_TYPES[section](id=entry_id)
    else:
        del entries[idx]
    return doc.model_copy(update={section: entries})


# ---------------------------
# Skills
# ---------------------------


def add_skill(doc: ResumeDocument) -> ResumeDocument:
    return doc.model_copy(update={"skills": [*doc.skills, ""]})


def update_skill(doc: ResumeDocument, index: int, value: str) -> ResumeDocument:
    skills = list(doc.skills)
    if not 0 <= index < len(skills):
        raise IndexError(index)
    skills[index] = value
    return doc.model_copy(update={"skills": skills})


def remove_skill(doc: ResumeDocument, index: int) -> ResumeDocument:
    skills = list(doc.skills)
    if not 0 <= index < len(skills):
        raise IndexError(index)
    del skills[index]
    return doc.model_copy(update={"skills": skills})
