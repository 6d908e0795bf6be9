"""
Resume templates.

`render(document, template)` maps a ResumeDocument to a visual tree (layout.Node).
It is pure: no I/O, no state, equal inputs give equal trees.

Visibility differs per template on purpose:
- modern hides experience/education unless some entry has a headline field
  filled, and hides skills unless some skill is non-blank;
- creative and executive only hide a list section when the list is empty, so
  blank entries show up as empty-looking rows.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from .document import EducationEntry, ExperienceEntry, PersonalInfo, ResumeDocument, entry_has_content
from .layout import Node, el, iter_nodes

PREVIEW_ELEMENT_ID = "resume-preview"


class TemplateId(str, Enum):
    MODERN = "modern"
    CREATIVE = "creative"
    EXECUTIVE = "executive"

    @classmethod
    def parse(cls, value: Optional[Union[str, "TemplateId"]]) -> "TemplateId":
        """Unknown or missing ids fall back to MODERN."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        return cls.MODERN


def _visible_skills(skills: List[str]) -> List[str]:
    return [s for s in skills if s.strip()]


def _section(name: str, title: Node, *body: Optional[Node], cls: str = "section") -> Node:
    return el("section", title, *body, cls=cls, data_section=name)


# ---------------------------
# Modern
# ---------------------------


def _modern_contact(info: PersonalInfo) -> Node:
    return el(
        "div",
        el("span", text=info.email) if info.email else None,
        el("span", text=info.phone) if info.phone else None,
        el("span", text=info.address) if info.address else None,
        cls="contact inline centered muted",
    )


def _modern_section(name: str, title: str, *body: Optional[Node]) -> Node:
    return _section(name, el("h2", text=title, cls="section-title bordered accent"), *body)


def _modern_experience(exp: ExperienceEntry) -> Node:
    return el(
        "div",
        el(
            "div",
            el("div", el("h3", text=exp.position), el("p", text=exp.company, cls="accent")),
            el("span", text=exp.duration, cls="muted small right"),
            cls="split",
        ),
        el("p", text=exp.description, cls="body small") if exp.description else None,
        cls="entry",
        data_key=exp.id,
    )


def _modern_education(edu: EducationEntry) -> Node:
    return el(
        "div",
        el("div", el("h3", text=edu.degree), el("p", text=edu.school)),
        el("span", text=edu.year, cls="muted small right"),
        cls="entry split",
        data_key=edu.id,
    )


def _render_modern(doc: ResumeDocument) -> Node:
    info = doc.personal_info
    header = el(
        "header",
        el("h1", text=info.name or "Your Name", cls="name"),
        _modern_contact(info),
        cls="header centered",
    )

    sections: List[Node] = []
    if doc.summary:
        sections.append(
            _modern_section("summary", "PROFESSIONAL SUMMARY", el("p", text=doc.summary, cls="body"))
        )
    if any(entry_has_content(e) for e in doc.experience):
        sections.append(
            _modern_section("experience", "WORK EXPERIENCE", *[_modern_experience(e) for e in doc.experience])
        )
    if any(entry_has_content(e) for e in doc.education):
        sections.append(
            _modern_section("education", "EDUCATION", *[_modern_education(e) for e in doc.education])
        )
    skills = _visible_skills(doc.skills)
    if skills:
        sections.append(
            _modern_section(
                "skills",
                "SKILLS",
                el("div", *[el("span", text=s, cls="tag tag-soft") for s in skills], cls="tags inline wrap"),
            )
        )

    return el("article", header, *sections, cls="resume template-modern", data_template="modern")


# ---------------------------
# Creative
# ---------------------------


def _creative_card(name: str, title: str, *body: Optional[Node]) -> Node:
    return _section(name, el("h2", text=title, cls="card-title accent"), *body, cls="card section")


def _render_creative(doc: ResumeDocument) -> Node:
    info = doc.personal_info
    header = el(
        "header",
        el("h1", text=info.name or "Your Name", cls="name gradient"),
        _modern_contact(info),
        cls="card header centered",
    )

    sections: List[Node] = []
    if doc.summary:
        sections.append(_creative_card("summary", "✨ ABOUT ME", el("p", text=doc.summary, cls="body")))
    if doc.experience:
        items = [
            el(
                "div",
                el(
                    "div",
                    el("div", el("h3", text=exp.position), el("p", text=exp.company, cls="accent")),
                    el("span", text=exp.duration, cls="badge badge-outline right"),
                    cls="split",
                ),
                el("p", text=exp.description, cls="body small") if exp.description else None,
                cls="entry accent-border",
                data_key=exp.id,
            )
            for exp in doc.experience
        ]
        sections.append(_creative_card("experience", "🚀 EXPERIENCE", *items))
    if doc.education:
        items = [
            el(
                "div",
                el("div", el("h3", text=edu.degree), el("p", text=edu.school)),
                el("span", text=edu.year, cls="badge badge-outline right"),
                cls="entry split",
                data_key=edu.id,
            )
            for edu in doc.education
        ]
        sections.append(_creative_card("education", "🎓 EDUCATION", *items))
    if doc.skills:
        tags = [el("span", text=s, cls="tag tag-filled") for s in _visible_skills(doc.skills)]
        sections.append(_creative_card("skills", "💎 SKILLS", el("div", *tags, cls="tags inline wrap")))

    return el("article", header, *sections, cls="resume template-creative", data_template="creative")


# ---------------------------
# Executive
# ---------------------------


def _executive_section(name: str, title: str, *body: Optional[Node]) -> Node:
    return _section(name, el("h2", text=title, cls="section-title uppercase"), *body)


def _render_executive(doc: ResumeDocument) -> Node:
    info = doc.personal_info
    contact = el(
        "div",
        el("div", text=f"Email: {info.email}") if info.email else None,
        el("div", text=f"Phone: {info.phone}") if info.phone else None,
        el("div", text=f"Address: {info.address}", cls="full") if info.address else None,
        cls="contact grid-2 muted small",
    )
    header = el("header", el("h1", text=info.name or "YOUR NAME", cls="name wide"), contact, cls="header")

    sections: List[Node] = []
    if doc.summary:
        sections.append(
            _executive_section("summary", "Executive Summary", el("p", text=doc.summary, cls="body justify"))
        )
    if doc.experience:
        last = len(doc.experience) - 1
        items = [
            el(
                "div",
                el(
                    "div",
                    el("div", el("h3", text=exp.position, cls="large"), el("p", text=exp.company)),
                    el("span", text=exp.duration, cls="muted right"),
                    cls="split",
                ),
                el("p", text=exp.description, cls="body justify") if exp.description else None,
                el("hr", cls="separator") if i < last else None,
                cls="entry",
                data_key=exp.id,
            )
            for i, exp in enumerate(doc.experience)
        ]
        sections.append(_executive_section("experience", "Professional Experience", *items))
    if doc.education:
        items = [
            el(
                "div",
                el("div", el("h3", text=edu.degree), el("p", text=edu.school)),
                el("span", text=edu.year, cls="muted right"),
                cls="entry split",
                data_key=edu.id,
            )
            for edu in doc.education
        ]
        sections.append(_executive_section("education", "Education", *items))
    if doc.skills:
        cells = [el("div", text=s, cls="small") for s in _visible_skills(doc.skills)]
        sections.append(_executive_section("skills", "Core Competencies", el("div", *cells, cls="grid-2")))

    return el(
        "article",
        header,
        el("hr", cls="separator"),
        *sections,
        cls="resume template-executive top-rule",
        data_template="executive",
    )


_RENDERERS: Dict[TemplateId, Callable[[ResumeDocument], Node]] = {
    TemplateId.MODERN: _render_modern,
    TemplateId.CREATIVE: _render_creative,
    TemplateId.EXECUTIVE: _render_executive,
}


def render(document: ResumeDocument, template: Union[str, TemplateId, None] = TemplateId.MODERN) -> Node:
    return _RENDERERS[TemplateId.parse(template)](document)


def _capitalize_words(s: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in s.split(" "))


def render_preview(document: ResumeDocument, template: Union[str, TemplateId, None] = TemplateId.MODERN) -> Node:
    """Preview card as shown in the editor; the badge echoes the requested id verbatim."""
    label = template.value if isinstance(template, TemplateId) else (template or TemplateId.MODERN.value)
    card = el(
        "div",
        el(
            "div",
            el("h2", text="Resume Preview", cls="card-title"),
            el("span", text=_capitalize_words(f"{label} Template"), cls="badge right"),
            cls="card-header split",
        ),
        el("div", render(document, template), cls="card-content scroll"),
        cls="card preview",
    )
    return el("div", card, id=PREVIEW_ELEMENT_ID)


def section_names(tree: Node) -> List[str]:
    """data-section names present in a rendered tree, in document order."""
    return [n.attr("data-section") for n in iter_nodes(tree) if n.attr("data-section")]
