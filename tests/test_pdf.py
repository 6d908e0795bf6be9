"""Unit tests for rasterization and PDF assembly."""

import pytest
from PIL import Image

from resume_builder.document import new_document, update_personal_info, update_summary
from resume_builder.layout import el
from resume_builder.pdf import (
    MARGIN_PX,
    PAGE_WIDTH_PX,
    RASTER_SCALE,
    export_filename,
    image_to_pdf_bytes,
    rasterize,
    safe_filename,
    _font,
    _Layout,
    _wrap_text,
)
from resume_builder.render import TemplateId, render_preview


@pytest.mark.unit
@pytest.mark.parametrize("template", list(TemplateId))
def test_rasterize_preview_at_fixed_scale(jane, template):
    image = rasterize(render_preview(jane, template))

    assert image.mode == "RGB"
    assert image.width == PAGE_WIDTH_PX * RASTER_SCALE
    assert image.height > 200


@pytest.mark.unit
def test_rasterize_grows_with_content(jane):
    short = rasterize(el("div", el("p", text="one line")), scale=1)
    full = rasterize(render_preview(jane, "modern"), scale=1)

    assert short.width == PAGE_WIDTH_PX
    assert full.height > short.height


@pytest.mark.unit
def test_rasterize_is_not_blank(jane):
    image = rasterize(render_preview(jane, "executive"), scale=1)

    colors = image.getcolors(maxcolors=1_000_000)
    assert colors is not None and len(colors) > 1


@pytest.mark.unit
def test_image_to_pdf_bytes_produces_single_page_pdf():
    image = Image.new("RGB", (400, 800), "white")

    pdf = image_to_pdf_bytes(image, title="Jane Doe")

    assert pdf.startswith(b"%PDF")
    assert b"/Count 1" in pdf


@pytest.mark.unit
def test_export_filename_defaults_to_resume():
    assert export_filename(new_document()) == "resume.pdf"
    assert export_filename(update_personal_info(new_document(), "name", "Jane Doe")) == "Jane Doe.pdf"


@pytest.mark.unit
def test_safe_filename_strips_header_unsafe_characters():
    assert safe_filename("Jane Doe.pdf") == "Jane_Doe.pdf"
    assert safe_filename('Zoë "Z" O\'Neil.pdf') == "Zo_Z_ONeil.pdf"
    assert safe_filename("   ") == "resume.pdf"


@pytest.mark.unit
def test_layout_draws_each_summary_line_on_its_own_row(jane):
    doc = update_summary(jane, "First paragraph.\nSecond\n\nFourth")
    layout = _Layout(RASTER_SCALE)
    layout.walk(render_preview(doc, "modern"), MARGIN_PX * RASTER_SCALE)

    texts = [op for op in layout.ops if op[0] == "text"]
    assert not any("\n" in op[3] for op in texts)

    start = [op[3] for op in texts].index("First paragraph.")
    rows = texts[start:start + 4]
    assert [op[3] for op in rows] == ["First paragraph.", "Second", "Fourth", "WORK EXPERIENCE"]
    for prev, cur in zip(rows, rows[1:]):
        assert cur[2] >= prev[2] + int(prev[4] * 1.4)


@pytest.mark.unit
def test_wrap_text_keeps_blank_lines_between_paragraphs():
    assert _wrap_text("one\n\ntwo", _font(12), 500) == ["one", "", "two"]


@pytest.mark.unit
def test_wrap_text_hard_breaks_words_wider_than_the_line():
    font = _font(12)
    width = font.getlength("M" * 10)

    lines = _wrap_text("ok " + "M" * 35 + " end", font, width)

    assert len(lines) > 3
    assert all(font.getlength(line) <= width for line in lines)
    assert "".join(lines).replace(" ", "") == "ok" + "M" * 35 + "end"
