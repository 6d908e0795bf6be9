from __future__ import annotations

import re
from functools import lru_cache
from io import BytesIO
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .config import get_pdf_font_path
from .document import ResumeDocument
from .layout import Node, text_content

RASTER_SCALE = 2
PAGE_WIDTH_PX = 794  # A4 width at 96 dpi
MARGIN_PX = 32

_SIZES = {"h1": 28, "h2": 18, "h3": 14}
_BODY_SIZE = 12
_SMALL_SIZE = 10

_INK = (17, 24, 39)
_MUTED = (75, 85, 99)
_RULE = (209, 213, 219)

# (kind, x, y, payload, size, fill); kind is "text" or "rule"
Op = Tuple[str, float, float, object, int, Tuple[int, int, int]]


@lru_cache(maxsize=32)
def _font(size: int):
    path = get_pdf_font_path()
    if path:
        return ImageFont.truetype(path, size)
    return ImageFont.load_default(size=size)


def _drawable(text: str, font) -> str:
    # The bitmap fallback font only encodes latin-1
    if isinstance(font, ImageFont.FreeTypeFont):
        return text
    return text.encode("latin-1", "ignore").decode("latin-1")


def _break_word(word: str, font, max_width: float) -> List[str]:
    pieces = []
    cur = ""
    for ch in word:
        if cur and font.getlength(cur + ch) > max_width:
            pieces.append(cur)
            cur = ch
        else:
            cur += ch
    if cur:
        pieces.append(cur)
    return pieces


def _wrap_text(s: str, font, max_width: float) -> List[str]:
    """Greedy word wrap; each source line is its own paragraph and a blank one yields ""."""
    s = (s or "").strip()
    if not s:
        return []
    out = []
    for para in s.splitlines():
        words = para.split()
        if not words:
            out.append("")
            continue
        cur = ""
        for w in words:
            if font.getlength(w) > max_width:
                if cur:
                    out.append(cur)
                *head, cur = _break_word(w, font, max_width)
                out.extend(head)
                continue
            if not cur:
                cur = w
            elif font.getlength(cur + " " + w) <= max_width:
                cur = cur + " " + w
            else:
                out.append(cur)
                cur = w
        if cur:
            out.append(cur)
    return out


class _Layout:
    """Walks a visual tree and records draw operations top to bottom."""

    def __init__(self, scale: int):
        self.s = scale
        self.width = PAGE_WIDTH_PX * scale
        self.ops: List[Op] = []
        self.y = MARGIN_PX * scale

    def _size_for(self, node: Node) -> int:
        if node.tag in _SIZES:
            return _SIZES[node.tag] * self.s
        if node.has_class("small"):
            return _SMALL_SIZE * self.s
        return _BODY_SIZE * self.s

    def _fill_for(self, node: Node) -> Tuple[int, int, int]:
        return _MUTED if node.has_class("muted") else _INK

    def _line(self, text: str, x: float, size: int, fill, align: str, right_edge: float) -> None:
        font = _font(size)
        text = _drawable(text, font)
        w = font.getlength(text)
        if align == "center":
            x = (x + right_edge - w) / 2
        elif align == "right":
            x = right_edge - w
        if text:
            self.ops.append(("text", x, self.y, text, size, fill))
        self.y += int(size * 1.4)

    def _text(self, text: str, x: float, size: int, fill, align: str) -> None:
        right_edge = self.width - MARGIN_PX * self.s
        for chunk in _wrap_text(text, _font(size), right_edge - x):
            self._line(chunk, x, size, fill, align, right_edge)

    def walk(self, node: Node, x: float, align: str = "left") -> None:
        s = self.s
        if node.has_class("centered"):
            align = "center"

        if node.tag == "hr":
            self.y += 6 * s
            self.ops.append(("rule", x, self.y, self.width - MARGIN_PX * s, s, _RULE))
            self.y += 10 * s
            return

        if node.has_class("inline"):
            parts = [text_content(c) for c in node.children]
            joined = "   ".join(p for p in parts if p)
            if joined:
                self._text(joined, x, self._size_for(node), self._fill_for(node), align)
            return

        if node.has_class("split") and len(node.children) == 2:
            left, right = node.children
            top = self.y
            self.walk(left, x, align)
            label = " ".join(text_content(right).split())
            if label:
                bottom = self.y
                self.y = top
                self._line(
                    label, x, self._size_for(right), self._fill_for(right), "right",
                    self.width - MARGIN_PX * s,
                )
                self.y = max(bottom, self.y)
            return

        if node.text:
            self._text(node.text, x, self._size_for(node), self._fill_for(node), align)

        indent = 12 * s if node.has_class("accent-border") else 0
        for child in node.children:
            self.walk(child, x + indent, align)

        if node.tag in ("section", "header"):
            self.y += 14 * s
        elif node.has_class("entry"):
            self.y += 6 * s


def rasterize(node: Node, scale: int = RASTER_SCALE) -> Image.Image:
    """Paint a visual tree onto a white RGB image `PAGE_WIDTH_PX * scale` wide."""
    layout = _Layout(scale)
    layout.walk(node, MARGIN_PX * scale)
    height = max(int(layout.y + MARGIN_PX * scale), 1)

    image = Image.new("RGB", (layout.width, height), "white")
    draw = ImageDraw.Draw(image)
    for kind, x, y, payload, size, fill in layout.ops:
        if kind == "rule":
            draw.line([(x, y), (payload, y)], fill=fill, width=size)
        else:
            draw.text((x, y), payload, font=_font(size), fill=fill)
    return image


def image_to_pdf_bytes(image: Image.Image, title: Optional[str] = None) -> bytes:
    """One A4 page; the image fills the page width and keeps its aspect ratio."""
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    page_width, page_height = A4
    c.setTitle(title or "Resume")
    pdf_height = image.height * page_width / image.width
    c.drawImage(ImageReader(image), 0, page_height - pdf_height, width=page_width, height=pdf_height)
    c.save()
    return buf.getvalue()


def export_filename(document: ResumeDocument) -> str:
    return f"{document.personal_info.name or 'resume'}.pdf"


def safe_filename(s: str) -> str:
    """ASCII-only variant for the plain `filename=` header parameter."""
    s = (s or "").strip()
    s = re.sub(r"\s+", "_", s)
    s = re.sub(r"[^A-Za-z0-9_\-\.]+", "", s)
    return s[:80] or "resume.pdf"
