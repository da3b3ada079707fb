"""Fallback PDF renderer using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import html
import logging
import re
from io import BytesIO
from pathlib import Path

from fpdf import FPDF

logger = logging.getLogger(__name__)

# Unicode TTF fonts commonly present on macOS, Linux and Windows
_UNICODE_FONT_PATHS = [
    "/Library/Fonts/Arial Unicode.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "C:/Windows/Fonts/arial.ttf",
]

_BLOCK_TAGS = r"h[1-3]|p|li|ul|ol|tr|table|br\s*/?"
_SIZES = {"h1": 18, "h2": 13, "h3": 11}


def _find_unicode_font() -> str | None:
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists():
            return path
    return None


def html_to_pdf_fpdf2(html_content: str) -> bytes:
    """Render the report HTML to PDF when WeasyPrint is unavailable."""
    body_match = re.search(r"<body[^>]*>(.*?)</body>", html_content, re.DOTALL)
    body = body_match.group(1) if body_match else html_content

    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    font_name = "Helvetica"
    unicode_font = _find_unicode_font()
    if unicode_font:
        try:
            pdf.add_font("ReportFont", "", unicode_font)
            font_name = "ReportFont"
        except Exception:
            logger.debug("Failed to load font %s", unicode_font)
    pdf.set_font(font_name, size=10)

    for kind, text in parse_blocks(body):
        safe_text = _safe_text(text, pdf)
        try:
            if kind in _SIZES:
                pdf.ln(3 if kind != "h1" else 0)
                pdf.set_font_size(_SIZES[kind])
                pdf.multi_cell(0, _SIZES[kind] * 0.6, safe_text, new_x="LMARGIN", new_y="NEXT")
                if kind == "h1":
                    pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
                pdf.ln(2)
                pdf.set_font_size(10)
            elif kind == "bullet":
                pdf.multi_cell(0, 6, f"  - {safe_text}", new_x="LMARGIN", new_y="NEXT")
            elif kind == "row":
                pdf.multi_cell(0, 6, safe_text, new_x="LMARGIN", new_y="NEXT")
            elif kind == "text":
                pdf.multi_cell(0, 6, safe_text, new_x="LMARGIN", new_y="NEXT")
            elif kind == "break":
                pdf.ln(3)
        except Exception:
            logger.debug("Failed to render %s block: %s", kind, safe_text[:30])

    buf = BytesIO()
    pdf.output(buf)
    return buf.getvalue()


def parse_blocks(body_html: str) -> list[tuple[str, str]]:
    """Flatten simple HTML into (kind, text) pairs.

    Kinds: h1, h2, h3, text, bullet, row (table cells joined by " | "), break.
    """
    blocks: list[tuple[str, str]] = []
    parts = re.split(rf"(</?(?:{_BLOCK_TAGS})[^>]*>)", body_html)
    current = "text"
    for part in parts:
        part = part.strip()
        if not part:
            continue
        tag_match = re.match(rf"<(/?)({_BLOCK_TAGS})[^>]*>", part)
        if tag_match:
            closing = tag_match.group(1) == "/"
            tag = tag_match.group(2).rstrip("/").strip()
            if closing:
                if tag in ("ul", "ol", "table"):
                    blocks.append(("break", ""))
                current = "text"
            elif tag in _SIZES:
                current = tag
            elif tag == "li":
                current = "bullet"
            elif tag == "tr":
                current = "row"
            elif tag.startswith("br"):
                blocks.append(("break", ""))
            else:
                current = "text"
            continue

        if current == "row":
            cells = re.findall(r"<t[hd][^>]*>(.*?)</t[hd]>", part, re.DOTALL)
            text = " | ".join(_strip_html(c) for c in cells)
        else:
            text = _strip_html(part)
        if text:
            blocks.append((current, text))
    return blocks


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font."""
    if pdf.is_ttf_font:
        return text
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _strip_html(text: str) -> str:
    text = re.sub(r"<[^>]+>", "", text)
    return html.unescape(text).strip()
