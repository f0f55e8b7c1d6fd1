"""
PDF export: every slide drawn on its own landscape page, in deck order.

The layouts here are drawn with reportlab independently of the Jinja viewer
templates and share only the slide views, page order and geometry with them,
so a change to one does not carry over to the other. Emoji icons are not
drawn: the standard PDF fonts have no glyphs for them.
"""

import logging
import math
import re
from io import BytesIO
from typing import Callable
from xml.sax.saxutils import escape

from reportlab.lib.colors import Color, HexColor, white
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Paragraph

from app.config import settings
from app.exceptions import ExportFailure
from app.models.schemas import InfographicDocument, SlideView
from app.services.presentation import BRAND, TOTAL_SLIDES, build_slide, footer_text

logger = logging.getLogger(__name__)

EXPORT_SUFFIX = "_Presentation.pdf"
EXPORT_FAILURE_MESSAGE = "Could not generate PDF. Please try again."

PAD = 36
BAR = 6
GAP = 14

AMBER = HexColor("#d97706")
AMBER_DARK = HexColor("#78350f")
AMBER_LIGHT = HexColor("#fffbeb")
AMBER_200 = HexColor("#fde68a")
STONE_100 = HexColor("#f5f5f4")
STONE_200 = HexColor("#e7e5e4")
STONE_300 = HexColor("#d6d3d1")
STONE_400 = HexColor("#a8a29e")
STONE_600 = HexColor("#57534e")
STONE_700 = HexColor("#44403c")
STONE_800 = HexColor("#292524")
STONE_900 = HexColor("#1c1917")


def _style(name: str, font: str, size: float, color: Color, leading: float | None = None,
           alignment: int = TA_LEFT) -> ParagraphStyle:
    return ParagraphStyle(
        name=name,
        fontName=font,
        fontSize=size,
        leading=leading or size * 1.25,
        textColor=color,
        alignment=alignment,
    )


STYLES = {
    "label": _style("Label", "Helvetica-Bold", 9, AMBER),
    "heading": _style("Heading", "Times-Bold", 26, STONE_900),
    "cover_label": _style("CoverLabel", "Helvetica-Bold", 9, AMBER_DARK, alignment=TA_CENTER),
    "cover_title": _style("CoverTitle", "Times-Bold", 44, STONE_900, leading=50, alignment=TA_CENTER),
    "byline": _style("Byline", "Times-Italic", 20, STONE_600, alignment=TA_CENTER),
    "tagline": _style("Tagline", "Helvetica", 13, STONE_600, alignment=TA_CENTER),
    "small_center": _style("SmallCenter", "Helvetica", 9, STONE_400, alignment=TA_CENTER),
    "body": _style("Body", "Times-Roman", 13, STONE_800, leading=19, alignment=TA_JUSTIFY),
    "box_label": _style("BoxLabel", "Helvetica-Bold", 9, STONE_400),
    "box_value": _style("BoxValue", "Times-Roman", 24, STONE_800, leading=29),
    "box_value_italic": _style("BoxValueItalic", "Times-Italic", 20, AMBER_DARK, leading=25),
    "card_title": _style("CardTitle", "Helvetica-Bold", 12, STONE_900),
    "card_tag": _style("CardTag", "Helvetica-Bold", 7.5, AMBER),
    "card_text": _style("CardText", "Helvetica", 9, STONE_600, leading=12.5),
    "stage": _style("Stage", "Helvetica-Bold", 9, STONE_800, alignment=TA_CENTER),
    "theme_title": _style("ThemeTitle", "Helvetica-Bold", 13, white),
    "theme_text": _style("ThemeText", "Helvetica", 9.5, STONE_300, leading=13.5),
    "concept_title": _style("ConceptTitle", "Helvetica-Bold", 16, STONE_800),
    "concept_text": _style("ConceptText", "Helvetica", 11, STONE_600, leading=15),
    "quote": _style("Quote", "Times-Italic", 26, STONE_900, leading=32, alignment=TA_CENTER),
    "takeaway": _style("Takeaway", "Helvetica", 13, STONE_700, leading=17),
    "footnote_right": _style("FootnoteRight", "Helvetica", 7.5, STONE_400, alignment=TA_RIGHT),
}


def export_filename(title: str | None) -> str:
    """Title with whitespace runs collapsed to underscores, plus the fixed suffix."""
    return re.sub(r"\s+", "_", title or "") + EXPORT_SUFFIX


def page_size() -> tuple[float, float]:
    return settings.pdf_page_width_mm * mm, settings.pdf_page_height_mm * mm


# --- drawing helpers


def _paragraph(c: Canvas, text: str, style: ParagraphStyle, x: float, top: float,
               width: float, max_height: float | None = None) -> float:
    """Draw `text` with its top edge at `top`; returns the height used."""
    para = Paragraph(escape(text), style)
    _, height = para.wrapOn(c, width, max_height if max_height is not None else top)
    para.drawOn(c, x, top - height)
    return height


def _card(c: Canvas, x: float, top: float, width: float, height: float, fill: Color,
          stroke: Color | None = None, accent: Color | None = None) -> None:
    c.setFillColor(fill)
    if stroke is not None:
        c.setStrokeColor(stroke)
        c.setLineWidth(0.6)
    c.roundRect(x, top - height, width, height, 4, stroke=1 if stroke is not None else 0, fill=1)
    if accent is not None:
        c.setFillColor(accent)
        c.rect(x, top - height, 4, height, stroke=0, fill=1)


def _cells(count: int, columns: int, top: float, bottom: float,
           page_width: float) -> list[tuple[float, float, float, float]]:
    """(x, top, width, height) for `count` cells in a grid between `top` and `bottom`."""
    rows = max(1, math.ceil(count / columns))
    cell_w = (page_width - 2 * PAD - GAP * (columns - 1)) / columns
    cell_h = (top - bottom - GAP * (rows - 1)) / rows
    return [
        (PAD + (i % columns) * (cell_w + GAP), top - (i // columns) * (cell_h + GAP), cell_w, cell_h)
        for i in range(count)
    ]


def _color(value: str, default: Color) -> Color:
    try:
        return HexColor(value) if value else default
    except ValueError:
        return default


def _draw_frame(c: Canvas, document: InfographicDocument, width: float, height: float) -> None:
    c.setFillColor(HexColor(settings.pdf_background_color))
    c.rect(0, 0, width, height, stroke=0, fill=1)
    c.setFillColor(AMBER_DARK)
    c.rect(0, height - BAR, width, BAR, stroke=0, fill=1)
    c.setFillColor(STONE_400)
    c.setFont("Helvetica-Bold", 7)
    c.drawRightString(width - 18, 12, footer_text(document).upper())


def _draw_header(c: Canvas, slide: SlideView, width: float, height: float) -> float:
    """Label, heading and rule; returns the y where content starts."""
    inner = width - 2 * PAD
    top = height - BAR - PAD
    top -= _paragraph(c, slide.label.upper(), STYLES["label"], PAD, top, inner) + 4
    top -= _paragraph(c, slide.heading, STYLES["heading"], PAD, top, inner) + 10
    c.setStrokeColor(STONE_200)
    c.setLineWidth(0.8)
    c.line(PAD, top, width - PAD, top)
    return top - 16


# --- one drawer per layout


def _draw_cover(c: Canvas, slide: SlideView, width: float, height: float) -> None:
    inner = width - 2 * PAD
    top = height * 0.8
    top -= _paragraph(c, slide.label, STYLES["cover_label"], PAD, top, inner) + 14
    top -= _paragraph(c, slide.heading, STYLES["cover_title"], PAD, top, inner) + 8
    top -= _paragraph(c, slide.byline, STYLES["byline"], PAD, top, inner) + 16
    c.setFillColor(AMBER)
    c.rect(width / 2 - 36, top, 72, 3, stroke=0, fill=1)
    top -= 18
    _paragraph(c, f'"{slide.body}"', STYLES["tagline"], 3 * PAD, top, width - 6 * PAD)
    _paragraph(c, slide.footnote, STYLES["small_center"], PAD, 48, inner)


def _draw_thesis(c: Canvas, slide: SlideView, width: float, height: float) -> None:
    top = _draw_header(c, slide, width, height)
    box_h = top - PAD
    _card(c, PAD, top, width - 2 * PAD, box_h, white, STONE_200, AMBER)
    _paragraph(c, slide.body, STYLES["body"], PAD + 22, top - 20, width - 2 * PAD - 44, box_h - 40)


def _draw_audience(c: Canvas, slide: SlideView, width: float, height: float) -> None:
    top = _draw_header(c, slide, width, height)
    fills = [(STONE_100, "box_value"), (AMBER_LIGHT, "box_value_italic")]
    for (x, cell_top, w, h), item, (fill, style) in zip(
        _cells(len(slide.items), 2, top, PAD, width), slide.items, fills
    ):
        _card(c, x, cell_top, w, h, fill, STONE_200)
        y = cell_top - h / 3
        y -= _paragraph(c, item["title"].upper(), STYLES["box_label"], x + 24, y, w - 48) + 10
        text = f'"{item["text"]}"' if style == "box_value_italic" else item["text"]
        _paragraph(c, text, STYLES[style], x + 24, y, w - 48)


def _draw_characters(c: Canvas, slide: SlideView, width: float, height: float) -> None:
    top = _draw_header(c, slide, width, height)
    for (x, cell_top, w, h), item in zip(_cells(len(slide.items), 2, top, PAD, width), slide.items):
        _card(c, x, cell_top, w, h, white, STONE_200)
        y = cell_top - 14
        y -= _paragraph(c, item["title"], STYLES["card_title"], x + 14, y, w - 28) + 2
        y -= _paragraph(c, item["tag"].upper(), STYLES["card_tag"], x + 14, y, w - 28) + 6
        _paragraph(c, item["text"], STYLES["card_text"], x + 14, y, w - 28)


def _draw_plot_arc(c: Canvas, slide: SlideView, width: float, height: float) -> None:
    top = _draw_header(c, slide, width, height)
    cells = _cells(len(slide.items), 4, top, PAD, width)
    c.setFillColor(STONE_200)
    c.rect(PAD, top - 12, width - 2 * PAD, 3, stroke=0, fill=1)
    for (x, cell_top, w, h), item in zip(cells, slide.items):
        cx = x + w / 2
        c.setFillColor(white)
        c.setStrokeColor(AMBER)
        c.setLineWidth(3)
        c.circle(cx, cell_top - 11, 10, stroke=1, fill=1)
        c.setFillColor(AMBER_DARK)
        c.setFont("Helvetica-Bold", 8)
        c.drawCentredString(cx, cell_top - 14, str(item["number"]))
        y = cell_top - 30
        y -= _paragraph(c, item["title"].upper(), STYLES["stage"], x, y, w) + 8
        _card(c, x, y, w, max(y - (cell_top - h), 24), white, STONE_200)
        _paragraph(c, item["text"], STYLES["card_text"], x + 8, y - 8, w - 16)


def _draw_themes(c: Canvas, slide: SlideView, width: float, height: float) -> None:
    top = _draw_header(c, slide, width, height)
    for (x, cell_top, w, h), item in zip(_cells(len(slide.items), 3, top, PAD, width), slide.items):
        _card(c, x, cell_top, w, h, STONE_900, accent=_color(item["color"], AMBER))
        y = cell_top - 18
        y -= _paragraph(c, item["title"], STYLES["theme_title"], x + 20, y, w - 36) + 10
        _paragraph(c, item["text"], STYLES["theme_text"], x + 20, y, w - 36)


def _draw_concepts(c: Canvas, slide: SlideView, width: float, height: float) -> None:
    top = _draw_header(c, slide, width, height)
    for (x, cell_top, w, h), item in zip(_cells(len(slide.items), 1, top, PAD, width), slide.items):
        _card(c, x, cell_top, w, h, white, STONE_200)
        y = cell_top - 16
        y -= _paragraph(c, item["title"], STYLES["concept_title"], x + 24, y, w - 48) + 6
        c.setFillColor(AMBER_200)
        c.rect(x + 24, y, 60, 3, stroke=0, fill=1)
        _paragraph(c, item["text"], STYLES["concept_text"], x + 24, y - 10, w - 48)


def _draw_key_quote(c: Canvas, slide: SlideView, width: float, height: float) -> None:
    c.setFillColor(AMBER_200)
    c.setFont("Times-Bold", 90)
    c.drawCentredString(width / 2, height * 0.68, '"')
    top = height * 0.62
    top -= _paragraph(c, slide.body, STYLES["quote"], 2 * PAD, top, width - 4 * PAD) + 20
    c.setFillColor(STONE_300)
    c.rect(width / 2 - 48, top, 96, 3, stroke=0, fill=1)


def _draw_takeaways(c: Canvas, slide: SlideView, width: float, height: float) -> None:
    top = _draw_header(c, slide, width, height) - 8
    for item in slide.items:
        c.setFillColor(STONE_800)
        c.circle(PAD + 22, top - 9, 10, stroke=0, fill=1)
        c.setFillColor(white)
        c.setFont("Helvetica-Bold", 9)
        c.drawCentredString(PAD + 22, top - 12, str(item["number"]))
        used = _paragraph(c, item["text"], STYLES["takeaway"], PAD + 44, top, width - 2 * PAD - 64)
        top -= max(used, 20) + 14
    if slide.footnote:
        _paragraph(c, slide.footnote, STYLES["footnote_right"], PAD, PAD, width - 2 * PAD)


_DRAWERS: dict[str, Callable[[Canvas, SlideView, float, float], None]] = {
    "cover": _draw_cover,
    "thesis": _draw_thesis,
    "audience": _draw_audience,
    "characters": _draw_characters,
    "plot_arc": _draw_plot_arc,
    "themes": _draw_themes,
    "concepts_1": _draw_concepts,
    "concepts_2": _draw_concepts,
    "key_quote": _draw_key_quote,
    "takeaways": _draw_takeaways,
}


def draw_slide(c: Canvas, slide: SlideView, document: InfographicDocument) -> None:
    """Draw one slide onto the current page of `c`."""
    width, height = page_size()
    _draw_frame(c, document, width, height)
    _DRAWERS[slide.kind](c, slide, width, height)


def export_pdf(document: InfographicDocument) -> bytes:
    """
    Render all slides, one per page, strictly in order 0..9.

    Any failure is logged and re-raised as ExportFailure with a fixed message.
    """
    try:
        buffer = BytesIO()
        c = Canvas(buffer, pagesize=page_size())
        c.setTitle(document.title or BRAND)
        c.setAuthor(document.author or "")
        c.setCreator(BRAND)
        for index in range(TOTAL_SLIDES):
            draw_slide(c, build_slide(document, index), document)
            c.showPage()
        c.save()
    except Exception as err:
        logger.exception("Error generating PDF for %r", document.title)
        raise ExportFailure(EXPORT_FAILURE_MESSAGE) from err
    logger.info("Exported %d slides for %r", TOTAL_SLIDES, document.title)
    return buffer.getvalue()
