from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen.canvas import Canvas

from facture.core.errors import DocumentError, FormatError
from facture.core.records import Invoice, Recipient
from facture.core.settings import Settings
from facture.pdf.assembler import BOLD_FONT, FONT, DocumentAssembler
from facture.pdf.document import CENTER, Document, Page, RIGHT, RowFragment, TextFragment
from facture.pdf.layout import PageGeometry
from facture.pdf.stamper import PaginationStamper

logger = logging.getLogger(__name__)


# Colors (striped theme)
TEXT_COLOR = colors.black
HEADER_FILL = colors.Color(34 / 255, 34 / 255, 34 / 255)
HEADER_TEXT = colors.white
STRIPE_FILL = colors.Color(245 / 255, 245 / 255, 245 / 255)

CELL_PAD_H = 2 * mm
# Approximate fraction of the font size between the vertical centre and the baseline
BASELINE_RATIO = 0.35

FOOTER_FONT_SIZE = 10
# Footer baseline, measured up from the page bottom
FOOTER_OFFSET = 10 * mm


def output_filename(number: str) -> str:
    """File name of the generated invoice, a function of the invoice number alone."""
    s = str(number or "").strip()
    if not s or "/" in s or "\\" in s:
        raise FormatError(f"Invoice number cannot be used as a file name: {number!r}")
    return f"Facture-{s}.pdf"


# ===== Helpers =====
def _fit(text: str, max_width: float, font_name: str, font_size: float) -> str:
    """Truncate with an ellipsis so the text stays inside max_width."""
    width = pdfmetrics.stringWidth
    if width(text, font_name, font_size) <= max_width:
        return text
    s = text
    while s and width(s + "…", font_name, font_size) > max_width:
        s = s[:-1]
    return (s + "…") if s else "…"


def _draw_text(c: Canvas, frag: TextFragment, page_height: float) -> None:
    c.setFont(frag.font, frag.size)
    y = page_height - frag.y
    if frag.align == RIGHT:
        c.drawRightString(frag.x, y, frag.text)
    elif frag.align == CENTER:
        c.drawCentredString(frag.x, y, frag.text)
    else:
        c.drawString(frag.x, y, frag.text)


def _draw_row(c: Canvas, row: RowFragment, page_height: float) -> None:
    left = row.col_x[0]
    total_w = sum(row.col_widths)
    bottom = page_height - row.bottom

    if row.header:
        c.setFillColor(HEADER_FILL)
        c.rect(left, bottom, total_w, row.height, stroke=0, fill=1)
    elif row.striped:
        c.setFillColor(STRIPE_FILL)
        c.rect(left, bottom, total_w, row.height, stroke=0, fill=1)

    font = BOLD_FONT if row.header else FONT
    c.setFont(font, row.font_size)
    c.setFillColor(HEADER_TEXT if row.header else TEXT_COLOR)
    baseline = page_height - (row.y + row.height / 2 + row.font_size * BASELINE_RATIO)
    for text, x, w, align in zip(row.cells, row.col_x, row.col_widths, row.aligns):
        s = _fit(str(text), w - 2 * CELL_PAD_H, font, row.font_size)
        if align == RIGHT:
            c.drawRightString(x + w - CELL_PAD_H, baseline, s)
        elif align == CENTER:
            c.drawCentredString(x + w / 2, baseline, s)
        else:
            c.drawString(x + CELL_PAD_H, baseline, s)
    c.setFillColor(TEXT_COLOR)


def _draw_footer(c: Canvas, page: Page, geometry: PageGeometry) -> None:
    footer = page.footer
    y = FOOTER_OFFSET
    c.setFont(FONT, FOOTER_FONT_SIZE)
    c.setFillColor(TEXT_COLOR)
    c.drawString(geometry.margin_left, y, footer.message)
    c.drawRightString(geometry.width - geometry.margin_right, y, footer.marker)


# ===== Public API =====
def render_document(document: Document, geometry: Optional[PageGeometry] = None) -> bytes:
    """Serialize a stamped Document to PDF bytes.

    Output is byte-identical for identical documents (ReportLab invariant mode).
    """
    if not document.pages:
        raise DocumentError("Document has no pages")
    if not document.stamped or any(p.footer is None for p in document.pages):
        raise DocumentError("Document footers have not been stamped")

    geometry = geometry or PageGeometry()
    buf = io.BytesIO()
    c = Canvas(buf, pagesize=(geometry.width, geometry.height), invariant=1)
    c.setAuthor(document.author)
    c.setTitle(document.title)
    c.setFillColor(TEXT_COLOR)

    for page in document.pages:
        for frag in page.fragments:
            if isinstance(frag, RowFragment):
                _draw_row(c, frag, geometry.height)
            else:
                _draw_text(c, frag, geometry.height)
        _draw_footer(c, page, geometry)
        c.showPage()

    c.save()
    return buf.getvalue()


def render_invoice_pdf(
    invoice: Invoice,
    recipient: Optional[Recipient] = None,
    settings: Optional[Settings] = None,
) -> bytes:
    """Content pass, stamp pass, then serialization. Raises before producing any bytes."""
    settings = settings or Settings()
    assembler = DocumentAssembler.from_settings(settings)
    document = assembler.assemble(invoice, recipient)
    PaginationStamper.from_chrome(assembler.chrome).stamp(document)
    return render_document(document, assembler.geometry)


def build_invoice_pdf(
    out_dir: Path | str,
    invoice: Invoice,
    recipient: Optional[Recipient] = None,
    settings: Optional[Settings] = None,
) -> Path:
    """Render the invoice and write it as out_dir/Facture-{number}.pdf.

    Nothing is written when rendering fails.
    """
    name = output_filename(invoice.number)
    data = render_invoice_pdf(invoice, recipient, settings)

    out = Path(out_dir) / name
    out.parent.mkdir(parents=True, exist_ok=True)
    tmp = out.with_suffix(out.suffix + ".tmp")
    try:
        tmp.write_bytes(data)
        tmp.replace(out)
    finally:
        if tmp.exists():
            tmp.unlink()
    logger.info("Wrote %s (%d bytes)", out, len(data))
    return out
