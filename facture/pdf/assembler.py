from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from reportlab.lib.units import mm

from facture.core.currency import format_currency
from facture.core.dates import format_date
from facture.core.errors import UnknownEntityTypeError
from facture.core.records import COMMERCIAL, PARTNER, Invoice, Recipient
from facture.core.settings import DocumentChrome
from facture.pdf.document import Document, LEFT, RIGHT, TextFragment
from facture.pdf.layout import LayoutCursor, PageGeometry
from facture.pdf.table_flow import TableFlowRenderer, TableSpec

logger = logging.getLogger(__name__)

FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"

# Title block (first page only, fixed coordinates)
ISSUER_Y = 22 * mm
LOCATION_Y = 30 * mm
ISSUER_FONT_SIZE = 20
LABEL_FONT_SIZE = 12
TEXT_FONT_SIZE = 10

# Recipient block lines
RECIPIENT_HEADING_Y = 50 * mm
RECIPIENT_LINE_GAP = 6 * mm

# Summary table starts here whether or not the recipient block is drawn
SUMMARY_TABLE_Y = 80 * mm
TABLE_GAP = 10 * mm

# Line-items table: description column absorbs the remainder
AMOUNT_COL_W = 50 * mm


class DocumentAssembler:
    """
    Lay out the invoice content pages in fixed block order:
    title, recipient (optional), summary table, line-items table.

    Footers are left empty; the page count is unknown until this returns.
    """

    def __init__(
        self,
        chrome: Optional[DocumentChrome] = None,
        locale: str = "fr-CM",
        currency: str = "XAF",
        summary_fraction_digits: Optional[int] = 0,
        line_fraction_digits: Optional[int] = None,
        strict_entity_types: bool = False,
        geometry: Optional[PageGeometry] = None,
        table_renderer: Optional[TableFlowRenderer] = None,
    ):
        self.chrome = chrome or DocumentChrome()
        self.locale = locale
        self.currency = currency
        self.summary_fraction_digits = summary_fraction_digits
        self.line_fraction_digits = line_fraction_digits
        self.strict_entity_types = strict_entity_types
        self.geometry = geometry or PageGeometry()
        self.tables = table_renderer or TableFlowRenderer()

    @classmethod
    def from_settings(cls, settings, **kw) -> "DocumentAssembler":
        return cls(
            chrome=settings.chrome(),
            locale=settings.locale,
            currency=settings.currency,
            summary_fraction_digits=settings.summary_fraction_digits,
            line_fraction_digits=settings.line_fraction_digits,
            strict_entity_types=settings.strict_entity_types,
            **kw,
        )

    # ----- formatting -----
    def _money(self, value, fraction_digits: Optional[int]) -> str:
        return format_currency(value, self.locale, self.currency, fraction_digits)

    def describe(self, entity_type: str) -> str:
        if entity_type == PARTNER:
            return self.chrome.partner_description
        if entity_type != COMMERCIAL:
            if self.strict_entity_types:
                raise UnknownEntityTypeError(entity_type)
            logger.warning("Unknown entity type %r; using the commission description", entity_type)
        return self.chrome.commercial_description

    def summary_row(self, invoice: Invoice) -> Tuple[str, str, str]:
        return (
            format_date(invoice.issue_date, self.locale),
            format_date(invoice.due_date, self.locale),
            self._money(invoice.amount, self.summary_fraction_digits),
        )

    def line_rows(self, invoice: Invoice) -> List[Tuple[str, str]]:
        # Checked for itemised invoices too, so strict mode always sees the entity type
        description = self.describe(invoice.entity_type)
        if invoice.items:
            return [(it.description, self._money(it.amount, self.line_fraction_digits)) for it in invoice.items]
        return [(description, self._money(invoice.amount, self.line_fraction_digits))]

    # ----- blocks -----
    def _title_block(self, doc: Document, invoice: Invoice) -> None:
        page = doc.page(0)
        left = self.geometry.margin_left
        right = self.geometry.width - self.geometry.margin_right
        page.place(TextFragment(left, ISSUER_Y, self.chrome.issuer_name, BOLD_FONT, ISSUER_FONT_SIZE))
        page.place(TextFragment(left, LOCATION_Y, self.chrome.issuer_location, FONT, TEXT_FONT_SIZE))
        page.place(TextFragment(right, ISSUER_Y, self.chrome.document_label, BOLD_FONT, LABEL_FONT_SIZE, RIGHT))
        page.place(TextFragment(right, LOCATION_Y, str(invoice.number), FONT, LABEL_FONT_SIZE, RIGHT))

    def _recipient_block(self, doc: Document, recipient: Recipient) -> None:
        page = doc.page(0)
        x = self.geometry.margin_left
        y = RECIPIENT_HEADING_Y
        page.place(TextFragment(x, y, self.chrome.recipient_heading, FONT, TEXT_FONT_SIZE, LEFT))
        y += RECIPIENT_LINE_GAP
        page.place(TextFragment(x, y, recipient.display_name, BOLD_FONT, TEXT_FONT_SIZE, LEFT))
        for line in (recipient.email, recipient.phone):
            y += RECIPIENT_LINE_GAP
            if line:
                page.place(TextFragment(x, y, str(line), FONT, TEXT_FONT_SIZE, LEFT))

    def assemble(self, invoice: Invoice, recipient: Optional[Recipient] = None) -> Document:
        # Format everything up front so a bad amount/date aborts before any layout
        summary = self.summary_row(invoice)
        lines = self.line_rows(invoice)

        doc = Document(title=f"{self.chrome.document_label} {invoice.number}", author=self.chrome.issuer_name)
        cursor = LayoutCursor(self.geometry)

        self._title_block(doc, invoice)
        if recipient is not None:
            self._recipient_block(doc, recipient)

        summary_table = TableSpec.of(self.chrome.summary_headers, [summary], start_y=SUMMARY_TABLE_Y)
        res = self.tables.render(summary_table, cursor, doc)

        desc_w = self.geometry.content_width - AMOUNT_COL_W
        line_table = TableSpec.of(
            self.chrome.line_headers,
            lines,
            start_y=res.end_y + TABLE_GAP,
            col_widths=(desc_w, AMOUNT_COL_W),
            aligns=(LEFT, RIGHT),
        )
        self.tables.render(line_table, cursor, doc)

        logger.info("Assembled invoice %s: %d page(s), %d line(s)", invoice.number, doc.page_count, len(lines))
        return doc
