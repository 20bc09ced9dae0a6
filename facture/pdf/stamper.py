from __future__ import annotations

import logging

from facture.core.errors import DocumentError
from facture.pdf.document import Document, Footer

logger = logging.getLogger(__name__)


class PaginationStamper:
    """Second pass: write the thank-you message and "Page i sur N" into every page footer."""

    def __init__(self, message: str = "Merci de votre confiance.", marker: str = "Page {page} sur {total}"):
        self.message = message
        self.marker = marker

    @classmethod
    def from_chrome(cls, chrome) -> "PaginationStamper":
        return cls(message=chrome.footer_message, marker=chrome.page_marker)

    def stamp(self, document: Document) -> Document:
        total = document.page_count
        if total == 0:
            raise DocumentError("Cannot stamp a document without pages")
        for i, page in enumerate(document.pages, start=1):
            page.footer = Footer(self.message, self.marker.format(page=i, total=total))
        document.stamped = True
        logger.debug("Stamped %d page footer(s)", total)
        return document
