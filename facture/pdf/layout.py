from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm

from facture.core.errors import LayoutError


# ===== Layout constants (tweak here) =====
# All vertical positions are offsets from the page top, in points.
PAGE_SIZE = A4
PAGE_WIDTH, PAGE_HEIGHT = PAGE_SIZE

MARGIN_LEFT = 14 * mm
MARGIN_RIGHT = 14 * mm
MARGIN_TOP = 14 * mm
# Leaves room for the footer stamp below the printable area
MARGIN_BOTTOM = 20 * mm

CONTENT_WIDTH = PAGE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT

# Tolerance for float accumulation when a row ends exactly on the limit
_EPSILON = 1e-6


@dataclass(frozen=True)
class PageGeometry:
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT
    margin_top: float = MARGIN_TOP
    margin_bottom: float = MARGIN_BOTTOM
    margin_left: float = MARGIN_LEFT
    margin_right: float = MARGIN_RIGHT

    @property
    def printable_height(self) -> float:
        return self.height - self.margin_top - self.margin_bottom

    @property
    def bottom_limit(self) -> float:
        """Lowest y content may reach on a page."""
        return self.height - self.margin_bottom

    @property
    def content_width(self) -> float:
        return self.width - self.margin_left - self.margin_right


class LayoutCursor:
    """Current write position (y from page top) and page index for one document."""

    def __init__(self, geometry: PageGeometry | None = None, y: float | None = None):
        self.geometry = geometry or PageGeometry()
        self.page_index = 0
        self.y = self.geometry.margin_top if y is None else float(y)

    def __repr__(self) -> str:
        return f"LayoutCursor(y={self.y:.2f}, page_index={self.page_index})"

    @property
    def remaining(self) -> float:
        return self.geometry.bottom_limit - self.y

    def fits(self, height: float) -> bool:
        return self.y + height <= self.geometry.bottom_limit + _EPSILON

    def advance(self, height: float) -> float:
        """Move down by `height`; if that would overflow the page, break to a new page instead.

        Returns the new y (the reset top margin after a page break).
        """
        if height < 0:
            raise LayoutError(f"Cursor cannot move backward (height={height})")
        if not self.fits(height):
            return self.start_new_page()
        self.y += height
        return self.y

    def move_to(self, y: float) -> float:
        """Jump forward to an absolute y on the current page."""
        if y < self.y - _EPSILON:
            raise LayoutError(f"Cursor cannot move backward from {self.y:.2f} to {y:.2f}")
        self.y = float(y)
        return self.y

    def start_new_page(self) -> float:
        self.page_index += 1
        self.y = self.geometry.margin_top
        return self.y
