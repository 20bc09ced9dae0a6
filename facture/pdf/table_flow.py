# facture/pdf/table_flow.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.units import mm

from facture.core.errors import LayoutError
from facture.pdf.document import Document, LEFT, RowFragment
from facture.pdf.layout import LayoutCursor, PageGeometry


# Fixed row height for this template (header and body rows alike)
BODY_ROW_H = 8 * mm
BODY_FONT_SIZE = 10


@dataclass(frozen=True)
class TableSpec:
    header_cells: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...] = ()
    start_y: Optional[float] = None
    # Column widths in points; None splits the content width evenly
    col_widths: Optional[Tuple[float, ...]] = None
    aligns: Optional[Tuple[str, ...]] = None

    @classmethod
    def of(cls, header_cells: Sequence[str], rows: Sequence[Sequence[str]], start_y: Optional[float] = None, **kw) -> "TableSpec":
        return cls(tuple(header_cells), tuple(tuple(r) for r in rows), start_y, **kw)


@dataclass
class TableResult:
    fragments: List[RowFragment] = field(default_factory=list)
    end_y: float = 0.0
    end_page_index: int = 0


class TableFlowRenderer:
    """
    Place a header row and body rows from the cursor downwards, breaking to a
    new page (and repeating the header) whenever the next row would overflow.
    """

    def __init__(self, row_height: float = BODY_ROW_H, font_size: float = BODY_FONT_SIZE):
        self.row_height = row_height
        self.font_size = font_size

    def rows_per_page(self, geometry: PageGeometry) -> int:
        """Body rows that fit under a header on a fresh page."""
        return int(math.floor(geometry.printable_height / self.row_height + 1e-9)) - 1

    def render(self, table: TableSpec, cursor: LayoutCursor, document: Document) -> TableResult:
        geometry = cursor.geometry
        if self.rows_per_page(geometry) < 1:
            raise LayoutError("Row height leaves no room for a body row under the header")

        widths = self._col_widths(table, geometry)
        aligns = tuple(table.aligns) if table.aligns else (LEFT,) * len(widths)
        col_x: List[float] = []
        x = geometry.margin_left
        for w in widths:
            col_x.append(x)
            x += w

        def place(cells: Tuple[str, ...], header: bool, striped: bool = False) -> RowFragment:
            frag = RowFragment(
                y=cursor.y,
                height=self.row_height,
                cells=cells,
                col_x=tuple(col_x),
                col_widths=widths,
                aligns=aligns,
                header=header,
                striped=striped,
                font_size=self.font_size,
            )
            document.page(cursor.page_index).place(frag)
            cursor.advance(self.row_height)
            return frag

        if table.start_y is not None and table.start_y > cursor.y:
            cursor.move_to(table.start_y)

        result = TableResult()
        # Keep the header together with the first body row
        need = self.row_height * (2 if table.rows else 1)
        if not cursor.fits(need):
            cursor.start_new_page()
        result.fragments.append(place(table.header_cells, header=True))

        for i, row in enumerate(table.rows):
            if len(row) != len(widths):
                raise LayoutError(f"Row {i} has {len(row)} cells, expected {len(widths)}")
            if not cursor.fits(self.row_height):
                cursor.start_new_page()
                result.fragments.append(place(table.header_cells, header=True))
            result.fragments.append(place(row, header=False, striped=(i % 2 == 1)))

        result.end_y = cursor.y
        result.end_page_index = cursor.page_index
        return result

    @staticmethod
    def _col_widths(table: TableSpec, geometry: PageGeometry) -> Tuple[float, ...]:
        if table.col_widths:
            if len(table.col_widths) != len(table.header_cells):
                raise LayoutError("col_widths must match the number of header cells")
            return tuple(table.col_widths)
        n = max(1, len(table.header_cells))
        return (geometry.content_width / n,) * n
