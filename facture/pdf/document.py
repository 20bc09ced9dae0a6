from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


LEFT = "left"
RIGHT = "right"
CENTER = "center"


@dataclass(frozen=True)
class TextFragment:
    x: float
    # Baseline, offset from page top
    y: float
    text: str
    font: str = "Helvetica"
    size: float = 10
    align: str = LEFT


@dataclass(frozen=True)
class RowFragment:
    """One placed table row; y is the top edge of the row."""

    y: float
    height: float
    cells: Tuple[str, ...]
    col_x: Tuple[float, ...]
    col_widths: Tuple[float, ...]
    aligns: Tuple[str, ...]
    header: bool = False
    striped: bool = False
    font_size: float = 10

    @property
    def bottom(self) -> float:
        return self.y + self.height


Fragment = Union[TextFragment, RowFragment]


@dataclass
class Footer:
    message: str
    marker: str


@dataclass
class Page:
    index: int
    fragments: List[Fragment] = field(default_factory=list)
    # Reserved region, filled only by the pagination stamper
    footer: Optional[Footer] = None

    def place(self, fragment: Fragment) -> Fragment:
        self.fragments.append(fragment)
        return fragment

    def texts(self) -> List[str]:
        out: List[str] = []
        for frag in self.fragments:
            if isinstance(frag, TextFragment):
                out.append(frag.text)
            else:
                out.extend(frag.cells)
        return out

    def rows(self) -> List[RowFragment]:
        return [f for f in self.fragments if isinstance(f, RowFragment)]


@dataclass
class Document:
    """Ordered pages of one invoice; pages are created lazily as content overflows."""

    title: str = ""
    author: str = ""
    pages: List[Page] = field(default_factory=list)
    stamped: bool = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page(self, index: int) -> Page:
        """Return page `index` (0-based), creating any missing pages up to it."""
        while len(self.pages) <= index:
            self.pages.append(Page(index=len(self.pages)))
        return self.pages[index]
