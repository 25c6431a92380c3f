"""
Page layout primitives for contract documents.

Coordinates are millimetres on an A4 page with the y axis growing downwards,
the same way the document is read. The exporter flips them when drawing.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 20.0
TOP_MARGIN = 20.0

Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)
RULE_GRAY: Color = (200, 200, 200)


@dataclass(frozen=True)
class TextOp:
    text: str
    x: float
    y: float
    font_size: float = 12
    bold: bool = False
    align: str = "left"  # left, center, right
    color: Color = BLACK
    section: str = ""


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color = RULE_GRAY
    section: str = ""


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill_color: Color
    section: str = ""


@dataclass(frozen=True)
class ImageOp:
    data: bytes = field(repr=False)
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    section: str = ""


DrawOp = Union[TextOp, LineOp, RectOp, ImageOp]


@dataclass
class Page:
    ops: list = field(default_factory=list)


@dataclass
class ContractDocument:
    """Laid-out contract: an ordered list of pages of draw operations"""

    pages: list
    title: str = ""
    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT

    def ops(self, section: Optional[str] = None, kind: Optional[type] = None) -> list:
        """All draw operations in page order, optionally filtered"""
        return [
            op
            for page in self.pages
            for op in page.ops
            if (section is None or op.section == section) and (kind is None or isinstance(op, kind))
        ]

    def texts(self, section: Optional[str] = None) -> list[str]:
        return [op.text for op in self.ops(section, TextOp)]

    def sections(self) -> list[str]:
        """Section names in the order they were first drawn"""
        seen = []
        for op in self.ops():
            if op.section not in seen:
                seen.append(op.section)
        return seen


class LayoutContext:
    """
    Mutable accumulator for a single layout pass.

    Holds the pages drawn so far and the vertical cursor. Section functions
    receive the context explicitly, so a builder can run any number of passes
    side by side.
    """

    def __init__(
        self,
        page_width: float = PAGE_WIDTH,
        page_height: float = PAGE_HEIGHT,
        margin: float = MARGIN,
        top: float = TOP_MARGIN,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.top = top
        self.pages = [Page()]
        self.y = top
        self.section = ""

    @property
    def content_width(self) -> float:
        return self.page_width - (self.margin * 2)

    @property
    def right(self) -> float:
        return self.page_width - self.margin

    def new_page(self) -> None:
        self.pages.append(Page())
        self.y = self.top

    def break_if_past(self, threshold: float) -> bool:
        """Start a new page when the cursor has moved past ``threshold``"""
        if self.y > threshold:
            self.new_page()
            return True
        return False

    def _emit(self, op) -> None:
        self.pages[-1].ops.append(op)

    def add_text(
        self,
        text: str,
        x: Optional[float] = None,
        font_size: float = 12,
        bold: bool = False,
        align: str = "left",
        color: Color = BLACK,
    ) -> float:
        """Draw text at the cursor and advance it in proportion to the font size"""
        if align == "center":
            x = self.page_width / 2
        elif align == "right":
            x = self.right
        elif x is None:
            x = self.margin

        self.text_at(text, x, self.y, font_size=font_size, bold=bold, align=align, color=color)
        self.y += font_size / 2.5
        return self.y

    def text_at(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float = 12,
        bold: bool = False,
        align: str = "left",
        color: Color = BLACK,
    ) -> None:
        """Draw text without touching the cursor"""
        self._emit(TextOp(text, x, y, font_size, bold, align, color, self.section))

    def stamp_every_page(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float = 12,
        align: str = "left",
        color: Color = BLACK,
    ) -> None:
        """Draw the same text at a fixed position on every page drawn so far"""
        for page in self.pages:
            page.ops.append(TextOp(text, x, y, font_size, False, align, color, self.section))

    def rule(self, y: Optional[float] = None) -> None:
        """Full-width horizontal rule"""
        y = self.y if y is None else y
        self.line(self.margin, y, self.right, y)

    def line(self, x1: float, y1: float, x2: float, y2: float, color: Color = RULE_GRAY) -> None:
        self._emit(LineOp(x1, y1, x2, y2, color, self.section))

    def rect(self, x: float, y: float, width: float, height: float, fill_color: Color) -> None:
        self._emit(RectOp(x, y, width, height, fill_color, self.section))

    def image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        self._emit(ImageOp(data, x, y, width, height, self.section))

    def wrap(self, text: str, font_size: float, bold: bool = False) -> list[str]:
        """Split text into lines that fit the content width"""
        font_name = "Helvetica-Bold" if bold else "Helvetica"
        return simpleSplit(text, font_name, font_size, self.content_width * mm)

    def finish(self, title: str = "") -> ContractDocument:
        return ContractDocument(
            pages=self.pages,
            title=title,
            page_width=self.page_width,
            page_height=self.page_height,
        )
