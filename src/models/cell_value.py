from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

"""Tagged cell value model for spreadsheet cells.

openpyxl はハイパーリンクをセル値とは別属性 (cell.hyperlink) で保持するため、
読み込み境界で PlainValue / HyperlinkValue に正規化してから後段へ渡す。
"""

__all__ = [
    "PlainValue",
    "HyperlinkValue",
    "CellValue",
    "from_openpyxl_cell",
    "cell_text",
    "extract_value",
    "is_empty",
]


@dataclass(frozen=True)
class PlainValue:
    """Cell holding a raw value (str / int / float / datetime / bool) or None when empty."""
    value: Any = None


@dataclass(frozen=True)
class HyperlinkValue:
    """Cell holding a raw value plus a link.

    target は外部リンク (mailto:, http: ...)、location はブック内リンク (Sheet!A1)。
    """
    value: Any = None
    target: str | None = None
    location: str | None = None

    @property
    def text(self) -> str:
        """Display text (the raw value as a string)."""
        return "" if self.value is None else str(self.value)


CellValue = Union[PlainValue, HyperlinkValue]


def from_openpyxl_cell(cell: Any) -> CellValue:
    """Convert an openpyxl cell into a CellValue.

    MergedCell などハイパーリンク属性を持たないセルも許容する。
    """
    value = getattr(cell, "value", None)
    link = getattr(cell, "hyperlink", None)
    if link is not None:
        return HyperlinkValue(
            value=value,
            target=getattr(link, "target", None),
            location=getattr(link, "location", None),
        )
    return PlainValue(value)


def extract_value(cell: CellValue | Any) -> Any:
    """Return the value used for field updates: display text for hyperlinks, raw value otherwise."""
    if isinstance(cell, HyperlinkValue):
        return cell.text
    if isinstance(cell, PlainValue):
        return cell.value
    return cell


def cell_text(cell: CellValue | Any) -> str:
    """Return literal text content of a cell ("" for empty)."""
    value = extract_value(cell)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def is_empty(cell: CellValue | Any) -> bool:
    value = extract_value(cell)
    return value is None or (isinstance(value, str) and value == "")
