from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from openpyxl.utils import get_column_letter

from .cell_value import CellValue, PlainValue

"""SourceSheet model: immutable snapshot of the sheet being reconciled.

row_number は Excel の 1 始まり行番号。値が一つもない行はスナップショットに含めない。
各行は A 列から「その行の最後の非空セル」までを保持し、途中の空セルも位置を保つ。
"""

__all__ = [
    "SourceSheet",
]


@dataclass(frozen=True)
class SourceSheet:
    title: str
    rows: Mapping[int, tuple[CellValue, ...]]

    @staticmethod
    def create(title: str, rows: dict[int, tuple[CellValue, ...]]) -> SourceSheet:
        ordered = {n: tuple(rows[n]) for n in sorted(rows)}
        return SourceSheet(title=title, rows=MappingProxyType(ordered))

    @property
    def row_numbers(self) -> list[int]:
        return list(self.rows.keys())

    def row(self, row_number: int) -> tuple[CellValue, ...]:
        """Full cell range of a row (empty tuple if the row holds no values)."""
        return self.rows.get(row_number, ())

    def cell(self, row_number: int, column: int) -> CellValue:
        """Cell by 1-based column index; cells past the row end are empty."""
        cells = self.row(row_number)
        if 1 <= column <= len(cells):
            return cells[column - 1]
        return PlainValue(None)

    def iter_addressed(self, row_number: int) -> Iterator[tuple[str, CellValue]]:
        """Yield (column letter, cell) pairs for a row, empty cells included."""
        for idx, cell in enumerate(self.row(row_number), start=1):
            yield get_column_letter(idx), cell

    def __len__(self) -> int:
        return len(self.rows)
