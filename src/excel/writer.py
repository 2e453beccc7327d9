from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.worksheet.hyperlink import Hyperlink

from ..models.cell_value import HyperlinkValue, PlainValue
from ..models.match_result import MatchResult
from ..models.source_sheet import SourceSheet
from ..services.progress import ProgressTracker

"""Unmatched row exporter.

unmatched 行を元シートから行ごと (空セル含む) そのまま新規ブックへコピーする。
元の値を正規化せずに残すのはここだけ。
ハイパーリンクは値の型を保ったまま target (外部) / location (ブック内) を復元する。
"""

__all__ = [
    "export_unmatched",
]


def export_unmatched(
    sheet: SourceSheet,
    unmatched: Sequence[MatchResult],
    path: Path,
    sheet_title: str = "NotMatch",
) -> Path:
    """Write unmatched source rows into a fresh single-sheet workbook.

    Parameters
    ----------
    sheet: 元シートのスナップショット
    unmatched: 候補 0 件の MatchResult (行番号順)
    path: 出力先 (親ディレクトリは自動作成)
    sheet_title: 出力シート名
    """
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_title

    with ProgressTracker(len(unmatched), description="Writing NotMatch") as progress:
        for out_row, result in enumerate(unmatched, start=1):
            for col, cell in enumerate(sheet.row(result.row_number), start=1):
                target = worksheet.cell(row=out_row, column=col)
                if isinstance(cell, HyperlinkValue):
                    target.value = cell.value
                    if cell.target or cell.location:
                        target.hyperlink = Hyperlink(
                            ref=target.coordinate,
                            target=cell.target,
                            location=cell.location,
                        )
                elif isinstance(cell, PlainValue) and cell.value is not None:
                    target.value = cell.value
            progress.advance()

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    return path
