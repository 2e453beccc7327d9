from __future__ import annotations

import zipfile
from pathlib import Path

import openpyxl
import pandas as pd
from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from ..models.cell_value import CellValue, from_openpyxl_cell, is_empty
from ..models.source_sheet import SourceSheet
from ..services.normalizer import FieldKind, normalize

"""Excel reader for the reconciliation source sheet.

- openpyxl で読み込み、シートをイミュータブルな SourceSheet に一括スナップショット化する
  (ハイパーリンク保持のため read_only モードは使わない)。
- 列単位の抽出 (会社名 / 電話番号) はスナップショットに対して行うため並行実行しても安全。
- --inspect-data 用のプレビューは pandas で生読みする。
"""

__all__ = [
    "WorkbookError",
    "SheetNotFoundError",
    "load_sheet",
    "read_column_data",
    "preview_sheet",
]


class WorkbookError(Exception):
    """Raised when the source workbook cannot be opened."""


class SheetNotFoundError(WorkbookError):
    """Raised when the configured sheet does not exist in the workbook."""


def load_sheet(path: Path, sheet_name: str) -> SourceSheet:
    """Read one sheet of an Excel workbook into a SourceSheet.

    Parameters
    ----------
    path: Excel ファイルパス
    sheet_name: 対象シート名 (存在しなければ SheetNotFoundError)
    """
    if not path.exists():
        raise WorkbookError(f"file not found: {path}")
    try:
        workbook = openpyxl.load_workbook(path, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile) as e:
        raise WorkbookError(f"cannot open {path}: {e}") from e
    try:
        if sheet_name not in workbook.sheetnames:
            raise SheetNotFoundError(f"Not found {sheet_name}")
        worksheet = workbook[sheet_name]
        rows: dict[int, tuple[CellValue, ...]] = {}
        for row in worksheet.iter_rows():
            cells = [from_openpyxl_cell(c) for c in row]
            # 末尾の空セルを落とす (途中の空セルは位置保持のため残す)
            while cells and is_empty(cells[-1]):
                cells.pop()
            if not cells:
                continue
            rows[row[0].row] = tuple(cells)
        return SourceSheet.create(worksheet.title, rows)
    finally:
        workbook.close()


def read_column_data(sheet: SourceSheet, column: str, kind: FieldKind) -> dict[int, str]:
    """Project one column of the sheet into {row_number: normalized text}.

    全ての行番号を含む (空セルは "")。
    """
    index = column_index_from_string(column)
    return {n: normalize(sheet.cell(n, index), kind) for n in sheet.row_numbers}


def preview_sheet(path: Path, sheet_name: str, rows: int = 5) -> pd.DataFrame:
    """Raw preview of the first rows of a sheet (no header inference)."""
    try:
        df = pd.read_excel(path, sheet_name=sheet_name, header=None, nrows=rows)
    except ValueError as e:  # pandas はシート欠落を ValueError で通知
        raise SheetNotFoundError(f"Not found {sheet_name}") from e
    # 列名を Excel の列記号に揃える
    df.columns = [get_column_letter(i + 1) for i in range(df.shape[1])]
    df.index = [i + 1 for i in range(df.shape[0])]
    return df