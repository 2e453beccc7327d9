from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from ..logging.init import get_logger
from ..models.cell_value import extract_value
from ..models.config_models import ReconcileConfig
from ..models.match_result import MatchResult
from ..models.source_sheet import SourceSheet
from .progress import ProgressTracker

"""UPDATE script generation for matched rows.

WHERE 句は主キーの IN (...) ではなく name / tel で組み立てる。SQL 生成後に DB 側の
データが変わっても内容ベースで対象行を特定できるため。その代わり PK 条件が無いので
SQL_SAFE_UPDATES を一時的に 0 にする必要がある。

値はエスケープせずシングルクォートで囲む。入力データにシングルクォートを含めないこと
(含む場合は WARN を出してそのまま出力する)。
"""

__all__ = [
    "ColumnMappingError",
    "SAFE_UPDATES_OFF",
    "SAFE_UPDATES_ON",
    "render_value",
    "build_assignments",
    "build_update_statement",
    "render_update_script",
    "write_update_script",
    "count_statements",
]

SAFE_UPDATES_OFF = "SET SQL_SAFE_UPDATES = 0;"
SAFE_UPDATES_ON = "SET SQL_SAFE_UPDATES = 1;"


class ColumnMappingError(Exception):
    """Raised when a data column has no entry in the update column mapping."""


def render_value(value: Any) -> str:
    """SQL literal for a field value (no quote escaping)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, datetime):
        text = value.isoformat(sep=" ")
    elif isinstance(value, (date, time)):
        text = value.isoformat()
    else:
        text = str(value)
    return f"'{text}'"


def build_assignments(sheet: SourceSheet, result: MatchResult, config: ReconcileConfig) -> list[tuple[str, str]]:
    """(field, SQL literal) pairs for the updatable columns of one row.

    Raises:
        ColumnMappingError: 対象列がマッピングに存在しない場合
    """
    logger = get_logger()
    assignments: list[tuple[str, str]] = []
    for column, cell in sheet.iter_addressed(result.row_number):
        if column in config.excluded_columns:
            continue
        field = config.update_columns.get(column)
        if field is None:
            raise ColumnMappingError(
                f"row {result.row_number}: column {column} has no update mapping"
            )
        value = extract_value(cell)
        if column == config.code_column:
            code = config.ipo_code(value)
            assignments.append((field, "null" if code is None else str(code)))
            continue
        if isinstance(value, str) and "'" in value:
            logger.warning(f"row={result.row_number} field={field} contains single quote (emitted unescaped)")
        assignments.append((field, render_value(value)))
    return assignments


def build_update_statement(table: str, assignments: Sequence[tuple[str, str]], result: MatchResult) -> str:
    set_clause = ", ".join(f"{field}={literal}" for field, literal in assignments)
    return (
        f"UPDATE {table} SET {set_clause} "
        f"WHERE name = '{result.name}' OR tel = '{result.tel}';"
    )


def render_update_script(sheet: SourceSheet, matched: Sequence[MatchResult], config: ReconcileConfig) -> str:
    """Render the whole script (safety toggle + one UPDATE per matched row).

    全文をメモリ上で組み立ててから書き出すため、途中で ColumnMappingError が出ても
    中途半端な SQL ファイルは残らない。
    """
    logger = get_logger()
    statements: list[str] = []
    with ProgressTracker(len(matched), description="Generating UPDATE") as progress:
        for result in matched:
            assignments = build_assignments(sheet, result, config)
            progress.advance()
            if not assignments:
                logger.warning(f"row={result.row_number} has no updatable cells; skipped")
                continue
            statements.append(build_update_statement(config.table, assignments, result))
            progress.set_postfix(statements=len(statements))
    body = "\n".join(statements)
    return f"{SAFE_UPDATES_OFF}\n{body}\n{SAFE_UPDATES_ON}\n"


def write_update_script(script: str, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(script, encoding="utf-8")
    return path


def count_statements(script: str) -> int:
    return sum(1 for line in script.splitlines() if line.startswith("UPDATE "))
