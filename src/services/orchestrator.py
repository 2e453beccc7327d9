from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import WorkbookError, load_sheet, read_column_data
from ..excel.writer import export_unmatched
from ..logging.init import get_logger
from ..models.config_models import ReconcileConfig
from ..models.processing_result import ReconcileResult
from ..models.source_sheet import SourceSheet
from .matcher import CompanyStore, fetch_candidate_pool
from .normalizer import FieldKind
from .report_builder import build_match_results, partition
from .sql_generator import (
    ColumnMappingError,
    count_statements,
    render_update_script,
    write_update_script,
)

"""Service orchestration for a reconciliation run.

処理手順:
1. Excel の対象シートを読み込み、会社名列 / 電話番号列を正規化して抽出 (2 列は並行)
   - 会社名: 「株式会社」を除去
   - 電話番号: "-" を除去 (DB はハイフン無し)
2. どちらかの列に一致する会社を DB から一括取得
3. Excel の各行と取得結果を突き合わせる
4. 候補 0 件の行 -> 別 Excel (NotMatch) へ出力
5. 残りの行 -> 新しい値で UPDATE する SQL を生成
"""

__all__ = [
    "ReconcileError",
    "read_identifying_columns",
    "run_reconciliation",
]


class ReconcileError(Exception):
    """Fatal error that aborts the run."""


def read_identifying_columns(
    sheet: SourceSheet, config: ReconcileConfig
) -> tuple[dict[int, str], dict[int, str]]:
    """Read name / tel columns concurrently and join both before returning."""
    cols = config.search_columns
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="read-column") as pool:
        name_future = pool.submit(read_column_data, sheet, cols.name, FieldKind.NAME)
        tel_future = pool.submit(read_column_data, sheet, cols.tel, FieldKind.PHONE)
        return name_future.result(), tel_future.result()


def run_reconciliation(
    config: ReconcileConfig,
    store: CompanyStore,
    *,
    output_dir: Path | None = None,
) -> ReconcileResult:
    """Run read -> match -> write once.

    Args:
        config: 実行設定
        store: 候補検索先
        output_dir: 出力先ディレクトリ (None ならカレント)

    Returns:
        ReconcileResult

    Raises:
        ReconcileError: シート欠落 / マッピング欠落など継続不能なエラー
    """
    logger = get_logger()
    start_time = datetime.now(UTC)
    base = output_dir or Path(".")

    source = Path(config.source_file)
    try:
        sheet = load_sheet(source, config.sheet_name)
    except WorkbookError as e:
        raise ReconcileError(str(e)) from e
    logger.info(f"sheet loaded: {source.name}/{sheet.title} rows={len(sheet)}")

    name_rows, tel_rows = read_identifying_columns(sheet, config)
    pool = fetch_candidate_pool(store, name_rows, tel_rows)

    results = build_match_results(name_rows, tel_rows, pool)
    matched, unmatched = partition(results)
    logger.info(f"matched={len(matched)} unmatched={len(unmatched)}")
    for result in matched:
        ids = [c.fields.get("id", c.name) for c in result.candidates]
        logger.debug(f"row={result.row_number} candidates={ids}")

    # SQL を先に組み立ててから書き出す (マッピング欠落時は何も出力しない)
    try:
        script = render_update_script(sheet, matched, config)
    except ColumnMappingError as e:
        raise ReconcileError(str(e)) from e

    not_match_path = export_unmatched(
        sheet, unmatched, base / config.output.not_match_file, config.output.not_match_sheet
    )
    logger.info(f"not matched rows written: {not_match_path}")
    update_sql_path = write_update_script(script, base / config.output.update_sql_file)
    logger.info(f"update script written: {update_sql_path}")

    end_time = datetime.now(UTC)
    return ReconcileResult(
        total_rows=len(results),
        matched_rows=len(matched),
        unmatched_rows=len(unmatched),
        candidate_pool=len(pool),
        statements=count_statements(script),
        not_match_path=not_match_path,
        update_sql_path=update_sql_path,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
    )
