from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""Processing result model for a reconciliation run.

SUMMARY 行の出力元。全フィールドは run 終了時点で確定し変更しない。
"""


@dataclass(frozen=True)
class ReconcileResult:
    """Aggregated result of one reconciliation run."""
    total_rows: int  # シート上の (空でない) 行数
    matched_rows: int  # 候補が 1 件以上あった行数
    unmatched_rows: int  # 候補 0 件の行数 (NotMatch へ出力)
    candidate_pool: int  # バッチ検索で取得した DB レコード数
    statements: int  # 生成した UPDATE 文の数
    not_match_path: Path
    update_sql_path: Path
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
