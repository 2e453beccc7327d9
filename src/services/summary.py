from __future__ import annotations

from ..models.processing_result import ReconcileResult

"""SUMMARY line rendering.

Format:
SUMMARY rows={total} matched={matched} unmatched={unmatched} candidates={pool}
statements={statements} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ReconcileResult) -> str:
    """Render a SUMMARY line from ReconcileResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from pathlib import Path
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ReconcileResult(
        ...     total_rows=10, matched_rows=7, unmatched_rows=3, candidate_pool=9,
        ...     statements=7, not_match_path=Path("not_match.xlsx"),
        ...     update_sql_path=Path("update.sql"), start_time=start, end_time=end,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=10 matched=7 unmatched=3 candidates=9 statements=7 elapsed_sec=2'
    """
    return (
        f"SUMMARY rows={result.total_rows} "
        f"matched={result.matched_rows} "
        f"unmatched={result.unmatched_rows} "
        f"candidates={result.candidate_pool} "
        f"statements={result.statements} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
