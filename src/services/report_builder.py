from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..models.match_result import CandidateRecord, MatchResult
from .matcher import candidate_matches

"""Per-row attribution of the candidate pool.

バッチ検索と同じ述語を行ごとに評価し直す。行 B の会社名で取得された候補でも、
行 A の値が条件を満たせば行 A にも紐付く (部分一致の性質としてそのまま残す)。
"""

__all__ = [
    "build_match_results",
    "partition",
]


def build_match_results(
    name_rows: Mapping[int, str],
    tel_rows: Mapping[int, str],
    pool: Sequence[CandidateRecord],
) -> list[MatchResult]:
    """One MatchResult per row number of tel_rows, ascending."""
    results: list[MatchResult] = []
    for row_number in sorted(tel_rows):
        tel = tel_rows[row_number]
        name = name_rows.get(row_number, "")
        candidates = tuple(c for c in pool if candidate_matches(c, name, tel))
        results.append(MatchResult(row_number=row_number, name=name, tel=tel, candidates=candidates))
    return results


def partition(results: Sequence[MatchResult]) -> tuple[list[MatchResult], list[MatchResult]]:
    """Split into (matched, unmatched), both keeping row order."""
    matched = [r for r in results if r.matched]
    unmatched = [r for r in results if not r.matched]
    return matched, unmatched
