from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol

from ..logging.init import get_logger
from ..models.match_result import CandidateRecord

"""Batch candidate lookup.

バッチ全体で 1 回だけ DB を検索し (電話番号完全一致 OR 会社名部分一致)、
フラットな候補プールを返す。行ごとの振り分けは report_builder で行う。
"""

__all__ = [
    "CompanyStore",
    "candidate_matches",
    "distinct_non_empty",
    "fetch_candidate_pool",
]


class CompanyStore(Protocol):
    def find_candidates(self, tels: Sequence[str], names: Sequence[str]) -> list[CandidateRecord]:
        """Records whose tel is in `tels` OR whose name contains any of `names`."""
        ...


def candidate_matches(candidate: CandidateRecord, name: str, tel: str) -> bool:
    """Row-level match predicate. Empty values never match."""
    if tel and candidate.tel == tel:
        return True
    return bool(name) and name in candidate.name


def distinct_non_empty(values: Iterable[str]) -> list[str]:
    """Drop empty strings and duplicates, keeping first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v and v not in seen:
            seen.add(v)
            out.append(v)
    return out


def fetch_candidate_pool(
    store: CompanyStore,
    name_rows: Mapping[int, str],
    tel_rows: Mapping[int, str],
) -> list[CandidateRecord]:
    """Query the store once for the whole batch.

    Parameters:
        store: 検索先 (psycopg2 実装 or テスト用)
        name_rows: {行番号: 正規化済み会社名}
        tel_rows: {行番号: 正規化済み電話番号}

    Returns:
        候補プール (ストアの返却順)
    """
    logger = get_logger()
    tels = distinct_non_empty(tel_rows[n] for n in sorted(tel_rows))
    names = distinct_non_empty(name_rows[n] for n in sorted(name_rows))
    if not tels and not names:
        logger.info("no identifying values; skip candidate query")
        return []
    logger.debug(f"candidate query tels={len(tels)} names={len(names)}")
    pool = store.find_candidates(tels, names)
    logger.info(f"candidate pool fetched: {len(pool)} records")
    return pool
