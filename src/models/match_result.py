from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

"""Candidate / match result models.

CandidateRecord は DB から 1 回だけ取得するスナップショット (変更しない)。
MatchResult.candidates が空なら unmatched、空でなければ matched。
"""

__all__ = [
    "CandidateRecord",
    "MatchResult",
]


@dataclass(frozen=True)
class CandidateRecord:
    """A real_estate_company row returned by the batch query."""
    name: str
    tel: str
    fields: Mapping[str, Any]  # 取得した全列 (name / tel 含む)

    @staticmethod
    def from_row(row: Mapping[str, Any], name_field: str = "name", tel_field: str = "tel") -> CandidateRecord:
        name = row.get(name_field)
        tel = row.get(tel_field)
        return CandidateRecord(
            name="" if name is None else str(name),
            tel="" if tel is None else str(tel),
            fields=MappingProxyType(dict(row)),
        )


@dataclass(frozen=True)
class MatchResult:
    row_number: int
    name: str  # 正規化済み会社名
    tel: str  # 正規化済み電話番号
    candidates: tuple[CandidateRecord, ...] = ()

    @property
    def matched(self) -> bool:
        return bool(self.candidates)
