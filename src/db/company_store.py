from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import psycopg2
from psycopg2 import sql
from psycopg2.extras import RealDictCursor

from ..models.match_result import CandidateRecord

"""psycopg2 backed store for the batch candidate query.

SELECT * FROM <table> WHERE <tel> = ANY(%s) OR <name> LIKE %s OR <name> LIKE %s ...

- 値は全てパラメータバインド、識別子は psycopg2.sql.Identifier で組み立てる
- LIKE のメタ文字 (%, _, \\) はエスケープし、純粋な部分一致にする
- 空の値はここに渡さない前提 (matcher 側で除外済み)
"""

__all__ = [
    "StoreQueryError",
    "PostgresCompanyStore",
    "escape_like",
    "build_candidate_query",
]


class StoreQueryError(Exception):
    pass


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_candidate_query(
    table: str,
    tels: Sequence[str],
    names: Sequence[str],
    name_field: str = "name",
    tel_field: str = "tel",
) -> tuple[sql.Composed, list[Any]]:
    """Build the disjunctive batch query and its parameters."""
    conditions: list[sql.Composable] = []
    params: list[Any] = []
    if tels:
        conditions.append(sql.SQL("{} = ANY(%s)").format(sql.Identifier(tel_field)))
        params.append(list(tels))
    for name in names:
        conditions.append(sql.SQL("{} LIKE %s").format(sql.Identifier(name_field)))
        params.append(f"%{escape_like(name)}%")
    if not conditions:
        raise StoreQueryError("candidate query requires at least one tel or name")
    query = sql.SQL("SELECT * FROM {} WHERE ").format(sql.Identifier(table)) + sql.SQL(" OR ").join(conditions)
    return query, params


class PostgresCompanyStore:
    """CompanyStore over an open psycopg2 connection."""

    def __init__(self, conn: Any, table: str, name_field: str = "name", tel_field: str = "tel") -> None:
        self.conn = conn
        self.table = table
        self.name_field = name_field
        self.tel_field = tel_field

    def find_candidates(self, tels: Sequence[str], names: Sequence[str]) -> list[CandidateRecord]:
        if not tels and not names:
            return []
        query, params = build_candidate_query(
            self.table, tels, names, name_field=self.name_field, tel_field=self.tel_field
        )
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
        except psycopg2.Error as e:
            raise StoreQueryError(str(e)) from e
        return [CandidateRecord.from_row(r, self.name_field, self.tel_field) for r in rows]
