from __future__ import annotations

from unittest.mock import MagicMock

import psycopg2
import pytest

from src.db.company_store import (
    PostgresCompanyStore,
    StoreQueryError,
    build_candidate_query,
    escape_like,
)


class DummyCursor:
    def __init__(self, rows=None, error: Exception | None = None) -> None:
        self.rows = rows or []
        self.error = error
        self.executed: list[tuple[object, list]] = []

    def execute(self, query, params):
        if self.error is not None:
            raise self.error
        self.executed.append((query, params))

    def fetchall(self):
        return self.rows

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _conn(cursor: DummyCursor) -> MagicMock:
    conn = MagicMock()
    conn.cursor.return_value = cursor
    return conn


def test_escape_like():
    assert escape_like("100%_a\\b") == "100\\%\\_a\\\\b"
    assert escape_like("サンプル") == "サンプル"


def test_build_candidate_query_params():
    query, params = build_candidate_query("real_estate_company", ["0312345678", "0611112222"], ["サンプル", "50%"])
    assert params == [["0312345678", "0611112222"], "%サンプル%", "%50\\%%"]
    assert query is not None


def test_build_candidate_query_names_only():
    _, params = build_candidate_query("real_estate_company", [], ["テスト"])
    assert params == ["%テスト%"]


def test_build_candidate_query_requires_values():
    with pytest.raises(StoreQueryError):
        build_candidate_query("real_estate_company", [], [])


def test_find_candidates_maps_rows_to_records():
    cur = DummyCursor(rows=[{"id": 1, "name": "サンプル不動産", "tel": "0312345678", "email": None}])
    store = PostgresCompanyStore(_conn(cur), "real_estate_company")
    records = store.find_candidates(["0312345678"], ["サンプル"])
    assert len(cur.executed) == 1
    assert records[0].name == "サンプル不動産"
    assert records[0].tel == "0312345678"
    assert records[0].fields["id"] == 1


def test_find_candidates_null_columns_become_empty_text():
    cur = DummyCursor(rows=[{"name": "名前のみ", "tel": None}])
    store = PostgresCompanyStore(_conn(cur), "real_estate_company")
    assert store.find_candidates([], ["名前"])[0].tel == ""


def test_find_candidates_empty_input_does_not_query():
    conn = MagicMock()
    store = PostgresCompanyStore(conn, "real_estate_company")
    assert store.find_candidates([], []) == []
    conn.cursor.assert_not_called()


def test_find_candidates_wraps_driver_errors():
    cur = DummyCursor(error=psycopg2.OperationalError("connection lost"))
    store = PostgresCompanyStore(_conn(cur), "real_estate_company")
    with pytest.raises(StoreQueryError, match="connection lost"):
        store.find_candidates(["1"], [])
