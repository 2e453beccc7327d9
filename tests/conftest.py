# Shared pytest fixtures
from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from src.logging.init import reset_logging
from tests.helpers import HEADER, InMemoryCompanyStore, write_source_workbook


@pytest.fixture(autouse=True)
def _reset_logger():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "out").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def store_rows() -> list[dict[str, Any]]:
    return [
        {"id": 1, "name": "サンプル不動産", "tel": "0312345678", "email": None},
        {"id": 2, "name": "テスト", "tel": "0611112222", "email": None},
        {"id": 3, "name": "みなと住宅", "tel": "0455556666", "email": None},
    ]


@pytest.fixture()
def company_store(store_rows) -> InMemoryCompanyStore:
    return InMemoryCompanyStore(store_rows)


@pytest.fixture()
def source_rows() -> list[list[Any]]:
    return [
        HEADER,
        # 2: 電話番号一致 (会社名は不一致)
        [1, "東京", "株式会社まったく別", "03-1234-5678", "千代田区",
         {"text": "a@b.com", "hyperlink": "mailto:a@b.com"}, "賃貸", None, "東証プライム", 3,
         "本社", "本店", None, "https://example.com"],
        # 3: 会社名部分一致 (株式会社除去後)
        [2, "大阪", "株式会社テスト", None, "北区",
         "t@example.com", "売買", "管理", "未選択", 1,
         "大阪支店", "支店", "営業所", None],
        # 4: 一致なし
        [3, "福岡", "株式会社どこにもない", "092-000-0000", "博多区",
         "n@example.com", None, None, "未上場"],
        # 5: 識別値が両方空
        [4, "札幌", None, None, "中央区", "x@example.com"],
    ]


@pytest.fixture()
def source_workbook(temp_workdir: Path, source_rows) -> Path:
    return write_source_workbook(temp_workdir / "data_prd.xlsx", source_rows)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_file: ./data_prd.xlsx
sheet_name: 全エリア
table: real_estate_company
output:
  not_match_file: out/not_match.xlsx
  update_sql_file: out/update_real_estate_company.sql
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: parking
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "reconcile.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
