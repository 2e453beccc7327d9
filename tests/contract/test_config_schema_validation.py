from __future__ import annotations

import json

import jsonschema
import pytest

from src.config.loader import SCHEMA_PATH


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_empty_config_is_valid(schema):
    jsonschema.validate({}, schema)


def test_full_config_is_valid(schema):
    jsonschema.validate(
        {
            "source_file": "./data_prd.xlsx",
            "sheet_name": "全エリア",
            "table": "real_estate_company",
            "search_columns": {"name": "C", "tel": "D", "name_field": "name", "tel_field": "tel"},
            "update_columns": {"F": "email", "I": "ipo_type"},
            "excluded_columns": ["A", "B", "C", "D", "E"],
            "code_column": "I",
            "output": {
                "not_match_file": "not_match.xlsx",
                "update_sql_file": "update_real_estate_company.sql",
                "not_match_sheet": "NotMatch",
            },
            "database": {"host": "localhost", "port": 5432, "user": None, "password": None},
        },
        schema,
    )


@pytest.mark.parametrize(
    "data",
    [
        {"unknown": 1},
        {"table": "real_estate_company; DROP TABLE x"},
        {"update_columns": {"f": "email"}},
        {"update_columns": {"F": "e-mail"}},
        {"update_columns": {}},
        {"excluded_columns": ["A", "A"]},
        {"output": {"not_match_sheet": "x" * 32}},
        {"database": {"port": "5432"}},
    ],
)
def test_invalid_configs_rejected(schema, data):
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(data, schema)
