from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DatabaseConfig,
    OutputConfig,
    ReconcileConfig,
    SearchColumns,
)

"""Config loader.

- config/reconcile.yml を読み込み JSON schema で検証
- 全キー任意。未指定のキーは ReconcileConfig の既定値 (現行 Excel レイアウト) を使う
- ファイル自体が無い場合は既定値のみで構築 (CLI 側で判断)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/reconcile.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: schema file missing / invalid, or config violates the schema
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def build_config(data: dict[str, Any]) -> ReconcileConfig:
    """Build ReconcileConfig from already-validated mapping data."""
    kwargs: dict[str, Any] = {}
    for key in ("source_file", "sheet_name", "table", "code_column"):
        if key in data:
            kwargs[key] = data[key]
    if "search_columns" in data:
        kwargs["search_columns"] = SearchColumns(**data["search_columns"])
    if "update_columns" in data:
        kwargs["update_columns"] = dict(data["update_columns"])
    if "excluded_columns" in data:
        kwargs["excluded_columns"] = frozenset(data["excluded_columns"])
    if "output" in data:
        kwargs["output"] = OutputConfig(**data["output"])
    if "database" in data:
        kwargs["database"] = DatabaseConfig(**(data["database"] or {}))

    cfg = replace(ReconcileConfig(), **kwargs)
    if cfg.code_column not in cfg.update_columns:
        raise ConfigError(f"code_column {cfg.code_column} is not in update_columns")
    return cfg


def load_config(path: Path) -> ReconcileConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return build_config(data)
