from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg2
from dotenv import load_dotenv

from src.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from src.db.company_store import PostgresCompanyStore, StoreQueryError
from src.excel.reader import SheetNotFoundError, preview_sheet
from src.logging.init import log_summary, set_debug, setup_logging
from src.models.config_models import DatabaseConfig, ReconcileConfig
from src.services.orchestrator import ReconcileError, run_reconciliation
from src.services.summary import render_summary_line

"""CLI entrypoint.

python -m src.cli [--config PATH] [--debug] [--inspect-data]

- .env を読み込み (DB 接続情報を最優先)
- 設定ファイルがあれば読み込み、無ければ既定値で実行
- 失敗時は ERROR を出して終了コード 1 (リトライしない)
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def resolve_connect_kwargs(db_cfg: DatabaseConfig) -> dict[str, Any]:
    """Resolve psycopg2.connect keyword arguments.

    個別項目はキーワード引数で渡し、空白や引用符を含む値も psycopg2 側でクォートさせる。

    優先順位:
        1. DATABASE_URL / PGDSN (.env で上書き済み)
        2. 個別 PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE
        3. 設定ファイルの database セクション
    """
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return {"dsn": dsn}
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    kwargs: dict[str, Any] = {"host": host, "port": port, "user": user, "dbname": database}
    if password:
        kwargs["password"] = password
    return kwargs


@contextmanager
def _db_connection(cfg: ReconcileConfig) -> Iterator[Any]:
    """Read-only psycopg2 connection for the candidate query."""
    conn = psycopg2.connect(**resolve_connect_kwargs(cfg.database))
    try:
        conn.set_session(readonly=True)
        yield conn
    finally:
        conn.close()


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (existing variables are overridden)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Excel -> real_estate_company reconciler",
        epilog=(
            "Candidates are read from PostgreSQL; the generated "
            "update_real_estate_company.sql targets the MySQL deployment "
            "(it toggles SQL_SAFE_UPDATES)."
        ),
    )
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print the first rows of the source sheet then exit")
    return p.parse_args(argv)


def _resolve_config(path: Path | None) -> ReconcileConfig:
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ReconcileConfig()


def _inspect_data(cfg: ReconcileConfig) -> int:
    source = Path(cfg.source_file)
    if not source.exists():
        print(f"inspect: file not found: {source}")
        return EXIT_FATAL
    try:
        df = preview_sheet(source, cfg.sheet_name)
    except SheetNotFoundError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {source.name} SHEET: {cfg.sheet_name}")
    print(df.to_string())
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] を渡したテストで pytest の引数を拾わないため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Reconciling {cfg.source_file} [{cfg.sheet_name}] against {cfg.table}")
    try:
        with _db_connection(cfg) as conn:
            store = PostgresCompanyStore(
                conn,
                cfg.table,
                name_field=cfg.search_columns.name_field,
                tel_field=cfg.search_columns.tel_field,
            )
            result = run_reconciliation(cfg, store)
    except (ReconcileError, StoreQueryError) as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    except psycopg2.Error as e:
        logger.error(f"database: {e}")
        return EXIT_FATAL
    except OSError as e:
        logger.error(f"io: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result)
    # log_summary が "SUMMARY " を付与するため除去して渡す
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
