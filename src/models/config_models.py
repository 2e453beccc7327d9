from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the Excel -> real_estate_company reconciler.

ReconcileConfig はトップレベルで一度だけ構築し、各コンポーネントへ明示的に渡す。
既定値 (DEFAULT_*) は運用中の Excel レイアウトそのもの。
"""

__all__ = [
    "DatabaseConfig",
    "SearchColumns",
    "OutputConfig",
    "ReconcileConfig",
    "IpoType",
    "IPO_TYPES",
    "DEFAULT_UPDATE_COLUMNS",
    "DEFAULT_EXCLUDED_COLUMNS",
]


@dataclass(frozen=True)
class IpoType:
    value: int | None
    text: str


# index 0 は「未選択」(= NULL)
IPO_TYPES: tuple[IpoType, ...] = (
    IpoType(None, "未選択"),
    IpoType(0, "未上場"),
    IpoType(1, "東証グロース"),
    IpoType(2, "東証スタンダード"),
    IpoType(3, "東証プライム"),
    IpoType(4, "札幌証券取引所"),
    IpoType(5, "TOKYO PRO Market"),
)

DEFAULT_SOURCE_FILE = "./data_prd.xlsx"
DEFAULT_SHEET_NAME = "全エリア"
DEFAULT_TABLE = "real_estate_company"
DEFAULT_CODE_COLUMN = "I"
DEFAULT_EXCLUDED_COLUMNS: frozenset[str] = frozenset({"A", "B", "C", "D", "E"})
DEFAULT_UPDATE_COLUMNS: dict[str, str] = {
    "F": "email",
    "G": "main_business_sector",
    "H": "other_business_sector",
    "I": "ipo_type",
    "J": "office_number",
    "K": "office_name",
    "L": "office_type_name1",
    "M": "office_type_name2",
    "N": "url",
}


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection fallback.

    Environment variables (.env included) take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class SearchColumns:
    """Identifying columns of the source sheet (letter) and their store fields."""
    name: str = "C"
    tel: str = "D"
    name_field: str = "name"
    tel_field: str = "tel"


@dataclass(frozen=True)
class OutputConfig:
    not_match_file: str = "not_match.xlsx"
    update_sql_file: str = "update_real_estate_company.sql"
    not_match_sheet: str = "NotMatch"


@dataclass(frozen=True)
class ReconcileConfig:
    """Root configuration object for a reconciliation run."""
    source_file: str = DEFAULT_SOURCE_FILE
    sheet_name: str = DEFAULT_SHEET_NAME
    table: str = DEFAULT_TABLE
    search_columns: SearchColumns = field(default_factory=SearchColumns)
    update_columns: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_UPDATE_COLUMNS))
    excluded_columns: frozenset[str] = DEFAULT_EXCLUDED_COLUMNS
    code_column: str = DEFAULT_CODE_COLUMN  # IPO_TYPES で表示文字列 -> コード変換する列
    ipo_types: tuple[IpoType, ...] = IPO_TYPES
    output: OutputConfig = field(default_factory=OutputConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)

    def ipo_code(self, text: object) -> int | None:
        """Translate listing-status display text to its code (None when unknown or 未選択)."""
        for ipo in self.ipo_types:
            if ipo.text == text:
                return ipo.value
        return None
