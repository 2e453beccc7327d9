from __future__ import annotations

from enum import Enum
from typing import Any

from ..models.cell_value import cell_text, extract_value

"""Identifying field normalization.

- 会社名: 「株式会社」を位置に関係なく全て除去
- 電話番号: "-" を全て除去 (DB 側はハイフン無しで保持している)
空 / falsy な値は変換せず "" を返す。
"""

__all__ = [
    "FieldKind",
    "CORPORATE_TOKEN",
    "normalize",
]

CORPORATE_TOKEN = "株式会社"


class FieldKind(Enum):
    NAME = "name"
    PHONE = "tel"


def normalize(raw: Any, kind: FieldKind) -> str:
    """Canonicalize a raw cell value (PlainValue / HyperlinkValue / plain object)."""
    if not extract_value(raw):
        return ""
    text = cell_text(raw)
    if kind is FieldKind.NAME:
        # 除去で新たに連結されたトークンも消す (冪等性)
        while CORPORATE_TOKEN in text:
            text = text.replace(CORPORATE_TOKEN, "")
        return text
    return text.replace("-", "")
