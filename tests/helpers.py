# Test helpers shared across unit / integration / contract tests
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.worksheet.hyperlink import Hyperlink

from src.models.match_result import CandidateRecord
from src.services.matcher import candidate_matches

HEADER = [
    "No", "エリア", "会社名", "電話番号", "住所",
    "メール", "主業種", "その他業種", "上場区分", "事業所数",
    "事業所名", "事業所種別1", "事業所種別2", "URL",
]


class InMemoryCompanyStore:
    """CompanyStore over a list of dict rows; records every call."""

    def __init__(self, rows: Sequence[dict[str, Any]]) -> None:
        self.records = [CandidateRecord.from_row(r) for r in rows]
        self.calls: list[tuple[list[str], list[str]]] = []

    def find_candidates(self, tels, names):
        self.calls.append((list(tels), list(names)))
        return [
            r for r in self.records
            if any(candidate_matches(r, "", t) for t in tels)
            or any(candidate_matches(r, n, "") for n in names)
        ]


def write_source_workbook(path: Path, rows: list[list[Any]], sheet_name: str = "全エリア") -> Path:
    """Create an xlsx.

    A dict cell becomes a hyperlink cell: {"text", "hyperlink"} for an external
    target, {"text", "location"} for an in-workbook link.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    for r, values in enumerate(rows, start=1):
        for c, v in enumerate(values, start=1):
            if v is None:
                continue
            cell = ws.cell(row=r, column=c)
            if isinstance(v, dict):
                cell.value = v["text"]
                if "location" in v:
                    cell.hyperlink = Hyperlink(ref=cell.coordinate, location=v["location"])
                else:
                    cell.hyperlink = v["hyperlink"]
            else:
                cell.value = v
    wb.save(path)
    return path
