from __future__ import annotations

from types import SimpleNamespace

from src.models.cell_value import (
    HyperlinkValue,
    PlainValue,
    cell_text,
    extract_value,
    from_openpyxl_cell,
    is_empty,
)


def test_from_openpyxl_cell_plain():
    cell = SimpleNamespace(value="abc", hyperlink=None)
    assert from_openpyxl_cell(cell) == PlainValue("abc")


def test_from_openpyxl_cell_hyperlink():
    link = SimpleNamespace(target="mailto:a@b.com", location=None)
    cell = SimpleNamespace(value="a@b.com", hyperlink=link)
    assert from_openpyxl_cell(cell) == HyperlinkValue(value="a@b.com", target="mailto:a@b.com")


def test_from_openpyxl_cell_internal_link_keeps_location_apart():
    link = SimpleNamespace(target=None, location="Sheet2!A1")
    cell = SimpleNamespace(value="jump", hyperlink=link)
    assert from_openpyxl_cell(cell) == HyperlinkValue(value="jump", location="Sheet2!A1")


def test_from_openpyxl_cell_hyperlink_keeps_raw_value():
    link = SimpleNamespace(target="https://example.com", location=None)
    cell = SimpleNamespace(value=42, hyperlink=link)
    converted = from_openpyxl_cell(cell)
    assert converted.value == 42
    assert converted.text == "42"
    assert extract_value(converted) == "42"


def test_extract_value_and_text():
    assert extract_value(HyperlinkValue("a@b.com", "mailto:a@b.com")) == "a@b.com"
    assert extract_value(PlainValue(3)) == 3
    assert cell_text(PlainValue(3)) == "3"
    assert cell_text(PlainValue(None)) == ""
    assert extract_value("raw") == "raw"


def test_is_empty():
    assert is_empty(PlainValue(None))
    assert is_empty(PlainValue(""))
    assert is_empty(HyperlinkValue(""))
    assert not is_empty(PlainValue(0))
    assert not is_empty(HyperlinkValue("x"))
