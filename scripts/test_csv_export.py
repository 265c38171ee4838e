#!/usr/bin/env python3
"""
Test CSV export format and download naming.
"""
from __future__ import annotations
import csv
from datetime import date
import io
from pathlib import Path
import sys

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

import pytest

from analytics.export import export_filename, to_csv, to_csv_bytes
from models.schema import Transaction


def _txn(**overrides) -> Transaction:
    fields = dict(
        id="b-0-0",
        date="2024-01-05",
        description='Coffee "Shop"',
        amount=-4.5,
        category="Dining",
        notes="",
        sourceFile="a.pdf",
    )
    fields.update(overrides)
    return Transaction(**fields)


def test_quotes_are_doubled():
    lines = to_csv([_txn()]).split("\n")

    assert lines[0] == "Date,Description,Amount,Category,Notes,Source"
    assert lines[1] == '2024-01-05,"Coffee ""Shop""",-4.5,Dining,"","a.pdf"'


def test_rows_follow_list_order():
    rows = to_csv([
        _txn(id="1", description="first", amount=120),
        _txn(id="2", description="second", amount=-20, notes='ref "77"', sourceFile="b.pdf"),
    ]).split("\n")

    assert len(rows) == 3
    assert rows[1] == '2024-01-05,"first",120,Dining,"","a.pdf"'
    assert rows[2] == '2024-01-05,"second",-20,Dining,"ref ""77""","b.pdf"'


def test_category_with_comma_and_quotes_stays_one_field():
    text = to_csv([_txn(category='Food, "Fast"', description="x", amount=-1)])

    rows = list(csv.reader(io.StringIO(text)))
    assert rows[1] == ["2024-01-05", "x", "-1", 'Food, "Fast"', "", "a.pdf"]
    assert text.split("\n")[1] == '2024-01-05,"x",-1,"Food, ""Fast""","","a.pdf"'


def test_plain_category_and_date_stay_bare():
    row = to_csv([_txn()]).split("\n")[1]
    assert row.startswith("2024-01-05,")
    assert ",Dining," in row


def test_amount_keeps_precision():
    row = to_csv([_txn(amount=-1234.56)]).split("\n")[1]
    assert ",-1234.56," in row


def test_header_only_for_empty_list():
    assert to_csv([]) == "Date,Description,Amount,Category,Notes,Source"
    assert to_csv_bytes([]) is None


def test_bytes_are_utf8():
    payload = to_csv_bytes([_txn(description="Café")])
    assert payload is not None
    assert "Café".encode("utf-8") in payload


@pytest.mark.parametrize(
    "scope,expected",
    [
        (None, "batch_statement_2024-03-09.csv"),
        ("march.pdf", "march_statement_2024-03-09.csv"),
        ("acct.2024.03.pdf", "acct_statement_2024-03-09.csv"),
    ],
)
def test_export_filename(scope, expected):
    assert export_filename(scope, today=date(2024, 3, 9)) == expected


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
