#!/usr/bin/env python3
"""
Test the pure helpers behind the dashboard widgets.
"""
from __future__ import annotations
from pathlib import Path
import sys

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

import pytest

from analytics.summary import summarize
from models.schema import BatchState, ProcessingStatus, Transaction
from ui.components.file_list import file_status
from ui.components.summary_view import TABLE_COLUMNS, category_figure, transactions_frame


def _txn(i: int, amount: float, category: str, source: str) -> Transaction:
    return Transaction(
        id=f"b-0-{i}",
        date=f"2024-01-{i + 1:02d}",
        description=f"item {i}",
        amount=amount,
        category=category,
        sourceFile=source,
    )


def test_file_status_during_run():
    state = BatchState(status=ProcessingStatus.ANALYZING, processed_count=1, current_index=1, total=3)

    assert [file_status(i, state) for i in range(3)] == ["done", "in progress", "waiting"]


def test_file_status_when_idle_or_failed():
    assert file_status(0, BatchState()) == "queued"
    assert file_status(2, BatchState(status=ProcessingStatus.ERROR, processed_count=1, total=3)) == "queued"


def test_transactions_frame_keeps_batch_order():
    txns = [_txn(0, -3, "Food", "b.pdf"), _txn(1, 10, "Salary", "a.pdf")]
    df = transactions_frame(txns)

    assert list(df.columns) == TABLE_COLUMNS
    assert df["Source"].tolist() == ["b.pdf", "a.pdf"]
    assert df["Amount"].tolist() == [-3, 10]


def test_transactions_frame_empty():
    df = transactions_frame([])
    assert df.empty
    assert list(df.columns) == TABLE_COLUMNS


def test_category_figure_uses_summary_colors():
    txns = [_txn(0, -30, "Rent", "a.pdf"), _txn(1, -10, "Food", "a.pdf")]
    categories = summarize(txns).categoryData
    pie = category_figure(categories).data[0]

    assert list(pie.labels) == ["Rent", "Food"]
    assert list(pie.values) == pytest.approx([30, 10])
    assert list(pie.marker.colors) == [c.color for c in categories]


def test_views_live_outside_streamlit_pages_dir():
    # A pages/ directory next to the app script becomes sidebar navigation
    assert not (ROOT_DIR / "ui" / "pages").exists()

    from ui.views import render_dashboard_page, render_ingest_page
    assert callable(render_dashboard_page)
    assert callable(render_ingest_page)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
