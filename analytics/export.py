"""CSV export of the currently scoped transaction list."""
from __future__ import annotations
from datetime import date
from typing import Optional, Sequence

from core.logger import get_logger
from models.schema import Transaction

log = get_logger("analytics/export")

CSV_HEADERS = ("Date", "Description", "Amount", "Category", "Notes", "Source")


def _quote(value: Optional[str]) -> str:
    return '"' + (value or "").replace('"', '""') + '"'


def _quote_if_needed(value: Optional[str]) -> str:
    # Bare unless the value would break the row
    text = value or ""
    if any(ch in text for ch in ('"', ",", "\n", "\r")):
        return _quote(text)
    return text


def _format_amount(amount: float) -> str:
    # Integral amounts are written without a trailing ".0"
    value = float(amount)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_csv_row(t: Transaction) -> str:
    return ",".join([
        _quote_if_needed(t.date),
        _quote(t.description),
        _format_amount(t.amount),
        _quote_if_needed(t.category),
        _quote(t.notes),
        _quote(t.sourceFile),
    ])


def to_csv(transactions: Sequence[Transaction]) -> str:
    """
    Render transactions as CSV text, one row per transaction in list order.

    Description, Notes and Source are always quoted with embedded quotes
    doubled. Date and Category are written bare unless they contain a
    quote, comma or line break, in which case they are quoted the same way.
    Amount is the raw signed number.
    """
    lines = [",".join(CSV_HEADERS)]
    lines.extend(to_csv_row(t) for t in transactions)
    return "\n".join(lines)


def to_csv_bytes(transactions: Sequence[Transaction]) -> Optional[bytes]:
    """UTF-8 CSV payload for download, or None when there is nothing to export."""
    if not transactions:
        return None
    payload = to_csv(transactions).encode("utf-8")
    log.debug(f"Prepared CSV export: transactions={len(transactions)} bytes={len(payload)}")
    return payload


def export_filename(scope: Optional[str], today: Optional[date] = None) -> str:
    """
    Download name for an export.

    Examples:
        >>> export_filename(None, date(2024, 1, 5))
        "batch_statement_2024-01-05.csv"
        >>> export_filename("march.statement.pdf", date(2024, 1, 5))
        "march_statement_2024-01-05.csv"
    """
    today = today or date.today()
    prefix = "batch" if scope is None else scope.split(".")[0]
    return f"{prefix}_statement_{today.isoformat()}.csv"
