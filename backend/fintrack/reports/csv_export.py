from __future__ import annotations

import csv
from io import StringIO
from typing import Iterable

from fintrack.storage.entities import Transaction

CSV_HEADER = ["Date", "Description", "Category", "Amount", "Type"]


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """
    Render transactions as CSV with one row per transaction.

    Date is written as YYYY-MM-DD; the csv module takes care of quoting
    descriptions that contain commas or quotes.
    """
    f = StringIO()
    writer = csv.writer(f, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for t in transactions:
        writer.writerow([t.date.date().isoformat(), t.description, t.category, t.amount, t.type])
    return f.getvalue()
