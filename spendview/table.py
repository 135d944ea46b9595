from typing import Optional, Sequence

import pandas as pd

from .models import SelectionView
from .utils import format_money, parse_amount
from .viz import category_colors

TABLE_COLUMNS = ["Date", "Description", "Amount", "Category"]
PLACEHOLDER = "N/A"
DEFAULT_HEADER_COLOR = "#3498db"


def _or_placeholder(value: str) -> str:
    return value if value else PLACEHOLDER


def _amount_cell(raw: str, currency_symbol: str) -> str:
    value = parse_amount(raw)
    if value is None:
        return PLACEHOLDER
    return format_money(value, currency_symbol)


def transactions_frame(view: SelectionView, format_amounts: bool = True, currency_symbol: str = "$") -> pd.DataFrame:
    """
    Table rows for a view, already in date-descending order.

    With ``format_amounts`` the Amount column holds display strings
    ("$4.50"); otherwise it is numeric so the table can sort by it.
    """
    records = []
    for txn in view.rows:
        records.append(
            {
                "Date": _or_placeholder(txn.date),
                "Description": _or_placeholder(txn.description),
                "Amount": _amount_cell(txn.amount, currency_symbol) if format_amounts else txn.value,
                "Category": _or_placeholder(txn.category),
            }
        )
    return pd.DataFrame(records, columns=TABLE_COLUMNS)


def header_color(category: Optional[str], labels: Sequence[str]) -> str:
    """Slice colour of the selected category, default blue for all categories."""
    if category is None:
        return DEFAULT_HEADER_COLOR
    return category_colors(labels).get(category, DEFAULT_HEADER_COLOR)
