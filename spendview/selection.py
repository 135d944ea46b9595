from typing import List, Optional, Tuple

import pandas as pd

from .errors import UnknownCategoryError
from .models import ALL_CATEGORIES_LABEL, AggregateResult, Selection, SelectionView, Transaction
from .utils import format_money, parse_date, round_half_away


def _date_key(txn: Transaction) -> Tuple[bool, Optional[pd.Timestamp]]:
    # Unparseable dates sort below every real date, however old.
    parsed = parse_date(txn.date)
    return (parsed is not None, parsed)


def sort_by_date_desc(rows: List[Transaction]) -> List[Transaction]:
    """Newest first. Stable, so equal dates keep their incoming order."""
    return sorted(rows, key=_date_key, reverse=True)


def header_label(category: Selection, total: float, percentage: float, currency_symbol: str = "$") -> str:
    name = ALL_CATEGORIES_LABEL if category is None else category
    return f"Transactions for {name} - {format_money(total, currency_symbol)} ({percentage:.1f}%)"


def select_view(result: AggregateResult, selection: Selection = None, currency_symbol: str = "$") -> SelectionView:
    """
    Build the detail view for one category, or for every category when
    ``selection`` is None. The result is read, never modified.
    """
    if selection is None:
        rows = [txn for agg in result.categories.values() for txn in agg.transactions]
        total = result.grand_total
        percentage = 100.0
    else:
        if selection not in result.categories:
            raise UnknownCategoryError(selection)
        agg = result.categories[selection]
        rows = list(agg.transactions)
        total = agg.total
        grand_total = result.grand_total
        percentage = round_half_away(total / grand_total * 100) if grand_total else 0.0

    return SelectionView(
        category=selection,
        header_label=header_label(selection, total, percentage, currency_symbol),
        total=total,
        percentage=percentage,
        rows=sort_by_date_desc(rows),
    )
