from typing import Dict, Iterable

from .logging_setup import get_logger
from .models import AggregateResult, CategoryAggregate, Record, Transaction
from .utils import parse_amount

logger = get_logger(__name__)


def aggregate(records: Iterable[Record]) -> AggregateResult:
    """
    Group purchases by Category and sum their Amount.

    Only positive amounts count: credits, refunds and unparseable values are
    excluded (counted in ``excluded``), never raised. Categories keep their
    first-seen order and transactions keep input order.
    """
    if records is None:
        raise ValueError("records is None")

    categories: Dict[str, CategoryAggregate] = {}
    excluded = 0
    for record in records:
        value = parse_amount(record.get("Amount"))
        if value is None or value <= 0:
            excluded += 1
            logger.debug("Invalid or non-positive amount for transaction: %s", record.data)
            continue

        category = record.get("Category")
        bucket = categories.get(category)
        if bucket is None:
            bucket = categories[category] = CategoryAggregate()
        bucket.total += value
        bucket.transactions.append(Transaction.from_record(record, value))

    result = AggregateResult(categories=categories, excluded=excluded)
    logger.info(
        "Aggregated %d transactions into %d categories (excluded %d), total %.2f",
        sum(len(c.transactions) for c in categories.values()),
        len(categories),
        excluded,
        result.grand_total,
    )
    return result
