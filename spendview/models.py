from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

REQUIRED_COLUMNS = ("Date", "Description", "Amount", "Category")
ALL_CATEGORIES_LABEL = "All Categories"

# None selects every category
Selection = Optional[str]


class Record(BaseModel):
    """One parsed CSV row: column name -> trimmed string value."""

    model_config = ConfigDict(frozen=True)

    data: Dict[str, str]

    def get(self, column: str, default: str = "") -> str:
        return self.data.get(column, default)

    def __getitem__(self, column: str) -> str:
        return self.data[column]

    def keys(self):
        return self.data.keys()


class Transaction(BaseModel):
    """A record with the financial fields pulled out; unknown columns stay in ``extra``."""

    model_config = ConfigDict(frozen=True)

    date: str
    description: str
    amount: str
    category: str
    value: float
    extra: Dict[str, str] = {}

    @classmethod
    def from_record(cls, record: Record, value: float) -> "Transaction":
        extra = {k: v for k, v in record.data.items() if k not in REQUIRED_COLUMNS}
        return cls(
            date=record.get("Date"),
            description=record.get("Description"),
            amount=record.get("Amount"),
            category=record.get("Category"),
            value=value,
            extra=extra,
        )


class CategoryAggregate(BaseModel):
    total: float = 0.0
    transactions: List[Transaction] = []


class AggregateResult(BaseModel):
    categories: Dict[str, CategoryAggregate] = {}
    excluded: int = 0

    @property
    def grand_total(self) -> float:
        return sum(agg.total for agg in self.categories.values())

    def __contains__(self, category: str) -> bool:
        return category in self.categories

    def __len__(self) -> int:
        return len(self.categories)


class LoadResult(BaseModel):
    header: List[str]
    records: List[Record]
    skipped_blank: int = 0
    skipped_malformed: int = 0
    skipped_empty: int = 0
    diagnostics: List[str] = []

    @property
    def skipped(self) -> int:
        return self.skipped_blank + self.skipped_malformed + self.skipped_empty


class SelectionView(BaseModel):
    category: Selection = None
    header_label: str
    total: float
    percentage: float
    rows: List[Transaction]

    @property
    def formatted_percentage(self) -> str:
        return f"{self.percentage:.1f}"

    @property
    def is_all(self) -> bool:
        return self.category is None
