from typing import Optional

from .aggregator import aggregate
from .errors import NoDataLoadedError, UnknownCategoryError
from .loader import load
from .logging_setup import get_logger
from .models import AggregateResult, LoadResult, Selection, SelectionView
from .selection import select_view

logger = get_logger(__name__)


class AnalysisSession:
    """
    Holds the state behind one open CSV: the raw text (so reset never has to
    re-read the file), the latest aggregate and the current selection.

    Every load or reset replaces ``result`` with a new object; an existing
    result is never updated in place.
    """

    def __init__(self, currency_symbol: str = "$"):
        self.currency_symbol = currency_symbol
        self.raw_text: Optional[str] = None
        self.source_name: Optional[str] = None
        self.load_result: Optional[LoadResult] = None
        self.result: Optional[AggregateResult] = None
        self.selection: Selection = None

    @property
    def has_data(self) -> bool:
        return self.result is not None

    def load_text(self, raw_text: str, source_name: Optional[str] = None) -> LoadResult:
        """Parse and aggregate ``raw_text``. On failure the previous state is kept."""
        load_result = load(raw_text)
        result = aggregate(load_result.records)

        self.raw_text = raw_text
        self.source_name = source_name
        self.load_result = load_result
        self.result = result
        self.selection = None
        logger.info(
            "Loaded %s: %d records, %d skipped",
            source_name or "<text>",
            len(load_result.records),
            load_result.skipped,
        )
        return load_result

    def reset(self) -> SelectionView:
        """Recompute from the retained raw text and go back to all categories."""
        if self.raw_text is None:
            raise NoDataLoadedError()
        logger.info("Resetting chart from original data")
        self.load_text(self.raw_text, self.source_name)
        return self.view()

    def select(self, category: Selection) -> SelectionView:
        """Switch the detail view; an unknown category leaves the selection as it was."""
        result = self._require_result()
        view = select_view(result, category, self.currency_symbol)
        self.selection = category
        return view

    def view(self) -> SelectionView:
        result = self._require_result()
        try:
            return select_view(result, self.selection, self.currency_symbol)
        except UnknownCategoryError:
            logger.warning("Dropping stale selection %r", self.selection)
            self.selection = None
            raise

    def _require_result(self) -> AggregateResult:
        if self.result is None:
            raise NoDataLoadedError("No transactions loaded")
        return self.result
