"""
Keeps the Streamlit widgets and the AnalysisSession in agreement.

The functions take the ``st.session_state`` mapping (any MutableMapping in
tests). Streamlit keeps a chart's point selection and a multiselect's
choices under their widget keys across reruns, so every path that changes
the selection outside a widget has to clear the matching keys too.
"""

from typing import List, MutableMapping, Sequence

from .models import Selection, SelectionView
from .session import AnalysisSession

CHART_KEY = "doughnut"
HIDDEN_KEY = "hidden_categories"
CATEGORY_KEY = "category_choice"
LAST_CLICK_KEY = "last_click"


def clear_chart_state(state: MutableMapping) -> None:
    """Forget the chart's point selection and the last click handled from it."""
    state.pop(CHART_KEY, None)
    state.pop(LAST_CLICK_KEY, None)


def forget_widgets(state: MutableMapping) -> None:
    """Drop everything tied to the previous data: chart selection, hidden slices, category choice."""
    clear_chart_state(state)
    state.pop(HIDDEN_KEY, None)
    state[CATEGORY_KEY] = None


def reset_view(state: MutableMapping, session: AnalysisSession) -> SelectionView:
    view = session.reset()
    forget_widgets(state)
    return view


def apply_click(state: MutableMapping, session: AnalysisSession, clicked: Selection) -> bool:
    """
    Select the category clicked on the chart. The chart reports the same
    point on every rerun until something else is clicked, so a click is
    only applied once; returns True when it changed the selection.
    """
    if clicked is None or clicked == state.get(LAST_CLICK_KEY):
        return False
    session.select(clicked)
    state[LAST_CLICK_KEY] = clicked
    return True


def choose_category(state: MutableMapping, session: AnalysisSession) -> SelectionView:
    """Apply the category selectbox; the chart's old click no longer counts, so clicking it again works."""
    view = session.select(state.get(CATEGORY_KEY))
    clear_chart_state(state)
    return view


def sync_category_choice(state: MutableMapping, session: AnalysisSession, labels: Sequence[str]) -> None:
    """Point the selectbox at the session's selection before it is drawn."""
    state[CATEGORY_KEY] = session.selection if session.selection in labels else None


def sync_hidden(state: MutableMapping, labels: Sequence[str]) -> List[str]:
    """Keep only hidden categories that still exist in the current data."""
    hidden = [name for name in state.get(HIDDEN_KEY, []) if name in labels]
    state[HIDDEN_KEY] = hidden
    return hidden
