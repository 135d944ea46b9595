import pytest

from spendview.errors import UnknownCategoryError
from spendview.session import AnalysisSession
from spendview.ui_state import (
    CATEGORY_KEY,
    CHART_KEY,
    HIDDEN_KEY,
    LAST_CLICK_KEY,
    apply_click,
    choose_category,
    forget_widgets,
    reset_view,
    sync_category_choice,
    sync_hidden,
)

EXAMPLE = (
    "Date,Description,Amount,Category\n"
    "2024-01-01,Coffee,4.50,Food\n"
    "2024-01-02,Bus,2.00,Transit\n"
    "2024-01-03,Rent,900,Housing"
)


@pytest.fixture
def session():
    s = AnalysisSession()
    s.load_text(EXAMPLE)
    return s


def _clicked(state, session, category):
    # what the chart leaves behind after a click on ``category``
    state[CHART_KEY] = {"selection": {"points": [{"customdata": [category]}]}}
    return apply_click(state, session, category)


def test_click_selects_once(session):
    state = {}

    assert _clicked(state, session, "Food") is True
    assert session.selection == "Food"
    # the same point is reported again on the next rerun
    assert apply_click(state, session, "Food") is False
    assert apply_click(state, session, None) is False
    assert session.selection == "Food"


def test_reset_clears_chart_selection_and_hidden_categories(session):
    state = {HIDDEN_KEY: ["Housing"]}
    _clicked(state, session, "Food")
    state[CATEGORY_KEY] = "Food"

    view = reset_view(state, session)

    assert view.is_all
    assert session.selection is None
    assert CHART_KEY not in state
    assert LAST_CLICK_KEY not in state
    assert HIDDEN_KEY not in state
    assert state[CATEGORY_KEY] is None
    # with the chart state gone the next rerun reports no click
    assert apply_click(state, session, None) is False
    assert session.selection is None
    assert sync_hidden(state, ["Housing", "Food", "Transit"]) == []


def test_clicking_same_slice_after_selectbox_change(session):
    state = {}
    _clicked(state, session, "Food")

    state[CATEGORY_KEY] = None
    choose_category(state, session)
    assert session.selection is None
    assert CHART_KEY not in state

    assert _clicked(state, session, "Food") is True
    assert session.selection == "Food"


def test_selectbox_choice_survives_rerun_of_old_click(session):
    state = {}
    _clicked(state, session, "Food")

    state[CATEGORY_KEY] = "Transit"
    choose_category(state, session)

    assert apply_click(state, session, None) is False
    assert session.selection == "Transit"


def test_unknown_choice_keeps_selection_and_chart_state(session):
    state = {}
    _clicked(state, session, "Food")
    state[CATEGORY_KEY] = "Rent"

    with pytest.raises(UnknownCategoryError):
        choose_category(state, session)

    assert session.selection == "Food"
    assert state[LAST_CLICK_KEY] == "Food"


def test_sync_category_choice_follows_session(session):
    state = {}
    session.select("Transit")

    sync_category_choice(state, session, ["Housing", "Food", "Transit"])
    assert state[CATEGORY_KEY] == "Transit"

    sync_category_choice(state, session, ["Housing"])
    assert state[CATEGORY_KEY] is None


def test_sync_hidden_drops_categories_missing_from_new_data():
    state = {HIDDEN_KEY: ["Food", "Gone"]}

    assert sync_hidden(state, ["Housing", "Food"]) == ["Food"]
    assert state[HIDDEN_KEY] == ["Food"]


def test_forget_widgets_on_new_file():
    state = {CHART_KEY: {}, LAST_CLICK_KEY: "Food", HIDDEN_KEY: ["Food"], CATEGORY_KEY: "Food", "other": 1}

    forget_widgets(state)

    assert state == {CATEGORY_KEY: None, "other": 1}
