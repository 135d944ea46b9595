import streamlit as st
from spendview.config import Settings
from spendview.errors import EmptyInputError, SpendviewError
from spendview.loader import read_uploaded_text
from spendview.logging_setup import configure_logging, get_logger
from spendview.session import AnalysisSession
from spendview.table import header_color, transactions_frame
from spendview.ui_state import (
    CATEGORY_KEY,
    CHART_KEY,
    HIDDEN_KEY,
    apply_click,
    choose_category,
    forget_widgets,
    reset_view,
    sync_category_choice,
    sync_hidden,
)
from spendview.utils import format_money
from spendview.viz import THEMES, category_from_click, chart_data, render_doughnut

LANGUAGE_NAMES = {"en": "English", "de": "Deutsch"}

TEXT = {
    "en": {
        "app_title": "Spending by Category",
        "app_caption": "Upload a CSV with Date, Description, Amount and Category columns. Click a slice to see its transactions.",
        "settings": "Settings",
        "theme": "Theme",
        "hide_categories": "Hide categories",
        "min_label_percent": "Hide slice labels below (%)",
        "upload_csv": "Upload CSV",
        "reset": "Reset",
        "reset_done": "Chart has been reset to its original state.",
        "no_transactions": "No transactions found in {name}.",
        "load_error": "Failed to read {name}: {error}",
        "view_error": "Could not show that category: {error}",
        "config_error": "Invalid SPENDVIEW_* settings, using defaults: {error}",
        "skipped_rows": "Skipped {count} row(s) while reading the file.",
        "diagnostics": "Diagnostics",
        "category": "Category",
        "all_categories": "All Categories",
        "kpi_total": "Total purchases",
        "kpi_categories": "Categories",
        "kpi_transactions": "Transactions",
        "kpi_excluded": "Excluded (credits/invalid)",
        "upload_prompt": "Upload a CSV file to begin.",
    },
    "de": {
        "app_title": "Ausgaben nach Kategorie",
        "app_caption": "Laden Sie eine CSV mit den Spalten Date, Description, Amount und Category hoch. Klicken Sie auf ein Segment, um seine Buchungen zu sehen.",
        "settings": "Einstellungen",
        "theme": "Theme",
        "hide_categories": "Kategorien ausblenden",
        "min_label_percent": "Segmentbeschriftung unter (%) ausblenden",
        "upload_csv": "CSV hochladen",
        "reset": "Zurücksetzen",
        "reset_done": "Das Diagramm wurde auf den Ausgangszustand zurückgesetzt.",
        "no_transactions": "Keine Buchungen in {name} gefunden.",
        "load_error": "{name} konnte nicht gelesen werden: {error}",
        "view_error": "Kategorie kann nicht angezeigt werden: {error}",
        "config_error": "Ungültige SPENDVIEW_*-Einstellungen, Standardwerte werden verwendet: {error}",
        "skipped_rows": "Beim Lesen wurden {count} Zeile(n) übersprungen.",
        "diagnostics": "Diagnose",
        "category": "Kategorie",
        "all_categories": "Alle Kategorien",
        "kpi_total": "Gesamtausgaben",
        "kpi_categories": "Kategorien",
        "kpi_transactions": "Buchungen",
        "kpi_excluded": "Ausgeschlossen (Gutschriften/ungültig)",
        "upload_prompt": "Laden Sie eine CSV-Datei hoch, um zu starten.",
    },
}


def translate(key: str, lang: str, **kwargs) -> str:
    catalog = TEXT.get(lang, TEXT["en"])
    template = catalog.get(key) or TEXT["en"].get(key) or key
    return template.format(**kwargs)


def apply_brand_palette(selected_theme: str):
    primary = "#3498db"
    if selected_theme == "Dark":
        background = "#0f1115"
        secondary = "#161b22"
        text = "#e7f1eb"
    else:
        background = "#ffffff"
        secondary = "#ecf0f1"
        text = "#0c1c15"
    st.markdown(
        f"""
        <style>
        :root {{
            --primary-color: {primary};
            --text-color: {text};
            --secondary-background-color: {secondary};
            --background-color: {background};
        }}
        html, body, .stApp, .block-container {{
            background-color: var(--background-color) !important;
            color: var(--text-color) !important;
        }}
        [data-testid="stSidebar"] {{
            background-color: var(--secondary-background-color) !important;
            color: var(--text-color) !important;
        }}
        .stButton>button {{
            background-color: {primary} !important;
            border: none !important;
            color: #ffffff !important;
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_table_header(label: str, color: str):
    st.markdown(
        f"""
        <div style="background-color: {color}; color: #ecf0f1; padding: 15px;
                    border-radius: 8px 8px 0 0; font-size: 1.2em; font-weight: bold;">
            {label}
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_summary_cards(session: AnalysisSession, translate_fn, currency_symbol: str):
    result = session.result
    cards = [
        (translate_fn("kpi_total"), format_money(result.grand_total, currency_symbol)),
        (translate_fn("kpi_categories"), str(len(result))),
        (translate_fn("kpi_transactions"), str(sum(len(a.transactions) for a in result.categories.values()))),
        (translate_fn("kpi_excluded"), str(result.excluded)),
    ]
    cols = st.columns(len(cards))
    for col, (label, value) in zip(cols, cards):
        with col:
            st.metric(label=label, value=value)


def load_settings() -> Settings:
    settings, error = Settings.load()
    if error is None:
        st.session_state.pop("config_error", None)
    else:
        st.session_state["config_error"] = error
    return settings


settings = load_settings()
configure_logging(settings.log_level)
logger = get_logger("spendview.app")

st.set_page_config(page_title="Spending by Category", page_icon="📊", layout="wide")

if "ui_language" not in st.session_state:
    st.session_state["ui_language"] = "en"
if "session" not in st.session_state:
    st.session_state["session"] = AnalysisSession(currency_symbol=settings.currency_symbol)
session: AnalysisSession = st.session_state["session"]

ui_language = st.sidebar.selectbox(
    "UI Language / Sprache",
    options=list(TEXT.keys()),
    format_func=lambda code: LANGUAGE_NAMES.get(code, code),
    key="ui_language",
)


def t(key: str, **kwargs) -> str:
    return translate(key, ui_language, **kwargs)


st.title(t("app_title"))
st.caption(t("app_caption"))
if st.session_state.get("config_error"):
    st.warning(t("config_error", error=st.session_state["config_error"]))

theme_options = list(THEMES.keys())
with st.sidebar:
    st.header(f"⚙️ {t('settings')}")
    if "theme_choice" not in st.session_state:
        st.session_state["theme_choice"] = settings.theme
    theme = st.selectbox(t("theme"), options=theme_options, key="theme_choice")
    min_label_percent = st.slider(
        t("min_label_percent"), min_value=0.0, max_value=10.0, value=float(settings.min_label_percent), step=0.5
    )
    st.divider()
    uploaded = st.file_uploader(t("upload_csv"), type=["csv"], key="csv_upload")

apply_brand_palette(theme)

if uploaded is not None:
    upload_id = (uploaded.name, uploaded.size)
    if st.session_state.get("upload_id") != upload_id:
        st.session_state["upload_id"] = upload_id
        forget_widgets(st.session_state)
        try:
            session.load_text(read_uploaded_text(uploaded), source_name=uploaded.name)
        except EmptyInputError:
            st.error(t("no_transactions", name=uploaded.name))
        except (OSError, UnicodeDecodeError, SpendviewError) as e:
            logger.exception("Failed to read %s", uploaded.name)
            st.error(t("load_error", name=uploaded.name, error=e))

if session.has_data:
    if st.sidebar.button(t("reset"), key="reset_button"):
        try:
            reset_view(st.session_state, session)
            st.session_state["reset_notice"] = True
            st.rerun()
        except SpendviewError as e:
            st.error(t("view_error", error=e))
    if st.session_state.pop("reset_notice", False):
        st.info(t("reset_done"))

    load_result = session.load_result
    if load_result.skipped:
        st.caption(t("skipped_rows", count=load_result.skipped))
        with st.expander(t("diagnostics"), expanded=False):
            st.code("\n".join(load_result.diagnostics))

    render_summary_cards(session, t, settings.currency_symbol)

    labels = chart_data(session.result).labels
    sync_hidden(st.session_state, labels)
    hidden = st.sidebar.multiselect(t("hide_categories"), options=labels, key=HIDDEN_KEY)

    fig = render_doughnut(
        session.result,
        hidden=hidden,
        theme=theme,
        title=t("app_title"),
        min_label_percent=min_label_percent,
        hole=settings.hole,
        currency_symbol=settings.currency_symbol,
    )
    event = st.plotly_chart(fig, use_container_width=True, on_select="rerun", selection_mode="points", key=CHART_KEY)
    try:
        apply_click(st.session_state, session, category_from_click(event, labels))
    except SpendviewError as e:
        st.error(t("view_error", error=e))

    def on_category_change():
        try:
            choose_category(st.session_state, session)
        except SpendviewError as e:
            st.session_state["category_error"] = str(e)

    sync_category_choice(st.session_state, session, labels)
    st.selectbox(
        t("category"),
        options=[None] + labels,
        format_func=lambda c: t("all_categories") if c is None else c,
        key=CATEGORY_KEY,
        on_change=on_category_change,
    )
    if st.session_state.get("category_error"):
        st.error(t("view_error", error=st.session_state.pop("category_error")))

    try:
        view = session.view()
    except SpendviewError as e:
        st.error(t("view_error", error=e))
        view = session.select(None)

    render_table_header(view.header_label, header_color(view.category, labels))
    st.dataframe(
        transactions_frame(view, format_amounts=False, currency_symbol=settings.currency_symbol),
        use_container_width=True,
        hide_index=True,
        column_config={"Amount": st.column_config.NumberColumn(format=f"{settings.currency_symbol}%.2f")},
    )
else:
    st.info(t("upload_prompt"))
