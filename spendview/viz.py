from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import plotly.graph_objects as go
from pydantic import BaseModel

from .models import AggregateResult
from .utils import format_money, round_half_away, to_strikethrough

SLICE_COLORS = [
    "rgba(255, 99, 132, 0.8)",
    "rgba(54, 162, 235, 0.8)",
    "rgba(255, 206, 86, 0.8)",
    "rgba(75, 192, 192, 0.8)",
    "rgba(153, 102, 255, 0.8)",
    "rgba(255, 159, 64, 0.8)",
    "rgba(255, 0, 0, 0.8)",
    "rgba(0, 255, 0, 0.8)",
    "rgba(0, 0, 255, 0.8)",
    "rgba(128, 0, 128, 0.8)",
    "rgba(0, 128, 128, 0.8)",
    "rgba(128, 128, 0, 0.8)",
    "rgba(255, 105, 180, 0.8)",
    "rgba(255, 165, 0, 0.8)",
    "rgba(0, 255, 255, 0.8)",
    "rgba(75, 0, 130, 0.8)",
    "rgba(255, 20, 147, 0.8)",
    "rgba(154, 205, 50, 0.8)",
    "rgba(173, 216, 230, 0.8)",
    "rgba(34, 139, 34, 0.8)",
    "rgba(255, 140, 0, 0.8)",
    "rgba(0, 191, 255, 0.8)",
    "rgba(218, 112, 214, 0.8)",
    "rgba(210, 105, 30, 0.8)",
    "rgba(255, 215, 0, 0.8)",
]
DEFAULT_THEME = "Default"

THEMES: Dict[str, Dict] = {
    "Default": {"template": "plotly", "color_discrete_sequence": SLICE_COLORS},
    "Dark": {"template": "plotly_dark", "color_discrete_sequence": SLICE_COLORS},
}

THEME_STYLES: Dict[str, Dict] = {
    "Default": {
        "paper_bgcolor": "#ffffff",
        "plot_bgcolor": "#ffffff",
        "font_color": "#0c1c15",
        "label_color": "#ffffff",
    },
    "Dark": {
        "paper_bgcolor": "#0f1115",
        "plot_bgcolor": "#0f1115",
        "font_color": "#e7f1eb",
        "label_color": "#ffffff",
    },
}


class ChartData(BaseModel):
    labels: List[str]
    values: List[float]


def chart_data(result: AggregateResult) -> ChartData:
    """Category labels with their totals, largest first (ties keep category order)."""
    pairs = sorted(
        ((label, agg.total) for label, agg in result.categories.items()),
        key=lambda p: p[1],
        reverse=True,
    )
    return ChartData(labels=[p[0] for p in pairs], values=[p[1] for p in pairs])


def slice_percentages(values: Sequence[float]) -> List[float]:
    """Share of each value in the whole ring, hidden slices included."""
    total = sum(values)
    if not total:
        return [0.0 for _ in values]
    return [round_half_away(v / total * 100) for v in values]


def hidden_flags(labels: Iterable[str], hidden: Optional[Iterable[str]] = None) -> List[bool]:
    hidden_set = set(hidden or ())
    return [label in hidden_set for label in labels]


def slice_text(percentages: Sequence[float], flags: Sequence[bool], min_percent: float = 3.0) -> List[str]:
    """In-slice labels; blank for hidden slices and for slivers under ``min_percent``."""
    return ["" if hide or pct < min_percent else f"{pct:.1f}%" for pct, hide in zip(percentages, flags)]


def legend_labels(labels: Sequence[str], percentages: Sequence[float], flags: Sequence[bool]) -> List[str]:
    out = []
    for label, pct, hide in zip(labels, percentages, flags):
        text = f"{label}: {pct:.1f}%"
        out.append(to_strikethrough(text) if hide else text)
    return out


def category_colors(labels: Sequence[str]) -> Dict[str, str]:
    return {label: SLICE_COLORS[i % len(SLICE_COLORS)] for i, label in enumerate(labels)}


def render_doughnut(
    result: AggregateResult,
    hidden: Optional[Iterable[str]] = None,
    theme: str = DEFAULT_THEME,
    title: str = "Spending by Category",
    min_label_percent: float = 3.0,
    hole: float = 0.5,
    currency_symbol: str = "$",
):
    """
    Doughnut of category totals. Hidden categories stay in the legend (struck
    through) with a zero-width slice; percentages are always over the full total.
    """
    theme_cfg = THEMES.get(theme) or THEMES[DEFAULT_THEME]
    layout_style = THEME_STYLES.get(theme) or THEME_STYLES[DEFAULT_THEME]

    data = chart_data(result)
    flags = hidden_flags(data.labels, hidden)
    pcts = slice_percentages(data.values)
    palette = category_colors(data.labels)
    colors = [palette[label] for label in data.labels]
    shown_values = [0.0 if hide else v for v, hide in zip(data.values, flags)]
    customdata = [
        [label, format_money(v, currency_symbol), f"{pct:.1f}"]
        for label, v, pct in zip(data.labels, data.values, pcts)
    ]

    fig = go.Figure(
        go.Pie(
            labels=legend_labels(data.labels, pcts, flags),
            values=shown_values,
            customdata=customdata,
            text=slice_text(pcts, flags, min_label_percent),
            textinfo="text",
            textposition="inside",
            insidetextfont=dict(color=layout_style.get("label_color"), size=14),
            hovertemplate="%{customdata[0]}<br>%{customdata[1]} (%{customdata[2]}%)<extra></extra>",
            hole=hole,
            sort=False,
            direction="clockwise",
            marker=dict(colors=colors, line=dict(width=0)),
        )
    )
    fig.update_layout(
        template=theme_cfg["template"],
        title=title,
        height=520,
        margin=dict(l=20, r=20, t=50, b=20),
        autosize=False,
        paper_bgcolor=layout_style.get("paper_bgcolor"),
        plot_bgcolor=layout_style.get("plot_bgcolor"),
        font=dict(color=layout_style.get("font_color")),
        legend=dict(font=dict(size=16)),
    )
    return fig


def category_from_click(event, labels: Sequence[str]) -> Optional[str]:
    """
    Map a Plotly selection event (as returned by ``st.plotly_chart(on_select=...)``)
    back to a category label. Returns None when nothing usable was clicked.
    """
    if not event:
        return None
    selection = event.get("selection") if isinstance(event, Mapping) else getattr(event, "selection", None)
    if not selection:
        return None
    points = selection.get("points") if isinstance(selection, Mapping) else getattr(selection, "points", None)
    if not points:
        return None

    point = points[0]
    custom = point.get("customdata")
    if isinstance(custom, (list, tuple)) and custom:
        custom = custom[0]
    if isinstance(custom, str) and custom in labels:
        return custom

    for key in ("point_number", "point_index", "pointNumber", "pointIndex"):
        idx = point.get(key)
        if isinstance(idx, int) and 0 <= idx < len(labels):
            return labels[idx]
    return None
