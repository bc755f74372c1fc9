"""
Plotting style definitions shared by the comchemkit figures.
"""

from typing import Any, Literal

import plotly.graph_objects as go

FigureStyle = Literal["development", "publication"]

FONT_FAMILY = "Helvetica"
FONT_COLOR = "#333333"

FONT_SIZES: dict[str, int] = {
    "title": 20,
    "axis_title": 16,
    "tick_label": 14,
    "legend": 12,
}

AXIS_STYLE: dict[str, Any] = {
    "showgrid": True,
    "gridwidth": 1,
    "gridcolor": "#E7E7E7",
    "zeroline": False,
    "linewidth": 2,
    "linecolor": "#333333",
}

LAYOUT_STYLE: dict[str, Any] = {
    "plot_bgcolor": "#FBFCFF",
    "paper_bgcolor": "#FBFCFF",
    "margin": dict(t=50, b=40, r=40),
}

# Dark theme for interactive inspection
DEVELOPMENT_STYLE: dict[str, Any] = {
    "template": "plotly_dark",
    "plot_bgcolor": "black",
    "paper_bgcolor": "black",
    "font": dict(color="white"),
}

# One color per quantity in energy bar charts
QUANTITY_COLORS: dict[str, str] = {
    "E": "#4C72B0",
    "E+ZPE": "#55A868",
    "H": "#DD8452",
    "G": "#C44E52",
}


def get_font_dict(size: int, bold: bool = False) -> dict[str, Any]:
    return dict(family=FONT_FAMILY, size=size, color=FONT_COLOR, weight="bold" if bold else None)


def apply_publication_style(fig: go.Figure, **kwargs: Any) -> None:
    """Light background, dark axis lines and bold titles.

    Args:
        fig: A plotly figure
        **kwargs: Layout parameters overriding LAYOUT_STYLE
    """
    fig.update_layout(font=get_font_dict(FONT_SIZES["tick_label"]))
    if fig.layout.title is not None:
        fig.layout.title.update(font=get_font_dict(FONT_SIZES["title"], bold=True))

    axis_fonts = dict(
        title_font=get_font_dict(FONT_SIZES["axis_title"], bold=True),
        tickfont=get_font_dict(FONT_SIZES["tick_label"]),
    )
    fig.update_xaxes(AXIS_STYLE, **axis_fonts)
    fig.update_yaxes(AXIS_STYLE, **axis_fonts)

    layout_style: dict[str, Any] = LAYOUT_STYLE.copy()
    layout_style.update(kwargs)
    fig.update_layout(layout_style, legend=dict(font=get_font_dict(FONT_SIZES["legend"])))


def apply_development_style(fig: go.Figure) -> None:
    """Apply dark theme development styling to a figure."""
    fig.update_layout(**DEVELOPMENT_STYLE)


def apply_style(fig: go.Figure, style: FigureStyle) -> None:
    if style == "publication":
        apply_publication_style(fig)
    else:
        apply_development_style(fig)
