from collections.abc import Sequence

import plotly.graph_objects as go

from comchemkit.thermo import UNIT_LABELS, EnergyUnit, ThermoSummary
from comchemkit.visualize.style import QUANTITY_COLORS, FigureStyle, apply_style


def relative_energies(values: Sequence[float]) -> list[float]:
    """Shifts the values so that the lowest one is zero."""
    if not values:
        return []
    reference = min(values)
    return [v - reference for v in values]


def plot_energy_summary(
    summaries: Sequence[ThermoSummary],
    unit: EnergyUnit = "kcal",
    title: str = "Relative Energies",
    style: FigureStyle = "development",
) -> go.Figure:
    """
    Grouped bar chart of E, E+ZPE, H and G for a set of structures.

    Each quantity is plotted relative to its own minimum over the structures,
    so the most stable structure sits at zero.

    Args:
        summaries (Sequence[ThermoSummary]): Summaries to compare, in any unit.
        unit (EnergyUnit, optional): Unit of the plotted differences. Defaults to "kcal".
        title (str, optional): Title of the plot.
        style (FigureStyle, optional): "development" (dark) or "publication".

    Returns:
        plotly.graph_objects.Figure: The generated Plotly figure.
    """
    converted = [s.in_units(unit) for s in summaries]
    names = [s.name for s in converted]
    quantities = {
        "E": [s.electronic_energy for s in converted],
        "E+ZPE": [s.zpe_corrected_energy for s in converted],
        "H": [s.enthalpy for s in converted],
        "G": [s.gibbs_free_energy for s in converted],
    }

    fig = go.Figure()
    for label, values in quantities.items():
        fig.add_trace(
            go.Bar(x=names, y=relative_energies(values), name=f"Δ{label}", marker_color=QUANTITY_COLORS[label])
        )

    fig.update_layout(title=title, barmode="group", showlegend=True)
    fig.update_xaxes(title_text="Structure")
    fig.update_yaxes(title_text=f"Relative energy ({UNIT_LABELS[unit]})")
    apply_style(fig, style)
    return fig
