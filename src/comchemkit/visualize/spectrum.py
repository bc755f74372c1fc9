import math
from collections.abc import Sequence

import plotly.graph_objects as go

from comchemkit.typing import VibrationalMode
from comchemkit.utils import logger
from comchemkit.visualize.style import FigureStyle, apply_style


def lorentzian_broadening(modes: Sequence[VibrationalMode], grid: Sequence[float], fwhm: float) -> list[float]:
    """
    Sums one Lorentzian per mode, each with peak height equal to its IR intensity.

    Args:
        modes: Normal modes to broaden.
        grid: Wavenumbers (cm^-1) at which to evaluate the spectrum.
        fwhm: Full width at half maximum in cm^-1.

    Returns:
        list[float]: Intensity at every grid point.
    """
    if fwhm <= 0:
        raise ValueError(f"FWHM must be positive, got {fwhm}")
    half_width_sq = (fwhm / 2) ** 2
    return [
        sum(m.ir_intensity * half_width_sq / ((x - m.frequency) ** 2 + half_width_sq) for m in modes) for x in grid
    ]


def plot_ir_spectrum(
    modes: Sequence[VibrationalMode],
    fwhm: float = 10.0,
    x_range: tuple[float, float] = (400.0, 4000.0),
    n_points: int = 2000,
    title: str = "IR Spectrum",
    style: FigureStyle = "development",
) -> go.Figure:
    """
    Plots a broadened IR spectrum with the underlying stick spectrum.

    Imaginary modes are left out. The wavenumber axis runs from high to low,
    following the usual IR convention.

    Args:
        modes (Sequence[VibrationalMode]): Modes as returned by ``GaussianProgram.extract_frequencies``.
        fwhm (float, optional): Lorentzian line width in cm^-1. Defaults to 10.
        x_range (tuple[float, float], optional): Wavenumber window in cm^-1.
        n_points (int, optional): Number of grid points of the broadened curve.
        title (str, optional): Title of the plot.
        style (FigureStyle, optional): "development" (dark) or "publication".

    Returns:
        plotly.graph_objects.Figure: The generated Plotly figure.
    """
    real_modes = [m for m in modes if m.frequency > 0]
    if len(real_modes) < len(modes):
        logger.info(f"Leaving {len(modes) - len(real_modes)} imaginary mode(s) out of the IR spectrum.")

    low, high = x_range
    step = (high - low) / max(n_points - 1, 1)
    grid = [low + i * step for i in range(n_points)]
    intensities = lorentzian_broadening(real_modes, grid, fwhm)

    # fmt:off
    stick_x = [x for m in real_modes for x in (m.frequency, m.frequency, math.nan)]
    stick_y = [y for m in real_modes for y in (0.0, m.ir_intensity, math.nan)]
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=grid, y=intensities, mode="lines", name=f"Lorentzian (FWHM {fwhm:g} cm<sup>-1</sup>)"))
    fig.add_trace(go.Scatter(x=stick_x, y=stick_y, mode="lines", line=dict(width=1), name="Normal modes"))
    # fmt:on

    fig.update_layout(title=title, showlegend=True)
    fig.update_xaxes(title_text="Wavenumber (cm<sup>-1</sup>)", range=[high, low])
    fig.update_yaxes(title_text="IR intensity (km/mol)")
    apply_style(fig, style)
    return fig
