"""
Module for plotting functions.

The functions in this module are used for visualization of orthogonal polynomial
bases and of realizations of random variables represented by a PCE.

This module provides:
    - PlotDataOnGrid: Data of one panel of a grid of subplots.
    - plot_1d_on_grid: Plot 1D data on a grid of subplots.
    - plot_bases: Plot the polynomials of one or more bases, one panel per basis.
    - plot_realizations: Plot the histogram of PCE realizations against the
    target mean and standard deviation.
"""

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
from matplotlib import pyplot as plt
from numpy.typing import ArrayLike

from measure_pce.basis import Basis


@dataclass(kw_only=True)
class PlotDataOnGrid:
    """
    Dataclass for plotting data on a grid.

    Attributes
    ----------
    x1 : ArrayLike | list[ArrayLike]
        The data to be plotted on the x1 axis.
    x2 : ArrayLike | list[ArrayLike]
        The data to be plotted on the x2 axis.
    legend : str | list[str]
        The legend for the plot.
    title : str
        The title for the plot.
    """

    x1: ArrayLike | list[ArrayLike]
    x2: ArrayLike | list[ArrayLike]
    legend: str | list[str]
    title: str


def plot_1d_on_grid(
    data: list[PlotDataOnGrid],
    figsize: tuple = (10, 10),
) -> tuple[plt.Figure, np.ndarray]:
    """
    Plot 1D data on a grid of subplots.

    Parameters
    ----------
    data : list[PlotDataOnGrid]
        A list of PlotDataOnGrid dataclasses. Each dataclass contains the data to be
        plotted on the x1 and x2 axes, the legend for the plot, and the title for the
        plot.
    figsize : tuple, optional
        The figure size for the plot. Default is (10, 10).

    Returns
    -------
    fig : matplotlib.figure.Figure
        The figure object for the plot.
    ax : numpy.ndarray
        The axes objects for the plot.
    """
    N = len(data)

    rows = int(np.ceil(np.sqrt(N)))
    cols = int(np.ceil(N / rows))

    fig, ax = plt.subplots(rows, cols, figsize=figsize)

    ax = np.array([ax]) if N == 1 else ax.flatten()

    for i, d in enumerate(data):
        x1 = d.x1 if isinstance(d.x1, list) else [d.x1]
        x2 = d.x2 if isinstance(d.x2, list) else [d.x2]
        legend = d.legend if isinstance(d.legend, list) else [d.legend]

        assert len(x1) == len(x2) == len(legend)

        for a, b, s in zip(x1, x2, legend, strict=True):
            ax[i].plot(a, b, label=s)

        ax[i].set_title(d.title)

    for i in range(N, len(ax)):
        fig.delaxes(ax[i])

    for i in range(N):
        ax[i].grid()
        ax[i].legend()

    return fig, ax[:N]


def plot_bases(
    bases: Basis | Mapping[str, Basis],
    n_points: int = 200,
    coverage: float = 0.99,
    figsize: tuple = (10, 10),
) -> tuple[plt.Figure, np.ndarray]:
    """
    Plot the polynomials phi_0, ..., phi_d of one or more bases.

    Each basis is drawn in its own panel over the central `coverage` probability
    interval of its measure.

    Parameters
    ----------
    bases : Basis | Mapping[str, Basis]
        A basis, or bases keyed by the panel title.
    n_points : int, optional
        The number of evaluation points per panel. Default is 200.
    coverage : float, optional
        The probability of the plotted interval. Default is 0.99.
    figsize : tuple, optional
        The figure size for the plot. Default is (10, 10).

    Returns
    -------
    fig : matplotlib.figure.Figure
        The figure.
    ax : numpy.ndarray
        The axes, one per basis.
    """
    if isinstance(bases, Basis):
        bases = {bases.kind.name: bases}

    tail = 0.5 * (1.0 - coverage)

    data = []
    for title, basis in bases.items():
        low, high = np.asarray(
            basis.measure.distribution.inv([tail, 1.0 - tail]),
            dtype=float,
        ).ravel()
        x = np.linspace(low, high, n_points)
        phi = basis.evaluate_all(x)

        data.append(
            PlotDataOnGrid(
                x1=[x] * (basis.degree + 1),
                x2=list(phi),
                legend=[rf"$\phi_{{{k}}}$" for k in range(basis.degree + 1)],
                title=str(title),
            ),
        )

    return plot_1d_on_grid(data, figsize=figsize)


def plot_realizations(
    samples: ArrayLike,
    mean: float | None = None,
    std: float | None = None,
    bins: int = 100,
    title: str = "",
    figsize: tuple = (8, 5),
) -> tuple[plt.Figure, plt.Axes]:
    """
    Plot the histogram of realizations of a random variable.

    Parameters
    ----------
    samples : ArrayLike
        The realizations.
    mean : float | None, optional
        The target mean, drawn as a vertical line when given.
    std : float | None, optional
        The target standard deviation, drawn as two vertical lines at mean +/- std
        when given together with `mean`.
    bins : int, optional
        The number of histogram bins. Default is 100.
    title : str, optional
        The title of the plot.
    figsize : tuple, optional
        The figure size for the plot. Default is (8, 5).

    Returns
    -------
    fig : matplotlib.figure.Figure
        The figure.
    ax : matplotlib.axes.Axes
        The axes.
    """
    samples = np.asarray(samples, dtype=float)

    fig, ax = plt.subplots(figsize=figsize)

    ax.hist(samples, bins=bins, density=True, alpha=0.6, label="samples")

    if mean is not None:
        ax.axvline(mean, color="k", linewidth=2, label="mean")
        if std is not None:
            ax.axvline(mean - std, color="k", linestyle="--", label="mean $\\pm$ std")
            ax.axvline(mean + std, color="k", linestyle="--")

    ax.set_title(
        title or f"mean: {samples.mean():.4f}  std: {samples.std(ddof=1):.4f}",
    )
    ax.grid()
    ax.legend()

    return fig, ax
