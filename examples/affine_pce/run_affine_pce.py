#!/usr/bin/env python3
r"""
Affine polynomial chaos expansions of common random variables.

For every canonical measure a random variable with mean 2.0 and standard deviation
0.2 is represented as

.. math::
    X = x_0 + x_1 \phi_1(\xi),

its mean and standard deviation are recovered from the coefficients, and the
moments of 100 000 realizations are compared with them.

The script performs the following steps:
1. Builds the bases of degree 6 of the four canonical measures.
2. Computes the affine coefficients from the native shape parameters and from the
   target mean and standard deviation.
3. Computes the mean and standard deviation from the coefficients.
4. Samples the random variables and prints the empirical moments.
5. Optionally plots the basis polynomials and the histograms of the samples.
"""

import click
import matplotlib.pyplot as plt
import numpy as np
from box import Box

from measure_pce.basis import canonical_bases
from measure_pce.measures import MeasureKind
from measure_pce.pce import (
    AffineKind,
    affine_pce,
    mean,
    sample_pce,
    std,
)
from measure_pce.plots import plot_bases, plot_realizations


def get_config(samples: int, seed: int) -> Box:
    """
    Return the configuration of the example.

    Parameters
    ----------
    samples : int
        The number of realizations per random variable.
    seed : int
        The seed of the random generator.

    Returns
    -------
    Box
        The configuration.
    """
    return Box(
        {
            "degree": 6,
            "beta_shape": (2.0, 2.0),
            "target": {"mean": 2.0, "std": 0.2},
            "native": {
                MeasureKind.GAUSSIAN.value: (2.0, 0.2),
                MeasureKind.UNIFORM01.value: (
                    2.0 - 0.2 * np.sqrt(3),
                    2.0 + 0.2 * np.sqrt(3),
                ),
                MeasureKind.BETA01.value: (
                    2.0 - 0.2 * np.sqrt(5),
                    2.0 + 0.2 * np.sqrt(5),
                ),
                MeasureKind.LOGISTIC.value: (2.0, 0.2 * np.sqrt(3) / np.pi),
            },
            "samples": samples,
            "seed": seed,
        },
    )


def run(config: Box, plot: bool) -> None:
    """
    Run the example.

    Parameters
    ----------
    config : Box
        The configuration.
    plot : bool
        If True, plot the bases and the histograms of the realizations.
    """
    bases = canonical_bases(config.degree, beta_shape=config.beta_shape)
    rng = np.random.default_rng(config.seed)

    realizations = {}

    for kind, basis in bases.items():
        p1, p2 = config.native[kind.value]
        native = affine_pce(p1, p2, basis, AffineKind.NATIVE)
        meanstd = affine_pce(
            config.target.mean,
            config.target.std,
            basis,
            AffineKind.MEAN_STD,
        )

        y = sample_pce(config.samples, meanstd, basis, rng=rng)
        realizations[kind] = y

        print(f"{kind.name}")
        print(f"  native  ({p1:.4f}, {p2:.4f}) -> {np.round(native, 6)}")
        print(
            f"  meanstd ({config.target.mean}, {config.target.std}) -> "
            f"{np.round(meanstd, 6)}",
        )
        print(
            f"  pce     mean: {mean(meanstd, basis):.6f}  "
            f"std: {std(meanstd, basis):.6f}",
        )
        print(f"  samples mean: {y.mean():.6f}  std: {y.std(ddof=1):.6f}")

    if plot:
        plot_bases({kind.name: basis for kind, basis in bases.items()})

        for kind, y in realizations.items():
            plot_realizations(
                y,
                mean=config.target.mean,
                std=config.target.std,
                title=kind.name,
            )

        plt.show()


@click.command()
@click.option("--plot", is_flag=True, help="Plot the bases and the realizations.")
@click.option(
    "--samples",
    default=100_000,
    show_default=True,
    help="Number of realizations per random variable.",
)
@click.option("--seed", default=0, show_default=True, help="Seed of the generator.")
def main(plot: bool, samples: int, seed: int) -> None:
    """
    Run the example.

    Parameters
    ----------
    plot : bool
        If True, plot the results.
    samples : int
        The number of realizations per random variable.
    seed : int
        The seed of the random generator.
    """
    run(get_config(samples, seed), plot)


if __name__ == "__main__":
    main()
