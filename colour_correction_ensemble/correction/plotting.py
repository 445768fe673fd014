"""
Plotting
========

Visualization utilities for colour correction results.
"""

from __future__ import annotations

import typing

import matplotlib.pyplot as plt
import numpy as np
from colour import XYZ_to_sRGB
from colour.plotting import plot_image

if typing.TYPE_CHECKING:
    from pathlib import Path

    from colour.hints import ArrayLike, Tuple
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

from colour_correction_ensemble.correction.common import (
    DimensionMismatchError,
    as_samples_array,
)
from colour_correction_ensemble.correction.evaluation import (
    CCS_ILLUMINANT_EVALUATION_DEFAULT,
    evaluate_correction,
)

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "plot_correction_results",
]


def plot_correction_results(
    XYZ: ArrayLike,
    XYZ_reference: ArrayLike,
    delta_E: ArrayLike | None = None,
    swatches_horizontal: int = 6,
    swatches_vertical: int = 4,
    illuminant: ArrayLike = CCS_ILLUMINANT_EVALUATION_DEFAULT,
    filename: str | Path | None = None,
) -> Tuple[Figure, np.ndarray]:
    """
    Visualize colour correction results.

    Three panels are drawn: the reference swatches, the corrected swatches
    and the colour difference of each swatch.

    Parameters
    ----------
    XYZ
        Corrected *CIE XYZ* tristimulus values of shape (N, 3).
    XYZ_reference
        Reference *CIE XYZ* tristimulus values of shape (N, 3).
    delta_E
        Colour difference of each swatch, computed with
        :func:`colour_correction_ensemble.evaluate_correction` if not given.
    swatches_horizontal
        Number of horizontal swatch columns.
    swatches_vertical
        Number of vertical swatch rows.
    illuminant
        Reference illuminant chromaticity coordinates.
    filename
        Path the figure is saved to, if given.

    Returns
    -------
    :class:`tuple`
        Current figure and axes.

    Raises
    ------
    DimensionMismatchError
        If the swatches count does not match the swatches layout.
    """

    XYZ = as_samples_array(XYZ, "XYZ")
    XYZ_reference = as_samples_array(XYZ_reference, "XYZ_reference")

    swatches = swatches_horizontal * swatches_vertical
    if XYZ.shape[0] != swatches or XYZ_reference.shape[0] != swatches:
        raise DimensionMismatchError(
            f"Swatches count does not match the {swatches_vertical}x"
            f"{swatches_horizontal} layout: {XYZ.shape[0]}, "
            f"{XYZ_reference.shape[0]}!"
        )

    if delta_E is None:
        delta_E = evaluate_correction(XYZ, XYZ_reference, illuminant).delta_E

    delta_E = np.ravel(delta_E)

    figure, axes = plt.subplots(1, 3, figsize=(18, 5))

    for axis, values, title in (
        (axes[0], XYZ_reference, "Reference"),
        (axes[1], XYZ, "Corrected"),
    ):
        plot_image(
            np.clip(
                XYZ_to_sRGB(
                    np.reshape(values, [swatches_vertical, swatches_horizontal, 3]),
                    illuminant,
                ),
                0,
                1,
            ),
            axes=axis,
            standalone=False,
        )
        axis.set_title(title)

    axis_delta_E: Axes = axes[2]
    axis_delta_E.bar(np.arange(swatches), delta_E, color="teal")
    axis_delta_E.axhline(
        np.mean(delta_E),
        color="red",
        linestyle="--",
        label=f"Mean: {np.mean(delta_E):.2f}",
    )
    axis_delta_E.set_title("Delta E")
    axis_delta_E.set_xlabel("Swatch")
    axis_delta_E.set_ylabel("Delta E")
    axis_delta_E.legend()

    figure.tight_layout()

    if filename is not None:
        figure.savefig(filename, bbox_inches="tight")

    return figure, axes
