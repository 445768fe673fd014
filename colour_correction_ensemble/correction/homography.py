"""
Homography Colour Correction
============================

Define the objects for colour homography correction:

-   :func:`colour_correction_ensemble.matrix_correction_homography`
-   :func:`colour_correction_ensemble.apply_correction_homography`

A colour homography maps *RGB* samples to *CIE XYZ* tristimulus values up to
a per-sample shading factor, it is fitted with alternating least squares by
solving for the :math:`3 \\times 3` matrix :math:`H` with the shading
factors :math:`D` fixed, then for :math:`D` with :math:`H` fixed:

:math:`\\min_{D, H} \\lVert D \\cdot RGB \\cdot H - XYZ \\rVert`

References
----------
-   :cite:`Finlayson2016` : Finlayson, G. D., Gong, H., & Fisher, R. B.
    (2016). Color Homography Color Correction. Color and Imaging Conference,
    24, 310-314. doi:10.2352/ISSN.2169-2629.2017.32.310
"""

from __future__ import annotations

import logging
import typing

import numpy as np
from colour.constants import EPSILON
from scipy.linalg import lstsq

if typing.TYPE_CHECKING:
    from colour.hints import ArrayLike, NDArrayFloat

from colour_correction_ensemble.correction.common import (
    DimensionMismatchError,
    as_samples_array,
)
from colour_correction_ensemble.correction.linear import validate_correction_3x3

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "matrix_correction_homography",
    "apply_correction_homography",
]

LOGGER = logging.getLogger(__name__)


def matrix_correction_homography(
    RGB: ArrayLike,
    XYZ: ArrayLike,
    iterations: int = 100,
    tolerance: float = 1e-9,
) -> NDArrayFloat:
    """
    Compute the colour homography matrix mapping specified *RGB* samples to
    specified *CIE XYZ* tristimulus values using alternating least squares.

    The process is as follows:

    -   Shading factors :math:`D` are initialised to 1.
    -   Matrix :math:`H` is solved by least squares on the shaded samples
        :math:`D \\cdot RGB`.
    -   Each shading factor is solved in closed form as the projection of the
        reference tristimulus values on the sample estimate.
    -   Shading factors are normalised to a mean of 1, the matrix carrying
        the global scale.
    -   Iterations stop when the relative residual change is below
        ``tolerance``.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    XYZ
        Reference *CIE XYZ* tristimulus values of shape (N, 3).
    iterations
        Maximum iterations count.
    tolerance
        Convergence tolerance on the relative residual change.

    Returns
    -------
    :class:`numpy.ndarray`
        Colour homography matrix of shape (3, 3) applied as
        :math:`XYZ = RGB \\cdot H`.

    Raises
    ------
    DimensionMismatchError
        If the samples shape differ.

    References
    ----------
    :cite:`Finlayson2016`
    """

    RGB = as_samples_array(RGB)
    XYZ = as_samples_array(XYZ, "XYZ")

    if RGB.shape != XYZ.shape or RGB.shape[1] != 3:
        raise DimensionMismatchError(
            f'"RGB" and "XYZ" must have the same (N, 3) shape: '
            f"{RGB.shape} != {XYZ.shape}!"
        )

    D = np.ones(RGB.shape[0])
    norm_XYZ = max(float(np.linalg.norm(XYZ)), EPSILON)
    residual_previous = np.inf

    H = np.identity(3)
    for iteration in range(iterations):
        H = lstsq(D[:, np.newaxis] * RGB, XYZ)[0]

        estimate = RGB @ H
        power = np.sum(estimate**2, axis=-1)
        D = np.where(
            power > EPSILON,
            np.sum(estimate * XYZ, axis=-1) / np.maximum(power, EPSILON),
            1,
        )

        residual = float(np.linalg.norm(D[:, np.newaxis] * estimate - XYZ)) / norm_XYZ

        scale = np.mean(D)
        if scale > EPSILON:
            D /= scale
            H *= scale

        if abs(residual_previous - residual) < tolerance:
            LOGGER.debug(
                "Homography correction converged after %s iterations, "
                "residual=%.6g.",
                iteration + 1,
                residual,
            )
            break

        residual_previous = residual
    else:
        LOGGER.debug(
            "Homography correction did not converge in %s iterations.", iterations
        )

    return H


def apply_correction_homography(RGB: ArrayLike, CCM: ArrayLike) -> NDArrayFloat:
    """
    Apply specified colour homography matrix to specified *RGB* samples.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    CCM
        Colour homography matrix of shape (3, 3).

    Returns
    -------
    :class:`numpy.ndarray`
        *CIE XYZ* tristimulus values of shape (N, 3).

    Raises
    ------
    DimensionMismatchError
        If the samples do not have 3 columns or the matrix is not 3x3.
    """

    RGB, CCM = validate_correction_3x3(RGB, CCM, "H")

    return RGB @ CCM
