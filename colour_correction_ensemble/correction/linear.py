"""
Linear Colour Correction
========================

Define the objects for linear colour correction:

-   :func:`colour_correction_ensemble.matrix_correction_linear`
-   :func:`colour_correction_ensemble.apply_correction_linear`

References
----------
-   :cite:`Cheung2004` : Cheung, V., Westland, S., Connah, D., & Ripamonti,
    C. (2004). A comparative study of the characterisation of colour cameras
    by means of neural networks and polynomial transforms. Coloration
    Technology, 120(1), 19-25. doi:10.1111/j.1478-4408.2004.tb00201.x
"""

from __future__ import annotations

import logging
import typing

from colour.characterisation import matrix_colour_correction_Cheung2004

if typing.TYPE_CHECKING:
    from colour.hints import ArrayLike, NDArrayFloat

from colour_correction_ensemble.correction.common import (
    DimensionMismatchError,
    as_matrix_array,
    as_samples_array,
)

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "validate_correction_3x3",
    "matrix_correction_linear",
    "apply_correction_linear",
]

LOGGER = logging.getLogger(__name__)


def validate_correction_3x3(
    RGB: ArrayLike, CCM: ArrayLike, name: str = "CCM"
) -> tuple[NDArrayFloat, NDArrayFloat]:
    """
    Validate specified *RGB* samples and 3x3 colour correction matrix.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    CCM
        Colour correction matrix of shape (3, 3).
    name
        Name of the matrix used in the error message.

    Returns
    -------
    :class:`tuple`
        *RGB* samples and colour correction matrix.

    Raises
    ------
    DimensionMismatchError
        If the samples do not have 3 columns or the matrix is not 3x3.
    """

    RGB = as_samples_array(RGB)
    CCM = as_matrix_array(CCM, name=name)

    if RGB.shape[1] != 3:
        raise DimensionMismatchError(f'"RGB" must have 3 columns, got {RGB.shape[1]}!')

    if CCM.shape != (3, 3):
        raise DimensionMismatchError(
            f'"{name}" must have shape (3, 3), got {CCM.shape}!'
        )

    return RGB, CCM


def matrix_correction_linear(RGB: ArrayLike, XYZ: ArrayLike) -> NDArrayFloat:
    """
    Compute the linear colour correction matrix mapping specified *RGB*
    samples to specified *CIE XYZ* tristimulus values using least squares.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    XYZ
        Reference *CIE XYZ* tristimulus values of shape (N, 3).

    Returns
    -------
    :class:`numpy.ndarray`
        Colour correction matrix of shape (3, 3) applied as
        :math:`XYZ = RGB \\cdot M`.

    Raises
    ------
    DimensionMismatchError
        If the samples shape differ.

    References
    ----------
    :cite:`Cheung2004`

    Examples
    --------
    >>> RGB = np.random.random((24, 3))
    >>> np.around(matrix_correction_linear(RGB, RGB), 6)  # doctest: +SKIP
    array([[ 1.,  0.,  0.],
           [ 0.,  1.,  0.],
           [ 0.,  0.,  1.]])
    """

    RGB = as_samples_array(RGB)
    XYZ = as_samples_array(XYZ, "XYZ")

    if RGB.shape != XYZ.shape or RGB.shape[1] != 3:
        raise DimensionMismatchError(
            f'"RGB" and "XYZ" must have the same (N, 3) shape: '
            f"{RGB.shape} != {XYZ.shape}!"
        )

    # Cheung (2004) returns the matrix applied to column vectors.
    CCM = matrix_colour_correction_Cheung2004(RGB, XYZ, terms=3).T

    LOGGER.debug("Linear correction fitted on %s samples.", RGB.shape[0])

    return CCM


def apply_correction_linear(RGB: ArrayLike, CCM: ArrayLike) -> NDArrayFloat:
    """
    Apply specified linear colour correction matrix to specified *RGB*
    samples.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    CCM
        Colour correction matrix of shape (3, 3).

    Returns
    -------
    :class:`numpy.ndarray`
        *CIE XYZ* tristimulus values of shape (N, 3).

    Raises
    ------
    DimensionMismatchError
        If the samples do not have 3 columns or the matrix is not 3x3.

    Examples
    --------
    >>> apply_correction_linear(np.array([[0.2, 0.4, 0.6]]), np.identity(3))
    array([[ 0.2,  0.4,  0.6]])
    """

    RGB, CCM = validate_correction_3x3(RGB, CCM)

    return RGB @ CCM
