"""
Common Utilities
================

Define the common utilities objects shared by the colour correction methods:

-   :attr:`colour_correction_ensemble.correction.DTYPE_FLOAT_DEFAULT`
-   :attr:`colour_correction_ensemble.correction.SETTINGS_CORRECTION_ENSEMBLE_DEFAULT`
-   :class:`colour_correction_ensemble.correction.ColourCorrectionError`
-   :class:`colour_correction_ensemble.correction.InvalidDegreeError`
-   :class:`colour_correction_ensemble.correction.DimensionMismatchError`
-   :class:`colour_correction_ensemble.correction.NegativeValuesError`
-   :class:`colour_correction_ensemble.correction.InvalidFoldsError`
-   :func:`colour_correction_ensemble.correction.as_samples_array`
-   :func:`colour_correction_ensemble.correction.as_matrix_array`
-   :func:`colour_correction_ensemble.correction.handle_negative_values`
"""

from __future__ import annotations

import typing

import numpy as np

if typing.TYPE_CHECKING:
    from colour.hints import ArrayLike, Literal, NDArrayFloat

from colour.hints import Dict
from colour.utilities import as_float_array, validate_method
from colour.utilities.documentation import (
    DocstringDict,
    is_documentation_building,
)

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "DTYPE_FLOAT_DEFAULT",
    "SETTINGS_CORRECTION_ENSEMBLE_DEFAULT",
    "ColourCorrectionError",
    "InvalidDegreeError",
    "DimensionMismatchError",
    "NegativeValuesError",
    "InvalidFoldsError",
    "as_samples_array",
    "as_matrix_array",
    "handle_negative_values",
]

DTYPE_FLOAT_DEFAULT: type = np.float64
"""Dtype used for the colour correction computations."""

SETTINGS_CORRECTION_ENSEMBLE_DEFAULT: Dict = {
    "degree": 2,
    "homography_iterations": 100,
    "homography_tolerance": 1e-9,
    "folds": None,
    "ensemble_cond": 1e-8,
    "random_state": None,
    "negative_values": "raise",
}
if is_documentation_building():  # pragma: no cover
    SETTINGS_CORRECTION_ENSEMBLE_DEFAULT = DocstringDict(
        SETTINGS_CORRECTION_ENSEMBLE_DEFAULT
    )
    SETTINGS_CORRECTION_ENSEMBLE_DEFAULT.__doc__ = """
Settings for the fitting and application of the ensemble colour correction.
"""


class ColourCorrectionError(ValueError):
    """Base exception for the colour correction errors."""


class InvalidDegreeError(ColourCorrectionError):
    """
    Raised when a root-polynomial degree is not an integer in [1, 4].
    """


class DimensionMismatchError(ColourCorrectionError):
    """
    Raised when the shape of an input or correction matrix does not match
    the shape expected by the operation.
    """


class NegativeValuesError(ColourCorrectionError):
    """
    Raised when negative values would be raised to a fractional exponent.
    """


class InvalidFoldsError(ColourCorrectionError):
    """
    Raised when a folds count cannot split the calibration samples.
    """


def as_samples_array(a: ArrayLike, name: str = "RGB") -> NDArrayFloat:
    """
    Convert specified samples to a 2-dimensional floating point array.

    A single sample, i.e., a 1-dimensional array, is promoted to a
    1-row array.

    Parameters
    ----------
    a
        Samples to convert.
    name
        Name of the samples used in the error message.

    Returns
    -------
    :class:`numpy.ndarray`
        Samples as a 2-dimensional floating point array.

    Raises
    ------
    DimensionMismatchError
        If the samples are not 1 or 2-dimensional.

    Examples
    --------
    >>> as_samples_array([0.2, 0.4, 0.6])
    array([[ 0.2,  0.4,  0.6]])
    """

    a = as_float_array(a, DTYPE_FLOAT_DEFAULT)

    if a.ndim == 1:
        a = a[np.newaxis, :]

    if a.ndim != 2:
        raise DimensionMismatchError(
            f'"{name}" must be a 2-dimensional array, got {a.ndim} dimensions!'
        )

    return a


def as_matrix_array(
    a: ArrayLike, columns: int = 3, name: str = "CCM"
) -> NDArrayFloat:
    """
    Convert specified correction matrix to a 2-dimensional floating point
    array with specified columns count.

    Parameters
    ----------
    a
        Correction matrix to convert.
    columns
        Expected columns count.
    name
        Name of the matrix used in the error message.

    Returns
    -------
    :class:`numpy.ndarray`
        Correction matrix.

    Raises
    ------
    DimensionMismatchError
        If the matrix is not 2-dimensional or its columns count is unexpected.
    """

    a = as_float_array(a, DTYPE_FLOAT_DEFAULT)

    if a.ndim != 2 or a.shape[1] != columns:
        raise DimensionMismatchError(
            f'"{name}" must have shape (n, {columns}), got {a.shape}!'
        )

    return a


def handle_negative_values(
    RGB: NDArrayFloat,
    negative_values: Literal["Raise", "Clip"] | str = "Raise",
) -> NDArrayFloat:
    """
    Handle the negative values of specified *RGB* samples prior to
    fractional exponentiation.

    Parameters
    ----------
    RGB
        *RGB* samples.
    negative_values
        Policy for the negative values: *Raise* raises a
        :class:`NegativeValuesError` exception, *Clip* clips the values to 0.

    Returns
    -------
    :class:`numpy.ndarray`
        *RGB* samples.

    Raises
    ------
    NegativeValuesError
        If the policy is *Raise* and the samples contain negative values.

    Examples
    --------
    >>> handle_negative_values(np.array([[-0.1, 0.2, 0.3]]), "Clip")
    array([[ 0. ,  0.2,  0.3]])
    """

    negative_values = validate_method(
        negative_values,
        ("Raise", "Clip"),
        '"{0}" negative values policy is invalid, it must be one of {1}!',
    )

    if not np.any(RGB < 0):
        return RGB

    if negative_values == "clip":
        return np.clip(RGB, 0, None)

    rows = np.unique(np.where(RGB < 0)[0])
    raise NegativeValuesError(
        f"Negative values cannot be raised to a fractional exponent, "
        f"offending rows: {rows.tolist()}!"
    )
