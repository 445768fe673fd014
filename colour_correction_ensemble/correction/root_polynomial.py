"""
Root-Polynomial Colour Correction
=================================

Define the objects for root-polynomial colour correction:

-   :attr:`colour_correction_ensemble.TERMS_ROOT_POLYNOMIAL`
-   :func:`colour_correction_ensemble.terms_root_polynomial`
-   :func:`colour_correction_ensemble.degree_root_polynomial`
-   :func:`colour_correction_ensemble.expand_root_polynomial`
-   :func:`colour_correction_ensemble.matrix_correction_root_polynomial`
-   :func:`colour_correction_ensemble.apply_correction_root_polynomial`

References
----------
-   :cite:`Finlayson2015` : Finlayson, G. D., Mackiewicz, M., & Hurlbert, A.
    (2015). Color Correction Using Root-Polynomial Regression. IEEE
    Transactions on Image Processing, 24(5), 1460-1470.
    doi:10.1109/TIP.2015.2405336
-   :cite:`Hong2001` : Hong, G., Luo, M. R., & Rhodes, P. A. (2001). A study
    of digital camera colorimetric characterization based on polynomial
    modeling. Color Research & Application, 26(1), 76-84.
"""

from __future__ import annotations

import logging
import numbers
import typing

import numpy as np
from scipy.linalg import lstsq

if typing.TYPE_CHECKING:
    from colour.hints import ArrayLike, Literal, NDArrayFloat, NDArrayInt

from colour.hints import Dict, Tuple

from colour_correction_ensemble.correction.common import (
    DimensionMismatchError,
    InvalidDegreeError,
    as_matrix_array,
    as_samples_array,
    handle_negative_values,
)

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "TERMS_ROOT_POLYNOMIAL",
    "terms_root_polynomial",
    "degree_root_polynomial",
    "expand_root_polynomial",
    "matrix_correction_root_polynomial",
    "apply_correction_root_polynomial",
]

LOGGER = logging.getLogger(__name__)

TERMS_ROOT_POLYNOMIAL: Dict[int, Tuple[Tuple[int, int, int], ...]] = {
    1: ((1, 0, 0), (0, 1, 0), (0, 0, 1)),
    2: ((1, 1, 0), (1, 0, 1), (0, 1, 1)),
    3: (
        (2, 1, 0),
        (2, 0, 1),
        (1, 2, 0),
        (1, 1, 1),
        (1, 0, 2),
        (0, 2, 1),
        (0, 1, 2),
    ),
    4: (
        (0, 1, 3),
        (0, 3, 1),
        (1, 0, 3),
        (1, 1, 2),
        (1, 2, 1),
        (1, 3, 0),
        (2, 1, 1),
        (3, 0, 1),
        (3, 1, 0),
    ),
}
"""
Exponents of the *R*, *G* and *B* channels for the monomials introduced at
each root-polynomial degree. A monomial of total degree :math:`n` is raised
to the power :math:`1 / n`. The expansion for degree :math:`d` concatenates
the monomials of degrees 1 to :math:`d` in this order, both when fitting and
applying a correction.
"""


def _validate_degree(degree: int) -> int:
    """Validate specified root-polynomial degree."""

    if (
        isinstance(degree, bool)
        or not isinstance(degree, numbers.Integral)
        or int(degree) not in TERMS_ROOT_POLYNOMIAL
    ):
        raise InvalidDegreeError(
            f'"{degree!r}" root-polynomial degree is invalid, it must be one of '
            f"{list(TERMS_ROOT_POLYNOMIAL)}!"
        )

    return int(degree)


def _exponents_root_polynomial(degree: int) -> NDArrayInt:
    """Return the monomial exponents for specified root-polynomial degree."""

    return np.array(
        [
            exponents
            for order in range(1, degree + 1)
            for exponents in TERMS_ROOT_POLYNOMIAL[order]
        ]
    )


def terms_root_polynomial(degree: int) -> int:
    """
    Return the number of terms of the root-polynomial expansion for
    specified degree.

    Parameters
    ----------
    degree
        Root-polynomial degree in [1, 4].

    Returns
    -------
    :class:`int`
        Terms count.

    Raises
    ------
    InvalidDegreeError
        If the degree is invalid.

    Examples
    --------
    >>> terms_root_polynomial(3)
    13
    """

    degree = _validate_degree(degree)

    return sum(len(TERMS_ROOT_POLYNOMIAL[order]) for order in range(1, degree + 1))


def degree_root_polynomial(terms: int) -> int:
    """
    Return the root-polynomial degree implied by specified terms count, e.g.,
    the row count of a root-polynomial correction matrix.

    Parameters
    ----------
    terms
        Terms count.

    Returns
    -------
    :class:`int`
        Root-polynomial degree.

    Raises
    ------
    DimensionMismatchError
        If no degree produces specified terms count.

    Examples
    --------
    >>> degree_root_polynomial(22)
    4
    """

    for degree in TERMS_ROOT_POLYNOMIAL:
        if terms_root_polynomial(degree) == terms:
            return degree

    raise DimensionMismatchError(
        f'"{terms}" terms do not match any root-polynomial expansion, expected '
        f"one of {[terms_root_polynomial(d) for d in TERMS_ROOT_POLYNOMIAL]}!"
    )


def expand_root_polynomial(
    RGB: ArrayLike,
    degree: int = 2,
    negative_values: Literal["Raise", "Clip"] | str = "Raise",
) -> NDArrayFloat:
    """
    Perform the root-polynomial expansion of specified *RGB* samples.

    The process is as follows:

    -   Degree :math:`d` is validated before any computation.
    -   For :math:`d \\geq 2`, negative values are handled according to the
        ``negative_values`` policy.
    -   Each monomial :math:`R^i G^j B^k` of total degree
        :math:`n = i + j + k \\leq d` listed in
        :attr:`colour_correction_ensemble.TERMS_ROOT_POLYNOMIAL` is raised to
        the power :math:`1 / n`.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    degree
        Root-polynomial degree in [1, 4].
    negative_values
        Policy for the negative values when :math:`d \\geq 2`: *Raise* or
        *Clip*.

    Returns
    -------
    :class:`numpy.ndarray`
        Expanded samples of shape (N, 3), (N, 6), (N, 13) or (N, 22).

    Raises
    ------
    InvalidDegreeError
        If the degree is invalid.
    DimensionMismatchError
        If the samples do not have 3 columns.
    NegativeValuesError
        If the samples contain negative values and the policy is *Raise*.

    References
    ----------
    :cite:`Finlayson2015`, :cite:`Hong2001`

    Examples
    --------
    >>> expand_root_polynomial(np.array([[0.25, 1.0, 0.0]]), 2)
    array([[ 0.25,  1.  ,  0.  ,  0.5 ,  0.  ,  0.  ]])
    """

    degree = _validate_degree(degree)

    RGB = as_samples_array(RGB)

    if RGB.shape[1] != 3:
        raise DimensionMismatchError(
            f'"RGB" must have 3 columns, got {RGB.shape[1]}!'
        )

    if degree == 1:
        return np.copy(RGB)

    RGB = handle_negative_values(RGB, negative_values)

    exponents = _exponents_root_polynomial(degree)
    orders = np.sum(exponents, axis=-1)

    monomials = np.prod(RGB[:, np.newaxis, :] ** exponents[np.newaxis], axis=-1)

    return monomials ** (1 / orders)


def matrix_correction_root_polynomial(
    RGB: ArrayLike,
    XYZ: ArrayLike,
    degree: int = 2,
    negative_values: Literal["Raise", "Clip"] | str = "Raise",
) -> NDArrayFloat:
    """
    Compute the root-polynomial colour correction matrix mapping specified
    *RGB* samples to specified *CIE XYZ* tristimulus values using least
    squares.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    XYZ
        Reference *CIE XYZ* tristimulus values of shape (N, 3).
    degree
        Root-polynomial degree in [1, 4].
    negative_values
        Policy for the negative values: *Raise* or *Clip*.

    Returns
    -------
    :class:`numpy.ndarray`
        Colour correction matrix of shape (k, 3).

    Raises
    ------
    DimensionMismatchError
        If the samples count differ.

    References
    ----------
    :cite:`Finlayson2015`
    """

    features = expand_root_polynomial(RGB, degree, negative_values)
    XYZ = as_samples_array(XYZ, "XYZ")

    if features.shape[0] != XYZ.shape[0]:
        raise DimensionMismatchError(
            f'"RGB" and "XYZ" samples count differ: '
            f"{features.shape[0]} != {XYZ.shape[0]}!"
        )

    CCM, _residues, rank, _singular_values = lstsq(features, XYZ)

    LOGGER.debug(
        "Root-polynomial correction fitted: degree=%s, terms=%s, rank=%s.",
        degree,
        features.shape[1],
        rank,
    )

    if rank < features.shape[1]:
        LOGGER.debug(
            "Root-polynomial features are rank deficient: %s < %s.",
            rank,
            features.shape[1],
        )

    return CCM


def apply_correction_root_polynomial(
    RGB: ArrayLike,
    CCM: ArrayLike,
    negative_values: Literal["Raise", "Clip"] | str = "Raise",
) -> NDArrayFloat:
    """
    Apply specified root-polynomial colour correction matrix to specified
    *RGB* samples.

    The root-polynomial degree is implied by the row count of the matrix.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    CCM
        Colour correction matrix of shape (3, 3), (6, 3), (13, 3) or (22, 3).
    negative_values
        Policy for the negative values: *Raise* or *Clip*.

    Returns
    -------
    :class:`numpy.ndarray`
        *CIE XYZ* tristimulus values of shape (N, 3).

    Raises
    ------
    DimensionMismatchError
        If the matrix row count does not match a root-polynomial expansion.

    Examples
    --------
    >>> RGB = np.array([[0.2, 0.4, 0.6]])
    >>> apply_correction_root_polynomial(RGB, np.identity(3))
    array([[ 0.2,  0.4,  0.6]])
    """

    CCM = as_matrix_array(CCM, name="CCM")

    features = expand_root_polynomial(
        RGB, degree_root_polynomial(CCM.shape[0]), negative_values
    )

    return features @ CCM
