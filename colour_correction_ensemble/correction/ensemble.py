"""
Ensemble Colour Correction
==========================

Define the objects for ensemble colour correction, blending the *CIE XYZ*
estimates of the homography, linear and root-polynomial corrections through
a learned ensemble matrix:

-   :class:`colour_correction_ensemble.ModelsEnsemble`
-   :func:`colour_correction_ensemble.evaluate_ensemble_features`
-   :func:`colour_correction_ensemble.blend_ensemble`
-   :func:`colour_correction_ensemble.apply_correction_ensemble`
-   :func:`colour_correction_ensemble.features_ensemble_cross_validated`
-   :func:`colour_correction_ensemble.matrix_correction_ensemble`
"""

from __future__ import annotations

import logging
import numbers
import typing
from dataclasses import dataclass, replace

import numpy as np
from colour.utilities import Structure, required
from scipy.linalg import lstsq

if typing.TYPE_CHECKING:
    from colour.hints import Any, ArrayLike, Literal, NDArrayFloat

from colour_correction_ensemble.correction.common import (
    DTYPE_FLOAT_DEFAULT,
    SETTINGS_CORRECTION_ENSEMBLE_DEFAULT,
    DimensionMismatchError,
    InvalidFoldsError,
    as_matrix_array,
    as_samples_array,
)
from colour_correction_ensemble.correction.homography import (
    apply_correction_homography,
    matrix_correction_homography,
)
from colour_correction_ensemble.correction.linear import (
    apply_correction_linear,
    matrix_correction_linear,
)
from colour_correction_ensemble.correction.root_polynomial import (
    apply_correction_root_polynomial,
    degree_root_polynomial,
    matrix_correction_root_polynomial,
)

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "ModelsEnsemble",
    "evaluate_ensemble_features",
    "blend_ensemble",
    "apply_correction_ensemble",
    "features_ensemble_cross_validated",
    "matrix_correction_ensemble",
]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ModelsEnsemble:
    """
    Bundle of the fitted matrices of an ensemble colour correction.

    The matrices are copied and made read-only on construction so that a
    bundle can be shared by concurrent applications.

    Parameters
    ----------
    homography
        Colour homography matrix of shape (3, 3).
    linear
        Linear colour correction matrix of shape (3, 3).
    root_polynomial
        Root-polynomial colour correction matrix of shape (k, 3).
    ensemble
        Ensemble matrix of shape (9, 3) blending the estimates of the three
        corrections, undefined while the bundle is being fitted.
    """

    homography: NDArrayFloat
    linear: NDArrayFloat
    root_polynomial: NDArrayFloat
    ensemble: NDArrayFloat | None = None

    def __post_init__(self) -> None:
        """Copy the matrices to read-only floating point arrays."""

        for name in ("homography", "linear", "root_polynomial", "ensemble"):
            value = getattr(self, name)

            if value is None:
                continue

            matrix = np.array(value, dtype=DTYPE_FLOAT_DEFAULT)
            matrix.setflags(write=False)
            object.__setattr__(self, name, matrix)

    @property
    def degree(self) -> int:
        """
        Root-polynomial degree implied by the root-polynomial matrix.

        Returns
        -------
        :class:`int`
            Root-polynomial degree.
        """

        return degree_root_polynomial(self.root_polynomial.shape[0])


def evaluate_ensemble_features(
    RGB: ArrayLike,
    models: ModelsEnsemble,
    negative_values: Literal["Raise", "Clip"] | str = "Raise",
) -> NDArrayFloat:
    """
    Evaluate the homography, linear and root-polynomial corrections of
    specified models on specified *RGB* samples and concatenate their *CIE XYZ*
    estimates.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    models
        Fitted models, the ensemble matrix is not used.
    negative_values
        Policy for the negative values of the root-polynomial expansion:
        *Raise* or *Clip*.

    Returns
    -------
    :class:`numpy.ndarray`
        Concatenated estimates of shape (N, 9) ordered as
        [homography, linear, root-polynomial].

    Raises
    ------
    DimensionMismatchError
        If the samples do not have 3 columns or a correction matrix has an
        unexpected shape.

    Examples
    --------
    >>> models = ModelsEnsemble(np.identity(3), np.identity(3), np.identity(3))
    >>> evaluate_ensemble_features(np.array([[0.2, 0.4, 0.6]]), models)
    array([[ 0.2,  0.4,  0.6,  0.2,  0.4,  0.6,  0.2,  0.4,  0.6]])
    """

    RGB = as_samples_array(RGB)

    if RGB.shape[1] != 3:
        raise DimensionMismatchError(f'"RGB" must have 3 columns, got {RGB.shape[1]}!')

    return np.hstack(
        [
            apply_correction_homography(RGB, models.homography),
            apply_correction_linear(RGB, models.linear),
            apply_correction_root_polynomial(
                RGB, models.root_polynomial, negative_values
            ),
        ]
    )


def blend_ensemble(estimates: ArrayLike, ensemble: ArrayLike | None) -> NDArrayFloat:
    """
    Blend specified concatenated estimates with specified ensemble matrix.

    Parameters
    ----------
    estimates
        Concatenated estimates of shape (N, m).
    ensemble
        Ensemble matrix of shape (m, 3).

    Returns
    -------
    :class:`numpy.ndarray`
        *CIE XYZ* tristimulus values of shape (N, 3).

    Raises
    ------
    ValueError
        If the ensemble matrix is undefined.
    DimensionMismatchError
        If the ensemble matrix row count does not match the estimates width.
    """

    if ensemble is None:
        raise ValueError('"ensemble" matrix is undefined, the models are not fitted!')

    estimates = as_samples_array(estimates, "estimates")
    ensemble = as_matrix_array(ensemble, name="ensemble")

    if ensemble.shape[0] != estimates.shape[1]:
        raise DimensionMismatchError(
            f'"ensemble" matrix row count does not match the estimates width: '
            f"{ensemble.shape[0]} != {estimates.shape[1]}!"
        )

    return estimates @ ensemble


def apply_correction_ensemble(
    RGB: ArrayLike,
    models: ModelsEnsemble,
    negative_values: Literal["Raise", "Clip"] | str = "Raise",
) -> NDArrayFloat:
    """
    Apply specified ensemble colour correction models to specified *RGB*
    samples or pre-combined estimates.

    Samples with 3 columns are treated as *RGB* and evaluated with
    :func:`colour_correction_ensemble.evaluate_ensemble_features` first,
    samples with more than 3 columns are treated as concatenated estimates
    and blended as is.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3) or concatenated estimates of shape
        (N, m) with :math:`m > 3`.
    models
        Fitted models.
    negative_values
        Policy for the negative values of the root-polynomial expansion:
        *Raise* or *Clip*.

    Returns
    -------
    :class:`numpy.ndarray`
        *CIE XYZ* tristimulus values of shape (N, 3).

    Raises
    ------
    DimensionMismatchError
        If the samples have less than 3 columns or any matrix has an
        unexpected shape.

    Examples
    --------
    >>> ensemble = np.vstack([np.identity(3) / 3] * 3)
    >>> models = ModelsEnsemble(
    ...     np.identity(3), np.identity(3), np.identity(3), ensemble
    ... )
    >>> apply_correction_ensemble(np.array([[0.2, 0.4, 0.6]]), models)
    ... # doctest: +ELLIPSIS
    array([[ 0.2...,  0.4...,  0.6...]])
    """

    RGB = as_samples_array(RGB)

    if RGB.shape[1] < 3:
        raise DimensionMismatchError(
            f'"RGB" must have at least 3 columns, got {RGB.shape[1]}!'
        )

    if RGB.shape[1] == 3:
        estimates = evaluate_ensemble_features(RGB, models, negative_values)
    else:
        estimates = RGB

    return blend_ensemble(estimates, models.ensemble)


def _fit_models(
    RGB: NDArrayFloat, XYZ: NDArrayFloat, settings: Structure
) -> ModelsEnsemble:
    """Fit the homography, linear and root-polynomial corrections."""

    return ModelsEnsemble(
        homography=matrix_correction_homography(
            RGB,
            XYZ,
            settings.homography_iterations,
            settings.homography_tolerance,
        ),
        linear=matrix_correction_linear(RGB, XYZ),
        root_polynomial=matrix_correction_root_polynomial(
            RGB, XYZ, settings.degree, settings.negative_values
        ),
    )


def _is_in_sample(folds: int | None) -> bool:
    """Return whether specified folds count fits the ensemble matrix in-sample."""

    return folds is None or (
        isinstance(folds, numbers.Integral)
        and not isinstance(folds, bool)
        and int(folds) == 1
    )


def _validate_folds(folds: int, samples: int) -> int:
    """Validate specified folds count against specified samples count."""

    if (
        isinstance(folds, bool)
        or not isinstance(folds, numbers.Integral)
        or not 2 <= int(folds) <= samples
    ):
        raise InvalidFoldsError(
            f'"{folds!r}" folds count is invalid, it must be an integer in '
            f"[2, {samples}] for {samples} samples!"
        )

    return int(folds)


@required("scikit-learn")  # pyright: ignore
def features_ensemble_cross_validated(
    RGB: ArrayLike, XYZ: ArrayLike, **kwargs: Any
) -> NDArrayFloat:
    """
    Compute the out-of-fold concatenated estimates of the homography, linear
    and root-polynomial corrections: the estimates of each fold are produced
    by corrections fitted on the remaining folds.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    XYZ
        Reference *CIE XYZ* tristimulus values of shape (N, 3).

    Other Parameters
    ----------------
    degree
        Root-polynomial degree in [1, 4].
    folds
        Folds count in [2, N].
    homography_iterations
        Maximum iterations count of the homography fitting.
    homography_tolerance
        Convergence tolerance of the homography fitting.
    negative_values
        Policy for the negative values of the root-polynomial expansion.
    random_state
        Seed of the folds shuffling.

    Returns
    -------
    :class:`numpy.ndarray`
        Concatenated estimates of shape (N, 9).

    Raises
    ------
    DimensionMismatchError
        If the samples shape differ.
    InvalidFoldsError
        If the folds count is not an integer in [2, N].
    """

    from sklearn.model_selection import KFold  # noqa: PLC0415

    settings = Structure(**SETTINGS_CORRECTION_ENSEMBLE_DEFAULT)
    settings.update(**kwargs)

    RGB = as_samples_array(RGB)
    XYZ = as_samples_array(XYZ, "XYZ")

    if RGB.shape != XYZ.shape or RGB.shape[1] != 3:
        raise DimensionMismatchError(
            f'"RGB" and "XYZ" must have the same (N, 3) shape: '
            f"{RGB.shape} != {XYZ.shape}!"
        )

    folds = _validate_folds(settings.folds, RGB.shape[0])

    estimates = np.zeros([RGB.shape[0], 9], dtype=DTYPE_FLOAT_DEFAULT)
    splitter = KFold(n_splits=folds, shuffle=True, random_state=settings.random_state)
    for fold, (train, test) in enumerate(splitter.split(RGB)):
        models = _fit_models(RGB[train], XYZ[train], settings)
        estimates[test] = evaluate_ensemble_features(
            RGB[test], models, settings.negative_values
        )

        LOGGER.debug(
            "Fold %s: fitted on %s samples, evaluated on %s samples.",
            fold,
            len(train),
            len(test),
        )

    return estimates


def matrix_correction_ensemble(
    RGB: ArrayLike, XYZ: ArrayLike, **kwargs: Any
) -> ModelsEnsemble:
    """
    Fit the ensemble colour correction mapping specified *RGB* samples to
    specified *CIE XYZ* tristimulus values.

    The process is as follows:

    -   The homography, linear and root-polynomial corrections are fitted on
        all the samples.
    -   Their concatenated estimates are evaluated on the samples, or
        out-of-fold if ``folds`` is greater than 1.
    -   The ensemble matrix is solved by least squares from the concatenated
        estimates to the reference tristimulus values.

    Parameters
    ----------
    RGB
        *RGB* samples of shape (N, 3).
    XYZ
        Reference *CIE XYZ* tristimulus values of shape (N, 3).

    Other Parameters
    ----------------
    degree
        Root-polynomial degree in [1, 4].
    ensemble_cond
        Relative cutoff of the singular values of the concatenated estimates
        when solving the ensemble matrix, the estimates of the three
        corrections being close to collinear.
    folds
        Folds count for the out-of-fold estimates, an integer in [2, N]
        requiring *scikit-learn*. *None* or 1 fits the ensemble matrix on the
        in-sample estimates of the corrections fitted on all the samples.
    homography_iterations
        Maximum iterations count of the homography fitting.
    homography_tolerance
        Convergence tolerance of the homography fitting.
    negative_values
        Policy for the negative values of the root-polynomial expansion:
        *Raise* or *Clip*.
    random_state
        Seed of the folds shuffling.

    Returns
    -------
    :class:`colour_correction_ensemble.ModelsEnsemble`
        Fitted models.

    Raises
    ------
    DimensionMismatchError
        If the samples shape differ.
    InvalidFoldsError
        If the folds count is neither *None*, 1 nor an integer in [2, N].
    """

    settings = Structure(**SETTINGS_CORRECTION_ENSEMBLE_DEFAULT)
    settings.update(**kwargs)

    RGB = as_samples_array(RGB)
    XYZ = as_samples_array(XYZ, "XYZ")

    if RGB.shape != XYZ.shape or RGB.shape[1] != 3:
        raise DimensionMismatchError(
            f'"RGB" and "XYZ" must have the same (N, 3) shape: '
            f"{RGB.shape} != {XYZ.shape}!"
        )

    in_sample = _is_in_sample(settings.folds)
    if not in_sample:
        _validate_folds(settings.folds, RGB.shape[0])

    models = _fit_models(RGB, XYZ, settings)

    if in_sample:
        estimates = evaluate_ensemble_features(RGB, models, settings.negative_values)
    else:
        estimates = features_ensemble_cross_validated(RGB, XYZ, **settings)

    ensemble = lstsq(estimates, XYZ, cond=settings.ensemble_cond)[0]

    LOGGER.debug(
        "Ensemble correction fitted: samples=%s, degree=%s, folds=%s.",
        RGB.shape[0],
        settings.degree,
        settings.folds,
    )

    return replace(models, ensemble=ensemble)
