"""
Correction Evaluation
=====================

Define the objects to evaluate the colour difference between corrected and
reference tristimulus values:

-   :class:`colour_correction_ensemble.DataCorrectionEvaluation`
-   :func:`colour_correction_ensemble.evaluate_correction`
"""

from __future__ import annotations

import typing
from dataclasses import dataclass

import numpy as np
from colour import CCS_ILLUMINANTS, XYZ_to_Lab
from colour.difference import delta_E

if typing.TYPE_CHECKING:
    from colour.hints import ArrayLike, NDArrayFloat

from colour_correction_ensemble.correction.common import (
    DimensionMismatchError,
    as_samples_array,
)

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "CCS_ILLUMINANT_EVALUATION_DEFAULT",
    "DataCorrectionEvaluation",
    "evaluate_correction",
]

CCS_ILLUMINANT_EVALUATION_DEFAULT: NDArrayFloat = CCS_ILLUMINANTS[
    "CIE 1931 2 Degree Standard Observer"
]["D65"]
"""Default illuminant chromaticity coordinates for the *CIE L\\*a\\*b\\** conversion."""


@dataclass
class DataCorrectionEvaluation:
    """
    Colour difference statistics of a colour correction.

    Parameters
    ----------
    delta_E
        Colour difference of each sample.
    mean
        Mean colour difference.
    median
        Median colour difference.
    percentile_95
        95th percentile of the colour difference.
    maximum
        Maximum colour difference.
    """

    delta_E: NDArrayFloat
    mean: float
    median: float
    percentile_95: float
    maximum: float


def evaluate_correction(
    XYZ: ArrayLike,
    XYZ_reference: ArrayLike,
    illuminant: ArrayLike = CCS_ILLUMINANT_EVALUATION_DEFAULT,
    method: str = "CIE 2000",
) -> DataCorrectionEvaluation:
    """
    Compute the colour difference statistics between specified corrected and
    reference *CIE XYZ* tristimulus values.

    Parameters
    ----------
    XYZ
        Corrected *CIE XYZ* tristimulus values of shape (N, 3).
    XYZ_reference
        Reference *CIE XYZ* tristimulus values of shape (N, 3).
    illuminant
        Reference illuminant chromaticity coordinates used for the
        *CIE L\\*a\\*b\\** conversion.
    method
        Colour difference method, see :func:`colour.delta_E`.

    Returns
    -------
    :class:`colour_correction_ensemble.DataCorrectionEvaluation`
        Colour difference statistics.

    Raises
    ------
    DimensionMismatchError
        If the tristimulus values shape differ.
    """

    XYZ = as_samples_array(XYZ, "XYZ")
    XYZ_reference = as_samples_array(XYZ_reference, "XYZ_reference")

    if XYZ.shape != XYZ_reference.shape:
        raise DimensionMismatchError(
            f'"XYZ" and "XYZ_reference" shape differ: '
            f"{XYZ.shape} != {XYZ_reference.shape}!"
        )

    difference = np.atleast_1d(
        delta_E(
            XYZ_to_Lab(XYZ, illuminant),
            XYZ_to_Lab(XYZ_reference, illuminant),
            method=method,
        )
    )

    return DataCorrectionEvaluation(
        delta_E=difference,
        mean=float(np.mean(difference)),
        median=float(np.median(difference)),
        percentile_95=float(np.percentile(difference, 95)),
        maximum=float(np.max(difference)),
    )
