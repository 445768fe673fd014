"""
Colour - Correction Ensemble
============================

Ensemble colour correction algorithms for *Python*.

This package fits and applies colour corrections mapping camera *RGB*
responses to *CIE XYZ* tristimulus values from colour chart calibration
data: root-polynomial expansion, homography, linear and root-polynomial
corrections, and their blending through a learned ensemble matrix.

Subpackages
-----------
-   correction : Colour correction algorithms and utilities.
"""

from __future__ import annotations

import contextlib
import os
import subprocess

import colour
import numpy as np

from colour_correction_ensemble import utilities  # noqa: F401

# isort: split

from .correction import (
    SETTINGS_CORRECTION_ENSEMBLE_DEFAULT,
    TERMS_ROOT_POLYNOMIAL,
    ColourCorrectionError,
    DataCorrectionEvaluation,
    DimensionMismatchError,
    InvalidDegreeError,
    InvalidFoldsError,
    ModelsEnsemble,
    NegativeValuesError,
    apply_correction_ensemble,
    apply_correction_homography,
    apply_correction_linear,
    apply_correction_root_polynomial,
    blend_ensemble,
    degree_root_polynomial,
    evaluate_correction,
    evaluate_ensemble_features,
    expand_root_polynomial,
    features_ensemble_cross_validated,
    matrix_correction_ensemble,
    matrix_correction_homography,
    matrix_correction_linear,
    matrix_correction_root_polynomial,
    plot_correction_results,
    terms_root_polynomial,
)

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "SETTINGS_CORRECTION_ENSEMBLE_DEFAULT",
    "TERMS_ROOT_POLYNOMIAL",
    "ColourCorrectionError",
    "DataCorrectionEvaluation",
    "DimensionMismatchError",
    "InvalidDegreeError",
    "InvalidFoldsError",
    "ModelsEnsemble",
    "NegativeValuesError",
    "apply_correction_ensemble",
    "apply_correction_homography",
    "apply_correction_linear",
    "apply_correction_root_polynomial",
    "blend_ensemble",
    "degree_root_polynomial",
    "evaluate_correction",
    "evaluate_ensemble_features",
    "expand_root_polynomial",
    "features_ensemble_cross_validated",
    "matrix_correction_ensemble",
    "matrix_correction_homography",
    "matrix_correction_linear",
    "matrix_correction_root_polynomial",
    "plot_correction_results",
    "terms_root_polynomial",
]

__application_name__ = "Colour - Correction Ensemble"

__version__ = "0.1.0"

try:
    _version = (
        subprocess.check_output(
            ["git", "describe"],  # noqa: S607
            cwd=os.path.dirname(__file__),
            stderr=subprocess.STDOUT,
        )
        .strip()
        .decode("utf-8")
    )
except Exception:  # noqa: BLE001
    _version = __version__

colour.utilities.ANCILLARY_COLOUR_SCIENCE_PACKAGES[  # pyright: ignore
    "colour-correction-ensemble"
] = _version

del _version

# TODO: Remove legacy printing support when deemed appropriate.
with contextlib.suppress(TypeError):
    np.set_printoptions(legacy="1.13")
