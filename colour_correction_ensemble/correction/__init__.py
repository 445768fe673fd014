"""
Correction
==========

Colour correction algorithms and utilities.

This subpackage provides the root-polynomial expansion, the homography,
linear and root-polynomial corrections, and their ensemble combination,
together with evaluation and plotting utilities.
"""

from .common import (
    DTYPE_FLOAT_DEFAULT,
    SETTINGS_CORRECTION_ENSEMBLE_DEFAULT,
    ColourCorrectionError,
    DimensionMismatchError,
    InvalidDegreeError,
    InvalidFoldsError,
    NegativeValuesError,
    as_matrix_array,
    as_samples_array,
    handle_negative_values,
)

# isort: split

from .root_polynomial import (
    TERMS_ROOT_POLYNOMIAL,
    apply_correction_root_polynomial,
    degree_root_polynomial,
    expand_root_polynomial,
    matrix_correction_root_polynomial,
    terms_root_polynomial,
)

# isort: split

from .linear import (
    apply_correction_linear,
    matrix_correction_linear,
    validate_correction_3x3,
)

# isort: split

from .homography import (
    apply_correction_homography,
    matrix_correction_homography,
)

# isort: split

from .ensemble import (
    ModelsEnsemble,
    apply_correction_ensemble,
    blend_ensemble,
    evaluate_ensemble_features,
    features_ensemble_cross_validated,
    matrix_correction_ensemble,
)

# isort: split

from .evaluation import (
    CCS_ILLUMINANT_EVALUATION_DEFAULT,
    DataCorrectionEvaluation,
    evaluate_correction,
)
from .plotting import plot_correction_results

__all__ = [
    "DTYPE_FLOAT_DEFAULT",
    "SETTINGS_CORRECTION_ENSEMBLE_DEFAULT",
    "ColourCorrectionError",
    "DimensionMismatchError",
    "InvalidDegreeError",
    "InvalidFoldsError",
    "NegativeValuesError",
    "as_matrix_array",
    "as_samples_array",
    "handle_negative_values",
]
__all__ += [
    "TERMS_ROOT_POLYNOMIAL",
    "apply_correction_root_polynomial",
    "degree_root_polynomial",
    "expand_root_polynomial",
    "matrix_correction_root_polynomial",
    "terms_root_polynomial",
]
__all__ += [
    "apply_correction_linear",
    "matrix_correction_linear",
    "validate_correction_3x3",
]
__all__ += [
    "apply_correction_homography",
    "matrix_correction_homography",
]
__all__ += [
    "ModelsEnsemble",
    "apply_correction_ensemble",
    "blend_ensemble",
    "evaluate_ensemble_features",
    "features_ensemble_cross_validated",
    "matrix_correction_ensemble",
]
__all__ += [
    "CCS_ILLUMINANT_EVALUATION_DEFAULT",
    "DataCorrectionEvaluation",
    "evaluate_correction",
]
__all__ += [
    "plot_correction_results",
]
