"""
Define the unit tests for the
:mod:`colour_correction_ensemble.correction.ensemble` module.
"""

from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from colour.constants import TOLERANCE_ABSOLUTE_TESTS

from colour_correction_ensemble.correction.common import (
    DimensionMismatchError,
    InvalidFoldsError,
)
from colour_correction_ensemble.correction.ensemble import (
    ModelsEnsemble,
    apply_correction_ensemble,
    blend_ensemble,
    evaluate_ensemble_features,
    features_ensemble_cross_validated,
    matrix_correction_ensemble,
)
from colour_correction_ensemble.correction.linear import (
    apply_correction_linear,
)
from colour_correction_ensemble.correction.root_polynomial import (
    expand_root_polynomial,
)

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "MATRIX_RGB_TO_XYZ",
    "MATRIX_ENSEMBLE_AVERAGE",
    "TestModelsEnsemble",
    "TestEvaluateEnsembleFeatures",
    "TestBlendEnsemble",
    "TestApplyCorrectionEnsemble",
    "TestFeaturesEnsembleCrossValidated",
    "TestMatrixCorrectionEnsemble",
]

MATRIX_RGB_TO_XYZ = np.array(
    [
        [0.4124, 0.2126, 0.0193],
        [0.3576, 0.7152, 0.1192],
        [0.1805, 0.0722, 0.9505],
    ]
)

MATRIX_ENSEMBLE_AVERAGE = np.vstack([np.identity(3) / 3] * 3)


def _models_identity(ensemble: np.ndarray | None = MATRIX_ENSEMBLE_AVERAGE):
    return ModelsEnsemble(np.identity(3), np.identity(3), np.identity(3), ensemble)


class TestModelsEnsemble:
    """
    Define :class:`colour_correction_ensemble.correction.ensemble.ModelsEnsemble`
    class unit tests methods.
    """

    def test_models_ensemble(self) -> None:
        """Test :class:`ModelsEnsemble` class creation."""

        root_polynomial = np.ones([13, 3])
        models = ModelsEnsemble(
            np.identity(3), np.identity(3), root_polynomial, np.ones([9, 3])
        )

        assert models.degree == 3
        assert models.root_polynomial.dtype == np.float64
        assert (
            ModelsEnsemble(np.identity(3), np.identity(3), np.ones([6, 3])).ensemble
            is None
        )

        root_polynomial[0, 0] = 2
        assert models.root_polynomial[0, 0] == 1

    def test_immutability_models_ensemble(self) -> None:
        """Test :class:`ModelsEnsemble` class immutability."""

        models = _models_identity()

        with pytest.raises(ValueError):
            models.linear[0, 0] = 2

        with pytest.raises(dataclasses.FrozenInstanceError):
            models.linear = np.zeros([3, 3])  # pyright: ignore


class TestEvaluateEnsembleFeatures:
    """
    Define :func:`colour_correction_ensemble.correction.ensemble.\
evaluate_ensemble_features` definition unit tests methods.
    """

    def test_evaluate_ensemble_features(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
evaluate_ensemble_features` definition unit tests methods.
        """

        RGB = np.random.default_rng(4).random((24, 3))

        np.testing.assert_allclose(
            evaluate_ensemble_features(RGB, _models_identity()),
            np.hstack([RGB, RGB, RGB]),
            atol=TOLERANCE_ABSOLUTE_TESTS,
        )

    def test_order_evaluate_ensemble_features(self) -> None:
        """
        Test :func:`colour_correction_ensemble.correction.ensemble.\
evaluate_ensemble_features` definition order: homography, linear,
        root-polynomial.
        """

        RGB = np.random.default_rng(8).random((6, 3))
        root_polynomial = np.random.default_rng(16).random((6, 3))
        models = ModelsEnsemble(
            2 * np.identity(3), 3 * np.identity(3), root_polynomial
        )

        features = evaluate_ensemble_features(RGB, models)

        assert features.shape == (6, 9)
        np.testing.assert_allclose(features[:, 0:3], 2 * RGB)
        np.testing.assert_allclose(features[:, 3:6], 3 * RGB)
        np.testing.assert_allclose(
            features[:, 6:9], expand_root_polynomial(RGB, 2) @ root_polynomial
        )

    def test_raise_exception_evaluate_ensemble_features(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
evaluate_ensemble_features` definition raised exception unit tests methods.
        """

        pytest.raises(
            DimensionMismatchError,
            evaluate_ensemble_features,
            np.ones([2, 9]),
            _models_identity(),
        )


class TestBlendEnsemble:
    """
    Define :func:`colour_correction_ensemble.correction.ensemble.blend_ensemble`
    definition unit tests methods.
    """

    def test_blend_ensemble(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
blend_ensemble` definition unit tests methods.
        """

        estimates = np.random.default_rng(4).random((5, 9))
        ensemble = np.random.default_rng(8).random((9, 3))

        np.testing.assert_allclose(
            blend_ensemble(estimates, ensemble), estimates @ ensemble
        )

    def test_raise_exception_blend_ensemble(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
blend_ensemble` definition raised exception unit tests methods.
        """

        pytest.raises(
            DimensionMismatchError, blend_ensemble, np.ones([5, 9]), np.ones([6, 3])
        )

        pytest.raises(ValueError, blend_ensemble, np.ones([5, 9]), None)


class TestApplyCorrectionEnsemble:
    """
    Define :func:`colour_correction_ensemble.correction.ensemble.\
apply_correction_ensemble` definition unit tests methods.
    """

    def test_apply_correction_ensemble(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
apply_correction_ensemble` definition unit tests methods.
        """

        RGB = np.random.default_rng(4).random((24, 3))

        np.testing.assert_allclose(
            apply_correction_ensemble(RGB, _models_identity()),
            RGB,
            atol=TOLERANCE_ABSOLUTE_TESTS,
        )

    def test_pre_combined_apply_correction_ensemble(self) -> None:
        """
        Test :func:`colour_correction_ensemble.correction.ensemble.\
apply_correction_ensemble` definition with pre-combined estimates.
        """

        generator = np.random.default_rng(8)
        RGB = generator.random((24, 3))
        models = ModelsEnsemble(
            generator.random((3, 3)),
            generator.random((3, 3)),
            generator.random((22, 3)),
            generator.random((9, 3)),
        )

        estimates = evaluate_ensemble_features(RGB, models)

        np.testing.assert_allclose(
            apply_correction_ensemble(estimates, models),
            estimates @ models.ensemble,
        )
        np.testing.assert_allclose(
            apply_correction_ensemble(estimates, models),
            apply_correction_ensemble(RGB, models),
            atol=TOLERANCE_ABSOLUTE_TESTS,
        )

    def test_concurrent_apply_correction_ensemble(self) -> None:
        """
        Test :func:`colour_correction_ensemble.correction.ensemble.\
apply_correction_ensemble` definition concurrent calls sharing the models.
        """

        generator = np.random.default_rng(16)
        models = _models_identity(generator.random((9, 3)))
        samples = [generator.random((32, 3)) for _ in range(8)]

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(
                executor.map(
                    lambda RGB: apply_correction_ensemble(RGB, models), samples
                )
            )

        for RGB, XYZ in zip(samples, results):
            np.testing.assert_allclose(
                XYZ, apply_correction_ensemble(RGB, models)
            )

    def test_raise_exception_apply_correction_ensemble(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
apply_correction_ensemble` definition raised exception unit tests methods.
        """

        RGB = np.array([[0.2, 0.4, 0.6]])

        models = ModelsEnsemble(
            np.identity(3), np.identity(3), np.ones([7, 3]), MATRIX_ENSEMBLE_AVERAGE
        )
        pytest.raises(DimensionMismatchError, apply_correction_ensemble, RGB, models)

        models = _models_identity(np.ones([6, 3]))
        pytest.raises(DimensionMismatchError, apply_correction_ensemble, RGB, models)

        pytest.raises(
            DimensionMismatchError,
            apply_correction_ensemble,
            np.ones([2, 6]),
            _models_identity(),
        )

        pytest.raises(
            DimensionMismatchError,
            apply_correction_ensemble,
            np.ones([2, 2]),
            _models_identity(),
        )

        pytest.raises(
            ValueError, apply_correction_ensemble, RGB, _models_identity(None)
        )


class TestFeaturesEnsembleCrossValidated:
    """
    Define :func:`colour_correction_ensemble.correction.ensemble.\
features_ensemble_cross_validated` definition unit tests methods.
    """

    def test_features_ensemble_cross_validated(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
features_ensemble_cross_validated` definition unit tests methods.
        """

        pytest.importorskip("sklearn")

        RGB = np.random.default_rng(4).uniform(0.05, 1, (24, 3))
        XYZ = RGB @ MATRIX_RGB_TO_XYZ

        estimates = features_ensemble_cross_validated(
            RGB, XYZ, folds=4, random_state=0
        )

        assert estimates.shape == (24, 9)
        np.testing.assert_allclose(estimates[:, 3:6], XYZ, atol=1e-6)

    def test_raise_exception_features_ensemble_cross_validated(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
features_ensemble_cross_validated` definition raised exception unit tests
        methods.
        """

        pytest.importorskip("sklearn")

        RGB = np.random.default_rng(4).uniform(0.05, 1, (24, 3))
        XYZ = RGB @ MATRIX_RGB_TO_XYZ

        pytest.raises(InvalidFoldsError, features_ensemble_cross_validated, RGB, XYZ)

        for folds in (0, 1, 25, 2.5, True, "3"):
            pytest.raises(
                InvalidFoldsError,
                features_ensemble_cross_validated,
                RGB,
                XYZ,
                folds=folds,
            )

        pytest.raises(
            DimensionMismatchError,
            features_ensemble_cross_validated,
            RGB,
            XYZ[:12],
            folds=3,
        )


class TestMatrixCorrectionEnsemble:
    """
    Define :func:`colour_correction_ensemble.correction.ensemble.\
matrix_correction_ensemble` definition unit tests methods.
    """

    def test_matrix_correction_ensemble(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
matrix_correction_ensemble` definition unit tests methods.
        """

        RGB = np.random.default_rng(4).uniform(0.05, 1, (24, 3))
        XYZ = RGB @ MATRIX_RGB_TO_XYZ

        models = matrix_correction_ensemble(RGB, XYZ)

        assert models.homography.shape == (3, 3)
        assert models.linear.shape == (3, 3)
        assert models.root_polynomial.shape == (6, 3)
        assert models.ensemble is not None
        assert models.ensemble.shape == (9, 3)
        np.testing.assert_allclose(
            apply_correction_ensemble(RGB, models), XYZ, atol=1e-6
        )

    def test_non_linear_matrix_correction_ensemble(self) -> None:
        """
        Test :func:`colour_correction_ensemble.correction.ensemble.\
matrix_correction_ensemble` definition on non-linear data: the ensemble
        residual is not larger than the linear correction residual.
        """

        generator = np.random.default_rng(8)
        RGB = generator.uniform(0.05, 1, (48, 3))
        XYZ = expand_root_polynomial(RGB, 3) @ generator.uniform(0, 0.2, (13, 3))

        models = matrix_correction_ensemble(RGB, XYZ, degree=2)

        residual_ensemble = np.linalg.norm(apply_correction_ensemble(RGB, models) - XYZ)
        residual_linear = np.linalg.norm(
            apply_correction_linear(RGB, models.linear) - XYZ
        )

        assert models.degree == 2
        assert residual_ensemble <= residual_linear * (1 + 1e-6) + 1e-9

    def test_cross_validated_matrix_correction_ensemble(self) -> None:
        """
        Test :func:`colour_correction_ensemble.correction.ensemble.\
matrix_correction_ensemble` definition with out-of-fold estimates.
        """

        pytest.importorskip("sklearn")

        RGB = np.random.default_rng(16).uniform(0.05, 1, (24, 3))
        XYZ = RGB @ MATRIX_RGB_TO_XYZ

        models = matrix_correction_ensemble(
            RGB, XYZ, degree=3, folds=3, random_state=0
        )

        assert models.degree == 3
        assert models.ensemble is not None
        assert np.all(np.isfinite(models.ensemble))
        estimates = features_ensemble_cross_validated(
            RGB, XYZ, degree=3, folds=3, random_state=0
        )
        np.testing.assert_allclose(
            blend_ensemble(estimates, models.ensemble), XYZ, atol=1e-5
        )

    def test_single_fold_matrix_correction_ensemble(self) -> None:
        """
        Test :func:`colour_correction_ensemble.correction.ensemble.\
matrix_correction_ensemble` definition with a single fold: the ensemble
        matrix is fitted in-sample.
        """

        RGB = np.random.default_rng(32).uniform(0.05, 1, (24, 3))
        XYZ = RGB @ MATRIX_RGB_TO_XYZ

        np.testing.assert_allclose(
            matrix_correction_ensemble(RGB, XYZ, folds=1).ensemble,
            matrix_correction_ensemble(RGB, XYZ).ensemble,
            atol=TOLERANCE_ABSOLUTE_TESTS,
        )

    def test_raise_exception_matrix_correction_ensemble(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.ensemble.\
matrix_correction_ensemble` definition raised exception unit tests methods.
        """

        pytest.raises(
            DimensionMismatchError,
            matrix_correction_ensemble,
            np.ones([24, 3]),
            np.ones([12, 3]),
        )

        RGB = np.random.default_rng(64).uniform(0.05, 1, (24, 3))
        XYZ = RGB @ MATRIX_RGB_TO_XYZ

        for folds in (0, -2, 30, 2.5, True):
            pytest.raises(
                InvalidFoldsError,
                matrix_correction_ensemble,
                RGB,
                XYZ,
                folds=folds,
            )
