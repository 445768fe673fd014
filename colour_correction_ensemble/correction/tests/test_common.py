"""
Define the unit tests for the
:mod:`colour_correction_ensemble.correction.common` module.
"""

from __future__ import annotations

import numpy as np
import pytest

from colour_correction_ensemble.correction.common import (
    ColourCorrectionError,
    DimensionMismatchError,
    InvalidDegreeError,
    InvalidFoldsError,
    NegativeValuesError,
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
    "TestExceptions",
    "TestAsSamplesArray",
    "TestAsMatrixArray",
    "TestHandleNegativeValues",
]


class TestExceptions:
    """Define the colour correction exceptions hierarchy unit tests methods."""

    def test_exceptions(self) -> None:
        """Test that the exceptions derive from :class:`ValueError`."""

        for exception in (
            InvalidDegreeError,
            DimensionMismatchError,
            NegativeValuesError,
            InvalidFoldsError,
        ):
            assert issubclass(exception, ColourCorrectionError)
            assert issubclass(exception, ValueError)


class TestAsSamplesArray:
    """
    Define :func:`colour_correction_ensemble.correction.common.as_samples_array`
    definition unit tests methods.
    """

    def test_as_samples_array(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.common.\
as_samples_array` definition unit tests methods.
        """

        samples = as_samples_array([0.2, 0.4, 0.6])
        assert samples.shape == (1, 3)
        assert samples.dtype == np.float64

        assert as_samples_array(np.ones([5, 9], dtype=np.int32)).shape == (5, 9)

    def test_raise_exception_as_samples_array(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.common.\
as_samples_array` definition raised exception unit tests methods.
        """

        pytest.raises(DimensionMismatchError, as_samples_array, np.ones([2, 2, 3]))


class TestAsMatrixArray:
    """
    Define :func:`colour_correction_ensemble.correction.common.as_matrix_array`
    definition unit tests methods.
    """

    def test_as_matrix_array(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.common.\
as_matrix_array` definition unit tests methods.
        """

        assert as_matrix_array(np.identity(3)).shape == (3, 3)
        assert as_matrix_array(np.ones([22, 3])).shape == (22, 3)

    def test_raise_exception_as_matrix_array(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.common.\
as_matrix_array` definition raised exception unit tests methods.
        """

        pytest.raises(DimensionMismatchError, as_matrix_array, np.ones(3))
        pytest.raises(DimensionMismatchError, as_matrix_array, np.ones([3, 4]))


class TestHandleNegativeValues:
    """
    Define :func:`colour_correction_ensemble.correction.common.\
handle_negative_values` definition unit tests methods.
    """

    def test_handle_negative_values(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.common.\
handle_negative_values` definition unit tests methods.
        """

        RGB = np.array([[0.1, 0.2, 0.3]])
        np.testing.assert_equal(handle_negative_values(RGB), RGB)

        np.testing.assert_equal(
            handle_negative_values(np.array([[-0.1, 0.2, 0.3]]), "Clip"),
            np.array([[0.0, 0.2, 0.3]]),
        )

    def test_raise_exception_handle_negative_values(self) -> None:
        """
        Define :func:`colour_correction_ensemble.correction.common.\
handle_negative_values` definition raised exception unit tests methods.
        """

        RGB = np.array([[0.1, 0.2, 0.3], [0.1, -0.2, 0.3]])

        with pytest.raises(NegativeValuesError, match=r"\[1\]"):
            handle_negative_values(RGB, "Raise")

        pytest.raises(ValueError, handle_negative_values, RGB, "Wrap")
