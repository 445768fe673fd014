"""
Requirements Utilities
======================

Define the optional requirements of the package, registered with
:attr:`colour.utilities.requirements.REQUIREMENTS_TO_CALLABLE` so that
:func:`colour.utilities.required` can guard the definitions using them:

-   :func:`colour_correction_ensemble.utilities.is_sklearn_installed`
"""

from __future__ import annotations

from importlib.util import find_spec

import colour.utilities

__author__ = "Colour Developers"
__copyright__ = "Copyright 2018 Colour Developers"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Colour Developers"
__email__ = "colour-developers@colour-science.org"
__status__ = "Production"

__all__ = [
    "is_sklearn_installed",
]


def is_sklearn_installed(raise_exception: bool = False) -> bool:
    """
    Return whether *scikit-learn*, splitting the calibration samples into
    folds for the out-of-fold ensemble fitting, can be imported.

    The package is located without being imported.

    Parameters
    ----------
    raise_exception
        Whether to raise an exception if *scikit-learn* cannot be imported.

    Returns
    -------
    :class:`bool`
        Whether *scikit-learn* can be imported.

    Raises
    ------
    :class:`ImportError`
        If *scikit-learn* cannot be imported and ``raise_exception`` is set.
    """

    if find_spec("sklearn") is not None:
        return True

    if raise_exception:
        raise ImportError(
            '"scikit-learn" is required for the cross-validated ensemble '
            'fitting, install it with "pip install scikit-learn".'
        )

    return False


colour.utilities.requirements.REQUIREMENTS_TO_CALLABLE["scikit-learn"] = (
    is_sklearn_installed
)
