from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from colour.utilities import as_float_array

from colour_correction_ensemble.correction import (
    DimensionMismatchError,
    ModelsEnsemble,
    as_samples_array,
)

__all__ = [
    "read_models_ensemble",
    "write_models_ensemble",
    "read_calibration_data",
    "read_RGB",
    "write_XYZ",
]

LOGGER = logging.getLogger(__name__)

_KEYS_MODELS_ENSEMBLE = ("homography", "linear", "root_polynomial", "ensemble")


def _existing_path(path: str | Path) -> Path:
    path_obj = Path(path)
    if not path_obj.exists():
        raise FileNotFoundError(f"{path} no existe")

    return path_obj


def write_models_ensemble(path: str | Path, models: ModelsEnsemble) -> Path:
    """
    Writes the fitted ensemble models to a compressed NPZ file.
    The ensemble matrix must be defined.
    """
    if models.ensemble is None:
        raise ValueError('"ensemble" matrix is undefined, the models are not fitted!')

    path_obj = Path(path)
    with path_obj.open("wb") as file:
        np.savez_compressed(
            file, **{key: getattr(models, key) for key in _KEYS_MODELS_ENSEMBLE}
        )

    LOGGER.debug("Models written to %s", path_obj)

    return path_obj


def read_models_ensemble(path: str | Path) -> ModelsEnsemble:
    """
    Reads the ensemble models written by `write_models_ensemble`.
    """
    path_obj = _existing_path(path)

    with np.load(path_obj) as data:
        missing = [key for key in _KEYS_MODELS_ENSEMBLE if key not in data.files]
        if missing:
            raise KeyError(f"{path} no contiene las matrices {missing}")

        return ModelsEnsemble(**{key: data[key] for key in _KEYS_MODELS_ENSEMBLE})


def read_calibration_data(path: str | Path) -> tuple[np.ndarray, np.ndarray]:
    """
    Reads the paired calibration samples (RGB, XYZ).
    Accepts a NPZ file with "RGB" and "XYZ" arrays, or a CSV file with the
    header R,G,B,X,Y,Z.
    """
    path_obj = _existing_path(path)

    if path_obj.suffix.lower() == ".npz":
        with np.load(path_obj) as data:
            RGB, XYZ = data["RGB"], data["XYZ"]
    else:
        table = np.genfromtxt(path_obj, delimiter=",", names=True)
        try:
            RGB = np.column_stack([table["R"], table["G"], table["B"]])
            XYZ = np.column_stack([table["X"], table["Y"], table["Z"]])
        except ValueError as error:
            raise KeyError(
                f"{path} debe tener las columnas R,G,B,X,Y,Z"
            ) from error

    RGB = as_samples_array(RGB)
    XYZ = as_samples_array(XYZ, "XYZ")

    if RGB.shape != XYZ.shape or RGB.shape[1] != 3:
        raise DimensionMismatchError(
            f"Muestras RGB {RGB.shape} y XYZ {XYZ.shape} no coinciden"
        )

    return RGB, XYZ


def read_RGB(path: str | Path) -> np.ndarray:
    """
    Reads RGB samples (or pre-combined estimates) from a CSV file with a
    single header row.
    """
    path_obj = _existing_path(path)

    return as_samples_array(np.loadtxt(path_obj, delimiter=",", skiprows=1, ndmin=2))


def write_XYZ(path: str | Path, XYZ: np.ndarray) -> Path:
    """
    Writes XYZ tristimulus values to a CSV file with the header X,Y,Z.
    """
    path_obj = Path(path)
    np.savetxt(
        path_obj,
        as_float_array(XYZ),
        delimiter=",",
        header="X,Y,Z",
        comments="",
    )

    return path_obj
