"""
Colour Correction Ensemble - Command Line
=========================================

Defines the scripts fitting the ensemble colour correction from colour chart
calibration data and applying it to camera *RGB* samples.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from colour_correction_ensemble.correction import (
    ColourCorrectionError,
    DimensionMismatchError,
    apply_correction_ensemble,
    apply_correction_homography,
    apply_correction_linear,
    apply_correction_root_polynomial,
    evaluate_correction,
    matrix_correction_ensemble,
    plot_correction_results,
)
from colour_correction_ensemble.io import (
    read_calibration_data,
    read_models_ensemble,
    read_RGB,
    write_models_ensemble,
    write_XYZ,
)

__author__ = "Laboratorio de Arqueología Digital UC"
__copyright__ = "Copyright 2018 Laboratorio de Arqueología Digital UC"
__license__ = "BSD-3-Clause - https://opensource.org/licenses/BSD-3-Clause"
__maintainer__ = "Laboratorio de Arqueología Digital UC"
__email__ = "victor.mendez@uc.cl"
__status__ = "Development"

__all__ = ["fit", "apply", "main"]

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
LOGGER = logging.getLogger(__name__)


def fit(
    calibration_path: Path,
    output_path: Path,
    degree: int = 2,
    folds: int | None = None,
    random_state: int | None = None,
    plot_path: Path | None = None,
    swatches_horizontal: int = 6,
    swatches_vertical: int = 4,
) -> dict:
    """Fits the ensemble correction and reports Delta E 2000 per method."""
    LOGGER.info("=== AJUSTANDO CORRECCIÓN: %s ===", calibration_path.name)

    RGB, XYZ = read_calibration_data(calibration_path)
    LOGGER.info("Muestras de calibración: %d", RGB.shape[0])

    swatches = swatches_horizontal * swatches_vertical
    if plot_path is not None and RGB.shape[0] != swatches:
        raise DimensionMismatchError(
            f"{RGB.shape[0]} muestras no coinciden con la carta de "
            f"{swatches_vertical}x{swatches_horizontal} parches"
        )

    models = matrix_correction_ensemble(
        RGB, XYZ, degree=degree, folds=folds, random_state=random_state
    )

    estimates = {
        "Homografía": apply_correction_homography(RGB, models.homography),
        "Lineal": apply_correction_linear(RGB, models.linear),
        "Raíz-Polinomial": apply_correction_root_polynomial(
            RGB, models.root_polynomial
        ),
        "Ensamble": apply_correction_ensemble(RGB, models),
    }

    results = {}
    for method_name, XYZ_corrected in estimates.items():
        evaluation = evaluate_correction(XYZ_corrected, XYZ)
        results[method_name] = evaluation
        LOGGER.info(
            "    [%s] Delta E 2000: Promedio=%.2f, Mediana=%.2f, P95=%.2f, Max=%.2f",
            method_name,
            evaluation.mean,
            evaluation.median,
            evaluation.percentile_95,
            evaluation.maximum,
        )

    if plot_path is not None:
        figure, _axes = plot_correction_results(
            estimates["Ensamble"],
            XYZ,
            results["Ensamble"].delta_E,
            swatches_horizontal,
            swatches_vertical,
            filename=plot_path,
        )
        plt.close(figure)
        LOGGER.info("Resultado de corrección guardado en: %s", plot_path)

    write_models_ensemble(output_path, models)
    LOGGER.info("Modelos guardados en: %s", output_path)

    return results


def apply(models_path: Path, input_path: Path, output_path: Path) -> np.ndarray:
    """Applies fitted ensemble models to RGB samples (or pre-combined estimates)."""
    models = read_models_ensemble(models_path)
    samples = read_RGB(input_path)

    LOGGER.info(
        "Aplicando corrección (grado %d) a %d muestras...",
        models.degree,
        samples.shape[0],
    )
    XYZ = apply_correction_ensemble(samples, models)

    write_XYZ(output_path, XYZ)
    LOGGER.info("XYZ guardado en: %s", output_path)

    return XYZ


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Corrección de color por ensamble "
            "(homografía, lineal, raíz-polinomial)"
        )
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_fit = subparsers.add_parser("fit", help="Ajusta los modelos de corrección")
    parser_fit.add_argument(
        "calibration", type=Path, help="Datos de calibración (.npz o .csv R,G,B,X,Y,Z)"
    )
    parser_fit.add_argument(
        "-o", "--output", type=Path, required=True, help="Archivo .npz de modelos"
    )
    parser_fit.add_argument(
        "--degree", type=int, default=2, help="Grado raíz-polinomial (1-4)"
    )
    parser_fit.add_argument(
        "--folds", type=int, default=None, help="Folds para el ajuste del ensamble"
    )
    parser_fit.add_argument("--seed", type=int, default=None, help="Semilla de folds")
    parser_fit.add_argument(
        "--plot", type=Path, default=None, help="Imagen .png de resultados"
    )
    parser_fit.add_argument("--swatches-horizontal", type=int, default=6)
    parser_fit.add_argument("--swatches-vertical", type=int, default=4)

    parser_apply = subparsers.add_parser(
        "apply", help="Aplica los modelos de corrección"
    )
    parser_apply.add_argument("models", type=Path, help="Archivo .npz de modelos")
    parser_apply.add_argument("input", type=Path, help="Muestras RGB (.csv)")
    parser_apply.add_argument(
        "-o", "--output", type=Path, required=True, help="Archivo .csv XYZ"
    )

    args = parser.parse_args(argv)

    try:
        if args.command == "fit":
            fit(
                args.calibration,
                args.output,
                degree=args.degree,
                folds=args.folds,
                random_state=args.seed,
                plot_path=args.plot,
                swatches_horizontal=args.swatches_horizontal,
                swatches_vertical=args.swatches_vertical,
            )
        else:
            apply(args.models, args.input, args.output)
    except (FileNotFoundError, KeyError, ImportError, ColourCorrectionError) as error:
        LOGGER.error("Error: %s", error)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
