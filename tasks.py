"""Invoke - Tareas de Mantenimiento
==================================
"""

import shutil
from pathlib import Path

from invoke.tasks import task

# Rutas del proyecto
BASE_DIR = Path(__file__).parent
PACKAGE_DIR = BASE_DIR / "colour_correction_ensemble"
RESULTS_DIR = BASE_DIR / "correction_results"


def _delete_pattern(pattern: str, recursive: bool = True):
    """Borra archivos o carpetas que coinciden con el patrón."""
    for path in BASE_DIR.rglob(pattern):
        if path.is_dir() and recursive:
            print(f"Borrando directorio: {path}")
            shutil.rmtree(path)
        elif path.is_file():
            print(f"Borrando archivo: {path}")
            path.unlink()


@task
def clean(ctx, bytecode=True, results=False, pytest=True, build=False):
    """
    Limpia archivos temporales, modelos y gráficos generados.

    Parámetros:
    -----------
    bytecode : bool
        Borra __pycache__ y .pyc (Default: True).
    results : bool
        Borra la carpeta de modelos .npz y gráficos de corrección
        (Default: False).
    pytest : bool
        Borra caché de pytest (Default: True).
    build : bool
        Borra build/, dist/ y *.egg-info (Default: False).
    """
    print(">>> Iniciando Limpieza...")

    if bytecode:
        _delete_pattern("__pycache__")
        _delete_pattern("*.pyc", recursive=False)

    if pytest:
        _delete_pattern(".pytest_cache")

    if build:
        for directory in ("build", "dist"):
            if (BASE_DIR / directory).exists():
                shutil.rmtree(BASE_DIR / directory)
        _delete_pattern("*.egg-info")

    if results:
        if RESULTS_DIR.exists():
            shutil.rmtree(RESULTS_DIR)
            print(f"    Eliminado: {RESULTS_DIR}")
        else:
            print("    Nada que limpiar en resultados.")

    print(">>> Limpieza Finalizada.")


@task
def tests(ctx, optional=True):
    """
    Ejecuta las pruebas unitarias con pytest.

    Parámetros:
    -----------
    optional : bool
        Incluye las pruebas que requieren scikit-learn (Default: True).
    """
    print(f">>> Ejecutando pruebas de {PACKAGE_DIR.name}...")
    arguments = "" if optional else " -k 'not cross_validated'"
    ctx.run(f"pytest {PACKAGE_DIR}{arguments}")


@task
def demo(ctx, calibration, degree=2, folds=0):
    """
    Ajusta la corrección sobre datos de calibración y guarda modelos y gráfico
    en la carpeta de resultados.
    """
    RESULTS_DIR.mkdir(exist_ok=True)
    stem = Path(calibration).stem
    arguments = f" --folds {folds}" if folds else ""
    ctx.run(
        f"colour-correction-ensemble fit {calibration}"
        f" -o {RESULTS_DIR / (stem + '_models.npz')}"
        f" --plot {RESULTS_DIR / (stem + '_correction.png')}"
        f" --degree {degree}{arguments}"
    )


@task
def requirements(ctx):
    """
    Exporta requirements.txt desde pyproject.toml usando uv.
    """
    print(">>> Exportando requirements.txt...")
    ctx.run("uv export --no-hashes --all-extras --no-dev > requirements.txt")
    print(">>> requirements.txt generado exitosamente.")
