from .requirements import is_sklearn_installed

__all__ = [
    "is_sklearn_installed",
]
