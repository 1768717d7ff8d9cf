"""NaN-aware statistics, correlation, DeLong AUC, linear algebra and distance helpers."""

__version__ = "0.1.0"
__all__ = ["auc", "basic", "correlation", "delong", "distance", "linalg"]