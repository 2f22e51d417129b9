"""
Exceptions raised by MC-Ensemble.

Sub-classifier training errors are not wrapped: whatever the base
classifier raises from ``fit`` reaches the caller unchanged.
"""

from sklearn.exceptions import NotFittedError


class ConfigurationError(ValueError):
    """Invalid or missing configuration (no base classifier, unknown method, ...)."""


class CodeSizeError(ConfigurationError):
    """A code strategy was asked for a matrix too large to build."""


class UsageError(NotFittedError):
    """Prediction or reporting requested before the model was trained."""
