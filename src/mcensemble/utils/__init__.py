"""
MC-Ensemble Utilities

Helpers shared by the trainer and the predictor.
"""

from .proba import align_proba, binary_proba

__all__ = ["align_proba", "binary_proba"]
