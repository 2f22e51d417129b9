"""
MC-Ensemble Data Structures

This module contains the dataset container and the transforms that project
it onto binary sub-problems.
"""

from .dataset import LabeledDataset
from .transform import TwoClassSchema, IndicatorTransform, PairTransform
from .synthetic import generate_multiclass_data

__all__ = [
    # Data structures
    "LabeledDataset",
    # Transforms
    "TwoClassSchema",
    "IndicatorTransform",
    "PairTransform",
    # Synthetic data generation
    "generate_multiclass_data",
]
