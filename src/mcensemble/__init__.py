"""
MC-Ensemble: Multi-Class Classification from Binary Classifiers

A framework for decomposing multi-class problems into binary sub-problems,
training any 2-class probabilistic classifier on each of them, and decoding
the sub-classifiers' outputs back into a class distribution.

This package implements:
- Code strategies: one-vs-all, random and exhaustive error-correcting
  output codes, and one-vs-one class pairs
- Dataset transforms projecting the data onto each binary sub-problem
- Pairwise voting and soft code decoding with a fallback classifier
"""

__version__ = "0.1.0"

# Core data structures
from .data import LabeledDataset, IndicatorTransform, PairTransform, TwoClassSchema

# Code strategies
from .codes import (
    CodeMethod,
    one_vs_all_code,
    exhaustive_code,
    random_code,
    one_vs_one_pairs,
    generate_code,
    is_valid_code,
)

# Ensemble
from .ensemble import (
    MultiClassClassifier,
    TrainedModel,
    SubProblem,
    train_model,
    predict_distribution,
)

# Configuration and errors
from .config import MultiClassConfig, get_base_classifier
from .errors import ConfigurationError, CodeSizeError, UsageError

__all__ = [
    # Data
    "LabeledDataset",
    "IndicatorTransform",
    "PairTransform",
    "TwoClassSchema",
    
    # Codes
    "CodeMethod",
    "one_vs_all_code",
    "exhaustive_code",
    "random_code",
    "one_vs_one_pairs",
    "generate_code",
    "is_valid_code",
    
    # Ensemble
    "MultiClassClassifier",
    "TrainedModel",
    "SubProblem",
    "train_model",
    "predict_distribution",
    
    # Configuration
    "MultiClassConfig",
    "get_base_classifier",
    
    # Errors
    "ConfigurationError",
    "CodeSizeError",
    "UsageError",
]
