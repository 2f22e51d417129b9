"""
MC-Ensemble Code Strategies

Code matrices and pair lists describing how a multi-class problem is split
into binary sub-problems.
"""

from .matrices import (
    CodeMethod,
    MAX_EXHAUSTIVE_CLASSES,
    one_vs_all_code,
    exhaustive_code,
    random_code,
    one_vs_one_pairs,
    generate_code,
    is_valid_code,
    positive_indices,
    format_indices,
    format_code,
)

__all__ = [
    "CodeMethod",
    "MAX_EXHAUSTIVE_CLASSES",
    # Generators
    "one_vs_all_code",
    "exhaustive_code",
    "random_code",
    "one_vs_one_pairs",
    "generate_code",
    # Inspection
    "is_valid_code",
    "positive_indices",
    "format_indices",
    "format_code",
]
