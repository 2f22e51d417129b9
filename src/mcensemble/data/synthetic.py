"""
Synthetic Data Generation for MC-Ensemble Testing
=================================================

Gaussian class clusters with controlled separation, used by the tests and the
examples to exercise every decomposition method.

Key Features:
- Any number of classes, features and instances per class
- Class centers spread on a circle (first two features) so that every pair
  of classes is separable to a similar degree
- Declared-but-empty classes, to reproduce sub-problems with no training
  examples
"""

import numpy as np
from typing import Optional, Sequence, Tuple


def generate_multiclass_data(
    n_classes: int = 4,
    n_per_class: int = 50,
    n_features: int = 2,
    separation: float = 3.0,
    noise: float = 1.0,
    empty_classes: Sequence[int] = (),
    random_state: Optional[int] = None
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Generate a labeled multi-class dataset of Gaussian clusters.
    
    Parameters:
        n_classes: Number of declared classes
        n_per_class: Instances drawn for each non-empty class
        n_features: Feature dimension (≥ 2)
        separation: Radius of the circle holding the class centers
        noise: Standard deviation of each cluster
        empty_classes: Class indices that get no instances
        random_state: Random seed for reproducibility
    
    Returns:
        X: Feature matrix (n × n_features)
        y: Class labels (n,), strings "c0", "c1", ...
        classes: All declared labels in index order (n_classes,)
    
    Example:
        >>> X, y, classes = generate_multiclass_data(n_classes=3, random_state=0)
        >>> X.shape
        (150, 2)
    """
    if n_classes < 1:
        raise ValueError(f"n_classes must be positive, got {n_classes}")
    if n_features < 2:
        raise ValueError(f"n_features must be at least 2, got {n_features}")
    if n_per_class < 1:
        raise ValueError(f"n_per_class must be positive, got {n_per_class}")
    if any(not 0 <= c < n_classes for c in empty_classes):
        raise ValueError(f"empty_classes must be in [0, {n_classes}), got {list(empty_classes)}")
    if len(set(empty_classes)) == n_classes:
        raise ValueError("At least one class must have instances")
    
    rng = np.random.RandomState(random_state)
    classes = np.array([f"c{k}" for k in range(n_classes)])
    
    # Class centers on a circle in the first two features
    angles = 2 * np.pi * np.arange(n_classes) / n_classes
    centers = np.zeros((n_classes, n_features))
    centers[:, 0] = separation * np.cos(angles)
    centers[:, 1] = separation * np.sin(angles)
    
    X_parts, y_parts = [], []
    for k in range(n_classes):
        if k in empty_classes:
            continue
        X_parts.append(centers[k] + noise * rng.randn(n_per_class, n_features))
        y_parts.append(np.full(n_per_class, classes[k]))
    
    X = np.vstack(X_parts)
    y = np.concatenate(y_parts)
    
    # Shuffle
    order = rng.permutation(len(y))
    return X[order], y[order], classes
