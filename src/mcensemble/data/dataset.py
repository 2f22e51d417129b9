"""
LabeledDataset: Container for a labeled multi-class dataset.

This module provides the dataset capability consumed by the decomposition
engine:
- Feature matrix X and class labels y
- The ordered class set (optionally declared, so it can include classes with
  no instances, like a nominal class attribute)
- Per-class instance counts
"""

import numpy as np
from typing import Optional, Sequence


class LabeledDataset:
    """
    Container for a labeled multi-class dataset.
    
    Attributes:
        X (np.ndarray): Feature matrix (n × d)
        y (np.ndarray): Original class labels (n,)
        classes (np.ndarray): Ordered class labels (n_classes,)
        y_index (np.ndarray): Index of each instance's class in ``classes`` (n,)
        n_instances (int): Number of instances
        n_features (int): Number of features
        n_classes (int): Number of declared classes
    
    Example:
        >>> X = np.random.rand(6, 2)
        >>> y = np.array(['a', 'b', 'c', 'a', 'b', 'c'])
        >>> data = LabeledDataset(X, y, classes=['a', 'b', 'c', 'd'])
        >>> data.class_counts()
        array([2, 2, 2, 0])
    """
    
    def __init__(
        self,
        X: np.ndarray,
        y: np.ndarray,
        classes: Optional[Sequence] = None
    ):
        """
        Initialize LabeledDataset.
        
        Parameters:
            X: Feature matrix (n × d); a 1-D array is read as a single feature
            y: Class labels (n,)
            classes: Declared class labels in index order, optional
                - If None, the sorted unique labels of y are used
                - May contain labels that never occur in y
        
        Raises:
            ValueError: If dimensions don't match or labels are undeclared
        """
        X = np.asarray(X, dtype=float)
        y = np.asarray(y)
        
        if X.ndim == 1:
            X = X[:, None]
        if X.ndim != 2:
            raise ValueError(f"X must be 2D array, got shape {X.shape}")
        if y.ndim != 1:
            raise ValueError(f"y must be 1D array, got shape {y.shape}")
        if X.shape[0] != len(y):
            raise ValueError(
                f"X rows ({X.shape[0]}) must match y length ({len(y)})"
            )
        if len(y) == 0:
            raise ValueError("Dataset must contain at least one instance")
        
        if classes is None:
            classes = np.unique(y)
        else:
            classes = np.asarray(list(classes))
            if len(set(classes.tolist())) != len(classes):
                raise ValueError(f"Declared classes contain duplicates: {classes.tolist()}")
        if len(classes) < 1:
            raise ValueError("At least one class is required")
        
        index = {label: i for i, label in enumerate(classes.tolist())}
        unknown = sorted({str(v) for v in y.tolist() if v not in index})
        if unknown:
            raise ValueError(f"Labels not among declared classes: {unknown}")
        
        self.X = X
        self.y = y
        self.classes = classes
        self.y_index = np.array([index[v] for v in y.tolist()], dtype=int)
        
        self.n_instances, self.n_features = X.shape
        self.n_classes = len(classes)
    
    def class_counts(self) -> np.ndarray:
        """Number of instances per declared class (n_classes,)."""
        return np.bincount(self.y_index, minlength=self.n_classes)
    
    def subset(self, mask: np.ndarray) -> 'LabeledDataset':
        """
        Select instances, keeping the declared class set.
        
        Parameters:
            mask: Boolean mask or integer indices over instances
        """
        return LabeledDataset(self.X[mask], self.y[mask], classes=self.classes)
    
    def __repr__(self) -> str:
        return (
            f"LabeledDataset("
            f"n_instances={self.n_instances}, "
            f"n_features={self.n_features}, "
            f"n_classes={self.n_classes})"
        )
    
    def summary(self) -> str:
        """Get detailed summary of the data."""
        counts = self.class_counts()
        lines = [
            "=" * 50,
            "LabeledDataset Summary",
            "=" * 50,
            f"Instances:                {self.n_instances}",
            f"Features:                 {self.n_features}",
            f"Classes:                  {self.n_classes}",
        ]
        for label, count in zip(self.classes.tolist(), counts):
            lines.append(
                f"  - {str(label):<22}{count} ({100*count/self.n_instances:.1f}%)"
            )
        lines.append("=" * 50)
        return "\n".join(lines)
