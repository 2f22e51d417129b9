"""
Dataset Transformers for Binary Sub-Problems

Each sub-classifier of the ensemble sees the multi-class dataset through a
transform that turns it into a two-class problem:

- IndicatorTransform (code-matrix methods): every instance is kept and its
  class is relabeled 1 if it belongs to the row's positive group, else 0.
- PairTransform (one-vs-one): only instances of the two classes of the pair
  are kept; pair[0] becomes "class0" (0) and pair[1] becomes "class1" (1).

Transforms are fitted once during training and retained by the trained
model, so that every new instance is presented to a sub-classifier exactly
the way its training data was.
"""

from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np

from .dataset import LabeledDataset


@dataclass(frozen=True)
class TwoClassSchema:
    """Synthetic 2-valued class attribute shared by one-vs-one sub-problems."""

    labels: Tuple[str, str] = ("class0", "class1")
    name: str = "class"

    def __post_init__(self):
        if len(self.labels) != 2:
            raise ValueError(f"A two-class schema needs 2 labels, got {self.labels}")


def _as_instances(X) -> np.ndarray:
    X = np.asarray(X, dtype=float)
    if X.ndim == 1:
        X = X[None, :]
    return X


@dataclass(frozen=True)
class IndicatorTransform:
    """
    Relabel the class attribute to a binary indicator of a code row.

    Attributes:
        positive: Class indices mapped to the positive label (1)
        n_classes: Size of the class set the row was drawn over
    """

    positive: Tuple[int, ...]
    n_classes: int

    @classmethod
    def from_code_row(cls, row: Sequence[bool]) -> 'IndicatorTransform':
        row = np.asarray(row, dtype=bool)
        return cls(tuple(int(i) for i in np.flatnonzero(row)), len(row))

    @property
    def mask(self) -> np.ndarray:
        """Boolean positive-class mask over all classes (n_classes,)."""
        mask = np.zeros(self.n_classes, dtype=bool)
        mask[list(self.positive)] = True
        return mask

    def positive_counts(self, dataset: LabeledDataset) -> np.ndarray:
        """Training instances per positive class."""
        return dataset.class_counts()[list(self.positive)]

    def transform_dataset(self, dataset: LabeledDataset) -> Tuple[np.ndarray, np.ndarray]:
        """
        Project a dataset onto the indicator problem.

        Returns:
            X: Feature matrix, every instance kept (n × d)
            y: Binary targets, 1 for positive classes (n,)
        """
        self._check(dataset)
        y = self.mask[dataset.y_index].astype(int)
        return dataset.X, y

    def transform_instance(self, X) -> np.ndarray:
        """Present instances to the sub-classifier; features are unchanged by the indicator rule."""
        return _as_instances(X)

    def _check(self, dataset: LabeledDataset):
        if dataset.n_classes != self.n_classes:
            raise ValueError(
                f"Transform was built for {self.n_classes} classes, "
                f"dataset has {dataset.n_classes}"
            )


@dataclass(frozen=True)
class PairTransform:
    """
    Restrict a dataset to one pair of classes.

    Attributes:
        pair: (i, j) class indices; i maps to "class0", j to "class1"
        schema: Two-class attribute stamped on projected instances
    """

    pair: Tuple[int, int]
    schema: TwoClassSchema = field(default_factory=TwoClassSchema)

    def __post_init__(self):
        if len(self.pair) != 2 or self.pair[0] == self.pair[1]:
            raise ValueError(f"pair must hold two distinct class indices, got {self.pair}")

    def transform_dataset(self, dataset: LabeledDataset) -> Tuple[np.ndarray, np.ndarray]:
        """
        Keep only instances of the pair's classes.

        Returns:
            X: Features of the kept instances (n_pair × d)
            y: 0 for pair[0], 1 for pair[1] (n_pair,)
        """
        first, second = self.pair
        keep = (dataset.y_index == first) | (dataset.y_index == second)
        y = (dataset.y_index[keep] == second).astype(int)
        return dataset.X[keep], y

    def transform_instance(self, X) -> np.ndarray:
        """
        Re-stamp instances with the two-class schema.

        Nothing is filtered at prediction time: an instance of any class is
        scored against the pair.
        """
        return _as_instances(X)
