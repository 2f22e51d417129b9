"""
Shared fixtures and stub classifiers for the MC-Ensemble tests.

The stubs read the true class index from the first feature, which makes
every sub-classifier's answer predictable.
"""

import numpy as np
import pytest
from sklearn.base import BaseEstimator, ClassifierMixin


class OracleClassifier(ClassifierMixin, BaseEstimator):
    """
    Memorize the training label of each class index found in feature 0.

    Predicts a one-hot distribution for known keys and a uniform one for
    keys never seen during fit.
    """

    def fit(self, X, y):
        X = np.asarray(X, dtype=float)
        y = np.asarray(y)
        self.classes_ = np.unique(y)
        self.lookup_ = {}
        for key, label in zip(np.rint(X[:, 0]).astype(int), y):
            self.lookup_[int(key)] = label
        return self

    def predict_proba(self, X):
        X = np.asarray(X, dtype=float)
        proba = np.full((len(X), len(self.classes_)), 1.0 / len(self.classes_))
        for row, key in enumerate(np.rint(X[:, 0]).astype(int)):
            if int(key) in self.lookup_:
                proba[row] = 0.0
                proba[row, np.searchsorted(self.classes_, self.lookup_[int(key)])] = 1.0
        return proba

    def __str__(self):
        return "OracleClassifier"


class ConstantProbaClassifier(ClassifierMixin, BaseEstimator):
    """Return the same [p0, p1] for every instance, restricted to the labels seen in fit."""

    def __init__(self, proba=(0.5, 0.5)):
        self.proba = proba

    def fit(self, X, y):
        self.classes_ = np.unique(y)
        return self

    def predict_proba(self, X):
        proba = np.asarray(self.proba, dtype=float)[self.classes_.astype(int)]
        return np.tile(proba, (len(X), 1))


class FailingClassifier(ClassifierMixin, BaseEstimator):
    """Raise on fit."""

    def fit(self, X, y):
        raise RuntimeError("base classifier failed to train")


def make_indexed_data(counts):
    """
    Instances whose single feature is their class index.

    Parameters:
        counts: Instances per class, e.g. {'A': 2, 'B': 3}

    Returns:
        X: (n × 1) feature matrix
        y: Labels (n,)
    """
    labels = list(counts)
    X, y = [], []
    for index, label in enumerate(labels):
        X.extend([[float(index)]] * counts[label])
        y.extend([label] * counts[label])
    return np.array(X), np.array(y)


@pytest.fixture
def abc_data():
    """Three classes A, B, C with unequal frequencies."""
    return make_indexed_data({'A': 2, 'B': 3, 'C': 5})


@pytest.fixture
def blobs():
    """Well separated four-class Gaussian clusters."""
    from mcensemble.data import generate_multiclass_data
    X, y, classes = generate_multiclass_data(
        n_classes=4, n_per_class=40, separation=6.0, noise=0.8, random_state=0
    )
    return X, y, classes
