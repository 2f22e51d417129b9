"""
MultiClassClassifier: scikit-learn estimator wrapping the decomposition engine.

Makes any binary probabilistic classifier usable on multi-class problems by
training one copy per binary sub-problem and decoding their outputs:

    >>> from sklearn.linear_model import LogisticRegression
    >>> clf = MultiClassClassifier(LogisticRegression(), method='exhaustive-code')
    >>> clf.fit(X_train, y_train)
    >>> proba = clf.predict_proba(X_test)
    >>> print(clf.report())
"""

from typing import Optional, Sequence

import joblib
import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin

from ..codes import CodeMethod
from ..data.dataset import LabeledDataset
from ..errors import UsageError
from .predictor import predict_distribution
from .trainer import train_model


class MultiClassClassifier(ClassifierMixin, BaseEstimator):
    """
    Multi-class meta-classifier built from 2-class probabilistic classifiers.

    Four decompositions are supported:
    - 'one-vs-all': one sub-classifier per class (identity code)
    - 'random-code': random error-correcting output code of
      max(n_classes, n_classes × random_width_factor) rows
    - 'exhaustive-code': all 2^(n_classes-1) - 1 two-group splits
    - 'one-vs-one': one sub-classifier per class pair, majority voting

    Code-matrix methods decode softly: each class sums p1 from the rows it is
    positive in and p0 from the others. Whenever the sub-classifiers cast no
    evidence for an instance, the fallback classifier answers instead.

    Parameters:
        base_classifier: Unfitted classifier with predict_proba (required at fit)
        method: Decomposition method or legacy tag 0-3
        random_width_factor: Code length multiplier for 'random-code'
        fallback: Unfitted classifier for instances without evidence
                  (default: class-prior DummyClassifier)
        random_state: Seed for 'random-code'
        n_jobs: Parallel sub-classifier fits (joblib semantics)
        verbose: Print training progress

    Attributes:
        model_: TrainedModel built by the last successful fit
        classes_: Class labels (n_classes,)
        n_classes_: Number of classes
        n_features_in_: Number of features seen during fit

    Example:
        >>> clf = MultiClassClassifier(GaussianNB(), method='one-vs-one')
        >>> clf.fit(X, y).score(X, y)
    """

    def __init__(
        self,
        base_classifier=None,
        method='one-vs-all',
        random_width_factor: float = 2.0,
        fallback=None,
        random_state=None,
        n_jobs: Optional[int] = None,
        verbose: bool = False
    ):
        self.base_classifier = base_classifier
        self.method = method
        self.random_width_factor = random_width_factor
        self.fallback = fallback
        self.random_state = random_state
        self.n_jobs = n_jobs
        self.verbose = verbose

    @classmethod
    def from_config(cls, config) -> 'MultiClassClassifier':
        """Build an unfitted classifier from a MultiClassConfig."""
        return cls(
            base_classifier=config.build_base_classifier(),
            method=CodeMethod.parse(config.method).value,
            random_width_factor=config.random_width_factor,
            random_state=config.random_state,
            n_jobs=config.n_jobs,
            verbose=config.verbose
        )

    def fit(self, X, y, classes: Optional[Sequence] = None) -> 'MultiClassClassifier':
        """
        Train the ensemble.

        Every call builds a new TrainedModel. If training fails the
        estimator is left unfitted.

        Parameters:
            X: Feature matrix (n × d)
            y: Class labels (n,)
            classes: Declared class labels, optional; may include classes
                     without training instances

        Returns:
            self: Fitted classifier (for method chaining)

        Raises:
            ConfigurationError: No base classifier or unknown method
        """
        for attr in ("model_", "classes_", "n_classes_", "n_features_in_"):
            self.__dict__.pop(attr, None)

        dataset = LabeledDataset(X, y, classes=classes)
        model = train_model(
            dataset,
            self.base_classifier,
            method=self.method,
            width_factor=self.random_width_factor,
            fallback=self.fallback,
            random_state=self.random_state,
            n_jobs=self.n_jobs,
            verbose=self.verbose
        )

        self.model_ = model
        self.classes_ = dataset.classes
        self.n_classes_ = dataset.n_classes
        self.n_features_in_ = dataset.n_features
        return self

    def _check_fitted(self):
        if getattr(self, "model_", None) is None:
            raise UsageError(
                f"This {type(self).__name__} instance is not fitted yet. "
                f"Call 'fit' before using this estimator."
            )

    def predict_proba(self, X) -> np.ndarray:
        """
        Class distributions (n × n_classes).

        With ≤ 2 classes the base classifier's own output is returned as is.
        """
        self._check_fitted()
        X = self._as_features(X)
        return predict_distribution(self.model_, X)

    def predict(self, X) -> np.ndarray:
        """Most probable class label per instance."""
        proba = self.predict_proba(X)
        best = np.argmax(proba, axis=1)
        if not self.model_.is_decomposed:
            # Raw columns follow the single classifier's own classes_
            best = np.asarray(self.model_.estimators[0].classes_).astype(int)[best]
        return self.classes_[best]

    def _as_features(self, X) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X[None, :]
        if X.shape[1] != self.n_features_in_:
            raise ValueError(
                f"X has {X.shape[1]} features, but {type(self).__name__} "
                f"was fitted with {self.n_features_in_}"
            )
        return X

    def report(self) -> str:
        """Text summary of the trained sub-classifiers."""
        if getattr(self, "model_", None) is None:
            return "MultiClassClassifier: No model built yet."
        return self.model_.report()

    def __str__(self) -> str:
        return self.report()

    def save(self, path) -> None:
        """Persist the fitted classifier with joblib."""
        self._check_fitted()
        joblib.dump(self, path)

    @classmethod
    def load(cls, path) -> 'MultiClassClassifier':
        """
        Load a classifier written by save().

        Raises:
            TypeError: If the file does not hold a MultiClassClassifier
        """
        obj = joblib.load(path)
        if not isinstance(obj, cls):
            raise TypeError(f"Expected a {cls.__name__}, found {type(obj).__name__}")
        return obj
