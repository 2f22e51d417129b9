"""
Probability-column alignment for fitted scikit-learn estimators.

``predict_proba`` orders its columns by ``estimator.classes_``, which only
contains the labels seen during ``fit``. The decoders need a fixed layout
(``[p_negative, p_positive]`` for sub-classifiers, one column per declared
class for the fallback), so every call goes through :func:`align_proba`.
"""

import numpy as np


def align_proba(estimator, X: np.ndarray, n_columns: int) -> np.ndarray:
    """
    Predict probabilities and scatter them into ``n_columns`` columns.
    
    Parameters:
        estimator: Fitted estimator with ``classes_`` holding integer
                   labels in ``[0, n_columns)``
        X: Instances (n × d)
        n_columns: Width of the returned array
    
    Returns:
        proba: Probabilities (n × n_columns); columns for labels the
               estimator never saw are zero
    """
    raw = np.asarray(estimator.predict_proba(X), dtype=float)
    if raw.ndim == 1:
        raw = raw[:, None]
    
    labels = np.asarray(getattr(estimator, "classes_", np.arange(raw.shape[1])))
    if raw.shape[1] != len(labels):
        raise ValueError(
            f"predict_proba returned {raw.shape[1]} columns "
            f"but the estimator knows {len(labels)} classes"
        )
    
    proba = np.zeros((raw.shape[0], n_columns))
    proba[:, labels.astype(int)] = raw
    return proba


def binary_proba(estimator, X: np.ndarray) -> np.ndarray:
    """Return ``[p0, p1]`` per instance for a sub-classifier trained on 0/1 targets."""
    return align_proba(estimator, X, 2)
