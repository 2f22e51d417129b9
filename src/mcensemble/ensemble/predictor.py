"""
Ensemble Predictor for MC-Ensemble

Turns a TrainedModel and a batch of instances into class distributions:

- Undecomposed model (≤ 2 classes): the single classifier's predict_proba,
  returned unchanged.
- Decomposed model: every instance is presented to every non-skipped
  sub-classifier through its sub-problem's transform, the [p0, p1] outputs
  are decoded (pairwise votes or soft code decoding) and finalized.

Prediction only reads the model, so repeated calls give identical results.
"""

from typing import List, Optional

import numpy as np

from ..utils.proba import align_proba, binary_proba
from .decoders import finalize_distribution, get_decoder
from .model import TrainedModel


def sub_classifier_probas(model: TrainedModel, X: np.ndarray) -> List[Optional[np.ndarray]]:
    """
    Collect [p0, p1] rows from every sub-classifier.

    Returns:
        probas: One (n × 2) array per sub-problem, None where skipped
    """
    probas = []
    for problem, estimator in zip(model.problems, model.estimators):
        if estimator is None:
            probas.append(None)
            continue
        X_sub = problem.transform.transform_instance(X)
        probas.append(binary_proba(estimator, X_sub))
    return probas


def fallback_distribution(model: TrainedModel, X: np.ndarray) -> np.ndarray:
    """Fallback classifier's distribution over all declared classes (n × n_classes)."""
    return align_proba(model.fallback, X, model.n_classes)


def predict_distribution(model: TrainedModel, X) -> np.ndarray:
    """
    Predict class distributions.

    Parameters:
        model: Trained ensemble
        X: Instances (n × d); a single instance may be passed as a 1-D array

    Returns:
        distribution: Class probabilities (n × n_classes). Every row sums to
                      one; rows without sub-classifier evidence come from the
                      fallback classifier.
    """
    X = np.asarray(X, dtype=float)
    if X.ndim == 1:
        X = X[None, :]

    if not model.is_decomposed:
        return model.estimators[0].predict_proba(X)

    decoder = get_decoder(model.decoding_method)
    accumulator = decoder.accumulate(
        sub_classifier_probas(model, X), model.problems, model.n_classes, n_batch=len(X)
    )

    fallback = None
    if np.any(accumulator.sum(axis=1) <= 0):
        fallback = fallback_distribution(model, X)
    return finalize_distribution(accumulator, fallback)
