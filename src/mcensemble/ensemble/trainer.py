"""
Ensemble Trainer for MC-Ensemble

Builds a TrainedModel from a labeled dataset and a binary base classifier:

1. Fit the fallback classifier on the untransformed dataset
2. With ≤ 2 classes, fit a single copy of the base classifier and stop
3. Otherwise build the pair list (one-vs-one) or the code matrix
4. Project the dataset once per sub-problem and fit one copy per projection

One-vs-all rows whose positive class has no training instance are skipped
and stored as None. Any error raised while fitting a sub-classifier aborts
training; no partial model is returned.

Sub-classifier fits are independent: each works on its own projected arrays
and fills its own slot, so they run through joblib.Parallel.
"""

from typing import List, Optional, Tuple, Union

import numpy as np
from joblib import Parallel, delayed
from sklearn.base import clone
from sklearn.dummy import DummyClassifier
from sklearn.utils import check_random_state

from ..codes import CodeMethod, format_indices, generate_code, one_vs_one_pairs
from ..data.dataset import LabeledDataset
from ..data.transform import IndicatorTransform, PairTransform, TwoClassSchema
from ..errors import ConfigurationError
from .model import SubProblem, TrainedModel


def default_fallback() -> DummyClassifier:
    """Class-prior classifier used when no fallback is configured."""
    return DummyClassifier(strategy="prior")


def _fit_one(estimator, X: np.ndarray, y: np.ndarray):
    """Fit a fresh copy of ``estimator`` on one projection."""
    return clone(estimator).fit(X, y)


def build_problems(
    dataset: LabeledDataset,
    method: CodeMethod,
    width_factor: float = 2.0,
    random_state=None,
    verbose: bool = False
) -> Tuple[List[SubProblem], Optional[np.ndarray], Optional[List[Tuple[int, int]]], Optional[TwoClassSchema]]:
    """
    Decompose a multi-class dataset into binary sub-problems.

    Returns:
        problems: One SubProblem per sub-classifier
        code: Code matrix, None for one-vs-one
        pairs: Class pairs, None for code-matrix methods
        schema: Two-class schema, one-vs-one only
    """
    n_classes = dataset.n_classes

    if method is CodeMethod.ONE_VS_ONE:
        schema = TwoClassSchema()
        pairs = one_vs_one_pairs(n_classes)
        problems = [
            SubProblem(k, PairTransform(pair, schema)) for k, pair in enumerate(pairs)
        ]
        return problems, None, pairs, schema

    code = generate_code(
        method, n_classes,
        width_factor=width_factor,
        random_state=random_state,
        verbose=verbose
    )
    problems = [
        SubProblem(k, IndicatorTransform.from_code_row(row)) for k, row in enumerate(code)
    ]
    return problems, code, None, None


def train_model(
    dataset: LabeledDataset,
    base_classifier,
    method: Union[CodeMethod, str, int] = CodeMethod.ONE_VS_ALL,
    width_factor: float = 2.0,
    fallback=None,
    random_state=None,
    n_jobs: Optional[int] = None,
    verbose: bool = False
) -> TrainedModel:
    """
    Train a multi-class decomposition ensemble.

    Parameters:
        dataset: Labeled training data
        base_classifier: Unfitted scikit-learn classifier with predict_proba;
                         cloned for every sub-problem
        method: one-vs-all, random-code, exhaustive-code or one-vs-one
        width_factor: Code length multiplier for random-code
        fallback: Unfitted classifier used when decoding finds no evidence
                  (default: class-prior DummyClassifier)
        random_state: Seed for random-code generation
        n_jobs: Number of parallel fits (joblib semantics)
        verbose: Whether to print training progress

    Returns:
        model: Fitted TrainedModel

    Raises:
        ConfigurationError: If no base classifier is given or the method is unknown
        Exception: Whatever a sub-classifier's fit raises, unchanged
    """
    if base_classifier is None:
        raise ConfigurationError("No base classifier has been set!")
    method = CodeMethod.parse(method)
    rng = check_random_state(random_state)

    fallback_model = clone(fallback if fallback is not None else default_fallback())
    fallback_model.fit(dataset.X, dataset.y_index)

    if verbose:
        print("Starting MC-Ensemble training...")
        print(f"  Data: {dataset.n_instances} instances × {dataset.n_features} features")
        print(f"  Classes: {dataset.n_classes}")
        print(f"  Method: {method.value} ({method.description})")

    if dataset.n_classes <= 2:
        if verbose:
            print("  ≤ 2 classes: training the base classifier directly")
        single = _fit_one(base_classifier, dataset.X, dataset.y_index)
        return TrainedModel(
            classes=dataset.classes,
            method=method,
            estimators=[single],
            fallback=fallback_model
        )

    problems, code, pairs, schema = build_problems(
        dataset, method, width_factor=width_factor, random_state=rng, verbose=verbose
    )

    counts = dataset.class_counts()
    jobs = []
    estimators: List[Optional[object]] = [None] * len(problems)
    for problem in problems:
        if method is CodeMethod.ONE_VS_ALL and counts[list(problem.positive)].sum() == 0:
            if verbose:
                print(
                    f"  Classifier {problem.index + 1}: skipped, no instances of class "
                    f"{format_indices(problem.transform.mask)}"
                )
            continue
        X_sub, y_sub = problem.transform.transform_dataset(dataset)
        jobs.append((problem.index, X_sub, y_sub))

    if verbose:
        print(f"  Sub-classifiers: {len(jobs)} trained, {len(problems) - len(jobs)} skipped")
        print()

    fitted = Parallel(n_jobs=n_jobs)(
        delayed(_fit_one)(base_classifier, X_sub, y_sub) for _, X_sub, y_sub in jobs
    )
    for (index, _, _), estimator in zip(jobs, fitted):
        estimators[index] = estimator

    return TrainedModel(
        classes=dataset.classes,
        method=method,
        estimators=estimators,
        fallback=fallback_model,
        problems=problems,
        code=code,
        pairs=pairs,
        two_class_schema=schema
    )
