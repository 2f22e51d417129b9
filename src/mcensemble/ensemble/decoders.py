"""
Decoding Functions for MC-Ensemble

This module implements the decoders that turn the 2-class outputs of the
sub-classifiers back into one distribution over the original classes.

Two decoding rules exist, one per dispatch path:
- PairwiseVoteDecoder (one-vs-one): hard majority voting
- SoftCodeDecoder (code-matrix methods): probability-weighted evidence

Both produce an unnormalized accumulator; finalize_distribution() normalizes
it and substitutes the fallback distribution where no evidence was cast.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

from ..codes import CodeMethod


class BaseDecoder(ABC):
    """
    Base class for decoders.

    A decoder takes the [p0, p1] outputs of every sub-classifier for a batch
    of instances and accumulates evidence per original class. Skipped
    sub-problems are passed as None and contribute nothing.
    """

    def accumulate(
        self,
        sub_probas: Sequence[Optional[np.ndarray]],
        problems: Sequence,
        n_classes: int,
        n_batch: Optional[int] = None
    ) -> np.ndarray:
        """
        Sum the evidence of all sub-classifiers.

        Parameters:
            sub_probas: Per sub-problem, None (skipped) or [p0, p1] rows (n_batch × 2)
            problems: Sub-problem descriptors aligned with sub_probas
            n_classes: Number of original classes
            n_batch: Number of instances; needed when every sub-problem was skipped

        Returns:
            accumulator: Unnormalized evidence (n_batch × n_classes)
        """
        if len(sub_probas) != len(problems):
            raise ValueError(
                f"Got {len(sub_probas)} outputs for {len(problems)} sub-problems"
            )

        accumulator = None
        for proba, problem in zip(sub_probas, problems):
            if proba is None:
                continue
            proba = np.asarray(proba, dtype=float)
            contribution = self.contribution(proba, problem, n_classes)
            accumulator = contribution if accumulator is None else accumulator + contribution

        if accumulator is None:
            if n_batch is None:
                n_batch = self._batch_size(sub_probas)
            accumulator = np.zeros((n_batch, n_classes))
        return accumulator

    @abstractmethod
    def contribution(self, proba: np.ndarray, problem, n_classes: int) -> np.ndarray:
        """
        Evidence cast by a single sub-classifier.

        Parameters:
            proba: [p0, p1] rows (n_batch × 2)
            problem: Sub-problem descriptor
            n_classes: Number of original classes

        Returns:
            contribution: Evidence (n_batch × n_classes)
        """
        pass

    @staticmethod
    def _batch_size(sub_probas) -> int:
        for proba in sub_probas:
            if proba is not None:
                return len(proba)
        return 0


class PairwiseVoteDecoder(BaseDecoder):
    """
    Majority voting over class pairs.

    For the sub-classifier of pair (i, j): one vote for i where p0 > p1, one
    vote for j where p1 > p0, no vote on an exact tie. Probabilities only
    decide the winner; their magnitude is ignored.

    Example:
        >>> dec = PairwiseVoteDecoder()
        >>> proba = np.array([[0.9, 0.1], [0.5, 0.5]])
        >>> dec.contribution(proba, pair_problem, n_classes=3)  # pair (0, 2)
        array([[1., 0., 0.],
               [0., 0., 0.]])
    """

    def contribution(self, proba: np.ndarray, problem, n_classes: int) -> np.ndarray:
        first, second = problem.pair
        votes = np.zeros((len(proba), n_classes))
        votes[:, first] += proba[:, 0] > proba[:, 1]
        votes[:, second] += proba[:, 1] > proba[:, 0]
        return votes


class SoftCodeDecoder(BaseDecoder):
    """
    Soft decoding of an output code.

    For the sub-classifier of code row r, every class in the row's positive
    group receives p1 and every other class receives p0:

        acc[c] += p1  if code[r, c] else p0
    """

    def contribution(self, proba: np.ndarray, problem, n_classes: int) -> np.ndarray:
        mask = problem.transform.mask
        if len(mask) != n_classes:
            raise ValueError(
                f"Code row covers {len(mask)} classes, expected {n_classes}"
            )
        return np.where(mask[None, :], proba[:, [1]], proba[:, [0]])


def finalize_distribution(
    accumulator: np.ndarray,
    fallback_proba: Union[np.ndarray, None]
) -> np.ndarray:
    """
    Normalize accumulated evidence into class distributions.

    Rows whose total is strictly positive are scaled to sum to one. Rows with
    no evidence at all (every pair tied, every sub-classifier skipped) are
    replaced by the corresponding row of the fallback distribution, so the
    result never contains an all-zero row.

    Parameters:
        accumulator: Unnormalized evidence (n_batch × n_classes)
        fallback_proba: Fallback distributions (n_batch × n_classes); only
                        read for rows without evidence

    Returns:
        distribution: Class distributions (n_batch × n_classes)
    """
    accumulator = np.asarray(accumulator, dtype=float)
    totals = accumulator.sum(axis=1)
    has_evidence = totals > 0

    distribution = np.zeros_like(accumulator)
    distribution[has_evidence] = accumulator[has_evidence] / totals[has_evidence, None]

    if not np.all(has_evidence):
        if fallback_proba is None:
            raise ValueError("A fallback distribution is needed for rows without evidence")
        fallback_proba = np.asarray(fallback_proba, dtype=float)
        distribution[~has_evidence] = fallback_proba[~has_evidence]

    return distribution


def get_decoder(method: Union[CodeMethod, str, int]) -> BaseDecoder:
    """
    Factory function for decoders.

    Parameters
    ----------
    method : CodeMethod or str
        Decomposition method the model was trained with

    Returns
    -------
    decoder : BaseDecoder
        PairwiseVoteDecoder for one-vs-one, SoftCodeDecoder otherwise
    """
    method = CodeMethod.parse(method)
    if method is CodeMethod.ONE_VS_ONE:
        return PairwiseVoteDecoder()
    return SoftCodeDecoder()
