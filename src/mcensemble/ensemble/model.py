"""
Trained model representation for MC-Ensemble.

A TrainedModel holds everything prediction needs:
- the class set and the decomposition method
- the code matrix (code-matrix methods) or pair list (one-vs-one)
- one sub-problem descriptor per sub-classifier, with its fitted transform
- the sub-classifiers themselves, None where a sub-problem was skipped
- the fallback classifier trained on the full dataset
- the two-class schema re-stamped on instances (one-vs-one only)

Models are written once by the trainer and only read afterwards.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

import joblib
import numpy as np

from ..codes import CodeMethod, format_indices
from ..data.transform import IndicatorTransform, PairTransform, TwoClassSchema


SKIPPED_TEXT = " Skipped (no training examples)"


@dataclass(frozen=True)
class SubProblem:
    """
    Descriptor of one binary sub-problem.

    Attributes:
        index: Position of the sub-problem in the ensemble
        transform: IndicatorTransform (code row) or PairTransform (class pair)
    """

    index: int
    transform: Union[IndicatorTransform, PairTransform]

    @property
    def is_pair(self) -> bool:
        return isinstance(self.transform, PairTransform)

    @property
    def pair(self) -> Tuple[int, int]:
        if not self.is_pair:
            raise AttributeError("Code-row sub-problems have no class pair")
        return self.transform.pair

    @property
    def positive(self) -> Tuple[int, ...]:
        if self.is_pair:
            raise AttributeError("Pair sub-problems have no positive group")
        return self.transform.positive

    def describe(self) -> str:
        """Annotation used by the report, with 1-based class indices."""
        if self.is_pair:
            first, second = self.pair
            return f", {first + 1} vs {second + 1}"
        return f", using indicator values: {format_indices(self.transform.mask)}"


@dataclass
class TrainedModel:
    """
    Result of training a multi-class decomposition ensemble.

    Attributes:
        classes: Ordered class labels (n_classes,)
        method: Decomposition method requested at training time
        estimators: Fitted sub-classifiers; None marks a skipped sub-problem
        fallback: Classifier fitted on the untransformed dataset
        problems: Sub-problem descriptors aligned with estimators (empty when
                  the problem had ≤ 2 classes and was not decomposed)
        code: Code matrix (n_codes × n_classes) or None
        pairs: Class pairs or None
        two_class_schema: Schema for one-vs-one sub-instances or None
    """

    classes: np.ndarray
    method: CodeMethod
    estimators: List[Optional[Any]]
    fallback: Any
    problems: List[SubProblem] = field(default_factory=list)
    code: Optional[np.ndarray] = None
    pairs: Optional[List[Tuple[int, int]]] = None
    two_class_schema: Optional[TwoClassSchema] = None

    def __post_init__(self):
        self.method = CodeMethod.parse(self.method)
        if self.is_decomposed:
            if len(self.estimators) != len(self.problems):
                raise ValueError(
                    f"{len(self.estimators)} sub-classifiers for "
                    f"{len(self.problems)} sub-problems"
                )
        elif len(self.estimators) != 1:
            raise ValueError(
                f"An undecomposed model holds exactly one classifier, "
                f"got {len(self.estimators)}"
            )
        if self.code is not None and len(self.code) != len(self.problems):
            raise ValueError("Code matrix rows must match the sub-problems")
        if self.pairs is not None and len(self.pairs) != len(self.problems):
            raise ValueError("Pair list must match the sub-problems")

    @property
    def n_classes(self) -> int:
        return len(self.classes)

    @property
    def is_decomposed(self) -> bool:
        return len(self.problems) > 0

    @property
    def n_skipped(self) -> int:
        return sum(est is None for est in self.estimators)

    @property
    def decoding_method(self) -> Optional[CodeMethod]:
        """Method that decides the decoding rule, None when not decomposed."""
        if not self.is_decomposed:
            return None
        return CodeMethod.ONE_VS_ONE if self.pairs is not None else self.method

    def report(self) -> str:
        """
        Human-readable summary of every sub-classifier.

        Each slot reads "Classifier k" followed by its class pair or indicator
        values and the sub-classifier's own text, or the skipped marker.
        """
        lines = ["MultiClassClassifier", ""]
        for k, estimator in enumerate(self.estimators):
            header = f"Classifier {k + 1}"
            if estimator is None:
                lines.append(header + SKIPPED_TEXT)
                continue
            if self.is_decomposed:
                header += self.problems[k].describe()
            lines.append(header)
            lines.append(str(estimator))
            lines.append("")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.report()

    def save(self, path) -> None:
        """Persist the model with joblib."""
        joblib.dump(self, path)

    @classmethod
    def load(cls, path) -> 'TrainedModel':
        """
        Load a model written by save().

        Raises:
            TypeError: If the file does not hold a TrainedModel
        """
        obj = joblib.load(path)
        if not isinstance(obj, cls):
            raise TypeError(f"Expected a {cls.__name__}, found {type(obj).__name__}")
        return obj
