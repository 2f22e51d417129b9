"""
Configuration for MC-Ensemble.

MultiClassConfig collects the recognized options:
- method: decomposition method (default one-vs-all)
- random_width_factor: code length multiplier for random-code (default 2.0)
- base_classifier: registry name, dotted class path or estimator instance
  (required), with nested base_params

Configurations round-trip through plain dicts (to_dict / from_dict).
"""

from dataclasses import asdict, dataclass, field, fields
import importlib
from typing import Any, Dict, List, Optional, Union

from sklearn.base import BaseEstimator
from sklearn.ensemble import GradientBoostingClassifier, RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.naive_bayes import GaussianNB
from sklearn.tree import DecisionTreeClassifier

from .codes import CodeMethod
from .errors import ConfigurationError


_BASE_CLASSIFIERS = {
    'logistic': LogisticRegression,
    'naive_bayes': GaussianNB,
    'tree': DecisionTreeClassifier,
    'rf': RandomForestClassifier,
    'gbm': GradientBoostingClassifier,
}


def available_base_classifiers() -> List[str]:
    """Registry names accepted by get_base_classifier()."""
    return sorted(_BASE_CLASSIFIERS)


def get_base_classifier(name: str, **params) -> BaseEstimator:
    """
    Factory function for base classifiers.

    Parameters
    ----------
    name : str
        Registry name ('logistic', 'naive_bayes', 'tree', 'rf', 'gbm') or a
        dotted path to an estimator class, e.g. 'sklearn.svm.SVC'
    **params
        Constructor parameters of the classifier

    Returns
    -------
    classifier : estimator
        Unfitted classifier

    Examples
    --------
    >>> clf = get_base_classifier('logistic', C=0.5)
    >>> clf = get_base_classifier('sklearn.svm.SVC', probability=True)
    """
    if name in _BASE_CLASSIFIERS:
        return _BASE_CLASSIFIERS[name](**params)

    if "." in name:
        module_name, _, class_name = name.rpartition(".")
        try:
            module = importlib.import_module(module_name)
            estimator_cls = getattr(module, class_name)
        except (ImportError, AttributeError) as exc:
            raise ConfigurationError(f"Cannot import base classifier '{name}'") from exc
        return estimator_cls(**params)

    raise ConfigurationError(
        f"Unknown base classifier '{name}'. "
        f"Available: {available_base_classifiers()}"
    )


@dataclass
class MultiClassConfig:
    """
    Options of a multi-class decomposition ensemble.

    Attributes:
        method: 'one-vs-all', 'random-code', 'exhaustive-code' or 'one-vs-one'
                (legacy integer tags 0-3 are accepted)
        random_width_factor: Number of random codes per class (> 0)
        base_classifier: Registry name, dotted class path or estimator instance
        base_params: Constructor parameters when base_classifier is a name
        random_state: Seed for random-code generation
        n_jobs: Parallel sub-classifier fits (joblib semantics)
        verbose: Print training progress

    Example:
        >>> config = MultiClassConfig.from_dict({
        ...     'method': 'random-code',
        ...     'random_width_factor': 3.0,
        ...     'base_classifier': 'logistic',
        ...     'base_params': {'C': 0.5},
        ... })
        >>> clf = MultiClassClassifier.from_config(config)
    """

    method: Union[CodeMethod, str, int] = CodeMethod.ONE_VS_ALL
    random_width_factor: float = 2.0
    base_classifier: Optional[Any] = None
    base_params: Dict[str, Any] = field(default_factory=dict)
    random_state: Optional[int] = None
    n_jobs: Optional[int] = None
    verbose: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Check the options.

        Raises:
            ConfigurationError: Unknown method, non-positive width factor, or
                                no base classifier
        """
        self.method = CodeMethod.parse(self.method)
        if not self.random_width_factor > 0:
            raise ConfigurationError(
                f"random_width_factor must be positive, got {self.random_width_factor}"
            )
        if self.base_classifier is None:
            raise ConfigurationError("A base classifier must be specified")
        if self.base_params and not isinstance(self.base_classifier, str):
            raise ConfigurationError(
                "base_params only apply when base_classifier is given by name"
            )

    def build_base_classifier(self) -> BaseEstimator:
        """Unfitted base classifier described by this configuration."""
        if isinstance(self.base_classifier, str):
            return get_base_classifier(self.base_classifier, **self.base_params)
        return self.base_classifier

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> 'MultiClassConfig':
        """
        Build a configuration from a plain dict.

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {unknown}. Available: {sorted(known)}"
            )
        return cls(**options)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form; the method is written as its string value."""
        options = asdict(self)
        options['method'] = self.method.value
        options['base_params'] = dict(self.base_params)
        return options
