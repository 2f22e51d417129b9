"""
Code Strategies for Multi-Class Decomposition

A code strategy decides how the classes of a multi-class problem are grouped
into binary sub-problems:

- one-vs-all:      identity matrix, one row per class
- random-code:     random error-correcting output code
- exhaustive-code: every split of the classes into two non-empty groups,
                   complementary splits counted once
- one-vs-one:      explicit list of class pairs (no code matrix)

A code matrix is a boolean array of shape (n_codes × n_classes). Row r
describes sub-problem r: classes with a True bit form its positive group.
"""

from enum import Enum
from typing import List, Tuple, Union
import warnings

import numpy as np
from sklearn.utils import check_random_state

from ..errors import CodeSizeError, ConfigurationError


# 2^(20-1) - 1 rows is already far more sub-classifiers than anyone trains
MAX_EXHAUSTIVE_CLASSES = 20

DEFAULT_RANDOM_RETRIES = 100


class CodeMethod(str, Enum):
    """Decomposition methods understood by the trainer."""

    ONE_VS_ALL = "one-vs-all"
    RANDOM = "random-code"
    EXHAUSTIVE = "exhaustive-code"
    ONE_VS_ONE = "one-vs-one"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def uses_code_matrix(self) -> bool:
        return self is not CodeMethod.ONE_VS_ONE

    @classmethod
    def parse(cls, value: Union["CodeMethod", str, int]) -> "CodeMethod":
        """
        Resolve a method from an enum member, its name/value, or a legacy tag.

        Legacy integer tags: 0 one-vs-all, 1 random-code, 2 exhaustive-code,
        3 one-vs-one.

        Raises:
            ConfigurationError: If the value names no known method
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            if 0 <= value < len(_TAG_ORDER):
                return _TAG_ORDER[int(value)]
        elif isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            for method in cls:
                if key in (method.value, method.name.lower().replace("_", "-")):
                    return method
        raise ConfigurationError(
            f"Unrecognized correction code type: {value!r}. "
            f"Available: {[m.value for m in cls]}"
        )


_TAG_ORDER = (
    CodeMethod.ONE_VS_ALL,
    CodeMethod.RANDOM,
    CodeMethod.EXHAUSTIVE,
    CodeMethod.ONE_VS_ONE,
)

_DESCRIPTIONS = {
    CodeMethod.ONE_VS_ALL: "1-against-all",
    CodeMethod.RANDOM: "Random correction code",
    CodeMethod.EXHAUSTIVE: "Exhaustive correction code",
    CodeMethod.ONE_VS_ONE: "1-against-1",
}


def one_vs_all_code(n_classes: int) -> np.ndarray:
    """Identity code: row i isolates class i against the rest."""
    _check_n_classes(n_classes)
    return np.eye(n_classes, dtype=bool)


def exhaustive_code(n_classes: int) -> np.ndarray:
    """
    Exhaustive code over all two-group splits of the classes.

    Column 0 is always True, which picks one representative of every
    complementary pair of splits. For column i ≥ 1 the bit of row r is set
    iff floor(r / 2^(n_classes-1-i)) is odd, so the remaining columns
    enumerate binary counting over 2^(n_classes-1) - 1 rows (the all-True
    row is never produced).

    Parameters:
        n_classes: Number of classes (≤ MAX_EXHAUSTIVE_CLASSES)

    Returns:
        code: Boolean matrix (2^(n_classes-1) - 1 × n_classes)

    Raises:
        CodeSizeError: If n_classes exceeds MAX_EXHAUSTIVE_CLASSES

    Example:
        >>> exhaustive_code(3).astype(int)
        array([[1, 0, 0],
               [1, 0, 1],
               [1, 1, 0]])
    """
    _check_n_classes(n_classes)
    if n_classes > MAX_EXHAUSTIVE_CLASSES:
        raise CodeSizeError(
            f"Exhaustive code needs 2^{n_classes - 1} - 1 sub-classifiers; "
            f"at most {MAX_EXHAUSTIVE_CLASSES} classes are supported"
        )

    width = 2 ** (n_classes - 1) - 1
    rows = np.arange(width)

    code = np.zeros((width, n_classes), dtype=bool)
    code[:, 0] = True
    for i in range(1, n_classes):
        skip = 2 ** (n_classes - (i + 1))
        code[:, i] = (rows // skip) % 2 != 0
    return code


def is_valid_code(code: np.ndarray) -> bool:
    """
    Check the ECOC validity invariant.

    Every row must contain both a True and a False bit (a row with a single
    group is not a binary problem) and so must every column (a class that is
    always or never positive cannot be told apart by the code).
    """
    code = np.asarray(code, dtype=bool)
    if code.ndim != 2 or code.size == 0:
        return False
    rows_ok = code.any(axis=1) & ~code.all(axis=1)
    cols_ok = code.any(axis=0) & ~code.all(axis=0)
    return bool(rows_ok.all() and cols_ok.all())


def random_code(
    n_classes: int,
    width_factor: float = 2.0,
    random_state=None,
    max_retries: int = DEFAULT_RANDOM_RETRIES,
    verbose: bool = False
) -> np.ndarray:
    """
    Random error-correcting output code.

    Draws max(n_classes, int(n_classes * width_factor)) rows of fair coin
    bits and redraws until the matrix passes :func:`is_valid_code`, giving
    up after ``max_retries`` redraws. When the budget runs out the last
    candidate is kept as is and a RuntimeWarning is issued.

    Parameters:
        n_classes: Number of classes
        width_factor: Code length multiplier (> 0)
        random_state: Seed, RandomState instance or None
        max_retries: Maximum number of redraws after the first draw
        verbose: Whether to report the number of draws needed

    Returns:
        code: Boolean matrix (n_codes × n_classes)

    Raises:
        ConfigurationError: If width_factor is not positive
    """
    _check_n_classes(n_classes)
    if not width_factor > 0:
        raise ConfigurationError(
            f"random_width_factor must be positive, got {width_factor}"
        )

    rng = check_random_state(random_state)
    n_codes = max(n_classes, int(n_classes * width_factor))

    code = rng.random_sample((n_codes, n_classes)) >= 0.5
    attempts = 0
    while not is_valid_code(code) and attempts < max_retries:
        code = rng.random_sample((n_codes, n_classes)) >= 0.5
        attempts += 1

    if not is_valid_code(code):
        warnings.warn(
            f"No valid random code found for {n_classes} classes after "
            f"{max_retries} retries; using the last candidate.",
            RuntimeWarning
        )
    elif verbose:
        print(f"Random code accepted after {attempts + 1} draw(s)")

    return code


def one_vs_one_pairs(n_classes: int) -> List[Tuple[int, int]]:
    """All unordered class pairs (i, j), i < j, in ascending order."""
    _check_n_classes(n_classes)
    return [(i, j) for i in range(n_classes) for j in range(i + 1, n_classes)]


def generate_code(
    method: Union[CodeMethod, str, int],
    n_classes: int,
    width_factor: float = 2.0,
    random_state=None,
    verbose: bool = False
) -> np.ndarray:
    """
    Build the code matrix for an ECOC-style method.

    Parameters:
        method: One of one-vs-all, random-code, exhaustive-code
        n_classes: Number of classes
        width_factor: Code length multiplier (random-code only)
        random_state: Seed for random-code
        verbose: Print the generated code

    Returns:
        code: Boolean matrix (n_codes × n_classes)

    Raises:
        ConfigurationError: For one-vs-one (pairs, not a matrix) or unknown methods
    """
    method = CodeMethod.parse(method)

    if method is CodeMethod.ONE_VS_ALL:
        code = one_vs_all_code(n_classes)
    elif method is CodeMethod.EXHAUSTIVE:
        code = exhaustive_code(n_classes)
    elif method is CodeMethod.RANDOM:
        code = random_code(
            n_classes, width_factor, random_state=random_state, verbose=verbose
        )
    else:
        raise ConfigurationError(
            f"{method.value} does not use a code matrix; use one_vs_one_pairs()"
        )

    if verbose:
        print("Code:")
        print(format_code(code))
    return code


def positive_indices(row: np.ndarray) -> Tuple[int, ...]:
    """Class indices with a True bit in a code row."""
    return tuple(int(i) for i in np.flatnonzero(np.asarray(row, dtype=bool)))


def format_indices(row: np.ndarray) -> str:
    """1-based, comma separated positive indices of a code row, e.g. '1,3'."""
    return ",".join(str(i + 1) for i in positive_indices(row))


def format_code(code: np.ndarray) -> str:
    """
    Render a code matrix with one line per class and one column per code row.

    Example:
        >>> print(format_code(one_vs_all_code(3)))
         1 0 0
         0 1 0
         0 0 1
    """
    code = np.asarray(code, dtype=bool)
    lines = ["".join(" 1" if bit else " 0" for bit in column) for column in code.T]
    return "\n".join(lines)


def _check_n_classes(n_classes: int):
    if n_classes < 1:
        raise ValueError(f"n_classes must be positive, got {n_classes}")
