"""
Tests for code strategies.

Run with: pytest tests/test_codes.py -v
"""

import numpy as np
import pytest
from mcensemble.codes import (
    CodeMethod,
    MAX_EXHAUSTIVE_CLASSES,
    one_vs_all_code,
    exhaustive_code,
    random_code,
    one_vs_one_pairs,
    generate_code,
    is_valid_code,
    positive_indices,
    format_indices,
    format_code,
)
from mcensemble.errors import CodeSizeError, ConfigurationError


class TestCodeMethod:
    """Test method parsing."""

    def test_parse_values(self):
        assert CodeMethod.parse("one-vs-all") is CodeMethod.ONE_VS_ALL
        assert CodeMethod.parse("random-code") is CodeMethod.RANDOM
        assert CodeMethod.parse("exhaustive-code") is CodeMethod.EXHAUSTIVE
        assert CodeMethod.parse("one-vs-one") is CodeMethod.ONE_VS_ONE

    def test_parse_names_and_members(self):
        assert CodeMethod.parse("ONE_VS_ONE") is CodeMethod.ONE_VS_ONE
        assert CodeMethod.parse(CodeMethod.RANDOM) is CodeMethod.RANDOM

    def test_parse_legacy_tags(self):
        """Integer tags follow the historical option order."""
        assert CodeMethod.parse(0) is CodeMethod.ONE_VS_ALL
        assert CodeMethod.parse(1) is CodeMethod.RANDOM
        assert CodeMethod.parse(2) is CodeMethod.EXHAUSTIVE
        assert CodeMethod.parse(3) is CodeMethod.ONE_VS_ONE

    @pytest.mark.parametrize("value", ["bch", 4, -1, None, True, 2.0])
    def test_parse_unknown(self, value):
        with pytest.raises(ConfigurationError, match="Unrecognized correction code type"):
            CodeMethod.parse(value)

    def test_descriptions(self):
        assert CodeMethod.ONE_VS_ALL.description == "1-against-all"
        assert CodeMethod.ONE_VS_ONE.description == "1-against-1"
        assert not CodeMethod.ONE_VS_ONE.uses_code_matrix
        assert CodeMethod.EXHAUSTIVE.uses_code_matrix


class TestOneVsAll:
    """Test the identity code."""

    @pytest.mark.parametrize("n_classes", [3, 4, 7])
    def test_identity(self, n_classes):
        code = one_vs_all_code(n_classes)

        np.testing.assert_array_equal(code, np.eye(n_classes, dtype=bool))
        assert np.all(code.sum(axis=1) == 1)
        assert is_valid_code(code)


class TestExhaustive:
    """Test the exhaustive code."""

    def test_three_classes(self):
        code = exhaustive_code(3)

        expected = np.array([[1, 0, 0],
                             [1, 0, 1],
                             [1, 1, 0]], dtype=bool)
        np.testing.assert_array_equal(code, expected)

    @pytest.mark.parametrize("n_classes", [3, 4, 5, 6, 8])
    def test_properties(self, n_classes):
        code = exhaustive_code(n_classes)

        assert code.shape == (2 ** (n_classes - 1) - 1, n_classes)
        assert np.all(code[:, 0])
        # Every row is a genuine split
        assert np.all(code.any(axis=1) & ~code.all(axis=1))
        # No duplicate rows
        assert len({tuple(row) for row in code}) == len(code)
        assert is_valid_code(code)

    def test_covers_all_splits(self):
        """Each two-group split appears exactly once up to complementation."""
        n_classes = 4
        code = exhaustive_code(n_classes)

        splits = set()
        for row in code:
            group = frozenset(np.flatnonzero(row))
            other = frozenset(range(n_classes)) - group
            splits.add(frozenset([group, other]))

        assert len(splits) == len(code) == 7

    def test_too_many_classes(self):
        with pytest.raises(CodeSizeError, match="at most"):
            exhaustive_code(MAX_EXHAUSTIVE_CLASSES + 1)

    def test_size_error_is_configuration_error(self):
        assert issubclass(CodeSizeError, ConfigurationError)


class TestRandomCode:
    """Test random error-correcting codes."""

    @pytest.mark.parametrize("n_classes", [3, 4, 6, 10])
    def test_valid_and_sized(self, n_classes):
        code = random_code(n_classes, width_factor=2.0, random_state=0)

        assert code.shape == (2 * n_classes, n_classes)
        assert code.dtype == bool
        assert is_valid_code(code)
        assert np.all(code.any(axis=1) & ~code.all(axis=1))
        assert np.all(code.any(axis=0) & ~code.all(axis=0))

    def test_minimum_width(self):
        """Never fewer rows than classes."""
        code = random_code(5, width_factor=0.5, random_state=1)
        assert code.shape[0] == 5

    def test_fractional_width(self):
        code = random_code(4, width_factor=2.6, random_state=1)
        assert code.shape[0] == 10

    def test_reproducible(self):
        code1 = random_code(5, random_state=42)
        code2 = random_code(5, random_state=42)
        np.testing.assert_array_equal(code1, code2)

    def test_private_random_source(self):
        """Seeded generation does not depend on the global numpy state."""
        np.random.seed(0)
        code1 = random_code(5, random_state=7)
        np.random.seed(123)
        code2 = random_code(5, random_state=7)
        np.testing.assert_array_equal(code1, code2)

    def test_invalid_width_factor(self):
        with pytest.raises(ConfigurationError, match="must be positive"):
            random_code(4, width_factor=0.0)

    def test_exhausted_retries_keeps_last_candidate(self):
        """A single class can never form a valid code: warn, don't fail."""
        with pytest.warns(RuntimeWarning, match="No valid random code"):
            code = random_code(1, width_factor=2.0, random_state=0)

        assert code.shape == (2, 1)
        assert not is_valid_code(code)


class TestOneVsOne:
    """Test the pair list."""

    @pytest.mark.parametrize("n_classes", [3, 4, 6])
    def test_pairs(self, n_classes):
        pairs = one_vs_one_pairs(n_classes)

        assert len(pairs) == n_classes * (n_classes - 1) // 2
        assert all(i < j for i, j in pairs)
        assert len(set(pairs)) == len(pairs)
        assert pairs == sorted(pairs)

    def test_order(self):
        assert one_vs_one_pairs(3) == [(0, 1), (0, 2), (1, 2)]


class TestGenerateCode:
    """Test the dispatching generator."""

    def test_dispatch(self):
        np.testing.assert_array_equal(generate_code("one-vs-all", 4), one_vs_all_code(4))
        np.testing.assert_array_equal(generate_code(2, 4), exhaustive_code(4))
        np.testing.assert_array_equal(
            generate_code("random-code", 4, width_factor=3.0, random_state=5),
            random_code(4, width_factor=3.0, random_state=5)
        )

    def test_one_vs_one_has_no_matrix(self):
        with pytest.raises(ConfigurationError, match="does not use a code matrix"):
            generate_code("one-vs-one", 4)

    def test_verbose_prints_code(self, capsys):
        generate_code("one-vs-all", 3, verbose=True)
        out = capsys.readouterr().out
        assert "Code:" in out
        assert " 1 0 0" in out


class TestCodeInspection:
    """Test validity checks and formatting."""

    def test_invalid_codes(self):
        # All-same row
        assert not is_valid_code(np.array([[1, 1, 1], [1, 0, 0]], dtype=bool))
        # Class never positive
        assert not is_valid_code(np.array([[1, 0, 0], [0, 1, 0]], dtype=bool))
        # Class always positive
        assert not is_valid_code(np.array([[1, 0, 1], [1, 1, 0]], dtype=bool))
        assert not is_valid_code(np.zeros((0, 3), dtype=bool))

    def test_positive_indices(self):
        row = np.array([True, False, True, False])
        assert positive_indices(row) == (0, 2)
        assert format_indices(row) == "1,3"

    def test_format_code(self):
        code = np.array([[1, 0, 0],
                         [1, 1, 0]], dtype=bool)
        # One line per class, one column per code row
        assert format_code(code) == " 1 1\n 0 1\n 0 0"
