"""
Tests for LabeledDataset and synthetic data generation.

Run with: pytest tests/test_dataset.py -v
"""

import numpy as np
import pytest
from mcensemble.data import LabeledDataset, generate_multiclass_data


class TestLabeledDatasetBasic:
    """Test basic functionality of LabeledDataset."""
    
    def test_initialization(self):
        X = np.random.rand(10, 3)
        y = np.array(['b', 'a', 'c', 'a', 'b', 'c', 'a', 'b', 'c', 'a'])
        
        data = LabeledDataset(X, y)
        
        assert data.n_instances == 10
        assert data.n_features == 3
        assert data.n_classes == 3
        np.testing.assert_array_equal(data.classes, ['a', 'b', 'c'])
        np.testing.assert_array_equal(data.y_index[:3], [1, 0, 2])
    
    def test_declared_classes_keep_order(self):
        X = np.random.rand(4, 2)
        y = np.array([2, 0, 2, 0])
        
        data = LabeledDataset(X, y, classes=[2, 1, 0])
        
        assert data.n_classes == 3
        np.testing.assert_array_equal(data.y_index, [0, 2, 0, 2])
        np.testing.assert_array_equal(data.class_counts(), [2, 0, 2])
    
    def test_one_dimensional_features(self):
        data = LabeledDataset(np.arange(4.0), np.array([0, 1, 0, 1]))
        assert data.X.shape == (4, 1)
    
    def test_subset_keeps_class_set(self):
        X = np.random.rand(6, 2)
        y = np.array(['a', 'b', 'c', 'a', 'b', 'c'])
        data = LabeledDataset(X, y)
        
        sub = data.subset(data.y_index != 2)
        
        assert sub.n_instances == 4
        assert sub.n_classes == 3
        np.testing.assert_array_equal(sub.class_counts(), [2, 2, 0])


class TestLabeledDatasetValidation:
    """Test input validation."""
    
    def test_dimension_mismatch(self):
        with pytest.raises(ValueError, match="must match"):
            LabeledDataset(np.random.rand(5, 2), np.array([0, 1, 0]))
    
    def test_empty_dataset(self):
        with pytest.raises(ValueError, match="at least one instance"):
            LabeledDataset(np.zeros((0, 2)), np.array([]))
    
    def test_undeclared_label(self):
        with pytest.raises(ValueError, match="not among declared classes"):
            LabeledDataset(np.random.rand(3, 2), np.array(['a', 'b', 'z']), classes=['a', 'b'])
    
    def test_duplicate_declared_classes(self):
        with pytest.raises(ValueError, match="duplicates"):
            LabeledDataset(np.random.rand(2, 2), np.array(['a', 'b']), classes=['a', 'b', 'a'])
    
    def test_bad_label_shape(self):
        with pytest.raises(ValueError, match="y must be 1D"):
            LabeledDataset(np.random.rand(2, 2), np.array([[0], [1]]))


class TestLabeledDatasetUtilities:
    """Test utility methods."""
    
    def test_repr(self):
        data = LabeledDataset(np.random.rand(8, 2), np.array([0, 1, 2, 3] * 2))
        repr_str = repr(data)
        
        assert "LabeledDataset" in repr_str
        assert "n_classes=4" in repr_str
    
    def test_summary(self):
        data = LabeledDataset(np.random.rand(4, 2), np.array(['x', 'y', 'y', 'y']))
        summary = data.summary()
        
        assert "Instances" in summary
        assert "75.0%" in summary


class TestSyntheticData:
    """Test synthetic multi-class data."""
    
    def test_shapes(self):
        X, y, classes = generate_multiclass_data(
            n_classes=5, n_per_class=20, n_features=3, random_state=0
        )
        
        assert X.shape == (100, 3)
        assert y.shape == (100,)
        np.testing.assert_array_equal(classes, ['c0', 'c1', 'c2', 'c3', 'c4'])
    
    def test_empty_classes(self):
        X, y, classes = generate_multiclass_data(
            n_classes=4, n_per_class=10, empty_classes=[3], random_state=0
        )
        data = LabeledDataset(X, y, classes=classes)
        
        np.testing.assert_array_equal(data.class_counts(), [10, 10, 10, 0])
    
    def test_reproducible(self):
        X1, y1, _ = generate_multiclass_data(random_state=3)
        X2, y2, _ = generate_multiclass_data(random_state=3)
        
        np.testing.assert_array_equal(X1, X2)
        np.testing.assert_array_equal(y1, y2)
    
    def test_invalid_parameters(self):
        with pytest.raises(ValueError, match="n_features"):
            generate_multiclass_data(n_features=1)
        with pytest.raises(ValueError, match="At least one class"):
            generate_multiclass_data(n_classes=2, empty_classes=[0, 1])
