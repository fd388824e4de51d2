import numpy as np
import pandas as pd
import pytest

from src.utils.dataset_splitter import split_indices, train_size_for, train_test_split_frame


class TestSplitCompleteness:

    @pytest.mark.parametrize("n,fraction,seed", [
        (10, 0.7, 42), (1, 0.5, 0), (101, 0.3, 7), (2410, 0.75, 123), (0, 0.5, 1)
    ])
    def test_partition_covers_every_index_once(self, n, fraction, seed):
        train, test = split_indices(n, fraction, seed)
        assert len(np.intersect1d(train, test)) == 0
        assert sorted(np.concatenate([train, test]).tolist()) == list(range(n))

    @pytest.mark.parametrize("n,fraction,expected", [
        (10, 0.7, 7), (5, 0.5, 3), (3, 0.5, 2), (7, 0.75, 5), (100, 0.7, 70)
    ])
    def test_train_size_rounds_half_up(self, n, fraction, expected):
        train, test = split_indices(n, fraction, seed=1)
        assert len(train) == expected == train_size_for(n, fraction)
        assert len(test) == n - expected

    def test_indices_sorted(self):
        train, test = split_indices(50, 0.6, seed=3)
        assert np.all(np.diff(train) > 0)
        assert np.all(np.diff(test) > 0)


class TestSplitDeterminism:

    def test_same_seed_same_split(self):
        first = split_indices(200, 0.7, seed=42)
        second = split_indices(200, 0.7, seed=42)
        np.testing.assert_array_equal(first[0], second[0])
        np.testing.assert_array_equal(first[1], second[1])

    def test_different_seed_different_split(self):
        first, _ = split_indices(200, 0.7, seed=1)
        second, _ = split_indices(200, 0.7, seed=2)
        assert not np.array_equal(first, second)


class TestSplitValidation:

    @pytest.mark.parametrize("fraction", [0.0, 1.0, -0.2, 1.5])
    def test_fraction_outside_open_interval(self, fraction):
        with pytest.raises(ValueError, match="train_fraction"):
            split_indices(10, fraction)

    def test_negative_size(self):
        with pytest.raises(ValueError):
            split_indices(-1, 0.5)


def test_split_frame_uses_positional_rows():
    df = pd.DataFrame({'x': range(20)}, index=range(100, 120))
    train, test = train_test_split_frame(df, 0.7, seed=5)
    train_idx, test_idx = split_indices(20, 0.7, seed=5)
    assert train['x'].tolist() == train_idx.tolist()
    assert test['x'].tolist() == test_idx.tolist()
