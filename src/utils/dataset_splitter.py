import math

import numpy as np


def train_size_for(n_samples, train_fraction):
    if not 0 < train_fraction < 1:
        raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")
    # round half away from zero, not numpy's round-half-to-even
    return int(math.floor(train_fraction * n_samples + 0.5))


def split_indices(n_samples, train_fraction=0.7, seed=42):
    """Partition ``range(n_samples)`` into disjoint train/test index arrays.

    Training indices are drawn uniformly without replacement from a
    ``RandomState`` seeded with ``seed``; the same (n, fraction, seed) always
    yields the same partition. Both arrays are returned in ascending order.
    """
    if n_samples < 0:
        raise ValueError(f"n_samples must be non-negative, got {n_samples}")

    n_train = train_size_for(n_samples, train_fraction)

    rng = np.random.RandomState(seed)
    permutation = rng.permutation(n_samples)

    train_idx = np.sort(permutation[:n_train])
    test_idx = np.sort(permutation[n_train:])
    return train_idx, test_idx


def train_test_split_frame(df, train_fraction=0.7, seed=42):
    train_idx, test_idx = split_indices(len(df), train_fraction, seed)
    return df.iloc[train_idx], df.iloc[test_idx]
