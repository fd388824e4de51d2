import numbers

import numpy as np

from src.utils.confusion_matrix import score_predictions
from src.utils.errors import EmptyTrainingSetError, InvalidKError, LengthMismatchError


class KNNClassifier:
    """Majority-vote k-nearest-neighbours classifier on raw Euclidean distance.

    Features are used as given (no scaling). Ties are resolved deterministically:

    * neighbours at equal distance keep training order, so the earlier
      training point wins the last slot of the K-neighbourhood;
    * when several labels share the top vote count, the one that appears
      first among the selected neighbours (in training order) is predicted.
    """

    def __init__(self, k: int = 5):
        if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 1:
            raise InvalidKError(f"k must be a positive integer, got {k!r}")
        self.k = int(k)
        self.X_train = None
        self.y_train = None
        self.classes_ = None

    def fit(self, X, y):
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=object)

        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if X.shape[0] == 0:
            raise EmptyTrainingSetError("Training set is empty")
        if X.shape[0] != y.shape[0]:
            raise LengthMismatchError(f"X has {X.shape[0]} rows but y has {y.shape[0]} labels")
        if self.k > X.shape[0]:
            raise InvalidKError(f"k={self.k} exceeds training set size {X.shape[0]}")
        if not np.isfinite(X).all():
            raise ValueError("Training features contain missing or infinite values")

        self.X_train = X
        self.y_train = y
        self.classes_ = list(dict.fromkeys(y.tolist()))
        return self

    def _check_fitted(self):
        if self.X_train is None:
            raise EmptyTrainingSetError("Classifier has not been fitted")

    def kneighbors(self, X):
        """Return (distances, indices) of the k nearest training points, nearest first."""
        self._check_fitted()
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(1, -1) if self.X_train.shape[1] > 1 else X.reshape(-1, 1)
        if X.shape[1] != self.X_train.shape[1]:
            raise ValueError(f"Expected {self.X_train.shape[1]} features, got {X.shape[1]}")
        if not np.isfinite(X).all():
            raise ValueError("Query features contain missing or infinite values")

        diffs = X[:, np.newaxis, :] - self.X_train[np.newaxis, :, :]
        distances = np.sqrt(np.sum(diffs ** 2, axis=2))

        # stable sort keeps training order among equal distances
        order = np.argsort(distances, axis=1, kind='stable')[:, :self.k]
        return np.take_along_axis(distances, order, axis=1), order

    def _vote(self, neighbor_idx):
        labels = self.y_train[np.sort(neighbor_idx)]

        counts = {}
        for label in labels:
            counts[label] = counts.get(label, 0) + 1

        # dicts keep insertion order, so max() returns the earliest tied label
        return max(counts, key=counts.get)

    def predict(self, X):
        _, neighbors = self.kneighbors(X)
        return np.array([self._vote(row) for row in neighbors], dtype=object)

    def score(self, X, y):
        return score_predictions(y, self.predict(X)).accuracy
