import time
import warnings
from collections import namedtuple

import numpy as np
from joblib import Parallel, delayed
from sklearn.model_selection import KFold

from config.settings import CV_FOLDS, MAX_K, RANDOM_SEED
from src.models.knn_classifier import KNNClassifier
from src.utils.confusion_matrix import score_predictions
from src.utils.errors import EmptyTrainingSetError, InvalidKError

SweepResults = namedtuple('SweepResults', [
    'best_k', 'best_accuracy', 'accuracies', 'sweep_time'
])


def evaluate_k(k, X_train, y_train, X_test, y_test):
    model = KNNClassifier(k=k).fit(X_train, y_train)
    predictions = model.predict(X_test)
    return score_predictions(y_test, predictions).accuracy


def select_best_k(accuracies):
    # np.argmax returns the first maximum, i.e. the smallest K among ties
    best_idx = int(np.argmax(accuracies))
    return best_idx + 1, float(accuracies[best_idx])


class KNeighborsSweep:
    """Exhaustive scan over K = 1..max_k on a fixed train/test split.

    Every K is scored on the same split, so the selected K is tuned to that
    one split rather than cross-validated. ``cross_validated_sweep`` averages
    over folds instead.
    """

    def __init__(self, max_k=MAX_K, n_jobs=1, verbose=False):
        if isinstance(max_k, bool) or not isinstance(max_k, (int, np.integer)) or max_k < 1:
            raise InvalidKError(f"max_k must be a positive integer, got {max_k!r}")
        self.max_k = int(max_k)
        self.n_jobs = n_jobs
        self.verbose = verbose

    def _effective_max_k(self, n_train):
        if n_train == 0:
            raise EmptyTrainingSetError("Training set is empty")
        if self.max_k > n_train:
            warnings.warn(
                f"max_k={self.max_k} exceeds training set size {n_train}; sweeping K=1..{n_train}",
                UserWarning,
                stacklevel=3
            )
            return n_train
        return self.max_k

    def _scan(self, X_train, y_train, X_test, y_test, max_k):
        k_values = range(1, max_k + 1)

        if self.n_jobs == 1:
            accuracies = []
            for k in k_values:
                accuracies.append(evaluate_k(k, X_train, y_train, X_test, y_test))
                if self.verbose and k % max(1, max_k // 10) == 0:
                    print(f"  Progress: K={k}/{max_k} ({100 * k / max_k:.1f}%)")
            return accuracies

        # results come back in K order regardless of completion order
        return Parallel(n_jobs=self.n_jobs)(
            delayed(evaluate_k)(k, X_train, y_train, X_test, y_test) for k in k_values
        )

    def sweep(self, X_train, y_train, X_test, y_test):
        X_train = np.asarray(X_train, dtype=float)
        X_test = np.asarray(X_test, dtype=float)
        y_train = np.asarray(y_train, dtype=object)
        y_test = np.asarray(y_test, dtype=object)

        max_k = self._effective_max_k(len(X_train))

        if self.verbose:
            print(f"Sweeping K=1..{max_k} (train={len(X_train)}, test={len(X_test)})")

        start_time = time.time()
        accuracies = self._scan(X_train, y_train, X_test, y_test, max_k)
        best_k, best_accuracy = select_best_k(accuracies)
        sweep_time = time.time() - start_time

        if self.verbose:
            print(f"Best K={best_k} -> accuracy {best_accuracy:.4f} ({sweep_time:.1f}s)")

        return SweepResults(
            best_k=best_k,
            best_accuracy=best_accuracy,
            accuracies=list(accuracies),
            sweep_time=sweep_time
        )

    def cross_validated_sweep(self, X, y, n_folds=CV_FOLDS, seed=RANDOM_SEED):
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=object)

        if len(X) < n_folds:
            raise ValueError(f"Need at least {n_folds} samples for {n_folds}-fold cross-validation")

        folds = list(KFold(n_splits=n_folds, shuffle=True, random_state=seed).split(X))
        smallest_train = min(len(train_idx) for train_idx, _ in folds)
        max_k = self._effective_max_k(smallest_train)

        if self.verbose:
            print(f"{n_folds}-fold cross-validated sweep over K=1..{max_k}")

        start_time = time.time()
        fold_scores = []
        for fold_idx, (train_idx, val_idx) in enumerate(folds):
            fold_scores.append(self._scan(X[train_idx], y[train_idx], X[val_idx], y[val_idx], max_k))
            if self.verbose:
                print(f"  Fold {fold_idx + 1}/{n_folds} done")

        mean_accuracies = np.mean(np.array(fold_scores), axis=0)
        best_k, best_accuracy = select_best_k(mean_accuracies)
        sweep_time = time.time() - start_time

        if self.verbose:
            print(f"Best K={best_k} -> mean accuracy {best_accuracy:.4f} ({sweep_time:.1f}s)")

        return SweepResults(
            best_k=best_k,
            best_accuracy=best_accuracy,
            accuracies=mean_accuracies.tolist(),
            sweep_time=sweep_time
        )
