from dataclasses import dataclass
from typing import Any, List, Optional

import numpy as np
import pandas as pd

from config.settings import (
    DATA_PATHS, FEATURE_COLUMNS, MAX_K, RANDOM_SEED, STYLE_CLASSES, TRAIN_FRACTION
)
from src.models.knn_classifier import KNNClassifier
from src.preprocessing.beer_labels import BeerType, binary_label_frame, style_label_frame
from src.preprocessing.beer_preprocessor import (
    BeerPreprocessor, join_beers_breweries, load_beers, load_breweries
)
from src.utils.confusion_matrix import ConfusionReport, score_predictions
from src.utils.dataset_splitter import split_indices
from src.utils.knn_hyperparameter_sweep import KNeighborsSweep, SweepResults
from src.utils.statistical_tests import correlation_test


@dataclass
class KNNRunResult:
    model_name: str
    label_column: str
    labels: List[Any]
    train_idx: np.ndarray
    test_idx: np.ndarray
    sweep: SweepResults
    predictions: np.ndarray
    report: ConfusionReport
    cv_sweep: Optional[SweepResults] = None

    @property
    def best_k(self) -> int:
        return self.sweep.best_k

    def summary(self) -> pd.DataFrame:
        return self.report.summary_frame(self.model_name)

    def accuracy_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            'k': np.arange(1, len(self.sweep.accuracies) + 1),
            'accuracy': self.sweep.accuracies
        })


def run_knn_classification(df, label_column, model_name, labels=None,
                           feature_columns=FEATURE_COLUMNS, train_fraction=TRAIN_FRACTION,
                           seed=RANDOM_SEED, max_k=MAX_K, cv_folds=None, n_jobs=1,
                           verbose=True):

    if verbose:
        print(f"\n{'=' * 60}")
        print(f"KNN MODEL: {model_name.upper()}")
        print(f"{'=' * 60}")

    X = df[list(feature_columns)].to_numpy(dtype=float)
    y = df[label_column].to_numpy(dtype=object)

    if np.isnan(X).any():
        raise ValueError(f"Features {list(feature_columns)} still contain missing values; impute or drop them first")

    train_idx, test_idx = split_indices(len(df), train_fraction, seed)
    if verbose:
        print(f"Split: {len(train_idx)} train / {len(test_idx)} test (seed={seed})")

    sweeper = KNeighborsSweep(max_k=max_k, n_jobs=n_jobs, verbose=verbose)
    sweep = sweeper.sweep(X[train_idx], y[train_idx], X[test_idx], y[test_idx])

    cv_sweep = None
    if cv_folds:
        cv_sweep = sweeper.cross_validated_sweep(X[train_idx], y[train_idx], n_folds=cv_folds, seed=seed)

    model = KNNClassifier(k=sweep.best_k).fit(X[train_idx], y[train_idx])
    predictions = model.predict(X[test_idx])
    report = score_predictions(y[test_idx], predictions, labels=labels)

    if verbose:
        print(f"Final model K={sweep.best_k}: accuracy {report.accuracy:.4f}")
        print("Confusion matrix:")
        print(report.to_frame())

    return KNNRunResult(
        model_name=model_name,
        label_column=label_column,
        labels=report.labels,
        train_idx=train_idx,
        test_idx=test_idx,
        sweep=sweep,
        predictions=predictions,
        report=report,
        cv_sweep=cv_sweep
    )


def run_beer_type_classification(df, **kwargs):
    labeled = binary_label_frame(df).reset_index(drop=True)
    return run_knn_classification(
        labeled, 'beer_type', 'KNN IPA vs Other Ales',
        labels=[BeerType.IPA.value, BeerType.OTHER_ALES.value], **kwargs
    )


def run_style_classification(df, styles=STYLE_CLASSES, **kwargs):
    labeled = style_label_frame(df, styles).reset_index(drop=True)
    return run_knn_classification(
        labeled, 'style', 'KNN Beer Style', labels=list(styles), **kwargs
    )


def run_full_analysis(beers_path=DATA_PATHS['beers'], breweries_path=DATA_PATHS['breweries'],
                      preprocessor=None, verbose=True, **kwargs):
    beers = load_beers(beers_path)
    breweries = load_breweries(breweries_path)
    joined = join_beers_breweries(beers, breweries)

    preprocessor = preprocessor or BeerPreprocessor()
    cleaned = preprocessor.preprocess(joined, verbose=verbose)

    correlation = correlation_test(cleaned['abv'], cleaned['ibu'])
    if verbose:
        print(f"\nABV vs IBU: r={correlation['r']:.3f} (p={correlation['p_value']:.3g}, {correlation['strength']})")

    return {
        'joined': joined,
        'breweries': breweries,
        'cleaned': cleaned,
        'preprocessor': preprocessor,
        'correlation': correlation,
        'beer_type': run_beer_type_classification(cleaned, verbose=verbose, **kwargs),
        'style': run_style_classification(cleaned, verbose=verbose, **kwargs)
    }
