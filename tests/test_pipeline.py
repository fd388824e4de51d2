import warnings

import numpy as np
import pandas as pd
import pytest

from src.pipeline.beer_classification import (
    run_beer_type_classification, run_full_analysis, run_knn_classification, run_style_classification
)
from src.utils.dataset_splitter import split_indices
from src.utils.errors import MissingCategoryMeanWarning


class TestBeerTypeModel:

    def test_excludes_other_and_separates_clusters(self, synthetic_beers):
        run = run_beer_type_classification(synthetic_beers, max_k=20, verbose=False)
        assert run.labels == ['IPA', 'Other Ales']
        assert len(run.train_idx) + len(run.test_idx) == 80
        assert len(run.train_idx) == 56
        assert run.report.accuracy == pytest.approx(run.sweep.best_accuracy)
        assert run.sweep.best_accuracy == 1.0

    def test_summary_has_binary_metrics(self, synthetic_beers):
        run = run_beer_type_classification(synthetic_beers, max_k=5, verbose=False)
        summary = run.summary()
        assert list(summary.columns) == ['Model name', 'Accuracy', 'Sensitivity', 'Specificity']
        assert summary.loc[0, 'Model name'] == 'KNN IPA vs Other Ales'

    def test_accuracy_frame(self, synthetic_beers):
        run = run_beer_type_classification(synthetic_beers, max_k=7, verbose=False)
        frame = run.accuracy_frame()
        assert frame['k'].tolist() == list(range(1, 8))
        assert frame['accuracy'].tolist() == run.sweep.accuracies

    def test_reproducible(self, synthetic_beers):
        first = run_beer_type_classification(synthetic_beers, max_k=10, seed=5, verbose=False)
        second = run_beer_type_classification(synthetic_beers, max_k=10, seed=5, verbose=False)
        assert first.best_k == second.best_k
        np.testing.assert_array_equal(first.test_idx, second.test_idx)
        assert first.predictions.tolist() == second.predictions.tolist()

    def test_cross_validated_sweep_attached(self, synthetic_beers):
        run = run_beer_type_classification(synthetic_beers, max_k=5, cv_folds=3, verbose=False)
        assert run.cv_sweep is not None
        assert len(run.cv_sweep.accuracies) == 5


class TestStyleModel:

    def test_five_style_labels(self, synthetic_beers):
        run = run_style_classification(synthetic_beers, max_k=10, verbose=False)
        assert len(run.labels) == 5
        summary = run.summary()
        assert list(summary.columns) == ['Style', 'Balanced_Accuracy']
        assert summary['Style'].tolist() == run.labels


class TestValidation:

    def test_missing_features_rejected(self):
        df = pd.DataFrame({'abv': [0.05, np.nan, 0.07], 'ibu': [20.0, 30.0, 40.0], 'label': ['a', 'b', 'a']})
        with pytest.raises(ValueError, match="missing values"):
            run_knn_classification(df, 'label', 'test', verbose=False)

    def test_split_matches_splitter(self, synthetic_beers):
        df = synthetic_beers.assign(label=synthetic_beers['style'])
        run = run_knn_classification(df, 'label', 'all styles', max_k=3, seed=9, verbose=False)
        train_idx, _ = split_indices(len(df), 0.7, 9)
        np.testing.assert_array_equal(run.train_idx, train_idx)


def test_full_analysis_from_csv(tmp_path, synthetic_beers):
    beers = pd.DataFrame({
        'Name': synthetic_beers['beer_name'],
        'Beer_ID': np.arange(len(synthetic_beers)),
        'ABV': synthetic_beers['abv'],
        'IBU': synthetic_beers['ibu'],
        'Brewery_id': np.arange(len(synthetic_beers)) % 3,
        'Style': synthetic_beers['style'],
        'Ounces': synthetic_beers['ounces']
    })
    beers.loc[[0, 5, 50], 'IBU'] = np.nan
    breweries = pd.DataFrame({
        'Brew_ID': [0, 1, 2],
        'Name': ['One', 'Two', 'Three'],
        'City': ['Bend', 'Denver', 'Austin'],
        'State': [' OR', ' CO', ' TX']
    })
    beers_path, breweries_path = tmp_path / 'Beers.csv', tmp_path / 'Breweries.csv'
    beers.to_csv(beers_path, index=False)
    breweries.to_csv(breweries_path, index=False)

    with warnings.catch_warnings():
        warnings.simplefilter('ignore', MissingCategoryMeanWarning)
        results = run_full_analysis(beers_path, breweries_path, max_k=10, verbose=False)

    assert len(results['cleaned']) == len(synthetic_beers)
    assert not results['cleaned'][['abv', 'ibu']].isna().any().any()
    assert results['correlation']['r'] > 0.5
    assert results['beer_type'].report.total == len(results['beer_type'].test_idx)
    assert len(results['style'].labels) == 5
