import sys
sys.path.append('.')

import pandas as pd

from config.settings import DATA_PATHS
from src.preprocessing.beer_preprocessor import join_beers_breweries, load_beers, load_breweries
from src.utils.descriptive_statistics import (
    breweries_per_state, max_by_column, median_by_state, missing_value_summary, summary_statistics
)
from src.utils.statistical_tests import correlation_test


def run_beer_eda(beers, breweries):
    joined = join_beers_breweries(beers, breweries)

    print("=== CRAFT BEER DATASET ANALYSIS ===\n")

    print("1. BREWERIES PER STATE")
    print("=" * 40)
    per_state = breweries_per_state(breweries)
    print(per_state.to_string(index=False))

    print("\n2. JOINED DATA")
    print("=" * 40)
    print(f"Dataset shape: {joined.shape}")
    print("\nFirst 6 rows:")
    print(joined.head(6))
    print("\nLast 6 rows:")
    print(joined.tail(6))

    print("\n3. MISSING VALUES ANALYSIS")
    print("=" * 40)
    missing_df = missing_value_summary(joined)
    print(missing_df[missing_df['Missing Count'] > 0].to_string(index=False))

    print("\n4. MEDIAN ABV AND IBU BY STATE")
    print("=" * 40)
    medians = median_by_state(joined)
    print(medians.to_string(index=False))

    print("\n5. MAXIMUM ABV AND IBU")
    print("=" * 40)
    max_abv = max_by_column(joined, 'abv')
    max_ibu = max_by_column(joined, 'ibu')
    print(f"Highest ABV: {max_abv['beer_name']} ({max_abv['state']}) at {max_abv['abv']:.3f}")
    print(f"Most bitter: {max_ibu['beer_name']} ({max_ibu['state']}) at {max_ibu['ibu']:.0f} IBU")

    print("\n6. ABV SUMMARY STATISTICS")
    print("=" * 40)
    print(summary_statistics(joined, 'abv'))

    print("\n7. ABV VS IBU CORRELATION")
    print("=" * 40)
    result = correlation_test(joined['abv'], joined['ibu'])
    low, high = result['confidence_interval']
    print(f"Pearson r = {result['r']:.3f} ({result['strength']}), 95% CI [{low:.3f}, {high:.3f}]")
    print(f"t = {result['t_statistic']:.2f}, df = {result['df']}, p = {result['p_value']:.3g}")
    print(f"Significant at 0.05: {'Yes' if result['significant'] else 'No'}")

    return {
        'breweries_per_state': per_state,
        'missing': missing_df,
        'medians': medians,
        'max_abv': max_abv,
        'max_ibu': max_ibu,
        'correlation': result
    }


if __name__ == "__main__":
    pd.set_option('display.width', 120)
    run_beer_eda(load_beers(DATA_PATHS['beers']), load_breweries(DATA_PATHS['breweries']))
