import matplotlib
matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def raw_beers():
    return pd.DataFrame({
        'Name': ['Hop Bomb', 'Hazy Days', 'Red Barn', 'Blonde Bay', 'Night Owl', 'Lemon Lager', 'Mystery Malt'],
        'Beer_ID': [1, 2, 3, 4, 5, 6, 7],
        'ABV': [0.065, np.nan, 0.055, 0.050, 0.092, 0.045, np.nan],
        'IBU': [70.0, 60.0, np.nan, 20.0, 100.0, np.nan, np.nan],
        'Brewery_id': [10, 10, 11, 11, 12, 12, 12],
        'Style': ['American IPA', 'American IPA', 'American Amber / Red Ale',
                  'American Blonde Ale', 'American Double / Imperial IPA',
                  'American Pale Lager', 'Low Alcohol Beer'],
        'Ounces': [12.0, 16.0, 12.0, 12.0, 16.0, 12.0, 12.0]
    })


@pytest.fixture
def raw_breweries():
    return pd.DataFrame({
        'Brew_ID': [10, 11, 12],
        'Name': ['Northern Hops', 'Valley Brewing', 'Coastal Ales'],
        'City': ['Portland', 'Boulder', 'San Diego'],
        'State': [' OR', ' CO', ' CA']
    })


@pytest.fixture
def csv_paths(tmp_path, raw_beers, raw_breweries):
    beers_path = tmp_path / 'Beers.csv'
    breweries_path = tmp_path / 'Breweries.csv'
    raw_beers.to_csv(beers_path, index=False)
    raw_breweries.to_csv(breweries_path, index=False)
    return beers_path, breweries_path


@pytest.fixture
def synthetic_beers():
    """Two well separated clusters of IPA and Other Ales plus a few Other rows."""
    rng = np.random.RandomState(0)
    n = 40
    ipa = pd.DataFrame({
        'beer_name': [f'ipa_{i}' for i in range(n)],
        'style': rng.choice(['American IPA', 'American Double / Imperial IPA'], n),
        'abv': rng.normal(0.07, 0.005, n),
        'ibu': rng.normal(75, 5, n),
        'ounces': 12.0,
        'state': 'OR'
    })
    ales = pd.DataFrame({
        'beer_name': [f'ale_{i}' for i in range(n)],
        'style': rng.choice(['American Pale Ale (APA)', 'American Amber / Red Ale',
                             'American Blonde Ale'], n),
        'abv': rng.normal(0.05, 0.005, n),
        'ibu': rng.normal(25, 5, n),
        'ounces': 12.0,
        'state': 'CO'
    })
    other = pd.DataFrame({
        'beer_name': ['lager_0', 'lager_1'],
        'style': ['American Pale Lager', 'Hefeweizen'],
        'abv': [0.045, 0.05],
        'ibu': [15.0, 12.0],
        'ounces': 12.0,
        'state': 'CA'
    })
    return pd.concat([ipa, ales, other], ignore_index=True)
