RANDOM_SEED = 42

TRAIN_FRACTION = 0.7
MAX_K = 100
CV_FOLDS = 5

FEATURE_COLUMNS = ['abv', 'ibu']
IMPUTED_COLUMNS = ['abv', 'ibu']
GROUP_COLUMN = 'style'

# Checked in order; first match wins
BEER_TYPE_PATTERNS = {
    'IPA': r'\bIPA\b|India Pale Ale',
    'Other Ales': r'\bAle\b',
}

STYLE_CLASSES = [
    'American IPA',
    'American Pale Ale (APA)',
    'American Amber / Red Ale',
    'American Blonde Ale',
    'American Double / Imperial IPA',
]

# {style: {column: fill_value}} used instead of the style mean.
# Empty by default: styles with no reported IBU at all (e.g. 'Cider', 'Mead',
# 'Low Alcohol Beer', 'American Malt Liquor') are dropped, not zero-filled.
# Add e.g. {'Cider': {'ibu': 0.0}} to keep a hop-free style with IBU 0.
IMPUTATION_OVERRIDES = {}
DROP_UNRESOLVED = True

BEER_COLUMNS = {
    'Name': 'beer_name',
    'Beer_ID': 'beer_id',
    'ABV': 'abv',
    'IBU': 'ibu',
    'Brewery_id': 'brewery_id',
    'Style': 'style',
    'Ounces': 'ounces'
}

BREWERY_COLUMNS = {
    'Brew_ID': 'brewery_id',
    'Name': 'brewery_name',
    'City': 'city',
    'State': 'state'
}

DATA_PATHS = {
    'beers': 'data/raw/Beers.csv',
    'breweries': 'data/raw/Breweries.csv',
    'processed': 'data/processed/'
}

RESULTS_PATHS = {
    'plots': 'results/plots/',
    'data': 'results/data/'
}
