import pandas as pd
import numpy as np
from pathlib import Path

from config.settings import (
    BEER_COLUMNS, BREWERY_COLUMNS, DATA_PATHS, DROP_UNRESOLVED,
    GROUP_COLUMN, IMPUTATION_OVERRIDES, IMPUTED_COLUMNS
)
from src.preprocessing.group_imputer import GroupImputer
from src.preprocessing.beer_labels import add_beer_type


def load_beers(path=DATA_PATHS['beers']):
    beers = pd.read_csv(path).rename(columns=BEER_COLUMNS)

    missing = [col for col in BEER_COLUMNS.values() if col not in beers.columns]
    if missing:
        raise KeyError(f"Beer file {path} is missing columns: {missing}")

    for col in ['abv', 'ibu', 'ounces']:
        beers[col] = pd.to_numeric(beers[col], errors='coerce')

    return beers


def load_breweries(path=DATA_PATHS['breweries']):
    breweries = pd.read_csv(path).rename(columns=BREWERY_COLUMNS)

    missing = [col for col in BREWERY_COLUMNS.values() if col not in breweries.columns]
    if missing:
        raise KeyError(f"Brewery file {path} is missing columns: {missing}")

    for col in ['brewery_name', 'city', 'state']:
        breweries[col] = breweries[col].map(lambda value: value.strip() if isinstance(value, str) else value)

    return breweries


def join_beers_breweries(beers, breweries):
    # merge only keeps left-row order on newer pandas; restore beer order explicitly
    joined = beers.assign(_row_position=np.arange(len(beers))).merge(
        breweries, on='brewery_id', how='inner', sort=False
    )
    joined = joined.sort_values('_row_position', kind='stable').drop(columns='_row_position')
    return joined.reset_index(drop=True)


class BeerPreprocessor:

    def __init__(self, overrides=None, drop_unresolved=DROP_UNRESOLVED,
                 fields=None, group_column=GROUP_COLUMN):
        self.overrides = IMPUTATION_OVERRIDES if overrides is None else overrides
        self.drop_unresolved = drop_unresolved
        self.fields = list(IMPUTED_COLUMNS if fields is None else fields)
        self.imputer = GroupImputer(group_column=group_column, overrides=self.overrides)
        self.missing_before = None
        self.dropped_rows = 0

    def preprocess(self, df, verbose=True):
        df_processed = df.copy()

        if verbose:
            print("Beer Dataset Preprocessing Steps:")
            print("=" * 50)
            print("1. Counting missing values...")

        self.missing_before = {field: int(df_processed[field].isna().sum()) for field in self.fields}

        if verbose:
            for field, count in self.missing_before.items():
                print(f"   {field}: {count} missing of {len(df_processed)}")
            print(f"2. Imputing {self.fields} with {self.imputer.group_column} means...")

        df_processed = self.imputer.impute(df_processed, self.fields)

        if verbose:
            for field in self.fields:
                print(f"   {field}: imputed {self.imputer.imputed_counts_[field]} values")
                if self.imputer.unresolved_[field]:
                    print(f"   {field}: no observed values for {self.imputer.unresolved_[field]}")

        unresolved = df_processed[self.fields].isna().any(axis=1)
        if self.drop_unresolved:
            if verbose:
                print("3. Removing rows that could not be imputed...")
            self.dropped_rows = int(unresolved.sum())
            df_processed = df_processed.loc[~unresolved].reset_index(drop=True)
            if verbose:
                print(f"   Removed {self.dropped_rows} rows")
        else:
            self.dropped_rows = 0
            if verbose and unresolved.any():
                print(f"3. Keeping {int(unresolved.sum())} rows with unresolved values")

        if verbose:
            print("4. Deriving beer type labels...")
        df_processed = add_beer_type(df_processed, style_column=self.imputer.group_column)

        if verbose:
            print(f"   Beer types: {df_processed['beer_type'].value_counts().to_dict()}")
            print(f"\nFinal processed dataset shape: {df_processed.shape}")

        return df_processed

    def get_feature_info(self):
        if self.missing_before is None:
            return "Preprocessor not fitted yet"

        info = {
            'fields': self.fields,
            'missing_before': self.missing_before,
            'imputed_counts': dict(self.imputer.imputed_counts_),
            'unresolved_categories': dict(self.imputer.unresolved_),
            'dropped_rows': self.dropped_rows
        }
        return info


def preprocess_beer_dataset(beers_path=DATA_PATHS['beers'], breweries_path=DATA_PATHS['breweries'],
                            output_dir=DATA_PATHS['processed'], verbose=True):

    Path(output_dir).mkdir(parents=True, exist_ok=True)

    if verbose:
        print("Loading Beer and Brewery datasets...")
    beers = load_beers(beers_path)
    breweries = load_breweries(breweries_path)
    joined = join_beers_breweries(beers, breweries)

    preprocessor = BeerPreprocessor()
    cleaned = preprocessor.preprocess(joined, verbose=verbose)

    output_file = Path(output_dir) / 'beers_imputed.csv'
    cleaned.to_csv(output_file, index=False)

    if verbose:
        print(f"\nPreprocessing complete!")
        print(f"Saved files:")
        print(f"  - {output_file}: {cleaned.shape}")
        print(f"  Rows with complete features: {int(np.sum(cleaned[preprocessor.fields].notna().all(axis=1)))}")

    return cleaned, preprocessor


if __name__ == "__main__":
    df, preprocessor = preprocess_beer_dataset()
