import warnings

import pandas as pd

from src.utils.errors import MissingCategoryMeanWarning


class GroupImputer:
    """Fill missing numeric values with the mean of the row's category.

    Every call returns a new DataFrame; the input table is never modified.
    Categories without a single observed value cannot be resolved: their rows
    stay missing, a ``MissingCategoryMeanWarning`` is emitted and the category
    is recorded in ``unresolved_`` so the caller can drop those rows.

    ``overrides`` maps ``{category: {field: value}}`` and takes precedence
    over the computed mean for that category.
    """

    def __init__(self, group_column='style', overrides=None):
        self.group_column = group_column
        self.overrides = overrides or {}
        self.group_means_ = {}
        self.unresolved_ = {}
        self.imputed_counts_ = {}

    def _check_columns(self, df, field):
        missing = [col for col in (self.group_column, field) if col not in df.columns]
        if missing:
            raise KeyError(f"Columns not found in table: {missing}")

    def fit(self, df, field):
        self._check_columns(df, field)

        values = pd.to_numeric(df[field], errors='coerce')
        means = values.groupby(df[self.group_column], sort=False).mean()

        for category, field_overrides in self.overrides.items():
            if field in field_overrides:
                means.loc[category] = float(field_overrides[field])

        self.group_means_[field] = means
        return self

    def transform(self, df, field):
        if field not in self.group_means_:
            raise RuntimeError(f"GroupImputer has not been fitted for '{field}'")
        self._check_columns(df, field)

        df_imputed = df.copy()
        values = pd.to_numeric(df_imputed[field], errors='coerce')
        missing_mask = values.isna()

        # Only missing entries are filled; observed values are never touched
        fill_values = df_imputed[self.group_column].map(self.group_means_[field])
        values = values.where(~missing_mask, fill_values)
        df_imputed[field] = values.astype(float)

        still_missing = missing_mask & values.isna()
        unresolved_groups = df_imputed.loc[still_missing, self.group_column]
        unresolved = sorted(unresolved_groups.dropna().unique().tolist())
        if unresolved_groups.isna().any():
            unresolved.append(None)

        self.unresolved_[field] = unresolved
        self.imputed_counts_[field] = int((missing_mask & ~still_missing).sum())

        if unresolved:
            warnings.warn(
                f"No observed '{field}' values for categories {unresolved}; "
                f"{int(still_missing.sum())} rows left missing",
                MissingCategoryMeanWarning,
                stacklevel=2
            )

        return df_imputed

    def fit_transform(self, df, field):
        return self.fit(df, field).transform(df, field)

    def impute(self, df, fields=('abv', 'ibu')):
        # Means come from the untouched input, so field order never matters
        for field in fields:
            self.fit(df, field)

        df_imputed = df.copy()
        for field in fields:
            df_imputed[field] = self.transform(df, field)[field]

        return df_imputed
