import pandas as pd


def breweries_per_state(breweries, state_column='state'):
    counts = breweries.groupby(state_column).size().sort_values(ascending=False)
    return counts.rename('breweries').reset_index()


def missing_value_summary(df):
    missing_values = df.isnull().sum()
    missing_percent = (missing_values / len(df)) * 100 if len(df) else missing_values * 0.0
    summary = pd.DataFrame({
        'Column': missing_values.index,
        'Missing Count': missing_values.values,
        'Missing Percentage': missing_percent.values
    }).sort_values('Missing Count', ascending=False)
    return summary.reset_index(drop=True)


def median_by_state(df, columns=('abv', 'ibu'), state_column='state'):
    return df.groupby(state_column)[list(columns)].median().reset_index()


def max_by_column(df, column, state_column='state'):
    """Row holding the largest value of ``column`` (first row on ties), as a dict."""
    values = df[column].dropna()
    if values.empty:
        raise ValueError(f"Column '{column}' has no observed values")
    row = df.loc[values.idxmax()]
    return {
        'state': row[state_column],
        'beer_name': row.get('beer_name'),
        column: float(row[column])
    }


def summary_statistics(df, column='abv'):
    return df[column].describe()
