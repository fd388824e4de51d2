import re
from enum import Enum

import pandas as pd

from config.settings import BEER_TYPE_PATTERNS, STYLE_CLASSES


class BeerType(str, Enum):
    IPA = 'IPA'
    OTHER_ALES = 'Other Ales'
    OTHER = 'Other'


def classify_beer_type(style, patterns=None):
    if patterns is None:
        patterns = BEER_TYPE_PATTERNS

    if style is None or (isinstance(style, float) and pd.isna(style)):
        return BeerType.OTHER

    for beer_type, pattern in patterns.items():
        if re.search(pattern, str(style), flags=re.IGNORECASE):
            return BeerType(beer_type)

    return BeerType.OTHER


def add_beer_type(df, style_column='style', patterns=None):
    df_labeled = df.copy()
    df_labeled['beer_type'] = [classify_beer_type(style, patterns).value for style in df_labeled[style_column]]
    return df_labeled


def binary_label_frame(df, style_column='style', patterns=None):
    """Rows labelled IPA or Other Ales; the Other bucket is excluded from training."""
    df_labeled = df if 'beer_type' in df.columns else add_beer_type(df, style_column, patterns)
    keep = df_labeled['beer_type'].isin([BeerType.IPA.value, BeerType.OTHER_ALES.value])
    return df_labeled.loc[keep].copy()


def style_label_frame(df, styles=None, style_column='style'):
    if styles is None:
        styles = STYLE_CLASSES
    return df.loc[df[style_column].isin(styles)].copy()
