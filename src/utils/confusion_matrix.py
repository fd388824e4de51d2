from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from src.utils.errors import EmptyInputError, LengthMismatchError


def _rate(numerator: int, denominator: int) -> Optional[float]:
    if denominator == 0:
        return None
    return numerator / denominator


@dataclass
class ConfusionReport:
    matrix: Dict[Tuple[Any, Any], int]
    labels: List[Any]
    total: int
    accuracy: float
    sensitivity: Optional[float] = None
    specificity: Optional[float] = None
    balanced_accuracy: Dict[Any, Optional[float]] = field(default_factory=dict)

    def count(self, actual, predicted) -> int:
        return self.matrix.get((actual, predicted), 0)

    def to_frame(self) -> pd.DataFrame:
        frame = pd.DataFrame(0, index=pd.Index(self.labels, name='Actual'),
                             columns=pd.Index(self.labels, name='Predicted'))
        for (actual, predicted), count in self.matrix.items():
            frame.loc[actual, predicted] = count
        return frame

    def summary_records(self, model_name: str = 'KNN') -> List[Dict[str, Any]]:
        if len(self.labels) > 2:
            return [
                {'Style': label, 'Balanced_Accuracy': self.balanced_accuracy[label]}
                for label in self.labels
            ]
        return [{
            'Model name': model_name,
            'Accuracy': self.accuracy,
            'Sensitivity': self.sensitivity,
            'Specificity': self.specificity
        }]

    def summary_frame(self, model_name: str = 'KNN') -> pd.DataFrame:
        return pd.DataFrame(self.summary_records(model_name))


def score_predictions(actual, predicted, labels=None) -> ConfusionReport:
    """Tabulate actual vs predicted labels and derive accuracy metrics.

    With two labels, sensitivity is the true-positive rate of the first label
    and specificity the true-positive rate of the second. With more than two,
    each label gets a balanced accuracy (mean of its one-vs-rest sensitivity
    and specificity). Rates whose denominator is zero are reported as None.
    ``labels`` fixes the label order; otherwise the sorted union of both
    sequences is used.
    """
    actual = list(actual)
    predicted = list(predicted)

    if len(actual) != len(predicted):
        raise LengthMismatchError(
            f"actual has {len(actual)} labels but predicted has {len(predicted)}"
        )
    if not actual:
        raise EmptyInputError("Cannot score empty label sequences")

    if labels is None:
        labels = sorted(set(actual) | set(predicted), key=str)
    else:
        labels = list(labels)
        unknown = (set(actual) | set(predicted)) - set(labels)
        if unknown:
            raise ValueError(f"Labels {sorted(unknown, key=str)} not in declared label set")

    matrix = dict(Counter(zip(actual, predicted)))
    total = len(actual)
    correct = sum(count for (a, p), count in matrix.items() if a == p)

    report = ConfusionReport(matrix=matrix, labels=labels, total=total, accuracy=correct / total)

    support = Counter(actual)
    predicted_counts = Counter(predicted)

    if len(labels) == 2:
        first, second = labels
        report.sensitivity = _rate(matrix.get((first, first), 0), support[first])
        report.specificity = _rate(matrix.get((second, second), 0), support[second])
    elif len(labels) > 2:
        for label in labels:
            tp = matrix.get((label, label), 0)
            fn = support[label] - tp
            fp = predicted_counts[label] - tp
            tn = total - tp - fn - fp

            sensitivity = _rate(tp, tp + fn)
            specificity = _rate(tn, tn + fp)
            if sensitivity is None or specificity is None:
                report.balanced_accuracy[label] = None
            else:
                report.balanced_accuracy[label] = (sensitivity + specificity) / 2

    return report
