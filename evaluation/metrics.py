"""
Evaluation metrics for field retrieval.
Implements case-insensitive set matching and set-based precision, recall
and F1 with every empty-set case defined as 0.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
import logging

from config import EVALUATION_CONFIG

logger = logging.getLogger(__name__)

METRIC_NAMES = ("precision", "recall", "f1")


@dataclass(frozen=True)
class MetricScores:
    """Precision, recall and F1 for one query or one system."""
    precision: float = 0.0
    recall: float = 0.0
    f1: float = 0.0

    def rounded(self) -> 'MetricScores':
        """Copy with every value passed through format_metric."""
        return MetricScores(
            precision=format_metric(self.precision),
            recall=format_metric(self.recall),
            f1=format_metric(self.f1)
        )

    def to_dict(self) -> Dict[str, float]:
        return {"precision": self.precision, "recall": self.recall, "f1": self.f1}


def to_case_insensitive_set(values: Optional[Iterable[Any]]) -> Dict[str, str]:
    """
    Build a case-insensitive set of field names.

    Each element is stripped; non-strings and blanks are dropped. Keys are
    lower-cased and map to the first original form seen.

    Args:
        values: Sequence of field names (may contain junk)

    Returns:
        Dict of lower-cased key to display form, in insertion order
    """
    result: Dict[str, str] = {}
    for value in values or []:
        if not isinstance(value, str):
            continue
        trimmed = value.strip()
        if not trimmed:
            continue
        result.setdefault(trimmed.lower(), trimmed)
    return result


def compute_metrics(retrieved: Optional[Iterable[Any]], ground_truth: Optional[Iterable[Any]]) -> MetricScores:
    """
    Calculate precision, recall and F1 for one retrieved list.

    Precision = |R ∩ G| / |R|, 0 when R is empty
    Recall    = |R ∩ G| / |G|, 0 when G is empty
    F1        = 2PR / (P + R), 0 when P + R is 0

    Args:
        retrieved: Field names returned by a system
        ground_truth: Expected field names

    Returns:
        Unrounded MetricScores
    """
    retrieved_set = to_case_insensitive_set(retrieved)
    truth_set = to_case_insensitive_set(ground_truth)

    relevant = sum(1 for key in retrieved_set if key in truth_set)

    precision = 0.0 if len(retrieved_set) == 0 else relevant / len(retrieved_set)
    recall = 0.0 if len(truth_set) == 0 else relevant / len(truth_set)

    if precision + recall == 0:
        f1 = 0.0
    else:
        f1 = 2 * precision * recall / (precision + recall)

    return MetricScores(precision=precision, recall=recall, f1=f1)


def format_metric(value: float, digits: int = None) -> float:
    """Round a metric half-up for output; NaN and infinities become 0."""
    if digits is None:
        digits = EVALUATION_CONFIG["round_digits"]
    if value is None or not math.isfinite(value):
        return 0.0
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def aggregate_metrics(per_query_metrics: List[MetricScores]) -> MetricScores:
    """
    Aggregate metrics across multiple queries using mean.

    An empty list aggregates to all zeros.

    Args:
        per_query_metrics: One MetricScores per evaluated query

    Returns:
        Mean MetricScores
    """
    if not per_query_metrics:
        return MetricScores()

    means = {
        name: float(np.mean([getattr(m, name) for m in per_query_metrics]))
        for name in METRIC_NAMES
    }
    return MetricScores(**means)


def print_metrics_table(
    summaries: List[Any],
    title: str = "Per-System Averages"
) -> None:
    """
    Print per-system mean metrics in a formatted table.

    Args:
        summaries: Objects with system_name, num_queries and scores
        title: Title for the table
    """
    print("\n" + "=" * 72)
    print(f"{title:^72}")
    print("=" * 72)
    print(f"{'System':<30}{'Queries':>9}{'Precision':>11}{'Recall':>11}{'F1':>11}")
    print("-" * 72)

    for summary in summaries:
        scores = summary.scores
        print(
            f"{summary.system_name[:30]:<30}"
            f"{summary.num_queries:>9}"
            f"{format_metric(scores.precision):>11.4f}"
            f"{format_metric(scores.recall):>11.4f}"
            f"{format_metric(scores.f1):>11.4f}"
        )

    print("=" * 72 + "\n")
