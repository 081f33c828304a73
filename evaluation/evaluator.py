"""
Main evaluator for field retrieval results.
Orchestrates evaluation of every discovered system against the shared
queries and ground truth, and builds the report rows.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from tqdm import tqdm

from config import EVALUATION_CONFIG
from evaluation.discovery import DiscoveredSystem
from evaluation.ground_truth import EvaluationDataset
from evaluation.metrics import (
    MetricScores,
    aggregate_metrics,
    compute_metrics,
    print_metrics_table
)
from evaluation.normalizer import normalize_ground_truth, normalize_retrieved
from utils.exceptions import LengthMismatchError, MalformedResultsError, NoSystemsDiscoveredError
from utils.storage import load_json

logger = logging.getLogger(__name__)


def render_field_list(fields: List[Any]) -> str:
    """Render a field list as compact JSON, keeping order and duplicates."""
    return json.dumps(fields, ensure_ascii=False, separators=(",", ":"))


@dataclass
class ReportRow:
    """One line of the report: a per-query detail row or a per-system average."""
    query_id: Union[int, str]
    query: str
    system_name: str
    retrieved_fields: str
    ground_truth: str
    precision: float
    recall: float
    f1_score: float

    @classmethod
    def detail(
        cls,
        index: int,
        query_text: str,
        system_name: str,
        retrieved: List[Any],
        ground_truth: List[Any],
        scores: MetricScores
    ) -> 'ReportRow':
        """Build a detail row; ``index`` is 0-based."""
        rounded = scores.rounded()
        return cls(
            query_id=index + 1,
            query=query_text,
            system_name=system_name,
            retrieved_fields=render_field_list(retrieved),
            ground_truth=render_field_list(ground_truth),
            precision=rounded.precision,
            recall=rounded.recall,
            f1_score=rounded.f1
        )

    @classmethod
    def average(cls, system_name: str, scores: MetricScores) -> 'ReportRow':
        """Build the AVERAGE row for a system."""
        rounded = scores.rounded()
        return cls(
            query_id="",
            query=EVALUATION_CONFIG["average_marker"],
            system_name=system_name,
            retrieved_fields="",
            ground_truth="",
            precision=rounded.precision,
            recall=rounded.recall,
            f1_score=rounded.f1
        )

    @property
    def is_average(self) -> bool:
        return self.query_id == "" and self.query == EVALUATION_CONFIG["average_marker"]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query_id": self.query_id,
            "query": self.query,
            "system_name": self.system_name,
            "retrieved_fields": self.retrieved_fields,
            "ground_truth": self.ground_truth,
            "precision": self.precision,
            "recall": self.recall,
            "f1_score": self.f1_score
        }


@dataclass
class SystemSummary:
    """Mean metrics of one system over its evaluated queries."""
    system_name: str
    num_queries: int
    scores: MetricScores


@dataclass
class EvaluationReport:
    """Ordered report rows plus per-system summaries."""
    rows: List[ReportRow] = field(default_factory=list)
    summaries: List[SystemSummary] = field(default_factory=list)

    @property
    def detail_rows(self) -> List[ReportRow]:
        return [row for row in self.rows if not row.is_average]

    @property
    def average_rows(self) -> List[ReportRow]:
        return [row for row in self.rows if row.is_average]

    def best_system(self, metric: str = None) -> Optional[SystemSummary]:
        """
        Find the system with the highest mean for a metric.

        Ties go to the system discovered first.

        Args:
            metric: One of precision, recall, f1 (default from config)

        Returns:
            Best SystemSummary, or None if there are no systems
        """
        metric = metric or EVALUATION_CONFIG["summary_metric"]
        if not self.summaries:
            return None

        best = self.summaries[0]
        for summary in self.summaries[1:]:
            if getattr(summary.scores, metric) > getattr(best.scores, metric):
                best = summary
        return best


class RetrievalEvaluator:
    """Evaluator for per-system field retrieval results."""

    def __init__(
        self,
        dataset: EvaluationDataset,
        strict_length: bool = False,
        show_progress: bool = False
    ):
        """
        Initialize evaluator.

        Args:
            dataset: Normalized queries and ground truth
            strict_length: Fail on any length mismatch instead of truncating
            show_progress: Show a tqdm progress bar over systems
        """
        self.dataset = dataset
        self.strict_length = strict_length
        self.show_progress = show_progress
        self.report = EvaluationReport()

    def load_system_results(self, system: DiscoveredSystem) -> List[Any]:
        """
        Load one system's results file.

        Raises:
            MalformedResultsError: If the top-level value is not an array
            LengthMismatchError: In strict mode, if the count differs from queries
        """
        data = load_json(system.file_path)

        if not isinstance(data, list):
            raise MalformedResultsError(system.system_name, system.file_path)

        if self.strict_length and len(data) != len(self.dataset.queries):
            raise LengthMismatchError(len(self.dataset.queries), len(data), system.system_name)

        logger.debug(f"Loaded {len(data)} result entries for {system.system_name}")
        return data

    def evaluate_system(self, system: DiscoveredSystem) -> SystemSummary:
        """
        Evaluate one system and append its detail rows to the report.

        Positions beyond the shortest of queries, ground truth and results
        are not evaluated.

        Returns:
            SystemSummary with mean metrics
        """
        results = self.load_system_results(system)
        queries = self.dataset.queries
        ground_truth = self.dataset.ground_truth

        count = min(len(queries), len(ground_truth), len(results))
        if count < len(queries):
            logger.warning(
                f"{system.system_name}: evaluating {count} of {len(queries)} queries "
                f"({len(results)} results, {len(ground_truth)} ground truth entries)"
            )

        per_query: List[MetricScores] = []
        for idx in range(count):
            gt_fields = normalize_ground_truth(ground_truth[idx])
            retrieved = normalize_retrieved(results[idx])

            scores = compute_metrics(retrieved, gt_fields)
            per_query.append(scores)

            self.report.rows.append(ReportRow.detail(
                index=idx,
                query_text=queries[idx],
                system_name=system.system_name,
                retrieved=retrieved,
                ground_truth=gt_fields,
                scores=scores
            ))

        if count == 0:
            logger.warning(f"{system.system_name}: no queries evaluated, averages reported as 0")

        return SystemSummary(
            system_name=system.system_name,
            num_queries=count,
            scores=aggregate_metrics(per_query)
        )

    def evaluate(self, discovered: List[DiscoveredSystem]) -> EvaluationReport:
        """
        Evaluate every discovered system.

        Detail rows come first, system by system in discovery order,
        followed by one AVERAGE row per system in the same order.

        Args:
            discovered: Systems in the order they should be reported

        Returns:
            EvaluationReport

        Raises:
            NoSystemsDiscoveredError: If ``discovered`` is empty
        """
        if not discovered:
            raise NoSystemsDiscoveredError()

        if self.strict_length:
            self.dataset.check_lengths()

        logger.info(f"Evaluating {len(discovered)} system(s) on {len(self.dataset.queries)} queries")

        self.report = EvaluationReport()

        for system in tqdm(discovered, desc="Evaluating systems", unit="system", disable=not self.show_progress):
            summary = self.evaluate_system(system)
            self.report.summaries.append(summary)
            logger.info(
                f"{summary.system_name}: P={summary.scores.precision:.4f} "
                f"R={summary.scores.recall:.4f} F1={summary.scores.f1:.4f} "
                f"({summary.num_queries} queries)"
            )

        for summary in self.report.summaries:
            self.report.rows.append(ReportRow.average(summary.system_name, summary.scores))

        logger.info(f"Evaluation complete: {len(self.report.rows)} report rows")
        return self.report

    def print_results(self) -> None:
        """Print per-system averages and the best system by F1."""
        if not self.report.summaries:
            logger.warning("No evaluation results to display")
            return

        print_metrics_table(self.report.summaries)

        best = self.report.best_system()
        if best is not None:
            print(f"Best system by F1: {best.system_name} ({best.scores.f1:.4f})\n")
