"""
Query and ground truth data management for field retrieval evaluation.
Handles loading, normalization and validation of the two index-aligned lists.
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from evaluation.normalizer import normalize_ground_truth, normalize_query_text
from utils.exceptions import EmptyInputError, LengthMismatchError
from utils.storage import load_json_list

logger = logging.getLogger(__name__)


@dataclass
class EvaluationDataset:
    """Normalized queries and their expected fields, aligned by index."""
    queries: List[str]
    ground_truth: List[List[Any]]
    queries_path: Optional[Path] = None
    ground_truth_path: Optional[Path] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(
        cls,
        raw_queries: List[Any],
        raw_ground_truth: List[Any],
        **kwargs
    ) -> 'EvaluationDataset':
        """
        Normalize raw JSON entries into a dataset.

        Args:
            raw_queries: Strings or records with a query text key
            raw_ground_truth: Arrays or records wrapping an array

        Raises:
            EmptyInputError: If either list is empty
        """
        queries = [normalize_query_text(item) for item in raw_queries or []]
        ground_truth = [normalize_ground_truth(item) for item in raw_ground_truth or []]

        if not queries:
            raise EmptyInputError("queries.json")
        if not ground_truth:
            raise EmptyInputError("ground_truth.json")

        return cls(queries=queries, ground_truth=ground_truth, **kwargs)

    @classmethod
    def load(cls, queries_path: Path | str, ground_truth_path: Path | str) -> 'EvaluationDataset':
        """
        Load queries and ground truth from JSON files.

        Args:
            queries_path: JSON array of queries
            ground_truth_path: JSON array of expected field lists

        Returns:
            Loaded dataset
        """
        queries_path = Path(queries_path)
        ground_truth_path = Path(ground_truth_path)

        logger.info(f"Loading queries from: {queries_path}")
        raw_queries = load_json_list(queries_path)

        logger.info(f"Loading ground truth from: {ground_truth_path}")
        raw_ground_truth = load_json_list(ground_truth_path)

        dataset = cls.from_raw(
            raw_queries,
            raw_ground_truth,
            queries_path=queries_path,
            ground_truth_path=ground_truth_path
        )
        logger.info(f"Loaded {len(dataset.queries)} queries and {len(dataset.ground_truth)} ground truth entries")
        return dataset

    def __len__(self) -> int:
        """Number of query positions that have both a query and ground truth."""
        return min(len(self.queries), len(self.ground_truth))

    def check_lengths(self) -> None:
        """
        Require as many ground truth entries as queries.

        Raises:
            LengthMismatchError: If the counts differ
        """
        if len(self.queries) != len(self.ground_truth):
            raise LengthMismatchError(len(self.queries), len(self.ground_truth))

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about the dataset.

        Returns:
            Dictionary with statistics
        """
        field_counts = [len(fields) for fields in self.ground_truth]

        return {
            "num_queries": len(self.queries),
            "num_ground_truth": len(self.ground_truth),
            "total_expected_fields": sum(field_counts),
            "avg_fields_per_query": sum(field_counts) / len(field_counts) if field_counts else 0.0,
            "min_fields_per_query": min(field_counts, default=0),
            "max_fields_per_query": max(field_counts, default=0),
            "queries_without_fields": sum(1 for count in field_counts if count == 0),
            "empty_query_texts": sum(1 for text in self.queries if not text.strip())
        }

    def log_summary(self) -> None:
        """Log a summary of the dataset."""
        stats = self.get_statistics()

        logger.info(f"Queries: {stats['num_queries']}, ground truth entries: {stats['num_ground_truth']}")
        logger.info(
            f"Expected fields per query: avg {stats['avg_fields_per_query']:.2f}, "
            f"min {stats['min_fields_per_query']}, max {stats['max_fields_per_query']}"
        )

        if stats["num_queries"] != stats["num_ground_truth"]:
            logger.warning(
                f"Queries ({stats['num_queries']}) and ground truth ({stats['num_ground_truth']}) "
                f"differ in length; only the first {len(self)} positions are evaluated"
            )
        if stats["queries_without_fields"]:
            logger.warning(f"{stats['queries_without_fields']} ground truth entries have no fields")
        if stats["empty_query_texts"]:
            logger.warning(f"{stats['empty_query_texts']} queries have empty text")
