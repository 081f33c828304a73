"""
Evaluation module for field retrieval systems.
Provides input normalization, metrics, result discovery, evaluation
orchestration and CSV reporting.
"""

from evaluation.normalizer import (
    QUERY_TEXT_KEYS,
    GROUND_TRUTH_KEYS,
    RETRIEVED_KEYS,
    FieldListContext,
    normalize_query_text,
    normalize_field_list,
    normalize_ground_truth,
    normalize_retrieved
)

from evaluation.metrics import (
    MetricScores,
    to_case_insensitive_set,
    compute_metrics,
    format_metric,
    aggregate_metrics,
    print_metrics_table
)

from evaluation.discovery import (
    DiscoveredSystem,
    discover_result_files,
    parse_search_dirs,
    parse_system_filter
)

from evaluation.ground_truth import EvaluationDataset

from evaluation.evaluator import (
    ReportRow,
    SystemSummary,
    EvaluationReport,
    RetrievalEvaluator
)

from evaluation.report import REPORT_COLUMNS, write_report_csv

__all__ = [
    # Normalization
    'QUERY_TEXT_KEYS',
    'GROUND_TRUTH_KEYS',
    'RETRIEVED_KEYS',
    'FieldListContext',
    'normalize_query_text',
    'normalize_field_list',
    'normalize_ground_truth',
    'normalize_retrieved',

    # Metrics
    'MetricScores',
    'to_case_insensitive_set',
    'compute_metrics',
    'format_metric',
    'aggregate_metrics',
    'print_metrics_table',

    # Discovery
    'DiscoveredSystem',
    'discover_result_files',
    'parse_search_dirs',
    'parse_system_filter',

    # Dataset
    'EvaluationDataset',

    # Evaluator
    'ReportRow',
    'SystemSummary',
    'EvaluationReport',
    'RetrievalEvaluator',

    # Report
    'REPORT_COLUMNS',
    'write_report_csv'
]
