"""
Field retrieval report script.
Evaluates every results_<system>.json against queries and ground truth and
writes precision, recall and F1 per query and per system to a CSV file.
"""
import sys
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from config import EVALUATION_CONFIG, resolve_input_path, resolve_output_path
from evaluation.discovery import discover_result_files, parse_search_dirs, parse_system_filter
from evaluation.evaluator import RetrievalEvaluator
from evaluation.ground_truth import EvaluationDataset
from evaluation.report import write_report_csv
from utils.exceptions import EvaluationError, NoSystemsDiscoveredError
from utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Compare field retrieval systems against ground truth and write a CSV report"
    )
    parser.add_argument(
        "-q", "--queries",
        type=str,
        required=True,
        help="Path to queries.json"
    )
    parser.add_argument(
        "-g", "--ground",
        type=str,
        required=True,
        help="Path to ground_truth.json"
    )
    parser.add_argument(
        "-i", "--inputs",
        type=str,
        default=EVALUATION_CONFIG["default_inputs"],
        help="Comma-separated directories to search for results_*.json (default: current directory)"
    )
    parser.add_argument(
        "-s", "--systems",
        type=str,
        help="Comma-separated system names to include (e.g., Control,HyDE)"
    )
    parser.add_argument(
        "-o", "--out",
        type=str,
        default=EVALUATION_CONFIG["default_output"],
        help=f"Output CSV file path (default: {EVALUATION_CONFIG['default_output']})"
    )
    parser.add_argument(
        "--strict-length", "--strictLength",
        dest="strict_length",
        action="store_true",
        help="Require queries, ground truth and every results file to have the same length"
    )
    parser.add_argument(
        "--show-summary",
        action="store_true",
        help="Print a per-system summary table"
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while evaluating systems"
    )
    return parser


def main(argv=None):
    """Main report entry point."""
    args = build_parser().parse_args(argv)

    search_dirs = parse_search_dirs(args.inputs)
    systems_filter = parse_system_filter(args.systems)

    logger.debug(f"Queries: {args.queries}")
    logger.debug(f"Ground truth: {args.ground}")
    logger.debug(f"Search directories: {[str(d) for d in search_dirs]}")
    logger.debug(f"Systems filter: {systems_filter or 'all'}")

    try:
        dataset = EvaluationDataset.load(
            resolve_input_path(args.queries),
            resolve_input_path(args.ground)
        )
        dataset.log_summary()

        if args.strict_length:
            dataset.check_lengths()

        discovered = discover_result_files(search_dirs, systems_filter)
        if not discovered:
            raise NoSystemsDiscoveredError(search_dirs)

        evaluator = RetrievalEvaluator(
            dataset,
            strict_length=args.strict_length,
            show_progress=args.progress
        )
        report = evaluator.evaluate(discovered)

        if args.show_summary:
            evaluator.print_results()

        output_path = write_report_csv(report.rows, resolve_output_path(args.out))

    except NoSystemsDiscoveredError as e:
        logger.warning(str(e))
        return 1

    except (EvaluationError, OSError) as e:
        logger.error(str(e))
        logger.debug("Full error traceback:", exc_info=True)
        return 1

    logger.info(f"Saved report to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
