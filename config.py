"""
Configuration file for field retrieval evaluation.
Modify these settings to change report defaults and logging behaviour.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ============================================================================
# PROJECT PATHS
# ============================================================================
PROJECT_ROOT = Path(__file__).parent
LOGS_DIR = PROJECT_ROOT / "logs"

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================
LOGGING_CONFIG = {
    "log_dir": os.getenv("FIELD_EVAL_LOG_DIR", str(LOGS_DIR)),
    "log_to_file": os.getenv("FIELD_EVAL_LOG_TO_FILE", "true").lower() in ("1", "true", "yes"),
    "console_level": os.getenv("FIELD_EVAL_LOG_LEVEL", "INFO").upper(),
    "file_level": "DEBUG",
    "file_name": "field_eval_{date}.log",
    "max_bytes": 10485760,  # 10MB
    "backup_count": 5
}

# ============================================================================
# EVALUATION CONFIGURATION
# ============================================================================
EVALUATION_CONFIG = {
    "default_output": "results_report.csv",
    "default_inputs": ".",
    "results_glob": "results_*.json",
    "results_pattern": r"^results_(.+)\.json$",  # matched case-insensitively
    "average_marker": "AVERAGE",
    "round_digits": 4,
    "summary_metric": "f1",
    "report_columns": [
        "query_id",
        "query",
        "system_name",
        "retrieved_fields",
        "ground_truth",
        "precision",
        "recall",
        "f1_score"
    ]
}

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================
def get_log_dir() -> Path:
    """Get the directory for rotating log files."""
    return Path(LOGGING_CONFIG["log_dir"])


def get_report_columns() -> list:
    """Get report column order."""
    return list(EVALUATION_CONFIG["report_columns"])


def resolve_input_path(path_arg: str) -> Path:
    """
    Resolve a user supplied path.

    Absolute paths are used as-is, relative paths are taken from the
    current working directory (not the project root).

    Args:
        path_arg: Path argument from command line

    Returns:
        Absolute Path object
    """
    path = Path(path_arg)
    if path.is_absolute():
        return path
    return Path.cwd() / path


def resolve_output_path(output_arg: str = None) -> Path:
    """Resolve the report output path, falling back to the default name."""
    return resolve_input_path(output_arg or EVALUATION_CONFIG["default_output"])
