"""
Shared fixtures for the evaluation tests.
"""
import json
import os
import sys
from pathlib import Path

import pytest

# Keep test runs out of the rotating log files
os.environ.setdefault("FIELD_EVAL_LOG_TO_FILE", "false")

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "scripts"))


def write_json(path: Path, data) -> Path:
    """Write data as JSON and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def json_file(tmp_path):
    """Factory writing a JSON file under tmp_path."""
    def _write(name: str, data) -> Path:
        return write_json(tmp_path / name, data)
    return _write


@pytest.fixture
def contact_inputs(tmp_path):
    """Single query about contact fields with one Control system."""
    queries = write_json(tmp_path / "queries.json", ["Get customer contact fields"])
    ground = write_json(tmp_path / "ground_truth.json", [["email", "phone"]])
    results_dir = tmp_path / "results"
    write_json(results_dir / "results_Control.json", [["email", "address", "phone"]])
    return queries, ground, results_dir
