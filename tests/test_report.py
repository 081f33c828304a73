"""
Tests for the CSV report writer.
"""
import csv

from evaluation.evaluator import ReportRow
from evaluation.metrics import MetricScores
from evaluation.report import REPORT_COLUMNS, write_report_csv


def read_csv(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_columns():
    assert REPORT_COLUMNS == (
        "query_id", "query", "system_name", "retrieved_fields",
        "ground_truth", "precision", "recall", "f1_score",
    )


def test_header_and_quoting(tmp_path):
    rows = [
        ReportRow.detail(0, 'Fields, "quoted"\nand multi-line', "Control", ["a", "b"], ["a"], MetricScores(0.5, 1.0, 2 / 3)),
        ReportRow.average("Control", MetricScores(0.5, 1.0, 2 / 3)),
    ]

    path = write_report_csv(rows, tmp_path / "out" / "report.csv")

    assert path.is_absolute()
    header, detail, average = read_csv(path)
    assert header == list(REPORT_COLUMNS)
    assert detail == ["1", 'Fields, "quoted"\nand multi-line', "Control", '["a","b"]', '["a"]', "0.5", "1.0", "0.6667"]
    assert average == ["", "AVERAGE", "Control", "", "", "0.5", "1.0", "0.6667"]


def test_overwrites_existing_file(tmp_path):
    path = tmp_path / "report.csv"
    path.write_text("old content\n" * 10, encoding="utf-8")

    write_report_csv([], path)

    assert read_csv(path) == [list(REPORT_COLUMNS)]
