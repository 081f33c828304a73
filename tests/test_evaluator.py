"""
Tests for the evaluation driver: row building, ordering and averages.
"""
import pytest

from evaluation.discovery import DiscoveredSystem, discover_result_files
from evaluation.evaluator import RetrievalEvaluator, render_field_list
from evaluation.ground_truth import EvaluationDataset
from evaluation.metrics import MetricScores
from utils.exceptions import (
    LengthMismatchError,
    MalformedResultsError,
    NoSystemsDiscoveredError,
)


def system(json_file, name, data):
    path = json_file(f"results_{name}.json", data)
    return DiscoveredSystem(system_name=name, file_path=path)


def test_render_field_list_is_compact_and_ordered():
    assert render_field_list(["b", "A", "b"]) == '["b","A","b"]'
    assert render_field_list(["café"]) == '["café"]'
    assert render_field_list([]) == "[]"


def test_single_system_rows(json_file):
    dataset = EvaluationDataset.from_raw(["Get customer contact fields"], [["email", "phone"]])
    control = system(json_file, "Control", [["email", "address", "phone"]])

    report = RetrievalEvaluator(dataset).evaluate([control])

    detail, average = report.rows
    assert detail.query_id == 1
    assert detail.query == "Get customer contact fields"
    assert detail.system_name == "Control"
    assert detail.retrieved_fields == '["email","address","phone"]'
    assert detail.ground_truth == '["email","phone"]'
    assert (detail.precision, detail.recall, detail.f1_score) == (0.6667, 1.0, 0.8)

    assert average.query_id == ""
    assert average.query == "AVERAGE"
    assert average.retrieved_fields == ""
    assert average.ground_truth == ""
    assert (average.precision, average.recall, average.f1_score) == (0.6667, 1.0, 0.8)


def test_wrapped_shapes_match_plain_arrays(json_file):
    dataset = EvaluationDataset.from_raw(
        [{"query": "Invoice amounts"}],
        [{"fields": ["total", "currency"]}]
    )
    wrapped = system(json_file, "Wrapped", [{"retrieved": ["total", "amount", "currency"]}])
    plain = system(json_file, "Plain", [["total", "amount", "currency"]])

    report = RetrievalEvaluator(dataset).evaluate([plain, wrapped])

    plain_row, wrapped_row = report.detail_rows
    assert plain_row.retrieved_fields == wrapped_row.retrieved_fields
    assert plain_row.ground_truth == wrapped_row.ground_truth == '["total","currency"]'
    assert wrapped_row.precision == 0.6667
    assert wrapped_row.recall == 1.0


def test_row_order_details_then_averages(tmp_path, json_file):
    dataset = EvaluationDataset.from_raw(["q1", "q2"], [["a"], ["b"]])
    json_file("results_Beta.json", [["a"], ["x"]])
    json_file("results_Alpha.json", [["a"], ["b"]])

    discovered = discover_result_files([tmp_path])
    report = RetrievalEvaluator(dataset).evaluate(discovered)

    layout = [(row.system_name, row.query_id) for row in report.rows]
    assert layout == [
        ("Alpha", 1), ("Alpha", 2),
        ("Beta", 1), ("Beta", 2),
        ("Alpha", ""), ("Beta", ""),
    ]
    assert [row.query for row in report.average_rows] == ["AVERAGE", "AVERAGE"]


def test_average_is_mean_over_evaluated_queries(json_file):
    dataset = EvaluationDataset.from_raw(["q1", "q2"], [["a", "b"], ["c"]])
    sys_a = system(json_file, "A", [["a"], ["z"]])

    report = RetrievalEvaluator(dataset).evaluate([sys_a])

    summary = report.summaries[0]
    assert summary.num_queries == 2
    assert summary.scores.precision == pytest.approx(0.5)
    assert summary.scores.recall == pytest.approx(0.25)
    assert report.average_rows[0].f1_score == pytest.approx(round((2 / 3) / 2, 4))


def test_truncates_to_shortest_input(json_file):
    dataset = EvaluationDataset.from_raw(["q1", "q2", "q3"], [["a"], ["b"]])
    short = system(json_file, "Short", [["a"], ["b"], ["c"], ["d"]])

    report = RetrievalEvaluator(dataset).evaluate([short])

    assert [row.query_id for row in report.detail_rows] == [1, 2]
    assert report.summaries[0].num_queries == 2


def test_empty_results_file_gives_zero_average(json_file):
    dataset = EvaluationDataset.from_raw(["q1"], [["a"]])
    empty = system(json_file, "Empty", [])

    report = RetrievalEvaluator(dataset).evaluate([empty])

    assert report.detail_rows == []
    average = report.average_rows[0]
    assert (average.precision, average.recall, average.f1_score) == (0.0, 0.0, 0.0)
    assert report.summaries[0].scores == MetricScores()


def test_results_file_not_array(json_file):
    dataset = EvaluationDataset.from_raw(["q1"], [["a"]])
    broken = system(json_file, "Broken", {"retrieved": ["a"]})

    with pytest.raises(MalformedResultsError) as exc_info:
        RetrievalEvaluator(dataset).evaluate([broken])
    assert "Broken" in str(exc_info.value)
    assert str(broken.file_path) in str(exc_info.value)


def test_strict_mode_queries_vs_ground_truth(json_file):
    dataset = EvaluationDataset.from_raw(["q1", "q2"], [["a"]])
    ok = system(json_file, "Ok", [["a"], ["b"]])

    with pytest.raises(LengthMismatchError):
        RetrievalEvaluator(dataset, strict_length=True).evaluate([ok])


def test_strict_mode_results_vs_queries(json_file):
    dataset = EvaluationDataset.from_raw(["q1", "q2"], [["a"], ["b"]])
    short = system(json_file, "Short", [["a"]])

    with pytest.raises(LengthMismatchError, match="Short"):
        RetrievalEvaluator(dataset, strict_length=True).evaluate([short])


def test_strict_mode_passes_when_lengths_match(json_file):
    dataset = EvaluationDataset.from_raw(["q1"], [["a"]])
    ok = system(json_file, "Ok", [["a"]])

    report = RetrievalEvaluator(dataset, strict_length=True).evaluate([ok])
    assert len(report.rows) == 2


def test_no_systems(json_file):
    dataset = EvaluationDataset.from_raw(["q1"], [["a"]])
    with pytest.raises(NoSystemsDiscoveredError):
        RetrievalEvaluator(dataset).evaluate([])


def test_best_system_prefers_first_on_tie(json_file):
    dataset = EvaluationDataset.from_raw(["q1"], [["a"]])
    first = system(json_file, "First", [["a"]])
    second = system(json_file, "Second", [["A"]])
    worse = system(json_file, "Worse", [["b"]])

    report = RetrievalEvaluator(dataset).evaluate([first, worse, second])

    assert report.best_system().system_name == "First"
    assert report.best_system("recall").system_name == "First"


def test_print_results(json_file, capsys):
    dataset = EvaluationDataset.from_raw(["q1"], [["a"]])
    evaluator = RetrievalEvaluator(dataset)
    evaluator.evaluate([system(json_file, "Control", [["a"]])])

    evaluator.print_results()

    out = capsys.readouterr().out
    assert "Control" in out
    assert "Best system by F1: Control" in out


def test_render_field_list_keeps_python_number_forms():
    assert render_field_list([1.0, 2, True, None]) == "[1.0,2,true,null]"
