from __future__ import annotations

import pytest

from errors import InvalidInput
from records import PeriodRecord
from series import ChartSeries, SeriesSpec, assemble, categorical_series

QUALITY_SPECS = [
    SeriesSpec("On Time", "on_time", {"color": "#002D42"}),
    SeriesSpec("Delayed/Incorrect", "delayed", {"color": "#F58220"}),
    SeriesSpec("Incomplete", "incomplete"),
]


def test_assemble_quality_chart(monthly_records):
    chart = assemble(monthly_records, QUALITY_SPECS)
    assert chart.labels[:2] == ["Dec/24", "Jan/25"]
    assert list(chart.series) == ["On Time", "Delayed/Incorrect", "Incomplete"]
    assert chart.series["On Time"][0] == 1051
    assert chart.style_hints == {"On Time": {"color": "#002D42"}, "Delayed/Incorrect": {"color": "#F58220"}}


def test_assemble_completion_rate_with_overrides(monthly_records):
    chart = assemble(
        monthly_records,
        [SeriesSpec("Completion Rate (%)", "completion_rate", {"fill": True, "tension": 0.3})],
        overrides={"Feb/25": 83.3},
    )
    values = chart.series["Completion Rate (%)"]
    assert values[1] == 48.0
    assert values[2] == 83.3


def test_assemble_wraps_long_labels():
    records = [PeriodRecord("Benchmark Store 82", 1, 1, 1), PeriodRecord("Key Stores", 1, 1, 1)]
    chart = assemble(records, QUALITY_SPECS, label_max_width=16)
    assert chart.labels == [["Benchmark Store", "82"], "Key Stores"]


def test_assemble_empty_specs(monthly_records):
    with pytest.raises(InvalidInput):
        assemble(monthly_records, [])


def test_assemble_unknown_selector(monthly_records):
    with pytest.raises(InvalidInput, match="cancelled"):
        assemble(monthly_records, [SeriesSpec("Cancelled", "cancelled")])


def test_assemble_duplicate_names(monthly_records):
    with pytest.raises(InvalidInput, match="Duplicate"):
        assemble(monthly_records, [SeriesSpec("A", "on_time"), SeriesSpec("A", "delayed")])


def test_assemble_is_idempotent(monthly_records):
    first = assemble(monthly_records, QUALITY_SPECS, label_max_width=4)
    second = assemble(monthly_records, QUALITY_SPECS, label_max_width=4)
    assert first == second
    assert first.to_dict() == second.to_dict()


@pytest.mark.parametrize("n", [0, 1, 2, 5, 9])
def test_series_lengths_match_labels(monthly_records, n):
    chart = assemble(monthly_records[:n], QUALITY_SPECS + [SeriesSpec("Rate", "completion_rate")])
    assert len(chart.labels) == n
    for values in chart.series.values():
        assert len(values) == n


def test_chart_series_rejects_misaligned_values():
    with pytest.raises(InvalidInput):
        ChartSeries(labels=["a", "b"], series={"x": [1]})


def test_to_dict_contract(small_records):
    out = assemble(small_records, QUALITY_SPECS[:1]).to_dict()
    assert out == {
        "labels": ["Jan", "Feb", "Mar"],
        "series": {"On Time": [10, 0, 30]},
        "styleHints": {"On Time": {"color": "#002D42"}},
    }


def test_to_dict_omits_empty_style_hints(small_records):
    out = assemble(small_records, [SeriesSpec("Incomplete", "incomplete")]).to_dict()
    assert "styleHints" not in out


def test_categorical_series():
    chart = categorical_series(
        ["Baseline (Dec)", "Key Stores", "Benchmark Store 82"],
        "Engagement Rate",
        [38.6, 75, 90],
        style_hint={"color": ["#E53935", "#F58220", "#4CAF50"]},
        label_max_width=16,
    )
    assert chart.labels == ["Baseline (Dec)", "Key Stores", ["Benchmark Store", "82"]]
    assert chart.series == {"Engagement Rate": [38.6, 75, 90]}


def test_categorical_series_length_mismatch():
    with pytest.raises(InvalidInput):
        categorical_series(["a", "b"], "x", [1])


def test_categorical_series_negative_value():
    with pytest.raises(InvalidInput):
        categorical_series(["a"], "x", [-1])


def test_assemble_rejects_duplicate_periods():
    records = [PeriodRecord("Jan", 1, 0, 1), PeriodRecord("Jan", 2, 0, 1)]
    with pytest.raises(InvalidInput, match="Duplicate"):
        assemble(records, [SeriesSpec("On Time", "on_time")])
