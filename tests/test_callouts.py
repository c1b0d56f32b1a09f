from __future__ import annotations

import pytest

from callouts import completion_status, generate_callouts
from records import PeriodRecord


@pytest.mark.parametrize(
    "rate, expected",
    [(80.0, "GREEN"), (75.0, "GREEN"), (72.0, "YELLOW"), (70.0, "YELLOW"), (69.9, "RED"), (0.0, "RED")],
)
def test_completion_status(rate, expected):
    assert completion_status(rate, 75.0) == expected


def _by_category(callouts):
    return {c["category"]: c for c in callouts}


def test_generate_callouts_monthly(monthly_records):
    callouts = _by_category(generate_callouts(monthly_records, target_rate=75.0))

    assert callouts["PEAK"]["period"] == "Feb/25"
    assert callouts["PEAK"]["value"] == 81.0
    assert callouts["LOW"]["period"] == "Dec/24"
    assert callouts["LOW"]["value"] == 37.8
    assert callouts["TREND"]["value"] == pytest.approx(20.7)
    assert callouts["TREND"]["severity"] == "LOW"
    assert callouts["STATUS"]["severity"] == "HIGH"
    assert callouts["STATUS"]["period"] == "Aug/25"


def test_generate_callouts_with_overrides(monthly_records):
    callouts = _by_category(generate_callouts(monthly_records, overrides={"Feb/25": 83.3, "Jun/25": 50.0}))
    assert callouts["PEAK"]["value"] == 83.3
    assert callouts["LOW"]["period"] == "Dec/24"


def test_generate_callouts_on_target():
    records = [PeriodRecord("a", 1, 1, 2), PeriodRecord("b", 9, 0, 1)]
    callouts = _by_category(generate_callouts(records, target_rate=75.0))
    assert callouts["STATUS"]["severity"] == "LOW"
    assert callouts["TREND"]["value"] == pytest.approx(40.0)


def test_generate_callouts_single_period_has_no_trend():
    callouts = _by_category(generate_callouts([PeriodRecord("a", 1, 0, 0)]))
    assert "TREND" not in callouts
    assert callouts["PEAK"]["period"] == callouts["LOW"]["period"] == "a"


def test_generate_callouts_empty():
    assert generate_callouts([]) == []


def test_trend_rounds_half_up():
    # 16.25 - 10.0 is exactly 6.25; half-even would give 6.2
    records = [PeriodRecord("a", 1, 0, 1), PeriodRecord("b", 1, 0, 1)]
    callouts = _by_category(generate_callouts(records, overrides={"a": 10.0, "b": 16.25}))
    assert callouts["TREND"]["value"] == 6.3


@pytest.mark.parametrize("target", [75.0, 50.0])
def test_rationales_fit_pdf_base_font(monthly_records, target):
    # reportlab's built-in Helvetica only covers the cp1252 (WinAnsi) range
    for c in generate_callouts(monthly_records, target_rate=target):
        c["rationale"].encode("cp1252")
