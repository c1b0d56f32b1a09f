# src/metrics.py
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

from errors import EmptyInput, InvalidInput
from records import COUNT_FIELDS, PeriodRecord, check_unique_periods

logger = logging.getLogger(__name__)

COMPLETION_RATE = "completion_rate"
METRIC_FIELDS = COUNT_FIELDS + (COMPLETION_RATE,)

_ONE_DECIMAL = Decimal("0.1")


def round_pct(value: float) -> float:
    # Half-up on the exact binary value, same as fixed-point string formatting
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def derive_completion_rate(record: PeriodRecord) -> float:
    """
    (on_time + delayed) / (on_time + delayed + incomplete) * 100, one decimal.
    A period with no deliveries at all reports 0.0.
    """
    for name in COUNT_FIELDS:
        value = getattr(record, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidInput(f"{record.period}: {name} must be a non-negative integer, got {value!r}")

    total = record.on_time + record.delayed + record.incomplete
    if total == 0:
        return 0.0

    pct = ((record.on_time + record.delayed) / total) * 100
    return round_pct(pct)


def _check_metric(metric: str) -> None:
    if metric not in METRIC_FIELDS:
        raise InvalidInput(f"Unknown metric {metric!r}; expected one of {', '.join(METRIC_FIELDS)}")


def _metric_value(record: PeriodRecord, metric: str) -> float:
    if metric == COMPLETION_RATE:
        return derive_completion_rate(record)
    return getattr(record, metric)


def derive_series(records, field: str) -> list:
    """Project one field (or the completion rate) across records, keeping input order."""
    _check_metric(field)
    return [_metric_value(r, field) for r in records]


def find_extremum(records, metric: str, direction: str = "max") -> tuple[str, float]:
    """
    Returns (period, value) of the largest or smallest metric value.
    On equal values the earliest period in input order wins.
    """
    _check_metric(metric)
    if direction not in ("max", "min"):
        raise InvalidInput(f"direction must be 'max' or 'min', got {direction!r}")

    records = list(records)
    if not records:
        raise EmptyInput(f"Cannot find {direction} of {metric} over no records")

    best = records[0]
    best_value = _metric_value(best, metric)
    for rec in records[1:]:
        value = _metric_value(rec, metric)
        better = value > best_value if direction == "max" else value < best_value
        if better:
            best, best_value = rec, value

    return best.period, best_value


def completion_rates(records, overrides: dict | None = None) -> list[float]:
    """
    Completion rate per period, with an explicit patch table for periods whose
    published figure differs from the formula (e.g. {"Feb/25": 83.3}).
    """
    records = list(records)
    check_unique_periods(records)
    rates = derive_series(records, COMPLETION_RATE)
    if not overrides:
        return rates

    index = {r.period: i for i, r in enumerate(records)}
    for period, value in overrides.items():
        if period not in index:
            raise InvalidInput(f"Override for unknown period: {period}")
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 100:
            raise InvalidInput(f"Override for {period} must be within [0, 100], got {value!r}")

        i = index[period]
        logger.debug("Completion rate for %s patched: %s -> %s", period, rates[i], value)
        rates[i] = float(value)

    return rates


def breakdown_frame(records, overrides: dict | None = None) -> pd.DataFrame:
    """
    Monthly breakdown table used in the console summary and the PDF.
    Returns a dataframe with:
      period, on_time, delayed, incomplete, total, completion_rate
    """
    records = list(records)
    df = pd.DataFrame(
        {
            "period": [r.period for r in records],
            "on_time": [r.on_time for r in records],
            "delayed": [r.delayed for r in records],
            "incomplete": [r.incomplete for r in records],
        },
        columns=["period", "on_time", "delayed", "incomplete"],
    )
    df["total"] = df["on_time"] + df["delayed"] + df["incomplete"]
    df["completion_rate"] = pd.Series(completion_rates(records, overrides), dtype="float64")
    return df


def build_data_lineage() -> list[dict]:
    """
    Static metric lineage map for the period table. (This is what you show the reader.)
    """
    return [
        {
            "metric": "On Time",
            "formula": "on_time",
            "source_fields": "on_time",
        },
        {
            "metric": "Delayed/Incorrect",
            "formula": "delayed",
            "source_fields": "delayed",
        },
        {
            "metric": "Incomplete",
            "formula": "incomplete",
            "source_fields": "incomplete",
        },
        {
            "metric": "Total Deliveries",
            "formula": "on_time + delayed + incomplete",
            "source_fields": "on_time, delayed, incomplete",
        },
        {
            "metric": "Completion Rate (%)",
            "formula": "(on_time + delayed) / total * 100, 1 decimal; 0 when total = 0",
            "source_fields": "on_time, delayed, incomplete",
        },
    ]
