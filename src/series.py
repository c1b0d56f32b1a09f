# src/series.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from errors import InvalidInput
from labels import wrap_label
from metrics import COMPLETION_RATE, METRIC_FIELDS, completion_rates, derive_series
from records import check_unique_periods

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesSpec:
    name: str
    selector: str
    style_hint: Any = None


@dataclass(frozen=True)
class ChartSeries:
    """
    What a bar/line renderer needs: labels, index-aligned value lists, and
    per-series style hints that are passed through untouched.
    A wrapped label is a list of line strings.
    """

    labels: list
    series: dict[str, list]
    style_hints: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        n = len(self.labels)
        for name, values in self.series.items():
            if len(values) != n:
                raise InvalidInput(f"Series {name!r} has {len(values)} values for {n} labels")

    def to_dict(self) -> dict:
        out = {
            "labels": [list(l) if isinstance(l, list) else l for l in self.labels],
            "series": {name: list(values) for name, values in self.series.items()},
        }
        if self.style_hints:
            out["styleHints"] = dict(self.style_hints)
        return out


def _shape_label(label: str, label_max_width: int | None):
    if label_max_width is None:
        return label
    lines = wrap_label(label, label_max_width)
    return lines[0] if len(lines) == 1 else lines


def _check_specs(series_specs) -> list[SeriesSpec]:
    specs = list(series_specs or [])
    if not specs:
        raise InvalidInput("At least one series spec is required")

    names: set[str] = set()
    for spec in specs:
        if not isinstance(spec, SeriesSpec):
            raise InvalidInput(f"Expected SeriesSpec, got {spec!r}")
        if not spec.name:
            raise InvalidInput("Series name must not be empty")
        if spec.selector not in METRIC_FIELDS:
            raise InvalidInput(
                f"Series {spec.name!r} selects unknown field {spec.selector!r}; "
                f"expected one of {', '.join(METRIC_FIELDS)}"
            )
        if spec.name in names:
            raise InvalidInput(f"Duplicate series name: {spec.name}")
        names.add(spec.name)
    return specs


def assemble(records, series_specs, label_max_width: int | None = None, overrides: dict | None = None) -> ChartSeries:
    """
    Combine per-period projections into one ChartSeries.
    overrides patches the completion rate of named periods (see metrics.completion_rates).
    """
    specs = _check_specs(series_specs)
    records = list(records)
    check_unique_periods(records)

    labels = [_shape_label(r.period, label_max_width) for r in records]
    series: dict[str, list] = {}
    style_hints: dict[str, Any] = {}

    for spec in specs:
        if spec.selector == COMPLETION_RATE:
            series[spec.name] = completion_rates(records, overrides)
        else:
            series[spec.name] = derive_series(records, spec.selector)
        if spec.style_hint is not None:
            style_hints[spec.name] = spec.style_hint

    logger.debug("Assembled %d series over %d periods", len(series), len(labels))
    return ChartSeries(labels=labels, series=series, style_hints=style_hints)


def categorical_series(
    labels,
    name: str,
    values,
    style_hint: Any = None,
    label_max_width: int | None = None,
) -> ChartSeries:
    """Single series over comparison buckets (e.g. baseline vs key stores)."""
    labels = list(labels)
    values = list(values)
    if not name:
        raise InvalidInput("Series name must not be empty")
    if len(labels) != len(values):
        raise InvalidInput(f"{len(labels)} labels but {len(values)} values")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float)) or v < 0:
            raise InvalidInput(f"Series values must be non-negative numbers, got {v!r}")

    style_hints = {name: style_hint} if style_hint is not None else {}
    return ChartSeries(
        labels=[_shape_label(str(l), label_max_width) for l in labels],
        series={name: values},
        style_hints=style_hints,
    )
