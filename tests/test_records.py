from __future__ import annotations

import pytest

from errors import InvalidInput
from records import PeriodRecord, records_from_rows


def test_zero_counts_are_valid():
    rec = PeriodRecord("Dec/24", 0, 0, 0)
    assert rec.total == 0


def test_negative_count_rejected():
    with pytest.raises(InvalidInput):
        PeriodRecord("Dec/24", 1, -1, 0)


@pytest.mark.parametrize("bad", [1.5, "3", True, None])
def test_non_integer_count_rejected(bad):
    with pytest.raises(InvalidInput):
        PeriodRecord("Dec/24", bad, 0, 0)


def test_records_from_rows_keeps_order(monthly_records):
    assert [r.period for r in monthly_records][:3] == ["Dec/24", "Jan/25", "Feb/25"]
    assert monthly_records[1] == PeriodRecord("Jan/25", 2630, 8594, 12150)


def test_records_from_rows_rejects_duplicate_period():
    rows = [
        {"month": "Jan", "onTime": 1, "delayed": 1, "incomplete": 1},
        {"month": "Jan", "onTime": 2, "delayed": 2, "incomplete": 2},
    ]
    with pytest.raises(InvalidInput, match="Duplicate"):
        records_from_rows(rows)


def test_records_from_rows_rejects_missing_key():
    with pytest.raises(InvalidInput, match="onTime"):
        records_from_rows([{"month": "Jan", "delayed": 1, "incomplete": 1}])


@pytest.mark.parametrize("row", [("Jan", 1, 2, 3), None, "Jan"])
def test_records_from_rows_rejects_non_mapping_row(row):
    with pytest.raises(InvalidInput, match="mapping"):
        records_from_rows([row])
