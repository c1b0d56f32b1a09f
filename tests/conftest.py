from __future__ import annotations

import pytest

from records import PeriodRecord, records_from_rows
from report_config import monthly_rows


@pytest.fixture
def monthly_records() -> list[PeriodRecord]:
    return records_from_rows(monthly_rows("en"))


@pytest.fixture
def small_records() -> list[PeriodRecord]:
    return [
        PeriodRecord("Jan", 10, 5, 5),
        PeriodRecord("Feb", 0, 0, 0),
        PeriodRecord("Mar", 30, 0, 10),
    ]
