# src/records.py
from __future__ import annotations

from dataclasses import dataclass

from errors import InvalidInput


COUNT_FIELDS = ("on_time", "delayed", "incomplete")

# Keys used by the literal monthly tables in report_config.py
ROW_KEYS = {
    "period": "month",
    "on_time": "onTime",
    "delayed": "delayed",
    "incomplete": "incomplete",
}


def _check_count(name: str, value) -> int:
    # bool is an int subclass; True/False are not tallies
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer count, got {value!r}")
    if value < 0:
        raise InvalidInput(f"{name} must be >= 0, got {value}")
    return value


@dataclass(frozen=True)
class PeriodRecord:
    """One reporting period's delivery outcome tally."""

    period: str
    on_time: int
    delayed: int
    incomplete: int

    def __post_init__(self):
        for name in COUNT_FIELDS:
            _check_count(name, getattr(self, name))

    @property
    def total(self) -> int:
        return self.on_time + self.delayed + self.incomplete


def check_unique_periods(records) -> None:
    """Period labels identify a row of the report; a repeat is a table error."""
    seen: set[str] = set()
    for rec in records:
        if rec.period in seen:
            raise InvalidInput(f"Duplicate period: {rec.period}")
        seen.add(rec.period)


def records_from_rows(rows) -> list[PeriodRecord]:
    """
    Build records from literal table rows:
      {"month": "Dec/24", "onTime": 1051, "delayed": 6907, "incomplete": 13121}
    Order is kept; a repeated period is rejected.
    """
    records: list[PeriodRecord] = []

    for row in rows:
        try:
            rec = PeriodRecord(
                period=str(row[ROW_KEYS["period"]]),
                on_time=row[ROW_KEYS["on_time"]],
                delayed=row[ROW_KEYS["delayed"]],
                incomplete=row[ROW_KEYS["incomplete"]],
            )
        except KeyError as exc:
            raise InvalidInput(f"Row is missing key {exc.args[0]!r}: {row!r}") from exc
        except TypeError as exc:
            raise InvalidInput(f"Row must be a mapping, got {row!r}") from exc

        records.append(rec)

    check_unique_periods(records)

    return records
