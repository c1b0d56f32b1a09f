# src/callouts.py
from __future__ import annotations

from metrics import COMPLETION_RATE, completion_rates, find_extremum, round_pct
from report_config import COMPLETION_TARGET

# Points below target that still count as "close"
YELLOW_BAND = 5.0


def completion_status(rate: float, target: float = COMPLETION_TARGET) -> str:
    """Traffic-light band for a completion rate."""
    if rate >= target:
        return "GREEN"
    if rate >= target - YELLOW_BAND:
        return "YELLOW"
    return "RED"


def generate_callouts(records, target_rate: float = COMPLETION_TARGET, overrides: dict | None = None) -> list[dict]:
    """
    Deterministic, auditable summary callouts.
    Input: ordered period records (+ optional completion-rate patch table)
    Output: list of callouts:
      {category, severity, title, value, period, rationale}
    An empty record list yields no callouts.
    """
    records = list(records)
    if not records:
        return []

    callouts: list[dict] = []
    rates = completion_rates(records, overrides)

    # Peak / low use the published figures when a period is patched
    if overrides:
        by_rate = [(r.period, rate) for r, rate in zip(records, rates)]
        peak_period, peak = max(by_rate, key=lambda pr: pr[1])
        low_period, low = min(by_rate, key=lambda pr: pr[1])
    else:
        peak_period, peak = find_extremum(records, COMPLETION_RATE, "max")
        low_period, low = find_extremum(records, COMPLETION_RATE, "min")

    # -------------------------
    # PEAK
    # -------------------------
    callouts.append({
        "category": "PEAK",
        "severity": "INFO",
        "title": "Best completion rate",
        "value": peak,
        "period": peak_period,
        "rationale": f"Highest completion rate across {len(records)} periods = {peak:.1f}% in {peak_period}",
    })

    # -------------------------
    # LOW
    # -------------------------
    callouts.append({
        "category": "LOW",
        "severity": "INFO",
        "title": "Lowest completion rate",
        "value": low,
        "period": low_period,
        "rationale": f"Lowest completion rate across {len(records)} periods = {low:.1f}% in {low_period}",
    })

    # -------------------------
    # TREND (baseline -> latest)
    # -------------------------
    first, last = rates[0], rates[-1]
    if len(records) > 1:
        delta = round_pct(last - first)
        callouts.append({
            "category": "TREND",
            "severity": "LOW" if delta >= 0 else "MEDIUM",
            "title": "Change since baseline",
            "value": delta,
            "period": records[-1].period,
            "rationale": f"{records[0].period} {first:.1f}% -> {records[-1].period} {last:.1f}% ({delta:+.1f} pts)",
        })

    # -------------------------
    # STATUS vs target
    # -------------------------
    status = completion_status(last, target_rate)
    if status != "GREEN":
        callouts.append({
            "category": "STATUS",
            "severity": "HIGH" if status == "RED" else "MEDIUM",
            "title": "Latest completion rate below target",
            "value": last,
            "period": records[-1].period,
            "rationale": f"Completion rate = {last:.1f}% < {target_rate:.1f}% target",
        })
    else:
        callouts.append({
            "category": "STATUS",
            "severity": "LOW",
            "title": "Latest completion rate on target",
            "value": last,
            "period": records[-1].period,
            "rationale": f"Completion rate = {last:.1f}% >= {target_rate:.1f}% target",
        })

    return callouts
