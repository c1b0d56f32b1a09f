from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table

from callouts import completion_status, generate_callouts
from logging_conf import configure_logging
from metrics import breakdown_frame, build_data_lineage
from report_config import DEFAULT_LOCALE, DEFAULT_THEME, available_locales, available_themes, get_variant

_BAND_STYLE = {"GREEN": "green", "YELLOW": "yellow", "RED": "red"}


def _make_kv_table(title: str, rows: list[tuple[str, str]]) -> Table:
    t = Table(title=title, show_lines=True)
    t.add_column("Field")
    t.add_column("Value", overflow="fold")
    for k, v in rows:
        t.add_row(k, v)
    return t


def _breakdown_table(variant) -> Table:
    names = variant.copy["series_names"]
    df = breakdown_frame(variant.records, variant.overrides)

    t = Table(title=variant.copy["sections"]["breakdown"], show_lines=True)
    t.add_column("Period", no_wrap=True)
    t.add_column(names["on_time"], justify="right")
    t.add_column(names["delayed"], justify="right")
    t.add_column(names["incomplete"], justify="right")
    t.add_column("Total", justify="right")
    t.add_column(names["completion_rate"], justify="right")

    for _, r in df.iterrows():
        rate = float(r["completion_rate"])
        band = completion_status(rate, variant.completion_target)
        period = str(r["period"])
        if period in variant.overrides:
            period += " *"
        t.add_row(
            period,
            f"{int(r['on_time']):,}",
            f"{int(r['delayed']):,}",
            f"{int(r['incomplete']):,}",
            f"{int(r['total']):,}",
            f"[{_BAND_STYLE[band]}]{rate:.1f}%[/]",
        )
    return t


def main(argv=None):
    parser = argparse.ArgumentParser(description="Print the operational performance summary.")
    parser.add_argument("--locale", default=DEFAULT_LOCALE, choices=available_locales())
    parser.add_argument("--theme", default=DEFAULT_THEME, choices=available_themes())
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    console = Console()
    variant = get_variant(args.locale, args.theme)
    records = variant.records

    # -------------------------
    # Report Header
    # -------------------------
    header = _make_kv_table(
        variant.copy["title"],
        [
            ("Variant", f"{variant.locale} / {variant.theme}"),
            ("Periods analyzed", str(len(records))),
            ("Period range", f"{records[0].period} → {records[-1].period}" if records else "N/A"),
            ("Patched periods", ", ".join(variant.overrides) or "none"),
        ],
    )
    console.print(header)
    console.print()

    # -------------------------
    # Monthly Breakdown
    # -------------------------
    console.print(_breakdown_table(variant))
    if variant.overrides:
        console.print("* published completion rate, not derived from counts")
    console.print()

    # -------------------------
    # Data Lineage
    # -------------------------
    lineage = Table(title="Data Lineage – How Metrics Are Calculated", show_lines=True, expand=True)
    lineage.add_column("Metric", no_wrap=True, width=22)
    lineage.add_column("Formula", overflow="fold", ratio=3)
    lineage.add_column("Source Fields", overflow="fold", ratio=2)
    for item in build_data_lineage():
        lineage.add_row(item["metric"], item["formula"], item["source_fields"])
    console.print(lineage)
    console.print()

    # -------------------------
    # Callouts
    # -------------------------
    callouts = generate_callouts(records, variant.completion_target, variant.overrides)

    c_table = Table(title=variant.copy["sections"]["callouts"], show_lines=True, expand=True)
    c_table.add_column("Cat", no_wrap=True, width=8)
    c_table.add_column("Sev", no_wrap=True, width=6)
    c_table.add_column("Title", overflow="fold", ratio=2)
    c_table.add_column("Rationale", overflow="fold", ratio=4)
    for c in callouts:
        c_table.add_row(c["category"], c["severity"], c["title"], c["rationale"])

    console.print(c_table)


if __name__ == "__main__":
    main()
