# src/export_pdf.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from xml.sax.saxutils import escape

from matplotlib.colors import to_rgba
from PIL import Image as PILImage
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from callouts import completion_status, generate_callouts
from logging_conf import configure_logging
from metrics import breakdown_frame, build_data_lineage
from renderer import render_chart
from report_config import DEFAULT_LOCALE, DEFAULT_THEME, ReportVariant, available_locales, available_themes, get_variant
from series import ChartSeries, SeriesSpec, assemble, categorical_series

logger = logging.getLogger(__name__)

# Repo-relative paths
PROJECT_ROOT = Path(__file__).resolve().parents[1]
OUTPUT_DIR = PROJECT_ROOT / "reports" / "charts"

BASELINE_ALPHA = 0.7


def report_path(locale: str, theme: str) -> Path:
    return PROJECT_ROOT / "reports" / f"PMZ_Operational_Report_{locale}_{theme}.pdf"


def fmt_int(x) -> str:
    return f"{int(round(float(x))):,}"


def fmt_pct(x) -> str:
    """Values are already percentages (0-100)."""
    return f"{float(x):.1f}%"


def _wrap_table_cells(data, font_size=8.5, leading=10.5, wrap_cells=True):
    styles = getSampleStyleSheet()
    cell_style = ParagraphStyle(
        "CellWrap",
        parent=styles["BodyText"],
        fontSize=font_size,
        leading=leading,
        wordWrap="LTR",
        splitLongWords=False,
    )

    processed = []
    for r_i, row in enumerate(data):
        out_row = []
        for val in row:
            s = "" if val is None else str(val)

            # Header row stays plain strings
            if wrap_cells and r_i != 0 and len(s) > 18:
                out_row.append(Paragraph(escape(s).replace("\n", "<br/>"), cell_style))
            else:
                out_row.append(s)
        processed.append(out_row)
    return processed


def make_table(data, doc_width, col_fracs, repeat_header=True, wrap_cells=True, header_color=colors.whitesmoke):
    total = sum(col_fracs) if col_fracs else 1.0
    col_widths = [doc_width * c / total for c in col_fracs]

    t = Table(
        _wrap_table_cells(data, wrap_cells=wrap_cells),
        colWidths=col_widths,
        hAlign="LEFT",
        repeatRows=1 if repeat_header else 0,
        splitByRow=1,
    )

    t.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, 0), 9),
                ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
                ("FONTSIZE", (0, 1), (-1, -1), 8.5),
                ("BACKGROUND", (0, 0), (-1, 0), header_color),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 5),
                ("RIGHTPADDING", (0, 0), (-1, -1), 5),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                (
                    "ROWBACKGROUNDS",
                    (0, 1),
                    (-1, -1),
                    [colors.white, colors.Color(0.98, 0.98, 0.98)],
                ),
            ]
        )
    )
    return t


def build_report_series(variant: ReportVariant) -> dict[str, ChartSeries]:
    """The three chart payloads of the report, styled from the variant palette."""
    p = variant.palette
    names = variant.copy["series_names"]

    engagement = categorical_series(
        variant.engagement_labels,
        names["engagement"],
        variant.engagement_rates,
        style_hint={
            # only the baseline bar is translucent
            "color": [to_rgba(p["error"], BASELINE_ALPHA), p["warning"], p["success"]],
            "border_color": [p["error"], p["warning"], p["success"]],
            "border_width": 1,
        },
        label_max_width=variant.label_max_width,
    )

    completion = assemble(
        variant.records,
        [
            SeriesSpec(
                names["completion_rate"],
                "completion_rate",
                {"color": p["secondary"], "fill": True, "tension": 0.3},
            )
        ],
        label_max_width=variant.label_max_width,
        overrides=variant.overrides,
    )

    quality = assemble(
        variant.records,
        [
            SeriesSpec(names["on_time"], "on_time", {"color": p["primary"]}),
            SeriesSpec(names["delayed"], "delayed", {"color": p["warning"]}),
            SeriesSpec(names["incomplete"], "incomplete", {"color": p["error"]}),
        ],
        label_max_width=variant.label_max_width,
    )

    return {"engagement": engagement, "completion": completion, "quality": quality}


def build_charts(variant: ReportVariant, output_dir: Path = OUTPUT_DIR) -> dict[str, Path]:
    output_dir = Path(output_dir)
    output_dir.mkdir(exist_ok=True, parents=True)

    payloads = build_report_series(variant)
    kinds = {"engagement": "bar", "completion": "line", "quality": "bar"}

    paths = {}
    for key, chart in payloads.items():
        out = output_dir / f"chart_{key}_{variant.locale}_{variant.theme}.png"
        paths[key] = render_chart(kinds[key], chart, variant.chart_options[key], out)
        logger.info("Chart written: %s", paths[key])
    return paths


def add_chart(story, img_path: Path, width):
    if not img_path.exists():
        return

    with PILImage.open(img_path) as im:
        w, h = im.size
    aspect = h / float(w)
    story.append(Image(str(img_path), width=width, height=width * aspect))


def apply_completion_colors(table_obj, rates, target: float, col: int):
    """Traffic-light background on the completion-rate column (row 0 is the header)."""
    band_colors = {
        "GREEN": colors.Color(0.80, 0.93, 0.80),
        "YELLOW": colors.Color(1.00, 0.96, 0.70),
        "RED": colors.Color(1.00, 0.80, 0.80),
    }

    styles = []
    for i, rate in enumerate(rates, start=1):
        band = completion_status(float(rate), target)
        styles.append(("BACKGROUND", (col, i), (col, i), band_colors[band]))

    if styles:
        table_obj.setStyle(TableStyle(styles))


def _status_marker(step: dict, words: dict) -> str:
    if step.get("completed"):
        return words["completed"]
    if step.get("in_progress"):
        return words["in_progress"]
    return words["pending"]


def export(locale: str = DEFAULT_LOCALE, theme: str = DEFAULT_THEME, out_path: Path | None = None,
           chart_dir: Path | None = None) -> Path:
    variant = get_variant(locale, theme)
    text = variant.copy
    sections = text["sections"]
    names = text["series_names"]

    out_path = Path(out_path) if out_path else report_path(locale, theme)
    out_path.parent.mkdir(exist_ok=True, parents=True)

    df = breakdown_frame(variant.records, variant.overrides)
    callouts = generate_callouts(variant.records, variant.completion_target, variant.overrides)
    chart_paths = build_charts(variant, chart_dir or OUTPUT_DIR)

    primary = colors.HexColor(variant.palette["primary"])
    light = colors.HexColor(variant.palette["background"])

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle("Title", parent=styles["Heading1"], fontSize=16, spaceAfter=4, textColor=primary)
    subtitle_style = ParagraphStyle("Subtitle", parent=styles["Heading3"], fontSize=11, textColor=colors.grey, spaceAfter=10)
    h_style = ParagraphStyle("H", parent=styles["Heading2"], fontSize=12, spaceBefore=12, spaceAfter=6, textColor=primary)
    sub_style = ParagraphStyle("Sub", parent=styles["Heading3"], fontSize=10, textColor=primary)
    body = ParagraphStyle("Body", parent=styles["BodyText"], fontSize=9, leading=12)
    footer_style = ParagraphStyle("Footer", parent=body, alignment=1, textColor=colors.grey)

    doc = SimpleDocTemplate(
        str(out_path),
        pagesize=letter,
        rightMargin=0.75 * inch,
        leftMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
        title=text["title"],
    )

    story = []
    W = doc.width

    # Page 1 — Summary + numbers
    story.append(Paragraph(text["title"], title_style))
    story.append(Paragraph(text["subtitle"], subtitle_style))

    story.append(Paragraph(sections["summary"], h_style))
    story.append(Paragraph(text["executive_summary"], body))

    story.append(Paragraph(sections["numbers"], h_style))
    story.append(Paragraph(sections["engagement_chart"], sub_style))
    add_chart(story, chart_paths["engagement"], W)
    story.append(Spacer(1, 8))

    cards = [[c["title"] for c in text["info_cards"]], [c["value"] for c in text["info_cards"]]]
    cards_table = make_table(cards, W, col_fracs=[1] * len(text["info_cards"]), wrap_cells=False, header_color=light)
    card_styles = [("ALIGN", (0, 0), (-1, -1), "CENTER"), ("FONTSIZE", (0, 1), (-1, 1), 14)]
    for i, c in enumerate(text["info_cards"]):
        card_styles.append(("TEXTCOLOR", (i, 1), (i, 1), colors.HexColor(variant.palette[c["color"]])))
    cards_table.setStyle(TableStyle(card_styles))
    story.append(cards_table)

    # Page 2 — Monthly analysis
    story.append(PageBreak())
    story.append(Paragraph(sections["monthly"], h_style))

    story.append(Paragraph(sections["completion_chart"], sub_style))
    story.append(Paragraph(text["completion_note"], body))
    add_chart(story, chart_paths["completion"], W)
    story.append(Spacer(1, 8))

    story.append(Paragraph(sections["quality_chart"], sub_style))
    story.append(Paragraph(text["quality_note"], body))
    add_chart(story, chart_paths["quality"], W)

    # Page 3 — Breakdown + lineage + callouts
    story.append(PageBreak())
    story.append(Paragraph(sections["breakdown"], h_style))
    rows = [["", names["on_time"], names["delayed"], names["incomplete"], "Total", names["completion_rate"]]]
    for _, r in df.iterrows():
        rows.append(
            [
                r["period"],
                fmt_int(r["on_time"]),
                fmt_int(r["delayed"]),
                fmt_int(r["incomplete"]),
                fmt_int(r["total"]),
                fmt_pct(r["completion_rate"]),
            ]
        )
    breakdown_table = make_table(rows, W, col_fracs=[0.14, 0.16, 0.20, 0.16, 0.14, 0.20], wrap_cells=False)
    apply_completion_colors(breakdown_table, df["completion_rate"].tolist(), variant.completion_target, col=5)
    story.append(breakdown_table)

    story.append(Spacer(1, 12))
    story.append(Paragraph(sections["lineage"], h_style))
    lineage_rows = [["Metric", "Formula", "Source Fields"]]
    for item in build_data_lineage():
        lineage_rows.append([item["metric"], item["formula"], item["source_fields"]])
    story.append(make_table(lineage_rows, W, col_fracs=[0.26, 0.44, 0.30], wrap_cells=True))

    story.append(Spacer(1, 12))
    story.append(Paragraph(sections["callouts"], h_style))
    c_rows = [["Category", "Severity", "Title", "Rationale"]]
    for c in callouts:
        c_rows.append([c["category"], c["severity"], c["title"], c["rationale"]])
    story.append(make_table(c_rows, W, col_fracs=[0.14, 0.12, 0.30, 0.44], wrap_cells=True))

    # Page 4 — Narrative
    story.append(PageBreak())
    story.append(Paragraph(sections["situation"], h_style))
    for head, detail in text["situation"]:
        story.append(Paragraph(f"• <b>{escape(head)}</b>: {escape(detail)}", body))

    story.append(Paragraph(sections["actions"], h_style))
    for i, action in enumerate(text["actions"], start=1):
        story.append(Paragraph(f"{i}. {escape(action)}", body))

    story.append(Paragraph(sections["plan"], h_style))
    plan_rows = [["Step", "Status", "Description"]]
    for step in text["plan"]:
        plan_rows.append([step["title"], _status_marker(step, text["status_words"]), step["description"]])
    plan_table = make_table(plan_rows, W, col_fracs=[0.26, 0.18, 0.56], wrap_cells=True)
    plan_styles = []
    for i, step in enumerate(text["plan"], start=1):
        key = "secondary" if step.get("completed") else ("success" if step.get("in_progress") else "primary")
        plan_styles.append(("TEXTCOLOR", (1, i), (1, i), colors.HexColor(variant.palette[key])))
    plan_table.setStyle(TableStyle(plan_styles))
    story.append(plan_table)

    story.append(Paragraph(sections["support"], h_style))
    for item in text["support"]:
        story.append(Paragraph(f"-> {escape(item)}", body))

    story.append(Spacer(1, 24))
    story.append(Paragraph(text["footer"], footer_style))

    doc.build(story)
    logger.info("PDF generated: %s", out_path)
    return out_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Build the operational performance PDF report.")
    parser.add_argument("--locale", default=DEFAULT_LOCALE, choices=available_locales())
    parser.add_argument("--theme", default=DEFAULT_THEME, choices=available_themes())
    parser.add_argument("--out", type=Path, default=None, help="Output PDF path")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    return export(args.locale, args.theme, args.out)


if __name__ == "__main__":
    main()
