# src/renderer.py
from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.ticker import PercentFormatter

from series import ChartSeries

logger = logging.getLogger(__name__)

KINDS = ("bar", "line")

DEFAULT_OPTIONS = {
    "title": None,
    "legend": "top",
    "y_min": 0,
    "y_max": None,
    "percent_ticks": False,
    "x_grid": False,
    "y_grid": True,
    "stacked": False,
    "figsize": (10, 3.2),
}

_LEGEND_LOC = {
    "top": dict(loc="lower center", bbox_to_anchor=(0.5, 1.0)),
    "bottom": dict(loc="upper center", bbox_to_anchor=(0.5, -0.15)),
    "left": dict(loc="center right", bbox_to_anchor=(-0.08, 0.5)),
    "right": dict(loc="center left", bbox_to_anchor=(1.01, 0.5)),
}


def _display_label(label) -> str:
    """Wrapped labels arrive as a list of lines."""
    if isinstance(label, list):
        return "\n".join(label)
    return str(label)


class ChartRenderer:
    """
    Owns one matplotlib figure for the life of a chart:
      create() -> update(series, options) ... -> dispose()
    Use as a context manager to make sure the figure is always closed.
    """

    def __init__(self, kind: str = "bar"):
        if kind not in KINDS:
            raise ValueError(f"Unknown chart kind {kind!r}; expected one of {', '.join(KINDS)}")
        self.kind = kind
        self.fig = None
        self.ax = None
        self._disposed = False

    @property
    def active(self) -> bool:
        return self.fig is not None

    def create(self, figsize=None):
        if self._disposed:
            raise RuntimeError("Renderer already disposed")
        if self.fig is None:
            self.fig, self.ax = plt.subplots(figsize=figsize or DEFAULT_OPTIONS["figsize"])
        return self

    def _require_active(self):
        if self.fig is None:
            raise RuntimeError("Renderer is not active; call create() first")

    def update(self, chart: ChartSeries, options: dict | None = None):
        """Redraw from scratch with new data; the previous drawing is discarded."""
        self._require_active()
        opts = {**DEFAULT_OPTIONS, **(options or {})}

        ax = self.ax
        ax.clear()

        x = list(range(len(chart.labels)))
        if self.kind == "bar":
            self._draw_bars(ax, x, chart, opts)
        else:
            self._draw_lines(ax, x, chart)

        ax.set_xticks(x)
        ax.set_xticklabels([_display_label(l) for l in chart.labels], fontsize=8)

        if opts["y_min"] is not None or opts["y_max"] is not None:
            ax.set_ylim(bottom=opts["y_min"], top=opts["y_max"])
        if opts["percent_ticks"]:
            ax.yaxis.set_major_formatter(PercentFormatter(xmax=100, decimals=0))

        ax.grid(False)
        if opts["y_grid"]:
            ax.grid(True, axis="y", color=(0, 0, 0, 0.05))
        if opts["x_grid"]:
            ax.grid(True, axis="x", color=(0, 0, 0, 0.05))
        ax.set_axisbelow(True)
        for side in ("top", "right"):
            ax.spines[side].set_visible(False)

        legend = opts["legend"]
        if legend and chart.series:
            ax.legend(frameon=False, fontsize=8, ncol=max(1, len(chart.series)), **_LEGEND_LOC.get(legend, {}))

        if opts["title"]:
            ax.set_title(opts["title"], fontsize=11, pad=24 if legend == "top" else 6)

        self.fig.tight_layout()
        logger.debug("Drew %s chart: %d labels, %d series", self.kind, len(chart.labels), len(chart.series))
        return self

    def _draw_bars(self, ax, x, chart: ChartSeries, opts: dict):
        n = max(1, len(chart.series))
        stacked = bool(opts["stacked"])
        width = 0.7 if stacked else 0.8 / n
        bottoms = [0] * len(x)

        for i, (name, values) in enumerate(chart.series.items()):
            hint = chart.style_hints.get(name) or {}
            if stacked:
                pos = x
            else:
                pos = [xi - 0.4 + width * (i + 0.5) for xi in x]
            ax.bar(
                pos,
                values,
                width=width,
                bottom=bottoms if stacked else None,
                label=name,
                color=hint.get("color"),
                edgecolor=hint.get("border_color"),
                linewidth=hint.get("border_width", 0),
                alpha=hint.get("alpha"),
            )
            if stacked:
                bottoms = [b + v for b, v in zip(bottoms, values)]

    def _draw_lines(self, ax, x, chart: ChartSeries):
        for name, values in chart.series.items():
            hint = chart.style_hints.get(name) or {}
            color = hint.get("color")
            # tension is a spline hint; matplotlib draws straight segments
            (line,) = ax.plot(x, values, label=name, color=color, marker="o", markersize=3)
            if hint.get("fill"):
                ax.fill_between(x, values, color=line.get_color(), alpha=hint.get("fill_alpha", 0.1))

    def save(self, out_path: Path, dpi: int = 200) -> Path:
        self._require_active()
        out_path = Path(out_path)
        out_path.parent.mkdir(exist_ok=True, parents=True)
        self.fig.savefig(out_path, dpi=dpi)
        return out_path

    def dispose(self):
        if self.fig is not None:
            plt.close(self.fig)
        self.fig = None
        self.ax = None
        self._disposed = True

    def __enter__(self):
        return self.create()

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False


def render_chart(kind: str, chart: ChartSeries, options: dict | None, out_path: Path) -> Path:
    """Draw one chart to a PNG and release the figure."""
    opts = options or {}
    with ChartRenderer(kind).create(figsize=opts.get("figsize")) as renderer:
        renderer.update(chart, opts)
        return renderer.save(out_path)
