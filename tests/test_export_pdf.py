from __future__ import annotations

import pytest

from export_pdf import build_charts, build_report_series, export, fmt_int, fmt_pct
from report_config import get_variant


def test_formatters():
    assert fmt_int(12150) == "12,150"
    assert fmt_pct(48.0) == "48.0%"


def test_report_series_shapes():
    variant = get_variant("en")
    payloads = build_report_series(variant)

    assert set(payloads) == {"engagement", "completion", "quality"}
    assert payloads["engagement"].series["Engagement Rate"] == [38.6, 75, 90]
    assert list(payloads["quality"].series) == ["On Time", "Delayed/Incorrect", "Incomplete"]
    assert payloads["completion"].style_hints["Completion Rate (%)"]["fill"] is True
    assert payloads["quality"].style_hints["On Time"]["color"] == variant.palette["primary"]


def test_report_series_pt_uses_overrides():
    payloads = build_report_series(get_variant("pt", "pmz"))
    rates = payloads["completion"].series["Taxa de Conclusão (%)"]
    assert rates[2] == 83.3
    assert rates[6] == 50.0


def test_build_charts_writes_pngs(tmp_path):
    paths = build_charts(get_variant(), tmp_path)
    assert set(paths) == {"engagement", "completion", "quality"}
    for p in paths.values():
        assert p.exists()
        assert p.parent == tmp_path


@pytest.mark.parametrize("locale, theme", [("en", "bringoz"), ("pt", "pmz")])
def test_export_builds_pdf(tmp_path, locale, theme):
    out = export(locale, theme, out_path=tmp_path / "report.pdf", chart_dir=tmp_path / "charts")
    assert out == tmp_path / "report.pdf"
    assert out.read_bytes()[:4] == b"%PDF"


def test_only_baseline_engagement_bar_is_translucent():
    variant = get_variant("en")
    hint = build_report_series(variant)["engagement"].style_hints["Engagement Rate"]
    baseline, key_stores, benchmark = hint["color"]
    assert baseline[3] == pytest.approx(0.7)
    assert key_stores == variant.palette["warning"]
    assert benchmark == variant.palette["success"]
    assert "alpha" not in hint
