from __future__ import annotations

import pytest

import main


def test_main_prints_summary(capsys):
    main.main(["--locale", "en"])
    out = capsys.readouterr().out
    assert "Feb/25" in out
    assert "81.0%" in out
    assert "Completion Rate" in out


def test_main_marks_patched_periods(capsys):
    main.main(["--locale", "pt", "--theme", "pmz"])
    out = capsys.readouterr().out
    assert "Fev/25 *" in out
    assert "83.3%" in out


def test_main_rejects_unknown_locale():
    with pytest.raises(SystemExit):
        main.main(["--locale", "fr"])
