"""Smoke tests for the demo report entry point."""

from __future__ import annotations

import main
import pytest


class TestMainReport:
    def test_exits_zero(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "LEDGER AMOUNTS REPORT" in out
        assert "14.00" in out
        assert "(left as typed)" in out

    def test_localized_numeral_system(self, monkeypatch, capsys) -> None:
        monkeypatch.setenv("LEDGER_AMOUNTS_NUMERAL_SYSTEM", "eastern_arabic")
        with pytest.raises(SystemExit):
            main.main()
        assert "١٤.٠٠" in capsys.readouterr().out

    def test_invalid_configuration_exits_one(self, monkeypatch, capsys) -> None:
        monkeypatch.setenv("LEDGER_AMOUNTS_DIGIT_GROUPING", "weekly")
        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().out

    def test_unknown_log_level_exits_one(self, monkeypatch, capsys) -> None:
        monkeypatch.setenv("LEDGER_AMOUNTS_LOG_LEVEL", "verbose")
        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().out

    def test_colliding_separators_exit_one(self, monkeypatch, capsys) -> None:
        monkeypatch.setenv("LEDGER_AMOUNTS_DECIMAL_SEPARATOR", ",")
        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 1
        assert "must differ" in capsys.readouterr().out
