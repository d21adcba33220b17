"""
Unit tests for the command line and logging setup.
"""

import logging

import pytest

pytest.importorskip("PyQt5.QtWidgets")

from sheetlab.app import LOG_FORMAT, parse_args, setup_logging


class TestParseArgs:
    """Test parse_args."""

    def test_defaults(self):
        args = parse_args([])

        assert args.file is None
        assert args.sheet is None
        assert args.log_level is None

    def test_file_and_options(self):
        args = parse_args(["data.xlsx", "--sheet", "Codes", "--log-level", "debug"])

        assert args.file == "data.xlsx"
        assert args.sheet == "Codes"
        assert args.log_level == "debug"


class TestSetupLogging:
    """Test setup_logging."""

    def test_level_and_format(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        setup_logging("debug")

        assert calls == [{"level": logging.DEBUG, "format": LOG_FORMAT}]

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        setup_logging("chatty")

        assert calls[0]["level"] == logging.INFO


class TestSheetLabApp:
    """Test SheetLabApp window creation."""

    def test_create_window_opens_initial_file(self, qapp, sample_xlsx):
        from sheetlab.app import SheetLabApp

        app = SheetLabApp(str(sample_xlsx), "Codes")
        window = app.create_window()
        window.confirm_close = False

        assert window.document.sheet_name == "Codes"
        assert window.document.row_count == 2
        window.close()

    def test_apply_theme_sets_stylesheet(self, qapp):
        from sheetlab.app import SheetLabApp

        SheetLabApp().apply_theme(qapp)

        assert "#sidebar" in qapp.styleSheet()
