"""
UI tests for the main window and the sheet tab, on an offscreen QApplication.
"""

import pytest

pytest.importorskip("PyQt5.QtWidgets")

from PyQt5.QtWidgets import QMessageBox

from sheetlab.core.filters import NullFilter
from sheetlab.core.utils import ColumnAddressError
from sheetlab.ui.main_window import MainWindow
from sheetlab.ui.tabs.tab_sheet import TabSheet


@pytest.fixture
def warnings_shown(monkeypatch):
    """Record QMessageBox.warning calls instead of opening modal boxes."""
    shown = []
    monkeypatch.setattr(QMessageBox, "warning", lambda *args: shown.append(args) or QMessageBox.Ok)
    return shown


@pytest.fixture
def window(qapp):
    win = MainWindow()
    win.confirm_close = False
    yield win
    win.close()


class TestTabSheet:
    """Test TabSheet loading and filtering."""

    def test_empty_tab_shows_no_data(self, qapp):
        tab = TabSheet()

        assert "No data available" in tab.sheet_view.toPlainText()
        assert tab.status_label.text() == "Aucune feuille chargée."

    def test_load_file_renders_table(self, qapp, sample_xlsx):
        tab = TabSheet()

        assert tab.load_file(sample_xlsx) is True

        text = tab.sheet_view.toPlainText()
        assert "Alice" in text
        assert "NULL" in text
        assert "4 / 4 ligne(s)" in tab.status_label.text()

    def test_apply_filter_updates_view(self, qapp, sample_xlsx):
        tab = TabSheet()
        tab.load_file(sample_xlsx)

        tab.apply_filter(NullFilter(columns=["B", "C"], combinator="and", operation="null"))

        text = tab.sheet_view.toPlainText()
        assert "Bob" in text
        assert "Alice" not in text
        assert "1 / 4 ligne(s)" in tab.status_label.text()
        assert "B ET C : toutes nulles" in tab.status_label.text()

    def test_reset_filter(self, qapp, sample_xlsx):
        tab = TabSheet()
        tab.load_file(sample_xlsx)
        tab.apply_filter(NullFilter(columns=["A"], operation="null"))

        tab.reset_filter()

        assert "Alice" in tab.sheet_view.toPlainText()
        assert "Aucun filtre actif" in tab.status_label.text()

    def test_invalid_column_is_reported(self, qapp, sample_xlsx, warnings_shown):
        tab = TabSheet()
        tab.load_file(sample_xlsx)

        tab.apply_filter(NullFilter(columns=["Z"]))

        assert len(warnings_shown) == 1
        assert tab.document.filtered_row_count == 4

    def test_missing_file_is_reported(self, qapp, tmp_path, warnings_shown):
        tab = TabSheet()

        assert tab.load_file(tmp_path / "missing.xlsx") is False
        assert len(warnings_shown) == 1

    def test_filter_panel_signal(self, qapp, sample_xlsx):
        tab = TabSheet()
        tab.load_file(sample_xlsx)
        panel = tab.filter_panel
        panel.columns_edit.setText("b, c")
        panel.combinator_combo.setCurrentIndex(panel.combinator_combo.findData("or"))
        panel.operation_combo.setCurrentIndex(panel.operation_combo.findData("not_null"))

        panel.request_filter()

        assert tab.document.filtered_row_count == 3
        assert tab.document.active_filter.columns == ["B", "C"]


class TestFilterPanel:
    """Test FilterPanel input handling."""

    def test_get_filter_reads_inputs(self, qapp):
        tab = TabSheet()
        panel = tab.filter_panel
        panel.primary_edit.setText("a")
        panel.columns_edit.setText("C,D")

        spec = panel.get_filter()

        assert spec == NullFilter(columns=["C", "D"], combinator="and", operation="null", primary_column="A")

    def test_get_filter_rejects_bad_letters(self, qapp):
        tab = TabSheet()
        panel = tab.filter_panel
        panel.columns_edit.setText("1,2")

        with pytest.raises(ColumnAddressError):
            panel.get_filter()

    def test_set_filter_round_trip(self, qapp):
        tab = TabSheet()
        panel = tab.filter_panel
        spec = NullFilter(columns=["B"], combinator="or", operation="not_null", primary_column="A")

        panel.set_filter(spec)

        assert panel.get_filter() == spec


class TestMainWindow:
    """Test MainWindow sidebar and header updates."""

    def test_initial_state(self, window):
        assert window.header_title.text() == "Aucun fichier"
        assert window.rows_label.text() == "Lignes: -"

    def test_open_file_updates_sidebar(self, window, sample_xlsx):
        assert window.open_file(str(sample_xlsx)) is True

        assert window.header_title.text() == "contacts.xlsx"
        assert window.rows_label.text() == "Lignes: 4 / 4"
        assert "A: Name" in window.columns_label.text()
        assert window.sheet_combo.count() == 2
        assert window.sheet_combo.isEnabled()

    def test_select_other_sheet(self, window, sample_xlsx):
        window.open_file(str(sample_xlsx))

        window.on_sheet_selected("Codes")

        assert window.document.sheet_name == "Codes"
        assert window.rows_label.text() == "Lignes: 2 / 2"
        assert window.sheet_combo.currentText() == "Codes"

    def test_selecting_current_sheet_keeps_filter(self, window, sample_xlsx):
        window.open_file(str(sample_xlsx))
        window.tab_sheet.apply_filter(NullFilter(columns=["A"], operation="null"))

        window.on_sheet_selected("Contacts")

        assert window.document.active_filter is not None
        assert window.rows_label.text() == "Lignes: 1 / 4"

    def test_reset_action(self, window, sample_xlsx):
        window.open_file(str(sample_xlsx))
        window.tab_sheet.apply_filter(NullFilter(columns=["A"], operation="null"))
        assert window.rows_label.text() == "Lignes: 1 / 4"

        window.handle_action("reinitialiser")

        assert window.rows_label.text() == "Lignes: 4 / 4"


class TestExportDialog:
    """Test ExportDialog values."""

    def test_values_join_directory_and_name(self, qapp, tmp_path):
        from sheetlab.ui.widgets_common import ExportDialog
        import os

        dialog = ExportDialog(None, "contacts_filtre", str(tmp_path))
        dialog.format_combo.setCurrentIndex(dialog.format_combo.findData("pdf"))

        assert dialog.get_values() == (os.path.join(str(tmp_path), "contacts_filtre"), "pdf")

    def test_first_format_is_xlsx(self, qapp, tmp_path):
        from sheetlab.ui.widgets_common import ExportDialog

        dialog = ExportDialog(None, "out", str(tmp_path))

        assert dialog.get_values()[1] == "xlsx"
