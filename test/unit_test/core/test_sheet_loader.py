"""
Unit tests for spreadsheet loading.
"""

import pandas as pd
import pytest

from sheetlab.core.filters import NullFilter, apply_null_filter
from sheetlab.core.sheet_loader import list_sheet_names, load_sheet, normalize_nulls
from sheetlab.core.utils import SheetLoadError


class TestLoadSheet:
    """Test load_sheet on workbooks and CSV files."""

    def test_loads_first_sheet_by_default(self, sample_xlsx):
        df = load_sheet(sample_xlsx)

        assert list(df.columns) == ["Name", "Email", "Phone", "City"]
        assert len(df) == 4

    def test_empty_cells_become_none(self, sample_xlsx):
        df = load_sheet(sample_xlsx)

        assert df.loc[1, "Email"] is None
        assert df.loc[0, "Phone"] is None
        assert df.loc[3, "Name"] is None
        assert df.loc[2, "Phone"] == 123

    def test_loads_sheet_by_name(self, sample_xlsx):
        df = load_sheet(sample_xlsx, "Codes")

        assert list(df.columns) == ["Code"]
        assert list(df["Code"]) == ["X1", None]

    def test_loads_csv(self, sample_csv):
        df = load_sheet(str(sample_csv))

        assert list(df.columns) == ["Name", "Email", "Phone", "City"]
        assert df.loc[1, "Email"] is None
        assert df.loc[2, "City"] is None

    def test_csv_accepts_its_own_sheet_name(self, sample_csv):
        assert len(load_sheet(sample_csv, "contacts")) == 4

    def test_empty_csv_gives_empty_table(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")

        df = load_sheet(path)

        assert df.empty
        assert len(df.columns) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(SheetLoadError, match="introuvable"):
            load_sheet(tmp_path / "missing.xlsx")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("a,b\n1,2\n")

        with pytest.raises(SheetLoadError, match="non supporté"):
            load_sheet(path)

    def test_unknown_sheet(self, sample_xlsx):
        with pytest.raises(SheetLoadError):
            load_sheet(sample_xlsx, "Nope")

    def test_unknown_csv_sheet(self, sample_csv):
        with pytest.raises(SheetLoadError):
            load_sheet(sample_csv, "Nope")

    def test_corrupt_workbook(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip file")

        with pytest.raises(SheetLoadError):
            load_sheet(path)

    def test_blank_source(self):
        with pytest.raises(SheetLoadError):
            load_sheet("  ")


class TestCellText:
    """Only empty cells are null; null-like text and digits are kept as written."""

    NULL_LIKE = ["NA", "NULL", "N/A", "None", "nan", "inf"]

    def test_xlsx_keeps_null_like_text(self, tmp_path):
        path = tmp_path / "statuses.xlsx"
        pd.DataFrame({"Status": self.NULL_LIKE + ["ok", None]}).to_excel(path, index=False)

        df = load_sheet(path)

        assert list(df["Status"]) == self.NULL_LIKE + ["ok", None]

    def test_null_filter_ignores_null_like_text(self, tmp_path):
        path = tmp_path / "statuses.xlsx"
        pd.DataFrame({"Status": self.NULL_LIKE + ["ok"]}).to_excel(path, index=False)

        result = apply_null_filter(load_sheet(path), NullFilter(columns=["A"], operation="null"))

        assert len(result) == 0

    def test_csv_keeps_null_like_text(self, tmp_path):
        path = tmp_path / "statuses.csv"
        path.write_text("Status,Val\nNA,inf\nNULL,\n")

        df = load_sheet(path)

        assert list(df["Status"]) == ["NA", "NULL"]
        assert list(df["Val"]) == ["inf", None]

    def test_csv_keeps_leading_zeros(self, tmp_path):
        path = tmp_path / "codes.csv"
        path.write_text("Zip,Code\n007,01234\n75001,\n")

        df = load_sheet(path)

        assert list(df["Zip"]) == ["007", "75001"]
        assert df.loc[0, "Code"] == "01234"
        assert df.loc[1, "Code"] is None


class TestListSheetNames:
    """Test list_sheet_names."""

    def test_workbook_sheets(self, sample_xlsx):
        assert list_sheet_names(sample_xlsx) == ["Contacts", "Codes"]

    def test_csv_has_one_sheet_named_after_the_file(self, sample_csv):
        assert list_sheet_names(sample_csv) == ["contacts"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SheetLoadError):
            list_sheet_names(tmp_path / "missing.xlsx")


class TestNormalizeNulls:
    """Test normalize_nulls."""

    def test_nan_becomes_none(self):
        df = normalize_nulls(pd.DataFrame({"x": [1.5, float("nan")]}))

        assert df["x"].dtype == object
        assert df.loc[0, "x"] == 1.5
        assert df.loc[1, "x"] is None
