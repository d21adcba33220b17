from __future__ import annotations

import os
from pathlib import Path

import pandas as pd
import pytest


@pytest.fixture
def sample_df() -> pd.DataFrame:
    """Four rows, four columns, nulls scattered in B (Email) and C (Phone)."""
    return pd.DataFrame(
        {
            "Name": ["Alice", "Bob", "Carol", None],
            "Email": ["a@x.com", None, "c@x.com", "d@x.com"],
            "Phone": [None, None, 123, 456],
            "City": ["Paris", "Lyon", None, "Nice"],
        },
        dtype=object,
    )


@pytest.fixture
def sample_xlsx(tmp_path: Path, sample_df: pd.DataFrame) -> Path:
    path = tmp_path / "contacts.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        sample_df.to_excel(writer, sheet_name="Contacts", index=False)
        pd.DataFrame({"Code": ["X1", None]}).to_excel(writer, sheet_name="Codes", index=False)
    return path


@pytest.fixture
def sample_csv(tmp_path: Path, sample_df: pd.DataFrame) -> Path:
    path = tmp_path / "contacts.csv"
    sample_df.to_csv(path, index=False)
    return path


@pytest.fixture(scope="session")
def qapp():
    """Offscreen QApplication shared by the UI tests."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    QtWidgets = pytest.importorskip("PyQt5.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
