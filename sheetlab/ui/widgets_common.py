#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Widgets communs pour SheetLab
Panneau de filtre, vue HTML du tableau, boîte de dialogue d'export
"""

import os
from typing import Optional, Tuple

import pandas as pd
from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QPushButton,
    QLabel, QLineEdit, QComboBox, QGroupBox, QTextBrowser, QDialog,
    QDialogButtonBox, QMessageBox, QFileDialog
)
from PyQt5.QtCore import pyqtSignal

from ..core.filters import NullFilter
from ..core.html_table import render_html_table, TABLE_STYLE
from ..core.utils import (
    SheetLabError, EXPORT_FORMATS, DEFAULT_EXPORT_FILENAME, parse_column_list
)


class FilterPanel(QGroupBox):
    """Saisie d'un filtre nul / non nul sur des colonnes désignées par lettres"""

    filter_requested = pyqtSignal(object)
    reset_requested = pyqtSignal()

    def __init__(self, title: str = "Filtre"):
        super().__init__(title)
        self.setup_ui()

    def setup_ui(self):
        """Configuration de l'interface"""
        layout = QGridLayout(self)
        layout.setSpacing(12)
        layout.setColumnStretch(1, 1)

        layout.addWidget(QLabel("Colonne principale:"), 0, 0)
        self.primary_edit = QLineEdit()
        self.primary_edit.setPlaceholderText("ex. A")
        self.primary_edit.setMaxLength(3)
        layout.addWidget(self.primary_edit, 0, 1)

        layout.addWidget(QLabel("Colonnes d'opération:"), 1, 0)
        self.columns_edit = QLineEdit()
        self.columns_edit.setPlaceholderText("ex. B,C,D")
        self.columns_edit.returnPressed.connect(self.request_filter)
        layout.addWidget(self.columns_edit, 1, 1)

        layout.addWidget(QLabel("Combinaison:"), 2, 0)
        self.combinator_combo = QComboBox()
        self.combinator_combo.addItem("ET (toutes les colonnes)", 'and')
        self.combinator_combo.addItem("OU (au moins une colonne)", 'or')
        layout.addWidget(self.combinator_combo, 2, 1)

        layout.addWidget(QLabel("Opération:"), 3, 0)
        self.operation_combo = QComboBox()
        self.operation_combo.addItem("Nulle", 'null')
        self.operation_combo.addItem("Non nulle", 'not_null')
        layout.addWidget(self.operation_combo, 3, 1)

        buttons_layout = QHBoxLayout()

        self.btn_apply = QPushButton("Appliquer")
        self.btn_apply.setObjectName("actionButton")
        self.btn_apply.setMinimumHeight(35)
        self.btn_apply.clicked.connect(self.request_filter)
        buttons_layout.addWidget(self.btn_apply)

        self.btn_reset = QPushButton("Réinitialiser")
        self.btn_reset.setObjectName("errorButton")
        self.btn_reset.setMinimumHeight(35)
        self.btn_reset.clicked.connect(lambda checked: self.reset_requested.emit())
        buttons_layout.addWidget(self.btn_reset)

        buttons_layout.addStretch()
        layout.addLayout(buttons_layout, 4, 0, 1, 2)

    def get_filter(self) -> NullFilter:
        """Construire le filtre à partir de la saisie, lève SheetLabError si invalide"""
        columns = parse_column_list(self.columns_edit.text())
        primary = self.primary_edit.text().strip() or None

        spec = NullFilter(
            columns=columns,
            combinator=self.combinator_combo.currentData(),
            operation=self.operation_combo.currentData(),
            primary_column=primary,
        )
        spec.validate()
        return spec

    def set_filter(self, spec: NullFilter):
        """Afficher un filtre dans le panneau"""
        self.primary_edit.setText(spec.primary_column or "")
        self.columns_edit.setText(",".join(spec.columns))
        self.combinator_combo.setCurrentIndex(self.combinator_combo.findData(spec.combinator))
        self.operation_combo.setCurrentIndex(self.operation_combo.findData(spec.operation))

    def request_filter(self):
        """Émettre le filtre saisi"""
        try:
            spec = self.get_filter()
        except SheetLabError as e:
            QMessageBox.warning(self, "Filtre invalide", str(e))
            return
        self.filter_requested.emit(spec)


class SheetView(QTextBrowser):
    """Affichage du tableau sous forme de table HTML"""

    def __init__(self):
        super().__init__()
        self.setObjectName("sheetView")
        self.setOpenExternalLinks(False)
        self.document().setDefaultStyleSheet(TABLE_STYLE)
        self.show_letters = True
        self.show_table(None)

    def show_table(self, df: Optional[pd.DataFrame]):
        """Afficher un tableau (ou le message « No data available »)"""
        self.setHtml(render_html_table(df, show_letters=self.show_letters))


class ExportDialog(QDialog):
    """Boîte de dialogue d'export : nom du fichier et format"""

    def __init__(self, parent: Optional[QWidget] = None,
                 filename: str = DEFAULT_EXPORT_FILENAME, directory: str = ""):
        super().__init__(parent)
        self.setWindowTitle("Exporter le tableau")
        self.setModal(True)
        self.setMinimumWidth(380)
        self.setup_ui(filename, directory or os.getcwd())

    def setup_ui(self, filename: str, directory: str):
        """Configuration de l'interface"""
        layout = QVBoxLayout(self)

        form = QGridLayout()
        form.addWidget(QLabel("Nom du fichier:"), 0, 0)
        self.filename_edit = QLineEdit(filename)
        form.addWidget(self.filename_edit, 0, 1)

        form.addWidget(QLabel("Format:"), 1, 0)
        self.format_combo = QComboBox()
        for fmt, label in EXPORT_FORMATS.items():
            self.format_combo.addItem(label, fmt)
        form.addWidget(self.format_combo, 1, 1)

        form.addWidget(QLabel("Dossier:"), 2, 0)
        self.directory_edit = QLineEdit(directory)
        form.addWidget(self.directory_edit, 2, 1)
        btn_browse = QPushButton("Parcourir...")
        btn_browse.clicked.connect(self.browse_directory)
        form.addWidget(btn_browse, 2, 2)
        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Ok).setText("Télécharger")
        buttons.button(QDialogButtonBox.Cancel).setText("Fermer")
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def browse_directory(self):
        """Choisir le dossier de destination"""
        directory = QFileDialog.getExistingDirectory(
            self, "Dossier de destination", self.directory_edit.text()
        )
        if directory:
            self.directory_edit.setText(directory)

    def get_values(self) -> Tuple[str, str]:
        """Chemin (dossier + nom) et format choisis"""
        filename = self.filename_edit.text().strip()
        directory = self.directory_edit.text().strip()
        path = os.path.join(directory, filename) if directory else filename
        return path, self.format_combo.currentData()
