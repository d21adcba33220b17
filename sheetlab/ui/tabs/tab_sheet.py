#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onglet de la feuille
Vue HTML du tableau filtré, panneau de filtre et export
"""

import logging
import os
from typing import Optional, Union

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QSplitter, QLabel, QMessageBox, QDialog
)
from PyQt5.QtCore import Qt, pyqtSignal

from ..widgets_common import FilterPanel, SheetView, ExportDialog
from ...core.exports import export_table
from ...core.filters import NullFilter, describe_filter
from ...core.sheet_model import SheetDocument
from ...core.utils import SheetLabError, DEFAULT_EXPORT_FILENAME


logger = logging.getLogger(__name__)


class TabSheet(QWidget):
    """Onglet d'affichage et de filtrage d'une feuille"""

    document_changed = pyqtSignal(object)

    def __init__(self, document: Optional[SheetDocument] = None):
        super().__init__()
        self.document = document if document is not None else SheetDocument()
        self.setup_ui()
        self.setup_connections()
        self.refresh()

    def setup_ui(self):
        """Configuration de l'interface utilisateur"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        main_splitter = QSplitter(Qt.Horizontal)
        layout.addWidget(main_splitter)

        # Zone de gauche : filtre
        left_widget = QWidget()
        left_layout = QVBoxLayout(left_widget)

        self.filter_panel = FilterPanel("Filtre des lignes")
        left_layout.addWidget(self.filter_panel)

        self.status_label = QLabel()
        self.status_label.setObjectName("statusLabel")
        self.status_label.setWordWrap(True)
        left_layout.addWidget(self.status_label)

        left_layout.addStretch()
        main_splitter.addWidget(left_widget)

        # Zone de droite : tableau
        self.sheet_view = SheetView()
        main_splitter.addWidget(self.sheet_view)

        main_splitter.setSizes([350, 850])

    def setup_connections(self):
        """Configuration des connexions"""
        self.filter_panel.filter_requested.connect(self.apply_filter)
        self.filter_panel.reset_requested.connect(self.reset_filter)

    def load_file(self, source: Union[str, os.PathLike], sheet: Union[int, str] = 0) -> bool:
        """Charger un fichier dans l'onglet, renvoie False en cas d'erreur"""
        try:
            self.document.load(source, sheet)
        except SheetLabError as e:
            logger.error("Chargement impossible: %s", e)
            QMessageBox.warning(self, "Erreur de chargement", str(e))
            return False

        self.refresh()
        self.document_changed.emit(self.document)
        return True

    def apply_filter(self, spec: NullFilter):
        """Appliquer un filtre aux données d'origine"""
        if not self.document.is_loaded:
            QMessageBox.warning(self, "Erreur", "Aucune feuille chargée")
            return

        try:
            self.document.apply_filter(spec)
        except SheetLabError as e:
            QMessageBox.warning(self, "Filtre invalide", str(e))
            return

        self.refresh()
        self.document_changed.emit(self.document)

    def reset_filter(self):
        """Afficher de nouveau toutes les lignes"""
        self.document.reset_filter()
        self.refresh()
        self.document_changed.emit(self.document)

    def refresh(self):
        """Mise à jour de la vue et du statut"""
        self.sheet_view.show_table(self.document.filtered if self.document.is_loaded else None)

        if not self.document.is_loaded:
            self.status_label.setText("Aucune feuille chargée.")
            return

        lines = [f"{self.document.filtered_row_count} / {self.document.row_count} ligne(s) affichée(s)"]
        if self.document.active_filter is not None:
            lines.append(f"Filtre: {describe_filter(self.document.active_filter)}")
        else:
            lines.append("Aucun filtre actif")
        self.status_label.setText("\n".join(lines))

    def export_data(self):
        """Exporter le tableau filtré"""
        if not self.document.is_loaded:
            QMessageBox.warning(self, "Export", "Aucune donnée à exporter")
            return

        base_name = DEFAULT_EXPORT_FILENAME
        directory = ""
        if self.document.source and os.path.isfile(self.document.source):
            base_name = os.path.splitext(self.document.display_name)[0] + "_filtre"
            directory = os.path.dirname(os.path.abspath(self.document.source))

        dialog = ExportDialog(self, base_name, directory)
        if dialog.exec_() != QDialog.Accepted:
            return

        filename, fmt = dialog.get_values()
        try:
            path = export_table(self.document.filtered, filename, fmt,
                                title=self.document.display_name)
            QMessageBox.information(self, "Export", f"Tableau exporté: {path}")
        except SheetLabError as e:
            QMessageBox.warning(self, "Erreur d'export", str(e))
