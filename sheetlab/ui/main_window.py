#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interface principale de SheetLab
Fenêtre principale avec sidebar, header et onglet de la feuille
"""

from typing import Optional

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
    QTabWidget, QLabel, QFileDialog, QMessageBox, QComboBox,
    QSplitter, QFrame, QSpacerItem, QSizePolicy
)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont

from .tabs.tab_sheet import TabSheet
from ..core.sheet_model import SheetDocument
from ..core.utils import SUPPORTED_INPUT_EXTENSIONS


class MainWindow(QMainWindow):
    """Fenêtre principale de l'application"""

    def __init__(self):
        super().__init__()
        self.confirm_close = True
        self.setup_ui()
        self.setup_connections()
        self.on_document_changed(self.tab_sheet.document)

    @property
    def document(self) -> SheetDocument:
        return self.tab_sheet.document

    def setup_ui(self):
        """Configuration de l'interface utilisateur"""
        self.setWindowTitle("SheetLab - Filtrage et export de feuilles de calcul")
        self.setMinimumSize(1000, 650)
        self.resize(1300, 850)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        sidebar = self.create_sidebar()
        splitter.addWidget(sidebar)

        main_area = self.create_main_area()
        splitter.addWidget(main_area)

        splitter.setSizes([250, 1050])
        splitter.setCollapsible(0, False)
        splitter.setCollapsible(1, False)

    def create_sidebar(self) -> QWidget:
        """Création de la barre latérale d'informations"""
        sidebar = QFrame()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(250)

        layout = QVBoxLayout(sidebar)
        layout.setContentsMargins(10, 20, 10, 20)
        layout.setSpacing(15)

        title_label = QLabel("SheetLab")
        title_label.setObjectName("sidebarTitle")
        title_font = QFont()
        title_font.setPointSize(16)
        title_font.setBold(True)
        title_label.setFont(title_font)
        title_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(title_label)

        self.file_label = QLabel()
        self.file_label.setObjectName("sidebarInfo")
        self.file_label.setWordWrap(True)
        layout.addWidget(self.file_label)

        layout.addWidget(QLabel("Feuille:"))
        self.sheet_combo = QComboBox()
        self.sheet_combo.setEnabled(False)
        layout.addWidget(self.sheet_combo)

        self.rows_label = QLabel()
        self.rows_label.setObjectName("sidebarInfo")
        layout.addWidget(self.rows_label)

        self.columns_label = QLabel()
        self.columns_label.setObjectName("sidebarInfo")
        self.columns_label.setWordWrap(True)
        self.columns_label.setTextFormat(Qt.PlainText)
        layout.addWidget(self.columns_label)

        layout.addItem(QSpacerItem(20, 40, QSizePolicy.Minimum, QSizePolicy.Expanding))

        return sidebar

    def create_main_area(self) -> QWidget:
        """Création de la zone principale"""
        main_widget = QWidget()
        layout = QVBoxLayout(main_widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        header = self.create_header()
        layout.addWidget(header)

        self.tab_widget = QTabWidget()
        self.tab_widget.setObjectName("mainTabs")
        self.tab_sheet = TabSheet()
        self.tab_widget.addTab(self.tab_sheet, "Feuille")

        tab_bar = self.tab_widget.tabBar()
        if tab_bar:
            tab_bar.setVisible(False)

        layout.addWidget(self.tab_widget)

        return main_widget

    def create_header(self) -> QWidget:
        """Création de l'en-tête bleu"""
        header = QFrame()
        header.setObjectName("header")
        header.setFixedHeight(60)

        layout = QHBoxLayout(header)
        layout.setContentsMargins(20, 10, 20, 10)

        self.header_title = QLabel("Aucun fichier")
        self.header_title.setObjectName("headerTitle")
        header_font = QFont()
        header_font.setPointSize(14)
        header_font.setBold(True)
        self.header_title.setFont(header_font)
        layout.addWidget(self.header_title)

        layout.addItem(QSpacerItem(40, 20, QSizePolicy.Expanding, QSizePolicy.Minimum))

        actions = [
            ("Ouvrir", "ouvrir"),
            ("Réinitialiser", "reinitialiser"),
            ("Exporter", "exporter"),
        ]

        for text, action in actions:
            btn = QPushButton(text)
            btn.setObjectName("headerActionButton")
            btn.setMinimumHeight(35)
            btn.clicked.connect(lambda checked, a=action: self.handle_action(a))
            layout.addWidget(btn)

        return header

    def setup_connections(self):
        """Configuration des connexions de signaux"""
        self.tab_sheet.document_changed.connect(self.on_document_changed)
        self.sheet_combo.activated[str].connect(self.on_sheet_selected)

    def handle_action(self, action: str):
        """Gestion des actions de l'en-tête"""
        if action == "ouvrir":
            self.ouvrir_fichier()
        elif action == "reinitialiser":
            self.tab_sheet.reset_filter()
        elif action == "exporter":
            self.exporter_donnees()

    def ouvrir_fichier(self):
        """Choisir et ouvrir une feuille de calcul"""
        patterns = " ".join(f"*{ext}" for ext in SUPPORTED_INPUT_EXTENSIONS)
        filename, _ = QFileDialog.getOpenFileName(
            self, "Ouvrir une feuille de calcul", "",
            f"Feuilles de calcul ({patterns});;Tous les fichiers (*)"
        )
        if filename:
            self.open_file(filename)

    def open_file(self, source: str, sheet=0) -> bool:
        """Ouvrir un fichier (chemin ou URL)"""
        return self.tab_sheet.load_file(source, sheet)

    def on_sheet_selected(self, sheet_name: str):
        """Changement de feuille dans le classeur courant"""
        document = self.document
        if not document.source:
            return
        current = self.current_sheet_index(document)
        if current is not None and document.sheet_names[current] == sheet_name:
            return
        self.tab_sheet.load_file(document.source, sheet_name)

    def exporter_donnees(self):
        """Exporter les données filtrées"""
        try:
            self.tab_sheet.export_data()
        except Exception as e:
            QMessageBox.warning(self, "Erreur d'export", f"Erreur lors de l'export: {str(e)}")

    def on_document_changed(self, document: SheetDocument):
        """Mise à jour de la sidebar et de l'en-tête"""
        self.header_title.setText(document.display_name)

        if document.source:
            self.file_label.setText(f"Fichier: {document.source}")
        else:
            self.file_label.setText("Aucun fichier ouvert")

        self.sheet_combo.blockSignals(True)
        self.sheet_combo.clear()
        self.sheet_combo.addItems(document.sheet_names)
        current = self.current_sheet_index(document)
        if current is not None:
            self.sheet_combo.setCurrentIndex(current)
        self.sheet_combo.setEnabled(len(document.sheet_names) > 1)
        self.sheet_combo.blockSignals(False)

        if document.is_loaded:
            self.rows_label.setText(
                f"Lignes: {document.filtered_row_count} / {document.row_count}"
            )
            self.columns_label.setText(
                "Colonnes:\n" + "\n".join(f"{letter}: {label}"
                                          for letter, label in document.column_headers())
            )
        else:
            self.rows_label.setText("Lignes: -")
            self.columns_label.setText("")

    @staticmethod
    def current_sheet_index(document: SheetDocument) -> Optional[int]:
        """Position de la feuille courante dans la liste des feuilles"""
        if isinstance(document.sheet_name, int):
            return document.sheet_name if document.sheet_name < len(document.sheet_names) else None
        if document.sheet_name in document.sheet_names:
            return document.sheet_names.index(document.sheet_name)
        return None

    def closeEvent(self, a0):
        """Gestion de la fermeture de l'application"""
        event = a0
        if not self.confirm_close:
            event.accept()
            return

        reply = QMessageBox.question(
            self, "Fermeture", "Voulez-vous vraiment fermer SheetLab?",
            QMessageBox.Yes | QMessageBox.No, QMessageBox.No
        )

        if reply == QMessageBox.Yes:
            event.accept()
        else:
            event.ignore()
