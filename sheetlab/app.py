#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SheetLab - Application principale
Point d'entrée de l'application desktop de filtrage et d'export de feuilles de calcul
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv
from PyQt5.QtWidgets import QApplication, QMessageBox
from PyQt5.QtGui import QFont

from . import __version__
from .ui.main_window import MainWindow


logger = logging.getLogger(__name__)

LOG_FORMAT = "[SheetLab] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configuration du logging console"""
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Arguments de la ligne de commande"""
    parser = argparse.ArgumentParser(
        prog="sheetlab",
        description="Affichage, filtrage nul / non nul et export de feuilles de calcul",
    )
    parser.add_argument(
        "file", nargs="?", default=None,
        help="Feuille de calcul à ouvrir (xlsx, xlsm, csv) ou URL",
    )
    parser.add_argument(
        "--sheet", default=None,
        help="Nom de la feuille à afficher (la première par défaut)",
    )
    parser.add_argument(
        "--log-level", default=None,
        help="Niveau de log (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


class SheetLabApp:
    """Application principale SheetLab"""

    def __init__(self, initial_file: Optional[str] = None, sheet: Optional[str] = None):
        self.app: Optional[QApplication] = None
        self.main_window: Optional[MainWindow] = None
        self.initial_file = initial_file
        self.sheet = sheet

    def setup_application(self) -> QApplication:
        """Configuration de l'application Qt"""
        app = QApplication.instance() or QApplication(sys.argv[:1])
        app.setApplicationName("SheetLab")
        app.setApplicationVersion(__version__)
        app.setOrganizationName("SheetLab")

        font = QFont()
        font.setFamily("Segoe UI")
        font.setPointSize(10)
        app.setFont(font)

        self.apply_theme(app)

        return app

    def apply_theme(self, app: QApplication) -> None:
        """Application du thème QSS"""
        qss_path = os.path.join(os.path.dirname(__file__), "themes", "app.qss")
        try:
            with open(qss_path, 'r', encoding='utf-8') as f:
                app.setStyleSheet(f.read())
        except OSError as e:
            logger.warning("Thème non chargé (%s): %s", qss_path, e)

    def create_window(self) -> MainWindow:
        """Création de la fenêtre et ouverture du fichier initial"""
        self.main_window = MainWindow()
        if self.initial_file:
            self.main_window.open_file(self.initial_file, self.sheet if self.sheet else 0)
        return self.main_window

    def run(self) -> int:
        """Lancement de l'application"""
        try:
            self.app = self.setup_application()
            self.create_window().show()

            return self.app.exec_()

        except Exception as e:
            logger.exception("Impossible de démarrer l'application")
            QMessageBox.critical(
                None,
                "Erreur critique",
                f"Impossible de démarrer l'application:\n{str(e)}"
            )
            return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Point d'entrée principal"""
    load_dotenv()
    args = parse_args(argv)

    setup_logging(args.log_level or os.getenv("SHEETLAB_LOG_LEVEL", "INFO"))

    initial_file = args.file or os.getenv("SHEETLAB_DEFAULT_FILE") or None
    app = SheetLabApp(initial_file, args.sheet)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
