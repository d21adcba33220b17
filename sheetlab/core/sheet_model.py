#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Document SheetLab
Données d'origine, données filtrées et filtre actif
"""

import logging
import os
from typing import List, Optional, Tuple, Union, Any

import pandas as pd

from .filters import NullFilter, apply_null_filter
from .sheet_loader import load_sheet, list_sheet_names
from .utils import index_to_column_letter


logger = logging.getLogger(__name__)


class SheetDocument:
    """Feuille chargée et résultat du dernier filtre"""

    def __init__(self, data: Optional[pd.DataFrame] = None, source: Optional[str] = None):
        self.source = source
        self.sheet_name: Optional[Union[int, str]] = None
        self.sheet_names: List[str] = []
        self.data = data if data is not None else pd.DataFrame()
        self.filtered = self.data.copy()
        self.active_filter: Optional[NullFilter] = None

    @property
    def is_loaded(self) -> bool:
        return len(self.data.columns) > 0

    @property
    def row_count(self) -> int:
        return len(self.data)

    @property
    def filtered_row_count(self) -> int:
        return len(self.filtered)

    @property
    def display_name(self) -> str:
        if not self.source:
            return "Aucun fichier"
        return os.path.basename(str(self.source))

    def load(self, source: Union[str, os.PathLike], sheet: Union[int, str] = 0) -> pd.DataFrame:
        """
        Charger une feuille et réinitialiser le filtre

        Args:
            source: Chemin ou URL du fichier
            sheet: Nom ou position de la feuille

        Returns:
            Le tableau chargé
        """
        source = os.fspath(source)
        data = load_sheet(source, sheet)

        # Le document n'est modifié qu'une fois la lecture réussie
        self.sheet_names = list_sheet_names(source)
        self.source = source
        self.sheet_name = sheet
        self.data = data
        self.filtered = data.copy()
        self.active_filter = None
        return self.data

    def apply_filter(self, spec: NullFilter) -> pd.DataFrame:
        """Filtrer les données d'origine (jamais le résultat précédent)"""
        self.filtered = apply_null_filter(self.data, spec)
        self.active_filter = spec
        return self.filtered

    def reset_filter(self) -> pd.DataFrame:
        """Revenir aux données complètes"""
        self.filtered = self.data.copy()
        self.active_filter = None
        logger.info("Filtre réinitialisé")
        return self.filtered

    def column_headers(self) -> List[Tuple[str, Any]]:
        """Couples (lettre, libellé) des colonnes"""
        return [(index_to_column_letter(i), label) for i, label in enumerate(self.data.columns)]
