#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utilitaires et validations pour SheetLab
Exceptions personnalisées, adressage des colonnes et fonctions utilitaires
"""

import logging
import math
import re
from typing import Any, Iterable, List, Sequence

import numpy as np
import pandas as pd


logger = logging.getLogger(__name__)


class SheetLabError(Exception):
    """Exception de base pour SheetLab"""
    pass


class SheetLoadError(SheetLabError):
    """Erreur de chargement d'une feuille"""
    pass


class ColumnAddressError(SheetLabError):
    """Erreur d'adressage de colonne (lettre invalide ou hors limites)"""
    pass


class FilterError(SheetLabError):
    """Erreur de définition de filtre"""
    pass


class ExportError(SheetLabError):
    """Erreur d'exportation"""
    pass


_LETTERS_PATTERN = re.compile(r'^[A-Z]+$')


def column_letter_to_index(letter: str) -> int:
    """
    Convertir une lettre de colonne en index positionnel

    "A" -> 0, "Z" -> 25, "AA" -> 26 (base 26 bijective, comme un tableur).

    Args:
        letter: Lettre(s) de colonne, casse indifférente

    Returns:
        Index de la colonne (à partir de 0)
    """
    if not isinstance(letter, str):
        raise ColumnAddressError(f"Adresse de colonne invalide: {letter!r}")

    clean = letter.strip().upper()
    if not clean or not _LETTERS_PATTERN.match(clean):
        raise ColumnAddressError(f"Adresse de colonne invalide: {letter!r}")

    index = 0
    for char in clean:
        index = index * 26 + (ord(char) - ord('A') + 1)
    return index - 1


def index_to_column_letter(index: int) -> str:
    """
    Convertir un index positionnel en lettre de colonne

    Args:
        index: Index de la colonne (à partir de 0)

    Returns:
        Lettre(s) de colonne en majuscules
    """
    if index < 0:
        raise ColumnAddressError(f"Index de colonne négatif: {index}")

    letters = []
    n = index + 1
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        letters.append(chr(ord('A') + remainder))
    return ''.join(reversed(letters))


def parse_column_list(text: str) -> List[str]:
    """
    Découper une saisie utilisateur du type "a, C,d" en lettres normalisées

    Args:
        text: Lettres séparées par des virgules

    Returns:
        Liste de lettres en majuscules, dans l'ordre de saisie
    """
    if text is None:
        raise ColumnAddressError("Aucune colonne indiquée")

    letters = []
    for part in text.split(','):
        part = part.strip().upper()
        if not part:
            continue
        # Valide la lettre, lève ColumnAddressError sinon
        column_letter_to_index(part)
        letters.append(part)

    if not letters:
        raise ColumnAddressError("Aucune colonne indiquée")

    return letters


def resolve_columns(letters: Iterable[str], labels: Sequence[Any]) -> List[Any]:
    """
    Associer des lettres de colonnes aux libellés d'un tableau

    Args:
        letters: Lettres de colonnes
        labels: Libellés des colonnes du tableau, dans l'ordre

    Returns:
        Libellés correspondants
    """
    resolved = []
    for letter in letters:
        index = column_letter_to_index(letter)
        if index >= len(labels):
            last = index_to_column_letter(len(labels) - 1) if len(labels) else None
            raise ColumnAddressError(
                f"La colonne {letter.strip().upper()} n'existe pas"
                + (f" (dernière colonne: {last})" if last else " (tableau sans colonnes)")
            )
        resolved.append(labels[index])
    return resolved


def is_null(value: Any) -> bool:
    """Une cellule est nulle si elle vaut None, NaN, NaT ou pd.NA"""
    if value is None:
        return True
    try:
        result = pd.isna(value)
    except (TypeError, ValueError):
        return False
    # pd.isna renvoie un tableau pour les valeurs non scalaires
    return bool(result) if isinstance(result, (bool, np.bool_)) else False


def format_cell(value: Any, null_text: str = None) -> str:
    """
    Formater une cellule pour l'affichage

    Args:
        value: Valeur de la cellule
        null_text: Texte affiché pour une cellule nulle

    Returns:
        Chaîne formatée
    """
    if null_text is None:
        null_text = NULL_DISPLAY_TEXT

    if is_null(value):
        return null_text
    if isinstance(value, (bool, np.bool_)):
        return str(bool(value))
    if isinstance(value, (float, np.floating)):
        if math.isfinite(value) and float(value).is_integer():
            return str(int(value))
        return str(float(value))
    if isinstance(value, pd.Timestamp):
        if value == value.normalize():
            return value.strftime('%Y-%m-%d')
        return value.strftime('%Y-%m-%d %H:%M:%S')
    return str(value)


def sanitize_filename(filename: str) -> str:
    """
    Nettoyer un nom de fichier

    Args:
        filename: Nom de fichier à nettoyer

    Returns:
        Nom de fichier nettoyé
    """
    # Caractères interdits dans les noms de fichiers
    invalid_chars = r'[<>:"/\\|?*\x00-\x1f]'

    clean_name = re.sub(invalid_chars, '_', filename or '')

    if len(clean_name) > 200:
        clean_name = clean_name[:200]

    if not clean_name.strip():
        clean_name = DEFAULT_EXPORT_FILENAME

    return clean_name.strip()


def log_table_info(df: pd.DataFrame, operation: str) -> None:
    """
    Journaliser les dimensions d'un tableau pour une opération

    Args:
        df: Tableau concerné
        operation: Opération effectuée
    """
    if df is None:
        logger.info("%s: aucun tableau", operation)
        return
    rows, cols = df.shape
    logger.info("%s: %d ligne(s), %d colonne(s)", operation, rows, cols)


# Constantes utiles
NULL_DISPLAY_TEXT = 'NULL'

DEFAULT_EXPORT_FILENAME = 'sheetlab_export'

SUPPORTED_INPUT_EXTENSIONS = ('.xlsx', '.xlsm', '.csv')

EXPORT_FORMATS = {
    'xlsx': 'Classeur Excel (*.xlsx)',
    'csv': 'Fichier CSV (*.csv)',
    'pdf': 'Document PDF (*.pdf)',
    'jpg': 'Image JPEG (*.jpg)',
    'jpeg': 'Image JPEG (*.jpeg)',
    'png': 'Image PNG (*.png)',
    'html': 'Page HTML (*.html)',
}

TABLE_LIMITS = {
    'max_image_rows': 200,
    'pdf_landscape_columns': 6,
    'image_dpi': 150,
    'image_row_height': 0.3,
    'image_col_width': 1.6,
}
