#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Chargement des feuilles de calcul
Lecture xlsx/csv vers un DataFrame pandas, cellules vides à None
"""

import logging
import os
from typing import List, Union
from urllib.parse import urlparse

import pandas as pd

from .utils import SheetLoadError, SUPPORTED_INPUT_EXTENSIONS, log_table_info


logger = logging.getLogger(__name__)

# Seule une cellule vide est nulle : "NA", "NULL", "inf"... restent du texte
_NA_OPTIONS = {'keep_default_na': False, 'na_values': ['']}


def _is_url(source: str) -> bool:
    return urlparse(str(source)).scheme in ('http', 'https', 'ftp', 'file')


def _source_extension(source: str) -> str:
    path = urlparse(str(source)).path if _is_url(source) else str(source)
    return os.path.splitext(path)[1].lower()


def _check_source(source: str) -> str:
    """Vérifier l'extension et l'existence de la source, renvoie l'extension"""
    if source is None or not str(source).strip():
        raise SheetLoadError("Aucun fichier indiqué")

    ext = _source_extension(source)
    if ext not in SUPPORTED_INPUT_EXTENSIONS:
        raise SheetLoadError(
            f"Format non supporté: '{ext or '(aucune extension)'}'. "
            f"Formats acceptés: {', '.join(SUPPORTED_INPUT_EXTENSIONS)}"
        )

    if not _is_url(source) and not os.path.isfile(source):
        raise SheetLoadError(f"Fichier introuvable: {source}")

    return ext


def normalize_nulls(df: pd.DataFrame) -> pd.DataFrame:
    """
    Remplacer toutes les valeurs manquantes par None

    Le tableau passe en dtype object pour que None survive à l'opération.
    """
    result = df.astype(object)
    return result.where(pd.notna(result), None)


def load_sheet(source: Union[str, os.PathLike], sheet: Union[int, str] = 0) -> pd.DataFrame:
    """
    Charger une feuille de calcul

    Args:
        source: Chemin ou URL du fichier (.xlsx, .xlsm, .csv)
        sheet: Nom ou position de la feuille (la première par défaut)

    Returns:
        DataFrame avec une colonne par en-tête et None pour les cellules vides
    """
    source = os.fspath(source)
    ext = _check_source(source)

    try:
        if ext == '.csv':
            if sheet not in (0, None) and sheet != _csv_sheet_name(source):
                raise SheetLoadError(f"Feuille introuvable: {sheet}")
            df = pd.read_csv(source, dtype=str, **_NA_OPTIONS)
        else:
            df = pd.read_excel(source, sheet_name=0 if sheet is None else sheet, **_NA_OPTIONS)
    except SheetLoadError:
        raise
    except pd.errors.EmptyDataError:
        df = pd.DataFrame()
    except (ValueError, IndexError) as e:
        # pandas lève ValueError/IndexError pour une feuille inconnue
        logger.error("Feuille %r illisible dans %s: %s", sheet, source, e)
        raise SheetLoadError(f"Feuille introuvable ou illisible: {sheet} ({e})") from e
    except Exception as e:
        logger.error("Erreur lors du chargement de %s: %s", source, e)
        raise SheetLoadError(f"Impossible de lire {source}: {e}") from e

    # Colonnes sans en-tête : pandas les nomme "Unnamed: n"
    df.columns = [str(col) for col in df.columns]
    df = normalize_nulls(df).reset_index(drop=True)

    log_table_info(df, f"Chargement de {os.path.basename(source)}")
    return df


def _csv_sheet_name(source: str) -> str:
    return os.path.splitext(os.path.basename(urlparse(source).path if _is_url(source) else source))[0]


def list_sheet_names(source: Union[str, os.PathLike]) -> List[str]:
    """
    Lister les feuilles d'un classeur

    Args:
        source: Chemin ou URL du fichier

    Returns:
        Noms des feuilles ; un fichier CSV a une seule feuille portant son nom
    """
    source = os.fspath(source)
    ext = _check_source(source)

    if ext == '.csv':
        return [_csv_sheet_name(source)]

    try:
        with pd.ExcelFile(source) as workbook:
            return [str(name) for name in workbook.sheet_names]
    except Exception as e:
        logger.error("Impossible de lister les feuilles de %s: %s", source, e)
        raise SheetLoadError(f"Impossible de lire {source}: {e}") from e
