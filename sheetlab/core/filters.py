#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Filtrage des lignes
Filtres nul / non nul sur un ensemble de colonnes, combinés en ET ou en OU
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from .utils import (
    FilterError, column_letter_to_index, resolve_columns, log_table_info
)


logger = logging.getLogger(__name__)


COMBINATORS = ('and', 'or')
OPERATIONS = ('null', 'not_null')

COMBINATOR_LABELS = {'and': 'ET', 'or': 'OU'}
OPERATION_LABELS = {'null': 'nulle', 'not_null': 'non nulle'}


@dataclass
class NullFilter:
    """Définition d'un filtre nul / non nul"""

    columns: List[str] = field(default_factory=list)
    combinator: str = 'and'
    operation: str = 'null'
    primary_column: Optional[str] = None

    def __post_init__(self):
        self.columns = [str(col).strip().upper() for col in self.columns]
        self.combinator = str(self.combinator).strip().lower()
        self.operation = str(self.operation).strip().lower().replace(' ', '_').replace('-', '_')
        if self.primary_column is not None:
            self.primary_column = str(self.primary_column).strip().upper() or None

    def validate(self) -> None:
        """Vérifier la cohérence du filtre, lève FilterError sinon"""
        if self.combinator not in COMBINATORS:
            raise FilterError(f"Combinaison inconnue: {self.combinator!r} (attendu: and, or)")
        if self.operation not in OPERATIONS:
            raise FilterError(f"Opération inconnue: {self.operation!r} (attendu: null, not_null)")
        if not self.columns:
            raise FilterError("Le filtre doit porter sur au moins une colonne")

        for letter in self.columns:
            column_letter_to_index(letter)
        if self.primary_column is not None:
            column_letter_to_index(self.primary_column)


def apply_null_filter(df: pd.DataFrame, spec: NullFilter) -> pd.DataFrame:
    """
    Appliquer un filtre nul / non nul

    Une ligne est conservée si les valeurs des colonnes d'opération sont
    toutes (ET) ou au moins une (OU) nulles ou non nulles selon l'opération.
    La colonne principale est validée mais n'intervient pas dans la sélection.

    Args:
        df: Tableau d'origine
        spec: Définition du filtre

    Returns:
        Nouveau tableau contenant les lignes retenues, index réinitialisé
    """
    spec.validate()

    labels = list(df.columns)
    resolve_columns(spec.columns, labels)
    if spec.primary_column is not None:
        resolve_columns([spec.primary_column], labels)

    if df.empty:
        return df.iloc[0:0].reset_index(drop=True)

    # Sélection positionnelle : des en-têtes dupliqués restent distincts
    positions = [column_letter_to_index(letter) for letter in spec.columns]
    values = df.iloc[:, positions]

    mask = values.isna() if spec.operation == 'null' else values.notna()
    keep = mask.all(axis=1) if spec.combinator == 'and' else mask.any(axis=1)

    result = df.loc[keep].reset_index(drop=True)
    logger.info("Filtre appliqué: %s", describe_filter(spec))
    log_table_info(result, "Résultat du filtre")
    return result


def describe_filter(spec: NullFilter) -> str:
    """Résumé lisible d'un filtre"""
    joiner = f" {COMBINATOR_LABELS.get(spec.combinator, spec.combinator)} "
    label = OPERATION_LABELS.get(spec.operation, spec.operation)
    if spec.combinator == 'and':
        quantifier = "toutes" if len(spec.columns) > 1 else "valeur"
        label = label + "s" if len(spec.columns) > 1 else label
    else:
        quantifier = "au moins une valeur"
    text = f"{joiner.join(spec.columns)} : {quantifier} {label}"
    if spec.primary_column:
        text += f" (colonne principale {spec.primary_column})"
    return text
