#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Fonctions d'exportation
Export Excel, CSV, PDF, image et HTML du tableau filtré
"""

import logging
import os
from datetime import datetime
from typing import Callable, Dict, List, Optional
from xml.sax.saxutils import escape

import pandas as pd
from matplotlib.figure import Figure
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from .html_table import render_html_document, EMPTY_TABLE_TEXT
from .utils import (
    ExportError, EXPORT_FORMATS, NULL_DISPLAY_TEXT, TABLE_LIMITS,
    format_cell, sanitize_filename, log_table_info
)


logger = logging.getLogger(__name__)

HEADER_COLOR = '#0D47A1'
ALTERNATE_ROW_COLOR = '#F0F8FF'


def _check_exportable(df: pd.DataFrame) -> None:
    if df is None or len(df.columns) == 0:
        raise ExportError("Aucune donnée à exporter")


def _rows_as_text(df: pd.DataFrame, null_text: str) -> List[List[str]]:
    return [[format_cell(value, null_text) for value in row]
            for row in df.itertuples(index=False, name=None)]


def build_export_path(filename: str, fmt: str) -> str:
    """
    Construire le chemin de sortie d'un export

    Le nom de fichier est nettoyé et l'extension du format ajoutée si absente.

    Args:
        filename: Nom (ou chemin) choisi par l'utilisateur
        fmt: Format d'export

    Returns:
        Chemin complet du fichier
    """
    directory, name = os.path.split(filename or '')
    name = sanitize_filename(name)

    extensions = ('.jpg', '.jpeg') if fmt in ('jpg', 'jpeg') else (f'.{fmt}',)
    if not name.lower().endswith(extensions):
        name = f"{name}.{fmt}"

    return os.path.join(directory, name) if directory else name


def export_excel(df: pd.DataFrame, path: str, sheet_name: str = 'Sheet1') -> str:
    """
    Exporter vers un classeur Excel

    Args:
        df: Tableau à exporter
        path: Chemin du fichier .xlsx
        sheet_name: Nom de la feuille

    Returns:
        Chemin du fichier créé
    """
    _check_exportable(df)
    df.to_excel(path, sheet_name=sheet_name, index=False, engine='openpyxl')
    return path


def export_csv(df: pd.DataFrame, path: str) -> str:
    """
    Exporter vers un fichier CSV (en-têtes, cellules nulles vides)

    Args:
        df: Tableau à exporter
        path: Chemin du fichier .csv

    Returns:
        Chemin du fichier créé
    """
    _check_exportable(df)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        df.to_csv(f, index=False, na_rep='')
    return path


def export_pdf(df: pd.DataFrame, path: str, title: Optional[str] = None) -> str:
    """
    Générer un document PDF contenant le tableau

    Args:
        df: Tableau à exporter
        path: Chemin du fichier .pdf
        title: Titre facultatif affiché au-dessus du tableau

    Returns:
        Chemin du fichier créé
    """
    _check_exportable(df)

    # Paysage au-delà d'un certain nombre de colonnes
    pagesize = A4
    if len(df.columns) > TABLE_LIMITS['pdf_landscape_columns']:
        pagesize = landscape(A4)

    doc = SimpleDocTemplate(path, pagesize=pagesize,
                            rightMargin=36, leftMargin=36,
                            topMargin=36, bottomMargin=36)
    styles = getSampleStyleSheet()
    story = []

    if title:
        story.append(Paragraph(escape(title), styles['Heading2']))
        story.append(Paragraph(
            f"Exporté le {datetime.now().strftime('%d/%m/%Y à %H:%M:%S')}", styles['Normal']))
        story.append(Spacer(1, 12))

    table_data = [[str(col) for col in df.columns]] + _rows_as_text(df, '')

    table = Table(table_data, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor(HEADER_COLOR)),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 6),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor(ALTERNATE_ROW_COLOR)]),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    story.append(table)

    doc.build(story)
    return path


def export_image(df: pd.DataFrame, path: str, fmt: str = 'jpg',
                 null_text: str = NULL_DISPLAY_TEXT) -> str:
    """
    Dessiner le tableau dans une image (JPEG ou PNG)

    Args:
        df: Tableau à exporter
        path: Chemin de l'image
        fmt: 'jpg', 'jpeg' ou 'png'
        null_text: Texte des cellules nulles, comme dans la vue

    Returns:
        Chemin du fichier créé
    """
    _check_exportable(df)

    n_cols = len(df.columns)
    cell_text = _rows_as_text(df, null_text)
    if not cell_text:
        cell_text = [[EMPTY_TABLE_TEXT] + [''] * (n_cols - 1)]
    elif len(cell_text) > TABLE_LIMITS['max_image_rows']:
        logger.warning("Export image de %d lignes: l'image sera très haute", len(cell_text))

    width = max(4.0, n_cols * TABLE_LIMITS['image_col_width'])
    height = max(1.0, (len(cell_text) + 1) * TABLE_LIMITS['image_row_height'] + 0.4)

    figure = Figure(figsize=(width, height), facecolor='white')
    ax = figure.add_subplot(1, 1, 1)
    ax.axis('off')

    table = ax.table(cellText=cell_text, colLabels=[str(col) for col in df.columns],
                     loc='center', cellLoc='left')
    table.auto_set_font_size(False)
    table.set_fontsize(9)
    table.scale(1, 1.3)

    for (row, _col), cell in table.get_celld().items():
        cell.set_edgecolor('#cccccc')
        if row == 0:
            cell.set_facecolor(HEADER_COLOR)
            cell.get_text().set_color('white')
            cell.get_text().set_weight('bold')
        elif row % 2 == 0:
            cell.set_facecolor(ALTERNATE_ROW_COLOR)

    image_format = 'jpeg' if fmt in ('jpg', 'jpeg') else fmt
    figure.savefig(path, dpi=TABLE_LIMITS['image_dpi'], format=image_format,
                   bbox_inches='tight', facecolor='white', edgecolor='none')
    return path


def export_html(df: pd.DataFrame, path: str, title: str = 'SheetLab') -> str:
    """
    Écrire le tableau dans une page HTML

    Args:
        df: Tableau à exporter
        path: Chemin du fichier .html
        title: Titre de la page

    Returns:
        Chemin du fichier créé
    """
    _check_exportable(df)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(render_html_document(df, title=title))
    return path


_EXPORTERS: Dict[str, Callable[[pd.DataFrame, str, Optional[str]], str]] = {
    'xlsx': lambda df, path, title: export_excel(df, path),
    'csv': lambda df, path, title: export_csv(df, path),
    'pdf': export_pdf,
    'jpg': lambda df, path, title: export_image(df, path, 'jpg'),
    'jpeg': lambda df, path, title: export_image(df, path, 'jpeg'),
    'png': lambda df, path, title: export_image(df, path, 'png'),
    'html': lambda df, path, title: export_html(df, path, title or 'SheetLab'),
}


def export_table(df: pd.DataFrame, filename: str, fmt: str,
                 title: Optional[str] = None) -> str:
    """
    Exporter le tableau dans le format demandé

    Args:
        df: Tableau à exporter
        filename: Nom du fichier, avec ou sans extension
        fmt: Format ('xlsx', 'csv', 'pdf', 'jpg', 'jpeg', 'png', 'html')
        title: Titre du document (PDF et HTML)

    Returns:
        Chemin du fichier créé
    """
    fmt = (fmt or '').strip().lower().lstrip('.')
    if fmt not in EXPORT_FORMATS:
        raise ExportError(
            f"Format d'export inconnu: {fmt!r}. Formats disponibles: {', '.join(EXPORT_FORMATS)}"
        )

    _check_exportable(df)
    path = build_export_path(filename, fmt)

    try:
        _EXPORTERS[fmt](df, path, title)
    except ExportError:
        raise
    except Exception as e:
        logger.error("Erreur lors de l'export %s vers %s: %s", fmt, path, e)
        raise ExportError(f"Erreur lors de l'export {fmt.upper()}: {e}") from e

    log_table_info(df, f"Export {fmt.upper()} vers {path}")
    return path
