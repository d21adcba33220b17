#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Rendu HTML des tableaux
Table HTML affichée dans la vue et utilisée pour l'export HTML
"""

from html import escape

import pandas as pd

from .utils import NULL_DISPLAY_TEXT, format_cell, index_to_column_letter, is_null


EMPTY_TABLE_TEXT = 'No data available'
EMPTY_TABLE_HTML = f'<p>{EMPTY_TABLE_TEXT}</p>'

TABLE_STYLE = """
table { border-collapse: collapse; font-family: 'Segoe UI', Arial, sans-serif; font-size: 10pt; }
th { background-color: #0D47A1; color: white; font-weight: bold; padding: 6px; border: 1px solid #ccc; }
th.letter { background-color: #1565C0; font-weight: normal; }
td { padding: 4px 6px; border: 1px solid #ccc; }
td.null { color: #9E9E9E; font-style: italic; }
tr:nth-child(even) td { background-color: #F0F8FF; }
"""


def render_html_table(df: pd.DataFrame, null_text: str = NULL_DISPLAY_TEXT,
                      show_letters: bool = False) -> str:
    """
    Construire une table HTML

    Args:
        df: Tableau à afficher
        null_text: Texte des cellules nulles
        show_letters: Ajouter une ligne d'en-tête avec les lettres de colonnes

    Returns:
        Code HTML de la table, ou un paragraphe si le tableau est vide
    """
    if df is None or len(df) == 0:
        return EMPTY_TABLE_HTML

    lines = ['<table>']

    if show_letters:
        cells = ''.join(f'<th class="letter">{index_to_column_letter(i)}</th>'
                        for i in range(len(df.columns)))
        lines.append(f'<tr>{cells}</tr>')

    header = ''.join(f'<th>{escape(str(col))}</th>' for col in df.columns)
    lines.append(f'<tr>{header}</tr>')

    for row in df.itertuples(index=False, name=None):
        cells = []
        for value in row:
            text = escape(format_cell(value, null_text))
            if is_null(value):
                cells.append(f'<td class="null">{text}</td>')
            else:
                cells.append(f'<td>{text}</td>')
        lines.append(f"<tr>{''.join(cells)}</tr>")

    lines.append('</table>')
    return '\n'.join(lines)


def render_html_document(df: pd.DataFrame, title: str = 'SheetLab',
                         null_text: str = NULL_DISPLAY_TEXT,
                         show_letters: bool = False) -> str:
    """Page HTML complète autour de la table"""
    body = render_html_table(df, null_text=null_text, show_letters=show_letters)
    return (
        '<!DOCTYPE html>\n'
        '<html>\n<head>\n<meta charset="utf-8">\n'
        f'<title>{escape(title)}</title>\n'
        f'<style>{TABLE_STYLE}</style>\n'
        '</head>\n<body>\n'
        f'{body}\n'
        '</body>\n</html>\n'
    )
