#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SheetLab - Affichage, filtrage et export de feuilles de calcul
"""

__version__ = "1.0.0"
