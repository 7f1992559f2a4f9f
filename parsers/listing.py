"""
Nom du logement à partir d'un libellé bruité.

Exemples :
  "25% La Jungle - Plérin / Amandie & Rémi VIGIER" → "La Jungle"
  "La Jungle – À Deux Pas de la Mer"               → "La Jungle"
  "Studio Cosy"                                    → "Studio Cosy"
"""

import os
import re
import unicodedata
from typing import Optional

_PERCENT_PREFIX = re.compile(r"^\s*\d+(?:[.,]\d+)?\s*%\s*")
_SEPARATOR = re.compile(r"\s+[-/–]\s+")


def strip_accents(text: str) -> str:
    """Supprime les diacritiques ("Plérin" → "Plerin")."""
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(c for c in nfkd if not unicodedata.combining(c))


def normalize_listing(label: str, strip_diacritics: bool = False) -> str:
    """
    1. retire un pourcentage initial ("25% ")
    2. coupe au premier séparateur " - ", " / " ou " – "
    3. trim
    Sans séparateur, tout le libellé est conservé.
    """
    name = _PERCENT_PREFIX.sub("", label or "")
    match = _SEPARATOR.search(name)
    if match:
        name = name[:match.start()]
    name = name.strip()
    if strip_diacritics:
        name = strip_accents(name)
    return name


def listing_from_filename(filename: Optional[str]) -> Optional[str]:
    """
    Logement déduit du nom du fichier uploadé (export Booking, sans colonne
    logement) : "La_Jungle - reservations.csv" → "La Jungle".
    """
    if not filename:
        return None
    stem = os.path.splitext(os.path.basename(filename))[0]
    stem = stem.replace("_", " ")
    name = normalize_listing(stem)
    return name or None
