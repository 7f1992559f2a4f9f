"""
Conversion des champs texte des exports (montants, dates) en valeurs typées.

Aucune fonction ne lève d'exception sur une valeur mal formée :
  - montant illisible → 0.0
  - date illisible    → None (la ligne sera ignorée par le mapper)
"""

import re
from datetime import date, datetime
from typing import Optional

from babel.dates import format_date
from dateutil import parser as date_parser

_NOT_AMOUNT_CHARS = re.compile(r"[^\d.,-]")
_NUMBER_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_ISO_DATE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")


class _FrenchParserInfo(date_parser.parserinfo):
    """Noms de mois anglais + français pour dateutil ("4 Aug 2025", "4 août 2025")."""
    MONTHS = [
        ("Jan", "January", "janv", "janvier"),
        ("Feb", "February", "févr", "fevr", "février", "fevrier"),
        ("Mar", "March", "mars"),
        ("Apr", "April", "avr", "avril"),
        ("May", "mai"),
        ("Jun", "June", "juin"),
        ("Jul", "July", "juil", "juillet"),
        ("Aug", "August", "août", "aout"),
        ("Sep", "Sept", "September", "septembre"),
        ("Oct", "October", "octobre"),
        ("Nov", "November", "novembre"),
        ("Dec", "December", "déc", "décembre", "decembre"),
    ]
    # Seulement les noms complets : "mar" (mardi) entrerait en conflit avec "Mar" (mars)
    WEEKDAYS = [
        ("Mon", "Monday", "lundi"),
        ("Tue", "Tuesday", "mardi"),
        ("Wed", "Wednesday", "mercredi"),
        ("Thu", "Thursday", "jeudi"),
        ("Fri", "Friday", "vendredi"),
        ("Sat", "Saturday", "samedi"),
        ("Sun", "Sunday", "dimanche"),
    ]


_PARSER_INFO = _FrenchParserInfo(dayfirst=True)
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def parse_amount(text) -> float:
    """
    "1.234,56 €" → 1234.56, "120,5" → 120.5, "" → 0.0.

    La virgule est le séparateur décimal ; si virgule et point sont présents,
    le dernier des deux est le séparateur décimal, l'autre celui des milliers.
    """
    if text is None:
        return 0.0
    cleaned = _NOT_AMOUNT_CHARS.sub("", str(text))
    if not cleaned:
        return 0.0

    if "," in cleaned or "." in cleaned:
        decimal_sep = "," if cleaned.rfind(",") > cleaned.rfind(".") else "."
        head, _, tail = cleaned.rpartition(decimal_sep)
        head = head.replace(",", "").replace(".", "")
        cleaned = f"{head}.{tail}"

    match = _NUMBER_PREFIX.match(cleaned)
    if not match:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0


def parse_local_date(text, fmt: str = "mdy") -> Optional[date]:
    """
    fmt="mdy"  → MM/DD/YYYY (export Airbnb)
    fmt="text" → date libre : "4 Aug 2025", "4 août 2025", "2025-08-04"
    """
    if text is None:
        return None
    s = str(text).strip()
    if not s:
        return None

    if fmt == "mdy":
        parts = s.split("/")
        if len(parts) != 3:
            return None
        try:
            month, day, year = (int(p.strip()) for p in parts)
            if year < 100:
                year += 2000
            return date(year, month, day)
        except ValueError:
            return None

    # dayfirst inverserait jour et mois d'une date ISO
    iso = _ISO_DATE.match(s)
    if iso:
        try:
            return date.fromisoformat(iso.group(1))
        except ValueError:
            return None

    # dateutil complète les parties absentes avec `default` : deux valeurs
    # différentes pour rejeter une date incomplète ("août 2025", "10")
    try:
        first = date_parser.parse(s, parserinfo=_PARSER_INFO, default=_DEFAULT_A)
        second = date_parser.parse(s, parserinfo=_PARSER_INFO, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first.date()


def format_date_dmy(d: date) -> str:
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def as_text_cell(value: str) -> str:
    """Apostrophe initiale : Google Sheets garde la cellule en texte (pas de numéro de série)."""
    return "'" + value


def month_name(d: date, locale: str = "fr_FR") -> str:
    """Nom complet du mois en minuscules ("août")."""
    return format_date(d, "MMMM", locale=locale).lower()
