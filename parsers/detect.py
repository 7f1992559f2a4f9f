"""
Lecture du CSV uploadé et reconnaissance du format (Airbnb / Booking).

Le format est déduit uniquement des colonnes présentes, jamais du nom du
fichier. Les colonnes logiques (config.AIRBNB_COLUMNS / BOOKING_COLUMNS) sont
résolues une seule fois, puis chaque ligne devient un AirbnbRecord ou un
BookingRecord.
"""

import csv
import io
import logging
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd

from config import AIRBNB_COLUMNS, BOOKING_COLUMNS
from core.errors import MalformedUpload, UnrecognizedFormat
from core.models import AirbnbRecord, BookingRecord, Platform, RawRecord
from parsers.listing import strip_accents

logger = logging.getLogger(__name__)


def read_upload(content: Optional[bytes]) -> List[Dict[str, str]]:
    """
    Parse le CSV (en-tête obligatoire) en liste de dict {colonne: valeur}.
    Encodage utf-8-sig, repli sur latin-1.
    """
    if not content:
        raise MalformedUpload("Aucun fichier fourni")

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("CSV non UTF-8, lecture en latin-1")
        text = content.decode("latin-1")

    if not text.strip():
        raise MalformedUpload("Aucun fichier fourni")

    _check_field_counts(text)

    # index_col=False : une virgule finale ne doit pas décaler les colonnes
    try:
        df = pd.read_csv(
            io.StringIO(text),
            index_col=False,
            dtype=str,
            na_filter=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
        logger.error("CSV illisible: %s", e)
        raise MalformedUpload("Erreur de lecture du CSV") from e

    df.columns = [str(c).strip() for c in df.columns]
    df = df.fillna("")
    if df.empty:
        logger.info("CSV sans données (colonnes: %s)", list(df.columns))
        return []
    return df.to_dict(orient="records")


def _check_field_counts(text: str) -> None:
    """Chaque ligne doit avoir exactement autant de champs que l'en-tête."""
    try:
        rows = [(n, r) for n, r in enumerate(csv.reader(io.StringIO(text)), start=1) if r]
    except csv.Error as e:
        logger.error("CSV illisible: %s", e)
        raise MalformedUpload("Erreur de lecture du CSV") from e

    expected = len(rows[0][1])
    for n, row in rows[1:]:
        if len(row) != expected:
            logger.error("CSV illisible: ligne %d, %d champs au lieu de %d", n, len(row), expected)
            raise MalformedUpload(
                f"Erreur de lecture du CSV : ligne {n}, {len(row)} champs au lieu de {expected}"
            )


def _key(header: str) -> str:
    return " ".join(strip_accents(str(header)).casefold().split())


def resolve_columns(headers: Iterable[str], aliases: Mapping[str, tuple]) -> Dict[str, Optional[str]]:
    """Associe chaque colonne logique à l'en-tête réel du fichier (ou None)."""
    by_key = {}
    for h in headers:
        by_key.setdefault(_key(h), h)

    resolved = {}
    for logical, names in aliases.items():
        resolved[logical] = next(
            (by_key[_key(n)] for n in names if _key(n) in by_key),
            None,
        )
    return resolved


def detect_format(headers: Iterable[str]) -> Platform:
    """
    airbnb  → colonne code de confirmation présente
    booking → colonne numéro de réservation présente
    sinon UnrecognizedFormat (import entier refusé)
    """
    headers = list(headers)
    if resolve_columns(headers, {"id": AIRBNB_COLUMNS["id"]})["id"]:
        return Platform.AIRBNB
    if resolve_columns(headers, {"id": BOOKING_COLUMNS["id"]})["id"]:
        return Platform.BOOKING
    raise UnrecognizedFormat(headers)


def to_raw_records(platform: Platform, rows: List[Dict[str, str]]) -> List[RawRecord]:
    """Transforme les lignes en enregistrements typés du format détecté."""
    if not rows:
        return []

    aliases = AIRBNB_COLUMNS if platform is Platform.AIRBNB else BOOKING_COLUMNS
    cols = resolve_columns(rows[0].keys(), aliases)

    def get(row, logical):
        col = cols[logical]
        return str(row.get(col, "") or "").strip() if col else ""

    records: List[RawRecord] = []
    # ligne 1 = en-tête
    for line, row in enumerate(rows, start=2):
        if platform is Platform.AIRBNB:
            records.append(AirbnbRecord(
                line=line,
                confirmation_code=get(row, "id"),
                start_date=get(row, "start_date"),
                end_date=get(row, "end_date"),
                guest=get(row, "guest"),
                listing=get(row, "listing"),
                amount=get(row, "amount"),
            ))
        else:
            records.append(BookingRecord(
                line=line,
                reservation_number=get(row, "id"),
                start_date=get(row, "start_date"),
                end_date=get(row, "end_date"),
                guest=get(row, "guest"),
                amount=get(row, "amount"),
            ))
    return records
