"""
Mapping d'une ligne du CSV exporté par Airbnb vers une Booking.

Comment exporter depuis Airbnb :
  Menu → Revenus → Transactions → Exporter en CSV

Colonnes utilisées (export FR, alias EN/IT dans config.AIRBNB_COLUMNS) :
  Code de confirmation, Date de début, Date de fin (MM/DD/YYYY),
  Voyageur, Logement, Montant
"""

from datetime import date
from typing import Optional

from config import LISTING_STRIP_ACCENTS, UNKNOWN_LISTING
from core.errors import RecordSkipped
from core.models import AirbnbRecord, Booking, Platform
from parsers.fields import parse_amount, parse_local_date
from parsers.listing import normalize_listing


def map_airbnb(record: AirbnbRecord, imported_on: date, listing_hint: Optional[str] = None) -> Booking:
    """
    Le logement vient de la colonne "Logement" de chaque ligne ;
    listing_hint n'est pas utilisé pour ce format.
    """
    # Lignes Payout / artefacts d'en-tête : pas de date ni de voyageur
    if not record.start_date or not record.guest:
        raise RecordSkipped("date de début ou voyageur manquant")

    start = parse_local_date(record.start_date, "mdy")
    if start is None:
        raise RecordSkipped(f"date de début illisible: {record.start_date!r}")

    if not record.confirmation_code:
        raise RecordSkipped("code de confirmation manquant")

    raw_listing = record.listing or UNKNOWN_LISTING

    return Booking.from_stay(
        id=record.confirmation_code,
        platform=Platform.AIRBNB,
        raw_listing=raw_listing,
        listing_name=normalize_listing(raw_listing, strip_diacritics=LISTING_STRIP_ACCENTS),
        start_date=start,
        end_date=parse_local_date(record.end_date, "mdy"),
        guest_name=record.guest,
        gross_income=max(parse_amount(record.amount), 0.0),
        imported_on=imported_on,
    )
