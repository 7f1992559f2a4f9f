"""
Mapping d'une ligne du CSV exporté par Booking.com (liste des réservations)
vers une Booking.

Comment exporter depuis Booking :
  Extranet → Réservations → Télécharger (CSV)

Colonnes utilisées (export FR, alias EN/IT dans config.BOOKING_COLUMNS) :
  Numéro de réservation, Arrivée, Départ (dates libres : "4 août 2025",
  "2025-08-04"), Nom du client / Réservé par, Prix

L'export ne contient aucune colonne logement : le nom vient d'une indication
externe (feuille cible choisie, ou nom du fichier).
"""

from datetime import date
from typing import Optional

from config import LISTING_STRIP_ACCENTS, UNKNOWN_LISTING
from core.errors import RecordSkipped
from core.models import Booking, BookingRecord, Platform
from parsers.fields import parse_amount, parse_local_date
from parsers.listing import normalize_listing


def map_booking(record: BookingRecord, imported_on: date, listing_hint: Optional[str] = None) -> Booking:
    if not record.start_date or not record.guest:
        raise RecordSkipped("date d'arrivée ou nom du client manquant")

    start = parse_local_date(record.start_date, "text")
    if start is None:
        raise RecordSkipped(f"date d'arrivée illisible: {record.start_date!r}")

    if not record.reservation_number:
        raise RecordSkipped("numéro de réservation manquant")

    raw_listing = listing_hint or UNKNOWN_LISTING

    return Booking.from_stay(
        id=record.reservation_number,
        platform=Platform.BOOKING,
        raw_listing=raw_listing,
        listing_name=normalize_listing(raw_listing, strip_diacritics=LISTING_STRIP_ACCENTS),
        start_date=start,
        end_date=parse_local_date(record.end_date, "text"),
        guest_name=record.guest,
        gross_income=max(parse_amount(record.amount), 0.0),
        imported_on=imported_on,
    )
