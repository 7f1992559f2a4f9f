"""
Modèles : Booking (ligne canonique de la feuille Data), enregistrements bruts
par plateforme et résultats des étapes de l'import.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple, Union

from config import MONTH_LOCALE
from parsers.fields import as_text_cell, format_date_dmy, month_name


class Platform(str, Enum):
    AIRBNB = "airbnb"
    BOOKING = "booking"

    @property
    def label(self) -> str:
        return "Airbnb" if self is Platform.AIRBNB else "Booking"


@dataclass
class Booking:
    """Une réservation normalisée, indépendante de la plateforme."""
    id: str                 # code de confirmation / numéro de réservation
    platform: Platform
    raw_listing: str        # libellé brut ("Inconnu" si absent)
    listing_name: str       # nom normalisé, sans accents
    start_date: date
    end_date: Optional[date]
    month: str              # "août"
    year: int
    guest_name: str
    gross_income: float     # >= 0
    imported_on: date
    # Laissés vides : aucune commission n'est calculée à l'import
    cleaning_fee: Optional[float] = None
    commission_rate: Optional[float] = None
    commission: Optional[float] = None

    @classmethod
    def from_stay(cls, *, id, platform, raw_listing, listing_name, start_date,
                  end_date, guest_name, gross_income, imported_on) -> "Booking":
        """Construit la réservation en dérivant mois et année de start_date."""
        return cls(
            id=id,
            platform=platform,
            raw_listing=raw_listing,
            listing_name=listing_name,
            start_date=start_date,
            end_date=end_date,
            month=month_name(start_date, MONTH_LOCALE),
            year=start_date.year,
            guest_name=guest_name,
            gross_income=gross_income,
            imported_on=imported_on,
        )

    def to_row(self) -> list:
        """Valeurs dans l'ordre de config.DATA_COLUMNS (14 colonnes)."""
        def blank(value):
            return "" if value is None else value

        return [
            as_text_cell(self.id),                              # id (texte : "00123" reste "00123")
            self.platform.value,                                # plateforme
            self.raw_listing,                                   # logement_nom_raw
            self.listing_name,                                  # logement
            as_text_cell(format_date_dmy(self.start_date)),     # date_debut
            as_text_cell(format_date_dmy(self.end_date)) if self.end_date else "",  # date_fin
            self.month,                                         # mois
            self.year,                                          # annee
            self.guest_name,                                    # voyageur
            self.gross_income,                                  # revenus_bruts
            blank(self.cleaning_fee),                           # frais_menage
            blank(self.commission_rate),                        # commission_taux
            blank(self.commission),                             # commission
            as_text_cell(self.imported_on.isoformat()),         # date_import
        ]


# ── Enregistrements bruts (un type par format) ───────────────────────────────

@dataclass(frozen=True)
class AirbnbRecord:
    """Ligne CSV Airbnb, colonnes déjà résolues."""
    line: int
    confirmation_code: str
    start_date: str
    end_date: str
    guest: str
    listing: str
    amount: str


@dataclass(frozen=True)
class BookingRecord:
    """Ligne CSV Booking.com : pas de colonne logement."""
    line: int
    reservation_number: str
    start_date: str
    end_date: str
    guest: str
    amount: str


RawRecord = Union[AirbnbRecord, BookingRecord]


# ── Résultats ────────────────────────────────────────────────────────────────

@dataclass
class MappingResult:
    rows: List[Booking] = field(default_factory=list)
    skipped: List[Tuple[int, str]] = field(default_factory=list)  # (ligne, raison)


@dataclass
class MergeResult:
    to_append: List[Booking] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)


@dataclass
class ImportResult:
    success: bool
    logs: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"success": self.success, "logs": list(self.logs)}
        if self.error is not None:
            data["error"] = self.error
        return data
