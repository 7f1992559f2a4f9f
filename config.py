"""
Configuration centralisée - modifier ici les noms de feuilles, l'ordre des
colonnes et les alias des colonnes CSV Airbnb / Booking.
"""

import json
import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Feuille "base de données" (jamais proposée comme logement cible)
SHEET_DATA = "Data"

# Ordre des colonnes de la feuille Data : NE JAMAIS MODIFIER une fois des lignes écrites
DATA_COLUMNS = [
    "id",                # A - code de confirmation / numéro de réservation
    "plateforme",        # B - airbnb | booking
    "logement_nom_raw",  # C - libellé brut du logement
    "logement",          # D - nom normalisé
    "date_debut",        # E - DD/MM/YYYY (texte)
    "date_fin",          # F - DD/MM/YYYY (texte) ou vide
    "mois",              # G - nom du mois
    "annee",             # H - année
    "voyageur",          # I - nom du voyageur
    "revenus_bruts",     # J - montant brut
    "frais_menage",      # K - vide
    "commission_taux",   # L - vide
    "commission",        # M - vide
    "date_import",       # N - YYYY-MM-DD (texte)
]

# Libellé utilisé quand le logement est inconnu
UNKNOWN_LISTING = "Inconnu"

# Langue des noms de mois (colonne "mois")
MONTH_LOCALE = "fr_FR"

# Noms de logement sans accents dans la colonne "logement"
LISTING_STRIP_ACCENTS = True

# Alias des colonnes CSV (comparaison insensible à la casse et aux accents).
# Les alias de "id" servent aussi à la détection du format.
AIRBNB_COLUMNS = {
    "id":         ("Code de confirmation", "Confirmation code", "Codice di conferma"),
    "start_date": ("Date de début", "Start date", "Data di inizio"),
    "end_date":   ("Date de fin", "End date", "Data di fine"),
    "guest":      ("Voyageur", "Guest", "Ospite"),
    "listing":    ("Logement", "Listing", "Annuncio"),
    "amount":     ("Montant", "Amount", "Importo"),
}

BOOKING_COLUMNS = {
    "id":         ("Numéro de réservation", "Book number", "Reservation number",
                   "Numero di riferimento"),
    "start_date": ("Arrivée", "Check-in", "Data check-in"),
    "end_date":   ("Départ", "Check-out", "Data check-out"),
    "guest":      ("Nom du client", "Nom(s) du/des client(s)", "Guest name(s)",
                   "Guest name", "Réservé par", "Booked by"),
    "amount":     ("Prix", "Tarif", "Price", "Importo lordo"),
}

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class SheetsConfig:
    """Paramètres du Google Sheet, construits une seule fois au démarrage."""
    credentials: dict          # JSON du Service Account
    spreadsheet_id: str
    data_sheet: str = SHEET_DATA


def load_sheets_config(
    secrets: Optional[Mapping] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[SheetsConfig]:
    """
    Lit les identifiants depuis les secrets Streamlit
    (`[gcp_service_account]` + `[google_sheets] spreadsheet_id`), sinon depuis
    les variables GOOGLE_SERVICE_ACCOUNT_JSON / GOOGLE_SHEET_ID.

    Retourne None si la configuration est incomplète.
    """
    secrets = secrets or {}
    environ = os.environ if environ is None else environ

    credentials = None
    spreadsheet_id = None

    if "gcp_service_account" in secrets:
        credentials = dict(secrets["gcp_service_account"])
    if "google_sheets" in secrets:
        spreadsheet_id = secrets["google_sheets"].get("spreadsheet_id")

    if credentials is None and environ.get("GOOGLE_SERVICE_ACCOUNT_JSON"):
        try:
            credentials = json.loads(environ["GOOGLE_SERVICE_ACCOUNT_JSON"])
        except json.JSONDecodeError:
            credentials = None
    if not spreadsheet_id:
        spreadsheet_id = environ.get("GOOGLE_SHEET_ID")

    if not credentials or not spreadsheet_id:
        return None
    return SheetsConfig(credentials=credentials, spreadsheet_id=spreadsheet_id)


def load_excel_path(
    secrets: Optional[Mapping] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Chemin du classeur Excel local (secret `excel_path` ou EXCEL_PATH)."""
    secrets = secrets or {}
    environ = os.environ if environ is None else environ
    return secrets.get("excel_path") or environ.get("EXCEL_PATH") or None
