"""
Stockage Google Sheets : la feuille "Data" sert de base append-only.

Le Google Sheet contient :
  - Data           → toutes les réservations importées (colonnes config.DATA_COLUMNS)
  - autres feuilles → une par logement, proposées comme cible dans l'interface

Authentification via Service Account : les identifiants arrivent dans un
SheetsConfig construit au démarrage (voir config.load_sheets_config).

Setup une fois pour toutes :
  1. Créer un Service Account sur Google Cloud
  2. Partager le Google Sheet avec l'email du service account
  3. Mettre les identifiants dans .streamlit/secrets.toml
"""

import logging
from contextlib import contextmanager
from typing import List, Sequence, Set

import gspread
from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import GSpreadException

from config import SheetsConfig
from core.errors import StoreUnavailable
from core.store import target_lock

logger = logging.getLogger(__name__)

# OSError couvre aussi les erreurs réseau de requests
_GOOGLE_ERRORS = (GSpreadException, GoogleAuthError, OSError)


@contextmanager
def _google_errors(action: str):
    try:
        yield
    except StoreUnavailable:
        raise
    except _GOOGLE_ERRORS as e:
        logger.error("Google Sheets (%s): %s", action, e)
        raise StoreUnavailable(f"Erreur Google Sheets ({action}) : {e}") from e


class SheetsStore:
    """Feuille Data d'un Google Sheet, via gspread."""

    def __init__(self, config: SheetsConfig, client: gspread.Client = None):
        self.config = config
        self._client = client
        self._spreadsheet = None
        self._worksheet = None

    @property
    def spreadsheet(self):
        if self._spreadsheet is None:
            with _google_errors("connexion"):
                if self._client is None:
                    try:
                        self._client = gspread.service_account_from_dict(self.config.credentials)
                    except (ValueError, KeyError) as e:
                        raise StoreUnavailable(f"Identifiants Google invalides : {e}") from e
                self._spreadsheet = self._client.open_by_key(self.config.spreadsheet_id)
        return self._spreadsheet

    @property
    def worksheet(self):
        if self._worksheet is None:
            with _google_errors("ouverture"):
                self._worksheet = self.spreadsheet.worksheet(self.config.data_sheet)
        return self._worksheet

    def ensure_schema(self, columns: Sequence[str]) -> None:
        """Crée la feuille Data avec l'en-tête si absente ; sinon ne fait rien."""
        name = self.config.data_sheet
        with _google_errors("création de la feuille"):
            try:
                ws = self.spreadsheet.worksheet(name)
            except gspread.WorksheetNotFound:
                logger.info('Feuille "%s" non trouvée. Création...', name)
                ws = self.spreadsheet.add_worksheet(title=name, rows=1000, cols=len(columns))
                ws.append_row(list(columns), value_input_option="RAW")
            else:
                if not ws.row_values(1):
                    ws.append_row(list(columns), value_input_option="RAW")
        self._worksheet = ws

    def list_identifiers(self) -> Set[str]:
        """Tous les ids (colonne A) sous l'en-tête."""
        with _google_errors("lecture des ids"):
            values = self.worksheet.col_values(1)
        return {v.strip() for v in values[1:] if v and v.strip()}

    def append_rows(self, rows: List[list]) -> None:
        if not rows:
            return
        # Une seule requête API, ajout après la dernière ligne
        with _google_errors("ajout des lignes"):
            self.worksheet.append_rows(
                rows,
                value_input_option="USER_ENTERED",
                insert_data_option="INSERT_ROWS",
                table_range="A1",
            )
        logger.info("%d lignes ajoutées à la feuille %s", len(rows), self.config.data_sheet)

    def write_lock(self):
        return target_lock(f"sheets:{self.config.spreadsheet_id}:{self.config.data_sheet}")

    def list_target_sheets(self) -> List[str]:
        """Feuilles du classeur, sauf Data (choix du logement dans l'interface)."""
        with _google_errors("liste des feuilles"):
            worksheets = self.spreadsheet.worksheets()
        return [ws.title for ws in worksheets if ws.title and ws.title != self.config.data_sheet]
