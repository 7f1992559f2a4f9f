"""
Import d'un fichier CSV de réservations dans la feuille Data.

  octets uploadés → lecture CSV → détection du format → lignes canoniques
  → ids existants → filtrage des doublons → ajout

Erreurs structurelles (fichier illisible, format inconnu, stockage
inaccessible) : import interrompu, success=False. Problèmes sur une ligne :
ligne ignorée, l'import continue.
"""

import logging
from datetime import date
from typing import Optional

from config import DATA_COLUMNS
from core.deduplicator import merge
from core.errors import UploadError
from core.mapper import map_records
from core.models import ImportResult
from core.store import BookingStore
from parsers.detect import detect_format, read_upload, to_raw_records
from parsers.listing import listing_from_filename

logger = logging.getLogger(__name__)

NO_BOOKINGS = "Aucune réservation trouvée."
NOTHING_NEW = "Aucune nouvelle donnée à ajouter."


def _added_message(n: int) -> str:
    return "1 ligne ajoutée" if n == 1 else f"{n} lignes ajoutées"


def import_upload(
    content: Optional[bytes],
    store: BookingStore,
    filename: Optional[str] = None,
    listing_hint: Optional[str] = None,
    today: Optional[date] = None,
) -> ImportResult:
    """
    listing_hint : nom du logement pour les exports Booking (sans colonne
    logement) ; à défaut il est déduit du nom du fichier.
    """
    logs = []
    imported_on = today or date.today()

    try:
        rows = read_upload(content)
        if not rows:
            logs.append(NO_BOOKINGS)
            return ImportResult(success=True, logs=logs)

        platform = detect_format(rows[0].keys())
        logs.append(f"Format détecté: {platform.label}")
        logger.info("%s: format %s, %d lignes", filename or "upload", platform.value, len(rows))

        hint = listing_hint or listing_from_filename(filename)
        mapped = map_records(platform, to_raw_records(platform, rows), imported_on, hint)
        if not mapped.rows:
            logs.append(NO_BOOKINGS)
            return ImportResult(success=True, logs=logs)

        store.ensure_schema(DATA_COLUMNS)

        with store.write_lock():
            existing_ids = store.list_identifiers()
            result = merge(mapped.rows, existing_ids)
            for dup_id in result.duplicates:
                logs.append(f"Doublon ignoré: {dup_id}")

            if not result.to_append:
                logs.append(NOTHING_NEW)
                return ImportResult(success=True, logs=logs)

            store.append_rows([b.to_row() for b in result.to_append])

        logs.append(_added_message(len(result.to_append)))
        return ImportResult(success=True, logs=logs)

    except UploadError as e:
        logger.error("Import interrompu: %s", e)
        logs.append(str(e))
        return ImportResult(success=False, logs=logs, error=str(e))
