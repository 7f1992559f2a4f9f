"""
Enregistrements bruts → lignes canoniques.

Le mapper du format est choisi une seule fois ; les lignes ignorées
(RecordSkipped) sont comptées et journalisées, jamais remontées comme erreur.
"""

import logging
from datetime import date
from typing import Callable, Dict, Optional, Sequence

from core.errors import RecordSkipped
from core.models import Booking, MappingResult, Platform, RawRecord
from parsers.airbnb import map_airbnb
from parsers.booking_csv import map_booking

logger = logging.getLogger(__name__)

MAPPERS: Dict[Platform, Callable[..., Booking]] = {
    Platform.AIRBNB: map_airbnb,
    Platform.BOOKING: map_booking,
}


def map_records(
    platform: Platform,
    records: Sequence[RawRecord],
    imported_on: date,
    listing_hint: Optional[str] = None,
) -> MappingResult:
    mapper = MAPPERS[platform]
    result = MappingResult()

    for record in records:
        try:
            result.rows.append(mapper(record, imported_on, listing_hint))
        except RecordSkipped as e:
            result.skipped.append((record.line, e.reason))
            logger.info("Ligne %d ignorée: %s", record.line, e.reason)

    if result.skipped:
        logger.info("%s: %d lignes retenues, %d ignorées",
                    platform.label, len(result.rows), len(result.skipped))
    return result
