"""
Contrôle des doublons : n'ajoute pas à la feuille Data une réservation dont
l'id y figure déjà.

Seuls les ids déjà stockés comptent ; deux lignes du même fichier avec le même
id ne sont pas comparées entre elles.
"""

from typing import AbstractSet, Iterable

from core.models import Booking, MergeResult


def is_booking_duplicate(booking_id: str, existing_ids: AbstractSet[str]) -> bool:
    return str(booking_id).strip() in existing_ids


def merge(new_rows: Iterable[Booking], existing_ids: AbstractSet[str]) -> MergeResult:
    """
    Sépare les nouvelles lignes en (à ajouter, doublons), dans l'ordre
    d'origine. existing_ids n'est jamais modifié.
    """
    result = MergeResult()
    for b in new_rows:
        if is_booking_duplicate(b.id, existing_ids):
            result.duplicates.append(b.id.strip())
        else:
            result.to_append.append(b)
    return result
