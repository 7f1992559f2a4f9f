# tests/conftest.py
from __future__ import annotations

import threading
from datetime import date

import pytest

AIRBNB_HEADER = (
    "Date,Type,Code de confirmation,Date de début,Date de fin,Nuits,"
    "Voyageur,Logement,Montant,Frais de ménage"
)

BOOKING_HEADER = "Numéro de réservation,Réservé par,Nom du client,Arrivée,Départ,Statut,Prix"

IMPORT_DAY = date(2025, 9, 1)


def _plain(value):
    return value[1:] if isinstance(value, str) and value.startswith("'") else value


class FakeStore:
    """Stockage en mémoire qui enregistre les appels (ordre compris)."""

    def __init__(self, existing_ids=(), sheets=()):
        self.header = None
        self.rows = [[i] + [""] * 13 for i in existing_ids]
        self.sheets = list(sheets)
        self.calls = []
        self.append_calls = []
        self.lock_states = []
        self._lock = threading.Lock()

    def ensure_schema(self, columns):
        self.calls.append("ensure_schema")
        if self.header is None:
            self.header = list(columns)

    def list_identifiers(self):
        self.calls.append("list_identifiers")
        self.lock_states.append(("list_identifiers", self._lock.locked()))
        return {str(r[0]).strip() for r in self.rows if str(r[0]).strip()}

    def append_rows(self, rows):
        self.calls.append("append_rows")
        self.lock_states.append(("append_rows", self._lock.locked()))
        self.append_calls.append([list(r) for r in rows])
        # comme Sheets en USER_ENTERED : l'apostrophe initiale n'est pas stockée
        self.rows.extend([_plain(r[0])] + list(r[1:]) for r in rows)

    def write_lock(self):
        return self._lock

    def list_target_sheets(self):
        return list(self.sheets)


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def make_store():
    return FakeStore


def _csv(header: str, lines) -> bytes:
    return ("\n".join([header, *lines]) + "\n").encode("utf-8")


@pytest.fixture
def airbnb_csv():
    """airbnb_csv(("HM1", "08/04/2025", "08/10/2025", "Jean", "Logement", "120,00"), ...)"""
    def factory(*rows):
        lines = [
            f'08/01/2025,Réservation,{code},{start},{end},6,{guest},"{listing}","{amount}",'
            for code, start, end, guest, listing, amount in rows
        ]
        return _csv(AIRBNB_HEADER, lines)
    return factory


@pytest.fixture
def booking_csv():
    """booking_csv(("4012345678", "4 août 2025", "10 août 2025", "Marie Curie", "540 EUR"), ...)"""
    def factory(*rows):
        lines = [
            f'{ref},{guest},{guest},{start},{end},ok,"{amount}"'
            for ref, start, end, guest, amount in rows
        ]
        return _csv(BOOKING_HEADER, lines)
    return factory
