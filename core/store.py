"""
Interface de stockage utilisée par l'import (feuille Data append-only).

Implémentations :
  - core.sheets.SheetsStore        → Google Sheets (gspread)
  - core.excel_writer.ExcelStore   → classeur Excel local (openpyxl)

Ordre garanti par l'appelant : list_identifiers → décision doublons →
append_rows, le tout sous write_lock() pour éviter que deux imports
simultanés ajoutent le même id.
"""

import threading
from typing import ContextManager, Dict, List, Protocol, Sequence, Set

_LOCKS: Dict[str, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


def target_lock(key: str) -> threading.Lock:
    """Un verrou par cible (classeur + feuille), partagé dans le processus."""
    with _LOCKS_GUARD:
        return _LOCKS.setdefault(key, threading.Lock())


class BookingStore(Protocol):
    def ensure_schema(self, columns: Sequence[str]) -> None: ...

    def list_identifiers(self) -> Set[str]: ...

    def append_rows(self, rows: List[list]) -> None: ...

    def write_lock(self) -> ContextManager: ...

    def list_target_sheets(self) -> List[str]: ...
