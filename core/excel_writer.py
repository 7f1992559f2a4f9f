"""
Stockage sur un classeur Excel local (alternative hors ligne à Google Sheets).

Stratégie :
  1. Backup automatique avant chaque écriture
  2. load_workbook() sans data_only → les formules existantes sont conservées
  3. Nouvelles lignes écrites après la dernière ligne remplie de la colonne A
  4. Sauvegarde du fichier
"""

import logging
import os
import shutil
import zipfile
from contextlib import contextmanager
from datetime import datetime
from typing import List, Sequence, Set

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from config import SHEET_DATA
from core.errors import StoreUnavailable
from core.store import target_lock

logger = logging.getLogger(__name__)


@contextmanager
def _excel_errors(excel_path: str):
    try:
        yield
    except (OSError, InvalidFileException, zipfile.BadZipFile) as e:
        logger.error("Excel %s: %s", excel_path, e)
        raise StoreUnavailable(f"Fichier Excel inaccessible : {e}") from e


def _backup(excel_path: str) -> str:
    """Crée un backup du fichier Excel avant de le modifier."""
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    base = os.path.splitext(excel_path)[0]
    backup_path = f"{base}_backup_{ts}.xlsx"
    shutil.copy2(excel_path, backup_path)
    return backup_path


def _find_last_data_row(ws) -> int:
    """Dernière ligne avec une valeur en colonne A (id)."""
    for row_num in range(ws.max_row, 0, -1):
        cell = ws.cell(row=row_num, column=1)
        if cell.value is not None and str(cell.value).strip() != "":
            return row_num
    return 0


def _plain(value):
    # L'apostrophe "texte forcé" ne sert qu'à Google Sheets ; openpyxl garde les str en texte
    if isinstance(value, str) and value.startswith("'"):
        return value[1:]
    return value


class ExcelStore:
    """Feuille Data d'un classeur .xlsx local."""

    def __init__(self, excel_path: str, sheet_name: str = SHEET_DATA, backup: bool = True):
        self.excel_path = excel_path
        self.sheet_name = sheet_name
        self.backup = backup

    def _open(self, **kwargs):
        if not os.path.exists(self.excel_path):
            raise StoreUnavailable(f"Fichier Excel non trouvé : {self.excel_path}")
        with _excel_errors(self.excel_path):
            wb = load_workbook(self.excel_path, **kwargs)
        if self.sheet_name not in wb.sheetnames:
            raise StoreUnavailable(
                f"Feuille '{self.sheet_name}' non trouvée dans le fichier Excel. "
                f"Feuilles présentes : {wb.sheetnames}"
            )
        return wb

    def ensure_schema(self, columns: Sequence[str]) -> None:
        with _excel_errors(self.excel_path):
            if not os.path.exists(self.excel_path):
                logger.info("Création du classeur %s", self.excel_path)
                wb = Workbook()
                wb.active.title = self.sheet_name
                ws = wb.active
            else:
                wb = load_workbook(self.excel_path)
                if self.sheet_name in wb.sheetnames:
                    ws = wb[self.sheet_name]
                    if ws.cell(row=1, column=1).value is not None:
                        return
                else:
                    logger.info('Feuille "%s" non trouvée. Création...', self.sheet_name)
                    ws = wb.create_sheet(self.sheet_name)

            for col_num, name in enumerate(columns, start=1):
                ws.cell(row=1, column=col_num).value = name
            wb.save(self.excel_path)

    def list_identifiers(self) -> Set[str]:
        wb = self._open(read_only=True)
        try:
            ws = wb[self.sheet_name]
            ids = set()
            for row in ws.iter_rows(min_row=2, max_col=1, values_only=True):
                val = row[0] if row else None
                if val is not None and str(val).strip():
                    ids.add(str(val).strip())
            return ids
        finally:
            wb.close()

    def append_rows(self, rows: List[list]) -> None:
        if not rows:
            return
        wb = self._open()
        ws = wb[self.sheet_name]

        with _excel_errors(self.excel_path):
            if self.backup:
                logger.info("Backup: %s", _backup(self.excel_path))

            next_row = max(_find_last_data_row(ws), 1) + 1
            for offset, values in enumerate(rows):
                for col_num, value in enumerate(values, start=1):
                    ws.cell(row=next_row + offset, column=col_num).value = _plain(value)
            wb.save(self.excel_path)
        logger.info("%d lignes ajoutées à %s", len(rows), self.excel_path)

    def write_lock(self):
        return target_lock(f"excel:{os.path.abspath(self.excel_path)}:{self.sheet_name}")

    def list_target_sheets(self) -> List[str]:
        wb = self._open(read_only=True)
        try:
            return [name for name in wb.sheetnames if name != self.sheet_name]
        finally:
            wb.close()
