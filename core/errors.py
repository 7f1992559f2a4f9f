"""
Erreurs de l'import.

Les erreurs structurelles (UploadError et sous-classes) interrompent tout
l'import. RecordSkipped ne concerne qu'une ligne : elle est comptée puis
ignorée par le mapper.
"""


class UploadError(Exception):
    """Erreur bloquante, message affiché tel quel à l'utilisateur."""


class MalformedUpload(UploadError):
    """Aucun fichier, ou CSV illisible."""


class UnrecognizedFormat(UploadError):
    """En-têtes ne correspondant ni à Airbnb ni à Booking."""

    def __init__(self, headers):
        self.headers = list(headers)
        super().__init__(
            "Format de fichier non reconnu. Colonnes trouvées : "
            + ", ".join(self.headers)
        )


class StoreUnavailable(UploadError):
    """Stockage (Google Sheets / Excel) inaccessible ou non configuré."""


class RecordSkipped(Exception):
    """Ligne ignorée (champ obligatoire manquant, date illisible...)."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
