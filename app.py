"""
Import réservations - Airbnb & Booking
Web app Streamlit avec Google Sheets (ou Excel local) comme stockage.
"""

import logging

import streamlit as st

import config
from core.errors import StoreUnavailable
from core.excel_writer import ExcelStore
from core.pipeline import import_upload
from core.sheets import SheetsStore

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

FROM_FILENAME = "— déduire du nom du fichier —"

st.set_page_config(
    page_title="Import réservations",
    page_icon="🏠",
    layout="centered",
)

st.title("🏠 Import réservations Airbnb / Booking")


def _read_secrets() -> dict:
    try:
        return {key: st.secrets[key] for key in st.secrets}
    except FileNotFoundError:
        return {}


@st.cache_resource
def get_store():
    """
    Stockage construit une seule fois par processus :
    Google Sheets si les identifiants sont présents, sinon Excel local.
    """
    secrets = _read_secrets()
    sheets_config = config.load_sheets_config(secrets)
    if sheets_config is not None:
        return SheetsStore(sheets_config)
    excel_path = config.load_excel_path(secrets)
    if excel_path:
        return ExcelStore(excel_path)
    return None


store = get_store()

# ── Sidebar : état de la connexion ──────────────────────────────────────────
with st.sidebar:
    st.header("Connexion")
    if isinstance(store, SheetsStore):
        st.success("✓ Google Sheets configuré")
    elif isinstance(store, ExcelStore):
        st.info(f"Excel local : `{store.excel_path}`")
    else:
        st.error("✗ Configuration Google Sheets manquante")
        st.caption("Configurer `.streamlit/secrets.toml`")

    st.divider()
    st.caption("**Comment exporter les fichiers :**")
    with st.expander("Airbnb CSV"):
        st.write("Revenus → Transactions → Exporter en CSV")
    with st.expander("Booking CSV"):
        st.write("Extranet → Réservations → Télécharger")
        st.caption("Pas de colonne logement : choisir la feuille cible ci-dessous.")


if store is None:
    st.stop()

# ── Logement cible (export Booking) ─────────────────────────────────────────
try:
    target_sheets = store.list_target_sheets()
except StoreUnavailable as e:
    st.warning(f"Impossible de lister les feuilles : {e}")
    target_sheets = []

target = st.selectbox("Logement (export Booking)", [FROM_FILENAME] + target_sheets)
listing_hint = None if target == FROM_FILENAME else target

uploaded_file = st.file_uploader(
    "Glisser ici l'export CSV ou cliquer pour le sélectionner",
    type=["csv"],
    help="Airbnb ou Booking : le format est reconnu automatiquement.",
)

if uploaded_file is not None and st.button("✅ Importer dans la feuille Data", type="primary"):
    with st.spinner("Import en cours..."):
        result = import_upload(
            uploaded_file.getvalue(),
            store,
            filename=uploaded_file.name,
            listing_hint=listing_hint,
        )

    if result.success:
        st.success("Import terminé")
    else:
        st.error(f"Erreur : {result.error}")

    for line in result.logs:
        st.write(line)
