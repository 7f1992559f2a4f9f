# tests/test_config.py
import json

from config import DATA_COLUMNS, SheetsConfig, load_excel_path, load_sheets_config


def test_data_columns_fixed_order():
    assert DATA_COLUMNS == [
        "id", "plateforme", "logement_nom_raw", "logement", "date_debut", "date_fin",
        "mois", "annee", "voyageur", "revenus_bruts", "frais_menage", "commission_taux",
        "commission", "date_import",
    ]


def test_sheets_config_from_streamlit_secrets():
    secrets = {
        "gcp_service_account": {"type": "service_account", "client_email": "bot@x.iam"},
        "google_sheets": {"spreadsheet_id": "abc"},
    }
    cfg = load_sheets_config(secrets, environ={})
    assert cfg == SheetsConfig(
        credentials={"type": "service_account", "client_email": "bot@x.iam"},
        spreadsheet_id="abc",
    )
    assert cfg.data_sheet == "Data"


def test_sheets_config_from_environment():
    environ = {
        "GOOGLE_SERVICE_ACCOUNT_JSON": json.dumps({"type": "service_account"}),
        "GOOGLE_SHEET_ID": "xyz",
    }
    cfg = load_sheets_config({}, environ=environ)
    assert cfg.credentials == {"type": "service_account"}
    assert cfg.spreadsheet_id == "xyz"


def test_sheets_config_incomplete_is_none():
    assert load_sheets_config({}, environ={}) is None
    assert load_sheets_config({}, environ={"GOOGLE_SHEET_ID": "xyz"}) is None
    assert load_sheets_config({}, environ={"GOOGLE_SERVICE_ACCOUNT_JSON": "{not json",
                                           "GOOGLE_SHEET_ID": "xyz"}) is None


def test_excel_path():
    assert load_excel_path({"excel_path": "/data/r.xlsx"}, environ={}) == "/data/r.xlsx"
    assert load_excel_path({}, environ={"EXCEL_PATH": "/tmp/r.xlsx"}) == "/tmp/r.xlsx"
    assert load_excel_path({}, environ={}) is None
