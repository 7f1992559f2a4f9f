# tests/test_listing.py
from parsers.listing import listing_from_filename, normalize_listing, strip_accents


def test_percentage_and_owner_suffix_removed():
    assert normalize_listing("25% La Jungle - Plérin / Amandie") == "La Jungle"
    assert normalize_listing("25% La Jungle - Plérin / Amandie & Rémi VIGIER") == "La Jungle"


def test_no_separator_keeps_whole_label():
    assert normalize_listing("Studio Cosy") == "Studio Cosy"
    assert normalize_listing("12.5% Studio Cosy") == "Studio Cosy"


def test_en_dash_and_slash_separators():
    assert normalize_listing("La Jungle – À Deux Pas de la Mer") == "La Jungle"
    assert normalize_listing("Ker Avel / Saint-Malo") == "Ker Avel"


def test_hyphen_inside_word_is_not_a_separator():
    assert normalize_listing("Saint-Malo Duplex") == "Saint-Malo Duplex"


def test_strip_diacritics_optional():
    assert normalize_listing("Château Périgord - Sarlat") == "Château Périgord"
    assert normalize_listing("Château Périgord - Sarlat", strip_diacritics=True) == "Chateau Perigord"
    assert strip_accents("Plérin àéîõü") == "Plerin aeiou"


def test_deterministic():
    label = "30% Ty Breizh – vue mer / Famille Le Gall"
    assert {normalize_listing(label, True) for _ in range(5)} == {"Ty Breizh"}


def test_listing_from_filename():
    assert listing_from_filename("/tmp/La_Jungle - reservations 2025.csv") == "La Jungle"
    assert listing_from_filename("Studio Cosy.csv") == "Studio Cosy"
    assert listing_from_filename(None) is None
    assert listing_from_filename("") is None
