import pytest

from tutorhub.exceptions import InvalidLocationError
from tutorhub.listings.locations import (
    DEFAULT_LOOKUP,
    NEPAL_DISTRICTS,
    LocationLookup,
    LocationSelection,
)

GANDAKI = [
    "Baglung", "Gorkha", "Kaski", "Lamjung", "Manang", "Mustang", "Myagdi",
    "Nawalpur", "Parbat", "Syangja", "Tanahun",
]


def test_lookup_covers_seven_provinces():
    assert len(DEFAULT_LOOKUP.provinces()) == 7
    assert DEFAULT_LOOKUP.provinces()[0] == "Province 1"
    assert list(DEFAULT_LOOKUP.districts("Gandaki Province")) == GANDAKI


def test_lookup_unknown_or_empty_province():
    assert DEFAULT_LOOKUP.districts("Atlantis") == ()
    assert DEFAULT_LOOKUP.districts("") == ()
    assert not DEFAULT_LOOKUP.has_province("")
    assert not DEFAULT_LOOKUP.contains("Gandaki Province", "")
    assert DEFAULT_LOOKUP.contains("Bagmati Province", "Kathmandu")
    assert not DEFAULT_LOOKUP.contains("Gandaki Province", "Kathmandu")


def test_lookup_is_read_only_copy():
    table = {"A": ["x", "y"]}
    lookup = LocationLookup(table)
    table["A"].append("z")
    assert lookup.districts("A") == ("x", "y")
    with pytest.raises(TypeError):
        lookup._table["B"] = ()
    assert isinstance(NEPAL_DISTRICTS["Karnali Province"], tuple)


def test_selection_walks_through_states():
    selection = LocationSelection()
    assert selection.district_options == ()
    assert selection.errors() == {
        "province": "Province is required",
        "district": "District is required",
    }

    selection.select_province("Gandaki Province")
    assert list(selection.district_options) == GANDAKI
    assert selection.errors() == {"district": "District is required"}
    assert not selection.is_complete

    selection.select_district("Kaski")
    assert selection.is_complete
    assert selection.errors() == {}


def test_changing_province_clears_district_from_other_province():
    selection = LocationSelection(province="Bagmati Province", district="Kathmandu")

    selection.select_province("Gandaki Province")

    assert selection.province == "Gandaki Province"
    assert selection.district == ""
    assert list(selection.district_options) == GANDAKI


def test_reselecting_same_province_keeps_district():
    selection = LocationSelection(province="Gandaki Province", district="Kaski")
    selection.select_province("Gandaki Province")
    assert selection.district == "Kaski"


def test_clearing_province_clears_district():
    selection = LocationSelection(province="Gandaki Province", district="Kaski")
    selection.select_province("")
    assert selection.province == "" and selection.district == ""


def test_district_outside_province_is_rejected():
    selection = LocationSelection(province="Gandaki Province")
    with pytest.raises(InvalidLocationError):
        selection.select_district("Kathmandu")
    assert selection.district == ""


def test_district_without_province_is_rejected():
    with pytest.raises(InvalidLocationError):
        LocationSelection().select_district("Kaski")


def test_unknown_province_is_rejected():
    selection = LocationSelection(province="Gandaki Province", district="Kaski")
    with pytest.raises(InvalidLocationError):
        selection.select_province("Atlantis")
    assert selection.province == "Gandaki Province"
    assert selection.district == "Kaski"
