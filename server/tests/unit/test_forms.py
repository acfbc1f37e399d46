"""Unit tests for lenient multipart form parsing."""

import json

from travel_admin.schemas.hotel import HotelForm
from travel_admin.schemas.package import PackageForm
from travel_admin.schemas.visa import VisaForm
from travel_admin.utils.forms import (
    coerce_count,
    parse_list,
    parse_number,
    parse_object,
    parse_refs,
    present_fields,
)


def test_present_fields_drops_blank_markers():
    raw = {"a": "x", "b": "", "c": "null", "d": "undefined", "e": None, "f": "  "}

    assert present_fields(raw) == {"a": "x"}


def test_parse_list_valid_and_malformed():
    assert parse_list("highlights", '["a", "b"]') == ["a", "b"]
    assert parse_list("highlights", "{not json") == []
    assert parse_list("highlights", '{"a": 1}') == []
    assert parse_list("highlights", None) is None


def test_parse_list_comma_fallback():
    assert parse_list("amenities", "Pool, Spa ,,Gym", split_commas=True) == ["Pool", "Spa", "Gym"]


def test_parse_object_malformed_becomes_empty():
    assert parse_object("pricing", '{"adult": 10}') == {"adult": 10}
    assert parse_object("pricing", "[1, 2]") == {}
    assert parse_object("pricing", "oops") == {}
    assert parse_object("pricing", None) is None


def test_parse_number():
    assert parse_number("price", "1500") == 1500.0
    assert parse_number("price", "cheap") is None
    assert parse_number("price", "") is None


def test_parse_refs_unparseable_means_absent():
    """A broken retained list must not be read as 'keep nothing'."""
    assert parse_refs("existingImages", "not json") is None
    assert parse_refs("existingImages", '"u1"') is None
    assert parse_refs("existingImages", None) is None


def test_parse_refs_empty_list_means_keep_nothing():
    assert parse_refs("existingImages", "[]") == []
    assert parse_refs("existingImages", "") == []
    assert parse_refs("existingImages", '["u1", "", null]') == ["u1"]


def test_coerce_count():
    assert coerce_count(3) == 3
    assert coerce_count("2") == 2
    assert coerce_count(0) == 0
    assert coerce_count(None) is None
    assert coerce_count("many") is None
    assert coerce_count(True) is None


def test_package_form_values(sample_package_data):
    form = PackageForm(
        title=sample_package_data["title"],
        price=sample_package_data["price"],
        short_description=sample_package_data["shortDescription"],
        highlights=sample_package_data["highlights"],
        pricing=sample_package_data["pricing"],
        inclusions="broken",
    )

    values = form.values()

    assert values["title"] == "Goa Beach Escape"
    assert values["price"] == 15000.0
    assert values["short_description"] == "Sun, sand and seafood"
    assert values["highlights"] == ["Baga beach", "Old Goa churches"]
    assert values["pricing"] == {"adult": 15000, "child": 9000}
    assert values["inclusions"] == []
    # Fields not sent are not touched
    assert "days" not in values
    assert "policies" not in values


def test_package_form_activities():
    form = PackageForm(activities=json.dumps([{"title": "Dive"}, "junk", {"title": "Hike"}]))

    assert form.activities() == [{"title": "Dive"}, {"title": "Hike"}]
    assert PackageForm().activities() is None


def test_package_form_existing_thumbnail_keeps_empty_string():
    assert PackageForm(existing_thumbnail="").existing_thumbnail == ""
    assert PackageForm().existing_thumbnail is None


def test_hotel_form_comma_lists():
    form = HotelForm(title=" Sea View ", popular_amenities="Pool,Spa", highlights='["Beachfront"]')

    values = form.values()

    assert values["title"] == "Sea View"
    assert values["popular_amenities"] == ["Pool", "Spa"]
    assert values["highlights"] == ["Beachfront"]


def test_visa_form_always_sets_documents():
    assert VisaForm(name="Thailand").values()["required_documents"] == []
    assert VisaForm(required_documents="Passport, Photo").values()["required_documents"] == ["Passport", "Photo"]
