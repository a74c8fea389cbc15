"""Tests for building reduction, type resolution and both adapters."""

import pytest

from factories import (
    GRUNDSCHULE,
    GYMNASIUM,
    OBERSCHULE,
    make_building,
    make_independent,
    make_public,
)
from schuldaten_sachsen.adapters import (
    independent_to_school,
    public_to_school,
    reduce_buildings,
    resolve_type_keys,
    resolve_type_label,
)
from schuldaten_sachsen.schema import ContractViolation, SchoolType

# ---------------------------------------------------------------------------
# Building reducer
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_single_building_is_returned_unchanged() -> None:
    """Reducing a one-element list yields that building."""
    building = make_building(mail="a@x", longitude=12.1, phone_code="0341")

    assert reduce_buildings([building]) == building


@pytest.mark.unit
def test_last_non_empty_value_wins() -> None:
    buildings = [make_building(mail="a@x"), make_building(mail=None), make_building(mail="b@x")]

    assert reduce_buildings(buildings).mail == "b@x"


@pytest.mark.unit
def test_missing_later_value_keeps_earlier_one() -> None:
    buildings = [make_building(mail="a@x"), make_building(mail=None)]

    assert reduce_buildings(buildings).mail == "a@x"


@pytest.mark.unit
def test_empty_string_does_not_override() -> None:
    buildings = [make_building(homepage="https://a.example"), make_building(homepage="")]

    assert reduce_buildings(buildings).homepage == "https://a.example"


@pytest.mark.unit
def test_whitespace_value_counts_as_present() -> None:
    """Only None and the empty string are absent; values are taken verbatim."""
    buildings = [make_building(phone_identifier="Sekretariat"), make_building(phone_identifier=" ")]

    assert reduce_buildings(buildings).phone_identifier == " "


@pytest.mark.unit
def test_fields_are_overridden_independently() -> None:
    """Each optional field follows its own last present value."""
    buildings = [
        make_building(phone_code="0341", phone_number="111", latitude=51.0),
        make_building(phone_number="222", latitude=None, fax_number="999"),
        make_building(phone_code=None, latitude=51.5),
    ]

    reduced = reduce_buildings(buildings)

    assert reduced.phone_code == "0341"
    assert reduced.phone_number == "222"
    assert reduced.fax_number == "999"
    assert reduced.latitude == 51.5


@pytest.mark.unit
def test_address_comes_only_from_first_building() -> None:
    buildings = [
        make_building(street="Main", postcode="04109", community="Leipzig"),
        make_building(street="Side", postcode="04229", community="Markkleeberg"),
    ]

    reduced = reduce_buildings(buildings)

    assert reduced.street == "Main"
    assert reduced.postcode == "04109"
    assert reduced.community == "Leipzig"


@pytest.mark.unit
def test_zero_coordinate_counts_as_present() -> None:
    buildings = [make_building(longitude=12.3), make_building(longitude=0.0)]

    assert reduce_buildings(buildings).longitude == 0.0


@pytest.mark.unit
def test_empty_building_list_raises() -> None:
    with pytest.raises(ContractViolation):
        reduce_buildings([])


# ---------------------------------------------------------------------------
# Vocabulary lookups
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_resolve_type_keys_drops_unknown_keys(vocabulary: list[SchoolType]) -> None:
    assert resolve_type_keys([11, 99, 13], vocabulary) == (GRUNDSCHULE, GYMNASIUM)


@pytest.mark.unit
def test_resolve_type_keys_removes_duplicates_in_order(vocabulary: list[SchoolType]) -> None:
    assert resolve_type_keys([12, 11, 12], vocabulary) == (OBERSCHULE, GRUNDSCHULE)


@pytest.mark.unit
def test_resolve_type_label_exact_match(vocabulary: list[SchoolType]) -> None:
    assert resolve_type_label("Oberschule", vocabulary) == OBERSCHULE


@pytest.mark.unit
def test_resolve_type_label_is_case_sensitive(vocabulary: list[SchoolType]) -> None:
    assert resolve_type_label("oberschule", vocabulary) is None


@pytest.mark.unit
def test_resolve_type_label_first_match_wins() -> None:
    first = SchoolType(key="21", label="Berufsschule")
    second = SchoolType(key="22", label="Berufsschule")

    assert resolve_type_label("Berufsschule", [first, second]).key == "21"


# ---------------------------------------------------------------------------
# Public adapter
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_public_types_are_union_over_buildings(vocabulary: list[SchoolType]) -> None:
    raw = make_public(buildings=[
        make_building(school_type_keys=(11, 12)),
        make_building(school_type_keys=(12, 13)),
    ])

    school = public_to_school(raw, vocabulary)

    assert school.school_types == (GRUNDSCHULE, OBERSCHULE, GYMNASIUM)


@pytest.mark.unit
def test_public_school_takes_reduced_location(vocabulary: list[SchoolType]) -> None:
    raw = make_public(
        "4000042",
        buildings=[
            make_building(street="Main", mail=None, phone_number="1"),
            make_building(street="Side", mail="office@x", phone_number=None),
        ],
        opening_date="2001-08-01",
    )

    school = public_to_school(raw, vocabulary)

    assert school.institution_key == "4000042"
    assert school.name == "Schule 4000042"
    assert school.opening_date == "2001-08-01"
    assert school.street == "Main"
    assert school.mail == "office@x"
    assert school.phone_number == "1"


@pytest.mark.unit
def test_public_school_without_buildings_raises(vocabulary: list[SchoolType]) -> None:
    raw = make_public(buildings=[])

    with pytest.raises(ContractViolation, match="no buildings"):
        public_to_school(raw, vocabulary)


# ---------------------------------------------------------------------------
# Independent adapter
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_independent_school_maps_label_and_address(vocabulary: list[SchoolType]) -> None:
    raw = make_independent("4900007", school_type_name="Gymnasium", street="Parkweg 5")

    school = independent_to_school(raw, vocabulary)

    assert school.institution_key == "4900007"
    assert school.school_types == (GYMNASIUM,)
    assert school.street == "Parkweg 5"
    assert school.homepage == "https://freie-schule.example"


@pytest.mark.unit
def test_independent_school_leaves_contact_fields_unset(vocabulary: list[SchoolType]) -> None:
    school = independent_to_school(make_independent(), vocabulary)

    assert school.longitude is None
    assert school.latitude is None
    assert school.phone_number is None
    assert school.fax_number is None
    assert school.mail is None


@pytest.mark.unit
def test_independent_school_with_unknown_label_has_no_types(vocabulary: list[SchoolType]) -> None:
    school = independent_to_school(make_independent(school_type_name="Waldorfschule"), vocabulary)

    assert school.school_types == ()
