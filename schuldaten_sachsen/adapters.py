"""Conversion of both upstream school schemas into the canonical School."""

from collections.abc import Iterable, Sequence
from dataclasses import replace

from schuldaten_sachsen.schema import (
    Building,
    ContractViolation,
    IndependentSchool,
    PublicSchool,
    School,
    SchoolType,
)
from schuldaten_sachsen.utils import is_present, unique_by_key

# Later buildings may fill or override these; address fields stay with the first building.
OVERRIDABLE_FIELDS = (
    "longitude",
    "latitude",
    "phone_code",
    "phone_number",
    "phone_identifier",
    "fax_code",
    "fax_number",
    "mail",
    "homepage",
)


# --- Vocabulary lookups ---

def resolve_type_keys(keys: Iterable[int], vocabulary: Sequence[SchoolType]) -> tuple[SchoolType, ...]:
    """Resolve numeric type keys, dropping keys the vocabulary does not know."""
    by_key = {}
    for school_type in vocabulary:
        by_key.setdefault(school_type.key, school_type)
    resolved = [by_key[str(key)] for key in keys if str(key) in by_key]
    return tuple(unique_by_key(resolved))


def resolve_type_label(label: str, vocabulary: Sequence[SchoolType]) -> SchoolType | None:
    """Find the school type with exactly this label (case-sensitive), first match wins."""
    for school_type in vocabulary:
        if school_type.label == label:
            return school_type
    return None


# --- Building reducer ---

def reduce_buildings(buildings: Sequence[Building]) -> Building:
    """Collapse an institution's buildings into one location record.

    The first building is the registered address. Each later building
    overrides the contact and coordinate fields it actually carries, so the
    last non-empty value wins per field.
    """
    if not buildings:
        raise ContractViolation("cannot reduce an empty building list")

    reduced = buildings[0]
    for building in buildings[1:]:
        updates = {
            name: getattr(building, name)
            for name in OVERRIDABLE_FIELDS
            if is_present(getattr(building, name))
        }
        if updates:
            reduced = replace(reduced, **updates)
    return reduced


# --- Adapters ---

def public_to_school(raw: PublicSchool, vocabulary: Sequence[SchoolType]) -> School:
    if not raw.buildings:
        raise ContractViolation(
            f"public school {raw.institution_key} has no buildings"
        )

    type_keys = [key for building in raw.buildings for key in building.school_type_keys]
    location = reduce_buildings(raw.buildings)

    return School(
        institution_key=raw.institution_key,
        name=raw.name,
        school_types=resolve_type_keys(type_keys, vocabulary),
        opening_date=raw.opening_date,
        street=location.street,
        street_name=location.street_name,
        house_number=location.house_number,
        postcode=location.postcode,
        community=location.community,
        longitude=location.longitude,
        latitude=location.latitude,
        phone_code=location.phone_code,
        phone_number=location.phone_number,
        phone_identifier=location.phone_identifier,
        fax_code=location.fax_code,
        fax_number=location.fax_number,
        mail=location.mail,
        homepage=location.homepage,
    )


def independent_to_school(raw: IndependentSchool, vocabulary: Sequence[SchoolType]) -> School:
    school_type = resolve_type_label(raw.school_type_name, vocabulary)

    return School(
        institution_key=raw.institution_key,
        name=raw.name,
        school_types=(school_type,) if school_type else (),
        opening_date=raw.opening_date,
        street=raw.street,
        street_name=raw.street_name,
        house_number=raw.house_number,
        postcode=raw.postcode,
        community=raw.community,
        homepage=raw.homepage,
    )
