"""Merge public and independent school feeds for one district."""

from collections.abc import Collection, Sequence

from schuldaten_sachsen.adapters import independent_to_school, public_to_school
from schuldaten_sachsen.schema import (
    Community,
    ContractViolation,
    District,
    IndependentSchool,
    PublicSchool,
    School,
    SchoolType,
)


def community_names_in_district(district: District, communities: Sequence[Community]) -> set[str]:
    return {c.name for c in communities if c.belongs_to(district)}


def filter_by_types(schools: Sequence[School], requested: Collection[SchoolType]) -> list[School]:
    """Keep schools sharing at least one type key with the requested set."""
    requested_keys = {school_type.key for school_type in requested}
    return [school for school in schools if school.school_type_keys & requested_keys]


def reconcile(
    *,
    vocabulary: Sequence[SchoolType],
    district: District,
    communities: Sequence[Community],
    public_schools: Sequence[PublicSchool],
    independent_schools: Sequence[IndependentSchool],
    requested_types: Collection[SchoolType],
) -> list[School]:
    """Build the list of schools of the requested types in a district.

    Args:
        vocabulary: All known school types.
        district: The chosen district.
        communities: The full community table.
        public_schools: Public feed, already scoped to the district.
        independent_schools: The whole independent feed.
        requested_types: Non-empty selection of school types.

    Returns:
        Public schools first, then independent ones, each institution once.

    Raises:
        ContractViolation: If no type was requested or a public school has
            no buildings.
    """
    if not requested_types:
        raise ContractViolation("at least one school type must be requested")

    names = community_names_in_district(district, communities)

    schools: list[School] = []
    seen: set[str] = set()
    for raw in public_schools:
        if raw.institution_key in seen:
            continue
        seen.add(raw.institution_key)
        schools.append(public_to_school(raw, vocabulary))

    # An institution listed in both feeds keeps its public version.
    for raw in independent_schools:
        if raw.community not in names or raw.institution_key in seen:
            continue
        seen.add(raw.institution_key)
        schools.append(independent_to_school(raw, vocabulary))

    return filter_by_types(schools, requested_types)
