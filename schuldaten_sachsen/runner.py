"""Runner — fetches both feeds for a district and reconciles them."""

import time
from collections.abc import Collection, Sequence
from pathlib import Path

from schuldaten_sachsen.api import (
    BASE_URL,
    get_independent_schools,
    get_public_schools_in_district,
)
from schuldaten_sachsen.export import write_schools
from schuldaten_sachsen.reconcile import reconcile
from schuldaten_sachsen.schema import Community, District, School, SchoolType
from schuldaten_sachsen.utils import DEFAULT_TIMEOUT

DEFAULT_OUTPUT = "./out.csv"


def get_schools_of_types_in_district(
    school_types: Collection[SchoolType],
    district: District,
    communities: Sequence[Community],
    vocabulary: Sequence[SchoolType],
    *,
    base_url: str = BASE_URL,
    timeout: int = DEFAULT_TIMEOUT,
) -> list[School]:
    """Fetch public and independent schools and reconcile them for one district.

    Args:
        school_types: Requested school types (non-empty).
        district: District to scope the public feed and the communities to.
        communities: Full community table.
        vocabulary: All known school types, used to resolve type keys and labels.

    Returns:
        Schools in feed order, public ones first.
    """
    print(f"Fetching public schools in {district.name}...")
    start = time.time()
    public_schools = get_public_schools_in_district(district, base_url=base_url, timeout=timeout)
    print(f"  {len(public_schools)} public schools ({time.time() - start:.1f}s)")

    print("Fetching independent schools...")
    start = time.time()
    independent_schools = get_independent_schools(base_url=base_url, timeout=timeout)
    print(f"  {len(independent_schools)} independent schools ({time.time() - start:.1f}s)")

    return reconcile(
        vocabulary=vocabulary,
        district=district,
        communities=communities,
        public_schools=public_schools,
        independent_schools=independent_schools,
        requested_types=school_types,
    )


def export_district(
    school_types: Collection[SchoolType],
    district: District,
    communities: Sequence[Community],
    vocabulary: Sequence[SchoolType],
    output: str | Path = DEFAULT_OUTPUT,
    *,
    fmt: str = "csv",
    base_url: str = BASE_URL,
    timeout: int = DEFAULT_TIMEOUT,
) -> list[School]:
    """Reconcile a district, sort by institution key and write the result."""
    schools = get_schools_of_types_in_district(
        school_types, district, communities, vocabulary,
        base_url=base_url, timeout=timeout,
    )
    schools = sorted(schools, key=lambda school: school.institution_key)
    write_schools(schools, output, fmt)
    return schools
