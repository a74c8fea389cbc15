"""REST/JSON client for the Saxon Schuldatenbank: key tables and school feeds."""

from dataclasses import dataclass

from schuldaten_sachsen.schema import (
    Community,
    District,
    IndependentSchool,
    PublicSchool,
    SchoolType,
    UpstreamShapeError,
)
from schuldaten_sachsen.utils import DEFAULT_TIMEOUT, fetch

BASE_URL = "https://schuldatenbank.sachsen.de/api/v1"

# Aggregate rows of the key tables, not real regions.
DISTRICT_SENTINEL = "00000"
COMMUNITY_SENTINEL = "00000000"


@dataclass(frozen=True)
class Vocabulary:
    school_types: list[SchoolType]
    districts: list[District]
    communities: list[Community]


def _get_list(url: str, timeout: int) -> list:
    response = fetch(url, timeout=timeout)
    try:
        payload = response.json()
    except ValueError as e:
        raise UpstreamShapeError(f"{url}: response is not JSON ({e})") from e
    if not isinstance(payload, list):
        raise UpstreamShapeError(
            f"{url}: expected a JSON list, got {type(payload).__name__}"
        )
    return payload


# --- Key tables ---

def get_school_types(*, base_url: str = BASE_URL, timeout: int = DEFAULT_TIMEOUT) -> list[SchoolType]:
    url = f"{base_url}/key_tables/school_types?limit=99&fields[0]=key&fields[1]=label"
    return [SchoolType.from_dict(item) for item in _get_list(url, timeout)]


def get_districts(*, base_url: str = BASE_URL, timeout: int = DEFAULT_TIMEOUT) -> list[District]:
    """Load districts, skipping the sentinel and malformed keys."""
    url = f"{base_url}/key_tables/districts?fields[0]=key&fields[1]=name"
    districts = [District.from_dict(item) for item in _get_list(url, timeout)]
    return [
        district for district in districts
        if len(district.key) == 5 and district.key != DISTRICT_SENTINEL
    ]


def get_communities(*, base_url: str = BASE_URL, timeout: int = DEFAULT_TIMEOUT) -> list[Community]:
    url = f"{base_url}/key_tables/communities?limit=999"
    communities = [Community.from_dict(item) for item in _get_list(url, timeout)]
    return [c for c in communities if c.key != COMMUNITY_SENTINEL]


def load_vocabulary(*, base_url: str = BASE_URL, timeout: int = DEFAULT_TIMEOUT) -> Vocabulary:
    """Load the three lookup tables used by the adapters and the reconciliation."""
    return Vocabulary(
        school_types=get_school_types(base_url=base_url, timeout=timeout),
        districts=get_districts(base_url=base_url, timeout=timeout),
        communities=get_communities(base_url=base_url, timeout=timeout),
    )


# --- School feeds ---

def get_public_schools_in_district(
    district: District,
    *,
    base_url: str = BASE_URL,
    timeout: int = DEFAULT_TIMEOUT,
) -> list[PublicSchool]:
    url = (
        f"{base_url}/schools?format=json&limit=999"
        f"&district_key={district.key}&only_schools=yes"
    )
    return [PublicSchool.from_dict(item) for item in _get_list(url, timeout)]


def get_independent_schools(
    *, base_url: str = BASE_URL, timeout: int = DEFAULT_TIMEOUT
) -> list[IndependentSchool]:
    """The independent feed has no district parameter, it is always loaded whole."""
    url = f"{base_url}/schools/independent?limit=999"
    return [IndependentSchool.from_dict(item) for item in _get_list(url, timeout)]
