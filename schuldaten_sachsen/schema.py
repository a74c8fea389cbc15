"""Data model for the Saxon school database feeds and the merged School record."""

from dataclasses import dataclass, field, fields, asdict


class UpstreamShapeError(ValueError):
    """A raw record from an upstream feed does not have the expected shape."""


class ContractViolation(ValueError):
    """A caller broke a precondition of the reconciliation core."""


def _require(item: dict, key: str, kind: str):
    if not isinstance(item, dict):
        raise UpstreamShapeError(f"{kind}: expected an object, got {type(item).__name__}")
    if key not in item or item[key] is None:
        raise UpstreamShapeError(f"{kind}: missing required field '{key}'")
    return item[key]


def _require_str(item: dict, key: str, kind: str) -> str:
    return str(_require(item, key, kind))


def _type_key(value, kind: str) -> int:
    """Numeric type key; the feed sends ints, digit strings are tolerated."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    raise UpstreamShapeError(f"{kind}: invalid school type key {value!r}")


def _coordinate(item: dict, key: str, kind: str) -> float | None:
    value = item.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UpstreamShapeError(f"{kind}: '{key}' must be a number, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class SchoolType:
    key: str
    label: str = field(compare=False)

    @classmethod
    def from_dict(cls, item: dict) -> "SchoolType":
        return cls(
            key=_require_str(item, "key", "school type"),
            label=_require_str(item, "label", "school type"),
        )


@dataclass(frozen=True)
class District:
    key: str
    name: str

    @classmethod
    def from_dict(cls, item: dict) -> "District":
        return cls(
            key=_require_str(item, "key", "district"),
            name=_require_str(item, "name", "district"),
        )


@dataclass(frozen=True)
class Community:
    key: str
    name: str

    @classmethod
    def from_dict(cls, item: dict) -> "Community":
        return cls(
            key=_require_str(item, "key", "community"),
            name=_require_str(item, "name", "community"),
        )

    def belongs_to(self, district: District) -> bool:
        """Community keys are prefixed by the key of their district."""
        return self.key.startswith(district.key)


@dataclass(frozen=True)
class Building:
    """One physical location of a public institution."""

    street: str
    street_name: str
    house_number: str
    postcode: str
    community: str
    building_name: str | None = None
    longitude: float | None = None
    latitude: float | None = None
    phone_code: str | None = None
    phone_number: str | None = None
    phone_identifier: str | None = None
    fax_code: str | None = None
    fax_number: str | None = None
    mail: str | None = None
    homepage: str | None = None
    school_type_keys: tuple[int, ...] = ()

    @classmethod
    def from_dict(cls, item: dict) -> "Building":
        kind = "building"
        type_keys = _require(item, "school_type_keys", kind)
        if not isinstance(type_keys, list):
            raise UpstreamShapeError(f"{kind}: 'school_type_keys' must be a list")
        type_keys = tuple(_type_key(key, kind) for key in type_keys)

        return cls(
            street=_require_str(item, "street", kind),
            street_name=_require_str(item, "street_name", kind),
            house_number=_require_str(item, "house_number", kind),
            postcode=_require_str(item, "postcode", kind),
            community=_require_str(item, "community", kind),
            building_name=item.get("building_name"),
            longitude=_coordinate(item, "longitude", kind),
            latitude=_coordinate(item, "latitude", kind),
            # The feed numbers its phone columns; only the first set is used.
            phone_code=item.get("phone_code_1"),
            phone_number=item.get("phone_number_1"),
            phone_identifier=item.get("phone_identifier_1"),
            fax_code=item.get("fax_code"),
            fax_number=item.get("fax_number"),
            mail=item.get("mail"),
            homepage=item.get("homepage"),
            school_type_keys=type_keys,
        )


@dataclass(frozen=True)
class PublicSchool:
    """An institution from the public schools feed, possibly spanning several buildings."""

    institution_key: str
    name: str
    id: int | None = None
    abbreviation: str | None = None
    institution_number: str | None = None
    legal_status_key: str | None = None
    inspectorate_key: str | None = None
    company_number: str | None = None
    school_category_key: str | None = None
    headmaster_salutation_key: str | None = None
    headmaster_firstname: str | None = None
    headmaster_lastname: str | None = None
    school_portal_mail: str | None = None
    educational_concept_key: int | None = None
    school_property_key: str | None = None
    opening_date: str | None = None
    buildings: tuple[Building, ...] = ()

    @classmethod
    def from_dict(cls, item: dict) -> "PublicSchool":
        kind = "public school"
        institution_key = _require_str(item, "institution_key", kind)
        buildings = item.get("buildings")
        if not isinstance(buildings, list):
            raise UpstreamShapeError(
                f"{kind} {institution_key}: 'buildings' must be a list"
            )

        return cls(
            institution_key=institution_key,
            name=_require_str(item, "name", kind),
            id=item.get("id"),
            abbreviation=item.get("abbreviation"),
            institution_number=item.get("institution_number"),
            legal_status_key=item.get("legal_status_key"),
            inspectorate_key=item.get("inspectorate_key"),
            company_number=item.get("company_number"),
            school_category_key=item.get("school_category_key"),
            headmaster_salutation_key=item.get("headmaster_salutation_key"),
            headmaster_firstname=item.get("headmaster_firstname"),
            headmaster_lastname=item.get("headmaster_lastname"),
            school_portal_mail=item.get("school_portal_mail"),
            educational_concept_key=item.get("educational_concept_key"),
            school_property_key=item.get("school_property_key"),
            opening_date=item.get("opening_date"),
            buildings=tuple(Building.from_dict(b) for b in buildings),
        )


@dataclass(frozen=True)
class IndependentSchool:
    """An institution from the independent schools feed (one row, one location)."""

    institution_key: str
    name: str
    school_category_name: str
    school_type_name: str
    street: str
    street_name: str
    house_number: str
    postcode: str
    community: str
    owner_id: int | None = None
    educational_sector: str | None = None
    inspectorate: str | None = None
    opening_date: str | None = None
    homepage: str | None = None

    @classmethod
    def from_dict(cls, item: dict) -> "IndependentSchool":
        kind = "independent school"
        return cls(
            institution_key=_require_str(item, "institution_key", kind),
            name=_require_str(item, "name", kind),
            school_category_name=_require_str(item, "school_category", kind),
            school_type_name=_require_str(item, "school_types", kind),
            street=_require_str(item, "street", kind),
            street_name=_require_str(item, "street_name", kind),
            house_number=_require_str(item, "house_number", kind),
            postcode=_require_str(item, "postcode", kind),
            community=_require_str(item, "community", kind),
            owner_id=item.get("owner_id"),
            educational_sector=item.get("educational_sector"),
            inspectorate=item.get("inspectorate"),
            opening_date=item.get("opening_date"),
            homepage=item.get("homepage"),
        )


@dataclass(frozen=True)
class School:
    """Canonical school record, the only shape that reaches the export."""

    institution_key: str
    name: str
    school_types: tuple[SchoolType, ...] = ()
    opening_date: str | None = None
    street: str = ""
    street_name: str = ""
    house_number: str = ""
    postcode: str = ""
    community: str = ""
    longitude: float | None = None
    latitude: float | None = None
    phone_code: str | None = None
    phone_number: str | None = None
    phone_identifier: str | None = None
    fax_code: str | None = None
    fax_number: str | None = None
    mail: str | None = None
    homepage: str | None = None

    @property
    def school_type_keys(self) -> set[str]:
        return {school_type.key for school_type in self.school_types}

    def to_dict(self) -> dict:
        """Flat export row; school types become a comma separated key list."""
        row = asdict(self)
        del row["school_types"]
        row["school_type_keys"] = ", ".join(t.key for t in self.school_types)
        return {name: row[name] for name in export_columns()}


def export_columns() -> list[str]:
    """Column order of exported rows, following the School field order."""
    return [
        "school_type_keys" if f.name == "school_types" else f.name
        for f in fields(School)
    ]
