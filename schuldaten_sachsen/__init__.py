"""
schuldaten_sachsen — school directory export for the Saxon Schuldatenbank.

Merges the public schools feed (per district, several buildings per
institution) with the independent schools feed into one record per
institution, filtered by school type and district.

Usage:
    from schuldaten_sachsen import load_vocabulary, export_district

    vocabulary = load_vocabulary()
    district = vocabulary.districts[0]
    grundschule = [t for t in vocabulary.school_types if t.label == "Grundschule"]
    schools = export_district(
        grundschule, district, vocabulary.communities, vocabulary.school_types, "out.csv"
    )
"""

from schuldaten_sachsen.api import load_vocabulary
from schuldaten_sachsen.reconcile import reconcile
from schuldaten_sachsen.runner import export_district, get_schools_of_types_in_district
from schuldaten_sachsen.schema import School

__all__ = [
    "School",
    "export_district",
    "get_schools_of_types_in_district",
    "load_vocabulary",
    "reconcile",
]
