"""Write reconciled schools to disk."""

import csv
import json
from collections.abc import Sequence
from pathlib import Path

from schuldaten_sachsen.schema import School, export_columns

FORMATS = ("csv", "json")


def write_csv(schools: Sequence[School], path: str | Path) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=export_columns())
        writer.writeheader()
        for school in schools:
            writer.writerow(school.to_dict())


def write_json(schools: Sequence[School], path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump([school.to_dict() for school in schools], f, ensure_ascii=False, indent=2)


def write_schools(schools: Sequence[School], path: str | Path, fmt: str = "csv") -> None:
    if fmt == "csv":
        write_csv(schools, path)
    elif fmt == "json":
        write_json(schools, path)
    else:
        raise ValueError(f"Unknown format '{fmt}'. Available: {', '.join(FORMATS)}")
