"""Command-line interface for schuldaten_sachsen.

Asks for school types, a district and an output file (or takes them as
options), then downloads, reconciles and exports the matching schools.
"""

import importlib.metadata
from collections.abc import Sequence

import click
import requests

from schuldaten_sachsen.api import BASE_URL, load_vocabulary
from schuldaten_sachsen.export import FORMATS
from schuldaten_sachsen.runner import DEFAULT_OUTPUT, export_district
from schuldaten_sachsen.schema import District, SchoolType
from schuldaten_sachsen.utils import DEFAULT_TIMEOUT

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("schuldaten-sachsen")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"


def _error(message: str) -> None:
    click.echo("  " + click.style(message, fg="red", bold=True))


def match_school_types(tokens: Sequence[str], vocabulary: Sequence[SchoolType]) -> list[SchoolType]:
    """Match school types by key or exact label.

    Raises:
        ValueError: If a token matches nothing.
    """
    selected: list[SchoolType] = []
    for token in tokens:
        token = token.strip()
        if not token:
            continue
        match = next((t for t in vocabulary if t.key == token or t.label == token), None)
        if match is None:
            raise ValueError(f"Unknown school type '{token}'")
        if match not in selected:
            selected.append(match)
    return selected


def pick_school_types(answer: str, vocabulary: Sequence[SchoolType]) -> list[SchoolType]:
    """School types at the 1-based list positions in a comma separated answer.

    Raises:
        ValueError: If a token is not a number of the listed entries.
    """
    selected: list[SchoolType] = []
    for token in answer.split(","):
        token = token.strip()
        if not token:
            continue
        if not token.isdigit() or not 1 <= int(token) <= len(vocabulary):
            raise ValueError(f"'{token}' is not a number between 1 and {len(vocabulary)}")
        school_type = vocabulary[int(token) - 1]
        if school_type not in selected:
            selected.append(school_type)
    return selected


def match_districts(query: str, districts: Sequence[District]) -> list[District]:
    """Districts matching a key, list number or name fragment (case-insensitive)."""
    query = query.strip()
    if not query:
        return []
    exact = [d for d in districts if d.key == query or d.name.lower() == query.lower()]
    if exact:
        return exact
    if query.isdigit() and 1 <= int(query) <= len(districts):
        return [districts[int(query) - 1]]
    return [d for d in districts if query.lower() in d.name.lower()]


def prompt_school_types(vocabulary: Sequence[SchoolType]) -> list[SchoolType]:
    for number, school_type in enumerate(vocabulary, start=1):
        click.echo(f"  [{number:>2}] {school_type.label} ({school_type.key})")
    while True:
        answer = click.prompt(
            "Pick school types (numbers, comma separated)", default="", show_default=False
        )
        try:
            selected = pick_school_types(answer, vocabulary)
        except ValueError as e:
            _error(str(e))
            continue
        if not selected:
            _error("At least one school type must be selected!")
            continue
        return selected


def prompt_district(districts: Sequence[District]) -> District:
    for number, district in enumerate(districts, start=1):
        click.echo(f"  [{number:>2}] {district.name}")
    while True:
        answer = click.prompt("Pick a district (number or name)", default="", show_default=False)
        matches = match_districts(answer, districts)
        if len(matches) == 1:
            return matches[0]
        if matches:
            _error("Ambiguous: " + ", ".join(d.name for d in matches))
        else:
            _error(f"No district matches '{answer}'")


@click.command()
@click.version_option(version=__version__, prog_name="schuldaten-sachsen")
@click.option(
    "--school-type",
    "-t",
    "school_type_tokens",
    multiple=True,
    help="School type key or exact label (repeatable). Prompted by list number if omitted.",
)
@click.option("--district", "-d", help="District key or name. Prompted if omitted.")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file name")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS),
    default="csv",
    show_default=True,
    help="Output format",
)
@click.option("--timeout", type=int, default=DEFAULT_TIMEOUT, show_default=True, help="HTTP timeout in seconds")
@click.option("--base-url", default=BASE_URL, show_default=True, help="Schuldatenbank API root")
def cli(
    school_type_tokens: tuple[str, ...],
    district: str | None,
    output: str | None,
    fmt: str,
    timeout: int,
    base_url: str,
) -> None:
    """Export schools of the chosen types in a Saxon district.

    Public and independent schools are merged, each institution appears once.
    """
    try:
        vocabulary = load_vocabulary(base_url=base_url, timeout=timeout)
    except (requests.RequestException, ValueError) as e:
        raise click.ClickException(f"Loading key tables failed: {e}") from e

    if school_type_tokens:
        try:
            school_types = match_school_types(school_type_tokens, vocabulary.school_types)
        except ValueError as e:
            raise click.ClickException(str(e)) from e
        if not school_types:
            raise click.ClickException("At least one school type must be selected!")
    else:
        school_types = prompt_school_types(vocabulary.school_types)

    if district:
        matches = match_districts(district, vocabulary.districts)
        if len(matches) != 1:
            raise click.ClickException(
                f"District '{district}' matches {len(matches)} districts, expected one"
            )
        selected_district = matches[0]
    else:
        selected_district = prompt_district(vocabulary.districts)

    if output is None:
        output = click.prompt("Output file name", default=DEFAULT_OUTPUT)

    try:
        schools = export_district(
            school_types,
            selected_district,
            vocabulary.communities,
            vocabulary.school_types,
            output,
            fmt=fmt,
            base_url=base_url,
            timeout=timeout,
        )
    except (requests.RequestException, OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"  Downloaded data of {click.style(str(len(schools)), fg='cyan')} schools")
    click.echo(f"  Wrote data to {output}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
