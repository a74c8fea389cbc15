"""Pytest fixtures: small key tables shared by the tests."""

import pytest

from factories import FOERDERSCHULE, GRUNDSCHULE, GYMNASIUM, OBERSCHULE
from schuldaten_sachsen.schema import Community, District, SchoolType


@pytest.fixture
def vocabulary() -> list[SchoolType]:
    return [GRUNDSCHULE, OBERSCHULE, GYMNASIUM, FOERDERSCHULE]


@pytest.fixture
def leipzig() -> District:
    return District(key="14713", name="Leipzig, Stadt")


@pytest.fixture
def communities() -> list[Community]:
    return [
        Community(key="14713000", name="Leipzig"),
        Community(key="14729080", name="Grimma"),
        Community(key="14612000", name="Dresden"),
    ]
