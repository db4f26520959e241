"""The seven powers a seat can be claimed for."""

from enum import StrEnum
from typing import Optional


class Country(StrEnum):
    ENGLAND = "england"
    FRANCE = "france"
    GERMANY = "germany"
    ITALY = "italy"
    AUSTRIA = "austria"
    RUSSIA = "russia"
    TURKEY = "turkey"


def parse_country(value) -> Optional[Country]:
    """Return the matching Country, or None for anything outside the set."""
    if not isinstance(value, str):
        return None
    try:
        return Country(value)
    except ValueError:
        return None
