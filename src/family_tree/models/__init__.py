"""Person entity models."""

from .factory import PersonFactory, classify_person
from .person import (
    MAX_BIRTH_YEAR,
    MIN_BIRTH_YEAR,
    Gender,
    Person,
    PersonSummary,
    PersonType,
)

__all__ = [
    "Person",
    "PersonSummary",
    "PersonType",
    "Gender",
    "PersonFactory",
    "classify_person",
    "MIN_BIRTH_YEAR",
    "MAX_BIRTH_YEAR",
]
