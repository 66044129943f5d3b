"""Person entity for the family tree.

A Person holds identity, biographical attributes and relationship edges.
Relationship edges are stored as identifiers (the registry owns the
people); they are private to the entity and only change through the
mutators below, which the registry calls after its graph-wide checks.

Invariants enforced locally:
    - full name is not blank
    - MIN_BIRTH_YEAR <= birth_year <= MAX_BIRTH_YEAR
    - death_year is None or death_year >= birth_year
    - at most two parents, children deduplicated
    - at most one undissolved marriage at a time
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from family_tree.exceptions import (
    AlreadyMarriedError,
    InvalidYearError,
    TooManyParentsError,
    ValidationError,
)

MIN_BIRTH_YEAR = 1800
MAX_BIRTH_YEAR = 2100


class Gender(str, Enum):
    """Closed set of genders."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | Gender) -> Gender:
        """Case-insensitive lookup by name or value."""
        if isinstance(value, Gender):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            options = ", ".join(g.name for g in cls)
            raise ValidationError(
                f"Unknown gender '{value}'. Choose from: {options}", field="gender"
            ) from None


class PersonType(str, Enum):
    """Classification tagged once at creation; never re-evaluated."""
    ADULT = "adult"
    MINOR = "minor"


@dataclass(frozen=True)
class PersonSummary:
    """Detached snapshot of a person for projections and rendering."""
    person_id: str
    name: str
    gender: Gender
    birth_year: int
    death_year: int | None = None
    person_type: PersonType = PersonType.ADULT

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "person_id": self.person_id,
            "name": self.name,
            "gender": self.gender.value,
            "birth_year": self.birth_year,
            "death_year": self.death_year,
            "person_type": self.person_type.value,
        }


def _check_name(name: str) -> str:
    if name is None or not str(name).strip():
        raise ValueError("Name cannot be blank")
    return name


def _check_years(birth_year: int, death_year: int | None) -> None:
    if birth_year < MIN_BIRTH_YEAR or birth_year > MAX_BIRTH_YEAR:
        raise ValueError(f"Birth year must be between {MIN_BIRTH_YEAR} and {MAX_BIRTH_YEAR}")
    if death_year is not None and death_year < birth_year:
        raise ValueError("Death year cannot be before birth year")


def _translate(exc: PydanticValidationError) -> ValidationError:
    """Turn the first pydantic error into the project's ValidationError."""
    error = exc.errors()[0]
    original = (error.get("ctx") or {}).get("error")
    message = str(original) if original is not None else error["msg"]
    field = str(error["loc"][0]) if error.get("loc") else None
    return ValidationError(message, field=field)


class Person(BaseModel):
    """A person in the family tree.

    Equality and hashing are by identifier, so people can be collected in
    sets (siblings) and compared across lookups.
    """
    model_config = ConfigDict(validate_assignment=True)

    # Identity and birth data are fixed at creation
    id: str = Field(frozen=True)
    full_name: str
    gender: Gender = Field(frozen=True)
    birth_year: int = Field(frozen=True)
    death_year: int | None = None
    person_type: PersonType = Field(default=PersonType.ADULT, frozen=True)

    _parent1_id: str | None = PrivateAttr(default=None)
    _parent2_id: str | None = PrivateAttr(default=None)
    _child_ids: list[str] = PrivateAttr(default_factory=list)
    _spouse_id: str | None = PrivateAttr(default=None)
    _marriage_year: int | None = PrivateAttr(default=None)
    _divorce_year: int | None = PrivateAttr(default=None)

    @field_validator("full_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, Gender):
            return v.strip().lower()
        return v

    @field_validator("birth_year")
    @classmethod
    def validate_birth_year(cls, v: int) -> int:
        _check_years(v, None)
        return v

    @model_validator(mode="after")
    def validate_years(self) -> "Person":
        _check_years(self.birth_year, self.death_year)
        return self

    @classmethod
    def create(
        cls,
        id: str,
        full_name: str,
        gender: Gender | str,
        birth_year: int,
        death_year: int | None = None,
        person_type: PersonType = PersonType.ADULT,
    ) -> Person:
        """Build a validated person, raising ValidationError on bad input."""
        try:
            return cls(
                id=id,
                full_name=full_name,
                gender=gender,
                birth_year=birth_year,
                death_year=death_year,
                person_type=person_type,
            )
        except PydanticValidationError as exc:
            raise _translate(exc) from exc

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Person):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.describe()

    # ─────────────────────────────────────────
    # Read-only relationship state
    # ─────────────────────────────────────────

    @property
    def parent1_id(self) -> str | None:
        return self._parent1_id

    @property
    def parent2_id(self) -> str | None:
        return self._parent2_id

    @property
    def parent_ids(self) -> list[str]:
        """Filled parent slots in insertion order."""
        return [p for p in (self._parent1_id, self._parent2_id) if p is not None]

    @property
    def child_ids(self) -> list[str]:
        return list(self._child_ids)

    @property
    def spouse_id(self) -> str | None:
        return self._spouse_id

    @property
    def marriage_year(self) -> int | None:
        return self._marriage_year

    @property
    def divorce_year(self) -> int | None:
        return self._divorce_year

    # ─────────────────────────────────────────
    # Corrections (re-validated)
    # ─────────────────────────────────────────

    def rename(self, full_name: str) -> None:
        try:
            _check_name(full_name)
        except ValueError as exc:
            raise ValidationError(str(exc), field="full_name") from exc
        self.full_name = full_name

    def correct_death_year(self, death_year: int | None) -> None:
        """Fix the death year. The person type keeps its creation-time value."""
        try:
            _check_years(self.birth_year, death_year)
        except ValueError as exc:
            raise ValidationError(str(exc), field="death_year") from exc
        self.death_year = death_year

    # ─────────────────────────────────────────
    # Relationship mutators (registry only)
    # ─────────────────────────────────────────

    def add_parent(self, parent: Person) -> None:
        if self._parent1_id is None:
            self._parent1_id = parent.id
        elif self._parent2_id is None:
            self._parent2_id = parent.id
        else:
            raise TooManyParentsError(self.id)

    def add_child(self, child: Person) -> None:
        if child.id not in self._child_ids:
            self._child_ids.append(child.id)

    def can_marry(self, year: int) -> bool:
        """True unless an undissolved marriage is still in effect at ``year``."""
        if self._spouse_id is None:
            return True
        return self._divorce_year is not None and self._divorce_year < year

    def set_spouse(self, spouse: Person, year: int) -> None:
        if spouse.id == self.id:
            raise ValidationError(f"Person {self.id} cannot marry themselves", field="spouse")
        if not self.can_marry(year):
            raise AlreadyMarriedError(self.id, self._spouse_id)
        self._spouse_id = spouse.id
        self._marriage_year = year
        self._divorce_year = None

    def record_divorce(self, year: int) -> None:
        if self._spouse_id is None or self._divorce_year is not None:
            raise ValidationError(f"Person {self.id} is not currently married", field="spouse")
        if self._marriage_year is not None and year < self._marriage_year:
            raise ValidationError(
                f"Divorce year {year} cannot be before marriage year {self._marriage_year}",
                field="divorce_year",
            )
        self._divorce_year = year

    # ─────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────

    def has_parent(self, person: Person) -> bool:
        return person.id in (self._parent1_id, self._parent2_id)

    def is_alive(self) -> bool:
        return self.death_year is None

    def age_in(self, year: int) -> int:
        if year < self.birth_year:
            raise InvalidYearError(year, self.birth_year)
        end_year = self.death_year if self.death_year is not None and self.death_year < year else year
        return end_year - self.birth_year

    def summary(self) -> PersonSummary:
        return PersonSummary(
            person_id=self.id,
            name=self.full_name,
            gender=self.gender,
            birth_year=self.birth_year,
            death_year=self.death_year,
            person_type=self.person_type,
        )

    def describe(self) -> str:
        """One-line summary: ``id | name | gender | b.year [| d.year] [| spouse=id] | children=n``."""
        parts = [self.id, self.full_name, self.gender.name, f"b.{self.birth_year}"]
        if self.death_year is not None:
            parts.append(f"d.{self.death_year}")
        if self._spouse_id is not None:
            parts.append(f"spouse={self._spouse_id}")
        parts.append(f"children={len(self._child_ids)}")
        return " | ".join(parts)
