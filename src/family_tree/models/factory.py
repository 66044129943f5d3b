"""Factory for creating Person instances with generated identifiers."""
from __future__ import annotations

from family_tree.config import CONFIG
from family_tree.ids import IdGenerator
from family_tree.logging import get_logger
from family_tree.models.person import Gender, Person, PersonType

logger = get_logger(__name__)


def classify_person(
    birth_year: int,
    death_year: int | None,
    reference_year: int,
    adult_age: int,
) -> PersonType:
    """Minor or adult by age at death, or by age in ``reference_year`` if living."""
    end_year = death_year if death_year is not None else reference_year
    return PersonType.MINOR if end_year - birth_year < adult_age else PersonType.ADULT


class PersonFactory:
    """Creates people, assigning the next identifier and a one-time type tag.

    The type is decided here and stored on the person; it does not change
    when a living minor later comes of age.
    """

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        reference_year: int | None = None,
        adult_age: int | None = None,
    ) -> None:
        self.id_generator = id_generator or IdGenerator()
        self.reference_year = reference_year if reference_year is not None else CONFIG.reference_year
        self.adult_age = adult_age if adult_age is not None else CONFIG.adult_age

    def create_person(
        self,
        full_name: str,
        gender: Gender | str,
        birth_year: int,
        death_year: int | None = None,
    ) -> Person:
        gender = Gender.parse(gender)
        # Validate before drawing an id so rejected input does not consume one
        Person.create(
            id="",
            full_name=full_name,
            gender=gender,
            birth_year=birth_year,
            death_year=death_year,
        )
        person_type = classify_person(birth_year, death_year, self.reference_year, self.adult_age)
        person = Person.create(
            id=self.id_generator.next_id(),
            full_name=full_name,
            gender=gender,
            birth_year=birth_year,
            death_year=death_year,
            person_type=person_type,
        )
        logger.debug("person_created", person_id=person.id, person_type=person_type.value)
        return person
