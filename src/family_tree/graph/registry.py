"""Family registry: owner of all people and all cross-person relationships.

The registry is the only place that links two people. It resolves
identifiers, runs the graph-wide checks no single person can make
(acyclicity, both-sides marriage eligibility) and only then mutates the
entities, so a rejected operation leaves every person untouched.
"""
from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from family_tree.config import CONFIG
from family_tree.exceptions import (
    AlreadyMarriedError,
    CycleDetectedError,
    DuplicateIdError,
    NotFoundError,
    TooManyParentsError,
    ValidationError,
)
from family_tree.graph.projection import TreeNode, TreeProjection
from family_tree.graph.traversal import PedigreeTraversal
from family_tree.ids import IdGenerator
from family_tree.logging import get_logger
from family_tree.models.factory import PersonFactory
from family_tree.models.person import Gender, Person

if TYPE_CHECKING:
    from family_tree.render.base import Renderer

logger = get_logger(__name__)


class FamilyRegistry:
    """Main interface for family tree operations.

    Usage:
        registry = FamilyRegistry()
        mum = registry.create_person("Jane Doe", "FEMALE", 1950)
        son = registry.create_person("John Doe", "MALE", 1980)
        registry.add_parent_child(mum.id, son.id)
        print(registry.render_descendants(mum.id, 2))
    """

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        factory: PersonFactory | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.id_generator = id_generator or (factory.id_generator if factory else IdGenerator())
        self.factory = factory or PersonFactory(self.id_generator)
        self._people: dict[str, Person] = {}
        self._renderer = renderer

        self.traversal = PedigreeTraversal(self._people)
        self.projection = TreeProjection(self)

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._people

    def __len__(self) -> int:
        return len(self._people)

    def __iter__(self) -> Iterator[Person]:
        return iter(list(self._people.values()))

    @property
    def renderer(self) -> Renderer:
        """Default renderer: the injected one, else the configured one."""
        if self._renderer is None:
            from family_tree.render import get_renderer
            self._renderer = get_renderer(CONFIG.renderer)
        return self._renderer

    # ─────────────────────────────────────────
    # People
    # ─────────────────────────────────────────

    def add_person(self, person: Person) -> None:
        if person.id in self._people:
            raise DuplicateIdError(person.id)
        self._people[person.id] = person
        logger.info("person_added", person_id=person.id, name=person.full_name)

    def create_person(
        self,
        full_name: str,
        gender: Gender | str,
        birth_year: int,
        death_year: int | None = None,
    ) -> Person:
        person = self.factory.create_person(full_name, gender, birth_year, death_year)
        self.add_person(person)
        return person

    def get_person(self, person_id: str) -> Person:
        person = self._people.get(person_id)
        if person is None:
            raise NotFoundError(person_id)
        return person

    # ─────────────────────────────────────────
    # Relationships
    # ─────────────────────────────────────────

    def add_parent_child(self, parent_id: str, child_id: str) -> None:
        """Link parent and child, enforcing rules."""
        parent = self.get_person(parent_id)
        child = self.get_person(child_id)

        if self.traversal.is_ancestor(child, parent):
            raise CycleDetectedError(parent_id, child_id)
        if child.has_parent(parent):
            raise ValidationError(
                f"{parent_id} is already a parent of {child_id}", field="parent"
            )
        if len(child.parent_ids) >= 2:
            raise TooManyParentsError(child_id)

        child.add_parent(parent)
        parent.add_child(child)
        logger.info("parent_child_linked", parent_id=parent_id, child_id=child_id)

    def marry(self, person_a_id: str, person_b_id: str, year: int) -> None:
        """Marry two people; both records change or neither does."""
        person_a = self.get_person(person_a_id)
        person_b = self.get_person(person_b_id)

        if person_a == person_b:
            raise ValidationError(f"Person {person_a_id} cannot marry themselves", field="spouse")
        for person in (person_a, person_b):
            if not person.can_marry(year):
                raise AlreadyMarriedError(person.id, person.spouse_id)

        person_a.set_spouse(person_b, year)
        person_b.set_spouse(person_a, year)
        logger.info("married", person_a_id=person_a_id, person_b_id=person_b_id, year=year)

    def divorce(self, person_a_id: str, person_b_id: str, year: int) -> None:
        """Record the end of a marriage on both spouses."""
        person_a = self.get_person(person_a_id)
        person_b = self.get_person(person_b_id)

        if person_a.spouse_id != person_b.id or person_b.spouse_id != person_a.id:
            raise ValidationError(
                f"{person_a_id} and {person_b_id} are not married to each other", field="spouse"
            )
        for person in (person_a, person_b):
            if person.divorce_year is not None:
                raise ValidationError(f"Person {person.id} is not currently married", field="spouse")
            if person.marriage_year is not None and year < person.marriage_year:
                raise ValidationError(
                    f"Divorce year {year} cannot be before marriage year {person.marriage_year}",
                    field="divorce_year",
                )

        person_a.record_divorce(year)
        person_b.record_divorce(year)
        logger.info("divorced", person_a_id=person_a_id, person_b_id=person_b_id, year=year)

    # ─────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────

    def ancestors_of(self, person_id: str, max_generations: int) -> list[Person]:
        """Get ancestors up to specified generations, subject first."""
        return self.traversal.ancestors(self.get_person(person_id), max_generations)

    def descendants_of(self, person_id: str, max_generations: int) -> list[Person]:
        """Get descendants up to specified generations, subject first."""
        return self.traversal.descendants(self.get_person(person_id), max_generations)

    def siblings_of(self, person_id: str) -> set[Person]:
        return self.traversal.siblings(self.get_person(person_id))

    def children_of(self, person_id: str) -> list[Person]:
        return self.traversal.children(self.get_person(person_id))

    def parents_of(self, person_id: str) -> list[Person]:
        return self.traversal.parents(self.get_person(person_id))

    def spouse_of(self, person_id: str) -> Person | None:
        person = self.get_person(person_id)
        return self._people[person.spouse_id] if person.spouse_id is not None else None

    # ─────────────────────────────────────────
    # Projection and rendering
    # ─────────────────────────────────────────

    def ancestor_tree(self, person_id: str, generations: int) -> TreeNode:
        return self.projection.ancestor_tree(self.get_person(person_id), generations)

    def descendant_tree(self, person_id: str, generations: int) -> TreeNode:
        return self.projection.descendant_tree(self.get_person(person_id), generations)

    def render_ancestors(
        self, person_id: str, generations: int, renderer: Renderer | None = None
    ) -> str:
        return (renderer or self.renderer).render(self.ancestor_tree(person_id, generations))

    def render_descendants(
        self, person_id: str, generations: int, renderer: Renderer | None = None
    ) -> str:
        return (renderer or self.renderer).render(self.descendant_tree(person_id, generations))
