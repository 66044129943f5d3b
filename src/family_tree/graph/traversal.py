"""Pedigree traversal over the family graph.

Provides the graph walks behind the registry queries:
- Ancestor walk (parents, grandparents, etc.)
- Descendant walk (children, grandchildren, etc.)
- Sibling derivation through shared parents
- Ancestry test used for cycle prevention

The graph is a DAG rather than a tree once two parents can share an
ancestor (pedigree collapse), so every walk remembers whom it has seen.
"""
from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Mapping

from family_tree.exceptions import ValidationError
from family_tree.logging import get_logger
from family_tree.models.person import Person

logger = get_logger(__name__)


class PedigreeTraversal:
    """Genealogical graph traversal engine.

    Works on the registry's id -> Person mapping and never mutates it.

    Example:
        >>> traversal = PedigreeTraversal(people)
        >>> [p.id for p in traversal.ancestors(child, max_generations=2)]
        ['P003', 'P002', 'P001']
    """

    def __init__(self, people: Mapping[str, Person]) -> None:
        """Initialize traversal engine.

        Args:
            people: Identifier to person mapping owned by the registry
        """
        self.people = people

    def parents(self, person: Person) -> list[Person]:
        """Parents in slot order (parent1 first)."""
        return [self.people[pid] for pid in person.parent_ids]

    def children(self, person: Person) -> list[Person]:
        """Children in insertion order."""
        return [self.people[cid] for cid in person.child_ids]

    def is_ancestor(self, candidate: Person, person: Person) -> bool:
        """Check whether ``candidate`` is ``person`` or one of its ancestors.

        Breadth-first search upward through parent edges.
        """
        if candidate == person:
            return True

        visited: set[str] = set()
        queue: deque[Person] = deque([person])

        while queue:
            current = queue.popleft()
            if current.id in visited:
                continue
            visited.add(current.id)

            if current == candidate:
                return True

            queue.extend(self.parents(current))

        return False

    def ancestors(self, person: Person, max_generations: int) -> list[Person]:
        """Subject plus ancestors up to ``max_generations`` hops.

        Depth-first pre-order, parent1 subtree before parent2 subtree.

        Args:
            person: Subject of the walk (generation 0)
            max_generations: Maximum parent hops (0 returns only the subject)

        Returns:
            Deduplicated list of people in visit order
        """
        return self._walk(person, max_generations, self.parents)

    def descendants(self, person: Person, max_generations: int) -> list[Person]:
        """Subject plus descendants up to ``max_generations`` hops.

        Depth-first pre-order following children in insertion order.
        """
        return self._walk(person, max_generations, self.children)

    def siblings(self, person: Person) -> set[Person]:
        """People sharing at least one parent with ``person``.

        Full and half siblings are treated alike.
        """
        siblings: set[Person] = set()
        for parent in self.parents(person):
            for child in self.children(parent):
                if child != person:
                    siblings.add(child)
        return siblings

    def _walk(
        self,
        person: Person,
        max_generations: int,
        expand: Callable[[Person], Iterable[Person]],
    ) -> list[Person]:
        if max_generations < 0:
            raise ValidationError(
                f"Generations must be zero or more, got {max_generations}", field="generations"
            )

        result: list[Person] = []
        # id -> largest remaining budget seen; a shorter path re-expands a visited person
        best_remaining: dict[str, int] = {}
        # Explicit stack; next relatives are pushed reversed so the first is visited first
        stack: list[tuple[Person, int]] = [(person, max_generations)]

        while stack:
            current, remaining = stack.pop()
            seen = best_remaining.get(current.id)
            if seen is not None and seen >= remaining:
                continue
            if seen is None:
                result.append(current)
            best_remaining[current.id] = remaining

            if remaining > 0:
                for relative in reversed(list(expand(current))):
                    stack.append((relative, remaining - 1))

        logger.debug(
            "pedigree_walk",
            person_id=person.id,
            max_generations=max_generations,
            total_persons=len(result),
        )
        return result
