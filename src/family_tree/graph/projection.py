"""Tree projection of the family graph.

Materializes a bounded, renderable snapshot rooted at one person:
- Descendant view: each node's children are the person's children
- Ancestor view: each node's children are the person's parents

The snapshot holds PersonSummary copies, so later registry mutations do
not show up in an already built tree. There is no dedup at this layer: a
person reachable through two paths appears once per path.
"""
from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from family_tree.exceptions import ValidationError
from family_tree.models.person import Person, PersonSummary

if TYPE_CHECKING:
    from family_tree.graph.registry import FamilyRegistry


@dataclass
class TreeNode:
    """A node in a tree snapshot; composite of child nodes."""
    person: PersonSummary
    children: list[TreeNode] = field(default_factory=list)

    def add_child(self, child: TreeNode) -> None:
        if not any(existing is child for existing in self.children):
            self.children.append(child)

    def has_children(self) -> bool:
        return bool(self.children)

    def traverse(self, visitor: Callable[[TreeNode], None]) -> None:
        """Apply ``visitor`` to this node and every node below, pre-order."""
        for node in self.iter_nodes():
            visitor(node)

    def iter_nodes(self) -> Iterator[TreeNode]:
        stack: list[TreeNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_with_depth(self) -> Iterator[tuple[TreeNode, int]]:
        """Pre-order pairs of (node, depth), the root at depth 0."""
        stack: list[tuple[TreeNode, int]] = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            stack.extend((child, depth + 1) for child in reversed(node.children))

    def size(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def depth(self) -> int:
        """Number of edges on the longest root-to-leaf path."""
        return max(d for _, d in self.iter_with_depth())


class TreeProjection:
    """Builds tree snapshots from a registry.

    Example:
        >>> projection = TreeProjection(registry)
        >>> tree = projection.descendant_tree(registry.get_person("P001"), 2)
        >>> tree.size()
        3
    """

    def __init__(self, registry: FamilyRegistry) -> None:
        self.registry = registry

    def descendant_tree(self, root: Person, generations: int) -> TreeNode:
        _check_generations(generations)
        return self._build(root, generations, self.registry.children_of)

    def ancestor_tree(self, root: Person, generations: int) -> TreeNode:
        _check_generations(generations)
        return self._build(root, generations, self.registry.parents_of)

    def _build(
        self,
        person: Person,
        generations: int,
        relatives_of: Callable[[str], list[Person]],
    ) -> TreeNode:
        node = TreeNode(person.summary())
        if generations > 0:
            for relative in relatives_of(person.id):
                node.add_child(self._build(relative, generations - 1, relatives_of))
        return node


def _check_generations(generations: int) -> None:
    if generations < 0:
        raise ValidationError(
            f"Generations must be zero or more, got {generations}", field="generations"
        )


def build_descendant_tree(registry: FamilyRegistry, root: Person, generations: int) -> TreeNode:
    return TreeProjection(registry).descendant_tree(root, generations)


def build_ancestor_tree(registry: FamilyRegistry, root: Person, generations: int) -> TreeNode:
    return TreeProjection(registry).ancestor_tree(root, generations)
