"""Renderer protocol shared by all tree formatters."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from family_tree.graph.projection import TreeNode
from family_tree.models.person import PersonSummary


@runtime_checkable
class Renderer(Protocol):
    """Anything that maps a tree snapshot to text."""

    def render(self, root: TreeNode) -> str:
        ...


def life_span(person: PersonSummary) -> str:
    """``b.1950`` or ``b.1950, d.2010``."""
    text = f"b.{person.birth_year}"
    if person.death_year is not None:
        text += f", d.{person.death_year}"
    return text
