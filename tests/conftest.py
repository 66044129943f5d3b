"""Shared fixtures: registries with isolated id counters and a fixed reference year."""
from __future__ import annotations

import pytest

from family_tree.graph.registry import FamilyRegistry
from family_tree.ids import IdGenerator
from family_tree.models.factory import PersonFactory
from family_tree.render import IndentedTreeRenderer

REFERENCE_YEAR = 2025


def make_registry() -> FamilyRegistry:
    factory = PersonFactory(IdGenerator(prefix="P", width=3), reference_year=REFERENCE_YEAR, adult_age=18)
    return FamilyRegistry(factory=factory, renderer=IndentedTreeRenderer())


@pytest.fixture()
def registry() -> FamilyRegistry:
    return make_registry()


@pytest.fixture()
def chain(registry: FamilyRegistry):
    """Grandparent -> Parent -> Child, ids P001..P003."""
    grandparent = registry.create_person("Grandparent", "MALE", 1950)
    parent = registry.create_person("Parent", "FEMALE", 1975)
    child = registry.create_person("Child", "MALE", 2000)
    registry.add_parent_child(grandparent.id, parent.id)
    registry.add_parent_child(parent.id, child.id)
    return grandparent, parent, child


@pytest.fixture()
def collapsed(registry: FamilyRegistry):
    """Pedigree collapse: cousins A and B share grandparent G and have child C.

    G -> X -> A, G -> Y -> B, A + B -> C
    """
    g = registry.create_person("Gideon Root", "MALE", 1900)
    x = registry.create_person("Xavier Root", "MALE", 1925)
    y = registry.create_person("Yvonne Root", "FEMALE", 1927)
    a = registry.create_person("Adam Root", "MALE", 1950)
    b = registry.create_person("Beth Root", "FEMALE", 1952)
    c = registry.create_person("Cora Root", "FEMALE", 1980)
    registry.add_parent_child(g.id, x.id)
    registry.add_parent_child(g.id, y.id)
    registry.add_parent_child(x.id, a.id)
    registry.add_parent_child(y.id, b.id)
    registry.add_parent_child(a.id, c.id)
    registry.add_parent_child(b.id, c.id)
    return {"G": g, "X": x, "Y": y, "A": a, "B": b, "C": c}


@pytest.fixture()
def registry_factory():
    return make_registry
