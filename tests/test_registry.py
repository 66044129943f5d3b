"""Tests for FamilyRegistry mutations and queries."""
from __future__ import annotations

import pytest

from family_tree.exceptions import (
    AlreadyMarriedError,
    CycleDetectedError,
    DuplicateIdError,
    NotFoundError,
    TooManyParentsError,
    ValidationError,
)
from family_tree.graph.registry import FamilyRegistry
from family_tree.models import Gender, Person


def ids(people) -> list[str]:
    return [p.id for p in people]


class TestPeople:
    def test_create_and_get(self, registry: FamilyRegistry):
        person = registry.create_person("John Doe", "MALE", 1980)

        retrieved = registry.get_person(person.id)
        assert retrieved is person
        assert retrieved.full_name == "John Doe"
        assert retrieved.gender == Gender.MALE
        assert retrieved.birth_year == 1980
        assert person.id in registry
        assert len(registry) == 1

    def test_add_person_duplicate(self, registry: FamilyRegistry):
        registry.add_person(Person.create(id="X1", full_name="A", gender="OTHER", birth_year=1990))
        with pytest.raises(DuplicateIdError):
            registry.add_person(Person.create(id="X1", full_name="B", gender="OTHER", birth_year=1991))
        assert registry.get_person("X1").full_name == "A"

    def test_iteration_in_registration_order(self, registry: FamilyRegistry):
        for name in ("A", "B", "C"):
            registry.create_person(name, "OTHER", 1990)
        assert ids(registry) == ["P001", "P002", "P003"]

    def test_registries_have_independent_counters(self, registry_factory):
        first, second = registry_factory(), registry_factory()
        first.create_person("A", "MALE", 1990)
        first.create_person("B", "MALE", 1990)
        assert second.create_person("C", "MALE", 1990).id == "P001"

    @pytest.mark.parametrize(
        "query",
        [
            lambda r: r.get_person("UNKNOWN"),
            lambda r: r.siblings_of("UNKNOWN"),
            lambda r: r.children_of("UNKNOWN"),
            lambda r: r.parents_of("UNKNOWN"),
            lambda r: r.spouse_of("UNKNOWN"),
            lambda r: r.ancestors_of("UNKNOWN", 2),
            lambda r: r.descendants_of("UNKNOWN", 2),
            lambda r: r.render_ancestors("UNKNOWN", 2),
        ],
    )
    def test_unknown_id(self, registry: FamilyRegistry, query):
        with pytest.raises(NotFoundError) as exc_info:
            query(registry)
        assert exc_info.value.person_id == "UNKNOWN"


class TestParentChild:
    """Tests for add_parent_child invariants."""

    def test_link_is_reciprocal(self, registry: FamilyRegistry):
        parent = registry.create_person("Parent", "FEMALE", 1970)
        child = registry.create_person("Child", "MALE", 2000)

        registry.add_parent_child(parent.id, child.id)

        assert child.has_parent(parent)
        assert registry.children_of(parent.id) == [child]
        assert registry.parents_of(child.id) == [parent]

    def test_link_unknown_child(self, registry: FamilyRegistry):
        parent = registry.create_person("Parent", "FEMALE", 1970)
        with pytest.raises(NotFoundError):
            registry.add_parent_child(parent.id, "P999")
        assert parent.child_ids == []

    def test_max_two_parents(self, registry: FamilyRegistry):
        p1 = registry.create_person("Parent1", "FEMALE", 1970)
        p2 = registry.create_person("Parent2", "MALE", 1970)
        p3 = registry.create_person("Parent3", "MALE", 1970)
        child = registry.create_person("Child", "MALE", 2000)
        registry.add_parent_child(p1.id, child.id)
        registry.add_parent_child(p2.id, child.id)

        with pytest.raises(TooManyParentsError):
            registry.add_parent_child(p3.id, child.id)

        assert child.parent_ids == [p1.id, p2.id]
        assert p3.child_ids == []

    def test_same_parent_twice_rejected(self, registry: FamilyRegistry):
        parent = registry.create_person("Parent", "FEMALE", 1970)
        child = registry.create_person("Child", "MALE", 2000)
        registry.add_parent_child(parent.id, child.id)

        with pytest.raises(ValidationError):
            registry.add_parent_child(parent.id, child.id)

        assert child.parent_ids == [parent.id]

    def test_cycle_prevention(self, registry: FamilyRegistry, chain):
        grandparent, parent, child = chain

        with pytest.raises(CycleDetectedError) as exc_info:
            registry.add_parent_child(child.id, grandparent.id)

        assert exc_info.value.parent_id == child.id
        assert exc_info.value.child_id == grandparent.id
        assert grandparent.parent_ids == []
        assert child.child_ids == []

    def test_direct_cycle(self, registry: FamilyRegistry, chain):
        _, parent, child = chain
        with pytest.raises(CycleDetectedError):
            registry.add_parent_child(child.id, parent.id)

    def test_self_parent(self, registry: FamilyRegistry):
        person = registry.create_person("Solo", "OTHER", 1990)
        with pytest.raises(CycleDetectedError):
            registry.add_parent_child(person.id, person.id)
        assert person.parent_ids == []

    def test_shared_ancestor_is_not_a_cycle(self, registry: FamilyRegistry, collapsed):
        extra = registry.create_person("Late Child", "MALE", 2005)
        registry.add_parent_child(collapsed["C"].id, extra.id)
        assert registry.parents_of(extra.id) == [collapsed["C"]]


class TestMarriage:
    def test_marriage(self, registry: FamilyRegistry):
        a = registry.create_person("Person1", "MALE", 1980)
        b = registry.create_person("Person2", "FEMALE", 1982)

        registry.marry(a.id, b.id, 2010)

        assert registry.spouse_of(a.id) is b
        assert registry.spouse_of(b.id) is a
        assert a.marriage_year == b.marriage_year == 2010

    def test_spouse_of_unmarried(self, registry: FamilyRegistry):
        a = registry.create_person("Single", "MALE", 1980)
        assert registry.spouse_of(a.id) is None

    def test_prevent_double_marriage(self, registry: FamilyRegistry):
        a = registry.create_person("Person1", "MALE", 1980)
        b = registry.create_person("Person2", "FEMALE", 1982)
        c = registry.create_person("Person3", "FEMALE", 1985)
        registry.marry(a.id, b.id, 2010)

        with pytest.raises(AlreadyMarriedError):
            registry.marry(a.id, c.id, 2015)

        assert (a.spouse_id, a.marriage_year) == (b.id, 2010)
        assert (b.spouse_id, b.marriage_year) == (a.id, 2010)
        assert c.spouse_id is None
        assert c.marriage_year is None

    def test_rejected_when_second_party_married(self, registry: FamilyRegistry):
        a = registry.create_person("Free", "MALE", 1980)
        b = registry.create_person("Taken", "FEMALE", 1982)
        c = registry.create_person("Spouse", "MALE", 1981)
        registry.marry(b.id, c.id, 2005)

        with pytest.raises(AlreadyMarriedError):
            registry.marry(a.id, b.id, 2010)

        assert a.spouse_id is None
        assert b.spouse_id == c.id

    def test_cannot_marry_self(self, registry: FamilyRegistry):
        a = registry.create_person("Solo", "OTHER", 1980)
        with pytest.raises(ValidationError):
            registry.marry(a.id, a.id, 2010)
        assert a.spouse_id is None

    def test_divorce_and_remarry(self, registry: FamilyRegistry):
        a = registry.create_person("Person1", "MALE", 1980)
        b = registry.create_person("Person2", "FEMALE", 1982)
        c = registry.create_person("Person3", "FEMALE", 1985)
        registry.marry(a.id, b.id, 2005)

        registry.divorce(a.id, b.id, 2012)
        registry.marry(a.id, c.id, 2015)

        assert a.spouse_id == c.id
        assert c.spouse_id == a.id
        assert a.marriage_year == 2015
        assert b.divorce_year == 2012

    def test_divorce_requires_mutual_marriage(self, registry: FamilyRegistry):
        a = registry.create_person("Person1", "MALE", 1980)
        b = registry.create_person("Person2", "FEMALE", 1982)
        with pytest.raises(ValidationError, match="not married to each other"):
            registry.divorce(a.id, b.id, 2012)

    def test_divorce_before_marriage_leaves_both_untouched(self, registry: FamilyRegistry):
        a = registry.create_person("Person1", "MALE", 1980)
        b = registry.create_person("Person2", "FEMALE", 1982)
        registry.marry(a.id, b.id, 2005)

        with pytest.raises(ValidationError):
            registry.divorce(a.id, b.id, 2000)

        assert a.divorce_year is None
        assert b.divorce_year is None


class TestSiblings:
    def test_siblings(self, registry: FamilyRegistry):
        parent = registry.create_person("Parent", "FEMALE", 1970)
        c1 = registry.create_person("Child1", "MALE", 2000)
        c2 = registry.create_person("Child2", "FEMALE", 2002)
        registry.add_parent_child(parent.id, c1.id)
        registry.add_parent_child(parent.id, c2.id)

        assert registry.siblings_of(c1.id) == {c2}
        assert registry.siblings_of(c2.id) == {c1}

    def test_full_and_half_siblings_deduplicated(self, registry: FamilyRegistry):
        mum = registry.create_person("Mum", "FEMALE", 1970)
        dad = registry.create_person("Dad", "MALE", 1968)
        step = registry.create_person("Other Parent", "MALE", 1965)
        subject = registry.create_person("Subject", "FEMALE", 2000)
        full = registry.create_person("Full", "MALE", 2002)
        half = registry.create_person("Half", "MALE", 1995)

        # Deliberately mixed link order
        registry.add_parent_child(mum.id, full.id)
        registry.add_parent_child(step.id, half.id)
        registry.add_parent_child(dad.id, subject.id)
        registry.add_parent_child(mum.id, half.id)
        registry.add_parent_child(dad.id, full.id)
        registry.add_parent_child(mum.id, subject.id)

        siblings = registry.siblings_of(subject.id)

        assert siblings == {full, half}
        assert subject not in siblings

    def test_no_parents_no_siblings(self, registry: FamilyRegistry):
        orphan = registry.create_person("Orphan", "OTHER", 1990)
        assert registry.siblings_of(orphan.id) == set()


class TestPedigreeQueries:
    def test_ancestors(self, registry: FamilyRegistry, chain):
        grandparent, parent, child = chain

        ancestors = registry.ancestors_of(child.id, 2)

        assert ancestors == [child, parent, grandparent]

    def test_descendants(self, registry: FamilyRegistry, chain):
        grandparent, parent, child = chain

        descendants = registry.descendants_of(grandparent.id, 2)

        assert descendants == [grandparent, parent, child]

    def test_generation_bound(self, registry: FamilyRegistry, chain):
        grandparent, parent, child = chain
        assert registry.ancestors_of(child.id, 1) == [child, parent]
        assert registry.descendants_of(grandparent.id, 0) == [grandparent]

    def test_negative_generations(self, registry: FamilyRegistry, chain):
        _, _, child = chain
        with pytest.raises(ValidationError):
            registry.ancestors_of(child.id, -1)

    def test_ancestor_order_parent1_first(self, registry: FamilyRegistry):
        child = registry.create_person("Child", "FEMALE", 2000)
        mum = registry.create_person("Mum", "FEMALE", 1970)
        dad = registry.create_person("Dad", "MALE", 1968)
        mum_mum = registry.create_person("Mum's Mum", "FEMALE", 1945)
        mum_dad = registry.create_person("Mum's Dad", "MALE", 1940)
        dad_dad = registry.create_person("Dad's Dad", "MALE", 1938)
        registry.add_parent_child(mum.id, child.id)
        registry.add_parent_child(dad.id, child.id)
        registry.add_parent_child(mum_mum.id, mum.id)
        registry.add_parent_child(mum_dad.id, mum.id)
        registry.add_parent_child(dad_dad.id, dad.id)

        ancestors = registry.ancestors_of(child.id, 5)

        assert ancestors == [child, mum, mum_mum, mum_dad, dad, dad_dad]

    def test_descendant_order_follows_insertion(self, registry: FamilyRegistry):
        root = registry.create_person("Root", "MALE", 1940)
        second = registry.create_person("Second", "MALE", 1968)
        first = registry.create_person("First", "FEMALE", 1965)
        grandchild = registry.create_person("Grandchild", "FEMALE", 1995)
        registry.add_parent_child(root.id, first.id)
        registry.add_parent_child(root.id, second.id)
        registry.add_parent_child(first.id, grandchild.id)

        assert registry.descendants_of(root.id, 3) == [root, first, grandchild, second]

    def test_pedigree_collapse_deduplicated(self, registry: FamilyRegistry, collapsed):
        c = collapsed

        ancestors = registry.ancestors_of(c["C"].id, 3)

        assert ids(ancestors) == ids([c["C"], c["A"], c["X"], c["G"], c["B"], c["Y"]])
        assert len(ancestors) == len(set(ancestors))

    def test_ancestor_reached_by_shorter_path_is_expanded(self, registry: FamilyRegistry):
        """A person first reached at the generation limit still counts via a closer route."""
        g = registry.create_person("Great", "MALE", 1900)
        b = registry.create_person("Grand", "MALE", 1930)
        a = registry.create_person("Parent", "FEMALE", 1955)
        c = registry.create_person("Child", "FEMALE", 1980)
        registry.add_parent_child(g.id, b.id)
        registry.add_parent_child(b.id, a.id)
        registry.add_parent_child(a.id, c.id)
        registry.add_parent_child(b.id, c.id)

        ancestors = registry.ancestors_of(c.id, 2)

        assert ids(ancestors) == [c.id, a.id, b.id, g.id]

    def test_descendant_reached_by_shorter_path_is_expanded(self, registry: FamilyRegistry):
        root = registry.create_person("Root", "MALE", 1900)
        x = registry.create_person("X", "MALE", 1925)
        y = registry.create_person("Y", "FEMALE", 1950)
        z = registry.create_person("Z", "FEMALE", 1975)
        registry.add_parent_child(root.id, x.id)
        registry.add_parent_child(root.id, y.id)
        registry.add_parent_child(x.id, y.id)
        registry.add_parent_child(y.id, z.id)

        descendants = registry.descendants_of(root.id, 2)

        assert ids(descendants) == [root.id, x.id, y.id, z.id]

    def test_descendants_with_collapse_deduplicated(self, registry: FamilyRegistry, collapsed):
        c = collapsed

        descendants = registry.descendants_of(c["G"].id, 3)

        assert ids(descendants) == ids([c["G"], c["X"], c["A"], c["C"], c["Y"], c["B"]])
