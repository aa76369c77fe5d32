"""Unit tests for genealogy nodes and the node arena."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from recomtree.config import Config
from recomtree.errors import PreconditionError, StaleHandleError, StructuralError
from recomtree.population.ancestry import AncestryResolver
from recomtree.population.genealogy import Genealogy
from recomtree.population.payload import ArrayPayload
from recomtree.population.recombination import RecombinationEngine


@pytest.fixture
def rng() -> Generator:
    """Seeded random generator."""

    return np.random.default_rng(seed=42)


@pytest.fixture
def genealogy(rng: Generator) -> Genealogy:
    return Genealogy(rng)


class TestArrayPayload:
    """Tests for ArrayPayload."""

    def test_regions_are_copies(self) -> None:
        payload = ArrayPayload([0, 1, 2, 3, 0, 1])
        region = payload.get_region(1, 4)
        region[:] = 0
        assert payload.symbols.tolist() == [0, 1, 2, 3, 0, 1]

    def test_set_region_checks_shape(self) -> None:
        payload = ArrayPayload.constant(6)
        with pytest.raises(ValueError):
            payload.set_region(0, 3, np.array([1, 2], dtype=np.uint8))
        with pytest.raises(ValueError):
            payload.get_region(4, 8)

    def test_random_symbols_in_range(self, rng: Generator) -> None:
        payload = ArrayPayload.random(200, rng)
        assert payload.length() == 200
        assert payload.symbols.max() < ArrayPayload.NUM_SYMBOLS

    def test_copy_is_deep(self) -> None:
        payload = ArrayPayload([1, 1, 1])
        clone = payload.copy()
        clone.set_region(0, 1, np.array([3], dtype=np.uint8))
        assert payload.symbols[0] == 1


class TestGenealogyNode:
    """Tests for GenealogyNode topology operations."""

    def test_offspring_add_remove(self, genealogy: Genealogy) -> None:
        parent = genealogy.create_node()
        child = genealogy.create_node()
        parent.add_offspring(child)
        assert not parent.is_tip()
        assert parent.offspring_index(child) == 0
        assert parent.remove_offspring(child) is True
        assert parent.remove_offspring(child) is False
        assert parent.is_tip()
        assert parent.offspring_index(child) is None

    def test_add_offspring_twice_rejected(self, genealogy: Genealogy) -> None:
        parent = genealogy.create_node()
        child = genealogy.create_node(parent=parent)
        with pytest.raises(PreconditionError):
            parent.add_offspring(child)

    def test_link_sets_both_directions(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        child = genealogy.create_node(parent=root)
        assert child.parent is root
        assert root.children == [child]
        assert root.get_offspring(0) is child

    def test_child_cannot_have_two_parents(self, genealogy: Genealogy) -> None:
        first = genealogy.create_node()
        second = genealogy.create_node()
        child = genealogy.create_node(parent=first)
        with pytest.raises(PreconditionError):
            genealogy.link(second, child)
        assert second.is_tip()

    def test_distance_to_root(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        node = root
        for _ in range(4):
            node = genealogy.create_node(parent=node)
        assert root.distance_to_root() == 0
        assert node.distance_to_root() == 4

    def test_nodes_from_other_genealogy_rejected(self, rng: Generator) -> None:
        one = Genealogy(rng).create_node()
        two = Genealogy(rng).create_node()
        with pytest.raises(PreconditionError):
            one.add_offspring(two)
        with pytest.raises(PreconditionError):
            two.set_parent(one)

    def test_ids_drawn_from_generator(self) -> None:
        first = Genealogy(np.random.default_rng(7)).create_node()
        second = Genealogy(np.random.default_rng(7)).create_node()
        assert first.id == second.id

    def test_readable_id(self, genealogy: Genealogy) -> None:
        node = genealogy.create_node()
        node.id = -1234567
        assert node.readable_id == "i12345"
        node.origin_population = 2
        assert node.readable_id == "i12345_p2"

    def test_defaults(self, genealogy: Genealogy) -> None:
        node = genealogy.create_node()
        assert node.preserve is False
        assert node.origin_population == -1
        assert node.depth == -1
        assert node.population == Config.DEFAULT_POPULATION_NAME
        assert node.breakpoint_min == node.breakpoint_max == 0
        assert node.recombination_partner is None


class TestCopies:
    """Tests for data and complete copies."""

    def test_data_copy_has_no_links(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node(payload=ArrayPayload([0, 1, 2, 3]))
        child = genealogy.create_node(payload=ArrayPayload([0, 1, 2, 3]), parent=root)
        genealogy.create_node(parent=child)
        child.origin_population = 3

        clone = child.data_copy()
        assert clone.parent is None
        assert clone.is_tip()
        assert clone.origin_population == 3
        assert clone.id != child.id
        assert clone.payload is not child.payload
        assert np.array_equal(clone.payload.symbols, child.payload.symbols)

    def test_complete_copy_shares_topology(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        node = genealogy.create_node(payload=ArrayPayload([1, 2, 3]), parent=root)
        kid = genealogy.create_node(parent=node)

        clone = node.complete_copy()
        assert clone.parent is root
        assert clone.children == [kid]
        assert kid.parent is node
        assert clone.payload is not node.payload

    def test_replace_moves_tree_position(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        genealogy.set_root(root)
        node = genealogy.create_node(payload=ArrayPayload([1, 2, 3]), parent=root)
        kid = genealogy.create_node(parent=node)

        clone = node.complete_copy()
        genealogy.replace(node, clone)

        assert root.children == [clone]
        assert kid.parent is clone
        assert node.parent is None
        assert node.is_tip()
        assert genealogy.reclaim(node) == 1

    def test_replace_root(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        genealogy.set_root(root)
        kid = genealogy.create_node(parent=root)
        clone = root.complete_copy()
        genealogy.replace(root, clone)
        assert genealogy.root is clone
        assert kid.parent is clone

    def test_replace_carries_recombination_partner(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        genealogy.set_root(root)
        mother = genealogy.create_node(parent=root)
        father = genealogy.create_node(parent=root)
        one = genealogy.create_node(payload=ArrayPayload.constant(10, 1), parent=mother)
        two = genealogy.create_node(payload=ArrayPayload.constant(10, 2), parent=father)
        RecombinationEngine.for_genealogy(genealogy).recombine(one, two)

        clone = one.complete_copy()
        genealogy.replace(one, clone)

        assert clone.recombination_partner is two
        assert two.recombination_partner is clone
        assert (clone.breakpoint_min, clone.breakpoint_max) == (
            two.breakpoint_min,
            two.breakpoint_max,
        )
        assert clone.get_parent_for_site(two.breakpoint_min) is father
        assert one.recombination_partner is None
        assert (one.breakpoint_min, one.breakpoint_max) == (0, 0)
        assert AncestryResolver.tmrca_at_site([clone, two], two.breakpoint_min) == 2
        assert genealogy.reclaim(one) == 1

    def test_replace_rejects_attached_node(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        genealogy.set_root(root)
        node = genealogy.create_node(parent=root)
        other = genealogy.create_node(parent=root)
        with pytest.raises(PreconditionError):
            genealogy.replace(node, other)
        assert root.children == [node, other]
        assert other.parent is root

    def test_replace_rejects_foreign_node(
        self, genealogy: Genealogy, rng: Generator
    ) -> None:
        node = genealogy.create_node()
        stranger = Genealogy(rng).create_node()
        with pytest.raises(PreconditionError):
            genealogy.replace(node, stranger)

    def test_inherit_from_shares_payload(self, genealogy: Genealogy) -> None:
        parent = genealogy.create_node(payload=ArrayPayload([0, 0]))
        child = genealogy.create_node(parent=parent)
        child.inherit_from(parent)
        assert child.payload is parent.payload


class TestGenealogyArena:
    """Tests for the Genealogy arena."""

    def test_tips_depth_first(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        genealogy.set_root(root)
        left = genealogy.create_node(parent=root)
        right = genealogy.create_node(parent=root)
        left_a = genealogy.create_node(parent=left)
        left_b = genealogy.create_node(parent=left)
        assert genealogy.get_tips() == [left_a, left_b, right]

    def test_empty_genealogy(self, genealogy: Genealogy) -> None:
        assert genealogy.get_root() is None
        assert genealogy.get_tips() == []

    def test_root_must_be_parentless(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        child = genealogy.create_node(parent=root)
        with pytest.raises(PreconditionError):
            genealogy.set_root(child)
        genealogy.set_root(root)
        with pytest.raises(PreconditionError):
            genealogy.link(child, root)

    def test_reclaim_invalidates_subtree(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        genealogy.set_root(root)
        branch = genealogy.create_node(parent=root)
        leaf = genealogy.create_node(parent=branch)
        handle = leaf.handle

        root.remove_offspring(branch)
        branch.set_parent(None)
        assert genealogy.reclaim(branch) == 2
        assert len(genealogy) == 1
        assert branch not in genealogy
        with pytest.raises(StaleHandleError):
            genealogy.node(handle)

    def test_reclaim_attached_node_fails(self, genealogy: Genealogy) -> None:
        root = genealogy.create_node()
        genealogy.set_root(root)
        child = genealogy.create_node(parent=root)
        with pytest.raises(StructuralError):
            genealogy.reclaim(child)
        with pytest.raises(StructuralError):
            genealogy.reclaim(root)

    def test_handles_are_stable(self, genealogy: Genealogy) -> None:
        nodes = [genealogy.create_node() for _ in range(5)]
        genealogy.reclaim(nodes[1])
        for node in (nodes[0], nodes[2], nodes[4]):
            assert genealogy[node.handle] is node
        assert len({n.handle for n in nodes}) == 5
