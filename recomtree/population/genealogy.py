"""Arena that owns every node of a genealogy."""

from __future__ import annotations

import itertools
import logging
from typing import Iterator

import numpy as np
from numpy.random import Generator

from recomtree.config import Config
from recomtree.errors import PreconditionError, StaleHandleError, StructuralError
from recomtree.population.node import GenealogyNode
from recomtree.population.payload import Recombineable

logger = logging.getLogger(__name__)

_ID_LOW = int(np.iinfo(np.int64).min)
_ID_HIGH = int(np.iinfo(np.int64).max)


class Genealogy:
    """Node arena, tree view, and owner of the shared random generator.

    Nodes are addressed by integer handles that stay valid until the node is
    reclaimed. The generator passed in here is the single randomness source
    for node ids and, unless a caller supplies another, for recombination.
    """

    def __init__(self, rng: Generator, config: type[Config] | None = None) -> None:
        self.rng = rng
        self.config = config or Config
        self._nodes: dict[int, GenealogyNode] = {}
        self._handles = itertools.count()
        self._root_handle: int | None = None

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return (
            isinstance(node, GenealogyNode)
            and self._nodes.get(node.handle) is node
        )

    def __iter__(self) -> Iterator[GenealogyNode]:
        return iter(list(self._nodes.values()))

    def __getitem__(self, handle: int) -> GenealogyNode:
        return self.node(handle)

    def node(self, handle: int) -> GenealogyNode:
        """Resolve a handle to its node."""
        try:
            return self._nodes[handle]
        except KeyError:
            raise StaleHandleError(f"handle {handle} does not name a live node") from None

    def _draw_id(self) -> int:
        return int(self.rng.integers(_ID_LOW, _ID_HIGH, dtype=np.int64))

    def create_node(
        self,
        payload: Recombineable | None = None,
        parent: GenealogyNode | None = None,
    ) -> GenealogyNode:
        """Allocate a node, optionally linking it under ``parent``."""
        handle = next(self._handles)
        node = GenealogyNode(self, handle, self._draw_id(), payload=payload)
        self._nodes[handle] = node
        if parent is not None:
            self.link(parent, node)
        return node

    def link(self, parent: GenealogyNode, child: GenealogyNode) -> None:
        """Make ``child`` an offspring of ``parent`` and set its back-reference."""
        if child.parent_handle is not None:
            raise PreconditionError(
                f"{child.readable_id} already has parent handle {child.parent_handle}"
            )
        if child.handle == self._root_handle:
            raise PreconditionError("the root cannot be given a parent")
        parent.add_offspring(child)
        child.set_parent(parent)

    # Tree view

    @property
    def root(self) -> GenealogyNode | None:
        return self.get_root()

    def get_root(self) -> GenealogyNode | None:
        if self._root_handle is None:
            return None
        return self.node(self._root_handle)

    def set_root(self, node: GenealogyNode) -> None:
        if node not in self:
            raise PreconditionError(f"{node.readable_id} is not in this genealogy")
        if node.parent_handle is not None:
            raise PreconditionError("the root must not have a parent")
        self._root_handle = node.handle

    def get_tips(self) -> list[GenealogyNode]:
        """Return every tip reachable from the root, in depth-first order."""
        root = self.get_root()
        if root is None:
            return []
        tips: list[GenealogyNode] = []
        stack = [root]
        while stack:
            current = stack.pop()
            if current.is_tip():
                tips.append(current)
            else:
                stack.extend(reversed(current.children))
        return tips

    @staticmethod
    def nodes_to_root(node: GenealogyNode) -> int:
        return node.distance_to_root()

    def replace(self, old: GenealogyNode, new: GenealogyNode) -> None:
        """Put ``new`` in the tree position held by ``old``.

        ``new`` is typically ``old.complete_copy()``. It takes over ``old``'s
        parent slot, offspring, and recombination partner. Afterwards ``old``
        is detached with no links and may be reclaimed.
        """
        if old is new:
            return
        if new not in self or old not in self:
            raise PreconditionError("both nodes must belong to this genealogy")
        if new.handle == self._root_handle:
            raise PreconditionError(f"{new.readable_id} is the root")
        new_parent = new.get_parent()
        if new_parent is not None and new_parent.offspring_index(new) is not None:
            raise PreconditionError(
                f"{new.readable_id} is already an offspring of {new_parent.readable_id}"
            )
        if new.has_recombination():
            raise PreconditionError(f"{new.readable_id} already has a recombination partner")

        parent = old.get_parent()
        if parent is not None:
            index = parent.offspring_index(old)
            if index is None:
                raise StructuralError(
                    f"{old.readable_id} is not listed among its parent's offspring"
                )
            parent.offspring[index] = new.handle
        new.parent_handle = old.parent_handle
        new.offspring = list(old.offspring)
        for child in new.children:
            child.parent_handle = new.handle

        partner = old.recombination_partner
        if partner is not None:
            new.partner_handle = partner.handle
            new.breakpoint_min = old.breakpoint_min
            new.breakpoint_max = old.breakpoint_max
            partner.partner_handle = new.handle

        if self._root_handle == old.handle:
            self._root_handle = new.handle
        old.offspring = []
        old.clear_references()

    @staticmethod
    def subtree(node: GenealogyNode) -> list[GenealogyNode]:
        """``node`` and every node below it."""
        nodes = []
        stack = [node]
        while stack:
            current = stack.pop()
            nodes.append(current)
            stack.extend(current.children)
        return nodes

    def reclaim(self, node: GenealogyNode) -> int:
        """Invalidate the handles of a detached subtree; return how many."""
        if node.parent_handle is not None or node.handle == self._root_handle:
            raise StructuralError(
                f"cannot reclaim {node.readable_id}: it is still attached"
            )
        nodes = self.subtree(node)
        preserved = [n for n in nodes if n.preserve]
        if preserved:
            raise StructuralError(
                f"cannot reclaim {node.readable_id}: subtree holds preserved "
                f"node {preserved[0].readable_id}"
            )
        for current in nodes:
            current.offspring = []
            current.clear_references()
            del self._nodes[current.handle]
        logger.debug("Reclaimed %d node(s) below %s", len(nodes), node.readable_id)
        return len(nodes)
