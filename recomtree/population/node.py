"""A single individual in the genealogy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recomtree.errors import PreconditionError
from recomtree.population.payload import Recombineable
from recomtree.population.pruning import TreePruner

if TYPE_CHECKING:
    from recomtree.population.genealogy import Genealogy


class GenealogyNode:
    """A potentially recombining locus in the genealogy.

    Nodes live in a :class:`Genealogy` arena and refer to each other by
    handle. ``parent`` and ``recombination_partner`` are non-owning handles;
    ``offspring`` is the owning list of child handles. For a site in
    ``[breakpoint_min, breakpoint_max)`` the genetic parent of this node is
    the parent of its recombination partner rather than its own parent.
    """

    def __init__(
        self,
        genealogy: "Genealogy",
        handle: int,
        node_id: int,
        payload: Recombineable | None = None,
    ) -> None:
        self.genealogy = genealogy
        self.handle = handle
        self.id = int(node_id)
        self.payload = payload

        self.parent_handle: int | None = None
        self.offspring: list[int] = []

        self.partner_handle: int | None = None
        self.breakpoint_min = 0
        self.breakpoint_max = 0

        self.preserve = False
        self.origin_population = -1
        self.population = genealogy.config.DEFAULT_POPULATION_NAME
        self.label: str | None = None
        self.depth = -1

    # Topology

    @property
    def parent(self) -> GenealogyNode | None:
        return self.get_parent()

    def get_parent(self) -> GenealogyNode | None:
        if self.parent_handle is None:
            return None
        return self.genealogy.node(self.parent_handle)

    def set_parent(self, parent: GenealogyNode | None) -> None:
        """Set the parent back-reference without touching offspring lists."""
        if parent is None:
            self.parent_handle = None
            return
        self._check_same_genealogy(parent)
        self.parent_handle = parent.handle

    @property
    def children(self) -> list[GenealogyNode]:
        return [self.genealogy.node(h) for h in self.offspring]

    def get_offspring(self, which: int) -> GenealogyNode:
        return self.genealogy.node(self.offspring[which])

    def add_offspring(self, child: GenealogyNode) -> None:
        self._check_same_genealogy(child)
        if child.handle in self.offspring:
            raise PreconditionError(
                f"{child.readable_id} is already an offspring of {self.readable_id}"
            )
        self.offspring.append(child.handle)

    def remove_offspring(self, child: GenealogyNode) -> bool:
        """Remove ``child`` from the offspring list, if it is there."""
        try:
            self.offspring.remove(child.handle)
        except ValueError:
            return False
        return True

    def num_offspring(self) -> int:
        return len(self.offspring)

    def offspring_index(self, child: GenealogyNode) -> int | None:
        """Index of ``child`` among the offspring, or None if not a child."""
        try:
            return self.offspring.index(child.handle)
        except ValueError:
            return None

    def is_tip(self) -> bool:
        return not self.offspring

    def distance_to_root(self) -> int:
        """Number of parent hops between this node and the root."""
        dist = 0
        ref = self
        while ref.parent_handle is not None:
            dist += 1
            ref = ref.genealogy.node(ref.parent_handle)
        return dist

    def prune_upward(self) -> GenealogyNode | None:
        """Detach this node and its dead single-child ancestor chain."""
        return TreePruner.prune(self)

    # Copies

    def data_copy(self) -> GenealogyNode:
        """Return a new unlinked node carrying a deep copy of the payload."""
        payload = self.payload.copy() if self.payload is not None else None
        node = self.genealogy.create_node(payload=payload)
        node.origin_population = self.origin_population
        node.population = self.population
        return node

    def rebind_topology(self, source: GenealogyNode) -> None:
        """Point at the same parent and offspring handles as ``source``.

        Topology is shared, not copied: the offspring handles are the same
        nodes, whose own parent handles still name ``source``.
        """
        self._check_same_genealogy(source)
        self.parent_handle = source.parent_handle
        self.offspring = list(source.offspring)

    def complete_copy(self) -> GenealogyNode:
        """Copy the payload and share this node's current topology."""
        node = self.data_copy()
        node.rebind_topology(self)
        return node

    def inherit_from(self, parent: GenealogyNode) -> None:
        """Share (not copy) the payload reference of ``parent``."""
        self.payload = parent.payload

    # Recombination

    @property
    def recombination_partner(self) -> GenealogyNode | None:
        if self.partner_handle is None:
            return None
        return self.genealogy.node(self.partner_handle)

    def has_recombination(self) -> bool:
        return self.partner_handle is not None

    def set_recombination_partner(
        self, lo: int, hi: int, partner: GenealogyNode
    ) -> None:
        """Install one side of a recombination with breakpoints ``[lo, hi)``."""
        self._check_same_genealogy(partner)
        if partner is self:
            raise PreconditionError("a node cannot recombine with itself")
        length = self.payload.length() if self.payload is not None else 0
        if not 0 <= lo <= hi <= length:
            raise PreconditionError(
                f"breakpoints [{lo}, {hi}) outside payload of length {length}"
            )
        self.partner_handle = partner.handle
        self.breakpoint_min = lo
        self.breakpoint_max = hi

    def get_parent_for_site(self, site: int) -> GenealogyNode | None:
        """Return the node that donated the genetic material at ``site``."""
        if self.breakpoint_min <= site < self.breakpoint_max:
            if self.partner_handle is None:
                raise PreconditionError(
                    f"{self.readable_id} has breakpoints "
                    f"[{self.breakpoint_min}, {self.breakpoint_max}) "
                    "but no recombination partner"
                )
            return self.genealogy.node(self.partner_handle).get_parent()
        return self.get_parent()

    def clear_references(self) -> None:
        """Drop the parent and recombination partner handles and breakpoints."""
        self.parent_handle = None
        self.partner_handle = None
        self.breakpoint_min = 0
        self.breakpoint_max = 0

    # Bookkeeping

    @property
    def readable_id(self) -> str:
        digits = str(abs(self.id))[: self.genealogy.config.ID_DIGITS]
        label = f"i{digits}"
        if self.origin_population > -1:
            label += f"_p{self.origin_population}"
        return label

    def _check_same_genealogy(self, other: GenealogyNode) -> None:
        if other.genealogy is not self.genealogy:
            raise PreconditionError(
                f"{other.readable_id} belongs to a different genealogy"
            )

    def __repr__(self) -> str:
        return f"GenealogyNode({self.readable_id}, handle={self.handle})"
