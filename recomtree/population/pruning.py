"""Removal of dead lineages from the genealogy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from recomtree.errors import StructuralError

if TYPE_CHECKING:
    from recomtree.population.node import GenealogyNode

logger = logging.getLogger(__name__)


class TreePruner:
    """Collapse single-offspring ancestor chains above a dead node."""

    @staticmethod
    def find_detach_point(node: "GenealogyNode") -> "GenealogyNode":
        """Return the topmost ancestor that pruning ``node`` would detach.

        Walks upward while the current node's parent has exactly one
        offspring and is not preserved. Reaching a node without a parent
        means the chain ran off the root.
        """
        ref = node
        depth = 0
        while True:
            parent = ref.get_parent()
            if parent is None:
                raise StructuralError(
                    f"{ref.readable_id} has no parent at depth {depth} "
                    f"while pruning {node.readable_id}"
                )
            if parent.num_offspring() != 1 or parent.preserve:
                return ref
            ref = parent
            depth += 1

    @staticmethod
    def prune(node: "GenealogyNode", reclaim: bool = False) -> "GenealogyNode | None":
        """Detach ``node`` and its dead ancestor chain from the tree.

        Returns the detached node, or None if ``node`` is preserved. With
        ``reclaim`` the detached subtree is also released from its arena,
        unless it holds a preserved node, which stays live but detached.
        """
        if node.preserve:
            return None

        ref = TreePruner.find_detach_point(node)
        parent = ref.get_parent()
        if not parent.remove_offspring(ref):
            raise StructuralError(
                f"{ref.readable_id} is not listed among the offspring of "
                f"{parent.readable_id}"
            )
        ref.set_parent(None)
        logger.debug(
            "Pruned %s, detached %s from %s",
            node.readable_id,
            ref.readable_id,
            parent.readable_id,
        )

        if reclaim:
            if any(n.preserve for n in ref.genealogy.subtree(ref)):
                logger.debug(
                    "Kept %s live: its subtree holds a preserved node", ref.readable_id
                )
            else:
                ref.genealogy.reclaim(ref)
        return ref
