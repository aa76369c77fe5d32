"""Sackin's index of tree imbalance."""

from __future__ import annotations

from typing import Sequence

from recomtree.population.genealogy import Genealogy
from recomtree.population.node import GenealogyNode
from recomtree.statistics.base import GenealogyTree, TreeStatistic


class SackinsIndex(TreeStatistic):
    """Mean number of parent hops from each tip to the root."""

    identifier = "Sackin's index of tree imbalance (mean)"
    description = "Sackin's Index of tree imbalance"
    show_on_screen_log = True

    @staticmethod
    def compute(tips: Sequence[GenealogyNode]) -> float:
        if not tips:
            raise ValueError("tips must not be empty")
        total = sum(Genealogy.nodes_to_root(tip) for tip in tips)
        return total / float(len(tips))

    def collect(self, tree: GenealogyTree | None) -> None:
        if tree is None:
            return
        tips = tree.get_tips()
        if not tips:
            return
        self.values.append(self.compute(tips))
