"""Genealogy representation, recombination, and ancestry queries."""

from __future__ import annotations

from recomtree.population.payload import ArrayPayload, Recombineable
from recomtree.population.node import GenealogyNode
from recomtree.population.genealogy import Genealogy
from recomtree.population.recombination import RecombinationEngine, RecombinationEvent
from recomtree.population.pruning import TreePruner
from recomtree.population.ancestry import AncestryResolver

__all__ = [
    "ArrayPayload",
    "Recombineable",
    "GenealogyNode",
    "Genealogy",
    "RecombinationEngine",
    "RecombinationEvent",
    "TreePruner",
    "AncestryResolver",
]
