"""Statistics computed from genealogy snapshots."""

from __future__ import annotations

from recomtree.statistics.histogram import Histogram
from recomtree.statistics.base import GenealogyTree, TreeStatistic
from recomtree.statistics.tmrca_density import TMRCADensity
from recomtree.statistics.sackins_index import SackinsIndex

__all__ = [
    "Histogram",
    "GenealogyTree",
    "TreeStatistic",
    "TMRCADensity",
    "SackinsIndex",
]
