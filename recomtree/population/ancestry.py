"""Site-resolved ancestry queries."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from recomtree.errors import PreconditionError, StructuralError
from recomtree.population.node import GenealogyNode


class AncestryResolver:
    """Step lineages up the genealogy one generation at a time, per site."""

    @staticmethod
    def ancestors_one_generation_up(
        sample: Iterable[GenealogyNode], site: int
    ) -> list[GenealogyNode]:
        """Return the distinct genetic parents of ``sample`` at ``site``.

        Order follows first appearance. Raises if any member has no parent.
        """
        parents: dict[int, GenealogyNode] = {}
        for kid in sample:
            parent = kid.get_parent_for_site(site)
            if parent is None:
                raise StructuralError(
                    f"lineage of {kid.readable_id} ends at site {site} "
                    "before the sample coalesced"
                )
            parents.setdefault(id(parent), parent)
        return list(parents.values())

    @staticmethod
    def tmrca_at_site(tips: Sequence[GenealogyNode], site: int) -> int:
        """Generations until every lineage of ``tips`` at ``site`` coalesces."""
        if not tips:
            raise PreconditionError("cannot compute a TMRCA for an empty sample")

        ancestors = list({id(tip): tip for tip in tips}.values())
        # No lineage is longer than the number of live nodes
        limit = len(ancestors[0].genealogy)
        tmrca = 0
        while len(ancestors) > 1:
            ancestors = AncestryResolver.ancestors_one_generation_up(ancestors, site)
            tmrca += 1
            if tmrca > limit:
                raise StructuralError(
                    f"lineages at site {site} did not coalesce within {limit} generations"
                )
        return tmrca

    @staticmethod
    def tmrca_profile(tips: Sequence[GenealogyNode], sites: Iterable[int]) -> np.ndarray:
        """TMRCA of ``tips`` evaluated independently at each site."""
        return np.array(
            [AncestryResolver.tmrca_at_site(tips, site) for site in sites],
            dtype=np.int64,
        )
