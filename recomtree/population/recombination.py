"""Recombination between two nodes of the same generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from numpy.random import Generator

from recomtree.errors import PreconditionError
from recomtree.population.node import GenealogyNode

if TYPE_CHECKING:
    from recomtree.population.genealogy import Genealogy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecombinationEvent:
    """Record of a single recombination."""

    site: int
    lo: int
    hi: int
    upper: bool


class RecombinationEngine:
    """Exchange a payload region between two nodes and link them as partners."""

    def __init__(self, rng: Generator) -> None:
        self.rng = rng

    @classmethod
    def for_genealogy(cls, genealogy: "Genealogy") -> "RecombinationEngine":
        """Engine drawing from the genealogy's shared generator."""
        return cls(genealogy.rng)

    def draw_breakpoints(self, length: int) -> RecombinationEvent:
        """Pick an interior site and which side of it is exchanged."""
        if length < 3:
            raise PreconditionError(
                f"payload length {length} leaves no interior recombination site"
            )
        # Sites 1 .. length - 2, never an edge
        site = int(self.rng.integers(1, length - 1))
        upper = bool(self.rng.random() < 0.5)
        if upper:
            return RecombinationEvent(site=site, lo=site, hi=length, upper=True)
        return RecombinationEvent(site=site, lo=0, hi=site, upper=False)

    def recombine(self, one: GenealogyNode, two: GenealogyNode) -> RecombinationEvent:
        """Recombine ``one`` and ``two``; nothing is mutated if a check fails."""
        if one is two:
            raise PreconditionError("a node cannot recombine with itself")
        if one.has_recombination() or two.has_recombination():
            raise PreconditionError(
                "one of the recombining nodes already has a breakpoint: "
                f"{one.readable_id}, {two.readable_id}"
            )
        if one.genealogy is not two.genealogy:
            raise PreconditionError("recombining nodes belong to different genealogies")
        if one.payload is None or two.payload is None:
            raise PreconditionError("both recombining nodes need a payload")

        length_one = one.payload.length()
        length_two = two.payload.length()
        if length_one != length_two:
            raise PreconditionError(
                f"payload lengths differ: {length_one} vs {length_two}"
            )

        event = self.draw_breakpoints(length_one)

        one.set_recombination_partner(event.lo, event.hi, two)
        two.set_recombination_partner(event.lo, event.hi, one)

        region_one = one.payload.get_region(event.lo, event.hi)
        region_two = two.payload.get_region(event.lo, event.hi)
        one.payload.set_region(event.lo, event.hi, region_two)
        two.payload.set_region(event.lo, event.hi, region_one)

        logger.debug(
            "Recombined %s and %s at site %d, region [%d, %d)",
            one.readable_id,
            two.readable_id,
            event.site,
            event.lo,
            event.hi,
        )
        return event
