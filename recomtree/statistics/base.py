"""Base class for statistics collected from genealogy snapshots."""

from __future__ import annotations

import abc
import sys
from typing import Protocol, Sequence, TextIO

import numpy as np

from recomtree.config import Config
from recomtree.population.node import GenealogyNode


class GenealogyTree(Protocol):
    """The tree view a statistic reads from."""

    def get_tips(self) -> Sequence[GenealogyNode]: ...

    def get_root(self) -> GenealogyNode | None: ...


class TreeStatistic(abc.ABC):
    """A statistic sampled from the genealogy every few generations.

    Subclasses implement :meth:`collect`, which reads a tree snapshot and
    records into ``values`` (or their own accumulators). Collection never
    mutates the genealogy.
    """

    identifier: str = "Tree statistic"
    description: str = ""
    show_on_screen_log: bool = False

    def __init__(self, config: type[Config] | None = None) -> None:
        self.config = config or Config
        self.sample_frequency = self.config.STAT_SAMPLE_FREQUENCY
        self.values: list[float] = []

    @abc.abstractmethod
    def collect(self, tree: GenealogyTree | None) -> None:
        """Record this statistic for one tree snapshot."""

    def get_new(self) -> "TreeStatistic":
        """Return a fresh, empty instance with the same configuration."""
        stat = type(self)(config=self.config)
        stat.sample_frequency = self.sample_frequency
        return stat

    def set_sample_frequency(self, frequency: int) -> None:
        if frequency < 1:
            raise ValueError("sample frequency must be at least 1")
        self.sample_frequency = int(frequency)

    def should_collect(self, generation: int) -> bool:
        return generation % self.sample_frequency == 0

    def clear(self) -> None:
        self.values = []

    def mean(self) -> float:
        return float(np.mean(self.values)) if self.values else float("nan")

    def stdev(self) -> float:
        return float(np.std(self.values)) if self.values else float("nan")

    def summarize(self, out: TextIO | None = None) -> None:
        """Write a short text summary of the collected values."""
        out = out or sys.stdout
        print(f"Summary for {self.identifier} ( {self.description} )", file=out)
        print(f"Number of samples : \t{len(self.values)}", file=out)
        if not self.values:
            print("No data collected.", file=out)
            return
        print(f"Mean : \t{self.mean()}", file=out)
        print(f"Stdev. : \t{self.stdev()}", file=out)
