"""TMRCA of a sample as a function of sequence position.

One histogram is kept per window of ``bin_width`` sites, so both the mean
TMRCA and its spread can be reported along the sequence. Without
recombination every window sees the same value; recombination is what makes
the TMRCA vary with position.
"""

from __future__ import annotations

import logging
import math
import sys
from typing import TextIO

import numpy as np

from recomtree.config import Config
from recomtree.errors import PreconditionError
from recomtree.population.ancestry import AncestryResolver
from recomtree.statistics.base import GenealogyTree, TreeStatistic
from recomtree.statistics.histogram import Histogram

logger = logging.getLogger(__name__)


class TMRCADensity(TreeStatistic):
    """Per-window TMRCA histograms."""

    identifier = "TMRCA Density map"
    description = "TMRCA as a function of position along the sequence"

    def __init__(self, config: type[Config] | None = None) -> None:
        super().__init__(config=config)
        self.bin_width = self.config.TMRCA_BIN_WIDTH
        self.histogram_bins = self.config.TMRCA_HISTOGRAM_BINS
        self.histogram_max = self.config.TMRCA_HISTOGRAM_MAX
        self.seq_length: int | None = None
        self.histos: list[Histogram] | None = None

    def get_new(self) -> "TMRCADensity":
        stat = super().get_new()
        stat.bin_width = self.bin_width
        return stat

    def get_bin_width(self) -> int:
        return self.bin_width

    def set_bin_width(self, width: int) -> None:
        """Set the number of sites per histogram; drops data already sized."""
        if width < 1:
            raise ValueError("bin width must be at least 1")
        if self.histos is not None and width != self.bin_width:
            logger.info("Bin width changed to %d, discarding collected TMRCA data", width)
            self.clear()
        self.bin_width = int(width)

    def clear(self) -> None:
        super().clear()
        self.seq_length = None
        self.histos = None

    def is_sized(self) -> bool:
        return self.histos is not None

    def sample_sites(self) -> range:
        """First site of every window."""
        if self.seq_length is None:
            return range(0)
        return range(0, self.seq_length, self.bin_width)

    def _size_for(self, seq_length: int) -> None:
        self.seq_length = seq_length
        num_histos = math.ceil(seq_length / self.bin_width)
        self.histos = [
            Histogram(self.histogram_bins, 0, self.histogram_max)
            for _ in range(num_histos)
        ]
        logger.info(
            "Sized TMRCA density map: %d sites in %d windows of %d",
            seq_length,
            num_histos,
            self.bin_width,
        )

    def collect(self, tree: GenealogyTree | None) -> None:
        if tree is None:
            return
        tips = tree.get_tips()
        if not tips:
            return

        payload = tips[0].payload
        if payload is None:
            raise PreconditionError(
                "cannot collect a TMRCA density map for nodes without a payload"
            )
        if self.histos is None:
            self._size_for(payload.length())

        for index, site in enumerate(self.sample_sites()):
            tmrca = AncestryResolver.tmrca_at_site(tips, site)
            self.histos[index].add_value(tmrca)

    def counts(self) -> np.ndarray:
        if self.histos is None:
            return np.zeros(0, dtype=np.int64)
        return np.array([h.get_count() for h in self.histos], dtype=np.int64)

    def means(self) -> np.ndarray:
        if self.histos is None:
            return np.zeros(0, dtype=np.float64)
        return np.array([h.get_mean() for h in self.histos], dtype=np.float64)

    def stdevs(self) -> np.ndarray:
        if self.histos is None:
            return np.zeros(0, dtype=np.float64)
        return np.array([h.get_stdev() for h in self.histos], dtype=np.float64)

    def bin_ranges(self) -> list[tuple[int, int]]:
        """Half-open site range covered by each window."""
        return [
            (site, min(site + self.bin_width, self.seq_length))
            for site in self.sample_sites()
        ]

    def summarize(self, out: TextIO | None = None) -> None:
        out = out or sys.stdout
        print(f"Summary for {self.identifier} ( {self.description} )", file=out)
        if self.histos is None:
            print("Number of samples : \t0", file=out)
            print("No data collected.", file=out)
            return

        print(f"Number of samples : \t{self.histos[0].get_count()}", file=out)
        print(" Site range \t Mean TMRCA \t Stdev. TMRCA", file=out)
        for (lo, hi), histo in zip(self.bin_ranges(), self.histos):
            print(
                f"{lo} - {hi - 1} : \t{histo.get_mean()}\t{histo.get_stdev()}",
                file=out,
            )
