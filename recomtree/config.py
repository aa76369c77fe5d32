"""Project-wide configuration constants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Config:
    """Central configuration constants for recomtree."""

    # Genealogy parameters
    DEFAULT_POPULATION_NAME: ClassVar[str] = "Main population"
    ID_DIGITS: ClassVar[int] = 5  # Digits of the id shown in readable ids

    # Statistic parameters
    STAT_SAMPLE_FREQUENCY: ClassVar[int] = 100  # Generations between samples
    TMRCA_BIN_WIDTH: ClassVar[int] = 50  # Sites per TMRCA histogram
    TMRCA_HISTOGRAM_BINS: ClassVar[int] = 50  # Bins per TMRCA histogram
    TMRCA_HISTOGRAM_MAX: ClassVar[float] = 100.0  # Upper TMRCA edge (generations)
