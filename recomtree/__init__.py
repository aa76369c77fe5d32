"""Genealogies under recombination and site-resolved ancestry statistics."""

from __future__ import annotations

__all__ = [
    "config",
    "errors",
    "population",
    "statistics",
]
