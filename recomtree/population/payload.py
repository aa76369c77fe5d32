"""Genetic payloads carried by genealogy nodes."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.random import Generator


@runtime_checkable
class Recombineable(Protocol):
    """Protocol for a substrate that can exchange regions with another.

    The genealogy never looks inside the data returned by ``get_region``; it
    only hands it back to ``set_region`` on the partner payload. Regions are
    half-open ``[lo, hi)`` in sequence coordinates.
    """

    def length(self) -> int: ...

    def get_region(self, lo: int, hi: int) -> Any: ...

    def set_region(self, lo: int, hi: int, data: Any) -> None: ...

    def copy(self) -> "Recombineable": ...


class ArrayPayload:
    """Sequence payload stored as a numpy array of small integer symbols."""

    NUM_SYMBOLS = 4  # A, C, G, T

    def __init__(self, symbols: np.ndarray | list[int]) -> None:
        arr = np.asarray(symbols, dtype=np.uint8)
        if arr.ndim != 1:
            raise ValueError(f"symbols must be one-dimensional, got shape {arr.shape}")
        self.symbols = arr.copy()

    @classmethod
    def random(cls, length: int, rng: Generator) -> "ArrayPayload":
        """Draw a uniformly random sequence of the given length."""
        if length < 0:
            raise ValueError("length must be non-negative")
        return cls(rng.integers(0, cls.NUM_SYMBOLS, size=length, dtype=np.uint8))

    @classmethod
    def constant(cls, length: int, symbol: int = 0) -> "ArrayPayload":
        return cls(np.full(length, symbol, dtype=np.uint8))

    def length(self) -> int:
        return int(self.symbols.shape[0])

    def _check_region(self, lo: int, hi: int) -> None:
        if not 0 <= lo <= hi <= self.length():
            raise ValueError(
                f"region [{lo}, {hi}) outside sequence of length {self.length()}"
            )

    def get_region(self, lo: int, hi: int) -> np.ndarray:
        """Return a copy of the symbols in ``[lo, hi)``."""
        self._check_region(lo, hi)
        return self.symbols[lo:hi].copy()

    def set_region(self, lo: int, hi: int, data: np.ndarray) -> None:
        """Overwrite ``[lo, hi)`` with ``data``."""
        self._check_region(lo, hi)
        data = np.asarray(data, dtype=np.uint8)
        if data.shape != (hi - lo,):
            raise ValueError(
                f"region [{lo}, {hi}) needs {hi - lo} symbols, got {data.shape}"
            )
        self.symbols[lo:hi] = data

    def copy(self) -> "ArrayPayload":
        return ArrayPayload(self.symbols)

    def __len__(self) -> int:
        return self.length()

    def __repr__(self) -> str:
        return f"ArrayPayload(length={self.length()})"
