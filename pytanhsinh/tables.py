"""Loading of the precomputed abscissas and weights used by the quadrature rules."""

import functools
from typing import Iterator, NamedTuple, Tuple

import numpy as np

from . import data
from .utilities.basics import Array


class LevelTable(object):
    """Abscissas in (0, 1) and their weights for one refinement level or seed. Both arrays are read-only."""

    __slots__ = ('abscissas', 'weights')

    abscissas: Array
    weights: Array

    def __init__(self, abscissas: Array, weights: Array) -> None:
        """Store the arrays."""
        if abscissas.shape != weights.shape:
            raise ValueError("abscissas and weights must have the same shape.")
        self.abscissas = abscissas
        self.weights = weights

    def __len__(self) -> int:
        """Count the number of abscissa and weight pairs."""
        return self.abscissas.size

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        """Iterate over abscissa and weight pairs as Python floats."""
        return zip(self.abscissas.tolist(), self.weights.tolist())

    def chunk(self, start: int, stop: int) -> 'LevelTable':
        """Select a contiguous range of pairs."""
        return LevelTable(self.abscissas[start:stop], self.weights[start:stop])


class Tables(NamedTuple):
    """All data needed by the quadrature rules: the base weight of the midpoint, two seed tables, and one table for
    each refinement level.
    """

    base_weight: float
    seeds: Tuple[LevelTable, LevelTable]
    levels: Tuple[LevelTable, ...]


@functools.lru_cache()
def load_tables() -> Tables:
    """Load the packaged tables once. Later calls return the same read-only object."""
    seeds = read_tables(data.SEEDS_LOCATION)
    levels = read_tables(data.LEVELS_LOCATION)
    if len(seeds) != 2:
        raise ValueError(f"Expected two seed tables in {data.SEEDS_LOCATION}, but found {len(seeds)}.")
    return Tables(data.BASE_WEIGHT, (seeds[0], seeds[1]), levels)


def read_tables(location: str) -> Tuple[LevelTable, ...]:
    """Read a CSV file of (index, abscissa, weight) rows into one read-only table for each consecutive index."""
    raw = np.loadtxt(location, delimiter=',', skiprows=1, ndmin=2)
    indices = raw[:, 0].astype(np.int64)
    if indices.size == 0 or np.any(np.diff(indices) < 0) or indices[0] != 0:
        raise ValueError(f"The tables in {location} must be sorted by index, starting at 0.")

    tables = []
    for index in range(indices[-1] + 1):
        rows = raw[indices == index]
        abscissas = np.ascontiguousarray(rows[:, 1])
        weights = np.ascontiguousarray(rows[:, 2])
        if abscissas.size == 0:
            raise ValueError(f"The table with index {index} in {location} is empty.")
        if not ((abscissas > 0) & (abscissas < 1)).all() or not (weights > 0).all():
            raise ValueError(f"The table with index {index} in {location} has invalid abscissas or weights.")
        abscissas.flags.writeable = False
        weights.flags.writeable = False
        tables.append(LevelTable(abscissas, weights))
    return tuple(tables)
