"""Tests of the precomputed tables and of result formatting."""

import math
from pathlib import Path

import numpy as np
import pytest

from pytanhsinh import Result, data, load_tables
from pytanhsinh.tables import LevelTable, read_tables


def test_cached() -> None:
    """Test that tables are only loaded once."""
    assert load_tables() is load_tables()


def test_structure() -> None:
    """Test the sizes of the packaged tables and the base weight of the midpoint."""
    tables = load_tables()
    assert [len(t) for t in tables.seeds] == [3, 3]
    assert [len(t) for t in tables.levels] == [6 * 2**k for k in range(6)]
    np.testing.assert_allclose(tables.base_weight, math.pi / 4, rtol=1e-15, atol=0)


def test_values() -> None:
    """Test that abscissas increase towards the end of the interval, that weights are positive, and that no abscissa
    is shared by two tables.
    """
    tables = load_tables()
    for table in tables.seeds + tables.levels:
        assert ((table.abscissas > 0) & (table.abscissas < 1)).all()
        assert (np.diff(table.abscissas) > 0).all()
        assert (table.weights > 0).all()
    abscissas = np.concatenate([t.abscissas for t in tables.seeds + tables.levels])
    assert np.unique(abscissas).size == abscissas.size


def test_read_only() -> None:
    """Test that the shared tables cannot be modified."""
    table = load_tables().levels[0]
    with pytest.raises(ValueError):
        table.abscissas[0] = 0.5
    with pytest.raises(ValueError):
        table.weights[0] = 0.5


def test_iteration() -> None:
    """Test that tables can be iterated over and split into chunks."""
    table = load_tables().levels[1]
    pairs = list(table)
    assert len(pairs) == len(table) == 12
    assert all(isinstance(t, float) and isinstance(w, float) for t, w in pairs)
    chunk = table.chunk(10, 20)
    assert list(chunk) == pairs[10:]
    with pytest.raises(ValueError):
        LevelTable(table.abscissas, table.weights[1:])


@pytest.mark.parametrize(['contents', 'message'], [
    pytest.param("level,abscissa,weight\n1,0.5,0.5\n", "starting at 0", id="missing first level"),
    pytest.param("level,abscissa,weight\n1,0.5,0.5\n0,0.5,0.5\n", "sorted", id="unsorted"),
    pytest.param("level,abscissa,weight\n0,0.5,0.5\n2,0.5,0.5\n", "empty", id="skipped level"),
    pytest.param("level,abscissa,weight\n0,1.0,0.5\n", "invalid", id="end point"),
    pytest.param("level,abscissa,weight\n0,0.5,-0.5\n", "invalid", id="negative weight"),
])
def test_invalid_files(tmp_path: Path, contents: str, message: str) -> None:
    """Test that malformed files are rejected."""
    location = tmp_path / 'tables.csv'
    location.write_text(contents)
    with pytest.raises(ValueError, match=message):
        read_tables(str(location))


def test_packaged_locations() -> None:
    """Test that the packaged files exist."""
    assert Path(data.LEVELS_LOCATION).is_file()
    assert Path(data.SEEDS_LOCATION).is_file()


def test_result_table() -> None:
    """Test that results can be formatted as tables."""
    table = Result(1.0, 2.5e-10, 25).to_table()
    assert "Quadrature Result" in table
    assert "Evaluations" in table and "25" in table
    assert "2.5" in table
