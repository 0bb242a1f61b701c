"""Tests of changes of variables for infinite intervals."""

import concurrent.futures
import math
import pickle
from typing import Callable

import numpy as np
import pytest

from pytanhsinh import Quadrature, absolute, everywhere, non_negative, par_trap, simpson, trap
from pytanhsinh.transforms import EverywhereIntegrand, NonNegativeIntegrand, ShiftedIntegrand


@pytest.mark.parametrize(['f', 'integral'], [
    pytest.param(lambda x: math.exp(-x), 1.0, id="exponential"),
    pytest.param(lambda x: x * math.exp(-x), 1.0, id="gamma kernel"),
    pytest.param(lambda x: 1 / (1 + x * x), math.pi / 2, id="Cauchy kernel"),
])
@pytest.mark.parametrize('method', [pytest.param(trap, id="trapezoid"), pytest.param(simpson, id="Simpson")])
def test_non_negative(f: Callable[[float], float], integral: float, method: Callable) -> None:
    """Test integration from zero to infinity."""
    result = absolute(1e-6, non_negative(method, f))
    np.testing.assert_allclose(result.estimate, integral, rtol=0, atol=1e-6)


@pytest.mark.parametrize(['f', 'integral'], [
    pytest.param(lambda x: math.exp(-x * x), math.sqrt(math.pi), id="Gaussian"),
    pytest.param(lambda x: 1 / (1 + x * x), math.pi, id="Cauchy kernel"),
    pytest.param(lambda x: math.exp(-(x - 1)**2 / 2), math.sqrt(2 * math.pi), id="shifted Gaussian"),
])
@pytest.mark.parametrize('method', [pytest.param(trap, id="trapezoid"), pytest.param(simpson, id="Simpson")])
def test_everywhere(f: Callable[[float], float], integral: float, method: Callable) -> None:
    """Test integration over the whole real line."""
    result = absolute(1e-6, everywhere(method, f))
    np.testing.assert_allclose(result.estimate, integral, rtol=0, atol=1e-6)


def test_methods(thread_executor: concurrent.futures.ThreadPoolExecutor) -> None:
    """Test that changes of variables accept configurations and parallel rules as methods."""
    f = lambda x: math.exp(-x * x)
    expected = list(everywhere(trap, f))
    assert list(everywhere(Quadrature(), f)) == expected
    parallel_results = list(everywhere(lambda g, a, b: par_trap(g, a, b, thread_executor), f))
    np.testing.assert_allclose(
        [r.estimate for r in parallel_results], [r.estimate for r in expected], rtol=1e-12, atol=0
    )


def test_integrands() -> None:
    """Test that integrands are scaled by the Jacobians of their changes of variables."""
    np.testing.assert_allclose(NonNegativeIntegrand(math.exp)(0.5), 4 * math.exp(1), rtol=1e-14, atol=0)
    np.testing.assert_allclose(NonNegativeIntegrand(math.exp)(0.0), 1.0, rtol=1e-14, atol=0)
    np.testing.assert_allclose(EverywhereIntegrand(math.cos)(math.pi / 4), 2 * math.cos(1), rtol=1e-14, atol=0)
    np.testing.assert_allclose(EverywhereIntegrand(math.cos)(0.0), 1.0, rtol=1e-14, atol=0)
    np.testing.assert_allclose(ShiftedIntegrand(math.exp, 2.0, -1.0)(0.5), math.exp(1.5), rtol=1e-14, atol=0)
    np.testing.assert_allclose(ShiftedIntegrand(math.exp, 2.0, 1.0)(0.5), math.exp(2.5), rtol=1e-14, atol=0)


def test_serialization() -> None:
    """Test that wrapped integrands can be serialized, so that they can be distributed to process pools."""
    for integrand in [NonNegativeIntegrand(math.exp), EverywhereIntegrand(math.cos), ShiftedIntegrand(math.sin, 1, 1)]:
        restored = pickle.loads(pickle.dumps(integrand))
        assert restored(0.25) == integrand(0.25)
