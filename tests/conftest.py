"""Fixtures used by tests."""

import concurrent.futures
import math
from typing import Callable, Iterator, List, Tuple

import numpy as np
import pytest

from pytanhsinh import options


# define common types
IntegrandFixture = Tuple[Callable[[float], float], float, float, float, float]


@pytest.fixture(scope='session', autouse=True)
def configure() -> Iterator[None]:
    """Configure NumPy so that it raises all warnings as exceptions and reset any changed options after all tests."""
    old_error = np.seterr(all='raise')
    old_options = {k: getattr(options, k) for k in ['verbose', 'chunk_size', 'quadratic_bounds', 'absolute_margin']}
    yield
    for key, value in old_options.items():
        setattr(options, key, value)
    np.seterr(**old_error)


@pytest.fixture(scope='session')
def thread_executor() -> Iterator[concurrent.futures.ThreadPoolExecutor]:
    """Start a pool of threads that is shared by tests and shut it down afterwards."""
    with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
        yield executor


@pytest.fixture
def outputs(monkeypatch: pytest.MonkeyPatch) -> List[str]:
    """Collect status updates instead of printing them."""
    collected: List[str] = []
    monkeypatch.setattr(options, 'verbose', True)
    monkeypatch.setattr(options, 'verbose_output', collected.append)
    return collected


@pytest.fixture(params=[
    pytest.param((math.sin, math.pi / 2, math.pi, 1.0, 1e-10), id="sine"),
    pytest.param((lambda x: x**2, 0.0, 3.0, 9.0, 1e-9), id="square"),
    pytest.param((lambda x: 1 / (1 + x**2), -3.0, 4.0, math.atan(4) + math.atan(3), 1e-9), id="Cauchy kernel"),
    pytest.param((lambda x: math.exp(-x) * math.cos(3 * x), 0.0, 2.0, None, 1e-9), id="damped cosine"),
    pytest.param((math.log, 0.0, 1.0, -1.0, 1e-9), id="logarithm singularity"),
    pytest.param((lambda x: 1 / math.sqrt(1 - x**2), -1.0, 1.0, math.pi, 1e-5), id="arcsine density singularities"),
])
def integrand(request: pytest.FixtureRequest) -> IntegrandFixture:
    """Integrands over finite intervals along with their integrals and absolute tolerances for comparing estimates with
    them. An integral of None is computed with SciPy. Integrands with singularities at the end points have looser
    tolerances because the precomputed abscissas stop just short of the end points.
    """
    f, a, b, integral, atol = request.param
    if integral is None:
        import scipy.integrate
        integral = scipy.integrate.quad(f, a, b, epsabs=1e-14, epsrel=1e-14)[0]
    return f, a, b, integral, atol
