"""Changes of variables that extend quadrature over finite intervals to infinite ones."""

import math
from typing import Callable, TypeVar


# define the type of whatever a quadrature method returns
R = TypeVar('R')
Method = Callable[[Callable[[float], float], float, float], R]


class NonNegativeIntegrand(object):
    """Integrand on [0, 1) that corresponds to an integrand on [0, inf) under the change of variables x = t / (1 - t).
    Unlike a closure, instances can be serialized by process pools whenever the wrapped integrand can be.
    """

    f: Callable[[float], float]

    def __init__(self, f: Callable[[float], float]) -> None:
        """Store the original integrand."""
        self.f = f

    def __call__(self, t: float) -> float:
        """Evaluate the original integrand and scale it by the Jacobian, 1 / (1 - t)^2."""
        u = 1 - t
        return self.f(t / u) / (u * u)


class EverywhereIntegrand(object):
    """Integrand on (-pi/2, pi/2) that corresponds to an integrand on (-inf, inf) under the change of variables
    x = tan(t).
    """

    f: Callable[[float], float]

    def __init__(self, f: Callable[[float], float]) -> None:
        """Store the original integrand."""
        self.f = f

    def __call__(self, t: float) -> float:
        """Evaluate the original integrand and scale it by the Jacobian, 1 + tan(t)^2."""
        tan_t = math.tan(t)
        return self.f(tan_t) * (1 + tan_t * tan_t)


def non_negative(method: Method, f: Callable[[float], float]) -> R:
    r"""Integrate a function from zero to infinity with the change of variables ``x = t / (1 - t)``.

    This works much better than clipping the interval at some arbitrarily large number.

    Parameters
    ----------
    method : `callable`
        Quadrature method of the form ``method(f, a, b)``, such as :func:`trap`, :func:`simpson`, :func:`par_trap`,
        :func:`par_simpson`, or a :class:`Quadrature` configuration.
    f : `callable`
        Integrand on :math:`[0, \infty)`.

    Returns
    -------
    `object`
        Whatever ``method`` returns, which for the quadrature rules is a generator of :class:`Result` instances.

    """
    return method(NonNegativeIntegrand(f), 0.0, 1.0)


def everywhere(method: Method, f: Callable[[float], float]) -> R:
    r"""Integrate a function from negative to positive infinity with the change of variables ``x = tan(t)``.

    For example, ``absolute(1e-8, everywhere(trap, lambda x: math.exp(-x * x)))`` approximates :math:`\sqrt{\pi}`.
    This works much better than clipping the interval at arbitrarily large and small numbers.

    Parameters
    ----------
    method : `callable`
        Quadrature method of the form ``method(f, a, b)``.
    f : `callable`
        Integrand on :math:`(-\infty, \infty)`.

    Returns
    -------
    `object`
        Whatever ``method`` returns.

    """
    return method(EverywhereIntegrand(f), -math.pi / 2, math.pi / 2)


class ShiftedIntegrand(object):
    """Integrand on [0, inf) that corresponds to an integrand on [a, inf) or (-inf, b] under the change of variables
    x = origin + direction * t, where direction is 1 or -1.
    """

    f: Callable[[float], float]
    origin: float
    direction: float

    def __init__(self, f: Callable[[float], float], origin: float, direction: float) -> None:
        """Store the original integrand and the change of variables."""
        self.f = f
        self.origin = origin
        self.direction = direction

    def __call__(self, t: float) -> float:
        """Evaluate the original integrand, which needs no Jacobian adjustment."""
        return self.f(self.origin + self.direction * t)
