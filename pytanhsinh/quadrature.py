"""Tanh-sinh quadrature rules and a convenience function for integrating to a target error."""

import math
import time
from typing import Any, Iterator, Optional

from .configurations.evaluation import Evaluation, Integrand
from .configurations.quadrature import Quadrature
from .filters import absolute, relative
from .results import Result
from .transforms import ShiftedIntegrand, everywhere, non_negative
from .utilities.basics import format_number, format_seconds, output


def trap(f: Integrand, a: float, b: float, evaluation: Optional[Evaluation] = None) -> Iterator[Result]:
    """Integrate with the truncated trapezoid rule under tanh-sinh quadrature.

    Parameters
    ----------
    f : `callable`
        Integrand, which is never evaluated at ``a`` or ``b``.
    a : `float`
        Finite lower bound.
    b : `float`
        Finite upper bound, which must be larger than ``a``.
    evaluation : `Evaluation, optional`
        How to evaluate the integrand at each refinement level. By default, it is evaluated sequentially.

    Returns
    -------
    `generator of Result`
        Lazily computed results for each refinement level.

    Examples
    --------
    Selecting the first result with an absolute error estimate below a tenth of 1e-6 gives an estimate of
    ``0.9999999999999312`` with an error estimate of about ``2.72e-10`` after ``25`` evaluations::

        absolute(1e-6, trap(math.sin, math.pi / 2, math.pi))

    """
    return Quadrature('trapezoid', evaluation)(f, a, b)


def simpson(f: Integrand, a: float, b: float, evaluation: Optional[Evaluation] = None) -> Iterator[Result]:
    """Integrate with Simpson's rule under tanh-sinh quadrature. Arguments are the same as those of :func:`trap`."""
    return Quadrature('simpson', evaluation)(f, a, b)


def par_trap(f: Integrand, a: float, b: float, executor: Any = None) -> Iterator[Result]:
    """Integrate with the truncated trapezoid rule, evaluating chunks of abscissas in parallel. The optional
    ``executor`` is passed to the ``'parallel'`` :class:`Evaluation` strategy.
    """
    return trap(f, a, b, Evaluation('parallel', {'executor': executor}))


def par_simpson(f: Integrand, a: float, b: float, executor: Any = None) -> Iterator[Result]:
    """Integrate with Simpson's rule, evaluating chunks of abscissas in parallel."""
    return simpson(f, a, b, Evaluation('parallel', {'executor': executor}))


def integrate(
        f: Integrand, a: float, b: float, target_error: float = 1e-8, error: str = 'absolute',
        quadrature: Optional[Quadrature] = None) -> Result:
    r"""Integrate a function until a target error is reached.

    Infinite bounds are supported. An interval :math:`[a, \infty)` is shifted to start at zero and
    :math:`(-\infty, b]` is reflected to do the same before both are handled by :func:`non_negative`. The whole real
    line is handled by :func:`everywhere`.

    Parameters
    ----------
    f : `callable`
        Integrand.
    a : `float`
        Lower bound, which may be ``-numpy.inf``.
    b : `float`
        Upper bound, which may be ``numpy.inf`` and must be larger than ``a``.
    target_error : `float, optional`
        Target error, which is by default ``1e-8``.
    error : `str, optional`
        How to interpret ``target_error``: ``'absolute'`` (default) selects a result with :func:`absolute` and
        ``'relative'`` selects one with :func:`relative`.
    quadrature : `Quadrature, optional`
        :class:`Quadrature` configuration. By default, the sequentially evaluated trapezoid rule is used.

    Returns
    -------
    `Result`
        The selected result.

    """
    filters = {'absolute': absolute, 'relative': relative}
    if error not in filters:
        raise ValueError(f"error must be one of {list(filters.keys())}.")
    if not isinstance(target_error, (float, int)) or not target_error > 0:
        raise ValueError("target_error must be a positive float.")
    if quadrature is None:
        quadrature = Quadrature()
    elif not isinstance(quadrature, Quadrature):
        raise TypeError("quadrature must be None or a Quadrature instance.")
    if math.isnan(a) or math.isnan(b) or not a < b:
        raise ValueError(
            f"The lower integration bound must be smaller than the upper one, but got a = {a} and b = {b}."
        )

    # map any infinite bounds onto a finite interval
    if math.isinf(a) and math.isinf(b):
        results = everywhere(quadrature, f)
    elif math.isinf(b):
        results = non_negative(quadrature, ShiftedIntegrand(f, a, 1.0))
    elif math.isinf(a):
        results = non_negative(quadrature, ShiftedIntegrand(f, b, -1.0))
    else:
        results = quadrature(f, a, b)

    # refine the integral until the target error is reached
    start_time = time.time()
    result = filters[error](target_error, results)
    end_time = time.time()
    output(
        f"Integrated over [{a}, {b}] to {format_number(result.estimate).strip()} with an error estimate of "
        f"{format_number(result.error_estimate).strip()} after {result.evaluations} evaluations and "
        f"{format_seconds(end_time - start_time)}."
    )
    return result
