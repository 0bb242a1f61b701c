"""Selection of a single result from a sequence of quadrature results."""

import math
from typing import Iterable, Tuple

from . import exceptions, options
from .results import Result
from .utilities.basics import format_number, warn


def confidence(result: Result) -> Tuple[float, float]:
    """Convert a result into the interval ``(estimate - error_estimate, estimate + error_estimate)``, which *probably*
    contains the integral.
    """
    estimate, error_estimate, _ = result
    return estimate - error_estimate, estimate + error_estimate


def absolute(target_error: float, results: Iterable[Result]) -> Result:
    """Select the first result whose error estimate is below a target absolute error.

    A result is accepted once its error estimate is smaller than ``options.absolute_margin * target_error``. Results
    are consumed lazily, so when ``results`` is a generator, no refinement levels beyond the accepted one are computed.

    Parameters
    ----------
    target_error : `float`
        Target absolute error.
    results : `iterable of Result`
        Results from consecutive refinement levels, such as those generated by :func:`trap` or :func:`simpson`.

    Returns
    -------
    `Result`
        The first acceptable result. If there is none, the target cannot be reached with the precomputed refinement
        levels, a warning is displayed, and the last result is returned instead.

    """
    threshold = options.absolute_margin * target_error
    result = None
    for result in results:
        if result.error_estimate < threshold:
            return result
    if result is None:
        raise exceptions.EmptySequenceError
    warn_unreached("absolute", target_error, result)
    return result


def relative(target_error: float, results: Iterable[Result]) -> Result:
    r"""Select the first result whose change in estimate from the previous result is small relative to its own error
    estimate.

    Starting with the second result, a result with estimate :math:`s` and error estimate :math:`e` is accepted when
    :math:`|s - s_{old}| < \text{target} \cdot e`, where :math:`s_{old}` is the previous estimate, or when both
    estimates are exactly zero. As with :func:`absolute`, results are consumed lazily.

    Parameters
    ----------
    target_error : `float`
        Target relative error.
    results : `iterable of Result`
        Results from consecutive refinement levels.

    Returns
    -------
    `Result`
        The first acceptable result. A single result is returned as is. If no result is acceptable, a warning is
        displayed, and the last result is returned instead.

    """
    iterator = iter(results)
    last = next(iterator, None)
    if last is None:
        raise exceptions.EmptySequenceError
    previous_estimate = last.estimate
    compared = False
    for result in iterator:
        compared = True
        estimate = result.estimate
        if abs(estimate - previous_estimate) < target_error * result.error_estimate:
            return result
        if estimate == 0 and previous_estimate == 0:
            return result
        previous_estimate = estimate
        last = result
    if compared:
        warn_unreached("relative", target_error, last)
    return last


def warn_unreached(kind: str, target_error: float, result: Result) -> None:
    """Warn that no result satisfied a target error."""
    if not math.isfinite(result.estimate) or not math.isfinite(result.error_estimate):
        warn(
            f"Quadrature produced a non-finite estimate of {format_number(result.estimate).strip()} with an error "
            f"estimate of {format_number(result.error_estimate).strip()}. The integrand may not be finite at all "
            f"abscissas inside the interval of integration."
        )
        return
    warn(
        f"Failed to reach the target {kind} error of {format_number(target_error).strip()} after "
        f"{result.evaluations} evaluations. The last result, which has an error estimate of "
        f"{format_number(result.error_estimate).strip()}, was returned instead."
    )
