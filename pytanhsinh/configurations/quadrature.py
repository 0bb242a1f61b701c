"""Tanh-sinh quadrature rules that refine an integral one level at a time."""

import math
from typing import Callable, Iterator, Optional

from .evaluation import Evaluation, Integrand
from .. import options
from ..results import Result
from ..tables import LevelTable, Tables, load_tables
from ..utilities.basics import StringRepresentation, format_number, format_table, output, validate_interval


# define the type of a function that computes the weighted sum for a table
TableEvaluator = Callable[[LevelTable, Integrand, float, float], float]


class Quadrature(StringRepresentation):
    r"""Configuration for tanh-sinh quadrature.

    Tanh-sinh quadrature of Takahashi and Mori (1974) integrates over :math:`[a, b]` by applying the
    trapezoid rule after the change of variables :math:`x = \tanh(\frac{\pi}{2} \sinh u)`, which clusters abscissas
    near the end points of the interval. The integrand is never evaluated at :math:`a` or :math:`b`, so it may be
    singular there. For smooth integrands, the number of correct digits roughly doubles with each refinement level.

    The abscissas and weights are precomputed, and each refinement level halves the step size of the trapezoid rule by
    only evaluating the integrand at new abscissas. Calling a configuration with an integrand and bounds returns a
    generator of :class:`Result` instances, one for each refinement level, followed by a final one once the
    precomputed levels are exhausted. No level is computed until it is requested, so pass the generator to
    :func:`absolute` or :func:`relative` to stop refining as soon as a target error is reached.

    Parameters
    ----------
    rule : `str, optional`
        The quadrature rule. One of the following:

            - ``'trapezoid'`` (default) - The truncated trapezoid rule.

            - ``'simpson'`` - Simpson's rule, which applies Richardson extrapolation to consecutive trapezoid
              estimates, :math:`S_k = (4 T_k - T_{k - 1}) / 3`, to cancel the leading error term.

    evaluation : `Evaluation, optional`
        :class:`Evaluation` configuration for how the integrand is evaluated at the abscissas of each level. By default,
        it is evaluated sequentially.
    universal_display : `bool, optional`
        Whether to output a row of a progress table for each refinement level as it is computed. By default, progress
        is not displayed.

    """

    _rule: str
    _description: str
    _evaluation: Evaluation
    _universal_display: bool

    def __init__(
            self, rule: str = 'trapezoid', evaluation: Optional[Evaluation] = None,
            universal_display: bool = False) -> None:
        """Validate the configuration."""
        rules = {
            'trapezoid': "the truncated trapezoid rule",
            'simpson': "Simpson's rule",
        }
        if rule not in rules:
            raise ValueError(f"rule must be one of {list(rules.keys())}.")
        if evaluation is None:
            evaluation = Evaluation()
        elif not isinstance(evaluation, Evaluation):
            raise TypeError("evaluation must be None or an Evaluation instance.")
        self._rule = rule
        self._description = rules[rule]
        self._evaluation = evaluation
        self._universal_display = bool(universal_display)

    def __str__(self) -> str:
        """Format the configuration as a string."""
        return f"Configured to integrate with {self._description} under tanh-sinh quadrature. {self._evaluation}"

    def __call__(self, f: Integrand, a: float, b: float) -> Iterator[Result]:
        """Validate the integrand and interval, and then return a generator of results for each refinement level."""
        if not callable(f):
            raise TypeError("f must be callable.")
        a, b = validate_interval(a, b)
        results = refine(f, a, b, self._evaluation._evaluate, self._rule == 'simpson', load_tables())
        if self._universal_display:
            return display_progress(results)
        return results


def refine(
        f: Integrand, a: float, b: float, evaluate: TableEvaluator, accelerate: bool,
        tables: Tables) -> Iterator[Result]:
    """Yield a result for each refinement level and a final result once the tables are exhausted. Sums are accumulated
    on (-1, 1) and only scaled by c when results are reported.
    """
    c = 0.5 * (b - a)
    d = 0.5 * (a + b)

    # bootstrap the first trapezoid total with the midpoint and the seed tables
    seed0, seed1 = tables.seeds
    i0 = tables.base_weight * f(d) + evaluate(seed0, f, c, d)
    i1 = evaluate(seed1, f, c, d)
    total = i0 + i1
    accelerated = total * 4 / 3
    previous_delta = abs(i1 - i0)
    error = math.inf

    for level, table in enumerate(tables.levels):
        # halve the step size: the weights of the new abscissas already account for the smaller step
        new = evaluate(table, f, c, d)
        half = 0.5 * total
        updated_total = new + half
        if accelerate:
            updated_accelerated = (4 * updated_total - total) / 3
            delta = abs(updated_accelerated - accelerated)
            accelerated = updated_accelerated
        else:
            delta = abs(new - half)
        total = updated_total
        error = update_error(delta, previous_delta, error)
        previous_delta = delta
        yield Result((accelerated if accelerate else total) * c, error * c, count_evaluations(level))

    yield Result((accelerated if accelerate else total) * c, error * c, count_evaluations(len(tables.levels)))


def update_error(delta: float, previous_delta: float, error: float) -> float:
    """Update the error estimate given the latest two changes in the estimate. When the ratio of their logarithms
    indicates quadratic convergence, the squared change is a tighter estimate than the change itself.
    """
    if delta == 0 or previous_delta == 0:
        return error
    if not math.isfinite(delta) or not math.isfinite(previous_delta):
        return delta
    previous_log = math.log(previous_delta)
    if previous_log == 0:
        return delta
    lower, upper = options.quadratic_bounds
    if lower < math.log(delta) / previous_log < upper:
        return delta * delta
    return delta


def count_evaluations(level: int) -> int:
    """Count the nominal number of integrand evaluations reported at a refinement level."""
    return 1 + 12 * 2**level


def display_progress(results: Iterator[Result]) -> Iterator[Result]:
    """Output a row of a progress table for each result as it is computed. The first row includes the header."""
    header = [("", "Level"), ("", "Evaluations"), ("", "Estimate"), ("Error", "Estimate")]
    output("")
    for level, result in enumerate(results):
        values = [
            str(level),
            str(result.evaluations),
            format_number(result.estimate),
            format_number(result.error_estimate),
        ]
        output(format_table(header, values, include_border=False, include_header=level == 0))
        yield result
