"""Results of tanh-sinh quadrature."""

from typing import NamedTuple

from .utilities.basics import format_number, format_table


class Result(NamedTuple):
    r"""Approximation of an integral at one refinement level.

    The interval ``(estimate - error_estimate, estimate + error_estimate)`` *probably* contains the integral. The error
    estimate is a heuristic, not a rigorous bound; see :func:`confidence`.

    Attributes
    ----------
    estimate : `float`
        Approximation of the integral.
    error_estimate : `float`
        Heuristic estimate of the absolute error in ``estimate``. It is the change in the estimate from the previous
        refinement level, or its square when convergence appears to be quadratic.
    evaluations : `int`
        Nominal number of integrand evaluations, :math:`1 + 12 \cdot 2^k` at refinement level :math:`k`.

    """

    estimate: float
    error_estimate: float
    evaluations: int

    def to_table(self) -> str:
        """Format the result as a table."""
        header = ["Estimate", ("Error", "Estimate"), "Evaluations"]
        values = [format_number(self.estimate), format_number(self.error_estimate), self.evaluations]
        return format_table(header, values, title="Quadrature Result")
