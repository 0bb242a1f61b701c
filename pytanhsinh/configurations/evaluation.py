"""Strategies for evaluating the weighted sum of integrand values at the abscissas of one refinement level."""

import functools
from typing import Any, Callable, Optional, Tuple, Union

import numpy as np

from .. import options
from ..tables import LevelTable
from ..utilities import basics
from ..utilities.basics import Options, StringRepresentation, format_options


# define integrand and evaluator types
Integrand = Callable[[Any], Any]
Evaluator = Callable[..., float]
Chunk = Tuple[Integrand, float, float, LevelTable]


class Evaluation(StringRepresentation):
    r"""Configuration for evaluating integrands at the abscissas of a refinement level.

    At each refinement level, the quadrature rules need the weighted sum

    .. math:: S = \sum_j w_j \left[f(d + c t_j) + f(d - c t_j)\right]

    over the new abscissas :math:`t_j \in (0, 1)` and weights :math:`w_j` of that level, where :math:`c = (b - a) / 2`
    and :math:`d = (a + b) / 2` map :math:`(-1, 1)` onto the interval of integration. This configuration determines how
    that sum is computed. Refinement levels themselves are always computed one after another, since each one builds on
    the total from the previous level.

    Parameters
    ----------
    strategy : `str or callable, optional`
        How to evaluate the sum. One of the following:

            - ``'sequential'`` (default) - Evaluate the integrand once at each point, in table order, and accumulate
              the sum from left to right.

            - ``'parallel'`` - Split the table into consecutive chunks, sum each chunk as in ``'sequential'``, and
              accumulate the chunk sums in table order. Chunks are distributed with the ``map`` method of an executor,
              if one is available. Results are the same as those from ``'sequential'`` up to floating point
              reassociation. The integrand must be safe to call concurrently.

            - ``'vectorized'`` - Call the integrand only twice, with NumPy arrays of all points to the right and left
              of the midpoint. The integrand must accept and return arrays, for example, by being composed of NumPy
              universal functions.

        Also accepted is a custom callable strategy with the following form::

            strategy(table, f, c, d, **options) -> sum

        where ``table`` is a :class:`~pytanhsinh.tables.LevelTable` with read-only ``abscissas`` and ``weights`` arrays,
        which can also be iterated over to get ``(t, w)`` pairs of floats, and ``options`` are ``strategy_options``.

    strategy_options : `dict, optional`
        Options for the evaluation strategy. The ``'parallel'`` strategy supports the following options:

            - **chunk_size** : (`int`) - Number of points in each chunk. By default, ``options.chunk_size`` is used,
              which is by default ``32``.

            - **executor** : (`object`) - Any object with an order-preserving ``map(function, iterable)`` method, such
              as a :class:`concurrent.futures.ThreadPoolExecutor`, a :class:`concurrent.futures.ProcessPoolExecutor`,
              or a :class:`multiprocessing.pool.Pool`. The executor is owned by the caller and is never shut down here.
              By default, the pool created by :func:`parallel` is used within its ``with`` statement, and chunks are
              otherwise summed in the current process.

        Options are simply passed along to custom strategies. The other strategies do not support any options.

    """

    _evaluator: functools.partial
    _description: str
    _strategy_options: Options

    def __init__(
            self, strategy: Union[str, Evaluator] = 'sequential', strategy_options: Optional[Options] = None) -> None:
        """Validate the strategy and configure default options."""
        strategies = {
            'sequential': (functools.partial(sequential_evaluator), "sequentially"),
            'parallel': (functools.partial(parallel_evaluator), "in parallel chunks"),
            'vectorized': (functools.partial(vectorized_evaluator), "with vectorized integrand calls"),
        }

        # validate the configuration
        if strategy not in strategies and not callable(strategy):
            raise ValueError(f"strategy must be one of {list(strategies.keys())} or a callable object.")
        if strategy_options is not None and not isinstance(strategy_options, dict):
            raise ValueError("strategy_options must be None or a dict.")

        # options are simply passed along to custom strategies
        if callable(strategy):
            self._evaluator = functools.partial(strategy)
            self._description = "with a custom strategy"
            self._strategy_options = strategy_options or {}
            return

        # identify the non-custom evaluator and set default options
        self._evaluator, self._description = strategies[strategy]
        self._strategy_options: Options = {}
        if strategy == 'parallel':
            self._strategy_options.update({
                'chunk_size': options.chunk_size,
                'executor': None
            })

        # update and validate options
        for key in (strategy_options or {}):
            if key not in self._strategy_options:
                raise ValueError(f"The {strategy} strategy does not support the option {key}.")
        self._strategy_options.update(strategy_options or {})
        if strategy == 'parallel':
            chunk_size = self._strategy_options['chunk_size']
            if not isinstance(chunk_size, int) or isinstance(chunk_size, bool) or chunk_size < 1:
                raise ValueError("The strategy option chunk_size must be a positive int.")
            executor = self._strategy_options['executor']
            if executor is not None and not callable(getattr(executor, 'map', None)):
                raise ValueError("The strategy option executor must be None or have a callable map method.")

    def __str__(self) -> str:
        """Format the configuration as a string."""
        return (
            f"Configured to evaluate integrands {self._description} with options "
            f"{format_options(self._strategy_options)}."
        )

    def _evaluate(self, table: LevelTable, f: Integrand, c: float, d: float) -> float:
        """Compute the weighted sum of integrand values at the points of a table."""
        return self._evaluator(table, f, c, d, **self._strategy_options)


def sequential_evaluator(table: LevelTable, f: Integrand, c: float, d: float) -> float:
    """Accumulate the weighted sum in table order."""
    total = 0.0
    for t, w in table:
        ct = c * t
        total += w * (f(d + ct) + f(d - ct))
    return total


def parallel_evaluator(table: LevelTable, f: Integrand, c: float, d: float, chunk_size: int, executor: Any) -> float:
    """Sum chunks of the table independently and accumulate chunk sums in table order."""
    chunks = [(f, c, d, table.chunk(s, s + chunk_size)) for s in range(0, len(table), chunk_size)]
    if executor is None:
        executor = basics.pool
    sums = map(evaluate_chunk, chunks) if executor is None else executor.map(evaluate_chunk, chunks)
    total = 0.0
    for chunk_sum in sums:
        total += chunk_sum
    return total


def evaluate_chunk(chunk: Chunk) -> float:
    """Sum one chunk. This is a module-level function so that it can be serialized by process pools."""
    f, c, d, table = chunk
    return sequential_evaluator(table, f, c, d)


def vectorized_evaluator(table: LevelTable, f: Integrand, c: float, d: float) -> float:
    """Evaluate the integrand on arrays of all points to the right and left of the midpoint."""
    ct = c * table.abscissas
    right = np.asarray(f(d + ct), np.float64)
    left = np.asarray(f(d - ct), np.float64)
    if right.shape != ct.shape or left.shape != ct.shape:
        raise ValueError(
            f"Vectorized integrands must return arrays with the same shape as their inputs, {ct.shape}, but got "
            f"arrays with shapes {right.shape} and {left.shape}."
        )
    return float((table.weights * (right + left)).sum())
