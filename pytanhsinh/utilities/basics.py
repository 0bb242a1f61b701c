"""Basic functionality."""

import contextlib
import inspect
import multiprocessing.pool
import pickle
import re
import sys
import time
import traceback
from typing import Any, Container, Dict, Iterator, List, Optional, Sequence, Tuple
import warnings

from .. import options


# define common types
Array = Any
Options = Dict[str, Any]
Interval = Tuple[float, float]

# define the pool managed by parallel and used by the parallel evaluation strategy
pool: Any = None


@contextlib.contextmanager
def parallel(processes: int, use_pathos: bool = False) -> Iterator[Any]:
    r"""Context manager used for parallel processing in a ``with`` statement context.

    This manager creates a context in which a pool of Python processes will be used by the ``'parallel'`` evaluation
    strategy whenever it has not been given an explicit ``executor``. The pool is also yielded so that it can be passed
    explicitly, for example, with ``with pytanhsinh.parallel(4) as pool: par_trap(f, a, b, pool)``. After the context
    created by the ``with`` statement ends, all worker processes in the pool will be terminated. Outside this context,
    the parallel strategy evaluates its chunks in the current process.

    Importantly, multiprocessing will only improve speed if gains from parallelization outweigh overhead from
    serializing and passing integrands and abscissas between processes. Cheap integrands are usually faster without it.

    Arguments
    ---------
    processes : `int`
        Number of Python processes that will be created and used by the parallel evaluation strategy.
    use_pathos : `bool, optional`
        Whether to use `pathos <https://pathos.readthedocs.io/en/latest/>`_ (which will need to be installed) instead of
        the default, built-in :mod:`multiprocessing` module. Unlike the built-in module, pathos can serialize lambda
        functions and other local objects.

    """

    # validate the number of processes
    if not isinstance(processes, int):
        raise TypeError("processes must be an int.")
    if processes < 2:
        raise ValueError("processes must be at least 2.")

    # start the process pool, wait for work to be done, and then terminate it
    output(f"Starting a pool of {processes} processes ...")
    start_time = time.time()
    global pool
    if use_pathos:
        try:
            from pathos.multiprocessing import ProcessPool
        except ImportError as exception:
            if "pathos" not in str(exception):
                raise
            raise ImportError("pathos must be installed when use_pathos is True.") from exception
        pool = ProcessPool(nodes=processes)
        try:
            output(f"Started the process pool after {format_seconds(time.time() - start_time)}.")
            yield pool
        finally:
            output(f"Terminating the pool of {processes} processes ...")
            terminate_time = time.time()
            pool.close()
            pool.join()
            pool.clear()
            pool = None
    else:
        try:
            with multiprocessing.pool.Pool(processes) as pool:
                output(f"Started the process pool after {format_seconds(time.time() - start_time)}.")
                yield pool
                output(f"Terminating the pool of {processes} processes ...")
                terminate_time = time.time()
        except (AttributeError, pickle.PicklingError) as exception:
            if "pickle" not in str(exception):
                raise
            pathos_message = (
                "The built-in multiprocessing module does not support lambda functions or other local objects. "
                "Consider setting the use_pathos of parallel to True."
            )
            raise RuntimeError(pathos_message) from exception
        finally:
            pool = None
    output(f"Terminated the process pool after {format_seconds(time.time() - terminate_time)}.")


def warn(message: Any) -> None:
    """Output a warning."""
    old_formatwarning = warnings.formatwarning
    warnings.formatwarning = lambda x, *_, **__: f"{x}\n"
    warnings.warn(message)
    warnings.formatwarning = old_formatwarning


def output(message: Any) -> None:
    """Print a message if verbosity is turned on."""
    if options.verbose:
        if not callable(options.verbose_output):
            raise TypeError("options.verbose_output should be callable.")
        options.verbose_output(str(message))
        if options.flush_output:
            sys.stdout.flush()


def format_seconds(seconds: float) -> str:
    """Prepare a number of seconds to be displayed as a string."""
    hours, remainder = divmod(int(round(seconds)), 60**2)
    minutes, seconds = divmod(remainder, 60)
    return f'{hours:02}:{minutes:02}:{seconds:02}'


def format_number(number: Any) -> str:
    """Prepare a number to be displayed as a string."""
    if not isinstance(options.digits, int):
        raise TypeError("options.digits must be an int.")
    template = f"{{:^+{options.digits + 6}.{options.digits - 1}E}}"
    formatted = template.format(float(number))
    if "NAN" in formatted:
        formatted = formatted.replace("+", " ")
    return formatted


def format_options(mapping: Options) -> str:
    """Prepare a mapping of options to be displayed as a string."""
    strings: List[str] = []
    for key, value in mapping.items():
        if callable(value):
            value = f'{value.__module__}.{value.__qualname__}'
        elif isinstance(value, float):
            value = format_number(value)
        elif value is not None and not isinstance(value, (bool, int, str, tuple)):
            value = type(value).__name__
        strings.append(f'{key}: {value}')

    joined = ', '.join(strings)
    return f'{{{joined}}}'


def format_table(
        header: Sequence, *data: Sequence, title: Optional[str] = None, include_border: bool = True,
        include_header: bool = True, line_indices: Container[int] = ()) -> str:
    """Format table information as a string, which has fixed widths, vertical lines after any specified indices, and
    optionally a title, border, and header.
    """

    # construct the header rows
    row_index = -1
    header_rows: List[List[str]] = []
    header = [[c] if isinstance(c, str) else c for c in header]
    while True:
        header_row = ["" if len(c) < -row_index else c[row_index] for c in header]
        if not any(header_row):
            break
        header_rows.insert(0, header_row)
        row_index -= 1

    # construct the data rows
    data_rows = [[str(c) for c in r] + [""] * (len(header) - len(r)) for r in data]

    # compute column widths
    widths = []
    for column_index in range(len(header)):
        widths.append(max(len(r[column_index]) for r in header_rows + data_rows))

    # build the template
    template = "  " .join("{{:^{}}}{}".format(w, "  |" if i in line_indices else "") for i, w in enumerate(widths))

    # build the table
    lines = []
    if title is not None:
        lines.append(f"{title}:")
    if include_border:
        lines.append("=" * len(template.format(*[""] * len(widths))))
    if include_header:
        lines.extend([template.format(*r) for r in header_rows])
        lines.append(template.format(*("-" * w for w in widths)))
    lines.extend([template.format(*r) for r in data_rows])
    if include_border:
        lines.append("=" * len(template.format(*[""] * len(widths))))
    return "\n".join(lines)


def validate_interval(a: Any, b: Any) -> Interval:
    """Validate that integration bounds form a finite interval with a < b and convert them to floats."""
    try:
        a = float(a)
        b = float(b)
    except (TypeError, ValueError) as exception:
        raise TypeError("The integration bounds a and b must be real numbers.") from exception
    if not (abs(a) < float('inf') and abs(b) < float('inf')):
        raise ValueError(f"The integration bounds must be finite, but got a = {a} and b = {b}.")
    if not a < b:
        raise ValueError(
            f"The lower integration bound must be smaller than the upper one, but got a = {a} and b = {b}."
        )
    if not abs(b - a) < float('inf'):
        raise ValueError(f"The width of the interval from a = {a} to b = {b} overflows.")
    return a, b


class StringRepresentation(object):
    """Object that defers to its string representation."""

    def __repr__(self) -> str:
        """Defer to the string representation."""
        return str(self)


class Error(Exception):
    """Errors with a message that is parsed from the docstring."""

    stack: Optional[str]

    def __init__(self) -> None:
        """Optionally store the full current traceback for debugging purposes."""
        if options.verbose_tracebacks:
            self.stack = ''.join(traceback.format_stack())
        else:
            self.stack = None

    def __repr__(self) -> str:
        """Defer to the string representation."""
        return str(self)

    def __str__(self) -> str:
        """Replace docstring markdown with simple text."""
        doc = inspect.getdoc(self)
        assert doc is not None

        # normalize LaTeX
        while True:
            match = re.search(r':math:`([^`]+)`', doc)
            if match is None:
                break
            start, end = match.span()
            doc = doc[:start] + re.sub(r'\s+', ' ', re.sub(r'[\\{}]', ' ', match.group(1))).lower() + doc[end:]

        # remove all remaining domains and compress whitespace
        doc = re.sub(r'[\s\n]+', ' ', re.sub(r':[a-z\-]+:|`', '', doc))

        # optionally add the full traceback
        if self.stack is not None:
            doc = f"{doc} Traceback:\n\n{self.stack}\n"
        return doc
