"""Quadrature-specific exceptions."""

from .utilities.basics import Error


class EmptySequenceError(Error):
    """Failed to select a result from a sequence of quadrature results because the sequence had no elements.

    Sequences produced by the quadrature rules always contain at least one result, so this error usually means that a
    sequence was consumed before being passed to :func:`absolute` or :func:`relative`. Generators can only be iterated
    over once; pass a fresh call to a quadrature rule instead.

    """
