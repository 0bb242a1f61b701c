r"""Global options.

Attributes
----------
digits : `int`
    Number of digits displayed by status updates. The default number of digits is ``7``. The number of digits can be
    changed to, for example, ``2``, with ``pytanhsinh.options.digits = 2``.
verbose : `bool`
    Whether to output status updates. By default, verbosity is turned on. Verbosity can be turned off with
    ``pytanhsinh.options.verbose = False``.
verbose_tracebacks : `bool`
    Whether to include full tracebacks in error messages. By default, full tracebacks are turned off. These can be
    useful when attempting to find the source of an error message. Tracebacks can be turned on with
    ``pytanhsinh.options.verbose_tracebacks = True``.
verbose_output : `callable`
    Function used to output status updates. The default function is simply ``print``. The function can be changed, for
    example, to include an indicator that statuses are from this package, with
    ``pytanhsinh.options.verbose_output = lambda x: print(f"pytanhsinh: {x}")``.
flush_output : `bool`
    Whether to call ``sys.stdout.flush()`` after outputting a status update. By default, output is not flushed to
    standard output. To force standard output flushes after every status update, set
    ``pytanhsinh.options.flush_output = True``.
chunk_size : `int`
    Default number of abscissa and weight pairs that are evaluated together by the ``'parallel'`` evaluation strategy,
    which is by default ``32``. Each chunk is one unit of work handed to an executor. Larger chunks reduce the overhead
    of dispatching work, but with only a few hundred pairs per refinement level, chunks that are too large leave workers
    idle. The default can be overridden for a single :class:`Evaluation` with its ``chunk_size`` option.
quadratic_bounds : `tuple of float`
    Open interval for the ratio :math:`\log \Delta_k / \log \Delta_{k - 1}` of consecutive changes in the estimate
    within which convergence is deemed quadratic. When the ratio falls inside these bounds, the error estimate is
    tightened from :math:`\Delta_k` to :math:`\Delta_k^2`. The default bounds are ``(1.99, 2.01)``. To never tighten
    error estimates, set ``pytanhsinh.options.quadratic_bounds = (numpy.inf, numpy.inf)``.
absolute_margin : `float`
    Safety margin applied by :func:`absolute` to the target error, which is by default ``0.1``. A result is accepted
    once its error estimate is smaller than ``absolute_margin * target_error``.

"""

digits = 7
verbose = True
verbose_tracebacks = False
verbose_output = print
flush_output = False
chunk_size = 32
quadratic_bounds = (1.99, 2.01)
absolute_margin = 0.1
