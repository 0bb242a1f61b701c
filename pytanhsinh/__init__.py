"""Public-facing objects."""

from . import data, exceptions, options
from .configurations.evaluation import Evaluation
from .configurations.quadrature import Quadrature
from .filters import absolute, confidence, relative
from .quadrature import integrate, par_simpson, par_trap, simpson, trap
from .results import Result
from .tables import load_tables
from .transforms import everywhere, non_negative
from .utilities.basics import parallel
from .version import __version__

__all__ = [
    'data', 'exceptions', 'options', 'Evaluation', 'Quadrature', 'absolute', 'confidence', 'relative', 'integrate',
    'par_simpson', 'par_trap', 'simpson', 'trap', 'Result', 'load_tables', 'everywhere', 'non_negative', 'parallel',
    '__version__'
]
