"""Configuration classes."""

from .evaluation import Evaluation
from .quadrature import Quadrature
