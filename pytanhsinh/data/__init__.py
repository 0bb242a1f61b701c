r"""Locations of the precomputed tanh-sinh abscissas and weights that are included in the package.

Attributes
----------
LEVELS_LOCATION : `str`
    Location of a CSV file containing the abscissas and weights of each refinement level. Each row has a ``level``
    index, an ``abscissa`` :math:`t \in (0, 1)`, and a positive ``weight``. Level :math:`k` only contains the
    :math:`6 \cdot 2^k` abscissas that are not already covered by lower levels, ordered from the center of the interval
    outwards.
SEEDS_LOCATION : `str`
    Location of a CSV file containing the two seed tables that, along with the base weight of the midpoint, initialize
    the trapezoid sum before the first refinement level. Each row has a ``seed`` index of ``0`` or ``1``, an
    ``abscissa``, and a ``weight``.
BASE_WEIGHT : `float`
    Weight of the midpoint of the interval, which is :math:`\pi / 4`.

"""

from pathlib import Path


_DATA_PATH = Path(__file__).resolve().parent
LEVELS_LOCATION = str(_DATA_PATH / 'tanh_sinh_levels.csv')
SEEDS_LOCATION = str(_DATA_PATH / 'tanh_sinh_seeds.csv')
BASE_WEIGHT = 0.7853981633974483
