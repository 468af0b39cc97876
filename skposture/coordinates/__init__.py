# flake8: noqa

from .base import Transform

from .math import convert_to_axis_vector
from .math import cross_product
from .math import normalize_vector
from .math import outer_product_matrix
from .math import random_rotation
from .math import rotation_matrix
from .math import rpy_matrix
