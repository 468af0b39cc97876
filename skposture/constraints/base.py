import enum
import math

import numpy as np

from skposture.errors import UnsupportedOperationError


class ConstraintKind(enum.Enum):
    ENV_COLLISION = 'env_collision'
    SELF_COLLISION = 'self_collision'
    FIXED_POSITION = 'fixed_position'
    FIXED_ORIENTATION = 'fixed_orientation'
    POSITIVE_FORCE = 'positive_force'
    FRICTION_CONE = 'friction_cone'


def sign_coefficient(distance):
    """Slope factor of the signed squared distance.

    The factor is ``+2`` for a positive (or ``+0.0``) distance and ``-2``
    for a negative one; the jacobian jumps at ``distance == 0``.
    """
    if math.copysign(1.0, distance) < 0.0:
        return -2.0
    return 2.0


class DifferentiableFunction(object):
    """Vector valued function of the decision vector.

    `evaluate` and `jacobian` install the decision vector in the shared
    posture and pass it to the kind specific :meth:`_compute` and
    :meth:`_jacobian`, which only read from it.

    Parameters
    ----------
    posture : skposture.posture.PostureData
        shared posture state.
    output_size : int
        number of rows.
    name : str
        display name.
    """

    kind = None

    def __init__(self, posture, output_size, name=None):
        self.posture = posture
        self.output_size = output_size
        self.name = name or self.__class__.__name__

    @property
    def input_size(self):
        return self.posture.problem_size

    def size(self):
        """Return ``(output_size, input_size)``."""
        return self.output_size, self.input_size

    def evaluate(self, x):
        """Evaluate the function.

        Parameters
        ----------
        x : numpy.ndarray(input_size,)
            decision vector.

        Returns
        -------
        value : numpy.ndarray(output_size,)

        Raises
        ------
        skposture.errors.InvalidSizeError
            if `x` has a wrong size.
        """
        self.posture.set_parameters(x)
        return self._compute(self.posture)

    def jacobian(self, x):
        """Evaluate the jacobian.

        Parameters
        ----------
        x : numpy.ndarray(input_size,)
            decision vector.

        Returns
        -------
        jac : numpy.ndarray(output_size, input_size)

        Raises
        ------
        skposture.errors.InvalidSizeError
            if `x` has a wrong size.
        """
        self.posture.set_parameters(x)
        out = np.zeros(self.size())
        self._jacobian(self.posture, out)
        return out

    def value_and_jacobian(self, x):
        return self.evaluate(x), self.jacobian(x)

    def gradient(self, x, function_id=0):
        raise UnsupportedOperationError(
            '{} is vector valued and has no gradient, use jacobian'.format(
                self.name))

    def _compute(self, posture):
        raise NotImplementedError

    def _jacobian(self, posture, out):
        raise NotImplementedError

    def __repr__(self):
        return '#<{} {} rows={}>'.format(
            self.__class__.__name__, self.name, self.output_size)
