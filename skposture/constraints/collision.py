from dataclasses import dataclass
from logging import getLogger

import numpy as np

from skposture.collision import HullPair
from skposture.constraints.base import ConstraintKind
from skposture.constraints.base import DifferentiableFunction
from skposture.constraints.base import sign_coefficient
from skposture.coordinates import Transform
from skposture.kinematics import Jacobian


logger = getLogger(__name__)


@dataclass
class _TrackedBody:
    """One side of a collision pair attached to a robot link."""
    body_index: int
    hull_transform: Transform
    jacobian: Jacobian
    reduced: np.ndarray
    full: np.ndarray

    @classmethod
    def create(cls, posture, body_name, hull_transform):
        jac = Jacobian(posture.multibody, body_name)
        return cls(jac.body_index, hull_transform, jac,
                   np.zeros((1, jac.dof)),
                   np.zeros((1, posture.problem_size)))

    def hull_placement(self, posture):
        return self.hull_transform * posture.body_pose(self.body_index)

    def gradient_row(self, posture, coef, delta, world_point):
        """Fill `full` with ``coef * delta^T * J_lin(world_point)``."""
        pose = posture.body_pose(self.body_index)
        self.jacobian.point = pose.inverse_transform_vector(world_point)
        jac = self.jacobian.jacobian(posture)
        self.reduced[0] = coef * delta.dot(jac[3:6])
        if self.full.shape[1] != posture.problem_size:
            # force contacts were registered after construction
            self.full = np.zeros((1, posture.problem_size))
        return self.jacobian.full_jacobian(self.reduced, out=self.full)[0]


@dataclass
class _EnvPair:
    body: _TrackedBody
    hull_pair: HullPair
    min_dist: float


@dataclass
class _SelfPair:
    body1: _TrackedBody
    body2: _TrackedBody
    hull_pair: HullPair
    min_dist: float


class _CollisionConstraint(DifferentiableFunction):
    """Collision pairs sharing one posture.

    Each pair owns its :class:`skposture.collision.HullPair`; :meth:`close`
    releases all of them.
    """

    def __init__(self, posture, pairs, name):
        super(_CollisionConstraint, self).__init__(
            posture, len(pairs), name=name)
        self.pairs = pairs

    @property
    def min_dists(self):
        """Minimum distances of the pairs, in construction order."""
        return np.array([p.min_dist for p in self.pairs], dtype=np.float64)

    def close(self):
        for pair in self.pairs:
            pair.hull_pair.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _build(self, make_pair, collisions):
        pairs = []
        try:
            for collision in collisions:
                pairs.append(make_pair(collision))
        except Exception:
            for pair in pairs:
                pair.hull_pair.close()
            raise
        return pairs


class EnvCollisionConstraint(_CollisionConstraint):
    """Signed squared distance between robot hulls and static hulls.

    Row ``i`` is the signed squared distance of ``env_collisions[i]``.

    Parameters
    ----------
    posture : skposture.posture.PostureData
        shared posture state, with force contacts already registered.
    env_collisions : list[skposture.posture.EnvCollision]
        collision pairs.

    Raises
    ------
    ValueError
        if a body name is unknown.
    TypeError
        if a hull is missing or is not a convex shape.
    """

    kind = ConstraintKind.ENV_COLLISION

    def __init__(self, posture, env_collisions, name='EnvCollision'):
        pairs = self._build(
            lambda c: self._make_pair(posture, c), env_collisions)
        super(EnvCollisionConstraint, self).__init__(posture, pairs, name)

    @staticmethod
    def _make_pair(posture, collision):
        hull_pair = HullPair(collision.body_hull, collision.env_hull)
        try:
            body = _TrackedBody.create(
                posture, collision.body_name, collision.body_transform)
        except Exception:
            hull_pair.close()
            raise
        hull_pair.set_transformation(
            1, collision.env_transform or Transform.identity())
        return _EnvPair(body, hull_pair, collision.min_dist)

    def _compute(self, posture):
        res = np.zeros(self.output_size)
        for i, pair in enumerate(self.pairs):
            pair.hull_pair.set_transformation(
                0, pair.body.hull_placement(posture))
            res[i] = pair.hull_pair.distance()
        return res

    def _jacobian(self, posture, out):
        for i, pair in enumerate(self.pairs):
            pair.hull_pair.set_transformation(
                0, pair.body.hull_placement(posture))
            dist, point_body, point_env = pair.hull_pair.closest_points()
            delta = point_body - point_env
            if not np.any(delta):
                logger.debug('%s: pair %d has coincident closest points',
                             self.name, i)
            coef = sign_coefficient(dist)
            out[i] = pair.body.gradient_row(posture, coef, delta, point_body)
        return out


class SelfCollisionConstraint(_CollisionConstraint):
    """Signed squared distance between hulls of two robot links.

    Row ``i`` is the signed squared distance of ``self_collisions[i]``;
    its jacobian is the body 1 contribution minus the body 2 one.

    Parameters
    ----------
    posture : skposture.posture.PostureData
        shared posture state, with force contacts already registered.
    self_collisions : list[skposture.posture.SelfCollision]
        collision pairs.

    Raises
    ------
    ValueError
        if a body name is unknown.
    TypeError
        if a hull is missing or is not a convex shape.
    """

    kind = ConstraintKind.SELF_COLLISION

    def __init__(self, posture, self_collisions, name='SelfCollision'):
        pairs = self._build(
            lambda c: self._make_pair(posture, c), self_collisions)
        super(SelfCollisionConstraint, self).__init__(posture, pairs, name)

    @staticmethod
    def _make_pair(posture, collision):
        hull_pair = HullPair(collision.body1_hull, collision.body2_hull)
        try:
            body1 = _TrackedBody.create(
                posture, collision.body1_name, collision.body1_transform)
            body2 = _TrackedBody.create(
                posture, collision.body2_name, collision.body2_transform)
        except Exception:
            hull_pair.close()
            raise
        return _SelfPair(body1, body2, hull_pair, collision.min_dist)

    def _place(self, posture, pair):
        pair.hull_pair.set_transformation(
            0, pair.body1.hull_placement(posture))
        pair.hull_pair.set_transformation(
            1, pair.body2.hull_placement(posture))

    def _compute(self, posture):
        res = np.zeros(self.output_size)
        for i, pair in enumerate(self.pairs):
            self._place(posture, pair)
            res[i] = pair.hull_pair.distance()
        return res

    def _jacobian(self, posture, out):
        for i, pair in enumerate(self.pairs):
            self._place(posture, pair)
            dist, point1, point2 = pair.hull_pair.closest_points()
            delta = point1 - point2
            if not np.any(delta):
                logger.debug('%s: pair %d has coincident closest points',
                             self.name, i)
            coef = sign_coefficient(dist)
            row1 = pair.body1.gradient_row(posture, coef, delta, point1)
            row2 = pair.body2.gradient_row(posture, coef, delta, point2)
            out[i] = row1 - row2
        return out
