import unittest

import numpy as np
from numpy import testing

from skposture.constraints import ConstraintKind
from skposture.constraints import FrictionConeConstraint
from skposture.constraints import PositiveForceConstraint
from skposture.coordinates import rpy_matrix
from skposture.coordinates import Transform
from skposture.errors import InvalidSizeError
from skposture.models import make_z12_arm
from skposture.posture import ForceContact
from skposture.posture import PostureData


def jacobian_test_util(constr, x0, eps=1e-6, atol=1e-4):
    jac = constr.jacobian(x0)
    jac_numerical = np.zeros(jac.shape)
    for idx in range(len(x0)):
        x1 = x0.copy()
        x1[idx] += eps
        x2 = x0.copy()
        x2[idx] -= eps
        jac_numerical[:, idx] = \
            (constr.evaluate(x1) - constr.evaluate(x2)) / (2 * eps)
    testing.assert_allclose(jac, jac_numerical, rtol=0.0, atol=atol)


class TestForceConstraint(unittest.TestCase):

    @classmethod
    def setup_class(cls):
        cls.arm = make_z12_arm()
        posture = PostureData(cls.arm)
        posture.forces([
            ForceContact('b6', [Transform([0.1, 0.0, 0.0],
                                          rpy_matrix(0.2, 0.5, 0.1)),
                                Transform([-0.1, 0.0, 0.0],
                                          rpy_matrix(-0.3, 0.1, 0.4))],
                         mu=0.5),
            ForceContact('b12', [Transform(rotation=rpy_matrix(0, 0, 1.0))],
                         mu=1.0),
        ])
        cls.posture = posture
        cls.positive = PositiveForceConstraint(posture)
        cls.cone = FrictionConeConstraint(posture)

    def test_size(self):
        self.assertEqual(self.posture.problem_size, 21)
        self.assertEqual(self.positive.size(), (3, 21))
        self.assertEqual(self.cone.size(), (3, 21))
        self.assertEqual(self.positive.kind, ConstraintKind.POSITIVE_FORCE)
        self.assertEqual(self.cone.kind, ConstraintKind.FRICTION_CONE)

    def test_jacobian(self):
        rs = np.random.RandomState(0)
        for _ in range(100):
            x = rs.uniform(-np.pi, np.pi, self.posture.problem_size)
            jacobian_test_util(self.positive, x)
            jacobian_test_util(self.cone, x)

    def test_values(self):
        posture = self.posture
        x = posture.zero_parameters()
        # identity point frame rotated about x by 1 rad on b12
        normal = rpy_matrix(0, 0, 1.0)[:, 2]
        x[18:21] = 2.0 * normal
        testing.assert_almost_equal(self.positive.evaluate(x)[2], 2.0)
        # force along the normal is inside the cone
        testing.assert_almost_equal(self.cone.evaluate(x)[2], 4.0)

        tangent = rpy_matrix(0, 0, 1.0)[:, 0]
        x[18:21] = normal + 1.0 * tangent
        testing.assert_almost_equal(self.cone.evaluate(x)[2], 0.0)
        x[18:21] = normal + 2.0 * tangent
        self.assertLess(self.cone.evaluate(x)[2], 0.0)

    def test_force_column_layout(self):
        x = np.random.RandomState(1).uniform(-1, 1, 21)
        jac = self.positive.jacobian(x)
        testing.assert_equal(jac[0, 15:], 0.0)
        testing.assert_equal(jac[1, 12:15], 0.0)
        testing.assert_equal(jac[2, 12:18], 0.0)
        testing.assert_equal(jac[0, 6:12], 0.0)

    def test_invalid_size(self):
        with self.assertRaises(InvalidSizeError):
            self.cone.evaluate(np.zeros(20))
