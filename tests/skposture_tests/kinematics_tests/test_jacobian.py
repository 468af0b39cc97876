import unittest

import numpy as np
from numpy import testing

from skposture.coordinates import Transform
from skposture.kinematics import Jacobian
from skposture.model import LinearJoint
from skposture.model import Link
from skposture.model import MultiBody
from skposture.model import RotationalJoint
from skposture.models import make_serial_arm
from skposture.models import make_z12_arm
from skposture.posture import ForceContact
from skposture.posture import PostureData


def numerical_point_jacobian(posture, body_index, point, x0, eps=1e-6):
    n_dof = posture.kinematic_dof
    jac = np.zeros((3, n_dof))
    for idx in range(n_dof):
        x1 = x0.copy()
        x1[idx] += eps
        posture.set_parameters(x1)
        p1 = posture.body_pose(body_index).transform_vector(point)
        x2 = x0.copy()
        x2[idx] -= eps
        posture.set_parameters(x2)
        p2 = posture.body_pose(body_index).transform_vector(point)
        jac[:, idx] = (p1 - p2) / (2 * eps)
    posture.set_parameters(x0)
    return jac


class TestJacobian(unittest.TestCase):

    @classmethod
    def setup_class(cls):
        cls.arm = make_z12_arm()
        cls.posture = PostureData(cls.arm)
        cls.posture.forces([ForceContact('b4', [Transform.identity()])])

    def test_chain(self):
        jac = Jacobian(self.arm, 'b5')
        self.assertEqual(jac.dof, 5)
        testing.assert_equal(jac.columns, [0, 1, 2, 3, 4])
        testing.assert_equal(jac.point, np.zeros(3))
        with self.assertRaises(ValueError):
            Jacobian(self.arm, 'unknown')

    def test_linear_block(self):
        rs = np.random.RandomState(0)
        posture = self.posture
        for body_name in ['b1', 'b6', 'b12']:
            jac = Jacobian(self.arm, body_name)
            for _ in range(10):
                x = rs.uniform(-np.pi, np.pi, posture.problem_size)
                point = rs.randn(3)
                jac.point = point
                posture.set_parameters(x)
                analytic = jac.full_jacobian(
                    jac.jacobian(posture)[3:6].copy(),
                    n_cols=posture.problem_size)
                numerical = numerical_point_jacobian(
                    posture, jac.body_index, point, x)
                testing.assert_allclose(
                    analytic[:, :posture.kinematic_dof], numerical,
                    atol=1e-6)
                testing.assert_equal(
                    analytic[:, posture.force_params_begin:], 0.0)

    def test_vector_jacobian(self):
        rs = np.random.RandomState(1)
        posture = self.posture
        jac = Jacobian(self.arm, 'b8')
        local = rs.randn(3)
        eps = 1e-6
        for _ in range(10):
            x = rs.uniform(-np.pi, np.pi, posture.problem_size)
            posture.set_parameters(x)
            vector = posture.body_pose(jac.body_index).rotate_vector(local)
            analytic = jac.vector_jacobian(posture, vector)[3:6].copy()
            for col, param in enumerate(jac.columns):
                x1 = x.copy()
                x1[param] += eps
                posture.set_parameters(x1)
                v1 = posture.body_pose(jac.body_index).rotate_vector(local)
                x2 = x.copy()
                x2[param] -= eps
                posture.set_parameters(x2)
                v2 = posture.body_pose(jac.body_index).rotate_vector(local)
                testing.assert_allclose(
                    analytic[:, col], (v1 - v2) / (2 * eps), atol=1e-6)

    def test_full_jacobian(self):
        jac = Jacobian(self.arm, 'b3')
        reduced = np.arange(6, dtype=np.float64).reshape(2, 3) + 1.0
        out = np.full((2, 15), 7.0)
        jac.full_jacobian(reduced, out=out)
        testing.assert_equal(out[:, :3], reduced)
        testing.assert_equal(out[:, 3:], 0.0)
        with self.assertRaises(ValueError):
            jac.full_jacobian(np.zeros((2, 4)), out=out)
        with self.assertRaises(ValueError):
            jac.full_jacobian(reduced)

    def test_root_body(self):
        jac = Jacobian(self.arm, 'b0')
        self.assertEqual(jac.dof, 0)
        self.posture.set_parameters(np.zeros(15))
        self.assertEqual(jac.jacobian(self.posture).shape, (6, 0))

    def test_linear_joint(self):
        root = Link('root')
        slider = Link('slider')
        tip = Link('tip')
        LinearJoint('slide', root, slider, axis='x',
                    min_angle=-1.0, max_angle=1.0)
        RotationalJoint('rot', slider, tip, origin=Transform([0, 1, 0]))
        mb = MultiBody([root, slider, tip], [slider.joint, tip.joint])
        posture = PostureData(mb)
        posture.forces([])
        x = np.array([0.3, 0.7])
        posture.set_parameters(x)
        jac = Jacobian(mb, 'tip', point=[0.5, 0.0, 0.0])
        analytic = jac.jacobian(posture)[3:6]
        numerical = numerical_point_jacobian(
            posture, jac.body_index, jac.point, x)
        testing.assert_allclose(analytic, numerical, atol=1e-6)
        testing.assert_almost_equal(analytic[:, 0], [1.0, 0.0, 0.0])

    def test_fixed_end_effector(self):
        arm = make_serial_arm(n_links=3, with_end_effector=True)
        jac = Jacobian(arm, 'ee')
        self.assertEqual(jac.dof, 3)
