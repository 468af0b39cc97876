import unittest

import numpy as np
from numpy import testing

from skposture.coordinates import Transform
from skposture.model import FixedJoint
from skposture.model import Link
from skposture.model import MultiBody
from skposture.model import RotationalJoint
from skposture.models import make_serial_arm
from skposture.models import make_z12_arm


class TestMultiBody(unittest.TestCase):

    @classmethod
    def setup_class(cls):
        cls.arm = make_z12_arm()

    def test_layout(self):
        arm = self.arm
        self.assertEqual(arm.nr_dof, 12)
        self.assertEqual(len(arm.link_list), 13)
        self.assertEqual(arm.root_link.name, 'b0')
        self.assertEqual(arm.body_index_by_name('b5'), 5)
        self.assertIs(arm.link('b5'), arm.link_list[5])
        self.assertEqual(arm.link('b5').name, 'b5')
        self.assertEqual(arm.joint_path(3), [0, 1, 2])
        self.assertEqual(arm.joint_path(0), [])
        lower, upper = arm.joint_limits()
        testing.assert_equal(lower, [-np.pi] * 12)
        testing.assert_equal(upper, [np.pi] * 12)

    def test_unknown_body(self):
        with self.assertRaises(ValueError):
            self.arm.body_index_by_name('no_such_body')
        with self.assertRaises(ValueError):
            self.arm.joint_index_by_name('no_such_joint')

    def test_forward_kinematics_zero(self):
        poses, joint_frames = self.arm.forward_kinematics(np.zeros(12))
        self.assertEqual(len(poses), 13)
        self.assertEqual(len(joint_frames), 12)
        for i in range(1, 13):
            testing.assert_almost_equal(
                poses[i].translation, [0.0, 0.5 * (i - 1), 0.0])
            testing.assert_almost_equal(poses[i].rotation, np.eye(3))

    def test_forward_kinematics_rotated(self):
        q = np.zeros(12)
        q[0] = np.pi / 2
        poses, _ = self.arm.forward_kinematics(q)
        testing.assert_almost_equal(poses[2].translation, [-0.5, 0.0, 0.0])
        testing.assert_almost_equal(poses[3].translation, [-1.0, 0.0, 0.0])

    def test_forward_kinematics_wrong_size(self):
        with self.assertRaises(ValueError):
            self.arm.forward_kinematics(np.zeros(5))

    def test_fixed_joint(self):
        arm = make_serial_arm(n_links=2, with_end_effector=True)
        self.assertEqual(arm.nr_dof, 2)
        poses, _ = arm.forward_kinematics(np.zeros(2))
        ee = arm.body_index_by_name('ee')
        testing.assert_almost_equal(poses[ee].translation, [0.0, 1.0, 0.0])

    def test_link_order(self):
        root = Link('root')
        a = Link('a')
        b = Link('b')
        ja = RotationalJoint('ja', root, a, origin=Transform([1, 0, 0]))
        jb = FixedJoint('jb', a, b)
        mb = MultiBody([b, a, root], [jb, ja])
        self.assertEqual([l.name for l in mb.link_list], ['root', 'a', 'b'])
        self.assertEqual([j.name for j in mb.joint_list], ['ja', 'jb'])
        self.assertEqual(mb.parent_link_index, [-1, 0, 1])

    def test_invalid_tree(self):
        root = Link('root')
        a = Link('a')
        RotationalJoint('ja', root, a)
        with self.assertRaises(ValueError):
            MultiBody([root, a, Link('orphan')], [a.joint])
        dup = Link('a')
        with self.assertRaises(ValueError):
            MultiBody([root, a, dup], [a.joint])
