import unittest

import numpy as np
from numpy import testing

from skposture.collision import Sphere
from skposture.constraints import ConstraintKind
from skposture.coordinates import Transform
from skposture.errors import InvalidSizeError
from skposture.models import make_serial_arm
from skposture.planner import PostureGenerator
from skposture.planner import scipinize
from skposture.posture import EnvCollision
from skposture.posture import FixedOrientationContact
from skposture.posture import FixedPositionContact
from skposture.posture import ForceContact
from skposture.posture import RobotConfig
from skposture.posture import RunConfig
from skposture.posture import SelfCollision


class TestPostureGenerator(unittest.TestCase):

    def test_position_contact(self):
        # j2 turns about x so that the end effector offset moves with it
        arm = make_serial_arm(n_links=3, axes=('z', 'x', 'x'),
                              with_end_effector=True)
        q_true = np.array([0.3, -0.4, 0.5])
        poses, _ = arm.forward_kinematics(q_true)
        target = poses[arm.body_index_by_name('ee')].translation
        config = RobotConfig(
            arm, fixed_pos_contacts=[FixedPositionContact('ee', target)])
        with PostureGenerator(config) as pg:
            result = pg.run(RunConfig(target_q=q_true + 0.05))
            self.assertTrue(result.success)
            poses, _ = arm.forward_kinematics(result.q)
            testing.assert_almost_equal(
                poses[arm.body_index_by_name('ee')].translation, target,
                decimal=4)
            self.assertEqual(result.forces, [])

    def test_env_collision(self):
        arm = make_serial_arm(n_links=2, axes=('z',))
        obstacle = Sphere(np.zeros(3), 0.2)
        min_dist = 0.05
        config = RobotConfig(arm, env_collisions=[EnvCollision(
            'b2', Sphere(np.zeros(3), 0.1), Transform([0.0, 0.5, 0.0]),
            obstacle, min_dist=min_dist,
            env_transform=Transform([0.0, 1.0, 0.0]))])
        with PostureGenerator(config) as pg:
            result = pg.run(RunConfig(init_q=np.array([0.8, 0.0])))
            self.assertTrue(result.success)
            value = pg.collision_constraints[0].evaluate(result.x)
            self.assertGreaterEqual(value[0], min_dist ** 2 - 1e-6)
        self.assertTrue(pg.collision_constraints[0].pairs[0].hull_pair.closed)

    def test_forces(self):
        arm = make_serial_arm(n_links=2)
        config = RobotConfig(
            arm, force_contacts=[ForceContact('b2', [Transform()])],
            force_scale=1.0)
        with PostureGenerator(config) as pg:
            self.assertEqual(pg.posture.problem_size, 5)
            self.assertEqual(len(pg.ineq_constraints), 2)
            result = pg.run(RunConfig(init_forces=[[0.0, 0.0, 1.0]]))
            self.assertEqual(result.forces[0].shape, (1, 3))
            testing.assert_almost_equal(result.forces[0], np.zeros((1, 3)),
                                        decimal=3)

    def test_constraint_kinds(self):
        arm = make_serial_arm(n_links=4)
        config = RobotConfig(
            arm,
            fixed_pos_contacts=[FixedPositionContact('b4', [0.0, 1.0, 0.0])],
            fixed_ori_contacts=[FixedOrientationContact('b4', np.eye(3))],
            force_contacts=[ForceContact('b3', [Transform()])],
            env_collisions=[EnvCollision(
                'b2', Sphere(np.zeros(3), 0.1), Transform(),
                Sphere(np.zeros(3), 0.1), min_dist=0.2,
                env_transform=Transform([2.0, 0.0, 0.0]))],
            self_collisions=[SelfCollision(
                'b1', Sphere(np.zeros(3), 0.1), Transform(),
                'b4', Sphere(np.zeros(3), 0.1), Transform())])
        with PostureGenerator(config) as pg:
            self.assertEqual(
                [c.kind for c in pg.eq_constraints],
                [ConstraintKind.FIXED_POSITION,
                 ConstraintKind.FIXED_ORIENTATION])
            self.assertEqual(
                [c.kind for c in pg.ineq_constraints],
                [ConstraintKind.ENV_COLLISION,
                 ConstraintKind.SELF_COLLISION,
                 ConstraintKind.POSITIVE_FORCE,
                 ConstraintKind.FRICTION_CONE])
            self.assertEqual(len(pg.collision_constraints), 2)
            testing.assert_equal(pg.eq_offsets[1], np.ones(3))
            testing.assert_almost_equal(pg.ineq_offsets[0], [0.04])
            testing.assert_equal(pg.ineq_offsets[1], [0.0])

            class Unknown(object):
                kind = None
                name = 'Unknown'
            with self.assertRaises(ValueError):
                pg.add_constraint(Unknown())
        for constr in pg.collision_constraints:
            self.assertTrue(constr.pairs[0].hull_pair.closed)

    def test_invalid_run_config(self):
        arm = make_serial_arm(n_links=2)
        with PostureGenerator(RobotConfig(arm)) as pg:
            with self.assertRaises(InvalidSizeError):
                pg.run(RunConfig(init_q=np.zeros(3)))
            with self.assertRaises(InvalidSizeError):
                pg.run(RunConfig(target_q=np.zeros(1)))

    def test_scipinize(self):
        def fun(x):
            return np.array([x.dot(x)]), 2.0 * x.reshape(1, -1)
        f, jac = scipinize(fun)
        x = np.array([1.0, 2.0])
        testing.assert_equal(f(x), [5.0])
        testing.assert_equal(jac(x), [[2.0, 4.0]])
        testing.assert_equal(jac(np.array([0.0, 1.0])), [[0.0, 2.0]])
