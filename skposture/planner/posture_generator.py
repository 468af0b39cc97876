from dataclasses import dataclass
from logging import getLogger
import math
from typing import List

import numpy as np
import scipy.optimize

from skposture.constraints import ConstraintKind
from skposture.constraints import EnvCollisionConstraint
from skposture.constraints import FixedOrientationContactConstraint
from skposture.constraints import FixedPositionContactConstraint
from skposture.constraints import FrictionConeConstraint
from skposture.constraints import PositiveForceConstraint
from skposture.constraints import SelfCollisionConstraint
from skposture.errors import InvalidSizeError
from skposture.planner.utils import scipinize
from skposture.posture import PostureData
from skposture.posture import RunConfig


logger = getLogger(__name__)


@dataclass
class PostureResult:
    """Solution of a posture problem.

    Parameters
    ----------
    q : numpy.ndarray(nr_dof,)
        joint parameters.
    forces : list[numpy.ndarray]
        world forces of each force contact, ``(n_points, 3)`` each.
    x : numpy.ndarray(problem_size,)
        decision vector.
    success : bool
        solver status.
    message : str
        solver message.
    nit : int
        number of iterations.
    cost : float
        final cost.
    """
    q: np.ndarray
    forces: List[np.ndarray]
    x: np.ndarray
    success: bool
    message: str
    nit: int
    cost: float


class PostureGenerator(object):
    """Static posture solver using scipy's SLSQP.

    Contacts are equality constraints, collision pairs, positive forces
    and friction cones are inequality constraints and joint limits are
    bounds. The cost is
    ``posture_scale * |q - target_q|^2 + force_scale * |f|^2``.

    Parameters
    ----------
    robot_config : skposture.posture.RobotConfig
        problem description.
    slsqp_option : dict or None
        option of slsqp. Please see `options` in
        https://docs.scipy.org/doc/scipy/reference/optimize.minimize-slsqp.html
        for the detail. If set to `None`, a default values is used.
    """

    def __init__(self, robot_config, slsqp_option=None):
        self.robot_config = robot_config
        if slsqp_option is None:
            slsqp_option = {'ftol': 1e-8, 'disp': False, 'maxiter': 200}
        self.slsqp_option = slsqp_option

        self.posture = PostureData(robot_config.multibody)
        self.posture.forces(robot_config.force_contacts)

        self.eq_constraints = []
        self.eq_offsets = []
        self.ineq_constraints = []
        self.ineq_offsets = []
        self.collision_constraints = []
        try:
            for constr in self._create_constraints():
                self.add_constraint(constr)
        except Exception:
            self.close()
            raise

    def _create_constraints(self):
        cfg = self.robot_config
        posture = self.posture
        for contact in cfg.fixed_pos_contacts:
            yield FixedPositionContactConstraint(posture, contact)
        for contact in cfg.fixed_ori_contacts:
            yield FixedOrientationContactConstraint(posture, contact)
        if cfg.env_collisions:
            yield EnvCollisionConstraint(posture, cfg.env_collisions)
        if cfg.self_collisions:
            yield SelfCollisionConstraint(posture, cfg.self_collisions)
        if posture.nr_force_points > 0:
            yield PositiveForceConstraint(posture)
            if cfg.with_friction_cone:
                yield FrictionConeConstraint(posture)

    def add_constraint(self, constr):
        """Register a constraint according to its kind.

        Contacts are equalities, the other kinds are ``>= 0``
        inequalities. Collision rows are shifted by the signed squared
        minimum distance and orientation rows by one.

        Raises
        ------
        ValueError
            if `constr` has no known kind.
        """
        kind = constr.kind
        if kind == ConstraintKind.FIXED_POSITION:
            self.eq_constraints.append(constr)
            self.eq_offsets.append(np.zeros(constr.output_size))
        elif kind == ConstraintKind.FIXED_ORIENTATION:
            self.eq_constraints.append(constr)
            self.eq_offsets.append(np.ones(constr.output_size))
        elif kind in (ConstraintKind.ENV_COLLISION,
                      ConstraintKind.SELF_COLLISION):
            self.collision_constraints.append(constr)
            self.ineq_constraints.append(constr)
            self.ineq_offsets.append(np.array(
                [math.copysign(d * d, d) for d in constr.min_dists]))
        elif kind in (ConstraintKind.POSITIVE_FORCE,
                      ConstraintKind.FRICTION_CONE):
            self.ineq_constraints.append(constr)
            self.ineq_offsets.append(np.zeros(constr.output_size))
        else:
            raise ValueError(
                'unsupported constraint kind {!r} of {}'.format(
                    kind, constr.name))

    @property
    def constraints(self):
        return self.eq_constraints + self.ineq_constraints

    def close(self):
        """Release the hull pairs of the collision constraints."""
        for constr in self.collision_constraints:
            constr.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _stack(self, constraints, offsets):
        def fun(x):
            f = np.hstack([c.evaluate(x) - o
                           for c, o in zip(constraints, offsets)])
            jac = np.vstack([c.jacobian(x) for c in constraints])
            return f, jac
        return fun

    def _cost(self, target_q):
        cfg = self.robot_config
        begin = self.posture.force_params_begin

        def fun_objective(x):
            dq = x[:begin] - target_q
            f = x[begin:]
            cost = cfg.posture_scale * dq.dot(dq) \
                + cfg.force_scale * f.dot(f)
            grad = np.hstack([2.0 * cfg.posture_scale * dq,
                              2.0 * cfg.force_scale * f])
            return cost, grad
        return fun_objective

    def initial_vector(self, run_config):
        """Build the initial decision vector of `run_config`."""
        posture = self.posture
        x0 = posture.zero_parameters()
        begin = posture.force_params_begin
        if run_config.init_q is not None:
            init_q = np.asarray(run_config.init_q, dtype=np.float64)
            if init_q.shape != (begin,):
                raise InvalidSizeError(begin, init_q.size)
            x0[:begin] = init_q
        if run_config.init_forces is not None:
            init_forces = np.asarray(
                run_config.init_forces, dtype=np.float64).reshape(-1)
            n_force = posture.problem_size - begin
            if init_forces.size != n_force:
                raise InvalidSizeError(n_force, init_forces.size)
            x0[begin:] = init_forces
        return x0

    def bounds(self):
        lower, upper = self.robot_config.multibody.joint_limits()
        bounds = list(zip(lower, upper))
        n_force = self.posture.problem_size - self.posture.force_params_begin
        bounds += [(None, None)] * n_force
        return bounds

    def run(self, run_config=None):
        """Solve the posture problem.

        Parameters
        ----------
        run_config : skposture.posture.RunConfig or None
            initial guess and target posture. zeros if None.

        Returns
        -------
        result : PostureResult
        """
        if run_config is None:
            run_config = RunConfig()
        posture = self.posture
        begin = posture.force_params_begin
        x0 = self.initial_vector(run_config)
        if run_config.target_q is None:
            target_q = np.zeros(begin)
        else:
            target_q = np.asarray(run_config.target_q, dtype=np.float64)
            if target_q.shape != (begin,):
                raise InvalidSizeError(begin, target_q.size)

        constraints = []
        if self.eq_constraints:
            fun, jac = scipinize(
                self._stack(self.eq_constraints, self.eq_offsets))
            constraints.append({'type': 'eq', 'fun': fun, 'jac': jac})
        if self.ineq_constraints:
            fun, jac = scipinize(
                self._stack(self.ineq_constraints, self.ineq_offsets))
            constraints.append({'type': 'ineq', 'fun': fun, 'jac': jac})
        f, jac = scipinize(self._cost(target_q))

        def callback(xk):
            logger.debug('posture cost %s', f(xk))

        res = scipy.optimize.minimize(
            f, x0, method='SLSQP', jac=jac,
            bounds=self.bounds(),
            constraints=constraints,
            options=self.slsqp_option,
            callback=callback)
        if not res.success:
            logger.warning('posture generation failed: %s', res.message)

        x = np.array(res.x)
        forces = []
        for fd in posture.force_datas:
            forces.append(
                x[fd.param_begin:fd.param_begin + fd.nr_params].reshape(-1, 3))
        return PostureResult(
            q=x[:begin].copy(), forces=forces, x=x,
            success=bool(res.success), message=str(res.message),
            nit=int(getattr(res, 'nit', 0)), cost=float(res.fun))
