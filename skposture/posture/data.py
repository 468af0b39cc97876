from dataclasses import dataclass
from dataclasses import field
from logging import getLogger
from typing import List

import numpy as np

from skposture.coordinates import Transform
from skposture.errors import InvalidSizeError


logger = getLogger(__name__)


@dataclass
class ForceData:
    """Force layout of one force contact.

    Parameters
    ----------
    body_index : int
        index of the link carrying the points.
    points : list[Transform]
        point frames in the body frame.
    mu : float
        friction coefficient.
    param_begin : int
        index of the first force parameter of this contact.
    forces : list[numpy.ndarray]
        world forces of the points for the installed decision vector.
    """
    body_index: int
    points: List[Transform]
    mu: float
    param_begin: int
    forces: List[np.ndarray] = field(default_factory=list)

    @property
    def nr_params(self):
        return 3 * len(self.points)

    def point_param_index(self, point_index):
        return self.param_begin + 3 * point_index


class PostureData(object):
    """Posture state shared by the constraints of one problem.

    The decision vector is made of the joint parameters followed by
    three world force components per registered force point. Installing
    a vector with :meth:`set_parameters` recomputes the link poses; every
    read refers to the most recently installed vector.

    Parameters
    ----------
    multibody : skposture.model.MultiBody
        robot model.
    """

    def __init__(self, multibody):
        self.multibody = multibody
        self.force_datas = []
        self._nr_force_params = 0
        self._x = None
        self._link_poses = None
        self._joint_frames = None

    def forces(self, force_contacts):
        """Register force contacts and fix the force parameter layout.

        Parameters
        ----------
        force_contacts : list[skposture.posture.ForceContact]
        """
        force_datas = []
        begin = self.force_params_begin
        for fc in force_contacts:
            body_index = self.multibody.body_index_by_name(fc.body_name)
            fd = ForceData(body_index, list(fc.points), fc.mu, begin)
            begin += fd.nr_params
            force_datas.append(fd)
        self.force_datas = force_datas
        self._nr_force_params = begin - self.force_params_begin
        self._x = None
        logger.debug('registered %d force contacts, problem size %d',
                     len(force_datas), self.problem_size)

    @property
    def kinematic_dof(self):
        """Number of joint parameters."""
        return self.multibody.nr_dof

    @property
    def force_params_begin(self):
        """Index of the first force parameter."""
        return self.multibody.nr_dof

    @property
    def problem_size(self):
        """Size of the decision vector."""
        return self.multibody.nr_dof + self._nr_force_params

    @property
    def nr_force_points(self):
        return sum(len(fd.points) for fd in self.force_datas)

    @property
    def x(self):
        return self._x

    @property
    def q(self):
        self._check_installed()
        return self._x[:self.force_params_begin]

    def set_parameters(self, x):
        """Install a decision vector.

        Parameters
        ----------
        x : numpy.ndarray(problem_size,)
            decision vector.

        Raises
        ------
        InvalidSizeError
            if the size of `x` differs from :attr:`problem_size`.
        """
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 1 or len(x) != self.problem_size:
            raise InvalidSizeError(self.problem_size, x.size)
        if self._x is not None and np.array_equal(x, self._x):
            return
        self._x = x.copy()
        self._link_poses, self._joint_frames = \
            self.multibody.forward_kinematics(x[:self.force_params_begin])
        for fd in self.force_datas:
            begin = fd.param_begin
            fd.forces = [x[begin + 3 * i:begin + 3 * i + 3].copy()
                         for i in range(len(fd.points))]

    def _check_installed(self):
        if self._x is None:
            raise RuntimeError(
                'no decision vector installed, call set_parameters first')

    def body_pose(self, body_index):
        """World pose of a link for the installed vector.

        Returns
        -------
        pose : skposture.coordinates.Transform
        """
        self._check_installed()
        return self._link_poses[body_index]

    @property
    def body_poses(self):
        self._check_installed()
        return self._link_poses

    def joint_frame(self, joint_index):
        """World pose of a joint frame before its motion is applied."""
        self._check_installed()
        return self._joint_frames[joint_index]

    def zero_parameters(self):
        return np.zeros(self.problem_size)
