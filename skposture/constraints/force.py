import numpy as np

from skposture.constraints.base import ConstraintKind
from skposture.constraints.base import DifferentiableFunction
from skposture.kinematics import Jacobian


class _ForcePointConstraint(DifferentiableFunction):
    """One row per force point of the registered force contacts."""

    def __init__(self, posture, name):
        super(_ForcePointConstraint, self).__init__(
            posture, posture.nr_force_points, name=name)
        self.jacs = [Jacobian(posture.multibody,
                              posture.multibody.link_list[fd.body_index].name)
                     for fd in posture.force_datas]
        self._reduced = [np.zeros((1, jac.dof)) for jac in self.jacs]

    def _points(self, posture):
        """Yield row, force data index, point index, normal and force."""
        row = 0
        for k, fd in enumerate(posture.force_datas):
            body_pose = posture.body_pose(fd.body_index)
            for i, point in enumerate(fd.points):
                normal = (point * body_pose).rotation[:, 2]
                yield row, k, i, normal, fd.forces[i]
                row += 1


class PositiveForceConstraint(_ForcePointConstraint):
    """Normal component of every contact force, ``n . f >= 0``."""

    kind = ConstraintKind.POSITIVE_FORCE

    def __init__(self, posture, name='PositiveForce'):
        super(PositiveForceConstraint, self).__init__(posture, name)

    def _compute(self, posture):
        res = np.zeros(self.output_size)
        for row, _, _, normal, force in self._points(posture):
            res[row] = normal.dot(force)
        return res

    def _jacobian(self, posture, out):
        for row, k, i, normal, force in self._points(posture):
            jac = self.jacs[k]
            mat = jac.vector_jacobian(posture, normal)
            self._reduced[k][0] = force.dot(mat[3:6])
            jac.full_jacobian(self._reduced[k], out=out[row:row + 1])
            begin = posture.force_datas[k].point_param_index(i)
            out[row, begin:begin + 3] = normal
        return out


class FrictionConeConstraint(_ForcePointConstraint):
    """Friction cone of every contact force.

    ``(mu^2 + 1) (n . f)^2 - |f|^2`` is non negative when `f` lies in the
    cone of half angle ``atan(mu)`` around the normal. The rows do not
    exclude the opposite cone; combine with
    :class:`PositiveForceConstraint`.
    """

    kind = ConstraintKind.FRICTION_CONE

    def __init__(self, posture, name='FrictionCone'):
        super(FrictionConeConstraint, self).__init__(posture, name)
        self._mus = []
        for fd in posture.force_datas:
            self._mus.extend([fd.mu] * len(fd.points))

    def _compute(self, posture):
        res = np.zeros(self.output_size)
        for row, _, _, normal, force in self._points(posture):
            coef = self._mus[row] ** 2 + 1.0
            res[row] = coef * normal.dot(force) ** 2 - force.dot(force)
        return res

    def _jacobian(self, posture, out):
        for row, k, i, normal, force in self._points(posture):
            coef = self._mus[row] ** 2 + 1.0
            normal_force = normal.dot(force)
            jac = self.jacs[k]
            mat = jac.vector_jacobian(posture, normal)
            self._reduced[k][0] = 2.0 * coef * normal_force * force.dot(
                mat[3:6])
            jac.full_jacobian(self._reduced[k], out=out[row:row + 1])
            begin = posture.force_datas[k].point_param_index(i)
            out[row, begin:begin + 3] = \
                2.0 * coef * normal_force * normal - 2.0 * force
        return out
