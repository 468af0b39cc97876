import numpy as np

from skposture.constraints.base import ConstraintKind
from skposture.constraints.base import DifferentiableFunction
from skposture.kinematics import Jacobian


class FixedPositionContactConstraint(DifferentiableFunction):
    """Position of a body surface point minus its world target.

    Parameters
    ----------
    posture : skposture.posture.PostureData
        shared posture state.
    contact : skposture.posture.FixedPositionContact
        body name, target and surface frame.
    """

    kind = ConstraintKind.FIXED_POSITION

    def __init__(self, posture, contact, name='FixedPositionContact'):
        super(FixedPositionContactConstraint, self).__init__(
            posture, 3, name=name)
        self.surface_frame = contact.surface_frame
        self.target = np.asarray(contact.target, dtype=np.float64)
        self.jac = Jacobian(posture.multibody, contact.body_name,
                            point=self.surface_frame.translation)
        self.body_index = self.jac.body_index

    def _compute(self, posture):
        pose = self.surface_frame * posture.body_pose(self.body_index)
        return pose.translation - self.target

    def _jacobian(self, posture, out):
        jac = self.jac.jacobian(posture)
        self.jac.full_jacobian(jac[3:6], out=out)
        return out


class FixedOrientationContactConstraint(DifferentiableFunction):
    """Alignment of a body surface frame with a world orientation.

    Row ``i`` is the dot product of the ``i``-th axes of the surface frame
    and of the target, so every row equals 1 when both are aligned.

    Parameters
    ----------
    posture : skposture.posture.PostureData
        shared posture state.
    contact : skposture.posture.FixedOrientationContact
        body name, target rotation and surface frame.
    """

    kind = ConstraintKind.FIXED_ORIENTATION

    def __init__(self, posture, contact, name='FixedOrientationContact'):
        super(FixedOrientationContactConstraint, self).__init__(
            posture, 3, name=name)
        self.surface_frame = contact.surface_frame
        self.target = np.asarray(contact.target, dtype=np.float64)
        self.jac = Jacobian(posture.multibody, contact.body_name)
        self.body_index = self.jac.body_index
        self._reduced = np.zeros((1, self.jac.dof))

    def _surface_rotation(self, posture):
        pose = self.surface_frame * posture.body_pose(self.body_index)
        return pose.rotation

    def _compute(self, posture):
        rot = self._surface_rotation(posture)
        return np.einsum('ij,ij->j', rot, self.target)

    def _jacobian(self, posture, out):
        rot = self._surface_rotation(posture)
        for i in range(3):
            mat = self.jac.vector_jacobian(posture, rot[:, i])
            self._reduced[0] = self.target[:, i].dot(mat[3:6])
            self.jac.full_jacobian(self._reduced, out=out[i:i + 1])
        return out
