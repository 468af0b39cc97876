import numpy as np

from skposture.coordinates import normalize_vector
from skposture.coordinates import rotation_matrix
from skposture.coordinates import Transform
from skposture.coordinates.math import convert_to_axis_vector


def calc_target_joint_dimension(joint_list):
    """Calculate Total Degrees of Freedom from joint list

    Parameters
    ----------
    joint_list : list[skposture.model.Joint]

    Returns
    -------
    n : int
        total Degrees of Freedom
    """
    n = 0
    for j in joint_list:
        n += j.joint_dof
    return n


class Joint(object):
    """Joint connecting a parent link to a child link.

    Parameters
    ----------
    name : str
        joint name.
    parent_link : skposture.model.Link
        parent link.
    child_link : skposture.model.Link
        child link.
    origin : skposture.coordinates.Transform or None
        joint frame expressed in the parent link frame. The child link
        frame coincides with the joint frame at zero joint value.
    axis : str or list or numpy.ndarray
        motion axis expressed in the joint frame.
    min_angle : float
        lower joint limit.
    max_angle : float
        upper joint limit.
    """

    def __init__(self, name=None, parent_link=None, child_link=None,
                 origin=None, axis='z',
                 min_angle=-np.pi, max_angle=np.pi):
        if child_link is None:
            raise ValueError('joint {} requires a child link'.format(name))
        if min_angle > max_angle:
            raise ValueError(
                'joint {}: min_angle({}) is larger than max_angle({})'.format(
                    name, min_angle, max_angle))
        self.name = name
        self.parent_link = parent_link
        self.child_link = child_link
        self.origin = origin if origin is not None else Transform.identity()
        self.axis = normalize_vector(convert_to_axis_vector(axis))
        self.min_angle = min_angle
        self.max_angle = max_angle
        child_link.joint = self
        child_link.parent_link = parent_link
        if parent_link is not None:
            parent_link.child_links.append(child_link)

    @property
    def joint_dof(self):
        raise NotImplementedError

    def joint_transform(self, v):
        """Return the child frame expressed in the joint frame.

        Parameters
        ----------
        v : float
            joint value.

        Returns
        -------
        tf : skposture.coordinates.Transform
        """
        raise NotImplementedError

    def calc_jacobian(self, jacobian, column, joint_frame, point):
        """Fill one column of a 6 x n spatial jacobian.

        Rows 0..2 hold the angular velocity and rows 3..5 the linear
        velocity of `point` (world frame) for a unit joint velocity.
        """
        raise NotImplementedError

    def calc_vector_jacobian(self, jacobian, column, joint_frame, vector):
        """Fill one column with the derivative of a world vector rigidly
        attached to the child side of this joint (rows 3..5)."""
        raise NotImplementedError

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        if self.name:
            prefix = self.__class__.__name__ + \
                ' ' + hex(id(self)) + ' ' + self.name
        else:
            prefix = self.__class__.__name__ + ' ' + hex(id(self))
        return '#<%s>' % prefix


class RotationalJoint(Joint):

    @property
    def joint_dof(self):
        """Returns DOF of rotational joint, 1."""
        return 1

    def joint_transform(self, v):
        return Transform(np.zeros(3), rotation_matrix(v, self.axis),
                         check_validity=False)

    def calc_jacobian(self, jacobian, column, joint_frame, point):
        w = joint_frame.rotation.dot(self.axis)
        jacobian[0:3, column] = w
        jacobian[3:6, column] = np.cross(w, point - joint_frame.translation)
        return jacobian

    def calc_vector_jacobian(self, jacobian, column, joint_frame, vector):
        w = joint_frame.rotation.dot(self.axis)
        jacobian[0:3, column] = w
        jacobian[3:6, column] = np.cross(w, vector)
        return jacobian


class LinearJoint(Joint):

    @property
    def joint_dof(self):
        """Returns DOF of linear joint, 1."""
        return 1

    def joint_transform(self, v):
        return Transform(self.axis * v, np.eye(3), check_validity=False)

    def calc_jacobian(self, jacobian, column, joint_frame, point):
        jacobian[0:3, column] = 0.0
        jacobian[3:6, column] = joint_frame.rotation.dot(self.axis)
        return jacobian

    def calc_vector_jacobian(self, jacobian, column, joint_frame, vector):
        # translation does not turn vectors
        jacobian[:, column] = 0.0
        return jacobian


class FixedJoint(Joint):

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('min_angle', 0.0)
        kwargs.setdefault('max_angle', 0.0)
        super(FixedJoint, self).__init__(*args, **kwargs)

    @property
    def joint_dof(self):
        """Returns DOF of fixed joint, 0."""
        return 0

    def joint_transform(self, v=None):
        return Transform.identity()

    def calc_jacobian(self, jacobian, column, joint_frame, point):
        return jacobian

    def calc_vector_jacobian(self, jacobian, column, joint_frame, vector):
        return jacobian
