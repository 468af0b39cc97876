import numpy as np


class Jacobian(object):
    """Kinematic jacobian of a point attached to one link.

    The jacobian only spans the joints between the root and the link;
    :meth:`full_jacobian` scatters it into the columns of the complete
    decision vector, leaving every other column (force parameters
    included) at zero.

    Parameters
    ----------
    multibody : skposture.model.MultiBody
        robot model.
    body_name : str
        name of the link the point is attached to.
    point : numpy.ndarray(3,) or None
        point in the link frame. origin if None.
    """

    def __init__(self, multibody, body_name, point=None):
        self.multibody = multibody
        self.body_index = multibody.body_index_by_name(body_name)
        self.joint_path = [
            j for j in multibody.joint_path(self.body_index)
            if multibody.joint_list[j].joint_dof > 0]
        self.columns = np.array(
            [multibody.joint_param_index[j] for j in self.joint_path],
            dtype=np.int64)
        self._jac = np.zeros((6, self.dof))
        self.point = point

    @property
    def dof(self):
        """Number of joint parameters of the chain."""
        return len(self.joint_path)

    @property
    def point(self):
        return self._point

    @point.setter
    def point(self, point):
        if point is None:
            point = np.zeros(3)
        self._point = np.array(point, dtype=np.float64)

    def jacobian(self, posture):
        """Compute the jacobian of the point for the installed posture.

        Parameters
        ----------
        posture : skposture.posture.PostureData
            posture holding the current link poses.

        Returns
        -------
        jac : numpy.ndarray(6, dof)
            rows 0..2: angular velocity, rows 3..5: linear velocity of the
            point in world frame.
        """
        world_point = posture.body_pose(self.body_index).transform_vector(
            self._point)
        joint_list = self.multibody.joint_list
        for column, j in enumerate(self.joint_path):
            joint_list[j].calc_jacobian(
                self._jac, column, posture.joint_frame(j), world_point)
        return self._jac

    def vector_jacobian(self, posture, vector):
        """Jacobian of a world vector rigidly attached to the link.

        Parameters
        ----------
        posture : skposture.posture.PostureData
            posture holding the current link poses.
        vector : numpy.ndarray(3,)
            vector expressed in world frame.

        Returns
        -------
        jac : numpy.ndarray(6, dof)
            rows 0..2: angular velocity, rows 3..5: derivative of `vector`.
        """
        vector = np.asarray(vector, dtype=np.float64)
        joint_list = self.multibody.joint_list
        for column, j in enumerate(self.joint_path):
            joint_list[j].calc_vector_jacobian(
                self._jac, column, posture.joint_frame(j), vector)
        return self._jac

    def full_jacobian(self, reduced, n_cols=None, out=None):
        """Scatter a reduced jacobian into the decision vector columns.

        Parameters
        ----------
        reduced : numpy.ndarray(rows, dof)
            jacobian over the chain joints.
        n_cols : int or None
            width of the output. required if `out` is None.
        out : numpy.ndarray(rows, n_cols) or None
            output buffer, overwritten.

        Returns
        -------
        full : numpy.ndarray(rows, n_cols)
        """
        reduced = np.atleast_2d(reduced)
        if out is None:
            if n_cols is None:
                raise ValueError('either n_cols or out is required')
            out = np.zeros((reduced.shape[0], n_cols))
        else:
            out[...] = 0.0
        if reduced.shape != (out.shape[0], self.dof):
            raise ValueError(
                'reduced jacobian must be of shape {}, get {}'.format(
                    (out.shape[0], self.dof), reduced.shape))
        out[:, self.columns] = reduced
        return out
