import numpy as np

from skposture.coordinates.math import _check_valid_rotation
from skposture.coordinates.math import _check_valid_translation
from skposture.coordinates.math import random_rotation


class Transform(object):
    """Rigid transform specified by translation and rotation

    A transform maps coordinates expressed in its local frame into the
    parent frame, ``p_parent = rotation.dot(p_local) + translation``.

    Transforms compose from left to right: with ``tf_12`` mapping frame 1
    into frame 2 and ``tf_23`` mapping frame 2 into frame 3,
    ``tf_12 * tf_23`` maps frame 1 into frame 3. A hull placed at
    ``hull_in_body`` on a body posed at ``body_in_world`` is therefore
    placed at ``hull_in_body * body_in_world``.

    Parameters
    ----------
    translation : list(3,) or numpy.ndarray(3,) or None
        translation. zero if None.
    rotation : numpy.ndarray(3, 3) or None
        3x3 rotation matrix. identity if None.
    check_validity : bool
        if `True`, validate shapes and the determinant of `rotation`.
    """

    def __init__(self, translation=None, rotation=None,
                 check_validity=True):
        if translation is None:
            translation = np.zeros(3)
        if rotation is None:
            rotation = np.eye(3)
        if check_validity:
            translation = _check_valid_translation(translation)
            rotation = _check_valid_rotation(rotation)
        self.translation = np.asarray(translation, dtype=np.float64)
        self.rotation = np.asarray(rotation, dtype=np.float64)

    @classmethod
    def identity(cls):
        return cls(np.zeros(3), np.eye(3), check_validity=False)

    @classmethod
    def random(cls, random_state=None):
        """Return a transform with random rotation and translation."""
        rs = random_state or np.random
        return cls(rs.rand(3), random_rotation(rs), check_validity=False)

    def transform_vector(self, vec):
        """Apply this transform to vector/vectors

        Parameters
        ----------
        vec : numpy.ndarray(3,) or numpy.ndarray(n_points, 3)
            vector/vectors to be transformed

        Returns
        -------
        vec_transformed : numpy.ndarray(3,) or numpy.ndarray(n_points, 3)
            transformed points
        """
        vec = np.asarray(vec)
        assert vec.ndim < 3, "vec must be either 1 or 2 dimensional."
        if vec.ndim == 1:
            return self.rotation.dot(vec) + self.translation
        return self.rotation.dot(vec.T).T + self.translation[None, :]

    def inverse_transform_vector(self, vec):
        """Express world vector/vectors in the local frame of this transform.

        Parameters
        ----------
        vec : numpy.ndarray(3,) or numpy.ndarray(n_points, 3)

        Returns
        -------
        vec_local : numpy.ndarray(3,) or numpy.ndarray(n_points, 3)
        """
        vec = np.asarray(vec)
        assert vec.ndim < 3, "vec must be either 1 or 2 dimensional."
        if vec.ndim == 1:
            return self.rotation.T.dot(vec - self.translation)
        return (vec - self.translation[None, :]).dot(self.rotation)

    def rotate_vector(self, vec):
        """Rotate 3-dimensional vector using rotation of this Transform"""
        vec = np.asarray(vec)
        assert vec.ndim < 3, "vec must be either 1 or 2 dimensional."
        if vec.ndim == 1:
            return self.rotation.dot(vec)
        return self.rotation.dot(vec.T).T

    def inverse_transformation(self):
        """Return inverse transform

        Returns
        -------
        inv_transform : skposture.coordinates.Transform
            inverse transformation
        """
        new_rot = self.rotation.T
        new_trans = -new_rot.dot(self.translation)
        return Transform(new_trans, new_rot, check_validity=False)

    def copy(self):
        return Transform(self.translation.copy(), self.rotation.copy(),
                         check_validity=False)

    def __mul__(self, tf_23):
        """Composite this transform with other transform

        Parameters
        ----------
        tf_23 : skposture.coordinates.Transform
            the other transform.

        Returns
        -------
        tf_13 : skposture.coordinates.Transform
            Let this (self) transform as tf_12, then with the
            other transform tf_23, we obtain tf_13 = tf_12 * tf_23
        """
        tran_12, rot_12 = self.translation, self.rotation
        tran_23, rot_23 = tf_23.translation, tf_23.rotation
        rot_13 = rot_23.dot(rot_12)
        tran_13 = tran_23 + rot_23.dot(tran_12)
        return Transform(tran_13, rot_13, check_validity=False)

    def __repr__(self):
        return '#<Transform translation={} rotation={}>'.format(
            np.array2string(self.translation, precision=4),
            np.array2string(self.rotation.ravel(), precision=4))
