import numpy as np


_AXIS_VECTORS = {
    'x': np.array([1.0, 0.0, 0.0]),
    'y': np.array([0.0, 1.0, 0.0]),
    'z': np.array([0.0, 0.0, 1.0]),
    '-x': np.array([-1.0, 0.0, 0.0]),
    '-y': np.array([0.0, -1.0, 0.0]),
    '-z': np.array([0.0, 0.0, -1.0]),
}


def convert_to_axis_vector(axis):
    """Convert axis to float vector.

    Parameters
    ----------
    axis : str or list or tuple or numpy.ndarray
        axis name such as 'x', '-y' or a 3 dimensional vector.

    Returns
    -------
    axis : numpy.ndarray
        converted axis

    Examples
    --------
    >>> from skposture.coordinates.math import convert_to_axis_vector
    >>> convert_to_axis_vector('y')
    array([0., 1., 0.])
    >>> convert_to_axis_vector([1, 1, 0])
    array([1., 1., 0.])
    """
    if isinstance(axis, str):
        try:
            return _AXIS_VECTORS[axis].copy()
        except KeyError:
            raise ValueError(
                "Axis conversion for '{}' is not supported.".format(axis))
    axis = np.array(axis, dtype=np.float64)
    if axis.shape != (3,):
        raise ValueError('Axis must be of shape (3,), get {}'.format(
            axis.shape))
    return axis


def normalize_vector(v, ord=2):
    """Return normalized vector

    Parameters
    ----------
    v : list or numpy.ndarray
        vector
    ord : int (optional)
        ord of np.linalg.norm

    Returns
    -------
    v : numpy.ndarray
        normalized vector. A zero vector is returned unchanged.
    """
    v = np.array(v, dtype=np.float64)
    norm = np.linalg.norm(v, ord=ord)
    if norm == 0:
        return v
    return v / norm


def outer_product_matrix(v):
    """Returns the skew symmetric matrix [v]x such that [v]x b = v x b.

    Parameters
    ----------
    v : numpy.ndarray or list
        [x, y, z]

    Returns
    -------
    matrix : numpy.ndarray
        3x3 skew symmetric matrix.
    """
    return np.array([[0, -v[2], v[1]],
                     [v[2], 0, -v[0]],
                     [-v[1], v[0], 0]])


def cross_product(a, b):
    """Return cross product.

    Parameters
    ----------
    a : numpy.ndarray
        3-dimensional vector.
    b : numpy.ndarray
        3-dimensional vector.

    Returns
    -------
    cross_prod : numpy.ndarray
        calculated cross product
    """
    return np.dot(outer_product_matrix(a), b)


def rotation_matrix(theta, axis):
    """Return the rotation matrix.

    Return the rotation matrix associated with counterclockwise rotation
    about the given axis by theta radians.

    Parameters
    ----------
    theta : float
        radian
    axis : str or list or numpy.ndarray
        rotation axis such that 'x', 'y', 'z' or [0, 0, 1].

    Returns
    -------
    rot : numpy.ndarray
        rotation matrix about the given axis by theta radians.

    Examples
    --------
    >>> import numpy as np
    >>> from skposture.coordinates.math import rotation_matrix
    >>> np.round(rotation_matrix(np.pi / 2.0, 'z'), 6)
    array([[ 0., -1.,  0.],
           [ 1.,  0.,  0.],
           [ 0.,  0.,  1.]])
    """
    axis = normalize_vector(convert_to_axis_vector(axis))
    k = outer_product_matrix(axis)
    return np.eye(3) + np.sin(theta) * k \
        + (1.0 - np.cos(theta)) * np.dot(k, k)


def rpy_matrix(az, ay, ax):
    """Return rotation matrix from yaw-pitch-roll

    The matrix is rotated ax radian around x-axis, ay radian around
    y-axis and az radian around z-axis in WORLD, in this order.

    Parameters
    ----------
    az : float
        rotated around z-axis(yaw) in radian.
    ay : float
        rotated around y-axis(pitch) in radian.
    ax : float
        rotated around x-axis(roll) in radian.

    Returns
    -------
    r : numpy.ndarray
        rotation matrix
    """
    return rotation_matrix(az, 'z').dot(
        rotation_matrix(ay, 'y')).dot(rotation_matrix(ax, 'x'))


def quaternion2matrix(q):
    """Returns matrix of given unit quaternion [w, x, y, z]."""
    q0, q1, q2, q3 = normalize_vector(q)
    return np.array([
        [q0 * q0 + q1 * q1 - q2 * q2 - q3 * q3,
         2 * (q1 * q2 - q0 * q3),
         2 * (q1 * q3 + q0 * q2)],
        [2 * (q1 * q2 + q0 * q3),
         q0 * q0 - q1 * q1 + q2 * q2 - q3 * q3,
         2 * (q2 * q3 - q0 * q1)],
        [2 * (q1 * q3 - q0 * q2),
         2 * (q2 * q3 + q0 * q1),
         q0 * q0 - q1 * q1 - q2 * q2 + q3 * q3]])


def random_rotation(random_state=None):
    """Generates a uniformly distributed random 3x3 rotation matrix.

    Parameters
    ----------
    random_state : numpy.random.RandomState or None
        source of randomness. `numpy.random` is used if None.

    Returns
    -------
    rot : numpy.ndarray
        randomly generated 3x3 rotation matrix
    """
    rand = (random_state or np.random).rand(3)
    r1 = np.sqrt(1.0 - rand[0])
    r2 = np.sqrt(rand[0])
    t1 = 2.0 * np.pi * rand[1]
    t2 = 2.0 * np.pi * rand[2]
    return quaternion2matrix([np.cos(t2) * r2,
                              np.sin(t1) * r1,
                              np.cos(t1) * r1,
                              np.sin(t2) * r2])


def _check_valid_rotation(rotation):
    """Checks that the given rotation matrix is valid."""
    rotation = np.array(rotation, dtype=np.float64)
    if rotation.shape != (3, 3):
        raise ValueError('Rotation must be specified as a 3x3 ndarray')
    if np.abs(np.linalg.det(rotation) - 1.0) > 1e-3:
        raise ValueError('Illegal rotation. Must have determinant == 1.0, '
                         'get {}'.format(np.linalg.det(rotation)))
    return rotation


def _check_valid_translation(translation):
    """Checks that the translation vector is valid."""
    t = np.array(translation, dtype=np.float64).squeeze()
    if t.shape != (3,):
        raise ValueError(
            'Translation must be specified as a 3-vector, '
            '3x1 ndarray, or 1x3 ndarray')
    return t
