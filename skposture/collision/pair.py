from skposture.collision.distance import closest_points
from skposture.collision.distance import signed_squared_distance
from skposture.collision.geometry import ConvexShape
from skposture.coordinates import Transform


class HullPair(object):
    """Distance query between two placed convex hulls.

    A pair owns its two hulls until :meth:`close` is called. Placements
    are updated with :meth:`set_transformation` and every query refers to
    the current placements.

    Parameters
    ----------
    hull_a : skposture.collision.ConvexShape
        hull in slot 0.
    hull_b : skposture.collision.ConvexShape
        hull in slot 1.
    max_iter : int
        maximum number of gjk iterations per query.
    rel_tol : float
        gjk convergence tolerance.

    Examples
    --------
    >>> from skposture.collision import HullPair, Sphere
    >>> from skposture.coordinates import Transform
    >>> import numpy as np
    >>> with HullPair(Sphere(np.zeros(3), 1.0),
    ...               Sphere(np.zeros(3), 1.0)) as pair:
    ...     pair.set_transformation(1, Transform([3.0, 0, 0]))
    ...     pair.distance()
    1.0
    """

    def __init__(self, hull_a, hull_b, max_iter=64, rel_tol=1e-12):
        for slot, hull in enumerate((hull_a, hull_b)):
            if not isinstance(hull, ConvexShape):
                raise TypeError(
                    'hull of slot {} must be a ConvexShape, get {}'.format(
                        slot, type(hull).__name__))
        self._hulls = [hull_a, hull_b]
        self._transforms = [Transform.identity(), Transform.identity()]
        self.max_iter = max_iter
        self.rel_tol = rel_tol

    @property
    def closed(self):
        return self._hulls is None

    @property
    def hulls(self):
        self._check_open()
        return tuple(self._hulls)

    def _check_open(self):
        if self._hulls is None:
            raise RuntimeError('hull pair is already closed')

    def set_transformation(self, slot, transform):
        """Set the world placement of one hull.

        Parameters
        ----------
        slot : int
            0 or 1.
        transform : skposture.coordinates.Transform
            hull frame expressed in world frame.
        """
        self._check_open()
        if slot not in (0, 1):
            raise IndexError('slot must be 0 or 1, get {}'.format(slot))
        self._transforms[slot] = transform

    def transformation(self, slot):
        if slot not in (0, 1):
            raise IndexError('slot must be 0 or 1, get {}'.format(slot))
        return self._transforms[slot]

    def _query(self):
        self._check_open()
        return closest_points(
            self._hulls[0], self._transforms[0],
            self._hulls[1], self._transforms[1],
            max_iter=self.max_iter, rel_tol=self.rel_tol)

    def distance(self):
        """Signed squared distance of the current placements."""
        return signed_squared_distance(self._query()[0])

    def closest_points(self):
        """Signed squared distance and world closest points.

        Returns
        -------
        distance : float
            signed squared distance.
        point_a : numpy.ndarray(3,)
            point of the hull in slot 0.
        point_b : numpy.ndarray(3,)
            point of the hull in slot 1.
        """
        distance, point_a, point_b = self._query()
        return signed_squared_distance(distance), point_a, point_b

    def close(self):
        """Release the hulls. Further queries raise `RuntimeError`."""
        self._hulls = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        if self.closed:
            return '#<HullPair closed>'
        return '#<HullPair {} {}>'.format(
            type(self._hulls[0]).__name__, type(self._hulls[1]).__name__)
