"""Convex hull shapes.

Every shape is described by a vertex core and a margin radius: the hull
is the Minkowski sum of the convex hull of the core vertices and a ball
of radius ``margin``. A sphere has a single point core, a capsule a
segment core, a box its eight corners.

Example
-------
>>> from skposture.collision import Sphere
>>> import numpy as np
>>> s = Sphere(center=np.zeros(3), radius=0.5)
>>> s.vertices
array([[0., 0., 0.]])
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import trimesh


class ConvexShape(object):
    """Base class of convex hull shapes."""

    @property
    def vertices(self):
        """Core vertices in the hull frame, ``(n, 3)``."""
        raise NotImplementedError

    @property
    def margin(self):
        """Radius swept around the core."""
        raise NotImplementedError

    def world_vertices(self, transform):
        """Core vertices placed by `transform`.

        Parameters
        ----------
        transform : skposture.coordinates.Transform
            hull frame expressed in world frame.

        Returns
        -------
        vertices : numpy.ndarray(n, 3)
        """
        return transform.transform_vector(self.vertices)


@dataclass
class Sphere(ConvexShape):
    """Sphere hull.

    Parameters
    ----------
    center : array (3,)
        Center position.
    radius : float
        Radius.
    """
    center: np.ndarray
    radius: float

    def __post_init__(self):
        self.center = np.asarray(self.center, dtype=np.float64)
        self.radius = float(self.radius)
        if self.radius < 0.0:
            raise ValueError('radius must be non negative, get {}'.format(
                self.radius))

    @property
    def vertices(self):
        return self.center.reshape(1, 3)

    @property
    def margin(self):
        return self.radius

    @classmethod
    def from_center_and_radius(cls, center, radius):
        return cls(center=np.asarray(center), radius=float(radius))


@dataclass
class Capsule(ConvexShape):
    """Capsule hull (line segment + radius).

    Parameters
    ----------
    p1 : array (3,)
        First endpoint.
    p2 : array (3,)
        Second endpoint.
    radius : float
        Capsule radius.
    """
    p1: np.ndarray
    p2: np.ndarray
    radius: float

    def __post_init__(self):
        self.p1 = np.asarray(self.p1, dtype=np.float64)
        self.p2 = np.asarray(self.p2, dtype=np.float64)
        self.radius = float(self.radius)
        if self.radius < 0.0:
            raise ValueError('radius must be non negative, get {}'.format(
                self.radius))

    @property
    def vertices(self):
        return np.vstack([self.p1, self.p2])

    @property
    def margin(self):
        return self.radius

    @property
    def height(self):
        """Capsule height (distance between endpoints)."""
        return np.linalg.norm(self.p2 - self.p1)

    @classmethod
    def from_center_height_axis(cls, center, height, axis, radius):
        """Create capsule from center, height, axis and radius.

        Parameters
        ----------
        center : array-like (3,)
            Center position.
        height : float
            Capsule height (distance between endpoints).
        axis : array-like (3,)
            Capsule axis direction (will be normalized).
        radius : float
            Capsule radius.

        Returns
        -------
        Capsule
            Capsule instance.
        """
        center = np.asarray(center, dtype=np.float64)
        axis = np.asarray(axis, dtype=np.float64)
        axis = axis / np.linalg.norm(axis)
        half_height = height / 2.0
        return cls(p1=center - half_height * axis,
                   p2=center + half_height * axis,
                   radius=float(radius))


@dataclass
class Box(ConvexShape):
    """Oriented box hull.

    Parameters
    ----------
    center : array (3,)
        Box center.
    half_extents : array (3,)
        Half-extents (half width, half height, half depth).
    rotation : array (3, 3), optional
        Rotation matrix. If None, box is axis-aligned.
    margin_radius : float
        Rounding radius of the edges.
    """
    center: np.ndarray
    half_extents: np.ndarray
    rotation: Optional[np.ndarray] = None
    margin_radius: float = 0.0

    def __post_init__(self):
        self.center = np.asarray(self.center, dtype=np.float64)
        self.half_extents = np.asarray(self.half_extents, dtype=np.float64)
        if self.rotation is not None:
            self.rotation = np.asarray(self.rotation, dtype=np.float64)
        if np.any(self.half_extents < 0.0):
            raise ValueError('half_extents must be non negative, get {}'
                             .format(self.half_extents))

    @property
    def vertices(self):
        signs = np.array([[sx, sy, sz]
                          for sx in (-1.0, 1.0)
                          for sy in (-1.0, 1.0)
                          for sz in (-1.0, 1.0)])
        corners = signs * self.half_extents[None, :]
        if self.rotation is not None:
            corners = corners.dot(self.rotation.T)
        return corners + self.center[None, :]

    @property
    def margin(self):
        return self.margin_radius

    @classmethod
    def from_center_and_extents(cls, center, extents, rotation=None):
        """Create box from center and full extents.

        Parameters
        ----------
        center : array-like (3,)
            Box center.
        extents : array-like (3,)
            Full extents (width, height, depth).
        rotation : array-like (3, 3), optional
            Rotation matrix.

        Returns
        -------
        Box
            Box instance.
        """
        return cls(center=np.asarray(center),
                   half_extents=np.asarray(extents, dtype=np.float64) / 2.0,
                   rotation=rotation)


@dataclass
class ConvexHull(ConvexShape):
    """Convex hull of a point set with an optional margin.

    Parameters
    ----------
    points : array (n, 3)
        Hull vertices. Interior points are allowed but only slow down
        queries; use :meth:`from_points` to keep the hull vertices only.
    margin_radius : float
        Radius swept around the hull.
    """
    points: np.ndarray
    margin_radius: float = 0.0

    def __post_init__(self):
        self.points = np.asarray(self.points, dtype=np.float64)
        if self.points.ndim != 2 or self.points.shape[1] != 3 \
                or len(self.points) == 0:
            raise ValueError('points must be of shape (n, 3), get {}'.format(
                self.points.shape))

    @property
    def vertices(self):
        return self.points

    @property
    def margin(self):
        return self.margin_radius

    @classmethod
    def from_points(cls, points, margin_radius=0.0):
        """Create the convex hull of a point cloud.

        Parameters
        ----------
        points : array-like (n, 3)
            Point cloud with at least four non coplanar points.
        margin_radius : float
            Radius swept around the hull.

        Returns
        -------
        ConvexHull
        """
        hull = trimesh.convex.convex_hull(np.asarray(points, dtype=np.float64))
        return cls(points=np.array(hull.vertices),
                   margin_radius=margin_radius)

    @classmethod
    def from_mesh(cls, mesh, margin_radius=0.0):
        """Create the convex hull of a mesh.

        Parameters
        ----------
        mesh : trimesh.Trimesh or str
            mesh, or path of a mesh file loaded with trimesh.

        Returns
        -------
        ConvexHull
        """
        if isinstance(mesh, str):
            mesh = trimesh.load(mesh, force='mesh')
        return cls(points=np.array(mesh.convex_hull.vertices),
                   margin_radius=margin_radius)
