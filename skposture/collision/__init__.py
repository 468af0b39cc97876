"""Convex hull distance queries.

Geometry Primitives
-------------------
- Sphere: point core with a radius
- Capsule: segment core with a radius
- Box: oriented box, optionally rounded
- ConvexHull: convex hull of a point cloud or a mesh

Distance
--------
- closest_points: euclidean signed distance and witness points
- signed_squared_distance: ``sign(d) * d ** 2``
- HullPair: owned pair of hulls with per-slot placements
"""

from skposture.collision.distance import closest_points
from skposture.collision.distance import gjk
from skposture.collision.distance import signed_squared_distance
from skposture.collision.geometry import Box
from skposture.collision.geometry import Capsule
from skposture.collision.geometry import ConvexHull
from skposture.collision.geometry import ConvexShape
from skposture.collision.geometry import Sphere
from skposture.collision.pair import HullPair


__all__ = [
    'ConvexShape',
    'Sphere',
    'Capsule',
    'Box',
    'ConvexHull',
    'closest_points',
    'gjk',
    'signed_squared_distance',
    'HullPair',
]
