"""Distance and closest points between convex hulls.

Separated vertex cores are handled with GJK on the Minkowski difference
``A - B``. When the cores overlap, the penetration is read from the
facets of the convex hull of all pairwise vertex differences. The margin
radii are then added along the separation direction.

Example
-------
>>> from skposture.collision import Sphere, closest_points
>>> from skposture.coordinates import Transform
>>> import numpy as np
>>> s = Sphere(center=np.zeros(3), radius=1.0)
>>> d, pa, pb = closest_points(s, Transform(), s, Transform([3., 0, 0]))
>>> d
1.0
"""

from collections import namedtuple
from itertools import combinations
from logging import getLogger
import math

import numpy as np
from scipy.spatial import ConvexHull
from scipy.spatial import QhullError


logger = getLogger(__name__)


GJKResult = namedtuple('GJKResult', ['overlap', 'v', 'point_a', 'point_b'])


def signed_squared_distance(distance):
    """Return ``sign(d) * d ** 2`` for the euclidean gap `d`."""
    return math.copysign(distance * distance, distance)


def _closest_on_simplex(points):
    """Minimum norm point of the convex hull of up to four points.

    Every face of the simplex is tried; the affine projection of the
    origin onto a face is kept if all its barycentric coordinates are
    non negative.

    Returns
    -------
    v : numpy.ndarray(3,)
        closest point to the origin.
    indices : tuple[int]
        points supporting `v`.
    lambdas : numpy.ndarray
        barycentric coordinates of `v` over `indices`.
    """
    best = None
    n = len(points)
    for size in range(1, n + 1):
        for indices in combinations(range(n), size):
            y = points[list(indices)]
            if size == 1:
                lambdas = np.ones(1)
            else:
                edges = y[1:] - y[0]
                gram = edges.dot(edges.T)
                scale = np.prod(np.diag(gram))
                if scale <= 0.0 or np.linalg.det(gram) <= 1e-12 * scale:
                    continue
                mu = np.linalg.solve(gram, -edges.dot(y[0]))
                lambdas = np.concatenate([[1.0 - mu.sum()], mu])
                if np.any(lambdas < 0.0):
                    continue
            v = lambdas.dot(y)
            norm = v.dot(v)
            if best is None or norm < best[0]:
                best = (norm, v, indices, lambdas)
    return best[1], best[2], best[3]


def gjk(vertices_a, vertices_b, max_iter=64, rel_tol=1e-12, abs_tol=1e-18):
    """Closest points between the convex hulls of two vertex sets.

    Parameters
    ----------
    vertices_a : numpy.ndarray(n, 3)
        world vertices of the first core.
    vertices_b : numpy.ndarray(m, 3)
        world vertices of the second core.
    max_iter : int
        maximum number of support queries.
    rel_tol : float
        relative tolerance on the duality gap ``|v|^2 - v.w``.
    abs_tol : float
        squared norm below which the cores are considered touching.

    Returns
    -------
    result : GJKResult
        `overlap` is `True` if the cores intersect. Otherwise `v` is
        ``point_a - point_b``, the closest points of the two cores.
    """
    simplex = [(0, 0)]
    lambdas = np.ones(1)
    v = vertices_a[0] - vertices_b[0]
    overlap = False
    for _ in range(max_iter):
        vv = v.dot(v)
        if vv <= abs_tol:
            overlap = True
            break
        ia = int(np.argmax(vertices_a.dot(-v)))
        ib = int(np.argmax(vertices_b.dot(v)))
        if (ia, ib) in simplex:
            break
        w = vertices_a[ia] - vertices_b[ib]
        if vv - v.dot(w) <= rel_tol * vv:
            break
        simplex.append((ia, ib))
        points = np.array([vertices_a[i] - vertices_b[j] for i, j in simplex])
        v, indices, lambdas = _closest_on_simplex(points)
        simplex = [simplex[k] for k in indices]
        if len(simplex) == 4:
            overlap = True
            break
    else:
        logger.debug('gjk did not converge in %d iterations', max_iter)
    point_a = lambdas.dot(vertices_a[[i for i, _ in simplex]])
    point_b = lambdas.dot(vertices_b[[j for _, j in simplex]])
    return GJKResult(overlap, v, point_a, point_b)


def _penetration(vertices_a, vertices_b):
    """Penetration of two overlapping cores.

    Returns
    -------
    depth : float
        distance from the origin to the boundary of ``A - B``.
    normal : numpy.ndarray(3,)
        outward normal of the nearest facet of ``A - B``.
    point_a, point_b : numpy.ndarray(3,)
        core points with ``point_a - point_b == depth * normal``.
    """
    nb = len(vertices_b)
    difference = (vertices_a[:, None, :] - vertices_b[None, :, :]).reshape(
        -1, 3)
    hull = ConvexHull(difference)
    offsets = hull.equations[:, 3]
    best = offsets.max()
    # coplanar triangles share the nearest plane, keep the one holding x
    candidates = np.nonzero(offsets >= best - 1e-9 * max(1.0, abs(best)))[0]
    chosen = None
    for k in candidates:
        normal = hull.equations[k, :3]
        depth = max(-hull.equations[k, 3], 0.0)
        x = depth * normal
        facet = hull.simplices[k]
        corners = difference[facet]
        edges = (corners[1:] - corners[0]).T
        coords = np.linalg.lstsq(edges, x - corners[0], rcond=None)[0]
        lambdas = np.concatenate([[1.0 - coords.sum()], coords])
        if chosen is None or lambdas.min() > chosen[0]:
            chosen = (lambdas.min(), depth, normal, facet, lambdas)
        if lambdas.min() >= -1e-9:
            break
    _, depth, normal, facet, lambdas = chosen
    ia, ib = np.divmod(facet, nb)
    point_a = lambdas.dot(vertices_a[ia])
    point_b = lambdas.dot(vertices_b[ib])
    return depth, normal, point_a, point_b


def closest_points(shape_a, transform_a, shape_b, transform_b,
                   max_iter=64, rel_tol=1e-12):
    """Signed distance and witness points of two placed hulls.

    Parameters
    ----------
    shape_a, shape_b : skposture.collision.ConvexShape
        hulls.
    transform_a, transform_b : skposture.coordinates.Transform
        world placement of each hull.
    max_iter : int
        maximum number of gjk iterations.
    rel_tol : float
        gjk convergence tolerance.

    Returns
    -------
    distance : float
        euclidean gap, negative when the hulls overlap.
    point_a : numpy.ndarray(3,)
        point of hull A in world frame.
    point_b : numpy.ndarray(3,)
        point of hull B in world frame. ``point_a - point_b`` points from
        B to A when separated and has length ``abs(distance)``.
    """
    vertices_a = shape_a.world_vertices(transform_a)
    vertices_b = shape_b.world_vertices(transform_b)
    margin_a = shape_a.margin
    margin_b = shape_b.margin
    result = gjk(vertices_a, vertices_b, max_iter=max_iter, rel_tol=rel_tol)
    if not result.overlap:
        core_distance = np.linalg.norm(result.v)
        normal = -result.v / core_distance
        return (core_distance - margin_a - margin_b,
                result.point_a + margin_a * normal,
                result.point_b - margin_b * normal)
    try:
        depth, normal, point_a, point_b = _penetration(vertices_a, vertices_b)
    except (QhullError, ValueError):
        logger.debug('flat minkowski difference, no separation direction')
        return (-(margin_a + margin_b),
                result.point_a.copy(), result.point_a.copy())
    return (-(depth + margin_a + margin_b),
            point_a + margin_a * normal,
            point_b - margin_b * normal)
