"""Problem description records.

These records describe contacts, collisions and costs of a posture
problem. They hold body names; names are resolved to link indices when
the constraints are built.
"""

from dataclasses import dataclass
from dataclasses import field
from typing import List
from typing import Optional

import numpy as np

from skposture.coordinates import Transform


@dataclass
class FixedPositionContact:
    """Keep a body surface point at a world position.

    Parameters
    ----------
    body_name : str
        link carrying the surface.
    target : numpy.ndarray (3,)
        position target in world coordinates.
    surface_frame : Transform
        surface frame expressed in the body frame.
    """
    body_name: str
    target: np.ndarray
    surface_frame: Transform = field(default_factory=Transform.identity)


@dataclass
class FixedOrientationContact:
    """Align a body surface frame with a world orientation.

    Parameters
    ----------
    body_name : str
        link carrying the surface.
    target : numpy.ndarray (3, 3)
        orientation target in world coordinates.
    surface_frame : Transform
        surface frame expressed in the body frame.
    """
    body_name: str
    target: np.ndarray
    surface_frame: Transform = field(default_factory=Transform.identity)


@dataclass
class ForceContact:
    """Contact points of a body that carry a force.

    Each point frame is expressed in the body frame; its z axis is the
    contact normal the force must push along. Three world-frame force
    parameters are allocated per point.
    """
    body_name: str
    points: List[Transform]
    mu: float = 0.7


@dataclass
class EnvCollision:
    """Collision pair between a body hull and a static environment hull.

    Parameters
    ----------
    body_name : str
        tracked link.
    body_hull : skposture.collision.ConvexShape
        hull of the link, expressed in its own frame.
    body_transform : Transform
        hull frame expressed in the body frame.
    env_hull : skposture.collision.ConvexShape
        environment hull.
    min_dist : float
        minimum distance required by the assembled problem.
    env_transform : Transform or None
        world placement of `env_hull`. identity if None.
    """
    body_name: str
    body_hull: object
    body_transform: Transform
    env_hull: object
    min_dist: float = 0.0
    env_transform: Optional[Transform] = None


@dataclass
class SelfCollision:
    """Collision pair between hulls of two bodies of the same robot."""
    body1_name: str
    body1_hull: object
    body1_transform: Transform
    body2_name: str
    body2_hull: object
    body2_transform: Transform
    min_dist: float = 0.0


@dataclass
class RobotConfig:
    """Description of a posture problem.

    Parameters
    ----------
    multibody : skposture.model.MultiBody
        robot model.
    posture_scale : float
        weight of the distance to the target posture.
    force_scale : float
        weight of the squared contact forces.
    """
    multibody: object
    fixed_pos_contacts: List[FixedPositionContact] = field(
        default_factory=list)
    fixed_ori_contacts: List[FixedOrientationContact] = field(
        default_factory=list)
    force_contacts: List[ForceContact] = field(default_factory=list)
    env_collisions: List[EnvCollision] = field(default_factory=list)
    self_collisions: List[SelfCollision] = field(default_factory=list)
    with_friction_cone: bool = True
    posture_scale: float = 1.0
    force_scale: float = 0.0


@dataclass
class RunConfig:
    """Initial guess and target of a posture problem.

    `init_q` and `target_q` default to zeros; `init_forces` holds one
    world force per force point and defaults to zeros.
    """
    init_q: Optional[np.ndarray] = None
    init_forces: Optional[np.ndarray] = None
    target_q: Optional[np.ndarray] = None
