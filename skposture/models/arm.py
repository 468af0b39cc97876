import numpy as np

from skposture.coordinates import Transform
from skposture.model import FixedJoint
from skposture.model import Link
from skposture.model import MultiBody
from skposture.model import RotationalJoint


def make_serial_arm(n_links=12, link_length=0.5,
                    axes=('z', 'x', 'y'), with_end_effector=False):
    """Create a serial arm of rotational joints.

    Link ``b0`` is the fixed root and link ``b{i}`` is attached to
    ``b{i-1}`` by joint ``j{i-1}`` whose frame is offset by
    `link_length` along the parent y axis (no offset for the first
    joint). Joint axes cycle through `axes`.

    Parameters
    ----------
    n_links : int
        number of moving links.
    link_length : float
        distance between consecutive joints.
    axes : tuple[str]
        joint axes, cycled along the chain.
    with_end_effector : bool
        if `True`, a link ``ee`` is rigidly attached to the last link
        through a fixed joint.

    Returns
    -------
    multibody : skposture.model.MultiBody
    """
    links = [Link('b0')]
    joints = []
    for i in range(1, n_links + 1):
        link = Link('b{}'.format(i))
        offset = np.zeros(3) if i == 1 else np.array([0.0, link_length, 0.0])
        joints.append(RotationalJoint(
            name='j{}'.format(i - 1),
            parent_link=links[-1], child_link=link,
            origin=Transform(offset),
            axis=axes[(i - 1) % len(axes)],
            min_angle=-np.pi, max_angle=np.pi))
        links.append(link)
    if with_end_effector:
        ee = Link('ee')
        joints.append(FixedJoint(
            name='ee_fixed_joint', parent_link=links[-1], child_link=ee,
            origin=Transform([0.0, link_length, 0.0])))
        links.append(ee)
    return MultiBody(links, joints)


def make_z12_arm():
    """Create the 12 link arm used by the jacobian tests."""
    return make_serial_arm(n_links=12, link_length=0.5)
