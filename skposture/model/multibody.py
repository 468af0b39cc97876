from collections import deque
from logging import getLogger

import numpy as np

from skposture.coordinates import Transform
from skposture.model.joint import calc_target_joint_dimension


logger = getLogger(__name__)


class MultiBody(object):
    """Kinematic tree made of links connected by joints.

    Links are re-ordered so that every parent precedes its children; the
    root link has index 0. Joints are stored in the same order, the joint
    at index ``k`` being the parent joint of ``link_list[k + 1]``.
    Joint parameters are laid out in joint order, ``joint_dof`` entries
    per joint.

    Parameters
    ----------
    link_list : list[skposture.model.Link]
        links of the tree.
    joint_list : list[skposture.model.Joint]
        joints of the tree. Each link except the root must be the child
        of exactly one joint.
    base_transform : skposture.coordinates.Transform or None
        world pose of the root link. identity if None.
    """

    def __init__(self, link_list, joint_list, base_transform=None):
        names = [link.name for link in link_list]
        if len(set(names)) != len(names):
            raise ValueError('link names must be unique: {}'.format(names))
        joint_names = [joint.name for joint in joint_list]
        if len(set(joint_names)) != len(joint_names):
            raise ValueError(
                'joint names must be unique: {}'.format(joint_names))

        children = set(id(joint.child_link) for joint in joint_list)
        roots = [link for link in link_list if id(link) not in children]
        if len(roots) != 1:
            raise ValueError(
                'expect exactly one root link, get {}'.format(roots))

        joint_of_child = {id(joint.child_link): joint for joint in joint_list}
        ordered_links = []
        ordered_joints = []
        queue = deque(roots)
        while queue:
            link = queue.popleft()
            ordered_links.append(link)
            for child in link.child_links:
                joint = joint_of_child.get(id(child))
                if joint is None:
                    continue
                ordered_joints.append(joint)
                queue.append(child)
        if len(ordered_links) != len(link_list):
            raise ValueError('some links are not connected to the root link')

        self.link_list = ordered_links
        self.joint_list = ordered_joints
        self.base_transform = base_transform or Transform.identity()
        self._link_index = {
            link.name: i for i, link in enumerate(self.link_list)}
        self._joint_index = {
            joint.name: i for i, joint in enumerate(self.joint_list)}

        self.parent_link_index = [-1]
        for joint in self.joint_list:
            self.parent_link_index.append(
                self._link_index[joint.parent_link.name])

        self.joint_param_index = []
        offset = 0
        for joint in self.joint_list:
            self.joint_param_index.append(offset)
            offset += joint.joint_dof
        self._nr_dof = calc_target_joint_dimension(self.joint_list)

    @property
    def nr_dof(self):
        """Number of joint parameters."""
        return self._nr_dof

    @property
    def root_link(self):
        return self.link_list[0]

    def body_index_by_name(self, name):
        """Resolve a link name to its index.

        Raises
        ------
        ValueError
            if no link has the given name.
        """
        try:
            return self._link_index[name]
        except KeyError:
            raise ValueError('unknown body {}'.format(name))

    def joint_index_by_name(self, name):
        try:
            return self._joint_index[name]
        except KeyError:
            raise ValueError('unknown joint {}'.format(name))

    def link(self, name):
        return self.link_list[self.body_index_by_name(name)]

    def joint_path(self, body_index):
        """Return the joint indices from the root to `body_index`.

        Parameters
        ----------
        body_index : int
            index of the target link.

        Returns
        -------
        path : list[int]
            joint indices, root side first.
        """
        path = []
        index = body_index
        while index > 0:
            path.append(index - 1)
            index = self.parent_link_index[index]
        return path[::-1]

    def joint_limits(self):
        """Return lower and upper limit arrays of the joint parameters."""
        lower = []
        upper = []
        for joint in self.joint_list:
            lower.extend([joint.min_angle] * joint.joint_dof)
            upper.extend([joint.max_angle] * joint.joint_dof)
        return np.array(lower, dtype=np.float64), \
            np.array(upper, dtype=np.float64)

    def forward_kinematics(self, q):
        """Compute world poses of all links.

        Parameters
        ----------
        q : numpy.ndarray(nr_dof,)
            joint parameters.

        Returns
        -------
        link_poses : list[skposture.coordinates.Transform]
            world pose of each link.
        joint_frames : list[skposture.coordinates.Transform]
            world pose of each joint frame before its motion is applied.
        """
        q = np.asarray(q, dtype=np.float64)
        if q.shape != (self.nr_dof,):
            raise ValueError('q must be of shape ({},), get {}'.format(
                self.nr_dof, q.shape))
        link_poses = [self.base_transform]
        joint_frames = []
        for i, joint in enumerate(self.joint_list):
            parent_pose = link_poses[self.parent_link_index[i + 1]]
            joint_frame = joint.origin * parent_pose
            if joint.joint_dof > 0:
                v = q[self.joint_param_index[i]]
                if v < joint.min_angle or v > joint.max_angle:
                    logger.debug('%s: joint value %s outside [%s, %s]',
                                 joint, v, joint.min_angle, joint.max_angle)
                motion = joint.joint_transform(v)
            else:
                motion = joint.joint_transform(None)
            joint_frames.append(joint_frame)
            link_poses.append(motion * joint_frame)
        return link_poses, joint_frames

    def __repr__(self):
        return '#<MultiBody links={} dof={}>'.format(
            len(self.link_list), self.nr_dof)
