# flake8: noqa

from skposture.model.joint import calc_target_joint_dimension
from skposture.model.joint import FixedJoint
from skposture.model.joint import Joint
from skposture.model.joint import LinearJoint
from skposture.model.joint import RotationalJoint
from skposture.model.link import Link
from skposture.model.multibody import MultiBody
