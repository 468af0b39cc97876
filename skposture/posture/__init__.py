# flake8: noqa

from skposture.posture.config import EnvCollision
from skposture.posture.config import FixedOrientationContact
from skposture.posture.config import FixedPositionContact
from skposture.posture.config import ForceContact
from skposture.posture.config import RobotConfig
from skposture.posture.config import RunConfig
from skposture.posture.config import SelfCollision
from skposture.posture.data import ForceData
from skposture.posture.data import PostureData
