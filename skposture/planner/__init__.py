# flake8: noqa

from skposture.planner.posture_generator import PostureGenerator
from skposture.planner.posture_generator import PostureResult
from skposture.planner.utils import scipinize
