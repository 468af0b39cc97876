# flake8: noqa

from skposture.kinematics.jacobian import Jacobian
