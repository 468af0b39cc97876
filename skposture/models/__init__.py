# flake8: noqa

from skposture.models.arm import make_serial_arm
from skposture.models.arm import make_z12_arm
