# flake8: noqa

from skposture.constraints.base import ConstraintKind
from skposture.constraints.base import DifferentiableFunction
from skposture.constraints.base import sign_coefficient
from skposture.constraints.collision import EnvCollisionConstraint
from skposture.constraints.collision import SelfCollisionConstraint
from skposture.constraints.contact import FixedOrientationContactConstraint
from skposture.constraints.contact import FixedPositionContactConstraint
from skposture.constraints.force import FrictionConeConstraint
from skposture.constraints.force import PositiveForceConstraint
