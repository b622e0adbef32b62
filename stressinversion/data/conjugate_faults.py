from typing import Optional, Sequence

from ..conjugate_planes import conjugate_rotation_tensor
from ..fault_helper import Fault, TypeOfMovement
from ..geomeca.tensor_parameters import TensorParameters
from ..logging_config import get_logger
from ..tensor_math import min_rot_angle
from ..types import Matrix3x3
from .data import Data, DataStatus
from .description import DataArguments
from .readers import read_plane

logger = get_logger(__name__)


class ConjugateFaults(Data):
    """Two neoformed conjugate fault planes, read from two linked lines.

    Sigma2 is the intersection of the planes and sigma1 bisects the obtuse
    angle between the normals, i.e. the acute angle between the planes. The
    misfit of a hypothesis is the minimum rotation bringing its principal
    frame onto the frame of the planes.
    """

    nb_linked_data = 2
    sigma1_bisects_obtuse = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.faults: list[Fault] = []
        self.movements: list[TypeOfMovement] = []
        self.Mrot: Optional[Matrix3x3] = None

    def initialize(self, arguments: Sequence[DataArguments]) -> DataStatus:
        status = arguments[0].status
        if len(arguments) != self.nb_linked_data:
            status.add_error(
                f"{type(self).__name__} expects {self.nb_linked_data} lines, got {len(arguments)}"
            )
            return status

        self._read_weight(arguments[0])
        faults = []
        movements = []
        for args in arguments:
            faults.append(read_plane(args))
            movements.append(args.get_movement(8))
        if not status.status:
            return status

        self.faults = faults
        self.movements = movements
        self.Mrot = conjugate_rotation_tensor(
            self.faults, self.movements, self.sigma1_bisects_obtuse
        )
        logger.debug(
            "%s %s: sigma1 %s, sigma3 %s",
            type(self).__name__,
            self.data_number,
            self.Mrot[0],
            self.Mrot[1],
        )
        return status

    def stress_cost(self, stress: TensorParameters) -> float:
        return min_rot_angle(self.Mrot @ stress.Hrot.T)


class CompactionShearBandsKin(ConjugateFaults):
    """Two conjugate compactional shear bands.

    Same construction as conjugate faults with the roles of the bisectors
    swapped: sigma1 bisects the acute angle between the normals.
    """

    sigma1_bisects_obtuse = False


class ConjugateDilatantShearBands(ConjugateFaults):
    """Two conjugate dilatant shear bands.

    Formed by combined dilation and shear, they constrain the stress axes as
    conjugate faults do.
    """
