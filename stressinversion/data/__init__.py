from .data import Data, DataStatus, FractureStrategy, ProblemType
from .description import DataArguments, DataDescription
from .factory import DataFactory
from .conjugate_faults import (
    CompactionShearBandsKin,
    ConjugateDilatantShearBands,
    ConjugateFaults,
)
from .neoformed_striated_plane import (
    NeoformedStriatedPlane,
    StriatedCompactionalShearBand,
    StriatedDilatantShearBand,
)
from .focal_mechanism import FocalMechanismKin, NodalPlane, auxiliary_plane, nodal_plane
from .striated_plane import StriatedPlaneKin
from .extension_fracture import DilationBand, ExtensionFracture

__all__ = [
    "Data",
    "DataStatus",
    "FractureStrategy",
    "ProblemType",
    "DataArguments",
    "DataDescription",
    "DataFactory",
    "ConjugateFaults",
    "CompactionShearBandsKin",
    "ConjugateDilatantShearBands",
    "NeoformedStriatedPlane",
    "StriatedDilatantShearBand",
    "StriatedCompactionalShearBand",
    "FocalMechanismKin",
    "NodalPlane",
    "auxiliary_plane",
    "nodal_plane",
    "StriatedPlaneKin",
    "ExtensionFracture",
    "DilationBand",
]
