from typing import Any, Type

from ..types import ValidationError
from .data import Data


class DataFactory:
    """Registry mapping data type names, as written in data files, to classes.

    Several names may be bound to the same class, e.g. the two lines of a
    pair of conjugate faults.
    """

    def __init__(self):
        self._classes: dict[str, Type[Data]] = {}

    @classmethod
    def default(cls) -> "DataFactory":
        """Factory with all the data types of the package."""
        from .conjugate_faults import (
            CompactionShearBandsKin,
            ConjugateDilatantShearBands,
            ConjugateFaults,
        )
        from .extension_fracture import DilationBand, ExtensionFracture
        from .focal_mechanism import FocalMechanismKin
        from .neoformed_striated_plane import (
            NeoformedStriatedPlane,
            StriatedCompactionalShearBand,
            StriatedDilatantShearBand,
        )
        from .striated_plane import StriatedPlaneKin

        factory = cls()
        factory.bind(StriatedPlaneKin, "Striated Plane")
        factory.bind(NeoformedStriatedPlane, "Neoformed Striated Plane")
        factory.bind(StriatedDilatantShearBand, "Striated Dilatant Shear Band")
        factory.bind(StriatedCompactionalShearBand, "Striated Compactional Shear Band")
        factory.bind(ConjugateFaults, "Conjugate Faults 1")
        factory.bind(ConjugateFaults, "Conjugate Faults 2")
        factory.bind(CompactionShearBandsKin, "Conjugate Compactional Shear Bands 1")
        factory.bind(CompactionShearBandsKin, "Conjugate Compactional Shear Bands 2")
        factory.bind(ConjugateDilatantShearBands, "Conjugate Dilatant Shear Bands 1")
        factory.bind(ConjugateDilatantShearBands, "Conjugate Dilatant Shear Bands 2")
        factory.bind(FocalMechanismKin, "Focal Mechanism")
        factory.bind(DilationBand, "Dilation Band")
        factory.bind(ExtensionFracture, "Extension Fracture")
        return factory

    def bind(self, data_class: Type[Data], name: str = "") -> None:
        self._classes[name or data_class.__name__] = data_class

    def create(self, name: str, **kwargs: Any) -> Data:
        """Instantiate the data type bound to ``name``.

        Raises:
            ValidationError: If no data type is bound to ``name``
        """
        return self.class_of(name)(**kwargs)

    def class_of(self, name: str) -> Type[Data]:
        try:
            return self._classes[name]
        except KeyError:
            raise ValidationError(f"Unknown data type '{name}'") from None

    def exists(self, name: str) -> bool:
        return name in self._classes

    def names(self) -> list[str]:
        return list(self._classes)

    def name(self, data: Data) -> str:
        """Name of the class of ``data``."""
        return type(data).__name__
