from .tensor_parameters import TensorParameters
from .engine import HomogeneousEngine, tensor_parameters_from_rotation

__all__ = [
    "TensorParameters",
    "HomogeneousEngine",
    "tensor_parameters_from_rotation",
]
