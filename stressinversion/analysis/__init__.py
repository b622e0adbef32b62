from .parameter_space import FullParameterSpace, ParameterSpace
from .domain import Axis, Domain, GridDomain, RandomDomain

__all__ = [
    "ParameterSpace",
    "FullParameterSpace",
    "Axis",
    "Domain",
    "GridDomain",
    "RandomDomain",
]
