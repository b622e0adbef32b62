"""Search configuration models."""

from typing import Any, Dict, List

import numpy as np
from pydantic import BaseModel, Field, field_validator

from .analysis.domain import Axis


class AxisConfig(BaseModel):
    """Configuration of a sampled parameter."""

    name: str = Field(..., description="Name of the parameter space parameter")
    min: float = Field(..., description="Lower bound of the axis")
    max: float = Field(..., description="Upper bound of the axis")
    n: int = Field(2, ge=1, description="Number of grid samples along the axis")

    @field_validator("max")
    @classmethod
    def max_not_lower_than_min(cls, v, info):
        if "min" in info.data and v < info.data["min"]:
            raise ValueError("max must be greater than or equal to min")
        return v

    def to_axis(self) -> Axis:
        return Axis(name=self.name, bounds=(self.min, self.max), n=self.n)


class GridSearchConfig(BaseModel):
    """Configuration of a regular grid scan of the parameter space."""

    axes: List[AxisConfig] = Field(..., min_length=1, description="Sampled axes")

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "GridSearchConfig":
        """Create GridSearchConfig from a dictionary."""
        return cls(**config)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class MonteCarloConfig(BaseModel):
    """Configuration of the Monte Carlo search around a reference solution."""

    stress_ratio: float = Field(
        0.5, ge=0.0, le=1.0, description="Stress ratio of the reference solution"
    )
    stress_ratio_half_interval: float = Field(
        0.25, ge=0.0, le=1.0, description="Half width of the explored stress ratios"
    )
    rot_angle_half_interval: float = Field(
        180.0,
        gt=0.0,
        le=180.0,
        description="Maximum rotation from the reference orientation, in degrees",
    )
    nb_random_trials: int = Field(1000, gt=0, description="Number of random trials")

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "MonteCarloConfig":
        """Create MonteCarloConfig from a dictionary."""
        return cls(**config)

    @classmethod
    def create_random(cls) -> "MonteCarloConfig":
        """Create MonteCarloConfig with a random reference stress ratio."""
        return cls(
            stress_ratio=float(np.random.uniform(0.0, 1.0)),
            stress_ratio_half_interval=0.25,
            rot_angle_half_interval=180.0,
            nb_random_trials=1000,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
