"""
Resolver configuration models.

The context resolver's hyperparameters are a constraint bundle: they do
not pick a candidate, they shape how distance between harmonies is
measured. Loaded from YAML by ConfigLoader, or built in code.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AxisWeights(BaseModel):
    """
    Per-axis multipliers for the KPD distance.

    Key and pattern are dilated slightly so that changing them costs more
    than changing degree.
    """

    key: float = Field(1.02, ge=0, description="Key axis scale")
    pattern: float = Field(1.01, ge=0, description="Pattern axis scale")
    degree: float = Field(1.0, ge=0, description="Degree axis scale")
    voicing: float = Field(1.0, ge=0, description="Voicing axis scale")
    extension: float = Field(1.0, ge=0, description="Extension axis scale")

    model_config = {"frozen": True}

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        """Weights in KPDVE axis order."""
        return (self.key, self.pattern, self.degree, self.voicing, self.extension)


class AxisBiases(BaseModel):
    """
    Per-axis bias toward low axis values (0 disables the bias).

    A biased axis weights its distance by proximity to zero, e.g. to pull
    the pattern axis toward the less altered patterns.
    """

    key: float = Field(0.0, ge=0, description="Key axis bias")
    pattern: float = Field(0.0, ge=0, description="Pattern axis bias")
    degree: float = Field(0.0, ge=0, description="Degree axis bias")
    voicing: float = Field(0.0, ge=0, description="Voicing axis bias")
    extension: float = Field(0.0, ge=0, description="Extension axis bias")

    model_config = {"frozen": True}

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        """Biases in KPDVE axis order."""
        return (self.key, self.pattern, self.degree, self.voicing, self.extension)


class ResolverConfig(BaseModel):
    """
    Complete resolver configuration.

    The defaults reproduce the standard behaviour: weighted L1 over Key,
    Pattern and Degree, with the same-key-and-pattern short-circuit.
    """

    name: str = Field("default", description="Config name")
    description: str = Field("", description="Human-readable description")

    axis_scale: AxisWeights = Field(default_factory=AxisWeights, description="Axis scales")
    axis_bias: AxisBiases = Field(default_factory=AxisBiases, description="Axis biases")

    distance_axes: int = Field(3, ge=1, le=5, description="Leading axes included in distance")
    initial_min_distance: float = Field(
        100.0, gt=0, description="Starting minimum, above any attainable distance"
    )
    prefer_same_kp: bool = Field(
        True, description="Select the first candidate sharing the context's key and pattern"
    )

    model_config = {"frozen": True}


class ResolverConfigMetadata(BaseModel):
    """
    Lightweight config metadata for listing/discovery.
    """

    name: str = Field(..., description="Config name")
    description: str = Field("", description="Human-readable description")
    path: str | None = Field(None, description="Path to config file")

    @classmethod
    def from_config(cls, config: ResolverConfig, path: str | None = None) -> ResolverConfigMetadata:
        """Create metadata from a full config."""
        return cls(name=config.name, description=config.description, path=path)
