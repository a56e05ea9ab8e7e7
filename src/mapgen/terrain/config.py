"""Map generation configuration models.

Every field is optional with a documented default. Out-of-range values are
clamped to safe values instead of rejected, so any configuration still
produces a valid grid.
"""

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..terrain_types import ResourceType

# Smallest noise scale accepted; scales are divisors of tile coordinates
MIN_SCALE = 1e-3


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ElevationConfig(_Section):
    """Elevation field generation parameters."""

    terrain_scale: float = Field(default=120.0, description="Base noise wavelength in tiles")
    octaves: int = Field(default=6, description="Octaves of base fractal noise")
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")
    persistence: float = Field(default=0.5, description="Amplitude multiplier per octave")
    ridge_scale_factor: float = Field(
        default=0.8, description="Ridged noise wavelength relative to terrain_scale"
    )
    ridged_octaves: int = Field(default=4, description="Octaves of ridged noise")
    ridge_start: float = Field(
        default=0.5, description="Base elevation where ridges start blending in"
    )
    ridge_end: float = Field(
        default=0.7, description="Base elevation where ridge blending is full"
    )
    ridge_weight: float = Field(default=0.4, description="Ridged contribution weight")

    @field_validator("octaves", "ridged_octaves")
    @classmethod
    def clamp_non_negative(cls, value: int) -> int:
        return max(0, value)

    @field_validator("terrain_scale", "ridge_scale_factor")
    @classmethod
    def clamp_scale(cls, value: float) -> float:
        return max(MIN_SCALE, value)

    @field_validator("ridge_weight")
    @classmethod
    def clamp_unit(cls, value: float) -> float:
        return min(1.0, max(0.0, value))

    @model_validator(mode="after")
    def _order_ridge_band(self) -> "ElevationConfig":
        if self.ridge_start > self.ridge_end:
            self.ridge_start, self.ridge_end = self.ridge_end, self.ridge_start
        return self


class MoistureConfig(_Section):
    """Moisture field generation parameters."""

    moisture_scale: float = Field(default=80.0, description="Moisture noise wavelength")
    octaves: int = Field(default=4, description="Octaves of moisture noise")
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")
    persistence: float = Field(default=0.6, description="Amplitude multiplier per octave")
    offset: float = Field(
        default=500.0, description="Noise-space offset decorrelating moisture from elevation"
    )
    coast_band: float = Field(
        default=0.1, description="Elevation band above water level with raised moisture"
    )

    @field_validator("octaves")
    @classmethod
    def clamp_non_negative(cls, value: int) -> int:
        return max(0, value)

    @field_validator("moisture_scale")
    @classmethod
    def clamp_scale(cls, value: float) -> float:
        return max(MIN_SCALE, value)


class IslandConfig(_Section):
    """Continent shaping parameters."""

    falloff_start: float = Field(
        default=0.6, description="Normalized centre distance where falloff begins"
    )
    falloff_end: float = Field(
        default=1.2, description="Normalized centre distance where land is gone"
    )
    spawn_boost: float = Field(default=0.25, description="Elevation added at spawn corners")
    spawn_boost_radius: float = Field(
        default=0.3, description="Corner distance (fraction of width) the boost reaches"
    )

    @model_validator(mode="after")
    def _order_falloff(self) -> "IslandConfig":
        if self.falloff_start > self.falloff_end:
            self.falloff_start, self.falloff_end = self.falloff_end, self.falloff_start
        self.spawn_boost_radius = max(0.0, self.spawn_boost_radius)
        return self


class RiverConfig(_Section):
    """River valley carving parameters."""

    enabled: bool = Field(default=True, description="Carve the two crossing river valleys")
    warp_scale: float = Field(default=60.0, description="Wavelength of the warp noise")
    warp_amplitude: float = Field(default=30.0, description="Warp offset in tiles")
    half_width: float = Field(default=25.0, description="Valley half width in tiles")
    depth: float = Field(default=0.15, description="Elevation removed at the valley floor")
    moisture_gain: float = Field(default=0.3, description="Moisture added at the valley floor")

    @field_validator("warp_scale", "half_width")
    @classmethod
    def clamp_scale(cls, value: float) -> float:
        return max(MIN_SCALE, value)


class ClassificationConfig(_Section):
    """Biome classification thresholds, evaluated in priority order."""

    water_level: float = Field(default=0.35, description="Elevation below this is water")
    beach_width: float = Field(default=0.03, description="Elevation band of beach above water")
    mountain_threshold: float = Field(default=0.72, description="Elevation above this is mountain")
    peak_threshold: float = Field(default=0.85, description="Elevation above this is a peak")
    hills_band: float = Field(
        default=0.08, description="Elevation band below mountains that becomes hills"
    )
    forest_moisture: float = Field(default=0.5, description="Moisture above this is forest")
    desert_moisture: float = Field(default=0.25, description="Moisture below this is desert")
    dense_forest_offset: float = Field(
        default=0.2, description="Moisture above forest_moisture + offset is dense forest"
    )
    wetland_band: float = Field(
        default=0.1, description="Moisture band below forest_moisture allowing wetland"
    )
    wetland_elevation_band: float = Field(
        default=0.15, description="Elevation band above water level allowing wetland"
    )

    @model_validator(mode="after")
    def _order_thresholds(self) -> "ClassificationConfig":
        self.beach_width = max(0.0, self.beach_width)
        self.hills_band = max(0.0, self.hills_band)
        if self.mountain_threshold > self.peak_threshold:
            self.mountain_threshold, self.peak_threshold = (
                self.peak_threshold,
                self.mountain_threshold,
            )
        if self.desert_moisture > self.forest_moisture:
            self.desert_moisture, self.forest_moisture = (
                self.forest_moisture,
                self.desert_moisture,
            )
        return self


class DetailConfig(_Section):
    """Terrain post-processing parameters."""

    forest_spread_chance: float = Field(
        default=0.15, description="Chance grass next to forest becomes forest"
    )
    forest_min_neighbors: int = Field(
        default=2, description="Forest neighbours needed for forest spread"
    )
    hills_chance: float = Field(
        default=0.4, description="Chance grass next to mountains becomes hills"
    )
    majority_smoothing: bool = Field(
        default=False, description="Run majority-neighbour smoothing before coastlines"
    )
    majority_iterations: int = Field(default=2, description="Majority smoothing passes")

    @field_validator("forest_spread_chance", "hills_chance")
    @classmethod
    def clamp_unit(cls, value: float) -> float:
        return min(1.0, max(0.0, value))

    @field_validator("forest_min_neighbors", "majority_iterations")
    @classmethod
    def clamp_non_negative(cls, value: int) -> int:
        return max(0, value)


class ResourceZoneConfig(_Section):
    """A fixed count of one resource scattered around an anchor point."""

    kind: ResourceType
    anchor: Literal["center", "spawns"] = Field(
        default="center", description="Map centre, or every active spawn"
    )
    radius: float = Field(default=10.0, description="Zone radius in tiles")
    count: int = Field(default=5, description="Resources to place per anchor")

    @field_validator("count")
    @classmethod
    def clamp_non_negative(cls, value: int) -> int:
        return max(0, value)

    @field_validator("radius")
    @classmethod
    def clamp_radius(cls, value: float) -> float:
        return max(0.0, value)


class ResourceConfig(_Section):
    """Resource placement parameters."""

    richness: float = Field(default=1.0, description="Multiplier on placement chances")
    noise_scale: float = Field(default=25.0, description="Resource affinity noise wavelength")
    noise_offset: float = Field(default=1000.0, description="Affinity noise-space offset")

    gold_center_radius: float = Field(
        default=0.2, description="Gold only within this centre distance (fraction of width)"
    )
    gold_noise_threshold: float = Field(default=0.65, description="Affinity needed for gold")
    gold_chance: float = Field(default=0.03, description="Gold placement chance")
    iron_noise_threshold: float = Field(default=0.6, description="Affinity needed for iron")
    iron_chance: float = Field(default=0.04, description="Iron placement chance")
    stone_noise_threshold: float = Field(default=0.55, description="Affinity needed for stone")
    stone_chance: float = Field(default=0.05, description="Stone placement chance")
    wood_noise_threshold: float = Field(default=0.5, description="Affinity needed for wood")
    wood_chance: float = Field(default=0.06, description="Wood placement chance")

    spawn_wood: int = Field(default=4, description="Guaranteed wood per spawn")
    spawn_stone: int = Field(default=3, description="Guaranteed stone per spawn")
    spawn_gold: int = Field(default=2, description="Guaranteed gold per spawn")
    spawn_attempts: int = Field(
        default=200, description="Sampling attempts per spawn before giving up"
    )
    zone_attempts_per_resource: int = Field(
        default=50, description="Zone sampling attempts per requested resource"
    )
    zones: list[ResourceZoneConfig] = Field(default_factory=list)

    @field_validator("gold_chance", "iron_chance", "stone_chance", "wood_chance")
    @classmethod
    def clamp_unit(cls, value: float) -> float:
        return min(1.0, max(0.0, value))

    @field_validator(
        "spawn_wood",
        "spawn_stone",
        "spawn_gold",
        "spawn_attempts",
        "zone_attempts_per_resource",
    )
    @classmethod
    def clamp_non_negative(cls, value: int) -> int:
        return max(0, value)

    @field_validator("noise_scale")
    @classmethod
    def clamp_scale(cls, value: float) -> float:
        return max(MIN_SCALE, value)

    @field_validator("richness")
    @classmethod
    def clamp_richness(cls, value: float) -> float:
        return max(0.0, value)


class SpawnConfig(_Section):
    """Spawn placement and clearing parameters."""

    clear_radius: int = Field(
        default=35, description="Outer radius made walkable around each spawn"
    )
    margin: int | None = Field(
        default=None, description="Spawn inset from the corners (default: clear_radius)"
    )

    @field_validator("clear_radius")
    @classmethod
    def clamp_non_negative(cls, value: int) -> int:
        return max(0, value)

    @field_validator("margin")
    @classmethod
    def clamp_margin(cls, value: int | None) -> int | None:
        return None if value is None else max(0, value)

    @property
    def inner_radius(self) -> int:
        """Radius of the guaranteed resource-free grass zone."""
        return self.clear_radius // 2

    @property
    def effective_margin(self) -> int:
        return self.clear_radius if self.margin is None else self.margin


class MapConfig(_Section):
    """Complete map generation configuration."""

    elevation: ElevationConfig = Field(default_factory=ElevationConfig)
    moisture: MoistureConfig = Field(default_factory=MoistureConfig)
    island: IslandConfig = Field(default_factory=IslandConfig)
    rivers: RiverConfig = Field(default_factory=RiverConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    details: DetailConfig = Field(default_factory=DetailConfig)
    resources: ResourceConfig = Field(default_factory=ResourceConfig)
    spawn: SpawnConfig = Field(default_factory=SpawnConfig)

    validate_output: bool = Field(
        default=True, description="Check and log map invariants after generation"
    )


def load_config(config_path: Path) -> MapConfig:
    """Load map configuration from a TOML file.

    Settings may sit at the top level or under a ``[mapgen]`` table.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed MapConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If keys are unknown or values mistyped.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return MapConfig.model_validate(data.get("mapgen", data))
