"""Map generation pipeline.

Noise-based elevation and moisture fields, continent shaping, symmetry
folding, biome classification, smoothing passes, resource placement and
spawn clearing.
"""

from .config import MapConfig, load_config
from .generator import GenerationResult, generate, generate_map, generate_symmetric
from .resources import SpawnResourceReport
from .symmetry import SymmetryMode
from .validation import ValidationResult, validate_map

__all__ = [
    "GenerationResult",
    "MapConfig",
    "SpawnResourceReport",
    "SymmetryMode",
    "ValidationResult",
    "generate",
    "generate_map",
    "generate_symmetric",
    "load_config",
    "validate_map",
]
