"""PNG preview of a generated map."""

from pathlib import Path

import numpy as np
from PIL import Image

from ..grid import TileGrid
from ..terrain_types import ResourceType, TerrainType, resource_value

# Magenta for storage values with no known colour
UNKNOWN_COLOR = (255, 0, 255)


def _palette(colors: dict[int, tuple[int, int, int]]) -> np.ndarray:
    palette = np.full((256, 3), UNKNOWN_COLOR, dtype=np.uint8)
    for value, color in colors.items():
        palette[value] = color
    return palette


TERRAIN_PALETTE = _palette({i: t.color for i, t in enumerate(TerrainType)})
RESOURCE_PALETTE = _palette({resource_value(r): r.color for r in ResourceType})


def render_map_image(
    grid: TileGrid,
    scale: int = 1,
    show_resources: bool = True,
) -> Image.Image:
    """Render the grid at ``scale`` pixels per tile.

    Args:
        grid: Generated tile grid.
        scale: Pixels per tile edge.
        show_resources: Whether to draw resources over the terrain.

    Returns:
        PIL Image with terrain visualization.

    Raises:
        ValueError: If the grid has no tiles.
    """
    if grid.is_empty:
        raise ValueError("Cannot render an empty grid")

    pixels = TERRAIN_PALETTE[grid.terrain]
    if show_resources:
        has_resource = grid.resources != 0
        pixels[has_resource] = RESOURCE_PALETTE[grid.resources[has_resource]]

    img = Image.fromarray(pixels)
    scale = max(1, scale)
    if scale > 1:
        img = img.resize((grid.width * scale, grid.height * scale), Image.Resampling.NEAREST)
    return img


def save_preview(grid: TileGrid, path: Path, scale: int = 1) -> Path:
    """Render the grid and write it as a PNG."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    render_map_image(grid, scale).save(path)
    return path
