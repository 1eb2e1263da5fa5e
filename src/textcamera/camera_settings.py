"""Fixed layout and glyph configuration for the frame pipeline.

This module isolates the constant tables (alphabet, target resolutions, tile
grids) from the pipeline so `frame_pipeline.py` stays focused on the per-frame
runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Densest glyph first; it pairs with the lowest tone bin.
STR_DEFAULT_ALPHABET: str = "@#%B0P2L7?/!;:-,. "
TUPLE_PORTRAIT_RESOLUTION: tuple[int, int] = (480, 640)
TUPLE_PORTRAIT_TILE_GRID: tuple[int, int] = (96, 128)


class DeviceOrientation(str, Enum):
    """Display orientation reported by the capture side."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


@dataclass(frozen=True)
class FrameLayout:
    """Crop target and tile grid resolved for one orientation."""

    int_target_width: int
    int_target_height: int
    int_tile_cols: int
    int_tile_rows: int


@dataclass(frozen=True)
class PipelineSettings:
    """Immutable configuration injected into ``FramePipeline``.

    Inputs:
    - ``str_alphabet``: glyphs ordered densest first.
    - ``tuple_portrait_resolution``: ``(width, height)`` crop target in portrait.
    - ``tuple_portrait_tile_grid``: ``(cols, rows)`` tile grid in portrait.

    Output/Behavior:
    - Landscape uses the transposed resolution and tile grid.
    """

    str_alphabet: str = STR_DEFAULT_ALPHABET
    tuple_portrait_resolution: tuple[int, int] = TUPLE_PORTRAIT_RESOLUTION
    tuple_portrait_tile_grid: tuple[int, int] = TUPLE_PORTRAIT_TILE_GRID

    def __post_init__(self) -> None:
        """Reject configurations that cannot produce a mosaic."""
        if len(self.str_alphabet) == 0:
            raise ValueError("Glyph alphabet cannot be empty.")

        int_width, int_height = self.tuple_portrait_resolution
        int_cols, int_rows = self.tuple_portrait_tile_grid
        if int_width <= 0 or int_height <= 0:
            raise ValueError(
                f"Portrait resolution must be positive, got {int_width}x{int_height}."
            )
        if int_cols <= 0 or int_rows <= 0:
            raise ValueError(f"Tile grid must be positive, got {int_cols}x{int_rows}.")
        if int_cols > int_width or int_rows > int_height:
            raise ValueError(
                f"Tile grid {int_cols}x{int_rows} is finer than the "
                f"{int_width}x{int_height} resolution."
            )

    def resolve_layout(self, obj_orientation: DeviceOrientation) -> FrameLayout:
        """Return the crop target and tile grid for a device orientation."""
        int_width, int_height = self.tuple_portrait_resolution
        int_cols, int_rows = self.tuple_portrait_tile_grid
        if DeviceOrientation(obj_orientation) is DeviceOrientation.LANDSCAPE:
            int_width, int_height = int_height, int_width
            int_cols, int_rows = int_rows, int_cols

        obj_layout: FrameLayout = FrameLayout(
            int_target_width=int_width,
            int_target_height=int_height,
            int_tile_cols=int_cols,
            int_tile_rows=int_rows,
        )
        return obj_layout

    def get_capture_request_size(self) -> tuple[int, int]:
        """Return the square capture size that covers both orientations."""
        int_side: int = max(self.tuple_portrait_resolution)
        return (int_side, int_side)
