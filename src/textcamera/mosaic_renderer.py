"""Tile averaging and glyph classification for text mosaics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .grayscale_buffer import GrayscaleBuffer
from .tone_mapper import ToneBins


@dataclass(frozen=True)
class GlyphMosaic:
    """A finished character grid for one frame.

    Inputs:
    - ``int_tile_cols``/``int_tile_rows``: grid dimensions.
    - ``str_cells``: row-major glyphs, ``tile_cols * tile_rows`` long.

    Output/Behavior:
    - Immutable once built, so it can be handed to a display thread as-is.
    """

    int_tile_cols: int
    int_tile_rows: int
    str_cells: str

    def __post_init__(self) -> None:
        """Validate grid dimensions against the cell count."""
        if self.int_tile_cols <= 0 or self.int_tile_rows <= 0:
            raise ValueError(
                f"Tile grid must be positive, got {self.int_tile_cols}x{self.int_tile_rows}."
            )
        int_expected: int = self.int_tile_cols * self.int_tile_rows
        if len(self.str_cells) != int_expected:
            raise ValueError(
                f"Expected {int_expected} cells, got {len(self.str_cells)}."
            )

    def cell(self, int_col: int, int_row: int) -> str:
        if not (0 <= int_col < self.int_tile_cols and 0 <= int_row < self.int_tile_rows):
            raise IndexError(f"Cell ({int_col}, {int_row}) is outside the mosaic.")
        return self.str_cells[int_row * self.int_tile_cols + int_col]

    def to_lines(self) -> list[str]:
        """Split the cells into one string per tile row."""
        int_cols: int = self.int_tile_cols
        list_str_lines: list[str] = [
            self.str_cells[int_start : int_start + int_cols]
            for int_start in range(0, len(self.str_cells), int_cols)
        ]
        return list_str_lines

    def to_text(self) -> str:
        """Format the mosaic with a hard line break after every row."""
        str_text: str = "\n".join(self.to_lines()) + "\n"
        return str_text


def classify_intensity(int_average: int, seq_float_thresholds: Sequence[float]) -> int:
    """Return the glyph index for one tile average.

    The result is the first bin whose upper bound is not exceeded. A value equal
    to a threshold stays in that bin. Values above every threshold fall into
    the last bin. With all-zero thresholds (a flat frame) a zero average maps to
    index 0 and anything brighter maps to the last index.
    """
    int_last_index: int = len(seq_float_thresholds) - 1
    int_index: int = 0
    while int_index < int_last_index and int_average > seq_float_thresholds[int_index]:
        int_index += 1
    return int_index


def render_mosaic(
    obj_buffer: GrayscaleBuffer,
    int_tile_cols: int,
    int_tile_rows: int,
    obj_bins: ToneBins,
    str_alphabet: str,
) -> GlyphMosaic:
    """Average each tile of a buffer and map it to a glyph.

    Inputs:
    - ``obj_buffer``: rotated and cropped frame.
    - ``int_tile_cols``/``int_tile_rows``: output grid dimensions.
    - ``obj_bins``: thresholds from ``compute_bins``, one per glyph.
    - ``str_alphabet``: glyphs ordered to match the bins.

    Output:
    - ``GlyphMosaic`` of ``int_tile_cols * int_tile_rows`` cells.

    Tile sizes use floor division. When the buffer does not divide evenly, the
    trailing pixels past the last whole tile are left out of every average.
    Sums and averages are integers, thresholds are floats.
    """
    if int_tile_cols <= 0 or int_tile_rows <= 0:
        raise ValueError(f"Tile grid must be positive, got {int_tile_cols}x{int_tile_rows}.")
    if len(obj_bins) != len(str_alphabet):
        raise ValueError(
            f"Got {len(obj_bins)} tone bins for an alphabet of {len(str_alphabet)} glyphs."
        )

    int_width: int = obj_buffer.int_width
    int_tile_width: int = int_width // int_tile_cols
    int_tile_height: int = obj_buffer.int_height // int_tile_rows
    if int_tile_width == 0 or int_tile_height == 0:
        raise ValueError(
            f"A {int_tile_cols}x{int_tile_rows} tile grid does not fit a "
            f"{int_width}x{obj_buffer.int_height} buffer."
        )

    list_int_samples: list[int] = obj_buffer.list_int_samples
    tuple_float_thresholds: tuple[float, ...] = obj_bins.tuple_float_thresholds
    int_tile_area: int = int_tile_width * int_tile_height
    list_str_cells: list[str] = []

    for int_row in range(int_tile_rows):
        int_top: int = int_row * int_tile_height
        for int_col in range(int_tile_cols):
            int_left: int = int_col * int_tile_width
            int_sum: int = 0
            for int_y in range(int_top, int_top + int_tile_height):
                int_row_start: int = int_y * int_width + int_left
                int_sum += sum(list_int_samples[int_row_start : int_row_start + int_tile_width])

            int_average: int = int_sum // int_tile_area
            int_glyph_index: int = classify_intensity(int_average, tuple_float_thresholds)
            list_str_cells.append(str_alphabet[int_glyph_index])

    obj_mosaic: GlyphMosaic = GlyphMosaic(
        int_tile_cols=int_tile_cols,
        int_tile_rows=int_tile_rows,
        str_cells="".join(list_str_cells),
    )
    return obj_mosaic
