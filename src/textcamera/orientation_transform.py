"""Rotation and center-crop transforms for grayscale buffers.

Every transform returns a new ``GrayscaleBuffer`` and leaves its input alone,
except the zero-turn rotation which returns the input object itself.
"""

from __future__ import annotations

import logging

from .grayscale_buffer import GrayscaleBuffer

logger_app = logging.getLogger(__name__)

DICT_ROTATION_DEGREES_TO_TURNS: dict[int, int] = {0: 0, 90: 1, 180: 2, 270: 3}


class CropTargetTooLargeError(ValueError):
    """Raised when a crop target exceeds the buffer it is cut from."""


def rotation_degrees_to_quarter_turns(int_rotation_degrees: int) -> int:
    """Map a capture rotation hint (0/90/180/270) to clockwise quarter turns."""
    if int_rotation_degrees not in DICT_ROTATION_DEGREES_TO_TURNS:
        raise ValueError(
            f"Rotation must be one of 0, 90, 180 or 270 degrees, got {int_rotation_degrees}."
        )
    int_turns: int = DICT_ROTATION_DEGREES_TO_TURNS[int_rotation_degrees]
    return int_turns


def rotate_clockwise(obj_buffer: GrayscaleBuffer, int_quarter_turns: int = 1) -> GrayscaleBuffer:
    """Rotate a buffer by a multiple of 90 degrees clockwise.

    Inputs:
    - ``obj_buffer``: source buffer, not modified.
    - ``int_quarter_turns``: number of clockwise quarter turns, taken mod 4.

    Output:
    - The same object for zero turns, otherwise a new buffer. Odd turn counts
      swap width and height.

    Example, 4x3 input rotated once::

        01 02 03 04        09 05 01
        05 06 07 08   ->   10 06 02
        09 10 11 12        11 07 03
                           12 08 04
    """
    int_turns: int = int_quarter_turns % 4
    if int_turns == 0:
        return obj_buffer

    int_width: int = obj_buffer.int_width
    int_height: int = obj_buffer.int_height
    list_int_samples: list[int] = obj_buffer.list_int_samples

    if int_turns == 2:
        list_int_reversed: list[int] = list_int_samples[::-1]
        return GrayscaleBuffer(int_width, int_height, list_int_reversed)

    list_int_rotated: list[int] = []
    if int_turns == 1:
        # Each input column, read bottom to top, becomes one output row.
        for int_x in range(int_width):
            for int_y in range(int_height - 1, -1, -1):
                list_int_rotated.append(list_int_samples[int_y * int_width + int_x])
    else:
        for int_x in range(int_width - 1, -1, -1):
            for int_y in range(int_height):
                list_int_rotated.append(list_int_samples[int_y * int_width + int_x])

    obj_rotated: GrayscaleBuffer = GrayscaleBuffer(int_height, int_width, list_int_rotated)
    return obj_rotated


def center_crop(
    obj_buffer: GrayscaleBuffer, int_target_width: int, int_target_height: int
) -> GrayscaleBuffer:
    """Cut the centered ``target_width x target_height`` region out of a buffer.

    Odd leftover margins are split with floor division, so the extra pixel row
    or column is dropped from the bottom/right side.
    """
    if int_target_width <= 0 or int_target_height <= 0:
        raise ValueError(
            f"Crop target must be positive, got {int_target_width}x{int_target_height}."
        )

    int_width: int = obj_buffer.int_width
    int_height: int = obj_buffer.int_height
    if int_target_width > int_width or int_target_height > int_height:
        logger_app.error(
            "Cannot crop %dx%d buffer to larger target %dx%d.",
            int_width,
            int_height,
            int_target_width,
            int_target_height,
        )
        raise CropTargetTooLargeError(
            f"Crop target {int_target_width}x{int_target_height} exceeds "
            f"buffer size {int_width}x{int_height}."
        )

    int_x_offset: int = (int_width - int_target_width) // 2
    int_y_offset: int = (int_height - int_target_height) // 2
    list_int_source: list[int] = obj_buffer.list_int_samples

    list_int_cropped: list[int] = []
    for int_y in range(int_target_height):
        int_row_start: int = (int_y + int_y_offset) * int_width + int_x_offset
        list_int_cropped.extend(list_int_source[int_row_start : int_row_start + int_target_width])

    obj_cropped: GrayscaleBuffer = GrayscaleBuffer(
        int_target_width, int_target_height, list_int_cropped
    )
    return obj_cropped
