"""Grayscale pixel buffer used by every stage of the frame pipeline.

The buffer is row-major with the origin in the top-left corner, so the sample
at ``(x, y)`` lives at flat index ``y * width + x``. Example::

    5 2 2 3
    5 3 3 2      ->  [5, 2, 2, 3, 5, 3, 3, 2, 6, 9, 2, 8]
    6 9 2 8
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from PIL import Image

logger_app = logging.getLogger(__name__)


class OutOfRangeError(IndexError):
    """Raised when a sample is read outside the buffer bounds."""


@dataclass
class GrayscaleBuffer:
    """One frame worth of 0-255 intensity samples.

    Inputs:
    - ``int_width``/``int_height``: positive buffer dimensions.
    - ``list_int_samples``: row-major samples, ``width * height`` long.

    Output/Behavior:
    - Construction validates dimensions, sample count and the 0-255 range.
    - ``replace`` swaps dimensions and samples in one step without validation;
      a mismatched replacement shows up as ``OutOfRangeError`` from ``sample``.
    """

    int_width: int
    int_height: int
    list_int_samples: list[int]

    def __post_init__(self) -> None:
        """Validate dimensions against the sample count."""
        if self.int_width <= 0 or self.int_height <= 0:
            raise ValueError(
                f"Buffer dimensions must be positive, got {self.int_width}x{self.int_height}."
            )

        list_int_copy: list[int] = list(self.list_int_samples)
        int_expected: int = self.int_width * self.int_height
        if len(list_int_copy) != int_expected:
            raise ValueError(
                f"Expected {int_expected} samples for a {self.int_width}x{self.int_height} "
                f"buffer, got {len(list_int_copy)}."
            )
        for int_index, int_value in enumerate(list_int_copy):
            if not 0 <= int_value <= 255:
                raise ValueError(
                    f"Sample at index {int_index} must be in [0, 255], got {int_value}."
                )
        self.list_int_samples = list_int_copy

    def sample(self, int_x: int, int_y: int) -> int:
        """Return the intensity at ``(int_x, int_y)``."""
        if not (0 <= int_x < self.int_width and 0 <= int_y < self.int_height):
            raise OutOfRangeError(
                f"Sample ({int_x}, {int_y}) is outside a "
                f"{self.int_width}x{self.int_height} buffer."
            )

        int_index: int = int_y * self.int_width + int_x
        if int_index >= len(self.list_int_samples):
            raise OutOfRangeError(
                f"Sample ({int_x}, {int_y}) maps to index {int_index} but only "
                f"{len(self.list_int_samples)} samples are stored."
            )
        return self.list_int_samples[int_index]

    def replace(
        self, int_new_width: int, int_new_height: int, list_int_new_samples: list[int]
    ) -> None:
        """Swap dimensions and samples together.

        The caller guarantees ``len(list_int_new_samples) == width * height``.
        An empty replacement makes ``compute_bins`` raise ``ValueError``.
        """
        self.int_width = int_new_width
        self.int_height = int_new_height
        self.list_int_samples = list(list_int_new_samples)

    @property
    def tuple_size(self) -> tuple[int, int]:
        return (self.int_width, self.int_height)

    @classmethod
    def from_byte_plane(
        cls,
        int_width: int,
        int_height: int,
        int_row_stride: int,
        bytes_plane: bytes | bytearray | memoryview,
    ) -> GrayscaleBuffer:
        """Build a buffer from a strided luminance plane.

        Each row occupies ``int_row_stride`` bytes, of which the first
        ``int_width`` are pixels and the rest is padding. Bytes are read as
        unsigned values.
        """
        if int_width <= 0 or int_height <= 0:
            raise ValueError(
                f"Plane dimensions must be positive, got {int_width}x{int_height}."
            )
        if int_row_stride < int_width:
            raise ValueError(
                f"Row stride {int_row_stride} is smaller than the row width {int_width}."
            )

        int_required: int = int_height * int_row_stride
        array_plane = np.frombuffer(bytes_plane, dtype=np.uint8)
        if array_plane.size < int_required:
            raise ValueError(
                f"Byte plane holds {array_plane.size} bytes, "
                f"{int_required} are required for {int_height} rows of stride {int_row_stride}."
            )

        array_rows = array_plane[:int_required].reshape(int_height, int_row_stride)
        list_int_samples: list[int] = array_rows[:, :int_width].ravel().tolist()
        return cls(int_width, int_height, list_int_samples)

    @classmethod
    def from_image(cls, image_input: Image.Image) -> GrayscaleBuffer:
        """Build a buffer from a Pillow image, converting to luminance first."""
        image_gray: Image.Image = (
            image_input if image_input.mode == "L" else image_input.convert("L")
        )
        int_width: int
        int_height: int
        int_width, int_height = image_gray.size
        bytes_plane: bytes = image_gray.tobytes()
        logger_app.debug("Loaded %dx%d luminance image.", int_width, int_height)
        return cls.from_byte_plane(int_width, int_height, int_width, bytes_plane)
