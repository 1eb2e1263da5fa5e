"""Input model for one captured frame handed to the pipeline.

The capture side owns the underlying frame resource. ``CaptureFrame`` carries
the release callback so the pipeline can hand the resource back exactly once,
whatever happens during processing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field

from .camera_settings import DeviceOrientation
from .orientation_transform import DICT_ROTATION_DEGREES_TO_TURNS

logger_app = logging.getLogger(__name__)


@dataclass
class CaptureFrame:
    """Validated luminance plane plus orientation hints for one frame.

    Inputs:
    - ``int_width``/``int_height``: pixel dimensions of the plane.
    - ``int_row_stride``: bytes per row, at least ``int_width``.
    - ``bytes_plane``: raw luminance bytes, at least ``height * row_stride`` long.
    - ``int_rotation_degrees``: sensor rotation, one of 0/90/180/270.
    - ``obj_device_orientation``: current display orientation.
    - ``callable_release``: optional callback returning the frame upstream.

    Output/Behavior:
    - ``close`` runs the release callback at most once.
    """

    int_width: int
    int_height: int
    int_row_stride: int
    bytes_plane: bytes
    int_rotation_degrees: int = 0
    obj_device_orientation: DeviceOrientation = DeviceOrientation.PORTRAIT
    callable_release: Callable[[], None] | None = None
    bool_closed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        """Validate geometry, rotation and plane length."""
        if self.int_width <= 0 or self.int_height <= 0:
            raise ValueError(
                f"Frame dimensions must be positive, got {self.int_width}x{self.int_height}."
            )
        if self.int_row_stride < self.int_width:
            raise ValueError(
                f"Row stride {self.int_row_stride} is smaller than frame width {self.int_width}."
            )
        if self.int_rotation_degrees not in DICT_ROTATION_DEGREES_TO_TURNS:
            raise ValueError(
                f"Rotation must be one of 0, 90, 180 or 270 degrees, "
                f"got {self.int_rotation_degrees}."
            )

        int_required: int = self.int_height * self.int_row_stride
        if len(self.bytes_plane) < int_required:
            raise ValueError(
                f"Frame plane holds {len(self.bytes_plane)} bytes, {int_required} are required."
            )
        self.obj_device_orientation = DeviceOrientation(self.obj_device_orientation)

    def close(self) -> None:
        """Release the frame resource upstream."""
        if self.bool_closed:
            logger_app.debug("Frame already released; ignoring repeated close.")
            return

        self.bool_closed = True
        if self.callable_release is not None:
            self.callable_release()
