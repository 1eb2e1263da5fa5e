"""Per-frame orchestration from raw luminance plane to text mosaic.

``FramePipeline`` runs the transform chain for one frame at a time and keeps no
state between frames. ``FrameWorker`` runs a pipeline on one background thread
and drops frames that arrive while a previous frame is still in flight.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .camera_frame_inputs import CaptureFrame
from .camera_settings import DeviceOrientation
from .camera_settings import FrameLayout
from .camera_settings import PipelineSettings
from .grayscale_buffer import GrayscaleBuffer
from .mosaic_renderer import GlyphMosaic
from .mosaic_renderer import render_mosaic
from .orientation_transform import CropTargetTooLargeError
from .orientation_transform import center_crop
from .orientation_transform import rotate_clockwise
from .orientation_transform import rotation_degrees_to_quarter_turns
from .tone_mapper import ToneBins
from .tone_mapper import compute_bins

logger_app = logging.getLogger(__name__)


class FramePipeline:
    """Turn captured frames into glyph mosaics.

    Constructor Input:
    - ``obj_settings``: alphabet and layout tables, defaults to the built-in set.
    - ``callable_present``: receives each finished mosaic, usually to marshal
      it onto a display thread.

    Output/Behavior:
    - ``process_frame`` always releases the frame before returning or raising.
    - A crop target larger than the rotated frame aborts only that frame.
    """

    def __init__(
        self,
        obj_settings: PipelineSettings | None = None,
        callable_present: Callable[[GlyphMosaic], None] | None = None,
    ) -> None:
        self.obj_settings: PipelineSettings = (
            obj_settings if obj_settings is not None else PipelineSettings()
        )
        self.callable_present: Callable[[GlyphMosaic], None] | None = callable_present

    def build_mosaic(
        self,
        obj_buffer: GrayscaleBuffer,
        obj_orientation: DeviceOrientation,
    ) -> GlyphMosaic:
        """Crop an already rotated buffer to the layout target and render it."""
        obj_layout: FrameLayout = self.obj_settings.resolve_layout(obj_orientation)

        if obj_buffer.tuple_size != (obj_layout.int_target_width, obj_layout.int_target_height):
            obj_buffer = center_crop(
                obj_buffer, obj_layout.int_target_width, obj_layout.int_target_height
            )

        str_alphabet: str = self.obj_settings.str_alphabet
        obj_bins: ToneBins = compute_bins(obj_buffer, len(str_alphabet))
        if obj_bins.bool_is_flat:
            logger_app.debug(
                "Flat frame at intensity %d; using fallback glyphs.", obj_bins.int_min_value
            )

        obj_mosaic: GlyphMosaic = render_mosaic(
            obj_buffer,
            obj_layout.int_tile_cols,
            obj_layout.int_tile_rows,
            obj_bins,
            str_alphabet,
        )
        return obj_mosaic

    def process_frame(self, obj_frame: CaptureFrame) -> GlyphMosaic | None:
        """Run one captured frame through rotate, crop, bin and render.

        Output:
        - The presented mosaic, or ``None`` when the frame was too small for
          the crop target.
        """
        try:
            obj_buffer: GrayscaleBuffer = GrayscaleBuffer.from_byte_plane(
                obj_frame.int_width,
                obj_frame.int_height,
                obj_frame.int_row_stride,
                obj_frame.bytes_plane,
            )
            int_turns: int = rotation_degrees_to_quarter_turns(obj_frame.int_rotation_degrees)
            obj_buffer = rotate_clockwise(obj_buffer, int_turns)

            obj_mosaic: GlyphMosaic = self.build_mosaic(
                obj_buffer, obj_frame.obj_device_orientation
            )
            if self.callable_present is not None:
                self.callable_present(obj_mosaic)
            return obj_mosaic
        except CropTargetTooLargeError as exc_error:
            logger_app.error("Dropping frame that cannot be cropped. Context: %s", exc_error)
            return None
        finally:
            obj_frame.close()


class FrameWorker:
    """Single background worker with one-frame backpressure.

    Constructor Input:
    - ``obj_pipeline``: pipeline run for every admitted frame.

    Output/Behavior:
    - ``submit`` admits a frame only while idle; otherwise the frame is closed
      and dropped.
    - Failures inside one frame are logged and do not stop the worker.
    """

    def __init__(self, obj_pipeline: FramePipeline) -> None:
        self.obj_pipeline: FramePipeline = obj_pipeline
        self.int_processed_frames: int = 0
        self.int_dropped_frames: int = 0
        self.int_failed_frames: int = 0

        self._condition: threading.Condition = threading.Condition()
        self._obj_pending_frame: CaptureFrame | None = None
        self._bool_busy: bool = False
        self._bool_stopping: bool = False
        self._thread: threading.Thread = threading.Thread(
            target=self._run, name="frame-worker", daemon=True
        )
        self._thread.start()

    def __enter__(self) -> FrameWorker:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def submit(self, obj_frame: CaptureFrame) -> bool:
        """Hand a frame to the worker; return False if it was dropped."""
        with self._condition:
            bool_stopping: bool = self._bool_stopping
            bool_admitted: bool = not bool_stopping and not self._bool_busy
            if bool_admitted:
                self._bool_busy = True
                self._obj_pending_frame = obj_frame
                self._condition.notify_all()
            elif not bool_stopping:
                self.int_dropped_frames += 1

        if bool_stopping:
            obj_frame.close()
            raise RuntimeError("Cannot submit frames to a closed FrameWorker.")
        if not bool_admitted:
            logger_app.debug("Worker busy; dropping frame.")
            obj_frame.close()
        return bool_admitted

    def wait_idle(self, float_timeout: float | None = None) -> bool:
        """Block until no frame is in flight; return False on timeout."""
        with self._condition:
            bool_idle: bool = self._condition.wait_for(
                lambda: not self._bool_busy, timeout=float_timeout
            )
        return bool_idle

    def close(self, float_timeout: float | None = None) -> None:
        """Finish the in-flight frame, then stop the worker thread."""
        with self._condition:
            self._bool_stopping = True
            self._condition.notify_all()
        self._thread.join(float_timeout)

    def _run(self) -> None:
        while True:
            with self._condition:
                while self._obj_pending_frame is None and not self._bool_stopping:
                    self._condition.wait()
                obj_frame: CaptureFrame | None = self._obj_pending_frame
                self._obj_pending_frame = None
            if obj_frame is None:
                return

            try:
                obj_mosaic: GlyphMosaic | None = self.obj_pipeline.process_frame(obj_frame)
                if obj_mosaic is None:
                    self.int_failed_frames += 1
                else:
                    self.int_processed_frames += 1
            except Exception as exc_error:
                self.int_failed_frames += 1
                logger_app.exception("Frame processing failed. Context: %s", exc_error)
            finally:
                with self._condition:
                    self._bool_busy = False
                    self._condition.notify_all()
