"""Command line entry point for the text camera.

This module wires still images or an OpenCV camera into ``FramePipeline`` and
prints each mosaic to stdout. It also contains the CLI entrypoint used by
``poetry run textcamera``.
"""

from __future__ import annotations

import importlib.metadata
import logging
import math
import queue
import sys

from PIL import Image

from .camera_frame_inputs import CaptureFrame
from .camera_settings import DeviceOrientation
from .camera_settings import FrameLayout
from .camera_settings import PipelineSettings
from .frame_pipeline import FramePipeline
from .frame_pipeline import FrameWorker
from .mosaic_renderer import GlyphMosaic
from .orientation_transform import rotation_degrees_to_quarter_turns

# Structured logging without timestamps for cleaner CLI output.
logging.basicConfig(format="%(levelname)s: %(message)s", level=logging.INFO)
logger_app = logging.getLogger(__name__)


try:
    import cv2
    from tqdm import tqdm

    bool_has_camera_support = True
except ImportError:
    bool_has_camera_support = False


def get_version() -> str:
    """Retrieve package version from installed metadata."""
    try:
        str_version_result: str = importlib.metadata.version("textcamera")
        return str_version_result
    except importlib.metadata.PackageNotFoundError as exc_error:
        logger_app.warning(
            "Package 'textcamera' not found. Using 'unknown' version. Context: %s",
            exc_error,
        )
        str_unknown_version: str = "unknown"
        return str_unknown_version


def get_cover_size(
    tuple_image_size: tuple[int, int], tuple_target_size: tuple[int, int]
) -> tuple[int, int]:
    """Return the smallest aspect-preserving size covering ``tuple_target_size``."""
    int_width, int_height = tuple_image_size
    int_target_width, int_target_height = tuple_target_size
    float_scale: float = max(
        int_target_width / float(int_width), int_target_height / float(int_height)
    )
    int_cover_width: int = max(int_target_width, math.ceil(int_width * float_scale))
    int_cover_height: int = max(int_target_height, math.ceil(int_height * float_scale))
    return (int_cover_width, int_cover_height)


def load_still_frame(
    str_input_image_path: str,
    obj_settings: PipelineSettings,
    obj_orientation: DeviceOrientation,
    int_rotation_degrees: int = 0,
    bool_fit: bool = True,
) -> CaptureFrame:
    """Read an image file as a luminance ``CaptureFrame``.

    With ``bool_fit`` the image is scaled so that, after rotation, it covers
    the crop target for ``obj_orientation``.
    """
    try:
        image_source: Image.Image = Image.open(str_input_image_path).convert("L")
    except Exception as exc_error:
        logger_app.error(
            "Failed to open image file: %s. Context: %s",
            str_input_image_path,
            exc_error,
        )
        raise RuntimeError(f"Error opening image: {exc_error}") from exc_error

    if bool_fit:
        obj_layout: FrameLayout = obj_settings.resolve_layout(obj_orientation)
        tuple_target_size: tuple[int, int] = (
            obj_layout.int_target_width,
            obj_layout.int_target_height,
        )
        # Odd quarter turns swap the axes, so fit against the transposed target.
        if rotation_degrees_to_quarter_turns(int_rotation_degrees) % 2 == 1:
            tuple_target_size = (tuple_target_size[1], tuple_target_size[0])

        tuple_cover_size: tuple[int, int] = get_cover_size(image_source.size, tuple_target_size)
        if tuple_cover_size != image_source.size:
            image_source = image_source.resize(tuple_cover_size, Image.Resampling.LANCZOS)

    int_width: int
    int_height: int
    int_width, int_height = image_source.size
    obj_frame: CaptureFrame = CaptureFrame(
        int_width=int_width,
        int_height=int_height,
        int_row_stride=int_width,
        bytes_plane=image_source.tobytes(),
        int_rotation_degrees=int_rotation_degrees,
        obj_device_orientation=obj_orientation,
        callable_release=image_source.close,
    )
    return obj_frame


def print_mosaic(obj_mosaic: GlyphMosaic) -> None:
    """Write one mosaic to stdout as non-wrapping lines."""
    sys.stdout.write(obj_mosaic.to_text())
    sys.stdout.flush()


def run_camera(
    int_camera_index: int,
    int_num_frames: int,
    obj_settings: PipelineSettings,
    obj_orientation: DeviceOrientation,
    int_rotation_degrees: int = 0,
) -> int:
    """Stream camera frames through a ``FrameWorker`` and print the results.

    Output:
    - Number of mosaics printed. Frames arriving while the worker is busy are
      dropped, so this can be lower than ``int_num_frames``.

    Third-party API reference:
    https://docs.opencv.org/4.x/d8/dfe/classcv_1_1VideoCapture.html
    """
    if not bool_has_camera_support:
        logger_app.error("Camera mode called but opencv-python or tqdm is missing.")
        raise RuntimeError("opencv-python and tqdm are required for camera mode.")

    obj_capture = cv2.VideoCapture(int_camera_index)
    if not obj_capture.isOpened():
        logger_app.error("Could not open camera at index %d.", int_camera_index)
        raise RuntimeError(f"Could not open camera at index {int_camera_index}.")

    int_request_width, int_request_height = obj_settings.get_capture_request_size()
    obj_capture.set(cv2.CAP_PROP_FRAME_WIDTH, int_request_width)
    obj_capture.set(cv2.CAP_PROP_FRAME_HEIGHT, int_request_height)

    # Mosaics are produced on the worker thread and printed here.
    queue_mosaics: queue.Queue[GlyphMosaic] = queue.Queue()
    obj_pipeline: FramePipeline = FramePipeline(obj_settings, queue_mosaics.put)
    int_printed: int = 0

    try:
        with FrameWorker(obj_pipeline) as obj_worker:
            for _ in tqdm(range(int_num_frames), desc="Capturing", unit="frame"):
                bool_ok, array_frame = obj_capture.read()
                if not bool_ok:
                    logger_app.error("Camera read failed after %d mosaics.", int_printed)
                    raise RuntimeError("Failed to read a frame from the camera.")

                array_gray = cv2.cvtColor(array_frame, cv2.COLOR_BGR2GRAY)
                int_height, int_width = array_gray.shape
                obj_frame: CaptureFrame = CaptureFrame(
                    int_width=int_width,
                    int_height=int_height,
                    int_row_stride=int_width,
                    bytes_plane=array_gray.tobytes(),
                    int_rotation_degrees=int_rotation_degrees,
                    obj_device_orientation=obj_orientation,
                )
                obj_worker.submit(obj_frame)

                while not queue_mosaics.empty():
                    print_mosaic(queue_mosaics.get_nowait())
                    int_printed += 1

            obj_worker.wait_idle()
            logger_app.info(
                "Camera run finished. processed=%d dropped=%d failed=%d",
                obj_worker.int_processed_frames,
                obj_worker.int_dropped_frames,
                obj_worker.int_failed_frames,
            )
    finally:
        obj_capture.release()

    while not queue_mosaics.empty():
        print_mosaic(queue_mosaics.get_nowait())
        int_printed += 1
    return int_printed


def main() -> None:
    """CLI entrypoint for still-image and camera text mosaics."""
    import argparse

    obj_parser = argparse.ArgumentParser(description="Text Camera Mosaic Generator")

    obj_parser.add_argument(
        "input_image",
        nargs="?",
        type=str,
        help="Path to a source image. Required unless --camera is provided.",
    )
    obj_parser.add_argument(
        "--version", "-v", action="store_true", help="Print version and exit"
    )
    obj_parser.add_argument(
        "--camera",
        type=int,
        help="OpenCV camera index to capture from instead of an image file.",
    )
    obj_parser.add_argument(
        "--frames",
        type=int,
        default=1,
        help="Number of camera frames to capture in camera mode.",
    )
    obj_parser.add_argument(
        "--rotation",
        type=int,
        default=0,
        choices=[0, 90, 180, 270],
        help="Clockwise sensor rotation to correct, in degrees.",
    )
    obj_parser.add_argument(
        "--orientation",
        type=str,
        default=DeviceOrientation.PORTRAIT.value,
        choices=[obj_member.value for obj_member in DeviceOrientation],
        help="Display orientation selecting the crop target and tile grid.",
    )
    obj_parser.add_argument(
        "--no-fit",
        dest="fit",
        action="store_false",
        help="Do not scale still images to cover the crop target.",
    )

    obj_args = obj_parser.parse_args()

    if obj_args.version:
        str_version_text: str = f"textcamera v{get_version()} (Python {sys.version.split()[0]})"
        logger_app.info(str_version_text)
        sys.exit(0)

    if obj_args.frames < 1:
        logger_app.error("Frame count must be >= 1.")
        sys.exit(1)
    if obj_args.camera is None and obj_args.input_image is None:
        logger_app.error("input_image is required unless --camera is provided.")
        sys.exit(1)
    if obj_args.camera is not None and obj_args.input_image is not None:
        logger_app.error("Provide only one source: input_image or --camera.")
        sys.exit(1)

    obj_settings: PipelineSettings = PipelineSettings()
    obj_orientation: DeviceOrientation = DeviceOrientation(obj_args.orientation)

    if obj_args.camera is not None:
        try:
            int_printed: int = run_camera(
                obj_args.camera,
                obj_args.frames,
                obj_settings,
                obj_orientation,
                int_rotation_degrees=obj_args.rotation,
            )
        except Exception as exc_error:
            logger_app.error("Camera capture failed. Context: %s", exc_error)
            sys.exit(1)
        if int_printed == 0:
            logger_app.error(
                "Rendering failed: no camera frame could be cropped to the target."
            )
            sys.exit(1)
        return

    try:
        obj_frame: CaptureFrame = load_still_frame(
            obj_args.input_image,
            obj_settings,
            obj_orientation,
            int_rotation_degrees=obj_args.rotation,
            bool_fit=obj_args.fit,
        )
    except Exception as exc_error:
        logger_app.error("Initialization error. Context: %s", exc_error)
        sys.exit(1)

    obj_pipeline: FramePipeline = FramePipeline(obj_settings, print_mosaic)
    obj_mosaic: GlyphMosaic | None = obj_pipeline.process_frame(obj_frame)
    if obj_mosaic is None:
        logger_app.error("Rendering failed: image is smaller than the crop target.")
        sys.exit(1)


if __name__ == "__main__":
    main()
