"""Public package interface for the text camera."""

from .__version__ import __version__
from .camera_frame_inputs import CaptureFrame
from .camera_settings import DeviceOrientation
from .camera_settings import FrameLayout
from .camera_settings import PipelineSettings
from .frame_pipeline import FramePipeline
from .frame_pipeline import FrameWorker
from .grayscale_buffer import GrayscaleBuffer
from .grayscale_buffer import OutOfRangeError
from .mosaic_renderer import GlyphMosaic
from .mosaic_renderer import classify_intensity
from .mosaic_renderer import render_mosaic
from .orientation_transform import CropTargetTooLargeError
from .orientation_transform import center_crop
from .orientation_transform import rotate_clockwise
from .tone_mapper import ToneBins
from .tone_mapper import compute_bins
from .text_camera import get_version
from .text_camera import main

__all__ = [
    "__version__",
    "CaptureFrame",
    "CropTargetTooLargeError",
    "DeviceOrientation",
    "FrameLayout",
    "FramePipeline",
    "FrameWorker",
    "GlyphMosaic",
    "GrayscaleBuffer",
    "OutOfRangeError",
    "PipelineSettings",
    "ToneBins",
    "center_crop",
    "classify_intensity",
    "compute_bins",
    "get_version",
    "main",
    "render_mosaic",
    "rotate_clockwise",
]
