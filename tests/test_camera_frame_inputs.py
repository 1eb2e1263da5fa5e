"""Validation tests for the ``CaptureFrame`` input model."""

from __future__ import annotations

import pytest

from conftest import ReleaseRecorder
from textcamera.camera_frame_inputs import CaptureFrame
from textcamera.camera_settings import DeviceOrientation


def test_accepts_padded_plane(obj_release_recorder: ReleaseRecorder) -> None:
    obj_frame = CaptureFrame(
        int_width=4,
        int_height=2,
        int_row_stride=5,
        bytes_plane=bytes(10),
        int_rotation_degrees=270,
        obj_device_orientation=DeviceOrientation.LANDSCAPE,
        callable_release=obj_release_recorder.release,
    )
    assert obj_frame.bool_closed is False
    assert obj_frame.obj_device_orientation is DeviceOrientation.LANDSCAPE


def test_normalizes_orientation_value() -> None:
    obj_frame = CaptureFrame(1, 1, 1, b"\x00", obj_device_orientation="landscape")  # type: ignore[arg-type]
    assert obj_frame.obj_device_orientation is DeviceOrientation.LANDSCAPE


def test_close_releases_exactly_once(obj_release_recorder: ReleaseRecorder) -> None:
    obj_frame = CaptureFrame(1, 1, 1, b"\x00", callable_release=obj_release_recorder.release)
    obj_frame.close()
    obj_frame.close()
    assert obj_frame.bool_closed is True
    assert obj_release_recorder.int_release_calls == 1


def test_close_without_release_callback() -> None:
    obj_frame = CaptureFrame(1, 1, 1, b"\x00")
    obj_frame.close()
    assert obj_frame.bool_closed is True


def test_rejects_unsupported_rotation() -> None:
    with pytest.raises(ValueError):
        CaptureFrame(1, 1, 1, b"\x00", int_rotation_degrees=45)


def test_rejects_stride_below_width() -> None:
    with pytest.raises(ValueError):
        CaptureFrame(4, 1, 3, bytes(4))


def test_rejects_short_plane() -> None:
    with pytest.raises(ValueError):
        CaptureFrame(4, 2, 5, bytes(9))


def test_rejects_non_positive_dimensions() -> None:
    with pytest.raises(ValueError):
        CaptureFrame(0, 1, 1, b"\x00")
