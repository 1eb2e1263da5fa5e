"""Tests for clockwise rotation and center cropping."""

from __future__ import annotations

import pytest

from textcamera.grayscale_buffer import GrayscaleBuffer
from textcamera.orientation_transform import CropTargetTooLargeError
from textcamera.orientation_transform import center_crop
from textcamera.orientation_transform import rotate_clockwise
from textcamera.orientation_transform import rotation_degrees_to_quarter_turns


def test_rotate_quarter_turn(obj_sample_buffer: GrayscaleBuffer) -> None:
    """Rotate 90 degrees: bottom-left input pixel lands top-left."""
    obj_rotated = rotate_clockwise(obj_sample_buffer, 1)
    assert obj_rotated.tuple_size == (3, 4)
    assert obj_rotated.list_int_samples == [9, 5, 1, 10, 6, 2, 11, 7, 3, 12, 8, 4]


def test_rotate_half_turn(obj_sample_buffer: GrayscaleBuffer) -> None:
    """Rotate 180 degrees by reversing the flat sample order."""
    obj_rotated = rotate_clockwise(obj_sample_buffer, 2)
    assert obj_rotated.tuple_size == (4, 3)
    assert obj_rotated.list_int_samples == [12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1]


def test_rotate_three_quarter_turns(obj_sample_buffer: GrayscaleBuffer) -> None:
    obj_rotated = rotate_clockwise(obj_sample_buffer, 3)
    assert obj_rotated.tuple_size == (3, 4)
    assert obj_rotated.list_int_samples == [4, 8, 12, 3, 7, 11, 2, 6, 10, 1, 5, 9]


def test_rotate_does_not_modify_input(obj_sample_buffer: GrayscaleBuffer) -> None:
    rotate_clockwise(obj_sample_buffer, 1)
    assert obj_sample_buffer.tuple_size == (4, 3)
    assert obj_sample_buffer.list_int_samples == list(range(1, 13))


@pytest.mark.parametrize("int_turns", [0, 4, 8, -4])
def test_full_turns_return_same_buffer(
    obj_sample_buffer: GrayscaleBuffer, int_turns: int
) -> None:
    """Multiples of four turns are an identity on the same object."""
    assert rotate_clockwise(obj_sample_buffer, int_turns) is obj_sample_buffer


def test_two_quarter_turns_equal_half_turn(obj_sample_buffer: GrayscaleBuffer) -> None:
    obj_twice = rotate_clockwise(rotate_clockwise(obj_sample_buffer, 1), 1)
    assert obj_twice == rotate_clockwise(obj_sample_buffer, 2)


def test_half_turn_is_self_inverse(obj_sample_buffer: GrayscaleBuffer) -> None:
    obj_back = rotate_clockwise(rotate_clockwise(obj_sample_buffer, 2), 2)
    assert obj_back == obj_sample_buffer


def test_four_single_turns_restore_original(obj_sample_buffer: GrayscaleBuffer) -> None:
    obj_current = obj_sample_buffer
    for _ in range(4):
        obj_current = rotate_clockwise(obj_current, 1)
    assert obj_current == obj_sample_buffer


def test_negative_turn_matches_three_turns(obj_sample_buffer: GrayscaleBuffer) -> None:
    assert rotate_clockwise(obj_sample_buffer, -1) == rotate_clockwise(obj_sample_buffer, 3)


@pytest.mark.parametrize(
    ("int_degrees", "int_expected_turns"), [(0, 0), (90, 1), (180, 2), (270, 3)]
)
def test_rotation_degrees_to_quarter_turns(int_degrees: int, int_expected_turns: int) -> None:
    assert rotation_degrees_to_quarter_turns(int_degrees) == int_expected_turns


def test_rotation_degrees_rejects_other_angles() -> None:
    with pytest.raises(ValueError):
        rotation_degrees_to_quarter_turns(45)


def test_center_crop_selects_centered_region(obj_sample_buffer: GrayscaleBuffer) -> None:
    """Offsets are half the leftover margin, rounded down."""
    obj_cropped = center_crop(obj_sample_buffer, 2, 1)
    assert obj_cropped.tuple_size == (2, 1)
    assert obj_cropped.list_int_samples == [6, 7]


def test_center_crop_odd_margin_keeps_top_left(obj_sample_buffer: GrayscaleBuffer) -> None:
    obj_cropped = center_crop(obj_sample_buffer, 3, 2)
    assert obj_cropped.tuple_size == (3, 2)
    assert obj_cropped.list_int_samples == [1, 2, 3, 5, 6, 7]


def test_center_crop_to_current_size_keeps_content(obj_sample_buffer: GrayscaleBuffer) -> None:
    obj_cropped = center_crop(obj_sample_buffer, 4, 3)
    assert obj_cropped == obj_sample_buffer


def test_center_crop_rejects_larger_target(obj_sample_buffer: GrayscaleBuffer) -> None:
    """Fail without touching the source buffer."""
    with pytest.raises(CropTargetTooLargeError):
        center_crop(obj_sample_buffer, 5, 3)
    with pytest.raises(CropTargetTooLargeError):
        center_crop(obj_sample_buffer, 4, 4)
    assert obj_sample_buffer.tuple_size == (4, 3)
    assert obj_sample_buffer.list_int_samples == list(range(1, 13))


def test_center_crop_rejects_non_positive_target(obj_sample_buffer: GrayscaleBuffer) -> None:
    with pytest.raises(ValueError):
        center_crop(obj_sample_buffer, 0, 2)
