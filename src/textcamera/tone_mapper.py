"""Per-frame intensity range analysis for glyph selection."""

from __future__ import annotations

from dataclasses import dataclass

from .grayscale_buffer import GrayscaleBuffer


@dataclass(frozen=True)
class ToneBins:
    """Upper-bound thresholds, one per glyph, for one frame.

    ``tuple_float_thresholds[i] == float_bin_size * (i + 1)``. The thresholds
    start from zero rather than from ``int_min_value``. A flat frame yields a
    zero bin size and all-zero thresholds.
    """

    int_min_value: int
    int_max_value: int
    float_bin_size: float
    tuple_float_thresholds: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.tuple_float_thresholds)

    @property
    def bool_is_flat(self) -> bool:
        return self.int_max_value == self.int_min_value


def compute_bins(obj_buffer: GrayscaleBuffer, int_glyph_count: int) -> ToneBins:
    """Split the observed intensity range of a buffer into equal-width bins.

    Inputs:
    - ``obj_buffer``: buffer to scan once for its min and max.
    - ``int_glyph_count``: number of bins, one per alphabet glyph.

    Output:
    - ``ToneBins`` with ``int_glyph_count`` non-decreasing thresholds.
    """
    if int_glyph_count < 1:
        raise ValueError(f"Glyph count must be >= 1, got {int_glyph_count}.")

    list_int_samples: list[int] = obj_buffer.list_int_samples
    if len(list_int_samples) == 0:
        raise ValueError("Cannot compute tone bins for a buffer with no samples.")

    int_min_value: int = list_int_samples[0]
    int_max_value: int = list_int_samples[0]
    for int_value in list_int_samples:
        if int_value < int_min_value:
            int_min_value = int_value
        elif int_value > int_max_value:
            int_max_value = int_value

    float_bin_size: float = (int_max_value - int_min_value) / float(int_glyph_count)
    tuple_float_thresholds: tuple[float, ...] = tuple(
        float_bin_size * (int_index + 1) for int_index in range(int_glyph_count)
    )
    obj_bins: ToneBins = ToneBins(
        int_min_value=int_min_value,
        int_max_value=int_max_value,
        float_bin_size=float_bin_size,
        tuple_float_thresholds=tuple_float_thresholds,
    )
    return obj_bins
