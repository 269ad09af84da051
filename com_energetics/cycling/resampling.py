"""Resample crank cycles onto a normalized phase grid.

Each cycle is mapped from its raw samples (whose count varies with cadence)
onto ``NUM_PHASE_POINTS`` equally spaced points spanning 0%..100% of the cycle,
using cubic spline interpolation followed by Savitzky-Golay smoothing.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
from scipy.interpolate import CubicSpline
from scipy.signal import savgol_filter

from com_energetics.config import NUM_PHASE_POINTS, SMOOTHING_POLYORDER, SMOOTHING_SPAN
from com_energetics.cycling.cycle_detection import CycleBoundary
from com_energetics.errors import MalformedInputError
from com_energetics.models import CHANNELS


def phase_grid(n_points: int = NUM_PHASE_POINTS) -> np.ndarray:
    """Return the normalized phase grid [0, 1] with ``n_points`` samples."""
    return np.linspace(0.0, 1.0, n_points)


def smooth_series(
    values: np.ndarray,
    span: int = SMOOTHING_SPAN,
    polyorder: int = SMOOTHING_POLYORDER,
) -> np.ndarray:
    """Apply a Savitzky-Golay smoothing pass with a fixed span.

    An even span is reduced by one so the window is centred. Series shorter
    than the window are smoothed with the largest odd window that fits, and
    returned unchanged when that window cannot support the polynomial order.
    The first and last half-windows are evaluated from a polynomial fitted to
    the edge window, so any polynomial up to ``polyorder`` passes unchanged.

    Args:
        values: Series to smooth.
        span: Window length in samples.
        polyorder: Order of the local polynomial.

    Returns:
        Smoothed copy of ``values`` (same length).
    """
    values = np.asarray(values, dtype=float)
    window = span if span % 2 == 1 else span - 1
    if len(values) < window:
        window = len(values) if len(values) % 2 == 1 else len(values) - 1
    if window <= polyorder:
        return values.copy()
    return savgol_filter(values, window_length=window, polyorder=polyorder, mode="interp")


def resample_segment(
    segment_time: np.ndarray,
    segment_values: np.ndarray,
    n_points: int = NUM_PHASE_POINTS,
) -> np.ndarray:
    """Interpolate one raw segment onto the normalized phase grid.

    Phase is normalized elapsed time, so non-uniform sampling within the
    segment is honoured.

    Raises:
        MalformedInputError: If the segment has fewer than 2 samples.
    """
    if len(segment_values) < 2:
        raise MalformedInputError(
            f"Cycle segment has {len(segment_values)} sample(s); at least 2 are required"
        )
    segment_time = np.asarray(segment_time, dtype=float)
    duration = segment_time[-1] - segment_time[0]
    if duration <= 0:
        raise MalformedInputError("Cycle segment has zero duration")
    phase = (segment_time - segment_time[0]) / duration
    spline = CubicSpline(phase, np.asarray(segment_values, dtype=float))
    return spline(phase_grid(n_points))


class CycleResampler:
    """Resample and smooth every channel of a crank cycle."""

    def __init__(
        self,
        n_points: int = NUM_PHASE_POINTS,
        span: int = SMOOTHING_SPAN,
        polyorder: int = SMOOTHING_POLYORDER,
    ):
        self.n_points = n_points
        self.span = span
        self.polyorder = polyorder

    def resample(self, series: pd.DataFrame, boundary: CycleBoundary) -> dict[str, np.ndarray]:
        """Resample the channels of ``series`` between ``boundary.start`` and ``boundary.end``.

        Args:
            series: Aligned input channels with a ``time`` column.
            boundary: Inclusive sample indices of the cycle.

        Returns:
            Mapping of channel name to a smoothed ``n_points`` array, for every
            channel of the static channel table present in ``series``.
        """
        segment = series.iloc[boundary.start : boundary.end + 1]
        segment_time = segment["time"].to_numpy()
        resampled = {}
        for spec in CHANNELS:
            if spec.name not in segment.columns:
                continue
            values = resample_segment(segment_time, segment[spec.name].to_numpy(), self.n_points)
            resampled[spec.name] = smooth_series(values, self.span, self.polyorder)
        return resampled
