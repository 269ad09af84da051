"""Velocity and acceleration of the COM from resampled position channels.

Differencing a 101-point series yields 100 values that sit at the midpoints
of the phase grid. Those midpoint values are re-interpolated (cubic spline,
extrapolating half a step at each end) back onto the 101-point grid so every
channel of a cycle stays index-aligned.
"""

from __future__ import annotations

import numpy as np
from scipy.interpolate import CubicSpline

from com_energetics.config import NUM_PHASE_POINTS, SMOOTHING_POLYORDER, SMOOTHING_SPAN
from com_energetics.cycling.resampling import phase_grid, smooth_series
from com_energetics.errors import MalformedInputError
from com_energetics.models import POSITION_CHANNELS


def sample_spacing(cadence: float, n_points: int = NUM_PHASE_POINTS) -> float:
    """Return the time step (s) between phase grid samples for a cycle.

    Args:
        cadence: Cycle cadence in rpm.
        n_points: Number of phase grid samples.

    Raises:
        MalformedInputError: If cadence is zero, negative or not finite.
    """
    if not np.isfinite(cadence) or cadence <= 0:
        raise MalformedInputError(f"Cannot derive sample spacing from cadence {cadence} rpm")
    return (60.0 / cadence) / (n_points - 1)


def differentiate(
    values: np.ndarray,
    h: float,
    span: int = SMOOTHING_SPAN,
    polyorder: int = SMOOTHING_POLYORDER,
) -> np.ndarray:
    """First derivative of a phase-grid series, realigned to the grid and smoothed."""
    values = np.asarray(values, dtype=float)
    n_points = len(values)
    if n_points < 2:
        raise MalformedInputError("At least 2 samples are required to differentiate")
    derivative = np.diff(values) / h
    if n_points == 2:
        realigned = np.full(n_points, derivative[0])
    else:
        midpoints = (np.arange(n_points - 1) + 0.5) / (n_points - 1)
        realigned = CubicSpline(midpoints, derivative)(phase_grid(n_points))
    return smooth_series(realigned, span, polyorder)


class KinematicDifferentiator:
    """Derive COM velocity and acceleration channels for one cycle."""

    def __init__(self, span: int = SMOOTHING_SPAN, polyorder: int = SMOOTHING_POLYORDER):
        self.span = span
        self.polyorder = polyorder

    def derive(self, channels: dict[str, np.ndarray], cadence: float) -> dict[str, np.ndarray]:
        """Return velocity and acceleration arrays keyed by their channel names.

        Args:
            channels: Resampled channels including ``com_pos_x/y/z``.
            cadence: Cycle cadence in rpm.
        """
        derived = {}
        for spec in POSITION_CHANNELS:
            position = channels[spec.name]
            h = sample_spacing(cadence, len(position))
            velocity = differentiate(position, h, self.span, self.polyorder)
            acceleration = differentiate(velocity, h, self.span, self.polyorder)
            derived[spec.velocity_name] = velocity
            derived[spec.acceleration_name] = acceleration
        return derived
