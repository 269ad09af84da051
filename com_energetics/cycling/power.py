"""Crank power from pedal force and cadence."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from com_energetics.config import DEFAULT_CRANK_LENGTH


class CyclePower(NamedTuple):
    power: np.ndarray
    power_mean: float


def crank_angular_velocity(cadence: float) -> float:
    """Convert cadence (rpm) to crank angular velocity (rad/s)."""
    return cadence * 2 * np.pi / 60


class PowerEstimator:
    """Instantaneous and mean crank power for a cycle.

    Torque is force times crank length; power is torque times the cycle's
    (constant) crank angular velocity.
    """

    def __init__(self, crank_length: float = DEFAULT_CRANK_LENGTH):
        self.crank_length = crank_length

    def estimate(self, force: np.ndarray, cadence: float) -> CyclePower:
        crank_torque = np.asarray(force, dtype=float) * self.crank_length
        power = crank_torque * crank_angular_velocity(cadence)
        return CyclePower(power=power, power_mean=float(np.mean(power)))
