"""Selection of cycles that match a target power/cadence operating condition."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from com_energetics.cycling.results import EnergeticsResult
from com_energetics.errors import MalformedInputError, MissingInputError

logger = logging.getLogger(__name__)


def within_band(values: np.ndarray, target: float, low: float, high: float) -> np.ndarray:
    """Indices where ``target * low <= values <= target * high``."""
    values = np.asarray(values, dtype=float)
    mask = (values >= target * low) & (values <= target * high)
    return np.flatnonzero(mask)


class ConditionFilter:
    """Keep cycles whose mean power and cadence both lie in their target bands.

    ``buffers`` holds ``[powerLow, powerHigh, cadenceLow, cadenceHigh]`` as
    multiplicative fractions of the targets (e.g. 0.9 and 1.1).
    """

    def __init__(
        self,
        target_power: float,
        target_cadence: float,
        buffers: Optional[Sequence[float]],
    ):
        if buffers is None:
            raise MissingInputError("No buffers input. Please input buffer for valid data.")
        if len(buffers) != 4:
            raise MalformedInputError(
                f"buffers must contain 4 values, got {len(buffers)}"
            )
        self.target_power = target_power
        self.target_cadence = target_cadence
        self.buffers = tuple(float(b) for b in buffers)

    def power_indices(self, power_mean: np.ndarray) -> np.ndarray:
        low, high = self.buffers[0], self.buffers[1]
        return within_band(power_mean, self.target_power, low, high)

    def cadence_indices(self, cadence: np.ndarray) -> np.ndarray:
        low, high = self.buffers[2], self.buffers[3]
        return within_band(cadence, self.target_cadence, low, high)

    def valid_indices(self, power_mean: Optional[np.ndarray], cadence: np.ndarray) -> np.ndarray:
        """Sorted indices of cycles satisfying both the power and cadence bands.

        Raises:
            MissingInputError: If no mean power is available (no force data).
        """
        if power_mean is None:
            raise MissingInputError("No force data input. Please input force data to analyze.")
        return np.intersect1d(self.power_indices(power_mean), self.cadence_indices(cadence))

    def apply(self, result: EnergeticsResult) -> EnergeticsResult:
        """Return the subset of ``result`` matching the target condition."""
        valid = self.valid_indices(result.power_mean, result.cadence)
        logger.info(
            f"{len(valid)} of {result.n_cycles} cycles within target "
            f"{self.target_power:g} W / {self.target_cadence:g} rpm"
        )
        return result.select(valid)
