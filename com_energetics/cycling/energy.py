"""Potential, kinetic and total mechanical energy of the rider's COM."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from com_energetics.config import GRAVITY
from com_energetics.errors import MalformedInputError, MissingInputError


class CycleEnergy(NamedTuple):
    potential: np.ndarray
    kinetic: np.ndarray
    total: np.ndarray


def resultant_velocity(vel_x: np.ndarray, vel_y: np.ndarray, vel_z: np.ndarray) -> np.ndarray:
    """Magnitude of the 3-D COM velocity vector."""
    return np.sqrt(vel_x**2 + vel_y**2 + vel_z**2)


class EnergyAggregator:
    """Element-wise COM energy terms over the phase grid.

    Potential energy uses the vertical (Y) COM position; kinetic energy uses
    the resultant of all three velocity components.
    """

    def __init__(self, subject_mass: float | None, gravity: float = GRAVITY):
        if subject_mass is None:
            raise MissingInputError("No subject mass input. Please input a subject mass")
        if subject_mass <= 0:
            raise MalformedInputError(f"subject_mass must be positive, got {subject_mass}")
        self.subject_mass = subject_mass
        self.gravity = gravity

    def compute(self, channels: dict[str, np.ndarray]) -> CycleEnergy:
        """Compute energy arrays from a cycle's position and velocity channels."""
        potential = self.subject_mass * self.gravity * channels["com_pos_y"]
        speed = resultant_velocity(
            channels["com_vel_x"], channels["com_vel_y"], channels["com_vel_z"]
        )
        kinetic = 0.5 * self.subject_mass * speed**2
        return CycleEnergy(potential=potential, kinetic=kinetic, total=kinetic + potential)
