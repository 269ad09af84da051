"""Rider center-of-mass energetics per crank cycle.

Segments crank cycles from a crank angle signal, resamples COM kinematics
onto a normalized phase grid, and computes potential, kinetic and total COM
energy together with crank power and cadence.
"""

from com_energetics.cycling import (
                                    Cycle,
                                    EnergeticsResult,
                                    compute_com_energetics,
)
from com_energetics.errors import EnergeticsError, MalformedInputError, MissingInputError
from com_energetics.models import EnergeticsInput

__version__ = "0.1.0"

__all__ = [
    "compute_com_energetics",
    "Cycle",
    "EnergeticsResult",
    "EnergeticsInput",
    "EnergeticsError",
    "MissingInputError",
    "MalformedInputError",
]
