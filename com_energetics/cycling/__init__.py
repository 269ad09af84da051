"""Crank cycle segmentation and energetics submodule.

Detects crank cycles, resamples them onto a normalized phase grid, and
derives COM velocity, acceleration, energy and crank power per cycle.
"""

from com_energetics.cycling.cycle_detection import (
                                                    CycleBoundary,
                                                    PeakCycleDetector,
                                                    detect_crank_cycles,
)
from com_energetics.cycling.differentiation import KinematicDifferentiator
from com_energetics.cycling.energy import EnergyAggregator
from com_energetics.cycling.filtering import ConditionFilter
from com_energetics.cycling.pipeline import (
                                                    EnergeticsPipeline,
                                                    PipelineOutput,
                                                    compute_com_energetics,
                                                    run_energetics,
)
from com_energetics.cycling.power import PowerEstimator
from com_energetics.cycling.resampling import CycleResampler
from com_energetics.cycling.results import Cycle, EnergeticsResult, assemble_result

__all__ = [
    # cycle_detection
    "CycleBoundary",
    "PeakCycleDetector",
    "detect_crank_cycles",
    # resampling / differentiation
    "CycleResampler",
    "KinematicDifferentiator",
    # power / energy
    "PowerEstimator",
    "EnergyAggregator",
    # filtering / results
    "ConditionFilter",
    "Cycle",
    "EnergeticsResult",
    "assemble_result",
    # pipeline
    "EnergeticsPipeline",
    "PipelineOutput",
    "compute_com_energetics",
    "run_energetics",
]
