"""Center-of-mass energetics per crank cycle.

Pipeline stages, per invocation:

1. Detect crank cycles as consecutive peaks of the crank angle signal.
2. Resample every channel of each cycle onto a 101-point phase grid and smooth.
3. Differentiate the COM position channels to velocity and acceleration.
4. Compute crank power (when force is supplied) and COM energy terms.
5. Optionally keep only cycles within a target power/cadence band.
6. Nest the result under condition/subject keys when supplied.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional

import numpy as np
import pandas as pd

from com_energetics.config import NUM_PHASE_POINTS
from com_energetics.cycling.cycle_detection import CycleBoundary, PeakCycleDetector
from com_energetics.cycling.differentiation import KinematicDifferentiator
from com_energetics.cycling.energy import EnergyAggregator
from com_energetics.cycling.filtering import ConditionFilter
from com_energetics.cycling.power import PowerEstimator
from com_energetics.cycling.resampling import CycleResampler
from com_energetics.cycling.results import (
    Cycle,
    EnergeticsResult,
    NestedResult,
    assemble_result,
)
from com_energetics.errors import MalformedInputError
from com_energetics.models import EnergeticsInput

logger = logging.getLogger(__name__)


class PipelineOutput(NamedTuple):
    """All cycles, plus the subset matching the target condition when filtering."""

    result: EnergeticsResult
    valid: Optional[EnergeticsResult] = None


def cycle_cadence(time: np.ndarray, boundary: CycleBoundary) -> float:
    """Cadence (rpm) of a cycle from the elapsed time between its bounding peaks.

    Raises:
        MalformedInputError: If the elapsed time is not positive.
    """
    duration = float(time[boundary.end] - time[boundary.start])
    if duration <= 0:
        raise MalformedInputError(
            f"Cycle {boundary.start}-{boundary.end} has non-positive duration {duration} s"
        )
    return 60.0 / duration


class EnergeticsPipeline:
    """Compute COM energetics for every crank cycle of one recording."""

    def __init__(self, config: EnergeticsInput, n_points: int = NUM_PHASE_POINTS):
        self.config = config
        self.n_points = n_points
        self.detector = PeakCycleDetector()
        self.resampler = CycleResampler(n_points=n_points)
        self.differentiator = KinematicDifferentiator()
        self.power_estimator = PowerEstimator(crank_length=config.crank_length)
        self.energy_aggregator = EnergyAggregator(subject_mass=config.subject_mass)

    def build_cycle(self, index: int, series: pd.DataFrame, boundary: CycleBoundary) -> Cycle:
        """Run resampling, differentiation, power and energy for a single cycle."""
        cadence = cycle_cadence(series["time"].to_numpy(), boundary)
        logger.debug(f"Cycle {index}: samples {boundary.start}-{boundary.end}, {cadence:.2f} rpm")

        channels = self.resampler.resample(series, boundary)
        channels.update(self.differentiator.derive(channels, cadence))
        energy = self.energy_aggregator.compute(channels)

        force_fields: dict[str, Any] = {}
        if "force" in channels:
            power = self.power_estimator.estimate(channels["force"], cadence)
            force_fields = {
                "force": channels["force"],
                "power": power.power,
                "power_mean": power.power_mean,
                "force_mean": float(np.mean(channels["force"])),
            }

        return Cycle(
            index=index,
            start=boundary.start,
            end=boundary.end,
            cadence=cadence,
            com_pos_x=channels["com_pos_x"],
            com_pos_y=channels["com_pos_y"],
            com_pos_z=channels["com_pos_z"],
            com_vel_x=channels["com_vel_x"],
            com_vel_y=channels["com_vel_y"],
            com_vel_z=channels["com_vel_z"],
            com_acc_x=channels["com_acc_x"],
            com_acc_y=channels["com_acc_y"],
            com_acc_z=channels["com_acc_z"],
            angle=channels["angle"],
            com_potential_energy=energy.potential,
            com_kinetic_energy=energy.kinetic,
            com_total_energy=energy.total,
            **force_fields,
        )

    def run(self) -> PipelineOutput:
        """Compute all cycles and, when targets are configured, the valid subset.

        Raises:
            MalformedInputError: If filtering is requested but no cycle was detected.
        """
        config = self.config
        series = config.to_frame()
        boundaries = self.detector.detect(config.angle_data)

        cycles = [
            self.build_cycle(index, series, boundary) for index, boundary in enumerate(boundaries)
        ]
        result = EnergeticsResult.from_cycles(cycles, has_force=config.has_force, n_points=self.n_points)

        if not config.filter_requested:
            return PipelineOutput(result=result)

        if result.n_cycles == 0:
            raise MalformedInputError(
                "No crank cycles detected; cannot validate power and cadence against targets"
            )
        condition_filter = ConditionFilter(
            target_power=config.target_power,
            target_cadence=config.target_cadence,
            buffers=config.buffers,
        )
        return PipelineOutput(result=result, valid=condition_filter.apply(result))


def run_energetics(config: EnergeticsInput) -> PipelineOutput:
    """Run the pipeline for an already validated configuration record."""
    return EnergeticsPipeline(config).run()


def compute_com_energetics(config: Optional[EnergeticsInput] = None, **kwargs: Any) -> NestedResult:
    """Compute rider COM energetics over each complete crank cycle.

    Accepts either an :class:`EnergeticsInput` or its fields as keyword
    arguments (camelCase or snake_case). Returns the valid subset when a
    target power and cadence are given, otherwise every cycle; nested under
    ``condition_name``/``subject_name`` when supplied.

    Raises:
        MissingInputError: If a required input is absent.
        MalformedInputError: If an input is unusable.
        TypeError: If both a config record and keyword arguments are given.
    """
    if config is None:
        config = EnergeticsInput.from_kwargs(**kwargs)
    elif kwargs:
        raise TypeError("Pass either an EnergeticsInput or keyword arguments, not both")
    output = run_energetics(config)
    selected = output.valid if output.valid is not None else output.result
    return assemble_result(selected, config.condition_name, config.subject_name)
