"""Per-cycle records and the stacked energetics result."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from com_energetics.config import NUM_PHASE_POINTS

# Per-cycle waveform fields, in output order
WAVEFORM_FIELDS: tuple[str, ...] = (
    "com_pos_x",
    "com_pos_y",
    "com_pos_z",
    "com_vel_x",
    "com_vel_y",
    "com_vel_z",
    "com_acc_x",
    "com_acc_y",
    "com_acc_z",
    "angle",
    "com_potential_energy",
    "com_kinetic_energy",
    "com_total_energy",
)
FORCE_WAVEFORM_FIELDS: tuple[str, ...] = ("force", "power")
FORCE_SCALAR_FIELDS: tuple[str, ...] = ("power_mean", "force_mean")


def _freeze(arr: Optional[np.ndarray]) -> Optional[np.ndarray]:
    if arr is not None:
        arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Cycle:
    """One crank cycle resampled onto the normalized phase grid.

    Waveform fields hold ``NUM_PHASE_POINTS`` samples (0%..100% of the
    cycle). Force-derived fields are ``None`` when no force data was supplied.
    """

    index: int
    start: int
    end: int
    cadence: float
    com_pos_x: np.ndarray
    com_pos_y: np.ndarray
    com_pos_z: np.ndarray
    com_vel_x: np.ndarray
    com_vel_y: np.ndarray
    com_vel_z: np.ndarray
    com_acc_x: np.ndarray
    com_acc_y: np.ndarray
    com_acc_z: np.ndarray
    angle: np.ndarray
    com_potential_energy: np.ndarray
    com_kinetic_energy: np.ndarray
    com_total_energy: np.ndarray
    force: Optional[np.ndarray] = None
    power: Optional[np.ndarray] = None
    power_mean: Optional[float] = None
    force_mean: Optional[float] = None

    def __post_init__(self) -> None:
        for name in WAVEFORM_FIELDS + FORCE_WAVEFORM_FIELDS:
            _freeze(getattr(self, name))


@dataclass(frozen=True, eq=False)
class EnergeticsResult:
    """Stacked per-cycle arrays, one row per crank cycle.

    Waveform fields have shape ``(n_cycles, n_points)``; scalar fields have
    shape ``(n_cycles,)``. Force-derived fields are ``None`` when no force
    data was supplied.
    """

    start: np.ndarray
    end: np.ndarray
    cadence: np.ndarray
    com_pos_x: np.ndarray
    com_pos_y: np.ndarray
    com_pos_z: np.ndarray
    com_vel_x: np.ndarray
    com_vel_y: np.ndarray
    com_vel_z: np.ndarray
    com_acc_x: np.ndarray
    com_acc_y: np.ndarray
    com_acc_z: np.ndarray
    angle: np.ndarray
    com_potential_energy: np.ndarray
    com_kinetic_energy: np.ndarray
    com_total_energy: np.ndarray
    force: Optional[np.ndarray] = None
    power: Optional[np.ndarray] = None
    power_mean: Optional[np.ndarray] = None
    force_mean: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        for f in fields(self):
            _freeze(getattr(self, f.name))

    @classmethod
    def from_cycles(
        cls,
        cycles: Sequence[Cycle],
        has_force: bool,
        n_points: int = NUM_PHASE_POINTS,
    ) -> "EnergeticsResult":
        """Stack a sequence of cycles (ordered by start index) into a result."""
        cycles = sorted(cycles, key=lambda cycle: cycle.start)

        def stack(name: str) -> np.ndarray:
            if not cycles:
                return np.empty((0, n_points))
            return np.vstack([getattr(cycle, name) for cycle in cycles])

        def column(name: str, dtype=float) -> np.ndarray:
            return np.array([getattr(cycle, name) for cycle in cycles], dtype=dtype)

        values = {name: stack(name) for name in WAVEFORM_FIELDS}
        values["start"] = column("start", int)
        values["end"] = column("end", int)
        values["cadence"] = column("cadence")
        if has_force:
            values.update({name: stack(name) for name in FORCE_WAVEFORM_FIELDS})
            values.update({name: column(name) for name in FORCE_SCALAR_FIELDS})
        return cls(**values)

    @property
    def n_cycles(self) -> int:
        return len(self.cadence)

    @property
    def has_force(self) -> bool:
        return self.power is not None

    @property
    def cadence_mean(self) -> float:
        """Mean cadence across cycles (NaN when there are no cycles)."""
        if self.n_cycles == 0:
            return float("nan")
        return float(np.mean(self.cadence))

    def select(self, indices: Sequence[int]) -> "EnergeticsResult":
        """Return a result holding only the rows at ``indices``, in ascending order."""
        rows = np.sort(np.asarray(indices, dtype=int))
        selected = {}
        for f in fields(self):
            value = getattr(self, f.name)
            selected[f.name] = None if value is None else value[rows].copy()
        return replace(self, **selected)

    def to_dict(self) -> dict[str, np.ndarray]:
        """Return the populated fields as a plain mapping."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def summary_frame(self) -> pd.DataFrame:
        """One row per cycle with its scalar descriptors and energy ranges."""
        summary = pd.DataFrame(
            {
                "cycle": np.arange(self.n_cycles),
                "start": self.start,
                "end": self.end,
                "cadence": self.cadence,
            }
        )
        if self.has_force:
            summary["power_mean"] = self.power_mean
            summary["force_mean"] = self.force_mean
        for name in ("com_potential_energy", "com_kinetic_energy", "com_total_energy"):
            values = getattr(self, name)
            if self.n_cycles:
                summary[f"{name}_range"] = values.max(axis=1) - values.min(axis=1)
            else:
                summary[f"{name}_range"] = np.empty(0)
        return summary

    def waveform_frame(self) -> pd.DataFrame:
        """Long-format waveforms: one row per (cycle, phase) sample."""
        names = WAVEFORM_FIELDS + (FORCE_WAVEFORM_FIELDS if self.has_force else ())
        n_points = self.com_pos_x.shape[1]
        frame = pd.DataFrame(
            {
                "cycle": np.repeat(np.arange(self.n_cycles), n_points),
                "phase": np.tile(np.linspace(0.0, 100.0, n_points), self.n_cycles),
            }
        )
        for name in names:
            frame[name] = getattr(self, name).ravel()
        return frame


NestedResult = Union[EnergeticsResult, dict[str, EnergeticsResult], dict[str, dict[str, EnergeticsResult]]]


def assemble_result(
    result: EnergeticsResult,
    condition_name: Optional[str] = None,
    subject_name: Optional[str] = None,
) -> NestedResult:
    """Nest a result under condition and subject keys.

    No condition name gives the flat result (a subject name alone is ignored);
    a condition name gives ``{condition: result}``; both give
    ``{condition: {subject: result}}``.
    """
    if not condition_name:
        return result
    if subject_name:
        return {condition_name: {subject_name: result}}
    return {condition_name: result}
