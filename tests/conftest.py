"""Global pytest fixtures for the test suite."""

import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# Add parent directory to path for module imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_crank_trial(
    cadence_rpm: float = 100.0,
    duration_s: float = 3.0,
    fs: float = 200.0,
    force_offset: float = 300.0,
) -> dict[str, np.ndarray]:
    """Create synthetic seated-cycling data with a sinusoidal crank angle.

    The angle peaks a quarter revolution after t=0, so a 3 s trial at 100 rpm
    has 5 interior peaks (4 complete crank cycles).
    """
    tt = np.arange(0, duration_s, 1 / fs)
    crank_freq = cadence_rpm / 60.0
    theta = 2 * np.pi * crank_freq * tt
    return {
        "time": tt,
        "com_pos_x": 0.01 * np.sin(2 * theta),
        "com_pos_y": 1.05 + 0.02 * np.cos(2 * theta),
        "com_pos_z": 0.005 * np.sin(theta),
        "angle": np.sin(theta),
        "force": force_offset + 200 * np.sin(theta),
    }


@pytest.fixture
def crank_trial() -> dict[str, np.ndarray]:
    """Synthetic 3 s trial at 100 rpm."""
    return make_crank_trial()


@pytest.fixture
def energetics_kwargs(crank_trial) -> dict:
    """Keyword arguments for compute_com_energetics using camelCase names."""
    return {
        "subjectMass": 75.0,
        "time": crank_trial["time"],
        "comPosX": crank_trial["com_pos_x"],
        "comPosY": crank_trial["com_pos_y"],
        "comPosZ": crank_trial["com_pos_z"],
        "angleData": crank_trial["angle"],
    }


def write_body_kinematics(path: Path, trial: dict[str, np.ndarray]) -> Path:
    """Write an OpenSim-style BodyKinematics .sto file."""
    kinematics = pd.DataFrame(
        {
            "time": trial["time"],
            "pelvis_X": np.zeros_like(trial["time"]),
            "center_of_mass_X": trial["com_pos_x"],
            "center_of_mass_Y": trial["com_pos_y"],
            "center_of_mass_Z": trial["com_pos_z"],
        }
    )
    header = (
        "Body Kinematics\n"
        "version=1\n"
        f"nRows={len(kinematics)}\n"
        f"nColumns={len(kinematics.columns)}\n"
        "inDegrees=yes\n"
        "endheader\n"
    )
    path.write_text(header + kinematics.to_csv(sep="\t", index=False), encoding="utf-8")
    return path


@pytest.fixture
def trial_files(tmp_path, crank_trial) -> dict[str, Path]:
    """Kinematics, angle and force files for the synthetic trial."""
    kinematics_file = write_body_kinematics(tmp_path / "seated_trial.sto", crank_trial)
    angle_file = tmp_path / "crank_angle.csv"
    pd.DataFrame({"sample": np.arange(len(crank_trial["angle"])), "angle": crank_trial["angle"]}).to_csv(
        angle_file, index=False
    )
    force_file = tmp_path / "pedal_force.csv"
    pd.DataFrame({"force": crank_trial["force"]}).to_csv(force_file, index=False)
    return {"kinematics": kinematics_file, "angle": angle_file, "force": force_file}
