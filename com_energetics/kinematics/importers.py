"""Import body kinematics exports and sensor channels.

Body kinematics come from OpenSim's BodyKinematics analysis: a tab-delimited
file with an optional header block terminated by ``endheader``, followed by a
column header row (``time``, ``center_of_mass_X``...) and numeric rows.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from com_energetics.errors import MalformedInputError

logger = logging.getLogger(__name__)

TIME_COLUMN = "time"
COM_COLUMNS: dict[str, str] = {
    "com_pos_x": "center_of_mass_X",
    "com_pos_y": "center_of_mass_Y",
    "com_pos_z": "center_of_mass_Z",
}


def _find_header_row(path: Path) -> int:
    """Return the number of lines preceding the column header row."""
    with path.open("r", encoding="utf-8", errors="replace") as handle:
        for line_number, line in enumerate(handle):
            if line.strip().lower() == "endheader":
                return line_number + 1
    return 0


def read_body_kinematics(kinematics_file: Path | str) -> pd.DataFrame:
    """Read a tab-delimited body kinematics file into a DataFrame.

    Args:
        kinematics_file: Path to the ``.sto``/``.mot``/``.txt`` export.

    Returns:
        DataFrame with one column per header entry (whitespace stripped).

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(kinematics_file)
    if not path.exists():
        raise FileNotFoundError(f"Kinematics file not found: {path}")

    skiprows = _find_header_row(path)
    kinematics = pd.read_csv(path, sep="\t", skiprows=skiprows)
    kinematics.columns = kinematics.columns.str.strip()
    logger.info(f"Read {len(kinematics)} kinematics rows from {path.name}")
    return kinematics


def extract_com_channels(kinematics: pd.DataFrame) -> dict[str, np.ndarray]:
    """Extract time and COM position columns as aligned float arrays.

    Returns:
        Mapping with keys ``time``, ``com_pos_x``, ``com_pos_y``, ``com_pos_z``.

    Raises:
        MalformedInputError: If a required column is missing.
    """
    required = [TIME_COLUMN, *COM_COLUMNS.values()]
    missing = [col for col in required if col not in kinematics.columns]
    if missing:
        raise MalformedInputError(
            f"Kinematics data is missing required columns: {', '.join(missing)}"
        )

    channels = {"time": kinematics[TIME_COLUMN].to_numpy(dtype=float)}
    for name, column in COM_COLUMNS.items():
        channels[name] = kinematics[column].to_numpy(dtype=float)
    return channels


def import_body_kinematics(kinematics_file: Path | str) -> dict[str, np.ndarray]:
    """Read a body kinematics file and return its time and COM channels."""
    return extract_com_channels(read_body_kinematics(kinematics_file))


def load_sensor_channel(sensor_file: Path | str, column: Optional[str] = None) -> np.ndarray:
    """Load one channel (crank angle or pedal force) from a delimited text file.

    ``.csv`` files are comma-delimited; anything else is read as tab-delimited.
    The file must carry a header row. Without ``column`` the first numeric
    column is used.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedInputError: If the column is absent or no numeric column exists.
    """
    path = Path(sensor_file)
    if not path.exists():
        raise FileNotFoundError(f"Sensor file not found: {path}")

    sep = "," if path.suffix.lower() == ".csv" else "\t"
    sensor = pd.read_csv(path, sep=sep)
    sensor.columns = [str(col).strip() for col in sensor.columns]

    if column is not None:
        if column not in sensor.columns:
            raise MalformedInputError(f"Column '{column}' not found in {path.name}")
        return sensor[column].to_numpy(dtype=float)

    numeric = sensor.select_dtypes(include="number")
    if numeric.empty:
        raise MalformedInputError(f"No numeric column found in {path.name}")
    logger.debug(f"Using column '{numeric.columns[0]}' from {path.name}")
    return numeric.iloc[:, 0].to_numpy(dtype=float)
