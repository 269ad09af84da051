"""Kinematics import submodule.

Reads OpenSim body kinematics exports and crank sensor channels.
"""

from com_energetics.kinematics.importers import (
                                                 extract_com_channels,
                                                 import_body_kinematics,
                                                 load_sensor_channel,
                                                 read_body_kinematics,
)

__all__ = [
    "read_body_kinematics",
    "extract_com_channels",
    "import_body_kinematics",
    "load_sensor_channel",
]
