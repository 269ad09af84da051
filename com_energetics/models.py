"""Typed input record and static channel table for the energetics pipeline."""

from __future__ import annotations

from typing import Annotated, Any, NamedTuple, Optional

import numpy as np
import pandas as pd
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from com_energetics.config import get_default_crank_length
from com_energetics.errors import MalformedInputError, MissingInputError


def _as_float_array(value: Any) -> Any:
    """Coerce a sequence (list, tuple, Series, row/column vector) to a 1-D float array."""
    if value is None:
        return None
    if isinstance(value, pd.Series):
        value = value.to_numpy()
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"Channel data is not numeric: {exc}") from exc
    if arr.ndim > 1:
        # Accept row or column vectors, reject real matrices
        if sum(dim > 1 for dim in arr.shape) > 1:
            raise MalformedInputError(
                f"Channel data must be one-dimensional, got shape {arr.shape}"
            )
    return arr.ravel()


FloatArray = Annotated[np.ndarray, BeforeValidator(_as_float_array)]


class ChannelSpec(NamedTuple):
    """How a time-series channel flows through the per-cycle pipeline."""

    name: str
    needs_derivatives: bool = False
    needs_power: bool = False
    velocity_name: Optional[str] = None
    acceleration_name: Optional[str] = None


# Every resampled channel, in output order. Time is the resampling axis and is
# not itself a channel.
CHANNELS: tuple[ChannelSpec, ...] = (
    ChannelSpec("com_pos_x", True, False, "com_vel_x", "com_acc_x"),
    ChannelSpec("com_pos_y", True, False, "com_vel_y", "com_acc_y"),
    ChannelSpec("com_pos_z", True, False, "com_vel_z", "com_acc_z"),
    ChannelSpec("angle"),
    ChannelSpec("force", needs_power=True),
)

POSITION_CHANNELS: tuple[ChannelSpec, ...] = tuple(
    spec for spec in CHANNELS if spec.needs_derivatives
)


class EnergeticsInput(BaseModel):
    """Configuration record for one energetics computation.

    Field names are snake_case; the camelCase keyword names
    (``subjectMass``, ``angleData``...) are accepted as aliases. Unknown keys are rejected by pydantic. Missing or unusable
    inputs raise :class:`MissingInputError` / :class:`MalformedInputError`.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        arbitrary_types_allowed=True,
        populate_by_name=True,
    )

    subject_mass: Optional[float] = Field(default=None, alias="subjectMass")
    time: Optional[FloatArray] = None
    com_pos_x: Optional[FloatArray] = Field(default=None, alias="comPosX")
    com_pos_y: Optional[FloatArray] = Field(default=None, alias="comPosY")
    com_pos_z: Optional[FloatArray] = Field(default=None, alias="comPosZ")
    angle_data: Optional[FloatArray] = Field(default=None, alias="angleData")
    force_data: Optional[FloatArray] = Field(default=None, alias="forceData")
    target_power: Optional[float] = Field(default=None, alias="targetPower")
    target_cadence: Optional[float] = Field(default=None, alias="targetCadence")
    buffers: Optional[FloatArray] = None
    condition_name: Optional[str] = Field(default=None, alias="conditionName")
    subject_name: Optional[str] = Field(default=None, alias="subjectName")
    crank_length: float = Field(default_factory=get_default_crank_length, alias="crankLength")

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> "EnergeticsInput":
        """Build the record from keyword arguments (camelCase or snake_case)."""
        return cls.model_validate(kwargs)

    @property
    def has_force(self) -> bool:
        return self.force_data is not None

    @property
    def filter_requested(self) -> bool:
        """True when both a target power and a target cadence were supplied."""
        return self.target_power is not None and self.target_cadence is not None

    @model_validator(mode="after")
    def validate_inputs(self) -> "EnergeticsInput":
        """Check presence, shape and consistency of all inputs."""
        if self.subject_mass is None:
            raise MissingInputError("No subject mass input. Please input a subject mass")
        if not np.isfinite(self.subject_mass) or self.subject_mass <= 0:
            raise MalformedInputError(
                f"subject_mass must be a positive number of kg, got {self.subject_mass}"
            )

        kinematics = {
            "time": self.time,
            "com_pos_x": self.com_pos_x,
            "com_pos_y": self.com_pos_y,
            "com_pos_z": self.com_pos_z,
        }
        missing = [name for name, data in kinematics.items() if data is None]
        if missing:
            raise MissingInputError(
                f"No kinematics data input ({', '.join(missing)}). "
                "Please input kinematic data to analyze"
            )
        if self.angle_data is None:
            raise MissingInputError("No angle data input. Please input angle data to analyze")

        channels = dict(kinematics, angle_data=self.angle_data)
        if self.force_data is not None:
            channels["force_data"] = self.force_data
        n_samples = len(self.time)
        for name, data in channels.items():
            if len(data) != n_samples:
                raise MalformedInputError(
                    f"Channel '{name}' has {len(data)} samples, expected {n_samples} "
                    "(same length as time)"
                )
            if not np.all(np.isfinite(data)):
                raise MalformedInputError(f"Channel '{name}' contains NaN or infinite values")
        if n_samples > 1 and np.any(np.diff(self.time) <= 0):
            raise MalformedInputError("Time base must be strictly increasing")

        if not np.isfinite(self.crank_length) or self.crank_length <= 0:
            raise MalformedInputError(f"crank_length must be positive, got {self.crank_length}")

        targets = {"target_power": self.target_power, "target_cadence": self.target_cadence}
        for name, target in targets.items():
            if target is not None and not np.isfinite(target):
                raise MalformedInputError(f"{name} must be a finite number, got {target}")
        if self.filter_requested:
            if self.force_data is None:
                raise MissingInputError("No force data input. Please input force data to analyze.")
            if self.buffers is None:
                raise MissingInputError("No buffers input. Please input buffer for valid data.")
        if self.buffers is not None:
            if len(self.buffers) != 4:
                raise MalformedInputError(
                    "buffers must be [powerLow, powerHigh, cadenceLow, cadenceHigh], "
                    f"got {len(self.buffers)} values"
                )
            if not np.all(np.isfinite(self.buffers)):
                raise MalformedInputError(f"buffers contain NaN or infinite values: {self.buffers}")
            if self.buffers[0] > self.buffers[1] or self.buffers[2] > self.buffers[3]:
                raise MalformedInputError(f"buffers low bounds exceed high bounds: {self.buffers}")
        return self

    def to_frame(self) -> pd.DataFrame:
        """Return the aligned input channels as a DataFrame (one column per channel)."""
        data = {
            "time": self.time,
            "com_pos_x": self.com_pos_x,
            "com_pos_y": self.com_pos_y,
            "com_pos_z": self.com_pos_z,
            "angle": self.angle_data,
        }
        if self.force_data is not None:
            data["force"] = self.force_data
        return pd.DataFrame(data)
