"""Tests for the typed configuration record."""

import numpy as np
import pytest
from pydantic import ValidationError

from com_energetics.cycling.pipeline import EnergeticsPipeline
from com_energetics.errors import MalformedInputError, MissingInputError
from com_energetics.models import CHANNELS, POSITION_CHANNELS, EnergeticsInput


def test_camel_case_and_snake_case_names_are_equivalent(energetics_kwargs, crank_trial):
    camel = EnergeticsInput.from_kwargs(**energetics_kwargs)
    snake = EnergeticsInput(
        subject_mass=75.0,
        time=crank_trial["time"],
        com_pos_x=crank_trial["com_pos_x"],
        com_pos_y=crank_trial["com_pos_y"],
        com_pos_z=crank_trial["com_pos_z"],
        angle_data=crank_trial["angle"],
    )

    assert camel.subject_mass == snake.subject_mass
    np.testing.assert_array_equal(camel.com_pos_y, snake.com_pos_y)


def test_defaults(energetics_kwargs):
    config = EnergeticsInput.from_kwargs(**energetics_kwargs)

    assert config.crank_length == pytest.approx(0.1725)
    assert not config.has_force
    assert not config.filter_requested
    assert config.condition_name is None


def test_crank_length_default_from_environment(energetics_kwargs, monkeypatch):
    monkeypatch.setenv("COM_ENERGETICS_CRANK_LENGTH", "0.17")

    config = EnergeticsInput.from_kwargs(**energetics_kwargs)

    assert config.crank_length == pytest.approx(0.17)


def test_sequences_are_coerced_to_float_arrays(energetics_kwargs):
    kwargs = dict(energetics_kwargs)
    kwargs["angleData"] = list(kwargs["angleData"])
    kwargs["comPosX"] = np.asarray(kwargs["comPosX"]).reshape(1, -1)  # row vector

    config = EnergeticsInput.from_kwargs(**kwargs)

    assert isinstance(config.angle_data, np.ndarray)
    assert config.angle_data.dtype == float
    assert config.com_pos_x.shape == config.time.shape


def test_matrix_channel_rejected(energetics_kwargs):
    kwargs = dict(energetics_kwargs, angleData=np.zeros((2, 300)))

    with pytest.raises(MalformedInputError):
        EnergeticsInput.from_kwargs(**kwargs)


def test_unknown_key_rejected(energetics_kwargs):
    with pytest.raises(ValidationError):
        EnergeticsInput.from_kwargs(**energetics_kwargs, bodyKinematicsFile="trial.sto")


@pytest.mark.parametrize("missing", ["subjectMass", "time", "comPosY", "angleData"])
def test_missing_required_input_raises(energetics_kwargs, missing):
    kwargs = {k: v for k, v in energetics_kwargs.items() if k != missing}

    with pytest.raises(MissingInputError):
        EnergeticsInput.from_kwargs(**kwargs)


@pytest.mark.parametrize("mass", [0.0, -75.0])
def test_non_positive_mass_raises(energetics_kwargs, mass):
    with pytest.raises(MalformedInputError):
        EnergeticsInput.from_kwargs(**dict(energetics_kwargs, subjectMass=mass))


def test_channel_length_mismatch_raises(energetics_kwargs):
    kwargs = dict(energetics_kwargs, comPosZ=energetics_kwargs["comPosZ"][:-1])

    with pytest.raises(MalformedInputError):
        EnergeticsInput.from_kwargs(**kwargs)


def test_force_length_mismatch_raises(energetics_kwargs):
    with pytest.raises(MalformedInputError):
        EnergeticsInput.from_kwargs(**energetics_kwargs, forceData=np.zeros(10))


def test_non_increasing_time_raises(energetics_kwargs):
    time = energetics_kwargs["time"].copy()
    time[10] = time[9]

    with pytest.raises(MalformedInputError):
        EnergeticsInput.from_kwargs(**dict(energetics_kwargs, time=time))


def test_nan_in_channel_raises(energetics_kwargs):
    com_pos_y = energetics_kwargs["comPosY"].copy()
    com_pos_y[5] = np.nan

    with pytest.raises(MalformedInputError):
        EnergeticsInput.from_kwargs(**dict(energetics_kwargs, comPosY=com_pos_y))


def test_filter_without_force_raises(energetics_kwargs):
    with pytest.raises(MissingInputError, match="force"):
        EnergeticsInput.from_kwargs(
            **energetics_kwargs,
            targetPower=500,
            targetCadence=120,
            buffers=[0.9, 1.1, 0.9, 1.1],
        )


def test_filter_without_buffers_raises(energetics_kwargs, crank_trial):
    with pytest.raises(MissingInputError, match="buffers"):
        EnergeticsInput.from_kwargs(
            **energetics_kwargs,
            forceData=crank_trial["force"],
            targetPower=500,
            targetCadence=120,
        )


@pytest.mark.parametrize("target", [{"targetPower": 500}, {"targetCadence": 120}])
def test_single_target_leaves_cycles_unfiltered(energetics_kwargs, crank_trial, target):
    config = EnergeticsInput.from_kwargs(
        **energetics_kwargs,
        forceData=crank_trial["force"],
        **target,
    )

    output = EnergeticsPipeline(config).run()

    assert not config.filter_requested
    assert output.valid is None
    assert output.result.n_cycles == 4


@pytest.mark.parametrize(
    "target",
    [
        {"targetPower": np.nan, "targetCadence": 120},
        {"targetPower": 500, "targetCadence": np.inf},
        {"targetPower": np.nan},
    ],
)
def test_non_finite_target_raises(energetics_kwargs, crank_trial, target):
    with pytest.raises(MalformedInputError, match="finite"):
        EnergeticsInput.from_kwargs(
            **energetics_kwargs,
            forceData=crank_trial["force"],
            buffers=[0.9, 1.1, 0.9, 1.1],
            **target,
        )


@pytest.mark.parametrize(
    "buffers", [[0.9, 1.1, 0.9], [1.1, 0.9, 0.9, 1.1], [0.9, np.nan, 0.9, 1.1], [0.9, 1.1, -np.inf, 1.1]]
)
def test_malformed_buffers_raise(energetics_kwargs, crank_trial, buffers):
    with pytest.raises(MalformedInputError):
        EnergeticsInput.from_kwargs(
            **energetics_kwargs,
            forceData=crank_trial["force"],
            targetPower=500,
            targetCadence=120,
            buffers=buffers,
        )


def test_non_positive_crank_length_raises(energetics_kwargs):
    with pytest.raises(MalformedInputError):
        EnergeticsInput.from_kwargs(**energetics_kwargs, crankLength=0.0)


def test_to_frame_columns(energetics_kwargs, crank_trial):
    config = EnergeticsInput.from_kwargs(**energetics_kwargs, forceData=crank_trial["force"])

    frame = config.to_frame()

    assert list(frame.columns) == ["time", "com_pos_x", "com_pos_y", "com_pos_z", "angle", "force"]
    assert len(frame) == len(crank_trial["time"])


def test_channel_table():
    assert [spec.name for spec in POSITION_CHANNELS] == ["com_pos_x", "com_pos_y", "com_pos_z"]
    assert [spec.name for spec in CHANNELS if spec.needs_power] == ["force"]
    assert POSITION_CHANNELS[1].velocity_name == "com_vel_y"
    assert POSITION_CHANNELS[2].acceleration_name == "com_acc_z"
