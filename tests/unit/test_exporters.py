"""Tests for result export."""

import pandas as pd
import pytest

from com_energetics import compute_com_energetics
from com_energetics.exporters import export_result, flatten_result, load_result


def test_flatten_nested_result(energetics_kwargs):
    nested = compute_com_energetics(**energetics_kwargs, conditionName="c1", subjectName="s1")

    flat = flatten_result(nested)

    assert len(flat) == 1
    assert flat[0][0] == ("c1", "s1")


def test_export_flat_result(energetics_kwargs, tmp_path):
    result = compute_com_energetics(**energetics_kwargs)

    written = export_result(result, tmp_path / "exports", stem="trial01")

    names = sorted(path.name for path in written)
    assert names == ["trial01.pkl", "trial01_cycles.csv", "trial01_waveforms.csv"]
    summary = pd.read_csv(tmp_path / "exports" / "trial01_cycles.csv")
    assert list(summary["cycle"]) == [0, 1, 2, 3]


def test_export_empty_result(energetics_kwargs, tmp_path):
    kwargs = dict(energetics_kwargs)
    for key in ("time", "comPosX", "comPosY", "comPosZ", "angleData"):
        kwargs[key] = kwargs[key][:100]
    result = compute_com_energetics(**kwargs)
    assert result.n_cycles == 0

    export_result(result, tmp_path, stem="empty")

    assert len(pd.read_csv(tmp_path / "empty_cycles.csv")) == 0


def test_load_missing_pickle_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_result(tmp_path / "missing.pkl")
