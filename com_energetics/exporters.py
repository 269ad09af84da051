"""Export utilities for energetics results.

Writes, for a (possibly condition/subject nested) result:

- ``<stem>.pkl``: the result object(s) as returned by the pipeline
- ``<stem>[_<condition>[_<subject>]]_cycles.csv``: one row per cycle
- ``<stem>[_<condition>[_<subject>]]_waveforms.csv``: long-format 101-point waveforms
- ``<stem>_meta.json``: scalar configuration used for the run
"""

from __future__ import annotations

import json
import logging
import pickle
from pathlib import Path
from typing import Any, Optional

from com_energetics.cycling.results import EnergeticsResult, NestedResult

logger = logging.getLogger(__name__)


def flatten_result(result: NestedResult) -> list[tuple[tuple[str, ...], EnergeticsResult]]:
    """Return ``(keys, result)`` pairs for every result in a nested mapping."""
    if isinstance(result, EnergeticsResult):
        return [((), result)]
    flat = []
    for key, value in result.items():
        for keys, leaf in flatten_result(value):
            flat.append(((key, *keys), leaf))
    return flat


def export_result(
    result: NestedResult,
    output_dir: str | Path,
    stem: str = "com_energetics",
    meta: Optional[dict[str, Any]] = None,
) -> list[Path]:
    """Write a result to ``output_dir``.

    Args:
        result: Flat or nested result from ``compute_com_energetics``.
        output_dir: Destination directory (created if missing).
        stem: Base name for the output files.
        meta: Optional scalar run configuration to store as JSON.

    Returns:
        Paths of the files written.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    written = []

    pkl_path = out / f"{stem}.pkl"
    with open(pkl_path, "wb") as f:
        pickle.dump(result, f)
    written.append(pkl_path)

    for keys, leaf in flatten_result(result):
        label = "_".join((stem, *keys))
        cycles_csv = out / f"{label}_cycles.csv"
        waveforms_csv = out / f"{label}_waveforms.csv"
        leaf.summary_frame().to_csv(cycles_csv, index=False, float_format="%.6f")
        leaf.waveform_frame().to_csv(waveforms_csv, index=False, float_format="%.6f")
        written.extend([cycles_csv, waveforms_csv])
        logger.info(f"Exported {leaf.n_cycles} cycle(s) to {cycles_csv.name}")

    if meta is not None:
        meta_path = out / f"{stem}_meta.json"
        with open(meta_path, "w", encoding="utf-8") as f:
            json.dump(meta, f, indent=2, default=str)
        written.append(meta_path)

    return written


def load_result(pkl_path: str | Path) -> NestedResult:
    """Load a result previously written by :func:`export_result`.

    Raises:
        FileNotFoundError: If the pickle path does not exist.
    """
    pkl = Path(pkl_path)
    if not pkl.exists():
        raise FileNotFoundError(f"Pickle file not found: {pkl}")
    with open(pkl, "rb") as f:
        return pickle.load(f)
