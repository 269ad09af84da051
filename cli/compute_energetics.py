#!/usr/bin/env python3
"""Command-line interface for COM energetics per crank cycle."""

import logging
import sys
from pathlib import Path

from com_energetics.config import get_output_root, load_env_file, setup_logging
from com_energetics.cycling import compute_com_energetics
from com_energetics.errors import EnergeticsError
from com_energetics.exporters import export_result
from com_energetics.kinematics import import_body_kinematics, load_sensor_channel


def main() -> int:
    """Compute rider COM energetics from a body kinematics export.

    - Reads time and COM position from the kinematics file and the crank
      angle (and optionally pedal force) from sensor files.
    - With `--target-power`/`--target-cadence`/`--buffers`, keeps only
      cycles within the target operating band.
    - Writes a pickle, per-cycle summary CSV and waveform CSV to `--out`.

    Returns 0 on success, 1 if an input path is missing or inputs are invalid.
    """
    import argparse

    parser = argparse.ArgumentParser(
        description="Compute rider center-of-mass energetics over each crank cycle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "kinematics_file",
        type=Path,
        help="Tab-delimited body kinematics export (time, center_of_mass_X/Y/Z)",
    )
    parser.add_argument(
        "--mass",
        type=float,
        required=True,
        help="Subject mass in kg",
    )
    parser.add_argument(
        "--angle-file",
        type=Path,
        required=True,
        help="Crank angle file (CSV or tab-delimited, with header row)",
    )
    parser.add_argument(
        "--angle-column",
        type=str,
        default=None,
        help="Column holding the crank angle (default: first numeric column)",
    )
    parser.add_argument(
        "--force-file",
        type=Path,
        default=None,
        help="Pedal force file (enables power and condition filtering)",
    )
    parser.add_argument(
        "--force-column",
        type=str,
        default=None,
        help="Column holding the pedal force (default: first numeric column)",
    )
    parser.add_argument(
        "--target-power",
        type=float,
        default=None,
        help="Target power in W",
    )
    parser.add_argument(
        "--target-cadence",
        type=float,
        default=None,
        help="Target cadence in rpm",
    )
    parser.add_argument(
        "--buffers",
        type=float,
        nargs=4,
        default=None,
        metavar=("POWER_LOW", "POWER_HIGH", "CADENCE_LOW", "CADENCE_HIGH"),
        help="Target band fractions (e.g. 0.9 1.1 0.9 1.1)",
    )
    parser.add_argument(
        "--crank-length",
        type=float,
        default=None,
        help="Crank length in m (default: 0.1725 or COM_ENERGETICS_CRANK_LENGTH)",
    )
    parser.add_argument("--condition", type=str, default=None, help="Condition name key")
    parser.add_argument("--subject", type=str, default=None, help="Subject name key")
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory (default: COM_ENERGETICS_OUTPUT_ROOT or the kinematics file's folder)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    load_env_file()
    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(__name__)

    for path in (args.kinematics_file, args.angle_file, args.force_file):
        if path is not None and not path.exists():
            logger.error(f"Path does not exist: {path}")
            return 1

    inputs = {
        "subject_mass": args.mass,
        "target_power": args.target_power,
        "target_cadence": args.target_cadence,
        "buffers": args.buffers,
        "condition_name": args.condition,
        "subject_name": args.subject,
    }
    if args.crank_length is not None:
        inputs["crank_length"] = args.crank_length

    try:
        inputs.update(import_body_kinematics(args.kinematics_file))
        inputs["angle_data"] = load_sensor_channel(args.angle_file, args.angle_column)
        if args.force_file is not None:
            inputs["force_data"] = load_sensor_channel(args.force_file, args.force_column)
        result = compute_com_energetics(**inputs)
    except EnergeticsError as e:
        logger.error(f"✗ Failed to process {args.kinematics_file}: {e}", exc_info=args.verbose)
        return 1

    output_dir = args.out or get_output_root(default=args.kinematics_file.parent)
    meta = {
        key: value
        for key, value in inputs.items()
        if key not in {"time", "com_pos_x", "com_pos_y", "com_pos_z", "angle_data", "force_data"}
    }
    meta["kinematics_file"] = str(args.kinematics_file)
    written = export_result(result, output_dir, stem=args.kinematics_file.stem, meta=meta)

    logger.info(f"✓ Complete: wrote {len(written)} file(s) → {output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
