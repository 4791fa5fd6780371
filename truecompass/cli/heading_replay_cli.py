################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Replay recorded or synthetic sensor samples through the heading engine
"""

from __future__ import annotations

import argparse
import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List
from typing import Optional
from typing import Sequence
from typing import TextIO
from typing import Tuple

from truecompass.calibration.calibration_session import CalibrationSession
from truecompass.calibration.calibration_tracker import CalibrationProgress
from truecompass.calibration.guidance import CalibrationGuidance
from truecompass.calibration.guidance import calibration_guidance
from truecompass.calibration.guidance import setup_tip
from truecompass.heading.config.compass_config import CompassConfig
from truecompass.heading.config.compass_config import load_compass_config
from truecompass.heading.config.heading_params import HeadingParams
from truecompass.heading.engine.subscription import HeadingSubscription
from truecompass.heading.engine.subscription import start_heading_subscription
from truecompass.heading.heading_types.accel_sample import AccelSample
from truecompass.heading.heading_types.compass_status import CompassStatus
from truecompass.heading.heading_types.heading_estimate import HeadingEstimate
from truecompass.heading.heading_types.mag_sample import MagSample
from truecompass.sim.replay_source import ReplaySampleSource
from truecompass.sim.synthetic import SAMPLE_DT_NS
from truecompass.sim.synthetic import held_field_samples
from truecompass.sim.synthetic import level_accel_samples
from truecompass.sim.synthetic import rotating_field_samples
from truecompass.sim.synthetic import sphere_field_samples


_LOG: logging.Logger = logging.getLogger(__name__)


# Column names of a sample log
MAG_COLUMNS: Tuple[str, ...] = ("t_meas_ns", "mag_x", "mag_y", "mag_z")
ACCEL_COLUMNS: Tuple[str, ...] = ("accel_x", "accel_y", "accel_z")

# Synthetic calibration run: figure-8 samples, then samples held still
CALIBRATION_SWEEP_SAMPLES: int = 200
CALIBRATION_HOLD_SAMPLES: int = 40


class SampleLogError(RuntimeError):
    """Raised when a sample log cannot be parsed."""


@dataclass(frozen=True)
class ParsedArgs:
    samples: Optional[Path]
    config: Optional[Path]
    start_deg: float
    end_deg: float
    count: int
    settle: int
    no_accel: bool
    simulated_heading: Optional[float]
    calibrate: bool
    verbose: bool


def parse_args(argv: Optional[Sequence[str]] = None) -> ParsedArgs:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description=(
            "Replay magnetometer and accelerometer samples through the heading "
            "engine and print one line per estimate."
        )
    )
    parser.add_argument(
        "samples",
        type=Path,
        nargs="?",
        help=(
            "CSV sample log with columns t_meas_ns,mag_x,mag_y,mag_z and "
            "optionally accel_x,accel_y,accel_z. A synthetic sweep is used "
            "when omitted."
        ),
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="YAML file with heading and calibration parameters.",
    )
    parser.add_argument(
        "--start-deg",
        type=float,
        default=0.0,
        help="Heading at the start of the synthetic sweep (degrees).",
    )
    parser.add_argument(
        "--end-deg",
        type=float,
        default=90.0,
        help="Heading at the end of the synthetic sweep (degrees).",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=10,
        help="Number of samples in the synthetic sweep.",
    )
    parser.add_argument(
        "--settle",
        type=int,
        default=12,
        help="Samples held at the final heading after the synthetic sweep.",
    )
    parser.add_argument(
        "--no-accel",
        action="store_true",
        help="Replay without accelerometer samples (flat heading fusion).",
    )
    parser.add_argument(
        "--simulated-heading",
        type=float,
        help="Bypass the sensors and emit one fixed heading (degrees).",
    )
    parser.add_argument(
        "--calibrate",
        action="store_true",
        help="Run the guided calibration flow instead of printing headings.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    namespace = parser.parse_args(argv)

    if namespace.count <= 0:
        parser.error("--count must be positive")
    if namespace.settle < 0:
        parser.error("--settle must not be negative")

    return ParsedArgs(
        samples=namespace.samples,
        config=namespace.config,
        start_deg=namespace.start_deg,
        end_deg=namespace.end_deg,
        count=namespace.count,
        settle=namespace.settle,
        no_accel=namespace.no_accel,
        simulated_heading=namespace.simulated_heading,
        calibrate=namespace.calibrate,
        verbose=namespace.verbose,
    )


def load_sample_log(path: Path) -> Tuple[List[MagSample], List[AccelSample]]:
    """Load magnetometer and accelerometer samples from a CSV sample log."""

    try:
        with path.open("r", encoding="utf-8", newline="") as file:
            return read_sample_log(file)
    except OSError as exc:
        raise SampleLogError(f"cannot read {path}: {exc}") from exc


def read_sample_log(file: TextIO) -> Tuple[List[MagSample], List[AccelSample]]:
    """Parse a CSV sample log from an open text stream."""

    reader: csv.DictReader = csv.DictReader(file)
    fieldnames: List[str] = list(reader.fieldnames or [])
    missing: List[str] = [name for name in MAG_COLUMNS if name not in fieldnames]
    if missing:
        raise SampleLogError(f"missing column: {missing[0]}")
    has_accel: bool = all(name in fieldnames for name in ACCEL_COLUMNS)

    mag_samples: List[MagSample] = []
    accel_samples: List[AccelSample] = []
    for line_number, row in enumerate(reader, start=2):
        try:
            t_meas_ns: int = int(row["t_meas_ns"])
            mag_samples.append(
                MagSample(
                    t_meas_ns=t_meas_ns,
                    x=float(row["mag_x"]),
                    y=float(row["mag_y"]),
                    z=float(row["mag_z"]),
                )
            )
            if has_accel and row["accel_x"] not in (None, ""):
                accel_samples.append(
                    AccelSample(
                        t_meas_ns=t_meas_ns,
                        x=float(row["accel_x"]),
                        y=float(row["accel_y"]),
                        z=float(row["accel_z"]),
                    )
                )
        except (TypeError, ValueError) as exc:
            raise SampleLogError(f"line {line_number}: {exc}") from exc

    return mag_samples, accel_samples


def format_estimate(estimate: HeadingEstimate) -> str:
    """Return a one-line, human-readable rendering of an estimate."""

    tilt: str = "-" if estimate.tilt_deg is None else f"{estimate.tilt_deg:5.1f}"
    stamp: str = "-" if estimate.t_meas_ns is None else str(estimate.t_meas_ns)
    return (
        f"{stamp:>14} {estimate.heading_deg:3d}° {estimate.cardinal_abbr:<2} "
        f"acc={estimate.accuracy:3d} tilt={tilt} "
        f"raw={estimate.raw_heading_deg:6.1f} rot={estimate.rotation_deg:8.1f}"
    )


def format_progress(progress: CalibrationProgress) -> str:
    """Return a one-line rendering of calibration progress."""

    line: str = (
        f"{progress.phase.value:<10} {progress.progress:5.1f}% "
        f"regions={progress.region_count:2d} samples={progress.sample_count}"
    )
    tip: Optional[str] = setup_tip(progress.progress)
    if tip is not None:
        line += f"  {tip}"
    return line


def _synthetic_samples(
    args: ParsedArgs,
) -> Tuple[List[MagSample], List[AccelSample]]:
    mag_samples: List[MagSample] = rotating_field_samples(
        args.start_deg, args.end_deg, args.count
    )
    if args.settle > 0:
        mag_samples += held_field_samples(
            args.end_deg,
            args.settle,
            t0_ns=mag_samples[-1].t_meas_ns + SAMPLE_DT_NS,
        )
    accel_samples: List[AccelSample] = level_accel_samples(len(mag_samples))
    return mag_samples, accel_samples


def _calibration_samples() -> List[MagSample]:
    sweep: List[MagSample] = sphere_field_samples(CALIBRATION_SWEEP_SAMPLES)
    hold: List[MagSample] = held_field_samples(
        0.0,
        CALIBRATION_HOLD_SAMPLES,
        t0_ns=sweep[-1].t_meas_ns + SAMPLE_DT_NS,
    )
    return sweep + hold


def _print_unavailable(status: CompassStatus) -> None:
    print(f"Compass unavailable: {status.reason}")


def run_replay(
    config: CompassConfig,
    mag_samples: Sequence[MagSample],
    accel_samples: Sequence[AccelSample],
    simulated_heading: Optional[float] = None,
) -> List[HeadingEstimate]:
    """Replay samples through one subscription and return every estimate."""

    params: HeadingParams = config.heading
    if simulated_heading is not None:
        params = params.replace(simulated_heading_deg=simulated_heading)

    estimates: List[HeadingEstimate] = []

    def on_estimate(estimate: HeadingEstimate) -> None:
        estimates.append(estimate)
        print(format_estimate(estimate))

    source: ReplaySampleSource = ReplaySampleSource(has_accel=bool(accel_samples))
    subscription: HeadingSubscription = start_heading_subscription(
        source, params, on_estimate, _print_unavailable
    )
    with subscription:
        if subscription.is_active and params.simulated_heading_deg is None:
            source.replay(mag_samples, accel_samples)

    return estimates


def run_calibration(
    config: CompassConfig, mag_samples: Sequence[MagSample]
) -> Optional[bool]:
    """Replay samples through a calibration session and return the flip decision."""

    decision: List[bool] = []

    def on_progress(progress: CalibrationProgress) -> None:
        print(format_progress(progress))

    def on_complete(axis_flip_ew: bool) -> None:
        decision.append(axis_flip_ew)

    source: ReplaySampleSource = ReplaySampleSource(has_accel=False)
    with CalibrationSession(
        source,
        on_progress=on_progress,
        on_complete=on_complete,
        on_unavailable=_print_unavailable,
        params=config.calibration,
        update_interval_ms=config.heading.update_interval_ms,
    ) as session:
        source.replay(mag_samples)
        final: CalibrationProgress = session.last_progress

    if not decision:
        print(f"Calibration incomplete at {final.progress:.0f}%")
        return None

    print(f"Calibration complete, axis_flip_ew={str(decision[0]).lower()}")
    return decision[0]


################################################################################
# Console entry point
################################################################################


def main(args: Optional[list[str]] = None) -> None:
    parsed: ParsedArgs = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config: CompassConfig = (
        load_compass_config(parsed.config)
        if parsed.config is not None
        else CompassConfig()
    )

    mag_samples: List[MagSample]
    accel_samples: List[AccelSample]
    if parsed.samples is not None:
        mag_samples, accel_samples = load_sample_log(parsed.samples)
        _LOG.info("Loaded %d samples from %s", len(mag_samples), parsed.samples)
    elif parsed.calibrate:
        mag_samples, accel_samples = _calibration_samples(), []
    else:
        mag_samples, accel_samples = _synthetic_samples(parsed)

    if parsed.no_accel:
        accel_samples = []

    if parsed.calibrate:
        run_calibration(config, mag_samples)
        return

    estimates: List[HeadingEstimate] = run_replay(
        config, mag_samples, accel_samples, parsed.simulated_heading
    )
    if estimates:
        final: HeadingEstimate = estimates[-1]
        guidance: CalibrationGuidance = calibration_guidance(final.accuracy)
        print(
            f"Final heading {final.heading_deg}° {final.cardinal_name}, "
            f"{guidance.title}"
        )
