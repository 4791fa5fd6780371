################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class HeadingEstimate:
    """Heading estimate emitted once per processed magnetometer sample.

    Data contract:
        heading_deg:
            Smoothed, step-limited heading rounded for display, int in
            [0, 360), clockwise from magnetic north
        raw_heading_deg:
            Unfiltered resolver output in [0, 360)
        accuracy:
            Rounded display accuracy, int in [0, 100]
        is_calibrated:
            True when the unrounded display accuracy exceeds 60
        cardinal_name, cardinal_abbr:
            Compass point of the unrounded smoothed heading
        rotation_deg:
            Continuous, unbounded rotation angle for animation
        roll_deg, pitch_deg, tilt_deg, is_level:
            Attitude of the device, None without accelerometer data
        mag_x, mag_y, mag_z:
            Raw magnetometer components of the sample, microtesla
        t_meas_ns:
            Timestamp of the magnetometer sample, None for simulated
            estimates

    Estimates are values; no field aliases engine state.
    """

    heading_deg: int
    raw_heading_deg: float
    accuracy: int
    is_calibrated: bool
    cardinal_name: str
    cardinal_abbr: str
    rotation_deg: float
    roll_deg: Optional[float] = None
    pitch_deg: Optional[float] = None
    tilt_deg: Optional[float] = None
    is_level: Optional[bool] = None
    mag_x: Optional[float] = None
    mag_y: Optional[float] = None
    mag_z: Optional[float] = None
    t_meas_ns: Optional[int] = None

    def has_tilt(self) -> bool:
        """Return True when attitude fields are populated."""
        return self.tilt_deg is not None

    def has_raw_mag(self) -> bool:
        """Return True when the raw magnetometer vector is attached."""
        return (
            self.mag_x is not None and self.mag_y is not None and self.mag_z is not None
        )

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "heading_deg": self.heading_deg,
            "raw_heading_deg": self.raw_heading_deg,
            "accuracy": self.accuracy,
            "is_calibrated": self.is_calibrated,
            "cardinal_name": self.cardinal_name,
            "cardinal_abbr": self.cardinal_abbr,
            "rotation_deg": self.rotation_deg,
            "roll_deg": self.roll_deg,
            "pitch_deg": self.pitch_deg,
            "tilt_deg": self.tilt_deg,
            "is_level": self.is_level,
            "mag_x": self.mag_x,
            "mag_y": self.mag_y,
            "mag_z": self.mag_z,
            "t_meas_ns": self.t_meas_ns,
        }
