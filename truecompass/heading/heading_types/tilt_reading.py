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


@dataclass(frozen=True, slots=True)
class ConditionedAccel:
    """Low-pass filtered, unit-length gravity direction in the device frame.

    Owned by the heading engine and overwritten on every accelerometer
    update. Never exposed to consumers.
    """

    ax: float
    ay: float
    az: float


@dataclass(frozen=True, slots=True)
class TiltReading:
    """Device attitude relative to level, derived from gravity.

    Data contract:
        roll_deg:
            Rotation about the device X axis, atan2(ay, az), degrees
        pitch_deg:
            Rotation about the device Y axis, atan2(-ax, hypot(ay, az)),
            degrees
        tilt_deg:
            Overall tilt from flat, hypot(roll, pitch) capped at 90 degrees
        is_level:
            True when tilt_deg is below the level threshold
    """

    roll_deg: float
    pitch_deg: float
    tilt_deg: float
    is_level: bool
