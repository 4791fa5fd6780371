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

import math
from typing import Optional

from truecompass.heading.heading_types.accel_sample import AccelSample
from truecompass.heading.heading_types.tilt_reading import ConditionedAccel
from truecompass.heading.heading_types.tilt_reading import TiltReading
from truecompass.heading.math_utils import vec3


# Low-pass weight applied to each new accelerometer sample, unitless
ACCEL_LOWPASS_ALPHA: float = 0.15

# Tilt below which the device is considered level, degrees
LEVEL_TILT_DEG: float = 7.0

# Upper bound on the reported tilt, degrees
MAX_TILT_DEG: float = 90.0


class AccelConditioner:
    """Gravity conditioning for tilt-compensated headings.

    Responsibility:
        Low-pass filter raw accelerometer samples and reduce them to a
        unit gravity direction, then derive roll, pitch and tilt.

    Inputs/outputs:
        - Inputs: previous ConditionedAccel (or None), AccelSample.
        - Outputs: new ConditionedAccel; TiltReading on request.

    Determinism and edge cases:
        - The filter seeds from the first raw sample, so the first output is
          the normalized first sample.
        - A zero-norm filtered vector is divided by 1 instead of 0.

    Equations:
        filtered = α raw + (1 - α) previous
        conditioned = filtered / |filtered|
        roll = atan2(ay, az)
        pitch = atan2(-ax, sqrt(ay² + az²))
        tilt = min(90, hypot(roll, pitch))
    """

    @staticmethod
    def condition(
        previous: Optional[ConditionedAccel],
        sample: AccelSample,
        alpha: float = ACCEL_LOWPASS_ALPHA,
    ) -> ConditionedAccel:
        """Return the filtered, normalized gravity direction."""
        raw = vec3.as_vector((sample.x, sample.y, sample.z), "accel")
        prev = (
            raw
            if previous is None
            else vec3.as_vector((previous.ax, previous.ay, previous.az), "previous")
        )
        filtered = (alpha * raw) + ((1.0 - alpha) * prev)
        unit = vec3.normalize_or_unit_scale(filtered)
        return ConditionedAccel(
            ax=float(unit[0]),
            ay=float(unit[1]),
            az=float(unit[2]),
        )

    @staticmethod
    def tilt(accel: ConditionedAccel) -> TiltReading:
        """Return roll, pitch and tilt for a conditioned gravity vector."""
        roll_rad: float = math.atan2(accel.ay, accel.az)
        pitch_rad: float = math.atan2(
            -accel.ax, math.sqrt(accel.ay * accel.ay + accel.az * accel.az)
        )
        roll_deg: float = math.degrees(roll_rad)
        pitch_deg: float = math.degrees(pitch_rad)
        tilt_deg: float = min(MAX_TILT_DEG, math.hypot(roll_deg, pitch_deg))
        return TiltReading(
            roll_deg=roll_deg,
            pitch_deg=pitch_deg,
            tilt_deg=tilt_deg,
            is_level=tilt_deg < LEVEL_TILT_DEG,
        )
