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
from dataclasses import dataclass
from typing import Optional

from truecompass.heading.heading_types.mag_sample import MagSample
from truecompass.heading.heading_types.tilt_reading import ConditionedAccel
from truecompass.heading.heading_types.tilt_reading import TiltReading
from truecompass.heading.math_utils import vec3
from truecompass.heading.math_utils.angles import Angles
from truecompass.heading.models.accel_conditioner import AccelConditioner


@dataclass(frozen=True, slots=True)
class ResolvedHeading:
    """Unfiltered heading plus the attitude it was resolved with."""

    raw_heading_deg: float
    tilt: Optional[TiltReading]


class HeadingResolver:
    """Magnetometer/gravity fusion producing a raw heading.

    Responsibility:
        Turn one magnetometer vector, and the latest conditioned gravity
        direction when one exists, into a heading in [0, 360).

    Inputs/outputs:
        - Inputs: MagSample (microtesla), optional ConditionedAccel,
          use_cross_product and axis_flip_ew options.
        - Outputs: ResolvedHeading with raw heading and optional tilt.

    Frames and units:
        - Device frame; 0 degrees is the +Y axis, increasing clockwise.
        - atan2 measures from +X, so every branch subtracts from 90.

    Fusion strategies:
        Flat (no gravity):
            heading = 90 - atan2(y, x)

        Cross product:
            E = M x A, normalized
            N = A x E
            heading = 90 - atan2(N.y, N.x)

        Legacy roll/pitch compensation:
            Xh = x cos(pitch) + z sin(pitch)
            Yh = x sin(roll) sin(pitch) + y cos(roll) - z sin(roll) cos(pitch)
            heading = 90 - atan2(Yh, Xh)

    Determinism and edge cases:
        - A zero-norm East vector (field parallel to gravity) is divided by 1.
        - Axis flip mirrors east/west after normalization:
          heading = (360 - heading) mod 360.
    """

    @staticmethod
    def resolve(
        sample: MagSample,
        accel: Optional[ConditionedAccel],
        use_cross_product: bool,
        axis_flip_ew: bool,
    ) -> ResolvedHeading:
        """Return the raw heading for a magnetometer sample."""
        tilt: Optional[TiltReading] = None
        heading: float
        if accel is None:
            heading = HeadingResolver.flat_heading(sample.x, sample.y, sample.z)
        else:
            tilt = AccelConditioner.tilt(accel)
            if use_cross_product:
                heading = HeadingResolver._cross_product_heading(sample, accel)
            else:
                heading = HeadingResolver._roll_pitch_heading(sample, accel)

        heading = Angles.normalize(heading)
        if axis_flip_ew:
            heading = Angles.normalize(360.0 - heading)

        return ResolvedHeading(raw_heading_deg=heading, tilt=tilt)

    @staticmethod
    def flat_heading(x: float, y: float, _z: float) -> float:
        """Return the heading of a device lying flat, in [0, 360)."""
        return Angles.normalize(90.0 - math.degrees(math.atan2(y, x)))

    @staticmethod
    def _cross_product_heading(sample: MagSample, accel: ConditionedAccel) -> float:
        m = vec3.as_vector((sample.x, sample.y, sample.z), "mag")
        a = vec3.as_vector((accel.ax, accel.ay, accel.az), "accel")

        east = vec3.normalize_or_unit_scale(vec3.cross(m, a))
        north = vec3.cross(a, east)

        return 90.0 - math.degrees(math.atan2(float(north[1]), float(north[0])))

    @staticmethod
    def _roll_pitch_heading(sample: MagSample, accel: ConditionedAccel) -> float:
        roll: float = math.atan2(accel.ay, accel.az)
        pitch: float = math.atan2(
            -accel.ax, math.sqrt(accel.ay * accel.ay + accel.az * accel.az)
        )

        x_h: float = sample.x * math.cos(pitch) + sample.z * math.sin(pitch)
        y_h: float = (
            sample.x * math.sin(roll) * math.sin(pitch)
            + sample.y * math.cos(roll)
            - sample.z * math.sin(roll) * math.cos(pitch)
        )

        return 90.0 - math.degrees(math.atan2(y_h, x_h))
