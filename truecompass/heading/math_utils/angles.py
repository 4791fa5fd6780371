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
from typing import Iterable


class Angles:
    """Wrap-safe helpers for compass angles in degrees.

    Responsibility:
        Keep every heading in [0, 360) and express differences between
        headings as the shortest signed rotation.

    Frames and units:
        - Degrees, clockwise from magnetic north.

    Determinism and edge cases:
        - normalize() maps -0.0 and 360.0 to 0.0.
        - shortest_delta() returns values in [-180, 180); a half-turn is
          reported as -180.
        - circular_mean() of an empty sequence is 0.0.

    Equations:
        Shortest delta:
            δ = ((b - a + 540) mod 360) - 180

        Circular mean:
            θ̄ = atan2(mean(sin θᵢ), mean(cos θᵢ))
    """

    @staticmethod
    def normalize(angle_deg: float) -> float:
        """Return the angle wrapped into [0, 360)."""
        wrapped: float = math.fmod(angle_deg, 360.0)
        if wrapped < 0.0:
            wrapped += 360.0
        # fmod of a tiny negative value can round up to exactly 360
        if wrapped >= 360.0:
            wrapped -= 360.0
        return wrapped + 0.0

    @staticmethod
    def shortest_delta(from_deg: float, to_deg: float) -> float:
        """Return the signed shortest rotation from from_deg to to_deg."""
        return ((to_deg - from_deg + 540.0) % 360.0) - 180.0

    @staticmethod
    def circular_mean(angles_deg: Iterable[float]) -> float:
        """Return the circular mean of the angles in [0, 360)."""
        sin_sum: float = 0.0
        cos_sum: float = 0.0
        count: int = 0
        for angle in angles_deg:
            rad: float = math.radians(angle)
            sin_sum += math.sin(rad)
            cos_sum += math.cos(rad)
            count += 1
        if count == 0:
            return 0.0
        mean_rad: float = math.atan2(sin_sum / count, cos_sum / count)
        return Angles.normalize(math.degrees(mean_rad))

    @staticmethod
    def round_heading(angle_deg: float) -> int:
        """Round half up for display, keeping the result in [0, 360)."""
        return int(math.floor(angle_deg + 0.5)) % 360
