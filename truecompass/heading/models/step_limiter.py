################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Per-update bound on heading change."""

from __future__ import annotations

import math
from typing import Optional

from truecompass.heading.math_utils.angles import Angles


# Largest heading change per update with good accuracy, degrees
MAX_STEP_DEG: float = 45.0

# Largest heading change per update when accuracy is poor, degrees
LOW_ACCURACY_MAX_STEP_DEG: float = 20.0

# Accuracy below which the low-accuracy bound applies
LOW_ACCURACY_THRESHOLD: float = 50.0

# Largest heading change per update while the device is level, degrees
LEVEL_MAX_STEP_DEG: float = 10.0

# Largest heading change per update at shallow tilt, degrees
SHALLOW_TILT_MAX_STEP_DEG: float = 15.0

# Tilt below which the shallow-tilt bound applies, degrees
SHALLOW_TILT_DEG: float = 25.0


class StepLimiter:
    """Suppresses visible spinning from noisy headings.

    Near level, or with a weak signal, small field noise turns into large
    heading swings. The limiter caps how far the smoothed heading may move
    in a single update.
    """

    @staticmethod
    def max_step(
        accuracy: float,
        is_level: Optional[bool],
        tilt_deg: Optional[float],
    ) -> float:
        """Return the allowed heading change for this update, degrees."""
        step: float = (
            LOW_ACCURACY_MAX_STEP_DEG
            if accuracy < LOW_ACCURACY_THRESHOLD
            else MAX_STEP_DEG
        )
        if is_level is True:
            step = min(step, LEVEL_MAX_STEP_DEG)
        elif tilt_deg is not None and tilt_deg < SHALLOW_TILT_DEG:
            step = min(step, SHALLOW_TILT_MAX_STEP_DEG)
        return step

    @staticmethod
    def limit(prev_deg: float, new_deg: float, max_step_deg: float) -> float:
        """Return new_deg, or prev_deg moved max_step_deg toward it."""
        delta: float = Angles.shortest_delta(prev_deg, new_deg)
        if abs(delta) > max_step_deg:
            return Angles.normalize(prev_deg + math.copysign(max_step_deg, delta))
        return new_deg
