################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""User-facing calibration messaging derived from accuracy and progress."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


# Accuracy below which the compass needs calibration
NEEDS_CALIBRATION_BELOW: float = 30.0

# Accuracy below which calibration should continue
KEEP_CALIBRATING_BELOW: float = 60.0

# Accuracy below which calibration is almost complete
ALMOST_THERE_BELOW: float = 80.0

# Accuracy above which the calibration prompt may be dismissed
DONE_ABOVE: float = 70.0

# Setup progress below which the interference tip is shown, percent
SETUP_TIP_BELOW: float = 30.0

# Low-accuracy hint thresholds
HINT_SHOW_BELOW: float = 40.0
HINT_HIDE_ABOVE: float = 60.0

SETUP_TIP: str = "Tip: Move away from metal objects and electronics"
LOW_ACCURACY_HINT: str = "Move away from metal objects"


class GuidanceLevel(enum.Enum):
    NEEDS_CALIBRATION = "needs_calibration"
    KEEP_CALIBRATING = "keep_calibrating"
    ALMOST_THERE = "almost_there"
    WELL_CALIBRATED = "well_calibrated"


@dataclass(frozen=True, slots=True)
class CalibrationGuidance:
    """Message shown while the user calibrates."""

    level: GuidanceLevel
    title: str
    message: str
    is_done: bool


_MESSAGES: dict[GuidanceLevel, tuple[str, str]] = {
    GuidanceLevel.NEEDS_CALIBRATION: (
        "Compass Needs Calibration",
        "Move your device in a figure-8 pattern to calibrate the compass.",
    ),
    GuidanceLevel.KEEP_CALIBRATING: (
        "Keep Calibrating",
        "Continue moving your device in a figure-8 pattern.",
    ),
    GuidanceLevel.ALMOST_THERE: (
        "Almost There!",
        "A few more figure-8 movements should do it.",
    ),
    GuidanceLevel.WELL_CALIBRATED: (
        "Well Calibrated!",
        "Your compass is now ready for accurate readings.",
    ),
}


def calibration_guidance(accuracy: float) -> CalibrationGuidance:
    """Return the calibration message for a display accuracy."""

    level: GuidanceLevel
    if accuracy < NEEDS_CALIBRATION_BELOW:
        level = GuidanceLevel.NEEDS_CALIBRATION
    elif accuracy < KEEP_CALIBRATING_BELOW:
        level = GuidanceLevel.KEEP_CALIBRATING
    elif accuracy < ALMOST_THERE_BELOW:
        level = GuidanceLevel.ALMOST_THERE
    else:
        level = GuidanceLevel.WELL_CALIBRATED

    title, message = _MESSAGES[level]
    return CalibrationGuidance(
        level=level,
        title=title,
        message=message,
        is_done=accuracy > DONE_ABOVE,
    )


def setup_tip(progress: float) -> Optional[str]:
    """Return the interference tip while setup progress is low."""

    if progress < SETUP_TIP_BELOW:
        return SETUP_TIP
    return None


class LowAccuracyHint:
    """Hysteresis flag for the low-accuracy banner.

    The banner appears once accuracy drops below 40 and stays until accuracy
    rises above 60. Values in between keep the previous state.
    """

    def __init__(self) -> None:
        self._visible: bool = False

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def text(self) -> Optional[str]:
        return LOW_ACCURACY_HINT if self._visible else None

    def update(self, accuracy: float) -> bool:
        """Fold in a new accuracy and return whether the hint is shown."""
        if accuracy < HINT_SHOW_BELOW:
            self._visible = True
        elif accuracy > HINT_HIDE_ABOVE:
            self._visible = False
        return self._visible

    def reset(self) -> None:
        self._visible = False
