################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Mutable per-subscription state of the heading engine."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Deque
from typing import Optional

from truecompass.heading.heading_types.heading_estimate import HeadingEstimate
from truecompass.heading.heading_types.tilt_reading import ConditionedAccel
from truecompass.heading.models.accuracy_scorer import make_magnitude_history
from truecompass.heading.models.circular_smoother import make_window


@dataclass
class EngineState:
    """State owned by exactly one heading subscription."""

    # Most recent raw headings for the circular mean, at most 8
    heading_window: Deque[float] = field(default_factory=make_window)

    # Most recent field magnitudes in microtesla, at most 60
    magnitude_history: Deque[float] = field(default_factory=make_magnitude_history)

    # EMA of the field magnitude in microtesla, None before the first sample
    ema_magnitude_ut: Optional[float] = None

    # Smoothed accuracy shown to the consumer, starts from zero
    displayed_accuracy: float = 0.0

    # Last step-limited heading in degrees, None before the first sample
    last_heading_deg: Optional[float] = None

    # Continuous rotation angle in degrees
    rotation_deg: float = 0.0

    # Low-pass filtered gravity direction, None until the first accel sample
    conditioned_accel: Optional[ConditionedAccel] = None

    # Last estimate emitted from this state
    last_estimate: Optional[HeadingEstimate] = None
