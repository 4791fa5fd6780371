################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Circular moving average over recent raw headings."""

from __future__ import annotations

from collections import deque
from typing import Deque

from truecompass.heading.math_utils.angles import Angles


# Number of raw headings averaged by the smoother
SMOOTHING_WINDOW_SIZE: int = 8


def make_window(size: int = SMOOTHING_WINDOW_SIZE) -> Deque[float]:
    """Return an empty heading window that evicts its oldest entry when full."""

    if size <= 0:
        raise ValueError("size must be positive")
    return deque(maxlen=size)


class CircularSmoother:
    """Wrap-safe moving average of headings.

    Averaging sines and cosines keeps [350, 10] centered on 0 instead of
    180.
    """

    @staticmethod
    def update(window: Deque[float], heading_deg: float) -> float:
        """Append a heading and return the circular mean of the window."""
        window.append(heading_deg)
        return Angles.circular_mean(window)
