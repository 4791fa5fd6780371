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

from collections import deque
from dataclasses import dataclass
from typing import Deque
from typing import Optional

from truecompass.heading.math_utils.stats import Statistics


# EMA weight for the field magnitude, unitless
MAGNITUDE_EMA_ALPHA: float = 0.1

# EMA weight for the displayed accuracy, unitless
ACCURACY_EMA_ALPHA: float = 0.25

# Number of magnitudes kept for the stability estimate
MAGNITUDE_HISTORY_SIZE: int = 60

# Field magnitudes at or below this are implausible, microtesla
FIELD_MIN_UT: float = 15.0

# Start of the ideal field band, microtesla
FIELD_IDEAL_MIN_UT: float = 30.0

# End of the ideal field band, microtesla
FIELD_IDEAL_MAX_UT: float = 60.0

# Field magnitudes at or above this are implausible, microtesla
FIELD_MAX_UT: float = 90.0

# Score lost per microtesla of magnitude standard deviation
VARIANCE_PENALTY_PER_UT: float = 50.0

# Tilt tolerated before the tilt score decays, degrees
TILT_FREE_DEG: float = 15.0

# Score lost per degree of tilt beyond TILT_FREE_DEG
TILT_PENALTY_PER_DEG: float = 3.0

# Combination weights for field, variance and tilt scores
FIELD_WEIGHT: float = 0.5
VARIANCE_WEIGHT: float = 0.3
TILT_WEIGHT: float = 0.2

# Displayed accuracy above which the compass reports calibrated
CALIBRATED_ACCURACY: float = 60.0


def make_magnitude_history(size: int = MAGNITUDE_HISTORY_SIZE) -> Deque[float]:
    """Return an empty magnitude history with FIFO eviction."""

    if size <= 0:
        raise ValueError("size must be positive")
    return deque(maxlen=size)


@dataclass(frozen=True, slots=True)
class AccuracyReport:
    """Component scores and the combined accuracy for one update."""

    field_score: float
    variance_score: float
    tilt_score: float
    combined: float
    displayed: float

    @property
    def is_calibrated(self) -> bool:
        return self.displayed > CALIBRATED_ACCURACY


class AccuracyScorer:
    """Confidence score for the current heading.

    Responsibility:
        Combine field-strength plausibility, short-term magnitude stability
        and device tilt into a 0-100 score, smoothed for display.

    Inputs/outputs:
        - Inputs: EMA field magnitude, magnitude stddev, optional tilt,
          previous displayed accuracy.
        - Outputs: AccuracyReport.

    Equations:
        field:
            0                            m <= 15 or m >= 90
            100 (m - 15) / 15            15 < m < 30
            100                          30 <= m <= 60
            max(0, 100 - (m - 60) / 30 * 100)   m > 60
        variance:
            max(0, 100 - min(100, 50 σ))
        tilt:
            max(0, 100 - 3 max(0, tilt - 15)), 100 without tilt
        combined:
            0.5 field + 0.3 variance + 0.2 tilt
        displayed:
            0.25 combined + 0.75 previous
    """

    @staticmethod
    def field_score(magnitude_ut: float) -> float:
        """Return the field-strength plausibility score."""
        m: float = magnitude_ut
        if m <= FIELD_MIN_UT or m >= FIELD_MAX_UT:
            return 0.0
        if m < FIELD_IDEAL_MIN_UT:
            return 100.0 * ((m - FIELD_MIN_UT) / (FIELD_IDEAL_MIN_UT - FIELD_MIN_UT))
        if m <= FIELD_IDEAL_MAX_UT:
            return 100.0
        return max(
            0.0,
            100.0
            - ((m - FIELD_IDEAL_MAX_UT) / (FIELD_MAX_UT - FIELD_IDEAL_MAX_UT)) * 100.0,
        )

    @staticmethod
    def variance_score(stddev_ut: float) -> float:
        """Return the magnitude stability score; lower spread scores higher."""
        return max(0.0, 100.0 - min(100.0, stddev_ut * VARIANCE_PENALTY_PER_UT))

    @staticmethod
    def tilt_score(tilt_deg: Optional[float]) -> float:
        """Return the tilt score, 100 when tilt is unknown."""
        if tilt_deg is None:
            return 100.0
        over: float = max(0.0, tilt_deg - TILT_FREE_DEG)
        return max(0.0, 100.0 - over * TILT_PENALTY_PER_DEG)

    @staticmethod
    def combine(field: float, variance: float, tilt: float) -> float:
        """Return the weighted accuracy before display smoothing."""
        return FIELD_WEIGHT * field + VARIANCE_WEIGHT * variance + TILT_WEIGHT * tilt

    @staticmethod
    def score(
        ema_magnitude_ut: float,
        history: Deque[float],
        tilt_deg: Optional[float],
        previous_displayed: float,
    ) -> AccuracyReport:
        """Score one update and smooth it against the previous display value."""
        field: float = AccuracyScorer.field_score(ema_magnitude_ut)
        variance: float = AccuracyScorer.variance_score(
            Statistics.sample_stddev(list(history))
        )
        tilt: float = AccuracyScorer.tilt_score(tilt_deg)
        combined: float = AccuracyScorer.combine(field, variance, tilt)
        displayed: float = Statistics.ema(
            previous_displayed, combined, ACCURACY_EMA_ALPHA
        )
        return AccuracyReport(
            field_score=field,
            variance_score=variance,
            tilt_score=tilt,
            combined=combined,
            displayed=displayed,
        )
