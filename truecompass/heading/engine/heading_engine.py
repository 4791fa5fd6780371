################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Per-sample heading pipeline."""

from __future__ import annotations

import logging
import math
from typing import Optional

from truecompass.heading.config.heading_params import HeadingParams
from truecompass.heading.engine.engine_state import EngineState
from truecompass.heading.heading_types.accel_sample import AccelSample
from truecompass.heading.heading_types.heading_estimate import HeadingEstimate
from truecompass.heading.heading_types.mag_sample import MagSample
from truecompass.heading.heading_types.tilt_reading import TiltReading
from truecompass.heading.math_utils.angles import Angles
from truecompass.heading.math_utils.stats import Statistics
from truecompass.heading.models.accel_conditioner import AccelConditioner
from truecompass.heading.models.accuracy_scorer import MAGNITUDE_EMA_ALPHA
from truecompass.heading.models.accuracy_scorer import AccuracyReport
from truecompass.heading.models.accuracy_scorer import AccuracyScorer
from truecompass.heading.models.cardinal import CardinalDirection
from truecompass.heading.models.cardinal import cardinal_direction
from truecompass.heading.models.circular_smoother import CircularSmoother
from truecompass.heading.models.heading_resolver import HeadingResolver
from truecompass.heading.models.heading_resolver import ResolvedHeading
from truecompass.heading.models.rotation_accumulator import RotationAccumulator
from truecompass.heading.models.step_limiter import StepLimiter


_LOG: logging.Logger = logging.getLogger(__name__)


class HeadingEngine:
    """Turns raw sensor samples into heading estimates.

    Responsibility:
        Run accel conditioning, heading resolution, circular smoothing,
        accuracy scoring, step limiting and rotation accumulation for one
        subscription.

    Inputs/outputs:
        - Inputs: AccelSample and MagSample in arrival order.
        - Outputs: one HeadingEstimate per accepted MagSample.

    Determinism and edge cases:
        - Accelerometer samples only update the conditioned gravity vector.
        - Non-finite or zero-length samples are skipped; the state and the
          last estimate are left untouched.
        - No exception escapes update_accel() or update_mag() for sample
          data.
    """

    def __init__(self, params: HeadingParams) -> None:
        params.validate()
        self._params: HeadingParams = params
        self._state: EngineState = EngineState()

    @property
    def params(self) -> HeadingParams:
        return self._params

    @property
    def state(self) -> EngineState:
        """Return the mutable engine state."""

        return self._state

    @property
    def current_estimate(self) -> Optional[HeadingEstimate]:
        """Return the last emitted estimate, or None before the first one."""

        return self._state.last_estimate

    def reset(self) -> None:
        """Discard all history."""

        self._state = EngineState()

    def update_accel(self, sample: AccelSample) -> bool:
        """Condition an accelerometer sample.

        Returns:
            True if the sample was accepted
        """

        magnitude: float = sample.magnitude()
        if not sample.is_finite() or not math.isfinite(magnitude) or magnitude == 0.0:
            _LOG.debug(
                "Skipping accel sample at %d, not a usable vector", sample.t_meas_ns
            )
            return False

        self._state.conditioned_accel = AccelConditioner.condition(
            self._state.conditioned_accel, sample
        )
        return True

    def update_mag(self, sample: MagSample) -> Optional[HeadingEstimate]:
        """Process a magnetometer sample and return the new estimate.

        Returns:
            The estimate, or None when the sample was skipped
        """

        if not sample.is_finite():
            _LOG.debug("Skipping mag sample at %d, non-finite", sample.t_meas_ns)
            return None
        magnitude: float = sample.magnitude()
        if not math.isfinite(magnitude) or magnitude == 0.0:
            _LOG.debug("Skipping mag sample at %d, unusable field", sample.t_meas_ns)
            return None

        state: EngineState = self._state

        resolved: ResolvedHeading = HeadingResolver.resolve(
            sample,
            state.conditioned_accel,
            self._params.use_cross_product,
            self._params.axis_flip_ew,
        )
        if not math.isfinite(resolved.raw_heading_deg):
            _LOG.debug("Skipping mag sample at %d, no heading", sample.t_meas_ns)
            return None

        smoothed: float = CircularSmoother.update(
            state.heading_window, resolved.raw_heading_deg
        )

        state.ema_magnitude_ut = Statistics.ema(
            state.ema_magnitude_ut, magnitude, MAGNITUDE_EMA_ALPHA
        )
        state.magnitude_history.append(magnitude)

        tilt: Optional[TiltReading] = resolved.tilt
        tilt_deg: Optional[float] = tilt.tilt_deg if tilt is not None else None
        is_level: Optional[bool] = tilt.is_level if tilt is not None else None

        report: AccuracyReport = AccuracyScorer.score(
            state.ema_magnitude_ut,
            state.magnitude_history,
            tilt_deg,
            state.displayed_accuracy,
        )
        state.displayed_accuracy = report.displayed

        prev: Optional[float] = state.last_heading_deg
        heading: float = smoothed
        if prev is not None:
            max_step: float = StepLimiter.max_step(report.displayed, is_level, tilt_deg)
            heading = StepLimiter.limit(prev, smoothed, max_step)

        state.rotation_deg = RotationAccumulator.advance(
            state.rotation_deg, prev, heading
        )
        state.last_heading_deg = heading

        direction: CardinalDirection = cardinal_direction(heading)
        estimate: HeadingEstimate = HeadingEstimate(
            heading_deg=Angles.round_heading(heading),
            raw_heading_deg=resolved.raw_heading_deg,
            accuracy=_round_accuracy(report.displayed),
            is_calibrated=report.is_calibrated,
            cardinal_name=direction.name,
            cardinal_abbr=direction.abbr,
            rotation_deg=state.rotation_deg,
            roll_deg=tilt.roll_deg if tilt is not None else None,
            pitch_deg=tilt.pitch_deg if tilt is not None else None,
            tilt_deg=tilt_deg,
            is_level=is_level,
            mag_x=sample.x,
            mag_y=sample.y,
            mag_z=sample.z,
            t_meas_ns=sample.t_meas_ns,
        )
        state.last_estimate = estimate
        return estimate


def simulated_estimate(heading_deg: float) -> HeadingEstimate:
    """Return the fixed, fully calibrated estimate used without a sensor."""

    direction: CardinalDirection = cardinal_direction(Angles.normalize(heading_deg))
    return HeadingEstimate(
        heading_deg=Angles.round_heading(heading_deg),
        raw_heading_deg=Angles.normalize(heading_deg),
        accuracy=100,
        is_calibrated=True,
        cardinal_name=direction.name,
        cardinal_abbr=direction.abbr,
        rotation_deg=heading_deg,
        roll_deg=0.0,
        pitch_deg=0.0,
        tilt_deg=0.0,
        is_level=True,
    )


def _round_accuracy(accuracy: float) -> int:
    """Round half up and clamp to [0, 100]."""

    rounded: int = int(accuracy + 0.5)
    return max(0, min(100, rounded))
