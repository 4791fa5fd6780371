################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Guided calibration flow wired to a live heading subscription."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Callable
from typing import Optional

from truecompass.calibration.calibration_params import CalibrationParams
from truecompass.calibration.calibration_tracker import CalibrationPhase
from truecompass.calibration.calibration_tracker import CalibrationProgress
from truecompass.calibration.calibration_tracker import CalibrationTracker
from truecompass.heading.config.heading_params import HeadingParams
from truecompass.heading.engine.sample_source import SampleSource
from truecompass.heading.engine.subscription import HeadingSubscription
from truecompass.heading.engine.subscription import StatusCallback
from truecompass.heading.engine.subscription import start_heading_subscription
from truecompass.heading.heading_types.compass_status import CompassStatus
from truecompass.heading.heading_types.heading_estimate import HeadingEstimate
from truecompass.heading.heading_types.mag_sample import MagSample


_LOG: logging.Logger = logging.getLogger(__name__)


ProgressCallback = Callable[[CalibrationProgress], None]
CompleteCallback = Callable[[bool], None]


class CalibrationSession:
    """One run of the setup calibration flow.

    The session owns a heading subscription configured with cross-product
    fusion and no axis flip. Raw magnetometer values carried on each estimate
    feed the coverage tracker; once coverage is sufficient, the estimates
    themselves feed the axis check. on_complete fires once with the flip
    decision, after which the subscription is disposed.
    """

    def __init__(
        self,
        source: Optional[SampleSource],
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        on_unavailable: Optional[StatusCallback] = None,
        params: Optional[CalibrationParams] = None,
        update_interval_ms: int = 100,
    ) -> None:
        self._on_progress: Optional[ProgressCallback] = on_progress
        self._on_complete: Optional[CompleteCallback] = on_complete
        self._on_unavailable: Optional[StatusCallback] = on_unavailable

        heading_params: HeadingParams = HeadingParams(
            update_interval_ms=update_interval_ms,
            axis_flip_ew=False,
            use_cross_product=True,
        )
        self._tracker: CalibrationTracker = CalibrationTracker(
            params, use_cross_product=heading_params.use_cross_product
        )
        self._last_progress: CalibrationProgress = self._tracker.start()
        self._subscription: Optional[HeadingSubscription] = None
        self._subscription = start_heading_subscription(
            source,
            heading_params,
            self._handle_estimate,
            self._handle_unavailable,
        )

    @property
    def tracker(self) -> CalibrationTracker:
        return self._tracker

    @property
    def last_progress(self) -> CalibrationProgress:
        """Return the most recent progress snapshot."""
        return self._last_progress

    @property
    def is_complete(self) -> bool:
        return self._tracker.phase is CalibrationPhase.COMPLETE

    @property
    def axis_flip_ew(self) -> Optional[bool]:
        """Return the flip decision, None until the session completes."""
        return self._tracker.axis_flip_required

    def dispose(self) -> None:
        """Stop the underlying heading subscription."""
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None

    def __enter__(self) -> CalibrationSession:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.dispose()

    def _handle_estimate(self, estimate: HeadingEstimate) -> None:
        phase: CalibrationPhase = self._tracker.phase
        if phase is CalibrationPhase.COLLECTING:
            if not estimate.has_raw_mag() or estimate.t_meas_ns is None:
                return
            sample: MagSample = MagSample(
                t_meas_ns=estimate.t_meas_ns,
                x=float(estimate.mag_x),  # type: ignore[arg-type]
                y=float(estimate.mag_y),  # type: ignore[arg-type]
                z=float(estimate.mag_z),  # type: ignore[arg-type]
            )
            self._report(self._tracker.add_mag_sample(sample))
        elif phase is CalibrationPhase.AXIS_CHECK:
            self._report(self._tracker.add_heading_sample(estimate))

    def _report(self, progress: CalibrationProgress) -> None:
        self._last_progress = progress
        if self._on_progress is not None:
            self._on_progress(progress)

        if progress.is_complete:
            flip: bool = bool(progress.axis_flip_required)
            _LOG.info("Calibration session finished, axis_flip_ew=%s", flip)
            self.dispose()
            if self._on_complete is not None:
                self._on_complete(flip)

    def _handle_unavailable(self, status: CompassStatus) -> None:
        _LOG.info("Calibration cannot run: %s", status.reason)
        if self._on_unavailable is not None:
            self._on_unavailable(status)
