################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Scoped heading subscriptions over a sample source."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Callable
from typing import Optional

from truecompass.heading.config.heading_params import HeadingParams
from truecompass.heading.engine.heading_engine import HeadingEngine
from truecompass.heading.engine.heading_engine import simulated_estimate
from truecompass.heading.engine.sample_source import SampleListener
from truecompass.heading.engine.sample_source import SampleSource
from truecompass.heading.engine.sample_source import SampleSourceError
from truecompass.heading.heading_types.accel_sample import AccelSample
from truecompass.heading.heading_types.compass_status import REASON_INIT_FAILED
from truecompass.heading.heading_types.compass_status import (
    REASON_NO_MAGNETOMETER,
)
from truecompass.heading.heading_types.compass_status import CompassStatus
from truecompass.heading.heading_types.heading_estimate import HeadingEstimate
from truecompass.heading.heading_types.mag_sample import MagSample


_LOG: logging.Logger = logging.getLogger(__name__)


EstimateCallback = Callable[[HeadingEstimate], None]
StatusCallback = Callable[[CompassStatus], None]


class HeadingSubscription:
    """Disposal handle for one live estimate stream.

    Each subscription owns a private HeadingEngine; nothing is shared with
    other subscriptions, even on the same source. dispose() detaches the
    source listeners and drops the engine. It is idempotent, and the handle
    is also a context manager that disposes on exit.
    """

    def __init__(
        self,
        params: HeadingParams,
        on_estimate: EstimateCallback,
        on_unavailable: Optional[StatusCallback] = None,
    ) -> None:
        self._params: HeadingParams = params
        self._on_estimate: EstimateCallback = on_estimate
        self._on_unavailable: Optional[StatusCallback] = on_unavailable
        self._engine: Optional[HeadingEngine] = HeadingEngine(params)
        self._mag_listener: Optional[SampleListener] = None
        self._accel_listener: Optional[SampleListener] = None
        self._status: CompassStatus = CompassStatus.ok()
        self._current: Optional[HeadingEstimate] = None
        self._disposed: bool = False

    @property
    def params(self) -> HeadingParams:
        return self._params

    @property
    def status(self) -> CompassStatus:
        """Return the availability of the estimate stream."""

        return self._status

    @property
    def current_estimate(self) -> Optional[HeadingEstimate]:
        """Return the most recent estimate, or None before the first one."""

        return self._current

    @property
    def is_active(self) -> bool:
        """Return True while samples are being processed."""

        return not self._disposed and self._status.available

    def dispose(self) -> None:
        """Detach from the sample source and release the engine."""

        if self._disposed:
            return
        self._disposed = True
        self._remove_listeners()
        self._engine = None
        _LOG.info("Heading subscription disposed")

    def __enter__(self) -> HeadingSubscription:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.dispose()

    def _start(self, source: Optional[SampleSource]) -> None:
        if self._params.simulated_heading_deg is not None:
            _LOG.info(
                "Simulated heading %.1f deg, sensors bypassed",
                self._params.simulated_heading_deg,
            )
            self._emit(simulated_estimate(self._params.simulated_heading_deg))
            return

        if source is None:
            self._fail(REASON_NO_MAGNETOMETER)
            return

        try:
            if not source.has_magnetometer():
                self._fail(REASON_NO_MAGNETOMETER)
                return

            source.set_update_interval(self._params.update_interval_ms)

            if self._accelerometer_available(source):
                self._accel_listener = source.add_accel_listener(self._handle_accel)

            self._mag_listener = source.add_mag_listener(self._handle_mag)
        except SampleSourceError as exc:
            self._remove_listeners()
            self._fail(str(exc) or REASON_INIT_FAILED)
            return

        _LOG.info(
            "Heading subscription started, interval %d ms, accel %s",
            self._params.update_interval_ms,
            "on" if self._accel_listener is not None else "off",
        )

    @staticmethod
    def _accelerometer_available(source: SampleSource) -> bool:
        try:
            return source.has_accelerometer()
        except SampleSourceError as exc:
            _LOG.info("Accelerometer unavailable, %s", exc)
            return False

    def _handle_accel(self, sample: AccelSample) -> None:
        if self._engine is None:
            return
        self._engine.update_accel(sample)

    def _handle_mag(self, sample: MagSample) -> None:
        if self._engine is None:
            return
        estimate: Optional[HeadingEstimate] = self._engine.update_mag(sample)
        if estimate is not None:
            self._emit(estimate)

    def _emit(self, estimate: HeadingEstimate) -> None:
        self._current = estimate
        self._on_estimate(estimate)

    def _fail(self, reason: str) -> None:
        _LOG.info("Compass unavailable: %s", reason)
        self._status = CompassStatus.unavailable(reason)
        self._engine = None
        if self._on_unavailable is not None:
            self._on_unavailable(self._status)

    def _remove_listeners(self) -> None:
        if self._mag_listener is not None:
            self._mag_listener.remove()
            self._mag_listener = None
        if self._accel_listener is not None:
            self._accel_listener.remove()
            self._accel_listener = None


def start_heading_subscription(
    source: Optional[SampleSource],
    params: HeadingParams,
    on_estimate: EstimateCallback,
    on_unavailable: Optional[StatusCallback] = None,
) -> HeadingSubscription:
    """Start a heading subscription and return its disposal handle.

    Args:
        source: Sample source, or None when no physical sensor exists
        params: Subscription configuration, validated before anything starts
        on_estimate: Called with every emitted estimate
        on_unavailable: Called once if the compass cannot run

    Raises:
        HeadingParamsError: If params are invalid
    """

    params.validate()
    subscription: HeadingSubscription = HeadingSubscription(
        params, on_estimate, on_unavailable
    )
    subscription._start(source)
    return subscription
