################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Sample source driven by explicit push calls."""

from __future__ import annotations

import logging
from typing import Callable
from typing import Generic
from typing import Iterable
from typing import List
from typing import Optional
from typing import TypeVar

from truecompass.heading.engine.sample_source import AccelCallback
from truecompass.heading.engine.sample_source import MagCallback
from truecompass.heading.engine.sample_source import SampleSourceError
from truecompass.heading.heading_types.accel_sample import AccelSample
from truecompass.heading.heading_types.mag_sample import MagSample


_LOG: logging.Logger = logging.getLogger(__name__)


T = TypeVar("T")


class _ListenerHandle(Generic[T]):
    def __init__(
        self, listeners: List[Callable[[T], None]], callback: Callable[[T], None]
    ) -> None:
        self._listeners: List[Callable[[T], None]] = listeners
        self._callback: Optional[Callable[[T], None]] = callback

    def remove(self) -> None:
        if self._callback is None:
            return
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)
        self._callback = None


class ReplaySampleSource:
    """In-memory sample source for replay, simulation and tests.

    Samples are delivered synchronously to every registered listener in
    registration order. Removing a listener from inside a callback is safe.

    Args:
        has_mag: Report a magnetometer
        has_accel: Report an accelerometer
        fail_with: Reason raised as SampleSourceError when a magnetometer
            listener is registered
    """

    def __init__(
        self,
        has_mag: bool = True,
        has_accel: bool = True,
        fail_with: Optional[str] = None,
    ) -> None:
        self._has_mag: bool = has_mag
        self._has_accel: bool = has_accel
        self._fail_with: Optional[str] = fail_with
        self._mag_listeners: List[MagCallback] = []
        self._accel_listeners: List[AccelCallback] = []
        self._update_interval_ms: Optional[int] = None

    @property
    def update_interval_ms(self) -> Optional[int]:
        """Return the last interval requested by a subscriber."""
        return self._update_interval_ms

    @property
    def mag_listener_count(self) -> int:
        return len(self._mag_listeners)

    @property
    def accel_listener_count(self) -> int:
        return len(self._accel_listeners)

    def has_magnetometer(self) -> bool:
        return self._has_mag

    def has_accelerometer(self) -> bool:
        return self._has_accel

    def set_update_interval(self, interval_ms: int) -> None:
        self._update_interval_ms = interval_ms

    def add_mag_listener(self, callback: MagCallback) -> _ListenerHandle[MagSample]:
        if self._fail_with is not None:
            raise SampleSourceError(self._fail_with)
        if not self._has_mag:
            raise SampleSourceError("magnetometer not present")
        self._mag_listeners.append(callback)
        return _ListenerHandle(self._mag_listeners, callback)

    def add_accel_listener(
        self, callback: AccelCallback
    ) -> _ListenerHandle[AccelSample]:
        if not self._has_accel:
            raise SampleSourceError("accelerometer not present")
        self._accel_listeners.append(callback)
        return _ListenerHandle(self._accel_listeners, callback)

    def push_mag(self, sample: MagSample) -> None:
        """Deliver one magnetometer sample.

        Raises:
            ValueError if the sample fails validation
        """
        sample.validate()
        for callback in list(self._mag_listeners):
            callback(sample)

    def push_accel(self, sample: AccelSample) -> None:
        """Deliver one accelerometer sample.

        Raises:
            ValueError if the sample fails validation
        """
        sample.validate()
        for callback in list(self._accel_listeners):
            callback(sample)

    def replay(
        self,
        mag_samples: Iterable[MagSample],
        accel_samples: Optional[Iterable[AccelSample]] = None,
    ) -> int:
        """Deliver samples in timestamp order and return the count delivered.

        Accelerometer samples stamped at or before a magnetometer sample are
        delivered first.
        """
        accel_pending: List[AccelSample] = sorted(
            accel_samples or [], key=lambda sample: sample.t_meas_ns
        )
        delivered: int = 0
        index: int = 0
        for mag in mag_samples:
            while (
                index < len(accel_pending)
                and accel_pending[index].t_meas_ns <= mag.t_meas_ns
            ):
                self.push_accel(accel_pending[index])
                index += 1
                delivered += 1
            self.push_mag(mag)
            delivered += 1
        while index < len(accel_pending):
            self.push_accel(accel_pending[index])
            index += 1
            delivered += 1
        _LOG.debug("Replayed %d samples", delivered)
        return delivered
