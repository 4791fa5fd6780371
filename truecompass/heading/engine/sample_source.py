################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Interface of the external collaborator that pushes raw sensor samples."""

from __future__ import annotations

from typing import Callable
from typing import Protocol

from truecompass.heading.heading_types.accel_sample import AccelSample
from truecompass.heading.heading_types.mag_sample import MagSample


MagCallback = Callable[[MagSample], None]
AccelCallback = Callable[[AccelSample], None]


class SampleSourceError(Exception):
    """Raised by a sample source that cannot start delivering samples."""


class SampleListener(Protocol):
    """Registration handle returned by a sample source."""

    def remove(self) -> None:
        """Detach the callback; further samples are not delivered."""


class SampleSource(Protocol):
    """Pushes raw magnetometer and accelerometer samples synchronously.

    The source owns timing: it invokes listeners once per sample at the
    configured interval. Capability queries and listener registration may
    raise SampleSourceError.
    """

    def has_magnetometer(self) -> bool:
        """Return True if magnetometer samples can be delivered."""

    def has_accelerometer(self) -> bool:
        """Return True if accelerometer samples can be delivered."""

    def set_update_interval(self, interval_ms: int) -> None:
        """Set the sample interval for both sensors, milliseconds."""

    def add_mag_listener(self, callback: MagCallback) -> SampleListener:
        """Register a magnetometer callback."""

    def add_accel_listener(self, callback: AccelCallback) -> SampleListener:
        """Register an accelerometer callback."""
