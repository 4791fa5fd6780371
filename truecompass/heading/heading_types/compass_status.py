################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Availability status reported by a heading subscription."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


# Reason reported when the sample source has no magnetometer
REASON_NO_MAGNETOMETER: str = "Magnetometer not available on this device"

# Reason reported when the source fails without a message
REASON_INIT_FAILED: str = "Failed to initialize compass"


class UnavailableKind(enum.Enum):
    """Category of an unavailable status, used to pick consumer messaging."""

    NONE = "none"
    NOT_AVAILABLE = "not_available"
    PERMISSION = "permission"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class CompassStatus:
    """Availability of the estimate stream for one subscription.

    An unavailable status is terminal: it is emitted at most once and
    replaces the estimate stream for the lifetime of the subscription.
    """

    available: bool
    reason: Optional[str] = None
    kind: UnavailableKind = UnavailableKind.NONE

    @staticmethod
    def ok() -> CompassStatus:
        """Return the status of a live subscription."""
        return CompassStatus(available=True)

    @staticmethod
    def unavailable(reason: str) -> CompassStatus:
        """Return a terminal status with a human-readable reason."""
        if not reason:
            reason = REASON_INIT_FAILED
        return CompassStatus(
            available=False, reason=reason, kind=classify_reason(reason)
        )


def classify_reason(reason: str) -> UnavailableKind:
    """Classify a failure reason by its wording."""
    lowered: str = reason.lower()
    if "not available" in lowered:
        return UnavailableKind.NOT_AVAILABLE
    if "permission" in lowered:
        return UnavailableKind.PERMISSION
    return UnavailableKind.ERROR
