################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from truecompass.heading.heading_types.accel_sample import AccelSample
from truecompass.heading.heading_types.compass_status import CompassStatus
from truecompass.heading.heading_types.compass_status import UnavailableKind
from truecompass.heading.heading_types.heading_estimate import HeadingEstimate
from truecompass.heading.heading_types.mag_sample import MagSample
from truecompass.heading.heading_types.tilt_reading import ConditionedAccel
from truecompass.heading.heading_types.tilt_reading import TiltReading


__all__ = [
    "AccelSample",
    "CompassStatus",
    "ConditionedAccel",
    "HeadingEstimate",
    "MagSample",
    "TiltReading",
    "UnavailableKind",
]
