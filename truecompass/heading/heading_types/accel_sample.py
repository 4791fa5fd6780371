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

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AccelSample:
    """Raw accelerometer sample pushed by a sample source.

    Data contract:
        t_meas_ns:
            Measurement timestamp in int nanoseconds since an arbitrary epoch
        x, y, z:
            Specific force in the device frame, normalized gravity units (g)

    The accelerometer may run at a cadence independent of the magnetometer;
    only the most recent conditioned vector is used for fusion.
    """

    t_meas_ns: int
    x: float
    y: float
    z: float

    def validate(self) -> None:
        """Validate packet fields and raise ValueError on failure."""
        if isinstance(self.t_meas_ns, bool) or not isinstance(self.t_meas_ns, int):
            raise ValueError("t_meas_ns must be int nanoseconds")
        for name, value in (("x", self.x), ("y", self.y), ("z", self.z)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a float")

    def is_finite(self) -> bool:
        """Return True when every component is finite."""
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def magnitude(self) -> float:
        """Return the vector norm in g."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)
