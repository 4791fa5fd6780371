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
class MagSample:
    """Raw magnetometer sample pushed by a sample source.

    Data contract:
        t_meas_ns:
            Measurement timestamp in int nanoseconds since an arbitrary epoch
        x, y, z:
            Magnetic field components in the device frame, microtesla

    Determinism and edge cases:
        - Samples are immutable and consumed once by each subscription
        - Non-finite or zero-length vectors are transient faults; the engine
          skips them instead of raising
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
        """Return the field magnitude in microtesla."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "t_meas_ns": self.t_meas_ns,
            "x": self.x,
            "y": self.y,
            "z": self.z,
        }
