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
from typing import Optional
from typing import Tuple


RegionKey = Tuple[int, int, int]

# Quantization levels per axis
LEVELS_PER_AXIS: int = 3

# Number of distinct region keys
REGION_COUNT: int = LEVELS_PER_AXIS**3


class OrientationRegions:
    """Coarse orientation buckets for calibration coverage.

    Responsibility:
        Map a magnetometer direction to one of 27 buckets so the tracker can
        count how many distinct orientations the user has visited.

    Equations:
        n = v / |v|
        q = clamp(floor((n + 1) * 1.5), 0, 2) per axis

    Determinism and edge cases:
        - A zero-length vector has no direction and maps to None.
        - A component of exactly +1 would quantize to 3 and is clamped to 2.
    """

    @staticmethod
    def quantize(component: float) -> int:
        """Return the bucket index of one unit-vector component."""
        level: int = math.floor((component + 1.0) * (LEVELS_PER_AXIS / 2.0))
        return max(0, min(LEVELS_PER_AXIS - 1, level))

    @staticmethod
    def region_key(x: float, y: float, z: float) -> Optional[RegionKey]:
        """Return the bucket key of a field vector, None for a zero vector."""
        magnitude: float = math.sqrt(x * x + y * y + z * z)
        if magnitude == 0.0 or not math.isfinite(magnitude):
            return None
        return (
            OrientationRegions.quantize(x / magnitude),
            OrientationRegions.quantize(y / magnitude),
            OrientationRegions.quantize(z / magnitude),
        )
