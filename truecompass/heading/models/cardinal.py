################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Heading to compass-point labels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class CardinalDirection:
    """One 45 degree compass sector."""

    name: str
    abbr: str
    min_deg: float
    max_deg: float


NORTH: CardinalDirection = CardinalDirection("North", "N", 337.5, 22.5)

CARDINAL_DIRECTIONS: Tuple[CardinalDirection, ...] = (
    NORTH,
    CardinalDirection("Northeast", "NE", 22.5, 67.5),
    CardinalDirection("East", "E", 67.5, 112.5),
    CardinalDirection("Southeast", "SE", 112.5, 157.5),
    CardinalDirection("South", "S", 157.5, 202.5),
    CardinalDirection("Southwest", "SW", 202.5, 247.5),
    CardinalDirection("West", "W", 247.5, 292.5),
    CardinalDirection("Northwest", "NW", 292.5, 337.5),
)


def cardinal_direction(heading_deg: float) -> CardinalDirection:
    """Return the compass point for a heading in [0, 360).

    North spans the closed wrap interval [337.5, 360) + [0, 22.5] and is
    tested first; every other sector is half-open [min, max). So 22.5 maps
    to North and 67.5 to East.
    """

    if heading_deg >= NORTH.min_deg or heading_deg <= NORTH.max_deg:
        return NORTH
    for direction in CARDINAL_DIRECTIONS[1:]:
        if direction.min_deg <= heading_deg < direction.max_deg:
            return direction
    return NORTH
