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

from typing import Optional

from truecompass.heading.math_utils.angles import Angles


class RotationAccumulator:
    """Continuous rotation angle for animation.

    The accumulator starts at the first heading and then integrates the
    shortest signed delta between consecutive limited headings, so a
    350 -> 10 transition adds +20 rather than -340.
    """

    @staticmethod
    def advance(
        accumulated_deg: float,
        prev_heading_deg: Optional[float],
        heading_deg: float,
    ) -> float:
        """Return the accumulator after moving to heading_deg."""
        if prev_heading_deg is None:
            return heading_deg
        return accumulated_deg + Angles.shortest_delta(prev_heading_deg, heading_deg)
