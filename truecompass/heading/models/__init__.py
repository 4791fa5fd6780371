################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from truecompass.heading.models.accel_conditioner import AccelConditioner
from truecompass.heading.models.accuracy_scorer import AccuracyReport
from truecompass.heading.models.accuracy_scorer import AccuracyScorer
from truecompass.heading.models.cardinal import CardinalDirection
from truecompass.heading.models.cardinal import cardinal_direction
from truecompass.heading.models.circular_smoother import CircularSmoother
from truecompass.heading.models.heading_resolver import HeadingResolver
from truecompass.heading.models.heading_resolver import ResolvedHeading
from truecompass.heading.models.rotation_accumulator import RotationAccumulator
from truecompass.heading.models.step_limiter import StepLimiter


__all__ = [
    "AccelConditioner",
    "AccuracyReport",
    "AccuracyScorer",
    "CardinalDirection",
    "CircularSmoother",
    "HeadingResolver",
    "ResolvedHeading",
    "RotationAccumulator",
    "StepLimiter",
    "cardinal_direction",
]
