################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from truecompass.sim.replay_source import ReplaySampleSource
from truecompass.sim.synthetic import PRESET_HEADINGS
from truecompass.sim.synthetic import held_field_samples
from truecompass.sim.synthetic import level_accel_samples
from truecompass.sim.synthetic import rotating_field_samples
from truecompass.sim.synthetic import sphere_field_samples


__all__ = [
    "PRESET_HEADINGS",
    "ReplaySampleSource",
    "held_field_samples",
    "level_accel_samples",
    "rotating_field_samples",
    "sphere_field_samples",
]
