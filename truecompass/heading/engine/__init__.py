################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from truecompass.heading.engine.engine_state import EngineState
from truecompass.heading.engine.heading_engine import HeadingEngine
from truecompass.heading.engine.heading_engine import simulated_estimate
from truecompass.heading.engine.sample_source import SampleListener
from truecompass.heading.engine.sample_source import SampleSource
from truecompass.heading.engine.sample_source import SampleSourceError
from truecompass.heading.engine.subscription import HeadingSubscription
from truecompass.heading.engine.subscription import start_heading_subscription


__all__ = [
    "EngineState",
    "HeadingEngine",
    "HeadingSubscription",
    "SampleListener",
    "SampleSource",
    "SampleSourceError",
    "simulated_estimate",
    "start_heading_subscription",
]
