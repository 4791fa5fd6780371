################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the step limiter and rotation accumulator."""

from __future__ import annotations

import pytest

from truecompass.heading.models.rotation_accumulator import RotationAccumulator
from truecompass.heading.models.step_limiter import StepLimiter


def test_max_step_accurate_without_tilt() -> None:
    assert StepLimiter.max_step(80.0, None, None) == 45.0


def test_max_step_low_accuracy() -> None:
    assert StepLimiter.max_step(30.0, None, None) == 20.0
    assert StepLimiter.max_step(30.0, False, 40.0) == 20.0


def test_max_step_level() -> None:
    assert StepLimiter.max_step(80.0, True, 3.0) == 10.0
    assert StepLimiter.max_step(30.0, True, 3.0) == 10.0


def test_max_step_shallow_tilt() -> None:
    assert StepLimiter.max_step(80.0, False, 20.0) == 15.0
    assert StepLimiter.max_step(80.0, False, 30.0) == 45.0


def test_limit_caps_large_jump() -> None:
    assert StepLimiter.limit(0.0, 90.0, 45.0) == pytest.approx(45.0)
    assert StepLimiter.limit(0.0, 270.0, 45.0) == pytest.approx(315.0)


def test_limit_wraps_through_north() -> None:
    assert StepLimiter.limit(350.0, 30.0, 10.0) == pytest.approx(0.0)


def test_limit_passes_small_step() -> None:
    assert StepLimiter.limit(10.0, 15.0, 10.0) == 15.0


@pytest.mark.parametrize(
    ("is_level", "expected"),
    [
        (False, 45.0),
        (True, 10.0),
    ],
)
def test_limited_jump_from_north(is_level: bool, expected: float) -> None:
    max_step = StepLimiter.max_step(70.0, is_level, 30.0)

    assert StepLimiter.limit(0.0, 170.0, max_step) == pytest.approx(expected)


def test_rotation_starts_at_first_heading() -> None:
    assert RotationAccumulator.advance(0.0, None, 123.0) == 123.0


def test_rotation_crosses_north_forward() -> None:
    assert RotationAccumulator.advance(350.0, 350.0, 10.0) == pytest.approx(370.0)


def test_rotation_crosses_north_backward() -> None:
    assert RotationAccumulator.advance(10.0, 10.0, 350.0) == pytest.approx(-10.0)
