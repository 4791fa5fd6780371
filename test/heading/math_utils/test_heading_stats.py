################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the statistics helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest

from truecompass.heading.math_utils import vec3
from truecompass.heading.math_utils.stats import Statistics


def test_sample_stddev_uses_n_minus_one() -> None:
    values = [40.0, 60.0]

    assert Statistics.sample_stddev(values) == pytest.approx(math.sqrt(200.0))


def test_population_stddev_uses_n() -> None:
    values = [40.0, 60.0] * 10

    assert Statistics.population_stddev(values) == pytest.approx(10.0)


def test_stddev_of_short_sequences() -> None:
    assert Statistics.sample_stddev([]) == 0.0
    assert Statistics.sample_stddev([45.0]) == 0.0
    assert Statistics.population_stddev([]) == 0.0


def test_ema_seeds_then_blends() -> None:
    seeded = Statistics.ema(None, 50.0, 0.1)
    blended = Statistics.ema(seeded, 60.0, 0.1)

    assert seeded == 50.0
    assert blended == pytest.approx(51.0)


def test_normalize_or_unit_scale_keeps_zero_finite() -> None:
    zero = np.zeros(3)

    result = vec3.normalize_or_unit_scale(zero)

    assert np.all(np.isfinite(result))
    assert vec3.norm(result) == 0.0


def test_normalize_or_unit_scale_survives_large_components() -> None:
    huge = vec3.as_vector([1e300, 1e300, 1e300], "huge")

    result = vec3.normalize_or_unit_scale(huge)

    np.testing.assert_allclose(result, [1.0 / math.sqrt(3.0)] * 3)
    assert vec3.norm(result) == pytest.approx(1.0)


def test_cross_follows_right_hand_rule() -> None:
    x = vec3.as_vector([1.0, 0.0, 0.0], "x")
    y = vec3.as_vector([0.0, 1.0, 0.0], "y")

    np.testing.assert_allclose(vec3.cross(x, y), [0.0, 0.0, 1.0])


def test_as_vector_rejects_wrong_shape() -> None:
    with pytest.raises(ValueError):
        vec3.as_vector([1.0, 2.0], "v")
