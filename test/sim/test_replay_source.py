################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the replay sample source and synthetic generators."""

from __future__ import annotations

import math
from typing import List

import pytest

from truecompass.heading.engine.sample_source import SampleSourceError
from truecompass.heading.heading_types.accel_sample import AccelSample
from truecompass.heading.heading_types.mag_sample import MagSample
from truecompass.heading.models.heading_resolver import HeadingResolver
from truecompass.sim.replay_source import ReplaySampleSource
from truecompass.sim.synthetic import PRESET_HEADINGS
from truecompass.sim.synthetic import level_accel_samples
from truecompass.sim.synthetic import rotating_field_samples
from truecompass.sim.synthetic import sphere_field_samples


def test_replay_interleaves_by_timestamp() -> None:
    source = ReplaySampleSource()
    order: List[str] = []
    source.add_mag_listener(lambda sample: order.append(f"m{sample.t_meas_ns}"))
    source.add_accel_listener(lambda sample: order.append(f"a{sample.t_meas_ns}"))

    mag = [MagSample(t_meas_ns=t, x=1.0, y=0.0, z=0.0) for t in (10, 20)]
    accel = [AccelSample(t_meas_ns=t, x=0.0, y=0.0, z=1.0) for t in (25, 5, 10)]
    delivered = source.replay(mag, accel)

    assert order == ["a5", "a10", "m10", "m20", "a25"]
    assert delivered == 5


def test_listener_remove_is_idempotent() -> None:
    source = ReplaySampleSource()
    handle = source.add_mag_listener(lambda sample: None)

    handle.remove()
    handle.remove()

    assert source.mag_listener_count == 0


def test_listener_may_remove_itself_during_delivery() -> None:
    source = ReplaySampleSource()
    seen: List[int] = []
    handles = []

    def first(sample: MagSample) -> None:
        seen.append(1)
        handles[0].remove()

    handles.append(source.add_mag_listener(first))
    source.add_mag_listener(lambda sample: seen.append(2))

    source.push_mag(MagSample(t_meas_ns=0, x=1.0, y=0.0, z=0.0))
    source.push_mag(MagSample(t_meas_ns=1, x=1.0, y=0.0, z=0.0))

    assert seen == [1, 2, 2]


def test_missing_sensor_refuses_listener() -> None:
    source = ReplaySampleSource(has_accel=False)

    with pytest.raises(SampleSourceError):
        source.add_accel_listener(lambda sample: None)


def test_push_rejects_malformed_samples() -> None:
    source = ReplaySampleSource()
    seen: List[object] = []
    source.add_mag_listener(seen.append)
    source.add_accel_listener(seen.append)

    stamped_float = MagSample(
        t_meas_ns=1.5, x=1.0, y=0.0, z=0.0  # type: ignore[arg-type]
    )
    bool_component = AccelSample(
        t_meas_ns=0, x=True, y=0.0, z=1.0  # type: ignore[arg-type]
    )

    with pytest.raises(ValueError):
        source.push_mag(stamped_float)
    with pytest.raises(ValueError):
        source.push_accel(bool_component)

    assert seen == []


def test_rotating_field_headings() -> None:
    samples = rotating_field_samples(0.0, 90.0, 10, dt_ns=50, t0_ns=1000)

    assert len(samples) == 10
    assert samples[0].t_meas_ns == 1000
    assert samples[-1].t_meas_ns == 1450
    first = HeadingResolver.flat_heading(samples[0].x, samples[0].y, 0.0)
    last = HeadingResolver.flat_heading(samples[-1].x, samples[-1].y, 0.0)
    assert first == pytest.approx(0.0, abs=1e-9)
    assert last == pytest.approx(90.0)
    assert samples[4].magnitude() == pytest.approx(45.0)


def test_level_accel_is_one_g_down_z() -> None:
    samples = level_accel_samples(3)

    assert [sample.z for sample in samples] == [1.0, 1.0, 1.0]
    assert samples[2].t_meas_ns == 200_000_000


def test_sphere_samples_keep_magnitude() -> None:
    samples = sphere_field_samples(50)

    for sample in samples:
        assert sample.magnitude() == pytest.approx(45.0)
    assert samples[0].z > 0.0 > samples[-1].z


def test_sphere_samples_jitter_is_seeded() -> None:
    first = sphere_field_samples(30, magnitude_jitter_ut=5.0, seed=3)
    second = sphere_field_samples(30, magnitude_jitter_ut=5.0, seed=3)

    assert first == second
    assert not math.isclose(first[0].magnitude(), 45.0)


def test_presets_cover_eight_points() -> None:
    assert [abbr for abbr, _ in PRESET_HEADINGS] == [
        "N",
        "NE",
        "E",
        "SE",
        "S",
        "SW",
        "W",
        "NW",
    ]
    assert [heading for _, heading in PRESET_HEADINGS] == [
        45.0 * i for i in range(8)
    ]


def test_generators_reject_empty() -> None:
    with pytest.raises(ValueError):
        rotating_field_samples(0.0, 90.0, 0)
    with pytest.raises(ValueError):
        level_accel_samples(0)
