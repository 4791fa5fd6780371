################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Synthetic sample generators for replay and tests."""

from __future__ import annotations

from typing import List
from typing import Tuple

import numpy as np

from truecompass.heading.heading_types.accel_sample import AccelSample
from truecompass.heading.heading_types.mag_sample import MagSample


# uT, nominal horizontal geomagnetic field strength
MAG_FIELD_UT: float = 45.0

# g, gravity magnitude reported by a resting accelerometer
GRAVITY_G: float = 1.0

# ns, sample interval for a 10 Hz stream
SAMPLE_DT_NS: int = 100_000_000

# Simulator presets, clockwise from north
PRESET_HEADINGS: Tuple[Tuple[str, float], ...] = (
    ("N", 0.0),
    ("NE", 45.0),
    ("E", 90.0),
    ("SE", 135.0),
    ("S", 180.0),
    ("SW", 225.0),
    ("W", 270.0),
    ("NW", 315.0),
)


def rotating_field_samples(
    start_deg: float,
    end_deg: float,
    count: int,
    magnitude_ut: float = MAG_FIELD_UT,
    dt_ns: int = SAMPLE_DT_NS,
    t0_ns: int = 0,
) -> List[MagSample]:
    """Return a level sweep of the horizontal field between two headings.

    For a device heading h the field seen in the device frame is
    x = m sin h, y = m cos h, z = 0. Headings are spaced linearly and include
    both endpoints.
    """

    if count <= 0:
        raise ValueError("count must be positive")

    headings_rad: np.ndarray = np.radians(
        np.linspace(start_deg, end_deg, count, dtype=np.float64)
    )
    xs: np.ndarray = magnitude_ut * np.sin(headings_rad)
    ys: np.ndarray = magnitude_ut * np.cos(headings_rad)

    return [
        MagSample(t_meas_ns=t0_ns + i * dt_ns, x=float(xs[i]), y=float(ys[i]), z=0.0)
        for i in range(count)
    ]


def held_field_samples(
    heading_deg: float,
    count: int,
    magnitude_ut: float = MAG_FIELD_UT,
    dt_ns: int = SAMPLE_DT_NS,
    t0_ns: int = 0,
) -> List[MagSample]:
    """Return samples of a device held still at one heading."""

    return rotating_field_samples(
        heading_deg, heading_deg, count, magnitude_ut, dt_ns, t0_ns
    )


def level_accel_samples(
    count: int,
    dt_ns: int = SAMPLE_DT_NS,
    t0_ns: int = 0,
    gravity_g: float = GRAVITY_G,
) -> List[AccelSample]:
    """Return accelerometer samples of a device lying flat, screen up."""

    if count <= 0:
        raise ValueError("count must be positive")

    return [
        AccelSample(t_meas_ns=t0_ns + i * dt_ns, x=0.0, y=0.0, z=gravity_g)
        for i in range(count)
    ]


def sphere_field_samples(
    count: int,
    magnitude_ut: float = MAG_FIELD_UT,
    dt_ns: int = SAMPLE_DT_NS,
    t0_ns: int = 0,
    magnitude_jitter_ut: float = 0.0,
    seed: int = 0,
) -> List[MagSample]:
    """Return field directions spread over the sphere, as in a figure-8 sweep.

    Directions follow a Fibonacci lattice so consecutive samples visit many
    orientation regions. Optional Gaussian jitter perturbs the magnitude.
    """

    if count <= 0:
        raise ValueError("count must be positive")

    rng: np.random.Generator = np.random.default_rng(seed)
    index: np.ndarray = np.arange(count, dtype=np.float64) + 0.5
    z: np.ndarray = 1.0 - (2.0 * index / count)
    radius: np.ndarray = np.sqrt(1.0 - z * z)
    golden_angle: float = float(np.pi * (3.0 - np.sqrt(5.0)))
    theta: np.ndarray = golden_angle * index

    magnitudes: np.ndarray = magnitude_ut + (
        magnitude_jitter_ut * rng.standard_normal(count)
    )
    xs: np.ndarray = magnitudes * radius * np.cos(theta)
    ys: np.ndarray = magnitudes * radius * np.sin(theta)
    zs: np.ndarray = magnitudes * z

    return [
        MagSample(
            t_meas_ns=t0_ns + i * dt_ns,
            x=float(xs[i]),
            y=float(ys[i]),
            z=float(zs[i]),
        )
        for i in range(count)
    ]
