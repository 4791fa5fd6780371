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

import itertools
import math
import unittest
from typing import List
from typing import Tuple

from truecompass.calibration.calibration_params import CalibrationParams
from truecompass.calibration.calibration_tracker import CalibrationPhase
from truecompass.calibration.calibration_tracker import CalibrationProgress
from truecompass.calibration.calibration_tracker import CalibrationTracker
from truecompass.calibration.calibration_tracker import combine_progress
from truecompass.calibration.calibration_tracker import coverage_score
from truecompass.calibration.calibration_tracker import variance_bonus
from truecompass.heading.heading_types.heading_estimate import HeadingEstimate
from truecompass.heading.heading_types.mag_sample import MagSample


# ns between samples
DT_NS: int = 100_000_000


def _region_directions() -> List[Tuple[float, float, float]]:
    """Return one unit direction per reachable orientation region."""
    directions: List[Tuple[float, float, float]] = []
    for a, b, c in itertools.product((-1, 0, 1), repeat=3):
        if (a, b, c) == (0, 0, 0):
            continue
        norm: float = math.sqrt(a * a + b * b + c * c)
        directions.append((a / norm, b / norm, c / norm))
    return directions


def _samples(
    regions: int, count: int, magnitudes: Tuple[float, ...] = (45.0,)
) -> List[MagSample]:
    directions: List[Tuple[float, float, float]] = _region_directions()[:regions]
    samples: List[MagSample] = []
    for i in range(count):
        x, y, z = directions[i % regions]
        m: float = magnitudes[i % len(magnitudes)]
        samples.append(MagSample(t_meas_ns=i * DT_NS, x=m * x, y=m * y, z=m * z))
    return samples


def _estimate(t_meas_ns: int, accuracy: int = 80) -> HeadingEstimate:
    return HeadingEstimate(
        heading_deg=0,
        raw_heading_deg=0.0,
        accuracy=accuracy,
        is_calibrated=accuracy > 60,
        cardinal_name="North",
        cardinal_abbr="N",
        rotation_deg=0.0,
        t_meas_ns=t_meas_ns,
    )


class TestCalibrationTracker(unittest.TestCase):
    """Tests for calibration coverage scoring."""

    def _collecting_tracker(self, **overrides: object) -> CalibrationTracker:
        params: CalibrationParams = CalibrationParams.defaults().replace(**overrides)
        tracker: CalibrationTracker = CalibrationTracker(params)
        tracker.start()
        return tracker

    def _feed(
        self, tracker: CalibrationTracker, samples: List[MagSample]
    ) -> CalibrationProgress:
        progress: CalibrationProgress = tracker.progress()
        for sample in samples:
            progress = tracker.add_mag_sample(sample)
        return progress

    def test_starts_idle(self) -> None:
        """Samples before start() are ignored."""
        tracker: CalibrationTracker = CalibrationTracker()
        progress: CalibrationProgress = tracker.add_mag_sample(
            MagSample(t_meas_ns=0, x=45.0, y=0.0, z=0.0)
        )
        self.assertIs(progress.phase, CalibrationPhase.IDLE)
        self.assertEqual(progress.region_count, 0)

    def test_ignores_unusable_samples(self) -> None:
        """Non-finite and overflowing samples are not counted."""
        tracker: CalibrationTracker = self._collecting_tracker()
        progress: CalibrationProgress = self._feed(
            tracker,
            [
                MagSample(t_meas_ns=0, x=math.nan, y=0.0, z=0.0),
                MagSample(t_meas_ns=1, x=1e300, y=1e300, z=1e300),
            ],
        )
        self.assertEqual(progress.sample_count, 0)
        self.assertEqual(progress.region_count, 0)
        self.assertAlmostEqual(progress.progress, 0.0)

    def test_full_coverage_with_healthy_variance(self) -> None:
        """18 regions and a 10 uT spread give 100 percent."""
        tracker: CalibrationTracker = self._collecting_tracker(min_regions=27)
        progress: CalibrationProgress = self._feed(
            tracker, _samples(18, 20, magnitudes=(40.0, 60.0))
        )
        self.assertEqual(progress.region_count, 18)
        self.assertAlmostEqual(progress.coverage_score, 100.0)
        self.assertIsNotNone(progress.magnitude_stddev_ut)
        self.assertAlmostEqual(progress.magnitude_stddev_ut or 0.0, 10.0)
        self.assertEqual(progress.variance_bonus, 50.0)
        self.assertAlmostEqual(progress.progress, 100.0)
        self.assertIs(progress.phase, CalibrationPhase.COLLECTING)

    def test_half_coverage_without_variance(self) -> None:
        """Nine regions and a steady field give 50 percent."""
        tracker: CalibrationTracker = self._collecting_tracker()
        progress: CalibrationProgress = self._feed(tracker, _samples(9, 30))
        self.assertEqual(progress.region_count, 9)
        self.assertEqual(progress.variance_bonus, 0.0)
        self.assertAlmostEqual(progress.progress, 50.0)

    def test_variance_bonus_adds_half_weight(self) -> None:
        """The bonus contributes 25 points toward progress."""
        tracker: CalibrationTracker = self._collecting_tracker()
        progress: CalibrationProgress = self._feed(
            tracker, _samples(9, 20, magnitudes=(40.0, 60.0))
        )
        self.assertAlmostEqual(progress.progress, 75.0)

    def test_bonus_needs_enough_samples(self) -> None:
        """Fewer than 20 samples never earn the bonus."""
        tracker: CalibrationTracker = self._collecting_tracker()
        progress: CalibrationProgress = self._feed(
            tracker, _samples(9, 19, magnitudes=(40.0, 60.0))
        )
        self.assertIsNone(progress.magnitude_stddev_ut)
        self.assertEqual(progress.variance_bonus, 0.0)

    def test_enters_axis_check(self) -> None:
        """Sixteen regions cross 85 percent with at least 15 regions."""
        tracker: CalibrationTracker = self._collecting_tracker()
        samples: List[MagSample] = _samples(16, 16)
        progress: CalibrationProgress = self._feed(tracker, samples[:15])
        self.assertIs(progress.phase, CalibrationPhase.COLLECTING)
        progress = tracker.add_mag_sample(samples[15])
        self.assertIs(progress.phase, CalibrationPhase.AXIS_CHECK)
        self.assertGreaterEqual(progress.progress, 85.0)

    def test_window_evicts_old_samples_but_keeps_regions(self) -> None:
        """Regions persist while the magnitude window slides."""
        tracker: CalibrationTracker = self._collecting_tracker()
        tracker.add_mag_sample(MagSample(t_meas_ns=0, x=45.0, y=0.0, z=0.0))
        progress: CalibrationProgress = tracker.add_mag_sample(
            MagSample(t_meas_ns=10_000_000_000, x=0.0, y=45.0, z=0.0)
        )
        self.assertEqual(progress.sample_count, 1)
        self.assertEqual(progress.region_count, 2)

    def test_zero_vector_adds_no_region(self) -> None:
        """A zero field is counted in the window but has no direction."""
        tracker: CalibrationTracker = self._collecting_tracker()
        progress: CalibrationProgress = tracker.add_mag_sample(
            MagSample(t_meas_ns=0, x=0.0, y=0.0, z=0.0)
        )
        self.assertEqual(progress.region_count, 0)
        self.assertEqual(progress.sample_count, 1)

    def test_axis_check_completes_with_flip(self) -> None:
        """Twenty accurate headings complete the session."""
        tracker: CalibrationTracker = self._collecting_tracker()
        self._feed(tracker, _samples(16, 16))
        t0: int = 16 * DT_NS

        tracker.add_heading_sample(_estimate(t0, accuracy=40))
        progress: CalibrationProgress = tracker.progress()
        for i in range(19):
            progress = tracker.add_heading_sample(_estimate(t0 + (i + 1) * DT_NS))
        self.assertIs(progress.phase, CalibrationPhase.AXIS_CHECK)
        self.assertEqual(progress.axis_check_count, 19)
        self.assertIsNone(progress.axis_flip_required)

        progress = tracker.add_heading_sample(_estimate(t0 + 20 * DT_NS))
        self.assertTrue(progress.is_complete)
        self.assertIs(progress.axis_flip_required, True)
        self.assertIs(tracker.axis_flip_required, True)

    def test_axis_decision_follows_fusion_method(self) -> None:
        """Without cross-product fusion no flip is required."""
        tracker: CalibrationTracker = CalibrationTracker(use_cross_product=False)
        tracker.start()
        self._feed(tracker, _samples(16, 16))
        progress: CalibrationProgress = tracker.progress()
        for i in range(20):
            progress = tracker.add_heading_sample(_estimate((20 + i) * DT_NS))
        self.assertTrue(progress.is_complete)
        self.assertIs(progress.axis_flip_required, False)

    def test_axis_check_window_is_five_seconds(self) -> None:
        """Slow headings fall out of the axis-check window."""
        tracker: CalibrationTracker = self._collecting_tracker()
        self._feed(tracker, _samples(16, 16))
        progress: CalibrationProgress = tracker.progress()
        for i in range(40):
            progress = tracker.add_heading_sample(_estimate(i * 1_000_000_000))
        self.assertIs(progress.phase, CalibrationPhase.AXIS_CHECK)
        self.assertEqual(progress.axis_check_count, 5)

    def test_headings_ignored_while_collecting(self) -> None:
        """Estimates only count during the axis check."""
        tracker: CalibrationTracker = self._collecting_tracker()
        progress: CalibrationProgress = tracker.add_heading_sample(_estimate(0))
        self.assertEqual(progress.axis_check_count, 0)

    def test_start_resets(self) -> None:
        """start() clears regions, samples and the decision."""
        tracker: CalibrationTracker = self._collecting_tracker()
        self._feed(tracker, _samples(9, 9))
        progress: CalibrationProgress = tracker.start()
        self.assertIs(progress.phase, CalibrationPhase.COLLECTING)
        self.assertEqual(progress.region_count, 0)
        self.assertEqual(progress.sample_count, 0)
        self.assertEqual(progress.progress, 0.0)
        self.assertEqual(tracker.regions, frozenset())


class TestProgressFormulas(unittest.TestCase):
    """Tests for the scoring helpers."""

    def test_coverage_is_capped(self) -> None:
        """Coverage never exceeds 100."""
        params: CalibrationParams = CalibrationParams.defaults()
        self.assertAlmostEqual(coverage_score(9, params), 50.0)
        self.assertEqual(coverage_score(26, params), 100.0)

    def test_variance_band_is_inclusive(self) -> None:
        """Both ends of the healthy band earn the bonus."""
        params: CalibrationParams = CalibrationParams.defaults()
        self.assertEqual(variance_bonus(5.0, params), 50.0)
        self.assertEqual(variance_bonus(20.0, params), 50.0)
        self.assertEqual(variance_bonus(4.9, params), 0.0)
        self.assertEqual(variance_bonus(20.1, params), 0.0)

    def test_progress_is_capped(self) -> None:
        """Progress never exceeds 100."""
        params: CalibrationParams = CalibrationParams.defaults()
        self.assertEqual(combine_progress(100.0, 50.0, params), 100.0)
        self.assertAlmostEqual(combine_progress(50.0, 50.0, params), 75.0)


if __name__ == "__main__":
    unittest.main()
