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

import unittest
from typing import Deque

from truecompass.heading.models.accuracy_scorer import AccuracyReport
from truecompass.heading.models.accuracy_scorer import AccuracyScorer
from truecompass.heading.models.accuracy_scorer import make_magnitude_history


class TestAccuracyScorer(unittest.TestCase):
    """Tests for the accuracy score components."""

    def test_field_score_bands(self) -> None:
        """Field score is 100 in the ideal band and ramps outside it."""
        self.assertEqual(AccuracyScorer.field_score(45.0), 100.0)
        self.assertEqual(AccuracyScorer.field_score(30.0), 100.0)
        self.assertEqual(AccuracyScorer.field_score(60.0), 100.0)
        self.assertAlmostEqual(AccuracyScorer.field_score(22.5), 50.0)
        self.assertAlmostEqual(AccuracyScorer.field_score(75.0), 50.0)
        self.assertEqual(AccuracyScorer.field_score(15.0), 0.0)
        self.assertEqual(AccuracyScorer.field_score(90.0), 0.0)
        self.assertEqual(AccuracyScorer.field_score(120.0), 0.0)

    def test_variance_score(self) -> None:
        """Each microtesla of spread costs 50 points."""
        self.assertEqual(AccuracyScorer.variance_score(0.0), 100.0)
        self.assertAlmostEqual(AccuracyScorer.variance_score(1.0), 50.0)
        self.assertEqual(AccuracyScorer.variance_score(3.0), 0.0)

    def test_tilt_score(self) -> None:
        """Tilt is free up to 15 degrees, then costs 3 points per degree."""
        self.assertEqual(AccuracyScorer.tilt_score(None), 100.0)
        self.assertEqual(AccuracyScorer.tilt_score(15.0), 100.0)
        self.assertAlmostEqual(AccuracyScorer.tilt_score(25.0), 70.0)
        self.assertEqual(AccuracyScorer.tilt_score(60.0), 0.0)

    def test_combine_weights(self) -> None:
        """Components are weighted 0.5, 0.3, 0.2."""
        self.assertAlmostEqual(AccuracyScorer.combine(100.0, 100.0, 100.0), 100.0)
        self.assertAlmostEqual(AccuracyScorer.combine(100.0, 0.0, 0.0), 50.0)
        self.assertAlmostEqual(AccuracyScorer.combine(0.0, 100.0, 0.0), 30.0)
        self.assertAlmostEqual(AccuracyScorer.combine(0.0, 0.0, 100.0), 20.0)

    def test_display_smoothing_from_zero(self) -> None:
        """The displayed accuracy moves a quarter of the way each update."""
        history: Deque[float] = make_magnitude_history()
        history.append(45.0)
        report: AccuracyReport = AccuracyScorer.score(45.0, history, None, 0.0)
        self.assertAlmostEqual(report.combined, 100.0)
        self.assertAlmostEqual(report.displayed, 25.0)
        self.assertFalse(report.is_calibrated)

    def test_converges_toward_combined(self) -> None:
        """Repeated ideal updates approach 100."""
        history: Deque[float] = make_magnitude_history()
        displayed: float = 0.0
        for _ in range(40):
            history.append(45.0)
            displayed = AccuracyScorer.score(45.0, history, 0.0, displayed).displayed
        self.assertGreater(displayed, 99.0)
        self.assertLessEqual(displayed, 100.0)

    def test_history_is_bounded(self) -> None:
        """The magnitude history keeps the newest 60 values."""
        history: Deque[float] = make_magnitude_history()
        for value in range(100):
            history.append(float(value))
        self.assertEqual(len(history), 60)
        self.assertEqual(history[0], 40.0)


if __name__ == "__main__":
    unittest.main()
