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

import math
import unittest
from typing import Dict

from truecompass.calibration.calibration_params import CalibrationParams
from truecompass.calibration.calibration_params import CalibrationParamsError
from truecompass.heading.config.heading_params import HeadingParams
from truecompass.heading.config.heading_params import HeadingParamsError


class TestHeadingParams(unittest.TestCase):
    """Tests for the HeadingParams container."""

    def test_defaults_validate(self) -> None:
        """Defaults produce a valid configuration."""
        params: HeadingParams = HeadingParams.defaults()
        self.assertEqual(params.update_interval_ms, 100)
        self.assertFalse(params.axis_flip_ew)
        self.assertTrue(params.use_cross_product)
        self.assertIsNone(params.simulated_heading_deg)

    def test_from_dict_rejects_unknown_key(self) -> None:
        """from_dict rejects unknown parameters deterministically."""
        data: Dict[str, object] = {"beta": 1, "alpha": 2}
        with self.assertRaises(HeadingParamsError) as context:
            HeadingParams.from_dict(data)
        self.assertIn("alpha", str(context.exception))

    def test_from_dict_partial(self) -> None:
        """Missing keys take their defaults."""
        params: HeadingParams = HeadingParams.from_dict(
            {"axis_flip_ew": True, "simulated_heading_deg": 45}
        )
        self.assertTrue(params.axis_flip_ew)
        self.assertEqual(params.simulated_heading_deg, 45.0)
        self.assertEqual(params.update_interval_ms, 100)

    def test_from_dict_rejects_wrong_types(self) -> None:
        """Types are checked, not coerced."""
        with self.assertRaises(HeadingParamsError):
            HeadingParams.from_dict({"update_interval_ms": 100.0})
        with self.assertRaises(HeadingParamsError):
            HeadingParams.from_dict({"axis_flip_ew": 1})

    def test_validate_rejects_bad_values(self) -> None:
        """Out-of-range values raise instead of clamping."""
        with self.assertRaises(HeadingParamsError):
            HeadingParams(update_interval_ms=0).validate()
        with self.assertRaises(HeadingParamsError):
            HeadingParams(simulated_heading_deg=math.nan).validate()

    def test_replace_and_as_dict(self) -> None:
        """replace returns a modified copy."""
        params: HeadingParams = HeadingParams.defaults()
        flipped: HeadingParams = params.replace(axis_flip_ew=True)
        self.assertFalse(params.axis_flip_ew)
        self.assertEqual(flipped.as_dict()["axis_flip_ew"], True)
        self.assertEqual(HeadingParams.from_dict(flipped.as_dict()), flipped)


class TestCalibrationParams(unittest.TestCase):
    """Tests for the CalibrationParams container."""

    def test_defaults(self) -> None:
        """Defaults carry the setup-flow thresholds."""
        params: CalibrationParams = CalibrationParams.defaults()
        self.assertEqual(params.target_regions, 18)
        self.assertEqual(params.min_regions, 15)
        self.assertEqual(params.complete_progress, 85.0)
        self.assertEqual(params.sample_window_ns, 10_000_000_000)
        self.assertEqual(params.axis_check_samples, 20)
        self.assertEqual(params.axis_check_min_accuracy, 60)

    def test_from_dict_accepts_int_for_float(self) -> None:
        """Float fields accept integers from YAML."""
        params: CalibrationParams = CalibrationParams.from_dict({"variance_bonus": 40})
        self.assertEqual(params.variance_bonus, 40.0)

    def test_from_dict_rejects_unknown_key(self) -> None:
        """Unknown keys raise."""
        with self.assertRaises(CalibrationParamsError):
            CalibrationParams.from_dict({"regions": 18})

    def test_validate_rejects_inverted_variance_band(self) -> None:
        """The healthy variance band must be ordered."""
        params: CalibrationParams = CalibrationParams(
            variance_min_ut=20.0, variance_max_ut=5.0
        )
        with self.assertRaises(CalibrationParamsError):
            params.validate()


if __name__ == "__main__":
    unittest.main()
