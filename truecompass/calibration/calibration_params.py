################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Thresholds for the guided calibration flow."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import replace
from typing import Any
from typing import Mapping


# Distinct orientation regions for full coverage
TARGET_REGIONS: int = 18

# Minimum regions before leaving the collecting phase
MIN_REGIONS: int = 15

# Progress required before leaving the collecting phase, percent
COMPLETE_PROGRESS: float = 85.0

# Sliding window of raw magnetometer samples, nanoseconds
SAMPLE_WINDOW_NS: int = 10_000_000_000

# Samples required before the magnitude variance bonus is considered
MIN_VARIANCE_SAMPLES: int = 20

# Magnitude spread range that earns the variance bonus, microtesla
VARIANCE_MIN_UT: float = 5.0
VARIANCE_MAX_UT: float = 20.0

# Flat bonus awarded for a healthy magnitude spread
VARIANCE_BONUS: float = 50.0

# Weight of the variance bonus in the progress value
VARIANCE_BONUS_WEIGHT: float = 0.5

# Heading samples required to finish the axis check
AXIS_CHECK_SAMPLES: int = 20

# Sliding window of axis-check headings, nanoseconds
AXIS_CHECK_WINDOW_NS: int = 5_000_000_000

# Minimum estimate accuracy for an axis-check sample
AXIS_CHECK_MIN_ACCURACY: int = 60


class CalibrationParamsError(Exception):
    """Raised when calibration parameter validation fails."""


@dataclass(frozen=True, slots=True)
class CalibrationParams:
    """Thresholds used by the calibration tracker."""

    # Distinct regions for 100% coverage
    target_regions: int = TARGET_REGIONS
    # Regions required to leave the collecting phase
    min_regions: int = MIN_REGIONS
    # Progress required to leave the collecting phase, percent
    complete_progress: float = COMPLETE_PROGRESS
    # Raw sample window, nanoseconds
    sample_window_ns: int = SAMPLE_WINDOW_NS
    # Samples required for the variance bonus
    min_variance_samples: int = MIN_VARIANCE_SAMPLES
    # Lower bound of the bonus spread, microtesla
    variance_min_ut: float = VARIANCE_MIN_UT
    # Upper bound of the bonus spread, microtesla
    variance_max_ut: float = VARIANCE_MAX_UT
    # Bonus awarded inside the spread range
    variance_bonus: float = VARIANCE_BONUS
    # Weight of the bonus in the progress value
    variance_bonus_weight: float = VARIANCE_BONUS_WEIGHT
    # Heading samples required by the axis check
    axis_check_samples: int = AXIS_CHECK_SAMPLES
    # Axis-check heading window, nanoseconds
    axis_check_window_ns: int = AXIS_CHECK_WINDOW_NS
    # Minimum estimate accuracy kept by the axis check
    axis_check_min_accuracy: int = AXIS_CHECK_MIN_ACCURACY

    @staticmethod
    def defaults() -> CalibrationParams:
        """Return the default parameter set."""
        params: CalibrationParams = CalibrationParams()
        params.validate()
        return params

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> CalibrationParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise CalibrationParamsError("params must be a mapping")
        known: dict[str, object] = cls().as_dict()
        unknown_keys: list[str] = sorted(set(params.keys()) - set(known.keys()))
        if unknown_keys:
            raise CalibrationParamsError(f"unknown parameter: {unknown_keys[0]}")
        values: dict[str, Any] = {}
        for name, default in known.items():
            value: object = params.get(name, default)
            if isinstance(default, int):
                values[name] = cls._as_int(name, value)
            else:
                values[name] = cls._as_float(name, value)
        return cls(**values)

    def validate(self) -> None:
        """Validate parameters and raise CalibrationParamsError on failure."""
        if self.target_regions <= 0:
            raise CalibrationParamsError("target_regions must be > 0")
        if not (0 < self.min_regions <= 27):
            raise CalibrationParamsError("min_regions must be in [1, 27]")
        if not (0.0 < self.complete_progress <= 100.0):
            raise CalibrationParamsError("complete_progress must be in (0, 100]")
        if self.sample_window_ns <= 0:
            raise CalibrationParamsError("sample_window_ns must be > 0")
        if self.min_variance_samples < 2:
            raise CalibrationParamsError("min_variance_samples must be >= 2")
        if self.variance_min_ut < 0.0:
            raise CalibrationParamsError("variance_min_ut must be >= 0")
        if self.variance_max_ut < self.variance_min_ut:
            raise CalibrationParamsError("variance_max_ut must be >= variance_min_ut")
        if self.variance_bonus < 0.0:
            raise CalibrationParamsError("variance_bonus must be >= 0")
        if self.variance_bonus_weight < 0.0:
            raise CalibrationParamsError("variance_bonus_weight must be >= 0")
        if self.axis_check_samples <= 0:
            raise CalibrationParamsError("axis_check_samples must be > 0")
        if self.axis_check_window_ns <= 0:
            raise CalibrationParamsError("axis_check_window_ns must be > 0")
        if not (0 <= self.axis_check_min_accuracy <= 100):
            raise CalibrationParamsError("axis_check_min_accuracy must be in [0, 100]")

    def replace(self, **overrides: Any) -> CalibrationParams:
        """Return a modified copy of the parameters."""
        return replace(self, **overrides)

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "target_regions": self.target_regions,
            "min_regions": self.min_regions,
            "complete_progress": self.complete_progress,
            "sample_window_ns": self.sample_window_ns,
            "min_variance_samples": self.min_variance_samples,
            "variance_min_ut": self.variance_min_ut,
            "variance_max_ut": self.variance_max_ut,
            "variance_bonus": self.variance_bonus,
            "variance_bonus_weight": self.variance_bonus_weight,
            "axis_check_samples": self.axis_check_samples,
            "axis_check_window_ns": self.axis_check_window_ns,
            "axis_check_min_accuracy": self.axis_check_min_accuracy,
        }

    @staticmethod
    def _as_int(name: str, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise CalibrationParamsError(f"{name} must be an int")
        return int(value)

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise CalibrationParamsError(f"{name} must be a float")
        return float(value)
