################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Orientation-coverage tracking for the guided calibration flow."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Optional
from typing import Set

from truecompass.calibration.calibration_params import CalibrationParams
from truecompass.calibration.orientation_regions import OrientationRegions
from truecompass.calibration.orientation_regions import RegionKey
from truecompass.calibration.time_window import TimeWindow
from truecompass.heading.heading_types.heading_estimate import HeadingEstimate
from truecompass.heading.heading_types.mag_sample import MagSample
from truecompass.heading.math_utils.stats import Statistics


_LOG: logging.Logger = logging.getLogger(__name__)


class CalibrationPhase(enum.Enum):
    """Phases of one calibration session."""

    IDLE = "idle"
    COLLECTING = "collecting"
    AXIS_CHECK = "axis_check"
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class CalibrationProgress:
    """Snapshot of the tracker after an update.

    Fields:
        phase: Current phase
        progress: Coverage progress in [0, 100]
        region_count: Distinct orientation regions visited
        coverage_score: min(100, 100 * regions / target)
        variance_bonus: Flat bonus for a healthy magnitude spread, 0 or 50
        magnitude_stddev_ut: Population stddev of windowed magnitudes, None
            before enough samples
        sample_count: Raw samples in the sliding window
        axis_check_count: Heading samples in the axis-check window
        axis_flip_required: Decision, set only once COMPLETE
    """

    phase: CalibrationPhase
    progress: float
    region_count: int
    coverage_score: float
    variance_bonus: float
    magnitude_stddev_ut: Optional[float]
    sample_count: int
    axis_check_count: int
    axis_flip_required: Optional[bool]

    @property
    def is_complete(self) -> bool:
        return self.phase is CalibrationPhase.COMPLETE


class CalibrationTracker:
    """Scores how thoroughly the device has been rotated during setup.

    Responsibility:
        Bucket raw magnetometer directions into orientation regions, score
        coverage plus magnitude spread, then gate an axis-check phase that
        ends with the east/west flip decision.

    State machine:
        IDLE -> COLLECTING -> AXIS_CHECK -> COMPLETE
        start() re-enters COLLECTING from any phase and clears all history.

    Equations:
        coverage = min(100, 100 * |regions| / 18)
        bonus = 50 if >= 20 samples and 5 <= σ <= 20 else 0
        progress = min(100, coverage + 0.5 * bonus)

    Determinism and edge cases:
        - σ is the population standard deviation of the windowed magnitudes.
        - The region set only grows within a session.
        - Headings collected in AXIS_CHECK only gate timing. The flip
          decision follows the fusion method: cross-product fusion always
          needs the flip.
    """

    def __init__(
        self,
        params: Optional[CalibrationParams] = None,
        use_cross_product: bool = True,
    ) -> None:
        self._params: CalibrationParams = (
            params if params is not None else CalibrationParams()
        )
        self._params.validate()
        self._use_cross_product: bool = use_cross_product
        self._phase: CalibrationPhase = CalibrationPhase.IDLE
        self._regions: Set[RegionKey] = set()
        self._magnitudes: TimeWindow[float] = TimeWindow(self._params.sample_window_ns)
        self._headings: TimeWindow[int] = TimeWindow(self._params.axis_check_window_ns)
        self._progress: float = 0.0
        self._coverage: float = 0.0
        self._bonus: float = 0.0
        self._stddev: Optional[float] = None
        self._axis_flip_required: Optional[bool] = None

    @property
    def phase(self) -> CalibrationPhase:
        return self._phase

    @property
    def regions(self) -> frozenset[RegionKey]:
        """Return the visited region keys."""
        return frozenset(self._regions)

    @property
    def axis_flip_required(self) -> Optional[bool]:
        """Return the flip decision, None until the session completes."""
        return self._axis_flip_required

    def start(self) -> CalibrationProgress:
        """Begin a new session, discarding all collected data."""
        self._regions.clear()
        self._magnitudes.clear()
        self._headings.clear()
        self._progress = 0.0
        self._coverage = 0.0
        self._bonus = 0.0
        self._stddev = None
        self._axis_flip_required = None
        self._phase = CalibrationPhase.COLLECTING
        _LOG.info("Calibration session started")
        return self.progress()

    def add_mag_sample(self, sample: MagSample) -> CalibrationProgress:
        """Record a raw magnetometer sample while collecting."""
        if self._phase is not CalibrationPhase.COLLECTING:
            return self.progress()
        magnitude: float = sample.magnitude()
        if not math.isfinite(magnitude):
            _LOG.debug("Ignoring non-finite calibration sample at %d", sample.t_meas_ns)
            return self.progress()

        self._magnitudes.append(sample.t_meas_ns, magnitude)

        key: Optional[RegionKey] = OrientationRegions.region_key(
            sample.x, sample.y, sample.z
        )
        if key is not None:
            self._regions.add(key)

        self._update_progress()

        if (
            self._progress >= self._params.complete_progress
            and len(self._regions) >= self._params.min_regions
        ):
            self._phase = CalibrationPhase.AXIS_CHECK
            _LOG.info(
                "Calibration coverage reached %.0f%% over %d regions",
                self._progress,
                len(self._regions),
            )
        return self.progress()

    def add_heading_sample(self, estimate: HeadingEstimate) -> CalibrationProgress:
        """Record a heading estimate while checking the axis convention."""
        if self._phase is not CalibrationPhase.AXIS_CHECK:
            return self.progress()
        if estimate.accuracy < self._params.axis_check_min_accuracy:
            return self.progress()
        if estimate.t_meas_ns is None:
            return self.progress()

        self._headings.append(estimate.t_meas_ns, estimate.heading_deg)

        if len(self._headings) >= self._params.axis_check_samples:
            self._axis_flip_required = self._use_cross_product
            self._phase = CalibrationPhase.COMPLETE
            _LOG.info(
                "Calibration complete, axis flip %s",
                "required" if self._axis_flip_required else "not required",
            )
        return self.progress()

    def progress(self) -> CalibrationProgress:
        """Return a snapshot of the current state."""
        return CalibrationProgress(
            phase=self._phase,
            progress=self._progress,
            region_count=len(self._regions),
            coverage_score=self._coverage,
            variance_bonus=self._bonus,
            magnitude_stddev_ut=self._stddev,
            sample_count=len(self._magnitudes),
            axis_check_count=len(self._headings),
            axis_flip_required=self._axis_flip_required,
        )

    def _update_progress(self) -> None:
        self._coverage = coverage_score(len(self._regions), self._params)

        magnitudes: list[float] = self._magnitudes.values()
        self._stddev = None
        self._bonus = 0.0
        if len(magnitudes) >= self._params.min_variance_samples:
            self._stddev = Statistics.population_stddev(magnitudes)
            self._bonus = variance_bonus(self._stddev, self._params)

        self._progress = combine_progress(self._coverage, self._bonus, self._params)


def coverage_score(region_count: int, params: CalibrationParams) -> float:
    """Return the orientation coverage score in [0, 100]."""

    return min(100.0, (region_count / params.target_regions) * 100.0)


def variance_bonus(stddev_ut: float, params: CalibrationParams) -> float:
    """Return the flat bonus for a magnitude spread inside the healthy range."""

    if params.variance_min_ut <= stddev_ut <= params.variance_max_ut:
        return params.variance_bonus
    return 0.0


def combine_progress(
    coverage: float, bonus: float, params: CalibrationParams
) -> float:
    """Return the calibration progress in [0, 100]."""

    return min(100.0, coverage + bonus * params.variance_bonus_weight)
