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

from typing import Optional
from typing import Sequence

import numpy as np


class Statistics:
    """Scalar statistics used by the accuracy and calibration scores.

    Responsibility:
        Provide the spread and smoothing primitives shared by the accuracy
        scorer and the calibration tracker.

    Data contract:
        - Inputs are sequences of field magnitudes in microtesla.

    Determinism and edge cases:
        - sample_stddev() uses the n - 1 denominator and returns 0.0 for
          fewer than two values.
        - population_stddev() uses the n denominator and returns 0.0 for an
          empty sequence.
        - ema() seeds with the first sample when there is no previous value.

    Equations:
        EMA:
            y = α x + (1 - α) y_prev
    """

    @staticmethod
    def sample_stddev(values: Sequence[float]) -> float:
        """Return the sample standard deviation (n - 1 denominator)."""
        if len(values) < 2:
            return 0.0
        return float(np.std(np.asarray(values, dtype=np.float64), ddof=1))

    @staticmethod
    def population_stddev(values: Sequence[float]) -> float:
        """Return the population standard deviation (n denominator)."""
        if len(values) == 0:
            return 0.0
        return float(np.std(np.asarray(values, dtype=np.float64), ddof=0))

    @staticmethod
    def ema(prev: Optional[float], value: float, alpha: float) -> float:
        """Update an exponential moving average."""
        if prev is None:
            return value
        return (alpha * value) + ((1.0 - alpha) * prev)
