################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Subscription configuration for the heading engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import replace
from typing import Any
from typing import Mapping
from typing import Optional


# Sample source update interval in milliseconds
UPDATE_INTERVAL_MS: int = 100

# Mirror east/west after fusion
AXIS_FLIP_EW: bool = False

# Use cross-product fusion instead of roll/pitch compensation
USE_CROSS_PRODUCT: bool = True

# Fixed heading emitted instead of sensor data, degrees
SIMULATED_HEADING_DEG: Optional[float] = None


class HeadingParamsError(Exception):
    """Raised when heading parameter validation fails."""


@dataclass(frozen=True, slots=True)
class HeadingParams:
    """Configuration applied when a heading subscription starts.

    Parameters are immutable for the lifetime of a subscription. Two
    subscriptions may run with different parameters at the same time.
    """

    # Sample source update interval in milliseconds, expected > 0
    update_interval_ms: int = UPDATE_INTERVAL_MS
    # Mirror the east/west sense of the fused heading
    axis_flip_ew: bool = AXIS_FLIP_EW
    # Cross-product fusion when gravity is available
    use_cross_product: bool = USE_CROSS_PRODUCT
    # Bypass the sensors and emit this heading, degrees
    simulated_heading_deg: Optional[float] = SIMULATED_HEADING_DEG

    @staticmethod
    def defaults() -> HeadingParams:
        """Return the default parameter set."""
        params: HeadingParams = HeadingParams()
        params.validate()
        return params

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> HeadingParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise HeadingParamsError("params must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise HeadingParamsError(f"unknown parameter: {unknown_keys[0]}")
        defaults: HeadingParams = cls()
        simulated: object = params.get(
            "simulated_heading_deg", defaults.simulated_heading_deg
        )
        return cls(
            update_interval_ms=cls._as_int(
                "update_interval_ms",
                params.get("update_interval_ms", defaults.update_interval_ms),
            ),
            axis_flip_ew=cls._as_bool(
                "axis_flip_ew", params.get("axis_flip_ew", defaults.axis_flip_ew)
            ),
            use_cross_product=cls._as_bool(
                "use_cross_product",
                params.get("use_cross_product", defaults.use_cross_product),
            ),
            simulated_heading_deg=(
                None
                if simulated is None
                else cls._as_float("simulated_heading_deg", simulated)
            ),
        )

    def validate(self) -> None:
        """Validate parameters and raise HeadingParamsError on failure."""
        if isinstance(self.update_interval_ms, bool) or not isinstance(
            self.update_interval_ms, int
        ):
            raise HeadingParamsError("update_interval_ms must be an int")
        if self.update_interval_ms <= 0:
            raise HeadingParamsError("update_interval_ms must be > 0")
        if not isinstance(self.axis_flip_ew, bool):
            raise HeadingParamsError("axis_flip_ew must be a bool")
        if not isinstance(self.use_cross_product, bool):
            raise HeadingParamsError("use_cross_product must be a bool")
        if self.simulated_heading_deg is not None:
            if not math.isfinite(self.simulated_heading_deg):
                raise HeadingParamsError("simulated_heading_deg must be finite")

    def replace(self, **overrides: Any) -> HeadingParams:
        """Return a modified copy of the parameters."""
        return replace(self, **overrides)

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "update_interval_ms": self.update_interval_ms,
            "axis_flip_ew": self.axis_flip_ew,
            "use_cross_product": self.use_cross_product,
            "simulated_heading_deg": self.simulated_heading_deg,
        }

    @staticmethod
    def _as_int(name: str, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise HeadingParamsError(f"{name} must be an int")
        return int(value)

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise HeadingParamsError(f"{name} must be a float")
        return float(value)

    @staticmethod
    def _as_bool(name: str, value: object) -> bool:
        if not isinstance(value, bool):
            raise HeadingParamsError(f"{name} must be a bool")
        return value

    @staticmethod
    def _field_order() -> list[str]:
        return [
            "update_interval_ms",
            "axis_flip_ew",
            "use_cross_product",
            "simulated_heading_deg",
        ]
