################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML configuration wrapper for heading and calibration parameters."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any
from typing import Mapping

import yaml

from truecompass.calibration.calibration_params import CalibrationParams
from truecompass.calibration.calibration_params import CalibrationParamsError
from truecompass.heading.config.heading_params import HeadingParams
from truecompass.heading.config.heading_params import HeadingParamsError


_LOG: logging.Logger = logging.getLogger(__name__)

# Top-level YAML namespace for heading parameters
HEADING_NAMESPACE: str = "heading"

# Top-level YAML namespace for calibration parameters
CALIBRATION_NAMESPACE: str = "calibration"


class HeadingConfigError(Exception):
    """Raised when a compass configuration file cannot be used."""


@dataclass(frozen=True)
class CompassConfig:
    """Validated heading and calibration parameters."""

    heading: HeadingParams
    calibration: CalibrationParams

    def __init__(
        self,
        heading: HeadingParams | None = None,
        calibration: CalibrationParams | None = None,
    ) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(
            self, "heading", heading if heading is not None else HeadingParams()
        )
        object.__setattr__(
            self,
            "calibration",
            calibration if calibration is not None else CalibrationParams(),
        )
        self.validate()

    def validate(self) -> None:
        """Validate both namespaces."""
        try:
            self.heading.validate()
            self.calibration.validate()
        except (HeadingParamsError, CalibrationParamsError) as exc:
            raise HeadingConfigError(str(exc)) from exc

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> CompassConfig:
        """Build a configuration from parsed YAML content."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise HeadingConfigError("configuration root must be a mapping")
        unknown: list[str] = sorted(
            set(data.keys()) - {HEADING_NAMESPACE, CALIBRATION_NAMESPACE}
        )
        if unknown:
            raise HeadingConfigError(f"unknown namespace: {unknown[0]}")
        try:
            heading: HeadingParams = HeadingParams.from_dict(
                data.get(HEADING_NAMESPACE) or {}
            )
            calibration: CalibrationParams = CalibrationParams.from_dict(
                data.get(CALIBRATION_NAMESPACE) or {}
            )
        except (HeadingParamsError, CalibrationParamsError) as exc:
            raise HeadingConfigError(str(exc)) from exc
        return cls(heading=heading, calibration=calibration)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation suitable for YAML."""
        return {
            HEADING_NAMESPACE: self.heading.as_dict(),
            CALIBRATION_NAMESPACE: self.calibration.as_dict(),
        }


def load_compass_config(path: str | os.PathLike[str]) -> CompassConfig:
    """Load a compass configuration from a YAML file."""

    _LOG.info("Loading compass config from %s", os.fspath(path))
    try:
        with open(path, "r", encoding="utf-8") as file:
            data: Any = yaml.safe_load(file)
    except OSError as exc:
        raise HeadingConfigError(f"cannot read {os.fspath(path)}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise HeadingConfigError(f"invalid YAML in {os.fspath(path)}: {exc}") from exc
    return CompassConfig.from_dict(data)


def dumps_compass_config(config: CompassConfig) -> str:
    """Serialize a configuration to YAML text."""

    return yaml.safe_dump(config.as_nested_dict(), sort_keys=False)
