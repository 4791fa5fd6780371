################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Small 3-vector helpers for sensor fusion."""

from __future__ import annotations

from typing import Sequence
from typing import cast

import numpy as np
from numpy.typing import NDArray


_FLOAT_ARRAY = NDArray[np.float64]


def as_vector(vec: Sequence[float] | _FLOAT_ARRAY, name: str) -> _FLOAT_ARRAY:
    """Convert input to a 3-vector of float64."""

    array: _FLOAT_ARRAY = np.asarray(vec, dtype=np.float64).reshape(-1)
    if array.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {array.shape}")
    return cast(_FLOAT_ARRAY, array)


def norm(vec: _FLOAT_ARRAY) -> float:
    """Return the Euclidean norm of a 3-vector."""

    return float(np.linalg.norm(vec))


def normalize_or_unit_scale(vec: _FLOAT_ARRAY) -> _FLOAT_ARRAY:
    """Normalize a vector, dividing by 1 when it has no usable length.

    The vector is first scaled by its largest component so the norm cannot
    overflow for large finite inputs. A zero input yields a zero output
    rather than NaN.
    """

    scale: float = float(np.max(np.abs(vec)))
    if scale == 0.0 or not np.isfinite(scale):
        return cast(_FLOAT_ARRAY, vec / 1.0)
    scaled: _FLOAT_ARRAY = vec / scale
    return cast(_FLOAT_ARRAY, scaled / norm(scaled))


def cross(a: _FLOAT_ARRAY, b: _FLOAT_ARRAY) -> _FLOAT_ARRAY:
    """Return the right-handed cross product a x b."""

    return cast(_FLOAT_ARRAY, np.cross(a, b))
