"""Face layer membership."""

from __future__ import annotations

import numpy as np

from .cubies import EPSILON, CubieSet, GridStateError
from .geometry import AXIS_INDEX, LAYER_SIZE, Face, face_layer


def layer_mask(cubies: CubieSet, face: Face, epsilon: float = EPSILON) -> np.ndarray:
    axis, value = face_layer(face)
    column = cubies.grid_indices[:, AXIS_INDEX[axis]]
    return np.abs(column - value) < epsilon


def cubies_in_layer(cubies: CubieSet, face: Face, epsilon: float = EPSILON) -> tuple[int, ...]:
    """Return the indices of the 9 cubies whose grid index lies in the face layer."""
    members = tuple(int(i) for i in np.flatnonzero(layer_mask(cubies, face, epsilon)))
    if len(members) != LAYER_SIZE:
        raise GridStateError(f"Layer {Face(face).value} must hold {LAYER_SIZE} cubies, got {len(members)}")
    return members
