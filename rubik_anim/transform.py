"""Layer rotation, quaternion helpers and grid snapping."""

from __future__ import annotations

import math

import numpy as np

from .cubies import EPSILON, CubieSet, validate_grid
from .geometry import (
    AXIS_INDEX,
    QUARTER_TURN,
    Face,
    axis_angle_matrix,
    face_axis,
    face_layer,
    rotation_sign,
)
from .layers import cubies_in_layer

IDENTITY_QUAT = np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)


def quat_from_axis_angle(axis: np.ndarray, angle_rad: float) -> np.ndarray:
    u = np.asarray(axis, dtype=np.float64)
    u = u / np.linalg.norm(u)
    half = 0.5 * angle_rad
    return np.concatenate(([math.cos(half)], math.sin(half) * u))


def quat_multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Hamilton product a * b; broadcasts over leading dimensions."""
    w1, x1, y1, z1 = np.moveaxis(np.asarray(a, dtype=np.float64), -1, 0)
    w2, x2, y2, z2 = np.moveaxis(np.asarray(b, dtype=np.float64), -1, 0)
    return np.stack(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ],
        axis=-1,
    )


def quat_normalize(q: np.ndarray) -> np.ndarray:
    q = np.asarray(q, dtype=np.float64)
    return q / np.linalg.norm(q, axis=-1, keepdims=True)


def quat_to_matrix(q: np.ndarray) -> np.ndarray:
    w, x, y, z = quat_normalize(q)
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ],
        dtype=np.float64,
    )


def quat_from_euler_xyz(angles: np.ndarray | tuple[float, float, float]) -> np.ndarray:
    """Orientation for intrinsic X, then Y, then Z Euler angles (radians)."""
    ax, ay, az = (float(v) for v in angles)
    qx = quat_from_axis_angle((1.0, 0.0, 0.0), ax)
    qy = quat_from_axis_angle((0.0, 1.0, 0.0), ay)
    qz = quat_from_axis_angle((0.0, 0.0, 1.0), az)
    return quat_multiply(quat_multiply(qx, qy), qz)


def face_pivot(face: Face, spacing: float) -> np.ndarray:
    axis, value = face_layer(face)
    pivot = np.zeros(3, dtype=np.float64)
    pivot[AXIS_INDEX[axis]] = value * spacing
    return pivot


def rotate(
    cubies: CubieSet,
    face: Face,
    angle: float,
    convention: str = "uniform",
    epsilon: float = EPSILON,
) -> CubieSet:
    """Return a copy of ``cubies`` with the face layer turned by ``angle`` radians.

    The input is left untouched. Positions turn about the face pivot, grid
    indices about the origin, and the turn is left-composed onto each
    orientation. Cubies outside the layer are copied unchanged.
    """
    members = list(cubies_in_layer(cubies, face, epsilon))
    out = cubies.copy()

    axis = face_axis(face)
    signed = float(angle) * rotation_sign(face, convention)
    rot = axis_angle_matrix(axis, signed)
    q_rot = quat_from_axis_angle(axis, signed)
    pivot = face_pivot(face, cubies.spacing)

    out.positions[members] = (cubies.positions[members] - pivot) @ rot.T + pivot
    out.grid_indices[members] = cubies.grid_indices[members] @ rot.T
    out.orientations[members] = quat_multiply(q_rot, cubies.orientations[members])
    return out


def snap(vector: np.ndarray, epsilon: float = EPSILON) -> np.ndarray:
    """Round each component to the nearest integer, flushing near-zero values to 0."""
    v = np.asarray(vector, dtype=np.float64)
    magnitude = np.abs(v)
    rounded = np.sign(v) * np.floor(magnitude + 0.5)
    return np.where(magnitude < epsilon, 0.0, rounded) + 0.0


def snap_cubies(cubies: CubieSet, snap_positions: bool = True, epsilon: float = EPSILON) -> CubieSet:
    out = cubies.copy()
    out.grid_indices = snap(cubies.grid_indices, epsilon)
    if snap_positions:
        # Lattice positions are re-derived from the snapped cells so the gap survives.
        out.positions = out.grid_indices * cubies.spacing
    out.orientations = quat_normalize(cubies.orientations)
    return out


def commit_turn(
    cubies: CubieSet,
    face: Face,
    convention: str = "uniform",
    snap_positions: bool = True,
    epsilon: float = EPSILON,
) -> CubieSet:
    """Apply an exact quarter turn, snap it back onto the lattice and check the grid."""
    turned = rotate(cubies, face, QUARTER_TURN, convention=convention, epsilon=epsilon)
    snapped = snap_cubies(turned, snap_positions=snap_positions, epsilon=epsilon)
    validate_grid(snapped, epsilon)
    return snapped
