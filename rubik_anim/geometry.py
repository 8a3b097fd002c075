"""Face tables and lattice geometry for the animated 3x3 cube."""

from __future__ import annotations

import math
from enum import Enum

import numpy as np


class Face(str, Enum):
    TOP = "TOP"
    BOTTOM = "BOTTOM"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FRONT = "FRONT"
    BACK = "BACK"


AXIS_INDEX = {"x": 0, "y": 1, "z": 2}

# Face specification from outside view. "axis" is the outward normal and the
# rotation axis; "layer" selects the grid coordinate shared by the face layer.
FACE_SPECS = {
    Face.TOP: {"axis": (0, 1, 0), "layer": ("y", +1)},
    Face.BOTTOM: {"axis": (0, -1, 0), "layer": ("y", -1)},
    Face.LEFT: {"axis": (-1, 0, 0), "layer": ("x", -1)},
    Face.RIGHT: {"axis": (1, 0, 0), "layer": ("x", +1)},
    Face.FRONT: {"axis": (0, 0, 1), "layer": ("z", +1)},
    Face.BACK: {"axis": (0, 0, -1), "layer": ("z", -1)},
}

# Rotation sign applied on top of the face axis.
# "uniform": every face turns the same way about its own outward normal.
# "alternating": opposite faces of the positive ones turn back the other way.
SIGN_CONVENTIONS = {
    "uniform": {face: +1 for face in Face},
    "alternating": {
        Face.RIGHT: +1,
        Face.LEFT: -1,
        Face.TOP: +1,
        Face.BOTTOM: -1,
        Face.FRONT: +1,
        Face.BACK: -1,
    },
}

ROTATION_SEQUENCE = (Face.RIGHT, Face.FRONT, Face.BACK, Face.LEFT, Face.TOP, Face.BOTTOM)

QUARTER_TURN = math.pi / 2
N_CUBIES = 26
LAYER_SIZE = 9


def face_axis(face: Face) -> np.ndarray:
    return np.array(FACE_SPECS[Face(face)]["axis"], dtype=np.float64)


def face_layer(face: Face) -> tuple[str, int]:
    return FACE_SPECS[Face(face)]["layer"]


def rotation_sign(face: Face, convention: str = "uniform") -> int:
    if convention not in SIGN_CONVENTIONS:
        raise ValueError(f"Unknown sign convention: {convention}")
    return SIGN_CONVENTIONS[convention][Face(face)]


def solved_grid_indices() -> np.ndarray:
    """Return the 26 canonical lattice points in cubie index order (x, then y, then z)."""
    points = [
        (x, y, z)
        for x in (-1, 0, 1)
        for y in (-1, 0, 1)
        for z in (-1, 0, 1)
        if (x, y, z) != (0, 0, 0)
    ]
    return np.array(points, dtype=np.float64)


def axis_angle_matrix(axis: np.ndarray | tuple[float, float, float], angle_rad: float) -> np.ndarray:
    """Return the 3x3 rotation matrix for a right-handed turn about a unit axis."""
    u = np.asarray(axis, dtype=np.float64)
    u = u / np.linalg.norm(u)
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = u
    cross = np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]], dtype=np.float64)
    return c * np.eye(3) + s * cross + (1.0 - c) * np.outer(u, u)
