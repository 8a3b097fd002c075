"""Authoritative grid state of the 26 cubies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .geometry import N_CUBIES, solved_grid_indices

EPSILON = 1e-9

_CANONICAL_KEYS = frozenset(tuple(int(v) for v in row) for row in solved_grid_indices())


class GridStateError(RuntimeError):
    """Raised when the cubie grid breaks one of its structural invariants."""


class CubieKind(str, Enum):
    CORNER = "corner"
    EDGE = "edge"
    CENTER = "center"


def kind_for_index(grid_index) -> CubieKind:
    zeros = sum(1 for v in grid_index if int(v) == 0)
    if zeros == 0:
        return CubieKind.CORNER
    if zeros == 1:
        return CubieKind.EDGE
    return CubieKind.CENTER


def _identity_orientations(n: int) -> np.ndarray:
    quats = np.zeros((n, 4), dtype=np.float64)
    quats[:, 0] = 1.0
    return quats


@dataclass
class CubieSet:
    positions: np.ndarray  # shape (26, 3), world space
    grid_indices: np.ndarray  # shape (26, 3), lattice cells
    orientations: np.ndarray  # shape (26, 4), unit quaternions (w, x, y, z)
    spacing: float
    home_indices: np.ndarray = field(default_factory=solved_grid_indices)

    def __post_init__(self):
        for name, width in (("positions", 3), ("grid_indices", 3), ("orientations", 4), ("home_indices", 3)):
            arr = np.asarray(getattr(self, name), dtype=np.float64)
            if arr.shape != (N_CUBIES, width):
                raise GridStateError(f"{name} must have shape ({N_CUBIES}, {width}), got {arr.shape}")
            setattr(self, name, arr)
        self.kinds = tuple(kind_for_index(row) for row in self.home_indices)

    @classmethod
    def solved(cls, unit_size: float = 1.0, gap: float = 0.0) -> "CubieSet":
        spacing = float(unit_size) + float(gap)
        indices = solved_grid_indices()
        return cls(
            positions=indices * spacing,
            grid_indices=indices.copy(),
            orientations=_identity_orientations(N_CUBIES),
            spacing=spacing,
        )

    def __len__(self) -> int:
        return N_CUBIES

    def copy(self) -> "CubieSet":
        return CubieSet(
            positions=self.positions.copy(),
            grid_indices=self.grid_indices.copy(),
            orientations=self.orientations.copy(),
            spacing=self.spacing,
            home_indices=self.home_indices.copy(),
        )

    def index_keys(self) -> list[tuple[int, int, int]]:
        return [tuple(int(round(v)) for v in row) for row in self.grid_indices]


def validate_grid(cubies: CubieSet, epsilon: float = EPSILON) -> None:
    """Check that grid indices are exact integers forming the canonical 26-point set."""
    indices = cubies.grid_indices
    if not np.all(np.abs(indices - np.round(indices)) <= epsilon):
        raise GridStateError("Grid indices carry fractional drift")

    keys = cubies.index_keys()
    if len(set(keys)) != N_CUBIES:
        raise GridStateError("Grid indices are not pairwise distinct")
    if set(keys) != _CANONICAL_KEYS:
        raise GridStateError("Grid indices are not a permutation of the canonical lattice points")
