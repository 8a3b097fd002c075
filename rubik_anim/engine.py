"""Frame driver for the self-running cube animation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .animation import AnimationState, Phase, TurnAnimator, TurnEvent
from .config import EngineConfig
from .cubies import CubieKind, CubieSet, validate_grid
from .geometry import Face
from .layers import cubies_in_layer
from .transform import commit_turn, quat_from_euler_xyz, rotate


@dataclass
class Frame:
    positions: np.ndarray  # shape (26, 3)
    orientations: np.ndarray  # shape (26, 4), (w, x, y, z)
    group_orientation: np.ndarray  # shape (4,)
    phase: Phase
    face: Face | None
    angle: float
    kinds: tuple[CubieKind, ...] = ()  # corner/edge/center per cubie

    def __len__(self) -> int:
        return len(self.positions)

    def transform(self, index: int) -> tuple[np.ndarray, np.ndarray]:
        return self.positions[index].copy(), self.orientations[index].copy()


class CubeAnimationEngine:
    """Owns the grid state and publishes one transform per cubie on every tick."""

    def __init__(self, config: EngineConfig | None = None):
        self.config = (config or EngineConfig()).validate()
        self._cubies = CubieSet.solved(self.config.unit_size, self.config.gap)
        self._animator = TurnAnimator(self.config, on_commit=self._commit)
        self._spin = np.zeros(3, dtype=np.float64)  # Euler XYZ of the outer group
        self.turn_count = 0
        self.history: list[Face] = []
        self.last_events: list[TurnEvent] = []

    @property
    def cubies(self) -> CubieSet:
        return self._cubies.copy()

    @property
    def state(self) -> AnimationState:
        return self._animator.state

    @property
    def sequence(self) -> tuple[Face, ...]:
        return self._animator.sequence

    @property
    def group_orientation(self) -> np.ndarray:
        return quat_from_euler_xyz(self._spin)

    def cubies_in_layer(self, face: Face) -> tuple[int, ...]:
        return cubies_in_layer(self._cubies, face, self.config.epsilon)

    def update(self, dt: float) -> Frame:
        """Advance by ``dt`` seconds and return the transforms to render."""
        dt = max(0.0, float(dt))
        self._spin[1] += dt * self.config.spin_speed
        self._spin[0] += dt * self.config.spin_speed / 2.0
        self.last_events = self._animator.advance(dt)
        return self.frame()

    def frame(self) -> Frame:
        face = self._animator.active_face
        angle = self._animator.live_angle()
        if face is None:
            shown = self._cubies
        else:
            # Only the turning layer differs from the committed state.
            shown = rotate(
                self._cubies,
                face,
                angle,
                convention=self.config.sign_convention,
                epsilon=self.config.epsilon,
            )
        return Frame(
            positions=shown.positions.copy(),
            orientations=shown.orientations.copy(),
            group_orientation=self.group_orientation,
            phase=self._animator.phase,
            face=face,
            angle=angle,
            kinds=self._cubies.kinds,
        )

    def _commit(self, face: Face) -> None:
        self._cubies = commit_turn(
            self._cubies,
            face,
            convention=self.config.sign_convention,
            snap_positions=self.config.snap_positions,
            epsilon=self.config.epsilon,
        )
        self.turn_count += 1
        self.history.append(face)

    def check_invariants(self) -> None:
        validate_grid(self._cubies, self.config.epsilon)

    def status_payload(self) -> dict[str, Any]:
        s = self._animator.state
        return {
            "phase": s.phase.value,
            "face": s.current_face.value if s.current_face is not None else None,
            "progress": s.progress,
            "sequence_index": s.sequence_index,
            "turn_count": self.turn_count,
            "grid_indices": self._cubies.grid_indices.astype(int).tolist(),
        }
