"""Time-driven turn sequencer: rotation, optional overshoot, pauses and commits."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from .config import EngineConfig
from .geometry import QUARTER_TURN, ROTATION_SEQUENCE, Face


def ease_in_out_cubic(t: float) -> float:
    t = max(0.0, min(1.0, float(t)))
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - ((-2.0 * t + 2.0) ** 3) / 2.0


class Phase(str, Enum):
    IDLE = "idle"
    ROTATING = "rotating"
    OVERSHOOT = "overshoot"
    OVERSHOOT_RETURN = "overshoot_return"
    ROTATION_PAUSE = "rotation_pause"
    SEQUENCE_PAUSE = "sequence_pause"


TURNING_PHASES = frozenset({Phase.ROTATING, Phase.OVERSHOOT, Phase.OVERSHOOT_RETURN})


@dataclass
class AnimationState:
    phase: Phase = Phase.IDLE
    current_face: Face | None = None
    progress: float = 0.0  # normalized time in a turning phase
    sequence_index: int = 0  # face that is turning, or turns next
    elapsed: float = 0.0  # seconds spent in idle/pause phases


@dataclass(frozen=True)
class TurnEvent:
    kind: str  # "start", "commit" or "sequence_pause"
    face: Face | None
    sequence_index: int


class TurnAnimator:
    """Cyclic face-turn automaton advanced by frame deltas.

    Every transition is time-triggered. Time left over when a phase ends is
    carried into the next phase within the same turn. A commit ends the call,
    and so does the end of a pause that starts the next turn: one advance
    commits at most one turn, and every settled state and every turn start
    is published as a frame. ``on_commit`` is called with the face once its
    quarter turn has fully played out; it is the hook that updates the grid
    state.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        on_commit: Callable[[Face], None] | None = None,
        sequence: tuple[Face, ...] = ROTATION_SEQUENCE,
    ):
        self.config = (config or EngineConfig()).validate()
        self.on_commit = on_commit
        self.sequence = tuple(Face(f) for f in sequence)
        if not self.sequence:
            raise ValueError("Turn sequence must not be empty")
        self._state = AnimationState()

    @property
    def state(self) -> AnimationState:
        return replace(self._state)

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def is_turning(self) -> bool:
        return self._state.phase in TURNING_PHASES

    @property
    def active_face(self) -> Face | None:
        return self._state.current_face if self.is_turning else None

    def live_angle(self) -> float:
        """Current uncommitted turn angle in radians (0 outside turning phases)."""
        s = self._state
        overshoot = math.radians(self.config.overshoot_degrees)
        if s.phase == Phase.ROTATING:
            return QUARTER_TURN * ease_in_out_cubic(min(s.progress, 1.0))
        if s.phase == Phase.OVERSHOOT:
            return QUARTER_TURN + overshoot * ease_in_out_cubic(s.progress)
        if s.phase == Phase.OVERSHOOT_RETURN:
            return QUARTER_TURN + overshoot * (1.0 - ease_in_out_cubic(s.progress))
        return 0.0

    def advance(self, dt: float) -> list[TurnEvent]:
        events: list[TurnEvent] = []
        remaining: float | None = max(0.0, float(dt))
        while remaining is not None:
            remaining = self._step(remaining, events)
        return events

    # --------------------------
    # Phase handlers. Each returns the time left over after a transition,
    # or None once the phase has absorbed all of it.
    # --------------------------
    def _step(self, dt: float, events: list[TurnEvent]) -> float | None:
        s = self._state
        cfg = self.config

        if s.phase == Phase.IDLE:
            leftover = self._wait(dt, cfg.start_delay)
            if leftover is not None:
                self._start_turn(0, events)
            return leftover

        if s.phase == Phase.ROTATING:
            leftover = self._turn(dt, cfg.rotation_duration)
            if leftover is not None:
                if cfg.overshoot:
                    s.phase = Phase.OVERSHOOT
                    s.progress = 0.0
                else:
                    self._commit(events)
                    return None
            return leftover

        if s.phase == Phase.OVERSHOOT:
            leftover = self._turn(dt, cfg.overshoot_phase_duration)
            if leftover is not None:
                s.phase = Phase.OVERSHOOT_RETURN
                s.progress = 0.0
            return leftover

        if s.phase == Phase.OVERSHOOT_RETURN:
            leftover = self._turn(dt, cfg.overshoot_phase_duration)
            if leftover is not None:
                self._commit(events)
                return None
            return leftover

        if s.phase == Phase.ROTATION_PAUSE:
            leftover = self._wait(dt, cfg.rotation_pause)
            if leftover is not None:
                if s.sequence_index == 0:
                    s.phase = Phase.SEQUENCE_PAUSE
                    s.elapsed = 0.0
                    events.append(TurnEvent("sequence_pause", None, s.sequence_index))
                else:
                    self._start_turn(s.sequence_index, events)
                    return None
            return leftover

        if s.phase == Phase.SEQUENCE_PAUSE:
            leftover = self._wait(dt, cfg.sequence_pause)
            if leftover is not None:
                self._start_turn(0, events)
                return None
            return leftover

        raise RuntimeError(f"Unhandled phase: {s.phase}")

    def _wait(self, dt: float, duration: float) -> float | None:
        s = self._state
        s.elapsed += dt
        if s.elapsed < duration:
            return None
        leftover = s.elapsed - duration
        s.elapsed = 0.0
        return leftover

    def _turn(self, dt: float, duration: float) -> float | None:
        s = self._state
        s.progress += dt / duration
        if s.progress < 1.0:
            return None
        return (s.progress - 1.0) * duration

    def _start_turn(self, index: int, events: list[TurnEvent]) -> None:
        s = self._state
        s.phase = Phase.ROTATING
        s.sequence_index = index
        s.current_face = self.sequence[index]
        s.progress = 0.0
        s.elapsed = 0.0
        events.append(TurnEvent("start", s.current_face, index))

    def _commit(self, events: list[TurnEvent]) -> None:
        s = self._state
        face = s.current_face
        if self.on_commit is not None:
            self.on_commit(face)
        s.sequence_index = (s.sequence_index + 1) % len(self.sequence)
        s.phase = Phase.ROTATION_PAUSE
        s.progress = 0.0
        s.elapsed = 0.0
        events.append(TurnEvent("commit", face, s.sequence_index))
