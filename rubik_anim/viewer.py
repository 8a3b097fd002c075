"""Pygame reference host that renders the engine's per-cubie transforms."""

from __future__ import annotations

import math

import numpy as np
import pygame

from .cubies import CubieKind
from .engine import CubeAnimationEngine, Frame
from .geometry import AXIS_INDEX, FACE_SPECS, Face, axis_angle_matrix
from .transform import quat_to_matrix

FACE_COLORS = {
    Face.RIGHT: (220, 30, 30),
    Face.LEFT: (255, 140, 20),
    Face.TOP: (245, 245, 245),
    Face.BOTTOM: (240, 220, 40),
    Face.FRONT: (30, 160, 30),
    Face.BACK: (30, 90, 220),
}

BG = (18, 22, 30)
LINE = (28, 32, 42)
PLASTIC = {
    CubieKind.CORNER: (12, 12, 14),
    CubieKind.EDGE: (22, 22, 26),
    CubieKind.CENTER: (34, 34, 40),
}
TEXT = (220, 225, 235)


def _box_faces(size: float) -> list[tuple[Face, list[np.ndarray]]]:
    """Local-space quads of a cubie, one per face normal."""
    half = 0.5 * size
    quads = []
    for face, spec in FACE_SPECS.items():
        n = np.array(spec["axis"], dtype=np.float64)
        others = [np.eye(3)[i] for i in range(3) if i != AXIS_INDEX[spec["layer"][0]]]
        a, b = others[0] * half, others[1] * half
        c = n * half
        quads.append((face, [c - a - b, c + a - b, c + a + b, c - a + b]))
    return quads


class CubeViewer:
    def __init__(self, engine: CubeAnimationEngine, size: tuple[int, int] = (960, 640), fps: int = 60):
        self.engine = engine
        self.fps = fps

        pygame.init()
        self.size = size
        self.screen = pygame.display.set_mode(self.size)
        pygame.display.set_caption("Cube Animation")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 18)

        self.yaw = -0.75
        self.pitch = 0.45
        self.camera_distance = 9.0
        self.focal = 700.0

        self._quads = _box_faces(0.95 * engine.config.unit_size)
        # Sticker colour per (cubie, face): only faces pointing outward in the solved layout.
        # Inner faces show bare plastic, shaded by cubie kind.
        self.frame: Frame = engine.frame()
        home = engine.cubies.home_indices
        self._colors = []
        for idx in range(len(home)):
            row = {}
            for face, spec in FACE_SPECS.items():
                axis, value = spec["layer"]
                if int(home[idx][AXIS_INDEX[axis]]) == value:
                    row[face] = FACE_COLORS[face]
                else:
                    row[face] = PLASTIC[self.frame.kinds[idx]]
            self._colors.append(row)

    def _camera(self) -> np.ndarray:
        rot_y = axis_angle_matrix((0.0, 1.0, 0.0), self.yaw)
        rot_x = axis_angle_matrix((1.0, 0.0, 0.0), self.pitch)
        return rot_x @ rot_y

    def _project(self, point_view: np.ndarray) -> tuple[int, int] | None:
        denom = self.camera_distance - point_view[2]
        if denom <= 0.2:
            return None
        x = self.size[0] * 0.5 + self.focal * point_view[0] / denom
        y = self.size[1] * 0.54 - self.focal * point_view[1] / denom
        return int(x), int(y)

    def tick(self, dt: float) -> Frame:
        self.frame = self.engine.update(dt)
        for event in self.engine.last_events:
            if event.kind == "commit":
                print(f"commit face={event.face.value} turn={self.engine.turn_count}", flush=True)
        return self.frame

    def draw_cube(self) -> int:
        """Draw the current frame; returns the number of visible quads."""
        view = self._camera() @ quat_to_matrix(self.frame.group_orientation)

        draw_items = []
        for idx in range(len(self.frame)):
            position, orientation = self.frame.transform(idx)
            rot = quat_to_matrix(orientation)
            for face, quad in self._quads:
                normal_view = view @ (rot @ np.array(FACE_SPECS[face]["axis"], dtype=np.float64))
                if normal_view[2] <= 0.0:
                    continue
                poly_view = [view @ (rot @ p + position) for p in quad]
                poly_screen = [self._project(p) for p in poly_view]
                if any(pt is None for pt in poly_screen):
                    continue
                depth = float(sum(p[2] for p in poly_view) / 4.0)
                draw_items.append((depth, poly_screen, self._colors[idx][face]))

        draw_items.sort(key=lambda x: x[0])
        for _, poly, color in draw_items:
            pygame.draw.polygon(self.screen, color, poly)
            pygame.draw.polygon(self.screen, LINE, poly, 2)
        return len(draw_items)

    def _draw_hud(self):
        s = self.engine.state
        face = s.current_face.value if s.current_face is not None else "-"
        angle = math.degrees(self.frame.angle)
        header = self.font.render(
            f"phase={s.phase.value} face={face} angle={angle:5.1f} turns={self.engine.turn_count}",
            True,
            TEXT,
        )
        self.screen.blit(header, (24, 18))

    def draw(self) -> int:
        self.screen.fill(BG)
        count = self.draw_cube()
        self._draw_hud()
        return count

    def run(self):
        running = True
        while running:
            dt = self.clock.tick(self.fps) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                    running = False

            self.tick(dt)
            self.draw()
            pygame.display.flip()

        pygame.quit()
