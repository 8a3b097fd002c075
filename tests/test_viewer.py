import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from rubik_anim.config import EngineConfig
from rubik_anim.cubies import CubieKind
from rubik_anim.engine import CubeAnimationEngine
from rubik_anim.geometry import Face
from rubik_anim.viewer import PLASTIC, CubeViewer


class TestViewer(unittest.TestCase):
    def test_draws_idle_and_mid_turn_frames(self):
        viewer = CubeViewer(engine=CubeAnimationEngine(EngineConfig(rotation_duration=1.0)), size=(320, 240))
        try:
            self.assertGreater(viewer.draw(), 0)
            frame = viewer.tick(0.5)
            self.assertIsNotNone(frame.face)
            self.assertGreater(viewer.draw(), 0)
        finally:
            import pygame

            pygame.quit()

    def test_inner_faces_are_shaded_by_cubie_kind(self):
        engine = CubeAnimationEngine()
        viewer = CubeViewer(engine=engine, size=(320, 240))
        try:
            home = [tuple(int(v) for v in row) for row in engine.cubies.home_indices]
            corner = home.index((-1, -1, -1))
            edge = home.index((-1, -1, 0))
            center = home.index((-1, 0, 0))
            # RIGHT points inward for every cubie on the x = -1 layer.
            self.assertEqual(viewer._colors[corner][Face.RIGHT], PLASTIC[CubieKind.CORNER])
            self.assertEqual(viewer._colors[edge][Face.RIGHT], PLASTIC[CubieKind.EDGE])
            self.assertEqual(viewer._colors[center][Face.RIGHT], PLASTIC[CubieKind.CENTER])
            self.assertEqual(len(set(PLASTIC.values())), 3)
        finally:
            import pygame

            pygame.quit()


if __name__ == "__main__":
    unittest.main()
