"""End-to-end tests rendering the demo scene.

These run the full pipeline: scene construction, tiled sampling with the
ray-cast integrator, finalization and PNG export.
"""

import numpy as np


class TestDemoRender:
    """Integration tests for the demo scene."""

    def test_render_and_save(self, tmp_path):
        """Test the demo scene renders and saves with progress reporting."""
        from PIL import Image

        from src.retracer.core.integrator import RayCastIntegrator
        from src.retracer.core.renderer import Renderer
        from src.retracer.core.settings import RenderSettings
        from src.retracer.preview.export import save_png
        from src.retracer.scene.demo import create_demo_scene

        width, height = 32, 24
        covered = []
        completed = []
        result = Renderer(RayCastIntegrator()).render(
            create_demo_scene(width, height),
            RenderSettings(tile_divider=4, samples_per_pixel=2, gamma=2.2),
            on_progress=lambda tile: covered.append(tile.area),
            on_complete=completed.append,
        )

        assert sum(covered) == width * height
        assert result.tile_count == 16
        assert completed == [result]
        assert result.total_samples == width * height * 2
        assert result.image.shape == (height, width, 4)
        assert np.all(result.image[:, :, 3] == 255)

        path = tmp_path / "demo.png"
        save_png(result, str(path))
        with Image.open(path) as img:
            assert img.size == (width, height)

    def test_scene_is_visible(self):
        """Test the floor and spheres produce non-background pixels."""
        from src.retracer.core.integrator import RayCastIntegrator
        from src.retracer.core.renderer import Renderer
        from src.retracer.scene.demo import create_demo_scene

        result = Renderer(RayCastIntegrator()).render(create_demo_scene(40, 30))
        rgb = result.image[:, :, :3]

        # Bottom row looks at the floor, center looks at the middle sphere
        assert rgb[-1].sum() > 0
        assert rgb[15, 20].sum() > 0
