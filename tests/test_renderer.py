"""Unit tests for the multi-threaded renderer."""

import threading

import numpy as np
import pytest

from src.pathtracer.geometry.hitable import Hitable


def _config(**overrides):
    from src.pathtracer.core.renderer import RendererConfig
    from src.pathtracer.core.sampler import regular

    settings = dict(
        image_width=8,
        image_height=6,
        pixel_size=0.25,
        pixel_sampler=regular(2, rng=np.random.default_rng(0)),
        max_trace_depth=4,
        ambient_color=(0.5, 0.5, 0.5, 1.0),
        num_render_threads=1,
    )
    settings.update(overrides)
    return RendererConfig(**settings)


def _camera():
    from src.pathtracer.camera.pinhole import PinholeCamera

    return PinholeCamera((0.0, 0.5, 4.0), (0.0, 0.5, 0.0), (0.0, 1.0, 0.0), focal_distance=2.0)


def _diffuse_scene(seed):
    from src.pathtracer.core.sampler import hemisphere_jittered, sphere_random
    from src.pathtracer.materials.lambertian import Lambertian
    from src.pathtracer.materials.metal import Metal
    from src.pathtracer.scene.manager import Scene

    rng = np.random.default_rng(seed)
    scene = Scene()
    scene.add_plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), Lambertian(hemisphere_jittered(3, 1.0, rng=rng), (0.5, 0.5, 0.5)))
    scene.add_sphere((0.0, 0.5, 0.0), 0.5, Lambertian(hemisphere_jittered(3, 1.0, rng=rng), (0.7, 0.3, 0.3)))
    scene.add_sphere((1.0, 0.5, 0.0), 0.5, Metal(sphere_random(16, rng=rng), (0.8, 0.8, 0.8), fuzziness=0.2))
    return scene


class _ExplodingHitable(Hitable):
    """Primitive whose intersection test always fails."""

    def intersect(self, ray):
        raise ZeroDivisionError("broken primitive")


class TestRendererConfig:
    """Tests for RendererConfig validation."""

    def test_defaults(self):
        """Test default depth, ambient color and thread count."""
        from src.pathtracer.core.renderer import RendererConfig
        from src.pathtracer.core.sampler import standard

        config = RendererConfig(image_width=4, image_height=2, pixel_size=1.0, pixel_sampler=standard())
        assert config.max_trace_depth == 8
        assert np.array_equal(config.ambient_color, (0.0, 0.0, 0.0, 1.0))
        assert config.thread_count >= 1
        assert config.seed is None

    def test_rgb_ambient_gets_alpha(self):
        """Test that an RGB ambient color becomes opaque RGBA."""
        config = _config(ambient_color=(0.1, 0.2, 0.3))
        assert np.allclose(config.ambient_color, (0.1, 0.2, 0.3, 1.0))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"image_width": 0},
            {"image_height": -2},
            {"pixel_size": 0.0},
            {"max_trace_depth": -1},
            {"num_render_threads": 0},
            {"seed": -5},
            {"ambient_color": (1.0, 1.0)},
        ],
    )
    def test_invalid_settings(self, overrides):
        """Test that out-of-range settings are rejected."""
        with pytest.raises(ValueError):
            _config(**overrides)

    def test_sampler_must_be_2d(self):
        """Test that a hemisphere table cannot drive pixel sampling."""
        from src.pathtracer.core.sampler import standard_hemisphere

        with pytest.raises(ValueError):
            _config(pixel_sampler=standard_hemisphere())
        with pytest.raises(ValueError):
            _config(pixel_sampler=[[0.5, 0.5]])


class TestRenderer:
    """Tests for Renderer."""

    def test_image_before_render(self):
        """Test that the image is unavailable until a render completes."""
        from src.pathtracer.core.renderer import Renderer

        renderer = Renderer(_config())
        assert renderer.width == 8
        assert renderer.height == 6
        with pytest.raises(RuntimeError):
            _ = renderer.image

    def test_empty_scene_is_ambient(self):
        """Test that every pixel of an empty scene equals the ambient color."""
        from src.pathtracer.core.renderer import Renderer
        from src.pathtracer.scene.manager import Scene

        renderer = Renderer(_config(num_render_threads=3))
        renderer.render(_camera(), Scene())
        image = renderer.image

        assert image.shape == (6, 8, 4)
        assert np.all(image == (0.5, 0.5, 0.5, 1.0))
        assert not image.flags.writeable

    def test_seeded_render_is_thread_count_independent(self):
        """Test that a seeded render gives the same image for any thread count."""
        from src.pathtracer.core.renderer import Renderer

        images = []
        for threads in (1, 4):
            renderer = Renderer(_config(num_render_threads=threads, seed=11))
            renderer.render(_camera(), _diffuse_scene(seed=3))
            images.append(renderer.image)

        assert np.array_equal(images[0], images[1])
        assert np.all(np.isfinite(images[0]))

    def test_deterministic_scene_matches_across_thread_counts(self):
        """Test that without a seed, deterministic materials still agree."""
        from src.pathtracer.core.renderer import Renderer
        from src.pathtracer.materials.debug import NormalMaterial, NullMaterial
        from src.pathtracer.scene.manager import Scene

        scene = Scene()
        scene.add_plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), NullMaterial())
        scene.add_sphere((0.0, 0.5, 0.0), 0.5, NormalMaterial())

        images = []
        for threads in (1, 3):
            renderer = Renderer(_config(num_render_threads=threads))
            renderer.render(_camera(), scene)
            images.append(renderer.image)

        # Pixel sample order may differ between runs, the sum may round differently
        assert np.allclose(images[0], images[1], atol=1e-12)

    def test_progress_callback(self):
        """Test that the callback reports every row exactly once."""
        from src.pathtracer.core.renderer import Renderer
        from src.pathtracer.scene.manager import Scene

        calls = []
        lock = threading.Lock()

        def on_row(done, total):
            with lock:
                calls.append((done, total))

        renderer = Renderer(_config(num_render_threads=2))
        renderer.render(_camera(), Scene(), callback=on_row)

        assert len(calls) == 6
        assert sorted(done for done, _ in calls) == [1, 2, 3, 4, 5, 6]
        assert all(total == 6 for _, total in calls)

    def test_worker_failure_raises(self):
        """Test that a failing worker surfaces as RenderError with its cause."""
        from src.pathtracer.core.renderer import Renderer, RenderError
        from src.pathtracer.scene.manager import Scene

        scene = Scene([_ExplodingHitable()])
        renderer = Renderer(_config(num_render_threads=2))

        with pytest.raises(RenderError) as excinfo:
            renderer.render(_camera(), scene)
        assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
        with pytest.raises(RuntimeError):
            _ = renderer.image

    def test_rerender_replaces_image(self):
        """Test that a second render starts from a clean buffer."""
        from src.pathtracer.core.renderer import Renderer
        from src.pathtracer.materials.debug import NullMaterial
        from src.pathtracer.scene.manager import Scene

        renderer = Renderer(_config())
        renderer.render(_camera(), Scene())
        assert np.all(renderer.image == (0.5, 0.5, 0.5, 1.0))

        scene = Scene()
        scene.add_sphere((0.0, 0.5, 4.0), 10.0, NullMaterial())
        renderer.render(_camera(), scene)
        assert np.array_equal(renderer.image[..., :3], np.zeros((6, 8, 3)))
