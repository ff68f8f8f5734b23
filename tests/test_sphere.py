"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside
- Ray missing sphere
- Ray starting inside sphere (far root)
- Sphere behind the ray
- Construction validation
"""

import numpy as np
import pytest


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_along_x(self):
        """Test the near root and outward normal of a head-on hit."""
        from src.pathtracer.core.ray import make_ray
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.materials.debug import NullMaterial

        material = NullMaterial()
        sphere = Sphere((2.0, 0.0, 0.0), 1.0, material)
        hit = sphere.intersect(make_ray((0.0, 0.0, 0.0), (1.0, 0.0, 0.0)))

        assert hit is not None
        assert abs(hit.t - 1.0) < 1e-12
        assert np.allclose(hit.point, (1.0, 0.0, 0.0))
        assert np.allclose(hit.normal, (-1.0, 0.0, 0.0))
        assert hit.material is material

    def test_miss(self):
        """Test a ray passing beside the sphere."""
        from src.pathtracer.core.ray import make_ray
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.materials.debug import NullMaterial

        sphere = Sphere((2.0, 0.0, 0.0), 1.0, NullMaterial())
        assert sphere.intersect(make_ray((0.0, 2.0, 0.0), (1.0, 0.0, 0.0))) is None

    def test_from_inside_uses_far_root(self):
        """Test that a ray starting inside hits the far side."""
        from src.pathtracer.core.ray import make_ray
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.materials.debug import NullMaterial

        sphere = Sphere((0.0, 0.0, 0.0), 2.0, NullMaterial())
        hit = sphere.intersect(make_ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0)))

        assert hit is not None
        assert abs(hit.t - 2.0) < 1e-12
        assert np.allclose(hit.normal, (0.0, 0.0, 1.0))

    def test_sphere_behind_ray(self):
        """Test that both roots behind the origin are a miss."""
        from src.pathtracer.core.ray import make_ray
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.materials.debug import NullMaterial

        sphere = Sphere((-3.0, 0.0, 0.0), 1.0, NullMaterial())
        assert sphere.intersect(make_ray((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))) is None

    def test_ray_leaving_surface_does_not_self_hit(self):
        """Test that a ray starting on the surface heading out misses."""
        from src.pathtracer.core.ray import make_ray
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.materials.debug import NullMaterial

        sphere = Sphere((0.0, 0.0, 0.0), 1.0, NullMaterial())
        assert sphere.intersect(make_ray((0.0, 1.0, 0.0), (0.0, 1.0, 0.0))) is None

    def test_unnormalized_direction(self):
        """Test that t is measured in units of the direction vector."""
        from src.pathtracer.core.ray import make_ray
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.materials.debug import NullMaterial

        sphere = Sphere((4.0, 0.0, 0.0), 1.0, NullMaterial())
        hit = sphere.intersect(make_ray((0.0, 0.0, 0.0), (2.0, 0.0, 0.0)))
        assert hit is not None
        assert abs(hit.t - 1.5) < 1e-12


class TestSphereConstruction:
    """Tests for sphere validation."""

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius(self, radius):
        """Test that the radius must be positive."""
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.materials.debug import NullMaterial

        with pytest.raises(ValueError):
            Sphere((0.0, 0.0, 0.0), radius, NullMaterial())
