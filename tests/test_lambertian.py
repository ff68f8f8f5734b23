"""Unit tests for the Lambertian material.

Tests cover:
- Scattering along the normal with the single-direction table
- Scattered directions staying in the upper hemisphere
- Origin offset along the surface normal
- Attenuation equal to the albedo
- Sample selection through the trace context
"""

import numpy as np
import pytest


def _hit(normal=(0.0, 1.0, 0.0), point=(0.0, 0.0, 0.0), material=None):
    from src.pathtracer.core.ray import as_vec3, normalize
    from src.pathtracer.geometry.hitable import Intersection

    return Intersection(t=1.0, point=as_vec3(point), normal=normalize(as_vec3(normal)), material=material)


class TestLambertianScatter:
    """Tests for diffuse scattering."""

    def test_standard_hemisphere_scatters_along_normal(self):
        """Test that the (0, 0, 1) sample maps onto the normal."""
        from src.pathtracer.core.integrator import TraceContext
        from src.pathtracer.core.ray import make_ray
        from src.pathtracer.core.sampler import standard_hemisphere
        from src.pathtracer.materials.lambertian import Lambertian
        from src.pathtracer.materials.material import SCATTER_OFFSET

        material = Lambertian(standard_hemisphere(), albedo=(0.5, 0.25, 0.75))
        ray = make_ray((0.0, 1.0, 0.0), (0.0, -1.0, 0.0))
        result = material.scatter(TraceContext(0, 0), ray, _hit())

        assert result is not None
        assert np.allclose(result.scattered.direction, (0.0, 1.0, 0.0))
        assert np.allclose(result.scattered.origin, (0.0, SCATTER_OFFSET, 0.0))
        assert np.array_equal(result.attenuation, (0.5, 0.25, 0.75, 1.0))

    @pytest.mark.parametrize("normal", [(0.0, 1.0, 0.0), (1.0, 0.0, 0.0), (0.3, -0.4, 0.5)])
    def test_directions_in_upper_hemisphere(self, normal, rng):
        """Test that every table entry scatters away from the surface."""
        from src.pathtracer.core.integrator import TraceContext
        from src.pathtracer.core.ray import dot, length, make_ray
        from src.pathtracer.core.sampler import hemisphere_jittered
        from src.pathtracer.materials.lambertian import Lambertian

        material = Lambertian(hemisphere_jittered(4, 1.0, num_sets=3, rng=rng), albedo=(1.0, 1.0, 1.0))
        hit = _hit(normal=normal)
        ray = make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        for set_index in range(3):
            for sample_index in range(16):
                result = material.scatter(TraceContext(set_index, sample_index), ray, hit)
                assert result is not None
                assert abs(length(result.scattered.direction) - 1.0) < 1e-9
                assert dot(result.scattered.direction, hit.normal) >= 0.0

    def test_context_selects_sample(self, rng):
        """Test that the context indices pick the table entry."""
        from src.pathtracer.core.integrator import TraceContext
        from src.pathtracer.core.ray import make_ray
        from src.pathtracer.core.sampler import hemisphere_jittered
        from src.pathtracer.materials.lambertian import Lambertian

        samples = hemisphere_jittered(3, 1.0, num_sets=2, rng=rng)
        material = Lambertian(samples, albedo=(1.0, 1.0, 1.0))
        ray = make_ray((0.0, 0.0, 1.0), (0.0, 0.0, -1.0))
        # With a +z normal the local frame maps z onto z
        hit = _hit(normal=(0.0, 0.0, 1.0))

        result = material.scatter(TraceContext(1, 4), ray, hit)
        assert result is not None
        assert abs(result.scattered.direction[2] - samples.sample(1, 4)[2]) < 1e-12

    def test_albedo_is_read_only(self):
        """Test that the shared albedo cannot be modified."""
        from src.pathtracer.core.sampler import standard_hemisphere
        from src.pathtracer.materials.lambertian import Lambertian

        material = Lambertian(standard_hemisphere(), albedo=(0.5, 0.5, 0.5))
        with pytest.raises(ValueError):
            material.albedo[0] = 1.0

    def test_requires_hemisphere_table(self):
        """Test that a unit-square table is rejected."""
        from src.pathtracer.core.sampler import regular
        from src.pathtracer.materials.lambertian import Lambertian

        with pytest.raises(ValueError):
            Lambertian(regular(2), albedo=(0.5, 0.5, 0.5))
