"""Unit tests for the metal material.

Tests cover:
- Perfect mirror reflection
- Fuzz perturbation from the unit-ball table
- Absorption of rays reflected into the surface
- Parameter validation
"""

import math

import numpy as np
import pytest


def _ground_hit():
    from src.pathtracer.core.ray import vec3
    from src.pathtracer.geometry.hitable import Intersection

    return Intersection(t=1.0, point=vec3(0.0, 0.0, 0.0), normal=vec3(0.0, 1.0, 0.0), material=None)


class TestMetalScatter:
    """Tests for specular scattering."""

    def test_mirror_reflection(self):
        """Test reflection of a 45 degree ray off the ground."""
        from src.pathtracer.core.integrator import TraceContext
        from src.pathtracer.core.ray import make_ray, normalize, vec3
        from src.pathtracer.core.sampler import standard_sphere
        from src.pathtracer.materials.metal import Metal

        material = Metal(standard_sphere(), albedo=(0.9, 0.8, 0.7))
        ray = make_ray((-1.0, 1.0, 0.0), normalize(vec3(1.0, -1.0, 0.0)))
        result = material.scatter(TraceContext(0, 0), ray, _ground_hit())

        assert result is not None
        c = math.sqrt(0.5)
        assert np.allclose(result.scattered.direction, (c, c, 0.0))
        assert np.allclose(result.scattered.origin, (0.0, 0.0, 0.0))
        assert np.array_equal(result.attenuation, (0.9, 0.8, 0.7, 1.0))

    def test_fuzz_perturbs_direction(self):
        """Test that the fuzz offset is added before normalizing."""
        from src.pathtracer.core.integrator import TraceContext
        from src.pathtracer.core.ray import make_ray, normalize, vec3
        from src.pathtracer.core.sampler import SampleSet
        from src.pathtracer.materials.metal import Metal

        material = Metal(SampleSet([[1.0, 0.0, 0.0]], num_sets=1), albedo=(1.0, 1.0, 1.0), fuzziness=0.5)
        ray = make_ray((0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0))
        result = material.scatter(TraceContext(0, 0), ray, _ground_hit())

        assert result is not None
        assert np.allclose(result.scattered.direction, normalize(vec3(0.5, 1.0, 0.0)))

    def test_reflection_into_surface_is_absorbed(self):
        """Test absorption when the fuzz pushes the ray below the surface."""
        from src.pathtracer.core.integrator import TraceContext
        from src.pathtracer.core.ray import make_ray, normalize, vec3
        from src.pathtracer.core.sampler import SampleSet
        from src.pathtracer.materials.metal import Metal

        material = Metal(SampleSet([[0.0, -1.0, 0.0]], num_sets=1), albedo=(1.0, 1.0, 1.0), fuzziness=1.0)
        ray = make_ray((-1.0, 0.1, 0.0), normalize(vec3(1.0, -0.1, 0.0)))
        assert material.scatter(TraceContext(0, 0), ray, _ground_hit()) is None

    def test_degenerate_direction_is_absorbed(self):
        """Test that a fuzz offset cancelling the reflection is absorbed."""
        from src.pathtracer.core.integrator import TraceContext
        from src.pathtracer.core.ray import make_ray, vec3
        from src.pathtracer.core.sampler import SampleSet
        from src.pathtracer.materials.metal import Metal

        material = Metal(SampleSet([[0.0, -1.0, 0.0]], num_sets=1), albedo=(1.0, 1.0, 1.0), fuzziness=1.0)
        ray = make_ray((0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0))
        assert material.scatter(TraceContext(0, 0), ray, _ground_hit()) is None


class TestMetalConstruction:
    """Tests for metal validation."""

    def test_negative_fuzziness_rejected(self):
        """Test that fuzziness must be non-negative."""
        from src.pathtracer.core.sampler import standard_sphere
        from src.pathtracer.materials.metal import Metal

        with pytest.raises(ValueError):
            Metal(standard_sphere(), albedo=(1.0, 1.0, 1.0), fuzziness=-0.1)

    def test_requires_3d_table(self):
        """Test that a unit-square table is rejected."""
        from src.pathtracer.core.sampler import regular
        from src.pathtracer.materials.metal import Metal

        with pytest.raises(ValueError):
            Metal(regular(2), albedo=(1.0, 1.0, 1.0))
