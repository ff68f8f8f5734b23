"""Precomputed sample tables for anti-aliasing and material scattering.

This module builds the reusable point sets consumed by the tracer:

- Unit-square sets (regular or jittered n x n grids) used to place camera
  rays inside a pixel.
- Hemisphere sets obtained from unit-square sets with a cosine-power
  mapping (Malley's method), used by diffuse and glossy materials.
- Unit-ball sets obtained by rejection sampling, used to perturb metal
  reflections.

Every table is stored as a SampleSet holding the points in generation
order plus several independently shuffled copies ("sets"). Different
pixels and different bounce depths pick different sets, so neighbouring
evaluations never walk the same permutation.

Grid construction and the hemisphere mapping run as Taichi kernels over
float64 ndarrays; Taichi must be initialized before a table is built:

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.pathtracer.core.sampler import hemisphere_jittered, regular
    >>> pixel_sampler = regular(4)
    >>> diffuse_sampler = hemisphere_jittered(8, e=1.0)
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

# Number of shuffled copies kept per table
DEFAULT_NUM_SETS = 83


class SampleSet:
    """An ordered table of sample points with shuffled copies.

    Attributes:
        points: The points in generation order, shape (N, D).
        sets: The shuffled copies, shape (num_sets, N, D). Every set is a
            permutation of points.
    """

    def __init__(
        self,
        points: npt.ArrayLike,
        num_sets: int = DEFAULT_NUM_SETS,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Build the shuffled sets for a point table.

        Args:
            points: Sample points, shape (N, D) with N >= 1.
            num_sets: Number of shuffled copies to keep.
            rng: Generator used for the shuffles. Defaults to a fresh
                OS-seeded generator.

        Raises:
            ValueError: If the table is empty or num_sets < 1.
        """
        table = np.array(points, dtype=np.float64)
        if table.ndim != 2 or table.shape[0] == 0:
            raise ValueError(f"Sample set must be a non-empty (N, D) table, got shape {table.shape}")
        if num_sets < 1:
            raise ValueError(f"num_sets must be at least 1, got {num_sets}")

        if rng is None:
            rng = np.random.default_rng()

        size = table.shape[0]
        self._points = table
        self._sets = np.stack([table[rng.permutation(size)] for _ in range(num_sets)])
        self._points.setflags(write=False)
        self._sets.setflags(write=False)

    @property
    def points(self) -> npt.NDArray[np.float64]:
        """The points in generation order."""
        return self._points

    @property
    def sets(self) -> npt.NDArray[np.float64]:
        """The shuffled copies of the points."""
        return self._sets

    @property
    def num_sets(self) -> int:
        return self._sets.shape[0]

    @property
    def set_size(self) -> int:
        return self._points.shape[0]

    @property
    def dim(self) -> int:
        return self._points.shape[1]

    def __len__(self) -> int:
        return self.set_size

    def set_at(self, set_index: int) -> npt.NDArray[np.float64]:
        """Get the shuffled set selected by set_index (wrapped)."""
        return self._sets[set_index % self.num_sets]

    def sample(self, set_index: int, sample_index: int) -> npt.NDArray[np.float64]:
        """Get one sample; both indices wrap around."""
        return self._sets[set_index % self.num_sets, sample_index % self.set_size]

    def __repr__(self) -> str:
        return f"SampleSet(size={self.set_size}, dim={self.dim}, num_sets={self.num_sets})"


# =============================================================================
# Taichi Kernels
# =============================================================================


@ti.kernel
def _fill_regular_grid(out: ti.types.ndarray(dtype=ti.f64, ndim=2), n: ti.i32):
    """Write the cell centers of an n x n grid in row-major order."""
    for i in range(n * n):
        x = i % n
        y = i // n
        out[i, 0] = (ti.cast(x, ti.f64) + 0.5) / n
        out[i, 1] = (ti.cast(y, ti.f64) + 0.5) / n


@ti.kernel
def _fill_jittered_grid(
    offsets: ti.types.ndarray(dtype=ti.f64, ndim=2),
    out: ti.types.ndarray(dtype=ti.f64, ndim=2),
    n: ti.i32,
):
    """Place one point per grid cell, displaced by its offset in [0, 1)^2."""
    for i in range(n * n):
        x = i % n
        y = i // n
        out[i, 0] = (ti.cast(x, ti.f64) + offsets[i, 0]) / n
        out[i, 1] = (ti.cast(y, ti.f64) + offsets[i, 1]) / n


@ti.kernel
def _map_square_to_hemisphere(
    square: ti.types.ndarray(dtype=ti.f64, ndim=2),
    out: ti.types.ndarray(dtype=ti.f64, ndim=2),
    e: ti.f64,
):
    """Cosine-power mapping of unit-square points onto the z-up hemisphere."""
    for i in range(square.shape[0]):
        phi = 2.0 * tm.pi * square[i, 0]
        cos_theta = (1.0 - square[i, 1]) ** (1.0 / (e + 1.0))
        sin_theta = ti.sqrt(ti.max(0.0, 1.0 - cos_theta * cos_theta))
        out[i, 0] = sin_theta * ti.cos(phi)
        out[i, 1] = sin_theta * ti.sin(phi)
        out[i, 2] = cos_theta


# =============================================================================
# Unit Square Samplers
# =============================================================================


def _check_samples_per_axis(n: int) -> None:
    if n < 1:
        raise ValueError(f"samples_per_axis must be at least 1, got {n}")


def _check_exponent(e: float) -> None:
    if not e >= 0.0:
        raise ValueError(f"Cosine-power exponent must be non-negative, got {e}")


def standard(num_sets: int = 1) -> SampleSet:
    """A single sample at the pixel center."""
    return SampleSet([[0.5, 0.5]], num_sets=num_sets)


def regular_points(n: int) -> npt.NDArray[np.float64]:
    """Cell centers of an n x n grid over the unit square, row-major."""
    _check_samples_per_axis(n)
    out = np.zeros((n * n, 2), dtype=np.float64)
    _fill_regular_grid(out, n)
    return out


def jittered_points(n: int, rng: np.random.Generator | None = None) -> npt.NDArray[np.float64]:
    """One uniformly random point inside each cell of an n x n grid, row-major."""
    _check_samples_per_axis(n)
    if rng is None:
        rng = np.random.default_rng()
    offsets = rng.random((n * n, 2))
    out = np.zeros((n * n, 2), dtype=np.float64)
    _fill_jittered_grid(offsets, out, n)
    return out


def regular(
    n: int,
    *,
    num_sets: int = DEFAULT_NUM_SETS,
    rng: np.random.Generator | None = None,
) -> SampleSet:
    """Stratified n x n grid sampler with one point per cell center.

    Args:
        n: Samples per axis.
        num_sets: Number of shuffled copies.
        rng: Generator used for the shuffles.

    Returns:
        A SampleSet with n^2 points.

    Raises:
        ValueError: If n < 1.
    """
    return SampleSet(regular_points(n), num_sets=num_sets, rng=rng)


def jittered(
    n: int,
    *,
    num_sets: int = DEFAULT_NUM_SETS,
    rng: np.random.Generator | None = None,
) -> SampleSet:
    """Stratified n x n grid sampler with a random offset inside each cell.

    Args:
        n: Samples per axis.
        num_sets: Number of shuffled copies.
        rng: Generator used for the offsets and the shuffles.

    Returns:
        A SampleSet with n^2 points.

    Raises:
        ValueError: If n < 1.
    """
    if rng is None:
        rng = np.random.default_rng()
    return SampleSet(jittered_points(n, rng), num_sets=num_sets, rng=rng)


# =============================================================================
# Hemisphere Samplers
# =============================================================================


def hemisphere_from_square(e: float, square_sample) -> npt.NDArray[np.float64]:
    """Map one unit-square sample to a hemisphere direction.

    Uses the cosine-power distribution with exponent e:
        phi = 2 pi x
        cos(theta) = (1 - y)^(1 / (e + 1))
        direction = (sin(theta) cos(phi), sin(theta) sin(phi), cos(theta))

    The direction is expressed in a local frame whose z-axis is the surface
    normal. e = 1 gives a cosine-weighted (diffuse) lobe; larger exponents
    concentrate directions around the normal.

    Raises:
        ValueError: If e < 0.
    """
    _check_exponent(e)
    x, y = float(square_sample[0]), float(square_sample[1])
    phi = 2.0 * math.pi * x
    cos_theta = (1.0 - y) ** (1.0 / (e + 1.0))
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    return np.array(
        (sin_theta * math.cos(phi), sin_theta * math.sin(phi), cos_theta),
        dtype=np.float64,
    )


def hemisphere(
    square: SampleSet | npt.ArrayLike,
    e: float,
    *,
    num_sets: int = DEFAULT_NUM_SETS,
    rng: np.random.Generator | None = None,
) -> SampleSet:
    """Map a whole unit-square table onto the hemisphere.

    Args:
        square: A unit-square SampleSet or an (N, 2) point table.
        e: Cosine-power exponent (>= 0).
        num_sets: Number of shuffled copies.
        rng: Generator used for the shuffles.

    Raises:
        ValueError: If e < 0 or the table is empty.
    """
    _check_exponent(e)
    points = square.points if isinstance(square, SampleSet) else square
    table = np.array(points, dtype=np.float64, order="C")
    if table.ndim != 2 or table.shape[0] == 0 or table.shape[1] != 2:
        raise ValueError(f"Expected a non-empty (N, 2) unit-square table, got shape {table.shape}")

    out = np.zeros((table.shape[0], 3), dtype=np.float64)
    _map_square_to_hemisphere(table, out, e)
    return SampleSet(out, num_sets=num_sets, rng=rng)


def hemisphere_regular(
    n: int,
    e: float,
    *,
    num_sets: int = DEFAULT_NUM_SETS,
    rng: np.random.Generator | None = None,
) -> SampleSet:
    """Hemisphere sampler built from a regular n x n grid."""
    return hemisphere(regular_points(n), e, num_sets=num_sets, rng=rng)


def hemisphere_jittered(
    n: int,
    e: float,
    *,
    num_sets: int = DEFAULT_NUM_SETS,
    rng: np.random.Generator | None = None,
) -> SampleSet:
    """Hemisphere sampler built from a jittered n x n grid."""
    if rng is None:
        rng = np.random.default_rng()
    return hemisphere(jittered_points(n, rng), e, num_sets=num_sets, rng=rng)


def standard_hemisphere(num_sets: int = 1) -> SampleSet:
    """A single direction straight along the normal."""
    return SampleSet([[0.0, 0.0, 1.0]], num_sets=num_sets)


# =============================================================================
# Unit Sphere Samplers
# =============================================================================


def sphere_random(
    n: int,
    *,
    num_sets: int = DEFAULT_NUM_SETS,
    rng: np.random.Generator | None = None,
) -> SampleSet:
    """Points uniformly distributed inside the unit ball.

    Candidates are drawn uniformly from the [-1, 1]^3 cube and rejected when
    their squared length exceeds 1.

    Raises:
        ValueError: If n < 1.
    """
    if n < 1:
        raise ValueError(f"Number of samples must be at least 1, got {n}")
    if rng is None:
        rng = np.random.default_rng()

    accepted: list[npt.NDArray[np.float64]] = []
    count = 0
    while count < n:
        candidates = rng.uniform(-1.0, 1.0, size=(n, 3))
        inside = candidates[np.einsum("ij,ij->i", candidates, candidates) <= 1.0]
        accepted.append(inside)
        count += inside.shape[0]

    points = np.concatenate(accepted)[:n]
    return SampleSet(points, num_sets=num_sets, rng=rng)


def standard_sphere(num_sets: int = 1) -> SampleSet:
    """A single zero offset (no perturbation)."""
    return SampleSet([[0.0, 0.0, 0.0]], num_sets=num_sets)
