"""Unit tests for matte (Lambertian) scattering."""

import numpy as np
import taichi as ti


class TestMatteScatter:
    """Tests for scatter_matte and sample_matte."""

    def test_scatter_from_explicit_draw(self):
        """Test the bounce direction for a known gaussian draw."""
        from pathtracer.materials.matte import scatter_matte, vec3

        result = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            # unit(g) = (1, 0, 0); n + unit(g) = (1, 0, 1)
            result[None] = scatter_matte(vec3(0.0, 0.0, 1.0), vec3(3.0, 0.0, 0.0))

        test_kernel()
        d = result[None]
        assert abs(d[0] - np.sqrt(0.5)) < 1e-12
        assert abs(d[1]) < 1e-12
        assert abs(d[2] - np.sqrt(0.5)) < 1e-12

    def test_gaussian_scale_is_irrelevant(self):
        """Test only the direction of the gaussian draw matters."""
        from pathtracer.materials.matte import scatter_matte, vec3

        small = ti.Vector.field(3, dtype=ti.f64, shape=())
        large = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            n = vec3(0.0, 1.0, 0.0)
            small[None] = scatter_matte(n, vec3(0.1, 0.2, -0.3))
            large[None] = scatter_matte(n, vec3(10.0, 20.0, -30.0))

        test_kernel()
        for i in range(3):
            assert abs(small[None][i] - large[None][i]) < 1e-12

    def test_samples_stay_in_normal_hemisphere(self):
        """Test sampled directions are unit length and on the normal's side."""
        from pathtracer.materials.matte import sample_matte, vec3

        n = 2000
        results = ti.Vector.field(3, dtype=ti.f64, shape=n)

        @ti.kernel
        def test_kernel():
            for i in range(n):
                results[i] = sample_matte(vec3(0.0, 0.0, 1.0))

        test_kernel()
        values = results.to_numpy()
        lengths = np.linalg.norm(values, axis=1)
        assert np.allclose(lengths, 1.0, atol=1e-9)
        assert (values[:, 2] >= 0.0).all()

    def test_samples_are_cosine_weighted(self):
        """Test the mean cosine with the normal matches a cosine distribution (2/3)."""
        from pathtracer.materials.matte import sample_matte, vec3

        n = 20000
        results = ti.Vector.field(3, dtype=ti.f64, shape=n)

        @ti.kernel
        def test_kernel():
            for i in range(n):
                results[i] = sample_matte(vec3(0.0, 0.0, 1.0))

        test_kernel()
        mean_cos = results.to_numpy()[:, 2].mean()
        assert abs(mean_cos - 2.0 / 3.0) < 0.02
