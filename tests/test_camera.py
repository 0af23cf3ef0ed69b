"""Tests for the viewport camera."""

import numpy as np
import taichi as ti


class TestViewportCamera:
    """Tests for ViewportCamera configuration."""

    def test_defaults(self):
        """Test the default 16:9 viewport one unit in front of the origin."""
        from pathtracer.camera.viewport import ViewportCamera

        camera = ViewportCamera()
        assert camera.origin == (0.0, 0.0, 0.0)
        assert camera.viewport_height == 2.0
        assert camera.viewport_distance == 1.0
        assert abs(camera.viewport_width - 32.0 / 9.0) < 1e-12

    def test_direction_for_center_and_corners(self):
        """Test viewport coordinates map onto the plane y = viewport_distance."""
        from pathtracer.camera.viewport import ViewportCamera

        camera = ViewportCamera(aspect_ratio=2.0)
        assert camera.direction_for(0.5, 0.5) == (0.0, 1.0, 0.0)
        assert camera.direction_for(0.0, 0.0) == (-2.0, 1.0, -1.0)
        assert camera.direction_for(1.0, 1.0) == (2.0, 1.0, 1.0)


class TestViewportRays:
    """Tests for kernel-side ray generation."""

    def test_viewport_ray_matches_python_side(self):
        """Test viewport_ray agrees with direction_for."""
        from pathtracer.camera.viewport import ViewportCamera, viewport_ray, vec3

        camera = ViewportCamera(origin=(1.0, 2.0, 3.0))
        origin = ti.Vector.field(3, dtype=ti.f64, shape=())
        direction = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel(o: vec3, w: ti.f64, h: ti.f64, dist: ti.f64):
            ray = viewport_ray(o, w, h, dist, 0.25, 0.75)
            origin[None] = ray.origin
            direction[None] = ray.direction

        test_kernel(camera.origin_vec(), camera.viewport_width, camera.viewport_height, camera.viewport_distance)
        assert np.allclose(origin.to_numpy(), camera.origin, atol=1e-12)
        assert np.allclose(direction.to_numpy(), camera.direction_for(0.25, 0.75), atol=1e-12)

    def test_jittered_rays_stay_inside_pixel(self):
        """Test jittered directions land within their pixel's footprint."""
        from pathtracer.camera.viewport import ViewportCamera, viewport_ray_jittered, vec3

        camera = ViewportCamera()
        width, height = 16, 9
        column, row = 3, 7
        n = 500
        directions = ti.Vector.field(3, dtype=ti.f64, shape=n)

        @ti.kernel
        def test_kernel(o: vec3, w: ti.f64, h: ti.f64, dist: ti.f64):
            for i in range(n):
                ray = viewport_ray_jittered(o, w, h, dist, column, row, width, height)
                directions[i] = ray.direction

        test_kernel(camera.origin_vec(), camera.viewport_width, camera.viewport_height, camera.viewport_distance)
        d = directions.to_numpy()

        u = d[:, 0] / camera.viewport_width + 0.5
        v = d[:, 2] / camera.viewport_height + 0.5
        assert np.allclose(d[:, 1], 1.0)
        assert (u >= column / width - 1e-12).all() and (u <= (column + 1) / width + 1e-12).all()
        assert (v >= row / height - 1e-12).all() and (v <= (row + 1) / height + 1e-12).all()
        # Samples are spread over the pixel, not stuck at one point
        assert u.std() > 0.1 / width
