"""Tests for the preset scenes."""

import pytest


class TestPresets:
    """Tests for create_scene and the preset layouts."""

    def test_default_scene_layout(self):
        """Test the default scene has the four spheres in order."""
        from pathtracer.materials.material import MaterialKind
        from pathtracer.scene.presets import create_scene

        manager, camera = create_scene("default")
        surfaces = manager.surfaces()
        assert [s.center for s in surfaces] == [
            (0.0, 1.0, 0.0),
            (-1.0, 1.0, 0.0),
            (1.0, 1.0, 0.0),
            (0.0, 1.0, -100.5),
        ]
        assert [s.radius for s in surfaces] == [0.5, 0.5, 0.5, 100.0]
        assert [s.material.kind for s in surfaces] == [
            MaterialKind.MATTE,
            MaterialKind.METAL,
            MaterialKind.METAL,
            MaterialKind.MATTE,
        ]
        assert surfaces[1].material.fuzz == 0.3
        assert surfaces[2].material.reflectance == (0.8, 0.6, 0.2)
        assert surfaces[3].material.reflectance == (0.8, 0.8, 0.0)
        assert camera.origin == (0.0, 0.0, 0.0)

    def test_glass_scene_has_shell(self):
        """Test the glass scene nests a hollow sphere inside a solid one."""
        from pathtracer.materials.material import MaterialKind
        from pathtracer.scene.presets import create_scene

        manager, _ = create_scene("glass")
        glass = [s for s in manager.surfaces() if s.material.kind == MaterialKind.GLASS]
        assert len(glass) == 2
        outer, inner = glass
        assert not outer.hollow
        assert inner.hollow
        assert outer.center == inner.center
        assert inner.radius < outer.radius
        assert outer.material is inner.material

    def test_build_preset(self):
        """Test a preset builds into a registry."""
        from pathtracer.scene.presets import create_default_scene

        assert len(create_default_scene().build()) == 4

    def test_unknown_preset(self):
        """Test an unknown preset name is rejected."""
        from pathtracer.scene.presets import create_scene

        with pytest.raises(ValueError, match="Unknown scene preset"):
            create_scene("cornell")
