"""Tests for the scene manager, material descriptions and serialization."""

import json

import pytest


class TestMaterial:
    """Tests for Material and MaterialKind."""

    @pytest.mark.parametrize(
        "value,expected",
        [("matte", 0), ("METAL", 1), (" glass ", 2), (1, 1)],
    )
    def test_parse_kind(self, value, expected):
        """Test kinds parse from names and integers."""
        from pathtracer.materials.material import MaterialKind

        assert MaterialKind.parse(value) == expected

    @pytest.mark.parametrize("value", ["plastic", 5])
    def test_parse_unknown_kind(self, value):
        """Test unknown kinds are rejected."""
        from pathtracer.materials.material import MaterialKind

        with pytest.raises(ValueError, match="Unknown material kind"):
            MaterialKind.parse(value)

    def test_constructors(self):
        """Test the per-kind constructors and their defaults."""
        from pathtracer.materials.material import Material, MaterialKind

        assert Material.matte().reflectance == (0.5, 0.5, 0.5)
        metal = Material.metal((0.8, 0.6, 0.2), fuzz=0.3)
        assert metal.kind == MaterialKind.METAL
        assert metal.fuzz == 0.3
        glass = Material.glass()
        assert glass.kind == MaterialKind.GLASS
        assert glass.refractive_index == 1.5
        assert glass.reflectance == (1.0, 1.0, 1.0)

    def test_kind_given_by_name(self):
        """Test a kind name is converted on construction."""
        from pathtracer.materials.material import Material, MaterialKind

        assert Material("metal", (1.0, 1.0, 1.0)).kind is MaterialKind.METAL

    def test_parameters_are_not_validated(self):
        """Test out-of-range parameters are stored as given."""
        from pathtracer.materials.material import Material

        material = Material.metal((2.0, -1.0, 0.5), fuzz=-3.0)
        assert material.reflectance == (2.0, -1.0, 0.5)
        assert material.fuzz == -3.0

    def test_reflectance_needs_three_components(self):
        """Test a malformed reflectance is rejected."""
        from pathtracer.materials.material import Material

        with pytest.raises(ValueError, match="3 components"):
            Material.matte((0.5, 0.5))

    def test_dict_round_trip(self):
        """Test to_dict output loads back to an equal material."""
        from pathtracer.materials.material import Material

        for material in (Material.matte((0.7, 0.3, 0.3)), Material.metal((0.8,) * 3, 0.3), Material.glass(1.33)):
            assert Material.from_dict(material.to_dict()) == material

    def test_from_dict_requires_type(self):
        """Test a material without a type is rejected."""
        from pathtracer.materials.material import Material

        with pytest.raises(ValueError, match="missing 'type'"):
            Material.from_dict({"reflectance": [1.0, 1.0, 1.0]})


class TestSceneManager:
    """Tests for SceneManager."""

    def test_add_materials(self):
        """Test material IDs are assigned in order."""
        from pathtracer.scene.manager import SceneManager

        manager = SceneManager()
        assert manager.add_matte_material((0.7, 0.3, 0.3)) == 0
        assert manager.add_metal_material((0.8, 0.8, 0.8), 0.3) == 1
        assert manager.add_glass_material(1.5) == 2
        assert manager.get_material_count() == 3
        assert manager.get_material(1).fuzz == 0.3
        assert manager.get_material(3) is None

    def test_add_sphere(self):
        """Test sphere indices and material references."""
        from pathtracer.scene.manager import SceneManager

        manager = SceneManager()
        red = manager.add_matte_material((0.7, 0.3, 0.3))
        assert manager.add_sphere((0, 1, 0), 0.5, red) == 0
        assert manager.add_sphere((1, 1, 0), 0.5, red, hollow=True) == 1
        assert manager.get_sphere_count() == 2
        assert manager.spheres[0].center == (0.0, 1.0, 0.0)
        assert manager.spheres[1].hollow is True

    def test_add_sphere_invalid_material(self):
        """Test a sphere must reference a registered material."""
        from pathtracer.scene.manager import SceneManager

        manager = SceneManager()
        with pytest.raises(ValueError, match="Invalid material_id"):
            manager.add_sphere((0.0, 0.0, 0.0), 1.0, 0)

    def test_convenience_spheres(self):
        """Test add_*_sphere registers a material per sphere."""
        from pathtracer.materials.material import MaterialKind
        from pathtracer.scene.manager import SceneManager

        manager = SceneManager()
        assert manager.add_matte_sphere((0, 1, 0), 0.5, (0.7, 0.3, 0.3)) == (0, 0)
        assert manager.add_metal_sphere((1, 1, 0), 0.5, (0.8, 0.6, 0.2), 1.0) == (1, 1)
        assert manager.add_glass_sphere((-1, 1, 0), 0.5, hollow=True) == (2, 2)
        assert manager.get_material(2).kind == MaterialKind.GLASS
        assert manager.spheres[2].hollow

    def test_clear(self):
        """Test clear removes everything."""
        from pathtracer.scene.manager import SceneManager

        manager = SceneManager()
        manager.add_matte_sphere((0, 1, 0), 0.5, (0.7, 0.3, 0.3))
        manager.clear()
        assert manager.get_sphere_count() == 0
        assert manager.get_material_count() == 0

    def test_build(self):
        """Test build produces a registry detached from the manager."""
        from pathtracer.scene.manager import SceneManager

        manager = SceneManager()
        manager.add_matte_sphere((0, 1, 0), 0.5, (0.7, 0.3, 0.3))
        scene = manager.build()
        manager.add_matte_sphere((0, 2, 0), 0.5, (0.7, 0.3, 0.3))
        assert len(scene) == 1
        assert scene.surfaces[0].material.reflectance == (0.7, 0.3, 0.3)


class TestSceneSerialization:
    """Tests for dictionary and JSON serialization."""

    def _populated(self):
        from pathtracer.scene.manager import SceneManager

        manager = SceneManager()
        glass = manager.add_glass_material(1.5)
        manager.add_sphere((-1.0, 1.0, 0.0), 0.5, glass)
        manager.add_sphere((-1.0, 1.0, 0.0), 0.4, glass, hollow=True)
        manager.add_metal_sphere((1.0, 1.0, 0.0), 0.5, (0.8, 0.6, 0.2), 1.0)
        return manager

    def test_to_dict(self):
        """Test the exported dictionary layout."""
        data = self._populated().to_dict()
        assert data["materials"][0] == {
            "type": "glass",
            "reflectance": [1.0, 1.0, 1.0],
            "refractive_index": 1.5,
        }
        assert data["materials"][1]["fuzz"] == 1.0
        assert "hollow" not in data["spheres"][0]
        assert data["spheres"][1]["hollow"] is True
        assert data["spheres"][2]["material_id"] == 1

    def test_dict_round_trip(self):
        """Test a scene survives export and import."""
        from pathtracer.scene.manager import SceneManager

        original = self._populated()
        restored = SceneManager()
        restored.from_dict(original.to_dict())
        assert restored.materials == original.materials
        assert restored.spheres == original.spheres

    def test_json_file_round_trip(self, tmp_path):
        """Test save_json and load_json."""
        from pathtracer.scene.manager import SceneManager

        original = self._populated()
        path = tmp_path / "scene.json"
        original.save_json(path)
        assert json.loads(path.read_text())["spheres"][1]["radius"] == 0.4

        restored = SceneManager.load_json(path)
        assert restored.to_dict() == original.to_dict()

    def test_from_dict_bad_material_reference(self):
        """Test a sphere pointing at a missing material is rejected."""
        from pathtracer.scene.manager import SceneManager

        data = {
            "materials": [{"type": "matte", "reflectance": [0.5, 0.5, 0.5]}],
            "spheres": [{"center": [0, 0, 0], "radius": 1.0, "material_id": 4}],
        }
        with pytest.raises(ValueError, match="Invalid material_id"):
            SceneManager().from_dict(data)

    @pytest.mark.parametrize(
        "data,message",
        [
            (
                {
                    "materials": [{"type": "matte"}],
                    "spheres": [{"center": [0.0, 1.0], "radius": 0.5, "material_id": 0}],
                },
                "center must have 3 components",
            ),
            (
                {"materials": [{"type": "metal", "reflectance": [0.5, 0.5]}], "spheres": []},
                "Reflectance must have 3 components",
            ),
            (
                {"materials": [{"type": "metal", "reflectance": 0.5}], "spheres": []},
                "Reflectance must be a list",
            ),
            ([{"type": "matte"}], "Scene configuration must be an object"),
            ({"materials": ["matte"], "spheres": []}, "Material configuration must be an object"),
        ],
    )
    def test_from_dict_malformed(self, data, message):
        """Test malformed configurations raise ValueError, not lookup errors."""
        from pathtracer.scene.manager import SceneManager

        with pytest.raises(ValueError, match=message):
            SceneManager().from_dict(data)
