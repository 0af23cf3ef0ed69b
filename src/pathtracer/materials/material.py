"""Material descriptors.

A material is one of a closed set of kinds. The kind decides which scattering
law is applied at a hit; the remaining parameters feed that law:

    reflectance: per-channel attenuation applied at every bounce
    fuzz: metal only, scale of the random perturbation of the mirror direction
    refractive_index: glass only, index of refraction (default 1.5)

Parameters are stored as given. Reflectance outside [0, 1], negative fuzz and
indices below 1 are not rejected.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class MaterialKind(IntEnum):
    """Enumeration of scattering laws.

    The integer values are what the surface registry stores for kernel-side
    dispatch.
    """

    MATTE = 0
    METAL = 1
    GLASS = 2

    @classmethod
    def parse(cls, value: "str | int | MaterialKind") -> "MaterialKind":
        """Convert a name or integer into a MaterialKind.

        Raises:
            ValueError: If the value does not name a known kind.
        """
        if isinstance(value, MaterialKind):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown material kind: {value!r}") from None
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown material kind: {value!r}") from None


DEFAULT_REFLECTANCE = (0.5, 0.5, 0.5)
DEFAULT_REFRACTIVE_INDEX = 1.5


@dataclass(frozen=True)
class Material:
    """Material properties of a surface.

    Attributes:
        kind: The scattering law.
        reflectance: The attenuation color as (R, G, B).
        fuzz: Metal perturbation scale, nominally in [0, 1].
        refractive_index: Glass index of refraction, nominally >= 1.
    """

    kind: MaterialKind
    reflectance: tuple[float, float, float] = DEFAULT_REFLECTANCE
    fuzz: float = 0.0
    refractive_index: float = DEFAULT_REFRACTIVE_INDEX

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", MaterialKind.parse(self.kind))
        r = self.reflectance
        if len(r) != 3:
            raise ValueError(f"Reflectance must have 3 components, got {len(r)}")
        object.__setattr__(self, "reflectance", (float(r[0]), float(r[1]), float(r[2])))

    @classmethod
    def matte(cls, reflectance: tuple[float, float, float] = DEFAULT_REFLECTANCE) -> "Material":
        """A Lambertian diffuse material."""
        return cls(MaterialKind.MATTE, reflectance)

    @classmethod
    def metal(
        cls,
        reflectance: tuple[float, float, float] = DEFAULT_REFLECTANCE,
        fuzz: float = 0.0,
    ) -> "Material":
        """A specular material; fuzz 0 is a perfect mirror."""
        return cls(MaterialKind.METAL, reflectance, fuzz=fuzz)

    @classmethod
    def glass(
        cls,
        refractive_index: float = DEFAULT_REFRACTIVE_INDEX,
        reflectance: tuple[float, float, float] = (1.0, 1.0, 1.0),
    ) -> "Material":
        """A dielectric material; clear glass by default."""
        return cls(MaterialKind.GLASS, reflectance, refractive_index=refractive_index)

    def to_dict(self) -> dict[str, Any]:
        """Export to a JSON-compatible dictionary."""
        data: dict[str, Any] = {
            "type": self.kind.name.lower(),
            "reflectance": list(self.reflectance),
        }
        if self.kind == MaterialKind.METAL:
            data["fuzz"] = self.fuzz
        elif self.kind == MaterialKind.GLASS:
            data["refractive_index"] = self.refractive_index
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Material":
        """Load from a dictionary produced by to_dict().

        Raises:
            ValueError: If the type is missing or unknown, or the reflectance
                is not a 3-component list.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Material configuration must be an object, got {type(data).__name__}")
        if "type" not in data:
            raise ValueError("Material configuration is missing 'type'")
        kind = MaterialKind.parse(data["type"])
        default_reflectance = (1.0, 1.0, 1.0) if kind == MaterialKind.GLASS else DEFAULT_REFLECTANCE
        reflectance = data.get("reflectance", default_reflectance)
        if not isinstance(reflectance, (list, tuple)):
            raise ValueError(f"Reflectance must be a list of 3 components, got {reflectance!r}")
        return cls(
            kind,
            tuple(reflectance),
            fuzz=data.get("fuzz", 0.0),
            refractive_index=data.get("refractive_index", DEFAULT_REFRACTIVE_INDEX),
        )
