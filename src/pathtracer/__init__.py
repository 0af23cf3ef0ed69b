"""Monte Carlo path tracer for sphere scenes, built on Taichi.

This package renders scenes made of spheres with matte, metal and glass
materials under a sky gradient:
- Vector kernel and random sampling helpers
- Sphere intersection and a nearest-hit surface registry
- Material scattering (Lambertian, fuzzy metal, Schlick glass)
- Depth-bounded path estimation with anti-aliased progressive sampling

Subpackages:
    core: Vector math, the path estimator and the sampler driver
    geometry: Sphere primitive and ray-sphere intersection
    materials: Material descriptions and scattering functions
    scene: Surface registry, scene manager and preset scenes
    camera: Viewport camera for primary rays
    preview: Gamma conversion, PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
