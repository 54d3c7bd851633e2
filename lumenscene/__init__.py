"""Scene graph, camera, geometry, BVH and ray-intersection toolkit for 3D rendering."""

__version__ = "0.1.0"