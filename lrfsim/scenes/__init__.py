from .polygons import PolygonGroup
from .cube import Cube, cube_geometry

__all__ = ["PolygonGroup", "Cube", "cube_geometry"]
