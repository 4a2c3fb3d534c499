"""An orbiting viewer for a lit OBJ model.

The eye sits on a sphere around the origin, placed by a longitude, a
latitude and a distance. The model is drawn at half size with per-mesh
diffuse and specular material properties and a point light.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .objloader import Loader
from .transforms import inverse_transpose, look_at, perspective, rotate, scale

LONGITUDE_RANGE = (-180.0, 180.0)
LATITUDE_RANGE = (-89.0, 89.0)
DISTANCE_RANGE = (2.0, 14.0)

_MODEL_SCALE = 0.5
# The projection takes this value as radians, as the viewer always has.
_FOV = 45.0
_NEAR = 0.01
_FAR = 100.0


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, float(value)))


@dataclass(frozen=True, eq=False)
class MeshDrawData:
    """Vertex arrays and material values needed to draw one mesh."""

    positions: np.ndarray
    normals: np.ndarray
    diffuse: tuple[float, float, float]
    specular: tuple[float, float, float]
    specular_exponent: float

    @property
    def vertex_count(self) -> int:
        return len(self.positions)


def mesh_draw_data(loader: Loader) -> list[MeshDrawData]:
    """Split every non-empty mesh of ``loader`` into draw-ready arrays."""
    materials = loader.materials
    result = []
    for mesh in loader.meshes:
        if not mesh.vertices:
            continue
        material = materials[mesh.material_id]
        positions = np.array([v.position for v in mesh.vertices], dtype=np.float32)
        normals = np.array([v.normal for v in mesh.vertices], dtype=np.float32)
        result.append(
            MeshDrawData(
                positions=positions.reshape(-1, 3),
                normals=normals.reshape(-1, 3),
                diffuse=tuple(material.kd[:3]),
                specular=tuple(material.ks[:3]),
                specular_exponent=material.kn,
            )
        )
    return result


class OrbitView:
    """Eye placed on a sphere around the origin, with a movable light."""

    def __init__(self) -> None:
        self.at = np.array([0.0, 0.0, -1.0])
        self.up = np.array([0.0, 1.0, 0.0])
        self.light_position = np.array([0.0, 0.0, 8.0])
        self._longitude = 0.0
        self._latitude = 0.0
        self._distance = 8.0
        self.eye = np.zeros(3)
        self.update_eye()

    @property
    def longitude(self) -> float:
        """Rotation about the vertical axis, in degrees."""
        return self._longitude

    @longitude.setter
    def longitude(self, value: float) -> None:
        self._longitude = _clamp(value, LONGITUDE_RANGE)
        self.update_eye()

    @property
    def latitude(self) -> float:
        """Elevation above the horizontal plane, in degrees."""
        return self._latitude

    @latitude.setter
    def latitude(self, value: float) -> None:
        self._latitude = _clamp(value, LATITUDE_RANGE)
        self.update_eye()

    @property
    def distance(self) -> float:
        """Distance from the origin to the eye."""
        return self._distance

    @distance.setter
    def distance(self, value: float) -> None:
        self._distance = _clamp(value, DISTANCE_RANGE)
        self.update_eye()

    def update_eye(self) -> None:
        """Recompute the eye position from longitude, latitude and distance."""
        identity = np.identity(4)
        lat = rotate(identity, math.radians(self._latitude), (1.0, 0.0, 0.0))
        lon = rotate(identity, math.radians(self._longitude), (0.0, 1.0, 0.0))
        eye = lon @ lat @ np.array([0.0, 0.0, self._distance, 1.0])
        self.eye = eye[:3]

    def model_view(self) -> np.ndarray:
        """View matrix with the model scaled down by half."""
        view = look_at(self.eye, self.at, self.up)
        return scale(view, (_MODEL_SCALE, _MODEL_SCALE, _MODEL_SCALE))

    def normal_matrix(self) -> np.ndarray:
        """3x3 matrix transforming normals into view space."""
        return inverse_transpose(self.model_view()[:3, :3])

    def light_position_view(self) -> np.ndarray:
        """Light position transformed by the model-view matrix."""
        point = np.append(self.light_position, 1.0)
        return (self.model_view() @ point)[:3]

    def copy_camera_to_light(self) -> None:
        """Move the light to where the eye currently is."""
        self.light_position = self.eye.copy()

    def projection(self, width: int, height: int) -> np.ndarray:
        """Perspective projection for a framebuffer of the given size."""
        if height == 0:
            raise ValueError("framebuffer height must be non-zero")
        return perspective(_FOV, width / height, _NEAR, _FAR)