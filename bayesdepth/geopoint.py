"""
Geographic points and the local Earth flattening transformation.

Internally everything works in colatitude (0-180 degrees) and longitude
(0-360 degrees). Points near a trial epicenter are projected onto a local
plane centered on the trial point, where simple linear algebra is accurate
enough over a few degrees.
"""

import math
from dataclasses import dataclass

import numpy as np


def fold_longitude(dlon):
    """Fold a longitude difference into [-180, 180) degrees."""
    return (dlon + 180.0) % 360.0 - 180.0


def to_colatitude(lat, lon):
    """
    Convert geographic latitude/longitude to colatitude/longitude (0-360).

    No range checking is done here, see the zone statistics for that.
    """
    colon = lon + 360.0 if lon < 0.0 else lon
    return 90.0 - lat, colon


@dataclass(frozen=True)
class GeographicPoint:
    """
    One geographic point with its Earth flattened coordinates.

    Attributes:
    -----------
    lat : float
        Geographic colatitude in degrees (0-180)
    lon : float
        Geographic longitude in degrees (0-360)
    x : float
        Earth flattened coordinate in degrees, positive east
    y : float
        Earth flattened coordinate in degrees, positive north
    """
    lat: float
    lon: float
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def relative_to(cls, lat, lon, reference):
        """
        Project a point onto the plane centered on ``reference``.

        The longitude difference is scaled by the sine of the point's
        colatitude and folded across the 0/360 degree seam.
        """
        x = math.sin(math.radians(lat)) * fold_longitude(lon - reference.lon)
        y = reference.lat - lat
        return cls(lat, lon, x, y)

    def distance(self, other):
        """Flattened distance in degrees between this point and another."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def vector(self, value=np.nan):
        """Interpolation 3-vector (x, y, value)."""
        return np.array([self.x, self.y, value], dtype=float)

    def __str__(self):
        return f"{self.lat:5.2f} {self.lon:6.2f} => ({self.x:4.2f}, {self.y:4.2f})"
