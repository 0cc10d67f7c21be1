"""
One slab model sample point.
"""

from dataclasses import dataclass

from ..depth_estimate import SlabDepth


@dataclass(frozen=True)
class SlabPoint:
    """
    A slab depth triplet at one grid point.

    Attributes:
    -----------
    lat : float
        Geographic colatitude in degrees (0-180)
    lon : float
        Geographic longitude in degrees (0-360)
    depth : SlabDepth
        Shallow bound, earthquake depth and deep bound in km
    """
    lat: float
    lon: float
    depth: SlabDepth

    @classmethod
    def from_raw(cls, lat, lon, center, lower, upper):
        """
        Point from the slab file convention, where depths are negative down.

        The shallow bound can't be above the surface.
        """
        return cls(lat, lon, SlabDepth.from_raw(center, min(lower, 0.0), upper))

    @property
    def eq_depth(self):
        return self.depth.center

    def __str__(self):
        return f"({self.lat:6.2f}, {self.lon:6.2f}): {self.depth}"
