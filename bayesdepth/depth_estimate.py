"""
Depth estimate value types.

DepthEstimate is the Bayesian depth handed to the location solver and
SlabDepth is the raw slab depth triplet stored in the slab model.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum

import numpy as np

from .linear import vector

logger = logging.getLogger(__name__)


class DepthSource(Enum):
    """Provenance of a Bayesian depth."""
    SHALLOW = 'shallow'
    SLABINTERFACE = 'slab_interface'
    ZONEINTERFACE = 'zone_interface'
    SLABMODEL = 'slab_model'
    ZONESTATS = 'zone_stats'
    NEWZONESTATS = 'new_zone_stats'


@dataclass(frozen=True)
class DepthEstimate:
    """
    A Bayesian depth with its uncertainty.

    Attributes:
    -----------
    depth : float
        Earthquake depth in km
    lower : float
        Shallower bound of the earthquake depth in km
    upper : float
        Deeper bound of the earthquake depth in km
    spread : float
        Depth uncertainty in km
    source : DepthSource
        Dataset the estimate came from
    """
    depth: float
    lower: float
    upper: float
    spread: float
    source: DepthSource

    # Channel order used by the zone interpolation
    CHANNELS = ('depth', 'lower', 'upper', 'spread')

    @classmethod
    def from_spread(cls, depth, spread, source):
        """Symmetric estimate: the bounds are one spread either side."""
        return cls(depth, depth - spread, depth + spread, spread, source)

    @classmethod
    def from_channels(cls, values, source):
        depth, lower, upper, spread = (float(v) for v in values)
        return cls(depth, lower, upper, spread, source)

    def channels(self):
        """[depth, lower, upper, spread] as an array."""
        return np.array([self.depth, self.lower, self.upper, self.spread], dtype=float)

    def inflated(self, factor):
        """Copy with the spread inflated, used when an interpolation is incomplete."""
        return replace(self, spread=self.spread * factor)

    def clipped(self, depth_min, depth_max, min_spread=0.0):
        """Copy with depth and bounds clipped into the allowed range."""
        return replace(self,
                       depth=float(np.clip(self.depth, depth_min, depth_max)),
                       lower=float(np.clip(self.lower, depth_min, depth_max)),
                       upper=float(np.clip(self.upper, depth_min, depth_max)),
                       spread=max(self.spread, min_spread))

    def as_tuple(self):
        """The (depth, spread) pair consumed by the location solver."""
        return self.depth, self.spread

    def __str__(self):
        return f"{self.depth:5.1f} +/- {self.spread:5.1f} [{self.lower:5.1f}, {self.upper:5.1f}] {self.source.name}"


@dataclass(frozen=True, order=True)
class SlabDepth:
    """
    Slab depth triplet.

    For earthquake location the three depths are the shallow error bar, the
    earthquake depth and the deep error bar, all positive down in km.
    Triplets sort by earthquake depth.
    """
    center: float
    lower: float
    upper: float

    @classmethod
    def from_raw(cls, center, lower, upper):
        """Triplet from signed source depths (the slab files are negative down)."""
        return cls(abs(center), abs(lower), abs(upper))

    @classmethod
    def from_channels(cls, depths):
        """Triplet from [lower, center, upper]."""
        return cls(float(depths[1]), float(depths[0]), float(depths[2]))

    @property
    def eq_depth(self):
        return self.center

    def channels(self):
        """[lower, center, upper] as an array."""
        return np.array([self.lower, self.center, self.upper], dtype=float)

    def is_valid(self):
        return not np.isnan(self.center)

    def vectors(self, lat, lon):
        """
        Three position vectors (lon, colat, depth), one per channel.

        Parameters:
        -----------
        lat : float
            Geographic colatitude in degrees (0-180)
        lon : float
            Geographic longitude in degrees (0-360)
        """
        return [vector(lon, lat, depth) for depth in self.channels()]

    def widened(self, fraction):
        """
        Copy with both error bars pushed away from the earthquake depth.

        The shallow bar never goes above the surface.
        """
        lower = max(self.lower - fraction * (self.center - self.lower), 0.0)
        upper = self.upper + fraction * (self.upper - self.center)
        return SlabDepth(self.center, lower, upper)

    def __str__(self):
        return f"{self.lower:6.2f} < {self.center:6.2f} < {self.upper:6.2f}"
