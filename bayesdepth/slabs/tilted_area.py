"""
Regridding of tilted slab models.

Tilted slabs (the steep parts of some subduction zones) are sampled along
rows that run at odd angles with odd spacings, and are far denser than the
regular slab grid. Rather than sorting them out, every point of an area is
dropped into the nearest cell of a regular grid and each cell is merged
into a single depth triplet.
"""

import logging

import numpy as np

from ..depth_estimate import SlabDepth
from .slab_area import SlabArea
from .slab_point import SlabPoint
from .slab_row import SlabRow

logger = logging.getLogger(__name__)


class TiltedSample:
    """All the tilted slab points falling into one regular grid cell."""

    def __init__(self, lat, lon):
        self.lat = lat
        self.lon = lon
        self.points = []

    def add(self, point):
        self.points.append(point)

    def merge(self):
        """
        Merge the cell into one triplet: the shallowest shallow bound, the
        mean earthquake depth and the deepest deep bound.
        """
        if not self.points:
            return SlabDepth(np.nan, np.nan, np.nan)
        lower = min([1000.0] + [point.depth.lower for point in self.points])
        center = float(np.mean([point.depth.center for point in self.points]))
        upper = max([0.0] + [point.depth.upper for point in self.points])
        return SlabDepth(center, lower, upper)

    def to_point(self):
        return SlabPoint(self.lat, self.lon, self.merge())

    def __len__(self):
        return len(self.points)


class TiltedArea:
    """
    Buffer of tilted slab points for one area.

    Parameters:
    -----------
    increment : float
        Spacing of the regular grid in degrees
    tolerance : float
        Tolerance in degrees for comparing grid coordinates
    edge_widening : tuple of float
        Passed on to the resulting SlabArea
    """

    def __init__(self, increment, tolerance=1e-3, edge_widening=(0.5, 1.0)):
        self.increment = increment
        self.half_inc = 0.5 * increment
        self.tolerance = tolerance
        self.edge_widening = edge_widening
        self.lat_range = [500.0, 0.0]
        self.lon_range = [500.0, 0.0]
        self.pool = []
        self.grid = None

    def add(self, point):
        self.pool.append(point)
        self.lat_range = [min(self.lat_range[0], point.lat), max(self.lat_range[1], point.lat)]
        self.lon_range = [min(self.lon_range[0], point.lon), max(self.lon_range[1], point.lon)]

    def _snap(self, value):
        return self.increment * int((value + self.half_inc) / self.increment)

    def _bin(self, value, origin, size):
        index = int((value - origin + self.half_inc) / self.increment)
        return min(max(index, 0), size - 1)

    def make_grid(self):
        """Snap the area onto the regular grid and sort the pool into its cells."""
        if not self.pool:
            msg = "Cannot grid a tilted slab area without any points"
            logger.error(msg)
            raise ValueError(msg)
        self.lat_range = [self._snap(v) for v in self.lat_range]
        self.lon_range = [self._snap(v) for v in self.lon_range]
        num_lats = int(round((self.lat_range[1] - self.lat_range[0]) / self.increment)) + 1
        num_lons = int(round((self.lon_range[1] - self.lon_range[0]) / self.increment)) + 1

        self.grid = [[TiltedSample(self.lat_range[0] + i * self.increment,
                                   self.lon_range[0] + j * self.increment)
                      for j in range(num_lons)]
                     for i in range(num_lats)]
        for point in self.pool:
            i = self._bin(point.lat, self.lat_range[0], num_lats)
            j = self._bin(point.lon, self.lon_range[0], num_lons)
            self.grid[i][j].add(point)
        logger.debug(f"Tilted area {self}: {len(self.pool)} points in a {num_lats} x {num_lons} grid")

    def get_slab_area(self):
        """Convert the merged grid into an ordinary slab area."""
        if self.grid is None:
            self.make_grid()
        area = SlabArea(self.increment, self.tolerance, self.edge_widening)
        for samples in self.grid:
            row = SlabRow(self.increment, tolerance=self.tolerance)
            for sample in samples:
                row.add(sample.to_point())
            row.squeeze()
            area.add(row)
        return area

    def __str__(self):
        return (f"({self.lat_range[0]:6.2f},{self.lon_range[0]:6.2f}) - "
                f"({self.lat_range[1]:6.2f},{self.lon_range[1]:6.2f})")
