"""
Slab model latitude rows and the gap free segments within them.
"""

import logging
import math
from typing import List

import numpy as np

logger = logging.getLogger(__name__)


class SlabSegment:
    """
    A run of slab samples in one row without any gaps.

    The segment covers half an increment beyond its first and last samples.

    Parameters:
    -----------
    points : list of SlabPoint
        Consecutive samples, all with valid earthquake depths
    increment : float
        Longitude spacing of the samples in degrees
    tolerance : float
        Tolerance in degrees for snapping onto the sample grid
    """

    def __init__(self, points, increment, tolerance=1e-3):
        self.increment = increment
        self.tolerance = tolerance
        self.first_lon = points[0].lon
        self.depths = [point.depth for point in points]
        half_inc = 0.5 * increment
        self.lon_range = (points[0].lon - half_inc, points[-1].lon + half_inc)

    def __len__(self):
        return len(self.depths)

    def contains(self, lon):
        return self.lon_range[0] <= lon <= self.lon_range[1]

    def sample_index(self, lon):
        """Index of the sample at or just west of ``lon``."""
        j = math.floor((lon - self.first_lon) / self.increment + self.tolerance)
        return min(max(j, 0), len(self.depths) - 1)

    def sample_lon(self, j):
        return self.first_lon + j * self.increment

    def get_depth(self, lon):
        return self.depths[self.sample_index(lon)]

    def vectors(self, lat, lon):
        """
        Depth vectors for the samples bracketing ``lon``.

        Returns:
        --------
        list
            Two slots, the sample at or west of ``lon`` and its eastern
            neighbor. Each slot holds one (lon, colat, depth) vector per depth
            channel, or None past the end of the segment.
        """
        j = self.sample_index(lon)
        slots = [self.depths[j].vectors(lat, self.sample_lon(j)), None]
        if j + 1 < len(self.depths):
            slots[1] = self.depths[j + 1].vectors(lat, self.sample_lon(j + 1))
        return slots

    def __str__(self):
        return (f"{self.lon_range[0]:6.2f}-{self.lon_range[1]:6.2f}: "
                f"{self.depths[0].eq_depth:6.2f}-{self.depths[-1].eq_depth:6.2f}")


class SlabRow:
    """
    One latitude row of a slab area.

    A row collects points while the area is being read, then ``squeeze``
    turns the points into segments. A row without segments is a dummy row
    standing in for a missing latitude.

    Parameters:
    -----------
    increment : float
        Grid spacing in degrees
    lat : float, optional
        Geographic colatitude of the row, taken from the points if not given
    tolerance : float
        Tolerance in degrees for snapping onto the sample grid
    """

    def __init__(self, increment, lat=np.nan, tolerance=1e-3):
        self.increment = increment
        self.lat = lat
        self.tolerance = tolerance
        self.lon_range = None
        self.points = []
        self.segments: List[SlabSegment] = []

    @classmethod
    def dummy(cls, lat, increment, tolerance=1e-3):
        """An empty row filling a latitude gap."""
        row = cls(increment, lat=lat, tolerance=tolerance)
        row.points = None
        return row

    @property
    def is_dummy(self):
        return not self.segments

    def add(self, point):
        self.points.append(point)

    def squeeze(self):
        """Replace the raw points with segments, dropping points without a depth."""
        if not self.points:
            self.points = None
            return
        self.lat = self.points[0].lat

        run = []
        for point in self.points:
            if np.isnan(point.eq_depth):
                if run:
                    self._add_segment(run)
                    run = []
            else:
                run.append(point)
        if run:
            self._add_segment(run)
        self.points = None

    def _add_segment(self, run):
        segment = SlabSegment(run, self.increment, self.tolerance)
        self.segments.append(segment)
        if self.lon_range is None:
            self.lon_range = [segment.lon_range[0], segment.lon_range[1]]
        else:
            self.lon_range[1] = segment.lon_range[1]

    def find(self, lon):
        """Index of the segment containing ``lon``, or -1."""
        if self.lon_range is not None and self.lon_range[0] <= lon <= self.lon_range[1]:
            for j, segment in enumerate(self.segments):
                if segment.contains(lon):
                    return j
        return -1

    def get_vectors(self, lon, segment=None):
        """
        Depth vectors bracketing ``lon`` in this row.

        Parameters:
        -----------
        lon : float
            Geographic longitude in degrees
        segment : int, optional
            Segment index already found for ``lon``

        Returns:
        --------
        list
            Two slots as returned by ``SlabSegment.vectors``, both None if the
            row doesn't cover ``lon``
        """
        if segment is None:
            segment = self.find(lon)
        if segment < 0:
            return [None, None]
        return self.segments[segment].vectors(self.lat, lon)

    def describe(self):
        lines = [f"Row: {self}"]
        lines.extend(f"\tSeg: {segment}" for segment in self.segments)
        return "\n".join(lines)

    def __str__(self):
        if self.lon_range is None:
            return f"({self.lat:6.2f}, No slabs)"
        return f"({self.lat:6.2f},{self.lon_range[0]:6.2f}-{self.lon_range[1]:6.2f})"
