"""
Slab areas: rectangular patches of one slab model sampled on a regular grid.

Each area is an ordered sequence of latitude rows, one increment apart, so
the row containing a point can be computed arithmetically. Latitudes with
no samples are filled with dummy rows. Finding a point and interpolating
its depth are separate steps linked by an immutable SlabMatch.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..depth_estimate import SlabDepth
from ..linear import one_d, three_d, two_d, vector
from .slab_row import SlabRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlabMatch:
    """
    Where a point was found in a slab area.

    Attributes:
    -----------
    row : int
        Index of the base row (the row at or just north of the point)
    segment : int
        Segment index in the base row, -1 if only the next row covers the point
    point : int
        Sample index in the matched segment
    lon : float
        Longitude the point matched at, shifted by 360 degrees for areas
        crossing the prime meridian
    """
    row: int
    segment: int
    point: int
    lon: float


class SlabArea:
    """
    A rectangular slab patch.

    Parameters:
    -----------
    increment : float
        Latitude and longitude grid spacing in degrees
    tolerance : float
        Tolerance in degrees for comparing grid coordinates
    edge_widening : tuple of float
        Fraction of the bound gaps added to the bounds when two (first value)
        or three (second value) of the four grid corners are missing
    """

    def __init__(self, increment, tolerance=1e-3, edge_widening=(0.5, 1.0)):
        self.increment = increment
        self.half_inc = 0.5 * increment
        self.tolerance = tolerance
        self.edge_widening = edge_widening
        self.lat_base = 180.0
        self.lat_range = [180.0, 0.0]
        self.lon_range = [360.0, 0.0]
        self.rows: List[SlabRow] = []

    def add(self, row: SlabRow):
        """Add a squeezed row, ignoring rows without any slab samples."""
        if row.lon_range is None:
            return
        self.lat_base = min(self.lat_base, row.lat)
        self.lat_range[0] = min(self.lat_range[0], row.lat - self.half_inc)
        self.lat_range[1] = max(self.lat_range[1], row.lat + self.half_inc)
        self.lon_range[0] = min(self.lon_range[0], row.lon_range[0])
        self.lon_range[1] = max(self.lon_range[1], row.lon_range[1])
        self.rows.append(row)

    @property
    def is_empty(self):
        return not self.rows

    def fix_gaps(self):
        """Sort the rows and insert dummy rows wherever a latitude is missing."""
        self.rows.sort(key=lambda row: row.lat)
        last_lat = self.lat_base - self.increment
        j = 0
        while j < len(self.rows):
            if self.rows[j].lat - last_lat > self.increment + self.tolerance:
                last_lat += self.increment
                self.rows.insert(j, SlabRow.dummy(last_lat, self.increment, self.tolerance))
            else:
                last_lat = self.rows[j].lat
            j += 1

    def _in_box(self, lat, lon):
        return (self.lat_range[0] <= lat <= self.lat_range[1]
                and self.lon_range[0] <= lon <= self.lon_range[1])

    def find(self, lat, lon) -> Optional[SlabMatch]:
        """
        Find the rows bracketing a point.

        Parameters:
        -----------
        lat : float
            Geographic colatitude in degrees
        lon : float
            Geographic longitude in degrees (0-360)

        Returns:
        --------
        SlabMatch or None
        """
        if self.is_empty:
            return None
        lons = [lon]
        if self.lon_range[1] > 360.0:
            lons.append(lon + 360.0)

        for trial_lon in lons:
            if not self._in_box(lat, trial_lon):
                continue
            j = int((lat - self.lat_base) / self.increment + self.tolerance)
            j = min(max(j, 0), len(self.rows) - 1)
            row = self.rows[j]
            if row.is_dummy:
                # Points nearest the gap latitude have nothing to interpolate from
                if lat < row.lat + self.half_inc - self.tolerance:
                    return None
                segment = -1
            else:
                segment = row.find(trial_lon)
            if segment >= 0:
                point = row.segments[segment].sample_index(trial_lon)
                return SlabMatch(j, segment, point, trial_lon)
            if j + 1 < len(self.rows):
                next_row = self.rows[j + 1]
                next_segment = next_row.find(trial_lon)
                if next_segment >= 0:
                    point = next_row.segments[next_segment].sample_index(trial_lon)
                    return SlabMatch(j, -1, point, trial_lon)
        return None

    def is_found(self, lat, lon):
        return self.find(lat, lon) is not None

    def get_depth(self, lat, lon, match: Optional[SlabMatch] = None) -> Optional[SlabDepth]:
        """
        Interpolate the slab depth triplet at a point.

        Parameters:
        -----------
        lat : float
            Geographic colatitude in degrees
        lon : float
            Geographic longitude in degrees (0-360)
        match : SlabMatch, optional
            Result of ``find`` for the same point, found here if not given

        Returns:
        --------
        SlabDepth or None
        """
        if match is None:
            match = self.find(lat, lon)
        if match is None or not 0 <= match.row < len(self.rows):
            return None

        lon = match.lon
        base_row = self.rows[match.row]
        if match.segment >= 0:
            v0 = base_row.get_vectors(lon, match.segment)
        else:
            v0 = [None, None]
        if match.row + 1 < len(self.rows):
            v1 = self.rows[match.row + 1].get_vectors(lon)
        else:
            v1 = None

        v0, v1 = self.align(v0, v1)
        return self.interpolate(v0, v1, vector(lon, lat))

    @staticmethod
    def align(v0, v1):
        """
        Line up the bracketing samples of two adjacent rows.

        If the rows' first slots sit at different longitudes, the row that is
        one step east moves its first sample into the second slot so that
        corresponding corners line up.
        """
        if v0 is None or v1 is None or v0[0] is None or v1[0] is None:
            return v0, v1
        lon0 = v0[0][0][0]
        lon1 = v1[0][0][0]
        if lon0 == lon1:
            return v0, v1
        if lon0 < lon1:
            return v0, [None, v1[0]]
        return [None, v0[0]], v1

    def interpolate(self, v0, v1, v) -> Optional[SlabDepth]:
        """
        Interpolate the depth channels from up to four grid corners.

        Parameters:
        -----------
        v0 : list
            Two slots from the base row
        v1 : list or None
            Two slots from the next row, None past the last row
        v : np.ndarray
            Query point (lon, colat)

        Returns:
        --------
        SlabDepth or None
            None when all four corners are missing
        """
        rows = [v0, v1 if v1 is not None else [None, None]]
        absent = sum(slot is None for row in rows for slot in row)
        # Corners in origin, +x, +y, +x+y order
        corners = [v0[0], v0[1], rows[1][0], rows[1][1]]
        present = [slot for i in range(2) for slot in (v0[i], rows[1][i]) if slot is not None]
        logger.debug(f"Slab interpolation with {absent} missing corners")

        if absent == 0:
            depths = [three_d(*(corner[k] for corner in corners), v) for k in range(3)]
            return SlabDepth.from_channels(depths)
        if absent == 1:
            depths = [two_d(present[0][k], present[1][k], present[2][k], v) for k in range(3)]
            return SlabDepth.from_channels(depths)
        if absent == 2:
            depths = [one_d(present[0][k], present[1][k], v) for k in range(3)]
            return SlabDepth.from_channels(depths).widened(self.edge_widening[0])
        if absent == 3:
            depths = [present[0][k][2] for k in range(3)]
            return SlabDepth.from_channels(depths).widened(self.edge_widening[1])
        return None

    def row_census(self):
        """Log the row latitudes, flagging dummy rows and unexpected jumps."""
        if not logger.isEnabledFor(logging.DEBUG) or self.is_empty:
            return
        lat = self.rows[0].lat - self.increment
        for row in self.rows:
            lat += self.increment
            while abs(row.lat - lat) > self.tolerance and lat < row.lat:
                logger.debug(f"Missing row at {lat:6.2f}")
                lat += self.increment
            if row.is_dummy:
                logger.debug(f"Dummy row at {row.lat:6.2f}")

    def describe(self, full=False):
        lines = [f"Area: {self}"]
        if full:
            lines.extend(row.describe() for row in self.rows)
        return "\n".join(lines)

    def __str__(self):
        return (f"({self.lat_range[0]:6.2f},{self.lon_range[0]:6.2f}) - "
                f"({self.lat_range[1]:6.2f},{self.lon_range[1]:6.2f})")
