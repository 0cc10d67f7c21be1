"""
Zone statistics on the variable spacing grid.

Rows are equally spaced in colatitude, but each row has its own longitude
spacing so that samples stay roughly equal area toward the poles. Each
sample carries a Bayesian depth and its error derived from the historical
seismicity near the sample.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import pandas as pd

from ..depth_estimate import DepthEstimate, DepthSource
from .grid_model import ZoneGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewZonePoint:
    """
    Statistics for one variable grid sample.

    Attributes:
    -----------
    lon : float
        Sample longitude in degrees
    count : int
        Number of earthquakes contributing to the sample
    depth : float
        Bayesian depth in km
    depth_error : float
        Bayesian depth error in km
    """
    lon: float
    count: int
    depth: float
    depth_error: float


@dataclass
class NewZoneRow:
    """One latitude row of the variable grid (``lat`` is a colatitude)."""
    lat: float
    lon_spacing: float
    num_lons: int
    samples: Optional[List[Optional[NewZonePoint]]] = field(default=None, repr=False)

    def put_sample(self, column, point):
        if self.samples is None:
            self.samples = [None] * self.num_lons
        self.samples[column] = point

    def get_sample(self, column):
        if self.samples is None:
            return None
        return self.samples[column]

    def __len__(self):
        return self.num_lons


class VariableZoneStats(ZoneGrid):
    """
    Zone statistics on the variable spacing grid.

    Parameters:
    -----------
    first_row_lat : float
        Geographic latitude of the first (northernmost) row in degrees
    last_row_lat : float
        Geographic latitude of the last (southernmost) row in degrees
    lat_spacing : float
        Row spacing in degrees
    num_lats : int
        Number of rows
    config : DepthPriorConfig, optional
        Depth limits and tuning parameters
    """

    depth_source = DepthSource.NEWZONESTATS

    def __init__(self, first_row_lat, last_row_lat, lat_spacing, num_lats, config=None):
        super().__init__(config)
        if lat_spacing <= 0 or num_lats < 1:
            msg = f"Invalid variable grid: lat_spacing={lat_spacing}, num_lats={num_lats}"
            logger.error(msg)
            raise ValueError(msg)
        self.first_row_lat = 90.0 - first_row_lat
        self.last_row_lat = 90.0 - last_row_lat
        self.lat_spacing = lat_spacing
        self.lat_rows: List[Optional[NewZoneRow]] = [None] * num_lats

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, lat_spacing, config=None):
        """
        Build the grid from a table with one row per populated sample.

        Parameters:
        -----------
        df : pd.DataFrame
            Columns lat, lon, lon_spacing, count, depth and depth_error, with
            geographic coordinates in degrees
        lat_spacing : float
            Row spacing in degrees
        """
        required = ['lat', 'lon', 'lon_spacing', 'count', 'depth', 'depth_error']
        missing = [col for col in required if col not in df.columns]
        if missing:
            msg = f"Variable zone table is missing columns: {missing}"
            logger.error(msg)
            raise ValueError(msg)
        if df.empty:
            msg = "Variable zone table is empty"
            logger.error(msg)
            raise ValueError(msg)

        first_lat = float(df['lat'].max())
        last_lat = float(df['lat'].min())
        num_lats = int(round((first_lat - last_lat) / lat_spacing)) + 1
        stats = cls(first_lat, last_lat, lat_spacing, num_lats, config=config)

        row_spacing = {}
        for lat, group in df.groupby('lat'):
            spacings = group['lon_spacing'].unique()
            if len(spacings) != 1:
                msg = f"Row at latitude {lat} has inconsistent longitude spacings {spacings}"
                logger.error(msg)
                raise ValueError(msg)
            row_spacing[int(round((first_lat - lat) / lat_spacing))] = float(spacings[0])

        # Rows without any samples still need a longitude spacing, borrow the nearest
        known = sorted(row_spacing)
        for row in range(num_lats):
            if row in row_spacing:
                spacing = row_spacing[row]
            else:
                spacing = row_spacing[min(known, key=lambda k: abs(k - row))]
            stats.init_row(row, first_lat - row * lat_spacing, spacing,
                           int(round(360.0 / spacing)))

        for rec in df.itertuples(index=False):
            row = int(round((first_lat - rec.lat) / lat_spacing))
            column = int(round((rec.lon % 360.0) / rec.lon_spacing)) % stats.lat_rows[row].num_lons
            stats.put_sample(row, column,
                             NewZonePoint(float(rec.lon), int(rec.count), float(rec.depth),
                                          float(rec.depth_error)))
        return stats

    def init_row(self, row, lat, lon_spacing, num_lons):
        """Set up an empty row at geographic latitude ``lat``."""
        self.lat_rows[row] = NewZoneRow(90.0 - lat, lon_spacing, num_lons)

    def put_sample(self, row, column, point):
        self.lat_rows[row].put_sample(column, point)

    def get_sample(self, row, column):
        return self.lat_rows[row].get_sample(column)

    @property
    def num_rows(self):
        return len(self.lat_rows)

    def get_stats(self, lat_index, lon_index) -> Optional[NewZonePoint]:
        return self.lat_rows[lat_index].get_sample(lon_index)

    def get_stats_at(self, lat, lon) -> Optional[NewZonePoint]:
        colat, colon = self.canonical_coords(lat, lon)
        if np.isnan(colat) or np.isnan(colon):
            return None
        return self.get_stats(*self.indices(colat, colon))

    def get_bayes_depth(self, lat_index, lon_index):
        point = self.get_stats(lat_index, lon_index)
        if point is None or np.isnan(point.depth):
            return None
        cfg = self.config
        depth = min(max(point.depth, cfg.depth_min), cfg.depth_max)
        return DepthEstimate.from_spread(depth, max(point.depth_error, cfg.zone_stats_spread),
                                         self.depth_source)

    def canonical_coords(self, lat, lon):
        colat = 90.0 - lat
        colon = lon if lon >= 0.0 else lon + 360.0
        if colat > 180.0 or colat < 0.0:
            colat = np.nan
        if colon > 360.0 or colon < 0.0:
            colon = np.nan
        return colat, colon

    def new_lat_index(self, colat):
        index = int(round((colat - self.first_row_lat) / self.lat_spacing))
        return min(max(index, 0), self.num_rows - 1)

    def new_lon_index(self, lat_index, colon):
        row = self.lat_rows[lat_index]
        index = int(((colon + 0.5 * row.lon_spacing) % 360.0) / row.lon_spacing)
        return min(index, len(row) - 1)

    def wrap_lon_index(self, lat_index, lon_index):
        return lon_index % self.lat_rows[lat_index].num_lons

    def lat_from_index(self, lat_index):
        colat = self.first_row_lat + lat_index * self.lat_spacing
        if colat < 0.0 or colat > 180.0:
            return np.nan
        return colat

    def lon_from_index(self, lat_index, lon_index):
        return (lon_index * self.lat_rows[lat_index].lon_spacing) % 360.0

    def __repr__(self):
        return (f"VariableZoneStats(rows={self.num_rows}, first_row_lat={self.first_row_lat:.2f}, "
                f"lat_spacing={self.lat_spacing:.2f})")
