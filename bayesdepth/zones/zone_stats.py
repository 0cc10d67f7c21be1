"""
Legacy zone statistics on the fixed 1x1 degree (Marsden square) grid.

The statistics summarize historical free depth earthquakes in each cell:
the mean, minimum and maximum free depth. Cells without statistics are
absent from the compact statistics array and are flagged by a key of -1.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..depth_estimate import DepthEstimate, DepthSource
from .grid_model import ZoneGrid

logger = logging.getLogger(__name__)

NUM_LONS = 360
NUM_LATS = 180


@dataclass(frozen=True)
class ZoneStat:
    """
    Historical free depth statistics for one Marsden square.

    Attributes:
    -----------
    mean_depth : float
        Mean free depth in km
    min_depth : float
        Minimum free depth in km
    max_depth : float
        Maximum free depth in km
    """
    mean_depth: float
    min_depth: float
    max_depth: float


class FixedZoneStats(ZoneGrid):
    """
    Zone statistics on the fixed 1x1 degree grid.

    Parameters:
    -----------
    zone_keys : array_like of int, shape (360, 180)
        Longitude-major key table into ``zone_stats``, -1 where a cell has
        no statistics
    zone_stats : array_like, shape (n, 3)
        Mean, minimum and maximum free depth for each key
    num_years : int
        Number of years of earthquakes summarized
    config : DepthPriorConfig, optional
        Depth limits and tuning parameters
    """

    depth_source = DepthSource.ZONESTATS

    def __init__(self, zone_keys, zone_stats, num_years=0, config=None):
        super().__init__(config)
        zone_keys = np.asarray(zone_keys, dtype=int)
        zone_stats = np.asarray(zone_stats, dtype=float)
        if zone_keys.shape != (NUM_LONS, NUM_LATS):
            msg = f"Zone key table must have shape ({NUM_LONS}, {NUM_LATS}), got {zone_keys.shape}"
            logger.error(msg)
            raise ValueError(msg)
        if zone_stats.ndim != 2 or zone_stats.shape[1] != 3:
            msg = f"Zone statistics must have shape (n, 3), got {zone_stats.shape}"
            logger.error(msg)
            raise ValueError(msg)
        if zone_keys.max() >= len(zone_stats):
            msg = f"Zone key {zone_keys.max()} is out of range for {len(zone_stats)} statistics"
            logger.error(msg)
            raise ValueError(msg)

        self.zone_keys = zone_keys
        self.zone_stats = zone_stats
        self.num_years = num_years
        self.first_row_lat = 0.5
        self.last_row_lat = 179.5
        self.lat_spacing = 1.0

    @classmethod
    def from_arrays(cls, zone_keys, zone_stats: Sequence[ZoneStat], num_years=0, config=None):
        """Build the grid from a key table and a sequence of ZoneStat."""
        stats = np.array([[s.mean_depth, s.min_depth, s.max_depth] for s in zone_stats],
                         dtype=float).reshape(-1, 3)
        return cls(zone_keys, stats, num_years=num_years, config=config)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, num_years=0, config=None):
        """
        Build the grid from a table with one row per populated cell.

        Parameters:
        -----------
        df : pd.DataFrame
            Columns lat_index, lon_index, mean_depth, min_depth and max_depth
        """
        required = ['lat_index', 'lon_index', 'mean_depth', 'min_depth', 'max_depth']
        missing = [col for col in required if col not in df.columns]
        if missing:
            msg = f"Zone statistics table is missing columns: {missing}"
            logger.error(msg)
            raise ValueError(msg)

        lat_index = df['lat_index'].to_numpy(dtype=int)
        lon_index = df['lon_index'].to_numpy(dtype=int)
        if (np.any(lat_index < 0) or np.any(lat_index >= NUM_LATS)
                or np.any(lon_index < 0) or np.any(lon_index >= NUM_LONS)):
            msg = "Zone statistics table has cell indices outside the 1x1 degree grid"
            logger.error(msg)
            raise ValueError(msg)

        zone_keys = np.full((NUM_LONS, NUM_LATS), -1, dtype=int)
        zone_keys[lon_index, lat_index] = np.arange(len(df))
        stats = df[['mean_depth', 'min_depth', 'max_depth']].to_numpy(dtype=float)
        return cls(zone_keys, stats, num_years=num_years, config=config)

    @property
    def num_rows(self):
        return NUM_LATS

    @property
    def size(self):
        """Number of cells with statistics."""
        return int(np.count_nonzero(self.zone_keys >= 0))

    def canonical_coords(self, lat, lon):
        colat = 90.0 - lat
        colon = lon if lon > 0.0 else lon + 360.0
        if colat > 180.0 or colat < 0.0:
            colat = np.nan
        if colon > 360.0 or colon < 0.0:
            colon = np.nan
        else:
            colon %= 360.0
        return colat, colon

    def new_lat_index(self, colat):
        if colat < 180.0:
            return int(colat)
        return NUM_LATS - 1

    def new_lon_index(self, lat_index, colon):
        return int(colon) % NUM_LONS

    def indices(self, colat, colon):
        # All longitudes collapse onto the first cell at the poles
        lat_index = self.new_lat_index(colat)
        if 0.0 < colat < 180.0:
            return lat_index, self.new_lon_index(lat_index, colon)
        return lat_index, 0

    def wrap_lon_index(self, lat_index, lon_index):
        return lon_index % NUM_LONS

    def lat_from_index(self, lat_index):
        return lat_index + 0.5

    def lon_from_index(self, lat_index, lon_index):
        return (lon_index + 0.5) % 360.0

    def get_stats(self, lat_index, lon_index) -> Optional[ZoneStat]:
        """Raw statistics for a cell, or None if the cell is empty."""
        key = self.zone_keys[lon_index, lat_index]
        if key < 0:
            return None
        return ZoneStat(*(float(v) for v in self.zone_stats[key]))

    def get_stats_at(self, lat, lon) -> Optional[ZoneStat]:
        """Raw statistics for the cell containing a geographic point."""
        colat, colon = self.canonical_coords(lat, lon)
        if np.isnan(colat) or np.isnan(colon):
            return None
        return self.get_stats(*self.indices(colat, colon))

    def get_bayes_depth(self, lat_index, lon_index):
        stat = self.get_stats(lat_index, lon_index)
        if stat is None:
            return None

        cfg = self.config
        mean_depth = min(max(stat.mean_depth, cfg.depth_min), cfg.depth_max)
        min_depth = min(max(stat.min_depth, cfg.depth_min), cfg.depth_max)
        max_depth = min(max(stat.max_depth, cfg.depth_min), cfg.depth_max)

        if min_depth >= max_depth or mean_depth <= min_depth or mean_depth >= max_depth:
            logger.debug(f"Repairing statistics at ({lat_index}, {lon_index}): "
                         f"{min_depth:.2f} < {mean_depth:.2f} < {max_depth:.2f}")
            if mean_depth < cfg.repair_pivot_depth:
                min_depth = max(mean_depth - 0.5 * cfg.default_depth_se, cfg.depth_min)
                max_depth = min_depth + cfg.default_depth_se
            else:
                max_depth = min(mean_depth + 0.5 * cfg.default_depth_se, cfg.depth_max)
                min_depth = max_depth - cfg.default_depth_se

        return DepthEstimate(mean_depth, min_depth, max_depth, cfg.zone_stats_spread,
                             self.depth_source)

    def __repr__(self):
        return f"FixedZoneStats(cells={self.size}, num_years={self.num_years})"
