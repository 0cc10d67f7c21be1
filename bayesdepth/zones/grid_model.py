"""
Common interface for the zone statistics grids.

Both the legacy Marsden square statistics and the variable spacing
statistics implement this interface, so the interpolation code only ever
talks to a ZoneGrid.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from ..config import DEFAULT_CONFIG
from .zone_interpolate import ZoneInterpolator

logger = logging.getLogger(__name__)


class ZoneGrid(ABC):
    """
    Abstract zone statistics grid.

    Attributes:
    -----------
    first_row_lat : float
        Colatitude of the first latitude row in degrees
    last_row_lat : float
        Colatitude of the last latitude row in degrees
    lat_spacing : float
        Spacing between latitude rows in degrees
    config : DepthPriorConfig
        Depth limits and tuning parameters
    """

    depth_source = None

    def __init__(self, config=None):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.first_row_lat = np.nan
        self.last_row_lat = np.nan
        self.lat_spacing = np.nan
        self._interpolator = None

    @property
    @abstractmethod
    def num_rows(self):
        """Number of latitude rows."""

    @abstractmethod
    def canonical_coords(self, lat, lon):
        """
        Convert geographic latitude/longitude to colatitude (0-180) and
        longitude (0-360). Out of range coordinates come back as NaN.
        """

    @abstractmethod
    def new_lat_index(self, colat):
        """Index of the latitude row nearest a colatitude."""

    @abstractmethod
    def new_lon_index(self, lat_index, colon):
        """Index of the longitude sample nearest a longitude in a row."""

    @abstractmethod
    def wrap_lon_index(self, lat_index, lon_index):
        """Wrap a longitude index that has wandered off either end of a row."""

    @abstractmethod
    def lat_from_index(self, lat_index):
        """Colatitude of a latitude row in degrees."""

    @abstractmethod
    def lon_from_index(self, lat_index, lon_index):
        """Longitude of a sample (or cell center) in degrees (0-360)."""

    @abstractmethod
    def get_bayes_depth(self, lat_index, lon_index):
        """DepthEstimate for one sample, or None if there are no statistics."""

    def indices(self, colat, colon):
        """Row and sample indices nearest canonical coordinates."""
        lat_index = self.new_lat_index(colat)
        return lat_index, self.new_lon_index(lat_index, colon)

    def coords(self, lat_index, lon_index):
        """Colatitude and longitude of a pair of indices."""
        return self.lat_from_index(lat_index), self.lon_from_index(lat_index, lon_index)

    def get_bayes_depth_at(self, lat, lon):
        """
        Bayesian depth from the nearest sample, without interpolation.

        Parameters:
        -----------
        lat : float
            Geographic latitude in degrees
        lon : float
            Geographic longitude in degrees

        Returns:
        --------
        DepthEstimate or None
        """
        colat, colon = self.canonical_coords(lat, lon)
        if np.isnan(colat) or np.isnan(colon):
            return None
        return self.get_bayes_depth(*self.indices(colat, colon))

    def interpolate_bayes_depth(self, lat, lon):
        """Bayesian depth interpolated from the surrounding samples."""
        if self._interpolator is None:
            self._interpolator = ZoneInterpolator(self.config)
        return self._interpolator.interpolate_bayes_depth(lat, lon, self)
