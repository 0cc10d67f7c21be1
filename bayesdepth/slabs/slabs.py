"""
Slab model registry.

The slab model is a collection of slab areas. Areas may overlap where a
slab is overturned or where two slabs are stacked, so a point can have
several slab depths.
"""

import logging
import math
from typing import Iterable, List

import numpy as np
import pandas as pd

from ..config import DEFAULT_CONFIG
from ..depth_estimate import SlabDepth
from .slab_area import SlabArea
from .slab_point import SlabPoint
from .slab_row import SlabRow
from .tilted_area import TiltedArea

logger = logging.getLogger(__name__)

SLAB_COLUMNS = ['lon', 'lat', 'center', 'lower', 'upper']


def points_from_dataframe(df: pd.DataFrame) -> List[SlabPoint]:
    """
    Convert a slab table into slab points.

    Parameters:
    -----------
    df : pd.DataFrame
        Columns lon (0-360 degrees), lat (geographic degrees) and the center,
        lower and upper depths, negative down as in the slab files

    Returns:
    --------
    list of SlabPoint
        Points in table order, with colatitudes and non-negative depths
    """
    missing = [col for col in SLAB_COLUMNS if col not in df.columns]
    if missing:
        msg = f"Slab table is missing columns: {missing}"
        logger.error(msg)
        raise ValueError(msg)
    return [SlabPoint.from_raw(90.0 - rec.lat, rec.lon, rec.center, rec.lower, rec.upper)
            for rec in df[SLAB_COLUMNS].itertuples(index=False)]


class Slabs:
    """
    Registry of slab areas.

    Parameters:
    -----------
    increment : float, optional
        Slab grid spacing in degrees, set by the first area read if not given
    config : DepthPriorConfig, optional
        Grid tolerance, tilted area limits and edge widening fractions
    """

    def __init__(self, increment=np.nan, config=None):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.increment = increment
        self.areas: List[SlabArea] = []

    def __len__(self):
        return len(self.areas)

    def new_area(self):
        return SlabArea(self.increment, self.config.grid_tolerance, self.config.slab_edge_widening)

    def add(self, area: SlabArea):
        """Finalize an area and add it to the registry."""
        if area.is_empty:
            logger.debug("Skipping a slab area without any samples")
            return
        area.fix_gaps()
        self.areas.append(area)

    @classmethod
    def from_points(cls, points: Iterable[SlabPoint], increment=None, config=None):
        """
        Build the registry from slab points in file order.

        Points run along latitude rows in increasing longitude. A longitude
        jump larger than the grid increment starts a new row, and a row that
        doesn't start at the same longitude as the previous ones starts a new
        area.

        Parameters:
        -----------
        points : iterable of SlabPoint
            Slab points in file order
        increment : float, optional
            Grid spacing in degrees, inferred from the first two points if None
        config : DepthPriorConfig, optional

        Returns:
        --------
        Slabs
        """
        points = list(points)
        if not points or (increment is None and len(points) < 2):
            msg = "At least two slab points are needed to build a slab model"
            logger.error(msg)
            raise ValueError(msg)
        if increment is None:
            increment = abs(points[0].lon - points[1].lon)
        if increment <= 0.0:
            msg = f"Invalid slab grid increment: {increment}"
            logger.error(msg)
            raise ValueError(msg)

        slabs = cls(increment, config)
        tol = slabs.config.grid_tolerance
        logger.debug(f"Slab increment set: {increment}")

        area = slabs.new_area()
        row = SlabRow(increment, tolerance=tol)
        row.add(points[0])
        first_lon = last_lon = points[0].lon
        for point in points[1:]:
            if abs(point.lon - last_lon) > increment + tol:
                row.squeeze()
                area.add(row)
                if abs(point.lon - first_lon) > tol:
                    logger.debug(f"Slab area: {area}")
                    slabs.add(area)
                    area = slabs.new_area()
                    first_lon = point.lon
                row = SlabRow(increment, tolerance=tol)
            row.add(point)
            last_lon = point.lon

        row.squeeze()
        area.add(row)
        logger.debug(f"Slab area: {area}")
        slabs.add(area)
        return slabs

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, increment=None, config=None):
        """Build the registry from a slab table (see ``points_from_dataframe``)."""
        return cls.from_points(points_from_dataframe(df), increment=increment, config=config)

    def add_tilted(self, points: Iterable[SlabPoint]):
        """
        Regrid tilted slab points and add the resulting areas.

        A new scan row starts when both latitude and longitude jump, and a
        new area starts when a row begins too far from where the previous
        row began.
        """
        if np.isnan(self.increment):
            msg = "The slab grid increment must be set before adding tilted slabs"
            logger.error(msg)
            raise ValueError(msg)
        points = list(points)
        if not points:
            return

        cfg = self.config
        tilted = TiltedArea(self.increment, cfg.grid_tolerance, cfg.slab_edge_widening)
        first_point = last_point = points[0]
        tilted.add(first_point)
        for point in points[1:]:
            if (abs(point.lat - last_point.lat) > cfg.min_slab_increment
                    and abs(point.lon - last_point.lon) > cfg.min_slab_increment):
                logger.debug(f"Scan line: {first_point} - {last_point}")
                if (abs(point.lat - first_point.lat) > cfg.tilted_area_increment
                        or abs(point.lon - first_point.lon) > cfg.tilted_area_increment):
                    self.add(tilted.get_slab_area())
                    tilted = TiltedArea(self.increment, cfg.grid_tolerance, cfg.slab_edge_widening)
                first_point = point
            tilted.add(point)
            last_point = point
        self.add(tilted.get_slab_area())

    def add_tilted_dataframe(self, df: pd.DataFrame):
        self.add_tilted(points_from_dataframe(df))

    def get_depth(self, lat, lon) -> List[SlabDepth]:
        """
        Slab depths at a geographic point.

        Parameters:
        -----------
        lat : float
            Geographic latitude in degrees
        lon : float
            Geographic longitude in degrees

        Returns:
        --------
        list of SlabDepth
            One triplet per slab area covering the point, shallowest first.
            Empty if no slab is found.
        """
        if not (math.isfinite(lat) and math.isfinite(lon)) or abs(lat) > 90.0:
            return []
        colat = 90.0 - lat
        colon = lon + 360.0 if lon < 0.0 else lon

        depths = []
        for area in self.areas:
            match = area.find(colat, colon)
            if match is None:
                continue
            depth = area.get_depth(colat, colon, match)
            if depth is not None:
                depths.append(depth)
        depths.sort(key=lambda d: d.center)
        return depths

    def is_found(self, lat, lon):
        return bool(self.get_depth(lat, lon))

    def row_census(self):
        logger.debug("Row census by area")
        for area in self.areas:
            area.row_census()

    def summary(self, full=False):
        """Printable description of every area."""
        return "\n".join(area.describe(full) for area in self.areas)

    def __repr__(self):
        return f"Slabs(increment={self.increment}, areas={len(self.areas)})"
