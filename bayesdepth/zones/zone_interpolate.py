"""
Interpolation of Bayesian depths between zone statistics samples.

The samples surrounding a trial epicenter are projected onto a plane
centered on the trial point and the three nearest are used as an
interpolation triangle. As samples run out (no statistics or structural
outliers), the interpolation degrades from a plane to a line to a single
sample with progressively inflated spread.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..depth_estimate import DepthEstimate
from ..geopoint import GeographicPoint
from ..linear import intersect, one_d, two_d, vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneSample:
    """A zone sample projected relative to the trial point, with its statistics."""
    point: GeographicPoint
    estimate: Optional[DepthEstimate]

    @property
    def distance(self):
        return np.hypot(self.point.x, self.point.y)

    def vector(self, channel):
        return self.point.vector(self.estimate.channels()[channel])


class ZoneInterpolator:
    """
    Interpolate Bayesian depth from a zone statistics grid.

    Parameters:
    -----------
    config : DepthPriorConfig
        Depth limits, structure tolerances and spread inflation factors
    """

    def __init__(self, config):
        self.config = config

    def interpolate_bayes_depth(self, lat, lon, grid) -> Optional[DepthEstimate]:
        """
        Interpolated Bayesian depth at a geographic point.

        Parameters:
        -----------
        lat : float
            Geographic latitude in degrees
        lon : float
            Geographic longitude in degrees
        grid : ZoneGrid
            Zone statistics to interpolate

        Returns:
        --------
        DepthEstimate or None
            None if the coordinates are invalid or no usable samples are near
        """
        colat, colon = grid.canonical_coords(lat, lon)
        if np.isnan(colat) or np.isnan(colon):
            return None
        lat_index, lon_index = grid.indices(colat, colon)

        trial = GeographicPoint(colat, colon)
        logger.debug(f"Epicenter: {trial}")
        samples = self.get_centers(trial, lat_index, lon_index, grid)
        # sorted() is stable, so equidistant samples keep their row order
        samples = sorted(samples, key=lambda s: s.distance)

        result = self.zone_interp(samples, grid.depth_source)
        if result is None:
            return None
        cfg = self.config
        return result.clipped(cfg.depth_min, cfg.depth_max, cfg.zone_stats_spread)

    def get_centers(self, trial, lat_index, lon_index, grid) -> List[ZoneSample]:
        """
        Samples in the trial point's row and the next row toward the trial point.

        The base row contributes the enclosing sample and its neighbors on
        either side. The second row is above when the trial point is north
        of the base row (or in the last row), otherwise below.
        """
        samples = self._row_samples(trial, lat_index, lon_index, grid)

        row_lat = grid.lat_from_index(lat_index)
        if ((trial.lat < row_lat and trial.lat >= grid.first_row_lat)
                or trial.lat >= grid.last_row_lat):
            next_index = lat_index - 1
        else:
            next_index = lat_index + 1

        if 0 <= next_index < grid.num_rows and not np.isnan(grid.lat_from_index(next_index)):
            next_lon_index = grid.new_lon_index(next_index, trial.lon)
            samples.extend(self._row_samples(trial, next_index, next_lon_index, grid))
        else:
            logger.debug(f"No second row at index {next_index}")
        return samples

    @staticmethod
    def _row_samples(trial, lat_index, lon_index, grid):
        row_lat = grid.lat_from_index(lat_index)
        samples = []
        for j in range(lon_index - 1, lon_index + 2):
            j = grid.wrap_lon_index(lat_index, j)
            point = GeographicPoint.relative_to(row_lat, grid.lon_from_index(lat_index, j), trial)
            samples.append(ZoneSample(point, grid.get_bayes_depth(lat_index, j)))
        return samples

    def zone_interp(self, samples, source) -> Optional[DepthEstimate]:
        """
        Interpolate among the three nearest samples.

        Parameters:
        -----------
        samples : list of ZoneSample
            Candidate samples sorted by distance from the trial point
        source : DepthSource
            Provenance of the result

        Returns:
        --------
        DepthEstimate or None
        """
        cfg = self.config
        triangle = list(samples[:3])

        # Three samples in one row can't define a plane
        if len(triangle) == 3 and triangle[0].point.lat == triangle[1].point.lat == triangle[2].point.lat:
            logger.debug("Nearest zone samples are collinear, dropping the third")
            triangle[2] = ZoneSample(triangle[2].point, None)

        present = [s for s in triangle if s.estimate is not None]
        if not present:
            return None

        depths = [s.estimate.depth for s in present]
        deepest = max(depths)
        if deepest <= cfg.shallowest_deep:
            kept = [present[0]] + [s for s, d in zip(present[1:], depths[1:])
                                   if abs(d - depths[0]) <= cfg.structure_tol[0]]
        else:
            kept = [s for s, d in zip(present, depths) if deepest - d <= cfg.structure_tol[1]]

        absent = 3 - len(kept)
        logger.debug(f"Zone interpolation with {len(kept)} samples ({absent} absent)")

        origin = vector(0.0, 0.0)
        channels = range(len(DepthEstimate.CHANNELS))
        if absent == 0:
            values = [two_d(kept[0].vector(i), kept[1].vector(i), kept[2].vector(i), origin)
                      for i in channels]
            return DepthEstimate.from_channels(values, source)
        if absent == 1:
            values = []
            for i in channels:
                v0, v1 = kept[0].vector(i), kept[1].vector(i)
                values.append(one_d(v0, v1, intersect(v0, v1, origin)))
            return DepthEstimate.from_channels(values, source).inflated(cfg.two_point_inflation)
        if absent == 2:
            estimate = kept[0].estimate
            return DepthEstimate(estimate.depth, estimate.lower, estimate.upper,
                                 estimate.spread, source).inflated(cfg.one_point_inflation)
        return None
