"""
Bayesian depth prior for earthquake location.

BayesianDepthModel ties the zone statistics and the slab model together
and is what the location solver talks to. DepthRegimeCombiner decides how
the slab depths and the default shallow prior are merged for a given trial
depth.
"""

import logging
from typing import List, Optional

import numpy as np

from .config import DEFAULT_CONFIG
from .depth_estimate import DepthEstimate, DepthSource, SlabDepth
from .logging_utils import ensure_default_logging

logger = logging.getLogger(__name__)


class DepthRegimeCombiner:
    """
    Merge slab depths with the default shallow prior.

    The branches are tried in a fixed order, which settles which prior wins
    where the depth regimes overlap:

    1. A slab shallower than ``slab_merge_depth`` merges with the shallow
       crust, so the prior spans from the surface to three times the
       slab's deep error bar.
    2. A trial depth deeper than ``slab_max_shallow_depth`` can only be in
       the slab.
    3. Otherwise whichever of the shallow prior and the slab is closer to
       the trial depth.

    Parameters:
    -----------
    config : DepthPriorConfig, optional
        Default prior and slab regime parameters
    """

    def __init__(self, config=None):
        self.config = config if config is not None else DEFAULT_CONFIG

    def default_prior(self) -> DepthEstimate:
        cfg = self.config
        return DepthEstimate.from_spread(cfg.default_depth, cfg.default_depth_se, DepthSource.SHALLOW)

    def slab_prior(self, slab: SlabDepth) -> DepthEstimate:
        """Prior centered on the slab with the 99th percentile slab error."""
        cfg = self.config
        spread = cfg.slab_spread_factor * max(slab.center - slab.lower, slab.upper - slab.center)
        if not spread > 0.0:
            spread = cfg.default_slab_se
        return DepthEstimate.from_spread(slab.center, spread, DepthSource.SLABMODEL)

    def interface_prior(self, slab: SlabDepth) -> DepthEstimate:
        """Prior spanning the shallow crust and a shallow slab together."""
        cfg = self.config
        bottom = cfg.slab_spread_factor * (slab.upper - slab.center)
        half_span = max(0.5 * bottom, cfg.depth_min)
        return DepthEstimate(half_span, 0.0, bottom, half_span, DepthSource.SLABINTERFACE)

    def combine(self, slab_depths: List[SlabDepth], trial_depth) -> DepthEstimate:
        """
        Bayesian depth for a trial depth.

        Parameters:
        -----------
        slab_depths : list of SlabDepth
            Slab depths at the epicenter, possibly empty
        trial_depth : float
            Current trial depth of the location in km

        Returns:
        --------
        DepthEstimate
        """
        cfg = self.config
        if not slab_depths:
            return self.default_prior()

        slab = min(slab_depths, key=lambda s: abs(s.center - trial_depth))
        if slab.center <= cfg.slab_merge_depth:
            return self.interface_prior(slab)

        slab_prior = self.slab_prior(slab)
        if trial_depth > cfg.slab_max_shallow_depth:
            return slab_prior

        shallow = self.default_prior()
        if abs(slab_prior.depth - trial_depth) < abs(shallow.depth - trial_depth):
            return slab_prior
        return shallow


class BayesianDepthModel:
    """
    Bayesian depth prior from zone statistics and the slab model.

    Both data sets are optional. Without any data every query falls back to
    the default shallow prior.

    Parameters:
    -----------
    zone_stats : ZoneGrid, optional
        Fixed or variable grid zone statistics
    slabs : Slabs, optional
        Slab model
    config : DepthPriorConfig, optional
        Tuning parameters shared by every component
    verbose : bool
        Log a summary of the model when it is built
    """

    def __init__(self, zone_stats=None, slabs=None, config=None, verbose=True):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.zone_stats = zone_stats
        self.slabs = slabs
        self.combiner = DepthRegimeCombiner(self.config)

        ensure_default_logging(verbose)
        if verbose:
            zones = repr(zone_stats) if zone_stats is not None else 'none'
            slab_areas = len(slabs) if slabs is not None else 0
            logger.info(f"Bayesian depth model: zone statistics {zones}, {slab_areas} slab areas")

    def depth_estimate(self, lat, lon) -> Optional[DepthEstimate]:
        """Zone statistics of the nearest sample, without interpolation."""
        if self.zone_stats is None or not self._valid(lat, lon):
            return None
        return self.zone_stats.get_bayes_depth_at(lat, lon)

    def interpolated_depth_estimate(self, lat, lon) -> Optional[DepthEstimate]:
        """Zone statistics interpolated to the epicenter."""
        if self.zone_stats is None or not self._valid(lat, lon):
            return None
        return self.zone_stats.interpolate_bayes_depth(lat, lon)

    def slab_depths(self, lat, lon) -> List[SlabDepth]:
        """Slab depth triplets at the epicenter, shallowest first."""
        if self.slabs is None:
            return []
        return self.slabs.get_depth(lat, lon)

    def bayesian_estimate(self, lat, lon, trial_depth) -> DepthEstimate:
        estimate = self.combiner.combine(self.slab_depths(lat, lon), trial_depth)
        logger.debug(f"Bayesian depth at ({lat:.4f}, {lon:.4f}, {trial_depth:.2f}): {estimate}")
        return estimate

    def bayesian_depth(self, lat, lon, trial_depth):
        """
        Bayesian depth and spread for a trial hypocenter.

        Parameters:
        -----------
        lat : float
            Geographic latitude in degrees
        lon : float
            Geographic longitude in degrees
        trial_depth : float
            Trial depth in km

        Returns:
        --------
        tuple of float
            (depth, spread) in km
        """
        return self.bayesian_estimate(lat, lon, trial_depth).as_tuple()

    @staticmethod
    def _valid(lat, lon):
        return bool(np.isfinite(lat) and np.isfinite(lon))
