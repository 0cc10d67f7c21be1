"""
Bayesian depth tuning parameters.

This module gathers the physical and tuning constants used by the zone
statistics, the slab model and the depth regime combiner into a single
immutable parameter set that can be loaded from a YAML file.
"""

import logging
from dataclasses import dataclass, asdict, fields, replace as dc_replace
from typing import Tuple

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepthPriorConfig:
    """
    Complete parameter set for the Bayesian depth prior.

    Attributes:
    -----------
    depth_min : float
        Minimum depth the locator allows in km
    depth_max : float
        Maximum depth the locator allows in km
    default_depth : float
        Default Bayesian depth for shallow earthquakes in km
    default_depth_se : float
        Default Bayesian depth standard error in km (68th percentile)
    zone_stats_spread : float
        Fixed spread of the zone statistics in km, also the spread floor
    repair_pivot_depth : float
        Mean depth in km above which corrupt statistics are repaired upward
    shallowest_deep : float
        Zone depth in km separating the shallow and deep filtering regimes
    structure_tol : tuple of float
        Depth tolerance in km across a zone facet (shallow, deep)
    two_point_inflation : float
        Spread inflation when only two zone samples survive
    one_point_inflation : float
        Spread inflation when only one zone sample survives
    slab_max_shallow_depth : float
        Maximum trial depth in km where the prior can be shallow over a slab
    slab_merge_depth : float
        Slab depth in km above which the slab is merged with the shallow zone
    slab_spread_factor : float
        Converts one sigma slab errors to the 99th percentile spread
    default_slab_se : float
        Typical slab earthquake depth error in km (99th percentile)
    slab_edge_widening : tuple of float
        Bound widening fractions for the two and one point slab fits
    min_slab_increment : float
        Minimum slab grid spacing in degrees, used to separate tilted rows
    tilted_area_increment : float
        Minimum jump in degrees that starts a new tilted slab area
    grid_tolerance : float
        Tolerance in degrees for comparing grid coordinates
    """
    depth_min: float = 1.0
    depth_max: float = 700.0
    default_depth: float = 10.0
    default_depth_se: float = 5.0
    zone_stats_spread: float = 5.0
    repair_pivot_depth: float = 400.0
    shallowest_deep: float = 150.0
    structure_tol: Tuple[float, float] = (60.0, 150.0)
    two_point_inflation: float = 1.5
    one_point_inflation: float = 2.0
    slab_max_shallow_depth: float = 50.0
    slab_merge_depth: float = 80.0
    slab_spread_factor: float = 3.0
    default_slab_se: float = 30.0
    slab_edge_widening: Tuple[float, float] = (0.5, 1.0)
    min_slab_increment: float = 0.05
    tilted_area_increment: float = 7.0
    grid_tolerance: float = 1e-3

    def __post_init__(self):
        """Validate the parameter set."""
        # YAML hands sequences back as lists
        object.__setattr__(self, 'structure_tol', tuple(float(v) for v in self.structure_tol))
        object.__setattr__(self, 'slab_edge_widening', tuple(float(v) for v in self.slab_edge_widening))

        if self.depth_min < 0 or self.depth_max <= self.depth_min:
            raise ValueError("Depth limits must satisfy 0 <= depth_min < depth_max")
        if not (self.depth_min <= self.default_depth <= self.depth_max):
            raise ValueError("default_depth must lie within [depth_min, depth_max]")
        if self.default_depth_se <= 0 or self.zone_stats_spread <= 0:
            raise ValueError("Depth standard errors must be positive")
        if len(self.structure_tol) != 2 or len(self.slab_edge_widening) != 2:
            raise ValueError("structure_tol and slab_edge_widening need exactly two values")
        if self.two_point_inflation < 1 or self.one_point_inflation < 1:
            raise ValueError("Spread inflation factors must be at least 1")
        if self.slab_merge_depth <= 0 or self.slab_max_shallow_depth <= 0:
            raise ValueError("Slab regime depths must be positive")
        if self.min_slab_increment <= 0 or self.tilted_area_increment <= 0:
            raise ValueError("Slab increments must be positive")
        if self.grid_tolerance <= 0:
            raise ValueError("grid_tolerance must be positive")

    @property
    def deepest_shallow(self) -> float:
        """Deepest depth a shallow event should have at the 99% level."""
        return self.default_depth + 3.0 * self.default_depth_se

    def replace(self, **changes) -> 'DepthPriorConfig':
        """Return a copy with some parameters changed."""
        return dc_replace(self, **changes)

    def to_dict(self) -> dict:
        config = asdict(self)
        config['structure_tol'] = list(self.structure_tol)
        config['slab_edge_widening'] = list(self.slab_edge_widening)
        return config

    @classmethod
    def from_dict(cls, config: dict) -> 'DepthPriorConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            msg = f"Unknown Bayesian depth parameters: {sorted(unknown)}"
            logger.error(msg)
            raise ValueError(msg)
        return cls(**config)

    @classmethod
    def from_yaml(cls, config_file, encoding='utf-8') -> 'DepthPriorConfig':
        """
        Load the parameters from a YAML file.

        Only the parameters present in the file are changed, everything else
        keeps its default value. A file may either hold the parameters at the
        top level or under a ``bayesian_depth`` section.
        """
        with open(config_file, 'r', encoding=encoding) as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            msg = f"Configuration file {config_file} does not hold a mapping"
            logger.error(msg)
            raise ValueError(msg)
        config = config.get('bayesian_depth', config)
        logger.debug(f"Loaded Bayesian depth parameters from {config_file}")
        return cls.from_dict(config)

    def to_yaml(self, output_path, encoding='utf-8'):
        with open(output_path, 'w', encoding=encoding) as f:
            yaml.safe_dump({'bayesian_depth': self.to_dict()}, f, sort_keys=False)


DEFAULT_CONFIG = DepthPriorConfig()
