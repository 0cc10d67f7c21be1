from .config import DepthPriorConfig, DEFAULT_CONFIG
from .depth_estimate import DepthEstimate, DepthSource, SlabDepth
from .geopoint import GeographicPoint
from .zones import FixedZoneStats, VariableZoneStats, ZoneGrid, ZoneInterpolator, ZoneStat
from .slabs import Slabs, SlabArea, SlabMatch, SlabPoint, TiltedArea
from .bayesian_depth import BayesianDepthModel, DepthRegimeCombiner
from .logging_utils import setup_logging

__version__ = '0.1.0'

__all__ = [
    'DepthPriorConfig',
    'DEFAULT_CONFIG',
    'DepthEstimate',
    'DepthSource',
    'SlabDepth',
    'GeographicPoint',
    'FixedZoneStats',
    'VariableZoneStats',
    'ZoneGrid',
    'ZoneInterpolator',
    'ZoneStat',
    'Slabs',
    'SlabArea',
    'SlabMatch',
    'SlabPoint',
    'TiltedArea',
    'BayesianDepthModel',
    'DepthRegimeCombiner',
    'setup_logging',
]
