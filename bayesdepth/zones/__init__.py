from .grid_model import ZoneGrid
from .zone_interpolate import ZoneInterpolator, ZoneSample
from .zone_stats import FixedZoneStats, ZoneStat
from .new_zone_stats import NewZonePoint, NewZoneRow, VariableZoneStats

__all__ = [
    'ZoneGrid',
    'ZoneInterpolator',
    'ZoneSample',
    'FixedZoneStats',
    'ZoneStat',
    'NewZonePoint',
    'NewZoneRow',
    'VariableZoneStats',
]
