from .slab_point import SlabPoint
from .slab_row import SlabRow, SlabSegment
from .slab_area import SlabArea, SlabMatch
from .tilted_area import TiltedArea, TiltedSample
from .slabs import Slabs, points_from_dataframe

__all__ = [
    'SlabPoint',
    'SlabRow',
    'SlabSegment',
    'SlabArea',
    'SlabMatch',
    'TiltedArea',
    'TiltedSample',
    'Slabs',
    'points_from_dataframe',
]
