# tests/conftest.py

import numpy as np
import pandas as pd
import pytest

from bayesdepth.config import DEFAULT_CONFIG
from bayesdepth.slabs import SlabPoint, Slabs
from bayesdepth.zones import FixedZoneStats, VariableZoneStats

# Block of populated Marsden squares used by most zone tests
BLOCK_LATS = range(40, 51)
BLOCK_LONS = range(130, 141)


def make_fixed_grid(cells, config=None):
    """Fixed grid from {(lat_index, lon_index): (mean, min, max)}."""
    df = pd.DataFrame(
        [(i, j, mean, low, high) for (i, j), (mean, low, high) in cells.items()],
        columns=['lat_index', 'lon_index', 'mean_depth', 'min_depth', 'max_depth'],
    )
    return FixedZoneStats.from_dataframe(df, num_years=50, config=config)


def uniform_cells(mean=20.0, low=5.0, high=40.0):
    return {(i, j): (mean, low, high) for i in BLOCK_LATS for j in BLOCK_LONS}


def slab_row_points(colat, lons, depth_fn):
    """Slab points for one row, with depths negative down as in the slab files."""
    points = []
    for lon in lons:
        center = depth_fn(colat, lon)
        points.append(SlabPoint.from_raw(colat, lon, -center, -(center - 10.0), -(center + 20.0)))
    return points


def planar_depth(colat, lon):
    return 100.0 + 10.0 * (colat - 40.0) + 4.0 * (lon - 140.0)


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def uniform_grid():
    return make_fixed_grid(uniform_cells())


@pytest.fixture
def variable_grid():
    """Variable grid with five rows from 10N to 2N and a patch of samples."""
    records = []
    for lat in (10.0, 8.0, 6.0, 4.0, 2.0):
        for lon in np.arange(100.0, 112.0, 2.0):
            records.append((lat, lon, 2.0, 12, 30.0, 8.0))
    df = pd.DataFrame(records, columns=['lat', 'lon', 'lon_spacing', 'count', 'depth', 'depth_error'])
    return VariableZoneStats.from_dataframe(df, lat_spacing=2.0)


@pytest.fixture
def global_variable_grid():
    """Empty global variable grid with coarser longitude spacing toward the poles."""
    grid = VariableZoneStats(89.0, -89.0, 2.0, 90)
    for row in range(90):
        lat = 89.0 - 2.0 * row
        spacing = 2.0 if abs(lat) < 60.0 else 6.0
        grid.init_row(row, lat, spacing, int(round(360.0 / spacing)))
    return grid


@pytest.fixture
def planar_slab_points():
    """Five rows, 0.5 degrees apart, of a planar slab."""
    points = []
    for colat in np.arange(40.0, 42.5, 0.5):
        points.extend(slab_row_points(colat, np.arange(140.0, 142.5, 0.5), planar_depth))
    return points


@pytest.fixture
def planar_slabs(planar_slab_points):
    return Slabs.from_points(planar_slab_points)
