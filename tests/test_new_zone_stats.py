import numpy as np
import pandas as pd
import pytest

from bayesdepth.depth_estimate import DepthSource
from bayesdepth.zones import NewZonePoint, VariableZoneStats


def test_rows_are_stored_in_colatitude(variable_grid):
    assert variable_grid.num_rows == 5
    assert variable_grid.first_row_lat == 80.0
    assert variable_grid.last_row_lat == 88.0
    assert variable_grid.lat_rows[2].lat == 84.0
    assert len(variable_grid.lat_rows[2]) == 180


def test_canonical_coords_keep_zero_longitude(variable_grid):
    assert variable_grid.canonical_coords(6.0, 0.0) == (84.0, 0.0)
    assert variable_grid.canonical_coords(6.0, -90.0) == (84.0, 270.0)
    colat, _ = variable_grid.canonical_coords(-91.0, 0.0)
    assert np.isnan(colat)


def test_indices_snap_to_nearest_sample(variable_grid):
    # Half a bin either side of the 104 degree sample
    assert variable_grid.indices(84.0, 104.0) == (2, 52)
    assert variable_grid.indices(84.9, 103.1) == (2, 52)
    assert variable_grid.indices(85.1, 104.9) == (3, 52)
    # Past the last sample the longitude wraps onto the first
    assert variable_grid.new_lon_index(2, 359.5) == 0
    assert variable_grid.coords(3, 52) == (86.0, 104.0)


def test_lat_index_is_clamped_to_the_grid(variable_grid):
    assert variable_grid.new_lat_index(10.0) == 0
    assert variable_grid.new_lat_index(170.0) == 4
    assert np.isnan(variable_grid.lat_from_index(100))


def test_bayes_depth_from_sample(variable_grid):
    point = variable_grid.get_stats_at(6.0, 104.0)
    assert point == NewZonePoint(104.0, 12, 30.0, 8.0)

    estimate = variable_grid.get_bayes_depth_at(6.0, 104.0)
    assert estimate.depth == 30.0
    assert estimate.spread == 8.0
    assert (estimate.lower, estimate.upper) == (22.0, 38.0)
    assert estimate.source is DepthSource.NEWZONESTATS


def test_missing_samples_and_empty_rows():
    df = pd.DataFrame([(10.0, 100.0, 2.0, 3, 15.0, 1.0)],
                      columns=['lat', 'lon', 'lon_spacing', 'count', 'depth', 'depth_error'])
    grid = VariableZoneStats.from_dataframe(df, lat_spacing=2.0)
    estimate = grid.get_bayes_depth_at(10.0, 100.0)
    # Small errors are floored at the zone statistics spread
    assert estimate.spread == 5.0
    assert grid.get_bayes_depth_at(10.0, 120.0) is None


def test_manual_construction():
    grid = VariableZoneStats(1.0, -1.0, 1.0, 3)
    for row, lat in enumerate((1.0, 0.0, -1.0)):
        grid.init_row(row, lat, 1.0, 360)
    assert grid.get_sample(1, 20) is None
    grid.put_sample(1, 20, NewZonePoint(20.0, 5, 900.0, 10.0))
    estimate = grid.get_bayes_depth_at(0.0, 20.2)
    assert estimate.depth == 700.0
    assert grid.get_bayes_depth(0, 20) is None


def test_invalid_grid_raises():
    with pytest.raises(ValueError):
        VariableZoneStats(10.0, 0.0, 0.0, 5)
    with pytest.raises(ValueError):
        VariableZoneStats.from_dataframe(pd.DataFrame({'lat': [1.0]}), lat_spacing=1.0)
