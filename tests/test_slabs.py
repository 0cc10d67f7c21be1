import numpy as np
import pandas as pd
import pytest

from bayesdepth.depth_estimate import SlabDepth
from bayesdepth.slabs import SlabArea, SlabPoint, SlabRow, Slabs

from conftest import planar_depth, slab_row_points


def constant_depth(depth):
    return lambda colat, lon: depth


def test_slab_point_normalizes_signs():
    point = SlabPoint.from_raw(40.0, 140.0, -100.0, 5.0, -130.0)
    assert point.depth == SlabDepth(100.0, 0.0, 130.0)
    assert point.eq_depth == 100.0


def test_squeeze_splits_rows_at_gaps():
    row = SlabRow(0.5)
    for lon, center in [(140.0, np.nan), (140.5, -50.0), (141.0, -55.0), (141.5, np.nan),
                        (142.0, -60.0), (142.5, np.nan)]:
        row.add(SlabPoint.from_raw(40.0, lon, center, center + 10.0, center - 10.0))
    row.squeeze()
    assert row.lat == 40.0
    assert [len(s) for s in row.segments] == [2, 1]
    assert row.lon_range == [140.25, 142.25]
    assert row.find(140.3) == 0
    assert row.find(141.6) == -1
    assert row.find(142.2) == 1
    assert row.get_vectors(141.6) == [None, None]


def test_segment_vectors_bracket_the_longitude():
    row = SlabRow(0.5)
    for point in slab_row_points(40.0, np.arange(140.0, 142.5, 0.5), planar_depth):
        row.add(point)
    row.squeeze()
    segment = row.segments[0]
    assert segment.sample_index(140.7) == 1
    assert segment.sample_index(139.8) == 0
    assert segment.sample_index(142.2) == 4

    v0, v1 = row.get_vectors(140.7)
    # Channels are shallow bound, earthquake depth and deep bound
    assert v0[1].tolist() == [140.5, 40.0, planar_depth(40.0, 140.5)]
    assert v1[1].tolist() == [141.0, 40.0, planar_depth(40.0, 141.0)]
    assert row.get_vectors(142.1)[1] is None


def test_from_points_builds_one_area(planar_slabs):
    assert planar_slabs.increment == 0.5
    assert len(planar_slabs) == 1
    area = planar_slabs.areas[0]
    assert len(area.rows) == 5
    assert area.lat_range == [39.75, 42.25]
    assert area.lon_range == [139.75, 142.25]


def test_grid_node_is_reproduced_exactly(planar_slabs):
    area = planar_slabs.areas[0]
    match = area.find(41.0, 141.0)
    assert match.row == 2 and match.segment == 0 and match.point == 2

    depths = planar_slabs.get_depth(49.0, 141.0)
    assert len(depths) == 1
    expected = planar_depth(41.0, 141.0)
    assert depths[0] == SlabDepth(expected, expected - 10.0, expected + 20.0)


def test_bilinear_interpolation_between_nodes(planar_slabs):
    depth = planar_slabs.get_depth(90.0 - 41.2, 141.3)[0]
    expected = planar_depth(41.2, 141.3)
    assert depth.center == pytest.approx(expected)
    assert depth.lower == pytest.approx(expected - 10.0)
    assert depth.upper == pytest.approx(expected + 20.0)


def test_corner_of_area_widens_bounds(planar_slabs):
    # Only the last node of the last row is left, so its bounds are pushed
    # out by their full gap
    depth = planar_slabs.get_depth(48.0, 142.0)[0]
    center = planar_depth(42.0, 142.0)
    assert depth == SlabDepth(center, center - 20.0, center + 40.0)


def test_last_row_edge_uses_one_d_with_half_widening(planar_slabs):
    depth = planar_slabs.get_depth(48.0, 141.25)[0]
    center = planar_depth(42.0, 141.25)
    assert depth.center == pytest.approx(center)
    assert depth.lower == pytest.approx(center - 15.0)
    assert depth.upper == pytest.approx(center + 30.0)


def test_points_outside_the_slab_are_not_found(planar_slabs):
    assert planar_slabs.get_depth(49.0, 150.0) == []
    assert planar_slabs.get_depth(30.0, 141.0) == []
    assert planar_slabs.get_depth(np.nan, 141.0) == []
    assert not planar_slabs.areas[0].is_found(41.0, 143.0)
    assert planar_slabs.areas[0].get_depth(41.0, 143.0) is None


def test_row_gap_gets_exactly_one_dummy_row():
    points = []
    for colat in (40.0, 41.0):
        points.extend(slab_row_points(colat, [140.0, 140.5, 141.0], constant_depth(100.0)))
    slabs = Slabs.from_points(points)
    rows = slabs.areas[0].rows
    assert [row.lat for row in rows] == [40.0, 40.5, 41.0]
    assert [row.is_dummy for row in rows] == [False, True, False]

    # Queries in the dummy row have nothing to interpolate from
    assert slabs.areas[0].find(40.5, 140.5) is None
    assert slabs.get_depth(49.5, 140.5) == []
    assert slabs.get_depth(50.0, 140.5) != []


def test_point_beside_row_after_gap_uses_that_row():
    points = []
    for colat in (40.0, 41.0):
        points.extend(slab_row_points(colat, [140.0, 140.5, 141.0], constant_depth(100.0)))
    slabs = Slabs.from_points(points)
    area = slabs.areas[0]

    match = area.find(40.99, 140.5)
    assert (match.row, match.segment, match.point) == (1, -1, 1)
    assert area.find(40.76, 140.5) is not None
    assert area.find(40.6, 140.5) is None

    # Only the next row contributes, so the bounds are widened by half
    assert slabs.get_depth(49.01, 140.5) == [SlabDepth(100.0, 85.0, 130.0)]


def test_next_row_covers_point_missed_by_base_row():
    area = SlabArea(0.5)
    for colat, lons in ((40.0, [140.0, 140.5]), (40.5, [140.0, 140.5, 141.0, 141.5])):
        row = SlabRow(0.5)
        for point in slab_row_points(colat, lons, constant_depth(100.0)):
            row.add(point)
        row.squeeze()
        area.add(row)
    area.fix_gaps()

    match = area.find(40.2, 141.2)
    assert (match.row, match.segment, match.point) == (0, -1, 2)
    depth = area.get_depth(40.2, 141.2, match)
    assert depth.center == pytest.approx(100.0)
    assert (depth.lower, depth.upper) == pytest.approx((85.0, 130.0))


def test_fix_gaps_sorts_rows():
    area = SlabArea(1.0)
    for colat in (44.0, 40.0, 41.0):
        row = SlabRow(1.0)
        for point in slab_row_points(colat, [10.0, 11.0], constant_depth(50.0)):
            row.add(point)
        row.squeeze()
        area.add(row)
    area.fix_gaps()
    assert [row.lat for row in area.rows] == [40.0, 41.0, 42.0, 43.0, 44.0]
    assert [row.is_dummy for row in area.rows] == [False, False, True, True, False]


def test_stacked_areas_are_sorted_by_depth():
    points = []
    # Deep slab first, then a shallower one whose rows start half a step east
    for colat in (40.0, 40.5, 41.0):
        points.extend(slab_row_points(colat, np.arange(140.0, 142.5, 0.5), constant_depth(300.0)))
    for colat in (40.0, 40.5, 41.0):
        points.extend(slab_row_points(colat, np.arange(140.5, 143.0, 0.5), constant_depth(100.0)))
    slabs = Slabs.from_points(points)
    assert len(slabs) == 2

    depths = slabs.get_depth(49.5, 141.0)
    assert [d.center for d in depths] == pytest.approx([100.0, 300.0])
    assert all(a.center < b.center for a, b in zip(depths, depths[1:]))
    assert len(slabs.get_depth(49.5, 142.7)) == 1


def test_area_crossing_prime_meridian():
    points = []
    for colat in (40.0, 40.5, 41.0):
        points.extend(slab_row_points(colat, np.arange(359.0, 361.5, 0.5), constant_depth(80.0)))
    slabs = Slabs.from_points(points)
    assert slabs.get_depth(49.5, -0.5)[0].center == pytest.approx(80.0)
    assert slabs.get_depth(49.5, 0.5)[0].center == pytest.approx(80.0)


def test_align_moves_offset_row_into_second_slot():
    a = [[np.array([10.0, 40.0, 1.0])] * 3, [np.array([10.5, 40.0, 2.0])] * 3]
    b = [[np.array([10.5, 40.5, 3.0])] * 3, None]
    v0, v1 = SlabArea.align(a, b)
    assert v0 is a
    assert v1[0] is None and v1[1] is b[0]
    v1, v0 = SlabArea.align(b, a)
    assert v1[0] is None and v1[1] is b[0]


def test_interpolate_with_no_corners_is_none():
    area = SlabArea(0.5)
    assert area.interpolate([None, None], None, np.array([0.0, 0.0, np.nan])) is None


def test_from_dataframe_matches_from_points(planar_slab_points):
    df = pd.DataFrame(
        [(p.lon, 90.0 - p.lat, -p.depth.center, -p.depth.lower, -p.depth.upper)
         for p in planar_slab_points],
        columns=['lon', 'lat', 'center', 'lower', 'upper'],
    )
    slabs = Slabs.from_dataframe(df)
    depth = slabs.get_depth(49.0, 141.0)[0]
    assert depth.center == pytest.approx(planar_depth(41.0, 141.0))


def test_builder_rejects_bad_input():
    with pytest.raises(ValueError):
        Slabs.from_points([])
    with pytest.raises(ValueError):
        Slabs.from_points([SlabPoint.from_raw(40.0, 140.0, -10.0, 0.0, -20.0)])
    with pytest.raises(ValueError):
        Slabs.from_dataframe(pd.DataFrame({'lon': [1.0]}))


def test_summary_lists_every_area(planar_slabs):
    text = planar_slabs.summary(full=True)
    assert text.startswith("Area: ")
    assert text.count("Row: ") == 5
    planar_slabs.row_census()
