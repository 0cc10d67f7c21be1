import numpy as np
import pytest

from bayesdepth import BayesianDepthModel, DepthRegimeCombiner
from bayesdepth.depth_estimate import DepthSource, SlabDepth


@pytest.fixture
def combiner(config):
    return DepthRegimeCombiner(config)


def test_no_slab_gives_default_prior(combiner):
    estimate = combiner.combine([], 35.0)
    assert estimate.as_tuple() == (10.0, 5.0)
    assert estimate.source is DepthSource.SHALLOW


@pytest.mark.parametrize("trial_depth", [0.0, 10.0, 40.0, 60.0, 300.0])
def test_shallow_slab_merges_with_crust(combiner, trial_depth):
    estimate = combiner.combine([SlabDepth(40.0, 35.0, 50.0)], trial_depth)
    # Three times the 10 km deep error bar
    assert 0.0 <= estimate.depth <= 30.0
    assert estimate.depth == pytest.approx(15.0)
    assert estimate.spread == pytest.approx(15.0)
    assert (estimate.lower, estimate.upper) == (0.0, 30.0)
    assert estimate.source is DepthSource.SLABINTERFACE


def test_shallow_slab_without_deep_bar_keeps_minimum_depth(combiner, config):
    estimate = combiner.combine([SlabDepth(40.0, 35.0, 40.0)], 20.0)
    assert estimate.depth == config.depth_min
    assert estimate.spread == config.depth_min


def test_deep_trial_depth_returns_slab_depth(combiner):
    estimate = combiner.combine([SlabDepth(500.0, 480.0, 530.0)], 300.0)
    assert estimate.depth == 500.0
    assert estimate.spread == pytest.approx(90.0)
    assert estimate.source is DepthSource.SLABMODEL


def test_shallow_trial_depth_picks_closer_prior(combiner):
    # 10 km is closer to 30 km than the 100 km slab
    estimate = combiner.combine([SlabDepth(100.0, 90.0, 110.0)], 30.0)
    assert estimate.as_tuple() == (10.0, 5.0)
    # 85 km is closer to 50 km than the default depth
    estimate = combiner.combine([SlabDepth(85.0, 80.0, 95.0)], 50.0)
    assert estimate.depth == 85.0
    assert estimate.spread == pytest.approx(30.0)


def test_slab_nearest_the_trial_depth_is_used(combiner):
    slabs = [SlabDepth(40.0, 35.0, 50.0), SlabDepth(300.0, 290.0, 320.0)]
    assert combiner.combine(slabs, 250.0).depth == 300.0
    assert combiner.combine(slabs, 20.0).source is DepthSource.SLABINTERFACE


def test_slab_without_error_bars_uses_default_slab_error(combiner, config):
    estimate = combiner.combine([SlabDepth(200.0, 200.0, 200.0)], 150.0)
    assert estimate.spread == config.default_slab_se


def test_model_without_data_falls_back_to_default():
    model = BayesianDepthModel(verbose=False)
    assert model.bayesian_depth(45.0, 135.0, 33.0) == (10.0, 5.0)
    assert model.depth_estimate(45.0, 135.0) is None
    assert model.interpolated_depth_estimate(45.0, 135.0) is None
    assert model.slab_depths(45.0, 135.0) == []


def test_model_queries(uniform_grid, planar_slabs):
    model = BayesianDepthModel(uniform_grid, planar_slabs, verbose=False)
    assert model.depth_estimate(45.3, 135.2).depth == 20.0
    assert model.interpolated_depth_estimate(45.3, 135.2).depth == pytest.approx(20.0)
    assert model.interpolated_depth_estimate(np.nan, 135.2) is None

    depths = model.slab_depths(49.0, 141.0)
    assert depths[0].center == 114.0
    depth, spread = model.bayesian_depth(49.0, 141.0, 120.0)
    assert depth == 114.0
    assert spread == pytest.approx(60.0)
    # Away from the slab the default prior applies
    assert model.bayesian_depth(45.3, 135.2, 120.0) == (10.0, 5.0)


def test_invalid_coordinates_do_not_raise(planar_slabs):
    model = BayesianDepthModel(slabs=planar_slabs, verbose=False)
    assert model.bayesian_depth(120.0, 141.0, 50.0) == (10.0, 5.0)
    assert model.bayesian_depth(np.nan, np.nan, 50.0) == (10.0, 5.0)
