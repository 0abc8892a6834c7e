"""
Tests for PercentileRanker and the luck tiers.
"""
import numpy as np
import pytest

from gacha_luck import InvalidArgument, LUCK_TIERS


class TestPercentileFor:

    @pytest.mark.parametrize("avg", [0, -1, -100])
    def test_no_data_maps_to_median(self, wuwa_engine, avg):
        assert wuwa_engine.percentile_for(avg) == 50.0

    @pytest.mark.parametrize("avg", [0.01, 0.5, 1.0])
    def test_at_most_one_pull_maps_to_floor(self, wuwa_engine, avg):
        assert wuwa_engine.percentile_for(avg) == 0.27

    @pytest.mark.parametrize("avg", [158, 158.5, 1000])
    def test_ceiling(self, wuwa_engine, avg):
        assert wuwa_engine.percentile_for(avg) == 99.9

    def test_delegates_to_compound_cdf(self, wuwa_engine):
        for avg in (2, 41, 81.2, 120):
            expected = wuwa_engine.compound.cdf_within_pulls(avg) * 100
            assert wuwa_engine.percentile_for(avg) == pytest.approx(expected)

    @pytest.mark.parametrize("engine_name", ["wuwa_engine", "genshin_engine", "low_rate_engine"])
    def test_luckier_never_ranks_worse(self, request, engine_name):
        engine = request.getfixturevalue(engine_name)
        grid = np.arange(0.25, 190, 0.25)
        values = [engine.percentile_for(avg) for avg in grid]
        assert all(a <= b + 1e-9 for a, b in zip(values, values[1:]))

    def test_never_reaches_hundred(self, wuwa_engine, genshin_engine):
        for engine in (wuwa_engine, genshin_engine):
            for avg in (50, 100, 150, 179, 10000):
                assert engine.percentile_for(avg) < 100

    def test_genshin_uses_its_own_bounds(self, genshin_engine):
        assert genshin_engine.percentile_for(1) == 0.3
        assert genshin_engine.percentile_for(180) == 99.9
        assert genshin_engine.percentile_for(100) < 99.9

    def test_low_base_rate_clamped_to_floor(self, low_rate_engine):
        assert low_rate_engine.compound.cdf_within_pulls(2) * 100 < 0.27
        assert low_rate_engine.percentile_for(1.0) == 0.27
        assert low_rate_engine.percentile_for(1.5) == 0.27
        assert low_rate_engine.percentile_for(2) == 0.27
        assert low_rate_engine.percentile_for(60) > 0.27


class TestTierFor:

    @pytest.mark.parametrize("percentile, rank", [
        (0, 1), (5, 1), (5.01, 2), (20, 2), (20.5, 3), (35, 3), (49.9, 4), (50, 4),
        (50.1, 5), (65, 5), (80, 6), (80.01, 7), (95, 7), (95.01, 8), (99.9, 8), (100, 8),
    ])
    def test_boundaries(self, wuwa_engine, percentile, rank):
        assert wuwa_engine.tier_for(percentile).rank == rank

    def test_partition_has_no_gaps(self, wuwa_engine):
        ranks = [wuwa_engine.tier_for(p).rank for p in np.linspace(0, 100, 10001)]
        assert ranks[0] == 1
        assert ranks[-1] == 8
        assert all(a <= b for a, b in zip(ranks, ranks[1:]))
        assert set(ranks) == set(range(1, 9))

    @pytest.mark.parametrize("percentile", [-0.1, 100.1, float('nan')])
    def test_out_of_range_rejected(self, wuwa_engine, percentile):
        with pytest.raises(InvalidArgument):
            wuwa_engine.tier_for(percentile)

    def test_eight_ordered_tiers(self):
        assert len(LUCK_TIERS) == 8
        bounds = [tier.upper_bound for tier in LUCK_TIERS]
        assert bounds == sorted(bounds)
        assert bounds[-1] == 100
        assert LUCK_TIERS[0].title == '欧皇降临'
        assert LUCK_TIERS[-1].title == '大地之子'
