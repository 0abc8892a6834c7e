"""
Tests for DistributionEngine.
"""
import numpy as np
import pytest

from gacha_luck import GENSHIN, InvalidArgument, RateConfig, WUWA
from gacha_luck.distribution import DistributionEngine
from gacha_luck.rate_model import RateModel


def naive_first_success(model, n):
    survival = 1.0
    for i in range(1, n):
        survival *= 1 - model.success_rate(i)
    return survival * model.success_rate(n)


@pytest.fixture(params=[WUWA, GENSHIN], ids=lambda v: v.name)
def distribution(request):
    return DistributionEngine(RateModel(request.param.rate))


class TestFirstSuccess:

    def test_matches_direct_product(self, distribution):
        model = distribution.rate_model
        for n in (1, 2, 30, 66, 75, distribution.hard_pity):
            assert distribution.first_success_at(n) == pytest.approx(naive_first_success(model, n))

    def test_first_draw_equals_base_rate(self, distribution):
        assert distribution.first_success_at(1) == pytest.approx(distribution.rate_model.config.base_rate)

    def test_pmf_sums_to_one(self, distribution):
        total = sum(distribution.first_success_at(n) for n in range(1, distribution.hard_pity + 1))
        assert total == pytest.approx(1.0, abs=1e-12)

    def test_beyond_hard_pity_is_zero(self, distribution):
        assert distribution.first_success_at(distribution.hard_pity + 1) == 0.0

    def test_non_positive_index_rejected(self, distribution):
        with pytest.raises(InvalidArgument):
            distribution.first_success_at(0)


class TestCumulative:

    def test_reaches_one_at_hard_pity(self, distribution):
        assert distribution.cumulative_at(distribution.hard_pity) == pytest.approx(1.0)
        assert distribution.cumulative_at(distribution.hard_pity + 50) == pytest.approx(1.0)

    def test_non_decreasing(self, distribution):
        values = [distribution.cumulative_at(n) for n in range(0, distribution.hard_pity + 5)]
        assert all(a <= b for a, b in zip(values, values[1:]))
        assert max(values) <= 1.0

    def test_zero_and_negative(self, distribution):
        assert distribution.cumulative_at(0) == 0.0
        assert distribution.cumulative_at(-3) == 0.0

    def test_equals_partial_sum(self, distribution):
        partial = sum(distribution.first_success_at(i) for i in range(1, 41))
        assert distribution.cumulative_at(40) == pytest.approx(partial)


class TestExpectation:

    def test_matches_weighted_sum(self, distribution):
        expected = sum(n * distribution.first_success_at(n) for n in range(1, distribution.hard_pity + 1))
        assert distribution.expected_first_success() == pytest.approx(expected)

    def test_within_soft_pity_region(self, distribution):
        soft_start = distribution.rate_model.config.breakpoints[0][0]
        assert soft_start / 2 < distribution.expected_first_success() < distribution.hard_pity

    def test_flat_rate_without_soft_pity(self):
        # Pure geometric truncated at the hard pity
        distribution = DistributionEngine(RateModel(RateConfig(base_rate=0.5, breakpoints=(), hard_pity=2)))
        assert distribution.first_success_at(1) == pytest.approx(0.5)
        assert distribution.first_success_at(2) == pytest.approx(0.5)
        assert distribution.expected_first_success() == pytest.approx(1.5)


class TestTables:

    def test_tables_are_read_only(self, distribution):
        with pytest.raises(ValueError):
            distribution.pmf_table()[0] = 1.0
        with pytest.raises(ValueError):
            distribution.cdf_table()[0] = 1.0

    def test_probability_table_rows(self, distribution):
        table = distribution.probability_table()
        assert len(table) == distribution.hard_pity
        pull, rate, first, cumulative = table[0]
        assert pull == 1
        assert first == pytest.approx(rate)
        assert cumulative == pytest.approx(first)
        assert table[-1][1] == 1.0
        assert np.isclose(table[-1][3], 1.0)
