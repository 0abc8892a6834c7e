"""
Tests for RateConfig validation and RateModel.
"""
import numpy as np
import pytest

from gacha_luck import ConfigurationError, GENSHIN, InvalidArgument, RateConfig, WUWA
from gacha_luck.rate_model import RateModel


class TestRateConfigValidation:

    def test_default_config_is_valid(self):
        config = RateConfig()
        assert config.hard_pity == 79
        assert len(config.breakpoints) == 3

    def test_breakpoints_list_is_stored_as_tuple(self):
        config = RateConfig(breakpoints=[[73, 0.006, 0.06]], base_rate=0.006, hard_pity=90)
        assert config.breakpoints == ((73, 0.006, 0.06),)

    def test_non_ascending_breakpoints_rejected(self):
        with pytest.raises(ConfigurationError):
            RateConfig(breakpoints=((70, 0.008, 0.04), (65, 0.208, 0.08)))

    def test_discontinuous_segments_rejected(self):
        # 0.008 + 0.04 * 5 = 0.208, not 0.3
        with pytest.raises(ConfigurationError):
            RateConfig(breakpoints=((65, 0.008, 0.04), (70, 0.3, 0.08)))

    def test_first_segment_must_start_at_base_rate(self):
        with pytest.raises(ConfigurationError):
            RateConfig(base_rate=0.008, breakpoints=((65, 0.01, 0.04),))

    def test_base_rate_out_of_range_rejected(self):
        with pytest.raises(ConfigurationError):
            RateConfig(base_rate=1.5, breakpoints=())

    def test_negative_slope_rejected(self):
        with pytest.raises(ConfigurationError):
            RateConfig(base_rate=0.5, breakpoints=((10, 0.5, -0.01),), hard_pity=20)

    def test_breakpoint_at_or_beyond_hard_pity_rejected(self):
        with pytest.raises(ConfigurationError):
            RateConfig(breakpoints=((79, 0.008, 0.04),), hard_pity=79)

    def test_ramp_exceeding_one_before_hard_pity_rejected(self):
        # 0.008 + 0.1 * 20 > 1 at draw 85
        with pytest.raises(ConfigurationError):
            RateConfig(breakpoints=((65, 0.008, 0.1),), hard_pity=86)

    def test_non_positive_hard_pity_rejected(self):
        with pytest.raises(ConfigurationError):
            RateConfig(breakpoints=(), hard_pity=0)


class TestSuccessRate:

    @pytest.fixture
    def model(self):
        return RateModel(WUWA.rate)

    def test_flat_region_returns_base_rate(self, model):
        assert model.success_rate(1) == pytest.approx(0.008)
        assert model.success_rate(65) == pytest.approx(0.008)

    @pytest.mark.parametrize("n, expected", [
        (66, 0.048), (70, 0.208),
        (71, 0.288), (75, 0.608),
        (76, 0.708), (78, 0.908),
    ])
    def test_soft_pity_segments(self, model, n, expected):
        assert model.success_rate(n) == pytest.approx(expected)

    def test_hard_pity_is_exactly_one(self, model):
        assert model.success_rate(79) == 1.0
        assert model.success_rate(200) == 1.0

    @pytest.mark.parametrize("n", [0, -1, -79])
    def test_non_positive_draw_index_rejected(self, model, n):
        with pytest.raises(InvalidArgument):
            model.success_rate(n)

    @pytest.mark.parametrize("variant", [WUWA, GENSHIN], ids=lambda v: v.name)
    def test_rate_is_non_decreasing_up_to_hard_pity(self, variant):
        model = RateModel(variant.rate)
        cap = variant.rate.hard_pity
        for n in range(1, cap):
            assert model.success_rate(n) <= model.success_rate(n + 1)
        assert model.success_rate(cap) == 1.0

    def test_genshin_ramp(self):
        model = RateModel(GENSHIN.rate)
        assert model.success_rate(73) == pytest.approx(0.006)
        assert model.success_rate(74) == pytest.approx(0.066)
        assert model.success_rate(89) == pytest.approx(0.966)
        assert model.success_rate(90) == 1.0

    def test_rate_table_matches_success_rate(self, model):
        table = model.rate_table()
        assert isinstance(table, np.ndarray)
        assert len(table) == 79
        assert table[0] == pytest.approx(model.success_rate(1))
        assert table[-1] == 1.0
