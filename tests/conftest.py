"""Shared fixtures for the gacha_luck tests."""
import pytest

from gacha_luck import DrawEvent, GuaranteeConfig, RankingConfig, RateConfig, create_engine, create_engine_for_variant


@pytest.fixture(scope="session")
def wuwa_engine():
    return create_engine_for_variant('wuwa')


@pytest.fixture(scope="session")
def genshin_engine():
    return create_engine_for_variant('genshin')


@pytest.fixture(scope="session")
def flat_engine():
    """Base rate 0.008, 65 flat draws, hard pity 79, p=0.5."""
    return create_engine(
        RateConfig(
            base_rate=0.008,
            breakpoints=((65, 0.008, 0.04), (70, 0.208, 0.08), (75, 0.608, 0.10)),
            hard_pity=79,
        ),
        GuaranteeConfig(up_rate=0.5),
        RankingConfig(draws_ceiling=158, percentile_floor=0.27),
    )


def make_log(*ssr_runs):
    """
    Build a chronological log from (pity, is_up) pairs: pity-1 three-star
    draws followed by one five-star draw.
    """
    events = []
    for pity, is_up in ssr_runs:
        events.extend(DrawEvent(rarity=3) for _ in range(pity - 1))
        events.append(DrawEvent(rarity=5, is_up=is_up))
    return events


@pytest.fixture
def build_log():
    return make_log


@pytest.fixture(scope="session")
def low_rate_engine():
    """Base rate 0.002, no soft pity, hard pity 79, default ranking bounds."""
    return create_engine(
        RateConfig(base_rate=0.002, breakpoints=(), hard_pity=79),
        GuaranteeConfig(up_rate=0.5),
    )
