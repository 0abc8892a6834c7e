"""
抽卡欧非分析

软保底 + 硬保底 + 50/50 大保底机制下的抽卡统计与欧非排名。
"""
from gacha_luck.config import (
    GENSHIN, VARIANTS, WUWA, GuaranteeConfig, RankingConfig, RateConfig, VariantConfig, get_variant,
)
from gacha_luck.draw_event import DrawEvent, SummaryStats
from gacha_luck.engine import Engine, create_engine, create_engine_for_variant
from gacha_luck.errors import ConfigurationError, GachaLuckError, InvalidArgument
from gacha_luck.percentile_ranker import LUCK_TIERS, LuckTier

__version__ = '0.1.0'

__all__ = [
    'ConfigurationError', 'DrawEvent', 'Engine', 'GENSHIN', 'GachaLuckError', 'GuaranteeConfig',
    'InvalidArgument', 'LUCK_TIERS', 'LuckTier', 'RankingConfig', 'RateConfig', 'SummaryStats',
    'VARIANTS', 'VariantConfig', 'WUWA', 'create_engine', 'create_engine_for_variant', 'get_variant',
]
