"""
统计引擎入口
"""
from typing import Iterable, Optional

from gacha_luck.classifier import UpClassifier
from gacha_luck.compound_model import CompoundGuaranteeModel
from gacha_luck.config import GuaranteeConfig, RankingConfig, RateConfig, VariantConfig, get_variant
from gacha_luck.distribution import DistributionEngine
from gacha_luck.draw_event import DrawEvent, SummaryStats
from gacha_luck.percentile_ranker import LuckTier, PercentileRanker
from gacha_luck.rate_model import RateModel
from gacha_luck.stats_aggregator import StatsAggregator


class Engine:
    """
    抽卡统计引擎

    构造后不可变，可以在多个线程间共享。
    """

    def __init__(self, variant: VariantConfig):
        self.variant = variant
        self.rate_model = RateModel(variant.rate)
        self.distribution = DistributionEngine(self.rate_model)
        self.compound = CompoundGuaranteeModel(self.distribution, variant.guarantee, variant.ranking)
        self.ranker = PercentileRanker(self.compound, variant.ranking)
        self.classifier = UpClassifier.from_variant(variant)
        self.aggregator = StatsAggregator(
            variant, self.distribution, self.compound, self.ranker, self.classifier
        )

    def aggregate(self, events: Iterable[DrawEvent], newest_first: bool = False) -> SummaryStats:
        return self.aggregator.aggregate(events, newest_first=newest_first)

    def theoretical_expected_rare(self) -> float:
        """平均几抽一个五星"""
        return self.distribution.expected_first_success()

    def theoretical_expected_featured(self) -> float:
        """平均几抽一个UP"""
        return self.compound.expected_draws_for_up()

    def percentile_for(self, avg_pulls_per_up: float) -> float:
        return self.ranker.percentile_for(avg_pulls_per_up)

    def tier_for(self, percentile: float) -> LuckTier:
        return self.ranker.tier_for(percentile)


def create_engine(rate_config: RateConfig, guarantee_config: GuaranteeConfig,
                  ranking_config: Optional[RankingConfig] = None, **variant_fields) -> Engine:
    """
    用自定义配置创建引擎
    variant_fields: VariantConfig 的其余字段（稀有度、名单等）
    """
    variant = VariantConfig(
        name=variant_fields.pop('name', 'custom'),
        rate=rate_config,
        guarantee=guarantee_config,
        ranking=ranking_config if ranking_config is not None else RankingConfig(),
        **variant_fields,
    )
    return Engine(variant)


def create_engine_for_variant(name: str, up_names=None, standard_names=None) -> Engine:
    """按变体名创建引擎，可在本次会话中替换角色名单"""
    variant = get_variant(name)
    if up_names is not None or standard_names is not None:
        variant = variant.with_names(up_names=up_names, standard_names=standard_names)
    return Engine(variant)
