"""
欧非排名

把玩家的平均限定抽数映射到理论分布中的排名百分比（越小越欧），
再把百分比映射到八个称号之一。
"""
import math
from dataclasses import dataclass
from typing import Tuple

from gacha_luck.compound_model import CompoundGuaranteeModel
from gacha_luck.config import RankingConfig
from gacha_luck.errors import InvalidArgument


@dataclass(frozen=True)
class LuckTier:
    """欧非称号"""
    rank: int
    upper_bound: float  # 排名百分比 <= upper_bound 即落在此档
    title: str
    description: str
    color: str


LUCK_TIERS: Tuple[LuckTier, ...] = (
    LuckTier(1, 5.0, '欧皇降临', '天选之人', '#FACC15'),
    LuckTier(2, 20.0, '气运全开', '运气极好', '#C084FC'),
    LuckTier(3, 35.0, '小有气运', '运气不错', '#22D3EE'),
    LuckTier(4, 50.0, '正常发挥', '亚洲水平', '#60A5FA'),
    LuckTier(5, 65.0, '运途坎坷', '略显曲折', '#FB923C'),
    LuckTier(6, 80.0, '非气缠身', '急需改运', '#94A3B8'),
    LuckTier(7, 95.0, '命运多舛', '保底战士', '#FB7185'),
    LuckTier(8, 100.0, '大地之子', '究极非酋', '#F87171'),
)


class PercentileRanker:
    """排名计算器"""

    def __init__(self, compound: CompoundGuaranteeModel, ranking: RankingConfig):
        self.compound = compound
        self.ranking = ranking
        self.draws_ceiling = compound.draws_ceiling

    def percentile_for(self, avg_pulls_per_up: float) -> float:
        """
        平均限定抽数 -> 排名百分比 (下限~上限，越小越欧)

        - <= 0: 没有数据，取中位
        - <= 1: 理论最欧，直接取下限（CDF在这一端数值不稳定）
        - >= 抽数上限: 取上限，永远不到100
        中间段的CDF值不低于下限，保证单调
        """
        if avg_pulls_per_up <= 0:
            return self.ranking.empty_percentile
        if avg_pulls_per_up <= 1:
            return self.ranking.percentile_floor
        if avg_pulls_per_up >= self.draws_ceiling:
            return self.ranking.percentile_ceiling

        percentile = self.compound.cdf_within_pulls(avg_pulls_per_up) * 100.0
        percentile = max(percentile, self.ranking.percentile_floor)
        return min(percentile, self.ranking.percentile_ceiling)

    def tier_for(self, percentile: float) -> LuckTier:
        if math.isnan(percentile) or percentile < 0 or percentile > 100:
            raise InvalidArgument(f"排名百分比必须在[0, 100]之间: {percentile}")

        for tier in LUCK_TIERS:
            if percentile <= tier.upper_bound:
                return tier
        return LUCK_TIERS[-1]
