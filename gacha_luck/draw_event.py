"""
抽卡记录与统计结果
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from gacha_luck.percentile_ranker import LuckTier


@dataclass(frozen=True)
class DrawEvent:
    """单抽记录"""
    rarity: int  # 稀有度
    pull: Optional[int] = None  # 第几抽（按时间顺序，从1开始）
    name: Optional[str] = None
    category: str = 'character'  # 'character' / 'weapon'
    time: Optional[str] = None
    is_up: Optional[bool] = None  # None 表示未知，由分类规则判断
    pool_type: Optional[int] = None
    resource_id: Optional[int] = None

    # 以下由统计器计算，输入时忽略
    pity: int = 0  # 五星：距上个五星的抽数
    sr_pity: int = 0  # 四星：距上个四星及以上的抽数


@dataclass(frozen=True)
class SummaryStats:
    """统计结果（每次统计都重新生成）"""
    total_pulls: int
    tier_counts: Tuple[Tuple[int, int], ...]  # (星级, 数量)，按星级升序
    ssr_count: int
    sr_count: int
    up_count: int
    avg_pulls_per_ssr: float
    avg_pulls_per_up: float
    win_rate: float  # 小保底不歪率，百分比
    luck_percentile: float
    luck_tier: LuckTier
    expected_pulls_per_ssr: float
    expected_pulls_per_up: float
    records: Tuple[DrawEvent, ...] = field(default=(), repr=False)
    up_runs: Tuple[int, ...] = ()  # 每个UP实际花费的抽数（含歪掉的五星）

    def count_of(self, tier: int) -> int:
        """某星级的数量，未配置的星级返回0"""
        for rarity, count in self.tier_counts:
            if rarity == tier:
                return count
        return 0
