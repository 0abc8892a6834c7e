"""
抽卡配置类

每个游戏变体一组常量：出金概率曲线、大保底规则、排名边界，
以及用于判断UP的已知角色名单。
"""
import math
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Optional, Tuple

from gacha_luck.errors import ConfigurationError

# (起始抽数, 起始抽数处的概率, 每抽增加的概率)
Breakpoint = Tuple[int, float, float]


@dataclass(frozen=True)
class RateConfig:
    """出金概率曲线"""
    # 基础概率
    base_rate: float = 0.008  # 五星基础概率 0.8%

    # 软保底：从起始抽数的下一抽开始线性递增，分段必须首尾相接
    breakpoints: Tuple[Breakpoint, ...] = (
        (65, 0.008, 0.04),  # 66-70抽每抽+4%
        (70, 0.208, 0.08),  # 71-75抽每抽+8%
        (75, 0.608, 0.10),  # 76-78抽每抽+10%
    )

    # 硬保底：第79抽必出五星
    hard_pity: int = 79

    def __post_init__(self):
        object.__setattr__(self, 'breakpoints', tuple(tuple(bp) for bp in self.breakpoints))
        self.validate()

    def validate(self):
        if not 0.0 <= self.base_rate <= 1.0:
            raise ConfigurationError(f"基础概率必须在[0, 1]之间: {self.base_rate}")
        if self.hard_pity < 1:
            raise ConfigurationError(f"硬保底抽数必须为正: {self.hard_pity}")

        prev_threshold = None
        prev_end = self.base_rate
        prev_segment = None
        for threshold, start_rate, slope in self.breakpoints:
            if prev_threshold is not None and threshold <= prev_threshold:
                raise ConfigurationError(f"软保底分段必须按抽数严格递增: {self.breakpoints}")
            if threshold < 0 or threshold >= self.hard_pity:
                raise ConfigurationError(f"软保底起点 {threshold} 必须在 [0, {self.hard_pity}) 之内")
            if slope < 0:
                raise ConfigurationError(f"软保底斜率不能为负: {slope}")
            if not 0.0 <= start_rate <= 1.0:
                raise ConfigurationError(f"软保底起始概率必须在[0, 1]之间: {start_rate}")

            # 上一段在本段起点处的取值
            if prev_threshold is not None:
                prev_start, prev_slope = prev_segment
                prev_end = prev_start + prev_slope * (threshold - prev_threshold)
            if not math.isclose(start_rate, prev_end, rel_tol=1e-9, abs_tol=1e-12):
                raise ConfigurationError(
                    f"软保底分段不连续: 第{threshold}抽处应为 {prev_end:.6f}，配置为 {start_rate:.6f}"
                )

            prev_threshold = threshold
            prev_segment = (start_rate, slope)

        # 硬保底前一抽的概率不能超过100%
        if self.breakpoints:
            threshold, start_rate, slope = self.breakpoints[-1]
            last_rate = start_rate + slope * (self.hard_pity - 1 - threshold)
            if last_rate > 1.0 + 1e-12:
                raise ConfigurationError(
                    f"第{self.hard_pity - 1}抽概率已超过100% ({last_rate:.4f})，硬保底设置过大"
                )


@dataclass(frozen=True)
class GuaranteeConfig:
    """大保底规则"""
    up_rate: float = 0.5  # 非大保底状态下五星为UP的概率 50%
    guarantee_next: bool = True  # 歪了之后下一个五星必定UP

    def __post_init__(self):
        if not 0.0 <= self.up_rate <= 1.0:
            raise ConfigurationError(f"UP概率必须在[0, 1]之间: {self.up_rate}")
        if not self.guarantee_next and self.up_rate == 0.0:
            raise ConfigurationError("没有大保底且UP概率为0时永远抽不到UP")


@dataclass(frozen=True)
class RankingConfig:
    """
    欧非排名的边界策略

    draws_ceiling: 平均限定抽数达到此值直接判为最非，None 表示取硬保底的两倍
    percentile_floor: 平均1抽一限定时的排名（理论最欧）
    percentile_ceiling: 排名上限，永远不会到100
    empty_percentile: 没有限定数据时的排名
    """
    draws_ceiling: Optional[int] = None
    percentile_floor: float = 0.27
    percentile_ceiling: float = 99.9
    empty_percentile: float = 50.0

    def __post_init__(self):
        if self.draws_ceiling is not None and self.draws_ceiling < 1:
            raise ConfigurationError(f"排名抽数上限必须为正: {self.draws_ceiling}")
        if not 0.0 <= self.percentile_floor < self.percentile_ceiling < 100.0:
            raise ConfigurationError(
                f"排名边界必须满足 0 <= 下限 < 上限 < 100: "
                f"{self.percentile_floor}, {self.percentile_ceiling}"
            )
        if not 0.0 <= self.empty_percentile <= 100.0:
            raise ConfigurationError(f"默认排名必须在[0, 100]之间: {self.empty_percentile}")

    def resolve_ceiling(self, hard_pity: int) -> int:
        if self.draws_ceiling is not None:
            return self.draws_ceiling
        return 2 * hard_pity


@dataclass(frozen=True)
class VariantConfig:
    """单个游戏变体的全部常量"""
    name: str
    display_name: str = ''
    rate: RateConfig = field(default_factory=RateConfig)
    guarantee: GuaranteeConfig = field(default_factory=GuaranteeConfig)
    ranking: RankingConfig = field(default_factory=RankingConfig)

    # 稀有度
    tiers: Tuple[int, ...] = (3, 4, 5)
    ssr_tier: int = 5
    sr_tier: Optional[int] = 4

    # 四星（仅模拟器使用）
    sr_rate: float = 0.06
    sr_hard_pity: int = 10

    # 判断UP用的名单和卡池类型
    up_names: FrozenSet[str] = frozenset()
    standard_names: FrozenSet[str] = frozenset()
    up_pool_types: FrozenSet[int] = frozenset()
    standard_pool_types: FrozenSet[int] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, 'tiers', tuple(sorted(self.tiers)))
        for attr in ('up_names', 'standard_names', 'up_pool_types', 'standard_pool_types'):
            object.__setattr__(self, attr, frozenset(getattr(self, attr)))

        if self.ssr_tier not in self.tiers:
            raise ConfigurationError(f"五星稀有度 {self.ssr_tier} 不在稀有度列表 {self.tiers} 中")
        if self.ssr_tier != self.tiers[-1]:
            raise ConfigurationError(f"五星稀有度 {self.ssr_tier} 必须是最高稀有度")
        if self.sr_tier is not None and (self.sr_tier not in self.tiers or self.sr_tier >= self.ssr_tier):
            raise ConfigurationError(f"四星稀有度 {self.sr_tier} 不合法")
        if not 0.0 <= self.sr_rate <= 1.0:
            raise ConfigurationError(f"四星概率必须在[0, 1]之间: {self.sr_rate}")
        if self.sr_hard_pity < 1:
            raise ConfigurationError(f"四星保底抽数必须为正: {self.sr_hard_pity}")

    def with_names(self, up_names=None, standard_names=None) -> 'VariantConfig':
        """替换角色名单（新角色上线时由调用方提供）"""
        changes = {}
        if up_names is not None:
            changes['up_names'] = frozenset(up_names)
        if standard_names is not None:
            changes['standard_names'] = frozenset(standard_names)
        return replace(self, **changes)


WUWA = VariantConfig(
    name='wuwa',
    display_name='鸣潮',
    rate=RateConfig(),
    guarantee=GuaranteeConfig(up_rate=0.5),
    ranking=RankingConfig(draws_ceiling=158, percentile_floor=0.27),
    sr_rate=0.06,
    sr_hard_pity=10,
    up_names=frozenset([
        '吟霖', '忌炎', '今汐', '长离', '守岸人', '布兰特',
        '相里要', '折枝', '椿', '洛可可', '露缇亚',
        '莫宁', '渡岚', '琳奈', '白芷', '白露',
    ]),
    standard_names=frozenset(['凌阳', '维里奈', '安可', '卡卡罗', '鉴心']),
    up_pool_types=frozenset([1, 2]),  # 角色/武器活动唤取
    standard_pool_types=frozenset([3, 4, 5, 6, 7]),  # 常驻/新手池
)

GENSHIN = VariantConfig(
    name='genshin',
    display_name='原神',
    rate=RateConfig(
        base_rate=0.006,
        breakpoints=((73, 0.006, 0.06),),  # 74抽起每抽+6%
        hard_pity=90,
    ),
    guarantee=GuaranteeConfig(up_rate=0.5),
    ranking=RankingConfig(draws_ceiling=180, percentile_floor=0.3),
    sr_rate=0.051,
    sr_hard_pity=10,
    standard_names=frozenset(['迪卢克', '琴', '刻晴', '莫娜', '七七', '提纳里', '迪希雅']),
    up_pool_types=frozenset([301, 400, 302]),
    standard_pool_types=frozenset([100, 200]),
)

VARIANTS: Dict[str, VariantConfig] = {
    WUWA.name: WUWA,
    GENSHIN.name: GENSHIN,
}


def get_variant(name: str) -> VariantConfig:
    """按名称取变体配置"""
    try:
        return VARIANTS[name]
    except KeyError:
        raise ConfigurationError(
            f"未知的游戏变体 '{name}'，可选: {', '.join(sorted(VARIANTS))}"
        ) from None
