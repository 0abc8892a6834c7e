"""
抽卡记录统计器
"""
from dataclasses import replace
from typing import Iterable, List, Sequence

from gacha_luck.classifier import UpClassifier
from gacha_luck.compound_model import CompoundGuaranteeModel
from gacha_luck.config import VariantConfig
from gacha_luck.distribution import DistributionEngine
from gacha_luck.draw_event import DrawEvent, SummaryStats
from gacha_luck.errors import InvalidArgument
from gacha_luck.percentile_ranker import PercentileRanker


class StatsAggregator:
    """从抽卡记录计算统计数据"""

    def __init__(self, variant: VariantConfig, distribution: DistributionEngine,
                 compound: CompoundGuaranteeModel, ranker: PercentileRanker,
                 classifier: UpClassifier):
        self.variant = variant
        self.ssr_tier = variant.ssr_tier
        self.sr_tier = variant.sr_tier
        self.classifier = classifier
        self.ranker = ranker

        # 理论期望只和配置有关
        self.expected_pulls_per_ssr = distribution.expected_first_success()
        self.expected_pulls_per_up = compound.expected_draws_for_up()

    def aggregate(self, events: Iterable[DrawEvent], newest_first: bool = False) -> SummaryStats:
        """
        统计抽卡记录
        events: 抽卡记录
        newest_first: 记录是否为最新的在前（接口返回的顺序）
            为 True 时先反转成时间顺序计算保底，返回的 records 再反转回最新在前
        """
        events = list(events)
        chronological = events[::-1] if newest_first else events
        self._validate(chronological)

        if not chronological:
            return self._empty_stats()

        records = self._assign_pity(chronological)
        ssr_records = [r for r in records if r.rarity == self.ssr_tier]
        ssr_count = len(ssr_records)
        up_count = sum(1 for r in ssr_records if r.is_up)

        tier_counts = {tier: 0 for tier in self.variant.tiers}
        for record in records:
            tier_counts[record.rarity] += 1

        # 平均出金抽数：每个五星 pity 的平均值
        avg_pulls_per_ssr = 0.0
        if ssr_count > 0:
            avg_pulls_per_ssr = sum(r.pity for r in ssr_records) / ssr_count

        # 平均限定抽数：累加到下一个UP为止的所有五星 pity（含歪掉的）
        up_runs = []
        accumulated_pulls = 0
        for record in ssr_records:
            accumulated_pulls += record.pity
            if record.is_up:
                up_runs.append(accumulated_pulls)
                accumulated_pulls = 0

        avg_pulls_per_up = sum(up_runs) / len(up_runs) if up_runs else 0.0
        win_rate = up_count / ssr_count * 100 if ssr_count > 0 else 0.0

        luck_percentile = self.ranker.percentile_for(avg_pulls_per_up)

        if newest_first:
            records.reverse()

        return SummaryStats(
            total_pulls=len(records),
            tier_counts=tuple(sorted(tier_counts.items())),
            ssr_count=ssr_count,
            sr_count=tier_counts.get(self.sr_tier, 0) if self.sr_tier is not None else 0,
            up_count=up_count,
            avg_pulls_per_ssr=avg_pulls_per_ssr,
            avg_pulls_per_up=avg_pulls_per_up,
            win_rate=win_rate,
            luck_percentile=luck_percentile,
            luck_tier=self.ranker.tier_for(luck_percentile),
            expected_pulls_per_ssr=self.expected_pulls_per_ssr,
            expected_pulls_per_up=self.expected_pulls_per_up,
            records=tuple(records),
            up_runs=tuple(up_runs),
        )

    def _validate(self, chronological: Sequence[DrawEvent]):
        for event in chronological:
            if event.rarity not in self.variant.tiers:
                raise InvalidArgument(
                    f"未知的稀有度 {event.rarity}（{self.variant.display_name or self.variant.name} "
                    f"支持 {self.variant.tiers}）"
                )

        pulls = [event.pull for event in chronological]
        given = [p for p in pulls if p is not None]
        if not given:
            return
        if len(given) != len(pulls):
            raise InvalidArgument("抽数序号要么全部提供，要么全部省略")
        for prev, cur in zip(pulls, pulls[1:]):
            if cur <= prev:
                raise InvalidArgument(
                    f"抽卡记录不是按时间顺序排列（第{prev}抽之后是第{cur}抽），请检查 newest_first"
                )

    def _assign_pity(self, chronological: Sequence[DrawEvent]) -> List[DrawEvent]:
        """按时间顺序计算每条记录的保底计数，返回新的记录列表（不修改输入）"""
        ssr_pity_counter = 0  # 五星保底计数
        sr_pity_counter = 0  # 四星保底计数
        records = []

        for index, event in enumerate(chronological):
            ssr_pity_counter += 1
            sr_pity_counter += 1
            pull = event.pull if event.pull is not None else index + 1

            if event.rarity == self.ssr_tier:
                record = replace(event, pull=pull, pity=ssr_pity_counter, sr_pity=0,
                                 is_up=self.classifier.is_up(event))
                ssr_pity_counter = 0
                sr_pity_counter = 0
            elif event.rarity == self.sr_tier:
                record = replace(event, pull=pull, pity=0, sr_pity=sr_pity_counter, is_up=False)
                sr_pity_counter = 0
            else:
                record = replace(event, pull=pull, pity=0, sr_pity=0, is_up=False)

            records.append(record)

        return records

    def _empty_stats(self) -> SummaryStats:
        luck_percentile = self.ranker.percentile_for(0)
        return SummaryStats(
            total_pulls=0,
            tier_counts=tuple((tier, 0) for tier in sorted(self.variant.tiers)),
            ssr_count=0,
            sr_count=0,
            up_count=0,
            avg_pulls_per_ssr=0.0,
            avg_pulls_per_up=0.0,
            win_rate=0.0,
            luck_percentile=luck_percentile,
            luck_tier=self.ranker.tier_for(luck_percentile),
            expected_pulls_per_ssr=self.expected_pulls_per_ssr,
            expected_pulls_per_up=self.expected_pulls_per_up,
        )
