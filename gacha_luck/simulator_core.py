"""
核心抽卡模拟器

按变体配置生成模拟抽卡记录，用于测试和蒙特卡洛校验。
"""
from typing import List, Optional

import numpy as np

from gacha_luck.config import VariantConfig
from gacha_luck.draw_event import DrawEvent
from gacha_luck.pity_state import PityState
from gacha_luck.rate_model import RateModel


class GachaSimulator:
    """抽卡模拟器"""

    def __init__(self, variant: VariantConfig, seed: Optional[int] = None):
        self.variant = variant
        self.rate_model = RateModel(variant.rate)
        self.rng = np.random.default_rng(seed)
        self.state = PityState()
        self.low_tier = variant.tiers[0]

    def reset(self):
        """清空保底状态"""
        self.state = PityState()

    def calculate_current_ssr_rate(self) -> float:
        """计算当前五星概率（计数器已包含本抽）"""
        return self.rate_model.success_rate(self.state.ssr_pity_counter)

    def single_pull(self) -> DrawEvent:
        """
        单次抽卡
        返回: 本抽的记录（pity 为本抽时的保底计数）
        """
        # 增加保底计数器
        self.state.ssr_pity_counter += 1
        self.state.sr_pity_counter += 1
        self.state.total_pulls += 1
        pull = self.state.total_pulls

        if self.rng.random() < self.calculate_current_ssr_rate():
            pity = self.state.ssr_pity_counter

            # 大保底必定UP，否则按UP概率判定
            is_up = self.state.guaranteed or self.rng.random() < self.variant.guarantee.up_rate
            self.state.guaranteed = self.variant.guarantee.guarantee_next and not is_up

            # 出了五星，重置保底
            self.state.ssr_pity_counter = 0
            self.state.sr_pity_counter = 0
            return DrawEvent(
                rarity=self.variant.ssr_tier,
                pull=pull,
                name='UP角色' if is_up else '常驻角色',
                category='character',
                is_up=is_up,
                pity=pity,
            )

        sr_tier = self.variant.sr_tier
        if sr_tier is not None and (self.state.sr_pity_counter >= self.variant.sr_hard_pity
                                    or self.rng.random() < self.variant.sr_rate):
            sr_pity = self.state.sr_pity_counter
            self.state.sr_pity_counter = 0
            return DrawEvent(
                rarity=sr_tier,
                pull=pull,
                name='四星角色/武器',
                category='character' if self.rng.random() < 0.5 else 'weapon',
                is_up=False,
                sr_pity=sr_pity,
            )

        return DrawEvent(rarity=self.low_tier, pull=pull, name='三星武器', category='weapon', is_up=False)

    def simulate(self, pulls: int) -> List[DrawEvent]:
        """连续抽 pulls 次，返回按时间顺序的记录"""
        return [self.single_pull() for _ in range(pulls)]

    def pull_until_up(self) -> int:
        """
        从当前状态抽到UP为止
        返回: 消耗的抽数
        """
        pulls = 0
        while True:
            pulls += 1
            event = self.single_pull()
            if event.rarity == self.variant.ssr_tier and event.is_up:
                return pulls
