"""
单抽出金概率模型
"""
from bisect import bisect_left

import numpy as np

from gacha_luck.config import RateConfig
from gacha_luck.errors import InvalidArgument


class RateModel:
    """根据距上次五星的抽数计算本抽出五星的概率"""

    def __init__(self, config: RateConfig):
        self.config = config
        self.hard_pity = config.hard_pity
        self._thresholds = [bp[0] for bp in config.breakpoints]

    def success_rate(self, n: int) -> float:
        """
        第 n 抽（距上次五星）出五星的概率
        n: 从1开始的抽数
        """
        if n <= 0:
            raise InvalidArgument(f"抽数必须为正整数: {n}")

        # 硬保底必出
        if n >= self.hard_pity:
            return 1.0

        # 起点严格小于 n 的最后一个分段
        idx = bisect_left(self._thresholds, n) - 1
        if idx < 0:
            return self.config.base_rate

        threshold, start_rate, slope = self.config.breakpoints[idx]
        return start_rate + slope * (n - threshold)

    def rate_table(self) -> np.ndarray:
        """第1抽到硬保底每一抽的概率，下标0对应第1抽"""
        return np.array([self.success_rate(n) for n in range(1, self.hard_pity + 1)], dtype=float)
