"""
首次出金分布

由单抽概率推出：第 n 抽首次出五星的概率、n 抽内出五星的累积概率、期望抽数。
整张表在构造时一次算好，之后只读。
"""
from typing import List, Tuple

import numpy as np

from gacha_luck.errors import InvalidArgument
from gacha_luck.rate_model import RateModel


class DistributionEngine:
    """首次出五星的概率分布"""

    def __init__(self, rate_model: RateModel):
        self.rate_model = rate_model
        self.hard_pity = rate_model.hard_pity

        rates = rate_model.rate_table()
        # 前 n-1 抽都没出的概率（累乘）
        survival = np.concatenate(([1.0], np.cumprod(1.0 - rates)[:-1]))
        pmf = survival * rates
        cdf = np.minimum(np.cumsum(pmf), 1.0)

        for table in (rates, pmf, cdf):
            table.setflags(write=False)

        self._rates = rates
        self._pmf = pmf
        self._cdf = cdf
        self._expected = float(np.dot(np.arange(1, self.hard_pity + 1), pmf))

    def first_success_at(self, n: int) -> float:
        """
        在第 n 抽首次出五星的概率
        P(首次在第n抽) = P(前n-1抽都没出) × P(第n抽出)
        """
        if n <= 0:
            raise InvalidArgument(f"抽数必须为正整数: {n}")
        if n > self.hard_pity:
            return 0.0
        return float(self._pmf[n - 1])

    def cumulative_at(self, n) -> float:
        """n 抽或更少出五星的累积概率"""
        n = int(n)
        if n <= 0:
            return 0.0
        return float(self._cdf[min(n, self.hard_pity) - 1])

    def expected_first_success(self) -> float:
        """期望抽数 E[X] = Σ n × P(首次在第n抽)"""
        return self._expected

    def pmf_table(self) -> np.ndarray:
        return self._pmf

    def cdf_table(self) -> np.ndarray:
        return self._cdf

    def probability_table(self) -> List[Tuple[int, float, float, float]]:
        """
        完整分布表
        返回: [(抽数, 单抽概率, 首次出金概率, 累积概率), ...]
        """
        return [
            (n, float(self._rates[n - 1]), float(self._pmf[n - 1]), float(self._cdf[n - 1]))
            for n in range(1, self.hard_pity + 1)
        ]
