"""
UP限定的复合分布（小保底 + 大保底）

非大保底状态下五星有 p 的概率是UP；歪了之后下一个五星必定UP。
"""
import math

import numpy as np

from gacha_luck.config import GuaranteeConfig, RankingConfig
from gacha_luck.distribution import DistributionEngine


class CompoundGuaranteeModel:
    """抽到一个UP所需总抽数的分布"""

    def __init__(self, distribution: DistributionEngine, guarantee: GuaranteeConfig,
                 ranking: RankingConfig):
        self.distribution = distribution
        self.guarantee = guarantee
        self.up_rate = guarantee.up_rate
        self.hard_pity = distribution.hard_pity
        self.draws_ceiling = ranking.resolve_ceiling(self.hard_pity)
        self.max_probability = ranking.percentile_ceiling / 100.0

        # 下标 r 对应 r 抽内出五星的概率，r=0 为 0
        self._cdf_padded = np.concatenate(([0.0], distribution.cdf_table()))

    def cdf_within_pulls(self, target) -> float:
        """
        不带大保底开始，target 抽内抽到UP的概率
        小数抽数向下取整，结果不超过 max_probability
        """
        if target <= 0:
            return 0.0
        if target >= self.draws_ceiling:
            return self.max_probability

        pulls = int(math.floor(target))
        if self.guarantee.guarantee_next:
            total = self._cdf_with_guarantee(pulls)
        else:
            total = self._cdf_without_guarantee(pulls)
        return min(total, self.max_probability)

    def _cdf_with_guarantee(self, pulls: int) -> float:
        p = self.up_rate
        first = self.distribution.pmf_table()[:min(pulls, self.hard_pity)]
        i = np.arange(1, len(first) + 1)

        # 情况1: 第一个五星在第 i 抽出，且是UP
        case_a = first.sum() * p

        # 情况2: 第一个五星在第 i 抽歪了，第二个五星（必定UP）在剩余 pulls-i 抽内出
        remaining = np.minimum(pulls - i, self.hard_pity)
        case_b = np.dot(first * (1.0 - p), self._cdf_padded[remaining])

        return float(case_a + case_b)

    def _cdf_without_guarantee(self, pulls: int) -> float:
        # 每个五星独立以 p 的概率为UP：对 k 个五星的总抽数做卷积
        p = self.up_rate
        pmf = self.distribution.pmf_table()
        k_fold = pmf[:pulls]
        total = 0.0
        weight = p
        while weight > 1e-15 and k_fold.any():
            total += weight * k_fold.sum()
            # 卷积结果下标 j 对应 j+2 抽，补一位对齐到从第1抽开始
            k_fold = np.concatenate(([0.0], np.convolve(k_fold, pmf)))[:pulls]
            weight *= 1.0 - p
        return float(total)

    def expected_draws_for_up(self) -> float:
        """
        抽到一个UP的期望抽数
        有大保底: E[五星数] = 1×p + 2×(1-p) = 2-p
        无大保底: E[五星数] = 1/p
        """
        expected = self.distribution.expected_first_success()
        if self.guarantee.guarantee_next:
            return expected * (2.0 - self.up_rate)
        return expected / self.up_rate

    def cdf_table(self, max_target: int = None) -> np.ndarray:
        """1..max_target 每个抽数内抽到UP的概率"""
        if max_target is None:
            max_target = self.draws_ceiling
        return np.array([self.cdf_within_pulls(t) for t in range(1, max_target + 1)])
