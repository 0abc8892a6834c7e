"""
蒙特卡洛分析器

用模拟器反复抽到UP，和理论期望对照。
"""
from typing import List, Optional

import numpy as np

from gacha_luck.config import VariantConfig
from gacha_luck.engine import Engine
from gacha_luck.simulator_core import GachaSimulator


class MonteCarloAnalyzer:
    """蒙特卡洛分析器"""

    def __init__(self, variant: VariantConfig, iterations: int = 10000, seed: Optional[int] = None):
        self.variant = variant
        self.iterations = iterations
        self.seed = seed

    def simulate_runs(self, verbose: bool = True) -> List[int]:
        """
        从零保底开始抽到UP，重复 iterations 次
        返回: 每次消耗的抽数
        """
        results = []
        simulator = GachaSimulator(self.variant, seed=self.seed)

        if verbose:
            print(f"正在模拟抽到UP，共 {self.iterations} 次...")

        for i in range(self.iterations):
            if verbose and (i + 1) % 1000 == 0:
                print(f"进度: {i + 1}/{self.iterations}")

            simulator.reset()
            results.append(simulator.pull_until_up())

        return results

    def print_results(self, results: List[int], engine: Engine):
        """打印模拟结果与理论值对照"""
        pulls = np.array(results)
        n = len(pulls)
        within_ceiling = np.mean(pulls <= engine.compound.draws_ceiling - 1) * 100

        print("\n" + "=" * 60)
        print("【模拟结果】")
        print("=" * 60)
        print(f"\n模拟次数: {n}")
        print(f"\n抽到UP消耗抽数:")
        print(f"  平均值: {pulls.mean():.2f} 抽 (理论 {engine.theoretical_expected_featured():.2f} 抽)")
        print(f"  中位数: {np.median(pulls):.0f} 抽")
        print(f"  最小值: {pulls.min()} 抽")
        print(f"  最大值: {pulls.max()} 抽")
        for q in (25, 75, 90):
            print(f"  {q}%分位数: {np.percentile(pulls, q):.0f} 抽")

        print(f"\n理论平均出金抽数: {engine.theoretical_expected_rare():.2f} 抽")
        print(f"{engine.compound.draws_ceiling - 1}抽内抽到UP: 模拟 {within_ceiling:.2f}%")

        print("\n" + "=" * 60 + "\n")
