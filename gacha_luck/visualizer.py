"""
数据可视化模块
用于生成理论分布与玩家排名的图表

独立运行: python -m gacha_luck.visualizer [变体名]
"""

import os
import sys
import warnings

import matplotlib
from matplotlib import font_manager
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np
from typing import List, Optional

from gacha_luck.config import VARIANTS
from gacha_luck.draw_event import SummaryStats
from gacha_luck.engine import Engine, create_engine_for_variant
from gacha_luck.errors import GachaLuckError
from gacha_luck.percentile_ranker import LUCK_TIERS

sns.set_style("whitegrid")
sns.set_context("paper", font_scale=1.2)

# Configure CJK fonts so labels do not render as boxes
CHINESE_FONTS = [
    'PingFang SC', 'Hiragino Sans GB', 'Songti SC', 'STHeiti', 'SimHei',
    'Microsoft YaHei', 'Noto Sans CJK SC', 'Source Han Sans SC', 'Arial Unicode MS',
    'DejaVu Sans'
]


def configure_chinese_font():
    for font_name in CHINESE_FONTS:
        try:
            # findfont raises if the font does not exist when fallback_to_default is False
            font_manager.findfont(font_name, fallback_to_default=False)
            matplotlib.rcParams['font.sans-serif'] = [font_name]
            matplotlib.rcParams['axes.unicode_minus'] = False
            return
        except ValueError:
            continue
    warnings.warn("未找到可用的中文字体，图表文字可能显示为方框")


configure_chinese_font()

COLORS = {
    'rate': '#D62728',
    'ssr': '#1F77B4',
    'up': '#FF7F0E',
    'player': '#2CA02C',
    'palette': ['#1F77B4', '#FF7F0E', '#2CA02C', '#D62728', '#9467BD', '#8C564B']
}

plt.rcParams['figure.dpi'] = 150
plt.rcParams['savefig.dpi'] = 300
plt.rcParams['axes.facecolor'] = '#f9fafb'
plt.rcParams['figure.facecolor'] = 'white'
plt.rcParams['axes.edgecolor'] = '#e5e7eb'
plt.rcParams['grid.color'] = '#e5e7eb'
plt.rcParams['grid.alpha'] = 0.8
sns.set_palette(COLORS['palette'])


def style_axes(ax):
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    ax.tick_params(axis='both', labelsize=10)
    ax.grid(True, linestyle='--', linewidth=0.8, alpha=0.7)
    ax.set_axisbelow(True)


class GachaVisualizer:
    """理论分布与玩家排名可视化器"""

    def __init__(self, engine: Engine, output_dir: str = '.'):
        self.engine = engine
        self.output_dir = output_dir
        self.colors = COLORS
        self.title_prefix = engine.variant.display_name or engine.variant.name

    def _save(self, fig, file_name: str, save_path: Optional[str]) -> str:
        path = save_path or os.path.join(self.output_dir, file_name)
        fig.savefig(path, dpi=300, bbox_inches='tight')
        print(f"图表已保存至: {path}")
        plt.close(fig)
        return path

    def plot_rate_and_pmf(self, save_path: str = None) -> str:
        """
        绘制单抽出金概率曲线和首次出金概率分布
        """
        distribution = self.engine.distribution
        table = distribution.probability_table()
        pulls = [row[0] for row in table]
        rates = [row[1] * 100 for row in table]
        pmf = [row[2] * 100 for row in table]

        fig, ax = plt.subplots(figsize=(12, 6))
        style_axes(ax)
        ax.bar(pulls, pmf, color=self.colors['ssr'], alpha=0.85, edgecolor='white', linewidth=0.8,
               label='首次出金概率')
        ax.set_xlabel('抽数（距上个五星）', fontsize=13, fontweight='bold')
        ax.set_ylabel('首次出金概率 (%)', fontsize=13, fontweight='bold')

        ax_rate = ax.twinx()
        ax_rate.plot(pulls, rates, color=self.colors['rate'], linewidth=2.5, label='单抽出金概率')
        ax_rate.set_ylabel('单抽出金概率 (%)', fontsize=13, fontweight='bold')
        ax_rate.set_ylim(0, 105)

        expected = distribution.expected_first_success()
        ax.axvline(x=expected, color='gray', linestyle='--', linewidth=1.5, alpha=0.7)
        ax.text(expected, ax.get_ylim()[1] * 0.95, f' 期望 {expected:.1f} 抽', fontsize=10, color='gray')

        lines = ax.get_legend_handles_labels()
        rate_lines = ax_rate.get_legend_handles_labels()
        ax.legend(lines[0] + rate_lines[0], lines[1] + rate_lines[1], fontsize=11, frameon=True, shadow=True,
                  loc='upper left')
        ax.set_title(f'{self.title_prefix} - 五星概率分布', fontsize=15, fontweight='bold', pad=20)

        plt.tight_layout()
        return self._save(fig, 'rate_distribution.png', save_path)

    def plot_cdf_comparison(self, stats: Optional[SummaryStats] = None, save_path: str = None) -> str:
        """
        绘制五星与UP的累积概率曲线，并标出玩家的平均限定抽数
        """
        compound = self.engine.compound
        max_pulls = compound.draws_ceiling
        x = np.arange(1, max_pulls + 1)
        ssr_cdf = [self.engine.distribution.cumulative_at(n) * 100 for n in x]
        up_cdf = compound.cdf_table(max_pulls) * 100

        fig, ax = plt.subplots(figsize=(12, 6))
        style_axes(ax)
        ax.plot(x, ssr_cdf, color=self.colors['ssr'], linewidth=2.5, label='出五星')
        ax.plot(x, up_cdf, color=self.colors['up'], linewidth=2.5, label='出UP（含大保底）')

        if stats is not None and stats.avg_pulls_per_up > 0:
            avg = stats.avg_pulls_per_up
            ax.axvline(x=avg, color=self.colors['player'], linestyle='--', linewidth=2, alpha=0.8)
            ax.scatter([avg], [stats.luck_percentile], color=self.colors['player'], s=60, zorder=5,
                       label=f'你的平均限定抽数 ({avg:.1f})')
            ax.annotate(f'排名 {stats.luck_percentile:.1f}%\n{stats.luck_tier.title}',
                        xy=(avg, stats.luck_percentile), xytext=(10, -30), textcoords='offset points',
                        fontsize=10, fontweight='bold')

        ax.set_xlabel('抽数', fontsize=13, fontweight='bold')
        ax.set_ylabel('累积概率 (%)', fontsize=13, fontweight='bold')
        ax.set_title(f'{self.title_prefix} - 累积概率', fontsize=15, fontweight='bold', pad=20)
        ax.set_xlim(0, max_pulls)
        ax.set_ylim(0, 100)
        ax.legend(fontsize=11, frameon=True, shadow=True, loc='lower right')

        sns.despine()
        plt.tight_layout()
        return self._save(fig, 'cdf_comparison.png', save_path)

    def plot_luck_tiers(self, stats: Optional[SummaryStats] = None, save_path: str = None) -> str:
        """
        绘制抽到UP所需抽数的分布，并按欧非称号分段着色
        """
        compound = self.engine.compound
        max_pulls = compound.draws_ceiling
        cdf = compound.cdf_table(max_pulls) * 100
        pmf = np.diff(np.concatenate(([0.0], cdf)))
        x = np.arange(1, max_pulls + 1)

        fig, ax = plt.subplots(figsize=(12, 6))
        style_axes(ax)

        colors = [self.engine.tier_for(min(p, 100.0)).color for p in cdf]
        ax.bar(x, pmf, color=colors, edgecolor='white', linewidth=0.5)

        for tier in LUCK_TIERS:
            ax.bar([0], [0], color=tier.color, label=f'{tier.title}（≤{tier.upper_bound:g}%）')

        if stats is not None and stats.avg_pulls_per_up > 0:
            ax.axvline(x=stats.avg_pulls_per_up, color='black', linestyle='--', linewidth=2, alpha=0.7,
                       label=f'你的位置：{stats.luck_tier.title}')

        ax.set_xlabel('抽到UP所需抽数', fontsize=13, fontweight='bold')
        ax.set_ylabel('概率 (%)', fontsize=13, fontweight='bold')
        ax.set_title(f'{self.title_prefix} - 欧非分布', fontsize=15, fontweight='bold', pad=20)
        ax.set_xlim(0, max_pulls)
        ax.legend(fontsize=9, frameon=True, shadow=True, ncol=2)

        sns.despine()
        plt.tight_layout()
        return self._save(fig, 'luck_tiers.png', save_path)

    def plot_pity_distribution(self, stats: SummaryStats, save_path: str = None) -> Optional[str]:
        """
        绘制玩家五星出货抽数分布，与理论首次出金分布对照（以10为间隔）
        """
        ssr_tier = self.engine.variant.ssr_tier
        pities = [r.pity for r in stats.records if r.rarity == ssr_tier]
        if not pities:
            print("没有五星记录，跳过出货分布图")
            return None

        hard_pity = self.engine.distribution.hard_pity
        bins = np.arange(0, hard_pity + 10, 10)
        bins[-1] = max(bins[-1], hard_pity)
        bin_labels = [f'{int(bins[i]) + 1}-{int(bins[i + 1])}' for i in range(len(bins) - 1)]

        hist, _ = np.histogram(pities, bins=bins + 0.5)
        hist_percent = hist / len(pities) * 100
        pmf = self.engine.distribution.pmf_table()
        theory, _ = np.histogram(np.arange(1, hard_pity + 1), bins=bins + 0.5, weights=pmf)
        theory_percent = theory * 100

        fig, ax = plt.subplots(figsize=(12, 6))
        style_axes(ax)
        x_pos = np.arange(len(bin_labels))
        width = 0.4
        bars = ax.bar(x_pos - width / 2, hist_percent, width, label=f'你的五星（{len(pities)}个）',
                      color=self.colors['player'], alpha=0.85, edgecolor='white', linewidth=1.5)
        ax.bar(x_pos + width / 2, theory_percent, width, label='理论分布',
               color=self.colors['ssr'], alpha=0.85, edgecolor='white', linewidth=1.5)

        for bar, prob in zip(bars, hist_percent):
            if prob > 1.0:
                ax.text(bar.get_x() + bar.get_width() / 2., bar.get_height(), f'{prob:.1f}%',
                        ha='center', va='bottom', fontsize=8)

        ax.set_xlabel('出货抽数区间', fontsize=13, fontweight='bold')
        ax.set_ylabel('占比 (%)', fontsize=13, fontweight='bold')
        ax.set_title(f'{self.title_prefix} - 五星出货抽数分布', fontsize=15, fontweight='bold', pad=20)
        ax.set_xticks(x_pos)
        ax.set_xticklabels(bin_labels, fontsize=9, rotation=45, ha='right')
        ax.legend(fontsize=11, frameon=True, shadow=True)

        sns.despine()
        plt.tight_layout()
        return self._save(fig, 'pity_distribution.png', save_path)

    def generate_all_plots(self, stats: Optional[SummaryStats] = None) -> List[str]:
        """生成所有可视化图表"""
        print("\n" + "=" * 60)
        print("正在生成可视化图表...")
        print("=" * 60)

        paths = []
        print("\n[1/4] 生成五星概率分布图...")
        paths.append(self.plot_rate_and_pmf())

        print("\n[2/4] 生成累积概率对比图...")
        paths.append(self.plot_cdf_comparison(stats))

        print("\n[3/4] 生成欧非分布图...")
        paths.append(self.plot_luck_tiers(stats))

        print("\n[4/4] 生成五星出货抽数分布图...")
        if stats is not None:
            path = self.plot_pity_distribution(stats)
            if path:
                paths.append(path)
        else:
            print("没有抽卡记录，跳过")

        print("\n所有图表生成完成！")
        return paths


def main():
    """主函数：独立运行可视化模块，只画理论分布"""
    variant_name = sys.argv[1] if len(sys.argv) > 1 else 'wuwa'
    print("=" * 60)
    print("抽卡欧非分析 - 理论分布可视化")
    print("=" * 60)

    try:
        engine = create_engine_for_variant(variant_name)
    except GachaLuckError as e:
        print(f"错误: {e}")
        print(f"可选变体: {', '.join(sorted(VARIANTS))}")
        sys.exit(1)

    visualizer = GachaVisualizer(engine)
    visualizer.generate_all_plots()

    print("\n" + "=" * 60)
    print("可视化完成！")
    print("=" * 60)


if __name__ == "__main__":
    main()
