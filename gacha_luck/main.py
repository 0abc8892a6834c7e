"""
抽卡欧非分析 - 主程序入口

读取抽卡记录（JSON），按变体配置计算统计并给出欧非排名。

用法:
    python -m gacha_luck.main records.json --variant wuwa
    python -m gacha_luck.main raw.json --raw --pool-type 1       # 接口原始记录（最新在前）
    python -m gacha_luck.main --simulate 500 --seed 7            # 用模拟记录演示
    python -m gacha_luck.main --table                            # 打印概率分布表
    python -m gacha_luck.main --monte-carlo 10000                # 蒙特卡洛校验理论期望
"""
import argparse
import json
import sys
from typing import List, Optional

from gacha_luck.config import VARIANTS
from gacha_luck.draw_event import DrawEvent, SummaryStats
from gacha_luck.engine import Engine, create_engine_for_variant
from gacha_luck.errors import GachaLuckError
from gacha_luck.monte_carlo_analyzer import MonteCarloAnalyzer
from gacha_luck.record_converter import convert_raw_records, events_from_dicts
from gacha_luck.simulator_core import GachaSimulator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="抽卡记录统计与欧非排名")
    parser.add_argument('log', nargs='?', help="抽卡记录 JSON 文件")
    parser.add_argument('--variant', default='wuwa', choices=sorted(VARIANTS), help="游戏变体")
    parser.add_argument('--raw', action='store_true', help="文件为接口原始记录")
    parser.add_argument('--pool-type', type=int, default=1, help="原始记录只统计此卡池类型")
    parser.add_argument('--newest-first', action='store_true', help="记录为最新的在前")
    parser.add_argument('--simulate', type=int, metavar='PULLS', help="不读文件，模拟指定抽数的记录")
    parser.add_argument('--seed', type=int, help="模拟随机种子")
    parser.add_argument('--monte-carlo', type=int, metavar='ITERATIONS', help="蒙特卡洛校验理论期望")
    parser.add_argument('--table', action='store_true', help="打印五星概率分布表")
    parser.add_argument('--plot', action='store_true', help="生成图表")
    parser.add_argument('--output-dir', default='.', help="图表保存目录")
    return parser


def load_events(path: str, raw: bool, pool_type: int) -> List[DrawEvent]:
    """读取 JSON 记录文件（列表，或带 records/data 字段的对象）"""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('records', data.get('data', []))

    if raw:
        return convert_raw_records(data, pool_type=pool_type, newest_first=True)
    return events_from_dicts(data)


def print_probability_table(engine: Engine):
    """打印概率分布表（只列前5抽和软保底区间）"""
    distribution = engine.distribution
    soft_pity_start = engine.variant.rate.breakpoints[0][0] if engine.variant.rate.breakpoints else 0

    print("\n" + "=" * 60)
    print("五星概率分布表")
    print("=" * 60)
    print(f"{'抽数':<6}{'单抽概率':<12}{'首次出金概率':<14}{'累积概率':<10}")
    for n, rate, first, cumulative in distribution.probability_table():
        if n <= 5 or n > soft_pity_start - 5:
            print(f"{n:<8}{rate * 100:>7.2f}%    {first * 100:>9.4f}%      {cumulative * 100:>7.2f}%")

    print(f"\n理论期望抽数: {engine.theoretical_expected_rare():.2f} 抽")
    print(f"理论UP期望抽数: {engine.theoretical_expected_featured():.2f} 抽")


def print_summary(engine: Engine, stats: SummaryStats):
    """打印统计结果"""
    variant = engine.variant

    print("\n" + "=" * 60)
    print(f"【{variant.display_name or variant.name} 抽卡统计】")
    print("=" * 60)
    print(f"\n  • 总抽数: {stats.total_pulls}")
    for tier in reversed(variant.tiers):
        print(f"  • {tier}星数量: {stats.count_of(tier)}")
    print(f"  • UP数量: {stats.up_count}")
    print(f"  • 平均出金抽数: {stats.avg_pulls_per_ssr:.1f} (理论 {stats.expected_pulls_per_ssr:.1f})")
    print(f"  • 平均限定抽数: {stats.avg_pulls_per_up:.1f} (理论 {stats.expected_pulls_per_up:.1f})")
    print(f"  • 小保底不歪率: {stats.win_rate:.1f}%")

    tier = stats.luck_tier
    print(f"\n欧非排名: 前 {stats.luck_percentile:.2f}%  →  {tier.title}（{tier.description}）")

    ssr_records = [r for r in stats.records if r.rarity == variant.ssr_tier]
    if ssr_records:
        print(f"\n五星记录:")
        for record in ssr_records:
            mark = '✅' if record.is_up else '❌'
            print(f"  第{record.pull:>4}抽  {record.name or '未知':<10} {record.pity:>3}抽  UP {mark}  {record.time or ''}")

    print("\n" + "=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    args = build_parser().parse_args(argv)

    try:
        engine = create_engine_for_variant(args.variant)

        if args.table:
            print_probability_table(engine)

        if args.monte_carlo:
            analyzer = MonteCarloAnalyzer(engine.variant, iterations=args.monte_carlo, seed=args.seed)
            analyzer.print_results(analyzer.simulate_runs(), engine)

        stats = None
        if args.simulate:
            events = GachaSimulator(engine.variant, seed=args.seed).simulate(args.simulate)
            stats = engine.aggregate(events)
        elif args.log:
            events = load_events(args.log, args.raw, args.pool_type)
            stats = engine.aggregate(events, newest_first=args.newest_first and not args.raw)

        if stats is not None:
            print_summary(engine, stats)
        elif not (args.table or args.monte_carlo):
            print("没有抽卡记录，使用 --simulate 或指定记录文件")
            return 1

        if args.plot:
            from gacha_luck.visualizer import GachaVisualizer
            GachaVisualizer(engine, output_dir=args.output_dir).generate_all_plots(stats)

    except GachaLuckError as e:
        print(f"错误: {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"错误: 无法读取记录文件: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
