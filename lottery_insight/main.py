"""
복권 통계 분석 및 번호 추천 실행 스크립트

사용법:
    lottery-insight [powerball|megamillions|euromillions|both] [--fetch | --analyze | --schedule]
"""

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from shared.error_handler import get_logger, setup_logger

from .src.analysis.aggregator import AnalysisAggregator, AnalysisSnapshot
from .src.generation.purchase import format_purchase_info
from .src.generation.report import format_analysis_summary, format_pick
from .src.generation.strategies import Pick, PickStrategyEngine
from .src.utils.config import Config
from .src.utils.data_loader import DataManager
from .src.utils.schedule import format_next_refresh, format_schedule_summary, resolve_timezone
from .src.utils.storage import AnalysisStorage

logger = get_logger('lottery_insight.main')

BOTH_LOTTERIES = ('powerball', 'megamillions')

class LotteryAutomation:
    """이력 조회, 분석, 추천, 저장을 순서대로 수행"""

    def __init__(self, config: Config, seed: Optional[int] = None):
        self.config = config
        self.data_manager = DataManager(config)
        self.storage = AnalysisStorage(config.data.data_dir)
        self.aggregator = AnalysisAggregator(config)

        seed = config.generation.random_seed if seed is None else seed
        self.seed_sequence = np.random.SeedSequence(seed)

    def _rng(self) -> np.random.Generator:
        # 복권 종류마다 독립된 난수 생성기
        return np.random.default_rng(self.seed_sequence.spawn(1)[0])

    def fetch_only(self, lottery_type: str, limit: Optional[int] = None):
        history = self.data_manager.fetch_and_save(lottery_type, limit, self._rng())
        print(f"✓ Fetched and saved {len(history)} draws ({history.source})")
        return history

    def analyze_only(self, lottery_type: str) -> AnalysisSnapshot:
        history = self.data_manager.load_history(lottery_type)
        if history is None:
            raise FileNotFoundError('No data found. Run with --fetch first.')

        snapshot = self.aggregator.generate_full_analysis(history, lottery_type)
        self.storage.save_analysis(snapshot, lottery_type)
        print(format_analysis_summary(snapshot))
        return snapshot

    def run_single(
        self,
        lottery_type: str,
        limit: Optional[int] = None,
        plot_dir: Optional[str] = None
    ) -> List[Pick]:
        rng = self._rng()
        lottery_config = self.config.lottery_config(lottery_type)

        history = self.data_manager.fetch_and_save(lottery_type, limit, rng)
        snapshot = self.aggregator.generate_full_analysis(history, lottery_type)
        self.storage.save_analysis(snapshot, lottery_type)

        engine = PickStrategyEngine(snapshot, lottery_config, rng)
        picks = engine.generate_top_picks(self.config.generation.pick_count)
        self.storage.save_predictions(picks, snapshot)

        if plot_dir:
            from .src.analysis.visualization import plot_frequency, plot_overdue
            plot_frequency(history, lottery_config.main_max, Path(plot_dir) / f"{lottery_type}_frequency.png")
            plot_overdue(snapshot, Path(plot_dir) / f"{lottery_type}_overdue.png")

        print(f"\n🎯 {lottery_type.upper()} ({len(history)} draws, source: {history.source})")
        print('─' * 60)
        print(format_analysis_summary(snapshot))
        print()
        for index, pick in enumerate(picks):
            print(format_pick(pick, index, lottery_config))
            print()
        return picks

    def run(self, lottery_type: str, limit: Optional[int] = None, plot_dir: Optional[str] = None) -> Dict[str, List[Pick]]:
        types = BOTH_LOTTERIES if lottery_type == 'both' else (lottery_type,)
        results = {name: self.run_single(name, limit, plot_dir) for name in types}

        print('📍 Purchase Information...')
        print(format_purchase_info(lottery_type))
        self.print_next_refresh(types, last_fetched_at=datetime.now(timezone.utc))

        print("💡 Lottery draws are random - past patterns don't guarantee future results.")
        return results

    def print_next_refresh(self, types, last_fetched_at: Optional[datetime] = None) -> None:
        user_tz = resolve_timezone(self.config.schedule.timezone)
        for name in types:
            message = format_next_refresh(name, last_fetched_at, user_tz)
            if message:
                print(f"{name.upper()}: {message}")

    def show_schedule(self) -> None:
        print(format_schedule_summary(resolve_timezone(self.config.schedule.timezone)))

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Lottery draw statistics and weighted number picks')
    parser.add_argument('lottery', nargs='?', default='both',
                        help="lottery type (powerball, megamillions, euromillions, ...) or 'both'")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--fetch', action='store_true', help='only load or generate history and save it')
    mode.add_argument('--analyze', action='store_true', help='only analyze saved history')
    mode.add_argument('--schedule', action='store_true', help='show draw schedules and exit')
    parser.add_argument('--limit', type=int, default=None, help='maximum number of draws')
    parser.add_argument('--seed', type=int, default=None, help='random seed for reproducible picks')
    parser.add_argument('--config', default=None, help='YAML config file')
    parser.add_argument('--data-dir', default=None, help='data directory')
    parser.add_argument('--plot', default=None, metavar='DIR', help='save frequency charts to DIR')
    parser.add_argument('--timezone', default=None, help='IANA timezone for schedule times (default: system)')
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = Config.from_file(args.config) if args.config else Config()
    if args.data_dir:
        config.update({'data': {**config.to_dict()['data'], 'data_dir': args.data_dir}})
    if args.timezone:
        config.update({'schedule': {'timezone': args.timezone}})

    setup_logger('lottery_insight', level=config.logging.level, log_dir=config.logging.log_dir)

    automation = LotteryAutomation(config, seed=args.seed)
    types = BOTH_LOTTERIES if args.lottery == 'both' else (args.lottery,)

    try:
        if args.schedule:
            automation.show_schedule()
        elif args.fetch:
            for lottery_type in types:
                automation.fetch_only(lottery_type, args.limit)
        elif args.analyze:
            for lottery_type in types:
                automation.analyze_only(lottery_type)
        else:
            automation.run(args.lottery, args.limit, args.plot)
    except Exception as e:
        logger.error(f"실행 실패: {str(e)}")
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(main())
