"""
저장소, 설정, 시각화, 실행 스크립트 테스트 모듈
"""

import json
import unittest
import tempfile
import shutil
import sys
from datetime import datetime, timezone
from pathlib import Path

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

import numpy as np

from lottery_insight.main import main
from lottery_insight.src.analysis.aggregator import generate_full_analysis
from lottery_insight.src.analysis.visualization import plot_frequency, plot_overdue
from lottery_insight.src.generation.strategies import PickStrategyEngine
from lottery_insight.src.utils.config import (
    DEFAULT_LOTTERY_CONFIG, Config, get_lottery_config
)
from lottery_insight.src.utils.data_loader import DataManager
from lottery_insight.src.utils.storage import AnalysisStorage

class TestStorage(unittest.TestCase):
    """분석/추천 결과 저장 테스트"""

    @classmethod
    def setUpClass(cls):
        cls.history = DataManager().generate_sample_history('powerball', 30, np.random.default_rng(8))
        cls.snapshot = generate_full_analysis(cls.history, 'powerball')
        engine = PickStrategyEngine(cls.snapshot, get_lottery_config('powerball'), np.random.default_rng(8))
        cls.picks = engine.generate_top_picks(3)

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.storage = AnalysisStorage(self.temp_dir)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_save_load_analysis(self):
        """분석 결과 저장 후 로드"""
        path = self.storage.save_analysis(self.snapshot)

        self.assertEqual(path.name, 'powerball_analysis.json')
        self.assertEqual(self.storage.load_analysis('powerball'), json.loads(json.dumps(self.snapshot.to_dict())))

    def test_load_missing(self):
        self.assertIsNone(self.storage.load_analysis('megamillions'))
        self.assertIsNone(self.storage.get_latest_predictions('megamillions'))

    def test_load_corrupted_returns_none(self):
        """손상된 파일은 None"""
        self.storage.ensure_directories()
        self.storage.analysis_path('powerball').write_text('{broken', encoding='utf-8')
        self.assertIsNone(self.storage.load_analysis('powerball'))

    def test_latest_predictions(self):
        """가장 최근 추천 결과 조회"""
        older = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        newer = datetime(2024, 1, 2, 8, 30, 0, tzinfo=timezone.utc)
        self.storage.save_predictions(self.picks[:1], self.snapshot, generated_at=newer)
        self.storage.save_predictions(self.picks, self.snapshot, generated_at=older)

        self.assertEqual(len(self.storage.prediction_files('powerball')), 2)
        latest = self.storage.get_latest_predictions('powerball')
        self.assertEqual(latest['generatedAt'], newer.isoformat())
        self.assertEqual(latest['basedOnDraws'], 30)
        self.assertEqual(len(latest['picks']), 1)
        self.assertEqual(latest['picks'][0]['metrics']['oddEven'], self.picks[0].odd_even.to_dict())

    def test_plots(self):
        """그래프 파일 생성"""
        frequency_path = plot_frequency(self.history, 69, Path(self.temp_dir) / 'graph' / 'frequency.png')
        overdue_path = plot_overdue(self.snapshot, Path(self.temp_dir) / 'graph' / 'overdue.png')

        self.assertTrue(frequency_path.exists())
        self.assertTrue(overdue_path.exists())

class TestConfig(unittest.TestCase):
    """설정 테스트"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_defaults(self):
        config = Config()
        self.assertEqual(config.analysis.hot_count, 15)
        self.assertEqual(config.analysis.pair_min_occurrences, 3)
        self.assertEqual(config.analysis.triplet_limit, 15)
        self.assertEqual(config.generation.pick_count, 3)
        self.assertIsNone(config.generation.random_seed)

    def test_lottery_configs(self):
        """등록된 복권과 기본 규칙"""
        powerball = get_lottery_config('powerball')
        self.assertEqual((powerball.main_count, powerball.main_max, powerball.bonus_max), (5, 69, 26))
        self.assertEqual(get_lottery_config('MegaMillions').bonus_name, 'Mega Ball')
        self.assertEqual(get_lottery_config('euromillions').bonus_name, 'Lucky Star')

        unknown = get_lottery_config('unknown')
        self.assertIs(unknown, DEFAULT_LOTTERY_CONFIG)
        self.assertEqual(unknown.to_dict(), {'mainCount': 6, 'mainMax': 50, 'bonusMax': None, 'bonusName': None})
        self.assertFalse(unknown.has_bonus)

    def test_custom_lottery(self):
        config = Config({'lotteries': {'Daily': {'main_count': 4, 'main_max': 30, 'bonus_max': 9}}})
        daily = config.lottery_config('daily')

        self.assertEqual((daily.main_count, daily.main_max, daily.bonus_max), (4, 30, 9))
        with self.assertRaises(ValueError):
            Config({'lotteries': {'bad': {'main_count': 7, 'main_max': 5}}})

    def test_save_load(self):
        """YAML 저장 후 로드"""
        config = Config({
            'analysis': {'hot_count': 12},
            'generation': {'random_seed': 123},
            'lotteries': {'daily': {'main_count': 4, 'main_max': 30}}
        })
        path = str(Path(self.temp_dir) / 'config' / 'config.yaml')
        config.save(path)

        loaded = Config.from_file(path)
        self.assertEqual(loaded.to_dict(), config.to_dict())
        self.assertEqual(loaded.analysis.hot_count, 12)
        self.assertEqual(loaded.lottery_config('daily').main_max, 30)

        with self.assertRaises(FileNotFoundError):
            Config().load(str(Path(self.temp_dir) / 'missing.yaml'))

class TestMain(unittest.TestCase):
    """실행 스크립트 테스트"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_run_single(self):
        """샘플 데이터로 전체 실행"""
        exit_code = main(['powerball', '--seed', '7', '--limit', '40', '--data-dir', self.temp_dir])
        self.assertEqual(exit_code, 0)

        data_dir = Path(self.temp_dir)
        self.assertTrue((data_dir / 'powerball_history.json').exists())
        self.assertTrue((data_dir / 'analysis' / 'powerball_analysis.json').exists())
        self.assertEqual(len(list((data_dir / 'analysis').glob('powerball_predictions_*.json'))), 1)

    def test_analyze_without_data(self):
        """저장된 이력 없이 분석만 실행하면 실패 코드"""
        self.assertEqual(main(['powerball', '--analyze', '--data-dir', self.temp_dir]), 1)

    def test_analyze_invalid_history(self):
        """규칙에 맞지 않는 저장 이력은 분석하지 않고 실패 코드"""
        path = Path(self.temp_dir) / 'powerball_history.json'
        path.write_text(json.dumps({
            'lottery': 'powerball',
            'draws': [
                {'date': f"2024-01-0{day}", 'numbers': [99, 98, 97, 96, 95, 94, 93], 'powerball': 80}
                for day in range(1, 6)
            ]
        }), encoding='utf-8')

        self.assertEqual(main(['powerball', '--analyze', '--data-dir', self.temp_dir]), 1)
        self.assertFalse((Path(self.temp_dir) / 'analysis' / 'powerball_analysis.json').exists())

    def test_analyze_out_of_range_bonus(self):
        path = Path(self.temp_dir) / 'megamillions_history.json'
        path.write_text(json.dumps({
            'lottery': 'megamillions',
            'draws': [{'date': '2024-01-02', 'numbers': [1, 2, 3, 4, 5], 'megaball': 26}]
        }), encoding='utf-8')

        self.assertEqual(main(['megamillions', '--analyze', '--data-dir', self.temp_dir]), 1)

    def test_schedule(self):
        """추첨 일정 출력"""
        exit_code = main(['--schedule', '--timezone', 'Asia/Seoul', '--data-dir', self.temp_dir])
        self.assertEqual(exit_code, 0)
        self.assertEqual(main(['--schedule', '--timezone', 'Not/AZone', '--data-dir', self.temp_dir]), 1)

    def test_fetch_then_analyze(self):
        self.assertEqual(main(['megamillions', '--fetch', '--seed', '3', '--data-dir', self.temp_dir]), 0)
        self.assertEqual(main(['megamillions', '--analyze', '--data-dir', self.temp_dir]), 0)

        with open(Path(self.temp_dir) / 'analysis' / 'megamillions_analysis.json', 'r', encoding='utf-8') as f:
            payload = json.load(f)
        self.assertEqual(payload['totalDraws'], 100)

if __name__ == '__main__':
    unittest.main()
