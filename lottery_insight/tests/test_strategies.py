"""
번호 추천 전략 테스트 모듈
"""

import unittest
import sys
from pathlib import Path

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

import numpy as np

from lottery_insight.src.analysis.aggregator import AnalysisAggregator
from lottery_insight.src.generation.report import format_analysis_summary, format_pick
from lottery_insight.src.generation.strategies import (
    PickStrategyEngine, Strategy, balanced_weights, bonus_weights, high_low_balance,
    odd_even_balance, rank_weights
)
from lottery_insight.src.generation.weighted_sampler import InsufficientCandidatesError
from lottery_insight.src.utils.config import Config, get_lottery_config
from lottery_insight.src.utils.data_loader import DataManager, DrawHistory
from lottery_insight.tests.helpers import make_history

def build_engine(history, lottery_type, seed=0, config=None):
    config = config or Config()
    snapshot = AnalysisAggregator(config).generate_full_analysis(history, lottery_type)
    return PickStrategyEngine(snapshot, config.lottery_config(lottery_type), np.random.default_rng(seed))

class RecordingSampler:
    """샘플러 호출 인자를 기록하고 앞에서부터 count개를 돌려주는 대역"""

    def __init__(self):
        self.calls = []

    def sample(self, candidates, weights, count):
        self.calls.append((list(candidates), list(weights), count))
        return sorted(candidates[:count])

class TestPickStrategyEngine(unittest.TestCase):
    """추천 전략 테스트"""

    @classmethod
    def setUpClass(cls):
        cls.history = DataManager().generate_sample_history('powerball', 100, np.random.default_rng(5))
        cls.engine = build_engine(cls.history, 'powerball', seed=1)
        cls.main = cls.engine.snapshot.main_numbers

    def test_top_picks_order(self):
        """기본 추천은 균형, 핫, 오버듀 순서"""
        picks = self.engine.generate_top_picks(3)

        self.assertEqual([p.strategy for p in picks], ['Balanced Mix', 'Hot Numbers Focus', 'Overdue Numbers'])
        for pick in picks:
            self.assertEqual(len(pick.numbers), 5)
            self.assertEqual(list(pick.numbers), sorted(set(pick.numbers)))
            self.assertTrue(1 <= pick.bonus <= 26)

        self.assertEqual(len(self.engine.generate_top_picks(1)), 1)
        self.assertEqual(len(self.engine.generate_top_picks(2)), 2)

    def test_top_picks_count_range(self):
        with self.assertRaises(ValueError):
            self.engine.generate_top_picks(0)
        with self.assertRaises(ValueError):
            self.engine.generate_top_picks(4)

    def test_pools(self):
        """전략별 후보 범위"""
        balanced_pool = set(self.main.hot_numbers(10) + self.main.cold_numbers(10) + self.main.overdue_numbers(10))
        for _ in range(20):
            self.assertTrue(set(self.engine.balanced_numbers()) <= balanced_pool)
            self.assertTrue(set(self.engine.hot_biased_numbers()) <= set(self.main.hot_numbers(15)))
            self.assertTrue(set(self.engine.overdue_biased_numbers()) <= set(self.main.overdue_numbers(15)))

    def test_bonus_pool(self):
        bonus = self.engine.snapshot.bonus_number
        pool = set(bonus.hot_numbers(5) + bonus.overdue_numbers(5))
        for _ in range(20):
            self.assertIn(self.engine.bonus_number(), pool)

    def test_reproducible(self):
        """같은 시드는 같은 추천"""
        first = build_engine(self.history, 'powerball', seed=9).generate_top_picks(3)
        second = build_engine(self.history, 'powerball', seed=9).generate_top_picks(3)
        self.assertEqual([p.to_dict() for p in first], [p.to_dict() for p in second])

    def test_no_bonus_lottery(self):
        """보너스가 없는 복권은 bonus=None"""
        history = DataManager().generate_sample_history('lotto', 30, np.random.default_rng(2))
        engine = build_engine(history, 'lotto')
        picks = engine.generate_top_picks(3)

        for pick in picks:
            self.assertIsNone(pick.bonus)
            self.assertEqual(len(pick.numbers), 6)

    def test_pair_based_full_seed(self):
        """쌍에서 나온 번호가 충분하면 그 번호들로 구성"""
        history = make_history('lotto', [[1, 2, 3, 4, 5, 6]] * 3 + [[7, 8, 9, 10, 11, 12]])
        engine = build_engine(history, 'lotto')

        self.assertEqual(engine.pair_based_numbers(), [1, 2, 3, 4, 5, 6])
        pick = engine.generate_pick(Strategy.PAIR_BASED)
        self.assertEqual(pick.strategy, 'Common Pairs')

    def test_balanced_weights_used(self):
        """균형 전략은 핫/오버듀/콜드 소속에 따른 가중치로 추출"""
        engine = build_engine(self.history, 'powerball', seed=1)
        engine.sampler = RecordingSampler()
        engine.balanced_numbers()

        candidates, weights, count = engine.sampler.calls[0]
        hot, cold, overdue = self.main.hot_numbers(10), self.main.cold_numbers(10), self.main.overdue_numbers(10)
        expected = [1 + 3 * (n in hot) + 2 * (n in overdue) + (n in cold) for n in candidates]

        self.assertEqual(count, 5)
        self.assertEqual(candidates[:10], hot)
        self.assertEqual(weights, expected)
        self.assertEqual(set(candidates), set(hot + cold + overdue))

    def test_bonus_weights_used(self):
        engine = build_engine(self.history, 'powerball', seed=1)
        engine.sampler = RecordingSampler()
        engine.bonus_number()

        bonus = engine.snapshot.bonus_number
        hot, overdue = bonus.hot_numbers(5), bonus.overdue_numbers(5)
        candidates, weights, count = engine.sampler.calls[0]

        self.assertEqual(count, 1)
        self.assertEqual(candidates[:5], hot)
        self.assertEqual(weights, [1 + 2 * (n in hot) + (n in overdue) for n in candidates])

    def test_weight_formulas(self):
        """가중치 공식"""
        self.assertEqual(balanced_weights([1, 2, 3, 4, 5], hot=[1, 2], cold=[2, 3], overdue=[1, 4]), [6, 5, 2, 3, 1])
        self.assertEqual(bonus_weights([1, 2, 3, 4], hot=[1, 2], overdue=[2, 3]), [3, 4, 2, 1])

    def test_pair_based_truncates_seed(self):
        """쌍 번호가 많으면 나온 순서대로 앞에서부터 사용 (난수 무관)"""
        config = Config({
            'analysis': {'pair_min_occurrences': 1},
            'lotteries': {'trio': {'main_count': 3, 'main_max': 10}}
        })
        history = make_history('trio', [[1, 2]] * 3 + [[3, 4]] * 2 + [[5, 6]])

        for seed in range(10):
            engine = build_engine(history, 'trio', seed=seed, config=config)
            self.assertEqual(engine.pair_based_numbers(), [1, 2, 3])

    def test_pair_based_extends_with_hot(self):
        """쌍 번호가 부족하면 핫 넘버 순서대로 채움"""
        config = Config({'analysis': {'pair_limit': 1}})
        history = make_history('lotto', [[1, 2, 3, 4, 5, 6]] * 3 + [[1, 2, 20, 21, 22, 23]])
        engine = build_engine(history, 'lotto', config=config)

        self.assertEqual(engine.pair_based_numbers(), [1, 2, 3, 4, 5, 6])

    def test_pair_based_short(self):
        """핫 넘버까지 부족하면 부족한 조합 반환"""
        engine = build_engine(make_history('lotto', [[1, 2, 3, 4, 5]]), 'lotto')
        self.assertEqual(engine.pair_based_numbers(), [1, 2, 3, 4, 5])

    def test_empty_history(self):
        """추첨이 없으면 핫 전략은 후보 부족 오류, 균형 전략은 오버듀로 생성"""
        engine = build_engine(DrawHistory('powerball'), 'powerball')

        with self.assertRaises(InsufficientCandidatesError):
            engine.hot_biased_numbers()

        numbers = engine.balanced_numbers()
        self.assertTrue(set(numbers) <= set(range(1, 11)))
        self.assertIn(engine.bonus_number(), range(1, 6))

    def test_misconfigured_lottery(self):
        """핫 넘버가 본 번호 개수보다 적으면 오류 전파"""
        config = Config({'lotteries': {'small': {'main_count': 6, 'main_max': 6}}})
        engine = build_engine(make_history('small', [[1, 2, 3]]), 'small', config=config)

        with self.assertRaises(InsufficientCandidatesError):
            engine.hot_biased_numbers()
        self.assertEqual(engine.overdue_biased_numbers(), [1, 2, 3, 4, 5, 6])

    def test_metrics(self):
        """홀짝/고저 균형 지표"""
        odd_even = odd_even_balance([1, 3, 5, 7, 8])
        self.assertEqual((odd_even.odd_count, odd_even.even_count, odd_even.target_odd), (4, 1, 3))
        self.assertTrue(odd_even.balanced)

        odd_even = odd_even_balance([1, 3, 5, 7, 9])
        self.assertFalse(odd_even.balanced)

        high_low = high_low_balance([1, 10, 34, 35, 69], 69)
        self.assertEqual((high_low.low_count, high_low.high_count, high_low.target_low), (3, 2, 3))
        self.assertTrue(high_low.balanced)

        self.assertEqual(odd_even_balance([2, 4, 6, 8, 10, 12]).target_odd, 3)

    def test_rank_weights(self):
        self.assertEqual(rank_weights(3), [15, 14, 13])
        self.assertEqual(len(rank_weights(15)), 15)
        self.assertEqual(rank_weights(15)[-1], 1)

    def test_report(self):
        """추천 결과 텍스트 출력"""
        pick = self.engine.generate_pick(Strategy.BALANCED)
        text = format_pick(pick, 0, get_lottery_config('powerball'))

        self.assertIn('Pick #1: Balanced Mix', text)
        self.assertIn(f"Powerball: {pick.bonus}", text)
        self.assertIn('Balance Metrics:', text)

        summary = format_analysis_summary(self.engine.snapshot)
        self.assertIn('Draws Analyzed: 100', summary)

if __name__ == '__main__':
    unittest.main()
