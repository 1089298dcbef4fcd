"""
번호 추천 전략 모듈

이 모듈은 분석 스냅샷을 바탕으로 다음 전략의 번호 조합을 생성합니다:
- 균형 (핫/콜드/오버듀 혼합)
- 핫 넘버 중심
- 오버듀 넘버 중심
- 공통 번호 쌍 기반 (기본 추천 목록에는 포함되지 않음)
"""

from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from shared.error_handler import get_logger

from ..analysis.aggregator import AnalysisSnapshot
from ..utils.config import LotteryConfig
from .weighted_sampler import WeightedSampler

# 로거 설정
logger = get_logger(__name__)

class Strategy(Enum):
    BALANCED = 'balanced'
    HOT_BIASED = 'hot'
    OVERDUE_BIASED = 'overdue'
    PAIR_BASED = 'pairs'

STRATEGY_INFO = {
    Strategy.BALANCED: ('Balanced Mix', 'Combines hot, cold, and overdue numbers with weighted selection'),
    Strategy.HOT_BIASED: ('Hot Numbers Focus', 'Prioritizes the most frequently drawn numbers'),
    Strategy.OVERDUE_BIASED: ('Overdue Numbers', "Focuses on numbers that haven't appeared recently"),
    Strategy.PAIR_BASED: ('Common Pairs', 'Builds on number pairs that most often appear together'),
}

# 기본 추천 순서
DEFAULT_STRATEGIES = (Strategy.BALANCED, Strategy.HOT_BIASED, Strategy.OVERDUE_BIASED)

BIASED_POOL_SIZE = 15
BALANCED_POOL_SIZE = 10
PAIR_SEED_SIZE = 5
BONUS_POOL_SIZE = 5

@dataclass(frozen=True)
class OddEvenBalance:
    odd_count: int
    even_count: int
    target_odd: int
    balanced: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'oddCount': self.odd_count,
            'evenCount': self.even_count,
            'targetOdd': self.target_odd,
            'balanced': self.balanced
        }

@dataclass(frozen=True)
class HighLowBalance:
    low_count: int
    high_count: int
    target_low: int
    balanced: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lowCount': self.low_count,
            'highCount': self.high_count,
            'targetLow': self.target_low,
            'balanced': self.balanced
        }

@dataclass(frozen=True)
class Pick:
    """추천 번호 조합"""
    strategy: str
    description: str
    numbers: Tuple[int, ...]
    bonus: Optional[int]
    odd_even: OddEvenBalance
    high_low: HighLowBalance

    def to_dict(self) -> Dict[str, Any]:
        return {
            'strategy': self.strategy,
            'description': self.description,
            'numbers': list(self.numbers),
            'bonus': self.bonus,
            'metrics': {
                'oddEven': self.odd_even.to_dict(),
                'highLow': self.high_low.to_dict()
            }
        }

def _half_up(count: int) -> int:
    # n/2 반올림 (0.5는 올림)
    return (count + 1) // 2

def odd_even_balance(numbers: Sequence[int]) -> OddEvenBalance:
    odd_count = sum(1 for n in numbers if n % 2 != 0)
    target = _half_up(len(numbers))
    return OddEvenBalance(odd_count, len(numbers) - odd_count, target, abs(odd_count - target) <= 1)

def high_low_balance(numbers: Sequence[int], main_max: int) -> HighLowBalance:
    midpoint = main_max // 2
    low_count = sum(1 for n in numbers if n <= midpoint)
    target = _half_up(len(numbers))
    return HighLowBalance(low_count, len(numbers) - low_count, target, abs(low_count - target) <= 1)

def rank_weights(count: int, top: int = BIASED_POOL_SIZE) -> List[int]:
    """순위별 선형 감소 가중치 (0번 순위 = top)"""
    return [top - rank for rank in range(count)]

def balanced_weights(
    candidates: Sequence[int],
    hot: Sequence[int],
    cold: Sequence[int],
    overdue: Sequence[int]
) -> List[int]:
    """균형 전략 가중치: 1 + 3·핫 + 2·오버듀 + 1·콜드"""
    return [1 + 3 * (n in hot) + 2 * (n in overdue) + 1 * (n in cold) for n in candidates]

def bonus_weights(candidates: Sequence[int], hot: Sequence[int], overdue: Sequence[int]) -> List[int]:
    """보너스 번호 가중치: 1 + 2·핫 + 1·오버듀"""
    return [1 + 2 * (n in hot) + 1 * (n in overdue) for n in candidates]

class PickStrategyEngine:
    """분석 스냅샷 기반 번호 조합 생성기"""

    def __init__(
        self,
        snapshot: AnalysisSnapshot,
        lottery_config: LotteryConfig,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Args:
            snapshot: 분석 스냅샷
            lottery_config: 복권 규칙
            rng: 난수 생성기 (재현이 필요하면 시드를 고정해서 전달)
        """
        self.snapshot = snapshot
        self.lottery_config = lottery_config
        self.rng = rng if rng is not None else np.random.default_rng()
        self.sampler = WeightedSampler(self.rng)

    @property
    def main_count(self) -> int:
        return self.lottery_config.main_count

    def balanced_numbers(self) -> List[int]:
        main = self.snapshot.main_numbers
        hot = main.hot_numbers(BALANCED_POOL_SIZE)
        cold = main.cold_numbers(BALANCED_POOL_SIZE)
        overdue = main.overdue_numbers(BALANCED_POOL_SIZE)

        candidates = list(OrderedDict.fromkeys(hot + cold + overdue))
        return self.sampler.sample(candidates, balanced_weights(candidates, hot, cold, overdue), self.main_count)

    def hot_biased_numbers(self) -> List[int]:
        hot = self.snapshot.main_numbers.hot_numbers(BIASED_POOL_SIZE)
        return self.sampler.sample(hot, rank_weights(len(hot)), self.main_count)

    def overdue_biased_numbers(self) -> List[int]:
        overdue = self.snapshot.main_numbers.overdue_numbers(BIASED_POOL_SIZE)
        return self.sampler.sample(overdue, rank_weights(len(overdue)), self.main_count)

    def pair_based_numbers(self) -> List[int]:
        """
        상위 공통 쌍의 번호로 조합 생성

        쌍이 나온 순서대로 번호를 모아 본 번호 개수만큼 사용하므로 난수를 쓰지 않습니다.
        모자라면 핫 넘버 순서대로 채우고, 핫 넘버까지 모자라면 부족한 조합을
        그대로 반환합니다.
        """
        seed = OrderedDict()
        for pair in self.snapshot.patterns.common_pairs[:PAIR_SEED_SIZE]:
            for number in pair.key:
                seed[number] = None

        numbers = list(seed)[:self.main_count]
        for number in self.snapshot.main_numbers.hot_numbers():
            if len(numbers) >= self.main_count:
                break
            if number not in numbers:
                numbers.append(number)

        if len(numbers) < self.main_count:
            logger.warning(
                f"공통 쌍 기반 조합이 부족합니다: {len(numbers)}/{self.main_count}개"
            )
        return sorted(numbers)

    def bonus_number(self) -> Optional[int]:
        """보너스 번호 하나 추출 (보너스가 없는 복권이면 None)"""
        bonus_analysis = self.snapshot.bonus_number
        if not self.lottery_config.has_bonus or bonus_analysis is None:
            return None

        hot = bonus_analysis.hot_numbers(BONUS_POOL_SIZE)
        overdue = bonus_analysis.overdue_numbers(BONUS_POOL_SIZE)
        candidates = list(OrderedDict.fromkeys(hot + overdue))
        if not candidates:
            return None

        return self.sampler.sample(candidates, bonus_weights(candidates, hot, overdue), 1)[0]

    def generate_pick(self, strategy: Strategy) -> Pick:
        """
        전략 하나로 추천 조합 생성

        Args:
            strategy: 사용할 전략

        Returns:
            번호, 보너스 번호, 균형 지표를 포함한 추천 조합
        """
        generators = {
            Strategy.BALANCED: self.balanced_numbers,
            Strategy.HOT_BIASED: self.hot_biased_numbers,
            Strategy.OVERDUE_BIASED: self.overdue_biased_numbers,
            Strategy.PAIR_BASED: self.pair_based_numbers,
        }
        numbers = tuple(generators[strategy]())
        name, description = STRATEGY_INFO[strategy]

        return Pick(
            strategy=name,
            description=description,
            numbers=numbers,
            bonus=self.bonus_number(),
            odd_even=odd_even_balance(numbers),
            high_low=high_low_balance(numbers, self.lottery_config.main_max)
        )

    def generate_top_picks(self, count: int = 3) -> List[Pick]:
        """
        기본 전략 순서(균형, 핫, 오버듀)로 추천 조합 생성

        Args:
            count: 1~3 사이의 추천 개수

        Returns:
            추천 조합 목록
        """
        if not 1 <= count <= len(DEFAULT_STRATEGIES):
            raise ValueError(f"추천 개수는 1~{len(DEFAULT_STRATEGIES)} 사이여야 합니다: {count}")

        picks = [self.generate_pick(strategy) for strategy in DEFAULT_STRATEGIES[:count]]
        logger.info(f"{self.snapshot.lottery} 추천 조합 {len(picks)}개 생성")
        return picks
