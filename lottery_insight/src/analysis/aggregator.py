"""
통계 분석 결과 종합 모듈

이 모듈은 빈도, 미출현 기간, 조합 패턴, 홀짝/고저 비율을 하나의
불변 스냅샷(AnalysisSnapshot)으로 묶습니다.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from shared.error_handler import get_logger, log_performance

from ..utils.config import AnalysisConfig, Config, LotteryConfig
from ..utils.data_loader import DrawHistory
from .frequency import (
    FrequencyAnalyzer, NumberStat, UniformityTest, bonus_number, format_percentage, main_numbers
)
from .pattern_miner import PairStat, PatternMiner, TripletStat
from .recency import OverdueEntry, RecencyTracker

# 로거 설정
logger = get_logger(__name__)

@dataclass(frozen=True)
class DateRange:
    start: Optional[str]
    end: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {'from': self.start, 'to': self.end}

@dataclass(frozen=True)
class NumberAnalysis:
    """번호 그룹(본 번호 또는 보너스)별 핫/콜드/오버듀 목록"""
    hot: Tuple[NumberStat, ...]
    cold: Tuple[NumberStat, ...]
    overdue: Tuple[OverdueEntry, ...]

    def hot_numbers(self, count: Optional[int] = None) -> Tuple[int, ...]:
        return tuple(stat.number for stat in self.hot[:count])

    def cold_numbers(self, count: Optional[int] = None) -> Tuple[int, ...]:
        return tuple(stat.number for stat in self.cold[:count])

    def overdue_numbers(self, count: Optional[int] = None) -> Tuple[int, ...]:
        return tuple(entry.number for entry in self.overdue[:count])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hot': [stat.to_dict() for stat in self.hot],
            'cold': [stat.to_dict() for stat in self.cold],
            'overdue': [entry.to_dict() for entry in self.overdue]
        }

@dataclass(frozen=True)
class OddEvenRatio:
    odd: int
    even: int
    odd_percentage: str
    even_percentage: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'odd': self.odd,
            'even': self.even,
            'oddPercentage': self.odd_percentage,
            'evenPercentage': self.even_percentage
        }

@dataclass(frozen=True)
class HighLowRatio:
    low: int
    high: int
    low_percentage: str
    high_percentage: str
    midpoint: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'low': self.low,
            'high': self.high,
            'lowPercentage': self.low_percentage,
            'highPercentage': self.high_percentage,
            'midpoint': self.midpoint
        }

@dataclass(frozen=True)
class PatternSummary:
    odd_even: OddEvenRatio
    high_low: HighLowRatio
    common_pairs: Tuple[PairStat, ...]
    common_triplets: Tuple[TripletStat, ...]
    uniformity: UniformityTest

    def to_dict(self) -> Dict[str, Any]:
        return {
            'oddEven': self.odd_even.to_dict(),
            'highLow': self.high_low.to_dict(),
            'commonPairs': [pair.to_dict() for pair in self.common_pairs],
            'commonTriplets': [triplet.to_dict() for triplet in self.common_triplets],
            'uniformity': self.uniformity.to_dict()
        }

@dataclass(frozen=True)
class AnalysisSnapshot:
    """복권 종류별 통계 분석 결과 (생성 후 변경되지 않음)"""
    lottery: str
    total_draws: int
    date_range: DateRange
    main_numbers: NumberAnalysis
    patterns: PatternSummary
    bonus_number: Optional[NumberAnalysis] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화 가능한 딕셔너리"""
        result = {
            'lottery': self.lottery,
            'totalDraws': self.total_draws,
            'dateRange': self.date_range.to_dict(),
            'mainNumbers': self.main_numbers.to_dict(),
            'patterns': self.patterns.to_dict()
        }
        if self.bonus_number is not None:
            result['bonusNumber'] = self.bonus_number.to_dict()
        return result

def odd_even_ratio(numbers: Iterable[int]) -> OddEvenRatio:
    odd = even = 0
    for number in numbers:
        if number % 2 == 0:
            even += 1
        else:
            odd += 1

    total = odd + even
    return OddEvenRatio(odd, even, format_percentage(odd, total), format_percentage(even, total))

def high_low_ratio(numbers: Iterable[int], midpoint: int) -> HighLowRatio:
    low = high = 0
    for number in numbers:
        if number <= midpoint:
            low += 1
        else:
            high += 1

    total = low + high
    return HighLowRatio(low, high, format_percentage(low, total), format_percentage(high, total), midpoint)

class AnalysisAggregator:
    """추첨 이력 전체 분석"""

    def __init__(self, config: Optional[Config] = None):
        """
        분석기 초기화

        Args:
            config: 설정 객체 (분석 개수, 조합 기준값, 사용자 정의 복권 규칙)
        """
        self.config = config or Config()
        self.analysis_config: AnalysisConfig = self.config.analysis

    @log_performance
    def generate_full_analysis(self, history: DrawHistory, lottery_type: str) -> AnalysisSnapshot:
        """
        추첨 이력으로 분석 스냅샷 생성

        Args:
            history: 최신순 추첨 이력
            lottery_type: 복권 종류 (등록되지 않은 종류는 기본 규칙 사용)

        Returns:
            분석 스냅샷
        """
        lottery_config = self.config.lottery_config(lottery_type)
        settings = self.analysis_config

        frequency = FrequencyAnalyzer(history)
        recency = RecencyTracker(history)
        miner = PatternMiner(history)

        main_analysis = NumberAnalysis(
            hot=tuple(frequency.hot(settings.hot_count)),
            cold=tuple(frequency.cold(settings.cold_count)),
            overdue=tuple(recency.overdue(lottery_config.main_max, limit=settings.overdue_count))
        )

        pool = [number for draw in history for number in draw.numbers]
        patterns = PatternSummary(
            odd_even=odd_even_ratio(pool),
            high_low=high_low_ratio(pool, lottery_config.midpoint),
            common_pairs=tuple(miner.common_pairs(settings.pair_min_occurrences, settings.pair_limit)),
            common_triplets=tuple(miner.common_triplets(settings.triplet_min_occurrences, settings.triplet_limit)),
            uniformity=frequency.uniformity(lottery_config.main_max)
        )

        snapshot = AnalysisSnapshot(
            lottery=lottery_type,
            total_draws=len(history),
            date_range=self._date_range(history),
            main_numbers=main_analysis,
            patterns=patterns,
            bonus_number=self._bonus_analysis(frequency, recency, lottery_config)
        )

        logger.info(
            f"{lottery_type} 분석 완료: {snapshot.total_draws}회, "
            f"공통 쌍 {len(patterns.common_pairs)}개, 공통 세 쌍 {len(patterns.common_triplets)}개"
        )
        return snapshot

    def _bonus_analysis(
        self,
        frequency: FrequencyAnalyzer,
        recency: RecencyTracker,
        lottery_config: LotteryConfig
    ) -> Optional[NumberAnalysis]:
        if not lottery_config.has_bonus:
            return None

        settings = self.analysis_config
        return NumberAnalysis(
            hot=tuple(frequency.hot(settings.bonus_hot_count, bonus_number)),
            cold=tuple(frequency.cold(settings.bonus_cold_count, bonus_number)),
            overdue=tuple(recency.overdue(lottery_config.bonus_max, bonus_number, settings.bonus_overdue_count))
        )

    @staticmethod
    def _date_range(history: DrawHistory) -> DateRange:
        if len(history) == 0:
            return DateRange(None, None)
        # 최신순이므로 마지막이 가장 오래된 추첨
        return DateRange(history[-1].date.isoformat(), history[0].date.isoformat())

def generate_full_analysis(
    history: DrawHistory,
    lottery_type: str,
    config: Optional[Config] = None
) -> AnalysisSnapshot:
    return AnalysisAggregator(config).generate_full_analysis(history, lottery_type)
