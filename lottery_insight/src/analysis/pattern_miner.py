"""
번호 조합 패턴 분석 모듈

이 모듈은 추첨마다 함께 나온 번호 쌍(pair)과 세 쌍(triplet)을 집계합니다.
추첨당 조합 수는 본 번호 개수로 고정되므로 추첨 수에 선형입니다.
"""

from collections import Counter
from dataclasses import dataclass
from itertools import combinations
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, TypeVar

from ..utils.data_loader import DrawHistory
from .frequency import format_percentage

S = TypeVar('S', bound='CombinationStat')

@dataclass(frozen=True)
class CombinationStat:
    """번호 조합 출현 통계"""
    key: Tuple[int, ...]
    occurrences: int
    percentage: str

    label: ClassVar[str] = 'combination'

    def to_dict(self) -> Dict[str, Any]:
        return {
            self.label: list(self.key),
            'occurrences': self.occurrences,
            'percentage': self.percentage
        }

@dataclass(frozen=True)
class PairStat(CombinationStat):
    label: ClassVar[str] = 'pair'

@dataclass(frozen=True)
class TripletStat(CombinationStat):
    label: ClassVar[str] = 'triplet'

class PatternMiner:
    """자주 함께 나온 번호 조합 탐색"""

    def __init__(self, history: DrawHistory):
        self.history = history
        self._counts: Dict[int, Counter] = {}

    def combination_counts(self, size: int) -> Counter:
        """
        크기 size인 조합별 출현 횟수

        Returns:
            정렬된 번호 튜플 -> 횟수
        """
        if size not in self._counts:
            counter = Counter()
            for draw in self.history:
                counter.update(combinations(sorted(draw.numbers), size))
            self._counts[size] = counter
        return self._counts[size]

    def common_pairs(self, min_occurrences: int = 3, limit: Optional[int] = 20) -> List[PairStat]:
        return self._rank(2, min_occurrences, limit, PairStat)

    def common_triplets(self, min_occurrences: int = 2, limit: Optional[int] = 15) -> List[TripletStat]:
        return self._rank(3, min_occurrences, limit, TripletStat)

    def _rank(self, size: int, min_occurrences: int, limit: Optional[int], stat_type: Type[S]) -> List[S]:
        # 횟수 내림차순, 동률은 튜플 오름차순
        ranked = sorted(
            (item for item in self.combination_counts(size).items() if item[1] >= min_occurrences),
            key=lambda item: (-item[1], item[0])
        )
        if limit is not None:
            ranked = ranked[:limit]

        total = len(self.history)
        return [
            stat_type(key=tuple(int(n) for n in key), occurrences=count,
                      percentage=format_percentage(count, total))
            for key, count in ranked
        ]
