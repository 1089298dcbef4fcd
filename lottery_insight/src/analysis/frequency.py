"""
번호별 출현 빈도 분석 모듈

이 모듈은 추첨 이력에서 번호별 출현 횟수를 세고 다음 정보를 제공합니다:
- 핫 넘버 (자주 나온 번호)
- 콜드 넘버 (드물게 나온 번호)
- 균등 분포 카이제곱 검정
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List

from scipy import stats

from ..utils.data_loader import DrawHistory, DrawRecord

NumberSelector = Callable[[DrawRecord], Iterable[int]]

def main_numbers(draw: DrawRecord) -> Iterable[int]:
    return draw.numbers

def bonus_number(draw: DrawRecord) -> Iterable[int]:
    return () if draw.bonus is None else (draw.bonus,)

def format_percentage(count: int, total: int) -> str:
    """백분율을 소수점 둘째 자리 문자열로 변환 (total이 0이면 '0.00')"""
    if total <= 0:
        return '0.00'
    return f"{count / total * 100:.2f}"

@dataclass(frozen=True)
class NumberStat:
    """핫/콜드 번호 항목"""
    number: int
    frequency: int
    percentage: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'number': self.number,
            'frequency': self.frequency,
            'percentage': self.percentage
        }

@dataclass(frozen=True)
class UniformityTest:
    """균등 분포 카이제곱 검정 결과"""
    chi2: float
    p_value: float
    degrees_of_freedom: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'chi2': round(self.chi2, 4),
            'pValue': round(self.p_value, 4),
            'degreesOfFreedom': self.degrees_of_freedom
        }

class FrequencyAnalyzer:
    """번호별 출현 빈도 분석"""

    def __init__(self, history: DrawHistory):
        self.history = history
        self.total_draws = len(history)

    def frequency(self, selector: NumberSelector = main_numbers) -> Dict[int, int]:
        """
        번호별 출현 횟수

        Args:
            selector: 추첨에서 집계할 번호를 고르는 함수

        Returns:
            번호 -> 출현 횟수 (한 번 이상 나온 번호만 포함)
        """
        counter = Counter()
        for draw in self.history:
            counter.update(selector(draw))
        return dict(counter)

    def hot(self, count: int = 10, selector: NumberSelector = main_numbers) -> List[NumberStat]:
        """출현 횟수 내림차순 상위 번호 (동률은 번호 오름차순)"""
        frequency = self.frequency(selector)
        ranked = sorted(frequency.items(), key=lambda item: (-item[1], item[0]))
        return self._to_stats(ranked[:count])

    def cold(self, count: int = 10, selector: NumberSelector = main_numbers) -> List[NumberStat]:
        """출현 횟수 오름차순 상위 번호 (동률은 번호 오름차순)"""
        frequency = self.frequency(selector)
        ranked = sorted(frequency.items(), key=lambda item: (item[1], item[0]))
        return self._to_stats(ranked[:count])

    def uniformity(self, max_number: int, selector: NumberSelector = main_numbers) -> UniformityTest:
        """
        1..max_number 범위에 대한 균등 분포 카이제곱 적합도 검정

        Args:
            max_number: 번호 범위의 최댓값
            selector: 집계할 번호 선택 함수

        Returns:
            검정 결과. 관측값이 없으면 chi2=0, p=1
        """
        frequency = self.frequency(selector)
        observed = [frequency.get(n, 0) for n in range(1, max_number + 1)]
        degrees_of_freedom = max(max_number - 1, 0)

        if sum(observed) == 0 or max_number < 2:
            return UniformityTest(0.0, 1.0, degrees_of_freedom)

        result = stats.chisquare(observed)
        return UniformityTest(float(result.statistic), float(result.pvalue), degrees_of_freedom)

    def _to_stats(self, ranked) -> List[NumberStat]:
        return [
            NumberStat(number=int(number), frequency=count,
                       percentage=format_percentage(count, self.total_draws))
            for number, count in ranked
        ]
