"""
미출현 기간(오버듀) 분석 모듈
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..utils.data_loader import DrawHistory
from .frequency import NumberSelector, main_numbers

NEVER_SEEN = 'Never'

@dataclass(frozen=True)
class OverdueEntry:
    """
    번호별 미출현 기간

    한 번도 나오지 않은 번호는 draws_since_last_seen이 이력 길이와 같고
    last_seen_date가 'Never'입니다.
    """
    number: int
    draws_since_last_seen: int
    last_seen_date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'number': self.number,
            'drawsSinceLastSeen': self.draws_since_last_seen,
            'lastSeenDate': self.last_seen_date
        }

class RecencyTracker:
    """번호별 마지막 출현 이후 경과 추첨 수 계산"""

    def __init__(self, history: DrawHistory):
        self.history = history

    def last_seen_indices(self, selector: NumberSelector = main_numbers) -> Dict[int, int]:
        """번호 -> 처음 발견된 추첨 인덱스 (0 = 최신)"""
        last_seen: Dict[int, int] = {}
        for index, draw in enumerate(self.history):
            for number in selector(draw):
                last_seen.setdefault(number, index)
        return last_seen

    def overdue(
        self,
        max_number: int,
        selector: NumberSelector = main_numbers,
        limit: Optional[int] = 15
    ) -> List[OverdueEntry]:
        """
        가장 오래 나오지 않은 번호 목록

        Args:
            max_number: 번호 범위 최댓값 (1..max_number 전체를 대상으로 함)
            selector: 집계할 번호 선택 함수
            limit: 반환할 최대 항목 수 (None이면 전체)

        Returns:
            미출현 기간 내림차순 (동률은 번호 오름차순)
        """
        total = len(self.history)
        last_seen = self.last_seen_indices(selector)

        entries = []
        for number in range(1, max_number + 1):
            index = last_seen.get(number, total)
            seen_date = self.history[index].date.isoformat() if index < total else NEVER_SEEN
            entries.append(OverdueEntry(number, index, seen_date))

        entries.sort(key=lambda entry: (-entry.draws_since_last_seen, entry.number))
        return entries if limit is None else entries[:limit]
