"""
테스트용 추첨 이력 생성 도우미
"""

from datetime import date, timedelta
from typing import Optional, Sequence

from lottery_insight.src.utils.data_loader import DrawHistory, DrawRecord

def make_history(
    lottery: str,
    draws: Sequence[Sequence[int]],
    bonuses: Optional[Sequence[Optional[int]]] = None,
    newest: date = date(2024, 6, 1)
) -> DrawHistory:
    """draws[0]이 가장 최근이 되도록 3일 간격의 이력 생성"""
    records = []
    for index, numbers in enumerate(draws):
        records.append(DrawRecord(
            date=newest - timedelta(days=3 * index),
            numbers=tuple(sorted(numbers)),
            bonus=bonuses[index] if bonuses else None
        ))
    return DrawHistory(lottery=lottery, draws=tuple(records), source='test')
