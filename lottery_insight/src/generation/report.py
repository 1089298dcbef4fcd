"""
추천 결과 텍스트 출력
"""

from typing import List

from ..analysis.aggregator import AnalysisSnapshot
from ..utils.config import LotteryConfig
from .strategies import Pick

RULE = '━' * 41

def _mark(balanced: bool) -> str:
    return '✓' if balanced else '⚠'

def format_pick(pick: Pick, index: int, lottery_config: LotteryConfig) -> str:
    bonus_text = ''
    if pick.bonus is not None and lottery_config.has_bonus:
        bonus_text = f" + {lottery_config.bonus_name}: {pick.bonus}"

    lines = [
        f"Pick #{index + 1}: {pick.strategy}",
        RULE,
        f"Numbers: {', '.join(str(n) for n in pick.numbers)}{bonus_text}",
        f"Strategy: {pick.description}",
        '',
        'Balance Metrics:',
        f"  Odd/Even: {pick.odd_even.odd_count} odd, {pick.odd_even.even_count} even "
        f"{_mark(pick.odd_even.balanced)}",
        f"  High/Low: {pick.high_low.high_count} high, {pick.high_low.low_count} low "
        f"{_mark(pick.high_low.balanced)}",
    ]
    return '\n'.join(lines)

def format_analysis_summary(snapshot: AnalysisSnapshot) -> str:
    main = snapshot.main_numbers
    odd_even = snapshot.patterns.odd_even

    def join(numbers) -> str:
        return ', '.join(str(n) for n in numbers) or '-'

    lines: List[str] = [
        'Analysis Summary:',
        f"  • Draws Analyzed: {snapshot.total_draws}",
        f"  • Hot Numbers: {join(main.hot_numbers(5))}",
        f"  • Cold Numbers: {join(main.cold_numbers(5))}",
        f"  • Most Overdue: {join(main.overdue_numbers(5))}",
        f"  • Odd/Even Ratio: {odd_even.odd_percentage}% / {odd_even.even_percentage}%",
        f"  • Common Pairs Found: {len(snapshot.patterns.common_pairs)}",
        f"  • Uniformity p-value: {snapshot.patterns.uniformity.p_value:.4f}",
    ]
    return '\n'.join(lines)
