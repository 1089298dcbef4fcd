"""
추첨 이력 통계 분석 모듈

이 패키지는 빈도, 미출현 기간, 번호 조합 패턴을 분석하는 기능을 제공합니다.
"""

from .frequency import FrequencyAnalyzer, NumberStat
from .recency import RecencyTracker, OverdueEntry
from .pattern_miner import PatternMiner, PairStat, TripletStat
from .aggregator import AnalysisAggregator, AnalysisSnapshot, generate_full_analysis

__all__ = [
    'FrequencyAnalyzer', 'NumberStat', 'RecencyTracker', 'OverdueEntry',
    'PatternMiner', 'PairStat', 'TripletStat',
    'AnalysisAggregator', 'AnalysisSnapshot', 'generate_full_analysis'
]
