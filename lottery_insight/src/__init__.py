"""
복권 통계 분석 시스템 - 소스 코드

이 패키지는 분석, 번호 생성, 데이터 관리 기능을 구현합니다.
"""

from .analysis.aggregator import AnalysisAggregator, AnalysisSnapshot
from .generation.strategies import PickStrategyEngine
from .utils.data_loader import DataManager

__all__ = ['AnalysisAggregator', 'AnalysisSnapshot', 'PickStrategyEngine', 'DataManager']
