"""
복권 통계 분석 및 번호 추천 시스템

이 패키지는 과거 추첨 이력의 빈도/미출현/조합 통계를 계산하고
가중치 추출로 추천 번호 조합을 생성합니다.
"""

from pathlib import Path
from .src.utils.config import Config, LotteryConfig, get_lottery_config
from .src.utils.data_loader import DataManager, DrawHistory, DrawRecord
from .src.analysis.aggregator import AnalysisAggregator, AnalysisSnapshot, generate_full_analysis
from .src.generation.strategies import Pick, PickStrategyEngine, Strategy
from .src.generation.weighted_sampler import InsufficientCandidatesError, WeightedSampler

# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).parent

# 버전
__version__ = "1.0.0"

__all__ = [
    'Config', 'LotteryConfig', 'get_lottery_config',
    'DataManager', 'DrawHistory', 'DrawRecord',
    'AnalysisAggregator', 'AnalysisSnapshot', 'generate_full_analysis',
    'Pick', 'PickStrategyEngine', 'Strategy',
    'InsufficientCandidatesError', 'WeightedSampler'
]
