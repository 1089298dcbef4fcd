"""
추천 번호 생성 모듈
"""

from .weighted_sampler import WeightedSampler, InsufficientCandidatesError
from .strategies import PickStrategyEngine, Pick, Strategy

__all__ = ['WeightedSampler', 'InsufficientCandidatesError', 'PickStrategyEngine', 'Pick', 'Strategy']
