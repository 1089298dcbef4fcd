"""
공용 유틸리티

로깅 설정과 오류 처리 데코레이터를 제공합니다.
"""

from .error_handler import get_logger, setup_logger, safe_execute, log_performance

__all__ = ['get_logger', 'setup_logger', 'safe_execute', 'log_performance']
