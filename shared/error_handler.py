"""
오류 처리 및 로깅 유틸리티

콘솔 로그는 컬러로 표시하고, 로그 디렉토리가 지정되면 파일에도 기록합니다.
"""

import logging
import traceback
import sys
import datetime
import functools
import time
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# ANSI 컬러 코드
COLORS = {
    'DEBUG': '\033[94m',  # 파란색
    'INFO': '\033[92m',   # 녹색
    'WARNING': '\033[93m', # 노란색
    'ERROR': '\033[91m',  # 빨간색
    'CRITICAL': '\033[41m\033[97m', # 배경 빨간색, 글자 흰색
    'RESET': '\033[0m'    # 리셋
}

class ColoredFormatter(logging.Formatter):
    """컬러 로그 포매터"""

    def format(self, record):
        levelname = record.levelname
        message = super().format(record)

        if levelname in COLORS:
            return f"{COLORS[levelname]}{message}{COLORS['RESET']}"
        return message

def get_logger(name: str) -> logging.Logger:
    """모듈별 로거 생성"""
    return logging.getLogger(name)

def setup_logger(
    name: str,
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
    colored: bool = True
) -> logging.Logger:
    """로거 설정

    Args:
        name: 로거 이름 (하위 모듈 로거는 이 로거로 전파됨)
        level: 콘솔 로그 레벨
        log_dir: 지정 시 타임스탬프 파일명으로 DEBUG 이상 기록
        colored: 콘솔 컬러 출력 여부

    Returns:
        설정된 로거
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # 재호출 시 핸들러 중복 방지
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if colored:
        console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    else:
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_filename = log_dir / f"{name}_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

        file_handler = logging.FileHandler(log_filename, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            LOG_FORMAT + ' - [%(filename)s:%(lineno)d]',
            datefmt=DATE_FORMAT
        ))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger

# 성능 측정 데코레이터
def log_performance(func: Callable) -> Callable:
    """
    함수 실행 시간을 DEBUG 레벨로 기록하는 데코레이터

    예외는 실행 시간과 함께 기록한 뒤 그대로 다시 발생시킵니다.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        logger.debug(f"Starting {func.__name__}")
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time = time.perf_counter() - start_time
            logger.error(
                f"함수 {func.__name__} 실행 실패: "
                f"시간={execution_time:.3f}초, "
                f"오류={str(e)}"
            )
            raise

        execution_time = time.perf_counter() - start_time
        logger.debug(f"Finished {func.__name__} in {execution_time:.4f} seconds")
        return result
    return wrapper

# 안전한 실행 데코레이터
T = TypeVar('T')

def safe_execute(default_return: Optional[T] = None, reraise: bool = False) -> Callable:
    """
    함수 실행을 안전하게 처리하는 데코레이터

    Args:
        default_return: 오류 발생 시 반환할 기본값
        reraise: 예외를 기록한 뒤 다시 발생시킬지 여부
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger = get_logger(func.__module__)
                logger.error(f"Error in {func.__name__}: {str(e)}")
                logger.debug(f"Stack trace:\n{traceback.format_exc()}")

                if reraise:
                    raise
                return default_return
        return wrapper
    return decorator
