"""
설정 관리 모듈

이 모듈은 프로젝트의 설정을 관리하는 Config 클래스와
복권 종류별 번호 규칙(LotteryConfig)을 제공합니다.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict
from pathlib import Path
import logging
import yaml

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class BonusConfig:
    """보너스 번호 규칙"""
    max_number: int
    name: str

@dataclass(frozen=True)
class LotteryConfig:
    """복권 종류별 번호 규칙"""
    main_count: int
    main_max: int
    bonus: Optional[BonusConfig] = None

    @property
    def bonus_max(self) -> Optional[int]:
        return self.bonus.max_number if self.bonus else None

    @property
    def bonus_name(self) -> Optional[str]:
        return self.bonus.name if self.bonus else None

    @property
    def has_bonus(self) -> bool:
        return self.bonus is not None

    @property
    def midpoint(self) -> int:
        """고/저 구분 기준 (이하이면 저)"""
        return self.main_max // 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mainCount': self.main_count,
            'mainMax': self.main_max,
            'bonusMax': self.bonus_max,
            'bonusName': self.bonus_name
        }

LOTTERY_CONFIGS: Dict[str, LotteryConfig] = {
    'powerball': LotteryConfig(5, 69, BonusConfig(26, 'Powerball')),
    'megamillions': LotteryConfig(5, 70, BonusConfig(25, 'Mega Ball')),
    'euromillions': LotteryConfig(5, 50, BonusConfig(12, 'Lucky Star')),
}

# 알 수 없는 복권 종류는 오류 대신 이 설정으로 처리
DEFAULT_LOTTERY_CONFIG = LotteryConfig(main_count=6, main_max=50)

def get_lottery_config(
    lottery_type: str,
    extra: Optional[Dict[str, LotteryConfig]] = None
) -> LotteryConfig:
    """
    복권 종류에 해당하는 번호 규칙 조회

    Args:
        lottery_type: 복권 종류 키 (예: 'powerball')
        extra: 추가로 등록된 복권 규칙

    Returns:
        번호 규칙. 등록되지 않은 키는 기본 규칙
    """
    key = (lottery_type or '').lower()
    if extra and key in extra:
        return extra[key]
    if key in LOTTERY_CONFIGS:
        return LOTTERY_CONFIGS[key]

    logger.debug(f"등록되지 않은 복권 종류 '{lottery_type}': 기본 설정 사용")
    return DEFAULT_LOTTERY_CONFIG

def lottery_config_from_dict(values: Dict[str, Any]) -> LotteryConfig:
    """YAML 설정의 복권 정의를 LotteryConfig로 변환"""
    bonus = None
    if values.get('bonus_max'):
        bonus = BonusConfig(int(values['bonus_max']), values.get('bonus_name') or 'Bonus')

    config = LotteryConfig(int(values['main_count']), int(values['main_max']), bonus)
    if config.main_count < 1 or config.main_max < config.main_count:
        raise ValueError(f"잘못된 복권 정의입니다: {values}")
    return config

@dataclass
class DataConfig:
    """데이터 설정"""
    data_dir: str = 'data'
    history_limit: int = 100
    # None이면 LOTTERY_API_URL 환경 변수, 그것도 없으면 API 조회 생략
    api_url: Optional[str] = None
    api_key: Optional[str] = None
    api_timeout: float = 10.0

@dataclass
class ScheduleConfig:
    """추첨 일정 표시 설정"""
    timezone: Optional[str] = None

@dataclass
class AnalysisConfig:
    """통계 분석 설정"""
    hot_count: int = 15
    cold_count: int = 15
    overdue_count: int = 15
    bonus_hot_count: int = 10
    bonus_cold_count: int = 10
    bonus_overdue_count: int = 10
    pair_min_occurrences: int = 3
    pair_limit: int = 20
    triplet_min_occurrences: int = 2
    triplet_limit: int = 15

@dataclass
class GenerationConfig:
    """번호 생성 설정"""
    pick_count: int = 3
    random_seed: Optional[int] = None

@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = 'INFO'
    log_dir: Optional[str] = None

class Config:
    """설정 관리 클래스"""

    def __init__(self, config_dict: Dict[str, Any] = None):
        """
        설정 객체 초기화

        Args:
            config_dict: 설정 딕셔너리
        """
        self._config = config_dict or {}

        self.data = DataConfig(**self._config.get('data', {}))
        self.analysis = AnalysisConfig(**self._config.get('analysis', {}))
        self.generation = GenerationConfig(**self._config.get('generation', {}))
        self.logging = LoggingConfig(**self._config.get('logging', {}))
        self.schedule = ScheduleConfig(**self._config.get('schedule', {}))

        # 사용자 정의 복권 규칙
        self.lotteries = {
            key.lower(): lottery_config_from_dict(values)
            for key, values in (self._config.get('lotteries') or {}).items()
        }

    def lottery_config(self, lottery_type: str) -> LotteryConfig:
        """설정에 등록된 규칙을 포함하여 복권 규칙 조회"""
        return get_lottery_config(lottery_type, self.lotteries)

    def get(self, key: str, default: Any = None) -> Any:
        """
        설정값 조회

        Args:
            key: 설정 키
            default: 기본값

        Returns:
            설정값
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """설정값 설정"""
        self._config[key] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """
        설정 업데이트 후 섹션 재구성

        Args:
            config_dict: 업데이트할 설정 딕셔너리
        """
        self._config.update(config_dict)
        self.__init__(self._config)

    def save(self, filepath: str) -> None:
        """
        설정을 YAML 파일로 저장

        Args:
            filepath: 저장할 파일 경로
        """
        try:
            save_dir = Path(filepath).parent
            save_dir.mkdir(parents=True, exist_ok=True)

            with open(filepath, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self.to_dict(), f, allow_unicode=True, default_flow_style=False, sort_keys=False)
            logger.info(f'설정 저장 완료: {filepath}')
        except Exception as e:
            logger.error(f'설정 저장 실패: {str(e)}')
            raise

    def load(self, filepath: str) -> None:
        """
        YAML 파일에서 설정 로드

        Args:
            filepath: 로드할 파일 경로
        """
        try:
            if not Path(filepath).exists():
                raise FileNotFoundError(f'설정 파일을 찾을 수 없습니다: {filepath}')

            with open(filepath, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
            logger.info(f'설정 로드 완료: {filepath}')

            # 설정 객체 재초기화
            self.__init__(loaded)
        except Exception as e:
            logger.error(f'설정 로드 실패: {str(e)}')
            raise

    @classmethod
    def from_file(cls, filepath: str) -> 'Config':
        config = cls()
        config.load(filepath)
        return config

    def to_dict(self) -> Dict[str, Any]:
        """
        설정을 딕셔너리로 변환

        Returns:
            설정 딕셔너리
        """
        result = {
            'data': asdict(self.data),
            'analysis': asdict(self.analysis),
            'generation': asdict(self.generation),
            'logging': asdict(self.logging),
            'schedule': asdict(self.schedule)
        }
        if self.lotteries:
            result['lotteries'] = {
                key: {
                    'main_count': value.main_count,
                    'main_max': value.main_max,
                    'bonus_max': value.bonus_max,
                    'bonus_name': value.bonus_name
                }
                for key, value in self.lotteries.items()
            }
        return result

    def __str__(self) -> str:
        """문자열 표현"""
        return str(self.to_dict())

    def __repr__(self) -> str:
        """표현식 문자열"""
        return f'Config({self.to_dict()})'
