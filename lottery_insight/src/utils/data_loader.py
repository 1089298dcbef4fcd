"""
복권 추첨 이력 데이터 로더

이 모듈은 추첨 이력을 로드, 검증, 저장하고 데이터가 없을 때
샘플 이력을 생성하는 기능을 제공합니다.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
import requests
from marshmallow import (
    EXCLUDE, Schema, ValidationError, fields, post_load, pre_load, validate, validates
)

from .api_client import DrawApiClient
from .config import Config, LotteryConfig

# 로거 설정
logger = logging.getLogger(__name__)

BONUS_ALIASES = ('powerball', 'megaball', 'luckystar')

# 샘플 데이터 잭팟 범위 (최소, 폭)
SAMPLE_JACKPOTS = {
    'powerball': (20_000_000, 500_000_000),
    'megamillions': (15_000_000, 400_000_000),
}
DEFAULT_SAMPLE_JACKPOT = (5_000_000, 100_000_000)
SAMPLE_DRAW_INTERVAL_DAYS = 3

@dataclass(frozen=True)
class DrawRecord:
    """단일 추첨 결과"""
    date: date
    numbers: Tuple[int, ...]
    bonus: Optional[int] = None
    jackpot: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'date': self.date.isoformat(),
            'numbers': list(self.numbers)
        }
        if self.bonus is not None:
            result['bonus'] = self.bonus
        if self.jackpot is not None:
            result['jackpot'] = self.jackpot
        return result

@dataclass(frozen=True)
class DrawHistory:
    """
    추첨 이력

    draws는 최신순으로 정렬되어 있어야 합니다 (0번 = 가장 최근 추첨).
    """
    lottery: str
    draws: Tuple[DrawRecord, ...] = ()
    source: str = 'unknown'

    def __len__(self) -> int:
        return len(self.draws)

    def __iter__(self) -> Iterator[DrawRecord]:
        return iter(self.draws)

    def __getitem__(self, index: int) -> DrawRecord:
        return self.draws[index]

    def limit(self, count: Optional[int]) -> 'DrawHistory':
        """최근 count개 추첨만 남긴 이력"""
        if count is None or count >= len(self.draws):
            return self
        return DrawHistory(self.lottery, self.draws[:max(count, 0)], self.source)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lottery': self.lottery,
            'source': self.source,
            'count': len(self.draws),
            'draws': [draw.to_dict() for draw in self.draws]
        }

class DrawRecordSchema(Schema):
    """추첨 결과 입력 스키마"""

    class Meta:
        unknown = EXCLUDE

    date = fields.Date(required=True)
    numbers = fields.List(
        fields.Integer(strict=True, validate=validate.Range(min=1)),
        required=True,
        validate=validate.Length(min=1)
    )
    bonus = fields.Integer(allow_none=True, load_default=None, validate=validate.Range(min=1))
    jackpot = fields.Float(allow_none=True, load_default=None)

    @pre_load
    def normalize_bonus(self, data, **kwargs):
        # API마다 다른 보너스 필드명을 bonus로 통일
        if isinstance(data, dict) and data.get('bonus') is None:
            for alias in BONUS_ALIASES:
                if data.get(alias) is not None:
                    data = dict(data)
                    data['bonus'] = data[alias]
                    break
        return data

    @validates('numbers')
    def validate_unique(self, value, **kwargs):
        if len(set(value)) != len(value):
            raise ValidationError(f"중복된 번호가 있습니다: {value}")

    @post_load
    def make_record(self, data, **kwargs) -> DrawRecord:
        return DrawRecord(
            date=data['date'],
            numbers=tuple(sorted(data['numbers'])),
            bonus=data.get('bonus'),
            jackpot=data.get('jackpot')
        )

def build_history(
    lottery: str,
    raw_draws: Sequence[Dict[str, Any]],
    source: str = 'unknown'
) -> DrawHistory:
    """
    원시 추첨 데이터로 이력 생성

    Args:
        lottery: 복권 종류
        raw_draws: 'date', 'numbers' 등을 가진 딕셔너리 목록
        source: 데이터 출처 표시

    Returns:
        최신순으로 정렬된 이력

    Raises:
        marshmallow.ValidationError: 레코드 형식이 잘못된 경우
    """
    records = DrawRecordSchema(many=True).load(list(raw_draws))
    # 최신순 정렬 (같은 날짜는 입력 순서 유지)
    records = sorted(records, key=lambda record: record.date, reverse=True)
    return DrawHistory(lottery=lottery, draws=tuple(records), source=source)

def validate_history(history: DrawHistory, lottery_config: LotteryConfig) -> None:
    """
    이력의 번호 범위 및 개수 검사

    Args:
        history: 검사할 이력
        lottery_config: 복권 규칙

    Raises:
        ValueError: 규칙에 맞지 않는 추첨이 있는 경우
    """
    for draw in history:
        if len(draw.numbers) != lottery_config.main_count:
            raise ValueError(
                f"번호 개수가 잘못되었습니다: {list(draw.numbers)} "
                f"(기대값 {lottery_config.main_count}, 날짜 {draw.date})"
            )
        if not all(1 <= n <= lottery_config.main_max for n in draw.numbers):
            raise ValueError(f"숫자 범위가 잘못되었습니다: {list(draw.numbers)} (날짜 {draw.date})")
        if draw.bonus is not None:
            if not lottery_config.has_bonus:
                raise ValueError(f"보너스 번호가 없는 복권입니다: {history.lottery} (날짜 {draw.date})")
            if not 1 <= draw.bonus <= lottery_config.bonus_max:
                raise ValueError(f"보너스 번호 범위가 잘못되었습니다: {draw.bonus} (날짜 {draw.date})")

class DataManager:
    """추첨 이력 데이터 관리자"""

    def __init__(self, config: Optional[Config] = None, api_client: Optional[DrawApiClient] = None):
        """
        데이터 관리자 초기화

        Args:
            config: 설정 객체
            api_client: 원격 이력 API 클라이언트 (None이면 설정/환경 변수로 생성)
        """
        self.config = config or Config()
        self.data_config = self.config.data
        self.data_dir = Path(self.data_config.data_dir)
        self.api_client = api_client if api_client is not None else self._default_api_client()

    def _default_api_client(self) -> Optional[DrawApiClient]:
        api_url = self.data_config.api_url or os.environ.get('LOTTERY_API_URL')
        if not api_url:
            return None
        api_key = self.data_config.api_key or os.environ.get('LOTTERY_API_KEY')
        return DrawApiClient(api_url, api_key, self.data_config.api_timeout)

    def history_path(self, lottery_type: str, suffix: str = 'json') -> Path:
        return self.data_dir / f"{lottery_type}_history.{suffix}"

    def fetch(
        self,
        lottery_type: str,
        limit: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ) -> DrawHistory:
        """
        추첨 이력 조회

        API, JSON 파일, CSV 파일 순서로 찾고 모두 없으면 샘플 데이터를 생성합니다.

        Args:
            lottery_type: 복권 종류
            limit: 최대 추첨 수 (None이면 설정값)
            rng: 샘플 생성에 사용할 난수 생성기

        Returns:
            최신순 추첨 이력

        Raises:
            ValueError: 로컬 이력 파일이 복권 규칙에 맞지 않는 경우
        """
        limit = self.data_config.history_limit if limit is None else limit

        history = self.fetch_remote(lottery_type, limit)
        if history is None:
            history = self.load_history(lottery_type)
        if history is None and self.history_path(lottery_type, 'csv').exists():
            history = self.load_csv(self.history_path(lottery_type, 'csv'), lottery_type)

        if history is None:
            logger.warning(f"{lottery_type} 이력 파일이 없어 샘플 데이터를 생성합니다")
            return self.generate_sample_history(lottery_type, limit, rng)

        history = history.limit(limit)
        logger.info(f"{lottery_type} 이력 로드 완료: {len(history)}회 ({history.source})")
        return history

    def fetch_remote(self, lottery_type: str, limit: int) -> Optional[DrawHistory]:
        """
        API에서 이력 조회

        Returns:
            검증된 이력. API가 설정되지 않았거나 조회/검증에 실패하면 None
        """
        if self.api_client is None:
            return None

        try:
            raw_draws = self.api_client.fetch_draws(lottery_type, limit)
            history = self._checked(build_history(lottery_type, raw_draws, source='api'), lottery_type)
        except (requests.RequestException, ValidationError, ValueError) as e:
            logger.warning(f"{lottery_type} API 조회 실패, 로컬 데이터를 사용합니다: {str(e)}")
            return None

        if not len(history):
            logger.warning(f"{lottery_type} API 응답에 추첨이 없습니다")
            return None
        return history

    def _checked(self, history: DrawHistory, lottery_type: str) -> DrawHistory:
        validate_history(history, self.config.lottery_config(lottery_type))
        return history

    def load_history(self, lottery_type: str) -> Optional[DrawHistory]:
        """
        저장된 JSON 이력 로드 및 검증

        Returns:
            이력. 파일이 없으면 None

        Raises:
            ValueError, marshmallow.ValidationError: 규칙에 맞지 않는 추첨이 있는 경우
        """
        path = self.history_path(lottery_type, 'json')
        if not path.exists():
            logger.debug(f"{lottery_type} 이력 파일 없음: {path}")
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
            history = build_history(payload.get('lottery', lottery_type), payload.get('draws', []), source='json')
            return self._checked(history, lottery_type)
        except Exception as e:
            logger.error(f"이력 로드 실패: {path}: {str(e)}")
            raise

    def load_csv(self, path: Union[str, Path], lottery_type: str) -> DrawHistory:
        """
        CSV 이력 로드 및 검증

        'date', 'num1'..'numN' 컬럼이 필요하고 'bonus'(또는 'powerball',
        'megaball'), 'jackpot' 컬럼은 선택입니다.
        """
        df = pd.read_csv(path)
        number_columns = sorted(
            (col for col in df.columns if re.fullmatch(r'num\d+', str(col))),
            key=lambda col: int(str(col)[3:])
        )
        missing = [col for col in ['date'] if col not in df.columns]
        if missing or not number_columns:
            raise ValueError(f"필수 컬럼이 없습니다: {missing or ['num1']}")

        bonus_column = next(
            (col for col in ('bonus',) + BONUS_ALIASES if col in df.columns),
            None
        )

        raw_draws = []
        for _, row in df.iterrows():
            raw = {
                'date': str(row['date'])[:10],
                'numbers': [int(row[col]) for col in number_columns if not pd.isna(row[col])]
            }
            if bonus_column and not pd.isna(row[bonus_column]):
                raw['bonus'] = int(row[bonus_column])
            if 'jackpot' in df.columns and not pd.isna(row['jackpot']):
                raw['jackpot'] = float(row['jackpot'])
            raw_draws.append(raw)

        logger.info(f"CSV 로드 완료: {path} ({len(raw_draws)} 행)")
        return self._checked(build_history(lottery_type, raw_draws, source='csv'), lottery_type)

    def save_history(self, history: DrawHistory) -> Path:
        """이력을 JSON 파일로 저장"""
        path = self.history_path(history.lottery, 'json')
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(history.to_dict(), f, indent=2)
        logger.info(f"이력 저장 완료: {path}")
        return path

    def fetch_and_save(
        self,
        lottery_type: str,
        limit: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ) -> DrawHistory:
        history = self.fetch(lottery_type, limit, rng)
        self.save_history(history)
        return history

    def generate_sample_history(
        self,
        lottery_type: str,
        count: int,
        rng: Optional[np.random.Generator] = None,
        today: Optional[date] = None
    ) -> DrawHistory:
        """
        샘플 추첨 이력 생성

        Args:
            lottery_type: 복권 종류
            count: 생성할 추첨 수
            rng: 난수 생성기
            today: 가장 최근 추첨 날짜 (기본값 오늘)

        Returns:
            3일 간격으로 거슬러 올라가는 최신순 이력
        """
        rng = rng if rng is not None else np.random.default_rng()
        today = today or date.today()
        lottery_config = self.config.lottery_config(lottery_type)
        jackpot_min, jackpot_span = SAMPLE_JACKPOTS.get(lottery_type, DEFAULT_SAMPLE_JACKPOT)

        draws: List[DrawRecord] = []
        for i in range(max(count, 0)):
            numbers = rng.choice(lottery_config.main_max, size=lottery_config.main_count, replace=False) + 1
            bonus = None
            if lottery_config.has_bonus:
                bonus = int(rng.integers(1, lottery_config.bonus_max + 1))

            draws.append(DrawRecord(
                date=today - timedelta(days=i * SAMPLE_DRAW_INTERVAL_DAYS),
                numbers=tuple(sorted(int(n) for n in numbers)),
                bonus=bonus,
                jackpot=float(jackpot_min + int(rng.integers(0, jackpot_span)))
            ))

        return DrawHistory(lottery=lottery_type, draws=tuple(draws), source='sample')

    @staticmethod
    def to_dataframe(history: DrawHistory) -> pd.DataFrame:
        """
        이력을 데이터프레임으로 변환

        Returns:
            'date', 'numbers', 'bonus', 'jackpot' 컬럼의 데이터프레임
        """
        return pd.DataFrame(
            [
                {
                    'date': pd.Timestamp(draw.date),
                    'numbers': list(draw.numbers),
                    'bonus': draw.bonus,
                    'jackpot': draw.jackpot
                }
                for draw in history
            ],
            columns=['date', 'numbers', 'bonus', 'jackpot']
        )
