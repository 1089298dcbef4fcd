"""
분석 결과 및 추천 결과 저장 모듈

분석 스냅샷은 복권 종류별로 하나의 파일에, 추천 결과는 생성 시각별로
별도의 파일에 JSON 형식으로 저장합니다.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from shared.error_handler import safe_execute

from ..analysis.aggregator import AnalysisSnapshot
from ..generation.strategies import Pick

logger = logging.getLogger(__name__)

class AnalysisStorage:
    """분석/추천 결과 JSON 저장소"""

    def __init__(self, data_dir: Union[str, Path] = 'data'):
        self.data_dir = Path(data_dir)
        self.analysis_dir = self.data_dir / 'analysis'

    def ensure_directories(self) -> None:
        self.analysis_dir.mkdir(parents=True, exist_ok=True)

    def analysis_path(self, lottery_type: str) -> Path:
        return self.analysis_dir / f"{lottery_type}_analysis.json"

    def save_analysis(self, snapshot: AnalysisSnapshot, lottery_type: Optional[str] = None) -> Path:
        """
        분석 스냅샷 저장

        Args:
            snapshot: 저장할 스냅샷
            lottery_type: 파일명에 사용할 복권 종류 (기본값은 스냅샷의 종류)

        Returns:
            저장된 파일 경로
        """
        self.ensure_directories()
        path = self.analysis_path(lottery_type or snapshot.lottery)
        self._write_json(path, snapshot.to_dict())
        logger.info(f"분석 결과 저장 완료: {path}")
        return path

    @safe_execute(default_return=None)
    def load_analysis(self, lottery_type: str) -> Optional[Dict[str, Any]]:
        """저장된 분석 결과 로드 (없으면 None)"""
        path = self.analysis_path(lottery_type)
        if not path.exists():
            logger.info(f"{lottery_type} 분석 결과가 없습니다")
            return None

        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def save_predictions(
        self,
        picks: Sequence[Pick],
        snapshot: AnalysisSnapshot,
        generated_at: Optional[datetime] = None
    ) -> Path:
        """
        추천 결과 저장

        Args:
            picks: 추천 조합 목록
            snapshot: 추천에 사용한 분석 스냅샷
            generated_at: 생성 시각 (기본값 현재 UTC)

        Returns:
            저장된 파일 경로
        """
        self.ensure_directories()
        generated_at = generated_at or datetime.now(timezone.utc)
        timestamp = generated_at.strftime('%Y-%m-%dT%H-%M-%S')
        path = self.analysis_dir / f"{snapshot.lottery}_predictions_{timestamp}.json"

        payload = {
            'lottery': snapshot.lottery,
            'generatedAt': generated_at.isoformat(),
            'basedOnDraws': snapshot.total_draws,
            'dateRange': snapshot.date_range.to_dict(),
            'picks': [pick.to_dict() for pick in picks]
        }
        self._write_json(path, payload)
        logger.info(f"추천 결과 저장 완료: {path}")
        return path

    def prediction_files(self, lottery_type: str) -> List[Path]:
        """추천 결과 파일 목록 (최신순)"""
        if not self.analysis_dir.exists():
            return []
        return sorted(self.analysis_dir.glob(f"{lottery_type}_predictions_*.json"), reverse=True)

    @safe_execute(default_return=None)
    def get_latest_predictions(self, lottery_type: str) -> Optional[Dict[str, Any]]:
        files = self.prediction_files(lottery_type)
        if not files:
            logger.info(f"{lottery_type} 추천 결과가 없습니다")
            return None

        with open(files[0], 'r', encoding='utf-8') as f:
            return json.load(f)

    @staticmethod
    def _write_json(path: Path, payload: Dict[str, Any]) -> None:
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except Exception as e:
            logger.error(f"파일 저장 실패: {path}: {str(e)}")
            raise
