"""
추첨 이력 API 클라이언트

원격 API에서 복권 종류별 추첨 이력을 조회합니다.
응답 형식 검증과 폴백 처리는 DataManager에서 수행합니다.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.apiverve.com/v1/lottery'
DEFAULT_API_KEY = 'demo'
DEFAULT_TIMEOUT = 10.0

def extract_draws(payload: Any) -> List[Dict[str, Any]]:
    """
    API 응답에서 추첨 목록 추출

    {'draws': [...]}, {'data': {'draws': [...]}} 또는 목록 자체를 허용합니다.

    Raises:
        ValueError: 추첨 목록을 찾을 수 없는 경우
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        if isinstance(payload.get('draws'), list):
            return payload['draws']
        if 'data' in payload:
            return extract_draws(payload['data'])
    raise ValueError(f"추첨 목록이 없는 응답입니다: {type(payload).__name__}")

class DrawApiClient:
    """추첨 이력 HTTP 클라이언트"""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            api_url: API 기본 주소 ('{api_url}/{lottery_type}'로 요청)
            api_key: Bearer 인증 키
            timeout: 요청 제한 시간 (초)
            session: 재사용할 requests 세션
        """
        self.api_url = api_url.rstrip('/')
        self.api_key = api_key or DEFAULT_API_KEY
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def fetch_draws(self, lottery_type: str, limit: int) -> List[Dict[str, Any]]:
        """
        원시 추첨 목록 조회

        Raises:
            requests.RequestException: 연결 실패, 시간 초과, HTTP 오류
            ValueError: 응답에 추첨 목록이 없는 경우
        """
        url = f"{self.api_url}/{lottery_type}"
        logger.info(f"{lottery_type} 이력 API 요청: {url} (limit={limit})")

        response = self.session.get(
            url,
            headers={
                'Authorization': f"Bearer {self.api_key}",
                'Content-Type': 'application/json'
            },
            params={'limit': limit},
            timeout=self.timeout
        )
        response.raise_for_status()
        return extract_draws(response.json())
