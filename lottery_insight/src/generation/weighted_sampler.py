"""
가중치 기반 비복원 추출 모듈

룰렛 휠 방식으로 아직 선택되지 않은 후보 중에서 가중치에 비례하여
하나씩 뽑습니다. 슬롯마다 시도 횟수를 후보 수로 제한하고, 한도를 넘기면
남은 후보 중 균등 추출로 대체하여 항상 종료됩니다.
"""

import logging
from typing import List, Sequence

import numpy as np

logger = logging.getLogger(__name__)

class InsufficientCandidatesError(ValueError):
    """요청한 개수가 서로 다른 후보 수보다 많은 경우"""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"후보가 부족합니다: {requested}개 요청, {available}개 후보")

class WeightedSampler:
    """가중치 룰렛 비복원 추출기"""

    def __init__(self, rng: np.random.Generator):
        """
        Args:
            rng: 모든 추출에 사용할 난수 생성기 (동시 사용 시 호출자가 동기화)
        """
        self.rng = rng

    def sample(self, candidates: Sequence[int], weights: Sequence[float], count: int) -> List[int]:
        """
        서로 다른 후보 count개를 가중치에 비례하여 추출

        Args:
            candidates: 서로 다른 후보 번호
            weights: 후보별 양의 가중치
            count: 추출할 개수

        Returns:
            오름차순 정렬된 선택 결과

        Raises:
            InsufficientCandidatesError: count가 후보 수보다 큰 경우
            ValueError: 입력 형식이 잘못된 경우
        """
        candidates = [int(c) for c in candidates]
        weights = np.asarray(weights, dtype=float)

        if len(candidates) != len(weights):
            raise ValueError(f"후보 수({len(candidates)})와 가중치 수({len(weights)})가 다릅니다")
        if len(set(candidates)) != len(candidates):
            raise ValueError(f"중복된 후보가 있습니다: {candidates}")
        if count < 0:
            raise ValueError(f"추출 개수는 0 이상이어야 합니다: {count}")
        if count > len(candidates):
            raise InsufficientCandidatesError(count, len(candidates))
        if len(weights) and not (np.all(np.isfinite(weights)) and np.all(weights > 0)):
            raise ValueError(f"가중치는 양수여야 합니다: {weights.tolist()}")

        remaining = list(range(len(candidates)))
        chosen: List[int] = []
        max_attempts = len(candidates)

        for _ in range(count):
            picked = self._roulette(remaining, weights, max_attempts)
            if picked is None:
                picked = remaining[int(self.rng.integers(len(remaining)))]
                logger.debug(f"룰렛 시도 {max_attempts}회 초과: 균등 추출로 대체")

            remaining.remove(picked)
            chosen.append(candidates[picked])

        return sorted(chosen)

    def _roulette(self, remaining: List[int], weights: np.ndarray, max_attempts: int):
        cumulative = np.cumsum(weights[remaining])
        total = cumulative[-1]

        for _ in range(max_attempts):
            target = self.rng.random() * total
            position = int(np.searchsorted(cumulative, target, side='right'))
            # 부동소수점 오차로 범위를 벗어나면 다시 시도
            if position < len(remaining):
                return remaining[position]
        return None
