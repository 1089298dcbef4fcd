"""
분석 결과 시각화 모듈

번호별 출현 빈도와 미출현 기간을 막대 그래프로 저장합니다.
"""

import logging
from pathlib import Path
from typing import Union

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from ..utils.data_loader import DataManager, DrawHistory
from .aggregator import AnalysisSnapshot

logger = logging.getLogger(__name__)

def _prepare(save_path: Union[str, Path]) -> Path:
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    sns.set_theme(style="whitegrid")
    return save_path

def plot_frequency(history: DrawHistory, max_number: int, save_path: Union[str, Path]) -> Path:
    """
    1..max_number 전체 번호의 출현 빈도 그래프 저장

    Args:
        history: 추첨 이력
        max_number: 본 번호 최댓값
        save_path: 이미지 저장 경로

    Returns:
        저장된 파일 경로
    """
    save_path = _prepare(save_path)
    # 추첨별 번호 목록을 펼쳐서 번호별 출현 횟수 집계
    counts = DataManager.to_dataframe(history)['numbers'].explode().value_counts()
    df = pd.DataFrame({
        'number': list(range(1, max_number + 1)),
        'frequency': [int(counts.get(n, 0)) for n in range(1, max_number + 1)]
    })

    fig, ax = plt.subplots(figsize=(max(8, max_number * 0.2), 5))
    try:
        sns.barplot(data=df, x='number', y='frequency', color='steelblue', ax=ax)
        if len(history):
            ax.axhline(df['frequency'].mean(), color='red', linestyle='--', label='mean')
            ax.legend()
        ax.set_title(f"{history.lottery} number frequency ({len(history)} draws)")
        ax.tick_params(axis='x', labelrotation=90, labelsize=7)
        fig.tight_layout()
        fig.savefig(save_path)
    finally:
        plt.close(fig)

    logger.info(f"빈도 그래프 저장 완료: {save_path}")
    return save_path

def plot_overdue(snapshot: AnalysisSnapshot, save_path: Union[str, Path]) -> Path:
    """오버듀 상위 번호의 미출현 기간 그래프 저장"""
    save_path = _prepare(save_path)
    df = pd.DataFrame(
        [entry.to_dict() for entry in snapshot.main_numbers.overdue],
        columns=['number', 'drawsSinceLastSeen', 'lastSeenDate']
    )

    fig, ax = plt.subplots(figsize=(8, 5))
    try:
        sns.barplot(data=df, x='number', y='drawsSinceLastSeen', order=df['number'].tolist(),
                    color='darkorange', ax=ax)
        ax.set_title(f"{snapshot.lottery} most overdue numbers")
        fig.tight_layout()
        fig.savefig(save_path)
    finally:
        plt.close(fig)

    logger.info(f"오버듀 그래프 저장 완료: {save_path}")
    return save_path
