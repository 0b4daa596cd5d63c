"""
유사도 분석 모듈
================

이 모듈은 도도부현 간 유사도 행렬을 분석하여
특정 도도부현과 가장 유사한 도도부현을 찾는 핵심 로직을 제공합니다.

주요 기능:
- 유사도 행렬의 한 행에서 상위 유사 항목 선택
- 유사도 행렬 검증 (정방 행렬, 숫자 값)
- 이름 기반 조회 및 DataFrame 변환

작성자: AI Assistant
버전: 1.1.0
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import SIMILAR_PREFECTURE_COUNT

def _ranking_key(item: Tuple[int, float]) -> Tuple[float, int]:
    # 점수 내림차순, 동점이면 열 인덱스가 작은 쪽 우선, NaN은 맨 뒤
    column, value = item
    if math.isnan(value):
        return (math.inf, column)
    return (-value, column)

def rank_similarities(index: int, matrix: Sequence[Sequence[float]]) -> List[Tuple[int, float]]:
    """
    행렬의 index 행을 자기 자신을 제외하고 점수 내림차순으로 정렬하는 함수

    Args:
        index (int): 기준 도도부현 인덱스
        matrix (Sequence[Sequence[float]]): 유사도 행렬

    Returns:
        List[Tuple[int, float]]: (열 인덱스, 점수) 리스트

    Raises:
        IndexError: index가 행 범위를 벗어난 경우 (음수 포함)
    """
    if index < 0 or index >= len(matrix):
        raise IndexError(f"유사도 행렬 행 인덱스 범위 초과: {index}")

    similarities = [
        (column, float(value))
        for column, value in enumerate(matrix[index])
        if column != index
    ]
    return sorted(similarities, key=_ranking_key)

def get_most_similar_prefectures(index: int, matrix: Sequence[Sequence[float]],
                                 count: int = SIMILAR_PREFECTURE_COUNT) -> List[int]:
    """
    특정 도도부현과 가장 유사한 도도부현들의 인덱스를 반환하는 함수

    입력 행렬은 수정하지 않습니다.

    Args:
        index (int): 기준 도도부현 인덱스
        matrix (Sequence[Sequence[float]]): 유사도 행렬
        count (int): 반환할 개수 (기본값: 2)

    Returns:
        List[int]: 점수 내림차순으로 정렬된 열 인덱스

    Raises:
        IndexError: index가 범위를 벗어났거나 비교 대상이 count개보다 적은 경우
    """
    ranked = rank_similarities(index, matrix)
    if len(ranked) < count:
        raise IndexError(
            f"비교 가능한 항목이 부족합니다: 행 {index}에 {len(ranked)}개 (필요: {count}개)"
        )
    return [column for column, _ in ranked[:count]]

class SimilarityAnalyzer:
    """
    도도부현 유사도 행렬을 분석하는 클래스

    행렬은 생성 시 정방 행렬인지, 모든 값이 숫자인지 검증합니다.
    대칭성은 관례일 뿐 강제하지 않으며, 비대칭이면 경고만 출력합니다.
    """

    def __init__(self, matrix: Sequence[Sequence[float]], names: Optional[Sequence[str]] = None):
        """
        유사도 분석기 초기화

        Args:
            matrix (Sequence[Sequence[float]]): 유사도 행렬
            names (Optional[Sequence[str]]): 행/열에 대응하는 도도부현 이름

        Raises:
            ValueError: 정방 행렬이 아니거나, 숫자가 아니거나, 이름 수가 맞지 않는 경우
        """
        try:
            values = np.asarray(matrix, dtype=float)
        except (TypeError, ValueError) as e:
            raise ValueError(f"유사도 행렬은 숫자로 된 2차원 배열이어야 합니다: {e}") from e

        if values.size == 0:
            values = values.reshape(0, 0)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise ValueError(f"유사도 행렬은 정방 행렬이어야 합니다: shape={values.shape}")

        if names is not None and len(names) != values.shape[0]:
            raise ValueError(
                f"이름 수({len(names)})가 행렬 크기({values.shape[0]})와 다릅니다."
            )

        self._matrix = values
        self.names = list(names) if names is not None else None

        if not self.is_symmetric():
            print("⚠️ 유사도 행렬이 대칭이 아닙니다. 행 기준으로 계산합니다.")

    @property
    def size(self) -> int:
        return self._matrix.shape[0]

    def is_symmetric(self, atol: float = 1e-9) -> bool:
        """행렬이 (허용 오차 내에서) 대칭인지 확인합니다."""
        return bool(np.allclose(self._matrix, self._matrix.T, atol=atol, equal_nan=True))

    def ranked_scores(self, index: int) -> List[Tuple[int, float]]:
        """index 행의 (열 인덱스, 점수)를 점수 내림차순으로 반환합니다."""
        return rank_similarities(index, self._matrix.tolist())

    def most_similar(self, index: int, count: int = SIMILAR_PREFECTURE_COUNT) -> List[int]:
        """
        가장 유사한 도도부현 인덱스를 반환하는 메서드

        Args:
            index (int): 기준 도도부현 인덱스
            count (int): 반환할 개수

        Returns:
            List[int]: 유사한 도도부현 인덱스 리스트
        """
        return get_most_similar_prefectures(index, self._matrix.tolist(), count)

    def most_similar_by_name(self, name: str, count: int = SIMILAR_PREFECTURE_COUNT) -> List[str]:
        """
        도도부현 이름으로 가장 유사한 도도부현 이름을 반환하는 메서드

        Raises:
            ValueError: 이름 정보가 없는 경우
            KeyError: 해당 이름이 없는 경우
        """
        if self.names is None:
            raise ValueError("이름 정보 없이 생성된 분석기입니다.")
        try:
            index = self.names.index(name)
        except ValueError:
            raise KeyError(name) from None
        return [self.names[i] for i in self.most_similar(index, count)]

    def to_dataframe(self) -> pd.DataFrame:
        """
        유사도 행렬을 DataFrame으로 변환하는 메서드

        Returns:
            pd.DataFrame: 행/열 라벨이 도도부현 이름(없으면 인덱스)인 DataFrame
        """
        labels = self.names if self.names is not None else list(range(self.size))
        return pd.DataFrame(self._matrix, index=labels, columns=labels)
