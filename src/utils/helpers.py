"""
도우미 함수 모듈
===============

이 모듈은 애플리케이션 전반에서 사용되는 일반적인 도우미 함수들을 제공합니다.

주요 기능:
- 도도부현 이름으로부터 이미지 경로 생성
- 점수 포맷팅

작성자: AI Assistant
버전: 1.0.0
"""

from typing import List, Sequence

from src.core.config import (
    FIGS_DIR,
    PIE_PREFIX,
    PIE_LABEL_PREFIX,
    IMAGE_EXTENSION,
    INDEX_WIDTH,
)

def format_index(index: int, width: int = INDEX_WIDTH) -> str:
    """
    인덱스를 0으로 채운 고정 자릿수 문자열로 변환하는 함수

    Args:
        index (int): 0부터 시작하는 인덱스
        width (int): 자릿수 (기본값: 2)

    Returns:
        str: 0으로 채운 인덱스 문자열 (예: 3 → "03")
    """
    return str(index).zfill(width)

def build_image_path(prefix: str, index: int, name: str) -> str:
    """
    단일 이미지 경로를 생성하는 함수

    이름은 검증하거나 이스케이프하지 않고 그대로 사용합니다.

    Args:
        prefix (str): 파일명 접두사 (PIE_PREFIX 또는 PIE_LABEL_PREFIX)
        index (int): 도도부현 인덱스
        name (str): 도도부현 이름

    Returns:
        str: 이미지 경로 (예: "figs/pie_00_Tokyo.png")
    """
    return f"{FIGS_DIR}/{prefix}{format_index(index)}_{name}{IMAGE_EXTENSION}"

def create_image_paths(prefectures: Sequence[str]) -> List[List[str]]:
    """
    도도부현 목록으로부터 이미지 경로 쌍 목록을 생성하는 함수

    Args:
        prefectures (Sequence[str]): 도도부현 이름 목록

    Returns:
        List[List[str]]: [본 차트 경로, 라벨 차트 경로] 쌍의 리스트
    """
    return [
        [
            build_image_path(PIE_PREFIX, index, prefecture),
            build_image_path(PIE_LABEL_PREFIX, index, prefecture),
        ]
        for index, prefecture in enumerate(prefectures)
    ]

def format_score(score: float, decimal_places: int = 2) -> str:
    """
    점수를 포맷팅하는 함수

    Args:
        score (float): 포맷팅할 점수
        decimal_places (int): 소수점 자릿수

    Returns:
        str: 포맷팅된 점수 문자열
    """
    return f"{score:.{decimal_places}f}"
