"""
도도부현 데이터 로더 모듈
========================

이 모듈은 JSON 형태의 도도부현 데이터를 가져오고 전처리하는 기능을 제공합니다.
데이터 문서는 HTTP URL 또는 로컬 디렉토리에서 한 번 로드되어
애플리케이션 상태 객체(AppState)에 보관됩니다.

주요 기능:
- JSON 데이터 가져오기 및 파싱 (비동기)
- 이미지 경로(image_paths) 자동 생성
- 로드 결과(LoadResult) 반환 및 진단 출력
- 도도부현/이미지/유사도 행렬 조회

작성자: AI Assistant
버전: 1.0.0
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd
import requests

from .config import (
    REQUEST_TIMEOUT,
    SIMILARITY_MATRIX_KEY,
    get_data_url,
    is_remote_location,
)
from src.utils.helpers import create_image_paths

# =============================================================================
# 예외 및 상태 타입
# =============================================================================

class DataLoadError(Exception):
    """데이터 로드 중 발생하는 오류의 기본 클래스"""

class FetchError(DataLoadError):
    """데이터 문서를 가져오지 못한 경우 (실패 응답, 연결 오류, 파일 없음)"""

class ParseError(DataLoadError):
    """데이터 문서 본문이 올바른 JSON이 아닌 경우"""

class EmptyDocumentError(DataLoadError):
    """데이터 문서가 JSON null인 경우"""

class _NotLoaded:
    """아직 로드되지 않은 상태를 나타내는 센티넬 (JSON null과 구분됨)"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "NOT_LOADED"

NOT_LOADED = _NotLoaded()

@dataclass
class LoadResult:
    """
    한 번의 로드 시도 결과

    성공 시 data에 최종 데이터가, 실패 시 error에 예외가 담깁니다.
    """
    data: Any = NOT_LOADED
    error: Optional[DataLoadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.data is not NOT_LOADED

class AppState:
    """
    로드된 데이터를 보관하는 애플리케이션 상태 객체

    값은 로드할 때마다 통째로 교체되며, 제자리에서 수정되지 않습니다.
    """

    def __init__(self):
        self._data = NOT_LOADED

    def get_data(self) -> Any:
        """현재 데이터를 반환합니다. 로드 전이거나 실패했다면 NOT_LOADED."""
        return self._data

    def set_data(self, data: Any) -> None:
        self._data = data

    def is_loaded(self) -> bool:
        return self._data is not NOT_LOADED

    def reset(self) -> None:
        self._data = NOT_LOADED

# 프로세스 전역 기본 상태 (get_data / init 에서 사용)
default_state = AppState()

# =============================================================================
# 가져오기 및 변환
# =============================================================================

def _read_document(location: str, timeout: Optional[float]) -> str:
    """
    데이터 문서의 본문을 문자열로 읽어오는 내부 함수 (블로킹)

    Raises:
        FetchError: 실패 응답, 연결 오류, 파일 없음
    """
    if is_remote_location(location):
        try:
            response = requests.get(location, timeout=timeout)
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch data: {e}") from e
        if not response.ok:
            raise FetchError(f"Failed to fetch data (HTTP {response.status_code})")
        return response.text

    try:
        with open(location, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FetchError(f"Failed to fetch data: {e}") from e

def parse_document(body: str) -> Any:
    """
    JSON 본문을 파싱하는 함수

    Raises:
        ParseError: 본문이 올바른 JSON이 아닌 경우
    """
    try:
        return json.loads(body)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ParseError(f"Malformed JSON: {e}") from e

async def fetch_data(url: Optional[str] = None, timeout: Optional[float] = REQUEST_TIMEOUT) -> Any:
    """
    데이터 문서를 가져와 파싱하는 비동기 함수

    네트워크 요청과 본문 파싱은 순서대로 하나의 대기 지점에서 수행됩니다.

    Args:
        url (Optional[str]): 데이터 위치 (기본값: 설정의 데이터 URL)
        timeout (Optional[float]): HTTP 타임아웃(초), None이면 무제한

    Returns:
        Any: 파싱된 JSON 값
    """
    location = url if url is not None else get_data_url()
    body = await asyncio.to_thread(_read_document, location, timeout)
    return parse_document(body)

def ensure_image_paths(data: Any) -> Any:
    """
    image_paths가 없으면 prefectures로부터 생성하여 붙이는 함수

    image_paths가 리스트가 아니고 prefectures가 리스트일 때만 동작하며,
    원본을 수정하지 않고 새 딕셔너리를 반환합니다.

    Args:
        data (Any): 파싱된 데이터 문서

    Returns:
        Any: image_paths가 보장된 데이터 (조건에 맞지 않으면 원본 그대로)
    """
    if not isinstance(data, dict):
        return data
    if isinstance(data.get('image_paths'), list) or not isinstance(data.get('prefectures'), list):
        return data
    return {**data, 'image_paths': create_image_paths(data['prefectures'])}

# =============================================================================
# 데이터 로더
# =============================================================================

class PrefectureDataLoader:
    """
    도도부현 데이터를 로드하고 조회하는 클래스

    로드된 데이터는 주입된 AppState에 보관되며,
    상태를 지정하지 않으면 프로세스 전역 기본 상태를 사용합니다.
    """

    def __init__(self, state: Optional[AppState] = None, url: Optional[str] = None,
                 timeout: Optional[float] = REQUEST_TIMEOUT):
        """
        데이터 로더 초기화

        Args:
            state (Optional[AppState]): 데이터를 보관할 상태 객체
            url (Optional[str]): 데이터 위치 (기본값: 설정의 데이터 URL)
            timeout (Optional[float]): HTTP 타임아웃(초)
        """
        self.state = state if state is not None else default_state
        self.url = url if url is not None else get_data_url()
        self.timeout = timeout

    async def initialize(self) -> LoadResult:
        """
        데이터를 한 번 가져와 상태에 저장하는 메서드

        실패해도 예외를 던지지 않고 진단을 출력한 뒤 LoadResult로 돌려줍니다.
        실패 시 상태는 이전 값 그대로 유지됩니다.

        Returns:
            LoadResult: 로드 결과
        """
        try:
            fetched = await fetch_data(self.url, timeout=self.timeout)
            if fetched is None:
                raise EmptyDocumentError("Data document is null")
        except DataLoadError as e:
            print(f"❌ 데이터 초기화 중 오류 발생: {e}")
            return LoadResult(error=e)

        data = ensure_image_paths(fetched)
        self.state.set_data(data)
        print(f"✅ 데이터를 로드했습니다 ({self.url}): {data}")
        return LoadResult(data=data)

    def load_data(self) -> LoadResult:
        """initialize()의 동기 버전 (이벤트 루프 밖에서 호출)"""
        return asyncio.run(self.initialize())

    def get_data(self) -> Any:
        """현재 데이터를 반환합니다. 로드 전이거나 실패했다면 NOT_LOADED."""
        return self.state.get_data()

    def _document(self) -> Dict[str, Any]:
        data = self.state.get_data()
        return data if isinstance(data, dict) else {}

    def get_prefectures(self) -> List[str]:
        """
        도도부현 이름 목록을 반환하는 메서드

        Returns:
            List[str]: 도도부현 목록 (없으면 빈 리스트)
        """
        prefectures = self._document().get('prefectures')
        return list(prefectures) if isinstance(prefectures, list) else []

    def get_image_paths(self) -> List[List[str]]:
        """
        이미지 경로 쌍 목록을 반환하는 메서드

        Returns:
            List[List[str]]: [본 차트, 라벨 차트] 경로 쌍 리스트
        """
        paths = self._document().get('image_paths')
        return list(paths) if isinstance(paths, list) else []

    def get_image_pair(self, index: int) -> List[str]:
        """
        특정 도도부현의 이미지 경로 쌍을 반환하는 메서드

        Raises:
            IndexError: 해당 인덱스의 경로가 없는 경우
        """
        paths = self.get_image_paths()
        if index < 0 or index >= len(paths):
            raise IndexError(f"이미지 경로 인덱스 범위 초과: {index}")
        return paths[index]

    def get_prefecture_index(self, name: str) -> int:
        """
        도도부현 이름으로 인덱스를 찾는 메서드

        Raises:
            KeyError: 해당 이름이 없는 경우
        """
        try:
            return self.get_prefectures().index(name)
        except ValueError:
            raise KeyError(name) from None

    def get_similarity_matrix(self) -> List[List[float]]:
        """
        유사도 행렬을 반환하는 메서드

        Returns:
            List[List[float]]: 유사도 행렬 (없으면 빈 리스트)
        """
        matrix = self._document().get(SIMILARITY_MATRIX_KEY)
        return matrix if isinstance(matrix, list) else []

    def get_data_statistics(self) -> Dict[str, Any]:
        """
        로드된 데이터의 통계 정보를 반환하는 메서드

        Returns:
            Dict[str, Any]: 통계 정보
        """
        prefectures = self.get_prefectures()
        matrix = self.get_similarity_matrix()
        stats = {
            'loaded': self.state.is_loaded(),
            'prefecture_count': len(prefectures),
            'image_pair_count': len(self.get_image_paths()),
            'has_similarity_matrix': bool(matrix),
        }
        if matrix:
            # 자기 자신(대각선)을 제외한 점수 분포
            values = pd.Series([
                value
                for i, row in enumerate(matrix)
                for j, value in enumerate(row)
                if i != j
            ], dtype=float)
            stats['similarity_mean'] = float(values.mean()) if not values.empty else 0.0
            stats['similarity_max'] = float(values.max()) if not values.empty else 0.0
            stats['similarity_min'] = float(values.min()) if not values.empty else 0.0
        return stats

# =============================================================================
# 프로세스 전역 진입점
# =============================================================================

def get_data() -> Any:
    """
    프로세스 전역 데이터 접근자

    Returns:
        Any: 로드된 데이터, 로드 전이거나 실패했다면 NOT_LOADED
    """
    return default_state.get_data()

async def init(state: Optional[AppState] = None) -> LoadResult:
    """
    프로세스 시작 시 한 번 실행되는 초기화 함수

    오류는 진단으로 출력될 뿐 호출자에게 전파되지 않습니다.
    실패 여부는 반환된 LoadResult로 확인할 수 있습니다.
    """
    return await PrefectureDataLoader(state).initialize()
