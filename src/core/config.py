"""
설정 관리 모듈
==============

이 모듈은 애플리케이션의 모든 설정을 중앙에서 관리합니다.
환경 변수, 데이터 경로, 이미지 파일 규칙 등을 정의하고 관리합니다.

주요 기능:
- 환경 변수 로드 및 관리
- 데이터 위치(URL 또는 로컬 디렉토리) 설정
- 이미지 파일명 규칙 상수 정의
- 설정값 검증

작성자: AI Assistant
버전: 1.0.0
"""

import os
from urllib.parse import urljoin, urlparse
from dotenv import load_dotenv

# 환경 변수 로드 (.env 파일에서 설정값 읽기)
load_dotenv()

# =============================================================================
# 데이터 경로 설정
# =============================================================================

# 데이터 문서를 제공하는 기준 위치
# http(s) URL이면 HTTP GET으로, 그 외에는 로컬 디렉토리로 취급합니다.
DATA_BASE_URL = os.getenv("DATA_BASE_URL", "./")

# 기준 위치에 대한 데이터 JSON 파일의 상대 경로
DATA_RELATIVE_PATH = "data/data.json"

def parse_timeout(value):
    """
    타임아웃 문자열을 초 단위 float로 변환하는 함수

    Returns:
        Optional[float]: 비어 있거나 숫자가 아니면 None
    """
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None

# HTTP 요청 타임아웃(초). 설정하지 않으면 타임아웃 없이 대기합니다.
REQUEST_TIMEOUT_RAW = os.getenv("REQUEST_TIMEOUT", "")
REQUEST_TIMEOUT = parse_timeout(REQUEST_TIMEOUT_RAW)

# =============================================================================
# Streamlit 설정
# =============================================================================

# 서버 포트 설정 (기본값: 8501)
STREAMLIT_SERVER_PORT = int(os.getenv("STREAMLIT_SERVER_PORT", "8501"))

# 서버 주소 설정 (기본값: localhost)
STREAMLIT_SERVER_ADDRESS = os.getenv("STREAMLIT_SERVER_ADDRESS", "localhost")

# =============================================================================
# 이미지 경로 규칙
# =============================================================================

# 파이 차트 이미지가 위치한 디렉토리
FIGS_DIR = "figs"

# 파일명 접두사 (본 차트 / 라벨 차트)
PIE_PREFIX = "pie_"
PIE_LABEL_PREFIX = "pie_label_"

# 이미지 확장자
IMAGE_EXTENSION = ".png"

# 인덱스 자릿수 (0 → "00")
INDEX_WIDTH = 2

# =============================================================================
# 유사도 설정
# =============================================================================

# 추천할 유사 도도부현 수
SIMILAR_PREFECTURE_COUNT = 2

# 데이터 문서 안의 유사도 행렬 키
SIMILARITY_MATRIX_KEY = "similarity_matrix"

# =============================================================================
# 유틸리티 함수
# =============================================================================

def is_remote_location(location: str) -> bool:
    """기준 위치가 http(s) URL인지 확인합니다."""
    return urlparse(location).scheme in ("http", "https")

def get_data_url(base_url: str = None) -> str:
    """
    데이터 문서의 전체 위치를 계산하는 함수

    Args:
        base_url (str): 기준 위치 (기본값: DATA_BASE_URL)

    Returns:
        str: 데이터 문서의 URL 또는 로컬 파일 경로
    """
    base = base_url if base_url is not None else DATA_BASE_URL
    if is_remote_location(base):
        # urljoin은 기준 URL이 '/'로 끝나지 않으면 마지막 세그먼트를 대체함
        if not base.endswith("/"):
            base += "/"
        return urljoin(base, DATA_RELATIVE_PATH)
    return os.path.join(base, DATA_RELATIVE_PATH)

def validate_config():
    """
    설정값 검증 함수

    Returns:
        bool: 데이터 위치가 사용 가능하면 True, 아니면 False
    """
    data_url = get_data_url()

    if not is_remote_location(DATA_BASE_URL) and not os.path.exists(data_url):
        print(f"⚠️ 데이터 파일을 찾을 수 없습니다: {data_url}")
        return False

    if REQUEST_TIMEOUT_RAW and (REQUEST_TIMEOUT is None or REQUEST_TIMEOUT <= 0):
        print(f"⚠️ REQUEST_TIMEOUT 값이 올바르지 않습니다: {REQUEST_TIMEOUT_RAW}")
        return False

    print("✅ 모든 설정이 올바르게 되어 있습니다.")
    return True

def get_config_summary():
    """
    현재 설정 요약 정보 반환

    Returns:
        dict: 설정 정보 딕셔너리
    """
    return {
        "data_url": get_data_url(),
        "remote": is_remote_location(DATA_BASE_URL),
        "request_timeout": REQUEST_TIMEOUT,
        "server_port": STREAMLIT_SERVER_PORT,
        "server_address": STREAMLIT_SERVER_ADDRESS,
        "image_naming": {
            "directory": FIGS_DIR,
            "pie_prefix": PIE_PREFIX,
            "label_prefix": PIE_LABEL_PREFIX,
            "extension": IMAGE_EXTENSION,
        },
        "similar_count": SIMILAR_PREFECTURE_COUNT,
    }
