#!/usr/bin/env python3
"""
도도부현 유사도 뷰어 메인 실행 파일
==================================

이 파일은 도도부현 유사도 뷰어의 메인 진입점입니다.
Streamlit 웹 애플리케이션을 실행합니다.

사용법:
    python main.py

작성자: AI Assistant
버전: 1.0.0
"""

import sys
import os
import subprocess
from pathlib import Path

def check_requirements():
    """
    필요한 패키지 설치 확인

    Returns:
        bool: 모든 패키지가 설치되어 있으면 True
    """
    try:
        import streamlit
        import requests
        import plotly
        import pandas
        import numpy
        import dotenv
        print("✅ 모든 필요한 패키지가 설치되어 있습니다.")
        return True
    except ImportError as e:
        print(f"❌ 필요한 패키지가 설치되지 않았습니다: {e}")
        print("다음 명령어로 패키지를 설치해주세요:")
        print("pip install -e .")
        return False

def check_data_location():
    """
    데이터 위치 확인

    Returns:
        bool: 데이터 위치가 사용 가능하면 True
    """
    from src.core.config import validate_config
    return validate_config()

def main():
    """
    메인 실행 함수
    """
    print("🚀 도도부현 유사도 뷰어를 시작합니다...")

    # 현재 디렉토리를 스크립트가 있는 디렉토리로 변경
    script_dir = Path(__file__).parent
    os.chdir(script_dir)
    sys.path.insert(0, str(script_dir))

    # 요구사항 확인
    if not check_requirements():
        sys.exit(1)

    # 데이터 위치 확인
    if not check_data_location():
        print("\nDATA_BASE_URL 설정 후 다시 실행해주세요.")
        sys.exit(1)

    from src.core.config import STREAMLIT_SERVER_PORT, STREAMLIT_SERVER_ADDRESS

    # Streamlit 앱 실행
    print("\n🌐 Streamlit 앱을 시작합니다...")
    print(f"브라우저에서 http://{STREAMLIT_SERVER_ADDRESS}:{STREAMLIT_SERVER_PORT} 을 열어주세요.")
    print("종료하려면 Ctrl+C를 누르세요.\n")

    try:
        subprocess.run([
            sys.executable, "-m", "streamlit", "run", "src/ui/streamlit_app.py",
            "--server.port", str(STREAMLIT_SERVER_PORT),
            "--server.address", STREAMLIT_SERVER_ADDRESS
        ])
    except KeyboardInterrupt:
        print("\n👋 뷰어를 종료합니다.")
    except Exception as e:
        print(f"❌ 오류가 발생했습니다: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
