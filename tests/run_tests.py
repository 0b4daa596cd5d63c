#!/usr/bin/env python3
"""
테스트 실행 스크립트
==================

이 스크립트는 도도부현 유사도 뷰어의 모든 테스트를 실행합니다.

사용법:
    python tests/run_tests.py

작성자: AI Assistant
버전: 1.0.0
"""

import unittest
import sys
from pathlib import Path

def run_all_tests():
    """
    tests 디렉토리의 모든 테스트를 실행하는 함수

    Returns:
        bool: 모든 테스트가 통과하면 True
    """
    tests_dir = Path(__file__).parent
    project_root = tests_dir.parent

    # 프로젝트 루트를 Python 경로에 추가 (src 패키지 임포트용)
    sys.path.insert(0, str(project_root))

    loader = unittest.TestLoader()
    test_suite = loader.discover(str(tests_dir), pattern='test_*.py')

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(test_suite)

    return result.wasSuccessful()

def main():
    """
    메인 함수
    """
    print("🧪 도도부현 유사도 뷰어 테스트를 시작합니다...\n")

    if run_all_tests():
        print("\n✅ 모든 테스트가 성공했습니다!")
    else:
        print("\n❌ 일부 테스트가 실패했습니다.")
        sys.exit(1)

if __name__ == "__main__":
    main()
