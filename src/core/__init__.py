"""
핵심 로직 패키지
===============

이 패키지는 애플리케이션의 핵심 로직을 포함합니다.

모듈 목록:
- config: 설정 관리
- data_loader: 도도부현 데이터 로드 및 상태 관리
- similarity_analyzer: 유사도 행렬 분석 및 유사 도도부현 선택

작성자: AI Assistant
버전: 1.0.0
"""
