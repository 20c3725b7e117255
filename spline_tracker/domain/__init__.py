"""Spline Tracker 도메인 레이어.

커브 핸들이 다루는 예외, 열거형, 값 객체, 캐시 엔티티를 정의한다.
외부 라이브러리(numpy 제외) 의존성은 없다.
"""
