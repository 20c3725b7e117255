"""파라메트릭 커브 기반 경로 표현 및 궤적 추종 오차 모델."""

__version__ = "0.1.0"
