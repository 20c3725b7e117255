"""설정 포트 인터페이스.

애플리케이션 설정의 로딩을 추상화한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SplineConfig:
    """커브 핸들 생성 설정.

    Args:
        dimension: 공간 차원 (2 또는 3).
        curve_order: 피팅에 사용할 커브 차수 (degree + 1).
        geometric_resolution: 호 길이 적분 정밀도, 최대 곡률 샘플링 간격,
            기본 최근접점 탐색 허용오차로 쓰이는 기하 해상도.
    """

    dimension: int = 3
    curve_order: int = 3
    geometric_resolution: float = 0.001


@dataclass(frozen=True)
class TrackingConfig:
    """경로 추종 설정.

    Args:
        length_tolerance: 제어 주기마다 전방으로 탐색할 호 길이.
            unit parameter를 곱해 파라미터 구간 폭으로 변환된다.
    """

    length_tolerance: float = 0.2


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 전체 설정.

    Args:
        spline: 커브 핸들 설정.
        tracking: 경로 추종 설정.
    """

    spline: SplineConfig = field(default_factory=SplineConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)


class ConfigPort(ABC):
    """설정 로더 인터페이스."""

    @abstractmethod
    def load(self) -> AppConfig:
        """설정을 로드하여 AppConfig로 반환한다."""
