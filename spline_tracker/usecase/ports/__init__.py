"""유스케이스 포트 인터페이스 (ABC).

infra 레이어에서 구현해야 하는 추상 인터페이스를 정의한다.
"""

from spline_tracker.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    SplineConfig,
    TrackingConfig,
)
from spline_tracker.usecase.ports.curve_kernel import CurveKernel, KernelCurve

__all__ = [
    "AppConfig",
    "ConfigPort",
    "CurveKernel",
    "KernelCurve",
    "SplineConfig",
    "TrackingConfig",
]
