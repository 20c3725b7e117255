"""Spline Tracker 유스케이스 레이어.

커브 커널 포트를 통해 커브 핸들, 오차 모델, 경로 추종을 조율한다.
domain 레이어만 의존하며, infra 레이어 의존성은 없다.
"""

from spline_tracker.usecase.spline_curve import SplineCurve
from spline_tracker.usecase.track_path import TrackPath
from spline_tracker.usecase.trajectory_error import (
    TrajectoryErrorModel,
    wrap_angle,
)

__all__ = [
    "SplineCurve",
    "TrackPath",
    "TrajectoryErrorModel",
    "wrap_angle",
]
