"""궤적 추종 오차 모델 유스케이스.

SplineCurve 질의/탐색 결과를 조합하여 경로 추종 제어기가 쓰는
부호 있는 횡방향 오차, 방향 오차, 자세 오차를 계산한다.
"""

from __future__ import annotations

from collections.abc import Sequence
import math

import numpy as np

from spline_tracker.domain.value_objects.pose_error import PoseError
from spline_tracker.usecase.spline_curve import SplineCurve


def wrap_angle(angle: float) -> float:
    """한 번의 2*pi 보정으로 (-pi, pi] 범위로 감싼다.

    입력은 이미 유계 각도의 차이라고 가정한다.
    """
    if angle > math.pi:
        return angle - 2.0 * math.pi
    if angle <= -math.pi:
        return angle + 2.0 * math.pi
    return angle


class TrajectoryErrorModel:
    """경로 추종 오차 모델.

    Args:
        curve: 기준 경로 커브 핸들.
    """

    def __init__(self, curve: SplineCurve) -> None:
        self._curve = curve

    @property
    def curve(self) -> SplineCurve:
        return self._curve

    def heading_error(self, actual_heading: float, param: float) -> float:
        """실제 방향과 param에서의 경로 방향의 차 (rad, (-pi, pi])."""
        return wrap_angle(actual_heading - self._curve.heading(param))

    def distance_error(
        self,
        actual_point: Sequence[float] | np.ndarray,
        param: float,
    ) -> float:
        """param에서의 경로 점 기준 부호 있는 횡방향 오차.

        수직(z) 성분은 무시한다. 경로 접선의 왼쪽이면 양수,
        오른쪽이면 음수이다.

        Args:
            actual_point: 로봇 위치 (x, y[, z]).
            param: 기준 커브 파라미터.

        Returns:
            부호 있는 수평 거리 (m).
        """
        curve_point = self._curve.point(param)
        actual = np.asarray(actual_point, dtype=float).ravel()
        error_x = actual[0] - curve_point[0]
        error_y = actual[1] - curve_point[1]

        distance = math.hypot(error_x, error_y)
        if distance == 0.0:
            return 0.0

        # 오차 벡터 방위각과 경로 방향의 차이로 좌/우 판정
        angle = wrap_angle(
            math.atan2(error_y, error_x) - self._curve.heading(param)
        )
        return distance if angle >= 0.0 else -distance

    def pose_error(
        self,
        actual_point: Sequence[float] | np.ndarray,
        actual_heading: float,
        start_param: float,
        length_tolerance: float,
    ) -> PoseError:
        """제어 주기마다 호출하는 자세 오차 계산.

        [start_param, start_param + unit_parameter * length_tolerance]
        전방 구간에서 start_param을 초기값으로 국소 최근접점을 찾고,
        매칭된 파라미터에서 거리/방향 오차를 계산한다.

        Args:
            actual_point: 로봇 위치 (x, y[, z]).
            actual_heading: 로봇 방향 (rad).
            start_param: 탐색 시작 파라미터 (직전 매칭 결과).
            length_tolerance: 전방 탐색 호 길이.

        Returns:
            (distance_error, heading_error, param).
        """
        search_span = self._curve.unit_parameter() * length_tolerance
        param = self._curve.closest_point_local(
            actual_point,
            start_param,
            start_param,
            start_param + search_span,
            self._curve.geometric_resolution,
        )
        return PoseError(
            distance_error=self.distance_error(actual_point, param),
            heading_error=self.heading_error(actual_heading, param),
            param=param,
        )
