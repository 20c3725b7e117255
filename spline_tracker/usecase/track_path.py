"""경로 추종 유스케이스.

제어기 하나가 소유하는 추적 상태(직전 매칭 파라미터)를 유지하면서
제어 주기마다 자세 오차를 계산한다.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

import numpy as np

from spline_tracker.domain.exceptions import ParameterDomainError
from spline_tracker.domain.value_objects.pose_error import PoseError
from spline_tracker.usecase.ports.config_port import TrackingConfig
from spline_tracker.usecase.spline_curve import SplineCurve
from spline_tracker.usecase.trajectory_error import TrajectoryErrorModel

logger = logging.getLogger(__name__)


class TrackPath:
    """경로 추종 유스케이스.

    위치 입력 → 전방 구간 국소 재매칭 → 오차 계산 → 매칭 파라미터 전진.

    Args:
        curve: 추종할 경로 커브. 피팅이 끝난 상태여야 한다.
        config: 추종 설정. None이면 기본값.
    """

    def __init__(
        self,
        curve: SplineCurve,
        config: TrackingConfig | None = None,
    ) -> None:
        self._curve = curve
        self._config = config or TrackingConfig()
        self._model = TrajectoryErrorModel(curve)
        self._param = curve.start_param

    @property
    def last_param(self) -> float:
        return self._param

    @property
    def progress(self) -> float:
        """도메인 중 지나온 비율 (0.0-1.0)."""
        span = self._curve.parameter_domain.span
        if span <= 0.0:
            return 0.0
        return (self._param - self._curve.start_param) / span

    @property
    def finished(self) -> bool:
        """매칭이 커브 끝에서 기하 해상도 이내에 도달했는지 여부."""
        # 기하 해상도(길이)를 파라미터 단위로 환산
        tolerance = (
            self._curve.unit_parameter() * self._curve.geometric_resolution
        )
        return self._curve.end_param - self._param <= tolerance

    def reset(self, start_param: float | None = None) -> None:
        """추적 시작 파라미터를 재설정한다.

        Args:
            start_param: 시작 파라미터. None이면 커브 시작.

        Raises:
            ParameterDomainError: start_param이 도메인 밖일 때.
        """
        if start_param is None:
            start_param = self._curve.start_param
        if not self._curve.parameter_domain.contains(start_param):
            raise ParameterDomainError(
                f"param {start_param} is not in the "
                f"[{self._curve.start_param}, {self._curve.end_param}] range"
            )
        self._param = start_param
        logger.info("Tracking reset to param %s", start_param)

    def relocalize(self, point: Sequence[float] | np.ndarray) -> float:
        """전역 탐색으로 추적 시작 파라미터를 다시 잡는다.

        경로에서 크게 벗어났거나 처음 진입할 때 사용한다.
        """
        param = self._curve.closest_point_single(point)
        self._param = param
        logger.info("Relocalized on path at param %s", param)
        return param

    def update(
        self,
        point: Sequence[float] | np.ndarray,
        heading: float,
    ) -> PoseError:
        """한 제어 주기의 자세 오차를 계산하고 추적 상태를 전진시킨다.

        Args:
            point: 로봇 위치 (x, y[, z]).
            heading: 로봇 방향 (rad).

        Returns:
            자세 오차.
        """
        error = self._model.pose_error(
            point, heading, self._param, self._config.length_tolerance
        )
        self._param = error.param
        return error
